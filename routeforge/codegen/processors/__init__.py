"""Processors package for OpenAPI extraction logic.

This package contains processor classes that handle extraction and
classification of OpenAPI operation elements into route IR.
"""

from routeforge.codegen.processors.body_processor import BodyTypeResolver
from routeforge.codegen.processors.content import (
    collect_content_types,
    get_content_kind,
)
from routeforge.codegen.processors.parameter_processor import (
    ParameterProcessor,
    convert_params_to_object,
)
from routeforge.codegen.processors.path_processor import parse_route_path
from routeforge.codegen.processors.request_processor import RequestBodyProcessor
from routeforge.codegen.processors.response_processor import ResponseProcessor

__all__ = [
    'BodyTypeResolver',
    'ParameterProcessor',
    'RequestBodyProcessor',
    'ResponseProcessor',
    'collect_content_types',
    'convert_params_to_object',
    'get_content_kind',
    'parse_route_path',
]
