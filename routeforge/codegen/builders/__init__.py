"""Builders package for route IR assembly.

This package contains the builder classes that turn classified operation
elements into named, collision-free Route descriptors.
"""

from routeforge.codegen.builders.component_extractor import (
    ComponentExtractor,
    component_candidates,
)
from routeforge.codegen.builders.name_resolver import (
    RESERVED_BODY_ARG_NAMES,
    RESERVED_HEADER_ARG_NAMES,
    RESERVED_PATH_ARG_NAMES,
    RESERVED_QUERY_ARG_NAMES,
    RouteNameResolver,
    SpecificArgNameResolver,
)
from routeforge.codegen.builders.route_factory import (
    RouteFactory,
    get_module_name,
    get_namespace,
    has_security,
)

__all__ = [
    # Component hoisting
    'ComponentExtractor',
    'component_candidates',
    # Naming
    'RESERVED_BODY_ARG_NAMES',
    'RESERVED_HEADER_ARG_NAMES',
    'RESERVED_PATH_ARG_NAMES',
    'RESERVED_QUERY_ARG_NAMES',
    'RouteNameResolver',
    'SpecificArgNameResolver',
    # Assembly
    'RouteFactory',
    'get_module_name',
    'get_namespace',
    'has_security',
]
