"""Parameter processing utilities for OpenAPI operations.

This module provides the ParameterProcessor class that merges an operation's
declared parameters (inline or ``$ref``) with the path parameters found in
its path template, bucketing them by location.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING, Any

from routeforge.codegen.models import (
    ExplicitParameter,
    PathParameter,
    ReferencedParameter,
    RouteParameter,
    RouteParams,
    SynthesizedParameter,
)
from routeforge.codegen.utils import snake_case

if TYPE_CHECKING:
    from routeforge.codegen.schema_resolver import SchemaResolver

__all__ = ['ParameterProcessor', 'ParameterSource', 'convert_params_to_object']

ParameterSource = ExplicitParameter | ReferencedParameter | SynthesizedParameter


def convert_params_to_object(params: Iterable[RouteParameter]) -> dict[str, Any]:
    """Build an object schema whose properties are the given parameters."""
    properties = {}
    for param in params:
        if param.name:
            properties[param.name] = param.as_property()
    return {'type': 'object', 'properties': properties}


class ParameterProcessor:
    """Classifies operation parameters by location.

    Example:
        >>> processor = ParameterProcessor(resolver)
        >>> route_params = processor.classify(operation.parameters, parsed.path_params)
        >>> [p.name for p in route_params.path]
        ['user_id']
    """

    def __init__(self, resolver: SchemaResolver):
        """Initialize the parameter processor.

        Args:
            resolver: Used to dereference ``$ref`` parameters.
        """
        self.resolver = resolver

    def to_source(self, parameter: Any) -> ParameterSource | None:
        """Wrap a declared parameter in its source variant.

        Returns None for references that cannot be resolved or that point
        at something without a location.
        """
        if not isinstance(parameter, Mapping):
            return None

        ref_info = self.resolver.resolve_reference(parameter)
        if ref_info is not None:
            raw = ref_info.raw_data
            if isinstance(raw, Mapping) and raw.get('in'):
                return ReferencedParameter(ref=ref_info.ref, data=raw)
            return None

        if '$ref' in parameter:
            return None
        return ExplicitParameter(data=parameter)

    def classify(
        self,
        parameters: Iterable[Any],
        path_params: Iterable[PathParameter] = (),
    ) -> RouteParams:
        """Merge declared and synthesized parameters into location buckets.

        Args:
            parameters: Declared parameters, path-item level first.
            path_params: Parameters found in the path template.

        Returns:
            RouteParams where explicit path parameters win over synthesized
            ones with the same normalized name.
        """
        route_params = RouteParams()

        for parameter in parameters:
            source = self.to_source(parameter)
            route_param = source.merge() if source is not None else None
            if route_param is None:
                continue
            if route_param.location == 'path':
                route_param = self._normalize_path_param(route_param)
                if not route_param.name:
                    continue
            route_params.add(route_param)

        for path_param in path_params:
            already_exists = any(p.name == path_param.name for p in route_params.path)
            if not already_exists:
                route_params.add(SynthesizedParameter(path_param).merge())

        return route_params

    @staticmethod
    def _normalize_path_param(route_param: RouteParameter) -> RouteParameter:
        name = snake_case(route_param.name)
        return dataclasses.replace(
            route_param, name=name, fields={**route_param.fields, 'name': name}
        )