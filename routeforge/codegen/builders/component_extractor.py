"""Hoisting of inline schemas into named components.

Each pass takes an inline schema owned by one route (request body, success
response, error responses, request parameters) and registers it as a named
component derived from the route's usage name, so the rendering stage can
emit it once and reference it by name.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING, Any

from routeforge.codegen.models import (
    Component,
    ComponentCategory,
    RequestBodyInfo,
    ResponseBodyInfo,
    RouteName,
    RouteParameter,
)
from routeforge.codegen.utils import pascal_case

if TYPE_CHECKING:
    from routeforge.codegen.processors.response_processor import ResponseProcessor
    from routeforge.codegen.session import GenerationSession

logger = logging.getLogger(__name__)

__all__ = [
    'ComponentExtractor',
    'ERROR_SUFFIXES',
    'PARAMS_SUFFIXES',
    'REQUEST_BODY_SUFFIXES',
    'RESPONSE_BODY_SUFFIXES',
    'component_candidates',
]

REQUEST_BODY_SUFFIXES = ('Payload', 'Body', 'Input')
RESPONSE_BODY_SUFFIXES = ('Data', 'Result', 'Output')
ERROR_SUFFIXES = ('Error', 'Fail', 'Fails', 'ErrorData', 'HttpError', 'BadResponse')
PARAMS_SUFFIXES = ('Params',)


def component_candidates(usage: str, suffixes: Iterable[str]) -> list[str]:
    """Build PascalCase candidate names for a route's usage name.

    Example:
        >>> component_candidates('get_user', ('Data', 'Result'))
        ['GetUserData', 'GetUserResult']
    """
    return [pascal_case(f'{usage} {suffix}') for suffix in suffixes]


def _is_extractable(schema: Any) -> bool:
    return isinstance(schema, Mapping) and bool(schema) and '$ref' not in schema


class ComponentExtractor:
    """Creates components for inline route schemas.

    The ``extract_*`` switches of the route config gate every pass; the
    caller decides whether to call a pass at all, the extractor only checks
    that there is something to hoist.
    """

    def __init__(self, session: GenerationSession, response_processor: ResponseProcessor):
        self.session = session
        self.registry = session.registry
        self.renderer = session.renderer
        self.resolver = session.resolver
        self.response_processor = response_processor

    def _create(self, candidates: list[str], schema: Mapping[str, Any]) -> Component:
        component = self.registry.create_component(
            ComponentCategory.SCHEMAS.value, candidates, dict(schema)
        )
        logger.debug(f'Created component {component.type_name} ({component.ref})')
        return component

    def extract_request_body(self, info: RequestBodyInfo, route_name: RouteName) -> Component | None:
        """Hoist the request body schema as ``<Usage>Payload``.

        The body keeps its content kind; its schema becomes a reference to
        the component and its type becomes the component's name.
        """
        if not _is_extractable(info.schema):
            return None
        component = self._create(
            component_candidates(route_name.usage, REQUEST_BODY_SUFFIXES), info.schema
        )
        info.schema = component.reference
        info.type = self.renderer.format_identifier(component.type_name)
        info.component = component
        return component

    def extract_response_body(
        self, info: ResponseBodyInfo, route_name: RouteName
    ) -> Component | None:
        """Hoist the success response schema as ``<Usage>Data``.

        Responses declared through ``$ref`` already have a name and are left
        alone. The full response union is recomputed afterwards.
        """
        success = info.success.schema
        if success is None or success.is_reference or not _is_extractable(success.schema):
            return None

        component = self._create(
            component_candidates(route_name.usage, RESPONSE_BODY_SUFFIXES), success.schema
        )
        type_name = self.renderer.format_identifier(component.type_name)
        success.schema = component.reference
        success.type = self.renderer.decorate_nullable(component.raw_type_data, type_name)
        success.component = component
        info.success.type = success.type
        self.response_processor.refresh_full_types(info)
        return component

    def extract_response_error(
        self, info: ResponseBodyInfo, route_name: RouteName
    ) -> Component | None:
        """Hoist all error schemas as one ``oneOf`` component named ``<Usage>Error``.

        After extraction ``error.schemas`` holds a single reference to the
        component and ``error.type`` is the component's name.
        """
        schemas = [s for s in info.error.schemas if isinstance(s, Mapping) and s]
        if not schemas:
            return None

        resolved = [self.resolver.deref(s) for s in schemas]
        titles = [s.get('title') for s in resolved if isinstance(s, Mapping)]
        descriptions = [s.get('description') for s in resolved if isinstance(s, Mapping)]
        schema = {
            'oneOf': [dict(s) for s in schemas],
            'title': ' '.join(t for t in titles if t),
            'description': '\n'.join(d for d in descriptions if d),
        }

        component = self._create(
            component_candidates(route_name.usage, ERROR_SUFFIXES), schema
        )
        info.error.schemas = [component.reference]
        info.error.type = self.renderer.format_identifier(component.type_name)
        info.error.component = component
        return component

    def create_request_params_schema(
        self,
        query_params: list[RouteParameter],
        path_params: list[RouteParameter],
        query_object_schema: Mapping[str, Any],
        route_name: RouteName,
    ) -> dict[str, Any] | None:
        """Build the combined query + path parameters schema of a route.

        Returns None for routes without query parameters. The
        ``on_create_request_params`` hook may replace the schema; otherwise,
        when ``extract_request_params`` is enabled, the schema is hoisted as
        ``<Usage>Params`` and a reference to it is returned.
        """
        if not query_params:
            return None

        properties = {}
        for name, prop in (query_object_schema.get('properties') or {}).items():
            if name and isinstance(prop, Mapping):
                properties[name] = {**prop, 'in': 'query'}
        for param in path_params:
            if param.name:
                properties[param.name] = {**param.as_property(), 'in': 'path'}

        schema = {**query_object_schema, 'properties': properties}

        hooked = self.session.hooks.on_create_request_params(schema)
        if hooked:
            return hooked

        if self.session.config.extract_request_params:
            component = self._create(
                component_candidates(route_name.usage, PARAMS_SUFFIXES), schema
            )
            return component.reference
        return schema
