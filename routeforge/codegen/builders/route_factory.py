"""Route assembly.

This module provides the RouteFactory class, which turns one RawOperation
into a fully resolved Route by running the processors and builders in a
fixed order:

1. parse the path template and derive the module name
2. classify parameters and render path arguments
3. aggregate responses and build the raw route info
4. resolve the route name, then the request body
5. build the request params schema and run component extraction
6. name the argument bags (query, body, path params, headers)
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from routeforge.codegen.builders.component_extractor import ComponentExtractor
from routeforge.codegen.builders.name_resolver import (
    RESERVED_BODY_ARG_NAMES,
    RESERVED_HEADER_ARG_NAMES,
    RESERVED_PATH_ARG_NAMES,
    RESERVED_QUERY_ARG_NAMES,
    RouteNameResolver,
    SpecificArgNameResolver,
)
from routeforge.codegen.models import (
    ContentKind,
    PathArg,
    RawOperation,
    RawRouteInfo,
    Route,
    RouteParameter,
    RouteRequest,
    RouteResponse,
    SpecificArg,
    SpecificArgs,
)
from routeforge.codegen.processors import (
    BodyTypeResolver,
    ParameterProcessor,
    RequestBodyProcessor,
    ResponseProcessor,
    convert_params_to_object,
    parse_route_path,
)
from routeforge.codegen.utils import generate_id, snake_case
from routeforge.exceptions import ArgumentNameConflictError, RouteGenerationError

if TYPE_CHECKING:
    from routeforge.codegen.session import GenerationSession

logger = logging.getLogger(__name__)

__all__ = ['RouteFactory', 'get_module_name', 'get_namespace', 'has_security']

_LEADING_DIGIT_RE = re.compile(r'^(\d)')


def get_module_name(
    route: str, tags: list[str] | None, index: int = 0, first_tag: bool = False
) -> str:
    """Derive the module a route belongs to.

    Args:
        route: The rewritten path, e.g. '/users/${id}'.
        tags: The operation's tags.
        index: Which non-empty path segment names the module.
        first_tag: Prefer the first tag over the path segment.

    Returns:
        The snake_case module name, or '' when none can be derived.
    """
    if first_tag and tags:
        return snake_case(tags[0])
    segments = [segment for segment in route.split('/') if segment]
    if 0 <= index < len(segments):
        return snake_case(segments[index])
    return ''


def get_namespace(module_name: str) -> str:
    """Make a module name usable as an identifier ('2fa' -> 'v2fa')."""
    return _LEADING_DIGIT_RE.sub(r'v\1', module_name)


def has_security(operation: RawOperation, document: Mapping[str, Any]) -> bool:
    """An operation-level ``security`` list overrides the document's."""
    if operation.security is not None:
        return len(operation.security) > 0
    return bool(document.get('security'))


class RouteFactory:
    """Builds Route descriptors for the operations of one document.

    Example:
        >>> factory = RouteFactory(session)
        >>> route = factory.build(operation)
        >>> route.route_name.usage, route.request.path
        ('get_user_detail', '/users/${id}')
    """

    def __init__(self, session: GenerationSession):
        """Initialize the factory and its collaborators.

        Args:
            session: The per-document generation state.
        """
        self.session = session
        self.config = session.config
        self.renderer = session.renderer

        self.body_resolver = BodyTypeResolver(
            session.resolver, session.renderer, session.parsed_schemas
        )
        self.parameter_processor = ParameterProcessor(session.resolver)
        self.response_processor = ResponseProcessor(
            session.config, session.resolver, session.renderer, self.body_resolver
        )
        self.request_processor = RequestBodyProcessor(
            session.resolver, session.renderer, self.body_resolver
        )
        self.route_name_resolver = RouteNameResolver(session)
        self.extractor = ComponentExtractor(session, self.response_processor)

    def build(self, operation: RawOperation) -> Route:
        """Assemble the Route of one operation.

        Raises:
            RouteGenerationError: If the argument bags cannot be named.
        """
        try:
            return self._build(operation)
        except ArgumentNameConflictError as e:
            raise RouteGenerationError(
                operation.operation_id, operation.method, operation.path, e
            ) from e

    def _build(self, operation: RawOperation) -> Route:
        config = self.config
        data = operation.data

        parsed = parse_route_path(operation.path)
        module_name = get_module_name(
            parsed.route,
            operation.tags,
            index=config.module_name_index,
            first_tag=config.module_name_first_tag,
        )

        route_params = self.parameter_processor.classify(
            operation.parameters, parsed.path_params
        )
        path_args = [self._path_arg(param) for param in route_params.path]

        response_body_info = self.response_processor.build(operation)

        raw = RawRouteInfo(
            operation_id=operation.operation_id,
            method=operation.method,
            route=operation.path,
            module_name=module_name,
            path_args=path_args,
            responses_types=response_body_info.responses,
            description=data.get('description'),
            tags=operation.tags,
            summary=data.get('summary'),
            responses=dict(operation.responses),
            produces=data.get('produces'),
            consumes=data.get('consumes'),
            request_body=operation.request_body,
            extensions=operation.extensions,
        )

        query_object_schema = convert_params_to_object(route_params.query)
        path_object_schema = convert_params_to_object(route_params.path)
        headers_object_schema = convert_params_to_object(route_params.header)

        route_name = self.route_name_resolver.resolve(raw)

        request_body_info = self.request_processor.build(operation, route_params)
        if config.extract_request_body:
            self.extractor.extract_request_body(request_body_info, route_name)

        request_params = self.extractor.create_request_params_schema(
            route_params.query, route_params.path, query_object_schema, route_name
        )

        if config.extract_response_body:
            self.extractor.extract_response_body(response_body_info, route_name)
        if config.extract_response_error:
            self.extractor.extract_response_error(response_body_info, route_name)

        arg_names = SpecificArgNameResolver(arg.name for arg in path_args)
        specific_args = SpecificArgs(
            query=self._object_arg(
                route_params.query, query_object_schema, arg_names, RESERVED_QUERY_ARG_NAMES
            ),
            body=(
                SpecificArg(
                    name=arg_names.resolve(
                        [request_body_info.param_name, *RESERVED_BODY_ARG_NAMES]
                    ),
                    optional=not request_body_info.required,
                    type=request_body_info.type,
                )
                if request_body_info.type
                else None
            ),
            path_params=self._object_arg(
                route_params.path, path_object_schema, arg_names, RESERVED_PATH_ARG_NAMES
            ),
            headers=self._object_arg(
                route_params.header, headers_object_schema, arg_names, RESERVED_HEADER_ARG_NAMES
            ),
        )

        return Route(
            id=generate_id(),
            namespace=get_namespace(module_name),
            route_name=route_name,
            route_params=route_params,
            request_body_info=request_body_info,
            response_body_info=response_body_info,
            specific_args=specific_args,
            query_object_schema=query_object_schema,
            path_object_schema=path_object_schema,
            headers_object_schema=headers_object_schema,
            request=RouteRequest(
                content_types=request_body_info.content_types,
                parameters=path_args,
                path=parsed.route,
                form_data=request_body_info.content_kind is ContentKind.FORM_DATA,
                is_query_body=request_body_info.content_kind is ContentKind.URL_ENCODED,
                security=has_security(operation, self.session.document),
                method=operation.method,
                request_params=request_params,
                payload=specific_args.body,
                query=specific_args.query,
                path_params=specific_args.path_params,
                headers=specific_args.headers,
            ),
            response=RouteResponse(
                content_types=response_body_info.content_types,
                type=response_body_info.success.type,
                error_type=response_body_info.error.type,
                full_types=response_body_info.full.types,
            ),
            raw=raw,
        )

    def _path_arg(self, param: RouteParameter) -> PathArg:
        # Swagger 2.0 parameters carry their type on the parameter itself
        schema = param.schema or param.fields
        return PathArg(
            name=param.name,
            optional=not param.required,
            type=self.renderer.inline_type_expression(schema),
            description=param.description,
        )

    def _object_arg(
        self,
        params: list[RouteParameter],
        object_schema: dict[str, Any],
        arg_names: SpecificArgNameResolver,
        candidates: list[str],
    ) -> SpecificArg | None:
        if not params:
            return None
        return SpecificArg(
            name=arg_names.resolve(candidates),
            optional=self.renderer.parse_schema_shape(object_schema).all_fields_optional,
            type=self.renderer.inline_type_expression(object_schema),
        )
