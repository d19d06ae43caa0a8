"""Request body processing for OpenAPI operations."""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import TYPE_CHECKING

from routeforge.codegen.models import (
    ContentKind,
    RawOperation,
    RequestBodyInfo,
    RouteParams,
)
from routeforge.codegen.processors.body_processor import get_schema_from_content
from routeforge.codegen.processors.content import (
    collect_content_types,
    get_content_kind,
)
from routeforge.codegen.processors.parameter_processor import convert_params_to_object

if TYPE_CHECKING:
    from routeforge.codegen.processors.body_processor import BodyTypeResolver
    from routeforge.codegen.schema_resolver import SchemaResolver
    from routeforge.codegen.types import TypeRenderer

__all__ = ['DEFAULT_BODY_ARG_NAME', 'DEFAULT_BODY_CONTENT_TYPE', 'RequestBodyProcessor']

DEFAULT_BODY_ARG_NAME = 'data'

# Swagger 2.0 body parameters without any `consumes` are sent as JSON
DEFAULT_BODY_CONTENT_TYPE = 'application/json'

# A binary field inside an object type means the body has to go out as form data
FORM_DATA_FIELD_RE = re.compile(r':\s*(?:NotRequired\[)?bytes\b')


class RequestBodyProcessor:
    """Builds the RequestBodyInfo of an operation.

    Form-data parameters (Swagger 2.0 ``in: formData``) take precedence over
    any declared request body and force the FORM_DATA content kind. An
    ``in: body`` parameter stands in for a missing ``requestBody`` and
    gives the body its name and required flag.
    """

    def __init__(
        self,
        resolver: SchemaResolver,
        renderer: TypeRenderer,
        body_resolver: BodyTypeResolver,
    ):
        self.resolver = resolver
        self.renderer = renderer
        self.body_resolver = body_resolver

    def build(self, operation: RawOperation, route_params: RouteParams) -> RequestBodyInfo:
        data = operation.data
        request_body = operation.request_body
        resolved_body = self.resolver.deref(request_body) if request_body else None

        content_types = collect_content_types(
            [resolved_body], [*(data.get('consumes') or []), data.get('x-contentType')]
        )
        content_kind = get_content_kind(content_types)
        param_name = self.get_param_name(operation, resolved_body)
        required = self.is_required(resolved_body)
        schema = None
        type_ = None

        if route_params.form_data:
            content_kind = ContentKind.FORM_DATA
            schema = convert_params_to_object(route_params.form_data)
            type_ = self.renderer.inline_type_expression(schema)
        elif route_params.body and not request_body:
            # Swagger 2.0 declares the body as an ``in: body`` parameter
            body_param = route_params.body[0]
            if not content_types:
                content_types = [DEFAULT_BODY_CONTENT_TYPE]
                content_kind = get_content_kind(content_types)
            schema = dict(body_param.schema) or None
            type_ = self.renderer.decorate_nullable(
                body_param.fields,
                self.body_resolver.resolve(
                    {'content': {content_types[0]: {'schema': schema}}},
                    operation.operation_id,
                ),
            )
            param_name = body_param.name
            required = body_param.required
        elif content_kind is ContentKind.FORM_DATA:
            schema = get_schema_from_content(resolved_body)
            type_ = self.renderer.inline_type_expression(schema)
        elif request_body:
            schema = get_schema_from_content(resolved_body)
            type_ = self.renderer.decorate_nullable(
                request_body,
                self.body_resolver.resolve(request_body, operation.operation_id),
            )

        if type_ and FORM_DATA_FIELD_RE.search(type_):
            content_kind = ContentKind.FORM_DATA

        return RequestBodyInfo(
            param_name=param_name,
            content_types=content_types,
            content_kind=content_kind,
            schema=schema,
            type=type_,
            required=required,
        )

    @staticmethod
    def get_param_name(operation: RawOperation, request_body) -> str:
        data = operation.data
        body_name = request_body.get('name') if isinstance(request_body, Mapping) else None
        return (
            data.get('requestBodyName')
            or data.get('x-codegen-request-body-name')
            or body_name
            or DEFAULT_BODY_ARG_NAME
        )

    @staticmethod
    def is_required(request_body) -> bool:
        """A declared body is required unless it says ``required: false``."""
        if not isinstance(request_body, Mapping):
            return False
        return bool(request_body.get('required', True))
