"""Response processing utilities for OpenAPI operations.

This module provides the ResponseProcessor class that handles extraction
and classification of OpenAPI response definitions. It builds the success
type, the error union and the full per-status union of result envelopes.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from routeforge.codegen.models import (
    ErrorResponses,
    FullResponses,
    RawOperation,
    ResponseBodyInfo,
    ResponseInfo,
    SuccessResponse,
)
from routeforge.codegen.processors.body_processor import (
    BodyTypeResolver,
    get_schema_from_content,
)
from routeforge.codegen.processors.content import (
    collect_content_types,
    get_content_kind,
)
from routeforge.codegen.types import ANY, union_type

if TYPE_CHECKING:
    from routeforge.codegen.schema_resolver import SchemaResolver
    from routeforge.codegen.types import TypeRenderer
    from routeforge.config import RouteConfig

__all__ = ['ResponseProcessor']


class ResponseProcessor:
    """Handles extraction and classification of OpenAPI responses.

    Example:
        >>> processor = ResponseProcessor(config, resolver, renderer, body_resolver)
        >>> info = processor.build(operation)
        >>> info.success.type, info.error.type
        ('Pet', "{'message': str}")
    """

    def __init__(
        self,
        config: RouteConfig,
        resolver: SchemaResolver,
        renderer: TypeRenderer,
        body_resolver: BodyTypeResolver,
    ):
        self.config = config
        self.resolver = resolver
        self.renderer = renderer
        self.body_resolver = body_resolver

    def is_success_status(self, status: int | str) -> bool:
        """Classify a response status as success.

        ``default`` counts only when configured; ``2xx`` always counts.
        """
        if status == 'default' and self.config.default_response_as_success:
            return True
        low, high = self.config.success_response_status_range
        try:
            if low <= int(status) <= high:
                return True
        except (TypeError, ValueError):
            pass
        return status == '2xx'

    def extract_response_info(self, operation: RawOperation) -> list[ResponseInfo]:
        """Build one ResponseInfo per declared status, in declaration order."""
        infos = []
        for status, response in operation.responses.items():
            status = str(status)
            resolved = self.resolver.deref(response)
            content_types = collect_content_types([resolved])
            body_type = self.body_resolver.resolve(
                response,
                operation_id=operation.operation_id,
                default_type=self.config.default_response_type,
            )
            schema = get_schema_from_content(resolved)
            body_type = self.renderer.decorate_nullable(response, body_type)
            if schema:
                body_type = self.renderer.decorate_nullable(schema, body_type)

            infos.append(
                ResponseInfo(
                    status=int(status) if status.isdigit() else status,
                    content_types=content_types,
                    content_kind=get_content_kind(content_types),
                    type=body_type,
                    description=self.renderer.format_description(
                        _get(resolved, 'description'), single_line=True
                    ),
                    is_success=self.is_success_status(status),
                    headers=dict(_get(resolved, 'headers') or {}),
                    schema=schema,
                    is_reference=self.resolver.get_ref(response) is not None,
                )
            )
        return infos

    def build(self, operation: RawOperation) -> ResponseBodyInfo:
        """Build the response body info of an operation."""
        data = operation.data
        content_types = collect_content_types(
            [self.resolver.deref(r) for r in operation.responses.values()],
            [*(data.get('produces') or []), data.get('x-accepts')],
        )
        responses = self.extract_response_info(operation)

        success = next((r for r in responses if r.is_success), None)
        errors = [r for r in responses if not r.is_success and r.type != ANY]

        return ResponseBodyInfo(
            content_types=content_types,
            responses=responses,
            success=SuccessResponse(
                schema=success, type=success.type if success else ANY
            ),
            error=ErrorResponses(
                responses=errors,
                schemas=[r.schema for r in errors if r.schema],
                type=union_type(r.type for r in errors) or ANY,
            ),
            full=FullResponses(types=self.full_union(responses)),
        )

    def refresh_full_types(self, info: ResponseBodyInfo) -> None:
        """Recompute the full union after response types were replaced."""
        info.full = FullResponses(types=self.full_union(info.responses))

    def full_union(self, responses: list[ResponseInfo]) -> str:
        """Union of the result envelope of every response."""
        return union_type(self.result_envelope(r) for r in responses) or ANY

    def result_envelope(self, response: ResponseInfo) -> str:
        status = f'Literal[{response.status!r}]'
        return (
            f"{{'data': {response.type}, 'status': {status}, "
            f"'statusCode': {status}, 'statusText': Literal[{response.description!r}], "
            f"'headers': {self._headers_type(response.headers)}, 'config': {{}}}}"
        )

    def _headers_type(self, headers: Mapping[str, Any]) -> str:
        fields = [
            f'{name!r}: {self.renderer.get_type(header)}'
            for name, header in headers.items()
        ]
        return '{' + ', '.join(fields) + '}'


def _get(node: Any, key: str) -> Any:
    return node.get(key) if isinstance(node, Mapping) else None
