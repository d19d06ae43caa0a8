"""Type resolution for request and response bodies.

This module provides the BodyTypeResolver class, which reduces a request
body or a single response to one type expression, reusing the names of
document schemas wherever the rendered type matches one.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from routeforge.codegen.models import ComponentCategory, ParsedSchema
from routeforge.codegen.types import ANY

if TYPE_CHECKING:
    from routeforge.codegen.schema_resolver import SchemaResolver
    from routeforge.codegen.types import TypeRenderer

logger = logging.getLogger(__name__)

__all__ = ['BodyTypeResolver', 'get_schema_from_content', 'strip_operation_id']


def get_schema_from_content(body: Any) -> dict[str, Any] | None:
    """Return the schema of the first media type that declares one.

    Media types are visited in declaration order.
    """
    if not isinstance(body, Mapping):
        return None
    content = body.get('content')
    if not isinstance(content, Mapping):
        return None
    for media_type in content.values():
        if isinstance(media_type, Mapping) and media_type.get('schema'):
            return dict(media_type['schema'])
    return None


def strip_operation_id(type_name: str, operation_id: str | None) -> str:
    """Remove the operationId from a referenced component name.

    swagger2openapi names the request bodies it synthesizes after the
    operation (``createUserUser`` for body ``User`` of ``createUser``);
    stripping the operationId recovers the schema name.
    """
    if not operation_id:
        return type_name
    return type_name.replace(operation_id, '')


class BodyTypeResolver:
    """Resolves the type expression of a request body or response.

    Resolution never raises: bodies that cannot be resolved degrade to the
    caller's default type or ``Any``.

    Example:
        >>> resolver = BodyTypeResolver(schema_resolver, renderer, parsed_schemas)
        >>> resolver.resolve(operation['requestBody'], operation_id='createPet')
        'Pet'
    """

    def __init__(
        self,
        resolver: SchemaResolver,
        renderer: TypeRenderer,
        parsed_schemas: list[ParsedSchema],
    ):
        """Initialize the body type resolver.

        Args:
            resolver: The ``$ref`` resolver.
            renderer: The type expression renderer.
            parsed_schemas: The document's named schemas, used for reuse.
        """
        self.resolver = resolver
        self.renderer = renderer
        self.parsed_schemas = parsed_schemas

    def resolve(
        self,
        body: Any,
        operation_id: str | None = None,
        default_type: str | None = None,
    ) -> str:
        """Resolve the type expression of a body.

        Args:
            body: A request body or a response object, possibly a ``$ref``.
            operation_id: The owning operation's id.
            default_type: Used when the body declares neither schema nor reference.

        Returns:
            The type expression.
        """
        return self._resolve(body, operation_id, default_type, frozenset())

    def find_parsed_schema(self, content: str) -> ParsedSchema | None:
        """Find a document schema by formatted name, else by rendered content."""
        for parsed in self.parsed_schemas:
            if self.renderer.format_identifier(parsed.name) == content:
                return parsed
        for parsed in self.parsed_schemas:
            if parsed.content == content:
                return parsed
        return None

    def _resolve(
        self,
        body: Any,
        operation_id: str | None,
        default_type: str | None,
        seen: frozenset[str],
    ) -> str:
        schema = get_schema_from_content(body)
        if schema:
            content = self.renderer.inline_type_expression(schema)
            found = self.find_parsed_schema(content)
            return self.renderer.format_identifier(found.name) if found else content

        ref_info = self.resolver.resolve_reference(body)
        if ref_info is not None:
            if ref_info.ref in seen:
                logger.debug(f'Reference cycle through {ref_info.ref}, using {ANY}')
                return ANY

            type_name = strip_operation_id(ref_info.type_name, operation_id)
            if any(parsed.name == type_name for parsed in self.parsed_schemas):
                return self.renderer.format_identifier(type_name)

            category = ref_info.category
            if category is ComponentCategory.SCHEMAS:
                return self.renderer.format_identifier(ref_info.type_name)
            if category in (ComponentCategory.RESPONSES, ComponentCategory.REQUEST_BODIES):
                return self._resolve(
                    ref_info.raw_data, operation_id, default_type, seen | {ref_info.ref}
                )
            if category is ComponentCategory.OTHER:
                return self.renderer.inline_type_expression(ref_info.raw_data)

        if isinstance(body, Mapping) and '$ref' in body:
            logger.debug(f'Unresolvable body reference {body["$ref"]}, using {ANY}')

        return default_type or ANY
