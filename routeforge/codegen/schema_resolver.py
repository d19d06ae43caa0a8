"""Schema resolution utilities for OpenAPI documents.

This module provides the SchemaResolver class for resolving $ref references
and managing component lookups in OpenAPI documents.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from routeforge.codegen.models import ComponentCategory
from routeforge.exceptions import SchemaReferenceError

if TYPE_CHECKING:
    from routeforge.codegen.type_registry import ComponentRegistry

logger = logging.getLogger(__name__)

__all__ = ['RefTypeInfo', 'SchemaResolver', 'unescape_pointer']


@dataclass
class RefTypeInfo:
    """A resolved ``$ref``.

    Attributes:
        ref: The original reference string.
        type_name: The last pointer segment, e.g. 'Pet'.
        category: The components section the reference points into.
        raw_data: The referenced node.
    """

    ref: str
    type_name: str
    category: ComponentCategory
    raw_data: Any


class SchemaResolver:
    """Resolves $ref references and manages component lookups in OpenAPI documents.

    Only local JSON pointers (``#/...``) are supported. Components created
    while building routes are looked up in the registry before the document.

    Example:
        >>> resolver = SchemaResolver(document)
        >>> info = resolver.resolve_reference({'$ref': '#/components/schemas/Pet'})
        >>> info.type_name
        'Pet'
    """

    def __init__(
        self,
        document: Mapping[str, Any],
        registry: ComponentRegistry | None = None,
    ):
        """Initialize the schema resolver.

        Args:
            document: The OpenAPI document to resolve references from.
            registry: Optional registry of components created during the run.
        """
        self.document = document
        self.registry = registry
        self._cache: dict[str, Any] = {}

    @staticmethod
    def get_ref(node: Any) -> str | None:
        """Return the ``$ref`` string of a node, if it has one."""
        if isinstance(node, Mapping):
            ref = node.get('$ref')
            if isinstance(ref, str) and ref:
                return ref
        return None

    def resolve_reference(self, node: Any) -> RefTypeInfo | None:
        """Resolve the ``$ref`` of a node.

        Args:
            node: Any document node.

        Returns:
            The resolved reference, or None when the node is not a reference
            or the reference cannot be resolved.
        """
        ref = self.get_ref(node)
        if ref is None:
            return None

        try:
            raw_data = self.resolve_pointer(ref)
        except SchemaReferenceError as e:
            logger.warning(str(e))
            return None

        parts = ref[2:].split('/')
        section = parts[1] if len(parts) >= 3 and parts[0] == 'components' else None
        if parts and parts[0] == 'definitions':
            section = 'schemas'

        return RefTypeInfo(
            ref=ref,
            type_name=unescape_pointer(parts[-1]),
            category=ComponentCategory.from_section(section),
            raw_data=raw_data,
        )

    def resolve_pointer(self, ref: str) -> Any:
        """Resolve a local JSON pointer.

        Args:
            ref: The reference (e.g., '#/components/schemas/Pet').

        Returns:
            The referenced node.

        Raises:
            SchemaReferenceError: If the reference is not local or does not exist.
        """
        if ref in self._cache:
            return self._cache[ref]

        if self.registry is not None:
            component = self.registry.get_by_ref(ref)
            if component is not None:
                return component.raw_type_data

        if ref.startswith('http://') or ref.startswith('https://'):
            raise SchemaReferenceError(
                ref,
                'External URL references are not supported. '
                'Consider inlining the referenced schema.',
            )

        if not ref.startswith('#/'):
            raise SchemaReferenceError(
                ref,
                'Relative file references are not supported. '
                'Consider using a tool to bundle your OpenAPI spec.',
            )

        node: Any = self.document
        for part in ref[2:].split('/'):
            key = unescape_pointer(part)
            if isinstance(node, Mapping) and key in node:
                node = node[key]
            elif isinstance(node, list) and key.isdigit() and int(key) < len(node):
                node = node[int(key)]
            else:
                raise SchemaReferenceError(ref, f"'{key}' not found")

        self._cache[ref] = node
        return node

    def deref(self, node: Any, max_depth: int = 16) -> Any:
        """Follow ``$ref`` chains until a concrete node is reached.

        Unresolvable references are returned as-is.
        """
        for _ in range(max_depth):
            info = self.resolve_reference(node)
            if info is None:
                return node
            node = info.raw_data
        logger.debug(f'Reference chain too deep, stopping at {self.get_ref(node)}')
        return node

    def get_all_schemas(self) -> dict[str, Any]:
        """Get all schemas defined in the components/schemas section.

        Swagger 2.0 ``definitions`` are used when no components are present.
        """
        components = self.document.get('components') or {}
        schemas = components.get('schemas') if isinstance(components, Mapping) else None
        if schemas is None:
            schemas = self.document.get('definitions')
        return dict(schemas) if isinstance(schemas, Mapping) else {}


def unescape_pointer(part: str) -> str:
    """Decode one JSON pointer segment (``~1`` is ``/``, ``~0`` is ``~``)."""
    return part.replace('~1', '/').replace('~0', '~')
