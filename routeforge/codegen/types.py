"""Type expression rendering for route IR.

This module turns OpenAPI schemas into textual Python typing annotations:

- Primitives map to builtins (``str``, ``int``, ``float``, ``bool``, ``bytes``)
  and to ``datetime``/``date``/``UUID`` for the usual string formats
- ``$ref`` to a component schema renders as the component's identifier
- Arrays and maps render as ``list[T]`` and ``dict[str, T]``
- Objects with properties render structurally, e.g.
  ``{'id': int, 'tag': NotRequired[str]}``
- ``oneOf``/``anyOf``/type lists render as ``A | B`` unions

The unknown type is ``Any``.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from routeforge.codegen.models import ParsedSchema
from routeforge.codegen.schema_resolver import SchemaResolver, unescape_pointer
from routeforge.codegen.utils import sanitize_identifier

logger = logging.getLogger(__name__)

__all__ = [
    'ANY',
    'NONE',
    'SchemaShape',
    'TypeRenderer',
    'union_type',
]

ANY = 'Any'
NONE = 'None'

_PRIMITIVE_TYPE_MAP = {
    ('string', None): 'str',
    ('string', 'date-time'): 'datetime',
    ('string', 'date'): 'date',
    ('string', 'uuid'): 'UUID',
    ('string', 'binary'): 'bytes',
    ('string', 'file'): 'bytes',
    ('string', 'byte'): 'str',
    ('file', None): 'bytes',
    ('integer', None): 'int',
    ('number', None): 'float',
    ('boolean', None): 'bool',
    ('null', None): NONE,
}


def union_type(types: Iterable[str | None]) -> str:
    """Join type expressions into a union, dropping empties and duplicates.

    Returns an empty string when nothing is left.
    """
    members: list[str] = []
    for type_ in types:
        if type_ and type_ not in members:
            members.append(type_)
    return ' | '.join(members)


@dataclass
class SchemaShape:
    """Structural summary of an object schema.

    Attributes:
        properties: Property names in declaration order.
        required: Names of required properties.
        all_fields_optional: True when no property is required.
    """

    properties: list[str] = field(default_factory=list)
    required: list[str] = field(default_factory=list)

    @property
    def all_fields_optional(self) -> bool:
        return not self.required


class TypeRenderer:
    """Renders schemas as Python typing annotations.

    Example:
        >>> renderer = TypeRenderer(SchemaResolver(document))
        >>> renderer.inline_type_expression({'type': 'array', 'items': {'type': 'string'}})
        'list[str]'
    """

    def __init__(self, resolver: SchemaResolver):
        self.resolver = resolver

    def format_identifier(self, name: str) -> str:
        """Format a component name as a type identifier."""
        return sanitize_identifier(name)

    def inline_type_expression(self, schema: Any) -> str:
        """Render a schema (or reference) as an inline type expression."""
        return self._render(schema, frozenset())

    def get_type(self, node: Any) -> str:
        """Render a parameter- or header-like node through its ``schema``."""
        node = self.resolver.deref(node)
        if isinstance(node, Mapping) and isinstance(node.get('schema'), Mapping):
            node = node['schema']
        return self.decorate_nullable(node, self.inline_type_expression(node))

    def decorate_nullable(self, node: Any, type_: str) -> str:
        """Append ``| None`` when the node permits null."""
        if not self.is_nullable(node):
            return type_
        if NONE in type_.split(' | '):
            return type_
        return f'{type_} | {NONE}'

    @staticmethod
    def is_nullable(node: Any) -> bool:
        if not isinstance(node, Mapping):
            return False
        if node.get('nullable') is True or node.get('x-nullable') is True:
            return True
        schema_type = node.get('type')
        if isinstance(schema_type, list):
            return 'null' in schema_type
        return schema_type == 'null'

    def parse_schema_shape(self, schema: Any) -> SchemaShape:
        """Summarize which properties of an object schema are required."""
        schema = self.resolver.deref(schema)
        shape = SchemaShape()
        if not isinstance(schema, Mapping):
            return shape
        required = _required_names(schema)
        for name, prop in (schema.get('properties') or {}).items():
            shape.properties.append(name)
            if _is_required(name, prop, required):
                shape.required.append(name)
        return shape

    @staticmethod
    def format_description(text: str | None, single_line: bool = False) -> str:
        text = (text or '').strip()
        if single_line:
            text = ' '.join(text.split())
        return text.replace('"""', '\\"\\"\\"')

    def parse_schemas(self, schemas: Mapping[str, Any]) -> list[ParsedSchema]:
        """Render every named document schema, in declaration order."""
        return [
            ParsedSchema(
                name=name,
                content=self.inline_type_expression(schema),
                schema=dict(schema) if isinstance(schema, Mapping) else {},
            )
            for name, schema in schemas.items()
        ]

    def _render(self, schema: Any, seen: frozenset[str]) -> str:
        if not isinstance(schema, Mapping) or not schema:
            return ANY

        ref = SchemaResolver.get_ref(schema)
        if ref is not None:
            return self._render_ref(ref, seen)

        if isinstance(schema.get('enum'), list) and schema['enum']:
            return f'Literal[{", ".join(repr(v) for v in schema["enum"])}]'
        if 'const' in schema:
            return f'Literal[{schema["const"]!r}]'

        for key in ('oneOf', 'anyOf'):
            if isinstance(schema.get(key), list) and schema[key]:
                return union_type(self._render(s, seen) for s in schema[key]) or ANY

        if isinstance(schema.get('allOf'), list) and schema['allOf']:
            return self._render_all_of(schema, seen)

        schema_type = schema.get('type')
        if isinstance(schema_type, list):
            return union_type(
                self._render({**schema, 'type': t}, seen) for t in schema_type
            ) or ANY

        if schema_type is None:
            if 'properties' in schema or 'additionalProperties' in schema:
                schema_type = 'object'
            elif 'items' in schema:
                schema_type = 'array'
            else:
                return ANY

        if schema_type == 'array':
            return f'list[{self._render(schema.get("items"), seen)}]'
        if schema_type == 'object':
            return self._render_object(schema, seen)

        format_ = schema.get('format')
        return _PRIMITIVE_TYPE_MAP.get(
            (schema_type, format_), _PRIMITIVE_TYPE_MAP.get((schema_type, None), ANY)
        )

    def _render_ref(self, ref: str, seen: frozenset[str]) -> str:
        parts = ref.split('/')
        if ref.startswith('#/components/schemas/') or ref.startswith('#/definitions/'):
            return self.format_identifier(unescape_pointer(parts[-1]))
        if ref in seen:
            logger.debug(f'Reference cycle through {ref}, rendering as {ANY}')
            return ANY
        info = self.resolver.resolve_reference({'$ref': ref})
        if info is None:
            return ANY
        return self._render(info.raw_data, seen | {ref})

    def _render_object(self, schema: Mapping[str, Any], seen: frozenset[str]) -> str:
        properties = schema.get('properties') or {}
        if not properties:
            additional = schema.get('additionalProperties')
            if isinstance(additional, Mapping) and additional:
                return f'dict[str, {self._render(additional, seen)}]'
            return f'dict[str, {ANY}]'

        required = _required_names(schema)
        fields = []
        for name, prop in properties.items():
            prop_type = self.decorate_nullable(prop, self._render(prop, seen))
            if not _is_required(name, prop, required):
                prop_type = f'NotRequired[{prop_type}]'
            fields.append(f'{name!r}: {prop_type}')
        return '{' + ', '.join(fields) + '}'

    def _render_all_of(self, schema: Mapping[str, Any], seen: frozenset[str]) -> str:
        members = schema['allOf']
        if len(members) == 1 and not schema.get('properties'):
            return self._render(members[0], seen)

        # Merge member objects into one structural type
        properties: dict[str, Any] = {}
        required: list[str] = []
        for member in [*members, schema]:
            member = self.resolver.deref(member)
            if not isinstance(member, Mapping):
                continue
            properties.update(member.get('properties') or {})
            required.extend(_required_names(member))
        if not properties:
            return union_type(self._render(m, seen) for m in members) or ANY
        return self._render_object(
            {'type': 'object', 'properties': properties, 'required': required}, seen
        )


def _required_names(schema: Mapping[str, Any]) -> list[str]:
    required = schema.get('required')
    return list(required) if isinstance(required, list) else []


def _is_required(name: str, prop: Any, required: list[str]) -> bool:
    # Parameters flattened into properties carry a boolean 'required'
    if isinstance(prop, Mapping) and isinstance(prop.get('required'), bool):
        return prop['required']
    return name in required
