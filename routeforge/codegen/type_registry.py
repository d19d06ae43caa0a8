"""Component registry for schemas hoisted during route building.

This module provides the ComponentRegistry class for creating, naming and
looking up the named components extracted from inline request/response
schemas.
"""

import logging
from collections.abc import Iterable, Iterator
from typing import Any

from routeforge.codegen.models import Component

logger = logging.getLogger(__name__)

__all__ = ['ComponentRegistry']


class ComponentRegistry:
    """Registry for named components created during a generation run.

    Names already used by the document's own schemas are reserved up front,
    so a hoisted component never shadows a document schema.

    Example:
        >>> registry = ComponentRegistry(reserved_names=['Pet'])
        >>> component = registry.create_component(
        ...     'schemas', ['GetPetData', 'GetPetResult'], {'type': 'object'}
        ... )
        >>> component.type_name
        'GetPetData'
    """

    def __init__(self, reserved_names: Iterable[str] | None = None):
        """Initialize an empty component registry.

        Args:
            reserved_names: Names that may never be given to a new component.
        """
        self._components: dict[str, Component] = {}
        self._reserved: set[str] = set(reserved_names or [])

    def reserve(self, names: Iterable[str]) -> None:
        """Mark names as taken."""
        self._reserved.update(names)

    def is_reserved(self, name: str) -> bool:
        return name in self._reserved

    def resolve_name(self, candidates: str | Iterable[str]) -> str:
        """Pick the first free candidate name and reserve it.

        When every candidate is taken a numbered variant of the first
        candidate is used instead.

        Args:
            candidates: One name or an ordered list of names.

        Returns:
            The reserved name.

        Raises:
            ValueError: If no candidate name is given.
        """
        if isinstance(candidates, str):
            candidates = [candidates]
        variants = list(dict.fromkeys(c for c in candidates if c))
        if not variants:
            raise ValueError('At least one candidate name is required')

        for variant in variants:
            if not self.is_reserved(variant):
                self._reserved.add(variant)
                return variant

        counter = 2
        while f'{variants[0]}{counter}' in self._reserved:
            counter += 1
        name = f'{variants[0]}{counter}'
        logger.debug(f'All of {variants} are taken, using fallback name {name}')
        self._reserved.add(name)
        return name

    def create_component(
        self,
        category: str,
        candidates: str | Iterable[str],
        schema: dict[str, Any],
    ) -> Component:
        """Create a named component from a schema.

        Args:
            category: The components section, normally 'schemas'.
            candidates: Candidate names, tried in order.
            schema: The schema to hoist. It is copied, never mutated.

        Returns:
            The created Component.
        """
        type_name = self.resolve_name(candidates)
        ref = f'#/components/{category}/{type_name}'
        component = Component(
            type_name=type_name,
            category=category,
            ref=ref,
            raw_type_data=dict(schema),
        )
        self._components[ref] = component
        return component

    def get_by_ref(self, ref: str) -> Component | None:
        """Get a created component by its ``$ref`` pointer."""
        return self._components.get(ref)

    def get_component(self, type_name: str, category: str = 'schemas') -> Component | None:
        """Get a created component by name."""
        return self._components.get(f'#/components/{category}/{type_name}')

    def get_type_names(self) -> list[str]:
        """Get all created component names, sorted alphabetically."""
        return sorted(c.type_name for c in self._components.values())

    def clear(self) -> None:
        """Forget all created components and reservations."""
        self._components.clear()
        self._reserved.clear()

    def __len__(self) -> int:
        return len(self._components)

    def __iter__(self) -> Iterator[Component]:
        return iter(self._components.values())

    def __contains__(self, type_name: str) -> bool:
        return any(c.type_name == type_name for c in self._components.values())
