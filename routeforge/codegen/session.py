"""Per-document generation state.

A GenerationSession owns everything that is mutable during one document run:
the route-name collision counters, the component registry and the
collaborators built around the document. Build one per run and discard it
afterwards; sessions are not meant to be shared between concurrent runs.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from routeforge.codegen.hooks import RouteHooks
from routeforge.codegen.models import ParsedSchema
from routeforge.codegen.schema_resolver import SchemaResolver
from routeforge.codegen.templates import ROUTE_NAME_TEMPLATE, TemplateRenderer
from routeforge.codegen.type_registry import ComponentRegistry
from routeforge.codegen.types import TypeRenderer
from routeforge.config import RouteConfig

__all__ = ['GenerationSession']


@dataclass
class GenerationSession:
    """Collaborators and mutable state for one document run.

    Attributes:
        document: The source document.
        config: Route building options.
        resolver: The ``$ref`` resolver.
        renderer: The type expression renderer.
        registry: Components created during this run.
        templates: The route template renderer.
        hooks: Consumer extension points.
        parsed_schemas: The document's named schemas with rendered content.
        route_name_counts: ``module|name`` -> number of times seen.
    """

    document: Mapping[str, Any]
    config: RouteConfig
    resolver: SchemaResolver
    renderer: TypeRenderer
    registry: ComponentRegistry
    templates: TemplateRenderer
    hooks: RouteHooks
    parsed_schemas: list[ParsedSchema] = field(default_factory=list)
    route_name_counts: dict[str, int] = field(default_factory=dict)

    @classmethod
    def create(
        cls,
        document: Mapping[str, Any],
        config: RouteConfig | None = None,
        hooks: RouteHooks | None = None,
    ) -> GenerationSession:
        """Build a fresh session around a document."""
        config = config or RouteConfig()
        registry = ComponentRegistry()
        resolver = SchemaResolver(document, registry)
        renderer = TypeRenderer(resolver)
        overrides = {}
        if config.route_name_template:
            overrides[ROUTE_NAME_TEMPLATE] = config.route_name_template

        schemas = resolver.get_all_schemas()
        registry.reserve(schemas)
        registry.reserve(renderer.format_identifier(name) for name in schemas)

        return cls(
            document=document,
            config=config,
            resolver=resolver,
            renderer=renderer,
            registry=registry,
            templates=TemplateRenderer(overrides),
            hooks=hooks or RouteHooks(),
            parsed_schemas=renderer.parse_schemas(schemas),
        )

    def reset(self) -> None:
        """Clear the per-run state (route name counters) before a new pass."""
        self.route_name_counts.clear()
