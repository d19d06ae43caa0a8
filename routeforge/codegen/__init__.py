"""Route IR generation module for routeforge.

This module provides the core functionality for turning OpenAPI documents
into per-operation route descriptors.

Main Components:
    - Codegen: The orchestrator that walks a document and builds routes
    - GenerationSession: Per-run state (name counters, component registry)
    - RouteFactory: Assembles the Route of one operation
    - SchemaLoader: Loads documents from local JSON/YAML files
    - SchemaResolver: Resolves local $ref pointers
    - TypeRenderer: Renders schemas as Python typing annotations
    - ComponentRegistry: Owns the components hoisted out of routes

Example:
    >>> from routeforge.codegen import Codegen
    >>> from routeforge.config import DocumentConfig
    >>>
    >>> codegen = Codegen(DocumentConfig(source='./openapi.json'))
    >>> collection = codegen.generate()
    >>> [route.route_name.usage for route in collection.routes]
    ['list_pets', 'create_pet', 'get_pet_detail']
"""

from routeforge.codegen.builders import RouteFactory
from routeforge.codegen.codegen import Codegen, serialize_collection
from routeforge.codegen.hooks import RouteHooks
from routeforge.codegen.models import (
    ContentKind,
    GroupedRoutes,
    ModuleRoutes,
    Route,
    RouteCollection,
)
from routeforge.codegen.schema_loader import SchemaLoader, load_document
from routeforge.codegen.schema_resolver import SchemaResolver
from routeforge.codegen.session import GenerationSession
from routeforge.codegen.type_registry import ComponentRegistry
from routeforge.codegen.types import TypeRenderer

__all__ = [
    # Orchestration
    'Codegen',
    'GenerationSession',
    'RouteFactory',
    'RouteHooks',
    'serialize_collection',
    # Collaborators
    'ComponentRegistry',
    'SchemaLoader',
    'SchemaResolver',
    'TypeRenderer',
    'load_document',
    # IR
    'ContentKind',
    'GroupedRoutes',
    'ModuleRoutes',
    'Route',
    'RouteCollection',
]
