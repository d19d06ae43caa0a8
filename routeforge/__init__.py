"""routeforge - Build a resolved route IR from OpenAPI documents.

routeforge reads an OpenAPI 3.x (or Swagger 2.0 flavoured) document and
produces one fully resolved route descriptor per HTTP operation:
parameters classified by location, bodies reduced to type expressions,
naming collisions resolved and inline schemas hoisted into components.
Client code templates consume the result.

Quick Start:
    >>> from routeforge import Codegen, DocumentConfig
    >>>
    >>> config = DocumentConfig(source='./openapi.yaml', output='./ir')
    >>> codegen = Codegen(config)
    >>> collection = codegen.generate()
    >>> codegen.write(collection)

CLI Usage:
    $ routeforge generate --config routeforge.yaml
    $ routeforge inspect ./openapi.yaml
"""

from importlib.metadata import PackageNotFoundError, version as _package_version

from routeforge.codegen.codegen import Codegen
from routeforge.codegen.hooks import RouteHooks
from routeforge.codegen.schema_loader import SchemaLoader
from routeforge.codegen.schema_resolver import SchemaResolver
from routeforge.codegen.type_registry import ComponentRegistry
from routeforge.codegen.types import TypeRenderer
from routeforge.config import CodegenConfig, DocumentConfig, RouteConfig, get_config
from routeforge.exceptions import (
    ArgumentNameConflictError,
    ConfigurationError,
    RouteForgeError,
    RouteGenerationError,
    SchemaError,
    SchemaLoadError,
    SchemaReferenceError,
    TemplateRenderError,
)

__all__ = [
    # Main classes
    'Codegen',
    'ComponentRegistry',
    'RouteHooks',
    'SchemaLoader',
    'SchemaResolver',
    'TypeRenderer',
    # Configuration
    'CodegenConfig',
    'DocumentConfig',
    'RouteConfig',
    'get_config',
    # Exceptions
    'RouteForgeError',
    'SchemaError',
    'SchemaLoadError',
    'SchemaReferenceError',
    'ConfigurationError',
    'TemplateRenderError',
    'RouteGenerationError',
    'ArgumentNameConflictError',
]

try:
    __version__ = _package_version('routeforge')
except PackageNotFoundError:
    __version__ = 'unknown'
