"""Route IR generation for OpenAPI documents.

This module provides the main Codegen class that walks a document's paths,
assembles one Route per operation and groups the routes into modules.
"""

import dataclasses
import datetime
import enum
import json
import logging
from collections.abc import Mapping
from typing import Any

from upath import UPath

from routeforge.codegen.builders import RouteFactory
from routeforge.codegen.hooks import RouteHooks
from routeforge.codegen.models import RawOperation, RouteCollection, RouteParams
from routeforge.codegen.schema_loader import SchemaLoader, load_document
from routeforge.codegen.session import GenerationSession
from routeforge.codegen.splitting import group_routes
from routeforge.config import DocumentConfig

logger = logging.getLogger(__name__)

__all__ = ['HTTP_METHODS', 'Codegen', 'serialize_collection']

HTTP_METHODS = ('get', 'put', 'post', 'delete', 'options', 'head', 'patch', 'trace')


def _encode(value: Any) -> Any:
    if isinstance(value, RouteParams):
        return {
            location: [dataclasses.asdict(p) for p in params]
            for location, params in value.as_dict().items()
        }
    if isinstance(value, (datetime.date, datetime.datetime)):
        return value.isoformat()
    if isinstance(value, enum.Enum):
        return value.value
    raise TypeError(f'Object of type {type(value).__name__} is not JSON serializable')


def serialize_collection(collection: RouteCollection) -> dict[str, Any]:
    """Convert a RouteCollection into plain JSON-compatible data.

    The grouped view references routes by id so every route appears once.
    """
    grouped = collection.grouped
    data = {
        'routes': [dataclasses.asdict(route) for route in collection.routes],
        'modules': {
            'out_of_module': [route.id for route in grouped.out_of_module],
            'combined': [
                {
                    'module_name': module.module_name,
                    'routes': [route.id for route in module.routes],
                }
                for module in grouped.combined
            ],
        },
        'components': [dataclasses.asdict(c) for c in collection.components],
        'has_security_routes': collection.has_security_routes,
        'has_query_routes': collection.has_query_routes,
        'has_form_data_routes': collection.has_form_data_routes,
    }
    # Round trip through the encoder to flatten RouteParams and enums
    return json.loads(json.dumps(data, default=_encode))


class Codegen:
    """Builds the route IR of one API document.

    Each call to generate() creates a fresh GenerationSession, so name
    counters and components never leak between runs.

    Attributes:
        config: The DocumentConfig with the source and route options.
        hooks: Consumer extension points applied while building routes.
        session: The session of the most recent run, if any.

    Example:
        >>> from routeforge.config import DocumentConfig
        >>> from routeforge.codegen.codegen import Codegen
        >>>
        >>> codegen = Codegen(DocumentConfig(source='./openapi.yaml', output='./out'))
        >>> collection = codegen.generate()
        >>> codegen.write(collection)
        UPath('out/routes.json')
    """

    def __init__(
        self,
        config: DocumentConfig,
        hooks: RouteHooks | None = None,
        schema_loader: SchemaLoader | None = None,
    ):
        """Initialize the generator.

        Args:
            config: Configuration specifying the source document and options.
            hooks: Optional route hooks. Defaults to the no-op RouteHooks.
            schema_loader: Optional custom document loader.
        """
        self.config = config
        self.hooks = hooks or RouteHooks()
        self.session: GenerationSession | None = None
        self._schema_loader = schema_loader or SchemaLoader()

    def load(self) -> dict[str, Any]:
        """Load the configured source document.

        Raises:
            SchemaLoadError: If the document cannot be loaded.
        """
        return self._schema_loader.load(self.config.source)

    @staticmethod
    def collect_operations(path: str, path_item: Mapping[str, Any]) -> list[RawOperation]:
        """List the operations of one path item in key order.

        Only the HTTP method keys are operations; path-item level
        ``parameters`` are prepended to each operation's own.
        """
        shared = path_item.get('parameters') or []
        operations = []
        for key, operation in path_item.items():
            if key not in HTTP_METHODS:
                continue
            if not isinstance(operation, Mapping):
                logger.warning(f'Skipping {key.upper()} {path}: operation is not an object')
                continue
            parameters = [*shared, *(operation.get('parameters') or [])]
            operations.append(
                RawOperation(
                    path=path,
                    method=key,
                    parameters=tuple(p for p in parameters if p is not None),
                    data=operation,
                )
            )
        return operations

    def generate(self, document: Mapping[str, Any] | None = None) -> RouteCollection:
        """Build the routes of a document.

        Args:
            document: An in-memory document. When omitted the configured
                source is loaded.

        Returns:
            The ordered routes, their module grouping and the created components.

        Raises:
            SchemaLoadError: If the document cannot be loaded.
            RouteGenerationError: If a route cannot be assembled.
        """
        if document is None:
            document = self.load()
        else:
            document = load_document(document)

        session = GenerationSession.create(document, self.config.routes, self.hooks)
        session.reset()
        self.session = session
        factory = RouteFactory(session)

        routes = []
        for path, path_item in (document.get('paths') or {}).items():
            if not isinstance(path_item, Mapping):
                logger.warning(f'Skipping path {path}: path item is not an object')
                continue
            for operation in self.collect_operations(path, path_item):
                route = factory.build(operation)
                route = self.hooks.on_create_route(route) or route
                routes.append(route)

        logger.info(f'Built {len(routes)} routes from {self.config.source}')
        return RouteCollection(
            routes=routes,
            grouped=group_routes(routes),
            components=list(session.registry),
        )

    def write(self, collection: RouteCollection, directory: str | None = None) -> UPath:
        """Write the serialized route IR as JSON.

        Args:
            collection: The result of generate().
            directory: Output directory. Defaults to the configured output,
                else the current directory.

        Returns:
            The path of the written file.
        """
        directory = UPath(directory or self.config.output or '.')
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / self.config.routes_file
        path.write_text(
            json.dumps(serialize_collection(collection), indent=2), encoding='utf-8'
        )
        logger.info(f'Wrote route IR to {path}')
        return path
