"""Route IR dataclasses.

This module provides the records that make up the per-operation
intermediate representation consumed by the rendering stage:

- Raw input wrappers (RawOperation, the ParameterSource variants)
- Classified parameters (PathParameter, RouteParameter, RouteParams)
- Request/response descriptors (RequestBodyInfo, ResponseInfo, ResponseBodyInfo)
- Naming records (RouteName, SpecificArg, SpecificArgs)
- The final Route and the RouteCollection produced for a document
"""

from __future__ import annotations

import enum
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any

__all__ = [
    'PARAMETER_LOCATIONS',
    'Component',
    'ComponentCategory',
    'ContentKind',
    'ErrorResponses',
    'ExplicitParameter',
    'FullResponses',
    'GroupedRoutes',
    'ModuleRoutes',
    'ParameterSourceKind',
    'ParsedRoute',
    'ParsedSchema',
    'PathArg',
    'PathParameter',
    'RawOperation',
    'RawRouteInfo',
    'ReferencedParameter',
    'RequestBodyInfo',
    'ResponseBodyInfo',
    'ResponseInfo',
    'Route',
    'RouteCollection',
    'RouteName',
    'RouteParameter',
    'RouteParams',
    'RouteRequest',
    'RouteResponse',
    'SpecificArg',
    'SpecificArgs',
    'SuccessResponse',
    'SynthesizedParameter',
]

PARAMETER_LOCATIONS = ('path', 'header', 'body', 'query', 'formData', 'cookie')


class ContentKind(str, enum.Enum):
    """Coarse classification of a set of media types."""

    JSON = 'JSON'
    URL_ENCODED = 'URL_ENCODED'
    FORM_DATA = 'FORM_DATA'
    IMAGE = 'IMAGE'
    OTHER = 'OTHER'


class ComponentCategory(str, enum.Enum):
    """The ``components`` section a ``$ref`` points into."""

    SCHEMAS = 'schemas'
    RESPONSES = 'responses'
    REQUEST_BODIES = 'requestBodies'
    OTHER = 'other'

    @classmethod
    def from_section(cls, section: str | None) -> ComponentCategory:
        for category in cls:
            if category.value == section:
                return category
        return cls.OTHER


class ParameterSourceKind(str, enum.Enum):
    EXPLICIT = 'explicit'
    REFERENCED = 'referenced'
    SYNTHESIZED = 'synthesized'


@dataclass(frozen=True)
class RawOperation:
    """One HTTP-method entry under one path of the source document.

    Attributes:
        path: The literal path template, e.g. '/users/{id}'.
        method: Lower-case HTTP method.
        parameters: Path-item shared parameters followed by the operation's own.
        data: The untouched operation mapping.
    """

    path: str
    method: str
    parameters: tuple[Any, ...]
    data: Mapping[str, Any]

    @property
    def operation_id(self) -> str | None:
        return self.data.get('operationId')

    @property
    def request_body(self) -> Any:
        return self.data.get('requestBody')

    @property
    def responses(self) -> Mapping[str, Any]:
        return self.data.get('responses') or {}

    @property
    def tags(self) -> list[str]:
        return list(self.data.get('tags') or [])

    @property
    def security(self) -> list | None:
        return self.data.get('security')

    @property
    def extensions(self) -> dict[str, Any]:
        return {k: v for k, v in self.data.items() if k.startswith('x-')}


@dataclass
class PathParameter:
    """A path parameter found in the path template itself."""

    match: str
    name: str
    required: bool = True
    type: str = 'string'
    description: str = ''
    location: str = 'path'

    @property
    def schema(self) -> dict[str, Any]:
        return {'type': self.type}


@dataclass
class ParsedRoute:
    original_route: str
    route: str
    path_params: list[PathParameter] = field(default_factory=list)


@dataclass
class RouteParameter:
    """A parameter after reference resolution and schema flattening.

    Attributes:
        name: Parameter name; path parameters carry the normalized name.
        location: The bucket this parameter belongs to ('query', 'path', ...).
        required: Whether the parameter must be supplied.
        schema: The parameter's own schema (possibly empty).
        description: Parameter description.
        fields: The parameter merged with its schema, schema keys winning.
        source: Where the parameter came from.
    """

    name: str
    location: str
    required: bool
    schema: dict[str, Any]
    description: str
    fields: dict[str, Any]
    source: ParameterSourceKind

    def as_property(self) -> dict[str, Any]:
        """Return this parameter as an object-schema property."""
        return {**self.fields, **self.schema}


def _merge_fields(parameter: Mapping[str, Any]) -> dict[str, Any]:
    schema = parameter.get('schema')
    return {**parameter, **(schema if isinstance(schema, Mapping) else {})}


def _route_parameter(
    fields: dict[str, Any], source: ParameterSourceKind
) -> RouteParameter | None:
    location = fields.get('in')
    name = fields.get('name')
    if not location or not name:
        return None
    schema = fields.get('schema')
    return RouteParameter(
        name=name,
        location=location,
        required=bool(fields.get('required', False)),
        schema=dict(schema) if isinstance(schema, Mapping) else {},
        description=fields.get('description') or '',
        fields=fields,
        source=source,
    )


@dataclass(frozen=True)
class ExplicitParameter:
    """A parameter declared inline in the document."""

    data: Mapping[str, Any]

    def merge(self) -> RouteParameter | None:
        return _route_parameter(_merge_fields(self.data), ParameterSourceKind.EXPLICIT)


@dataclass(frozen=True)
class ReferencedParameter:
    """A parameter declared through a ``$ref``, already dereferenced."""

    ref: str
    data: Mapping[str, Any]

    def merge(self) -> RouteParameter | None:
        return _route_parameter(
            _merge_fields(self.data), ParameterSourceKind.REFERENCED
        )


@dataclass(frozen=True)
class SynthesizedParameter:
    """A parameter created from a path template token."""

    token: PathParameter

    def merge(self) -> RouteParameter:
        schema = self.token.schema
        fields = {
            'name': self.token.name,
            'in': self.token.location,
            'required': self.token.required,
            'type': self.token.type,
            'description': self.token.description,
            'schema': schema,
        }
        return RouteParameter(
            name=self.token.name,
            location=self.token.location,
            required=self.token.required,
            schema=dict(schema),
            description=self.token.description,
            fields=fields,
            source=ParameterSourceKind.SYNTHESIZED,
        )


class RouteParams:
    """Parameters of one operation bucketed by location.

    The six standard buckets always exist; any other ``in`` value gets its own
    bucket the first time it is seen.
    """

    def __init__(self):
        self._buckets: dict[str, list[RouteParameter]] = {
            location: [] for location in PARAMETER_LOCATIONS
        }

    def bucket(self, location: str) -> list[RouteParameter]:
        return self._buckets.setdefault(location, [])

    def add(self, parameter: RouteParameter) -> None:
        self.bucket(parameter.location).append(parameter)

    @property
    def path(self) -> list[RouteParameter]:
        return self._buckets['path']

    @property
    def header(self) -> list[RouteParameter]:
        return self._buckets['header']

    @property
    def body(self) -> list[RouteParameter]:
        return self._buckets['body']

    @property
    def query(self) -> list[RouteParameter]:
        return self._buckets['query']

    @property
    def form_data(self) -> list[RouteParameter]:
        return self._buckets['formData']

    @property
    def cookie(self) -> list[RouteParameter]:
        return self._buckets['cookie']

    def locations(self) -> list[str]:
        return list(self._buckets)

    def as_dict(self) -> dict[str, list[RouteParameter]]:
        return {k: list(v) for k, v in self._buckets.items()}

    def __iter__(self) -> Iterator[RouteParameter]:
        for parameters in self._buckets.values():
            yield from parameters

    def __repr__(self) -> str:
        counts = ', '.join(f'{k}={len(v)}' for k, v in self._buckets.items() if v)
        return f'RouteParams({counts})'


@dataclass
class ParsedSchema:
    """A named document schema together with its rendered type expression."""

    name: str
    content: str
    schema: dict[str, Any] = field(default_factory=dict)


@dataclass
class Component:
    """A named, registry-owned schema created while building routes."""

    type_name: str
    category: str
    ref: str
    raw_type_data: dict[str, Any]

    @property
    def reference(self) -> dict[str, str]:
        return {'$ref': self.ref}


@dataclass
class PathArg:
    name: str
    optional: bool
    type: str
    description: str = ''


@dataclass
class RequestBodyInfo:
    param_name: str
    content_types: list[str]
    content_kind: ContentKind
    schema: dict[str, Any] | None = None
    type: str | None = None
    required: bool = False
    component: Component | None = None


@dataclass
class ResponseInfo:
    """One declared response, keyed by its status.

    Attributes:
        status: Numeric status, or the literal token ('default', '2xx').
        schema: The first content schema of the response, if any.
        is_reference: Whether the response itself was declared via ``$ref``.
    """

    status: int | str
    content_types: list[str]
    content_kind: ContentKind
    type: str
    description: str
    is_success: bool
    headers: dict[str, Any] = field(default_factory=dict)
    schema: dict[str, Any] | None = None
    is_reference: bool = False
    component: Component | None = None


@dataclass
class SuccessResponse:
    schema: ResponseInfo | None
    type: str


@dataclass
class ErrorResponses:
    responses: list[ResponseInfo]
    schemas: list[dict[str, Any]]
    type: str
    component: Component | None = None


@dataclass
class FullResponses:
    types: str


@dataclass
class ResponseBodyInfo:
    content_types: list[str]
    responses: list[ResponseInfo]
    success: SuccessResponse
    error: ErrorResponses
    full: FullResponses


@dataclass
class RouteName:
    """Name of a route.

    Attributes:
        original: The name produced by the route name template (or hook).
        usage: The collision-free name used when emitting code.
        duplicate: Whether a numeric suffix was needed.
    """

    original: str
    usage: str
    duplicate: bool = False


@dataclass
class SpecificArg:
    name: str
    optional: bool
    type: str


@dataclass
class SpecificArgs:
    query: SpecificArg | None = None
    body: SpecificArg | None = None
    path_params: SpecificArg | None = None
    headers: SpecificArg | None = None


@dataclass
class RawRouteInfo:
    """Passthrough operation metadata, used as the route name template context."""

    operation_id: str | None
    method: str
    route: str
    module_name: str
    path_args: list[PathArg] = field(default_factory=list)
    responses_types: list[ResponseInfo] = field(default_factory=list)
    description: str | None = None
    tags: list[str] = field(default_factory=list)
    summary: str | None = None
    responses: dict[str, Any] = field(default_factory=dict)
    produces: list[str] | None = None
    consumes: list[str] | None = None
    request_body: Any = None
    extensions: dict[str, Any] = field(default_factory=dict)


@dataclass
class RouteRequest:
    content_types: list[str]
    parameters: list[PathArg]
    path: str
    form_data: bool
    is_query_body: bool
    security: bool
    method: str
    request_params: dict[str, Any] | None = None
    payload: SpecificArg | None = None
    query: SpecificArg | None = None
    path_params: SpecificArg | None = None
    headers: SpecificArg | None = None


@dataclass
class RouteResponse:
    content_types: list[str]
    type: str
    error_type: str
    full_types: str


@dataclass
class Route:
    """The fully resolved descriptor of one operation."""

    id: str
    namespace: str
    route_name: RouteName
    route_params: RouteParams
    request_body_info: RequestBodyInfo
    response_body_info: ResponseBodyInfo
    specific_args: SpecificArgs
    query_object_schema: dict[str, Any]
    path_object_schema: dict[str, Any]
    headers_object_schema: dict[str, Any]
    request: RouteRequest
    response: RouteResponse
    raw: RawRouteInfo

    @property
    def security(self) -> bool:
        return self.request.security

    @property
    def method(self) -> str:
        return self.request.method

    @property
    def path(self) -> str:
        return self.request.path

    @property
    def has_query(self) -> bool:
        return self.request.query is not None

    @property
    def has_form_data(self) -> bool:
        return self.request.form_data


@dataclass
class ModuleRoutes:
    module_name: str
    routes: list[Route] = field(default_factory=list)


@dataclass
class GroupedRoutes:
    """Routes partitioned by namespace, in first-seen module order."""

    out_of_module: list[Route] = field(default_factory=list)
    combined: list[ModuleRoutes] = field(default_factory=list)

    def get_module(self, module_name: str) -> ModuleRoutes | None:
        for module in self.combined:
            if module.module_name == module_name:
                return module
        return None


@dataclass
class RouteCollection:
    """Everything produced for one document run."""

    routes: list[Route]
    grouped: GroupedRoutes
    components: list[Component] = field(default_factory=list)

    @property
    def has_security_routes(self) -> bool:
        return any(route.security for route in self.routes)

    @property
    def has_query_routes(self) -> bool:
        return any(route.has_query for route in self.routes)

    @property
    def has_form_data_routes(self) -> bool:
        return any(route.has_form_data for route in self.routes)
