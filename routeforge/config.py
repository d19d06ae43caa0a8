import os
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings

from routeforge.exceptions import ConfigurationError

DEFAULT_FILENAMES = ['routeforge.yaml', 'routeforge.yml']


class RouteConfig(BaseModel):
    """Options that shape the route IR built for a document."""

    default_response_as_success: bool = Field(
        False, description='Treat the "default" response as a success response.'
    )

    success_response_status_range: tuple[int, int] = Field(
        (200, 299),
        description='Inclusive range of status codes classified as success.',
    )

    default_response_type: str = Field(
        'Any', description='Type used for responses that declare no schema.'
    )

    extract_request_params: bool = Field(
        False, description='Hoist query and path parameters into a named component.'
    )

    extract_request_body: bool = Field(
        False, description='Hoist inline request body schemas into named components.'
    )

    extract_response_body: bool = Field(
        False, description='Hoist inline success response schemas into named components.'
    )

    extract_response_error: bool = Field(
        False, description='Hoist error response schemas into one named component.'
    )

    module_name_index: int = Field(
        0, description='Index of the path segment used as the module name.'
    )

    module_name_first_tag: bool = Field(
        False, description='Use the first operation tag as the module name.'
    )

    route_name_template: str | None = Field(
        None,
        description='Optional Jinja2 source replacing the built-in route name template.',
    )

    @field_validator('success_response_status_range')
    @classmethod
    def _check_range(cls, value: tuple[int, int]) -> tuple[int, int]:
        low, high = value
        if low > high:
            raise ValueError(f'invalid success status range: {low} > {high}')
        return value


class DocumentConfig(BaseModel):
    """Represents a single document to be processed."""

    source: str = Field(..., description='Path to the OpenAPI document.')

    output: str | None = Field(
        None, description='Optional output directory for the serialized route IR.'
    )

    routes_file: str = Field(
        'routes.json', description='File name for the serialized route IR.'
    )

    routes: RouteConfig = Field(
        default_factory=RouteConfig, description='Route building options.'
    )


class CodegenConfig(BaseSettings):
    documents: list[DocumentConfig] = Field(
        ..., description='List of OpenAPI documents to process.'
    )


def load_yaml(path: str | Path) -> dict:
    import yaml

    return yaml.safe_load(Path(path).read_text())


def load_json(path: str | Path) -> dict:
    import json

    return json.loads(Path(path).read_text())


def _validate(data: dict, source: str | Path) -> CodegenConfig:
    try:
        return CodegenConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(
            f'Invalid configuration ({e.error_count()} errors)', str(source)
        ) from e


def get_config(path: str | None = None) -> CodegenConfig:
    """Load configuration from a file or return default config."""
    if path:
        if Path(path).suffix.lower() == '.json':
            return _validate(load_json(path), path)
        return _validate(load_yaml(path), path)

    cwd = os.getcwd()

    for filename in DEFAULT_FILENAMES:
        path = Path(cwd) / filename
        if path.exists():
            return _validate(load_yaml(path), path)

    path = Path(os.getcwd()) / 'pyproject.toml'

    if path.exists():
        import tomllib

        pyproject = tomllib.loads(path.read_text())
        tools = pyproject.get('tool', {})

        if 'routeforge' in tools:
            return _validate(tools['routeforge'], path)

    raise FileNotFoundError('config not found')
