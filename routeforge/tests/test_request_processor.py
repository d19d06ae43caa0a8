"""Test request body processing."""

from routeforge.codegen.models import ContentKind, RawOperation, RouteParams
from routeforge.codegen.processors.body_processor import BodyTypeResolver
from routeforge.codegen.processors.parameter_processor import ParameterProcessor
from routeforge.codegen.processors.request_processor import RequestBodyProcessor
from routeforge.codegen.schema_resolver import SchemaResolver
from routeforge.codegen.types import TypeRenderer

from .fixtures import PETSTORE_SPEC, REFERENCES_SPEC, SWAGGER2_SPEC


def _build(document, operation_data, path='/x'):
    resolver = SchemaResolver(document)
    renderer = TypeRenderer(resolver)
    body_resolver = BodyTypeResolver(
        resolver, renderer, renderer.parse_schemas(resolver.get_all_schemas())
    )
    operation = RawOperation(
        path=path,
        method='post',
        parameters=tuple(operation_data.get('parameters') or ()),
        data=operation_data,
    )
    route_params = ParameterProcessor(resolver).classify(operation.parameters)
    processor = RequestBodyProcessor(resolver, renderer, body_resolver)
    return processor.build(operation, route_params)


def _multipart(schema):
    return {'requestBody': {'content': {'multipart/form-data': {'schema': schema}}}}


class TestRequestBodyProcessor:
    """Tests for RequestBodyProcessor.build."""

    def test_json_body(self):
        """Test a referenced JSON body."""
        info = _build(PETSTORE_SPEC, PETSTORE_SPEC['paths']['/pets']['post'])

        assert info.type == 'NewPet'
        assert info.schema == {'$ref': '#/components/schemas/NewPet'}
        assert info.content_types == ['application/json']
        assert info.content_kind is ContentKind.JSON
        assert info.param_name == 'data'
        assert info.required is True

    def test_no_body(self):
        """Test an operation without a request body."""
        info = _build({}, {'responses': {}})

        assert info.type is None
        assert info.schema is None
        assert info.required is False
        assert info.param_name == 'data'
        assert info.content_kind is ContentKind.OTHER

    def test_form_data_parameters(self):
        """Test Swagger 2.0 formData parameters."""
        operation = SWAGGER2_SPEC['paths']['/upload/{fileId}']['post']
        info = _build(SWAGGER2_SPEC, operation)

        assert info.content_kind is ContentKind.FORM_DATA
        assert info.type == "{'file': bytes, 'note': NotRequired[str]}"
        assert list(info.schema['properties']) == ['file', 'note']
        assert info.content_types == ['multipart/form-data']

    def test_multipart_body(self):
        """Test a multipart request body."""
        schema = {
            'type': 'object',
            'properties': {'avatar': {'type': 'string', 'format': 'binary'}},
        }
        info = _build({}, _multipart(schema))

        assert info.content_kind is ContentKind.FORM_DATA
        assert info.schema == schema
        assert info.type == "{'avatar': NotRequired[bytes]}"

    def test_binary_field_forces_form_data(self):
        """Test that a JSON body with a binary field is sent as form data."""
        operation = {
            'requestBody': {
                'content': {
                    'application/json': {
                        'schema': {
                            'type': 'object',
                            'required': ['avatar'],
                            'properties': {'avatar': {'type': 'string', 'format': 'binary'}},
                        }
                    }
                }
            }
        }
        info = _build({}, operation)

        assert info.type == "{'avatar': bytes}"
        assert info.content_kind is ContentKind.FORM_DATA

    def test_url_encoded_from_extension(self):
        """Test that x-contentType contributes to the content kind."""
        operation = {
            'x-contentType': 'application/x-www-form-urlencoded',
            'requestBody': {'content': {'text/plain': {'schema': {'type': 'string'}}}},
        }
        info = _build({}, operation)

        assert info.content_types == ['application/x-www-form-urlencoded', 'text/plain']
        assert info.content_kind is ContentKind.URL_ENCODED
        assert info.type == 'str'

    def test_referenced_optional_body(self):
        """Test a body declared in components with required: false."""
        operation = REFERENCES_SPEC['paths']['/orders/{orderId}']['put']
        info = _build(REFERENCES_SPEC, operation, path='/orders/{orderId}')

        assert info.type == 'Order'
        assert info.schema == {'$ref': '#/components/schemas/Order'}
        assert info.required is False
        assert info.content_types == ['application/json']

    def test_nullable_body(self):
        """Test x-nullable on the request body."""
        operation = {
            'requestBody': {
                'x-nullable': True,
                'content': {
                    'application/json': {'schema': {'$ref': '#/components/schemas/Pet'}}
                },
            }
        }
        info = _build(PETSTORE_SPEC, operation)

        assert info.type == 'Pet | None'

    def test_swagger2_body_parameter(self):
        """Test a Swagger 2.0 body declared as an in: body parameter."""
        document = {**SWAGGER2_SPEC, 'definitions': {'Pet': {'type': 'object'}}}
        operation = {
            'consumes': ['application/json'],
            'parameters': [
                {
                    'name': 'pet',
                    'in': 'body',
                    'required': True,
                    'schema': {'$ref': '#/definitions/Pet'},
                }
            ],
        }
        info = _build(document, operation)

        assert info.type == 'Pet'
        assert info.schema == {'$ref': '#/definitions/Pet'}
        assert info.param_name == 'pet'
        assert info.required is True
        assert info.content_kind is ContentKind.JSON

    def test_swagger2_body_parameter_without_consumes(self):
        """Test that a body parameter without consumes defaults to JSON."""
        operation = {
            'parameters': [
                {'name': 'tags', 'in': 'body', 'schema': {'type': 'array', 'items': {'type': 'string'}}}
            ],
        }
        info = _build({}, operation)

        assert info.type == 'list[str]'
        assert info.content_types == ['application/json']
        assert info.content_kind is ContentKind.JSON
        assert info.required is False


class TestParamName:
    """Tests for the body argument name."""

    def test_request_body_name(self):
        """Test that requestBodyName wins."""
        operation = {
            'requestBodyName': 'pet',
            'x-codegen-request-body-name': 'other',
            'requestBody': {'content': {'application/json': {'schema': {'type': 'string'}}}},
        }

        assert _build({}, operation).param_name == 'pet'

    def test_codegen_extension(self):
        """Test the x-codegen-request-body-name extension."""
        operation = {
            'x-codegen-request-body-name': 'payload',
            'requestBody': {'content': {'application/json': {'schema': {'type': 'string'}}}},
        }

        assert _build({}, operation).param_name == 'payload'

    def test_body_name(self):
        """Test the name declared on the body itself."""
        operation = {
            'requestBody': {
                'name': 'order',
                'content': {'application/json': {'schema': {'type': 'string'}}},
            }
        }

        assert _build({}, operation).param_name == 'order'


class TestRouteParamsDefaults:
    """Tests for RouteParams buckets used by the processor."""

    def test_standard_buckets(self):
        """Test that the six standard buckets always exist."""
        params = RouteParams()

        assert params.locations() == ['path', 'header', 'body', 'query', 'formData', 'cookie']
        assert list(params) == []
