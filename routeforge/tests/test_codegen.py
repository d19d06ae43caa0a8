"""Test end-to-end route IR generation."""

import json
import logging

import pytest
import yaml

from routeforge.codegen.codegen import Codegen, serialize_collection
from routeforge.codegen.hooks import RouteHooks
from routeforge.config import DocumentConfig, RouteConfig
from routeforge.exceptions import RouteGenerationError, SchemaLoadError

from .fixtures import (
    DUPLICATE_NAMES_SPEC,
    ITEMS_SPEC,
    MINIMAL_OPENAPI_SPEC,
    PETSTORE_SPEC,
    REFERENCES_SPEC,
    SWAGGER2_SPEC,
)


def _codegen(hooks=None, **routes) -> Codegen:
    return Codegen(DocumentConfig(source='memory.json', routes=RouteConfig(**routes)), hooks)


class TestCollectOperations:
    """Tests for Codegen.collect_operations."""

    def test_key_order_and_shared_parameters(self):
        """Test that only method keys become operations, in key order."""
        shared = {'name': 'id', 'in': 'path', 'required': True}
        own = {'name': 'q', 'in': 'query'}
        path_item = {
            'summary': 'Item',
            'post': {'responses': {}},
            'parameters': [shared, None],
            'x-internal': True,
            'get': {'parameters': [own], 'responses': {}},
        }

        operations = Codegen.collect_operations('/items/{id}', path_item)

        assert [op.method for op in operations] == ['post', 'get']
        assert operations[0].parameters == (shared,)
        assert operations[1].parameters == (shared, own)

    def test_non_mapping_operation(self, caplog):
        """Test that malformed operations are skipped with a warning."""
        with caplog.at_level(logging.WARNING):
            operations = Codegen.collect_operations('/x', {'get': None, 'put': {}})

        assert [op.method for op in operations] == ['put']
        assert 'Skipping GET /x' in caplog.text


class TestGenerate:
    """Tests for Codegen.generate."""

    def test_petstore(self):
        """Test routes, grouping and flags of a whole document."""
        collection = _codegen().generate(PETSTORE_SPEC)

        assert [r.route_name.usage for r in collection.routes] == [
            'list_pets',
            'create_pet',
            'show_pet_by_id',
            'delete_pet',
        ]
        assert collection.grouped.out_of_module == []
        assert [m.module_name for m in collection.grouped.combined] == ['pets']
        assert collection.grouped.combined[0].routes == collection.routes
        assert collection.components == []
        assert collection.has_query_routes is True
        assert collection.has_security_routes is False
        assert collection.has_form_data_routes is False

    def test_flags(self):
        """Test the collection level flags."""
        assert _codegen().generate(REFERENCES_SPEC).has_security_routes is True
        assert _codegen().generate(SWAGGER2_SPEC).has_form_data_routes is True

    def test_route_ids_are_unique(self):
        """Test that each route gets its own id."""
        routes = _codegen().generate(PETSTORE_SPEC).routes

        assert len({route.id for route in routes}) == len(routes)

    def test_duplicate_names(self, caplog):
        """Test suffixing within a module and independence across modules."""
        with caplog.at_level(logging.WARNING):
            collection = _codegen().generate(DUPLICATE_NAMES_SPEC)

        assert [r.route_name.usage for r in collection.routes] == [
            'get_user',
            'get_user2',
            'get_user',
        ]
        assert [m.module_name for m in collection.grouped.combined] == ['users', 'accounts']
        assert caplog.text.count('already has method "get_user()"') == 1

    def test_runs_are_independent(self):
        """Test that name counters do not leak between runs."""
        codegen = _codegen()
        codegen.generate(DUPLICATE_NAMES_SPEC)

        collection = codegen.generate(DUPLICATE_NAMES_SPEC)

        assert collection.routes[1].route_name.usage == 'get_user2'
        assert codegen.session.route_name_counts == {'users|get_user': 2, 'accounts|get_user': 1}

    def test_renamed_route_is_restored_after_move(self):
        """Test that a hook moving a route out of a module drops its needless suffix."""

        class MoveHook(RouteHooks):
            def on_create_route(self, route):
                if route.path.startswith('/users/by-name'):
                    route.namespace = 'accounts'
                return route

        collection = _codegen(hooks=MoveHook()).generate(
            {
                'openapi': '3.0.0',
                'paths': {
                    '/users/{id}': DUPLICATE_NAMES_SPEC['paths']['/users/{id}'],
                    '/users/by-name/{name}': DUPLICATE_NAMES_SPEC['paths']['/users/by-name/{name}'],
                    '/accounts': {
                        'get': {'operationId': 'listAccounts', 'responses': {}},
                    },
                },
            }
        )

        accounts = collection.grouped.get_module('accounts')
        assert [r.route_name.usage for r in accounts.routes] == ['get_user', 'list_accounts']
        assert accounts.routes[0].route_name.duplicate is True

    def test_extraction(self):
        """Test that hoisted components are collected."""
        collection = _codegen(
            extract_response_body=True, extract_response_error=True
        ).generate(ITEMS_SPEC)

        get_item = collection.routes[2]
        assert get_item.response_body_info.error.schemas == [
            {'$ref': '#/components/schemas/GetItemError'}
        ]
        assert get_item.response.error_type == 'GetItemError'
        assert [c.type_name for c in collection.components] == [
            'ListItemsData',
            'CreateItemData',
            'GetItemData',
            'GetItemError',
        ]

    def test_without_extraction(self):
        """Test that error types stay as declared by default."""
        collection = _codegen().generate(ITEMS_SPEC)

        assert collection.routes[2].response.error_type == 'NotFound'
        assert collection.components == []

    def test_malformed_document(self):
        """Test that a non-mapping document is rejected."""
        with pytest.raises(SchemaLoadError):
            _codegen().generate(['not', 'a', 'document'])

    def test_malformed_path_item(self, caplog):
        """Test that malformed path items are skipped."""
        document = {**PETSTORE_SPEC, 'paths': {'/broken': 'oops', **PETSTORE_SPEC['paths']}}

        with caplog.at_level(logging.WARNING):
            collection = _codegen().generate(document)

        assert len(collection.routes) == 4
        assert 'Skipping path /broken' in caplog.text

    def test_no_paths(self):
        """Test a document without operations."""
        collection = _codegen().generate(MINIMAL_OPENAPI_SPEC)

        assert collection.routes == []
        assert collection.grouped.combined == []

    def test_route_hook(self):
        """Test that on_create_route can replace routes."""

        class Hooks(RouteHooks):
            def on_create_route(self, route):
                route.route_name.usage = route.route_name.usage.upper()
                return None

        collection = _codegen(hooks=Hooks()).generate(PETSTORE_SPEC)

        assert collection.routes[0].route_name.usage == 'LIST_PETS'

    def test_generation_error_propagates(self):
        """Test that argument conflicts abort the run."""
        path = '/h/{headers}/{headers_params}'
        document = {
            'paths': {
                path: {
                    'get': {
                        'parameters': [{'name': 'X-A', 'in': 'header'}],
                        'responses': {},
                    }
                }
            }
        }

        with pytest.raises(RouteGenerationError):
            _codegen().generate(document)

    def test_load_from_file(self, tmp_path):
        """Test generating from the configured source file."""
        source = tmp_path / 'openapi.yaml'
        source.write_text(yaml.safe_dump(PETSTORE_SPEC))

        collection = Codegen(DocumentConfig(source=str(source))).generate()

        assert len(collection.routes) == 4


class TestWrite:
    """Tests for Codegen.write and serialize_collection."""

    def test_serialize(self):
        """Test the JSON-compatible form of a collection."""
        collection = _codegen().generate(PETSTORE_SPEC)

        data = serialize_collection(collection)

        assert [r['route_name']['usage'] for r in data['routes']] == [
            'list_pets',
            'create_pet',
            'show_pet_by_id',
            'delete_pet',
        ]
        first = data['routes'][0]
        assert [p['name'] for p in first['route_params']['query']] == ['limit']
        assert first['request_body_info']['content_kind'] == 'JSON'
        assert data['modules']['combined'] == [
            {'module_name': 'pets', 'routes': [r.id for r in collection.routes]}
        ]
        assert data['modules']['out_of_module'] == []
        assert data['has_query_routes'] is True

    def test_write(self, tmp_path):
        """Test writing the route IR to a directory."""
        codegen = Codegen(
            DocumentConfig(source='memory.json', output=str(tmp_path / 'out'), routes_file='ir.json')
        )
        collection = codegen.generate(PETSTORE_SPEC)

        path = codegen.write(collection)

        assert path.name == 'ir.json'
        data = json.loads((tmp_path / 'out' / 'ir.json').read_text())
        assert len(data['routes']) == 4

    def test_write_to_explicit_directory(self, tmp_path):
        """Test that an explicit directory wins over the configured output."""
        codegen = _codegen()

        codegen.write(codegen.generate(MINIMAL_OPENAPI_SPEC), str(tmp_path))

        assert json.loads((tmp_path / 'routes.json').read_text())['routes'] == []
