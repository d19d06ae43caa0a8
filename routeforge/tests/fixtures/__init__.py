"""Test fixtures for routeforge tests.

This module provides sample API documents used across the test suite.
"""

# Minimal OpenAPI 3.0 document without operations
MINIMAL_OPENAPI_SPEC = {
    'openapi': '3.0.0',
    'info': {'title': 'Minimal API', 'version': '1.0.0'},
    'paths': {},
}

PET_SCHEMA = {
    'type': 'object',
    'required': ['id', 'name'],
    'properties': {
        'id': {'type': 'integer', 'format': 'int64'},
        'name': {'type': 'string'},
        'tag': {'type': 'string'},
    },
}

ERROR_SCHEMA = {
    'type': 'object',
    'required': ['code', 'message'],
    'properties': {
        'code': {'type': 'integer'},
        'message': {'type': 'string'},
    },
}

# Petstore-like API with components and several operations
PETSTORE_SPEC = {
    'openapi': '3.0.0',
    'info': {'title': 'Petstore API', 'version': '1.0.0'},
    'paths': {
        '/pets': {
            'get': {
                'operationId': 'listPets',
                'summary': 'List all pets',
                'tags': ['pets'],
                'parameters': [
                    {
                        'name': 'limit',
                        'in': 'query',
                        'description': 'How many items to return at one time',
                        'required': False,
                        'schema': {'type': 'integer', 'format': 'int32'},
                    }
                ],
                'responses': {
                    '200': {
                        'description': 'A paged array of pets',
                        'headers': {
                            'x-next': {
                                'description': 'A link to the next page',
                                'schema': {'type': 'string'},
                            }
                        },
                        'content': {
                            'application/json': {
                                'schema': {
                                    'type': 'array',
                                    'items': {'$ref': '#/components/schemas/Pet'},
                                }
                            }
                        },
                    },
                    'default': {
                        'description': 'unexpected error',
                        'content': {
                            'application/json': {
                                'schema': {'$ref': '#/components/schemas/Error'}
                            }
                        },
                    },
                },
            },
            'post': {
                'operationId': 'createPet',
                'summary': 'Create a pet',
                'tags': ['pets'],
                'requestBody': {
                    'required': True,
                    'content': {
                        'application/json': {
                            'schema': {'$ref': '#/components/schemas/NewPet'}
                        }
                    },
                },
                'responses': {
                    '201': {
                        'description': 'Pet created',
                        'content': {
                            'application/json': {
                                'schema': {'$ref': '#/components/schemas/Pet'}
                            }
                        },
                    },
                    '400': {
                        'description': 'Invalid input',
                        'content': {
                            'application/json': {
                                'schema': {'$ref': '#/components/schemas/Error'}
                            }
                        },
                    },
                },
            },
        },
        '/pets/{petId}': {
            'parameters': [
                {
                    'name': 'petId',
                    'in': 'path',
                    'required': True,
                    'description': 'The id of the pet',
                    'schema': {'type': 'string'},
                }
            ],
            'summary': 'A single pet',
            'get': {
                'operationId': 'showPetById',
                'tags': ['pets'],
                'responses': {
                    '200': {
                        'description': 'Expected response to a valid request',
                        'content': {
                            'application/json': {
                                'schema': {'$ref': '#/components/schemas/Pet'}
                            }
                        },
                    },
                    '404': {
                        'description': 'Pet not found',
                        'content': {
                            'application/json': {
                                'schema': {'$ref': '#/components/schemas/Error'}
                            }
                        },
                    },
                },
            },
            'delete': {
                'operationId': 'deletePet',
                'tags': ['pets'],
                'security': [],
                'responses': {'204': {'description': 'Pet deleted'}},
            },
        },
    },
    'components': {
        'schemas': {
            'Pet': PET_SCHEMA,
            'NewPet': {
                'type': 'object',
                'required': ['name'],
                'properties': {
                    'name': {'type': 'string'},
                    'tag': {'type': 'string'},
                },
            },
            'Error': ERROR_SCHEMA,
        }
    },
}

# The same operationId declared under two modules, twice in one of them
DUPLICATE_NAMES_SPEC = {
    'openapi': '3.0.0',
    'info': {'title': 'Users API', 'version': '1.0.0'},
    'paths': {
        '/users/{id}': {
            'get': {'operationId': 'getUser', 'responses': {'200': {'description': 'ok'}}}
        },
        '/users/by-name/{name}': {
            'get': {'operationId': 'getUser', 'responses': {'200': {'description': 'ok'}}}
        },
        '/accounts/{id}': {
            'get': {'operationId': 'getUser', 'responses': {'200': {'description': 'ok'}}}
        },
    },
}

# Inline schemas eligible for extraction into components
ITEMS_SPEC = {
    'openapi': '3.0.0',
    'info': {'title': 'Items API', 'version': '1.0.0'},
    'paths': {
        '/items': {
            'get': {
                'operationId': 'listItems',
                'parameters': [
                    {
                        'name': 'page',
                        'in': 'query',
                        'required': True,
                        'schema': {'type': 'integer'},
                    },
                    {'name': 'q', 'in': 'query', 'schema': {'type': 'string'}},
                ],
                'responses': {
                    '200': {
                        'description': 'ok',
                        'content': {
                            'application/json': {
                                'schema': {
                                    'type': 'array',
                                    'items': {'$ref': '#/components/schemas/Item'},
                                }
                            }
                        },
                    }
                },
            },
            'post': {
                'operationId': 'createItem',
                'requestBody': {
                    'content': {
                        'application/json': {
                            'schema': {
                                'type': 'object',
                                'required': ['title'],
                                'properties': {
                                    'title': {'type': 'string'},
                                    'price': {'type': 'number'},
                                },
                            }
                        }
                    }
                },
                'responses': {
                    '201': {
                        'description': 'created',
                        'content': {
                            'application/json': {
                                'schema': {
                                    'type': 'object',
                                    'properties': {'id': {'type': 'integer'}},
                                }
                            }
                        },
                    }
                },
            },
        },
        '/items/{itemId}': {
            'get': {
                'operationId': 'getItem',
                'parameters': [
                    {
                        'name': 'itemId',
                        'in': 'path',
                        'required': True,
                        'schema': {'type': 'integer'},
                    }
                ],
                'responses': {
                    '200': {
                        'description': 'The item',
                        'content': {
                            'application/json': {
                                'schema': {
                                    'type': 'object',
                                    'required': ['id'],
                                    'properties': {
                                        'id': {'type': 'integer'},
                                        'title': {'type': 'string'},
                                    },
                                }
                            }
                        },
                    },
                    '404': {
                        'description': 'Not found',
                        'content': {
                            'application/json': {
                                'schema': {'$ref': '#/components/schemas/NotFound'}
                            }
                        },
                    },
                },
            },
        },
    },
    'components': {
        'schemas': {
            'Item': {
                'type': 'object',
                'properties': {
                    'id': {'type': 'integer'},
                    'title': {'type': 'string'},
                },
            },
            'NotFound': {
                'type': 'object',
                'title': 'NotFound',
                'description': 'The resource does not exist',
                'properties': {'message': {'type': 'string'}},
            },
        }
    },
}

# Swagger 2.0 flavoured operation with form data parameters
SWAGGER2_SPEC = {
    'swagger': '2.0',
    'info': {'title': 'Upload API', 'version': '1.0.0'},
    'paths': {
        '/upload/{fileId}': {
            'post': {
                'operationId': 'uploadFile',
                'consumes': ['multipart/form-data'],
                'produces': ['application/json'],
                'parameters': [
                    {'name': 'fileId', 'in': 'path', 'required': True, 'type': 'string'},
                    {'name': 'file', 'in': 'formData', 'required': True, 'type': 'file'},
                    {'name': 'note', 'in': 'formData', 'type': 'string'},
                ],
                'responses': {'200': {'description': 'uploaded'}},
            }
        }
    },
    'definitions': {
        'User': {
            'type': 'object',
            'properties': {'id': {'type': 'integer'}},
        }
    },
}

# Parameters, responses and request bodies declared in components
REFERENCES_SPEC = {
    'openapi': '3.0.0',
    'info': {'title': 'References API', 'version': '1.0.0'},
    'security': [{'apiKey': []}],
    'paths': {
        '/orders/{orderId}': {
            'put': {
                'operationId': 'updateOrder',
                'parameters': [
                    {'$ref': '#/components/parameters/OrderId'},
                    {'$ref': '#/components/parameters/TraceId'},
                    {'$ref': '#/components/parameters/Missing'},
                ],
                'requestBody': {'$ref': '#/components/requestBodies/OrderBody'},
                'responses': {
                    '200': {'$ref': '#/components/responses/OrderResponse'},
                    '422': {'$ref': '#/components/responses/ValidationFailed'},
                },
            }
        }
    },
    'components': {
        'parameters': {
            'OrderId': {
                'name': 'orderId',
                'in': 'path',
                'required': True,
                'schema': {'type': 'string', 'format': 'uuid'},
            },
            'TraceId': {
                'name': 'X-Trace-Id',
                'in': 'header',
                'required': False,
                'schema': {'type': 'string'},
            },
        },
        'requestBodies': {
            'OrderBody': {
                'required': False,
                'content': {
                    'application/json': {'schema': {'$ref': '#/components/schemas/Order'}}
                },
            }
        },
        'responses': {
            'OrderResponse': {
                'description': 'The updated order',
                'content': {
                    'application/json': {'schema': {'$ref': '#/components/schemas/Order'}}
                },
            },
            'ValidationFailed': {
                'description': 'Validation failed',
                'content': {
                    'application/problem+json': {
                        'schema': {
                            'type': 'object',
                            'properties': {'detail': {'type': 'string'}},
                        }
                    }
                },
            },
        },
        'schemas': {
            'Order': {
                'type': 'object',
                'required': ['id'],
                'properties': {
                    'id': {'type': 'string', 'format': 'uuid'},
                    'note': {'type': 'string', 'nullable': True},
                },
            }
        },
    },
}
