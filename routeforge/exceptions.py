"""Custom exceptions for routeforge.

This module defines a hierarchy of exceptions used throughout routeforge
to provide clear, actionable error messages for different failure scenarios.

Route assembly is deliberately lenient: unresolvable types degrade to ``Any``
and only configuration problems or genuine caller-input conflicts surface as
exceptions.
"""


class RouteForgeError(Exception):
    """Base exception for all routeforge errors.

    All exceptions raised by routeforge inherit from this class, making it easy
    to catch all routeforge-related errors with a single except clause.

    Example:
        try:
            codegen.generate()
        except RouteForgeError as e:
            print(f"routeforge error: {e}")
    """

    def __init__(self, message: str, *args, **kwargs):
        self.message = message
        super().__init__(message, *args, **kwargs)


class SchemaError(RouteForgeError):
    """Base exception for schema-related errors."""

    pass


class SchemaLoadError(SchemaError):
    """Failed to load an API document from a source.

    Attributes:
        source: The source path that failed to load.
        cause: The underlying exception that caused the failure.
    """

    def __init__(self, source: str, cause: Exception | None = None):
        self.source = source
        self.cause = cause
        message = f"Failed to load schema from '{source}'"
        if cause:
            message += f': {cause}'
        super().__init__(message)


class SchemaReferenceError(SchemaError):
    """Failed to resolve a $ref reference in the document.

    Attributes:
        reference: The $ref string that could not be resolved.
        reason: Explanation of why the reference couldn't be resolved.
    """

    def __init__(self, reference: str, reason: str | None = None):
        self.reference = reference
        self.reason = reason
        message = f"Failed to resolve reference '{reference}'"
        if reason:
            message += f': {reason}'
        super().__init__(message)


class ConfigurationError(RouteForgeError):
    """Error in configuration.

    Attributes:
        config_path: The path to the configuration file, if applicable.
        field: The specific configuration field that is invalid.
    """

    def __init__(
        self, message: str, config_path: str | None = None, field: str | None = None
    ):
        self.config_path = config_path
        self.field = field
        full_message = message
        if config_path:
            full_message = f"{message} in '{config_path}'"
        if field:
            full_message += f' (field: {field})'
        super().__init__(full_message)


class TemplateRenderError(RouteForgeError):
    """A route template could not be loaded or rendered.

    Attributes:
        template_id: Identifier of the template that failed.
        cause: The underlying Jinja2 exception.
    """

    def __init__(self, template_id: str, cause: Exception | None = None):
        self.template_id = template_id
        self.cause = cause
        message = f"Failed to render template '{template_id}'"
        if cause:
            message += f': {cause}'
        super().__init__(message)


class RouteGenerationError(RouteForgeError):
    """Error assembling the route descriptor of one operation.

    Attributes:
        operation_id: The operationId of the operation, if declared.
        method: The HTTP method of the operation.
        path: The URL path of the operation.
        cause: The underlying exception that caused the failure.
    """

    def __init__(
        self,
        operation_id: str | None,
        method: str | None = None,
        path: str | None = None,
        cause: Exception | None = None,
    ):
        self.operation_id = operation_id
        self.method = method
        self.path = path
        self.cause = cause
        message = f"Failed to build route '{operation_id or path}'"
        if method and path:
            message += f' ({method.upper()} {path})'
        if cause:
            message += f': {cause}'
        super().__init__(message)


class ArgumentNameConflictError(RouteForgeError):
    """Every candidate name for a generated function argument is taken.

    Two argument bags bound to the same identifier would produce a broken
    signature, so this is never resolved silently.

    Attributes:
        candidates: The candidate names that were tried, in order.
        reserved: The names already taken when resolution failed.
    """

    def __init__(self, candidates: list[str], reserved: list[str]):
        self.candidates = list(candidates)
        self.reserved = list(reserved)
        message = (
            f'No free argument name among {self.candidates}; '
            f'already taken: {self.reserved}'
        )
        super().__init__(message)
