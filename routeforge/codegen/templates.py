"""Jinja2 rendering of route templates.

The route assembler renders exactly one template per operation, ``route_name``,
to obtain the raw route name. The built-in templates live in
``routeforge/templates/``; any of them can be replaced by passing Jinja2
source through ``overrides``.
"""

from collections.abc import Mapping
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined, Template, TemplateError

from routeforge.codegen.processors.path_processor import PATH_PARAM_RE
from routeforge.codegen.utils import camel_case, pascal_case, snake_case
from routeforge.exceptions import TemplateRenderError

__all__ = ['ROUTE_NAME_TEMPLATE', 'TEMPLATE_DIR', 'TemplateRenderer', 'default_operation_name']

TEMPLATE_DIR = Path(__file__).parent.parent / 'templates'
"""Path to the built-in Jinja2 templates (``routeforge/templates/``)."""

ROUTE_NAME_TEMPLATE = 'route_name'


def default_operation_name(method: str, route: str) -> str:
    """Derive a route name for an operation without an operationId.

    ``GET /`` becomes ``get_root``; otherwise the path segments after the
    first one are joined, and detail routes (with path parameters) get a
    ``_detail`` suffix, e.g. ``GET /api/users/{id}`` -> ``get_users_detail``.
    Both ``{param}`` and ``:param`` placeholders count as path parameters.
    """
    if route == '/':
        return snake_case(f'{method} root')

    has_path_inserts = bool(PATH_PARAM_RE.search(route))
    segments = [s for s in PATH_PARAM_RE.sub('', route).split('/') if s]
    route_parts = '_'.join(segments[1:] if len(segments) > 1 else segments)

    if len(route_parts) > 3 and has_path_inserts:
        return snake_case(f'{method}_{route_parts}_detail')
    return snake_case(f'{method}_{route_parts}')


class TemplateRenderer:
    """Renders named templates with a context mapping.

    Example:
        >>> renderer = TemplateRenderer()
        >>> renderer.render('route_name', {'route_info': raw_route_info})
        'get_user'
    """

    def __init__(
        self,
        overrides: Mapping[str, str] | None = None,
        template_dir: str | Path = TEMPLATE_DIR,
    ):
        """Initialize the renderer.

        Args:
            overrides: Template id -> Jinja2 source replacing the built-in template.
            template_dir: Directory holding the ``<template_id>.jinja`` files.
        """
        self.env = Environment(
            loader=FileSystemLoader(str(template_dir)),
            autoescape=False,
            undefined=StrictUndefined,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.env.filters.update(
            snake_case=snake_case,
            camel_case=camel_case,
            pascal_case=pascal_case,
        )
        self.env.globals['default_operation_name'] = default_operation_name
        self._overrides = {k: v for k, v in (overrides or {}).items() if v}
        self._compiled: dict[str, Template] = {}

    def render(self, template_id: str, context: Mapping[str, Any]) -> str:
        """Render a template and strip surrounding whitespace.

        Raises:
            TemplateRenderError: If the template is missing or fails to render.
        """
        try:
            return self._get_template(template_id).render(**context).strip()
        except TemplateError as e:
            raise TemplateRenderError(template_id, e) from e

    def _get_template(self, template_id: str) -> Template:
        if template_id not in self._compiled:
            if template_id in self._overrides:
                template = self.env.from_string(self._overrides[template_id])
            else:
                template = self.env.get_template(f'{template_id}.jinja')
            self._compiled[template_id] = template
        return self._compiled[template_id]
