"""Name resolution for routes and generated function arguments.

- RouteNameResolver renders a route's name and suffixes repeated names
  within a module (``get_user``, ``get_user2``, ...)
- SpecificArgNameResolver picks collision-free names for the argument bags
  (query, body, path params, headers) of one generated function
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

from routeforge.codegen.models import RawRouteInfo, RouteName
from routeforge.codegen.templates import ROUTE_NAME_TEMPLATE, default_operation_name
from routeforge.exceptions import ArgumentNameConflictError

if TYPE_CHECKING:
    from routeforge.codegen.session import GenerationSession

logger = logging.getLogger(__name__)

__all__ = [
    'RESERVED_BODY_ARG_NAMES',
    'RESERVED_HEADER_ARG_NAMES',
    'RESERVED_PATH_ARG_NAMES',
    'RESERVED_QUERY_ARG_NAMES',
    'RouteNameResolver',
    'SpecificArgNameResolver',
]

RESERVED_QUERY_ARG_NAMES = ['query', 'query_params', 'query_arg']
RESERVED_BODY_ARG_NAMES = ['data', 'body', 'req_body']
RESERVED_PATH_ARG_NAMES = ['path', 'path_params']
RESERVED_HEADER_ARG_NAMES = ['headers', 'headers_params']


class RouteNameResolver:
    """Assigns unique route names per module.

    Counters live in the session and are keyed by ``module|name``, so the
    result depends only on the document and its traversal order.
    """

    def __init__(self, session: GenerationSession):
        self.session = session

    def resolve(self, route_info: RawRouteInfo) -> RouteName:
        """Render, deduplicate and return the name of a route.

        Args:
            route_info: The operation metadata passed to the route name template.

        Returns:
            The RouteName; ``duplicate`` is True when a suffix was appended.
        """
        hooks = self.session.hooks
        rendered = self.session.templates.render(
            ROUTE_NAME_TEMPLATE, {'route_info': route_info}
        )
        name = hooks.on_format_route_name(route_info, rendered) or rendered
        if not name:
            # an operationId without letters or digits renders to nothing
            name = default_operation_name(route_info.method, route_info.route)

        counts = self.session.route_name_counts
        key = f'{route_info.module_name}|{name}'
        counts[key] = counts.get(key, 0) + 1
        count = counts[key]

        if count > 1:
            logger.warning(
                f'Module "{route_info.module_name}" already has method "{name}()". '
                f'This method has been renamed to "{name}{count}()" to solve conflict names.'
            )

        route_name = RouteName(
            original=name,
            usage=f'{name}{count}' if count > 1 else name,
            duplicate=count > 1,
        )
        return hooks.on_create_route_name(route_name, route_info) or route_name


class SpecificArgNameResolver:
    """Hands out argument names that never clash within one operation.

    Path argument names are reserved from the start; every resolved name is
    reserved as well.

    Example:
        >>> resolver = SpecificArgNameResolver(['query'])
        >>> resolver.resolve(RESERVED_QUERY_ARG_NAMES)
        'query_params'
    """

    def __init__(self, reserved_names: Iterable[str] = ()):
        self._reserved: list[str] = list(dict.fromkeys(reserved_names))

    @property
    def reserved_names(self) -> list[str]:
        return list(self._reserved)

    def is_reserved(self, name: str) -> bool:
        return name in self._reserved

    def resolve(self, candidates: Iterable[str | None]) -> str:
        """Return and reserve the first free candidate.

        Raises:
            ArgumentNameConflictError: If every candidate is already taken.
        """
        variants = list(dict.fromkeys(c for c in candidates if c))
        for variant in variants:
            if not self.is_reserved(variant):
                self._reserved.append(variant)
                return variant
        raise ArgumentNameConflictError(variants, self._reserved)
