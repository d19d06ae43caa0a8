"""Grouping of routes into modules.

Routes are partitioned by namespace. Within each module, routes renamed
because of an early collision get their original name back once it turns
out nothing else in the module uses that name.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from routeforge.codegen.models import GroupedRoutes, ModuleRoutes, Route

logger = logging.getLogger(__name__)

__all__ = ['group_routes', 'restore_route_names']


def restore_route_names(module: ModuleRoutes) -> None:
    """Revert needless duplicate suffixes in one module, in place.

    A route keeps its suffixed ``usage`` only while another route of the
    same module shares its ``original`` name.
    """
    if len(module.routes) <= 1:
        return

    for route in module.routes:
        route_name = route.route_name
        if not route_name.duplicate:
            continue
        shared = any(
            other is not route and other.route_name.original == route_name.original
            for other in module.routes
        )
        if not shared:
            logger.debug(
                f'Restoring route name {route_name.usage} -> {route_name.original} '
                f'in module {module.module_name}'
            )
            route_name.usage = route_name.original


def group_routes(routes: Iterable[Route]) -> GroupedRoutes:
    """Partition routes into modules in first-seen order.

    Args:
        routes: Assembled routes, in traversal order.

    Returns:
        GroupedRoutes whose ``out_of_module`` holds routes without a
        namespace and whose ``combined`` holds one ModuleRoutes per namespace.
    """
    grouped = GroupedRoutes()
    modules: dict[str, ModuleRoutes] = {}

    for route in routes:
        if not route.namespace:
            grouped.out_of_module.append(route)
            continue
        module = modules.get(route.namespace)
        if module is None:
            module = modules[route.namespace] = ModuleRoutes(module_name=route.namespace)
            grouped.combined.append(module)
        module.routes.append(route)

    for module in grouped.combined:
        restore_route_names(module)

    return grouped
