"""Module grouping for assembled routes.

Functions:
    group_routes: Partitions routes into modules by namespace.
    restore_route_names: Reverts needless duplicate suffixes in one module.
"""

from routeforge.codegen.splitting.grouper import group_routes, restore_route_names

__all__ = [
    'group_routes',
    'restore_route_names',
]
