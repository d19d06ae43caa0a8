"""Extension points for customizing the route IR.

Subclass :class:`RouteHooks` and override any of its methods, then pass the
instance to :class:`~routeforge.codegen.codegen.Codegen`. Every hook returns
``None`` to keep the value routeforge built.

Example:
    >>> class PrefixedNames(RouteHooks):
    ...     def on_format_route_name(self, route_info, name):
    ...         return f'api_{name}'
    >>> Codegen(config, hooks=PrefixedNames())
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from routeforge.codegen.models import RawRouteInfo, Route, RouteName

__all__ = ['RouteHooks']


class RouteHooks:
    """No-op hook implementation."""

    def on_format_route_name(self, route_info: RawRouteInfo, name: str) -> str | None:
        """Replace the name rendered by the route name template."""
        return None

    def on_create_route_name(
        self, route_name: RouteName, route_info: RawRouteInfo
    ) -> RouteName | None:
        """Replace the collision-resolved route name."""
        return None

    def on_create_request_params(self, schema: dict[str, Any]) -> dict[str, Any] | None:
        """Replace the merged query/path parameters schema."""
        return None

    def on_create_route(self, route: Route) -> Route | None:
        """Transform an assembled route before it is collected."""
        return None
