"""Path template parsing.

Finds path parameters written directly in a path template, either as
``{name}`` or as ``:name`` / ``:name:``, and rewrites the path into the
``${name}`` placeholder form used by generated interpolated strings.
"""

import logging
import re

from routeforge.codegen.models import ParsedRoute, PathParameter
from routeforge.codegen.utils import snake_case

logger = logging.getLogger(__name__)

__all__ = ['PATH_PARAM_RE', 'parse_route_path']

PATH_PARAM_RE = re.compile(
    r'({(([a-zA-Z]-?_?\.?)+)([0-9]+)?})|(:(([a-zA-Z]-?_?\.?)+)([0-9]+)?:?)'
)

_DELIMITERS_RE = re.compile(r'[{}:]')


def parse_route_path(route: str | None) -> ParsedRoute:
    """Extract implicit path parameters and rewrite the path.

    Args:
        route: The literal path, e.g. '/users/{userId}/posts/:postId'.

    Returns:
        A ParsedRoute with the original path, the rewritten path
        ('/users/${user_id}/posts/${post_id}') and one PathParameter per token.
    """
    original_route = route or ''
    path_params: list[PathParameter] = []

    for match in PATH_PARAM_RE.finditer(original_route):
        token = match.group(0)
        raw_name = _DELIMITERS_RE.sub('', token)
        if not raw_name:
            continue

        if '-' in raw_name:
            logger.warning(f'wrong path param name "{raw_name}" in {original_route}')

        path_params.append(PathParameter(match=token, name=snake_case(raw_name)))

    fixed_route = original_route
    for path_param in path_params:
        fixed_route = fixed_route.replace(
            path_param.match, f'${{{path_param.name}}}', 1
        )

    return ParsedRoute(
        original_route=original_route,
        route=fixed_route,
        path_params=path_params,
    )
