"""Route class that only matches JSON requests."""

from fastapi.routing import APIRoute
from starlette.datastructures import Headers
from starlette.routing import Match
from starlette.types import Scope

from jsonguard.utils.json_body import is_json_content_type


class JsonRoute(APIRoute):
    """An APIRoute that forwards non-JSON requests to the next route.

    A full path and method match is downgraded to no match when the request
    does not declare a JSON content type, so Starlette keeps looking. With no
    other route on the path the request ends in a 404. A route on the same
    path with another method would turn it into a 405, so such paths need a
    non-JSON route for the method that raises ``RequestForwarded``.
    """

    def matches(self, scope: Scope) -> tuple[Match, Scope]:
        match, child_scope = super().matches(scope)
        if match is not Match.FULL:
            return match, child_scope
        content_type = Headers(scope=scope).get("content-type")
        if not is_json_content_type(content_type):
            return Match.NONE, {}
        return match, child_scope
