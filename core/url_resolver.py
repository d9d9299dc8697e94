# core/url_resolver.py
# ---------------------------------------------------------------
# Turns route specifications into absolute URLs.
# A route spec is (route_name, {params}) or (route_name,), where
# route_name is the `name` of a FastAPI/Starlette route.
# ---------------------------------------------------------------

from __future__ import annotations

from typing import Any, Dict, Mapping, Protocol, Sequence, Set, Tuple, Union
from urllib.parse import urlencode

from starlette.applications import Starlette
from starlette.routing import NoMatchFound

from core.errors import RouteResolutionError

RouteSpec = Union[Sequence[Any], Tuple[str, Mapping[str, Any]]]


class UrlResolver(Protocol):
    base_url: str

    def create_absolute_url(self, route: RouteSpec) -> str: ...


class RouteUrlResolver:
    """
    Resolves route specs against an application's routing table.
    Params that appear in the route path are used as path params,
    the rest go to the query string:

        resolver = RouteUrlResolver(app, "https://example.com")
        resolver.create_absolute_url(("product", {"product_id": 7, "lang": "he"}))
        # -> https://example.com/products/7?lang=he
    """

    def __init__(self, app: Starlette, base_url: str):
        self.app = app
        self.base_url = base_url

    def create_absolute_url(self, route: RouteSpec) -> str:
        name, params = self._split(route)

        path_names = self._path_param_names(name)
        path_params = {k: v for k, v in params.items() if k in path_names}
        query = {k: v for k, v in params.items() if k not in path_names}

        try:
            url_path = self.app.url_path_for(name, **path_params)
        except NoMatchFound as e:
            raise RouteResolutionError(f'Unable to resolve route "{name}" with params {path_params}') from e

        url = str(url_path.make_absolute_url(base_url=self.base_url))
        if query:
            url += "?" + urlencode(query, doseq=True)
        return url

    @staticmethod
    def _split(route: RouteSpec) -> Tuple[str, Dict[str, Any]]:
        if isinstance(route, (str, bytes)) or not isinstance(route, Sequence) or not route:
            raise RouteResolutionError(f"Invalid route specification: {route!r}")

        name = route[0]
        params = route[1] if len(route) > 1 else {}
        if not isinstance(name, str) or not isinstance(params, Mapping) or len(route) > 2:
            raise RouteResolutionError(f"Invalid route specification: {route!r}")
        return name, dict(params)

    def _path_param_names(self, name: str) -> Set[str]:
        for route in getattr(self.app, "routes", []):
            if getattr(route, "name", None) == name:
                return set(getattr(route, "param_convertors", {}))
        return set()
