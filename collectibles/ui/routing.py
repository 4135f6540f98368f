"""
routing.py - routing capability
Single responsibility: give views an explicit handle on page navigation
instead of reaching for the page themselves.
"""
from collectibles.config import ROUTE_DASHBOARD, ROUTE_HOME

KNOWN_ROUTES = (ROUTE_HOME, ROUTE_DASHBOARD)


class Router:
    def __init__(self, page):
        self._page = page

    @property
    def current(self) -> str:
        return self._page.route or ROUTE_HOME

    def is_known(self, route: str | None = None) -> bool:
        return (route if route is not None else self.current) in KNOWN_ROUTES

    def go(self, route: str) -> None:
        self._page.go(route)
