"""Fakes for the Playwright objects the search API helpers touch.

They implement only the calls the helpers make: page.route / page.unroute,
route.continue_, and page.request.get.
"""
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple

SEARCH_ENDPOINT = "https://search.example.test/ajax/regions_tree.php"


@dataclass
class FakeRequest:
    url: str


class FakeRoute:
    def __init__(self, request: FakeRequest):
        self.request = request
        self.continued = False

    async def continue_(self) -> None:
        self.continued = True


@dataclass
class FakeAPIResponse:
    url: str
    status: int = 200
    status_text: str = "OK"

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


@dataclass
class FakeAPIRequestContext:
    status: int = 200
    status_text: str = "OK"
    calls: List[Dict[str, Any]] = field(default_factory=list)

    async def get(self, url: str, headers: Optional[Dict[str, str]] = None, timeout: Optional[float] = None):
        self.calls.append({"url": url, "headers": headers, "timeout": timeout})
        return FakeAPIResponse(url=url, status=self.status, status_text=self.status_text)


class FakePage:
    """Routes registered with route() receive requests sent with fire()."""

    def __init__(self):
        self.routes: List[Tuple[Callable[[str], bool], Callable]] = []
        self.unrouted: List[Tuple[Callable[[str], bool], Callable]] = []
        self.request = FakeAPIRequestContext()

    async def route(self, matcher, handler) -> None:
        self.routes.append((matcher, handler))

    async def unroute(self, matcher, handler=None) -> None:
        self.unrouted.append((matcher, handler))
        self.routes = [(m, h) for m, h in self.routes if not (m == matcher and h is handler)]

    async def fire(self, url: str) -> List[FakeRoute]:
        """Issue a request to `url` through every matching route."""
        handled = []
        for matcher, handler in list(self.routes):
            if matcher(url):
                route = FakeRoute(FakeRequest(url))
                await handler(route, route.request)
                handled.append(route)
        return handled


