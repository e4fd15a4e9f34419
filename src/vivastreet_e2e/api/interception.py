"""
Passive interception of search API requests issued by the UI.

`SearchInterceptor` installs a Playwright route for the search endpoint,
records the matching request and lets it through untouched. Its session is
always one of three values:

    Idle      no route registered
    Armed     route registered, nothing observed yet
    Captured  route registered, a matching request was observed

Typical flow:

    interceptor = SearchInterceptor(page)
    await interceptor.start()           # Idle/Captured -> Armed
    await home_page.click_search()      # UI issues the request -> Captured
    url = await interceptor.consume()   # Captured -> Idle

Only requests issued after `start()` returns are observed. If several
requests match before the capture is consumed, the last one wins; the count
is kept and every overwrite is logged.
"""
from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional, Union

import anyio
from playwright.async_api import Page, Request, Route

from vivastreet_e2e.api.errors import InterceptionTimeoutError, NoInterceptedRequestError
from vivastreet_e2e.config import settings

logger = logging.getLogger(__name__)

RouteHandler = Callable[[Route, Request], Awaitable[None]]


class InterceptionState(enum.Enum):
    IDLE = "idle"
    ARMED = "armed"
    CAPTURED = "captured"


@dataclass(frozen=True)
class Idle:
    state = InterceptionState.IDLE


@dataclass(frozen=True)
class Armed:
    handler: RouteHandler
    captured: anyio.Event
    state = InterceptionState.ARMED


@dataclass(frozen=True)
class Captured:
    handler: RouteHandler
    captured: anyio.Event
    request: Request
    url: str
    match_count: int = 1
    state = InterceptionState.CAPTURED


Session = Union[Idle, Armed, Captured]


class SearchInterceptor:
    """Observe-only route hook for one page and one endpoint.

    Not safe to share between pages. Calling `start()` while a session is
    active replaces the previous route instead of stacking a second one.
    """

    def __init__(self, page: Page, endpoint: Optional[str] = None) -> None:
        self.page = page
        self.endpoint = endpoint or settings.search_api_url
        self._session: Session = Idle()

    # ---- state views -----------------------------------------------------------
    @property
    def state(self) -> InterceptionState:
        return self._session.state

    @property
    def session(self) -> Session:
        return self._session

    @property
    def captured_url(self) -> Optional[str]:
        return self._session.url if isinstance(self._session, Captured) else None

    def _matches(self, url: str) -> bool:
        return url.startswith(self.endpoint)

    # ---- lifecycle -------------------------------------------------------------
    async def start(self) -> None:
        """Register the route hook. Requests issued before this returns are not seen."""
        if not isinstance(self._session, Idle):
            logger.warning(
                "Interception of %s restarted while %s; replacing the previous route",
                self.endpoint,
                self._session.state.value,
            )

        async def handler(route: Route, request: Request) -> None:
            try:
                self._record(handler, request)
            finally:
                await route.continue_()

        await self.page.route(self._matches, handler)
        previous = self._session
        self._session = Armed(handler=handler, captured=anyio.Event())
        if isinstance(previous, Armed):
            # Pending waiters move on to the new session
            previous.captured.set()
        if not isinstance(previous, Idle):
            await self._unroute(previous.handler)
        logger.info("Intercepting requests to %s", self.endpoint)

    def _record(self, handler: RouteHandler, request: Request) -> None:
        session = self._session
        if isinstance(session, Idle) or session.handler is not handler:
            # Late callback from a route that has already been replaced or removed
            return
        if isinstance(session, Captured):
            logger.warning(
                "Another request to %s matched before the capture was consumed; "
                "keeping the latest (%d so far). Discarded: %s",
                self.endpoint,
                session.match_count + 1,
                session.url,
            )
            match_count = session.match_count + 1
        else:
            match_count = 1
        self._session = Captured(
            handler=handler,
            captured=session.captured,
            request=request,
            url=request.url,
            match_count=match_count,
        )
        session.captured.set()
        logger.info("Intercepted %s", request.url)

    async def stop(self) -> None:
        """Remove the hook and discard any capture. Safe to call in any state."""
        session = self._session
        self._session = Idle()
        if isinstance(session, Armed):
            # Wake any wait_for_request(); it sees Idle and reports nothing captured
            session.captured.set()
        if not isinstance(session, Idle):
            await self._unroute(session.handler)
            logger.info("Stopped intercepting requests to %s", self.endpoint)

    async def _unroute(self, handler: RouteHandler) -> None:
        await self.page.unroute(self._matches, handler)

    # ---- consumption -----------------------------------------------------------
    async def wait_for_request(self, timeout: Optional[float] = None) -> str:
        """Suspend until a matching request is captured and return its URL.

        Raises:
            NoInterceptedRequestError: If interception was never started
            InterceptionTimeoutError: If nothing matched within `timeout` seconds
        """
        timeout = settings.intercept_timeout_s if timeout is None else timeout
        try:
            with anyio.fail_after(timeout):
                while True:
                    session = self._session
                    if isinstance(session, Idle):
                        # Never started, or stop() ran while we were waiting
                        raise NoInterceptedRequestError(self._missing_message())
                    if isinstance(session, Captured):
                        return session.url
                    # Woken either by a capture or by start() arming a new session
                    await session.captured.wait()
        except TimeoutError:
            raise InterceptionTimeoutError(self.endpoint, timeout) from None

    async def consume(self) -> str:
        """Take the captured request URL and return to Idle.

        Raises:
            NoInterceptedRequestError: If nothing has been captured
        """
        session = self._session
        if not isinstance(session, Captured):
            raise NoInterceptedRequestError(self._missing_message())
        await self.stop()
        return session.url

    def _missing_message(self) -> str:
        if isinstance(self._session, Armed):
            return (
                f"No search API request was intercepted. Interception of {self.endpoint} is active, "
                f"but the UI action did not issue a matching request."
            )
        return (
            "No search API request was intercepted. "
            "Make sure start_interception() was called before the UI action."
        )
