"""
Overlay handling: cookie consent banner and adult content disclaimer.

Each way of dismissing an overlay is a `ConsentStrategy`. Strategies are
tried in order and each attempt reports one of:

    SUCCEEDED       overlay was visible and dismissed
    NOT_APPLICABLE  overlay element never became visible
    FAILED          overlay element was visible but the click did not work

The overall result succeeds as soon as one strategy succeeds. "No banner"
(everything not applicable) is logged at INFO, "banner present but every
selector stale" (some failed, none succeeded) is logged as a WARNING. Neither
raises: a missing overlay must not fail a journey.
"""
from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import Callable, List, Sequence, Tuple

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Locator, Page
from playwright.async_api import TimeoutError as PlaywrightTimeout

logger = logging.getLogger(__name__)

OVERLAY_TIMEOUT_MS = 3000


class ConsentOutcome(enum.Enum):
    SUCCEEDED = "succeeded"
    NOT_APPLICABLE = "not_applicable"
    FAILED = "failed"


@dataclass(frozen=True)
class ConsentStrategy:
    name: str
    target: Callable[[Page], Locator]
    hides: Callable[[Page], Locator] | None = None


@dataclass
class ConsentReport:
    """Per-strategy outcomes of one overlay dismissal attempt."""

    overlay: str
    attempts: List[Tuple[str, ConsentOutcome]] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return any(outcome is ConsentOutcome.SUCCEEDED for _, outcome in self.attempts)

    @property
    def absent(self) -> bool:
        return all(outcome is ConsentOutcome.NOT_APPLICABLE for _, outcome in self.attempts)

    @property
    def stale(self) -> List[str]:
        return [name for name, outcome in self.attempts if outcome is ConsentOutcome.FAILED]


COOKIE_CONSENT_STRATEGIES: Tuple[ConsentStrategy, ...] = (
    ConsentStrategy(
        name="Accept All button",
        target=lambda page: page.get_by_role("button", name="Accept All"),
    ),
    ConsentStrategy(
        name="#onetrust-accept-btn-handler",
        target=lambda page: page.locator("#onetrust-accept-btn-handler"),
    ),
)


def disclaimer_strategies(action: str) -> Tuple[ConsentStrategy, ...]:
    if action not in ("Agree", "Disagree"):
        raise ValueError(f"Disclaimer action must be 'Agree' or 'Disagree', got {action!r}")
    button = "#accept-disclaimer" if action == "Agree" else "#reject-disclaimer"
    return (
        ConsentStrategy(
            name=button,
            target=lambda page: page.locator(button),
            hides=lambda page: page.locator("#vs-adult-disclaimer"),
        ),
    )


async def attempt(page: Page, strategy: ConsentStrategy, timeout: int = OVERLAY_TIMEOUT_MS) -> ConsentOutcome:
    locator = strategy.target(page)
    try:
        await locator.wait_for(state="visible", timeout=timeout)
    except PlaywrightTimeout:
        return ConsentOutcome.NOT_APPLICABLE
    try:
        await locator.click(timeout=timeout)
        if strategy.hides is not None:
            await strategy.hides(page).wait_for(state="hidden", timeout=timeout)
    except PlaywrightError as exc:
        logger.debug("%s visible but not dismissable: %s", strategy.name, exc)
        return ConsentOutcome.FAILED
    return ConsentOutcome.SUCCEEDED


async def dismiss_overlay(
    page: Page,
    overlay: str,
    strategies: Sequence[ConsentStrategy],
    timeout: int = OVERLAY_TIMEOUT_MS,
) -> ConsentReport:
    report = ConsentReport(overlay=overlay)
    for strategy in strategies:
        outcome = await attempt(page, strategy, timeout)
        report.attempts.append((strategy.name, outcome))
        if outcome is ConsentOutcome.SUCCEEDED:
            logger.info("%s dismissed via %s", overlay, strategy.name)
            return report

    if report.absent:
        logger.info("No %s shown", overlay)
    else:
        logger.warning(
            "%s is present but could not be dismissed; stale selectors: %s",
            overlay,
            ", ".join(report.stale),
        )
    return report


async def handle_cookie_consent(page: Page, timeout: int = OVERLAY_TIMEOUT_MS) -> ConsentReport:
    """Accept the OneTrust cookie banner if it is shown."""
    return await dismiss_overlay(page, "cookie consent banner", COOKIE_CONSENT_STRATEGIES, timeout)


async def handle_adult_disclaimer(page: Page, action: str, timeout: int = OVERLAY_TIMEOUT_MS) -> ConsentReport:
    """Answer the adult content disclaimer with "Agree" or "Disagree" if it is shown."""
    return await dismiss_overlay(page, "adult content disclaimer", disclaimer_strategies(action), timeout)
