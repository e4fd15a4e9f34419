"""Named test steps for page objects and API helpers.

A step wraps a unit of work with a human-readable name, logs its start and
outcome, and records it on the active `StepTrail`. Names are built from a
template and the live argument values, passed explicitly:

    async with step("Select category: {category}", category=category):
        await dropdown.select_option(label=category)

    response = await run_step(
        "Search API request: category={category}",
        lambda: page.request.get(url),
        category=params.category,
    )

Errors are never swallowed; a failing step is logged and the original
exception propagates unchanged.
"""
from __future__ import annotations

import json
import logging
import re
import time
from contextlib import asynccontextmanager, contextmanager
from contextvars import ContextVar
from dataclasses import asdict, dataclass, field, is_dataclass
from typing import Any, AsyncIterator, Awaitable, Callable, Iterator, List, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

_PLACEHOLDER = re.compile(r"\{(\w+)\}")


@dataclass
class StepRecord:
    name: str
    status: str = "running"  # running | passed | failed
    duration: float = 0.0
    error: Optional[str] = None


@dataclass
class StepTrail:
    """Ordered record of the steps run while this trail was active."""

    records: List[StepRecord] = field(default_factory=list)

    @property
    def names(self) -> List[str]:
        return [record.name for record in self.records]

    def failed(self) -> List[StepRecord]:
        return [record for record in self.records if record.status == "failed"]


_active_trail: ContextVar[Optional[StepTrail]] = ContextVar("vivastreet_step_trail", default=None)


@contextmanager
def use_trail(trail: Optional[StepTrail] = None) -> Iterator[StepTrail]:
    """Record steps on `trail` (a new one if omitted) for the duration of the block."""
    trail = trail if trail is not None else StepTrail()
    token = _active_trail.set(trail)
    try:
        yield trail
    finally:
        _active_trail.reset(token)


def _display(value: Any) -> str:
    if value is None or isinstance(value, (str, int, float, bool)):
        return str(value)
    if is_dataclass(value) and not isinstance(value, type):
        value = {key: item for key, item in asdict(value).items() if item is not None}
    try:
        return json.dumps(value, default=str)
    except (TypeError, ValueError):
        return str(value)


def format_step_name(template: str, **values: Any) -> str:
    """Replace `{name}` placeholders; placeholders without a value stay as written."""

    def replace(match: re.Match) -> str:
        key = match.group(1)
        if key not in values:
            return match.group(0)
        return _display(values[key])

    return _PLACEHOLDER.sub(replace, template)


@asynccontextmanager
async def step(template: str, **values: Any) -> AsyncIterator[StepRecord]:
    record = StepRecord(name=format_step_name(template, **values))
    trail = _active_trail.get()
    if trail is not None:
        trail.records.append(record)

    logger.info("STEP %s", record.name)
    started = time.monotonic()
    try:
        yield record
    except BaseException as exc:
        record.duration = time.monotonic() - started
        record.status = "failed"
        record.error = f"{type(exc).__name__}: {exc}"
        logger.error("STEP FAILED %s (%.2fs): %s", record.name, record.duration, record.error)
        raise
    record.duration = time.monotonic() - started
    record.status = "passed"
    logger.info("STEP PASSED %s (%.2fs)", record.name, record.duration)


async def run_step(template: str, work: Callable[[], Awaitable[T]], **values: Any) -> T:
    """Run `work()` inside a named step and return its result."""
    async with step(template, **values):
        return await work()
