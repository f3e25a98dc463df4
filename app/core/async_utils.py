from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional

from app.logger import logger


async def run_in_thread(func, *args, **kwargs):
    return await asyncio.to_thread(func, *args, **kwargs)


@dataclass(frozen=True)
class RetryOutcome:
    value: Any = None
    error: Optional[BaseException] = None
    attempts: int = 0

    @property
    def ok(self) -> bool:
        return self.error is None


async def retry_in_thread(
    func: Callable[..., Any],
    *args,
    attempts: int = 3,
    delay_seconds: float = 1.0,
    label: str = "",
    sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    **kwargs,
) -> RetryOutcome:
    """Run a blocking call with a fixed-delay retry budget.

    The call is retried on any ``Exception`` until ``attempts`` calls have
    been made, sleeping ``delay_seconds`` between attempts but not after the
    last one. The final error is returned in the outcome, never raised.
    """
    total = max(1, int(attempts))
    name = label or getattr(func, "__name__", "call")
    last_error: Optional[BaseException] = None
    for attempt in range(1, total + 1):
        try:
            value = await run_in_thread(func, *args, **kwargs)
            return RetryOutcome(value=value, attempts=attempt)
        except Exception as exc:
            last_error = exc
            if attempt < total:
                logger.warning(
                    f"{name} failed (attempt {attempt}/{total}): {exc}; retrying in {delay_seconds}s"
                )
                if delay_seconds > 0:
                    await sleep(delay_seconds)
            else:
                logger.error(f"{name} failed after {total} attempts: {exc}")
    return RetryOutcome(error=last_error, attempts=total)
