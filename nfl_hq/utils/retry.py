# nfl_hq/utils/retry.py
import asyncio
from typing import Awaitable, Callable, Optional, Tuple, Type, TypeVar

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from nfl_hq.config.settings import settings

T = TypeVar("T")

SleepFn = Callable[[float], Awaitable[None]]


class RetryPolicy(BaseModel):
    """Bounded exponential backoff: retry n (0-based) waits base_delay * multiplier**n."""

    model_config = ConfigDict(frozen=True)

    max_retries: int = Field(2, ge=0)
    base_delay: float = Field(1.0, ge=0)
    multiplier: float = Field(2.0, ge=1)
    max_delay: float = Field(60.0, ge=0)

    @classmethod
    def from_settings(cls) -> "RetryPolicy":
        return cls(
            max_retries=settings.max_retries,
            base_delay=settings.retry_base_delay_seconds,
            multiplier=settings.retry_multiplier,
        )

    @property
    def max_attempts(self) -> int:
        return self.max_retries + 1

    def delay_for(self, retry_index: int) -> float:
        return min(self.base_delay * self.multiplier**retry_index, self.max_delay)


def _log_before_sleep(description: str) -> Callable[[RetryCallState], None]:
    def before_sleep(retry_state: RetryCallState) -> None:
        exc = retry_state.outcome.exception() if retry_state.outcome else None
        delay = retry_state.next_action.sleep if retry_state.next_action else 0
        logger.warning(
            f"{description} failed (attempt {retry_state.attempt_number}): {exc!r}. "
            f"Retrying in {delay:.2f}s"
        )

    return before_sleep


async def retry_async(
    operation: Callable[[], Awaitable[T]],
    policy: RetryPolicy,
    *,
    retry_on: Tuple[Type[BaseException], ...] = (Exception,),
    sleep: Optional[SleepFn] = None,
    description: str = "operation",
) -> T:
    """Runs ``operation`` until it succeeds or the policy is exhausted.

    Only exceptions matching ``retry_on`` are retried; anything else, and the
    last exception once all attempts have failed, is re-raised as is.
    ``operation`` may be any callable returning an awaitable, lambdas included.
    """
    async for attempt in AsyncRetrying(
        stop=stop_after_attempt(policy.max_attempts),
        wait=wait_exponential(
            multiplier=policy.base_delay,
            exp_base=policy.multiplier,
            max=policy.max_delay,
        ),
        retry=retry_if_exception_type(retry_on),
        sleep=sleep or asyncio.sleep,
        before_sleep=_log_before_sleep(description),
        reraise=True,
    ):
        with attempt:
            return await operation()
    raise RuntimeError(f"{description}: retry loop ended without a result")
