"""
Debounce: run an operation once after a burst of calls goes quiet.

**Conceptual**: A Debouncer wraps a target operation and a wait duration.
Every invoke() cancels the previously scheduled fire, remembers the new
arguments, and schedules a fresh fire `wait_ms` later. The target therefore
runs at most once per quiet period, with the arguments of the *last* call in
the burst, exactly `wait_ms` after that call.

Example timeline (wait_ms=100):
    t=0    invoke("a")   -> fire scheduled for t=100
    t=40   invoke("b")   -> previous fire cancelled, new fire at t=140
    t=90   invoke("c")   -> previous fire cancelled, new fire at t=190
    t=190  target("c")   runs once

**State**: Each Debouncer owns its state exclusively (pending timer handle and
last arguments). Two Debouncers wrapping the same function are independent.

**Failure semantics**: The fire happens asynchronously relative to invoke(),
so the Debouncer does not catch, retry, or report errors from the target.
State is cleared before the target runs, so a raising target never blocks
later invocations.
"""

import functools
from typing import Any, Callable, Dict, Optional, Tuple

from utilkit.config.settings import get_settings
from utilkit.ratecontrol.binding import PerInstanceBinding
from utilkit.utils.errors import InvalidArgument
from utilkit.utils.logging_setup import get_logger
from utilkit.utils.time import (
    Scheduler,
    TimerHandle,
    get_default_scheduler,
    validate_duration,
)

log = get_logger(__name__)


class Debouncer(PerInstanceBinding):
    """
    Defers a target operation until calls stop arriving for `wait_ms`.

    Args:
        target: Callable to run; its return value is ignored.
        wait_ms: Quiet period in milliseconds. Defaults to Settings.default_wait_ms.
                 A wait of 0 still defers to the scheduler's next opportunity.
        scheduler: Timer facility. Defaults to get_default_scheduler().

    Used as a method decorator, each instance gets its own Debouncer bound to
    that instance.

    Raises:
        InvalidArgument: If target is not callable or wait_ms is negative/non-numeric.
    """

    def __init__(
        self,
        target: Callable[..., Any],
        wait_ms: Optional[float] = None,
        scheduler: Optional[Scheduler] = None,
    ):
        if not callable(target):
            raise InvalidArgument(f"target must be callable, got: {target!r}")
        if wait_ms is None:
            wait_ms = get_settings().default_wait_ms

        self._target = target
        self._wait_ms = validate_duration("wait_ms", wait_ms)
        self._scheduler = scheduler if scheduler is not None else get_default_scheduler()
        self._pending: Optional[TimerHandle] = None
        self._last_args: Optional[Tuple[Tuple[Any, ...], Dict[str, Any]]] = None

    @property
    def wait_ms(self) -> float:
        return self._wait_ms

    @property
    def pending(self) -> bool:
        """True while a deferred fire is scheduled and has not run yet."""
        return self._pending is not None and self._pending.active

    def invoke(self, *args: Any, **kwargs: Any) -> None:
        """
        Record a call and (re)start the quiet-period timer.

        Returns nothing; the target's result is not propagated.
        """
        if self._pending is not None:
            self._scheduler.cancel(self._pending)
            log.debug("Debounce restarted for {}", self._target)
        self._last_args = (args, kwargs)
        self._pending = self._scheduler.schedule(self._wait_ms, self._fire)

    __call__ = invoke

    def cancel(self) -> None:
        """Drop any pending fire and the recorded arguments. Safe to call repeatedly."""
        if self._pending is not None:
            self._scheduler.cancel(self._pending)
            log.debug("Debounce cancelled for {}", self._target)
        self._pending = None
        self._last_args = None

    def flush(self) -> None:
        """Run the pending fire immediately, if there is one."""
        if not self.pending:
            return
        self._scheduler.cancel(self._pending)
        self._fire()

    def _fire(self) -> None:
        call = self._last_args
        self._pending = None
        self._last_args = None
        if call is None:
            return
        args, kwargs = call
        log.debug("Debounce firing {}", self._target)
        self._target(*args, **kwargs)

    def _bind(self, target: Callable[..., Any]) -> "Debouncer":
        return Debouncer(target, wait_ms=self._wait_ms, scheduler=self._scheduler)


def debounce(
    wait_ms: Optional[float] = None, scheduler: Optional[Scheduler] = None
) -> Callable[[Callable[..., Any]], Debouncer]:
    """
    Decorator form of Debouncer.

    **Usage**:
        @debounce(200, scheduler)
        def save(document):
            ...

        save(doc)        # deferred
        save.cancel()    # Debouncer methods stay available

    Args:
        wait_ms: Quiet period in milliseconds (defaults from settings).
        scheduler: Timer facility (defaults to get_default_scheduler()).

    Returns:
        Decorator that replaces the function with a Debouncer wrapping it.
    """

    def decorator(func: Callable[..., Any]) -> Debouncer:
        debouncer = Debouncer(func, wait_ms=wait_ms, scheduler=scheduler)
        functools.update_wrapper(debouncer, func)
        return debouncer

    return decorator
