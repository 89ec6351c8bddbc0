"""
Throttle: let an operation run at most once per time window.

**Conceptual**: A Throttler wraps a target operation and a window length.
When no window is open, invoke() runs the target immediately and opens a
window of `limit_ms`. Calls that land while the window is open are dropped:
no arguments are recorded and nothing is deferred. When the window elapses
the next call runs immediately again.

Example timeline (limit_ms=100, leading edge only):
    t=0    invoke("a")   -> target("a") runs, window open until t=100
    t=50   invoke("b")   -> dropped
    t=150  invoke("c")   -> target("c") runs, window open until t=250

**Trailing variant**: With `trailing=True`, the latest call dropped inside an
open window is remembered and runs when the window closes, which opens a new
window. This is an alternative configuration, not the default.

**Failure semantics**: The leading fire runs synchronously inside invoke(),
so an error from the target propagates to that caller. The window is opened
before the target runs, so the Throttler stays consistent either way.
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


class Throttler(PerInstanceBinding):
    """
    Runs a target operation at most once per `limit_ms` window.

    Args:
        target: Callable to run; its return value is ignored.
        limit_ms: Window length in milliseconds. Defaults to Settings.default_limit_ms.
        scheduler: Timer facility used to close the window.
                   Defaults to get_default_scheduler().
        trailing: If True, the last call suppressed inside a window runs when
                  the window closes. Default False (leading edge only).

    Used as a method decorator, each instance gets its own Throttler bound to
    that instance.

    Raises:
        InvalidArgument: If target is not callable or limit_ms is negative/non-numeric.
    """

    def __init__(
        self,
        target: Callable[..., Any],
        limit_ms: Optional[float] = None,
        scheduler: Optional[Scheduler] = None,
        trailing: bool = False,
    ):
        if not callable(target):
            raise InvalidArgument(f"target must be callable, got: {target!r}")
        if limit_ms is None:
            limit_ms = get_settings().default_limit_ms

        self._target = target
        self._limit_ms = validate_duration("limit_ms", limit_ms)
        self._scheduler = scheduler if scheduler is not None else get_default_scheduler()
        self._trailing = trailing
        self._window_open = False
        self._pending: Optional[TimerHandle] = None
        self._last_args: Optional[Tuple[Tuple[Any, ...], Dict[str, Any]]] = None

    @property
    def limit_ms(self) -> float:
        return self._limit_ms

    @property
    def trailing(self) -> bool:
        return self._trailing

    @property
    def window_open(self) -> bool:
        """True while calls are being suppressed."""
        return self._window_open

    def invoke(self, *args: Any, **kwargs: Any) -> None:
        """
        Run the target now if no window is open, otherwise drop the call.

        In trailing mode a dropped call's arguments replace any previously
        dropped ones and run when the window closes.
        """
        if self._window_open:
            if self._trailing:
                self._last_args = (args, kwargs)
            else:
                log.debug("Throttle dropped call to {}", self._target)
            return
        self._run(args, kwargs)

    __call__ = invoke

    def cancel(self) -> None:
        """Close the window and forget any trailing call. Safe to call repeatedly."""
        if self._pending is not None:
            self._scheduler.cancel(self._pending)
            log.debug("Throttle cancelled for {}", self._target)
        self._pending = None
        self._window_open = False
        self._last_args = None

    def _run(self, args: Tuple[Any, ...], kwargs: Dict[str, Any]) -> None:
        self._window_open = True
        self._pending = self._scheduler.schedule(self._limit_ms, self._close_window)
        log.debug("Throttle firing {}", self._target)
        self._target(*args, **kwargs)

    def _close_window(self) -> None:
        self._pending = None
        self._window_open = False
        call = self._last_args
        self._last_args = None
        if call is not None:
            self._run(*call)

    def _bind(self, target: Callable[..., Any]) -> "Throttler":
        return Throttler(
            target, limit_ms=self._limit_ms, scheduler=self._scheduler, trailing=self._trailing
        )


def throttle(
    limit_ms: Optional[float] = None,
    scheduler: Optional[Scheduler] = None,
    trailing: bool = False,
) -> Callable[[Callable[..., Any]], Throttler]:
    """
    Decorator form of Throttler.

    Args:
        limit_ms: Window length in milliseconds (defaults from settings).
        scheduler: Timer facility (defaults to get_default_scheduler()).
        trailing: Run the last suppressed call when the window closes.

    Returns:
        Decorator that replaces the function with a Throttler wrapping it.
    """

    def decorator(func: Callable[..., Any]) -> Throttler:
        throttler = Throttler(func, limit_ms=limit_ms, scheduler=scheduler, trailing=trailing)
        functools.update_wrapper(throttler, func)
        return throttler

    return decorator
