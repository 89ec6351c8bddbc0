"""
Call-rate controllers that wrap a target operation.

Debouncer defers a call until a burst goes quiet; Throttler lets at most one
call through per time window.
"""

from utilkit.ratecontrol.debounce import Debouncer, debounce
from utilkit.ratecontrol.throttle import Throttler, throttle

__all__ = ["Debouncer", "debounce", "Throttler", "throttle"]
