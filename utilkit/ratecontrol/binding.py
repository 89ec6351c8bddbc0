"""
Per-instance controllers for decorated methods.

When @debounce or @throttle decorates a method, the controller sits on the
class and every instance would otherwise share one timer and never receive
`self`. PerInstanceBinding makes the controller a descriptor: the first
access through an instance builds a controller bound to that instance and
caches it in the instance __dict__ under the method's name, so each object
gets its own independent state and later lookups skip the descriptor.
"""

import functools
from typing import Any, Optional


class PerInstanceBinding:
    """
    Mixin giving a controller method-binding behaviour.

    Subclasses implement _bind(target), returning a new controller of the
    same configuration that wraps `target`.
    """

    _attr_name: Optional[str] = None

    def __set_name__(self, owner: type, name: str) -> None:
        self._attr_name = name

    def __get__(self, instance: Any, owner: Optional[type] = None) -> Any:
        if instance is None:
            return self
        bound = self._bind(functools.partial(self._target, instance))
        functools.update_wrapper(bound, self._target)
        name = self._attr_name or getattr(self._target, "__name__", None)
        if name is not None:
            instance.__dict__[name] = bound
        return bound

    def _bind(self, target: Any) -> Any:
        raise NotImplementedError
