"""
Exactly-once execution guard owned by a single configuration instance.

Each [OnceInitializer][nodeparams.core.once.OnceInitializer] carries its own
lock and [InitState][nodeparams.models.state.InitState]; there is no
module-level registry, so independent instances never interfere.

Semantics:

- The first ``run()`` executes the callable while holding the lock.
- Callers arriving during execution block until it completes.
- Callers arriving afterwards take a lock-free fast path and return
  immediately.
- If the callable raised, the state is still ``DONE``: the exception is
  recorded and re-raised to every caller, so side effects never run twice.

Examples:
    ```python
    once = OnceInitializer()
    once.run(load_everything)
    once.run(load_everything)  # no-op
    once.done  # True
    ```
"""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING

from nodeparams.models.state import InitState


if TYPE_CHECKING:
    from collections.abc import Callable


class OnceInitializer:
    """Run a callable at most once, no matter how many threads ask."""

    __slots__ = ("_error", "_lock", "_state")

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._state = InitState.UNINITIALIZED
        self._error: BaseException | None = None

    @property
    def state(self) -> InitState:
        return self._state

    @property
    def done(self) -> bool:
        """True once the guarded callable has finished, successfully or not."""
        return self._state is InitState.DONE

    @property
    def error(self) -> BaseException | None:
        """Exception raised by the guarded callable, if any."""
        return self._error

    def run(self, fn: Callable[[], object]) -> None:
        """Execute *fn* if no previous call has, otherwise wait for and mirror its outcome.

        Raises:
            RuntimeError: If called re-entrantly from inside *fn*.
            BaseException: Whatever *fn* raised on its single execution.
        """
        if self._state is not InitState.DONE:
            with self._lock:
                if self._state is InitState.INITIALIZING:
                    # Only the owning thread can hold an RLock mid-initialization
                    raise RuntimeError("re-entrant call to OnceInitializer.run()")
                if self._state is InitState.UNINITIALIZED:
                    self._execute(fn)
                    return

        if self._error is not None:
            raise self._error

    def _execute(self, fn: Callable[[], object]) -> None:
        self._state = InitState.INITIALIZING
        try:
            fn()
        except BaseException as e:
            self._error = e
            raise
        finally:
            self._state = InitState.DONE
