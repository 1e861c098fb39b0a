"""Initialization state for once-only configuration setup."""

from __future__ import annotations

from enum import StrEnum


class InitState(StrEnum):
    """Tri-state flag owned by each [OnceInitializer][nodeparams.core.once.OnceInitializer].

    The only observable transition sequence is
    ``UNINITIALIZED -> INITIALIZING -> DONE``.
    """

    UNINITIALIZED = "uninitialized"
    INITIALIZING = "initializing"
    DONE = "done"
