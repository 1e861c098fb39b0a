"""Transport message size limits.

See Also:
    [resolve_int()][nodeparams.core.limits.resolve_int]: Produces the
        values stored in [SizeLimits][nodeparams.models.limits.SizeLimits].
    [TransportConfig][nodeparams.core.endpoint.TransportConfig]: Owns one
        instance per server or client configuration.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SizeLimits:
    """Maximum message sizes, in bytes, for one side of an RPC transport.

    Attributes:
        max_send: Largest message this side will send.
        max_recv: Largest message this side will accept.

    Raises:
        ValueError: If either limit is negative.
    """

    max_send: int
    max_recv: int

    def __post_init__(self) -> None:
        if self.max_send < 0:
            raise ValueError(f"max_send must be >= 0, got {self.max_send}")
        if self.max_recv < 0:
            raise ValueError(f"max_recv must be >= 0, got {self.max_recv}")
