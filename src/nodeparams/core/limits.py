"""Total integer resolution for transport size limits.

[resolve_int()][nodeparams.core.limits.resolve_int] is the single routine
behind all four size limits (server/client, send/recv). The limits differ
only by key suffix and fallback, which are kept as data on
[TransportConfig][nodeparams.core.endpoint.TransportConfig] subclasses.

Note:
    Resolution never raises. A missing key silently yields the fallback; a
    malformed or negative value yields the fallback and one
    ``size_limit_invalid`` warning.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .logger import Logger
from .params import parse_int_value


if TYPE_CHECKING:
    from .params import ParamTable


_logger = Logger("limits")


def resolve_int(
    store: ParamTable,
    key: str,
    fallback: int,
    *,
    role: str | None = None,
) -> int:
    """Resolve *key* to a non-negative integer, falling back on any problem.

    Args:
        store: Parameter store to read from.
        key: Fully qualified key, e.g. ``"proxy.grpc.clientMaxRecvSize"``.
        fallback: Value returned when the key is absent or invalid.
        role: Role name attached to log records.

    Returns:
        The parsed value, or exactly *fallback*.
    """
    raw = store.load(key)
    if raw is None:
        _logger.debug("size_limit_default", role=role, key=key, value=fallback)
        return fallback

    try:
        value = parse_int_value(raw)
        if value < 0:
            raise ValueError(f"size limit must be >= 0, got {value}")
    except ValueError as e:
        _logger.warning(
            "size_limit_invalid", role=role, key=key, value=raw, default=fallback, error=str(e)
        )
        return fallback

    _logger.debug("size_limit_resolved", role=role, key=key, value=value)
    return value
