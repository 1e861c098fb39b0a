"""nodeparams exception hierarchy.

Separates configuration mistakes from fatal startup failures so callers can
decide whether to abort the process.

Exception hierarchy:

```text
NodeParamsError (base -- never raised directly)
├── ConfigurationError        -- unknown role, missing/malformed/out-of-range port
└── StartupError              -- fatal: the process cannot start
    ├── PortAllocationError   -- OS refused to assign an ephemeral port
    └── ListenerBindError     -- eager listener could not bind ip:port
```

Note:
    Size-limit values are never reported through this hierarchy. A missing
    or malformed limit is logged and replaced by its default (see
    [resolve_int()][nodeparams.core.limits.resolve_int]).

See Also:
    [ParamTable][nodeparams.core.params.ParamTable]: Raises
        [ConfigurationError][nodeparams.core.exceptions.ConfigurationError]
        from ``parse_int()``.
    [EndpointConfig][nodeparams.core.endpoint.EndpointConfig]: Raises the
        [StartupError][nodeparams.core.exceptions.StartupError] subclasses.
"""

from __future__ import annotations


class NodeParamsError(Exception):
    """Base exception for all nodeparams errors.

    Never raised directly -- always use a specific subclass.
    """


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


class ConfigurationError(NodeParamsError):
    """Invalid or missing configuration (unknown role, bad port value, bad YAML shape)."""


# ---------------------------------------------------------------------------
# Startup
# ---------------------------------------------------------------------------


class StartupError(NodeParamsError):
    """Base for fatal startup failures. Not retried; the process must exit.

    See Also:
        [PortAllocationError][nodeparams.core.exceptions.PortAllocationError]:
            Ephemeral port could not be obtained.
        [ListenerBindError][nodeparams.core.exceptions.ListenerBindError]:
            Advertised address could not be bound.
    """


class PortAllocationError(StartupError):
    """The OS refused to assign an ephemeral port (exhaustion or permission).

    The originating ``OSError`` is chained as ``__cause__``.
    """


class ListenerBindError(StartupError):
    """An eager-listen role could not bind its advertised ``ip:port``.

    The originating ``OSError`` is chained as ``__cause__``.
    """
