r"""nodeparams -- Runtime endpoint configuration for distributed node roles.

Resolves the IP/port each role of a distributed service binds or connects
to, and the maximum RPC message sizes on its server and client side.

Architecture follows a **diamond DAG** dependency structure where imports
flow strictly downward:

```text
              __main__         CLI entry point
                 |
               core            ParamTable, endpoint configs, once-guard, logging
              /    \
          utils     |          Port probing, ephemeral ports, local IPv4
              \    /
              models           Roles, capabilities, size limits (zero I/O)
```

Note:
    For lightweight usage, import directly from subpackages::

        from nodeparams.models import Role
        from nodeparams.core import ServerEndpointConfig

    Top-level imports (``from nodeparams import Role``) use lazy loading
    and resolve on first access.
"""

import importlib
from importlib.metadata import version as _get_version


__version__ = _get_version("nodeparams")

__all__ = [
    "ClientEndpointConfig",
    "ConfigurationError",
    "EndpointConfig",
    "ListenerBindError",
    "Logger",
    "NodeParamsError",
    "OnceInitializer",
    "ParamTable",
    "ParamTableConfig",
    "PortAllocationError",
    "Role",
    "RoleCapabilities",
    "ServerEndpointConfig",
    "SizeLimits",
]

_LAZY_IMPORTS: dict[str, tuple[str, str]] = {
    "ClientEndpointConfig": ("nodeparams.core", "ClientEndpointConfig"),
    "ConfigurationError": ("nodeparams.core", "ConfigurationError"),
    "EndpointConfig": ("nodeparams.core", "EndpointConfig"),
    "ListenerBindError": ("nodeparams.core", "ListenerBindError"),
    "Logger": ("nodeparams.core", "Logger"),
    "NodeParamsError": ("nodeparams.core", "NodeParamsError"),
    "OnceInitializer": ("nodeparams.core", "OnceInitializer"),
    "ParamTable": ("nodeparams.core", "ParamTable"),
    "ParamTableConfig": ("nodeparams.core", "ParamTableConfig"),
    "PortAllocationError": ("nodeparams.core", "PortAllocationError"),
    "ServerEndpointConfig": ("nodeparams.core", "ServerEndpointConfig"),
    "Role": ("nodeparams.models", "Role"),
    "RoleCapabilities": ("nodeparams.models", "RoleCapabilities"),
    "SizeLimits": ("nodeparams.models", "SizeLimits"),
}


def __getattr__(name: str) -> object:
    if name in _LAZY_IMPORTS:
        module_path, attr_name = _LAZY_IMPORTS[name]
        module = importlib.import_module(module_path)
        value = getattr(module, attr_name)
        globals()[name] = value  # Cache for subsequent access
        return value
    raise AttributeError(f"module 'nodeparams' has no attribute {name!r}")


def __dir__() -> list[str]:
    return __all__
