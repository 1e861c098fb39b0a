"""Core layer: parameter store, endpoint resolution and once-only initialization.

Sits at the top of the diamond DAG below the CLI -- depends on
``nodeparams.models`` and ``nodeparams.utils``.

Attributes:
    ParamTable: Layered key/value store (overrides, environment, YAML,
        built-in defaults). See [ParamTable][nodeparams.core.params.ParamTable].
    EndpointConfig: Per-role ip/port resolution with conflict avoidance and
        eager listener acquisition.
    ServerEndpointConfig: Endpoint plus server-side size limits.
    ClientEndpointConfig: Endpoint plus client-side size limits.
    OnceInitializer: Per-instance exactly-once guard.
    resolve_int: Total integer resolution with typed fallback.
    Logger: Structured logger supporting key=value and JSON output modes.
    load_yaml: Safe YAML loading with ``yaml.safe_load()``.

Examples:
    ```python
    from nodeparams.core import ClientEndpointConfig, ParamTable

    config = ClientEndpointConfig(ParamTable(env_prefix="NODEPARAMS_"))
    config.init_once("proxy")
    ```
"""

from .endpoint import (
    ClientEndpointConfig,
    EndpointConfig,
    ServerEndpointConfig,
    TransportConfig,
    coerce_role,
)
from .exceptions import (
    ConfigurationError,
    ListenerBindError,
    NodeParamsError,
    PortAllocationError,
    StartupError,
)
from .limits import resolve_int
from .logger import Logger, StructuredFormatter, format_kv_pairs, setup_logging
from .once import OnceInitializer
from .params import DEFAULT_PARAMS, ParamTable, ParamTableConfig
from .yaml import load_yaml


__all__ = [
    "DEFAULT_PARAMS",
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
    "ServerEndpointConfig",
    "StartupError",
    "StructuredFormatter",
    "TransportConfig",
    "coerce_role",
    "format_kv_pairs",
    "load_yaml",
    "resolve_int",
    "setup_logging",
]
