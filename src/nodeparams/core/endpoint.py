"""
Per-role endpoint resolution and transport size limits.

[EndpointConfig][nodeparams.core.endpoint.EndpointConfig] resolves where a
role is reachable: the local IPv4 address, the configured port (replaced by
an ephemeral one when a dynamic-port role finds it occupied), and, for
eager-listen roles, a bound listening socket.

[ServerEndpointConfig][nodeparams.core.endpoint.ServerEndpointConfig] and
[ClientEndpointConfig][nodeparams.core.endpoint.ClientEndpointConfig] add the
RPC message size limits for their side of the transport and wrap the whole
sequence in a per-instance
[OnceInitializer][nodeparams.core.once.OnceInitializer]:

```text
init_once(role)
  └── init(role)
  │     ├── ip    <- address_resolver()
  │     ├── port  <- "<role>.port" (+ conflict avoidance if dynamic_port)
  │     └── listener (if eager_listen)
  └── limits <- resolve_int("<role>.grpc.<side>Max{Send,Recv}Size", default)
```

Warning:
    The listener is a long-lived OS resource. It belongs to the caller once
    initialization returns and must be released with
    [close_listener()][nodeparams.core.endpoint.EndpointConfig.close_listener]
    on shutdown or failed startup.

Examples:
    ```python
    config = ServerEndpointConfig(ParamTable.from_yaml("config/nodeparams.yaml"))
    config.init_once(Role.QUERY_NODE)
    config.get_address()   # '10.0.0.12:21123'
    config.max_recv_size   # 2147483647
    ```
"""

from __future__ import annotations

from functools import partial
from typing import TYPE_CHECKING, ClassVar

from nodeparams.models.constants import (
    DEFAULT_CLIENT_MAX_RECV_SIZE,
    DEFAULT_CLIENT_MAX_SEND_SIZE,
    DEFAULT_SERVER_MAX_RECV_SIZE,
    DEFAULT_SERVER_MAX_SEND_SIZE,
    PORT_EPHEMERAL,
    PORT_MAX,
    PORT_MIN,
    Role,
)
from nodeparams.models.limits import SizeLimits
from nodeparams.utils.network import (
    check_port_available,
    get_available_port,
    local_ipv4,
    open_listener,
)

from .exceptions import ConfigurationError, ListenerBindError, PortAllocationError
from .limits import resolve_int
from .logger import Logger
from .once import OnceInitializer
from .params import ParamTable


if TYPE_CHECKING:
    import socket
    from collections.abc import Callable

    from nodeparams.models.constants import RoleCapabilities
    from nodeparams.models.state import InitState


def coerce_role(role: Role | str) -> Role:
    """Return *role* as a [Role][nodeparams.models.constants.Role].

    Raises:
        ConfigurationError: If *role* is not a known role name.
    """
    try:
        return Role(role)
    except ValueError as e:
        known = ", ".join(r.value for r in Role)
        raise ConfigurationError(f"unknown role {role!r} (expected one of: {known})") from e


class EndpointConfig:
    """IP, port and optional listener for one role.

    Attributes:
        role: Role this endpoint was initialized for (None before ``init()``).
        ip: Local IPv4 address from the address resolver.
        port: Resolved port. May differ from the configured value for
            dynamic-port roles, and is never 0 for them: a configured 0 is
            replaced by an OS-assigned port (taken from the bound listener
            for eager-listen roles).
        listener: Bound listening socket, only for eager-listen roles.

    Args:
        store: Parameter store; defaults to a
            [ParamTable][nodeparams.core.params.ParamTable] over the process
            environment and built-in defaults.
        address_resolver: Callable returning the local IPv4 address.
    """

    def __init__(
        self,
        store: ParamTable | None = None,
        *,
        address_resolver: Callable[[], str] | None = None,
    ) -> None:
        self._store = store if store is not None else ParamTable()
        self._resolve_address = address_resolver or local_ipv4
        self._logger = Logger("endpoint")
        self.role: Role | None = None
        self.ip = ""
        self.port = 0
        self.listener: socket.socket | None = None

    @property
    def store(self) -> ParamTable:
        return self._store

    def init(self, role: Role | str) -> None:
        """Resolve ip, port and (for eager-listen roles) the listener.

        Not guarded: calling it twice repeats every side effect. Composite
        configs expose ``init_once()`` for the guarded variant.

        Raises:
            ConfigurationError: Unknown role, or ``<role>.port`` missing,
                malformed or outside ``[0, 65535]``.
            PortAllocationError: A dynamic-port role found its port occupied
                and the OS refused to assign an ephemeral one.
            ListenerBindError: An eager-listen role could not bind ``ip:port``.
        """
        self.role = coerce_role(role)
        capabilities = self.role.capabilities
        self._logger = self._logger.bind(role=self.role.value)

        self.ip = self._resolve_address()
        self.port = self._resolve_port(capabilities)
        if capabilities.eager_listen:
            self._bind_listener()

    def _resolve_port(self, capabilities: RoleCapabilities) -> int:
        key = f"{self.role}.port"
        port = self._store.parse_int(key)
        if not PORT_MIN <= port <= PORT_MAX:
            raise ConfigurationError(f"{key}={port} is outside [{PORT_MIN}, {PORT_MAX}]")

        if not capabilities.dynamic_port:
            return port
        if port == PORT_EPHEMERAL:
            # eager-listen roles take their ephemeral port from the bind itself
            return port if capabilities.eager_listen else self._allocate_port(port)
        if check_port_available(port):
            return port
        return self._allocate_port(port)

    def _allocate_port(self, configured: int) -> int:
        try:
            available = get_available_port()
        except OSError as e:
            raise PortAllocationError(
                f"{self.role}: no ephemeral port could be allocated (configured {configured})"
            ) from e

        if configured == PORT_EPHEMERAL:
            self._logger.info("port_allocated", port=available)
        else:
            self._logger.warning("port_reassigned", configured_port=configured, port=available)
        return available

    def _bind_listener(self) -> None:
        try:
            self.listener = open_listener(self.ip, self.port)
        except OSError as e:
            raise ListenerBindError(f"{self.role}: cannot listen on {self.get_address()}") from e
        # port 0 binds an OS-chosen port; advertise what was actually bound
        self.port = self.listener.getsockname()[1]
        self._logger.info("listener_bound", address=self.get_address())

    def get_address(self) -> str:
        """Return ``"<ip>:<port>"`` using the resolved port."""
        return f"{self.ip}:{self.port}"

    @property
    def address(self) -> str:
        return self.get_address()

    def close_listener(self) -> None:
        """Close the eager listener, if any. Safe to call repeatedly."""
        listener, self.listener = self.listener, None
        if listener is not None:
            listener.close()
            self._logger.debug("listener_closed", address=self.get_address())


class TransportConfig(EndpointConfig):
    """Endpoint plus send/receive size limits for one transport side.

    Subclasses only declare data: the key suffixes under ``<role>.grpc.``
    and the fallback applied when a key is absent or invalid.
    """

    SEND_SIZE_KEY: ClassVar[str]
    RECV_SIZE_KEY: ClassVar[str]
    DEFAULT_MAX_SEND_SIZE: ClassVar[int]
    DEFAULT_MAX_RECV_SIZE: ClassVar[int]

    def __init__(
        self,
        store: ParamTable | None = None,
        *,
        address_resolver: Callable[[], str] | None = None,
    ) -> None:
        super().__init__(store, address_resolver=address_resolver)
        self._once = OnceInitializer()
        self.limits: SizeLimits | None = None

    @property
    def init_state(self) -> InitState:
        return self._once.state

    @property
    def initialized(self) -> bool:
        return self._once.done

    def init_once(self, role: Role | str) -> None:
        """Run the full initialization sequence exactly once for this instance.

        Concurrent callers block until the first call completes; later calls
        return immediately and ignore *role*. If the first call failed, every
        call re-raises that same error.
        """
        self._once.run(partial(self._init, role))

    def _init(self, role: Role | str) -> None:
        self.init(role)
        self.limits = self._resolve_limits()
        self._logger.info(
            "endpoint_initialized",
            address=self.get_address(),
            max_send_size=self.limits.max_send,
            max_recv_size=self.limits.max_recv,
        )

    def _resolve_limits(self) -> SizeLimits:
        prefix = f"{self.role}.grpc."
        return SizeLimits(
            max_send=resolve_int(
                self._store,
                prefix + self.SEND_SIZE_KEY,
                self.DEFAULT_MAX_SEND_SIZE,
                role=self.role,
            ),
            max_recv=resolve_int(
                self._store,
                prefix + self.RECV_SIZE_KEY,
                self.DEFAULT_MAX_RECV_SIZE,
                role=self.role,
            ),
        )

    @property
    def max_send_size(self) -> int:
        """Resolved send limit. Raises ``RuntimeError`` before ``init_once()``."""
        return self._require_limits().max_send

    @property
    def max_recv_size(self) -> int:
        """Resolved receive limit. Raises ``RuntimeError`` before ``init_once()``."""
        return self._require_limits().max_recv

    def _require_limits(self) -> SizeLimits:
        if self.limits is None:
            raise RuntimeError(f"{type(self).__name__} is not initialized; call init_once() first")
        return self.limits


class ServerEndpointConfig(TransportConfig):
    """Server side: limits default to the signed 32-bit maximum (effectively unbounded)."""

    SEND_SIZE_KEY = "serverMaxSendSize"
    RECV_SIZE_KEY = "serverMaxRecvSize"
    DEFAULT_MAX_SEND_SIZE = DEFAULT_SERVER_MAX_SEND_SIZE
    DEFAULT_MAX_RECV_SIZE = DEFAULT_SERVER_MAX_RECV_SIZE


class ClientEndpointConfig(TransportConfig):
    """Client side: limits default to 100 MiB to protect the caller's memory."""

    SEND_SIZE_KEY = "clientMaxSendSize"
    RECV_SIZE_KEY = "clientMaxRecvSize"
    DEFAULT_MAX_SEND_SIZE = DEFAULT_CLIENT_MAX_SEND_SIZE
    DEFAULT_MAX_RECV_SIZE = DEFAULT_CLIENT_MAX_RECV_SIZE
