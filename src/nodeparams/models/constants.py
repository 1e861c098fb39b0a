"""Shared constants for the models layer.

Defines the closed set of node roles, the per-role capability table, and
the transport size-limit defaults. Placing them here keeps the role
vocabulary free of any I/O so both ``nodeparams.utils`` and
``nodeparams.core`` can depend on it.

See Also:
    [EndpointConfig][nodeparams.core.endpoint.EndpointConfig]: Looks up
        [RoleCapabilities][nodeparams.models.constants.RoleCapabilities]
        once per initialization instead of comparing role identities.
    [ParamTable][nodeparams.core.params.ParamTable]: Uses the
        [Role][nodeparams.models.constants.Role] values as config key prefixes.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from types import MappingProxyType
from typing import TYPE_CHECKING, Final


if TYPE_CHECKING:
    from collections.abc import Mapping


class Role(StrEnum):
    """Logical identity of a node process.

    The string value is the prefix of every configuration key the role
    consumes (``query-node.port``, ``query-node.grpc.serverMaxSendSize``).

    Attributes:
        PROXY: Client-facing access layer.
        DATA_NODE: Persists incoming data segments.
        INDEX_NODE: Builds indexes over sealed segments.
        QUERY_NODE: Serves search and query requests.
        ROOT_COORD: Coordinates DDL and timestamp allocation.
        DATA_COORD: Coordinates data nodes.
        QUERY_COORD: Coordinates query nodes.
        INDEX_COORD: Coordinates index nodes.

    Warning:
        Behaviour must be selected through
        [capabilities][nodeparams.models.constants.Role.capabilities],
        never by comparing members against each other.
    """

    PROXY = "proxy"
    DATA_NODE = "data-node"
    INDEX_NODE = "index-node"
    QUERY_NODE = "query-node"
    ROOT_COORD = "root-coord"
    DATA_COORD = "data-coord"
    QUERY_COORD = "query-coord"
    INDEX_COORD = "index-coord"

    @property
    def capabilities(self) -> RoleCapabilities:
        """Capability flags for this role from ``ROLE_CAPABILITIES``."""
        return ROLE_CAPABILITIES[self]


@dataclass(frozen=True, slots=True)
class RoleCapabilities:
    """Endpoint behaviour flags attached to a [Role][nodeparams.models.constants.Role].

    Attributes:
        dynamic_port: If the configured port is occupied at startup, replace
            it with an OS-assigned ephemeral port. Set for roles whose
            address is advertised to peers after startup.
        eager_listen: Bind the listening socket during configuration
            initialization instead of at server start.
    """

    dynamic_port: bool = False
    eager_listen: bool = False


ROLE_CAPABILITIES: Final[Mapping[Role, RoleCapabilities]] = MappingProxyType(
    {
        Role.PROXY: RoleCapabilities(dynamic_port=True),
        Role.DATA_NODE: RoleCapabilities(dynamic_port=True, eager_listen=True),
        Role.INDEX_NODE: RoleCapabilities(dynamic_port=True),
        Role.QUERY_NODE: RoleCapabilities(dynamic_port=True),
        Role.ROOT_COORD: RoleCapabilities(),
        Role.DATA_COORD: RoleCapabilities(),
        Role.QUERY_COORD: RoleCapabilities(),
        Role.INDEX_COORD: RoleCapabilities(),
    }
)


# Transport size limits (bytes)
DEFAULT_SERVER_MAX_SEND_SIZE: Final[int] = 2**31 - 1
DEFAULT_SERVER_MAX_RECV_SIZE: Final[int] = 2**31 - 1
DEFAULT_CLIENT_MAX_SEND_SIZE: Final[int] = 100 * 1024 * 1024
DEFAULT_CLIENT_MAX_RECV_SIZE: Final[int] = 100 * 1024 * 1024

PORT_MIN: Final[int] = 0
# Binding this port lets the OS pick a free ephemeral port
PORT_EPHEMERAL: Final[int] = 0
PORT_MAX: Final[int] = 65_535
