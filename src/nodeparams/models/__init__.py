"""Pure data types with zero I/O for node roles and endpoint settings.

The models layer is the foundation of the diamond DAG. It has **no
dependencies** on any other nodeparams package -- only the Python standard
library. Value types use ``@dataclass(frozen=True, slots=True)``, and
validation happens in ``__post_init__`` so invalid instances never escape
the constructor.

Attributes:
    Role: Closed set of node roles; values double as config key prefixes.
    RoleCapabilities: Per-role behaviour flags (dynamic port, eager listen).
    ROLE_CAPABILITIES: Read-only table mapping every Role to its flags.
    SizeLimits: Send/receive message size limits for one transport side.
    InitState: Tri-state flag used by once-only initialization.

See Also:
    [nodeparams.models.constants][]: Roles, capabilities and defaults.
    [nodeparams.models.limits][]: Size limit value type.
    [nodeparams.models.state][]: Initialization state enum.
"""

from .constants import (
    DEFAULT_CLIENT_MAX_RECV_SIZE,
    DEFAULT_CLIENT_MAX_SEND_SIZE,
    DEFAULT_SERVER_MAX_RECV_SIZE,
    DEFAULT_SERVER_MAX_SEND_SIZE,
    PORT_EPHEMERAL,
    PORT_MAX,
    PORT_MIN,
    ROLE_CAPABILITIES,
    Role,
    RoleCapabilities,
)
from .limits import SizeLimits
from .state import InitState


__all__ = [
    "DEFAULT_CLIENT_MAX_RECV_SIZE",
    "DEFAULT_CLIENT_MAX_SEND_SIZE",
    "DEFAULT_SERVER_MAX_RECV_SIZE",
    "DEFAULT_SERVER_MAX_SEND_SIZE",
    "PORT_EPHEMERAL",
    "PORT_MAX",
    "PORT_MIN",
    "ROLE_CAPABILITIES",
    "InitState",
    "Role",
    "RoleCapabilities",
    "SizeLimits",
]
