"""TCP port probing, ephemeral port allocation and local address lookup.

All functions perform short-lived blocking socket syscalls and are meant to
run once during process startup, not on a hot path.

Note:
    [check_port_available()][nodeparams.utils.network.check_port_available]
    is a point-in-time probe. Another process can bind the port between the
    probe and the real listener being created; this check-then-rebind race
    is accepted for single-process startup. Callers needing a stronger
    guarantee should keep the probing socket open and hand it over as the
    listener instead (see
    [open_listener()][nodeparams.utils.network.open_listener]).

See Also:
    [EndpointConfig][nodeparams.core.endpoint.EndpointConfig]: The only
        consumer; wraps ``OSError`` from this module into the typed
        startup errors of [nodeparams.core.exceptions][].
"""

from __future__ import annotations

import contextlib
import logging
import os
import socket
from typing import Final


logger = logging.getLogger("utils.network")

ALL_INTERFACES: Final[str] = ""
LOOPBACK_IPV4: Final[str] = "127.0.0.1"
DEFAULT_BACKLOG: Final[int] = 128

# Non-routable probe target: a UDP connect() selects the outbound interface
# without sending any packet.
_ROUTE_PROBE_ADDR: Final[tuple[str, int]] = ("10.255.255.255", 1)


def _new_tcp_socket() -> socket.socket:
    """Create an IPv4 TCP socket with the same reuse semantics as a server listener.

    ``SO_REUSEADDR`` is only set on POSIX, where it permits rebinding ports in
    ``TIME_WAIT`` but still refuses ports held by a listening socket. On
    Windows it would allow stealing an active port, so it is left unset.
    """
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    if os.name == "posix":
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
    return sock


def check_port_available(port: int) -> bool:
    """Check whether a TCP listener could bind *port* on all interfaces right now.

    Binds a socket to ``("", port)`` and releases it immediately.

    Args:
        port: TCP port number to probe.

    Returns:
        True if the bind succeeded, False if the OS refused it for any reason
        (port in use, permission denied, invalid port).
    """
    sock = _new_tcp_socket()
    try:
        sock.bind((ALL_INTERFACES, port))
        sock.listen(1)
    except (OSError, OverflowError):
        return False
    finally:
        sock.close()
    return True


def get_available_port() -> int:
    """Obtain a free port from the operating system.

    Binds to port 0 so the kernel picks an unused ephemeral port, reads the
    assigned number back from the socket's local address and releases the
    socket.

    Returns:
        A port number in ``(0, 65535]`` that was bindable at the moment of
        return.

    Raises:
        OSError: If the OS refuses the bind (port exhaustion or permission).
            There is no further fallback; callers treat this as fatal.
    """
    with _new_tcp_socket() as sock:
        sock.bind((ALL_INTERFACES, 0))
        sock.listen(1)
        port: int = sock.getsockname()[1]
    logger.debug("ephemeral_port_allocated port=%s", port)
    return port


def open_listener(host: str, port: int, *, backlog: int = DEFAULT_BACKLOG) -> socket.socket:
    """Bind and listen a TCP socket at ``host:port``.

    The returned socket is owned by the caller, who must close it on shutdown
    or failed startup.

    Raises:
        OSError: If the address cannot be bound.
    """
    sock = _new_tcp_socket()
    try:
        sock.bind((host, port))
        sock.listen(backlog)
    except BaseException:
        sock.close()
        raise
    return sock


def local_ipv4() -> str:
    """Return the IPv4 address of this host's primary outbound interface.

    Tries the routing table first (UDP connect to a non-routable address),
    then the address the hostname resolves to. Falls back to the loopback
    address when the host has no usable network configuration.
    """
    with contextlib.suppress(OSError), socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
        sock.connect(_ROUTE_PROBE_ADDR)
        ip: str = sock.getsockname()[0]
        if ip and ip != "0.0.0.0":  # noqa: S104
            return ip

    with contextlib.suppress(OSError, UnicodeError):
        ip = socket.gethostbyname(socket.gethostname())
        if not ip.startswith("127."):
            return ip

    logger.warning("local_ipv4_fallback ip=%s", LOOPBACK_IPV4)
    return LOOPBACK_IPV4
