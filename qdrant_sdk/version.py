"""
Client/server version compatibility checking.

The check is best effort: it never raises and never blocks client
construction. Problems are reported as warnings on the package logger.
"""

import logging
import threading
from typing import Callable, NamedTuple, Optional

logger = logging.getLogger(__name__)


class Version(NamedTuple):
    major: int
    minor: int


def parse_version(version: Optional[str]) -> Version:
    """Parse ``x.y[.z]`` into a Version.

    Args:
        version: Version string such as ``"1.12.0"``.

    Returns:
        Major and minor components.

    Raises:
        ValueError: If the string is empty or its first two components are
            not integers.
    """
    if not version:
        raise ValueError("Version is null")

    parts = version.split(".", 2)
    if len(parts) < 2:
        raise ValueError(
            f"Unable to parse version, expected format: x.y[.z], found: {version}"
        )

    major, minor = parts[0].strip(), parts[1].strip()
    if not (major.isdigit() and minor.isdigit()):
        raise ValueError(
            f"Unable to parse version, expected format: x.y[.z], found: {version}"
        )
    return Version(int(major), int(minor))


def is_compatible(client_version: Optional[str], server_version: Optional[str]) -> bool:
    """Check whether client and server versions can work together.

    Versions are compatible when they are identical, or when their major
    versions match and their minor versions differ by at most one.
    Unparseable versions are reported as incompatible.
    """
    if not client_version:
        logger.debug("Unable to compare with client version: %r", client_version)
        return False

    if not server_version:
        logger.debug("Unable to compare with server version: %r", server_version)
        return False

    if client_version == server_version:
        return True

    try:
        client = parse_version(client_version)
        server = parse_version(server_version)
    except ValueError as e:
        logger.debug("Unable to compare versions: %s", e)
        return False

    if client.major != server.major:
        return False
    return abs(client.minor - server.minor) <= 1


def check_compatibility(
    fetch_server_version: Callable[[], Optional[str]],
    client_version: str,
) -> Optional[bool]:
    """Probe the server and warn when versions do not match.

    Args:
        fetch_server_version: Callable returning the server version string.
        client_version: Version of this client.

    Returns:
        True or False when the versions could be compared, None when the
        server version could not be verified.
    """
    try:
        server_version = fetch_server_version()
    except Exception as e:
        logger.debug("Server version probe failed: %s", e)
        server_version = None

    if server_version and server_version == client_version:
        return True

    try:
        parse_version(server_version)
        parse_version(client_version)
    except ValueError:
        logger.warning(
            "Failed to obtain server version. Unable to check client-server "
            "compatibility. Set check_compatibility=False to skip version check."
        )
        return None

    if is_compatible(client_version, server_version):
        return True

    logger.warning(
        "Client version %s is incompatible with server version %s. Major "
        "versions should match and minor version difference must not exceed 1. "
        "Set check_compatibility=False to skip version check.",
        client_version,
        server_version,
    )
    return False


def start_compatibility_check(
    fetch_server_version: Callable[[], Optional[str]],
    client_version: str,
) -> threading.Thread:
    """Run check_compatibility() on a daemon thread and return the thread."""
    thread = threading.Thread(
        target=check_compatibility,
        args=(fetch_server_version, client_version),
        name="qdrant-compatibility-check",
        daemon=True,
    )
    thread.start()
    return thread
