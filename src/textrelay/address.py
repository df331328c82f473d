""" Translate descriptors into socket addresses. A bare descriptor takes the
    form ``host:port``, where an IPv6 host is enclosed in square brackets
    (``[::1]:9``); a URI descriptor takes the form ``scheme://host:port``,
    optionally followed by a path.

    Resolution is always done once, up front; the relay never looks at a
    descriptor again after setup.
"""

from __future__ import annotations

import socket
import urllib.parse
from typing import Tuple

from .base import ConfigurationError


def split(descriptor: str) -> Tuple[str, int]:
    """ Split a ``host:port`` descriptor into its host and integer port.
        Square brackets around an IPv6 host are removed. An empty host is
        permitted and means "any local address" when binding.
    """

    host, separator, port = descriptor.rpartition(':')

    if separator == '':
        raise ConfigurationError(f"expected host:port, got {descriptor!r}")

    if host.startswith('[') and host.endswith(']'):
        host = host[1:-1]

    return host, _port(port, descriptor)


def split_uri(descriptor: str) -> Tuple[str, int]:
    """ Return the host and port portion of a ``scheme://host:port`` URI.
    """

    parsed = urllib.parse.urlsplit(descriptor)

    try:
        port = parsed.port
    except ValueError:
        port = None

    if port is None:
        raise ConfigurationError(f"no port in {descriptor!r}")

    host = parsed.hostname
    if host is None:
        host = ''

    return host, port


def _port(port, descriptor):

    try:
        port = int(port)
    except ValueError:
        raise ConfigurationError(f"invalid port in {descriptor!r}")

    if port < 0 or port > 65535:
        raise ConfigurationError(f"port out of range in {descriptor!r}")

    return port


def resolve(host: str, port: int, kind=socket.SOCK_DGRAM, passive=False):
    """ Resolve *host* and *port* to a single ``(family, sockaddr)`` pair,
        taking the first answer offered by the resolver. If *passive* is True
        the result is suitable for binding a local socket, and an empty host
        selects the wildcard address.
    """

    flags = 0
    if passive:
        flags = socket.AI_PASSIVE

    if host == '':
        host = None

    try:
        answers = socket.getaddrinfo(host, port, socket.AF_UNSPEC, kind, 0, flags)
    except socket.gaierror as e:
        raise ConfigurationError(f"cannot resolve {host}:{port}: {e}") from e

    if len(answers) == 0:
        raise ConfigurationError(f"no addresses for {host}:{port}")

    family, _type, _proto, _name, sockaddr = answers[0]
    return family, sockaddr


def render(sockaddr):
    """ Render a socket address the way a descriptor would spell it.
    """

    host = sockaddr[0]
    port = sockaddr[1]

    if ':' in host:
        host = '[' + host + ']'

    return f"{host}:{port}"


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
