import logging
import socket

from .. import address
from ..base import Broker, ConfigurationError

log = logging.getLogger(__name__)


class UdpBroker(Broker):
    """ Send each message as one datagram to every ``host:port`` destination.
        This broker accepts any descriptor, and must therefore be the last
        one offered.

        Two ephemeral sockets are bound up front, one per address family;
        each destination is resolved when it is added, and thereafter always
        uses the socket matching its family. A host without IPv6 support
        still works for IPv4 destinations; adding an IPv6 destination on
        such a host raises :class:`ConfigurationError`.
    """

    def __init__(self):

        self.destinations = list()
        self.sockets = dict()

        self.sockets[socket.AF_INET] = self._bind(socket.AF_INET, ('0.0.0.0', 0))
        self.sockets[socket.AF_INET6] = self._bind(socket.AF_INET6, ('::', 0))


    def _bind(self, family, sockaddr):

        try:
            sock = socket.socket(family, socket.SOCK_DGRAM)
        except OSError as e:
            log.debug('no datagram socket for family %s: %s', family, e)
            return None

        try:
            sock.bind(sockaddr)
        except OSError as e:
            log.debug('cannot bind %s: %s', sockaddr, e)
            sock.close()
            return None

        return sock


    def matches(self, descriptor):
        return True


    def add_destination(self, descriptor):

        host, port = address.split(descriptor)
        family, sockaddr = address.resolve(host, port)

        if self.sockets.get(family) is None:
            raise ConfigurationError(f"address family of {descriptor!r} is not available")

        self.destinations.append((family, sockaddr))


    def send(self, message):

        if len(self.destinations) == 0:
            return

        data = message.encode('utf-8')

        for family, sockaddr in self.destinations:
            self.sockets[family].sendto(data, sockaddr)


# end of class UdpBroker


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
