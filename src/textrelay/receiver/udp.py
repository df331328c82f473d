import socket

from .. import address
from .. import config
from ..base import DecodeError
from .queued import QueuedReceiver


class UdpReceiver(QueuedReceiver):
    """ One message per datagram arriving on a local ``host:port`` address.
        This variant accepts any descriptor, and must therefore be the last
        one offered.
    """

    def __init__(self, descriptor):
        QueuedReceiver.__init__(self, descriptor)

        host, port = address.split(descriptor)
        family, sockaddr = address.resolve(host, port, passive=True)

        self.size = config.datagram_size()
        self.socket = socket.socket(family, socket.SOCK_DGRAM)
        self.socket.bind(sockaddr)
        self.address = self.socket.getsockname()

        self.start()


    @classmethod
    def matches(cls, descriptor):
        return True


    def receive(self):

        data = self.socket.recv(self.size)

        try:
            return data.decode('utf-8')
        except UnicodeDecodeError as e:
            raise DecodeError(f"datagram on {self.descriptor} is not UTF-8: {e}") from e


# end of class UdpReceiver


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
