from websockets.sync.client import connect

from .. import config
from ..base import DecodeError
from .queued import QueuedReceiver


class WebSocketReceiver(QueuedReceiver):
    """ One message per frame received over an outbound websocket connection.
        The connection is opened, and the handshake completed, before the
        constructor returns. Binary frames are decoded as UTF-8 text.

        The stream never ends on its own: the peer closing the connection is
        raised as :class:`websockets.exceptions.ConnectionClosed` to the
        iterating caller.
    """

    schemes = ('ws://', 'wss://')

    def __init__(self, descriptor):
        QueuedReceiver.__init__(self, descriptor)

        self.connection = connect(descriptor,
                        open_timeout=config.handshake_timeout(),
                        close_timeout=config.close_timeout(),
                        max_size=config.max_size())

        self.start()


    @classmethod
    def matches(cls, descriptor):
        return descriptor.startswith(cls.schemes)


    def receive(self):

        message = self.connection.recv()

        if isinstance(message, bytes):
            try:
                message = message.decode('utf-8')
            except UnicodeDecodeError as e:
                raise DecodeError(f"frame from {self.descriptor} is not UTF-8: {e}") from e

        return message


# end of class WebSocketReceiver


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
