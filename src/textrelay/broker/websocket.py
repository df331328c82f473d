""" Websocket fan-out server. Each ``ws://host:port`` destination becomes a
    :class:`Listener`: a listening socket with a background thread accepting
    clients, and the list of clients connected so far. Every message sent
    through the :class:`WebSocketBroker` goes to every live client of every
    listener.

    There is no keep-alive traffic. A client's health is checked just before
    each delivery with a read that never blocks; clients found to be closed
    or reset are dropped from the list on the spot, and are never written to
    again. Clients are not expected to send anything: an inbound application
    message is treated as a fatal :class:`ProtocolViolation`.
"""

import logging
import socket
import threading

from websockets.exceptions import ConnectionClosed, ConnectionClosedError, ConnectionClosedOK
from websockets.protocol import State
from websockets.server import ServerProtocol
from websockets.sync.server import ServerConnection

from .. import address
from .. import config
from ..base import Broker, ProtocolViolation

log = logging.getLogger(__name__)


class Listener:
    """ Accept websocket clients on one local address. The opening handshake
        for each client is completed in the accept thread before the client
        is added to :attr:`connections`; a slow client only delays the
        arrival of other new clients, never message delivery.

        :attr:`connections` is appended to only by the accept thread, and
        filtered only by :func:`send`; both hold :attr:`lock` while doing so.
    """

    def __init__(self, host, port):

        family, sockaddr = address.resolve(host, port, socket.SOCK_STREAM, passive=True)

        self.connections = list()
        self.lock = threading.Lock()

        self.max_size = config.max_size()
        self.handshake_timeout = config.handshake_timeout()
        self.close_timeout = config.close_timeout()

        self.socket = socket.create_server(sockaddr, family=family)
        self.address = self.socket.getsockname()
        self.name = address.render(self.address)

        self.thread = threading.Thread(target=self.run, name='Listener ' + self.name)
        self.thread.daemon = True
        self.thread.start()


    def run(self):

        # Errors from accept() are not handled here: they escape the thread,
        # and are fatal to the process.

        while True:
            sock, peer = self.socket.accept()
            connection = self.handshake(sock, peer)

            if connection is None:
                continue

            peer = address.render(peer)
            log.info('Connected: %s.', peer)

            # The peer address is kept alongside the connection; it can no
            # longer be queried once the socket is closed.

            with self.lock:
                self.connections.append((connection, peer))


    def handshake(self, sock, peer):
        """ Complete the websocket opening handshake on a freshly accepted
            socket. Returns the open connection, or None if the client did
            not complete the handshake; the socket is closed in that case.
        """

        sock.setsockopt(socket.IPPROTO_TCP, socket.TCP_NODELAY, True)

        protocol = ServerProtocol(max_size=self.max_size)
        connection = ServerConnection(sock, protocol,
                        ping_interval=None,
                        close_timeout=self.close_timeout)

        try:
            connection.handshake(timeout=self.handshake_timeout)
        except Exception as e:
            log.warning('Handshake failed: %s: %s', address.render(peer), e)
            connection.close_socket()
            connection.recv_events_thread.join()
            return None

        return connection


    def send(self, message):
        """ Deliver *message* to every live connection, dropping any found to
            be dead along the way. The lock is held for the entire pass,
            writes included: this relies on the kernel socket buffer keeping
            each write short, which is true unless a client stops reading
            altogether.
        """

        with self.lock:
            self.connections[:] = [entry for entry in self.connections
                                        if self.deliver(entry, message)]


    def deliver(self, entry, message):
        """ Probe, then write to, one connection. Returns True if the
            connection should be kept for the next message.
        """

        connection, peer = entry

        try:
            unexpected = connection.recv(timeout=0)
        except TimeoutError:
            # Nothing pending, which is the normal state of affairs.
            pass
        except ConnectionClosedOK:
            log.info('Socket closed: %s.', peer)
            return False
        except ConnectionClosedError:
            log.info('Reset without closing handshake: %s.', peer)
            return False
        else:
            raise ProtocolViolation(f"unexpected message from {peer}: {unexpected!r}")

        try:
            connection.send(message)
        except ConnectionClosed:
            log.info('Connection closed: %s.', peer)
            return False
        except ConnectionAbortedError:
            log.info('Connection aborted: %s.', peer)
            return False
        except ConnectionResetError:
            log.info('Connection reset: %s.', peer)
            return False

        return connection.protocol.state is State.OPEN


# end of class Listener



class WebSocketBroker(Broker):
    """ Fan each message out to every client connected to any of the
        attached ``ws://host:port`` listen addresses.
    """

    scheme = 'ws://'

    def __init__(self):
        self.listeners = list()


    def matches(self, descriptor):
        return descriptor.startswith(self.scheme)


    def add_destination(self, descriptor):

        host, port = address.split_uri(descriptor)
        listener = Listener(host, port)
        self.listeners.append(listener)

        log.info('Listening on ws://%s.', listener.name)


    def send(self, message):
        for listener in self.listeners:
            listener.send(message)


# end of class WebSocketBroker


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
