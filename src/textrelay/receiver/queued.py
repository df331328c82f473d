""" Common machinery for receivers backed by a background thread. The thread
    pushes each decoded message onto an unbounded FIFO queue; iterating over
    the receiver pulls them off again, in order, in the foreground.
"""

import logging
import queue
import threading

from ..base import Receiver

log = logging.getLogger(__name__)


class _Failure:
    """ Marker carrying the exception that stopped the background thread.
    """

    def __init__(self, exception):
        self.exception = exception



class QueuedReceiver(Receiver):
    """ Subclasses implement :func:`receive`, which blocks until the next
        message is available and returns it as a string. Any exception
        raised by :func:`receive` ends the background thread; the same
        exception is raised to whoever is iterating over the receiver once
        the messages queued ahead of it have been consumed.
    """

    def __init__(self, descriptor):
        self.descriptor = descriptor
        self.queue = queue.SimpleQueue()
        self.thread = None


    def start(self):
        """ Start the background thread. Subclasses call this at the end of
            their own initialization, once the transport is ready.
        """

        name = type(self).__name__ + ' ' + self.descriptor
        self.thread = threading.Thread(target=self.run, name=name)
        self.thread.daemon = True
        self.thread.start()


    def receive(self):
        raise NotImplementedError('receive() must be implemented by a subclass')


    def run(self):

        while True:
            try:
                message = self.receive()
            except Exception as e:
                log.debug('%s receiver stopped: %r', self.descriptor, e)
                self.queue.put(_Failure(e))
                break

            self.queue.put(message)


    def __iter__(self):

        while True:
            message = self.queue.get()

            if isinstance(message, _Failure):
                raise message.exception

            yield message


# end of class QueuedReceiver


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
