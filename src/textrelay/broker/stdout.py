import sys

from ..base import Broker


class StdoutBroker(Broker):
    """ Write each message as one line on standard output. Nothing is written
        until the ``stdout`` destination has been added at least once; adding
        it again changes nothing.
    """

    keyword = 'stdout'

    def __init__(self, stream=None):
        self.enabled = False
        self.stream = stream


    def matches(self, descriptor):
        return descriptor == self.keyword


    def add_destination(self, descriptor):
        self.enabled = True


    def send(self, message):

        if self.enabled == False:
            return

        stream = self.stream
        if stream is None:
            stream = sys.stdout

        stream.write(message + '\n')
        stream.flush()


# end of class StdoutBroker


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
