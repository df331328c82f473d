import sys

from ..base import Receiver


class StdinReceiver(Receiver):
    """ One message per line of standard input, read in the calling thread.
        The stream ends when standard input reaches end-of-file.
    """

    keyword = 'stdin'

    def __init__(self, descriptor, stream=None):
        self.descriptor = descriptor
        self.stream = stream


    @classmethod
    def matches(cls, descriptor):
        return descriptor == cls.keyword


    def __iter__(self):

        stream = self.stream
        if stream is None:
            stream = sys.stdin

        for line in stream:
            if line.endswith('\n'):
                line = line[:-1]
                if line.endswith('\r'):
                    line = line[:-1]

            yield line


# end of class StdinReceiver


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
