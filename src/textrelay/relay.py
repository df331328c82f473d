""" The relay loop: one receiver in, any number of brokers out.
"""

import logging

from . import broker
from . import receiver

log = logging.getLogger(__name__)


class Relay:
    """ Wire the receiver selected for the *source* descriptor to the brokers
        in *brokers*, attaching each of the *destinations* descriptors to the
        first broker that claims it. If *brokers* is not specified the
        standard set from :func:`textrelay.broker.default` is used.

        Nothing is relayed until :func:`run` is invoked.
    """

    def __init__(self, source, destinations=(), brokers=None):

        self.receiver = receiver.create(source)

        if brokers is None:
            brokers = broker.default()

        self.brokers = list(brokers)

        for destination in destinations:
            chosen = broker.attach(self.brokers, destination)
            log.debug('%s attached to %s', destination, type(chosen).__name__)


    def run(self):
        """ Relay messages until the receiver runs dry. Every broker sees every
            message, whether or not it has any destinations; the next message
            is not requested until all of them have returned. Returns the
            number of messages relayed.
        """

        count = 0

        for message in self.receiver:
            for output in self.brokers:
                output.send(message)

            count += 1

        return count


# end of class Relay


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
