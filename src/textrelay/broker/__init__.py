""" Output side of the relay. Every broker in the list built by
    :func:`default` receives every message; each destination descriptor,
    however, is attached to exactly one broker, the first one in the list
    that claims it.
"""

from ..base import ConfigurationError
from .stdout import StdoutBroker
from .udp import UdpBroker
from .websocket import Listener, WebSocketBroker


def default():
    """ Return a new list of brokers in matching priority order. The
        catch-all :class:`UdpBroker` is last.
    """

    brokers = list()
    brokers.append(StdoutBroker())
    brokers.append(WebSocketBroker())
    brokers.append(UdpBroker())

    return brokers


def select(brokers, descriptor):
    """ Return the first broker in *brokers* that matches the destination
        *descriptor*.
    """

    for broker in brokers:
        if broker.matches(descriptor):
            return broker

    raise ConfigurationError(f"no broker for destination {descriptor!r}")


def attach(brokers, descriptor):
    """ Attach the destination *descriptor* to the broker selected for it,
        and return that broker.
    """

    broker = select(brokers, descriptor)
    broker.add_destination(descriptor)
    return broker


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
