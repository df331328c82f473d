""" Input side of the relay. Exactly one receiver is active per run; it is
    chosen by offering the source descriptor to each variant in
    :data:`variants`, in order, and taking the first that claims it.
"""

from ..base import ConfigurationError
from .queued import QueuedReceiver
from .stdin import StdinReceiver
from .udp import UdpReceiver
from .websocket import WebSocketReceiver

# The catch-all UdpReceiver must remain last.

variants = (StdinReceiver, WebSocketReceiver, UdpReceiver)


def select(descriptor, variants=variants):
    """ Return the first receiver class in *variants* that matches the
        source *descriptor*.
    """

    for variant in variants:
        if variant.matches(descriptor):
            return variant

    raise ConfigurationError(f"no receiver for source {descriptor!r}")


def create(descriptor, variants=variants):
    """ Construct the receiver selected for *descriptor*.
    """

    variant = select(descriptor, variants)
    return variant(descriptor)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
