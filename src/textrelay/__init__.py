""" Python implementation of a single-input, multi-output text relay. One
    :mod:`receiver` supplies the message stream; every message is handed to
    each :mod:`broker`, which in turn delivers it to whatever destinations
    are attached to it.
"""

# Utility components.

from . import config
from . import address

# Submodules used by multiple other components.

from .base import (
    RelayError,
    ConfigurationError,
    DecodeError,
    ProtocolViolation,
)

from . import receiver
from . import broker

# Primary public-facing interfaces.

from .relay import Relay

__version__ = '1.0.0'

# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
