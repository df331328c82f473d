""" Runtime settings. Every value is read from the environment at the time
    it is requested, so that a setting can be changed without reloading
    anything; the command line is the only caller that overrides them.

    Each setting has a corresponding ``TEXTRELAY_`` environment variable,
    for example ``TEXTRELAY_DATAGRAM_SIZE`` for :func:`datagram_size`.
"""

import logging
import os

from .base import ConfigurationError

prefix = 'TEXTRELAY_'

defaults = dict()
defaults['LOG_LEVEL'] = 'INFO'
defaults['DATAGRAM_SIZE'] = '8192'
defaults['HANDSHAKE_TIMEOUT'] = '10'
defaults['CLOSE_TIMEOUT'] = '10'
defaults['MAX_SIZE'] = 'none'


def get(name):
    """ Return the raw string value for the setting *name*, falling back to
        the default if the environment does not provide one.
    """

    name = name.upper()

    try:
        default = defaults[name]
    except KeyError:
        raise KeyError('unknown setting: ' + repr(name))

    value = os.environ.get(prefix + name, default)
    value = value.strip()

    if value == '':
        value = default

    return value



def _number(name, kind, minimum, optional=False):

    value = get(name)

    if optional and value.lower() == 'none':
        return None

    try:
        value = kind(value)
    except ValueError:
        raise ConfigurationError(f"{prefix}{name} is not a valid {kind.__name__}: {value!r}")

    if value < minimum:
        raise ConfigurationError(f"{prefix}{name} must be at least {minimum}: {value!r}")

    return value


def log_level(name=None):
    """ Return the numeric logging level. If *name* is specified it takes
        precedence over the environment.
    """

    if name is None:
        name = get('LOG_LEVEL')

    level = logging.getLevelName(name.upper())

    if isinstance(level, int):
        return level

    raise ConfigurationError(f"not a logging level: {name!r}")


def datagram_size():
    """ Return the size of the receive buffer for inbound datagrams. Longer
        datagrams are truncated by the operating system.
    """

    return _number('DATAGRAM_SIZE', int, 1)


def handshake_timeout():
    """ Return the number of seconds allowed for a websocket opening
        handshake, or None to wait indefinitely.
    """

    return _number('HANDSHAKE_TIMEOUT', float, 0, optional=True)


def close_timeout():
    """ Return the number of seconds allowed for a websocket closing handshake.
    """

    return _number('CLOSE_TIMEOUT', float, 0)


def max_size():
    """ Return the largest inbound websocket message accepted, in bytes, or
        None if there is no limit.
    """

    return _number('MAX_SIZE', int, 1, optional=True)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
