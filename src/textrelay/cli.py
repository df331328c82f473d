""" Command line entry point::

        textrelay [--log-level LEVEL] SOURCE [DESTINATION ...]

    SOURCE is ``stdin``, a ``ws://host:port`` URI to connect to, or a local
    ``host:port`` address to receive datagrams on. Each DESTINATION is
    ``stdout``, a ``ws://host:port`` address to accept websocket clients on,
    or a remote ``host:port`` address to send datagrams to.
"""

import argparse
import logging
import os
import sys
import threading

from . import __version__
from . import config
from .relay import Relay

log = logging.getLogger('textrelay')


def parse(argv=None):

    parser = argparse.ArgumentParser(prog='textrelay',
                description='Relay text messages from one source to any number of destinations.')

    parser.add_argument('source', metavar='SOURCE',
                help="'stdin', ws://host:port, or a local host:port for datagrams")
    parser.add_argument('destinations', metavar='DESTINATION', nargs='*',
                help="'stdout', ws://host:port to listen on, or a remote host:port for datagrams")
    parser.add_argument('--log-level', default=None,
                help='logging level name (default: $TEXTRELAY_LOG_LEVEL, else INFO)')
    parser.add_argument('--version', action='version', version='%(prog)s ' + __version__)

    return parser.parse_args(argv)



def _thread_failure(arguments):
    """ Any exception escaping a background thread is fatal. The foreground
        thread is most likely blocked waiting for input, so there is no one to
        raise the exception to; log it and end the process directly.
    """

    if arguments.exc_type is SystemExit:
        return

    exc_info = (arguments.exc_type, arguments.exc_value, arguments.exc_traceback)
    name = getattr(arguments.thread, 'name', 'unknown thread')

    log.critical('fatal error in %s', name, exc_info=exc_info)
    logging.shutdown()
    os._exit(1)



def main(argv=None):

    arguments = parse(argv)

    try:
        level = config.log_level(arguments.log_level)
    except ValueError as e:
        print('textrelay: ' + str(e), file=sys.stderr)
        return 2

    logging.basicConfig(stream=sys.stderr, level=level,
                format='%(asctime)s %(levelname)s %(name)s: %(message)s')

    threading.excepthook = _thread_failure

    try:
        relay = Relay(arguments.source, arguments.destinations)
        count = relay.run()
    except KeyboardInterrupt:
        return 130
    except Exception:
        log.critical('fatal error', exc_info=True)
        return 1

    log.debug('input exhausted after %d messages', count)
    return 0


if __name__ == '__main__':
    sys.exit(main())


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
