import os
import socket
import subprocess
import sys
import threading
import time

import pytest

from websockets.sync.server import serve


here = os.path.dirname(os.path.abspath(__file__))
source = os.path.join(os.path.dirname(here), 'src')


def wait_for(condition, timeout=2):
    """ Poll *condition* until it returns something true, or the *timeout*
        expires; return the last result either way.
    """

    expiration = time.time() + timeout

    while True:
        result = condition()
        if result or time.time() > expiration:
            return result
        time.sleep(0.01)



def free_port(family=socket.AF_INET, kind=socket.SOCK_STREAM):

    if family == socket.AF_INET6:
        host = '::1'
    else:
        host = '127.0.0.1'

    sock = socket.socket(family, kind)
    sock.bind((host, 0))
    port = sock.getsockname()[1]
    sock.close()

    return port



def has_ipv6():

    if socket.has_ipv6 == False:
        return False

    try:
        sock = socket.socket(socket.AF_INET6, socket.SOCK_DGRAM)
        sock.bind(('::1', 0))
    except OSError:
        return False

    sock.close()
    return True


requires_ipv6 = pytest.mark.skipif(not has_ipv6(), reason='IPv6 loopback is not available')


@pytest.fixture
def udp_sink():
    """ A bound IPv4 datagram socket to receive whatever the code under test
        sends; yields the socket itself.
    """

    sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    sock.bind(('127.0.0.1', 0))
    sock.settimeout(2)

    yield sock

    sock.close()


@pytest.fixture
def websocket_server():
    """ Start a websocket server on the loopback interface. The fixture is a
        function: call it with the connection handler, and it returns the
        ``ws://`` URI of the running server.
    """

    servers = list()

    def start(handler):
        server = serve(handler, '127.0.0.1', 0)
        servers.append(server)

        thread = threading.Thread(target=server.serve_forever)
        thread.daemon = True
        thread.start()

        port = server.socket.getsockname()[1]
        return f"ws://127.0.0.1:{port}"

    yield start

    for server in servers:
        server.shutdown()


def _environment():

    environment = dict(os.environ)
    path = environment.get('PYTHONPATH')
    if path:
        environment['PYTHONPATH'] = source + os.pathsep + path
    else:
        environment['PYTHONPATH'] = source

    return environment


@pytest.fixture
def run_textrelay():
    """ Run the command line in a subprocess, using the source tree under
        test. Returns a function accepting the arguments and the standard
        input text; that function returns the completed process.
    """

    def run(arguments, input='', timeout=10):

        command = [sys.executable, '-m', 'textrelay']
        command.extend(arguments)

        return subprocess.run(command, input=input, capture_output=True,
                              text=True, timeout=timeout, env=_environment())

    return run


@pytest.fixture
def start_textrelay():
    """ Same as run_textrelay, except the process is left running with its
        standard input as an open pipe. Returns a function accepting the
        arguments; that function returns the Popen instance. Any process
        still running at the end of the test is killed.
    """

    processes = list()

    def start(arguments):

        command = [sys.executable, '-m', 'textrelay']
        command.extend(arguments)

        pipe = subprocess.PIPE
        process = subprocess.Popen(command, stdin=pipe, stdout=pipe, stderr=pipe,
                                   text=True, env=_environment())
        processes.append(process)
        return process

    yield start

    for process in processes:
        if process.poll() is None:
            process.kill()
        process.wait()

        for stream in (process.stdin, process.stdout, process.stderr):
            try:
                stream.close()
            except BrokenPipeError:
                # Unflushed input for a process that already exited.
                pass


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
