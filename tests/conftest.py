import socket
import socketserver
import threading
from http.server import BaseHTTPRequestHandler, HTTPServer
from xmlrpc import client
from xmlrpc.server import SimpleXMLRPCRequestHandler, SimpleXMLRPCServer

import pytest

from rtorrent_rpc.models import Credentials
from rtorrent_rpc.transport import basic_auth_header


class RecordingRequestHandler(SimpleXMLRPCRequestHandler):
    """Records the Authorization header of each request and enforces basic auth if configured."""
    rpc_paths = ("/RPC2",)

    def do_POST(self):
        daemon = self.server.fake
        authorization = self.headers.get("Authorization")
        daemon.auth_headers.append(authorization)

        if daemon.required_auth and authorization != daemon.required_auth:
            # Drain the body so closing the socket does not reset the connection
            self.rfile.read(int(self.headers.get("Content-Length", 0)))
            self.send_response(401)
            self.send_header("WWW-Authenticate", 'Basic realm="rtorrent"')
            self.send_header("Content-Length", "0")
            self.end_headers()
            return

        super().do_POST()


class ThreadingXMLRPCServer(socketserver.ThreadingMixIn, SimpleXMLRPCServer):
    daemon_threads = True


class FakeRTorrent:
    """In-process XMLRPC server answering like an rTorrent daemon."""

    def __init__(self, credentials=None):
        self.session_name = "seedbox"
        self.session_ip = "10.0.0.5"
        self.torrents = []
        self.fault = None
        self.auth_headers = []
        self.multicalls = []
        self.required_auth = basic_auth_header(credentials) if credentials else None

        self.server = ThreadingXMLRPCServer(
            ("127.0.0.1", 0),
            requestHandler=RecordingRequestHandler,
            allow_none=True,
            logRequests=False,
        )
        self.server.fake = self
        self.server.register_function(self.get_name, "get_name")
        self.server.register_function(self.get_ip, "get_ip")
        self.server.register_function(self.multicall, "d.multicall")
        self.server.register_function(self.client_version, "system.client_version")

        host, port = self.server.server_address
        self.url = f"http://{host}:{port}/RPC2"
        self.thread = threading.Thread(target=self.server.serve_forever, daemon=True)

    def _check_fault(self):
        if self.fault:
            raise client.Fault(-501, self.fault)

    def get_name(self):
        self._check_fault()
        return self.session_name

    def get_ip(self):
        self._check_fault()
        return self.session_ip

    def multicall(self, view, *expressions):
        self._check_fault()
        self.multicalls.append((view, list(expressions)))
        return self.torrents

    def client_version(self):
        return "0.9.8"

    def start(self):
        self.thread.start()

    def stop(self):
        self.server.shutdown()
        self.server.server_close()
        self.thread.join(timeout=5)


@pytest.fixture
def fake_rtorrent():
    daemon = FakeRTorrent()
    daemon.start()
    yield daemon
    daemon.stop()


@pytest.fixture
def credentials():
    return Credentials("admin", "s3cret:pass")


@pytest.fixture
def auth_rtorrent(credentials):
    daemon = FakeRTorrent(credentials=credentials)
    daemon.start()
    yield daemon
    daemon.stop()


@pytest.fixture
def unused_url():
    """URL of a local port with nothing listening on it."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.bind(("127.0.0.1", 0))
    port = sock.getsockname()[1]
    sock.close()
    return f"http://127.0.0.1:{port}/RPC2"


class CannedResponseHandler(BaseHTTPRequestHandler):
    """Answers every POST with the raw XML body stored on the server."""

    def do_POST(self):
        self.rfile.read(int(self.headers.get("Content-Length", 0)))
        body = self.server.body.encode("utf-8")
        self.send_response(200)
        self.send_header("Content-Type", "text/xml")
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def log_message(self, format, *args):
        pass


class CannedRTorrent:
    """HTTP server replying with hand-written XMLRPC bodies, for wire values SimpleXMLRPCServer cannot produce."""

    def __init__(self):
        self.server = HTTPServer(("127.0.0.1", 0), CannedResponseHandler)
        self.server.body = ""
        host, port = self.server.server_address
        self.url = f"http://{host}:{port}/RPC2"
        self.thread = threading.Thread(target=self.server.serve_forever, daemon=True)

    def respond_with(self, value_xml):
        self.server.body = (
            "<?xml version=\"1.0\"?>"
            "<methodResponse><params><param>"
            f"<value>{value_xml}</value>"
            "</param></params></methodResponse>"
        )

    def start(self):
        self.thread.start()

    def stop(self):
        self.server.shutdown()
        self.server.server_close()
        self.thread.join(timeout=5)


@pytest.fixture
def canned_rtorrent():
    daemon = CannedRTorrent()
    daemon.start()
    yield daemon
    daemon.stop()
