"""
XMLRPC transports with configurable timeouts and HTTP basic authentication.

The timeout transports bound how long a call may block on an unreachable
daemon. The basic auth variants add an Authorization header to every request
they send, replacing any header derived from credentials embedded in the URL.
Request body, method and target are left untouched.
"""

import base64
from xmlrpc import client


def basic_auth_header(credentials) -> str:
    """Build the value of a basic Authorization header for the given credentials."""
    token = f"{credentials.username}:{credentials.password}".encode("utf-8")
    return "Basic " + base64.b64encode(token).decode("ascii")


class TimeoutMixin:
    """Applies a socket timeout to every connection a transport opens."""
    def __init__(self, timeout=10, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.timeout = timeout

    def make_connection(self, host):
        connection = super().make_connection(host)
        connection.timeout = self.timeout
        return connection


class TimeoutTransport(TimeoutMixin, client.Transport):
    pass


class TimeoutSafeTransport(TimeoutMixin, client.SafeTransport):
    pass


class BasicAuthMixin:
    """Adds basic auth credentials to every request sent by a transport."""
    def __init__(self, credentials, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.credentials = credentials

    def send_headers(self, connection, headers):
        headers = [(key, value) for key, value in headers if key.lower() != "authorization"]
        headers.append(("Authorization", basic_auth_header(self.credentials)))
        super().send_headers(connection, headers)


class BasicAuthTransport(BasicAuthMixin, TimeoutTransport):
    pass


class BasicAuthSafeTransport(BasicAuthMixin, TimeoutSafeTransport):
    pass


def make_transport(url: str, timeout: int = 10, credentials=None) -> client.Transport:
    """
    Create the transport for an rTorrent RPC URL.

    Uses SafeTransport for HTTPS and Transport for HTTP, wrapped with basic
    auth when credentials are given.
    """
    secure = url.lower().startswith("https://")
    if credentials is None:
        if secure:
            return TimeoutSafeTransport(timeout=timeout)
        return TimeoutTransport(timeout=timeout)

    if secure:
        return BasicAuthSafeTransport(credentials, timeout=timeout)
    return BasicAuthTransport(credentials, timeout=timeout)
