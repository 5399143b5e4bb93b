"""
rTorrent XMLRPC client.

Provides the RTorrent class for reading daemon metadata and listing torrents
in a view. Every call opens its own ServerProxy and transport, so a single
RTorrent instance holds only immutable configuration and can be shared between
threads. Supports HTTP and HTTPS, with optional basic authentication on every
request.

Failures of the remote call raise TransportError; responses that do not match
the expected shape raise DecodingContractViolation. Nothing is retried.
"""

import http.client
from typing import List, Optional, Union
from xml.parsers.expat import ExpatError
from xmlrpc import client

from .config import Config
from .decoder import decode_torrents, field_expressions, to_string
from .exceptions import DecodingContractViolation, TransportError
from .logger import logger
from .models import Credentials, Torrent, View
from .transport import make_transport


RTORRENT_RPC_URL = Config.RTORRENT_RPC_URL
RTORRENT_TIMEOUT = Config.RTORRENT_TIMEOUT

# Everything the XMLRPC stack raises when a call does not complete.
# ValueError comes from the unmarshaller on bad scalars such as <int>abc</int>.
RPC_ERRORS = (client.Error, OSError, http.client.HTTPException, ExpatError, ValueError)


class RTorrent:
    def __init__(
        self,
        url: str = RTORRENT_RPC_URL,
        credentials: Optional[Credentials] = None,
        timeout: int = RTORRENT_TIMEOUT,
    ):
        self.url = url
        self.credentials = credentials
        self.timeout = timeout

    def __repr__(self):
        auth = " (basic auth)" if self.credentials else ""
        return f"<RTorrent {self.url}{auth}>"

    @classmethod
    def with_credentials(cls, url: str, credentials: Credentials, timeout: int = RTORRENT_TIMEOUT) -> "RTorrent":
        """Create a client that sends basic auth credentials with every call."""
        return cls(url, credentials=credentials, timeout=timeout)

    @classmethod
    def from_config(cls, config=Config) -> "RTorrent":
        """Create a client from the environment based configuration."""
        credentials = None
        if config.RTORRENT_USERNAME:
            credentials = Credentials(config.RTORRENT_USERNAME, config.RTORRENT_PASSWORD)
        return cls(config.RTORRENT_RPC_URL, credentials=credentials, timeout=config.RTORRENT_TIMEOUT)

    def _proxy(self) -> client.ServerProxy:
        transport = make_transport(self.url, timeout=self.timeout, credentials=self.credentials)
        return client.ServerProxy(self.url, transport=transport, allow_none=True)

    def _call(self, method: str, *args):
        logger.debug(f"Calling {method} on {self.url}")
        try:
            return getattr(self._proxy(), method)(*args)
        except RPC_ERRORS as e:
            logger.error(f"Call to {method} on {self.url} failed: {e}")
            raise TransportError(str(e)) from e

    def check_connection(self) -> bool:
        """Test if the connection to rTorrent is working."""
        try:
            self._call("system.client_version")
            return True
        except TransportError as e:
            logger.error(f"Failed to connect to rTorrent at {self.url}: {e}")
            return False

    def _call_string(self, method: str) -> str:
        result = self._call(method)
        try:
            return to_string(method, result)
        except DecodingContractViolation as e:
            logger.error(f"Call to {method} on {self.url} returned a non-string: {e}")
            raise TransportError(str(e)) from e

    def name(self) -> str:
        """Return the daemon's session name."""
        return self._call_string("get_name")

    def ip(self) -> str:
        """Return the IP address the daemon reports to trackers."""
        return self._call_string("get_ip")

    def get_torrents(self, view: Union[View, str] = View.MAIN) -> List[Torrent]:
        """
        List the torrents in a view with a single d.multicall.

        Args:
            view: View to list. Names outside View are passed through unchanged.

        Returns:
            One Torrent per item, in the order rTorrent returned them.

        Raises:
            TransportError: If the call failed
            DecodingContractViolation: If an item has a value of the wrong type
        """
        try:
            results = self._call("d.multicall", str(view), *field_expressions())
        except TransportError as e:
            raise TransportError(f"failed to fetch torrents: {e}") from e

        try:
            torrents = decode_torrents(results)
        except DecodingContractViolation as e:
            logger.error(f"Failed to decode torrents in view {view}: {e}")
            raise

        logger.debug(f"Fetched {len(torrents)} torrents in view {view}")
        return torrents
