"""
rTorrent RPC - Typed XMLRPC client for rTorrent.

Reads daemon metadata and lists torrents per view, decoding rTorrent's
positional multicall responses into immutable Torrent records, with optional
HTTP basic authentication.
"""

from .client import RTorrent
from .config import Config
from .exceptions import DecodingContractViolation, RTorrentError, TransportError
from .models import Credentials, Torrent, View

__version__ = "0.1.0"
__all__ = [
    "RTorrent",
    "Config",
    "Credentials",
    "Torrent",
    "View",
    "RTorrentError",
    "TransportError",
    "DecodingContractViolation",
]
