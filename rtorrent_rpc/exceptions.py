"""
Exceptions raised by the rTorrent client.

- RTorrentError: Base exception for all client errors
- TransportError: Raised when the remote call itself fails
- DecodingContractViolation: Raised when a response value has an unexpected type
"""


class RTorrentError(Exception):
    """Base exception for rTorrent client errors."""
    pass


class TransportError(RTorrentError):
    """Raised when an XMLRPC call fails (network, HTTP, fault or malformed envelope)."""
    pass


class DecodingContractViolation(RTorrentError):
    """Raised when a response value cannot be coerced into the expected type."""

    def __init__(self, field, value, expected):
        self.field = field
        self.value = value
        self.expected = expected
        super().__init__(
            f"Unexpected value for {field}: expected {expected}, "
            f"got {type(value).__name__} {value!r}"
        )
