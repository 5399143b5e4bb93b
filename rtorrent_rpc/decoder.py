"""
Decoding of d.multicall responses into Torrent records.

rTorrent answers a multicall with one list of values per torrent, positionally
aligned with the field expressions that were requested. FIELDS is the single
source of truth for both sides: the request arguments are built from it and
every response slot is decoded by the coercion in the same row.

Coercion is strict. Strings accept str or nil (decoded as ""), integers accept
int only. Anything else raises DecodingContractViolation so that protocol drift
surfaces immediately instead of producing corrupted records.
"""

from dataclasses import dataclass, fields
from typing import Any, Callable, List, Optional, Sequence

from .exceptions import DecodingContractViolation
from .models import Torrent


def to_string(expression: str, value: Any) -> str:
    if isinstance(value, str):
        return value
    if value is None:
        return ""
    raise DecodingContractViolation(expression, value, "string")


def to_int(expression: str, value: Any) -> int:
    # bool is a subclass of int but XMLRPC booleans are a different wire type
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    raise DecodingContractViolation(expression, value, "integer")


def to_completed(expression: str, value: Any) -> bool:
    return to_int(expression, value) > 0


def to_ratio(expression: str, value: Any) -> float:
    # rTorrent reports the ratio multiplied by 1000
    return to_int(expression, value) / 1000.0


def ignore(expression: str, value: Any) -> None:
    return None


@dataclass(frozen=True)
class Field:
    expression: str
    attribute: Optional[str]
    coerce: Callable[[str, Any], Any]


FIELDS = (
    Field("d.get_name=", "name", to_string),
    Field("d.get_size_bytes=", "size", to_int),
    Field("d.get_hash=", "hash", to_string),
    Field("d.get_custom1=", "label", to_string),
    Field("d.get_base_path=", "path", to_string),
    # Requested but not part of Torrent yet
    Field("d.is_active=", None, ignore),
    Field("d.get_complete=", "completed", to_completed),
    Field("d.get_ratio=", "ratio", to_ratio),
)


def _check_fields(table: Sequence[Field]) -> None:
    expressions = [f.expression for f in table]
    if len(set(expressions)) != len(expressions):
        raise ValueError("Duplicate field expression in multicall table")

    mapped = [f.attribute for f in table if f.attribute is not None]
    record_fields = [f.name for f in fields(Torrent)]
    if sorted(mapped) != sorted(record_fields):
        raise ValueError(
            f"Multicall table maps {sorted(mapped)} but Torrent has {sorted(record_fields)}"
        )


_check_fields(FIELDS)


def field_expressions() -> List[str]:
    """Field expressions to request, in response order."""
    return [f.expression for f in FIELDS]


def decode_torrent(values: Any) -> Torrent:
    """Decode one multicall response element into a Torrent."""
    if not isinstance(values, (list, tuple)):
        raise DecodingContractViolation("d.multicall", values, f"list of {len(FIELDS)} values")
    if len(values) != len(FIELDS):
        raise DecodingContractViolation("d.multicall", values, f"list of {len(FIELDS)} values")

    attributes = {}
    for f, value in zip(FIELDS, values):
        decoded = f.coerce(f.expression, value)
        if f.attribute is not None:
            attributes[f.attribute] = decoded
    return Torrent(**attributes)


def decode_torrents(results: Any) -> List[Torrent]:
    """Decode a full multicall response, keeping the daemon's order."""
    if not isinstance(results, (list, tuple)):
        raise DecodingContractViolation("d.multicall", results, "list of torrents")
    return [decode_torrent(values) for values in results]
