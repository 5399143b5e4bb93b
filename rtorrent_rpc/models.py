"""
Value types exchanged with the rTorrent client.

View names a daemon-side filter, Credentials carries basic auth details and
Torrent is an immutable snapshot of one download as reported by the daemon.
"""

from dataclasses import dataclass, field
from enum import Enum


class View(str, Enum):
    # All torrents
    MAIN = "main"
    # Torrents that have been started
    STARTED = "started"
    # Torrents that have been stopped
    STOPPED = "stopped"
    # Torrents currently hashing
    HASHING = "hashing"
    # Torrents currently seeding
    SEEDING = "seeding"

    def __str__(self):
        return self.value


@dataclass(frozen=True)
class Credentials:
    username: str
    password: str = field(repr=False)


@dataclass(frozen=True)
class Torrent:
    hash: str
    name: str
    path: str
    size: int
    label: str
    completed: bool
    ratio: float
