"""
Data definitions for the phone FTP client.

This module defines the records exchanged between the FTP session, the
transfer operations and the console output.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Dict, Optional


class FileKind(IntEnum):
    """Kind of a remote file-system object."""
    UNKNOWN = 0
    FILE = 1
    DIRECTORY = 2

    @classmethod
    def from_fact(cls, fact: Optional[str]) -> 'FileKind':
        """Map an aioftp ``type`` fact to a kind."""
        if fact == 'file':
            return cls.FILE
        if fact == 'dir':
            return cls.DIRECTORY
        return cls.UNKNOWN


@dataclass(frozen=True)
class ListingEntry:
    """Remote directory listing entry."""
    name: str
    kind: FileKind
    size: int
    raw_modified_at: str

    @classmethod
    def from_info(cls, name: str, info: Dict[str, Any]) -> 'ListingEntry':
        """Build an entry from the facts dictionary aioftp yields."""
        try:
            size = int(info.get('size', 0))
        except (TypeError, ValueError):
            size = 0
        return cls(
            name=name,
            kind=FileKind.from_fact(info.get('type')),
            size=size,
            raw_modified_at=str(info.get('modify', '')),
        )


@dataclass(frozen=True)
class ProgressEvent:
    """Transfer progress notification."""
    name: str
    type: str
    bytes: int
    bytes_overall: int


@dataclass(frozen=True)
class FormattedSize:
    """Human readable size, unpacks as ``(value, unit)``."""
    value: str
    unit: str

    def __iter__(self):
        return iter((self.value, self.unit))

    def __str__(self):
        return f"{self.value} {self.unit}"


@dataclass(frozen=True)
class TransferResult:
    """Outcome of a delegated transfer."""
    ok: bool
    reason: Optional[str] = None

    @classmethod
    def success(cls) -> 'TransferResult':
        return cls(ok=True)

    @classmethod
    def failed(cls, reason: str) -> 'TransferResult':
        return cls(ok=False, reason=reason)
