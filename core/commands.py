"""
commands.py - One validated value per CLI operation
ONE RESPONSIBILITY: Describe what the user asked for
"""

from dataclasses import dataclass
from typing import Optional, Union

from core.errors import InvalidArgument


def parse_snapshot_number(text):
    """Snapshot references are positive integers."""
    value = str(text).strip()
    if not value.isdigit() or int(value) < 1:
        raise InvalidArgument(f"snapshot number must be a positive integer, got '{text}'")
    return int(value)


@dataclass(frozen=True)
class ListProfiles:
    label = "list profiles"


@dataclass(frozen=True)
class CreateProfile:
    label = "create profile"


@dataclass(frozen=True)
class Deploy:
    profile: str
    out: Optional[str] = None
    auto: bool = False
    label = "deploy"


@dataclass(frozen=True)
class DeployAll:
    profile: str
    label = "deploy all"


@dataclass(frozen=True)
class Snapshot:
    profile: str
    label = "snapshot"


@dataclass(frozen=True)
class Restore:
    profile: str
    ref: Union[int, str]
    label = "restore"


@dataclass(frozen=True)
class Diff:
    profile: str
    ref1: Optional[int] = None
    ref2: Optional[int] = None
    label = "diff"


@dataclass(frozen=True)
class Clean:
    profile: str
    label = "clean"


@dataclass(frozen=True)
class ReplaceMenus:
    profile: str
    label = "replace context menus"


@dataclass(frozen=True)
class ReplaceBookmarks:
    profile: str
    label = "replace bookmarks"


@dataclass(frozen=True)
class ExportBase:
    profile: str
    label = "export base"


@dataclass(frozen=True)
class DeleteProfile:
    profile: str
    label = "delete profile"
