"""
snapshot.py - Numbered Preferences snapshots
ONE RESPONSIBILITY: Create, list and locate snapshots of a profile
"""

import os
from datetime import datetime
from typing import List, Optional

from core import constants
from core.errors import AmbiguousState, MalformedInput, NotFound, SourceMissing, WriteFailed
from safety.staging import StagedFile
from utils import logger


class SnapshotRef:
    """One Preferences.snap.<number>.<timestamp> file."""

    def __init__(self, number, timestamp, path):
        self.number = number
        self.timestamp = timestamp
        self.path = path

    @property
    def filename(self):
        return os.path.basename(self.path)

    def __repr__(self):
        return f"SnapshotRef({self.number}, {self.timestamp!r})"


def list_snapshots(profile) -> List[SnapshotRef]:
    """
    Find every snapshot in the profile directory.

    Returns:
        list: SnapshotRefs ordered by number (then timestamp)
    """
    if not profile.exists():
        return []

    snapshots = []
    for filename in os.listdir(profile.path):
        parsed = constants.parse_snapshot_name(filename)
        if parsed is None:
            continue
        number, timestamp = parsed
        snapshots.append(SnapshotRef(number, timestamp, profile.artifact(filename)))

    return sorted(snapshots, key=lambda s: (s.number, s.timestamp))


def next_snapshot_number(profile):
    """Highest existing number + 1; gaps left by deleted snapshots are never refilled."""
    return max((s.number for s in list_snapshots(profile)), default=0) + 1


def create_snapshot(profile, now: Optional[datetime] = None) -> SnapshotRef:
    """
    Copy the live Preferences byte-for-byte to the next numbered snapshot.

    Args:
        profile: Profile to snapshot
        now: Timestamp override (defaults to the current time)

    Returns:
        SnapshotRef: The new snapshot
    """
    if not os.path.isfile(profile.prefs_file):
        raise SourceMissing("Preferences file not found", profile=profile.name, artifact=profile.prefs_file)
    if os.path.getsize(profile.prefs_file) == 0:
        raise MalformedInput("Preferences file is empty, nothing to snapshot",
                             profile=profile.name, artifact=profile.prefs_file)

    number = next_snapshot_number(profile)
    timestamp = (now or datetime.now()).strftime(constants.SNAPSHOT_TIMESTAMP_FORMAT)
    path = profile.artifact(constants.snapshot_name(number, timestamp))

    if os.path.exists(path):
        raise WriteFailed("snapshot file already exists", profile=profile.name, artifact=path)

    with StagedFile(path, profile=profile.name) as staged:
        staged.copy_from(profile.prefs_file)
        if os.path.exists(path):
            raise WriteFailed("snapshot file appeared while writing", profile=profile.name, artifact=path)
        staged.commit()

    logger.log_info(f"Snapshot {number} of '{profile.name}' created at {path}")
    return SnapshotRef(number, timestamp, path)


def resolve_snapshot(profile, ref) -> SnapshotRef:
    """
    Find the single snapshot with the given number.

    Raises:
        NotFound: no snapshot has that number
        AmbiguousState: several files carry that number
    """
    number = int(ref)
    matches = [s for s in list_snapshots(profile) if s.number == number]

    if not matches:
        raise NotFound(f"snapshot number '{number}' not found", profile=profile.name)

    if len(matches) > 1:
        names = ", ".join(s.filename for s in matches)
        raise AmbiguousState(
            f"multiple files found for snapshot number '{number}'; please clean up the directory",
            profile=profile.name,
            artifact=names
        )

    return matches[0]
