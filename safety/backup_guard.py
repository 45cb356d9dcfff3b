"""
backup_guard.py - Backups taken before mutating profile files
ONE RESPONSIBILITY: Save file state before destructive operations
"""

import os

from core.errors import BackupFailed, SourceMissing, WriteFailed
from safety.staging import StagedFile
from utils import logger


class BackupState:
    """Lifecycle state of a first-mutation backup: absent or present at path."""

    def __init__(self, path, present):
        self.path = path
        self.present = present

    @classmethod
    def absent(cls, path):
        return cls(path, False)

    @classmethod
    def found(cls, path):
        return cls(path, True)

    def __repr__(self):
        return f"BackupState({'present' if self.present else 'absent'}, {self.path!r})"


class BackupRef:
    """Result of ensure_backup(): where the backup lives and whether this call wrote it."""

    def __init__(self, path, created):
        self.path = path
        self.created = created

    def __repr__(self):
        return f"BackupRef({self.path!r}, created={self.created})"


def backup_state(backup_path):
    """Report whether the backup artifact exists."""
    if os.path.isfile(backup_path):
        return BackupState.found(backup_path)
    return BackupState.absent(backup_path)


def _copy_backup(target, backup_path, profile, overwrite=True):
    """
    Stage a copy of target and move it to backup_path.

    A partial copy never appears under backup_path. With overwrite=False
    nothing is committed when backup_path showed up in the meantime.

    Returns:
        bool: True when the backup was written
    """
    if not os.path.isfile(target):
        raise SourceMissing("nothing to back up", profile=profile, artifact=target)

    try:
        with StagedFile(backup_path, profile=profile) as staged:
            staged.copy_from(target)
            if not overwrite and os.path.exists(backup_path):
                return False
            staged.commit()
    except WriteFailed as e:
        raise BackupFailed(f"could not back up {os.path.basename(target)}: {e.message}",
                           profile=profile, artifact=backup_path)
    return True


def ensure_backup(target, backup_path, profile=None):
    """
    Back up target once; later calls leave the existing backup untouched.

    Args:
        target: File about to be mutated
        backup_path: Where the backup lives
        profile: Profile name for messages (optional)

    Returns:
        BackupRef: created=False when the backup already existed
    """
    state = backup_state(backup_path)
    if state.present:
        logger.log_info(f"Backup already exists at {backup_path}, skipping")
        return BackupRef(backup_path, created=False)

    if not _copy_backup(target, backup_path, profile, overwrite=False):
        logger.log_info(f"Backup appeared at {backup_path} while copying, keeping it")
        return BackupRef(backup_path, created=False)
    logger.log_info(f"Backup of {target} created at {backup_path}")
    return BackupRef(backup_path, created=True)


def event_backup(target, backup_path, profile=None):
    """
    Back up target for a single event (restore, registry rewrite).

    Unlike ensure_backup(), this overwrites a previous backup of the same name.
    """
    _copy_backup(target, backup_path, profile)
    logger.log_info(f"Backup of {target} written to {backup_path}")
    return BackupRef(backup_path, created=True)


def preferences_backup(profile):
    """BackupState of the profile's pre-first-deploy Preferences backup."""
    return backup_state(profile.prefs_backup_file)


def ensure_preferences_backup(profile):
    return ensure_backup(profile.prefs_file, profile.prefs_backup_file, profile=profile.name)
