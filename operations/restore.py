"""
restore.py - Restore Preferences from a snapshot or the original backup
ONE RESPONSIBILITY: Replace live settings with a saved revision
"""

import os

from core import constants
from core.errors import Aborted, InvalidArgument, NotFound, SourceMissing
from operations.snapshot import resolve_snapshot
from safety.backup_guard import ensure_preferences_backup, event_backup, preferences_backup
from safety.staging import copy_atomic
from ui import display
from utils import logger


def parse_restore_ref(ref):
    """Accept a positive snapshot number or 'original'."""
    text = str(ref).strip()
    if text.lower() == constants.ORIGINAL_REF:
        return constants.ORIGINAL_REF
    if text.isdigit() and int(text) > 0:
        return int(text)
    raise InvalidArgument(f"restore needs a snapshot number or '{constants.ORIGINAL_REF}', got '{ref}'")


def resolve_restore_source(profile, ref):
    """
    Find the file a restore would copy from.

    Returns:
        tuple: (path, human readable label)
    """
    if ref == constants.ORIGINAL_REF:
        state = preferences_backup(profile)
        if not state.present:
            raise NotFound("no original backup exists (deploy was never run)",
                           profile=profile.name, artifact=state.path)
        return state.path, "the original pre-deploy backup"

    snap = resolve_snapshot(profile, ref)
    return snap.path, f"snapshot #{snap.number}"


def restore(profile, ref, prompter):
    """
    Overwrite the live Preferences with a snapshot or the original backup.

    Args:
        profile: Target profile
        ref: Snapshot number or 'original'
        prompter: Confirmation channel

    Returns:
        str: Path of the safety copy taken before the restore
    """
    ref = parse_restore_ref(ref)
    source, label = resolve_restore_source(profile, ref)

    if not os.path.isfile(profile.prefs_file):
        raise SourceMissing("Preferences file not found", profile=profile.name, artifact=profile.prefs_file)

    print(f"You are about to overwrite the current settings for profile '{profile.name}'")
    print(f"with the contents of {label}.")
    if not prompter.yes_no("This action is permanent. Are you sure?"):
        raise Aborted()

    ensure_preferences_backup(profile)

    safety_copy = profile.artifact(constants.restore_backup_name(ref))
    display.print_info(f"Backing up current settings to: {os.path.basename(safety_copy)}")
    event_backup(profile.prefs_file, safety_copy, profile=profile.name)

    display.print_info(f"Restoring from {os.path.basename(source)}...")
    copy_atomic(source, profile.prefs_file, profile=profile.name)

    display.print_success(f"Successfully restored settings for profile '{profile.name}'.")
    logger.log_info(f"Restored '{profile.name}' from {source}; previous state kept in {safety_copy}")
    return safety_copy
