"""
constants.py - File names and artifact naming conventions
ONE RESPONSIBILITY: Store the names every other module agrees on
"""

import re

# Profile directory layout
DEFAULT_PROFILE_NAME = "Default"
NUMBERED_PROFILE_PREFIX = "Profile "
PREFERENCES_FILE = "Preferences"
BOOKMARKS_FILE = "Bookmarks"
CONTEXT_MENU_FILE = "contextmenu.json"
LOCAL_STATE_FILE = "Local State"

# User templates, relative to the tool's home directory
SKEL_DIR = "skel"
BASE_PREFS_FILE = "base_pref.json"
LOCAL_BASE_PREFS_FILE = "local.base_pref.json"
BOOKMARKS_TEMPLATE_FILE = "bookmarks.json"
MENU_PATCH_FILE = "menu_patch.json"
EXPORTED_FILE = "base_pref.exported.json"
BASE_PREFS_SKEL_FILE = "base_pref.skel.json"
BOOKMARKS_SKEL_FILE = "bookmarks.skel.json"
MENU_PATCH_SKEL_FILE = "menu_patch.skel.json"

# Generated artifacts inside a profile directory
SNAPSHOT_PREFIX = "Preferences.snap."
SNAPSHOT_PATTERN = re.compile(r"^Preferences\.snap\.(\d+)\.(.+)$")
SNAPSHOT_TIMESTAMP_FORMAT = "%Y%m%d-%H%M%S"
TEST_OUTPUT_PREFIX = "Preferences.test."
RESTORE_BACKUP_PREFIX = "Preferences.before-restore-"
MENU_BACKUP_SUFFIX = ".bak-before-patch"
LAST_DIFF_FILE = "last.diff"
ORIGINAL_REF = "original"

# Local State event backups
REGISTRY_BACKUP_BEFORE_CREATE = ".bak-before-create"
REGISTRY_BACKUP_BEFORE_DELETE = ".bak-before-delete-"

# Files swept into the cleanup archive
CLEANUP_PATTERNS = [
    "Preferences.snap.*",
    "Preferences.test.*",
    "Preferences.before-restore-*",
    "diff.*.diff",
    LAST_DIFF_FILE,
    CONTEXT_MENU_FILE + MENU_BACKUP_SUFFIX,
]

AUTO_PROFILE_LABEL = " (AUTO)"


def snapshot_name(number, timestamp):
    """Preferences.snap.<sequence>.<timestamp>"""
    return f"{SNAPSHOT_PREFIX}{number}.{timestamp}"


def parse_snapshot_name(filename):
    """
    Split a snapshot file name into (number, timestamp).

    Returns:
        tuple: (int, str), or None when the name is not a snapshot
    """
    match = SNAPSHOT_PATTERN.match(filename)
    if not match:
        return None
    return int(match.group(1)), match.group(2)


def restore_backup_name(ref):
    """Safety copy written before a restore, one name per source."""
    if ref == ORIGINAL_REF:
        return f"{RESTORE_BACKUP_PREFIX}{ORIGINAL_REF}"
    return f"{RESTORE_BACKUP_PREFIX}snap{ref}"


def diff_output_name(ref1=None, ref2=None):
    """Name of the diff artifact for each comparison scenario."""
    if ref2 is not None:
        return f"diff.snap{ref1}-vs-snap{ref2}.diff"
    if ref1 is not None:
        return f"diff.current-vs-snap{ref1}.diff"
    return LAST_DIFF_FILE


def archive_name(archive_id):
    """Preferences.<id>.bak.zip"""
    return f"{PREFERENCES_FILE}.{archive_id}.bak.zip"
