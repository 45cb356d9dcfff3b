"""
cleanup.py - Archive generated profile artifacts
ONE RESPONSIBILITY: Zip snapshots, diffs and backups, then remove them
"""

import fnmatch
import os
import zipfile
from typing import List

from core import constants
from core.errors import WriteFailed
from safety.staging import StagedFile
from ui import display
from utils import logger


def find_generated_files(profile) -> List[str]:
    """
    List the artifacts this tool generated in the profile directory.

    Returns:
        list: Absolute paths, sorted by name
    """
    if not profile.exists():
        return []

    exact = {
        os.path.basename(profile.prefs_backup_file),
        os.path.basename(profile.bookmarks_backup_file),
    }

    found = []
    for filename in sorted(os.listdir(profile.path)):
        path = profile.artifact(filename)
        if not os.path.isfile(path):
            continue
        if filename in exact or any(fnmatch.fnmatchcase(filename, p) for p in constants.CLEANUP_PATTERNS):
            found.append(path)
    return found


def _write_archive(staged_path, files):
    with zipfile.ZipFile(staged_path, "w", compression=zipfile.ZIP_DEFLATED) as z:
        for path in files:
            z.write(path, os.path.basename(path))


def _verify_archive(archive_path, files):
    with zipfile.ZipFile(archive_path) as z:
        bad = z.testzip()
        if bad is not None:
            return False
        return set(z.namelist()) == {os.path.basename(p) for p in files}


def clean(profile):
    """
    Archive generated files into Preferences.<id>.bak.zip and remove them.

    Returns:
        str: Archive path, or None when there was nothing to clean
    """
    display.print_info(f"Scanning profile '{profile.name}' for generated files...")
    files = find_generated_files(profile)

    if not files:
        display.print_info("No generated files found to clean up.")
        return None

    print(f"Found {len(files)} file(s) to archive:")
    for path in files:
        print(f"  - {os.path.basename(path)}")

    archive = profile.artifact(constants.archive_name(profile.archive_id))
    if os.path.exists(archive):
        raise WriteFailed("backup zip file already exists; please remove it first",
                          profile=profile.name, artifact=archive)

    with StagedFile(archive, profile=profile.name) as staged:
        try:
            _write_archive(staged.path, files)
            verified = _verify_archive(staged.path, files)
        except (OSError, zipfile.BadZipFile) as e:
            raise WriteFailed(f"failed to create zip archive: {e}", profile=profile.name, artifact=archive)
        if not verified:
            raise WriteFailed("zip archive failed verification", profile=profile.name, artifact=archive)
        staged.commit()

    display.print_success(f"Successfully created archive: {archive}")
    logger.log_info(f"Archived {len(files)} file(s) of '{profile.name}' into {archive}")

    failed = []
    for path in files:
        try:
            os.remove(path)
        except OSError as e:
            logger.log_warning(f"Could not remove {path}: {e}")
            failed.append(path)

    if failed:
        display.print_warning("Failed to remove all original files. Please check the directory.")
    else:
        display.print_success("Successfully removed original files.")
    return archive
