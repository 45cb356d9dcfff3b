"""
diff.py - Compare Preferences revisions
ONE RESPONSIBILITY: Pick the two documents to compare and diff them
"""

import difflib
import os

from core import constants, document
from core.errors import NotFound, SourceMissing
from operations.snapshot import resolve_snapshot
from safety.backup_guard import preferences_backup
from safety.staging import write_text_atomic
from ui import display
from utils import logger


class DiffTargets:
    """The older and newer documents of one comparison, plus where to save the diff."""

    def __init__(self, old_path, new_path, old_label, new_label, output_path):
        self.old_path = old_path
        self.new_path = new_path
        self.old_label = old_label
        self.new_label = new_label
        self.output_path = output_path

    def load(self, profile_name=None):
        """Parse both sides: (old document, new document)."""
        return (document.load_document(self.old_path, profile=profile_name),
                document.load_document(self.new_path, profile=profile_name))

    def __repr__(self):
        return f"DiffTargets({self.old_label!r} -> {self.new_label!r})"


class DiffResult:
    def __init__(self, targets, text, output_path=None):
        self.targets = targets
        self.text = text
        self.output_path = output_path

    @property
    def has_differences(self):
        return bool(self.text)


def resolve_diff_targets(profile, ref1=None, ref2=None):
    """
    Decide what to compare.

    - no refs:  backup from the first deploy vs. current
    - one ref:  snapshot ref1 vs. current
    - two refs: snapshot ref1 vs. snapshot ref2
    """
    output_path = profile.artifact(constants.diff_output_name(ref1, ref2))

    if ref2 is not None:
        if ref1 is None:
            raise ValueError("second snapshot given without a first")
        first = resolve_snapshot(profile, ref1)
        second = resolve_snapshot(profile, ref2)
        return DiffTargets(first.path, second.path,
                           f"snapshot {first.number}", f"snapshot {second.number}",
                           output_path)

    if not os.path.isfile(profile.prefs_file):
        raise SourceMissing("Preferences file not found", profile=profile.name, artifact=profile.prefs_file)

    if ref1 is not None:
        snap = resolve_snapshot(profile, ref1)
        return DiffTargets(snap.path, profile.prefs_file,
                           f"snapshot {snap.number}", "current",
                           output_path)

    state = preferences_backup(profile)
    if not state.present:
        raise NotFound("no backup from a previous deploy exists yet", profile=profile.name, artifact=state.path)
    return DiffTargets(state.path, profile.prefs_file, "backup", "current", output_path)


def diff_documents(old, new, old_label="old", new_label="new"):
    """
    Unified diff of two documents in canonical form.

    Returns:
        str: Diff text, empty when the documents hold the same content
    """
    old_text = document.canonical(old)
    new_text = document.canonical(new)
    if old_text == new_text:
        return ""

    lines = difflib.unified_diff(
        old_text.splitlines(keepends=True),
        new_text.splitlines(keepends=True),
        fromfile=old_label,
        tofile=new_label
    )
    return "".join(lines)


def _remove_stale_output(output_path):
    """A diff file from an earlier run no longer describes the documents."""
    if not os.path.exists(output_path):
        return
    try:
        os.remove(output_path)
    except OSError as e:
        display.print_warning(f"Could not remove outdated diff {output_path}: {e}")
        logger.log_warning(f"Could not remove {output_path}: {e}")
        return
    display.print_info(f"Removed outdated diff: {output_path}")
    logger.log_info(f"Removed stale diff {output_path}")


def run_diff(profile, prompter, ref1=None, ref2=None):
    """
    Compare two revisions and save the diff next to the profile's files.

    Returns:
        DiffResult
    """
    targets = resolve_diff_targets(profile, ref1, ref2)
    display.print_info(f"Comparing {targets.old_label} with {targets.new_label}...")

    old, new = targets.load(profile.name)
    text = diff_documents(
        old, new,
        old_label=f"{targets.old_label} ({os.path.basename(targets.old_path)})",
        new_label=f"{targets.new_label} ({os.path.basename(targets.new_path)})"
    )

    if not text:
        display.print_success("No differences found.")
        logger.log_info(f"No differences between {targets.old_path} and {targets.new_path}")
        _remove_stale_output(targets.output_path)
        return DiffResult(targets, text)

    write_text_atomic(targets.output_path, text, profile=profile.name)
    display.print_info(f"Differences found. Output saved to: {targets.output_path}")
    logger.log_info(f"Diff of '{profile.name}' written to {targets.output_path}")

    if prompter.yes_no("Display the differences now?"):
        print("-" * 40)
        print(text, end="")
        print("-" * 40)

    return DiffResult(targets, text, targets.output_path)
