"""
deploy.py - Merge base preferences into a profile
ONE RESPONSIBILITY: Apply user templates to a profile's live files
"""

import os

from core import constants, document
from core.errors import Aborted, InvalidArgument, SourceMissing
from core.merge import merge
from operations import replace
from safety.backup_guard import ensure_preferences_backup
from safety.staging import write_text_atomic
from ui import display
from utils import logger


def _merged_preferences(config, profile):
    """Load both documents and compute the merge, touching nothing."""
    if not os.path.isfile(config.base_prefs_file):
        raise SourceMissing("base preferences file not found", artifact=config.base_prefs_file)
    if not os.path.isfile(profile.prefs_file):
        raise SourceMissing(
            "Preferences file not found; has the profile been created and opened once?",
            profile=profile.name,
            artifact=profile.prefs_file
        )

    live = document.load_object(profile.prefs_file, profile=profile.name)
    template = document.load_object(config.base_prefs_file)
    return merge(live, template)


def next_test_output(profile):
    """First free Preferences.test.<i>, counting from 1."""
    i = 1
    while True:
        candidate = profile.artifact(f"{constants.TEST_OUTPUT_PREFIX}{i}")
        if not os.path.exists(candidate):
            return candidate
        i += 1


def _check_out_path(out):
    if os.path.basename(out).startswith(constants.PREFERENCES_FILE + "."):
        raise InvalidArgument(f"--out file name cannot start with '{constants.PREFERENCES_FILE}.'", artifact=out)


def merge_in_place(config, profile):
    """Back up once, then replace Preferences with the merged document."""
    merged = _merged_preferences(config, profile)

    ref = ensure_preferences_backup(profile)
    if ref.created:
        display.print_info(f"Backup of original created at {ref.path}")
    else:
        display.print_info(f"Backup file already exists at {ref.path}. Skipping backup.")

    write_text_atomic(profile.prefs_file, document.dumps(merged), profile=profile.name)
    display.print_success(f"Successfully updated preferences for profile '{profile.name}'.")
    logger.log_info(f"Merged {config.base_prefs_file} into {profile.prefs_file}")


def merge_to_file(config, profile, out, prompter):
    """Write the merged document elsewhere; the live profile is never touched."""
    merged = _merged_preferences(config, profile)

    if os.path.exists(out) and not prompter.yes_no(f"'{out}' already exists. Overwrite?"):
        raise Aborted()

    write_text_atomic(out, document.dumps(merged), profile=profile.name)
    display.print_success(f"Successfully created '{out}'.")
    logger.log_info(f"Merged preferences of '{profile.name}' written to {out}")
    return out


def deploy(config, profile, prompter, out=None, auto=False):
    """
    Merge base_pref.json into a profile.

    Args:
        config: Config
        profile: Target profile
        prompter: Confirmation channel
        out: Write the result to this file instead (optional)
        auto: Write the result to the next Preferences.test.<i>

    Returns:
        str: Path that received the merged document
    """
    if auto and out:
        raise InvalidArgument("--auto and --out cannot be used together")

    if out:
        _check_out_path(out)
    elif auto:
        out = next_test_output(profile)
        display.print_info(f"Auto-mode enabled. Output will be saved to: {out}")

    if out:
        display.print_info(f"Merging to output file: {out}")
        return merge_to_file(config, profile, out, prompter)

    # Validate before asking
    _merged_preferences(config, profile)

    display.print_warning("Vivaldi MUST be completely closed before proceeding.")
    print(f"Merging '{config.base_prefs_file}' into '{profile.prefs_file}'...")
    if not prompter.yes_no(f"Overwrite the preferences of profile '{profile.name}'?"):
        raise Aborted()

    merge_in_place(config, profile)
    return profile.prefs_file


def deploy_all(config, profile, prompter):
    """Merge preferences, then replace bookmarks and context menus, after one confirmation."""
    _merged_preferences(config, profile)
    replace.check_sources(config.bookmarks_file, profile.bookmarks_file, profile)

    with_menus = os.path.isfile(config.menu_patch_file)
    if with_menus:
        replace.check_sources(config.menu_patch_file, profile.context_menu_file, profile)
    else:
        display.print_warning(f"'{config.menu_patch_file}' not found; context menus will be skipped.")

    display.print_warning("Vivaldi MUST be completely closed before proceeding.")
    print(f"You are about to overwrite preferences, bookmarks{' and context menus' if with_menus else ''} "
          f"for profile '{profile.name}'.")
    if not prompter.yes_no("This action is permanent. Are you sure?"):
        raise Aborted()

    merge_in_place(config, profile)
    replace.replace_bookmarks(config, profile)
    if with_menus:
        replace.replace_menus(config, profile)
