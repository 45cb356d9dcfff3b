"""
replace.py - Replace Bookmarks and contextmenu.json from templates
ONE RESPONSIBILITY: Swap a profile file for its user template
"""

import os

from core import document
from core.errors import Aborted, SourceMissing
from safety.backup_guard import ensure_backup
from safety.staging import copy_atomic
from ui import display
from utils import logger


def check_sources(template, target, profile):
    """Both the template and the profile's file must exist and parse."""
    if not os.path.isfile(template):
        raise SourceMissing("template file not found", profile=profile.name, artifact=template)
    if not os.path.isfile(target):
        raise SourceMissing(
            "profile file not found; the profile may not be initialized by Vivaldi yet",
            profile=profile.name,
            artifact=target
        )
    document.load_document(template, profile=profile.name)


def _replace(template, target, backup_path, profile, what):
    ref = ensure_backup(target, backup_path, profile=profile.name)
    if ref.created:
        display.print_info(f"Backing up current {what} to: {os.path.basename(backup_path)}")
    else:
        display.print_info(f"Backup {os.path.basename(backup_path)} already exists. Skipping backup.")

    copy_atomic(template, target, profile=profile.name)
    display.print_success(f"Successfully replaced {what} for profile '{profile.name}'.")
    logger.log_info(f"Replaced {target} with {template}")


def replace_bookmarks(config, profile):
    _replace(config.bookmarks_file, profile.bookmarks_file, profile.bookmarks_backup_file,
             profile, "bookmarks")


def replace_menus(config, profile):
    _replace(config.menu_patch_file, profile.context_menu_file, profile.context_menu_backup_file,
             profile, "context menus")


def _confirmed(prompter, profile, what):
    print(f"You are about to overwrite the {what} for profile '{profile.name}'.")
    return prompter.yes_no("This action is permanent. Are you sure?")


def bookmarks(config, profile, prompter):
    """Replace the profile's Bookmarks with bookmarks.json."""
    check_sources(config.bookmarks_file, profile.bookmarks_file, profile)
    if not _confirmed(prompter, profile, "bookmarks"):
        raise Aborted()
    replace_bookmarks(config, profile)


def menus(config, profile, prompter):
    """Replace the profile's contextmenu.json with menu_patch.json."""
    check_sources(config.menu_patch_file, profile.context_menu_file, profile)
    if not _confirmed(prompter, profile, "context menus"):
        raise Aborted()
    replace_menus(config, profile)
