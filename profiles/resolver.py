"""
resolver.py - Profile identity and discovery
ONE RESPONSIBILITY: Map profile ids to directories and find existing profiles
"""

import os
from typing import List

from core import constants


class Profile:
    """A browser profile directory inside the User Data directory."""

    def __init__(self, name, user_data_path):
        self.name = name
        self.path = os.path.join(user_data_path, name)

    @property
    def is_default(self):
        return self.name == constants.DEFAULT_PROFILE_NAME

    @property
    def number(self):
        """n for 'Profile n', 0 for Default, None for custom names."""
        if self.is_default:
            return 0
        rest = self.name[len(constants.NUMBERED_PROFILE_PREFIX):]
        if self.name.startswith(constants.NUMBERED_PROFILE_PREFIX) and rest.isdigit():
            return int(rest)
        return None

    @property
    def backup_suffix(self):
        """Suffix of first-mutation backups: Default, n, or the raw name."""
        if self.is_default:
            return constants.DEFAULT_PROFILE_NAME
        number = self.number
        return str(number) if number is not None else self.name

    @property
    def archive_id(self):
        number = self.number
        return str(number) if number is not None else self.name

    @property
    def prefs_file(self):
        return self.artifact(constants.PREFERENCES_FILE)

    @property
    def prefs_backup_file(self):
        return self.artifact(f"{constants.PREFERENCES_FILE}.{self.backup_suffix}")

    @property
    def bookmarks_file(self):
        return self.artifact(constants.BOOKMARKS_FILE)

    @property
    def bookmarks_backup_file(self):
        return self.artifact(f"{constants.BOOKMARKS_FILE}.{self.backup_suffix}")

    @property
    def context_menu_file(self):
        return self.artifact(constants.CONTEXT_MENU_FILE)

    @property
    def context_menu_backup_file(self):
        return self.artifact(constants.CONTEXT_MENU_FILE + constants.MENU_BACKUP_SUFFIX)

    def artifact(self, filename):
        """Path of a file inside the profile directory."""
        return os.path.join(self.path, filename)

    def exists(self):
        return os.path.isdir(self.path)

    def __eq__(self, other):
        return isinstance(other, Profile) and (self.name, self.path) == (other.name, other.path)

    def __hash__(self):
        return hash((self.name, self.path))

    def __repr__(self):
        return f"Profile({self.name!r})"


def profile_dir_name(profile_arg):
    """
    Translate a --profile argument into a directory name.

    '0' -> 'Default', '3' -> 'Profile 3', anything else is used as given.
    """
    profile_arg = str(profile_arg).strip()
    if profile_arg == "0":
        return constants.DEFAULT_PROFILE_NAME
    if profile_arg.isdigit():
        return f"{constants.NUMBERED_PROFILE_PREFIX}{int(profile_arg)}"
    return profile_arg


def resolve_profile(config, profile_arg):
    """Build the Profile for a --profile argument."""
    return Profile(profile_dir_name(profile_arg), config.user_data_path)


def list_profiles(config) -> List[Profile]:
    """
    Find existing profiles.

    Returns:
        list: Default first (when present), then 'Profile n' sorted by n
    """
    found = []
    default = Profile(constants.DEFAULT_PROFILE_NAME, config.user_data_path)
    if default.exists():
        found.append(default)

    try:
        entries = os.listdir(config.user_data_path)
    except OSError:
        return found

    numbered = []
    for entry in entries:
        profile = Profile(entry, config.user_data_path)
        if profile.number and profile.exists():
            numbered.append(profile)

    found.extend(sorted(numbered, key=lambda p: p.number))
    return found
