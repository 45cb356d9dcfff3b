"""
registry.py - Profile registry stored in 'Local State'
ONE RESPONSIBILITY: Register and deregister profiles
"""

import os
import shutil

from core import constants, document
from core.errors import Aborted, AmbiguousState, InvalidArgument, MalformedInput, ProfmanError, SourceMissing, WriteFailed
from profiles.resolver import Profile
from safety.backup_guard import event_backup
from safety.staging import StagedFile
from ui import display
from utils import logger


def load_registry(config):
    """Parse Local State; profile.info_cache must be an object when present."""
    state = document.load_object(config.local_state_file)
    section = state.get("profile", {})
    if not isinstance(section, dict):
        raise MalformedInput("profile is not an object", artifact=config.local_state_file)
    cache = section.get("info_cache", {})
    if not isinstance(cache, dict):
        raise MalformedInput("profile.info_cache is not an object", artifact=config.local_state_file)
    return state


def _info_cache(state):
    return state.setdefault("profile", {}).setdefault("info_cache", {})


def next_profile_number(state):
    """Highest registered 'Profile n' + 1."""
    numbers = []
    for name in _info_cache(state):
        rest = name[len(constants.NUMBERED_PROFILE_PREFIX):]
        if name.startswith(constants.NUMBERED_PROFILE_PREFIX) and rest.isdigit():
            numbers.append(int(rest))
    return max(numbers, default=0) + 1


def register_profile(state, dir_name):
    """Add a minimal entry; Vivaldi fills in the rest on first launch."""
    label = dir_name + constants.AUTO_PROFILE_LABEL
    _info_cache(state)[dir_name] = {"name": label, "user_name": label}
    return state


def deregister_profile(state, dir_name):
    _info_cache(state).pop(dir_name, None)
    return state


def _check_registry_exists(config):
    if not os.path.isfile(config.local_state_file):
        raise SourceMissing("Local State file not found", artifact=config.local_state_file)


def create_profile(config, prompter):
    """
    Register the next numbered profile and create its directory.

    Returns:
        Profile: The new profile
    """
    _check_registry_exists(config)
    state = load_registry(config)

    number = next_profile_number(state)
    profile = Profile(f"{constants.NUMBERED_PROFILE_PREFIX}{number}", config.user_data_path)
    if profile.exists():
        raise AmbiguousState("profile directory already exists but is not registered",
                             profile=profile.name, artifact=profile.path)

    display.print_warning("Vivaldi MUST be completely closed before proceeding.")
    if not prompter.yes_no("Are you sure you want to create a new profile?"):
        raise Aborted()

    display.print_info(f"Next available profile is number: {number}")
    register_profile(state, profile.name)

    with StagedFile(config.local_state_file, profile=profile.name) as staged:
        staged.write_text(document.dumps(state))
        try:
            os.makedirs(profile.path)
        except OSError as e:
            raise WriteFailed(f"cannot create profile directory: {e}", profile=profile.name, artifact=profile.path)
        try:
            event_backup(config.local_state_file,
                         config.local_state_file + constants.REGISTRY_BACKUP_BEFORE_CREATE,
                         profile=profile.name)
            staged.commit()
        except ProfmanError:
            os.rmdir(profile.path)
            raise

    display.print_success(f"Successfully registered '{profile.name}'.")
    print("Next steps:")
    print("1. Start Vivaldi and select the new profile from the profile menu to initialize it.")
    print("2. Once initialized, close Vivaldi and you can use this tool to merge preferences.")
    logger.log_info(f"Created and registered {profile.path}")
    return profile


def delete_profile(config, profile, prompter):
    """Deregister a profile and remove its directory. Default is never deleted."""
    if profile.is_default:
        raise InvalidArgument(f"deleting the '{constants.DEFAULT_PROFILE_NAME}' profile is not allowed",
                              profile=profile.name)

    _check_registry_exists(config)
    state = load_registry(config)

    if not prompter.confirm_destructive_action(profile.name, profile.path):
        display.print_warning("Confirmation failed.")
        raise Aborted()

    display.print_info("Proceeding with deletion...")
    deregister_profile(state, profile.name)

    backup_name = constants.REGISTRY_BACKUP_BEFORE_DELETE + profile.name.replace(" ", "_")
    with StagedFile(config.local_state_file, profile=profile.name) as staged:
        staged.write_text(document.dumps(state))
        event_backup(config.local_state_file, config.local_state_file + backup_name, profile=profile.name)
        staged.commit()
    display.print_info("Updated Local State file.")

    if profile.exists():
        try:
            shutil.rmtree(profile.path)
        except OSError as e:
            raise WriteFailed(
                f"profile was deregistered, but its directory could not be removed: {e}",
                profile=profile.name,
                artifact=profile.path
            )

    display.print_success(f"Successfully deleted profile '{profile.name}'.")
    logger.log_info(f"Deleted profile {profile.path}")
