"""
config_manager.py - Manage persistent user settings
ONE RESPONSIBILITY: Load and save user settings to a JSON file
"""

import json
import os

from utils import logger

CONFIG_FILE = os.path.expanduser("~/.profman.json")

DEFAULT_CONFIG = {
    "user_data_path": None,   # Vivaldi "User Data" directory
    "home_dir": None          # Directory holding base_pref.json and skel/
}

def load_config(config_file=None):
    """Load settings from file, falling back to defaults."""
    config_file = config_file or CONFIG_FILE
    if not os.path.exists(config_file):
        return DEFAULT_CONFIG.copy()

    try:
        with open(config_file, 'r', encoding='utf-8') as f:
            user_config = json.load(f)
        # Merge with defaults to ensure all keys exist
        config = DEFAULT_CONFIG.copy()
        if isinstance(user_config, dict):
            config.update(user_config)
        return config
    except (OSError, ValueError) as e:
        logger.log_warning(f"Ignoring unreadable settings file {config_file}: {e}")
        return DEFAULT_CONFIG.copy()

def save_config(config, config_file=None):
    """Save settings to file."""
    config_file = config_file or CONFIG_FILE
    try:
        with open(config_file, 'w', encoding='utf-8') as f:
            json.dump(config, f, indent=4)
        return True
    except OSError as e:
        logger.log_error(f"Error saving settings to {config_file}: {e}")
        return False
