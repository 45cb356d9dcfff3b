"""
config.py - Runtime configuration
ONE RESPONSIBILITY: Resolve paths once at startup into a Config object
"""

import os
import sys

from core import constants, config_manager
from core.errors import SourceMissing

TEST_USER_DATA_ENV = "PROFMAN_TEST_USER_DATA_PATH"
TEST_HOME_ENV = "PROFMAN_TEST_SCRIPT_DIR"
USER_DATA_ENV = "PROFMAN_USER_DATA_PATH"
HOME_ENV = "PROFMAN_HOME"
WSL_MARKER = "/etc/wsl.conf"

DEFAULT_HOME = os.path.expanduser("~/.profman")
BUNDLED_SKEL_DIR = os.path.join(
    os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "profiles", constants.SKEL_DIR
)


class Config:
    def __init__(self, user_data_path, home_dir, debug=False):
        self.user_data_path = user_data_path
        self.home_dir = home_dir
        self.debug = debug

    @property
    def skel_dir(self):
        """home/skel when the user keeps their own skeletons, else the bundled ones."""
        own = os.path.join(self.home_dir, constants.SKEL_DIR)
        return own if os.path.isdir(own) else BUNDLED_SKEL_DIR

    @property
    def base_prefs_file(self):
        return os.path.join(self.home_dir, constants.BASE_PREFS_FILE)

    @property
    def local_base_prefs_file(self):
        return os.path.join(self.home_dir, constants.LOCAL_BASE_PREFS_FILE)

    @property
    def bookmarks_file(self):
        return os.path.join(self.home_dir, constants.BOOKMARKS_TEMPLATE_FILE)

    @property
    def menu_patch_file(self):
        return os.path.join(self.home_dir, constants.MENU_PATCH_FILE)

    @property
    def exported_file(self):
        return os.path.join(self.home_dir, constants.EXPORTED_FILE)

    @property
    def local_state_file(self):
        return os.path.join(self.user_data_path, constants.LOCAL_STATE_FILE)

    def __repr__(self):
        return f"Config(user_data_path={self.user_data_path!r}, home_dir={self.home_dir!r})"


def default_user_data_path():
    """Platform default location of the Vivaldi User Data directory."""
    if sys.platform == "darwin":
        return os.path.expanduser("~/Library/Application Support/Vivaldi")
    return os.path.expanduser("~/.config/vivaldi")


def _resolve_user_data(user_data, environ, settings):
    if user_data:
        return user_data
    if environ.get(USER_DATA_ENV):
        return environ[USER_DATA_ENV]

    # WSL: Vivaldi runs on the Windows side
    if os.path.isfile(WSL_MARKER):
        win_root = environ.get("WIN_USER_ROOT")
        if not win_root:
            raise SourceMissing(
                "WSL environment detected, but WIN_USER_ROOT is not set "
                "(e.g. export WIN_USER_ROOT=/mnt/c/Users/YourName)"
            )
        return os.path.join(win_root, "AppData", "Local", "Vivaldi", "User Data")

    if settings.get("user_data_path"):
        return settings["user_data_path"]
    return default_user_data_path()


def build_config(user_data=None, home=None, debug=False, environ=None, settings=None):
    """
    Build the Config used by every operation.

    Args:
        user_data: --user-data value (optional)
        home: --home value (optional)
        debug: Verbose logging flag
        environ: Environment mapping (defaults to os.environ)
        settings: Persisted settings (defaults to config_manager.load_config())

    Returns:
        Config
    """
    environ = os.environ if environ is None else environ

    # Test isolation overrides everything else
    if environ.get(TEST_USER_DATA_ENV) and environ.get(TEST_HOME_ENV):
        user_data_path = environ[TEST_USER_DATA_ENV]
        home_dir = environ[TEST_HOME_ENV]
    else:
        if settings is None:
            settings = config_manager.load_config()
        user_data_path = _resolve_user_data(user_data, environ, settings)
        home_dir = home or environ.get(HOME_ENV) or settings.get("home_dir") or DEFAULT_HOME

    user_data_path = os.path.abspath(os.path.expanduser(user_data_path))
    home_dir = os.path.abspath(os.path.expanduser(home_dir))

    if not os.path.isdir(user_data_path):
        raise SourceMissing(
            "Vivaldi User Data directory is not configured correctly or does not exist; "
            "use --user-data or set " + USER_DATA_ENV,
            artifact=user_data_path
        )

    return Config(user_data_path, home_dir, debug=debug)
