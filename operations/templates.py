"""
templates.py - First-run creation of user templates
ONE RESPONSIBILITY: Copy skeleton files into place when templates are absent
"""

import os
import shutil

from core import constants
from core.errors import SourceMissing, WriteFailed
from ui import display
from utils import logger


def _create_from(source, target):
    """Copy source to target; never overwrite an existing target."""
    os.makedirs(os.path.dirname(target), exist_ok=True)
    try:
        with open(source, 'rb') as src, open(target, 'xb') as dst:
            shutil.copyfileobj(src, dst)
    except FileExistsError:
        return False
    except OSError as e:
        raise WriteFailed(f"failed to create from '{os.path.basename(source)}': {e}", artifact=target)

    display.print_success(f"Created '{target}'. You can now edit this file.")
    logger.log_info(f"Materialized {target} from {source}")
    return True


def ensure_templates(config):
    """
    Make sure base_pref.json, bookmarks.json and menu_patch.json exist.

    base_pref.json prefers local.base_pref.json over the skeleton. The menu
    template is optional.

    Returns:
        list: Paths created by this call
    """
    created = []
    skel = config.skel_dir

    if not os.path.isfile(config.base_prefs_file):
        display.print_info(f"'{constants.BASE_PREFS_FILE}' not found. Looking for a source to create it...")
        skel_file = os.path.join(skel, constants.BASE_PREFS_SKEL_FILE)
        if os.path.isfile(config.local_base_prefs_file):
            source = config.local_base_prefs_file
        elif os.path.isfile(skel_file):
            source = skel_file
        else:
            raise SourceMissing(
                f"cannot create '{constants.BASE_PREFS_FILE}': neither "
                f"'{constants.LOCAL_BASE_PREFS_FILE}' nor the skeleton exists",
                artifact=skel_file
            )
        if _create_from(source, config.base_prefs_file):
            created.append(config.base_prefs_file)

    if not os.path.isfile(config.bookmarks_file):
        skel_file = os.path.join(skel, constants.BOOKMARKS_SKEL_FILE)
        if not os.path.isfile(skel_file):
            raise SourceMissing(
                f"cannot create '{constants.BOOKMARKS_TEMPLATE_FILE}' because the skeleton file is missing",
                artifact=skel_file
            )
        if _create_from(skel_file, config.bookmarks_file):
            created.append(config.bookmarks_file)

    if not os.path.isfile(config.menu_patch_file):
        skel_file = os.path.join(skel, constants.MENU_PATCH_SKEL_FILE)
        if os.path.isfile(skel_file):
            if _create_from(skel_file, config.menu_patch_file):
                created.append(config.menu_patch_file)
        else:
            display.print_info(
                f"Cannot create '{constants.MENU_PATCH_FILE}' because the skeleton file is missing; "
                "--menus will be unavailable until this is resolved."
            )

    return created
