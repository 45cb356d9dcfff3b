"""
export.py - Export a profile's settings shaped like base_pref.json
ONE RESPONSIBILITY: Produce a new base file from live preferences
"""

import os

from core import document
from core.errors import Aborted, SourceMissing
from core.merge import export_pick
from safety.staging import write_text_atomic
from ui import display
from utils import logger


def export_base(config, profile, prompter):
    """
    Deep-pick the profile's Preferences using base_pref.json as the shape.

    Keys of the template missing from the profile are left out of the
    export rather than copied from the template.

    Returns:
        str: Path of the exported file
    """
    if not os.path.isfile(config.base_prefs_file):
        raise SourceMissing("template file not found, cannot export", artifact=config.base_prefs_file)
    if not os.path.isfile(profile.prefs_file):
        raise SourceMissing("Preferences file not found", profile=profile.name, artifact=profile.prefs_file)

    live = document.load_object(profile.prefs_file, profile=profile.name)
    template = document.load_object(config.base_prefs_file)
    picked = export_pick(live, template)

    out = config.exported_file
    if os.path.exists(out) and not prompter.yes_no(f"Warning: '{out}' already exists. Overwrite?"):
        raise Aborted()

    display.print_info(f"Exporting settings from profile '{profile.name}' to '{out}'...")
    write_text_atomic(out, document.dumps(picked), profile=profile.name)

    display.print_success(f"Successfully exported settings to '{out}'.")
    print("You can now review this file and replace base_pref.json if desired.")
    logger.log_info(f"Exported '{profile.name}' preferences shaped by {config.base_prefs_file} to {out}")
    return out
