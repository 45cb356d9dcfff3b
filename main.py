#!/usr/bin/env python3
"""
main.py - Vivaldi Profile Manager
Parses the command line into one operation and runs it
"""

import argparse
import os
import sys

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from core import commands, config_manager
from core.config import build_config
from core.errors import Aborted, InvalidArgument, ProfmanError
from operations import cleanup, deploy, diff, export, replace, restore, snapshot, templates
from profiles import registry
from profiles.resolver import list_profiles, profile_dir_name, resolve_profile
from ui import display, help
from ui.prompts import Prompter
from utils import logger

VERSION = "0.7.0"

def _snapshot_number(text):
    try:
        return commands.parse_snapshot_number(text)
    except InvalidArgument as e:
        raise argparse.ArgumentTypeError(e.message)

def _restore_ref(text):
    try:
        return restore.parse_restore_ref(text)
    except InvalidArgument as e:
        raise argparse.ArgumentTypeError(e.message)

def build_parser():
    parser = argparse.ArgumentParser(
        prog="profman",
        description="A manager for Vivaldi browser profiles.",
        epilog=help.EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    group = parser.add_mutually_exclusive_group()
    group.add_argument("--list", action="store_true", help="List all available profiles and exit")
    group.add_argument("--create-profile", action="store_true", help="Create a new, numbered profile")
    group.add_argument("--deploy", action="store_true",
                       help="Merge base_pref.json into the profile (default when only --profile is given)")
    group.add_argument("--deploy-all", action="store_true",
                       help="Merge preferences and replace bookmarks and context menus")
    group.add_argument("--snap", action="store_true",
                       help="Create a numbered, timestamped snapshot of the profile's Preferences")
    group.add_argument("--restore", metavar="REF", type=_restore_ref,
                       help="Replace the profile's settings with snapshot REF or 'original'")
    group.add_argument("--diff", nargs="*", metavar="N", type=_snapshot_number,
                       help="No args: current vs. backup; N1: current vs. snapshot N1; "
                            "N1 N2: snapshot N1 vs. N2")
    group.add_argument("--clean", action="store_true",
                       help="Archive generated files into a zip and remove the originals")
    group.add_argument("--menus", action="store_true",
                       help="Replace contextmenu.json with menu_patch.json")
    group.add_argument("--bookmarks", action="store_true",
                       help="Replace Bookmarks with bookmarks.json")
    group.add_argument("--export-base", metavar="ID",
                       help="Export settings of profile ID matching the keys of base_pref.json")
    group.add_argument("--delete-profile", action="store_true",
                       help="Permanently delete a profile directory and deregister it")

    parser.add_argument("--profile", metavar="ID|NAME",
                        help="Profile to target: 0 for Default, 1 for 'Profile 1', or the full name")
    parser.add_argument("--out", metavar="FILE", help="Write merged JSON to FILE instead of the profile")
    parser.add_argument("--auto", action="store_true",
                        help="Write merged JSON to the next Preferences.test.<n> in the profile")
    parser.add_argument("--user-data", metavar="PATH", help="Vivaldi 'User Data' directory")
    parser.add_argument("--home", metavar="PATH", help="Directory holding base_pref.json and skel/")
    parser.add_argument("--remember", action="store_true", help="Save --user-data/--home for later runs")
    parser.add_argument("--debug", action="store_true", help="Enable verbose logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")
    return parser

def command_from_args(args, parser):
    """Turn parsed arguments into exactly one command value."""
    if args.list:
        return commands.ListProfiles()
    if args.create_profile:
        return commands.CreateProfile()
    if args.export_base is not None:
        return commands.ExportBase(args.export_base)

    if not args.profile:
        parser.error("a profile argument (--profile) is required for this operation")

    if (args.out or args.auto) and (args.restore is not None or args.diff is not None or args.snap
                                    or args.clean or args.menus or args.bookmarks
                                    or args.deploy_all or args.delete_profile):
        parser.error("--out and --auto only apply to a deploy")

    if args.restore is not None:
        return commands.Restore(args.profile, args.restore)
    if args.diff is not None:
        if len(args.diff) > 2:
            parser.error("--diff takes at most two snapshot numbers")
        refs = list(args.diff) + [None, None]
        return commands.Diff(args.profile, refs[0], refs[1])
    if args.snap:
        return commands.Snapshot(args.profile)
    if args.clean:
        return commands.Clean(args.profile)
    if args.menus:
        return commands.ReplaceMenus(args.profile)
    if args.bookmarks:
        return commands.ReplaceBookmarks(args.profile)
    if args.deploy_all:
        return commands.DeployAll(args.profile)
    if args.delete_profile:
        return commands.DeleteProfile(args.profile)
    return commands.Deploy(args.profile, out=args.out, auto=args.auto)

def _run_list(command, config, prompter):
    profiles = list_profiles(config)
    display.print_header("Available Vivaldi profiles")
    display.print_table(["Profile", "Id"], [[p.name, p.number] for p in profiles])
    print(f"Total profiles found: {len(profiles)}")

def _run_create(command, config, prompter):
    registry.create_profile(config, prompter)

def _run_deploy(command, config, prompter):
    deploy.deploy(config, resolve_profile(config, command.profile), prompter,
                  out=command.out, auto=command.auto)

def _run_deploy_all(command, config, prompter):
    deploy.deploy_all(config, resolve_profile(config, command.profile), prompter)

def _run_snapshot(command, config, prompter):
    snap = snapshot.create_snapshot(resolve_profile(config, command.profile))
    display.print_success(f"Snapshot created successfully at: {snap.path}")

def _run_restore(command, config, prompter):
    restore.restore(resolve_profile(config, command.profile), command.ref, prompter)

def _run_diff(command, config, prompter):
    diff.run_diff(resolve_profile(config, command.profile), prompter, command.ref1, command.ref2)

def _run_clean(command, config, prompter):
    cleanup.clean(resolve_profile(config, command.profile))

def _run_menus(command, config, prompter):
    replace.menus(config, resolve_profile(config, command.profile), prompter)

def _run_bookmarks(command, config, prompter):
    replace.bookmarks(config, resolve_profile(config, command.profile), prompter)

def _run_export(command, config, prompter):
    export.export_base(config, resolve_profile(config, command.profile), prompter)

def _run_delete(command, config, prompter):
    registry.delete_profile(config, resolve_profile(config, command.profile), prompter)

HANDLERS = {
    commands.ListProfiles: _run_list,
    commands.CreateProfile: _run_create,
    commands.Deploy: _run_deploy,
    commands.DeployAll: _run_deploy_all,
    commands.Snapshot: _run_snapshot,
    commands.Restore: _run_restore,
    commands.Diff: _run_diff,
    commands.Clean: _run_clean,
    commands.ReplaceMenus: _run_menus,
    commands.ReplaceBookmarks: _run_bookmarks,
    commands.ExportBase: _run_export,
    commands.DeleteProfile: _run_delete,
}

def dispatch(command, config, prompter):
    """Run one command through its handler."""
    return HANDLERS[type(command)](command, config, prompter)

def _remember(args, config):
    settings = config_manager.load_config()
    if args.user_data:
        settings["user_data_path"] = config.user_data_path
    if args.home:
        settings["home_dir"] = config.home_dir
    if config_manager.save_config(settings):
        display.print_info(f"Settings saved to {config_manager.CONFIG_FILE}")

def main(argv=None, prompter=None, environ=None):
    """
    Entry point.

    Returns:
        int: Process exit status
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    command = command_from_args(args, parser)
    prompter = prompter or Prompter()

    logger.setup_logging(verbose=args.debug)
    logger.log_info(f"Command: {command}")

    profile_name = getattr(command, "profile", None)
    try:
        config = build_config(user_data=args.user_data, home=args.home,
                              debug=args.debug, environ=environ)
        logger.log_debug(f"Resolved {config!r}")
        if args.remember:
            _remember(args, config)
        templates.ensure_templates(config)
        dispatch(command, config, prompter)

    except Aborted:
        display.print_warning("Aborted.")
        logger.log_info(f"{command.label} aborted by user")
        return 1

    except ProfmanError as e:
        if e.profile is None and profile_name is not None:
            e.profile = profile_dir_name(profile_name)
        message = e.describe(command.label)
        display.print_error(message)
        logger.log_error(message)
        if args.debug:
            display.print_info(f"Log file: {logger.get_log_file()}")
        return 1

    return 0

def run():
    """Console script entry point."""
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print("\n\nOperation cancelled by user.")
        sys.exit(130)

if __name__ == "__main__":
    run()
