"""
help.py - Usage examples shown by --help
"""

EXAMPLES = """\
examples:
  # List all available profiles
  profman --list

  # Merge base_pref.json into the Default profile
  profman --profile 0

  # Numbered, timestamped snapshot of Profile 1 (Preferences.snap.1.YYYYMMDD-HHMMSS)
  profman --profile 1 --snap

  # Dry-run merge of Profile 2 into Preferences.test.<n>
  profman --profile 2 --auto

  # What changed in Default since the first merge
  profman --profile 0 --diff

  # Current settings of Profile 1 against its 3rd snapshot, then snapshot 5 against 8
  profman --profile 1 --diff 3
  profman --profile 0 --diff 5 8

  # Archive generated files of Profile 1 into Preferences.1.bak.zip
  profman --profile 1 --clean

  # Register the next numbered profile
  profman --create-profile

  # Export Default's settings shaped like base_pref.json
  profman --export-base 0

  # Restore Profile 1 from snapshot 2, or from the pre-deploy original
  profman --profile 1 --restore 2
  profman --profile 1 --restore original

  # Permanently delete Profile 4
  profman --profile 4 --delete-profile

Vivaldi must be completely closed before running any command that writes.
"""
