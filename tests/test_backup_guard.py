"""
test_backup_guard.py - First-mutation backups and staged writes
"""

import os
import sys
import unittest
from unittest.mock import patch

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from tests.profile_env import ProfileTestCase

from core.errors import BackupFailed, SourceMissing, WriteFailed
from operations import deploy
from safety import backup_guard, staging

class TestBackupGuard(ProfileTestCase):

    def setUp(self):
        super().setUp()
        self.write_text(self.profile.prefs_file, '{"state": "before"}')

    def test_state_reports_absent_then_present(self):
        state = backup_guard.preferences_backup(self.profile)
        self.assertFalse(state.present)
        self.assertEqual(state.path, self.profile.prefs_backup_file)

        backup_guard.ensure_preferences_backup(self.profile)
        self.assertTrue(backup_guard.preferences_backup(self.profile).present)

    def test_second_call_is_a_no_op(self):
        first = backup_guard.ensure_preferences_backup(self.profile)
        self.write_text(self.profile.prefs_file, '{"state": "after"}')
        second = backup_guard.ensure_preferences_backup(self.profile)

        self.assertTrue(first.created)
        self.assertFalse(second.created)
        self.assertEqual(first.path, second.path)
        self.assertEqual(self.read_bytes(first.path), b'{"state": "before"}')
        backups = [f for f in self.profile_files() if f == "Preferences.Default"]
        self.assertEqual(backups, ["Preferences.Default"])

    def test_backup_name_uses_profile_suffix(self):
        from profiles.resolver import Profile
        numbered = Profile("Profile 3", self.user_data)
        custom = Profile("Work", self.user_data)
        self.assertTrue(numbered.prefs_backup_file.endswith("Preferences.3"))
        self.assertTrue(custom.prefs_backup_file.endswith("Preferences.Work"))
        self.assertTrue(self.profile.bookmarks_backup_file.endswith("Bookmarks.Default"))

    def test_missing_target_is_source_missing(self):
        os.remove(self.profile.prefs_file)
        with self.assertRaises(SourceMissing):
            backup_guard.ensure_preferences_backup(self.profile)

    def test_failed_copy_raises_and_leaves_live_untouched(self):
        with patch('safety.staging.shutil.copyfile', side_effect=OSError("disk full")):
            with self.assertRaises(BackupFailed):
                backup_guard.ensure_preferences_backup(self.profile)

        self.assertFalse(os.path.exists(self.profile.prefs_backup_file))
        self.assertEqual(self.read_bytes(self.profile.prefs_file), b'{"state": "before"}')

    def test_failed_backup_aborts_deploy(self):
        self.write_json(self.config.base_prefs_file, {"state": "merged"})
        with patch('safety.staging.shutil.copyfile', side_effect=OSError("read-only")):
            with self.assertRaises(BackupFailed):
                deploy.deploy(self.config, self.profile, self.yes())

        self.assertEqual(self.read_bytes(self.profile.prefs_file), b'{"state": "before"}')

    def test_interrupted_copy_leaves_no_backup(self):
        def partial_copy(src, dst):
            with open(dst, 'wb') as f:
                f.write(b'{"sta')
            raise SystemExit(143)

        with patch('safety.staging.shutil.copyfile', side_effect=partial_copy):
            with self.assertRaises(SystemExit):
                backup_guard.ensure_preferences_backup(self.profile)

        self.assertFalse(backup_guard.preferences_backup(self.profile).present)
        self.assertEqual(self.profile_files(), ["Preferences"])

        ref = backup_guard.ensure_preferences_backup(self.profile)
        self.assertTrue(ref.created)
        self.assertEqual(self.read_bytes(ref.path), b'{"state": "before"}')

    def test_backup_written_meanwhile_is_kept(self):
        def copy_and_race(src, dst):
            with open(dst, 'wb') as f:
                f.write(b'{"state": "raced"}')
            self.write_text(self.profile.prefs_backup_file, '{"state": "first"}')

        with patch('safety.staging.shutil.copyfile', side_effect=copy_and_race):
            ref = backup_guard.ensure_preferences_backup(self.profile)

        self.assertFalse(ref.created)
        self.assertEqual(self.read_bytes(self.profile.prefs_backup_file), b'{"state": "first"}')
        self.assertEqual(sorted(self.profile_files()), ["Preferences", "Preferences.Default"])

    def test_event_backup_overwrites(self):
        target = self.profile.artifact("Preferences.before-restore-snap1")
        backup_guard.event_backup(self.profile.prefs_file, target)
        self.write_text(self.profile.prefs_file, '{"state": "later"}')
        backup_guard.event_backup(self.profile.prefs_file, target)
        self.assertEqual(self.read_bytes(target), b'{"state": "later"}')


class TestStaging(ProfileTestCase):

    def test_commit_replaces_target(self):
        target = self.profile.prefs_file
        self.write_text(target, "old")
        staging.write_text_atomic(target, "new")

        with open(target) as f:
            self.assertEqual(f.read(), "new")
        self.assertEqual(self.profile_files(), ["Preferences"])

    def test_empty_content_is_refused(self):
        target = self.profile.prefs_file
        self.write_text(target, "old")
        with self.assertRaises(WriteFailed):
            staging.write_text_atomic(target, "")

        with open(target) as f:
            self.assertEqual(f.read(), "old")
        self.assertEqual(self.profile_files(), ["Preferences"])

    def test_exception_discards_staging_file(self):
        target = self.profile.prefs_file
        with self.assertRaises(RuntimeError):
            with staging.StagedFile(target) as staged:
                staged.write_text("partial")
                raise RuntimeError("interrupted")

        self.assertEqual(self.profile_files(), [])
        self.assertNotIn(staged.path, staging._pending)

    def test_pending_files_removed_by_exit_cleanup(self):
        staged = staging.StagedFile(self.profile.prefs_file).__enter__()
        staged.write_text("orphan")
        self.assertTrue(os.path.exists(staged.path))

        staging._cleanup()
        self.assertFalse(os.path.exists(staged.path))

if __name__ == '__main__':
    unittest.main()
