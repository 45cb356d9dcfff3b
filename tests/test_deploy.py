"""
test_deploy.py - Merging base_pref.json into profiles
"""

import os
import sys
import unittest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from tests.profile_env import ProfileTestCase

from core.errors import Aborted, InvalidArgument, MalformedInput, SourceMissing
from operations import deploy

class TestDeploy(ProfileTestCase):

    def setUp(self):
        super().setUp()
        self.write_json(self.profile.prefs_file, {"vivaldi": {"existing_setting": "foo"}, "other": 1})
        self.write_json(self.config.base_prefs_file,
                        {"vivaldi": {"new_setting": "bar", "existing_setting": "overwritten"}})

    def test_merge_in_place(self):
        deploy.deploy(self.config, self.profile, self.yes())

        self.assertEqual(self.read_json(self.profile.prefs_file), {
            "vivaldi": {"existing_setting": "overwritten", "new_setting": "bar"},
            "other": 1
        })
        self.assertEqual(self.read_json(self.profile.prefs_backup_file),
                         {"vivaldi": {"existing_setting": "foo"}, "other": 1})

    def test_backup_keeps_first_state_across_deploys(self):
        deploy.deploy(self.config, self.profile, self.yes())
        self.write_json(self.config.base_prefs_file, {"other": 2})
        deploy.deploy(self.config, self.profile, self.yes())

        self.assertEqual(self.read_json(self.profile.prefs_file)["other"], 2)
        self.assertEqual(self.read_json(self.profile.prefs_backup_file)["other"], 1)

    def test_decline_changes_nothing(self):
        before = self.read_bytes(self.profile.prefs_file)
        with self.assertRaises(Aborted):
            deploy.deploy(self.config, self.profile, self.no())

        self.assertEqual(self.read_bytes(self.profile.prefs_file), before)
        self.assertEqual(self.profile_files(), ["Preferences"])

    def test_malformed_preferences_leave_file_untouched(self):
        self.write_text(self.profile.prefs_file, '{"broken": ')
        with self.assertRaises(MalformedInput):
            deploy.deploy(self.config, self.profile, self.yes())

        self.assertEqual(self.read_bytes(self.profile.prefs_file), b'{"broken": ')
        self.assertEqual(self.profile_files(), ["Preferences"])

    def test_missing_template(self):
        os.remove(self.config.base_prefs_file)
        with self.assertRaises(SourceMissing):
            deploy.deploy(self.config, self.profile, self.yes())

    def test_missing_preferences(self):
        os.remove(self.profile.prefs_file)
        with self.assertRaises(SourceMissing):
            deploy.deploy(self.config, self.profile, self.yes())

    def test_auto_writes_numbered_test_files(self):
        first = deploy.deploy(self.config, self.profile, self.no(), auto=True)
        second = deploy.deploy(self.config, self.profile, self.no(), auto=True)

        self.assertEqual(os.path.basename(first), "Preferences.test.1")
        self.assertEqual(os.path.basename(second), "Preferences.test.2")
        self.assertEqual(self.read_json(first)["vivaldi"]["new_setting"], "bar")
        # Live file and backup are untouched
        self.assertEqual(self.read_json(self.profile.prefs_file)["vivaldi"], {"existing_setting": "foo"})
        self.assertFalse(os.path.exists(self.profile.prefs_backup_file))

    def test_out_file(self):
        out = os.path.join(self.root, "merged.json")
        deploy.deploy(self.config, self.profile, self.no(), out=out)
        self.assertEqual(self.read_json(out)["vivaldi"]["existing_setting"], "overwritten")

    def test_auto_skips_taken_test_names(self):
        self.write_text(self.profile.artifact("Preferences.test.1"), "{}")
        out = deploy.deploy(self.config, self.profile, self.no(), auto=True)
        self.assertEqual(os.path.basename(out), "Preferences.test.2")
        self.assertEqual(self.read_bytes(self.profile.artifact("Preferences.test.1")), b"{}")

    def test_out_file_named_like_backup_is_refused(self):
        with self.assertRaises(InvalidArgument):
            deploy.deploy(self.config, self.profile, self.yes(), out=os.path.join(self.root, "Preferences.1"))

    def test_auto_and_out_together_are_refused(self):
        with self.assertRaises(InvalidArgument):
            deploy.deploy(self.config, self.profile, self.yes(), out="x.json", auto=True)


class TestDeployAll(ProfileTestCase):

    def setUp(self):
        super().setUp()
        self.write_json(self.config.base_prefs_file, {"vivaldi": {"some_setting": True}})
        self.write_json(self.config.bookmarks_file, {"roots": {"bookmark_bar": {"children": [{"name": "Skel"}]}}})
        self.write_json(self.config.menu_patch_file, [{"action": "page", "children": [{"action": "Skel.Action"}]}])
        self.write_json(self.profile.prefs_file, {"vivaldi": {"some_setting": False}})
        self.write_json(self.profile.bookmarks_file, {"roots": {"bookmark_bar": {"children": [{"name": "Original"}]}}})
        self.write_json(self.profile.context_menu_file,
                        [{"action": "page", "children": [{"action": "Original.Action"}]}])

    def test_deploys_everything(self):
        deploy.deploy_all(self.config, self.profile, self.yes())

        self.assertTrue(self.read_json(self.profile.prefs_file)["vivaldi"]["some_setting"])
        self.assertTrue(os.path.exists(self.profile.prefs_backup_file))
        self.assertEqual(self.read_json(self.profile.bookmarks_file)["roots"]["bookmark_bar"]["children"][0]["name"],
                         "Skel")
        self.assertTrue(os.path.exists(self.profile.bookmarks_backup_file))
        self.assertEqual(self.read_json(self.profile.context_menu_file)[0]["children"][0]["action"], "Skel.Action")
        self.assertEqual(self.read_json(self.profile.context_menu_backup_file)[0]["children"][0]["action"],
                         "Original.Action")

    def test_missing_menu_template_is_skipped(self):
        os.remove(self.config.menu_patch_file)
        deploy.deploy_all(self.config, self.profile, self.yes())

        self.assertEqual(self.read_json(self.profile.context_menu_file)[0]["children"][0]["action"],
                         "Original.Action")
        self.assertFalse(os.path.exists(self.profile.context_menu_backup_file))

    def test_decline_changes_nothing(self):
        before = self.profile_files()
        with self.assertRaises(Aborted):
            deploy.deploy_all(self.config, self.profile, self.no())
        self.assertEqual(self.profile_files(), before)

if __name__ == '__main__':
    unittest.main()
