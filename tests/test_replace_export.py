"""
test_replace_export.py - Bookmark/menu replacement and base export
"""

import os
import sys
import unittest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from tests.profile_env import ProfileTestCase

from core.errors import Aborted, SourceMissing
from operations import export, replace

class TestReplace(ProfileTestCase):

    def setUp(self):
        super().setUp()
        self.write_json(self.config.bookmarks_file, {"roots": {"bookmark_bar": {"children": [{"name": "Skel"}]}}})
        self.write_json(self.config.menu_patch_file, [{"action": "page", "children": [{"action": "Skel.Action"}]}])
        self.write_json(self.profile.bookmarks_file, {"roots": {"bookmark_bar": {"children": [{"name": "Original"}]}}})
        self.write_json(self.profile.context_menu_file,
                        [{"action": "page", "children": [{"action": "Original.Action"}]}])

    def test_bookmarks_replaced_with_backup(self):
        replace.bookmarks(self.config, self.profile, self.yes())

        backup = self.read_json(self.profile.artifact("Bookmarks.Default"))
        self.assertEqual(backup["roots"]["bookmark_bar"]["children"][0]["name"], "Original")
        current = self.read_json(self.profile.bookmarks_file)
        self.assertEqual(current["roots"]["bookmark_bar"]["children"][0]["name"], "Skel")

    def test_menus_replaced_with_backup(self):
        replace.menus(self.config, self.profile, self.yes())

        backup = self.read_json(self.profile.artifact("contextmenu.json.bak-before-patch"))
        self.assertEqual(backup[0]["children"][0]["action"], "Original.Action")
        self.assertEqual(self.read_json(self.profile.context_menu_file)[0]["children"][0]["action"], "Skel.Action")

    def test_second_replace_keeps_first_backup(self):
        replace.bookmarks(self.config, self.profile, self.yes())
        replace.bookmarks(self.config, self.profile, self.yes())

        backup = self.read_json(self.profile.bookmarks_backup_file)
        self.assertEqual(backup["roots"]["bookmark_bar"]["children"][0]["name"], "Original")

    def test_decline_changes_nothing(self):
        before = self.read_bytes(self.profile.bookmarks_file)
        with self.assertRaises(Aborted):
            replace.bookmarks(self.config, self.profile, self.no())
        self.assertEqual(self.read_bytes(self.profile.bookmarks_file), before)
        self.assertFalse(os.path.exists(self.profile.bookmarks_backup_file))

    def test_uninitialized_profile(self):
        os.remove(self.profile.context_menu_file)
        with self.assertRaises(SourceMissing):
            replace.menus(self.config, self.profile, self.yes())


class TestExportBase(ProfileTestCase):

    def setUp(self):
        super().setUp()
        self.write_json(self.profile.prefs_file, {"vivaldi": {"homepage": "https://example.com"}, "private": 1})
        self.write_json(self.config.base_prefs_file, {"vivaldi": {"homepage": "", "some_setting": True}})

    def test_export_picks_live_values(self):
        out = export.export_base(self.config, self.profile, self.no())

        self.assertEqual(os.path.basename(out), "base_pref.exported.json")
        self.assertEqual(self.read_json(out), {"vivaldi": {"homepage": "https://example.com"}})

    def test_existing_export_needs_confirmation(self):
        self.write_json(self.config.exported_file, {"old": True})

        with self.assertRaises(Aborted):
            export.export_base(self.config, self.profile, self.no())
        self.assertEqual(self.read_json(self.config.exported_file), {"old": True})

        export.export_base(self.config, self.profile, self.yes())
        self.assertEqual(self.read_json(self.config.exported_file)["vivaldi"]["homepage"], "https://example.com")

    def test_template_is_never_modified(self):
        before = self.read_bytes(self.config.base_prefs_file)
        export.export_base(self.config, self.profile, self.no())
        self.assertEqual(self.read_bytes(self.config.base_prefs_file), before)

    def test_missing_template(self):
        os.remove(self.config.base_prefs_file)
        with self.assertRaises(SourceMissing):
            export.export_base(self.config, self.profile, self.no())

if __name__ == '__main__':
    unittest.main()
