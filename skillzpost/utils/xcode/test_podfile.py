#!/usr/bin/env python3
"""
Tests for Podfile patching.

Run with: python3 -m pytest skillzpost/utils/xcode/test_podfile.py
"""

import io
import os
import tempfile
import unittest
from unittest.mock import patch

from skillzpost.utils.xcode.podfile import (
    MAIN_TARGET_LINE,
    MODIFIED_FOOTER,
    POST_INSTALL_LINES,
    SCRIPT_PHASE_LINES,
    PodfilePatcher,
)

UNITY_PODFILE = """source 'https://cdn.cocoapods.org/'
platform :ios, '12.0'

target 'UnityFramework' do
  pod 'Skillz', '~> 10.1'
end
target 'Unity-iPhone' do
end
use_frameworks! :linkage => :static
"""


class TestPodfilePatcher(unittest.TestCase):

    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.export_path = self.temp_dir.name
        self.podfile_path = os.path.join(self.export_path, "Podfile")

    def tearDown(self):
        self.temp_dir.cleanup()

    def write_podfile(self, contents):
        with open(self.podfile_path, "w") as f:
            f.write(contents)

    def read_lines(self):
        with open(self.podfile_path) as f:
            return f.read().splitlines()

    def test_script_lines_follow_main_target(self):
        self.write_podfile(UNITY_PODFILE)

        with patch('sys.stdout', new_callable=io.StringIO):
            result = PodfilePatcher.for_export(self.export_path).patch()

        self.assertTrue(result.is_success())
        self.assertTrue(result.get_value())
        lines = self.read_lines()
        index = lines.index(MAIN_TARGET_LINE)
        self.assertEqual(lines[index + 1:index + 4], SCRIPT_PHASE_LINES)
        self.assertEqual(lines[index + 4], "end")

    def test_post_install_block_appended_at_end(self):
        self.write_podfile(UNITY_PODFILE)

        with patch('sys.stdout', new_callable=io.StringIO):
            PodfilePatcher.for_export(self.export_path).patch()

        lines = self.read_lines()
        expected_tail = POST_INSTALL_LINES + [MODIFIED_FOOTER]
        self.assertEqual(lines[-len(expected_tail):], expected_tail)
        self.assertEqual(lines[-len(expected_tail) - 1], "use_frameworks! :linkage => :static")

    def test_patch_twice_appends_once(self):
        self.write_podfile(UNITY_PODFILE)
        patcher = PodfilePatcher.for_export(self.export_path)

        with patch('sys.stdout', new_callable=io.StringIO):
            patcher.patch()
            second = patcher.patch()

        self.assertTrue(second.is_success())
        self.assertFalse(second.get_value())
        lines = self.read_lines()
        self.assertEqual(lines.count("post_install do |installer|"), 1)
        self.assertEqual(lines.count(SCRIPT_PHASE_LINES[0]), 1)

    def test_missing_anchor_leaves_file_unmodified(self):
        contents = "platform :ios, '12.0'\ntarget 'Other' do\nend\n"
        self.write_podfile(contents)

        with patch('sys.stdout', new_callable=io.StringIO) as stdout:
            result = PodfilePatcher.for_export(self.export_path).patch()

        self.assertTrue(result.is_failure())
        self.assertIn("Warning", stdout.getvalue())
        with open(self.podfile_path) as f:
            self.assertEqual(f.read(), contents)

    def test_missing_podfile(self):
        with patch('sys.stdout', new_callable=io.StringIO) as stdout:
            result = PodfilePatcher.for_export(self.export_path).patch()

        self.assertTrue(result.is_failure())
        self.assertIn("No Podfile", stdout.getvalue())
        self.assertFalse(os.path.exists(self.podfile_path))

    def test_apply_does_not_mutate_input(self):
        lines = UNITY_PODFILE.splitlines()
        original = list(lines)

        PodfilePatcher(self.podfile_path).apply(lines)

        self.assertEqual(lines, original)

    def test_apply_raises_without_anchor(self):
        with self.assertRaises(ValueError):
            PodfilePatcher(self.podfile_path).apply(["target 'UnityFramework' do", "end"])


if __name__ == '__main__':
    unittest.main()
