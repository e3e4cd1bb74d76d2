#!/usr/bin/env python3
"""
Tests for generated source patches.

Run with: python3 -m pytest skillzpost/utils/xcode/test_sources.py
"""

import io
import os
import tempfile
import unittest
from datetime import datetime
from unittest.mock import patch

from skillzpost.utils.xcode import sources

MAIN_MM = """#include <UnityFramework/UnityFramework.h>

int main(int argc, char* argv[])
{
    @autoreleasepool
    {
        id ufw = UnityFrameworkLoad();
        [ufw runUIApplicationMainWithArgc: argc argv: argv];
        return 0;
    }
}

static int helper()
{
    return 0;
}
"""

SKILLZ_UNITY_MM = """#import <Skillz/Skillz.h>

void _launchSkillz()
{
    [[Skillz skillzInstance] launchSkillzWithOrientation:SkillzPortrait allowExit:YES];
    [[Skillz skillzInstance] setGameHasSyncBot:NO];
}
"""


class TestAddTimestamp(unittest.TestCase):

    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.export_path = self.temp_dir.name
        os.makedirs(os.path.join(self.export_path, "MainApp"))
        self.main_path = os.path.join(self.export_path, "MainApp", "main.mm")
        self.now = datetime(2024, 5, 17, 14, 3, 9)

    def tearDown(self):
        self.temp_dir.cleanup()

    def test_log_statement_precedes_first_return(self):
        with open(self.main_path, "w") as f:
            f.write(MAIN_MM)

        with patch('sys.stdout', new_callable=io.StringIO):
            self.assertTrue(sources.add_timestamp(self.export_path, self.now))

        with open(self.main_path) as f:
            contents = f.read()
        self.assertEqual(contents.count("NSLog("), 1)
        self.assertIn('NSLog(@"Build Time = 2024-05-17 14:03:09");\n\t\treturn 0;', contents)
        self.assertEqual(contents.count("return 0;"), 2)
        self.assertTrue(contents.endswith("static int helper()\n{\n    return 0;\n}\n"))

    def test_missing_return_leaves_file_unmodified(self):
        with open(self.main_path, "w") as f:
            f.write("int main() { return 1; }\n")

        with patch('sys.stdout', new_callable=io.StringIO) as stdout:
            self.assertFalse(sources.add_timestamp(self.export_path, self.now))

        self.assertIn("Warning", stdout.getvalue())
        with open(self.main_path) as f:
            self.assertEqual(f.read(), "int main() { return 1; }\n")

    def test_missing_main_file(self):
        os.rmdir(os.path.join(self.export_path, "MainApp"))

        with patch('sys.stdout', new_callable=io.StringIO) as stdout:
            self.assertFalse(sources.add_timestamp(self.export_path, self.now))

        self.assertIn("main.mm", stdout.getvalue())

    def test_crlf_line_endings_preserved(self):
        with open(self.main_path, "w", newline="") as f:
            f.write("int main()\r\n{\r\n    return 0;\r\n}\r\n")

        with patch('sys.stdout', new_callable=io.StringIO):
            self.assertTrue(sources.add_timestamp(self.export_path, self.now))

        with open(self.main_path, "rb") as f:
            contents = f.read()
        self.assertEqual(
            contents,
            b'int main()\r\n{\r\n    NSLog(@"Build Time = 2024-05-17 14:03:09");\r\n\t\treturn 0;\r\n}\r\n',
        )


class TestSkillzUnityPatches(unittest.TestCase):

    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.path = sources.exported_skillz_unity_source(self.temp_dir.name)
        os.makedirs(os.path.dirname(self.path))
        with open(self.path, "w") as f:
            f.write(SKILLZ_UNITY_MM)

    def tearDown(self):
        self.temp_dir.cleanup()

    def read(self):
        with open(self.path) as f:
            return f.read()

    def test_exported_path_layout(self):
        self.assertTrue(self.path.endswith(
            os.path.join("Libraries", "Skillz", "Internal", "Build", "iOS", "IncludeInXcode", "Skillz+Unity.mm")
        ))

    def test_disallow_exit(self):
        with patch('sys.stdout', new_callable=io.StringIO):
            self.assertTrue(sources.set_allow_skillz_exit(self.path, False))

        contents = self.read()
        self.assertIn("allowExit:NO]", contents)
        self.assertNotIn("allowExit:YES", contents)

    def test_allow_exit_keeps_yes(self):
        with patch('sys.stdout', new_callable=io.StringIO):
            self.assertTrue(sources.set_allow_skillz_exit(self.path, True))

        self.assertIn("allowExit:YES]", self.read())

    def test_enable_sync_bot(self):
        with patch('sys.stdout', new_callable=io.StringIO):
            self.assertTrue(sources.set_game_has_sync_bot(self.path, True))

        contents = self.read()
        self.assertIn("setGameHasSyncBot:YES]", contents)
        self.assertIn("allowExit:YES", contents)

    def test_missing_anchor_warns_and_leaves_file(self):
        with open(self.path, "w") as f:
            f.write("// allowExit removed\n")

        with patch('sys.stdout', new_callable=io.StringIO) as stdout:
            self.assertFalse(sources.set_allow_skillz_exit(self.path, False))

        self.assertIn("Could not find 'allowExit:YES'", stdout.getvalue())
        self.assertEqual(self.read(), "// allowExit removed\n")

    def test_patch_keeps_crlf_and_missing_final_newline(self):
        with open(self.path, "w", newline="") as f:
            f.write("#import <Skillz/Skillz.h>\r\n[s launch:o allowExit:YES];\r\n}")

        with patch('sys.stdout', new_callable=io.StringIO):
            self.assertTrue(sources.set_allow_skillz_exit(self.path, False))

        with open(self.path, "rb") as f:
            self.assertEqual(f.read(), b"#import <Skillz/Skillz.h>\r\n[s launch:o allowExit:NO];\r\n}")


if __name__ == '__main__':
    unittest.main()
