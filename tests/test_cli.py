"""
Test suite for the jjc command line.

Author: xwest
"""

import io
import os
import sys
import tempfile
import unittest
from contextlib import redirect_stdout, redirect_stderr

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from jjc.cli import main, build_arg_parser


class TestCli(unittest.TestCase):
    """Test cases for the jjc entry point."""

    def setUp(self):
        self._tmpdir = tempfile.TemporaryDirectory()
        self.tmpdir = self._tmpdir.name

    def tearDown(self):
        self._tmpdir.cleanup()

    def _write(self, name: str, text: str) -> str:
        path = os.path.join(self.tmpdir, name)
        with open(path, 'w', encoding='utf-8') as f:
            f.write(text)
        return path

    def _run(self, argv):
        stdout, stderr = io.StringIO(), io.StringIO()
        with redirect_stdout(stdout), redirect_stderr(stderr):
            status = main(argv)
        return status, stdout.getvalue(), stderr.getvalue()

    def test_prints_program(self):
        path = self._write("main.jj", "print('hello');\n")

        status, out, err = self._run([path])

        self.assertEqual(status, 0)
        self.assertTrue(out.startswith("// Autogenerated from jj->javascript transpiler"))
        self.assertIn('jjprint(stack,"hello")', out)
        self.assertEqual(err, "")

    def test_compile_error_exits_with_1(self):
        path = self._write("bad.jj", "let x = ;\n")

        status, out, err = self._run([path])

        self.assertEqual(status, 1)
        self.assertEqual(out, "")
        self.assertIn("Expected expression", err)
        self.assertIn(f"in {path}, line 1", err)

    def test_missing_file(self):
        status, out, err = self._run([os.path.join(self.tmpdir, "nope.jj")])
        self.assertEqual(status, 1)
        self.assertIn("jjc:", err)

    def test_file_not_utf8(self):
        path = os.path.join(self.tmpdir, "latin1.jj")
        with open(path, 'wb') as f:
            f.write(b"print('\xff');")

        status, out, err = self._run([path])

        self.assertEqual(status, 1)
        self.assertEqual(out, "")
        self.assertIn("jjc:", err)

    def test_unknown_entry(self):
        path = self._write("main.jj", "1;\n")

        status, out, err = self._run(["--entry", "other.jj", path])

        self.assertEqual(status, 1)
        self.assertIn("other.jj", err)

    def test_html_output_file(self):
        path = self._write("main.jj", "print(1);\n")
        output = os.path.join(self.tmpdir, "index.html")

        status, out, err = self._run(["--html", "-o", output, path])

        self.assertEqual(status, 0)
        self.assertEqual(out, "")
        with open(output, encoding='utf-8') as f:
            page = f.read()
        self.assertTrue(page.startswith("<!DOCTYPE html>"))
        self.assertIn("tryAndCatch(stack => {", page)

    def test_entry_option(self):
        first = self._write("first.jj", "1;\n")
        second = self._write("second.jj", "2;\n")

        status, out, err = self._run(["--entry", first, first, second])

        self.assertEqual(status, 0)
        self.assertIn(f'importUri(stack, "{first}");', out)

    def test_requires_files(self):
        with redirect_stderr(io.StringIO()):
            with self.assertRaises(SystemExit):
                build_arg_parser().parse_args([])


if __name__ == '__main__':
    unittest.main()
