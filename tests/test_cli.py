#!/usr/bin/env python3
'''Unit tests for the command line interface'''

from contextlib import redirect_stderr, redirect_stdout
from io import StringIO
from pathlib import Path
import sys

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / 'src'))

from scriptbind.cli import main
from scriptbind.config import get_config
import unittest
import yaml


class TestCli(unittest.TestCase):
    '''Test the scriptbind command'''

    def setUp(self):
        get_config().reset()

    def tearDown(self):
        get_config().reset()

    def run_main(self, *argv):
        out = StringIO()
        err = StringIO()
        with redirect_stdout(out), redirect_stderr(err):
            code = main(list(argv))

        return code, out.getvalue(), err.getvalue()

    def test_packages(self):
        code, out, _ = self.run_main('packages')

        self.assertEqual(code, 0)
        self.assertIn('BasicStringPackage', out)
        self.assertIn('Basic string utilities, including printing.', out)

    def test_signatures_of_a_package(self):
        code, out, _ = self.run_main('signatures', '--package', 'BasicStringPackage')

        self.assertEqual(code, 0)
        lines = out.splitlines()
        self.assertIn('print() -> string', lines)
        self.assertIn('append(&mut string, char) -> ()', lines)
        self.assertIn('print(&mut f64) -> string', lines)
        self.assertEqual(len(lines), 62)

    def test_disabled_feature(self):
        code, out, _ = self.run_main('--disable', 'floating_point', 'signatures')

        self.assertEqual(code, 0)
        self.assertNotIn('&mut f64', out)
        self.assertIn('print(&mut i64) -> string', out)

    def test_unknown_package(self):
        code, out, err = self.run_main('signatures', '--package', 'NoSuchPackage')

        self.assertEqual(code, 1)
        self.assertEqual(out, '')
        self.assertIn('NoSuchPackage', err)

    def test_yaml_to_stdout(self):
        code, out, _ = self.run_main('signatures', '--yaml', '-')

        self.assertEqual(code, 0)
        data = yaml.safe_load(out)
        self.assertIn('BasicStringPackage', data['modules'])
        self.assertEqual(data['modules']['global'], [])

    def test_no_command_prints_help(self):
        code, out, _ = self.run_main()

        self.assertEqual(code, 0)
        self.assertIn('usage: scriptbind', out)


if __name__ == '__main__':
    unittest.main()
