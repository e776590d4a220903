
import os
import unittest
from os.path import exists
from unittest.mock import patch

from fs.tempfs import TempFS

import klsurl.tempdir
from klsurl.exceptions import KlsUrlError
from klsurl.tempdir import TemporaryDirectory, set_default_temp_name, TEMP_DIR_ENV_VAR


class TestTemporaryDirectory(unittest.TestCase):

    def setUp(self):
        self.tmp = TempFS('klsurl-test')
        self.dir = self.tmp.getsyspath('/')

    def tearDown(self):
        self.tmp.close()
        set_default_temp_name('klsurl')

    def test_create_temp_file(self):

        with TemporaryDirectory(temp_dir=self.dir) as td:
            a = td.create_temp_file('Foo', '.class')
            b = td.create_temp_file('Foo', '.class')

            self.assertNotEqual(a, b)

            for p in (a, b):
                self.assertTrue(p.exists())
                self.assertEqual(0, p.stat().st_size)
                self.assertTrue(p.name.startswith('Foo'))
                self.assertTrue(p.name.endswith('.class'))
                self.assertEqual(td.path, p.parent)

            self.assertTrue(str(td.path).startswith(str(self.dir)))
            self.assertIn('klsurl', td.path.name)

        self.assertTrue(td.closed)
        self.assertFalse(exists(str(a)))
        self.assertFalse(exists(str(td.path)))

    def test_no_auto_clean(self):

        td = TemporaryDirectory(temp_dir=self.dir, auto_clean=False)
        p = td.create_temp_file('Bar', '.kt')
        td.close()

        self.assertTrue(exists(str(p)))

    def test_configuration(self):

        with patch.dict(os.environ, {TEMP_DIR_ENV_VAR: self.dir}):
            with TemporaryDirectory() as td:
                self.assertTrue(str(td.path).startswith(str(self.dir)))

        set_default_temp_name('decompiled')

        with TemporaryDirectory(temp_dir=self.dir) as td:
            self.assertIn('decompiled', td.path.name)

        with TemporaryDirectory('other', temp_dir=self.dir) as td:
            self.assertIn('other', td.path.name)

        set_default_temp_name(None)

        with self.assertRaises(KlsUrlError):
            TemporaryDirectory(temp_dir=self.dir)

        self.assertIsNone(klsurl.tempdir.DEFAULT_TEMP_NAME)


if __name__ == '__main__':
    unittest.main()
