
import io
import unittest
from urllib.parse import quote
from contextlib import redirect_stdout, redirect_stderr
from os.path import exists, join

from fs.tempfs import TempFS

from klsurl.cli import klsurl

from klsurl.test.support import make_jar, jar_url, KT_SOURCE, REAL_FILES


class TestCli(unittest.TestCase):

    def setUp(self):
        self.tmp = TempFS('klsurl-test')
        self.dir = self.tmp.getsyspath('/')
        self.jar = make_jar(self.dir)

    def tearDown(self):
        self.tmp.close()

    def run_cli(self, *args):
        out, err = io.StringIO(), io.StringIO()

        with redirect_stdout(out), redirect_stderr(err):
            rc = klsurl(list(args))

        return rc, out.getvalue(), err.getvalue()

    def test_info(self):

        rc, out, err = self.run_cli('--info', jar_url(self.jar, '/com/example/Foo.class', '?source=true'))

        self.assertEqual(0, rc)
        self.assertIn(self.jar, out)
        self.assertIn('/com/example/Foo.class', out)
        self.assertIn('Compiled', out)

        rc, out, err = self.run_cli('-i', 'http://example.com')

        self.assertEqual(1, rc)
        self.assertIn('does not reference', err)

        rc, out, err = self.run_cli('-i', 'kls:')

        self.assertEqual(1, rc)
        self.assertIn('ERROR', err)

    def test_list(self):

        rc, out, err = self.run_cli('--list', jar_url(self.jar))

        self.assertEqual(0, rc)

        for name in REAL_FILES:
            self.assertIn('!/' + quote(name), out)

    def test_cat(self):

        rc, out, err = self.run_cli('--cat', jar_url(self.jar, '/com/example/Foo.kt'))

        self.assertEqual(0, rc)
        self.assertEqual(KT_SOURCE, out)

        rc, out, err = self.run_cli('--cat', jar_url(self.jar, '/com/example/Missing.kt'))

        self.assertEqual(1, rc)
        self.assertIn('Missing.kt', err)

    def test_extract(self):

        rc, out, err = self.run_cli('--dir', self.dir, '--extract', jar_url(self.jar, '/com/example/Foo.kt'))

        self.assertEqual(0, rc)

        path = out.strip()

        self.assertTrue(path.startswith(self.dir))
        self.assertTrue(path.endswith('.kt'))
        self.assertTrue(exists(path))

        with open(path, encoding='utf-8') as f:
            self.assertEqual(KT_SOURCE, f.read())

    def test_bad_archive(self):

        rc, out, err = self.run_cli('-c', jar_url(join(self.dir, 'missing.jar'), '/Foo.kt'))

        self.assertEqual(1, rc)
        self.assertIn('missing.jar', err)


if __name__ == '__main__':
    unittest.main()
