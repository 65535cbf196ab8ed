import io
import os
import re
import sys
import unittest

import httpretty
import requests
from mock import patch

settings_path = os.path.join(os.path.dirname(__file__), 'cli_settings')
empty_path = os.path.join(os.path.dirname(__file__), 'dummy_files')
os.environ['MINDTOUCH_CLI_SETTINGS_PATH'] = settings_path
os.environ['MINDTOUCH_CLI_CACHE_PATH'] = empty_path

import mindtouch_cli

try:
    from importlib import reload
except ImportError:
    from imp import reload

BASE_URL = 'http://wiki.example.com/@api/deki/'
ANY_URL = re.compile(re.escape(BASE_URL) + '.*')


def run_main() -> int:
    try:
        mindtouch_cli.main()
    except SystemExit as e:
        return e.code


class ActionTestCase(unittest.TestCase):
    def setUp(self):
        reload(mindtouch_cli)
        sys.argv = [mindtouch_cli._app_name]

    # tests

    @patch('sys.stdout.write')
    def testHelp(self, print_):
        sys.argv.append('-h')
        self.assertEqual(run_main(), 0)

    def testVersion(self):
        sys.argv.append('version')
        with patch('sys.stdout', new_callable=io.StringIO) as out:
            self.assertEqual(run_main(), None)
        self.assertIn(mindtouch_cli.mtapi.__version__, out.getvalue())

    def testPageId(self):
        sys.argv.extend(['page-id', 'Guides/TCP//IP'])
        with patch('sys.stdout', new_callable=io.StringIO) as out:
            self.assertEqual(run_main(), None)
        self.assertEqual(out.getvalue().strip(), 'Guides%252FTCP%252F%252FIP')

    def testPageIdWithTitle(self):
        sys.argv.extend(['page-id', 'Guides', '--title', 'TCP/IP'])
        with patch('sys.stdout', new_callable=io.StringIO) as out:
            self.assertEqual(run_main(), None)
        self.assertEqual(out.getvalue().strip(), 'Guides%252FTCP%252F%252FIP')

    def testNoDomain(self):
        mindtouch_cli.SETTINGS_PATH = empty_path
        sys.argv.extend(['page', '42'])
        self.assertEqual(run_main(), mindtouch_cli.INIT_FAILED_RETVAL)

    def testInvalidOption(self):
        sys.argv.extend(['search', '-o', 'limit', 'foo'])
        self.assertEqual(run_main(), mindtouch_cli.INVALID_ARG_RETVAL)

    @httpretty.activate
    def testExists(self):
        httpretty.register_uri(httpretty.GET, ANY_URL, body='<page id="42"/>')
        sys.argv.extend(['exists', 'Guides/Setup'])
        with patch('sys.stdout', new_callable=io.StringIO) as out:
            self.assertEqual(run_main(), None)
        self.assertEqual(out.getvalue().strip(), 'yes')
        self.assertEqual(httpretty.last_request().path, '/@api/deki/pages/=Guides%252FSetup')

    @httpretty.activate
    def testNotExists(self):
        httpretty.register_uri(httpretty.GET, ANY_URL, body='<page id="0"/>')
        sys.argv.extend(['exists', '42'])
        with patch('sys.stdout', new_callable=io.StringIO):
            self.assertEqual(run_main(), mindtouch_cli.NOT_FOUND_RETVAL)

    @httpretty.activate
    def testTagsPrintsRaw(self):
        httpretty.register_uri(httpretty.GET, ANY_URL, body='<tags count="0"/>')
        sys.argv.extend(['tags', 'home'])
        with patch('sys.stdout', new_callable=io.StringIO) as out:
            self.assertEqual(run_main(), None)
        self.assertEqual(out.getvalue().strip(), '<tags count="0"/>')
        self.assertEqual(httpretty.last_request().path, '/@api/deki/pages/home/tags')

    @patch.object(requests.Session, 'request',
                  side_effect=requests.exceptions.ConnectionError('connection refused'))
    def testConnectionFailureExitsWithError(self, request):
        sys.argv.extend(['tags', 'home'])
        with patch('sys.stdout', new_callable=io.StringIO) as out:
            self.assertEqual(run_main(), mindtouch_cli.ERROR_RETVAL)
        self.assertEqual(out.getvalue(), '')
