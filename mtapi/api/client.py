import configparser
import logging
import time

import requests

from mtapi.utils.conf import get_conf

from . import identifiers
from .auth import Credentials
from .request import DekiRequest
from .response import FORMAT, normalize, parse_error_message
from .common import *
from .contexts import ContextMixin
from .drafts import DraftMixin
from .groups import GroupMixin
from .pages import PageMixin
from .site import SiteMixin
from .users import UserMixin

logger = logging.getLogger(__name__)

_SETTINGS_FILENAME = 'mindtouch_client.ini'

_def_conf = configparser.ConfigParser()
_def_conf['credentials'] = dict(api_domain='', api_username='', api_password='', api_key='',
                                api_secret='', secure=True, verify_ssl=True)
_def_conf['transport'] = dict(timeout=0)
_def_conf['output'] = dict(format=FORMAT.PARSED)
_def_conf['proxies'] = dict()

EDIT_TIME_FORMAT = '%Y%m%d%H%M%S'


class MindTouchClient(ContextMixin, DraftMixin, GroupMixin, PageMixin, SiteMixin, UserMixin):
    """Provides a client to the MindTouch RESTful interface."""

    def __init__(self, credentials: dict = None, settings_path=''):
        """Loads settings; explicitly passed *credentials* take precedence over the
        ``[credentials]`` section of the settings file.

        :param credentials: dict with keys api_domain, api_username, api_password and
         optionally api_key, api_secret, secure, verify_ssl"""

        self._conf = get_conf(settings_path, _SETTINGS_FILENAME, _def_conf)

        self.format = FORMAT.PARSED
        self.set_format(self._conf['output']['format'])

        # stable version marker for content edits made through this instance
        self.edit_time = time.strftime(EDIT_TIME_FORMAT)

        self.credentials = Credentials.create()
        self.DekiReq = None

        if credentials:
            self.set_api_credentials(credentials)
        else:
            self.set_api_credentials(self._conf_credentials())

    def _conf_credentials(self) -> dict:
        section = self._conf['credentials']
        creds = {key: section[key] for key in ('api_domain', 'api_username', 'api_password',
                                               'api_key', 'api_secret')}
        creds['secure'] = section.getboolean('secure')
        creds['verify_ssl'] = section.getboolean('verify_ssl')
        return creds

    def set_api_credentials(self, credentials: dict):
        """Replaces the credentials in use. See :meth:`Credentials.from_dict`."""
        creds = dict(credentials)
        if 'verify_ssl' not in creds:
            creds['verify_ssl'] = self._conf['credentials'].getboolean('verify_ssl')
        self._set_credentials(Credentials.from_dict(creds))

    def configure(self, domain: str, username: str = '', password: str = '', key: str = '',
                  secret: str = '', secure=True, verify_ssl=True):
        self._set_credentials(Credentials.create(domain, username, password, key, secret,
                                                 secure, verify_ssl))

    def _set_credentials(self, credentials: Credentials):
        self.credentials = credentials
        if credentials.base_url:
            logger.info('Using API at "%s".' % credentials.base_url)

        timeout = self._conf['transport'].getfloat('timeout') or None
        proxies = dict(self._conf['proxies'])
        self.DekiReq = DekiRequest(credentials, timeout, proxies)

    @property
    def base_url(self) -> str:
        return self.credentials.base_url

    def set_format(self, fmt: str):
        """:param fmt: 'raw' or 'parsed'; any other value means 'parsed'"""
        self.format = FORMAT.RAW if fmt == FORMAT.RAW else FORMAT.PARSED

    def api_token(self) -> str:
        return self.credentials.token()

    def _send(self, method, *args, **kwargs) -> 'Union[requests.Response, None]':
        """Calls a :class:`DekiRequest` verb method. Transport failures are logged
        and yield None."""
        try:
            return method(*args, **kwargs)
        except RequestError as e:
            logger.warning('%s failed: %s' % (method.__name__, e))
            return None

    def _output(self, r: 'Union[requests.Response, None]') -> 'Union[XmlNode, str, None]':
        if r is None:
            return None
        return normalize(r.content, self.format)

    @staticmethod
    def _text(r: 'Union[requests.Response, None]') -> str:
        return r.text if r is not None else ''

    def api_call(self, url: str) -> 'Union[XmlNode, str, None]':
        """Performs a GET request for a preformatted absolute URL."""
        return self._output(self._send(self.DekiReq.get_absolute, url))

    def call(self, type_: str, path: str, **kwargs) -> ApiResult:
        """Performs a request and interprets the response independently of the
        output format. Does not raise on transport failures.

        :param kwargs: see :meth:`DekiRequest.execute`"""

        try:
            r = self.DekiReq.execute(type_, path, **kwargs)
        except RequestError as e:
            logger.warning('%s "%s" failed: %s' % (type_, path, e))
            return transport_failure(e)
        return interpret(r.content)

    # shared helpers

    @staticmethod
    def parse_error_message(error: 'XmlNode') -> str:
        return parse_error_message(error)

    @staticmethod
    def build_page_id(title: str, path: str = '') -> str:
        return identifiers.build_page_id(title, path)

    @staticmethod
    def build_page_id_from_path(full_path: str) -> str:
        return identifiers.build_page_id_from_path(full_path)

    @staticmethod
    def escape_slashes(page_id: str) -> str:
        return identifiers.escape_slashes(page_id)

    def _properties_get(self, path: str, name: str = '') -> 'Union[XmlNode, str, None]':
        """Lists properties or, with *name*, gets a property's content as text."""
        path += '/properties'
        if name:
            return self._text(self._send(self.DekiReq.get, path + '/' + name))
        return self._output(self._send(self.DekiReq.get, path))

    def _properties_post(self, path: str, name: str, description: str, content: str) \
            -> 'Union[XmlNode, str, None]':
        params = {'abort': 'never', 'description': description}
        r = self._send(self.DekiReq.post, path + '/properties', data=content,
                       content_type='text/plain', params=params, extra_headers={'Slug': name})
        return self._output(r)
