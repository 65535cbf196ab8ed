import logging
from threading import local

import requests
from requests.exceptions import RequestException

from .auth import Credentials, DekiAuth
from .common import *

logger = logging.getLogger(__name__)


class DekiRequest(object):
    """Executes authenticated requests against the API root of one server.

    Requests are sent synchronously and exactly once; there is no retry and the
    status code is not interpreted here."""

    def __init__(self, credentials: Credentials, timeout: 'Union[float, None]' = None,
                 proxies: dict = None):
        """:arg credentials: server location and account data
           :arg timeout: seconds to wait for the server, None waits indefinitely
           :arg proxies: dict of protocol to proxy, \
                         see http://docs.python-requests.org/en/master/user/advanced/#proxies
        """

        self.credentials = credentials
        self.auth_callback = DekiAuth(credentials)
        self.timeout = timeout
        self.proxies = proxies or {}

        self.__session = requests.session()
        self.__thr_local = local()

        if not credentials.verify_ssl:
            logger.warning('TLS certificate verification is disabled for "%s".'
                           % credentials.base_url)

    def url(self, path: str) -> str:
        return self.credentials.base_url + path

    @catch_conn_exception
    def _request(self, type_: str, url: str, **kwargs) -> requests.Response:
        """Performs a HTTP request

        :param type_: the type of HTTP request to perform
        :param kwargs: may include additional headers: dict and timeout: int"""

        headers = {}
        if 'headers' in kwargs:
            headers = dict(**(kwargs['headers']))
            del kwargs['headers']

        last_url = getattr(self.__thr_local, 'last_req_url', None)
        if url == last_url:
            logger.debug('%s "%s"' % (type_, url))
        else:
            logger.info('%s "%s"' % (type_, url))
        if kwargs.get('data'):
            logger.debug(kwargs['data'])

        self.__thr_local.last_req_url = url

        if 'timeout' in kwargs:
            timeout = kwargs['timeout']
            del kwargs['timeout']
        else:
            timeout = self.timeout

        try:
            r = self.__session.request(type_, url, auth=self.auth_callback,
                                       proxies=self.proxies, headers=headers, timeout=timeout,
                                       verify=self.credentials.verify_ssl, **kwargs)
        except RequestException as e:
            logger.info('%s "%s" failed: %s' % (type_, url, e))
            raise

        if r.status_code not in OK_CODES:
            logger.debug('Status %s for %s "%s".' % (r.status_code, type_, url))
        return r

    def execute(self, type_: str, path: str, data=None, content_type: str = None,
                extra_headers: dict = None, **kwargs) -> requests.Response:
        """Sends a request to ``base_url + path``.

        :param data: request body
        :param content_type: sent as ``<content_type>; charset=UTF-8``
        :param extra_headers: sent verbatim, e.g. ``{'Slug': 'name'}``"""

        headers = {}
        if content_type:
            headers['Content-Type'] = content_type + '; charset=UTF-8'
        if isinstance(data, str):
            data = data.encode('utf-8')
        if type_ == 'PUT':
            headers['Content-Length'] = str(len(data) if data else 0)
        if extra_headers:
            headers.update(extra_headers)

        return self._request(type_, self.url(path), data=data, headers=headers, **kwargs)

    # HTTP verbs

    def get(self, path, **kwargs) -> requests.Response:
        return self.execute('GET', path, **kwargs)

    def post(self, path, data='', content_type=None, **kwargs) -> requests.Response:
        return self.execute('POST', path, data=data, content_type=content_type, **kwargs)

    def put(self, path, data='', content_type='application/xml', **kwargs) -> requests.Response:
        return self.execute('PUT', path, data=data, content_type=content_type, **kwargs)

    def delete(self, path, **kwargs) -> requests.Response:
        return self.execute('DELETE', path, **kwargs)

    def get_absolute(self, url: str, **kwargs) -> requests.Response:
        """GET for a preformatted, absolute URL"""
        return self._request('GET', url, **kwargs)
