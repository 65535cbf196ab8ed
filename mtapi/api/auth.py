"""Credentials and request authentication (token or HTTP basic)"""

import hashlib
import hmac
import logging
import time
from collections import namedtuple

import requests
from requests.auth import AuthBase, HTTPBasicAuth

logger = logging.getLogger(__name__)

API_ROOT = '/@api/deki/'
TOKEN_HEADER = 'X-Deki-Token'


def issue_token(key: str, secret: str, username: str) -> str:
    """Creates a signed, time-stamped server token.

    :returns: ``tkn_<key>_<time>_=<username>_<hex signature>`` or an empty string
     if any of the arguments is unset"""

    if not (key and secret and username):
        return ''
    payload = '%s_%i_=%s' % (key, int(time.time()), username)
    signature = hmac.new(secret.encode('utf-8'), payload.encode('utf-8'),
                         hashlib.sha256).hexdigest()
    return 'tkn_%s_%s' % (payload, signature)


class Credentials(namedtuple('Credentials', ['base_url', 'username', 'password',
                                             'api_key', 'api_secret', 'verify_ssl'])):
    """Server location and account data of a client. Replace, do not modify."""

    __slots__ = ()

    @classmethod
    def create(cls, domain: str = '', username: str = '', password: str = '',
               key: str = '', secret: str = '', secure=True, verify_ssl=True) -> 'Credentials':
        if not domain:
            return cls('', '', '', '', '', verify_ssl)
        base_url = ('https://' if secure else 'http://') + domain + API_ROOT
        return cls(base_url, username or '', password or '', key or '', secret or '', verify_ssl)

    @classmethod
    def from_dict(cls, d: dict) -> 'Credentials':
        """:param d: dict with keys api_domain, api_username, api_password and optionally
         api_key, api_secret, secure, verify_ssl"""
        return cls.create(d.get('api_domain'), d.get('api_username'), d.get('api_password'),
                          d.get('api_key'), d.get('api_secret'),
                          secure=d.get('secure', True), verify_ssl=d.get('verify_ssl', True))

    @property
    def site_url(self) -> str:
        """URL of the wiki front end"""
        return self.base_url.replace(API_ROOT[1:], '')

    def token(self) -> str:
        return issue_token(self.api_key, self.api_secret, self.username)

    def __repr__(self):
        return 'Credentials(base_url=%r, username=%r)' % (self.base_url, self.username)


class DekiAuth(AuthBase):
    """Signs each request with a fresh token, falls back to HTTP basic auth."""

    def __init__(self, credentials: Credentials):
        self.credentials = credentials

    def __call__(self, r: requests.PreparedRequest):
        token = self.credentials.token()
        if token:
            r.headers[TOKEN_HEADER] = token
            return r
        return HTTPBasicAuth(self.credentials.username, self.credentials.password)(r)
