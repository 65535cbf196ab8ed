"""User accounts, passwords, properties and login links"""

import hashlib
import logging
import time
from urllib.parse import quote_plus, urlencode

from .common import *
from .identifiers import user_segment, xml_escape

logger = logging.getLogger(__name__)


def _users_path(user_id='') -> str:
    if user_id == '' or user_id is None:
        return 'users'
    return 'users/' + user_segment(user_id)


def _user_xml(username: str, email: str, name: str, status: str, id_=None) -> str:
    # the ID is only included when updating a user
    attr = ' id="%i"' % int(id_) if id_ else ''
    return ('<user%s><username>%s</username><email>%s</email><fullname>%s</fullname>'
            '<status>%s</status></user>' % (attr, xml_escape(username), xml_escape(email),
                                            xml_escape(name), xml_escape(status)))


def impersonation_token(api_key: str, username: str) -> str:
    timestamp = int(time.time())
    auth_hash = hashlib.md5(('%s:%i:%s' % (username, timestamp, api_key)).encode('utf-8'))
    return 'imp_%i_%s_=%s' % (timestamp, auth_hash.hexdigest(), username)


class UserMixin(object):
    def users_get(self, user_id='', filters: dict = None):
        """Lists users, or gets a single user by ID, name or ``'current'``.

        :param filters: query parameters to search by"""
        return self._output(self._send(self.DekiReq.get, _users_path(user_id),
                                       params=filters or {}))

    def users_post(self, username: str, email: str, name: str, password: str = '', id=None):
        """Creates a user or, with a numeric *id*, updates one.
        Setting the password of an existing user takes a second request."""

        params = {}
        if not id and password:
            params['accountpassword'] = password
        body = _user_xml(username, email, name, 'active', id)
        r = self._send(self.DekiReq.post, _users_path(), body, 'application/xml', params=params)

        if id and password:
            self.users_password_put(id, password)

        return self._output(r)

    def users_put(self, user_id, username: str, email: str, name: str, status='active'):
        """Modifies an existing user.

        :param status: active or inactive"""
        body = _user_xml(username, email, name, status)
        return self._output(self._send(self.DekiReq.put, _users_path(user_id), body))

    def users_password_put(self, user_id, password: str) -> str:
        """:returns: response text"""
        r = self._send(self.DekiReq.put, _users_path(user_id) + '/password', password, 'text/plain')
        return self._text(r)

    def users_properties_get(self, user_id, name: str = ''):
        """:returns: parsed property list, or the property's content if *name* is given"""
        return self._properties_get(_users_path(user_id), name)

    def users_properties_post(self, user_id, name: str, description: str, content: str):
        return self._properties_post(_users_path(user_id), name, description, content)

    def users_authenticate_link(self, api_key: str, username: str, redirect: str = '') -> str:
        """Builds a link that logs in *username* and then redirects.

        :param redirect: target URL, defaults to the site's main page"""
        if not redirect:
            redirect = self.credentials.site_url
        query = urlencode([('authtoken', impersonation_token(api_key, username)),
                           ('redirect', redirect)], quote_via=quote_plus)
        return self.base_url + 'users/authenticate?' + query
