"""Page operations: content, attachments, moves, properties, security and tags"""

import logging
import mimetypes
import os
from urllib.parse import quote

from .common import *
from .identifiers import page_segment, xml_escape
from .response import XmlNode

logger = logging.getLogger(__name__)


def _page_path(page_id) -> str:
    return 'pages/' + page_segment(page_id)


def _file_segment(file_name: str) -> str:
    # names without an extension are addressed by name
    return file_name if '.' in file_name else '=' + file_name


def _get_mimetype(file_name: str = '') -> str:
    mt = mimetypes.guess_type(file_name)[0]
    return mt if mt else 'application/octet-stream'


class PageMixin(object):
    """Implements the pages portion of the MindTouch API.

    *page_id* arguments are numeric IDs, encoded page IDs as returned by
    :func:`~mtapi.api.identifiers.build_page_id` or ``'home'``."""

    def pages(self):
        """Lists all pages of the site."""
        return self._output(self._send(self.DekiReq.get, 'pages'))

    def page_get(self, page_id):
        return self._output(self._send(self.DekiReq.get, _page_path(page_id)))

    def page_exists(self, page_id) -> bool:
        """:returns: whether the server reports a positive page ID"""
        result = self.call('GET', _page_path(page_id))
        if not result.ok:
            logger.debug('Page lookup failed: %s' % result.message)
            return False
        try:
            return int(result.value.get('id', 0)) > 0
        except ValueError:
            return False

    def page_create(self, page_id, content: str, title: str = ''):
        """Creates a page or overwrites its content.

        :param title: display title, if it differs from the page ID"""
        params = {'edittime': self.edit_time, 'overwrite': 'true'}
        if title:
            params['title'] = title
        return self._output(self._send(self.DekiReq.post, _page_path(page_id) + '/contents',
                                       data=content, params=params))

    @staticmethod
    def page_create_check(output: 'Union[XmlNode, None]') -> bool:
        """Checks the parsed output of :meth:`page_create` for success.
        The status is reported either as child element or as attribute."""
        if not isinstance(output, XmlNode):
            return False
        status = output.findtext('status', None)
        if status is None:
            status = output.get('status')
        return status == 'success'

    def page_contents_get(self, page_id, options: dict = None):
        return self._output(self._send(self.DekiReq.get, _page_path(page_id) + '/contents',
                                       params=options or {}))

    def page_delete(self, page_id):
        return self._output(self._send(self.DekiReq.delete, _page_path(page_id)))

    def pages_subpages_get(self, page_id):
        return self._output(self._send(self.DekiReq.get, _page_path(page_id) + '/subpages'))

    def page_tree_get(self, page_id, options: dict = None):
        """Gets the site map below a page."""
        return self._output(self._send(self.DekiReq.get, _page_path(page_id) + '/tree',
                                       params=options or {}))

    #
    # attachments
    #

    def page_files_get(self, page_id):
        return self._output(self._send(self.DekiReq.get, _page_path(page_id) + '/files'))

    def page_file_get(self, page_id, file_name: str) -> bytes:
        """:returns: the attachment's content"""
        path = _page_path(page_id) + '/files/' + quote(_file_segment(file_name), safe='=')
        r = self._send(self.DekiReq.get, path)
        return r.content if r is not None else b''

    def page_file_put(self, page_id, file_name: str, description: str = '',
                      file_name_alt: str = '', mime_type: str = ''):
        """Attaches a local file to a page. The whole file is read into memory.

        :param file_name: path of the local file
        :param file_name_alt: name of the attachment, defaults to the file's base name
        :param mime_type: defaults to a guess based on the file name"""

        base_name = os.path.basename(file_name)
        mt_name = file_name_alt if file_name_alt else base_name
        if not mime_type:
            mime_type = _get_mimetype(base_name)

        with open(file_name, 'rb') as f:
            data = f.read()

        params = {'description': description} if description else {}
        path = _page_path(page_id) + '/files/' + quote(_file_segment(mt_name), safe='')
        r = self._send(self.DekiReq.execute, 'PUT', path, data=data, params=params,
                       extra_headers={'Content-Type': mime_type})
        return self._output(r)

    #
    # moves
    #

    def page_rename(self, page_id, title: str):
        """Changes the page's title and, with it, its URI."""
        return self._move(page_id, {'to': title})

    def page_rename_title(self, page_id, name: str, title: str):
        """Changes the page's title, keeping the URI name *name*."""
        return self._move(page_id, {'name': name, 'title': title})

    def page_rename_uri(self, page_id, name: str):
        """Changes the page's URI name, keeping its title."""
        return self._move(page_id, {'name': name})

    def _move(self, page_id, params: dict):
        return self._output(self._send(self.DekiReq.post, _page_path(page_id) + '/move',
                                       params=params))

    def page_order_put(self, page_id, after_id: int):
        """Places a page after sibling *after_id*; 0 places it first."""
        return self._output(self._send(self.DekiReq.put, _page_path(page_id) + '/order',
                                       params={'afterid': after_id}))

    #
    # properties
    #

    def page_properties_get(self, page_id, name: str = ''):
        """:returns: parsed property list, or the property's content if *name* is given"""
        return self._properties_get(_page_path(page_id), name)

    def page_properties_post(self, page_id, name: str, description: str, content: str):
        return self._properties_post(_page_path(page_id), name, description, content)

    #
    # security
    #

    def page_security_get(self, page_id):
        return self._output(self._send(self.DekiReq.get, _page_path(page_id) + '/security'))

    def page_security_put(self, page_id, restriction: str, children: str = 'none'):
        """Sets a page's restriction.

        :param restriction: Public, Semi-Public, Semi-Private or Private
        :param children: cascade mode: none, delta or absolute"""
        body = ('<security><permissions.page><restriction>%s</restriction>'
                '</permissions.page></security>' % xml_escape(restriction))
        return self._output(self._send(self.DekiReq.put, _page_path(page_id) + '/security', body,
                                       params={'cascade': children}))

    def page_security_delete(self, page_id) -> str:
        """Resets a page's security. :returns: response text"""
        return self._text(self._send(self.DekiReq.delete, _page_path(page_id) + '/security'))

    #
    # tags
    #

    def page_tags_get(self, page_id):
        return self._output(self._send(self.DekiReq.get, _page_path(page_id) + '/tags'))

    def page_tags_set(self, page_id, tags: 'Iterable[str]'):
        """Replaces the page's tags."""
        body = '<tags>%s</tags>' % ''.join('<tag value="%s"/>' % xml_escape(t) for t in tags)
        return self._output(self._send(self.DekiReq.put, _page_path(page_id) + '/tags', body))
