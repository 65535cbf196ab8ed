"""Unpublished working copies of pages"""

import logging

from .common import *
from .identifiers import draft_segment

logger = logging.getLogger(__name__)

EXISTING_DRAFT_STATES = ('active', 'unpublished')


def _drafts_path(page_id='') -> str:
    if page_id == '' or page_id is None:
        return 'drafts'
    return 'drafts/' + draft_segment(page_id)


class DraftMixin(object):
    def drafts_get(self, page_id=''):
        """Gets draft information, or a list of all pages with drafts if no
        *page_id* is given."""
        return self._output(self._send(self.DekiReq.get, _drafts_path(page_id)))

    def drafts_exists(self, page_id) -> bool:
        result = self.call('GET', _drafts_path(page_id))
        if not result.ok:
            logger.debug('Draft lookup failed: %s' % result.message)
            return False
        return result.value.get('state') in EXISTING_DRAFT_STATES

    def drafts_create(self, page_id):
        """Creates a draft where no page exists."""
        return self._draft_action(page_id, 'create')

    def drafts_activate(self, page_id):
        """Activates a draft on an existing page, copying its content and attachments."""
        return self._draft_action(page_id, 'activate')

    def drafts_deactivate(self, page_id):
        return self._draft_action(page_id, 'deactivate')

    def drafts_publish(self, page_id):
        return self._draft_action(page_id, 'publish')

    def drafts_unpublish(self, page_id):
        """Unpublishes the page and turns it into a draft."""
        return self._draft_action(page_id, 'unpublish')

    def _draft_action(self, page_id, action: str):
        return self._output(self._send(self.DekiReq.post, _drafts_path(page_id) + '/' + action))

    def drafts_contents_get(self, page_id, options: dict = None):
        return self._output(self._send(self.DekiReq.get, _drafts_path(page_id) + '/contents',
                                       params=options or {}))

    def drafts_contents_post(self, page_id, content: str, title: str = ''):
        """Updates a draft's content.

        :param title: display title, if it differs from the page ID"""
        params = {'edittime': self.edit_time, 'overwrite': 'true'}
        if title:
            params['title'] = title
        return self._output(self._send(self.DekiReq.post, _drafts_path(page_id) + '/contents',
                                       data=content, params=params))

    def draft_properties_get(self, page_id, name: str = ''):
        """:returns: parsed property list, or the property's content if *name* is given"""
        return self._properties_get(_drafts_path(page_id), name)

    def draft_properties_post(self, page_id, name: str, description: str, content: str):
        return self._properties_post(_drafts_path(page_id), name, description, content)
