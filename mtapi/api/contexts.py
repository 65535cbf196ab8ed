"""
Context IDs and their mapping to pages.
A context map associates an external context ID with a page ID per language.
"""

from .common import *
from .identifiers import xml_escape

DEFAULT_LANGUAGE = 'en-us'


class ContextMixin(object):
    def contexts_get(self, context_id: str = ''):
        """Lists all context IDs, or only *context_id*."""
        path = 'contexts'
        if context_id:
            path += '/' + context_id
        return self._output(self._send(self.DekiReq.get, path))

    def contexts_put(self, context_id: str, description: str = ''):
        """Creates or updates a context ID."""
        body = '<context><description>%s</description></context>' % xml_escape(description)
        return self._output(self._send(self.DekiReq.put, 'contexts/' + context_id, body))

    def contexts_delete(self, context_id: str) -> str:
        """:returns: response text"""
        return self._text(self._send(self.DekiReq.delete, 'contexts/' + context_id))

    def context_maps_get(self, context_id: str = '', language=DEFAULT_LANGUAGE):
        """Lists all context mappings, or only the one of *context_id* in *language*."""
        path = 'contextmaps'
        if context_id:
            path += '/%s/%s' % (language, context_id)
        return self._output(self._send(self.DekiReq.get, path, params={'verbose': 'true'}))

    def context_maps_put(self, context_id: str, page_id: int, language=DEFAULT_LANGUAGE):
        """Maps *context_id* to a numeric page ID."""
        body = '<contextmap><pageid>%i</pageid></contextmap>' % int(page_id)
        path = 'contextmaps/%s/%s' % (language, context_id)
        return self._output(self._send(self.DekiReq.put, path, body))

    def context_maps_page_get(self, page_id: int):
        """Lists the context mappings of a numeric page ID."""
        params = {'pageID': int(page_id), 'verbose': 'true'}
        return self._output(self._send(self.DekiReq.get, 'contextmaps/query', params=params))
