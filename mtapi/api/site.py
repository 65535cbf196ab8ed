"""Site-wide search, reports, feeds, tags and export"""

import datetime
import logging

import dateutil.parser

from .common import *
from .identifiers import as_identifier, Numeric, xml_escape

logger = logging.getLogger(__name__)

FEED_OPTIONS = ('filter', 'namespace', 'format', 'offset', 'limit', 'since')
TAG_OPTIONS = ('to', 'from', 'type', 'q', 'pages')

ACTIVITY_TIME_FORMAT = '%Y%m%d%H%M%S'


def filter_options(options: 'Union[dict, None]', allowed: 'Iterable[str]') -> dict:
    """Drops all options whose key is not in *allowed*."""
    if not options:
        return {}
    dropped = [key for key in options if key not in allowed]
    if dropped:
        logger.info('Ignoring unsupported option(s): %s' % ', '.join(sorted(map(str, dropped))))
    return {key: value for key, value in options.items() if key in allowed}


def _activity_time(since: 'Union[str, datetime.datetime]') -> str:
    if not isinstance(since, datetime.datetime):
        since = dateutil.parser.parse(since)
    return since.strftime(ACTIVITY_TIME_FORMAT)


class SiteMixin(object):
    def search(self, query: str, options: dict = None):
        params = {'q': query}
        params.update(options or {})
        return self._output(self._send(self.DekiReq.get, 'site/search', params=params))

    def site_activity_get(self, since: 'Union[str, datetime.datetime]' = ''):
        """Gets the site activity report.

        :param since: start of the report, as datetime or in any format understood by
         :func:`dateutil.parser.parse`; the server defaults to the last 14 days"""
        params = {'since': _activity_time(since)} if since else {}
        return self._output(self._send(self.DekiReq.get, 'site/activity', params=params))

    def site_export(self, page_id=''):
        """Generates export information for a page tree, or for the whole site.

        :param page_id: numeric ID or page path"""
        if page_id == '' or page_id is None:
            page = '<page path="" recursive="true"/>'
        else:
            ident = as_identifier(page_id)
            if isinstance(ident, Numeric):
                page = '<page id="%i" recursive="true"/>' % ident.value
            else:
                page = '<page path="%s" recursive="true"/>' % xml_escape(ident.name)
        body = '<export>%s</export>' % page
        return self._output(self._send(self.DekiReq.post, 'site/export', body, 'application/xml'))

    def site_feed_get(self, options: dict = None):
        """Gets the feed of site changes.

        :param options: any of filter, namespace, format, offset, limit, since;
         other keys are dropped"""
        params = filter_options(options, FEED_OPTIONS)
        return self._output(self._send(self.DekiReq.get, 'site/feed', params=params))

    def site_tags_get(self, options: dict = None):
        """Gets the site's tags.

        :param options: any of
         to (end date for type=date), from (start date for type=date),
         type (text, date, user or define), q (tag prefix), pages (list pages per tag);
         other keys are dropped"""
        params = filter_options(options, TAG_OPTIONS)
        return self._output(self._send(self.DekiReq.get, 'site/tags', params=params))
