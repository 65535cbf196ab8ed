"""
Resource identifier encoding.

MindTouch resources are addressed either by numeric ID or by name. Names are
prefixed with ``=`` in the URL. Page names may contain slashes, which the API
uses as path delimiters; a literal slash inside a title is written as ``//``.
"""

from collections import namedtuple
from urllib.parse import quote_plus

MAX_TITLE_LENGTH = 150
"""server-side limit for the (escaped) title portion of a page ID"""

HOME = 'home'
CURRENT_USER = 'current'

_XML_ESCAPES = (('&', '&amp;'),  # must come first
                ('"', '&quot;'),
                ("'", '&apos;'),
                ('<', '&lt;'),
                ('>', '&gt;'))


class Numeric(namedtuple('Numeric', ['value'])):
    __slots__ = ()

    def segment(self, **kwargs) -> str:
        return str(self.value)


class Named(namedtuple('Named', ['name'])):
    __slots__ = ()

    def segment(self, encode=False, bare=()) -> str:
        """:param encode: percent-encode the name twice (users, groups)
        :param bare: names placed into the URL without the ``=`` prefix"""
        if self.name in bare:
            return self.name
        return '=' + (double_encode(self.name) if encode else self.name)


def as_identifier(id_: 'Union[int, str, Numeric, Named]') -> 'Union[Numeric, Named]':
    """Tags a raw ID; integers are numeric IDs, strings are names."""
    if isinstance(id_, (Numeric, Named)):
        return id_
    if isinstance(id_, bool):
        raise TypeError('invalid identifier: %r' % id_)
    if isinstance(id_, int):
        return Numeric(id_)
    if isinstance(id_, str):
        return Named(id_)
    raise TypeError('invalid identifier: %r' % id_)


def double_encode(s: str) -> str:
    # the server decodes path segments once before its own decoding step
    return quote_plus(quote_plus(s))


def escape_slashes(s: str) -> str:
    return s.replace('/', '//')


def build_page_id(title: str, path: str = '') -> str:
    """Returns a page ID encoded the way MindTouch expects it.

    Slashes in *title* are doubled and the result is cut to
    :data:`MAX_TITLE_LENGTH` characters before it is joined with *path*.
    Cutting may split a doubled slash; that case is not corrected."""

    title = escape_slashes(str(title))[:MAX_TITLE_LENGTH]
    if path:
        title = path.rstrip('/') + '/' + title
    return double_encode(title)


def split_path_and_title(full_path: str) -> tuple:
    """Splits a full page path into path and (unescaped) title.

    The title starts at the segment containing the last ``//`` marker;
    without a marker it is the last segment. Only the last marker is found,
    so a title holding more than one slash is not recovered: the part before
    its last slash stays in the path.

    :returns: (path, title)"""

    pos = full_path.rfind('//')
    if pos != -1:
        segments = full_path[:pos].split('/')
        title = segments.pop() + full_path[pos + 1:]
    else:
        segments = full_path.split('/')
        title = segments.pop()
    return '/'.join(segments), title


def build_page_id_from_path(full_path: str) -> str:
    path, title = split_path_and_title(full_path)
    return build_page_id(title, path)


def xml_escape(text) -> str:
    text = str(text)
    for char, entity in _XML_ESCAPES:
        text = text.replace(char, entity)
    return text


def page_segment(page_id) -> str:
    return as_identifier(page_id).segment(bare=(HOME,))


def draft_segment(page_id) -> str:
    return as_identifier(page_id).segment()


def user_segment(user_id) -> str:
    return as_identifier(user_id).segment(encode=True, bare=(CURRENT_USER,))


def group_segment(group_id) -> str:
    return as_identifier(group_id).segment(encode=True)
