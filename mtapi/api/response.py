"""Response normalization: XML documents to navigable trees"""

import logging
import xml.etree.ElementTree as ET

logger = logging.getLogger(__name__)


class FORMAT(object):
    PARSED = 'parsed'
    RAW = 'raw'


class XmlNode(object):
    """Thin view over an XML element.

    Child elements are reachable as attributes, XML attributes as items::

        node.status.text   # text of the first <status> child
        node['id']         # value of the id attribute

    Element names that are not valid Python identifiers (e.g. ``permissions.page``)
    can be looked up with :meth:`find`."""

    def __init__(self, element: ET.Element):
        self.element = element

    @property
    def tag(self) -> str:
        return self.element.tag

    @property
    def text(self) -> str:
        return self.element.text or ''

    @property
    def attrib(self) -> dict:
        return self.element.attrib

    def __getattr__(self, item):
        if item.startswith('__') or item == 'element':
            raise AttributeError(item)
        child = self.element.find(item)
        if child is None:
            raise AttributeError('<%s> has no child element <%s>' % (self.tag, item))
        return XmlNode(child)

    def __getitem__(self, item: str) -> str:
        return self.element.attrib[item]

    def __contains__(self, item: str) -> bool:
        return item in self.element.attrib

    def __iter__(self):
        for child in self.element:
            yield XmlNode(child)

    def __len__(self):
        return len(self.element)

    def __bool__(self):
        return True

    def __str__(self):
        return self.text

    def __repr__(self):
        return '<XmlNode %s %s>' % (self.tag, self.attrib)

    def get(self, item: str, default=None):
        """Gets an attribute value."""
        return self.element.attrib.get(item, default)

    def find(self, path: str) -> 'Union[XmlNode, None]':
        child = self.element.find(path)
        return XmlNode(child) if child is not None else None

    def findall(self, path: str) -> 'List[XmlNode]':
        return [XmlNode(e) for e in self.element.findall(path)]

    def findtext(self, path: str, default='') -> str:
        return self.element.findtext(path, default)

    def tostring(self) -> str:
        return ET.tostring(self.element, encoding='unicode')


def parse_xml(body: 'Union[bytes, str, None]') -> 'Union[XmlNode, None]':
    """:returns: root node or None if the body is empty or not well-formed"""
    if not body:
        return None
    try:
        return XmlNode(ET.fromstring(body))
    except ET.ParseError as e:
        logger.debug('Unparseable response: %s' % e)
        return None


def normalize(body: bytes, fmt: str) -> 'Union[XmlNode, str, None]':
    """Returns the parsed document or the decoded body, depending on *fmt*."""
    if fmt == FORMAT.RAW:
        if isinstance(body, bytes):
            return body.decode('utf-8', errors='replace')
        return body
    return parse_xml(body)


def parse_error_message(error: XmlNode) -> str:
    """Builds a message like ``Not Found (404): Page not found`` from an error document."""
    return '%s (%s): %s' % (error.findtext('title'), error.findtext('status'),
                            error.findtext('message'))
