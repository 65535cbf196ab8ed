"""Response parsing and interpretation tests"""

import unittest

from mtapi.api.common import *
from mtapi.api.pages import PageMixin
from mtapi.api.response import *

PAGE_XML = b'<page id="42" draft.state="inactive"><title>Home</title>' \
           b'<path>Guides/Setup</path><tags count="2"><tag value="a"/><tag value="b"/></tags>' \
           b'</page>'
ERROR_XML = b'<error><status>404</status><title>Not Found</title>' \
            b'<message>Page not found</message></error>'


class ResponseTestCase(unittest.TestCase):
    def testChildAccess(self):
        node = parse_xml(PAGE_XML)
        self.assertEqual(node.tag, 'page')
        self.assertEqual(node.title.text, 'Home')
        self.assertEqual(str(node.path), 'Guides/Setup')

    def testAttributeAccess(self):
        node = parse_xml(PAGE_XML)
        self.assertEqual(node['id'], '42')
        self.assertEqual(node.get('draft.state'), 'inactive')
        self.assertIsNone(node.get('missing'))
        self.assertIn('id', node)

    def testMissing(self):
        node = parse_xml(PAGE_XML)
        with self.assertRaises(AttributeError):
            node.status
        with self.assertRaises(KeyError):
            node['status']
        self.assertIsNone(node.find('status'))
        self.assertEqual(node.findtext('status'), '')

    def testChildren(self):
        node = parse_xml(PAGE_XML)
        self.assertEqual([t['value'] for t in node.tags.findall('tag')], ['a', 'b'])
        self.assertEqual(len(node.tags), 2)
        self.assertEqual([c.tag for c in node], ['title', 'path', 'tags'])

    def testEmptyElementIsTruthy(self):
        self.assertTrue(parse_xml(b'<edit/>'))

    def testMalformed(self):
        self.assertIsNone(parse_xml(b'<page id="42"'))
        self.assertIsNone(parse_xml(b''))
        self.assertIsNone(parse_xml(None))

    def testNormalizeRaw(self):
        self.assertEqual(normalize(PAGE_XML, FORMAT.RAW), PAGE_XML.decode('utf-8'))
        self.assertEqual(normalize(b'not xml', FORMAT.RAW), 'not xml')

    def testNormalizeParsed(self):
        self.assertIsInstance(normalize(PAGE_XML, FORMAT.PARSED), XmlNode)
        self.assertIsNone(normalize(b'not xml', FORMAT.PARSED))

    def testErrorMessage(self):
        self.assertEqual(parse_error_message(parse_xml(ERROR_XML)),
                         'Not Found (404): Page not found')

    #
    # interpretation
    #

    def testInterpretSuccess(self):
        result = interpret(PAGE_XML)
        self.assertTrue(result.ok)
        self.assertEqual(result.value['id'], '42')

    def testInterpretApplicationError(self):
        result = interpret(ERROR_XML)
        self.assertFalse(result.ok)
        self.assertEqual(result.failure, Failure.APPLICATION)
        self.assertEqual(result.message, 'Not Found (404): Page not found')
        with self.assertRaises(RequestError):
            result.raise_for_failure()

    def testInterpretDecodeError(self):
        result = interpret(b'<html><body>Bad Gateway')
        self.assertEqual(result.failure, Failure.DECODE)
        self.assertIsNone(result.value)

    def testInterpretParsedNode(self):
        self.assertTrue(interpret(parse_xml(PAGE_XML)).ok)

    #
    # page creation check
    #

    def testCreateCheckChild(self):
        self.assertTrue(PageMixin.page_create_check(parse_xml(b'<edit><status>success</status></edit>')))

    def testCreateCheckAttribute(self):
        self.assertTrue(PageMixin.page_create_check(parse_xml(b'<edit status="success"/>')))

    def testCreateCheckFailure(self):
        self.assertFalse(PageMixin.page_create_check(parse_xml(b'<edit status="conflict"/>')))
        self.assertFalse(PageMixin.page_create_check(parse_xml(ERROR_XML)))
        self.assertFalse(PageMixin.page_create_check(parse_xml(b'<edit/>')))
        self.assertFalse(PageMixin.page_create_check(None))
        self.assertFalse(PageMixin.page_create_check('<edit status="success"/>'))
