from unittest import TestLoader, TestSuite

from .test_actions import ActionTestCase
from .test_api import APITestCase
from .test_auth import AuthTestCase
from .test_identifiers import IdentifierTestCase
from .test_response import ResponseTestCase


def get_suite() -> TestSuite:
    """"Returns a suite of all automated tests."""
    all_tests = TestSuite()

    all_tests.addTest(TestLoader().loadTestsFromTestCase(ActionTestCase))
    all_tests.addTest(TestLoader().loadTestsFromTestCase(APITestCase))
    all_tests.addTest(TestLoader().loadTestsFromTestCase(AuthTestCase))
    all_tests.addTest(TestLoader().loadTestsFromTestCase(IdentifierTestCase))
    all_tests.addTest(TestLoader().loadTestsFromTestCase(ResponseTestCase))

    return all_tests
