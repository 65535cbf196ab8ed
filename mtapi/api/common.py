import requests
from collections import namedtuple

from requests.exceptions import RequestException

from .response import XmlNode, parse_xml, parse_error_message

# status codes that indicate request success
OK_CODES = [requests.codes.OK]


class RequestError(Exception):
    """Catch-all exception class for connection errors and MindTouch server errors."""

    class CODE(object):
        CONN_EXCEPTION = 1000
        INVALID_RESPONSE = 1001
        APPLICATION_ERROR = 1002

    codes = requests.codes

    def __init__(self, status_code: int, msg: str):
        self.status_code = status_code
        if msg:
            self.msg = msg
        else:
            self.msg = '[mtapi] no body received.'

    def __str__(self):
        return 'RequestError: ' + str(self.status_code) + ', ' + self.msg


def catch_conn_exception(func):
    """Request connection exception decorator
    :raises RequestError"""

    def decorated(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except RequestException as e:
            raise RequestError(RequestError.CODE.CONN_EXCEPTION, e.__str__())

    return decorated


class Failure(object):
    TRANSPORT = 'transport'
    DECODE = 'decode'
    APPLICATION = 'application'


class ApiResult(namedtuple('ApiResult', ['value', 'failure', 'message'])):
    """Outcome of a single API call.

    :ivar value: parsed :class:`XmlNode` (also set for application errors)
    :ivar failure: one of the :class:`Failure` kinds or None on success
    :ivar message: human readable failure description"""

    __slots__ = ()

    @property
    def ok(self) -> bool:
        return self.failure is None

    def raise_for_failure(self):
        """:raises: RequestError"""
        if self.failure == Failure.TRANSPORT:
            raise RequestError(RequestError.CODE.CONN_EXCEPTION, self.message)
        if self.failure == Failure.DECODE:
            raise RequestError(RequestError.CODE.INVALID_RESPONSE, self.message)
        if self.failure == Failure.APPLICATION:
            raise RequestError(RequestError.CODE.APPLICATION_ERROR, self.message)


def interpret(body: 'Union[bytes, str, XmlNode, None]') -> ApiResult:
    """Decides the outcome of a call from its response body.

    Unparseable documents are decode failures, ``<error>`` documents are
    application failures, anything else is a success."""

    node = body if isinstance(body, XmlNode) else parse_xml(body)
    if node is None:
        return ApiResult(None, Failure.DECODE, '[mtapi] invalid or empty XML document.')
    if node.tag == 'error':
        return ApiResult(node, Failure.APPLICATION, parse_error_message(node))
    return ApiResult(node, None, '')


def transport_failure(e: RequestError) -> ApiResult:
    return ApiResult(None, Failure.TRANSPORT, e.msg)
