# Copyright (c) 2019 Riverbed Technology, Inc.
#
# This software is licensed under the terms and conditions of the MIT License
# accompanying the software ("License").  This software is distributed "AS IS"
# as set forth in the License.

import json

import mock
import pytest
import requests

from hyperwalker import (HTTPError, ClientHTTPError, ServerHTTPError,
                         HTTPNotFound, HTTPBadGateway, HyperwalkerException,
                         LinkError, LinkNotFound, MissingTemplateParameter)


def make_response(status_code, reason, text=None, data=None):
    response = mock.Mock(requests.Response)
    response.status_code = status_code
    response.reason = reason
    response.headers = {'content-type': 'application/json'}
    if text is not None:
        response.text = text
        response.json = mock.Mock(return_value=json.loads(text))
    else:
        response.text = ''
        response.json = mock.Mock(return_value=data)
    return response


# HTTPError mines the response for a message, preferring the
# conventional 'error_text' of a JSON error body.
def test_error_text_response():
    response = make_response(
        400, 'Bad Request',
        text=('{"error_id": "REQUEST_INVALID_INPUT",'
              ' "error_text": "Malformed input structure"}'))
    exc = HTTPError(response)
    assert str(exc) == 'Malformed input structure'
    assert repr(exc) == "HTTPError('Malformed input structure')"
    assert exc.http_code == 400
    assert exc.json_data['error_id'] == 'REQUEST_INVALID_INPUT'


# Otherwise fall back on the HTTP reason
def test_reason_response():
    exc = HTTPError(make_response(400, 'Bad Request'))
    assert str(exc) == 'Bad Request'


def test_non_json_response():
    response = make_response(502, 'Bad Gateway')
    response.json = mock.Mock(side_effect=ValueError('not json'))
    response.text = '<html>oops</html>'
    exc = HTTPError(response)
    assert exc.json_data is None
    assert exc.text == '<html>oops</html>'
    assert str(exc) == 'Bad Gateway'


# If some bits are missing, make sure we still get the HTTPError
def test_crippled_response():
    response = mock.Mock(requests.Response)
    response.status_code = 400
    response.headers = {'content-type': 'application/json'}
    response.json = mock.Mock(return_value=None)
    with pytest.raises(AttributeError):
        HTTPError(response)


@pytest.mark.parametrize('code, exception_class', [
    (404, HTTPNotFound),
    (502, HTTPBadGateway),
    (499, ClientHTTPError),
    (599, ServerHTTPError),
    (302, HTTPError),
])
def test_raise_by_status(code, exception_class):
    with pytest.raises(exception_class) as excinfo:
        HTTPError.raise_by_status(make_response(code, 'Reason'))
    assert type(excinfo.value) is exception_class


# Let's not egregiously typo the code map to the point where we
# use a class twice or use a base class.
def test_http_error_code_map():
    bases = set((HTTPError, ClientHTTPError, ServerHTTPError))
    assert not bases.intersection(HTTPError.code_map.values())

    assert (len(HTTPError.code_map) ==
            len(set(HTTPError.code_map.values())))

    for code, exception_class in HTTPError.code_map.items():
        if code < 500:
            assert issubclass(exception_class, ClientHTTPError)
        else:
            assert issubclass(exception_class, ServerHTTPError)


def test_link_not_found():
    exc = LinkNotFound('another_link')
    assert isinstance(exc, LinkError)
    assert isinstance(exc, HyperwalkerException)
    assert exc.rel == 'another_link'
    assert "'another_link'" in str(exc)


def test_missing_template_parameter():
    exc = MissingTemplateParameter('/a/{y}/{x}', set(['y', 'x']))
    assert exc.missing == ['x', 'y']
    assert str(exc) == ('No value provided for parameter(s) "x", "y" '
                        'in template: /a/{y}/{x}')
