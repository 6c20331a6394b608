# Copyright (c) 2019 Riverbed Technology, Inc.
#
# This software is licensed under the terms and conditions of the MIT License
# accompanying the software ("License").  This software is distributed "AS IS"
# as set forth in the License.

import pytest

from hyperwalker.template import resolve_template, template_variables
from hyperwalker.exceptions import (MissingTemplateParameter,
                                    InvalidParameter, TemplateError)


def test_substitutes_parameter():
    assert (resolve_template('http://api.io/template/{param}',
                             {'param': 'substituted'}) ==
            'http://api.io/template/substituted')


def test_no_placeholders_returns_uri_unchanged():
    uri = 'http://api.io/plain'
    assert resolve_template(uri, {'unused': 1}) == uri
    assert resolve_template(uri, None) == uri
    assert resolve_template(uri, 'not a mapping') == uri


def test_multiple_placeholders_and_query():
    uri = resolve_template('/books/{id}/chapters{?page,size}',
                           {'id': 7, 'page': 2, 'size': 10, 'extra': 'x'})
    assert uri == '/books/7/chapters?page=2&size=10'


def test_values_are_encoded():
    assert resolve_template('/search/{term}', {'term': 'a b'}) == \
        '/search/a%20b'


def test_missing_parameter():
    with pytest.raises(MissingTemplateParameter) as excinfo:
        resolve_template('/books/{id}/{part}', {'id': 1})
    assert excinfo.value.missing == ['part']
    assert excinfo.value.template == '/books/{id}/{part}'
    assert '"part"' in str(excinfo.value)
    assert isinstance(excinfo.value, TemplateError)


def test_missing_all_parameters():
    with pytest.raises(MissingTemplateParameter) as excinfo:
        resolve_template('/books/{id}/{part}')
    assert excinfo.value.missing == ['id', 'part']


def test_invalid_parameters():
    with pytest.raises(InvalidParameter):
        resolve_template('/books/{id}', [('id', 1)])


def test_template_variables():
    assert template_variables('/a/{b}/{c}{?d}') == set(['b', 'c', 'd'])
    assert template_variables('/a') == set()
