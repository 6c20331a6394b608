# Copyright (c) 2019 Riverbed Technology, Inc.
#
# This software is licensed under the terms and conditions of the MIT License
# accompanying the software ("License").  This software is distributed "AS IS"
# as set forth in the License.

"""
URI template expansion for the last link of a chain.

Templates follow RFC 6570 and are expanded with the `uritemplate`
package.  Unlike `uritemplate.expand()`, which silently drops
variables it has no value for, `resolve_template()` insists that
every placeholder is supplied::

   >>> resolve_template('http://api.io/books/{id}', {'id': 7})
   'http://api.io/books/7'

   >>> resolve_template('http://api.io/books/{id}', {})
   Traceback (most recent call last):
   ...
   MissingTemplateParameter: No value provided for parameter(s) "id" ...

"""

import logging

import uritemplate

from hyperwalker.exceptions import MissingTemplateParameter, InvalidParameter

logger = logging.getLogger(__name__)


def template_variables(uri):
    """ Return the set of placeholder names in `uri`. """
    return set(uritemplate.variables(uri))


def resolve_template(uri, params=None):
    """ Substitute `params` into the URI template `uri`.

    :param uri: URI, possibly containing RFC 6570 placeholders
    :param params: mapping of placeholder name to value

    :raises MissingTemplateParameter: if a placeholder has no value
    :raises InvalidParameter: if `params` is not a mapping

    """
    variables = template_variables(uri)
    if not variables:
        return uri

    params = params or {}
    if not hasattr(params, 'keys'):
        raise InvalidParameter(
            'Template parameters must be a mapping, got %r' % (params,))

    missing = variables.difference(params.keys())
    if missing:
        raise MissingTemplateParameter(uri, missing)

    values = dict((k, params[k]) for k in variables)
    resolved = uritemplate.expand(uri, values)
    logger.debug('resolved template %s with %s -> %s' %
                 (uri, values, resolved))
    return resolved
