# Copyright (c) 2019 Riverbed Technology, Inc.
#
# This software is licensed under the terms and conditions of the MIT License
# accompanying the software ("License").  This software is distributed "AS IS"
# as set forth in the License.

import logging
from collections import namedtuple

logger = logging.getLogger(__name__)


# Successful outcome of a mutating action: the transport's response and
# the URI the request was sent to.
ActionResult = namedtuple('ActionResult', ['response', 'location'])

GET = 'get'
POST = 'post'
PUT = 'put'
PATCH = 'patch'
DELETE = 'delete'

VERBS = (GET, POST, PUT, PATCH, DELETE)
WITH_BODY = (POST, PUT, PATCH)


def execute(uri, transport, verb, body, callback):
    """ Perform the final `verb` against `uri` via `transport`.

    Exactly one transport call is made.  For `get` the transport's
    ``(err, representation)`` completion is passed through.  Mutating
    verbs complete with ``callback(None, ActionResult(response, uri))``
    or ``callback(err)``.

    :raises ValueError: if `verb` is not one of `VERBS`

    """
    if verb not in VERBS:
        raise ValueError('Unsupported action: %s' % verb)

    logger.info('%s %s' % (verb.upper(), uri))
    method = getattr(transport, verb)

    if verb == GET:
        return method(uri, callback)

    def complete(err, response=None):
        if err is not None:
            return callback(err)
        callback(None, ActionResult(response, uri))

    if verb in WITH_BODY:
        method(uri, body, complete)
    else:
        method(uri, complete)
