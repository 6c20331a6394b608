# Copyright (c) 2019 Riverbed Technology, Inc.
#
# This software is licensed under the terms and conditions of the MIT License
# accompanying the software ("License").  This software is distributed "AS IS"
# as set forth in the License.

"""
The `Client` is the entry point for walking a hypermedia API.  It is
bound to the root URI of the API and a transport, and hands out
`Request` objects via `new_request()`:

.. code-block:: python

   >>> api = Client('http://api.io')
   >>> book = await (api.new_request()
   ...               .follow('books', 'book')
   ...               .with_template_parameters({'id': 7})
   ...               .get_resource())
   >>> book
   {'id': 7, 'title': 'A book'}

A `Request` is immutable.  `follow()` and `with_template_parameters()`
return a new `Request`, leaving the original untouched, so a partially
configured request can be shared and extended:

.. code-block:: python

   >>> books = api.new_request().follow('books')
   >>> listing = books.get()
   >>> created = books.post({'title': 'Another book'})

The terminal operations each start one walk and return a `Deferred`:

=================  =========================================================
`get()`            resolves with the final representation
`get_resource()`   resolves with the decoded body of the final representation
`get_uri()`        resolves with the final URI, which is not fetched
`post(body)`       resolves with ``ActionResult(response, location)``
`put(body)`        resolves with ``ActionResult(response, location)``
`patch(body)`      resolves with ``ActionResult(response, location)``
`delete()`         resolves with ``ActionResult(response, location)``
=================  =========================================================

Each rejects with the first error encountered, unmodified.  The
terminal operations must be called while an asyncio event loop is
running, unless the `Client` was given a `loop`.

"""

import logging
from collections import namedtuple

from hyperwalker import actions
from hyperwalker.connection import Connection
from hyperwalker.exceptions import InvalidParameter
from hyperwalker.promise import dispatch
from hyperwalker.walker import LinkWalker

logger = logging.getLogger(__name__)


class RequestChain(namedtuple('RequestChain',
                              ['rels', 'template_params', 'body'])):
    """ Relations to follow, template parameters and the request body. """

    __slots__ = ()

    @classmethod
    def empty(cls):
        return cls((), {}, None)


class Client(object):
    """ Entry point to an API at a fixed root URI. """

    def __init__(self, root_uri, transport=None, loop=None):
        """ Create a client for the API at `root_uri`.

        :param root_uri: URI of the API root resource
        :param transport: object providing the callback primitives
            ``get``, ``post``, ``put``, ``patch`` and ``delete``.
            Defaults to a `Connection` to the root's host.
        :param loop: event loop deferred values are settled on,
            defaults to the loop running at dispatch

        """
        if transport is None:
            transport = Connection(root_uri)

        self.root_uri = root_uri
        self.transport = transport
        self.loop = loop

    def __repr__(self):
        return '<Client %s>' % self.root_uri

    def new_request(self):
        """ Return a new `Request` starting at the root. """
        return Request(self, RequestChain.empty())


class Request(object):
    """ An immutable description of a link chain and its final action. """

    def __init__(self, client, chain):
        self.client = client
        self.chain = chain

    def __repr__(self):
        return '<Request %s -> %s>' % (self.client.root_uri,
                                       ' -> '.join(self.chain.rels))

    def follow(self, *rels):
        """ Return a new request that also follows `rels`, in order.

        Relations may be given as separate arguments or as a single
        list or tuple.

        """
        if len(rels) == 1 and isinstance(rels[0], (list, tuple)):
            rels = rels[0]
        return Request(self.client,
                       self.chain._replace(rels=self.chain.rels +
                                           tuple(rels)))

    def with_template_parameters(self, params):
        """ Return a new request using `params` for the final URI.

        Replaces, rather than merges with, any earlier parameters.

        :raises InvalidParameter: if `params` is not a mapping

        """
        if not hasattr(params, 'keys'):
            raise InvalidParameter(
                'Template parameters must be a mapping, got %r' % (params,))
        return Request(self.client,
                       self.chain._replace(template_params=dict(params)))

    def get(self):
        """ Retrieve the final resource's representation. """
        return self._dispatch(actions.GET)

    def get_resource(self):
        """ Retrieve the final resource's decoded body.

        The representation must expose the body as `data`, as
        `JsonRepresentation` does; otherwise the request is rejected
        with the AttributeError.

        """
        def body(callback):
            def unwrap(err, representation=None):
                if err is not None:
                    return callback(err)
                try:
                    data = representation.data
                except AttributeError as e:
                    return callback(e)
                callback(None, data)
            return unwrap
        return self._dispatch(actions.GET, wrap=body)

    def get_uri(self):
        """ Resolve the final URI without fetching it. """
        chain = self.chain

        def run(callback):
            def walked(err, result=None):
                if err is not None:
                    return callback(err)
                callback(None, result.uri)
            self._walker(chain).walk(walked)

        return dispatch(run, self.client.loop)

    def post(self, body):
        """ Create: POST `body` to the final URI. """
        return self._dispatch(actions.POST, body)

    def put(self, body):
        """ Replace: PUT `body` to the final URI. """
        return self._dispatch(actions.PUT, body)

    def patch(self, body):
        """ Modify: PATCH `body` to the final URI. """
        return self._dispatch(actions.PATCH, body)

    def delete(self):
        """ Remove: DELETE the final URI. """
        return self._dispatch(actions.DELETE)

    del_ = delete

    def _walker(self, chain):
        return LinkWalker(self.client.root_uri, self.client.transport, chain)

    def _dispatch(self, verb, body=None, wrap=None):
        chain = self.chain._replace(body=body)
        transport = self.client.transport

        def run(callback):
            if wrap is not None:
                callback = wrap(callback)

            def walked(err, result=None):
                if err is not None:
                    return callback(err)
                try:
                    actions.execute(result.uri, transport, verb, chain.body,
                                    callback)
                except Exception as e:
                    callback(e)

            logger.debug('%r dispatching %s' % (self, verb))
            self._walker(chain).walk(walked)

        return dispatch(run, self.client.loop)
