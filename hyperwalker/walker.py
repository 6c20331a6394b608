# Copyright (c) 2019 Riverbed Technology, Inc.
#
# This software is licensed under the terms and conditions of the MIT License
# accompanying the software ("License").  This software is distributed "AS IS"
# as set forth in the License.

"""
The `LinkWalker` resolves a chain of relation names into a final URI.

Starting from the root, each relation is looked up on the most
recently fetched representation and the link target is fetched in
turn.  The target of the last relation is the final URI: it is the
only one expanded with the chain's template parameters, and it is not
fetched unless `fetch_last` is set.  Consider a root document::

   { "books": "http://api.io/books" }

and a ``/books`` document::

   { "book": "http://api.io/books/{id}" }

Walking ``('books', 'book')`` with template parameters ``{'id': 7}``
fetches the root and ``/books`` and yields ``http://api.io/books/7``.

A chain without relations does not fetch anything; its final URI is
the root itself, expanded with the template parameters.

Every fetch goes through the transport's callback interface and the
walk advances only when that call completes.  The first failure ends
the walk; no further fetch is issued.

"""

import enum
import logging
from collections import namedtuple
from urllib.parse import urljoin

from hyperwalker.exceptions import HyperwalkerException, LinkNotFound
from hyperwalker.template import resolve_template

logger = logging.getLogger(__name__)


WalkResult = namedtuple('WalkResult', ['uri', 'representation'])


class WalkState(enum.Enum):
    START = 'start'
    WALKING = 'walking'
    DONE = 'done'
    FAILED = 'failed'


class LinkWalker(object):
    """ Sequentially follows the relations of a `RequestChain`. """

    def __init__(self, root_uri, transport, chain, fetch_last=False):
        """ Create a walker for a single walk.

        :param root_uri: URI of the resource the walk starts from
        :param transport: object providing ``get(uri, callback)``
        :param chain: `RequestChain` holding the relations and the
            template parameters
        :param fetch_last: if True, also fetch the final URI and report
            its representation

        """
        self.root_uri = root_uri
        self.transport = transport
        self.chain = chain
        self.fetch_last = fetch_last

        self.state = WalkState.START
        self.step = 0
        self.uri = root_uri
        self.representation = None
        self.fetches = []
        self._callback = None

    def __repr__(self):
        return '<LinkWalker %s %s step %d/%d>' % (
            self.root_uri, self.state.value, self.step, len(self.chain.rels))

    def walk(self, callback):
        """ Start the walk; `callback(err, walk_result)` fires once. """
        if self.state is not WalkState.START:
            raise RuntimeError('%r has already been started' % self)
        self._callback = callback
        self._start()

    def _start(self):
        if not self.chain.rels:
            try:
                self.uri = resolve_template(self.root_uri,
                                            self.chain.template_params)
            except HyperwalkerException as e:
                return self._fail(e)
            if self.fetch_last:
                return self._fetch(self.uri, self._on_final)
            return self._done()

        self.state = WalkState.WALKING
        self._fetch(self.root_uri, self._on_fetched)

    def _fetch(self, uri, on_complete):
        logger.debug('%r fetching %s' % (self, uri))
        self.fetches.append(uri)

        def complete(err, representation=None):
            if err is not None:
                return self._fail(err)
            self.uri = uri
            self.representation = representation
            try:
                on_complete()
            except Exception as e:
                # Raised by the caller's own callback, not by this walk
                if self.state in (WalkState.DONE, WalkState.FAILED):
                    raise
                self._fail(e)

        self.transport.get(uri, complete)

    def _on_fetched(self):
        rel = self.chain.rels[self.step]
        target = self.representation.link(rel)
        if target is None:
            return self._fail(LinkNotFound(rel, self.representation))

        self.step += 1
        if self.step < len(self.chain.rels):
            return self._fetch(urljoin(self.uri, target), self._on_fetched)

        try:
            target = resolve_template(target, self.chain.template_params)
        except HyperwalkerException as e:
            return self._fail(e)
        final = urljoin(self.uri, target)

        if self.fetch_last:
            return self._fetch(final, self._on_final)
        self.uri = final
        self._done()

    def _on_final(self):
        self._done()

    def _done(self):
        self.state = WalkState.DONE
        logger.debug('%r resolved %s' % (self, self.uri))
        self._callback(None, WalkResult(self.uri, self.representation))

    def _fail(self, err):
        self.state = WalkState.FAILED
        logger.debug('%r failed: %r' % (self, err))
        self._callback(err)
