# Copyright (c) 2019 Riverbed Technology, Inc.
#
# This software is licensed under the terms and conditions of the MIT License
# accompanying the software ("License").  This software is distributed "AS IS"
# as set forth in the License.

"""
Deferred values for callback driven operations.

The walker and the transports report completion through node-style
callbacks, ``callback(err, result=None)``.  A `PromiseAdapter` turns
such a callback into a `Deferred`, a single settlement value backed by
an `asyncio.Future`:

.. code-block:: python

   >>> adapter = PromiseAdapter()
   >>> transport.get('http://api.io', adapter.callback)
   >>> rep = await adapter.deferred

Settlement is always scheduled on the event loop with
``call_soon_threadsafe``.  Observers therefore run during the loop's
normal pass, never inside the call stack that completed the operation,
and completions from worker threads are safe.

Observers may either await the deferred or register hooks with
`Deferred.then()`:

.. code-block:: python

   >>> client.new_request().follow('books').get().then(show, complain)

"""

import asyncio
import enum
import logging
import threading

logger = logging.getLogger(__name__)


class DeferredState(enum.Enum):
    PENDING = 'pending'
    RESOLVED = 'resolved'
    REJECTED = 'rejected'


class Deferred(object):
    """ A single-settlement asynchronous result. """

    def __init__(self, loop=None):
        """ Create a pending deferred on `loop`.

        :param loop: event loop to settle on, defaults to the running
            loop.  Creating a deferred without a running loop and
            without `loop` raises RuntimeError.

        """
        if loop is None:
            loop = asyncio.get_running_loop()
        self.loop = loop
        self.future = loop.create_future()

    def __repr__(self):
        return '<Deferred %s>' % self.state.value

    def __await__(self):
        return self.future.__await__()

    @property
    def state(self):
        if not self.future.done():
            return DeferredState.PENDING
        if self.future.cancelled() or self.future.exception() is not None:
            return DeferredState.REJECTED
        return DeferredState.RESOLVED

    def done(self):
        return self.future.done()

    def result(self):
        """ Return the value, or raise the error it was rejected with. """
        return self.future.result()

    def then(self, on_success=None, on_failure=None):
        """ Register observers for success and failure.

        Exactly one of the two is called, with the value or the error,
        once the deferred settles.  Returns self so calls may be chained.

        """
        def notify(future):
            if future.cancelled():
                return
            err = future.exception()
            if err is not None:
                if on_failure is not None:
                    on_failure(err)
            elif on_success is not None:
                on_success(future.result())

        self.future.add_done_callback(notify)
        return self


class PromiseAdapter(object):
    """ Converts a node-style completion callback into a `Deferred`.

    `callback` may be handed to any callback driven operation.  The
    first completion settles `deferred`; later ones are logged and
    dropped.  A rejection carries the original error object.

    """

    def __init__(self, loop=None):
        self.deferred = Deferred(loop)
        self._completed = False
        self._lock = threading.Lock()

    @property
    def state(self):
        return self.deferred.state

    def callback(self, err, result=None):
        with self._lock:
            repeated = self._completed
            self._completed = True
        if repeated:
            logger.warning('Ignoring repeated completion (err=%r)' % (err,))
            return
        self.deferred.loop.call_soon_threadsafe(self._settle, err, result)

    def _settle(self, err, result):
        future = self.deferred.future
        if future.done():
            return
        if err is not None:
            logger.debug('rejecting deferred: %r' % (err,))
            future.set_exception(err)
        else:
            future.set_result(result)


def dispatch(fn, loop=None):
    """ Run `fn(callback)` and return a `Deferred` for its completion.

    An exception raised synchronously by `fn` rejects the deferred just
    as if it had been passed to the callback.

    """
    adapter = PromiseAdapter(loop)
    try:
        fn(adapter.callback)
    except Exception as e:
        adapter.callback(e)
    return adapter.deferred
