# Copyright (c) 2019 Riverbed Technology, Inc.
#
# This software is licensed under the terms and conditions of the MIT License
# accompanying the software ("License").  This software is distributed "AS IS"
# as set forth in the License.

"""
This module defines `Connection`, the default transport used by
`Client` to talk to a JSON hypermedia API over HTTP.

A `Connection` is layered on a `requests` session and offers two
interfaces:

* `json_request()` - a blocking request that sends and receives JSON

* the callback primitives `get()`, `post()`, `put()`, `patch()` and
  `delete()` used by the walker.  Each runs the blocking request in
  the event loop's executor and reports back on the loop with
  ``callback(err, result=None)``.

A `get()` completes with a `JsonRepresentation` of the body; the
mutating primitives complete with the `requests.Response`.  Any
failure completes with the exception: `ConnectionError` if the server
could not be reached, or the `HTTPError` subclass matching the status
code of a non-2xx response.

A single `Connection` may be shared by any number of concurrent walks.
It keeps no per-request state; each thread issues its requests on its
own `requests.Session`.

"""

import json
import asyncio
import logging
import threading
from collections.abc import Iterable
from functools import partial
from urllib.parse import urljoin

import requests
import requests.exceptions
from requests.structures import CaseInsensitiveDict
from requests.packages.urllib3.util import parse_url

from hyperwalker.exceptions import URLError, HTTPError, ConnectionError
from hyperwalker.representation import JsonRepresentation

logger = logging.getLogger(__name__)

JSON_HEADERS = {
    'Content-Type': 'application/json',
    'Accept': 'application/json',
}


class Connection(object):

    """ Handle communication to a remote JSON API. """
    def __init__(self, hostname, port=None, verify=True, timeout=None,
                 executor=None):
        """ Initialize a new connection.

            `hostname` - include protocol, e.g. 'https://host.com'
            `port` - optional port to use for connection
            `verify` - require SSL certificate validation.
            `timeout` - float timeout in seconds, or tuple
                        (connect timeout, read timeout)
            `executor` - concurrent.futures executor used for the
                         callback primitives, defaults to the event
                         loop's default executor
        """
        p = parse_url(hostname)
        if not p.scheme:
            raise URLError('Scheme must be provided (e.g. https:// '
                           'or http://).')
        else:
            if p.port and port and p.port != int(port):
                raise URLError('Mismatched ports provided.')
            elif not p.port and port:
                hostname = hostname + ':' + str(port)

        if timeout is None:
            self.timeout = None
        elif isinstance(timeout, Iterable):
            if len(timeout) != 2:
                raise ValueError('timeout tuple must be 2 float entries')
            self.timeout = tuple([float(timeout[0]), float(timeout[1])])
        else:
            self.timeout = float(timeout)

        self.hostname = hostname
        self.executor = executor
        self.verify = verify
        self.headers = {}

        # requests sessions are not thread safe, each thread gets its own
        self._local = threading.local()
        self._sessions = []
        self._lock = threading.Lock()

    def __repr__(self):
        return '<Connection %s>' % self.hostname

    def close(self):
        with self._lock:
            sessions, self._sessions = self._sessions, []
        for session in sessions:
            session.close()
        self._local = threading.local()

    def session(self):
        """ Return the `requests.Session` for the calling thread. """
        session = getattr(self._local, 'session', None)
        if session is None:
            session = requests.session()
            session.verify = self.verify
            with self._lock:
                session.headers.update(self.headers)
                self._sessions.append(session)
            self._local.session = session
        return session

    def get_url(self, uri):
        """ Returns a fully qualified URL given a URI. """
        return urljoin(self.hostname, uri)

    def add_headers(self, headers):
        """ Add headers that are common to all requests. """
        with self._lock:
            self.headers.update(headers)
            for session in self._sessions:
                session.headers.update(headers)

    def _request(self, method, uri, body=None, params=None,
                 extra_headers=None):
        p = parse_url(uri)
        if not p.host:
            uri = self.get_url(uri)

        try:
            r = self.session().request(method, uri, data=body,
                                       params=params, headers=extra_headers,
                                       timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            raise ConnectionError('Could not connect to uri %s: %s' %
                                  (uri, e))

        # check if good status response otherwise raise exception
        if not r.ok:
            HTTPError.raise_by_status(r)

        return r

    class JsonEncoder(json.JSONEncoder):
        """ Handle more object types if first encoding doesn't work. """
        def default(self, obj):
            try:
                res = super(Connection.JsonEncoder, self).default(obj)
            except TypeError:
                try:
                    res = obj.to_dict()
                except AttributeError:
                    res = obj.__dict__
            return res

    def _json_request(self, method, uri, body=None, params=None,
                      extra_headers=None):
        headers = CaseInsensitiveDict(JSON_HEADERS)
        if extra_headers:
            headers.update(extra_headers)
        if body is not None:
            body = json.dumps(body, cls=self.JsonEncoder)
        return self._request(method, uri, body, params, headers)

    @staticmethod
    def _decode(r):
        if r.status_code == 204 or len(r.content) == 0:
            return None  # no data
        return r.json()

    def json_request(self, method, uri, body=None, params=None,
                     extra_headers=None):
        """ Send a JSON request and receive JSON response. """
        r = self._json_request(method, uri, body, params, extra_headers)
        return self._decode(r)

    #
    # Callback primitives
    #
    def _fetch(self, uri):
        r = self._json_request('GET', uri)
        return JsonRepresentation(self._decode(r), response=r)

    def _submit(self, fn, callback):
        loop = asyncio.get_running_loop()
        future = loop.run_in_executor(self.executor, fn)

        def complete(future):
            err = future.exception()
            if err is not None:
                logger.debug('%r request failed: %r' % (self, err))
                callback(err)
            else:
                callback(None, future.result())

        future.add_done_callback(complete)

    def get(self, uri, callback):
        logger.debug('GET %s' % uri)
        self._submit(partial(self._fetch, uri), callback)

    def post(self, uri, body, callback):
        logger.debug('POST %s' % uri)
        self._submit(partial(self._json_request, 'POST', uri, body), callback)

    def put(self, uri, body, callback):
        logger.debug('PUT %s' % uri)
        self._submit(partial(self._json_request, 'PUT', uri, body), callback)

    def patch(self, uri, body, callback):
        logger.debug('PATCH %s' % uri)
        self._submit(partial(self._json_request, 'PATCH', uri, body),
                     callback)

    def delete(self, uri, callback):
        logger.debug('DELETE %s' % uri)
        self._submit(partial(self._json_request, 'DELETE', uri), callback)
