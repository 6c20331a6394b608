# Copyright (c) 2019 Riverbed Technology, Inc.
#
# This software is licensed under the terms and conditions of the MIT License
# accompanying the software ("License").  This software is distributed "AS IS"
# as set forth in the License.

"""
The walker treats a representation as anything with a ``link(rel)``
method that returns a URI string, or None if the relation is absent.
`JsonRepresentation` is the implementation used by `Connection` for
JSON documents.  A relation name is looked up in this order:

* a name starting with ``/`` is a JSON pointer into the document::

     >>> rep = JsonRepresentation({'nested': {'next': '/page/2'}})
     >>> rep.link('/nested/next')
     '/page/2'

* a top-level property holding the URI, ``{"next": "/page/2"}``

* a HAL link, ``{"_links": {"next": {"href": "/page/2"}}}``

* an entry of a link list, ``{"links": [{"rel": "next",
  "href": "/page/2"}]}``

"""

import logging

from jsonpointer import resolve_pointer

logger = logging.getLogger(__name__)


class JsonRepresentation(object):
    """ A decoded JSON document with relation lookup. """

    def __init__(self, data, response=None):
        """ Create a representation of `data`.

        :param data: the decoded JSON body, None if the body was empty
        :param response: the transport's response this was decoded
            from, if any

        """
        self.data = data
        self.response = response

    def __repr__(self):
        uri = getattr(self.response, 'url', None)
        if uri:
            return "<JsonRepresentation '%s'>" % uri
        return '<JsonRepresentation>'

    def __eq__(self, other):
        if not isinstance(other, JsonRepresentation):
            return NotImplemented
        return self.data == other.data

    def __ne__(self, other):
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    __hash__ = None

    def link(self, rel):
        """ Return the link target for relation `rel`, or None. """
        if rel.startswith('/'):
            return self._as_uri(resolve_pointer(self.data, rel, None))

        if not isinstance(self.data, dict):
            return None

        target = self._as_uri(self.data.get(rel))
        if target is not None:
            return target

        hal = self.data.get('_links')
        if isinstance(hal, dict) and isinstance(hal.get(rel), dict):
            target = self._as_uri(hal[rel].get('href'))
            if target is not None:
                return target

        links = self.data.get('links')
        if isinstance(links, list):
            for entry in links:
                if isinstance(entry, dict) and entry.get('rel') == rel:
                    return self._as_uri(entry.get('href'))

        return None

    @staticmethod
    def _as_uri(value):
        if isinstance(value, str):
            return value
        return None
