# Copyright (c) 2019 Riverbed Technology, Inc.
#
# This software is licensed under the terms and conditions of the MIT License
# accompanying the software ("License").  This software is distributed "AS IS"
# as set forth in the License.

# NOTE: If any imports are made in this module, please add an
# __all__ = []
# definition as __init__.py does a from .exceptions import *.


#
# General exception and base class
#
class HyperwalkerException(Exception):
    """ Base exception class for hyperwalker errors. """


#
# Link walking exceptions
#
class LinkError(HyperwalkerException):
    """ Raised if a link cannot be followed. """


class LinkNotFound(LinkError):
    """ A relation is absent from a fetched representation. """

    def __init__(self, rel, representation=None):
        self.rel = rel
        self.representation = representation
        super(LinkNotFound, self).__init__(
            "No link found for relation '%s'" % rel)


#
# URI template exceptions
#
class TemplateError(HyperwalkerException):
    """ An error occurred when expanding a URI template. """


class MissingTemplateParameter(TemplateError):
    """ URI template missing one or more variables. """

    def __init__(self, template, missing):
        self.template = template
        self.missing = sorted(missing)
        super(MissingTemplateParameter, self).__init__(
            'No value provided for parameter(s) %s in template: %s' %
            (', '.join('"%s"' % m for m in self.missing), template))


class InvalidParameter(TemplateError):
    """ Template parameters were not supplied as a mapping. """


#
# Connection related exceptions
#
class ConnectionError(HyperwalkerException):
    """ A connection error occurred. """


class URLError(ConnectionError):
    """ An error occurred when building a URL. """


#
# Request/Response related exceptions
#
class HTTPError(HyperwalkerException):
    """ Links an HTTP status with the decoded error body, if any. """

    code_map = {}

    def __init__(self, response):
        self._response = response

        # The fields most callers need when handling an error; dig into
        # _response for anything else.
        self.http_code = response.status_code
        self.headers = response.headers

        try:
            self.json_data = response.json()
            self.text = None
        except ValueError:
            self.json_data = None
            self.text = response.text

        # Prefer a server supplied error message, fall back on the
        # stock HTTP reason, e.g. 'Not Found'.
        try:
            error_text = self.json_data['error_text']
        except (TypeError, KeyError):
            error_text = response.reason
        super(HTTPError, self).__init__(error_text)

    @classmethod
    def raise_by_status(cls, response):
        exception_class = cls.code_map.get(response.status_code, None)
        if exception_class is None:
            if 400 <= response.status_code < 500:
                exception_class = ClientHTTPError
            elif 500 <= response.status_code < 600:
                exception_class = ServerHTTPError
            else:
                exception_class = HTTPError
        raise exception_class(response)


def _status(code):
    def register(exception_class):
        HTTPError.code_map[code] = exception_class
        return exception_class
    return register


class ClientHTTPError(HTTPError):
    """ Client-side errors (4xx codes). """


@_status(400)
class HTTPBadRequest(ClientHTTPError):
    pass


@_status(401)
class HTTPUnauthorized(ClientHTTPError):
    pass


@_status(403)
class HTTPForbidden(ClientHTTPError):
    pass


@_status(404)
class HTTPNotFound(ClientHTTPError):
    pass


@_status(405)
class HTTPMethodNotAllowed(ClientHTTPError):
    pass


@_status(406)
class HTTPNotAcceptable(ClientHTTPError):
    pass


@_status(408)
class HTTPRequestTimeout(ClientHTTPError):
    pass


@_status(409)
class HTTPConflict(ClientHTTPError):
    pass


@_status(410)
class HTTPGone(ClientHTTPError):
    pass


@_status(412)
class HTTPPreconditionFailed(ClientHTTPError):
    pass


@_status(415)
class HTTPUnsupportedMediaType(ClientHTTPError):
    pass


# RFC 4918
@_status(422)
class HTTPUnprocessableEntity(ClientHTTPError):
    pass


# RFC 6585
@_status(429)
class HTTPTooManyRequests(ClientHTTPError):
    pass


class ServerHTTPError(HTTPError):
    """ Server-side errors (5xx codes). """


@_status(500)
class HTTPInternalServerError(ServerHTTPError):
    pass


@_status(501)
class HTTPNotImplemented(ServerHTTPError):
    pass


@_status(502)
class HTTPBadGateway(ServerHTTPError):
    pass


@_status(503)
class HTTPServiceUnavailable(ServerHTTPError):
    pass


@_status(504)
class HTTPGatewayTimeout(ServerHTTPError):
    pass
