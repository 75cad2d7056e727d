# -*- coding: utf-8 -*-
"""Exception handler for InfluxDBClient."""


def _build_message(content, code=None, reason=None):
    if isinstance(content, bytes):
        content = content.decode('UTF-8', 'replace')

    if code is not None and reason:
        message = "%s %s: %s" % (code, reason, content)
    elif code is not None:
        message = "%s: %s" % (code, content)
    else:
        message = content

    return content, message


class InfluxDBClientError(Exception):
    """Raised when an error occurs in the request."""

    def __init__(self, content, code=None, reason=None):
        """Initialize the InfluxDBClientError handler."""
        content, message = _build_message(content, code, reason)
        super(InfluxDBClientError, self).__init__(
            message
        )
        self.content = content
        self.code = code
        self.reason = reason


class InfluxDBServerError(Exception):
    """Raised when a server error occurs."""

    def __init__(self, content, code=None, reason=None):
        """Initialize the InfluxDBServerError handler."""
        content, message = _build_message(content, code, reason)
        super(InfluxDBServerError, self).__init__(message)
        self.content = content
        self.code = code
        self.reason = reason


class InfluxDBDecodeError(InfluxDBClientError):
    """Raised when a query response cannot be decoded."""

    def __init__(self, message, line=None):
        """Initialize the InfluxDBDecodeError handler."""
        if line is not None:
            message = "line %s: %s" % (line, message)
        super(InfluxDBDecodeError, self).__init__(message)
        self.line = line
