# -*- coding: utf-8 -*-
"""Define the line_protocol handler."""

from datetime import datetime
from numbers import Integral

from pytz import UTC
from dateutil.parser import parse

EPOCH = UTC.localize(datetime(1970, 1, 1))


def _get_unicode(data):
    """Try to return a text aka unicode object from the given data."""
    if isinstance(data, bytes):
        return data.decode('utf-8')

    if data is None:
        return ''

    return str(data)


def _to_millis(timestamp):
    delta = timestamp - EPOCH
    millis_in_days = delta.days * 86400 * 10 ** 3
    millis_in_seconds = delta.seconds * 10 ** 3
    return millis_in_days + millis_in_seconds + delta.microseconds // 10 ** 3


def _convert_timestamp(timestamp):
    if isinstance(timestamp, Integral):
        return timestamp  # assume the caller already speaks milliseconds

    if isinstance(timestamp, (str, bytes)):
        timestamp = parse(_get_unicode(timestamp))

    if isinstance(timestamp, datetime):
        if not timestamp.tzinfo:
            timestamp = UTC.localize(timestamp)
        return _to_millis(timestamp)

    raise ValueError(timestamp)


def escape_measurement(measurement):
    """Escape a measurement name for line protocol and predicates."""
    measurement = _get_unicode(measurement)
    return measurement.replace(
        ",", "\\,"
    ).replace(
        " ", "\\ "
    )


def escape_tag(tag):
    """Escape a tag key or tag value."""
    tag = _get_unicode(tag)
    return tag.replace(
        ",", "\\,"
    ).replace(
        "=", "\\="
    ).replace(
        " ", "\\ "
    )


def make_line(measurement, tags, value, time=None):
    """Serialize a single point into a line of line protocol.

    :param measurement: the measurement name
    :type measurement: str
    :param tags: tag keys mapped to tag values, emitted in mapping order
    :type tags: dict
    :param value: the numeric value stored in the ``value`` field; it is
        rendered with ``str()`` so pre-format it if the formatting matters
    :param time: the timestamp in milliseconds since the epoch, or a
        datetime or RFC3339 string converted to milliseconds
    :returns: the line, without a trailing newline
    :rtype: str
    """
    tags = tags or {}

    line = escape_measurement(measurement)

    for tag_key, tag_value in tags.items():
        line += ",{key}={value}".format(
            key=escape_tag(tag_key),
            value=escape_tag(tag_value)
        )

    line += " value={0}".format(value)

    if time is not None:
        line += " {0}".format(int(_convert_timestamp(time)))

    return line


def make_lines(points):
    """Serialize a sequence of points into newline-joined line protocol.

    Each point is a dict with the keys ``measurement``, ``tags``
    (optional), ``value`` and ``time``.
    """
    lines = []
    for point in points:
        lines.append(make_line(
            point['measurement'],
            tags=point.get('tags'),
            value=point.get('value'),
            time=point.get('time')
        ))

    return '\n'.join(lines)
