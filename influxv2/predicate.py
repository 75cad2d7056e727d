# -*- coding: utf-8 -*-
"""Build predicate expressions for the delete API."""

from datetime import datetime
from numbers import Integral

from pytz import UTC

from influxv2.line_protocol import escape_measurement, escape_tag

# Oldest and newest instants the storage engine can hold.
DEFAULT_DELETE_START = '1677-09-21T00:12:43.145224194Z'
DEFAULT_DELETE_STOP = '2262-04-11T23:47:16.854775806Z'


def make_predicate(measurement=None, tags=None):
    """Return a delete predicate matching a measurement and its tags.

    The expression only supports equality joined with ``AND``.  With no
    measurement and no tags the result is ``''``, which the delete API
    treats as "match everything".

    .. warning::
        Double quotes inside the measurement or tags are not escaped and
        break the generated literal.

    :param measurement: the measurement name, or None
    :type measurement: str
    :param tags: tag keys mapped to the values they must equal
    :type tags: dict
    :rtype: str
    """
    predicate = ''
    if measurement is not None:
        predicate = '_measurement="{0}"'.format(
            escape_measurement(measurement))

    for key, value in (tags or {}).items():
        predicate += ' AND {0}="{1}"'.format(escape_tag(key),
                                             escape_tag(value))

    if measurement is None and predicate:
        predicate = predicate[len(' AND '):]

    return predicate


def format_instant(value, default):
    """Render a delete bound as an RFC3339 string.

    None gives ``default``, strings are passed through untouched, integers
    are seconds since the epoch and naive datetimes are taken as UTC.
    """
    if value is None:
        return default

    if isinstance(value, str):
        return value

    if isinstance(value, Integral):
        value = datetime.fromtimestamp(value, UTC)

    if isinstance(value, datetime):
        if not value.tzinfo:
            value = UTC.localize(value)
        value = value.astimezone(UTC)
        return value.strftime('%Y-%m-%dT%H:%M:%S.') + \
            '{0:06d}Z'.format(value.microsecond)

    raise ValueError(value)
