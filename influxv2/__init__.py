# -*- coding: utf-8 -*-
"""Initialize the influxv2 package."""

from .client import InfluxDBClient
from .exceptions import (InfluxDBClientError, InfluxDBDecodeError,
                         InfluxDBServerError)
from .line_protocol import escape_measurement, escape_tag, make_line
from .predicate import (DEFAULT_DELETE_START, DEFAULT_DELETE_STOP,
                        make_predicate)
from .query import QueryBuilder


__all__ = [
    'InfluxDBClient',
    'InfluxDBClientError',
    'InfluxDBDecodeError',
    'InfluxDBServerError',
    'QueryBuilder',
    'DEFAULT_DELETE_START',
    'DEFAULT_DELETE_STOP',
    'escape_measurement',
    'escape_tag',
    'make_line',
    'make_predicate',
]


__version__ = '1.0.0'
