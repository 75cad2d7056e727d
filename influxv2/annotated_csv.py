# -*- coding: utf-8 -*-
"""Decode the CSV bodies returned by ``/api/v2/query``."""

import csv
import io

from influxv2.exceptions import InfluxDBDecodeError


def parse_tables(text):
    """Decode a comma-delimited, backslash-escaped body into tables.

    Blank lines separate tables in annotated CSV; each table is returned
    as its own list of rows, a row being a list of string cells.

    :param text: the response body
    :type text: str or bytes
    :rtype: list
    :raises InfluxDBDecodeError: on undecodable bytes or the first
        malformed row
    """
    if isinstance(text, bytes):
        try:
            text = text.decode('utf-8')
        except UnicodeDecodeError as exc:
            raise InfluxDBDecodeError(str(exc))

    reader = csv.reader(io.StringIO(text, newline=''),
                        delimiter=',',
                        quotechar='"',
                        escapechar='\\',
                        strict=True)
    tables = []
    table = []
    try:
        for row in reader:
            if not row or row == ['']:
                if table:
                    tables.append(table)
                    table = []
                continue
            table.append(row)
    except csv.Error as exc:
        raise InfluxDBDecodeError(str(exc), line=reader.line_num)

    if table:
        tables.append(table)

    return tables


def parse_csv(text):
    """Decode a query response into rows of string cells.

    Blank lines between tables are skipped.

    :raises InfluxDBDecodeError: on undecodable bytes or the first
        malformed row
    """
    return [row for table in parse_tables(text) for row in table]


def tables_to_records(tables):
    """Turn decoded tables into dicts keyed by their table's header.

    Annotation rows (first cell starting with ``#``) are dropped and the
    first remaining row of each table is its header.
    """
    records = []
    for table in tables:
        header = None
        for row in table:
            if row[0].startswith('#'):
                continue

            if header is None:
                header = row
                continue

            records.append(dict(zip(header, row)))

    return records
