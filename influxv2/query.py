# -*- coding: utf-8 -*-
"""Fluent builder for the Flux queries sent to ``/api/v2/query``."""

from influxv2.line_protocol import escape_measurement, escape_tag

_TEMPLATE = """
    from(bucket: "{bucket}")
    |> range({range})
    |> filter(fn: (r) => {filter})
    |> keep(columns: ["_time", "_value"])
    |> {terminal}
"""


class QueryBuilder(object):
    """Assemble a Flux pipeline from a bucket, a time range and filters.

    Every setter updates one field and returns the builder, so calls can be
    chained::

        >> QueryBuilder().bucket('b1').measurement('cpu') \\
        ..     .time_range(100, 200).build()

    Nothing is validated: an unset bucket, an inverted range or an empty
    filter produce a query the server rejects.  A builder is not safe to
    mutate from several threads at once.
    """

    def __init__(self, bucket=None):
        self._bucket = bucket
        self._measurement = None
        self._tags = {}
        self._start = None
        self._stop = None
        self._count = False

    def bucket(self, name):
        """Set the bucket to read from."""
        self._bucket = name
        return self

    def measurement(self, name):
        """Only keep rows of the given measurement."""
        self._measurement = name
        return self

    def tags(self, tags):
        """Only keep rows whose tags equal the given values."""
        self._tags = dict(tags or {})
        return self

    def count(self, count=True):
        """Count rows instead of returning them sorted by time."""
        self._count = count
        return self

    def time_range(self, start=None, stop=None):
        """Restrict the query to ``[start, stop)``, in Unix seconds."""
        self._start = start
        self._stop = stop
        return self

    def copy(self):
        """Return an independent builder with the same state."""
        other = QueryBuilder(self._bucket)
        other._measurement = self._measurement
        other._tags = dict(self._tags)
        other._start = self._start
        other._stop = self._stop
        other._count = self._count
        return other

    def _filter_clause(self):
        conditions = []
        if self._measurement is not None:
            conditions.append('r._measurement == "{0}"'.format(
                escape_measurement(self._measurement)))

        for key, value in self._tags.items():
            conditions.append('r["{0}"] == "{1}"'.format(escape_tag(key),
                                                         escape_tag(value)))

        return ' and '.join(conditions)

    def _range_clause(self):
        bounds = []
        if self._start is not None:
            bounds.append('start: {0}'.format(self._start))
        if self._stop is not None:
            bounds.append('stop: {0}'.format(self._stop))
        return ', '.join(bounds)

    def build(self):
        """Return the Flux query text for the current state.

        :rtype: str
        """
        if self._count:
            terminal = 'count()'
        else:
            terminal = 'sort(columns: ["_time"])'

        query = _TEMPLATE.format(
            bucket=self._bucket,
            range=self._range_clause(),
            filter=self._filter_clause(),
            terminal=terminal
        )
        return '\n'.join(line.strip() for line in query.strip().split('\n'))

    def __str__(self):
        return self.build()

    def __repr__(self):
        return '<QueryBuilder bucket=%r measurement=%r>' % (
            self._bucket, self._measurement)
