# -*- coding: utf-8 -*-

import unittest
from collections import OrderedDict
from datetime import datetime

from pytz import UTC, timezone

from influxv2 import line_protocol


def _unescape_measurement(text):
    return text.replace('\\ ', ' ').replace('\\,', ',')


def _unescape_tag(text):
    return text.replace('\\ ', ' ').replace('\\=', '=').replace('\\,', ',')


class TestEscaping(unittest.TestCase):

    def test_escape_measurement(self):
        self.assertEqual(
            line_protocol.escape_measurement('cpu load,total'),
            'cpu\\ load\\,total'
        )

    def test_escape_measurement_keeps_equals_and_quotes(self):
        self.assertEqual(
            line_protocol.escape_measurement('a="b"'),
            'a="b"'
        )

    def test_escape_tag(self):
        self.assertEqual(
            line_protocol.escape_tag('a b,c=d'),
            'a\\ b\\,c\\=d'
        )

    def test_escape_empty(self):
        self.assertEqual(line_protocol.escape_measurement(''), '')
        self.assertEqual(line_protocol.escape_tag(''), '')

    def test_escape_bytes_and_none(self):
        self.assertEqual(line_protocol.escape_tag(b'a b'), 'a\\ b')
        self.assertEqual(line_protocol.escape_tag(None), '')

    def test_measurement_round_trip(self):
        for text in ['a,b c', ',,  ,', 'no-special', ' leading']:
            escaped = line_protocol.escape_measurement(text)
            stripped = escaped.replace('\\ ', '').replace('\\,', '')
            for char in ' ,':
                self.assertNotIn(char, stripped)
            self.assertEqual(_unescape_measurement(escaped), text)

    def test_tag_round_trip(self):
        for text in ['k=v', 'a b,c', '==', ', =', 'plain']:
            escaped = line_protocol.escape_tag(text)
            stripped = escaped.replace('\\ ', '').replace(
                '\\,', '').replace('\\=', '')
            for char in ' ,=':
                self.assertNotIn(char, stripped)
            self.assertEqual(_unescape_tag(escaped), text)


class TestLineProtocol(unittest.TestCase):

    def test_make_line(self):
        self.assertEqual(
            line_protocol.make_line('cpu,util', {'host': 'a b'}, 42, 1000),
            'cpu\\,util,host=a\\ b value=42 1000'
        )

    def test_make_line_without_tags(self):
        self.assertEqual(
            line_protocol.make_line('cpu', None, 0.5, 1),
            'cpu value=0.5 1'
        )

    def test_make_line_keeps_tag_order(self):
        tags = OrderedDict([('zone', 'b'), ('host', 'a')])
        self.assertEqual(
            line_protocol.make_line('cpu', tags, 1, 2),
            'cpu,zone=b,host=a value=1 2'
        )

    def test_make_line_escapes_tag_keys(self):
        self.assertEqual(
            line_protocol.make_line('m', {'a=b': 'c,d'}, 1, 2),
            'm,a\\=b=c\\,d value=1 2'
        )

    def test_make_line_datetime(self):
        self.assertEqual(
            line_protocol.make_line(
                'm', {}, 1, datetime(2009, 11, 10, 23, 0, 0, 123456)),
            'm value=1 1257894000123'
        )

    def test_make_line_aware_datetime(self):
        paris = timezone('Europe/Paris')
        self.assertEqual(
            line_protocol.make_line(
                'm', {}, 1, paris.localize(datetime(2009, 11, 11))),
            'm value=1 1257894000000'
        )
        self.assertEqual(
            line_protocol.make_line(
                'm', {}, 1, UTC.localize(datetime(1970, 1, 1, 0, 0, 1))),
            'm value=1 1000'
        )

    def test_make_line_string_time(self):
        self.assertEqual(
            line_protocol.make_line('m', {}, 1, '2009-11-10T23:00:00Z'),
            'm value=1 1257894000000'
        )

    def test_make_line_bad_time(self):
        with self.assertRaises(ValueError):
            line_protocol.make_line('m', {}, 1, 1.5)

    def test_make_lines(self):
        points = [
            {'measurement': 'cpu', 'tags': {'host': 'a'},
             'value': 1, 'time': 10},
            {'measurement': 'mem', 'value': 2.5, 'time': 20},
        ]
        self.assertEqual(
            line_protocol.make_lines(points),
            'cpu,host=a value=1 10\nmem value=2.5 20'
        )

    def test_make_line_requires_value(self):
        with self.assertRaises(TypeError):
            line_protocol.make_line('cpu', {'host': 'a'})
