# -*- coding: utf-8 -*-

import unittest

from influxv2.pagination import Paginator


class FakePages(object):

    def __init__(self, pages):
        self.pages = pages
        self.fetched = []

    def __call__(self, url):
        self.fetched.append(url)
        return self.pages[url]


class TestPaginator(unittest.TestCase):

    def setUp(self):
        self.fetch = FakePages({
            'p1': {'buckets': [1, 2], 'links': {'next': 'p2'}},
            'p2': {'buckets': [3], 'links': {'next': 'p3'}},
            'p3': {'buckets': [4, 5], 'links': {'self': 'p3'}},
        })

    def test_items_in_page_order(self):
        paginator = Paginator(self.fetch, 'p1', 'buckets')
        self.assertListEqual(list(paginator.items()), [1, 2, 3, 4, 5])
        self.assertListEqual(self.fetch.fetched, ['p1', 'p2', 'p3'])

    def test_pages(self):
        paginator = Paginator(self.fetch, 'p1', 'buckets')
        self.assertListEqual(list(paginator), [[1, 2], [3], [4, 5]])

    def test_lazy(self):
        pages = iter(Paginator(self.fetch, 'p1', 'buckets'))
        self.assertEqual(next(pages), [1, 2])
        self.assertListEqual(self.fetch.fetched, ['p1'])

    def test_restartable(self):
        paginator = Paginator(self.fetch, 'p1', 'buckets')
        first = list(paginator.items())
        second = list(paginator.items())
        self.assertListEqual(first, second)
        self.assertListEqual(self.fetch.fetched,
                             ['p1', 'p2', 'p3', 'p1', 'p2', 'p3'])

    def test_null_next_link(self):
        fetch = FakePages({'p1': {'orgs': ['a'], 'links': {'next': None}}})
        self.assertListEqual(list(Paginator(fetch, 'p1', 'orgs').items()),
                             ['a'])

    def test_missing_items_and_links(self):
        fetch = FakePages({'p1': {}})
        self.assertListEqual(list(Paginator(fetch, 'p1', 'orgs')), [[]])
