# -*- coding: utf-8 -*-
"""Walk the paged listings of the management API."""

import logging

_LOG = logging.getLogger(__name__)


class Paginator(object):
    """A lazy, restartable sequence of pages.

    :param fetch: callable taking a url and returning the decoded page
    :param first_url: url of the first page
    :param key: name of the list holding the items of a page,
        e.g. ``buckets`` or ``orgs``

    Every iteration starts again from ``first_url`` and follows
    ``page['links']['next']`` until it is missing or empty.
    """

    def __init__(self, fetch, first_url, key):
        self._fetch = fetch
        self._first_url = first_url
        self._key = key

    def __iter__(self):
        url = self._first_url
        while url:
            _LOG.debug("fetching %s page %s", self._key, url)
            page = self._fetch(url)
            yield page.get(self._key) or []
            url = (page.get('links') or {}).get('next')

    def items(self):
        """Yield the items of every page, in page order."""
        for page in self:
            for item in page:
                yield item
