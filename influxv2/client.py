# -*- coding: utf-8 -*-
"""Python client for the InfluxDB 2.x HTTP API."""

import json
import logging
import os
import random
import time

import requests
import requests.adapters
import requests.exceptions
from urllib.parse import urlencode, urlparse

from influxv2.annotated_csv import parse_csv, parse_tables, tables_to_records
from influxv2.line_protocol import make_lines
from influxv2.pagination import Paginator
from influxv2.predicate import (DEFAULT_DELETE_START, DEFAULT_DELETE_STOP,
                                format_instant, make_predicate)
from influxv2.query import QueryBuilder
from .exceptions import InfluxDBClientError
from .exceptions import InfluxDBServerError

_LOG = logging.getLogger(__name__)


class InfluxDBClient(object):
    """InfluxDBClient primary client object to connect InfluxDB 2.x.

    The :class:`~.InfluxDBClient` object holds information necessary to
    connect to InfluxDB. Requests can be made to InfluxDB directly through
    the client.

    :param url: base url of the server; its scheme selects plain http or
        https, defaults to 'http://localhost:8086'
    :type url: str
    :param token: API token sent as ``Authorization: Token <token>``
    :type token: str
    :param org: organization name used when a call does not name one,
        defaults to None
    :type org: str
    :param timeout: number of seconds Requests will wait for your client to
        establish a connection, defaults to None
    :type timeout: int
    :param retries: number of retries your client will try before aborting,
        defaults to 3. 0 indicates try until success
    :type retries: int
    :param verify_ssl: verify SSL certificates for HTTPS requests, defaults to
        True
    :type verify_ssl: bool
    :param pool_size: urllib3 connection pool size, defaults to 10.
    :type pool_size: int
    :param proxies: HTTP(S) proxy to use for Requests, defaults to {}
    :type proxies: dict
    :param cert: Path to client certificate information to use for mutual TLS
        authentication, as a single file or a (cert, key) tuple, defaults to
        None
    :type cert: str

    :raises ValueError: if cert is provided but the url is not https
    """

    def __init__(self,
                 url='http://localhost:8086',
                 token=None,
                 org=None,
                 timeout=None,
                 retries=3,
                 verify_ssl=True,
                 pool_size=10,
                 proxies=None,
                 cert=None,
                 ):
        """Construct a new InfluxDBClient object."""
        self._token = token
        self._org = org
        self._timeout = timeout
        self._retries = retries
        self._verify_ssl = verify_ssl

        parsed = urlparse(url)
        if parsed.scheme not in ('http', 'https'):
            raise ValueError('Unknown scheme "{0}".'.format(parsed.scheme))
        self._scheme = parsed.scheme
        self.__baseurl = url.rstrip('/')

        self._session = requests.Session()
        adapter = requests.adapters.HTTPAdapter(
            pool_connections=int(pool_size),
            pool_maxsize=int(pool_size)
        )
        self._session.mount(self._scheme + '://', adapter)

        if proxies is None:
            self._proxies = {}
        else:
            self._proxies = proxies

        if cert:
            if self._scheme != 'https':
                raise ValueError(
                    "Client certificate provided but ssl is disabled."
                )
            else:
                self._session.cert = cert

        self._headers = {
            'Authorization': 'Token {0}'.format(token),
            'Content-Type': 'application/json',
            'Accept': 'application/json'
        }

    @property
    def _baseurl(self):
        return self.__baseurl

    @property
    def org(self):
        """Organization used when a call does not name one."""
        return self._org

    @classmethod
    def from_env(cls, **kwargs):
        """Generate an instance of InfluxDBClient from the environment.

        Reads ``INFLUXDB_V2_URL``, ``INFLUXDB_V2_TOKEN``, ``INFLUXDB_V2_ORG``,
        ``INFLUXDB_V2_TIMEOUT`` and ``INFLUXDB_V2_VERIFY_SSL``.

        .. note:: parameters provided in `**kwargs` override the environment
        """
        init_args = {}
        env = os.environ
        if env.get('INFLUXDB_V2_URL'):
            init_args['url'] = env['INFLUXDB_V2_URL']
        if env.get('INFLUXDB_V2_TOKEN'):
            init_args['token'] = env['INFLUXDB_V2_TOKEN']
        if env.get('INFLUXDB_V2_ORG'):
            init_args['org'] = env['INFLUXDB_V2_ORG']
        if env.get('INFLUXDB_V2_TIMEOUT'):
            init_args['timeout'] = float(env['INFLUXDB_V2_TIMEOUT'])
        if env.get('INFLUXDB_V2_VERIFY_SSL'):
            init_args['verify_ssl'] = \
                env['INFLUXDB_V2_VERIFY_SSL'].lower() not in ('0', 'false')
        init_args.update(kwargs)

        return cls(**init_args)

    def switch_org(self, org):
        """Change the client's default organization.

        :param org: the name of the organization to switch to
        :type org: str
        """
        self._org = org

    def request(self, url, method='GET', params=None, data=None,
                expected_response_code=200, headers=None):
        """Make a HTTP request to the InfluxDB API.

        :param url: the path of the HTTP request, e.g. api/v2/write, or an
            absolute url
        :type url: str
        :param method: the HTTP method for the request, defaults to GET
        :type method: str
        :param params: additional parameters for the request, defaults to None
        :type params: dict
        :param data: the data of the request, defaults to None
        :type data: str
        :param expected_response_code: the expected response code of
            the request, defaults to 200
        :type expected_response_code: int
        :param headers: headers to add to the request
        :type headers: dict
        :returns: the response from the request
        :rtype: :class:`requests.Response`
        :raises InfluxDBServerError: if the response code is any server error
            code (5xx)
        :raises InfluxDBClientError: if the response code is not the
            same as `expected_response_code` and is not a server error code
        """
        if not url.startswith(('http://', 'https://')):
            url = "{0}/{1}".format(self._baseurl, url.lstrip('/'))

        request_headers = dict(self._headers)
        if headers:
            request_headers.update(headers)

        if params is None:
            params = {}

        if isinstance(data, (dict, list)):
            data = json.dumps(data)

        _LOG.debug("%s %s", method, url)

        # Try to send the request more than once by default
        retry = True
        _try = 0
        while retry:
            try:
                response = self._session.request(
                    method=method,
                    url=url,
                    params=params,
                    data=data,
                    headers=request_headers,
                    proxies=self._proxies,
                    verify=self._verify_ssl,
                    timeout=self._timeout
                )
                break
            except (requests.exceptions.ConnectionError,
                    requests.exceptions.HTTPError,
                    requests.exceptions.Timeout) as exc:
                _try += 1
                if self._retries != 0:
                    retry = _try < self._retries
                if not retry:
                    raise
                _LOG.warning("%s %s failed (%s), retry %d",
                             method, url, exc, _try)
                if method == "POST":
                    time.sleep((2 ** _try) * random.random() / 100.0)
        # if there's not an error, there must have been a successful response
        if 500 <= response.status_code < 600:
            raise InfluxDBServerError(response.content,
                                      response.status_code,
                                      response.reason)
        elif response.status_code == expected_response_code:
            return response
        else:
            raise InfluxDBClientError(response.content,
                                      response.status_code,
                                      response.reason)

    def _get_json(self, url, params=None):
        return self.request(url, params=params).json()

    def _resolve_org(self, org):
        if org is None:
            org = self._org
        if org is None:
            raise ValueError("No organization given and no default org set.")
        return org

    def ping(self):
        """Check connectivity to InfluxDB.

        :returns: The version of the InfluxDB the client is connected to
        """
        response = self.request(
            url="ping",
            method='GET',
            expected_response_code=204
        )

        return response.headers.get('X-Influxdb-Version')

    def health(self):
        """Return the health report of the server."""
        return self.request(url="health").json()

    def write(self, data, bucket, org=None):
        """Write line protocol to a bucket with millisecond precision.

        :param data: a line, or a sequence of lines
        :type data: str or list
        :param bucket: the bucket to write to
        :type bucket: str
        :param org: the organization owning the bucket, defaults to the
            client's org
        :type org: str
        :returns: True, if the write operation is successful
        :rtype: bool
        """
        if isinstance(data, str):
            data = [data]
        data = '\n'.join(data).encode('utf-8')

        self.request(
            url="api/v2/write",
            method='POST',
            params={
                'org': self._resolve_org(org),
                'bucket': bucket,
                'precision': 'ms'
            },
            data=data,
            expected_response_code=204,
            headers={'Content-Type': 'text/plain; charset=utf-8'}
        )
        return True

    @staticmethod
    def _batches(iterable, size):
        for i in range(0, len(iterable), size):
            yield iterable[i:i + size]

    def write_points(self, points, bucket, org=None, batch_size=None):
        """Write points to a bucket.

        :param points: dicts with the keys ``measurement``, ``tags``,
            ``value`` and ``time`` (milliseconds since the epoch)
        :type points: list
        :param bucket: the bucket to write to
        :type bucket: str
        :param org: the organization owning the bucket
        :type org: str
        :param batch_size: value to write the points in batches
            instead of all at one time
        :type batch_size: int
        :returns: True, if the operation is successful
        :rtype: bool
        """
        points = list(points)
        if batch_size and batch_size > 0:
            for batch in self._batches(points, batch_size):
                self.write(make_lines(batch), bucket, org=org)
            return True

        return self.write(make_lines(points), bucket, org=org)

    def query(self, query, org=None):
        """Send a Flux query and return the decoded CSV rows.

        .. danger::
            Tag values are interpolated into the query text without
            escaping double quotes, do not build queries from untrusted
            data.

        :param query: the Flux query, or a :class:`~.QueryBuilder`
        :type query: str
        :param org: the organization to query, defaults to the client's org
        :type org: str
        :returns: one list of string cells per CSV row
        :rtype: list
        :raises InfluxDBDecodeError: if the response is not valid CSV
        """
        return parse_csv(self._post_query(query, org).content)

    def query_records(self, query, org=None):
        """Send a Flux query and return its rows as dicts.

        :Example:

        ::

            >> client.query_records(QueryBuilder('b1').measurement('cpu'))
            [{'': '', 'result': '_result', 'table': '0',
              '_time': '2020-01-01T00:00:00Z', '_value': '1'}]
        """
        return tables_to_records(
            parse_tables(self._post_query(query, org).content))

    def _post_query(self, query, org):
        if isinstance(query, QueryBuilder):
            query = query.build()

        return self.request(
            url="api/v2/query",
            method='POST',
            params={'org': self._resolve_org(org)},
            data={'query': query, 'type': 'flux'},
            expected_response_code=200,
            headers={'Accept': 'application/csv'}
        )

    def delete_data(self, bucket, measurement=None, tags=None,
                    start=None, stop=None, org=None):
        """Delete the points of a measurement matching some tags.

        .. warning::
            Without measurement and tags every point of the bucket in the
            time range is deleted.

        :param bucket: the bucket to delete from
        :type bucket: str
        :param measurement: the measurement to delete
        :type measurement: str
        :param tags: tag keys mapped to the values they must equal
        :type tags: dict
        :param start: first instant to delete, datetime, RFC3339 string or
            Unix seconds, defaults to the oldest storable instant
        :param stop: last instant to delete, defaults to the newest storable
            instant
        :param org: the organization owning the bucket
        :type org: str
        """
        body = {
            'predicate': make_predicate(measurement, tags),
            'start': format_instant(start, DEFAULT_DELETE_START),
            'stop': format_instant(stop, DEFAULT_DELETE_STOP)
        }
        self.request(
            url="api/v2/delete",
            method='POST',
            params={'org': self._resolve_org(org), 'bucket': bucket},
            data=body,
            expected_response_code=204
        )

    def create_bucket(self, name, org_id, shard_group_duration=None,
                      retention_seconds=None):
        """Create a new bucket.

        :param name: the name of the bucket to create
        :type name: str
        :param org_id: the ID of the owning organization
        :type org_id: str
        :param shard_group_duration: shard group duration, e.g. '1d'
        :type shard_group_duration: str
        :param retention_seconds: expire points after that many seconds,
            defaults to None (keep forever)
        :type retention_seconds: int
        :returns: the created bucket
        :rtype: dict
        """
        body = {
            'orgID': org_id,
            'name': name,
            'shardGroupDuration': shard_group_duration
        }
        if retention_seconds is not None:
            body['retentionRules'] = [
                {'type': 'expire', 'everySeconds': int(retention_seconds)}
            ]

        return self.request(
            url="api/v2/buckets",
            method='POST',
            data=body,
            expected_response_code=201
        ).json()

    def delete_bucket(self, bucket_id):
        """Delete a bucket.

        :param bucket_id: the ID of the bucket to delete
        :type bucket_id: str
        """
        self.request(
            url="api/v2/buckets/{0}".format(bucket_id),
            method='DELETE',
            expected_response_code=204
        )

    def iter_buckets(self, org=None, name=None, limit=None):
        """Lazily yield buckets, fetching one page at a time."""
        params = {}
        if org is not None:
            params['org'] = org
        if name is not None:
            params['name'] = name
        if limit is not None:
            params['limit'] = limit

        return self._paginate("api/v2/buckets", params, 'buckets').items()

    def get_list_buckets(self, org=None, name=None, limit=None):
        """Get the list of buckets in InfluxDB.

        :param org: only list buckets of that organization name
        :type org: str
        :param name: only list buckets with that name
        :type name: str
        :param limit: page size
        :type limit: int
        :returns: all buckets, following every page
        :rtype: list of dictionaries

        :Example:

        ::

            >> client.get_list_buckets()
            [{'id': '0123', 'name': 'b1', 'orgID': 'abcd', ...}]
        """
        return list(self.iter_buckets(org=org, name=name, limit=limit))

    def find_bucket(self, name, org=None):
        """Return the bucket with that name, or None."""
        for bucket in self.iter_buckets(org=org, name=name):
            if bucket.get('name') == name:
                return bucket
        return None

    def create_organization(self, name, description=None):
        """Create a new organization.

        :param name: the name of the organization
        :type name: str
        :returns: the created organization
        :rtype: dict
        """
        body = {'name': name}
        if description is not None:
            body['description'] = description

        return self.request(
            url="api/v2/orgs",
            method='POST',
            data=body,
            expected_response_code=201
        ).json()

    def delete_organization(self, org_id):
        """Delete an organization and everything it owns.

        :param org_id: the ID of the organization to delete
        :type org_id: str
        """
        self.request(
            url="api/v2/orgs/{0}".format(org_id),
            method='DELETE',
            expected_response_code=204
        )

    def get_list_organizations(self, name=None, limit=None):
        """Get the list of organizations in InfluxDB.

        :returns: all organizations, following every page
        :rtype: list of dictionaries
        """
        params = {}
        if name is not None:
            params['org'] = name
        if limit is not None:
            params['limit'] = limit

        return list(self._paginate("api/v2/orgs", params, 'orgs').items())

    def _paginate(self, url, params, key):
        if params:
            url = "{0}?{1}".format(url, urlencode(params))
        return Paginator(self._get_json, url, key)

    def close(self):
        """Close http session."""
        if isinstance(self._session, requests.Session):
            self._session.close()

    def __enter__(self):
        return self

    def __exit__(self, _exc_type, _exc_value, _traceback):
        self.close()
