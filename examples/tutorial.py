import argparse
import time

from influxv2 import InfluxDBClient, QueryBuilder


def main(url, token, org_name='example'):
    now_ms = int(time.time()) * 1000
    points = [
        {"measurement": "cpu_load_short",
         "tags": {"host": "server01", "region": "us-west"},
         "value": 0.64,
         "time": now_ms - 1000},
        {"measurement": "cpu_load_short",
         "tags": {"host": "server01", "region": "us-west"},
         "value": 0.67,
         "time": now_ms}
    ]

    client = InfluxDBClient(url, token)

    print("Create organization: " + org_name)
    org = client.create_organization(org_name)
    client.switch_org(org_name)

    print("Create bucket: cpu")
    client.create_bucket('cpu', org['id'], shard_group_duration='1d')

    print("Buckets: {0}".format(
        [b['name'] for b in client.get_list_buckets(org=org_name)]))

    print("Write points: {0}".format(points))
    client.write_points(points, 'cpu')

    query = QueryBuilder('cpu').measurement('cpu_load_short') \
        .tags({'host': 'server01'}).time_range(now_ms // 1000 - 3600)
    print("Querying data:\n" + query.build())
    result = client.query_records(query)
    print("Result: {0}".format(result))

    print("Count: {0}".format(client.query_records(query.count())))

    print("Delete points of server01")
    client.delete_data('cpu', 'cpu_load_short', {'host': 'server01'})

    print("Delete organization: " + org_name)
    client.delete_organization(org['id'])
    client.close()


def parse_args():
    parser = argparse.ArgumentParser(
        description='example code to play with InfluxDB 2.x')
    parser.add_argument('--url', type=str, required=True)
    parser.add_argument('--token', type=str, required=True)
    parser.add_argument('--org', type=str, default='example')
    return parser.parse_args()


if __name__ == '__main__':
    args = parse_args()
    main(url=args.url, token=args.token, org_name=args.org)
