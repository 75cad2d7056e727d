# -*- coding: utf-8 -*-
import os
import unittest

_server_url = os.environ.get('INFLUXDB_V2_URL')
_server_token = os.environ.get('INFLUXDB_V2_TOKEN')
skipServerTests = unittest.skipIf(not (_server_url and _server_token),
                                  "Skipping server tests...")
