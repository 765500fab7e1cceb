import unittest
from unittest import mock

import requests

import check_live_server

def response(status_code, body=None):
    resp = mock.Mock(status_code=status_code, text="")
    resp.json.return_value = body if body is not None else {}
    return resp

class TestLiveServerCheck(unittest.TestCase):
    def test_every_request_carries_a_timeout(self):
        with mock.patch.object(check_live_server.requests, "post",
                               side_effect=[response(200), response(422)]) as post, \
             mock.patch.object(check_live_server.requests, "get",
                               return_value=response(200, {"throughput": 0})) as get:
            self.assertTrue(check_live_server.run_check(seconds=0))

        calls = post.call_args_list + get.call_args_list
        self.assertEqual(len(calls), 3)
        for call in calls:
            self.assertEqual(call.kwargs.get("timeout"), check_live_server.TIMEOUT)

    def test_hanging_server_fails_the_check(self):
        with mock.patch.object(check_live_server.requests, "post",
                               side_effect=requests.exceptions.Timeout()):
            self.assertFalse(check_live_server.run_check(seconds=0))

if __name__ == '__main__':
    unittest.main()
