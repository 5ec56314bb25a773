#!/usr/bin/env python3
"""Tests for reporter.py: score submission never leaks failures into the game."""

import threading
import unittest
from unittest import mock

import requests

from flappy.reporter import ScoreReporter


def ok_response(payload=None):
    r = mock.Mock()
    r.raise_for_status.return_value = None
    r.json.return_value = payload
    return r


class TestSubmit(unittest.TestCase):
    def setUp(self):
        patcher = mock.patch("flappy.reporter.requests.post")
        self.post = patcher.start()
        self.addCleanup(patcher.stop)
        self.done = mock.Mock()
        self.reporter = ScoreReporter("http://scores.local/api/", on_submitted=self.done)

    def test_posts_json_in_background_thread(self):
        self.post.return_value = ok_response()
        t = self.reporter.submit("alice", 7)
        t.join(timeout=5)

        self.assertTrue(t.daemon)
        self.post.assert_called_once_with(
            "http://scores.local/api/scores",
            json={"username": "alice", "score": 7},
            timeout=2.0,
        )
        self.done.assert_called_once_with()

    def test_overlapping_submits_do_not_share_state(self):
        gate = threading.Event()
        seen = []

        def slow_post(url, json, timeout):
            seen.append(json["score"])
            gate.wait(timeout=5)
            return ok_response()

        self.post.side_effect = slow_post
        first = self.reporter.submit("alice", 1)
        second = self.reporter.submit("alice", 2)
        gate.set()
        first.join(timeout=5)
        second.join(timeout=5)

        self.assertEqual(sorted(seen), [1, 2])
        self.assertEqual(self.done.call_count, 2)

    def test_network_error_is_logged_not_raised(self):
        self.post.side_effect = requests.ConnectionError("refused")
        with self.assertLogs("flappy.reporter", level="WARNING") as cm:
            self.assertFalse(self.reporter._post_score("bob", 3))
        self.assertIn("Failed to submit score 3", cm.output[0])
        self.done.assert_not_called()
        self.assertEqual(self.post.call_count, 1)

    def test_http_error_status_is_failure(self):
        r = mock.Mock()
        r.raise_for_status.side_effect = requests.HTTPError("500 Server Error")
        self.post.return_value = r
        with self.assertLogs("flappy.reporter", level="WARNING"):
            self.assertFalse(self.reporter._post_score("bob", 3))
        self.done.assert_not_called()

    def test_callback_failure_is_contained(self):
        self.post.return_value = ok_response()
        self.done.side_effect = RuntimeError("boom")
        with self.assertLogs("flappy.reporter", level="ERROR"):
            self.assertTrue(self.reporter._post_score("carol", 1))


class TestFetchTopScores(unittest.TestCase):
    def setUp(self):
        patcher = mock.patch("flappy.reporter.requests.get")
        self.get = patcher.start()
        self.addCleanup(patcher.stop)
        self.reporter = ScoreReporter("http://scores.local/api")

    def test_parses_rows(self):
        self.get.return_value = ok_response([
            {"username": "alice", "score": 12, "_id": "x"},
            {"username": "bob", "score": 9},
        ])
        self.assertEqual(self.reporter.fetch_top_scores(2), [("alice", 12), ("bob", 9)])
        self.get.assert_called_once_with("http://scores.local/api/scores/top/2", timeout=2.0)

    def test_failure_returns_empty(self):
        self.get.side_effect = requests.Timeout("slow")
        with self.assertLogs("flappy.reporter", level="WARNING"):
            self.assertEqual(self.reporter.fetch_top_scores(), [])

    def test_null_score_returns_empty(self):
        self.get.return_value = ok_response([{"username": "a", "score": None}])
        with self.assertLogs("flappy.reporter", level="WARNING"):
            self.assertEqual(self.reporter.fetch_top_scores(), [])

    def test_non_list_body_returns_empty(self):
        for body in (None, {"scores": []}, "oops"):
            self.get.return_value = ok_response(body)
            with self.assertLogs("flappy.reporter", level="WARNING"):
                self.assertEqual(self.reporter.fetch_top_scores(), [])

    def test_non_numeric_score_returns_empty(self):
        self.get.return_value = ok_response([{"username": "a", "score": "lots"}])
        with self.assertLogs("flappy.reporter", level="WARNING"):
            self.assertEqual(self.reporter.fetch_top_scores(), [])


if __name__ == "__main__":
    unittest.main()
