#!/usr/bin/env python3
"""Tests for clock.py: fixed-step tick accounting."""

import unittest

from flappy.clock import SimulationClock


class TestSimulationClock(unittest.TestCase):
    def setUp(self):
        # 50 Hz -> 20 ms per tick, exact in binary floating point
        self.clock = SimulationClock(ticks_per_second=50, max_dt_ms=100)

    def test_starts_stopped(self):
        self.assertFalse(self.clock.is_running())
        self.assertEqual(self.clock.advance(1000), 0)

    def test_whole_ticks_only(self):
        self.clock.start()
        self.assertTrue(self.clock.is_running())
        self.assertEqual(self.clock.advance(10), 0)
        self.assertEqual(self.clock.advance(10), 1)
        self.assertEqual(self.clock.advance(45), 2)
        self.assertEqual(self.clock.advance(15), 1)

    def test_long_frame_is_capped(self):
        self.clock.start()
        self.assertEqual(self.clock.advance(5000), 5)

    def test_negative_dt_ignored(self):
        self.clock.start()
        self.assertEqual(self.clock.advance(-50), 0)
        self.assertEqual(self.clock.advance(20), 1)

    def test_stop_drops_partial_time(self):
        self.clock.start()
        self.clock.advance(19)
        self.clock.stop()
        self.assertFalse(self.clock.is_running())
        self.assertEqual(self.clock.advance(100), 0)
        self.clock.start()
        self.assertEqual(self.clock.advance(1), 0)

    def test_start_twice_keeps_accumulator(self):
        self.clock.start()
        self.clock.advance(15)
        self.clock.start()
        self.assertEqual(self.clock.advance(5), 1)

    def test_default_rate(self):
        clock = SimulationClock()
        self.assertAlmostEqual(clock.tick_ms, 1000.0 / 60)


if __name__ == "__main__":
    unittest.main()
