"""
Unit tests for the ShakeDetector.

These tests drive the zero crossing counter directly and check when the shake
latch sets and clears.
"""

import unittest
import sys
import os

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '../..')))

from accelsim.core.config import GestureThresholds
from accelsim.sensors.shake import ShakeDetector

REST = (0, 0, -1023)

def swing(i):
    """Alternate hard left and right on the x axis."""
    return (1500 if i % 2 == 0 else -1500, 0, -1023)

class TestShakeDetector(unittest.TestCase):
    """Test cases for the ShakeDetector class."""

    def setUp(self):
        self.thresholds = GestureThresholds()
        self.detector = ShakeDetector(self.thresholds)

    def test_initial_state(self):
        state = self.detector.state
        self.assertFalse(state.shaken)
        self.assertEqual(state.count, 0)
        self.assertEqual(state.timer, 0)
        self.assertFalse(state.x or state.y or state.z)

    def test_first_crossing_needs_positive_swing(self):
        """A negative swing before any positive one is not a crossing."""
        self.assertFalse(self.detector.observe(-1500, 0, 0))
        self.assertTrue(self.detector.observe(1500, 0, 0))
        self.assertTrue(self.detector.state.x)

    def test_tolerance_is_exclusive(self):
        tolerance = self.thresholds.shake_tolerance
        self.assertFalse(self.detector.observe(tolerance, 0, 0))
        self.assertTrue(self.detector.observe(tolerance + 1, 0, 0))

    def test_latches_after_count_threshold_crossings(self):
        """Consecutive crossings latch on exactly the threshold-th one."""
        threshold = self.thresholds.shake_count_threshold
        for i in range(threshold - 1):
            self.assertTrue(self.detector.observe(*swing(i)))
            self.assertFalse(self.detector.shaken)
        self.detector.observe(*swing(threshold - 1))
        self.assertTrue(self.detector.shaken)
        self.assertEqual(self.detector.state.count, threshold)

    def test_latches_with_idle_ticks_between_crossings(self):
        """One idle tick between crossings is well inside the damping window."""
        threshold = self.thresholds.shake_count_threshold
        for i in range(threshold):
            self.detector.observe(*swing(i))
            if i < threshold - 1:
                self.detector.observe(*REST)
        self.assertTrue(self.detector.shaken)

    def test_sparse_crossings_never_latch(self):
        """Crossings further apart than the damping window decay away."""
        damping = self.thresholds.shake_damping
        for i in range(self.thresholds.shake_count_threshold * 3):
            self.detector.observe(*swing(i))
            for _ in range(damping):
                self.detector.observe(*REST)
            self.assertFalse(self.detector.shaken)
            self.assertLessEqual(self.detector.state.count, 1)

    def test_unlatches_after_count_threshold_decay_cycles(self):
        """Once latched, the flag only clears when the count has decayed to zero."""
        threshold = self.thresholds.shake_count_threshold
        damping = self.thresholds.shake_damping
        for i in range(threshold):
            self.detector.observe(*swing(i))
        self.assertTrue(self.detector.shaken)
        timer_at_latch = self.detector.state.timer

        idle_ticks = 0
        while self.detector.shaken:
            self.detector.observe(*REST)
            idle_ticks += 1
            if self.detector.shaken:
                self.assertGreater(self.detector.state.count, 0)
            self.assertLess(idle_ticks, 1000)

        # First decrement completes the running damping cycle, then one per cycle
        self.assertEqual(idle_ticks, (damping - timer_at_latch) + (threshold - 1) * damping)
        self.assertEqual(self.detector.state.count, 0)

    def test_count_is_capped(self):
        threshold = self.thresholds.shake_count_threshold
        for i in range(threshold + 3):
            self.detector.observe(*swing(i))
        self.assertEqual(self.detector.state.count, threshold)

    def test_timer_wraps_at_damping(self):
        damping = self.thresholds.shake_damping
        for _ in range(damping - 1):
            self.detector.observe(*REST)
        self.assertEqual(self.detector.state.timer, damping - 1)
        self.detector.observe(*REST)
        self.assertEqual(self.detector.state.timer, 0)

    def test_each_axis_counts(self):
        """Crossings on y and z count the same as on x."""
        self.assertTrue(self.detector.observe(0, 1500, 0))
        self.assertTrue(self.detector.observe(0, 0, 1500))
        self.assertEqual(self.detector.state.count, 2)

    def test_simultaneous_crossings_count_once(self):
        self.detector.observe(1500, 1500, 1500)
        self.assertEqual(self.detector.state.count, 1)

if __name__ == "__main__":
    unittest.main()
