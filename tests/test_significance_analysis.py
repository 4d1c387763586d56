"""
Test suite for the significance analyzer.
"""

import unittest
import numpy as np
from pathlib import Path
import sys

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from bitdepth_engine.core.significance_analyzer import SignificanceAnalyzer
from bitdepth_engine.core.track_info import TrackInfo


def analyze(samples, bits=16, channels=1, deep=False, total_frames=None):
    """Run a fresh analyzer over ``samples`` one observe() at a time."""
    track = TrackInfo(
        channels=channels,
        bits_per_sample=bits,
        sample_rate=44100,
        total_frames=total_frames
    )
    analyzer = SignificanceAnalyzer(track, deep=deep)
    for sample in samples:
        analyzer.observe(sample)
    return analyzer.finalize()


class TestSignificantBits(unittest.TestCase):
    """Test significant bit edge cases."""

    def test_no_samples(self):
        """Test that an empty stream is valid and reports zero bits."""
        report = analyze([])
        self.assertEqual(report.significant_bits, 0)
        self.assertEqual(report.signed_significant_bits, 0)
        self.assertEqual(report.actual_bits, 0)
        self.assertEqual(report.observed_sample_count, 0)
        self.assertEqual(report.observed_range, (0, 0))
        self.assertEqual(report.trailing_zero_run, 16)
        self.assertEqual(report.trailing_one_run, 16)

    def test_all_zero(self):
        """Test silence of any length."""
        for length in (1, 10, 1000):
            with self.subTest(length=length):
                report = analyze([0] * length)
                self.assertIn(report.significant_bits, (0, 1))
                self.assertEqual(report.observed_range, (0, 0))

    def test_all_ones_pattern(self):
        """Test a stream of -1 (every bit set)."""
        report = analyze([-1] * 50)
        self.assertIn(report.significant_bits, (0, 1))
        self.assertEqual(report.trailing_one_run, 16)
        self.assertEqual(report.observed_range, (-1, 0))

    def test_zero_and_all_ones(self):
        """Test mixing all-zero and all-one samples."""
        report = analyze([0, -1, 0, -1])
        self.assertEqual(report.significant_bits, 1)

    def test_zero_and_one(self):
        """Test samples [0x0000, 0x0001] at 16 bits."""
        report = analyze([0x0000, 0x0001])
        self.assertEqual(report.significant_bits, 1)
        self.assertEqual(report.trailing_zero_run, 0)
        self.assertEqual(report.observed_range, (0, 1))

    def test_high_bit_and_zero(self):
        """Test samples [0x4000, 0x0000] at 16 bits."""
        report = analyze([0x4000, 0x0000])
        self.assertEqual(report.significant_bits, 15)
        self.assertEqual(report.trailing_zero_run, 14)

    def test_full_range(self):
        """Test that the extremes of width W need all W bits."""
        for bits in (8, 16, 24, 32):
            with self.subTest(bits=bits):
                low = -(1 << (bits - 1))
                high = (1 << (bits - 1)) - 1
                report = analyze([low, high], bits=bits)
                self.assertEqual(report.significant_bits, bits)
                self.assertEqual(report.signed_significant_bits, bits)
                self.assertEqual(report.observed_range, (low, high))
                self.assertEqual(report.possible_range, (low, high))

    def test_truncation_padding(self):
        """Test that constant low zero bits reduce the actual bit count."""
        report = analyze([256, -512, 1024, 0])
        self.assertEqual(report.trailing_zero_run, 8)
        self.assertEqual(report.trailing_one_run, 0)
        self.assertEqual(report.significant_bits, 12)
        self.assertEqual(report.actual_bits, 4)

    def test_one_padding(self):
        """Test that constant low one bits reduce the actual bit count."""
        report = analyze([0x00FF, 0x01FF, -1])
        self.assertEqual(report.trailing_one_run, 8)
        self.assertEqual(report.significant_bits, 10)
        self.assertEqual(report.actual_bits, 2)


class TestAnalyzerBehaviour(unittest.TestCase):
    """Test counters, deep mode and lifecycle."""

    def setUp(self):
        """Set up test fixtures."""
        rng = np.random.default_rng(7)
        self.samples = rng.integers(-3000, 3000, size=(500, 2)).astype(np.int32)
        self.track = TrackInfo(channels=2, bits_per_sample=16, sample_rate=48000,
                               total_frames=500)

    def test_sample_count(self):
        """Test that the observed count equals the number of observe() calls."""
        for count in (0, 1, 17, 300):
            with self.subTest(count=count):
                report = analyze([5] * count)
                self.assertEqual(report.observed_sample_count, count)

    def test_deep_mode(self):
        """Test distinct value tracking is only done in deep mode."""
        samples = [1, 2, 2, 3, 3, 3, -4]
        self.assertIsNone(analyze(samples).distinct_count)
        self.assertEqual(analyze(samples, deep=True).distinct_count, 4)

    def test_idempotence(self):
        """Test that two passes over the same samples agree."""
        flat = self.samples.reshape(-1).tolist()
        first = analyze(flat, channels=2, deep=True, total_frames=500)
        second = analyze(flat, channels=2, deep=True, total_frames=500)
        self.assertEqual(first, second)

    def test_batch_matches_scalar(self):
        """Test that observe_batch() equals observe() per element."""
        scalar = SignificanceAnalyzer(self.track, deep=True)
        for sample in self.samples.reshape(-1):
            scalar.observe(sample)

        batched = SignificanceAnalyzer(self.track, deep=True)
        for start in range(0, len(self.samples), 64):
            batched.observe_batch(self.samples[start:start + 64])

        self.assertEqual(scalar.finalize(), batched.finalize())

    def test_expected_count(self):
        """Test the expected vs. observed cross-check."""
        analyzer = SignificanceAnalyzer(self.track)
        analyzer.observe_batch(self.samples)
        report = analyzer.finalize()
        self.assertEqual(report.expected_sample_count, 1000)
        self.assertEqual(report.observed_sample_count, 1000)
        self.assertFalse(report.sample_count_mismatch)

    def test_count_mismatch_is_diagnostic(self):
        """Test that a short stream logs a warning instead of failing."""
        analyzer = SignificanceAnalyzer(self.track)
        analyzer.observe_batch(self.samples[:100])
        with self.assertLogs('bitdepth_engine.core.significance_analyzer', level='WARNING'):
            report = analyzer.finalize()
        self.assertTrue(report.sample_count_mismatch)

    def test_finalize_once(self):
        """Test that the analyzer cannot be reused after finalize()."""
        analyzer = SignificanceAnalyzer(self.track)
        analyzer.observe(1)
        analyzer.finalize()
        with self.assertRaises(RuntimeError):
            analyzer.finalize()
        with self.assertRaises(RuntimeError):
            analyzer.observe(1)

    def test_report_dict(self):
        """Test the structured report form."""
        report = analyze([0, 1], deep=True, total_frames=2)
        data = report.to_dict()
        self.assertEqual(data["observed_range"], [0, 1])
        self.assertEqual(data["possible_range"], [-32768, 32767])
        self.assertEqual(data["distinct_count"], 2)
        self.assertEqual(data["expected_sample_count"], 2)
        self.assertEqual(data["stored_bits"], 16)


if __name__ == '__main__':
    unittest.main(verbosity=2)
