#!/usr/bin/env python3
"""
Test Runner for Bit Depth Engine

Runs every test suite, or a single one, with a per-suite summary.
"""

import unittest
import sys
import time
from pathlib import Path
from io import StringIO

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

# Import test modules
from tests.test_bit_patterns import TestScalarMetrics, TestVectorizedMetrics, TestTrackInfo
from tests.test_significance_analysis import TestSignificantBits, TestAnalyzerBehaviour
from tests.test_noise_injection import (
    TestNoisyTransform, TestRandomizer, TestNoiseInjector, TestBatchInvariance, TestDrawConsistency
)
from tests.test_audio_io import (
    TestSoundFileSource, TestSoundFileSink, TestPipeline, TestPipelineAbort, TestCommandLine,
    TestReportFormatter
)

SUITES = {
    'scalar': (TestScalarMetrics, "Scalar Bit Metrics"),
    'vectorized': (TestVectorizedMetrics, "Vectorized Bit Metrics"),
    'track': (TestTrackInfo, "Track Metadata"),
    'significance': (TestSignificantBits, "Significant Bit Edge Cases"),
    'analyzer': (TestAnalyzerBehaviour, "Analyzer Behaviour"),
    'noisy': (TestNoisyTransform, "Noise Transform"),
    'randomizer': (TestRandomizer, "Randomizers"),
    'injector': (TestNoiseInjector, "Noise Injector"),
    'batching': (TestBatchInvariance, "Batch Invariance"),
    'draws': (TestDrawConsistency, "Draw Consistency"),
    'source': (TestSoundFileSource, "Sound File Decoding"),
    'sink': (TestSoundFileSink, "Noise Variant Export"),
    'pipeline': (TestPipeline, "Pipeline"),
    'abort': (TestPipelineAbort, "Pipeline Abort"),
    'cli': (TestCommandLine, "Command Line"),
    'report': (TestReportFormatter, "Report Formatting"),
}


class TestRunner:
    """Custom test runner with per-suite reporting."""

    def __init__(self, verbose=False):
        """Initialize test runner."""
        self.verbose = verbose
        self.results = {
            'total_tests': 0,
            'passed': 0,
            'failed': 0,
            'errors': 0,
            'execution_time': 0.0,
            'test_results': {}
        }

    def run_test_suite(self, test_suite_class, suite_name):
        """Run a specific test suite and collect results."""
        print(f"\n{'='*60}")
        print(f"Running {suite_name}")
        print(f"{'='*60}")

        suite = unittest.TestLoader().loadTestsFromTestCase(test_suite_class)

        stream = StringIO()
        runner = unittest.TextTestRunner(stream=stream, verbosity=2, buffer=True)

        start_time = time.time()
        result = runner.run(suite)
        execution_time = time.time() - start_time

        passed = result.testsRun - len(result.failures) - len(result.errors)
        self.results['total_tests'] += result.testsRun
        self.results['passed'] += passed
        self.results['failed'] += len(result.failures)
        self.results['errors'] += len(result.errors)
        self.results['execution_time'] += execution_time
        self.results['test_results'][suite_name] = {
            'tests_run': result.testsRun,
            'failures': len(result.failures),
            'errors': len(result.errors),
            'execution_time': execution_time
        }

        print(f"  Tests Run: {result.testsRun}")
        print(f"  Passed: {passed}")
        print(f"  Failed: {len(result.failures)}")
        print(f"  Errors: {len(result.errors)}")
        print(f"  Execution Time: {execution_time:.2f}s")

        for label, problems in (("FAILURES", result.failures), ("ERRORS", result.errors)):
            if problems:
                print(f"\n  {label}:")
                for test, traceback in problems:
                    print(f"    - {test}: {traceback.splitlines()[-1]}")

        if self.verbose:
            print(stream.getvalue())

        return result.wasSuccessful()

    def run_all_tests(self):
        """Run all test suites."""
        print("Bit Depth Engine - Test Suite")
        print(f"Python version: {sys.version}")

        overall_success = True
        for test_class, suite_name in SUITES.values():
            if not self.run_test_suite(test_class, suite_name):
                overall_success = False

        print(f"\n{'='*60}")
        print("FINAL TEST REPORT")
        print(f"{'='*60}")
        print(f"  Total Tests: {self.results['total_tests']}")
        print(f"  Passed: {self.results['passed']}")
        print(f"  Failed: {self.results['failed']}")
        print(f"  Errors: {self.results['errors']}")
        print(f"  Total Execution Time: {self.results['execution_time']:.2f}s")
        print("  ALL TESTS PASSED" if overall_success else "  SOME TESTS FAILED")

        return overall_success


def main():
    """Main test runner function."""
    import argparse
    parser = argparse.ArgumentParser(description='Bit Depth Engine Test Suite')
    parser.add_argument('--suite', choices=sorted(SUITES),
                        help='Run specific test suite only')
    parser.add_argument('--verbose', '-v', action='store_true',
                        help='Verbose output')

    args = parser.parse_args()
    runner = TestRunner(verbose=args.verbose)

    if args.suite:
        test_class, suite_name = SUITES[args.suite]
        success = runner.run_test_suite(test_class, suite_name)
    else:
        success = runner.run_all_tests()
    sys.exit(0 if success else 1)


if __name__ == '__main__':
    main()
