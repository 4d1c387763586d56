"""Human-readable rendering of significance reports."""

from typing import List, Optional

from ..core.significance_analyzer import SignificanceReport


def _count(value: Optional[int]) -> str:
    return "unknown" if value is None else f"{value:,}"


def format_report(report: SignificanceReport) -> List[str]:
    """
    Render a report as "label: value" lines with thousands separators.

    Args:
        report: Finalized analyzer report

    Returns:
        List[str]: One line per statistic
    """
    low, high = report.possible_range
    observed_low, observed_high = report.observed_range
    lines = [
        f"channels: {report.channels}",
        f"stored bits: {report.stored_bits}",
        f"significant: {report.significant_bits}",
        f"significant (two's complement): {report.signed_significant_bits}",
        f"actual bits: {report.actual_bits}",
        f"trailing 0s: {report.trailing_zero_run}",
        f"trailing 1s: {report.trailing_one_run}",
        f"expected samples: {_count(report.expected_sample_count)}",
        f"streamed samples: {_count(report.observed_sample_count)}",
    ]
    if report.distinct_count is not None:
        lines.append(f"distinct samples: {_count(report.distinct_count)}")
    lines.append(f"possible sample range: {low:,} … {high:,}")
    lines.append(f"streamed sample range: {observed_low:,} … {observed_high:,}")
    return lines
