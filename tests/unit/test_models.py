"""
Unit tests for domain models, results and reports.
"""

from __future__ import annotations

import pytest

from conftest import problem

from acmecheck.domain.exceptions import CheckerError
from acmecheck.domain.models import Problem, Severity, ValidationMethod, is_valid_method
from acmecheck.domain.report import ScanReport, ScanSummary
from acmecheck.domain.result import CheckResult, Outcome


class TestIsValidMethod:
    """Tests for the validation method set."""

    @pytest.mark.parametrize("method", ["http-01", "dns-01", "tls-sni-01", "tls-sni-02"])
    def test_known_methods(self, method: str) -> None:
        assert is_valid_method(method) is True

    @pytest.mark.parametrize(
        "method",
        ["http-02", "", "HTTP-01", "http-01 ", "tls-alpn-01", "dns", "dns-01\n"],
    )
    def test_unknown_strings(self, method: str) -> None:
        assert is_valid_method(method) is False

    @pytest.mark.parametrize("value", [None, 1, b"http-01", ["http-01"]])
    def test_non_strings(self, value: object) -> None:
        assert is_valid_method(value) is False

    def test_enum_members(self) -> None:
        assert all(is_valid_method(m) for m in ValidationMethod)
        assert str(ValidationMethod.DNS_01) == "dns-01"


class TestSeverity:
    """Tests for the Severity enum."""

    def test_severity_ordering(self) -> None:
        """Severities should be ordered DEBUG < WARNING < ERROR < FATAL."""
        assert Severity.DEBUG < Severity.WARNING
        assert Severity.WARNING < Severity.ERROR
        assert Severity.ERROR < Severity.FATAL

    def test_severity_comparison_with_other_types(self) -> None:
        result = Severity.FATAL.__lt__("Fatal")
        assert result is NotImplemented


class TestProblem:
    """Tests for the Problem model."""

    def test_problem_is_frozen(self) -> None:
        p = problem("Frozen")
        with pytest.raises(Exception):  # Pydantic frozen validation error
            p.name = "Changed"  # type: ignore

    def test_name_pattern(self) -> None:
        Problem(name="CAAIssuanceNotAllowed", explanation="x", severity=Severity.FATAL)
        with pytest.raises(Exception):
            Problem(name="not-camel", explanation="x", severity=Severity.FATAL)

    def test_blocking(self) -> None:
        assert problem("A", Severity.FATAL).blocking
        assert problem("A", Severity.ERROR).blocking
        assert not problem("A", Severity.WARNING).blocking


class TestCheckResult:
    """Tests for the three-way checker result."""

    def test_success(self) -> None:
        result = CheckResult.success([problem("A")])

        assert result.outcome is Outcome.SUCCESS
        assert result.has_findings
        assert not result.clean
        assert not result.failed

    def test_not_applicable_is_not_an_error(self) -> None:
        result = CheckResult.not_applicable()

        assert result.outcome is Outcome.NOT_APPLICABLE
        assert result.error is None
        assert result.clean

    def test_failure_is_never_clean(self) -> None:
        result = CheckResult.failure(CheckerError("down"))

        assert result.failed
        assert not result.clean
        assert not result.has_findings

    def test_failure_requires_error(self) -> None:
        with pytest.raises(ValueError):
            CheckResult(outcome=Outcome.FAILURE)

    def test_success_rejects_error(self) -> None:
        with pytest.raises(ValueError):
            CheckResult(outcome=Outcome.SUCCESS, error=CheckerError("x"))

    def test_problems_are_a_tuple(self) -> None:
        result = CheckResult.success(p for p in [problem("A"), problem("B")])

        assert isinstance(result.problems, tuple)
        assert [p.name for p in result.problems] == ["A", "B"]


class TestScanReport:
    """Tests for scan reports."""

    def test_summary_counts(self) -> None:
        summary = ScanSummary.from_problems(
            [problem("A", Severity.FATAL), problem("B", Severity.WARNING), problem("C", Severity.WARNING)]
        )

        assert summary.fatal == 1
        assert summary.warning == 2
        assert summary.total == 3
        assert summary.has_blocking_problems

    def test_clean_report(self) -> None:
        report = ScanReport(domain="example.com", method="http-01")

        assert report.outcome == "clean"
        assert report.passed
        assert report.exit_code == 0

    def test_findings_report(self) -> None:
        problems = [problem("Blocked", Severity.FATAL)]
        report = ScanReport(
            domain="example.com",
            method="http-01",
            problems=problems,
            summary=ScanSummary.from_problems(problems),
        )

        assert report.outcome == "findings"
        assert not report.passed
        assert report.exit_code == 1
        assert report.problems_by_name("Blocked") == problems

    def test_warnings_only_pass(self) -> None:
        problems = [problem("Heads", Severity.WARNING)]
        report = ScanReport(
            domain="example.com",
            method="http-01",
            problems=problems,
            summary=ScanSummary.from_problems(problems),
        )

        assert report.outcome == "findings"
        assert report.passed

    def test_failed_report_is_distinct_from_clean(self) -> None:
        """Zero problems with an error is not a clean result."""
        report = ScanReport(domain="example.com", method="http-01", error="resolver down")

        assert report.outcome == "failed"
        assert not report.passed
        assert report.exit_code == 2

    def test_to_json(self) -> None:
        report = ScanReport(domain="example.com", method="dns-01", problems=[problem("A")])
        data = report.to_json()

        assert data["domain"] == "example.com"
        assert data["problems"][0]["severity"] == "Error"
