"""Tests for report assembly, gating and the public API."""

import json
import threading

import pytest

from techdebt_tracker import analyze, check_thresholds
from techdebt_tracker.exceptions import InsufficientDataError, InvalidPathError, ThresholdExceeded
from techdebt_tracker.metrics.maintainability import RiskLevel
from techdebt_tracker.models import SCHEMA_VERSION, FileStatus


class TestSampleProject:
    """End-to-end over tests/fixtures/sample_project."""

    @pytest.fixture
    def report(self, sample_project):
        return analyze(str(sample_project))

    def test_file_order_and_status(self, report):
        assert [(f.path, f.status) for f in report.files] == [
            ("broken.py", FileStatus.DEGRADED),
            ("complex_module.py", FileStatus.COMPLETE),
            ("pkg/__init__.py", FileStatus.COMPLETE),
            ("pkg/service.py", FileStatus.COMPLETE),
            ("simple.py", FileStatus.COMPLETE),
        ]
        assert report.complete
        assert report.errors == ()

    def test_function_names(self, report):
        service = next(f for f in report.files if f.path == "pkg/service.py")
        assert [fn.name for fn in service.unit.functions] == [
            "Service.__init__",
            "Service.fetch",
            "Service.refresh",
            "Service.refresh.load",
        ]
        assert [fn.complexity for fn in service.unit.functions] == [1, 2, 2, 1]

    def test_summary(self, report):
        s = report.summary
        assert s.function_count == 9
        assert s.total_complexity == 23
        assert s.max_complexity == 11
        assert s.risk is RiskLevel.MODERATE
        assert s.files_analyzed == 5
        assert s.files_degraded == 1
        assert s.file_with_max_complexity == "complex_module.py"
        assert s.max_file_complexity == 11
        assert s.distribution == {"simple": 8, "moderate": 0, "complex": 1}
        assert s.mean_complexity == pytest.approx(23 / 9)

    def test_top_offender(self, report):
        top = report.top_offenders[0]
        assert (top.path, top.name, top.complexity) == ("complex_module.py", "classify", 11)
        assert len(report.top_offenders) == 9
        assert report.top_offenders[1].complexity == 2

    def test_degraded_file_lists_issue(self, report):
        broken = report.files[0]
        assert [fn.name for fn in broken.unit.functions] == ["first", "last"]
        assert len(broken.unit.issues) == 1

    def test_to_dict_schema(self, report):
        data = json.loads(json.dumps(report.to_dict()))
        assert data["schema_version"] == SCHEMA_VERSION
        assert list(data) == [
            "schema_version",
            "root",
            "complete",
            "summary",
            "top_offenders",
            "files",
            "errors",
            "skipped",
            "threshold",
        ]
        assert data["top_offenders"][0]["function"] == "classify"
        assert set(data["top_offenders"][0]["halstead"]) >= {"n1", "n2", "N1", "N2", "volume"}
        assert data["files"][0]["parse_issues"][0]["end_line"] == 10
        assert data["threshold"] == {"max_complexity": None, "exceeded": False, "violations": []}

    def test_top_n_override(self, sample_project):
        report = analyze(str(sample_project), top_n=2)
        assert len(report.top_offenders) == 2


class TestThresholds:
    def test_under_budget_passes(self, sample_project):
        report = analyze(str(sample_project), max_complexity=11)
        assert not report.threshold.exceeded
        check_thresholds(report)

    def test_over_budget_raises(self, sample_project):
        report = analyze(str(sample_project), max_complexity=10)
        assert report.threshold.exceeded
        with pytest.raises(ThresholdExceeded) as exc_info:
            check_thresholds(report)
        err = exc_info.value
        assert err.worst == 11
        assert err.max_complexity == 10
        assert err.violations == [("complex_module.py", "classify", 4, 11)]


class TestFatalConditions:
    def test_missing_path(self, tmp_path):
        with pytest.raises(InvalidPathError):
            analyze(str(tmp_path / "missing"))

    def test_no_python_files(self, make_project):
        root = make_project({"README.txt": "hello\n"})
        with pytest.raises(InsufficientDataError):
            analyze(str(root))

    def test_every_file_failed(self, make_project):
        root = make_project({"a.py": "def (:\n", "b.py": "class :\n"})
        with pytest.raises(InsufficientDataError, match="all 2 files"):
            analyze(str(root))

    def test_files_with_only_headers_surviving_are_fatal(self, make_project):
        broken = '"""Module doc."""\ndef bad(:\n    pass\n'
        root = make_project({"a.py": broken, "b.py": "# header\n" + broken})
        with pytest.raises(InsufficientDataError, match="all 2 files"):
            analyze(str(root))

    def test_one_failure_is_not_fatal(self, make_project):
        root = make_project({"a.py": "def (:\n", "b.py": "def ok():\n    return 1\n"})
        report = analyze(str(root))
        assert report.summary.files_failed == 1
        assert [e.path for e in report.errors] == ["a.py"]
        assert report.errors[0].kind == "parse"
        assert [fn.name for fn in report.top_offenders] == ["ok"]


class TestIncompleteRuns:
    def test_cancelled_run_is_marked(self, sample_project):
        event = threading.Event()
        event.set()
        report = analyze(str(sample_project), cancel_event=event)
        assert not report.complete
        assert len(report.skipped) == 5
        assert report.summary.files_skipped == 5
        assert report.to_dict()["complete"] is False
