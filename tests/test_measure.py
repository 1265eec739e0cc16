"""Tests for single-file measurement."""

import textwrap

import pytest

from techdebt_tracker.config import AnalysisConfig, ThresholdConfig
from techdebt_tracker.core.measure import analyze_file, measure_source
from techdebt_tracker.exceptions import ParseError
from techdebt_tracker.metrics.maintainability import RiskLevel
from techdebt_tracker.models import FileStatus


class TestMeasureSource:
    def test_records_per_function(self, config):
        source = textwrap.dedent(
            """\
            def add(a, b):
                return a + b


            def pick(x):
                # choose
                if x:
                    return 1
                return 2
            """
        )
        unit = measure_source(source, "m.py", config)
        assert unit.status is FileStatus.COMPLETE
        assert unit.loc == 9
        assert unit.comment_lines == 1
        assert [(fn.name, fn.complexity) for fn in unit.functions] == [("add", 1), ("pick", 2)]

        add = unit.functions[0]
        assert add.path == "m.py"
        assert add.loc == 2
        assert add.halstead.n1 == 6
        assert 0.0 <= add.maintainability_index <= 100.0
        assert not add.low_confidence
        assert add.risk is RiskLevel.LOW

    def test_recovered_file_is_degraded(self, config):
        source = "def ok():\n    return 1\n\n\ndef bad(:\n    pass\n"
        unit = measure_source(source, "m.py", config)
        assert unit.status is FileStatus.DEGRADED
        assert [fn.name for fn in unit.functions] == ["ok"]
        assert len(unit.issues) == 1

    def test_risk_uses_configured_thresholds(self):
        source = "def f(a, b):\n    if a and b:\n        return 1\n"
        strict = AnalysisConfig(thresholds=ThresholdConfig(moderate_complexity=1, high_complexity=2))
        assert measure_source(source, "m.py", strict).functions[0].risk is RiskLevel.HIGH

    def test_unparseable_raises(self, config):
        with pytest.raises(ParseError):
            measure_source("def (:\n", "bad.py", config)

    def test_header_comment_does_not_rescue_broken_file(self, config):
        with pytest.raises(ParseError):
            measure_source("# Copyright header\ndef bad(:\n    pass\n", "bad.py", config)

    def test_method_beside_broken_method_is_measured(self, config):
        method = "    def ok(self, x):\n        if x:\n            return x + 1\n        return 0\n"
        broken = "class A:\n" + method + "\n    def bad(:\n        pass\n"
        clean = "class A:\n" + method

        recovered = measure_source(broken, "a.py", config)
        expected = measure_source(clean, "a.py", config).functions[0]

        assert recovered.status is FileStatus.DEGRADED
        assert len(recovered.issues) == 1
        (ok,) = recovered.functions
        assert ok.name == "A.ok"
        assert (ok.line, ok.loc, ok.complexity) == (2, 4, 2)
        assert ok.halstead == expected.halstead
        assert ok.maintainability_index == pytest.approx(expected.maintainability_index)


class TestAnalyzeFile:
    def test_parse_failure_becomes_failed_unit(self, make_project, config):
        root = make_project({"bad.py": "def (:\n    pass\n"})
        unit = analyze_file(root, "bad.py", config)
        assert unit.status is FileStatus.FAILED
        assert unit.error.kind == "parse"
        assert unit.error.line == 1
        assert unit.functions == ()

    def test_docstring_and_broken_def_is_failed(self, make_project, config):
        root = make_project({"bad.py": '"""Module doc."""\ndef bad(:\n    pass\n'})
        unit = analyze_file(root, "bad.py", config)
        assert unit.status is FileStatus.FAILED
        assert unit.error.kind == "parse"
        assert unit.error.line == 2

    def test_missing_file_is_io_error(self, tmp_path, config):
        unit = analyze_file(tmp_path, "gone.py", config)
        assert unit.status is FileStatus.FAILED
        assert unit.error.kind == "io"

    def test_undecodable_file(self, tmp_path, config):
        (tmp_path / "latin.py").write_bytes(b"x = '\xff\xfe'\n")
        unit = analyze_file(tmp_path, "latin.py", config)
        assert unit.status is FileStatus.FAILED
        assert unit.error.kind == "parse"

    def test_encoding_cookie_honoured(self, tmp_path, config):
        (tmp_path / "latin.py").write_bytes(
            b"# -*- coding: latin-1 -*-\ndef f():\n    return '\xe9'\n"
        )
        unit = analyze_file(tmp_path, "latin.py", config)
        assert unit.status is FileStatus.COMPLETE
        assert unit.functions[0].name == "f"

    def test_crlf_line_endings(self, tmp_path, config):
        (tmp_path / "win.py").write_bytes(b"def f(x):\r\n    if x:\r\n        return 1\r\n")
        unit = analyze_file(tmp_path, "win.py", config)
        assert unit.functions[0].complexity == 2
        assert unit.loc == 3
