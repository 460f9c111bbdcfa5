import json
from pathlib import Path

import pytest

import report_html
from metricdiff.config import default_config
from metricdiff.differ import diff_metrics
from metricdiff.reporting.reporting import assemble_report
from utility import metric


# Builds a small WARN report with one missing, one extra and one unregistered name.
def _report(theme: str = "light"):
    cfg = default_config()
    cfg["title"] = "collector smoke"
    cfg["report"]["theme"] = theme
    expected = [metric("cpu.usage", "42", tags={"pod": ""}), metric("uptime")]
    actual = [metric("cpu.usage", "43", tags={"pod": "a"}), metric("uptime", "1"), metric("stray")]
    return assemble_report(diff_metrics(expected, actual), config=cfg, expected_names=["cpu.usage", "uptime"])


# render_report: page carries title, state, KPIs and both metric tables.
def test_render_report_contents():
    html = report_html.render_report(_report())
    assert "<title>collector smoke</title>" in html
    assert 'class="state warn"' in html
    assert "Missing (expected, not reported) (1)" in html
    assert "Extra (reported, not expected) (2)" in html
    assert "pod=*" in html
    assert "pod=a" in html
    assert "Names never expected (1)" in html
    assert 'data-theme="light"' in html


# render_report: empty lists render a placeholder and MATCH text.
def test_render_report_match_and_dark_theme():
    cfg = default_config()
    cfg["report"]["theme"] = "dark"
    rep = assemble_report(diff_metrics([metric("x")], [metric("x", "1")]), config=cfg)
    html = report_html.render_report(rep)
    assert 'class="state match"' in html
    assert "None." in html
    assert 'data-theme="dark"' in html


# render_report: unknown states and themes degrade to WARN / light.
def test_render_report_tolerates_bad_fields():
    html = report_html.render_report({"overall": "???", "theme": "neon", "stats": {}})
    assert 'class="state warn"' in html
    assert 'data-theme="light"' in html


# main: reads the report JSON and writes the HTML into the output directory.
def test_main_writes_html(tmp_path: Path):
    src = tmp_path / "verification.json"
    src.write_text(json.dumps(_report()), encoding="utf-8")
    out_dir = tmp_path / "results"

    rc = report_html.main(["-v", str(src), "-o", "nested/report.html", "-d", str(out_dir)])

    assert rc == 0
    out = out_dir / "report.html"
    assert out.is_file()
    assert "collector smoke" in out.read_text(encoding="utf-8")


# main: the input profile argument is mandatory.
def test_main_requires_input():
    with pytest.raises(SystemExit):
        report_html.main([])


# main: an unreadable input is logged as an error and turned into exit status 1.
def test_main_missing_input_returns_one(tmp_path: Path, caplog):
    rc = report_html.main(["-v", str(tmp_path / "absent.json"), "-d", str(tmp_path / "results")])
    assert rc == 1
    assert "Error:" in caplog.text
    assert not (tmp_path / "results").exists()


# main: a report file that is not JSON also exits with 1 instead of raising.
def test_main_bad_json_returns_one(tmp_path: Path, caplog):
    src = tmp_path / "verification.json"
    src.write_text("{not json", encoding="utf-8")
    assert report_html.main(["-v", str(src), "-d", str(tmp_path)]) == 1
    assert "Error:" in caplog.text


# main: logging is configured by main itself, so the success line is emitted.
def test_main_logs_written_path(tmp_path: Path, caplog):
    src = tmp_path / "verification.json"
    src.write_text(json.dumps(_report()), encoding="utf-8")
    assert report_html.main(["-v", str(src), "-d", str(tmp_path / "out")]) == 0
    assert "HTML report written to" in caplog.text
