import logging

from conftest import StubReader
from lineprof.engine import Profiler
from lineprof.models import ProfileReport, ReportRow
from lineprof.renderers import HTMLRenderer, TextRenderer
from lineprof.services.report import ReportBuilder


def sample_report():
    return ProfileReport(
        rows=[
            ReportRow(identity="job.py:12", count=4, total_ms=12.5, average_ms=3.125, source="if a < b:"),
            ReportRow(identity="job.py:3", count=1, total_ms=0.25, average_ms=0.25, source="import os"),
        ],
        max_rows=30,
        session_ms=20.0,
    )


def test_html_report_contains_sortable_table_rows():
    html = HTMLRenderer().render(sample_report())

    assert '<table id="profileTable"' in html
    assert "<td>job.py:12</td>" in html
    assert '<td align="right">12.500</td>' in html
    assert '<td align="right">3.125</td>' in html
    assert "order: [[2, 'desc'], [1, 'desc']]" in html
    assert html.index("job.py:12") < html.index("job.py:3")


def test_html_report_escapes_source_text():
    html = HTMLRenderer().render(sample_report())

    assert "if a &lt; b:" in html
    assert "if a < b:" not in html


def test_text_report_lists_rows_and_session_time():
    text = TextRenderer().render(sample_report())
    lines = text.splitlines()

    assert lines[0].startswith("file:line")
    assert lines[2].startswith("job.py:12")
    assert "12.500" in lines[2]
    assert "Session time: 20.000 ms" in text


def test_dump_writes_the_html_report(tmp_path):
    reader = StubReader({"/src/job.py": ["x = 1", "y = x + 1"]})
    profiler = Profiler(report_builder=ReportBuilder(reader=reader))
    profiler.store.record("job.py:2", "/src/job.py", 1500)
    target = tmp_path / "profile.html"

    assert profiler.dump(str(target)) is profiler

    content = target.read_text(encoding="utf-8")
    assert "job.py:2" in content
    assert "y = x + 1" in content


def test_dump_accepts_another_renderer(tmp_path):
    profiler = Profiler()
    target = tmp_path / "profile.txt"

    profiler.dump(str(target), renderer=TextRenderer())

    assert target.read_text(encoding="utf-8").startswith("file:line")


def test_dump_reports_unwritable_output_without_raising(tmp_path, caplog):
    profiler = Profiler()
    target = tmp_path / "missing-dir" / "profile.html"

    with caplog.at_level(logging.ERROR, logger="lineprof.engine"):
        result = profiler.dump(str(target))

    assert result is None
    assert not target.exists()
    assert "Failed to open output file" in caplog.text
