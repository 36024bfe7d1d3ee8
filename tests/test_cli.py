import json
from pathlib import Path

from typer.testing import CliRunner

from lineprof.cli import app

runner = CliRunner()

SCRIPT = """\
import json
import sys


def square_all(values):
    out = []
    for value in values:
        out.append(value * value)
    return out


result = square_all(range(50))
if len(sys.argv) > 1:
    with open(sys.argv[1], "w") as handle:
        json.dump(sys.argv[1:], handle)
"""


def write_script(directory: Path, body: str = SCRIPT) -> Path:
    script = directory / "job.py"
    script.write_text(body, encoding="utf-8")
    return script


def test_run_writes_html_report(tmp_path):
    script = write_script(tmp_path)
    output = tmp_path / "report.html"

    result = runner.invoke(app, ["run", str(script), "--output", str(output), "--max-rows", "200"])

    assert result.exit_code == 0, result.output
    assert "Profile written to" in result.stdout
    html = output.read_text(encoding="utf-8")
    assert "job.py:8" in html
    assert "out.append(value * value)" in html


def test_run_passes_arguments_to_the_script(tmp_path):
    script = write_script(tmp_path)
    args_file = tmp_path / "args.json"

    result = runner.invoke(
        app,
        ["run", "-o", str(tmp_path / "r.html"), str(script), str(args_file), "--verbose"],
    )

    assert result.exit_code == 0, result.output
    assert json.loads(args_file.read_text()) == [str(args_file), "--verbose"]


def test_run_prints_text_report(tmp_path):
    script = write_script(tmp_path)

    result = runner.invoke(app, ["run", str(script), "--format", "text", "--max-rows", "3"])

    assert result.exit_code == 0, result.output
    lines = result.stdout.splitlines()
    assert lines[0].startswith("file:line")
    rows = lines[2 : lines.index("")]
    assert 1 <= len(rows) <= 3
    assert lines[-1].startswith("Session time:")


def test_run_applies_ignore_options(tmp_path):
    script = write_script(tmp_path)

    result = runner.invoke(
        app,
        ["run", str(script), "-f", "text", "--ignore-line", r"out\.append"],
    )

    assert result.exit_code == 0, result.output
    assert "job.py:8" not in result.stdout

    result = runner.invoke(app, ["run", str(script), "-f", "text", "--ignore-file", "job.py"])

    assert result.exit_code == 0, result.output
    assert "job.py:" not in result.stdout


def test_run_propagates_script_exit_code(tmp_path):
    script = write_script(tmp_path, "import sys\nvalue = 1\nsys.exit(3)\n")
    output = tmp_path / "report.html"

    result = runner.invoke(app, ["run", str(script), "-o", str(output)])

    assert result.exit_code == 3
    assert output.exists()


def test_run_rejects_missing_script(tmp_path):
    result = runner.invoke(app, ["run", str(tmp_path / "nope.py")])

    assert result.exit_code == 1


def test_run_fails_when_report_cannot_be_written(tmp_path):
    script = write_script(tmp_path)

    result = runner.invoke(app, ["run", str(script), "-o", str(tmp_path / "no" / "r.html")])

    assert result.exit_code == 1
