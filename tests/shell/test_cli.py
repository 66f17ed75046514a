# tests/shell/test_cli.py
import json

import pytest

from folio_shell.app import main

COMPLETE_HTML = """<!DOCTYPE html>
<html lang="en">
<head><meta charset="UTF-8"><title>Jane Doe - Portfolio</title><style>body { margin: 0; }</style></head>
<body><main><h1>Jane Doe</h1><p>I design calm products.</p></main></body>
</html>"""


@pytest.fixture
def files(tmp_path):
    artifact = tmp_path / "jane.html"
    artifact.write_text(COMPLETE_HTML, encoding="utf-8")
    portfolio = tmp_path / "portfolio.json"
    portfolio.write_text(json.dumps({"personalInfo": {"name": "Jane Doe"}}), encoding="utf-8")
    return tmp_path, artifact, portfolio


def test_complete_prints_json(files, capsys):
    """Test of 'complete' een JSON-rapport afdrukt."""
    _, artifact, _ = files
    code = main(["complete", str(artifact)])
    output = json.loads(capsys.readouterr().out)

    assert code == 0
    assert output["is_complete"] is True
    assert output["estimated_completion_percent"] >= 75


def test_complete_flags_truncation(files, capsys):
    tmp_path, _, _ = files
    partial = tmp_path / "partial.html"
    partial.write_text(COMPLETE_HTML[:120], encoding="utf-8")

    code = main(["complete", str(partial)])
    output = json.loads(capsys.readouterr().out)

    assert code == 2
    assert output["is_complete"] is False


def test_merge_writes_output(files, capsys):
    tmp_path, _, _ = files
    partial = tmp_path / "partial.html"
    partial.write_text("<html><body><p>Hello", encoding="utf-8")
    continuation = tmp_path / "continuation.html"
    continuation.write_text("```html\n<body><b>world</b></p></body></html>\n```", encoding="utf-8")
    merged_file = tmp_path / "merged" / "jane.html"

    code = main(["merge", str(partial), str(continuation), "-o", str(merged_file)])

    assert code == 0
    assert merged_file.read_text(encoding="utf-8") == "<html><body><p>Hello<b>world</b></p></body></html>"


def test_validate_exports_and_fixes(files, capsys):
    tmp_path, artifact, portfolio = files
    export = tmp_path / "report.csv"
    fixed_dir = tmp_path / "fixed"

    code = main(["validate", str(artifact), "--portfolio", str(portfolio), "--export", str(export), "--fix", str(fixed_dir)])
    out = capsys.readouterr().out

    assert code == 0
    assert "jane.html" in out
    assert export.exists()


def test_validate_json_output(files, capsys):
    _, artifact, portfolio = files
    code = main(["validate", str(artifact), "-p", str(portfolio), "--json"])
    output = json.loads(capsys.readouterr().out)

    assert code == 0
    report = output[str(artifact)]
    assert 0 <= report["overall"]["score"] <= 100


def test_unknown_command(capsys):
    assert main(["dance"]) == 1
    assert "Unknown command" in capsys.readouterr().out


def test_missing_portfolio_file(files, capsys):
    tmp_path, artifact, _ = files
    code = main(["validate", str(artifact), "--portfolio", str(tmp_path / "nope.json")])
    assert code == 1
