import io
from pathlib import Path

from MarkdownLite import cli


def test_parse_files(tmp_path: Path):
    source = tmp_path / "in.md"
    source.write_text("# Hi\n\n- a\n- b\n", encoding="utf-8")
    target = tmp_path / "out.html"
    assert cli.main(["parse", "-i", str(source), "-o", str(target)]) == 0
    assert target.read_text(encoding="utf-8") == "<h1>Hi</h1>\n<ul>\n<li>a</li>\n<li>b</li>\n</ul>\n"


def test_parse_stdin_to_stdout(monkeypatch, capsys):
    stdin = io.TextIOWrapper(io.BytesIO("Some **caf\u00e9** text\n".encode("utf-8")), encoding="latin-1")
    monkeypatch.setattr("sys.stdin", stdin)
    assert cli.main(["parse"]) == 0
    assert capsys.readouterr().out == "<p>Some <strong>caf\u00e9</strong> text</p>\n"


def test_parse_with_config(tmp_path: Path):
    source = tmp_path / "in.md"
    source.write_text("---\n", encoding="utf-8")
    target = tmp_path / "out.html"
    config = tmp_path / "markdownlite.yaml"
    config.write_text(f"input: {source}\noutput: {target}\n", encoding="utf-8")
    assert cli.main(["parse", "--config", str(config)]) == 0
    assert target.read_text(encoding="utf-8") == "<hr/>\n"


def test_parse_failure_writes_nothing(tmp_path: Path, caplog):
    source = tmp_path / "bad.md"
    source.write_text("```\nunterminated\n", encoding="utf-8")
    target = tmp_path / "out.html"
    assert cli.main(["parse", "-i", str(source), "-o", str(target)]) == 1
    assert not target.exists()
    assert "Markdown parse error" in caplog.text


def test_parse_missing_input(tmp_path: Path, caplog):
    assert cli.main(["parse", "-i", str(tmp_path / "missing.md")]) == 1
    assert "Error while trying to open" in caplog.text


def test_help_and_credits(capsys):
    assert cli.main(["help"]) == 0
    assert "usage: markdownlite" in capsys.readouterr().out
    assert cli.main([]) == 0
    assert "parse" in capsys.readouterr().out
    assert cli.main(["credits"]) == 0
    assert "MarkdownLite" in capsys.readouterr().out


def test_parse_with_unreadable_config(tmp_path: Path, caplog):
    config = tmp_path / "markdownlite.yaml"
    config.write_bytes(b"output: \xff\xfe\n")
    assert cli.main(["parse", "--config", str(config)]) == 1
    assert "Cannot read config file" in caplog.text
