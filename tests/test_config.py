import textwrap
from pathlib import Path

import pytest

from MarkdownLite.config import CliConfig, load_config, merge_overrides, parse_config
from MarkdownLite.errors import ConfigError


def test_parse_config_values():
    config = parse_config(
        textwrap.dedent(
            """
            input: notes.md
            verbose: true
            """
        )
    )
    assert config == CliConfig(input="notes.md", output="-", verbose=True)


def test_empty_config_gives_defaults():
    assert parse_config("") == CliConfig()


@pytest.mark.parametrize(
    "text",
    [
        "- a\n- b\n",
        "colour: red\n",
        "input: 5\n",
        "verbose: 3\n",
        "input: [unclosed\n",
    ],
)
def test_invalid_config(text):
    with pytest.raises(ConfigError):
        parse_config(text)


def test_load_config(tmp_path: Path):
    path = tmp_path / "markdownlite.yaml"
    path.write_text("output: out.html\n", encoding="utf-8")
    assert load_config(path).output == "out.html"
    with pytest.raises(ConfigError):
        load_config(tmp_path / "absent.yaml")


def test_merge_overrides_ignores_missing_values():
    base = CliConfig(input="a.md", output="b.html", verbose=True)
    merged = merge_overrides(base, input=None, output="c.html", verbose=None)
    assert merged == CliConfig(input="a.md", output="c.html", verbose=True)


def test_load_config_not_utf8(tmp_path: Path):
    path = tmp_path / "latin1.yaml"
    path.write_bytes("input: café.md\n".encode("latin-1"))
    with pytest.raises(ConfigError):
        load_config(path)
