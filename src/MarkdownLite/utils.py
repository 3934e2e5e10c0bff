from __future__ import annotations

import logging
import sys
from pathlib import Path

from .errors import ResourceAccessError

STREAM = "-"


def configure_logging(verbose: bool = False) -> None:
    """Configure a simple console logger on stderr."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(levelname)s %(message)s",
        stream=sys.stderr,
    )


def read_markdown(path: Path) -> str:
    try:
        handle = path.open("r", encoding="utf-8")
    except OSError as exc:
        raise ResourceAccessError(f"Error while trying to open {path}", str(path)) from exc
    with handle:
        try:
            return handle.read()
        except (OSError, UnicodeDecodeError) as exc:
            raise ResourceAccessError(f"Error while trying to read {path}", str(path)) from exc


def read_source(source: str) -> str:
    """Read the whole input, ``-`` meaning standard input."""
    if source == STREAM:
        try:
            return sys.stdin.buffer.read().decode("utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise ResourceAccessError("Error while trying to read <stdin>", STREAM) from exc
    return read_markdown(Path(source).expanduser())


def write_sink(sink: str, html: str) -> None:
    """Write the whole output, ``-`` meaning standard output."""
    if sink == STREAM:
        sys.stdout.write(html)
        sys.stdout.flush()
        return
    path = Path(sink).expanduser()
    try:
        with path.open("w", encoding="utf-8") as handle:
            handle.write(html)
    except OSError as exc:
        raise ResourceAccessError(f"Error while trying to write {path}", str(path)) from exc
