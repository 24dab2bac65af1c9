"""Input and output helpers for the generator command line."""

from __future__ import annotations

import codecs
import json
import sys
from pathlib import Path
from typing import Any, BinaryIO, Optional

from .errors import EmptyInputError


def read_bounded_input(
    path: Optional[Path] = None,
    *,
    max_bytes: int,
    stream: Optional[BinaryIO] = None,
) -> str:
    """
    Read at most ``max_bytes`` from ``path`` (or ``stream``/stdin) as UTF-8 text.

    Invalid bytes inside the text become U+FFFD so neighbouring words stay
    apart. Only a multi-byte character cut by the limit is dropped. Raises
    ``EmptyInputError`` when nothing was read.
    """

    if path is not None:
        with path.open("rb") as fh:
            raw = fh.read(max_bytes)
    else:
        source = stream if stream is not None else sys.stdin.buffer
        raw = source.read(max_bytes)

    if not raw:
        raise EmptyInputError(f"No input bytes read from {path or 'stdin'}")
    decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
    return decoder.decode(raw, final=False)


def write_json(path: Path, payload: Any) -> None:
    """
    Write ``payload`` to ``path`` as UTF-8 JSON, ensuring parent directories exist.
    """

    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as fh:
        json.dump(payload, fh, indent=2, ensure_ascii=False)
        fh.write("\n")


__all__ = ["read_bounded_input", "write_json"]
