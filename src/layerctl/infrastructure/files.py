"""File I/O for graph input and layer reports.

Both helpers let :class:`OSError` propagate; the service layer maps it
to ``INPUT_ACCESS`` or ``OUTPUT_ACCESS``.
"""

from __future__ import annotations

import codecs
from pathlib import Path

_BOM = "\ufeff"


def read_graph_lines(path: Path) -> list[str]:
    """Read *path* as UTF-8 text and return its lines without terminators.

    A leading byte-order mark is dropped.
    """
    with path.open(encoding="utf-8-sig") as fh:
        return [line.rstrip("\n") for line in fh]


def write_report(path: Path, text: str, *, encoding: str = "utf-8", bom: bool = False) -> None:
    """Write a rendered report, replacing any existing file.

    The text is encoded before the file is opened, so an unencodable
    report never truncates the previous file. *bom* only applies to UTF-8;
    UTF-16 and UTF-32 codecs write their own byte-order mark.

    Raises:
        LookupError: If *encoding* is unknown.
    """
    prefix = _BOM if bom and codecs.lookup(encoding).name == "utf-8" else ""
    payload = (prefix + text).encode(encoding)
    path.write_bytes(payload)
