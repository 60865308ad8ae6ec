from __future__ import annotations

import json
import os
import tempfile
from collections import Counter
from pathlib import Path
from typing import Any, Sequence


def encode_countries(rows: Sequence[dict[str, Any]]) -> str:
    # Emoji flags and accented names are written literally.
    return json.dumps(list(rows), indent=2, ensure_ascii=False)


def write_countries_file(rows: Sequence[dict[str, Any]], path: str | Path) -> Path:
    """
    Serialize rows and write them to `path` (UTF-8, overwrite).

    The bytes go to a temp file next to `path` which then replaces it, so a
    failed encode or write leaves any previous file as it was.
    Returns the absolute path written.
    """
    data = encode_countries(rows).encode("utf-8")
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(prefix=f".{p.name}.", suffix=".tmp", dir=p.parent)
    try:
        with os.fdopen(fd, "wb") as fh:
            fh.write(data)
        os.chmod(tmp_name, 0o644)
        os.replace(tmp_name, p)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise
    return p.resolve()


def _continent_of(row: dict[str, Any]) -> str:
    regions = row.get("regions") or {}
    continent = regions.get("continent") or {}
    return continent.get("english") or ""


def continent_statistics(rows: Sequence[dict[str, Any]], *, top: int = 10) -> list[tuple[str, int]]:
    """Countries per continent (English name), most frequent first."""
    if top <= 0:
        return []
    counts = Counter(_continent_of(r) for r in rows)
    return counts.most_common(top)
