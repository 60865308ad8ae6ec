from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import os
import yaml


@dataclass(frozen=True)
class GeneratorConfig:
    base_url: str
    endpoint: str
    fields: tuple[str, ...]
    output_file: str
    # None -> httpx default timeout
    timeout_seconds: float | None = None
    stats_top: int = 10


def _project_root() -> Path:
    # Resolve from this file: .../src/utils/config.py -> project root is 3 parents up.
    return Path(__file__).resolve().parents[2]


def load_generator_config(path: str | Path | None = None) -> GeneratorConfig:
    """
    Load generator config from YAML.

    Precedence:
    - explicit `path`
    - env `COUNTRIES_GENERATOR_CONFIG`
    - project default `config/generator.yaml`
    """
    cfg_path = Path(path or os.getenv("COUNTRIES_GENERATOR_CONFIG") or (_project_root() / "config" / "generator.yaml"))
    cfg = load_yaml(cfg_path)
    gen = cfg.get("generator") or {}

    base_url = gen.get("base_url")
    endpoint = gen.get("endpoint")
    fields = gen.get("fields")
    output_file = gen.get("output_file")
    timeout_seconds = gen.get("timeout_seconds")
    stats_top = gen.get("stats_top")

    missing: list[str] = []
    if not base_url:
        missing.append("generator.base_url")
    if not endpoint:
        missing.append("generator.endpoint")
    if not fields:
        missing.append("generator.fields")
    if not output_file:
        missing.append("generator.output_file")
    if missing:
        raise ValueError(f"Missing {', '.join(missing)} in {cfg_path}")

    if not isinstance(fields, list):
        raise ValueError(f"generator.fields must be a list in {cfg_path}")

    return GeneratorConfig(
        base_url=str(base_url),
        endpoint=str(endpoint),
        fields=tuple(str(f) for f in fields),
        output_file=str(output_file),
        timeout_seconds=float(timeout_seconds) if timeout_seconds is not None else None,
        stats_top=int(stats_top) if stats_top is not None else 10,
    )


def load_yaml(path: str | Path) -> dict[str, Any]:
    p = Path(path)
    return yaml.safe_load(p.read_text(encoding="utf-8")) or {}
