from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Sequence

from src.collector.api_client import DEFAULT_FIELDS, RestCountriesClient
from src.transforms.countries import transform_countries
from src.utils.export import continent_statistics, write_countries_file
from src.utils.logging import get_logger


logger = get_logger(component="jobs_generate_countries")


@dataclass(frozen=True)
class GenerateSummary:
    fetched: int
    written: int
    skipped: int
    output_path: Path
    continent_stats: list[tuple[str, int]]


async def run_generate_countries(
    *,
    client: RestCountriesClient,
    output_path: str | Path,
    fields: Sequence[str] = DEFAULT_FIELDS,
    stats_top: int = 10,
    on_fetched: Callable[[int], None] | None = None,
) -> GenerateSummary:
    """
    Fetch -> transform -> write countries.json.

    `on_fetched(records)` runs between the fetch and the transform.
    Anything raised before the write leaves the previous output untouched.
    """
    res = await client.fetch_all(fields)
    payload = res.data
    fetched = len(payload) if isinstance(payload, list) else 0
    logger.info("countries_fetched", status_code=res.status_code, records=fetched)
    if on_fetched is not None:
        on_fetched(fetched)

    rows = transform_countries(payload)
    written_path = write_countries_file(rows, output_path)
    logger.info("countries_written", path=str(written_path), rows=len(rows), skipped=fetched - len(rows))

    return GenerateSummary(
        fetched=fetched,
        written=len(rows),
        skipped=fetched - len(rows),
        output_path=written_path,
        continent_stats=continent_statistics(rows, top=stats_top),
    )
