from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

from dotenv import load_dotenv

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from src.collector.api_client import RestCountriesClient  # noqa: E402
from src.jobs.generate_countries import GenerateSummary, run_generate_countries  # noqa: E402
from src.utils.config import load_generator_config  # noqa: E402
from src.utils.logging import get_logger, setup_logging  # noqa: E402

logger = get_logger(component="generate_countries")


def _print_received(records: int) -> None:
    print(f"✅ Data received successfully! ({records} records)")
    print("🔄 Processing countries...")


def _print_statistics(summary: GenerateSummary) -> None:
    print()
    print("📈 Statistics:")
    for continent, count in summary.continent_stats:
        print(f"   {continent}: {count} countries")


async def generate(*, config_path: str | None, output: str | None, top: int | None) -> GenerateSummary:
    cfg = load_generator_config(config_path)
    client = RestCountriesClient(
        base_url=cfg.base_url,
        endpoint=cfg.endpoint,
        timeout_seconds=cfg.timeout_seconds,
    )
    try:
        print("📡 Fetching data from REST Countries API...")
        return await run_generate_countries(
            client=client,
            output_path=output or cfg.output_file,
            fields=cfg.fields,
            stats_top=top if top is not None else cfg.stats_top,
            on_fetched=_print_received,
        )
    finally:
        await client.aclose()


def _wait_for_enter() -> None:
    try:
        input("\nPress Enter to exit...")
    except EOFError:
        pass


async def _amain(argv: list[str] | None = None) -> int:
    load_dotenv()
    setup_logging()

    parser = argparse.ArgumentParser(description="Generate countries.json from REST Countries")
    parser.add_argument("--config", type=str, default=None, help="Path to generator YAML (default: config/generator.yaml)")
    parser.add_argument("--output", type=str, default=None, help="Output file (default: generator.output_file)")
    parser.add_argument("--top", type=int, default=None, help="Continents shown in the statistics")
    parser.add_argument("--pause", action="store_true", help="Wait for Enter before exiting")
    args = parser.parse_args(argv)

    print("🌍 Country JSON Generator")
    print("========================")

    rc = 0
    try:
        summary = await generate(config_path=args.config, output=args.output, top=args.top)
    except Exception as e:
        logger.error("generate_countries_failed", error=str(e), error_type=type(e).__name__)
        print(f"❌ Error: {e}")
        rc = 1
    else:
        print(f"✨ Processed {summary.written} countries ({summary.skipped} skipped)")
        print(f"💾 Saved to {summary.output_path}")
        print(f"📊 Total countries: {summary.written}")
        _print_statistics(summary)
        print()
        print("🎉 Done!")

    if args.pause:
        _wait_for_enter()
    return rc


if __name__ == "__main__":
    raise SystemExit(asyncio.run(_amain()))
