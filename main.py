"""CLI entrypoint for the arXiv quality pipeline."""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import dataclass

from dotenv import load_dotenv

from arxiv_feed import ArxivClient
from benchmark import BenchmarkRunner
from config import PipelineConfig
from errors import PipelineError
from filters import QualityFilter, filter_by_age
from keyword_extractor import SUPPORTED_PROVIDERS, extract_keywords
from paper_store import PaperStore, SyncLog
from presets import get_preset
from report import (
    format_benchmark_report,
    format_filter_results,
    format_paper_detail,
    format_papers,
    format_presets,
    format_stats,
)
from service import PaperService

LOGGER = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line flags."""
    parser = argparse.ArgumentParser(description="Fetch, score and store arXiv papers")
    parser.add_argument(
        "--mode",
        choices=["pipeline", "sync", "list", "get", "search", "stats", "benchmark"],
        default="pipeline",
        help=(
            "'pipeline' (default): fetch, filter, store and print results. "
            "'sync': the same through the query layer, printing a summary only. "
            "'list' / 'get' / 'search' / 'stats': read the local store. "
            "'benchmark': time fetch and validation."
        ),
    )
    parser.add_argument("--query", default="", help="Search query for arXiv (or search text in 'search' mode)")
    parser.add_argument("--ask", default="", help="Natural-language question; keywords are extracted with an LLM")
    parser.add_argument(
        "--provider",
        choices=SUPPORTED_PROVIDERS,
        default="openai",
        help="LLM used by --ask",
    )
    parser.add_argument("--preset", default="", help="Use a search preset (see --list-presets)")
    parser.add_argument("--list-presets", action="store_true", help="List search presets and exit")
    parser.add_argument("--limit", type=int, default=50, help="Number of papers to fetch or show")
    parser.add_argument("--offset", type=int, default=0, help="Offset for 'list' mode")
    parser.add_argument("--id", dest="paper_id", default="", help="Paper id for 'get' mode")
    parser.add_argument(
        "--min-score",
        type=int,
        default=0,
        help="Minimum score 0-100 (0 = preset default, then DEFAULT_MIN_SCORE)",
    )
    parser.add_argument(
        "--max-age",
        type=int,
        default=0,
        help="Maximum age in days (0 = preset default, then DEFAULT_MAX_AGE)",
    )
    parser.add_argument("--skip-store", action="store_true", help="Do not write to the paper store")
    parser.add_argument("--skip-filter", action="store_true", help="Skip quality filtering")
    return parser.parse_args(argv)


@dataclass(frozen=True, slots=True)
class SearchSettings:
    query: str
    min_score: int
    max_age_days: int


def resolve_search(args: argparse.Namespace, config: PipelineConfig) -> SearchSettings:
    """Combine flags, preset and config defaults; explicit flags win."""
    query = args.query.strip()
    min_score = args.min_score
    max_age = args.max_age

    if args.preset:
        preset = get_preset(args.preset)
        if preset is None:
            raise ValueError(f"Unknown preset: {args.preset!r}. Use --list-presets to see options.")
        query = preset.query
        min_score = min_score or preset.min_score
        max_age = max_age or preset.max_age_days
        LOGGER.info("Using preset: %s (%s)", preset.name, preset.description)

    if args.ask:
        query = extract_keywords(args.ask, provider=args.provider)
        LOGGER.info("Search keywords from question: %r", query)

    return SearchSettings(
        query=query or config.default_query,
        min_score=min_score or config.min_score,
        max_age_days=max_age or config.max_age_days,
    )


def run(args: argparse.Namespace, config: PipelineConfig) -> None:
    """Run one fetch -> filter -> store cycle and print the results."""
    settings = resolve_search(args, config)
    client = ArxivClient(base_url=config.arxiv_api_url, timeout=config.arxiv_timeout_seconds)

    LOGGER.info("Fetching papers for query: %r", settings.query)
    papers = client.fetch_papers(settings.query, args.limit)
    LOGGER.info("Fetched %s papers from arXiv", len(papers))

    papers = filter_by_age(papers, settings.max_age_days)

    results = []
    if args.skip_filter:
        passed = papers
        LOGGER.info("Skipping quality filter (--skip-filter)")
    else:
        quality_filter = QualityFilter(min_score=settings.min_score)
        results = quality_filter.apply(papers)
        passed = quality_filter.filter_passed(papers)

    if args.skip_store:
        LOGGER.info("Skipping paper store (--skip-store)")
    elif passed:
        store = PaperStore(config.store_path)
        store.save_batch(passed)
        LOGGER.info("Saved %s papers; total in store: %s", len(passed), store.count())
    else:
        LOGGER.info("No papers passed the filter, nothing saved")

    print(format_filter_results(results, passed, skip_filter=args.skip_filter))


def build_service(config: PipelineConfig, min_score: int, max_age_days: int) -> PaperService:
    return PaperService(
        store=PaperStore(config.store_path),
        source=ArxivClient(base_url=config.arxiv_api_url, timeout=config.arxiv_timeout_seconds),
        sync_log=SyncLog(config.sync_log_path),
        min_score=min_score,
        max_age_days=max_age_days,
    )


def dispatch(args: argparse.Namespace, config: PipelineConfig) -> int:
    if args.list_presets:
        print(format_presets())
        return 0

    if args.mode == "pipeline":
        run(args, config)
        return 0

    if args.mode == "benchmark":
        settings = resolve_search(args, config)
        runner = BenchmarkRunner(
            ArxivClient(base_url=config.arxiv_api_url, timeout=config.arxiv_timeout_seconds)
        )
        print(format_benchmark_report(runner.generate_report(settings.query, args.limit)))
        return 0

    if args.mode == "sync":
        settings = resolve_search(args, config)
        service = build_service(config, settings.min_score, settings.max_age_days)
        summary = service.sync(settings.query, args.limit)
        print(
            f"Synced {summary.query!r}: fetched={summary.fetched} passed={summary.passed} "
            f"new={summary.new} updated={summary.updated}"
        )
        return 0

    service = build_service(config, config.min_score, config.max_age_days)
    if args.mode == "list":
        print(format_papers(service.list_papers(args.limit, args.offset)))
    elif args.mode == "get":
        if not args.paper_id:
            raise ValueError("--id is required in 'get' mode")
        print(format_paper_detail(service.get_paper(args.paper_id)))
    elif args.mode == "search":
        print(format_papers(service.search(args.query, args.limit), heading=f"Matches for {args.query!r}"))
    elif args.mode == "stats":
        print(format_stats(service.stats()))
    return 0


def main(argv: list[str] | None = None) -> int:
    """Initialize config and execute the selected mode."""
    load_dotenv()
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")
    args = parse_args(argv)

    try:
        config = PipelineConfig.from_env()
        return dispatch(args, config)
    except (PipelineError, RuntimeError, ValueError) as exc:
        LOGGER.error("%s", exc)
        return 1


if __name__ == "__main__":
    sys.exit(main())
