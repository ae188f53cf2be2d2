"""Console rendering for pipeline runs, stored papers, presets and benchmarks.

Every function returns the text block so main() decides where it goes.
"""

from __future__ import annotations

from collections.abc import Sequence

from benchmark import BenchmarkReport
from models import FilterResult, Paper
from presets import PRESET_GROUPS, list_presets, presets_in_group

RULE = "=" * 64
THIN_RULE = "-" * 64


def format_filter_results(
    results: Sequence[FilterResult],
    passed: Sequence[Paper],
    skip_filter: bool = False,
) -> str:
    lines = ["", RULE]

    if skip_filter:
        lines.append(f"  Fetched {len(passed)} papers (filter skipped):")
        lines.append(RULE)
        for i, paper in enumerate(passed, start=1):
            lines.append("")
            lines.append(f"[{i}] {paper.title}")
            lines.append(f"    Authors: {', '.join(paper.authors)}")
            lines.extend(_link_lines(paper))
    else:
        lines.append(f"  Filter results: {len(passed)}/{len(results)} papers passed")
        lines.append(RULE)
        for i, paper in enumerate(passed, start=1):
            lines.append("")
            lines.append(f"[{i}] {paper.title}")
            lines.append(
                f"    Score: {paper.score}/100 | Updated: {paper.updated_at.date().isoformat()}"
            )
            if paper.score_details:
                lines.append(f"    Details: {', '.join(paper.score_details)}")
            lines.extend(_link_lines(paper))

    lines.extend(["", RULE])
    return "\n".join(lines)


def format_papers(papers: Sequence[Paper], heading: str = "Papers") -> str:
    if not papers:
        return f"{heading}: none found"

    lines = ["", RULE, f"  {heading}: {len(papers)}", RULE]
    for i, paper in enumerate(papers, start=1):
        lines.append(f"  [{i}] {paper.title}")
        lines.append(f"      id={paper.paper_id} score={paper.score} updated={paper.updated_at.date()}")
        lines.extend("  " + line for line in _link_lines(paper))
        lines.append("")
    lines.append(RULE)
    return "\n".join(lines)


def format_paper_detail(paper: Paper) -> str:
    lines = [
        RULE,
        f"  {paper.title}",
        RULE,
        f"  ID:         {paper.paper_id} (v{paper.version})",
        f"  Authors:    {', '.join(paper.authors)}",
        f"  Categories: {', '.join(paper.categories)}",
        f"  Updated:    {paper.updated_at.isoformat()}",
        f"  Score:      {paper.score}/100",
    ]
    if paper.score_details:
        lines.append(f"  Details:    {', '.join(paper.score_details)}")
    if paper.comments:
        lines.append(f"  Comments:   {paper.comments}")
    if paper.doi:
        lines.append(f"  DOI:        {paper.doi}")
    if paper.journal_ref:
        lines.append(f"  Journal:    {paper.journal_ref}")
    lines.extend(["", f"  {paper.abstract}", ""])
    lines.extend(_link_lines(paper))
    lines.append(RULE)
    return "\n".join(lines)


def format_stats(stats: dict) -> str:
    lines = [RULE, "  Pipeline statistics", RULE]
    for key, value in stats.items():
        lines.append(f"  {key:<14} {value if value is not None else '-'}")
    lines.append(RULE)
    return "\n".join(lines)


def format_presets() -> str:
    lines = ["", RULE, "  Available search presets", RULE]

    for group in PRESET_GROUPS:
        lines.append("")
        lines.append(f"  [{group}]")
        for preset in presets_in_group(group):
            lines.append(f"    {preset.name:<18} {preset.description}")

    lines.extend([
        "",
        THIN_RULE,
        "  Usage:   python main.py --preset <name> [--limit N]",
        "  Example: python main.py --preset llm-reasoning",
        RULE,
        "",
        "All presets with details:",
        "",
    ])
    for preset in list_presets():
        lines.append(f"  {preset.name}:")
        lines.append(f"    Query: {preset.query}")
        lines.append(f"    MinScore: {preset.min_score}, MaxAge: {preset.max_age_days} days")
        lines.append("")
    return "\n".join(lines)


def format_benchmark_report(report: BenchmarkReport) -> str:
    lines = [RULE, "  Benchmark report", RULE, f"Timestamp: {report.timestamp.isoformat()}", ""]

    lines.append("Results:")
    lines.append(THIN_RULE)
    for result in report.results:
        lines.append(f"  {result}")
        if result.validation is not None:
            lines.append(
                f"    Valid: {result.validation.valid}, Invalid: {result.validation.invalid}"
            )

    if report.summary is not None:
        summary = report.summary
        lines.extend([
            "",
            "Summary:",
            THIN_RULE,
            f"  Total papers:   {summary.total_papers}",
            f"  Valid papers:   {summary.valid_papers}",
            f"  Invalid papers: {summary.invalid_papers}",
            f"  Total duration: {summary.total_duration_seconds:.3f}s",
        ])
    lines.append(RULE)
    return "\n".join(lines)


def _link_lines(paper: Paper) -> list[str]:
    return [
        f"    Abstract: {paper.abs_url}",
        f"    PDF:      {paper.pdf_url}",
    ]
