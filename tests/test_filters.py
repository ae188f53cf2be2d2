from datetime import UTC, datetime, timedelta
from itertools import product

import pytest

from filters import (
    QualityFilter,
    count_eval_keywords,
    filter_by_age,
    has_accepted_signal,
    has_code_link,
    passes_level1,
    score_paper,
)
from models import Link, LinkType, Paper


def _paper(
    abstract: str = "",
    title: str = "Test Paper",
    comments: str = "",
    doi: str = "",
    journal_ref: str = "",
    paper_id: str = "2301.00001v1",
    links: list[Link] | None = None,
    updated_at: datetime | None = None,
) -> Paper:
    return Paper(
        paper_id=paper_id,
        title=title,
        abstract=abstract,
        updated_at=updated_at or datetime(2026, 2, 22, tzinfo=UTC),
        authors=["Jane Doe"],
        comments=comments,
        doi=doi,
        journal_ref=journal_ref,
        links=links or [],
    )


# --- keyword helpers ---------------------------------------------------------


def test_count_eval_keywords_counts_each_keyword_once() -> None:
    assert count_eval_keywords("benchmark benchmark benchmark") == 1


def test_count_eval_keywords_is_case_insensitive() -> None:
    assert count_eval_keywords("EVALUATION on an Experiment with a BENCHMARK") == 3


def test_count_eval_keywords_matches_substrings() -> None:
    # "experimental" contains "experiment", "metrics" contains "metric".
    assert count_eval_keywords("experimental metrics") == 2


@pytest.mark.parametrize("comments", [
    "Accepted at ICML 2024",
    "to appear in TPAMI",
    "Camera-ready version",
    "camera ready",
    "cameraready",
    "In Proceedings of ACL",
])
def test_accepted_signal_variants(comments: str) -> None:
    assert has_accepted_signal(comments) is True


def test_accepted_signal_absent() -> None:
    assert has_accepted_signal("12 pages, 3 figures") is False
    assert has_accepted_signal("") is False


# --- Level 1 -----------------------------------------------------------------


def test_level1_accepted_with_two_eval_keywords_passes() -> None:
    paper = _paper(
        abstract="We conduct extensive experiments and evaluation on held-out data.",
        comments="Accepted at ICML 2024",
    )
    assert passes_level1(paper) is True


def test_level1_doi_passes() -> None:
    paper = _paper(
        abstract="Our experiments show significant improvements in the evaluation.",
        doi="10.1234/example",
    )
    assert passes_level1(paper) is True


def test_level1_journal_ref_passes() -> None:
    paper = _paper(
        abstract="We compare against a baseline on a public dataset.",
        journal_ref="Phys. Rev. D 100, 012345 (2019)",
    )
    assert passes_level1(paper) is True


def test_level1_strong_evidence_alone_passes() -> None:
    paper = _paper(abstract="We report an evaluation and an experiment on a benchmark.")
    assert count_eval_keywords(paper.abstract) == 3
    assert passes_level1(paper) is True


def test_level1_strong_signal_without_evaluation_fails() -> None:
    paper = _paper(
        abstract="We propose a novel framework for understanding complex systems.",
        comments="Accepted at NeurIPS 2024",
    )
    assert count_eval_keywords(paper.abstract) == 0
    assert has_accepted_signal(paper.comments) is True
    assert passes_level1(paper) is False


def test_level1_doi_with_single_eval_keyword_fails() -> None:
    paper = _paper(abstract="We release a dataset.", doi="10.1234/example")
    assert passes_level1(paper) is False


def test_level1_two_eval_keywords_without_strong_signal_fails() -> None:
    paper = _paper(abstract="We run an experiment against a baseline.")
    assert passes_level1(paper) is False


# --- Level 2 -----------------------------------------------------------------


def test_score_all_positive_signals_clamps_to_100() -> None:
    paper = _paper(
        abstract=(
            "We run extensive experiments and evaluation with ablation against a strong "
            "baseline on a new dataset and benchmark. We discuss limitations."
        ),
        comments="Accepted at ICML 2024. Code: https://github.com/example/repo",
        doi="10.1234/example",
        paper_id="2301.00001v2",
    )
    score, details = score_paper(paper)

    assert score == 100
    assert details == [
        "+30 acceptance signal",
        "+20 DOI/journal reference",
        "+15 strong empirical evidence",
        "+10 ablation/baseline study",
        "+10 dataset/benchmark",
        "+10 code link present",
        "+5 limitation discussion",
        "+5 multi-version iteration",
    ]


def test_score_unclamped_total() -> None:
    paper = _paper(
        abstract="We report an evaluation and an experiment on a benchmark.",
        doi="10.1234/example",
    )
    score, details = score_paper(paper)

    # 20 (DOI) + 15 (eval >= 3) + 10 (benchmark)
    assert score == 45
    assert details == [
        "+20 DOI/journal reference",
        "+15 strong empirical evidence",
        "+10 dataset/benchmark",
    ]


def test_score_negative_total_clamps_to_zero() -> None:
    paper = _paper(abstract="Our framework is revolutionary.")
    score, details = score_paper(paper)

    assert score == 0
    assert details == ["-10 hype language", "-25 unvalidated framework claim"]


def test_score_accepted_framework_without_evaluation() -> None:
    paper = _paper(
        abstract="We propose a novel framework for understanding complex systems.",
        comments="Accepted at NeurIPS 2024",
    )
    score, details = score_paper(paper)

    assert score == 5
    assert details == ["+30 acceptance signal", "-25 unvalidated framework claim"]


def test_hype_in_title_is_penalized() -> None:
    paper = _paper(title="Groundbreaking Results", abstract="We release a dataset.")
    score, details = score_paper(paper)

    assert score == 0
    assert details == ["+10 dataset/benchmark", "-10 hype language"]


@pytest.mark.parametrize("term", ["revolutionary", "groundbreaking", "first ever", "first-ever"])
def test_each_hype_term_is_penalized(term: str) -> None:
    _, details = score_paper(_paper(abstract=f"A {term} result on a dataset."))
    assert "-10 hype language" in details


def test_framework_in_title_only_is_not_penalized() -> None:
    paper = _paper(title="A Framework for Everything", abstract="Some general remarks.")
    score, details = score_paper(paper)

    assert score == 0
    assert details == []


def test_framework_with_evaluation_is_not_penalized() -> None:
    paper = _paper(abstract="A perspective backed by one experiment.")
    _, details = score_paper(paper)
    assert "-25 unvalidated framework claim" not in details


def test_revolutionary_title_without_evaluation_scores_below_50() -> None:
    paper = _paper(
        title="A Revolutionary Approach to Attention",
        abstract="We describe our ideas about attention in neural networks.",
    )
    score, _ = score_paper(paper)
    assert score < 50


def test_multi_version_bonus_requires_version_two() -> None:
    _, v1_details = score_paper(_paper(paper_id="2301.00001v1"))
    _, v2_details = score_paper(_paper(paper_id="2301.00001v2"))

    assert "+5 multi-version iteration" not in v1_details
    assert "+5 multi-version iteration" in v2_details


# --- code links --------------------------------------------------------------


def test_code_link_in_abstract() -> None:
    assert has_code_link(_paper(abstract="Code at https://github.com/org/repo.")) is True


def test_code_link_in_comments() -> None:
    assert has_code_link(_paper(comments="see http://gitlab.com/group/project")) is True


def test_code_link_requires_scheme_in_text() -> None:
    assert has_code_link(_paper(abstract="Code at github.com/org/repo")) is False


def test_code_link_from_classified_link() -> None:
    link = Link(url="https://example.org/code", type=LinkType.CODE)
    assert has_code_link(_paper(links=[link])) is True


def test_code_link_from_raw_link_url() -> None:
    # Classified as abstract (rel=alternate) but the URL still points at GitHub.
    link = Link(url="https://github.com/org/repo", type=LinkType.ABSTRACT)
    assert has_code_link(_paper(links=[link])) is True


def test_no_code_link() -> None:
    link = Link(url="http://arxiv.org/pdf/2301.00001v1", type=LinkType.PDF)
    assert has_code_link(_paper(links=[link])) is False


# --- QualityFilter -----------------------------------------------------------


_STRONG_ABSTRACT = (
    "We run experiments and evaluation with ablation against a baseline on a dataset."
)


def test_evaluate_returns_fresh_result() -> None:
    paper = _paper(abstract=_STRONG_ABSTRACT, comments="Accepted at ICLR")
    result = QualityFilter().evaluate(paper)

    assert result.paper is paper
    assert result.passed_level1 is True
    assert result.score == 30 + 15 + 10 + 10
    assert result.details[0] == "+30 acceptance signal"


def test_apply_preserves_input_order() -> None:
    papers = [_paper(paper_id=f"2301.0000{i}", abstract=_STRONG_ABSTRACT) for i in range(4)]
    results = QualityFilter().apply(papers)
    assert [r.paper.paper_id for r in results] == [p.paper_id for p in papers]


def test_filter_passed_requires_both_levels() -> None:
    high_but_gated = _paper(
        paper_id="a",
        abstract="We propose a novel framework for understanding complex systems.",
        comments="Accepted at NeurIPS 2024",
        doi="10.1/x",
    )
    passing = _paper(paper_id="b", abstract=_STRONG_ABSTRACT, comments="Accepted at ICLR")
    low_score = _paper(paper_id="c", abstract="We run an experiment against a baseline.", doi="10.1/y")

    passed = QualityFilter(min_score=60).filter_passed([high_but_gated, passing, low_score])

    assert [p.paper_id for p in passed] == ["b"]


def test_filter_passed_attaches_score_without_mutating_input() -> None:
    paper = _paper(abstract=_STRONG_ABSTRACT, comments="Accepted at ICLR")
    passed = QualityFilter().filter_passed([paper])

    assert len(passed) == 1
    assert passed[0].score == 65
    assert passed[0].score_details[0] == "+30 acceptance signal"
    assert paper.score == 0
    assert paper.score_details == []


def test_filter_passed_respects_min_score() -> None:
    paper = _paper(abstract=_STRONG_ABSTRACT, comments="Accepted at ICLR")  # score 65
    assert QualityFilter(min_score=65).filter_passed([paper])
    assert QualityFilter(min_score=66).filter_passed([paper]) == []


def test_filter_passed_is_stable_and_repeatable() -> None:
    papers = [
        _paper(paper_id=f"2301.0000{i}v{i % 3 + 1}", abstract=_STRONG_ABSTRACT, comments="Accepted")
        for i in range(6)
    ]
    quality_filter = QualityFilter(min_score=50)

    first = quality_filter.filter_passed(papers)
    second = quality_filter.filter_passed(papers)

    assert [p.paper_id for p in first] == [p.paper_id for p in papers]
    assert [(p.paper_id, p.score, p.score_details) for p in first] == [
        (p.paper_id, p.score, p.score_details) for p in second
    ]


def test_filter_passed_keeps_duplicates() -> None:
    paper = _paper(abstract=_STRONG_ABSTRACT, comments="Accepted at ICLR")
    assert len(QualityFilter().filter_passed([paper, paper])) == 2


_SIGNAL_FLAGS = list(product([False, True], repeat=9))


@pytest.mark.parametrize(
    "accepted,doi,strong,ablation,dataset,code,limitation,hype,framework",
    _SIGNAL_FLAGS,
)
def test_score_always_within_bounds(
    accepted: bool,
    doi: bool,
    strong: bool,
    ablation: bool,
    dataset: bool,
    code: bool,
    limitation: bool,
    hype: bool,
    framework: bool,
) -> None:
    parts = []
    if strong:
        parts.append("evaluation experiment metric")
    if ablation:
        parts.append("ablation")
    if dataset:
        parts.append("dataset")
    if limitation:
        parts.append("limitation")
    if code:
        parts.append("https://github.com/a/b")
    if framework:
        parts.append("framework")
    for paper_id in ("2301.00001v1", "2301.00001v3"):
        paper = _paper(
            abstract=" ".join(parts),
            title="A groundbreaking method" if hype else "A method",
            comments="Accepted at ICLR" if accepted else "",
            doi="10.1/x" if doi else "",
            paper_id=paper_id,
        )
        score, _ = score_paper(paper)
        assert 0 <= score <= 100


# --- age pre-filter ----------------------------------------------------------


def test_filter_by_age_zero_means_unlimited() -> None:
    old = _paper(updated_at=datetime(2000, 1, 1, tzinfo=UTC))
    assert filter_by_age([old], 0) == [old]


def test_filter_by_age_drops_old_papers() -> None:
    now = datetime(2026, 3, 1, tzinfo=UTC)
    recent = _paper(paper_id="recent", updated_at=now - timedelta(days=5))
    old = _paper(paper_id="old", updated_at=now - timedelta(days=400))

    kept = filter_by_age([old, recent], 365, now=now)

    assert [p.paper_id for p in kept] == ["recent"]
