from datetime import UTC, datetime

from models import EPOCH, Paper
from validation import is_valid, validate_paper, validate_papers


def _paper(**overrides) -> Paper:
    fields = {
        "paper_id": "2301.00001",
        "title": "Test Paper",
        "abstract": "Test abstract",
        "authors": ["John Doe"],
        "updated_at": datetime(2026, 1, 1, tzinfo=UTC),
    }
    fields.update(overrides)
    return Paper(**fields)


def test_valid_paper() -> None:
    assert validate_paper(_paper()) == []
    assert is_valid(_paper()) is True


def test_empty_id() -> None:
    issues = validate_paper(_paper(paper_id="  "))
    assert [i.field for i in issues] == ["paper_id"]


def test_no_authors() -> None:
    issues = validate_paper(_paper(authors=[]))
    assert [i.field for i in issues] == ["authors"]
    assert str(issues[0]) == "authors: must have at least one author"


def test_unset_timestamp() -> None:
    assert [i.field for i in validate_paper(_paper(updated_at=EPOCH))] == ["updated_at"]


def test_multiple_issues_reported_together() -> None:
    issues = validate_paper(_paper(paper_id="", title="", authors=[]))
    assert [i.field for i in issues] == ["paper_id", "title", "authors"]


def test_validate_papers_batch() -> None:
    result = validate_papers([_paper(), _paper(title=""), _paper(authors=[], title="")])

    assert result.valid == 1
    assert result.invalid == 2
    assert len(result.issues) == 3
