from unittest.mock import patch

import pytest

from config import PipelineConfig


def test_defaults_without_environment() -> None:
    with patch.dict("os.environ", {}, clear=True):
        config = PipelineConfig.from_env()

    assert config.default_query == "machine learning"
    assert config.default_limit == 10
    assert config.min_score == 60
    assert config.max_age_days == 365
    assert config.arxiv_api_url == "http://export.arxiv.org/api/query"
    assert config.arxiv_timeout_seconds == 30
    assert config.store_path == "papers.csv"


def test_environment_overrides() -> None:
    env = {
        "DEFAULT_QUERY": "rag",
        "DEFAULT_MIN_SCORE": "75",
        "DEFAULT_MAX_AGE": "0",
        "ARXIV_TIMEOUT_SECONDS": "2.5",
        "PAPER_STORE_PATH": "/tmp/out.csv",
    }
    with patch.dict("os.environ", env, clear=True):
        config = PipelineConfig.from_env()

    assert config.default_query == "rag"
    assert config.min_score == 75
    assert config.max_age_days == 0
    assert config.arxiv_timeout_seconds == 2.5
    assert config.store_path == "/tmp/out.csv"


def test_bad_integer_names_variable() -> None:
    with patch.dict("os.environ", {"DEFAULT_MIN_SCORE": "high"}, clear=True):
        with pytest.raises(ValueError, match="DEFAULT_MIN_SCORE"):
            PipelineConfig.from_env()
