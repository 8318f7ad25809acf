"""Shared test fixtures for agentctx."""

from pathlib import Path

import pytest

from agentctx.paths import FeatureContext

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def template_file():
    return FIXTURES / "agent-file-template.md"


@pytest.fixture
def repo(tmp_path):
    """A repository root with one feature plan under specs/."""
    plan = tmp_path / "specs" / "003-foo" / "plan.md"
    plan.parent.mkdir(parents=True)
    plan.write_text((FIXTURES / "plan.md").read_text())
    return tmp_path


@pytest.fixture
def feature(repo):
    return FeatureContext(
        feature_id="003-foo",
        plan_path=repo / "specs" / "003-foo" / "plan.md",
        repo_root=repo,
    )
