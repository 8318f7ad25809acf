"""Tests for path and feature resolution."""

from pathlib import Path

import pytest

from agentctx.paths import manifest_path, repo_root, resolve_feature, template_path


class TestRepoPaths:
    def test_repo_root_from_env(self, monkeypatch, tmp_path):
        monkeypatch.setenv("AGENTCTX_REPO_ROOT", str(tmp_path))
        assert repo_root() == tmp_path

    def test_repo_root_defaults_to_cwd(self, monkeypatch, tmp_path):
        monkeypatch.delenv("AGENTCTX_REPO_ROOT", raising=False)
        monkeypatch.chdir(tmp_path)
        assert repo_root() == Path.cwd()

    def test_template_default(self, monkeypatch, tmp_path):
        monkeypatch.delenv("AGENTCTX_TEMPLATE", raising=False)
        assert template_path(tmp_path) == tmp_path / ".specify" / "templates" / "agent-file-template.md"

    def test_template_from_env(self, monkeypatch, tmp_path):
        monkeypatch.setenv("AGENTCTX_TEMPLATE", str(tmp_path / "t.md"))
        assert template_path(Path("/elsewhere")) == tmp_path / "t.md"

    def test_manifest_path(self, tmp_path):
        assert manifest_path(tmp_path) == tmp_path / "agent-targets.yaml"


class TestResolveFeature:
    def test_default_plan_location(self, tmp_path):
        ctx = resolve_feature("003-foo", root=tmp_path)
        assert ctx.feature_id == "003-foo"
        assert ctx.plan_path == tmp_path / "specs" / "003-foo" / "plan.md"
        assert ctx.repo_root == tmp_path

    def test_explicit_plan(self, tmp_path):
        ctx = resolve_feature("003-foo", plan=tmp_path / "p.md", root=tmp_path)
        assert ctx.plan_path == tmp_path / "p.md"

    def test_feature_from_env(self, monkeypatch, tmp_path):
        monkeypatch.setenv("SPECIFY_FEATURE", "007-env")
        assert resolve_feature(root=tmp_path).feature_id == "007-env"

    def test_missing_feature_raises(self, monkeypatch, tmp_path):
        monkeypatch.delenv("SPECIFY_FEATURE", raising=False)
        with pytest.raises(ValueError, match="SPECIFY_FEATURE"):
            resolve_feature(root=tmp_path)
