"""Tests for summary derivation and template rendering."""

from datetime import date

import pytest
import yaml

from agentctx.context.generator import (
    Summary,
    TemplateMissing,
    build_commands,
    create_from_template,
    derive_summary,
    directory_layout,
    render_template,
    tech_entries,
    tech_stack_label,
)
from agentctx.plan.reader import PlanFields

TODAY = date(2025, 10, 1)


class TestTechStackLabel:
    def test_joins_language_and_dependencies(self):
        fields = PlanFields(language="Rust", primary_dependencies="tokio")
        assert tech_stack_label(fields) == "Rust + tokio"

    def test_language_only(self):
        assert tech_stack_label(PlanFields(language="Go 1.22")) == "Go 1.22"

    def test_dependencies_only(self):
        assert tech_stack_label(PlanFields(primary_dependencies="Django")) == "Django"

    def test_both_unset(self):
        assert tech_stack_label(PlanFields()) == ""


class TestDirectoryLayout:
    def test_web_project(self):
        layout = directory_layout("web")
        assert layout.split("\n") == ["backend/", "frontend/", "tests/"]

    def test_web_is_case_insensitive_substring(self):
        assert "frontend/" in directory_layout("Web application (frontend + backend)")

    def test_single_project(self):
        assert directory_layout("single") == "src/\ntests/"

    def test_unset(self):
        assert directory_layout(None) == "src/\ntests/"


class TestBuildCommands:
    @pytest.mark.parametrize("language, expected", [
        ("Python 3.11", "cd src && pytest && ruff check ."),
        ("Rust 1.75", "cargo test && cargo clippy"),
        ("TypeScript 5", "npm test && npm run lint"),
        ("javascript", "npm test && npm run lint"),
    ])
    def test_known_languages(self, language, expected):
        assert build_commands(language) == expected

    def test_unknown_language_placeholder(self):
        assert build_commands("Haskell") == "# Add commands for Haskell"

    def test_unset_language(self):
        assert build_commands(None) == ""

    def test_extra_rows_take_priority(self):
        extra = [("go", "go test ./..."), ("python", "tox")]
        assert build_commands("Go 1.22", extra) == "go test ./..."
        assert build_commands("Python", extra) == "tox"


class TestDeriveSummary:
    def test_rust_web_example(self):
        fields = PlanFields(language="Rust", primary_dependencies="tokio", project_type="web")
        summary = derive_summary(fields)
        assert summary.tech_stack_label == "Rust + tokio"
        assert "backend/" in summary.directory_layout
        assert "frontend/" in summary.directory_layout
        assert "tests/" in summary.directory_layout
        assert summary.build_commands == "cargo test && cargo clippy"
        assert summary.language_conventions == "Rust: Follow standard conventions"

    def test_unset_storage_not_mentioned(self):
        summary = derive_summary(PlanFields(language="Rust"))
        assert summary.storage is None
        rendered = render_template(
            "[EXTRACTED FROM ALL PLAN.MD FILES]", summary, "proj", "003-foo", TODAY,
        )
        assert rendered == "- Rust (003-foo)"


class TestTechEntries:
    def test_storage_gets_own_entry(self):
        summary = Summary("Go", "", "", storage="SQLite")
        assert tech_entries(summary, "004-d") == ["- Go (004-d)", "- SQLite (004-d)"]

    def test_storage_equal_to_label_not_repeated(self):
        summary = derive_summary(PlanFields(storage="SQLite"))
        assert summary.tech_stack_label == ""
        assert tech_entries(summary, "004-d") == ["- SQLite (004-d)"]
        same = Summary("SQLite", "", "", storage="SQLite")
        assert tech_entries(same, "004-d") == ["- SQLite (004-d)"]


class TestRenderTemplate:
    def test_substitutes_all_placeholders(self, template_file):
        summary = derive_summary(PlanFields(
            language="Python 3.11", primary_dependencies="FastAPI",
            storage="PostgreSQL", project_type="single",
        ))
        content = render_template(
            template_file.read_text(), summary, "acme", "001-api", TODAY,
        )
        assert "[" not in content
        assert content.startswith("# acme Development Guidelines")
        assert "Last updated: 2025-10-01" in content
        assert "- Python 3.11 + FastAPI (001-api)\n- PostgreSQL (001-api)" in content
        assert "src/\ntests/" in content
        assert "cd src && pytest && ruff check ." in content
        assert "Python 3.11: Follow standard conventions" in content
        assert "- 001-api: Added Python 3.11 + FastAPI" in content
        assert "<!-- MANUAL ADDITIONS START -->" in content

    def test_storage_only_change_entry(self):
        summary = derive_summary(PlanFields(storage="SQLite"))
        content = render_template(
            "[LAST 3 FEATURES AND WHAT THEY ADDED]", summary, "p", "002-db", TODAY,
        )
        assert content == "- 002-db: Added SQLite"


class TestCreateFromTemplate:
    def test_creates_parent_directories(self, tmp_path, template_file):
        target = tmp_path / ".windsurf" / "rules" / "specify-rules.md"
        summary = Summary("Rust + tokio", "src/\ntests/", "cargo test && cargo clippy")
        create_from_template(target, template_file, summary, "proj", "003-foo", TODAY)
        assert target.exists()
        assert "- Rust + tokio (003-foo)" in target.read_text()

    def test_missing_template_raises(self, tmp_path):
        summary = Summary("Rust", "src/\ntests/", "")
        with pytest.raises(TemplateMissing):
            create_from_template(
                tmp_path / "CLAUDE.md", tmp_path / "missing.md", summary, "p", "f", TODAY,
            )
        assert not (tmp_path / "CLAUDE.md").exists()

    def test_mdc_gets_frontmatter(self, tmp_path, template_file):
        target = tmp_path / ".cursor" / "rules" / "specify-rules.mdc"
        summary = Summary("Rust", "src/\ntests/", "")
        create_from_template(target, template_file, summary, "proj", "003-foo", TODAY)
        content = target.read_text()
        assert content.startswith("---\n")
        header = yaml.safe_load(content.split("---\n")[1])
        assert header == {
            "description": "Project Development Guidelines",
            "globs": ["**/*"],
            "alwaysApply": True,
        }
        assert "# proj Development Guidelines" in content

    def test_dry_run_does_not_write(self, tmp_path, template_file):
        target = tmp_path / "CLAUDE.md"
        summary = Summary("Rust", "src/\ntests/", "")
        content = create_from_template(
            target, template_file, summary, "proj", "003-foo", TODAY, dry_run=True,
        )
        assert "- Rust (003-foo)" in content
        assert not target.exists()
