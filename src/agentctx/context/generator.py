"""Context file content generator.

Takes PlanFields and produces the Summary used by both first-time
creation (template rendering) and in-place merging.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Iterable

import yaml

from agentctx.context.templates import (
    BUILD_COMMANDS,
    CONVENTIONS_NOTE,
    MDC_FRONTMATTER,
    PLACEHOLDER_CHANGES,
    PLACEHOLDER_COMMANDS,
    PLACEHOLDER_DATE,
    PLACEHOLDER_PROJECT_NAME,
    PLACEHOLDER_STRUCTURE,
    PLACEHOLDER_STYLE,
    PLACEHOLDER_TECH,
    SINGLE_LAYOUT,
    UNKNOWN_COMMANDS,
    WEB_LAYOUT,
    format_change_entry,
    format_tech_entry,
)
from agentctx.context.writer import write_atomic
from agentctx.plan.reader import PlanFields


class TemplateMissing(FileNotFoundError):
    """The context file template could not be read."""


@dataclass(frozen=True)
class Summary:
    """Tool-agnostic summary derived once per run from a plan."""

    tech_stack_label: str
    directory_layout: str
    build_commands: str
    language_conventions: str = ""
    storage: str | None = None


def tech_stack_label(fields: PlanFields) -> str:
    """Join language and primary dependencies with ' + ', skipping unset ones."""
    parts = [p for p in (fields.language, fields.primary_dependencies) if p]
    return " + ".join(parts)


def directory_layout(project_type: str | None) -> str:
    """Pick the web (backend/frontend) or single-project skeleton."""
    if project_type and "web" in project_type.lower():
        return WEB_LAYOUT
    return SINGLE_LAYOUT


def build_commands(
    language: str | None,
    extra: Iterable[tuple[str, str]] = (),
) -> str:
    """Look up build/verify commands for a language.

    Rows in ``extra`` are searched before the built-in table.
    """
    if not language:
        return ""
    lowered = language.lower()
    for needle, commands in (*extra, *BUILD_COMMANDS):
        if needle.lower() in lowered:
            return commands
    return UNKNOWN_COMMANDS.format(language=language)


def language_conventions(language: str | None) -> str:
    if not language:
        return ""
    return CONVENTIONS_NOTE.format(language=language)


def derive_summary(
    fields: PlanFields,
    extra_commands: Iterable[tuple[str, str]] = (),
) -> Summary:
    """Compute the Summary for a run."""
    return Summary(
        tech_stack_label=tech_stack_label(fields),
        directory_layout=directory_layout(fields.project_type),
        build_commands=build_commands(fields.language, extra_commands),
        language_conventions=language_conventions(fields.language),
        storage=fields.storage,
    )


def tech_entries(summary: Summary, feature_id: str) -> list[str]:
    """Active Technologies lines this Summary contributes."""
    entries = []
    if summary.tech_stack_label:
        entries.append(format_tech_entry(summary.tech_stack_label, feature_id))
    if summary.storage and summary.storage != summary.tech_stack_label:
        entries.append(format_tech_entry(summary.storage, feature_id))
    return entries


def change_entry(summary: Summary, feature_id: str) -> str | None:
    """Recent Changes line this Summary contributes, if any."""
    label = summary.tech_stack_label or summary.storage
    return format_change_entry(label, feature_id) if label else None


def render_template(
    template: str,
    summary: Summary,
    project_name: str,
    feature_id: str,
    today: date | None = None,
) -> str:
    """Substitute every bracketed placeholder in the template."""
    day = (today or date.today()).isoformat()
    substitutions = {
        PLACEHOLDER_PROJECT_NAME: project_name,
        PLACEHOLDER_DATE: day,
        PLACEHOLDER_TECH: "\n".join(tech_entries(summary, feature_id)),
        PLACEHOLDER_STRUCTURE: summary.directory_layout,
        PLACEHOLDER_COMMANDS: summary.build_commands,
        PLACEHOLDER_STYLE: summary.language_conventions,
        PLACEHOLDER_CHANGES: change_entry(summary, feature_id) or "",
    }
    content = template
    for placeholder, value in substitutions.items():
        content = content.replace(placeholder, value)
    return content


def mdc_frontmatter() -> str:
    """Frontmatter block required by Cursor .mdc rule files."""
    body = yaml.safe_dump(MDC_FRONTMATTER, sort_keys=False, default_flow_style=None)
    return f"---\n{body}---\n\n"


def create_from_template(
    target_path: Path,
    template_path: Path,
    summary: Summary,
    project_name: str,
    feature_id: str,
    today: date | None = None,
    dry_run: bool = False,
) -> str:
    """Create a context file from the template. Returns the rendered content.

    Raises:
        TemplateMissing: If the template can't be read.
    """
    try:
        template = template_path.read_text(encoding="utf-8")
    except OSError as e:
        raise TemplateMissing(f"Template not found: {template_path}") from e

    content = render_template(template, summary, project_name, feature_id, today)
    if target_path.suffix == ".mdc" and not content.startswith("---"):
        content = mdc_frontmatter() + content
    if not dry_run:
        write_atomic(target_path, content)
    return content
