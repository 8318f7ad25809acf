"""Extract technical-context fields from a plan.md file."""

from __future__ import annotations

import re
from dataclasses import dataclass, fields
from pathlib import Path

from agentctx.plan import FIELD_LABELS, NEEDS_CLARIFICATION, NOT_APPLICABLE


class PlanMissing(FileNotFoundError):
    """The plan document for the current feature does not exist."""


@dataclass(frozen=True)
class PlanFields:
    """Fields extracted from a plan. None means unset."""

    language: str | None = None
    primary_dependencies: str | None = None
    storage: str | None = None
    project_type: str | None = None

    def found(self) -> dict[str, str]:
        """Return only the fields that are set, keyed by attribute name."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not None
        }


def _is_unset(value: str) -> bool:
    return not value or value == NOT_APPLICABLE or NEEDS_CLARIFICATION in value


def extract_field(text: str, label: str) -> str | None:
    """Return the value of the first ``**label**: value`` line, or None.

    The label is matched literally and case-sensitively at the start of a
    line. Placeholder values (NEEDS CLARIFICATION, N/A) count as unset.
    """
    pattern = re.compile(r"^\*\*" + re.escape(label) + r"\*\*: (.*)$", re.MULTILINE)
    m = pattern.search(text)
    if not m:
        return None
    value = m.group(1).strip()
    return None if _is_unset(value) else value


def parse_plan(text: str) -> PlanFields:
    """Extract all known fields from plan text."""
    values = {attr: extract_field(text, label) for label, attr in FIELD_LABELS.items()}
    return PlanFields(**values)


def read_plan(path: Path | str) -> PlanFields:
    """Read and parse a plan.md file.

    Args:
        path: Path to plan.md.

    Returns:
        Extracted PlanFields.

    Raises:
        PlanMissing: If the file doesn't exist or can't be read.
    """
    plan_path = Path(path)
    try:
        text = plan_path.read_text(encoding="utf-8")
    except OSError as e:
        raise PlanMissing(f"Plan not found: {plan_path}") from e
    return parse_plan(text)
