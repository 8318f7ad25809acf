"""Data tables and line formats for context file content.

Layouts, build commands and managed-region entry lines all live here so
that the generator and merger stay free of per-language branching.
"""

from __future__ import annotations

# ── Directory layouts ─────────────────────────────────────────────

WEB_LAYOUT = "backend/\nfrontend/\ntests/"
SINGLE_LAYOUT = "src/\ntests/"

# ── Build commands ────────────────────────────────────────────────

# (substring, commands), searched case-insensitively in this order
BUILD_COMMANDS: tuple[tuple[str, str], ...] = (
    ("python", "cd src && pytest && ruff check ."),
    ("rust", "cargo test && cargo clippy"),
    ("javascript", "npm test && npm run lint"),
    ("typescript", "npm test && npm run lint"),
)

UNKNOWN_COMMANDS = "# Add commands for {language}"

CONVENTIONS_NOTE = "{language}: Follow standard conventions"

# ── Template placeholders ─────────────────────────────────────────

PLACEHOLDER_PROJECT_NAME = "[PROJECT NAME]"
PLACEHOLDER_DATE = "[DATE]"
PLACEHOLDER_TECH = "[EXTRACTED FROM ALL PLAN.MD FILES]"
PLACEHOLDER_STRUCTURE = "[ACTUAL STRUCTURE FROM PLANS]"
PLACEHOLDER_COMMANDS = "[ONLY COMMANDS FOR ACTIVE TECHNOLOGIES]"
PLACEHOLDER_STYLE = "[LANGUAGE-SPECIFIC, ONLY FOR LANGUAGES IN USE]"
PLACEHOLDER_CHANGES = "[LAST 3 FEATURES AND WHAT THEY ADDED]"

# ── Cursor rule frontmatter ───────────────────────────────────────

MDC_FRONTMATTER = {
    "description": "Project Development Guidelines",
    "globs": ["**/*"],
    "alwaysApply": True,
}


# ── Entry formatting helpers ──────────────────────────────────────

def format_tech_entry(label: str, feature_id: str) -> str:
    """Format an Active Technologies entry line."""
    return f"- {label} ({feature_id})"


def format_change_entry(label: str, feature_id: str) -> str:
    """Format a Recent Changes entry line."""
    return f"- {feature_id}: Added {label}"
