"""agentctx — keep AI-assistant context files in sync with feature plans.

Reads the structured fields of a feature's plan.md and pushes them into
CLAUDE.md, GEMINI.md, AGENTS.md and the other per-tool context files.

Two regions of each context file are managed:
    ## Active Technologies   (append-only, de-duplicated)
    ## Recent Changes        (newest first, bounded)

Anything outside these regions is preserved untouched, apart from the
"Last updated: <date>" stamp.
"""

__version__ = "0.1.0"

# Heading constants used by generator and merger
ACTIVE_TECH_HEADING = "## Active Technologies"
RECENT_CHANGES_HEADING = "## Recent Changes"
