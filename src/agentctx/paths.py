"""Repository path resolution.

Resolves canonical paths to the plan, template and targets manifest. Uses
environment variables when available, falls back to conventional defaults.

Environment variables:
    AGENTCTX_REPO_ROOT — repository root (default: current directory)
    AGENTCTX_TEMPLATE — context file template (default: <repo>/.specify/templates/agent-file-template.md)
    SPECIFY_FEATURE — feature id used when none is passed explicitly
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

_DEFAULT_TEMPLATE_SUBPATH = ".specify/templates/agent-file-template.md"
_MANIFEST_NAME = "agent-targets.yaml"


@dataclass(frozen=True)
class FeatureContext:
    """Feature identity handed to the synchronizer by the caller."""

    feature_id: str
    plan_path: Path
    repo_root: Path


def repo_root() -> Path:
    """Return the repository root directory."""
    env = os.environ.get("AGENTCTX_REPO_ROOT")
    if env:
        return Path(env).expanduser()
    return Path.cwd()


def template_path(root: Path | None = None) -> Path:
    """Return the path to the context file template."""
    env = os.environ.get("AGENTCTX_TEMPLATE")
    if env:
        return Path(env).expanduser()
    return (root or repo_root()) / _DEFAULT_TEMPLATE_SUBPATH


def manifest_path(root: Path | None = None) -> Path:
    """Return the path to the optional agent-targets.yaml manifest."""
    return (root or repo_root()) / _MANIFEST_NAME


def resolve_feature(
    feature_id: str | None = None,
    plan: Path | str | None = None,
    root: Path | str | None = None,
) -> FeatureContext:
    """Build a FeatureContext from explicit values or the environment.

    The plan defaults to <repo>/specs/<feature_id>/plan.md. Branch names and
    feature numbering are never inspected here.

    Raises:
        ValueError: If no feature id is given and SPECIFY_FEATURE is unset.
    """
    base = Path(root).expanduser() if root else repo_root()
    fid = feature_id or os.environ.get("SPECIFY_FEATURE")
    if not fid:
        raise ValueError("No feature id given. Pass --feature or set SPECIFY_FEATURE.")
    plan_path = Path(plan).expanduser() if plan else base / "specs" / fid / "plan.md"
    return FeatureContext(feature_id=fid, plan_path=plan_path, repo_root=base)
