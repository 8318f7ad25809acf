"""Registry of downstream context files, one per AI-assistant tool.

The built-in registry can be overridden or extended per repository with an
agent-targets.yaml manifest:

    default: claude
    retention: 3
    targets:
      - key: claude
        path: docs/CLAUDE.md
        name: Claude Code
    commands:
      - match: go
        run: go test ./... && go vet ./...
"""

from __future__ import annotations

import warnings
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from agentctx.context.merger import DEFAULT_RETENTION


class UnknownTarget(ValueError):
    """A target key that is not in the registry."""


@dataclass(frozen=True)
class TargetDescriptor:
    """A context file location, relative to the repository root."""

    key: str
    path: str
    display_name: str

    def resolve(self, root: Path) -> Path:
        return root / self.path


# Target key → (relative path, display name)
_BUILTIN = {
    "claude": ("CLAUDE.md", "Claude Code"),
    "gemini": ("GEMINI.md", "Gemini CLI"),
    "copilot": (".github/copilot-instructions.md", "GitHub Copilot"),
    "cursor-agent": (".cursor/rules/specify-rules.mdc", "Cursor IDE"),
    "qwen": ("QWEN.md", "Qwen Code"),
    "opencode": ("AGENTS.md", "opencode"),
    "codex": ("AGENTS.md", "Codex CLI"),
    "windsurf": (".windsurf/rules/specify-rules.md", "Windsurf"),
    "kilocode": (".kilocode/rules/specify-rules.md", "Kilo Code"),
    "auggie": (".augment/rules/specify-rules.md", "Auggie CLI"),
    "roo": (".roo/rules/specify-rules.md", "Roo Code"),
    "codebuddy": ("CODEBUDDY.md", "CodeBuddy CLI"),
    "qoder": ("QODER.md", "Qoder CLI"),
    "amp": ("AGENTS.md", "Amp"),
    "shai": ("SHAI.md", "SHAI"),
    "q": ("AGENTS.md", "Amazon Q Developer CLI"),
    "bob": ("AGENTS.md", "IBM Bob"),
    "jules": ("AGENTS.md", "Jules"),
}

DEFAULT_TARGETS = {
    key: TargetDescriptor(key, path, name) for key, (path, name) in _BUILTIN.items()
}
DEFAULT_TARGET_KEY = "claude"


@dataclass(frozen=True)
class TargetRegistry:
    """Targets plus the per-repo settings that travel with them."""

    targets: dict[str, TargetDescriptor] = field(default_factory=lambda: dict(DEFAULT_TARGETS))
    default_key: str = DEFAULT_TARGET_KEY
    retention: int = DEFAULT_RETENTION
    commands: tuple[tuple[str, str], ...] = ()

    def get(self, key: str) -> TargetDescriptor:
        """Look up a target by key.

        Raises:
            UnknownTarget: If the key isn't registered.
        """
        target = self.targets.get(key)
        if target is None:
            raise UnknownTarget(f"Unknown target: {key}. Valid: {', '.join(self.targets)}")
        return target

    @property
    def default(self) -> TargetDescriptor:
        return self.get(self.default_key)

    def unique_by_path(self) -> list[TargetDescriptor]:
        """Targets with duplicate paths collapsed to the first registered key."""
        seen: set[str] = set()
        result = []
        for t in self.targets.values():
            if t.path not in seen:
                seen.add(t.path)
                result.append(t)
        return result


def load_manifest(manifest_path: Path) -> dict:
    """Load an agent-targets.yaml manifest.

    Raises:
        ValueError: If the file is not valid YAML or not a mapping.
    """
    with open(manifest_path) as f:
        try:
            data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"{manifest_path}: invalid YAML: {e}") from e
    if not isinstance(data, dict):
        raise ValueError(f"{manifest_path} is not a YAML mapping")
    return data


def _retention(manifest: dict, manifest_path) -> int:
    value = manifest.get("retention")
    if value is None:
        return DEFAULT_RETENTION
    try:
        retention = int(value)
    except (TypeError, ValueError):
        raise ValueError(f"{manifest_path}: retention must be an integer, got {value!r}") from None
    if retention < 1:
        raise ValueError(f"{manifest_path}: retention must be at least 1, got {retention}")
    return retention


def load_registry(manifest_path: Path | str | None = None) -> TargetRegistry:
    """Build the target registry, applying a manifest when one exists."""
    if manifest_path is None or not Path(manifest_path).is_file():
        return TargetRegistry()

    manifest = load_manifest(Path(manifest_path))
    targets = dict(DEFAULT_TARGETS)
    for entry in manifest.get("targets", []) or []:
        if not isinstance(entry, dict) or not entry.get("key") or not entry.get("path"):
            warnings.warn(f"Skipping malformed target entry in {manifest_path}: {entry!r}")
            continue
        key = str(entry["key"])
        targets[key] = TargetDescriptor(key, str(entry["path"]), str(entry.get("name") or key))

    commands = []
    for row in manifest.get("commands", []) or []:
        if isinstance(row, dict) and row.get("match") and row.get("run"):
            commands.append((str(row["match"]), str(row["run"])))
        else:
            warnings.warn(f"Skipping malformed command entry in {manifest_path}: {row!r}")

    registry = TargetRegistry(
        targets=targets,
        default_key=str(manifest.get("default") or DEFAULT_TARGET_KEY),
        retention=_retention(manifest, manifest_path),
        commands=tuple(commands),
    )
    registry.get(registry.default_key)
    return registry
