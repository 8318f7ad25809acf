"""Context file sync — creates or merges each registered target.

The sync process:
1. Read plan.md once and derive the Summary
2. Pick targets: one named key, or every registered file that exists
3. Create missing files from the template, merge existing ones in place
4. If no registered file exists, create only the default target

A failure on one target is recorded and the remaining targets still run.
"""

from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Any

from agentctx.context.generator import Summary, TemplateMissing, create_from_template, derive_summary
from agentctx.context.merger import DEFAULT_RETENTION, merge_file
from agentctx.paths import FeatureContext, manifest_path, template_path
from agentctx.plan.reader import read_plan
from agentctx.targets import TargetDescriptor, TargetRegistry, load_registry


def sync_all(
    feature: FeatureContext,
    target_key: str | None = None,
    registry: TargetRegistry | None = None,
    template: Path | str | None = None,
    project_name: str | None = None,
    today: date | None = None,
    dry_run: bool = False,
) -> dict[str, Any]:
    """Sync the feature's plan into one or all context files.

    Raises:
        UnknownTarget: If target_key isn't registered.
        PlanMissing: If the feature's plan.md can't be read.
    """
    root = feature.repo_root
    reg = registry or load_registry(manifest_path(root))

    if target_key:
        targets = [reg.get(target_key)]
    else:
        targets = [t for t in reg.unique_by_path() if t.resolve(root).exists()]
        if not targets:
            targets = [reg.default]

    fields = read_plan(feature.plan_path)
    summary = derive_summary(fields, reg.commands)
    tpl = Path(template) if template else template_path(root)
    name = project_name or root.resolve().name

    created = []
    updated = []
    unchanged = []
    warnings = []
    errors = []

    for target in targets:
        path = target.resolve(root)
        try:
            res = sync_target(
                target, root, summary, feature.feature_id, tpl, name,
                today=today, retention=reg.retention, dry_run=dry_run,
            )
        except (TemplateMissing, OSError, UnicodeDecodeError) as e:
            errors.append({"path": str(path), "target": target.key, "error": str(e)})
            continue
        if res["action"] == "created": created.append(res["path"])
        elif res["action"] == "updated": updated.append(res["path"])
        else: unchanged.append(res["path"])
        for w in res["warnings"]:
            warnings.append({"path": res["path"], "warning": w})

    return {
        "feature_id": feature.feature_id,
        "fields": fields.found(),
        "tech_stack": summary.tech_stack_label,
        "created": created,
        "updated": updated,
        "unchanged": unchanged,
        "warnings": warnings,
        "errors": errors,
        "dry_run": dry_run,
    }


def sync_target(
    target: TargetDescriptor,
    root: Path,
    summary: Summary,
    feature_id: str,
    template: Path,
    project_name: str,
    today: date | None = None,
    retention: int = DEFAULT_RETENTION,
    dry_run: bool = False,
) -> dict[str, Any]:
    """Create or merge a single context file."""
    file_path = target.resolve(root)
    if not file_path.exists():
        create_from_template(
            file_path, template, summary, project_name, feature_id, today, dry_run,
        )
        return {"path": str(file_path), "action": "created", "warnings": []}

    action, result = merge_file(file_path, summary, feature_id, today, retention, dry_run)
    return {"path": str(file_path), "action": action, "warnings": result.warnings}
