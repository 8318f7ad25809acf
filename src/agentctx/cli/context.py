"""Context sync CLI commands."""

import argparse
from pathlib import Path

from agentctx.paths import manifest_path, repo_root


def _root(args: argparse.Namespace) -> Path:
    return Path(args.repo).expanduser() if getattr(args, "repo", None) else repo_root()


def _registry(args: argparse.Namespace):
    from agentctx.targets import load_registry

    path = args.targets if getattr(args, "targets", None) else manifest_path(_root(args))
    return load_registry(path)


def cmd_update(args: argparse.Namespace) -> int:
    from agentctx.context.sync import sync_all
    from agentctx.paths import resolve_feature
    from agentctx.plan.reader import PlanMissing
    from agentctx.targets import UnknownTarget

    try:
        feature = resolve_feature(args.feature, args.plan, _root(args))
        result = sync_all(
            feature,
            target_key=args.target,
            registry=_registry(args),
            template=args.template,
            dry_run=args.dry_run,
        )
    except (PlanMissing, UnknownTarget, ValueError) as e:
        print(f"ERROR: {e}")
        return 1

    print(f"Agent Context Sync — {result['feature_id']}")
    print("─" * 40)
    if result["fields"]:
        for name, value in result["fields"].items():
            print(f"  {name + ':':<22}{value}")
    else:
        print("  No plan fields found")
    print()
    print(f"  Created:   {len(result['created'])}")
    for p in result["created"]:
        print(f"    + {p}")
    print(f"  Updated:   {len(result['updated'])}")
    for p in result["updated"]:
        print(f"    ~ {p}")
    print(f"  Unchanged: {len(result['unchanged'])}")
    if result["errors"]:
        print(f"  Skipped:   {len(result['errors'])}")
        for e in result["errors"]:
            print(f"    - {e['path']}: {e['error']}")
    for w in result["warnings"]:
        print(f"  WARNING {w['path']}: {w['warning']}")

    if result.get("dry_run"):
        print("\n[DRY RUN] No files were modified.")

    return 0


def cmd_targets(args: argparse.Namespace) -> int:
    try:
        registry = _registry(args)
    except ValueError as e:
        print(f"ERROR: {e}")
        return 1
    root = _root(args)

    print(f"\n  {'Key':<15} {'Tool':<25} {'Path':<40}")
    print(f"  {'─' * 84}")
    for t in registry.targets.values():
        marker = "*" if t.resolve(root).exists() else " "
        default = " (default)" if t.key == registry.default_key else ""
        print(f"{marker} {t.key:<15} {t.display_name + default:<25} {t.path:<40}")
    print(f"\n  {len(registry.targets)} target(s), * = present")
    return 0


def cmd_fields(args: argparse.Namespace) -> int:
    from agentctx.context.generator import derive_summary
    from agentctx.paths import resolve_feature
    from agentctx.plan.reader import PlanMissing, read_plan

    try:
        feature = resolve_feature(args.feature, args.plan, _root(args))
        fields = read_plan(feature.plan_path)
        summary = derive_summary(fields, _registry(args).commands)
    except (PlanMissing, ValueError) as e:
        print(f"ERROR: {e}")
        return 1

    print(f"\n  Plan: {feature.plan_path}")
    for name in ("language", "primary_dependencies", "storage", "project_type"):
        value = getattr(fields, name)
        print(f"  {name + ':':<22}{value if value is not None else 'unset'}")
    print(f"  {'tech stack:':<22}{summary.tech_stack_label or '(none)'}")
    print(f"  {'commands:':<22}{summary.build_commands or '(none)'}")
    print()
    return 0
