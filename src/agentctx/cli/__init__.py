"""Command line interface for agentctx.

Usage:
    agentctx update [TARGET] [--feature ID] [--plan PATH] [--template PATH] [--dry-run]
    agentctx targets
    agentctx fields [--feature ID] [--plan PATH]
"""

import argparse
import sys

from agentctx import __version__
from agentctx.cli.context import cmd_fields, cmd_targets, cmd_update


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="agentctx",
        description="Sync feature plan context into AI-assistant context files",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--repo", default=None,
        help="Repository root (default: $AGENTCTX_REPO_ROOT or cwd)",
    )
    parser.add_argument(
        "--targets", default=None,
        help="Path to agent-targets.yaml (default: <repo>/agent-targets.yaml)",
    )
    sub = parser.add_subparsers(dest="command")

    upd = sub.add_parser("update", help="Create or merge context files")
    upd.add_argument(
        "target", nargs="?", default=None,
        help="Single target key (default: every existing target)",
    )
    upd.add_argument(
        "--feature", default=None,
        help="Feature id (default: $SPECIFY_FEATURE)",
    )
    upd.add_argument(
        "--plan", default=None,
        help="Path to plan.md (default: <repo>/specs/<feature>/plan.md)",
    )
    upd.add_argument(
        "--template", default=None,
        help="Context file template (default: $AGENTCTX_TEMPLATE or .specify/templates)",
    )
    upd.add_argument(
        "--dry-run", action="store_true",
        help="Report changes without writing",
    )

    sub.add_parser("targets", help="List registered context files")

    fld = sub.add_parser("fields", help="Show fields extracted from plan.md")
    fld.add_argument("--feature", default=None, help="Feature id")
    fld.add_argument("--plan", default=None, help="Path to plan.md")

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    dispatch = {
        "update": cmd_update,
        "targets": cmd_targets,
        "fields": cmd_fields,
    }
    return dispatch[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
