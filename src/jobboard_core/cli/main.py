"""Main CLI entry point."""

import argparse
import asyncio
import json
import logging
from pathlib import Path
from typing import Optional


def main(argv: Optional[list[str]] = None) -> None:
    """Parse args and dispatch to subcommands."""
    parser = argparse.ArgumentParser(
        prog="jobboard-core",
        description="Job board role resolution and dashboard reconciliation",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (logs go to stderr)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # resolve-role
    role_parser = subparsers.add_parser("resolve-role", help="Resolve the role of a raw account record")
    role_parser.add_argument("record", type=Path, help="JSON file holding one account record")
    role_parser.add_argument("--hint", default=None, help="Session role hint (e.g. recruiter)")
    role_parser.add_argument(
        "--normalize",
        action="store_true",
        help="Also print the normalized account",
    )

    # dashboard
    dash_parser = subparsers.add_parser("dashboard", help="Build a dashboard bundle")
    dash_parser.add_argument(
        "fixtures",
        type=Path,
        nargs="?",
        default=None,
        help='JSON fixtures: {"collections": {...}, "failures": {...}} (memory store)',
    )
    dash_parser.add_argument("--principal", required=True, help="Principal (account) id")
    dash_parser.add_argument("--email", default=None, help="Principal email")
    dash_parser.add_argument("--hint", default=None, help="Session role hint")
    dash_parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Settings YAML (default: JOBBOARD_* environment variables)",
    )
    dash_parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Write bundle JSON to file (default: stdout)",
    )

    args = parser.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")

    if args.command == "resolve-role":
        _run_resolve_role(args)
    elif args.command == "dashboard":
        _run_dashboard(args)
    else:
        parser.print_help()


def _load_json(path: Path) -> dict:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        raise SystemExit(f"File not found: {path}")
    except json.JSONDecodeError as e:
        raise SystemExit(f"Invalid JSON in {path}: {e}")
    if not isinstance(data, dict):
        raise SystemExit(f"Expected a JSON object in {path}")
    return data


def _run_resolve_role(args: argparse.Namespace) -> None:
    """Run resolve-role command."""
    from jobboard_core.errors import MalformedRecordError
    from jobboard_core.normalize import RecordNormalizer
    from jobboard_core.roles import RoleResolver

    record = _load_json(args.record)
    resolver = RoleResolver()
    decision = resolver.explain(record, args.hint)
    result: dict = {"role": decision.role.value, "rule": decision.rule}
    if args.normalize:
        try:
            account = RecordNormalizer(resolver).normalize_account(record, session_hint=args.hint)
        except MalformedRecordError as e:
            raise SystemExit(f"Cannot normalize account: {e}")
        result["account"] = account.model_dump(mode="json")
    print(json.dumps(result, indent=2, default=str))


def _run_dashboard(args: argparse.Namespace) -> None:
    """Run dashboard command."""
    from jobboard_core.config import CoreSettings
    from jobboard_core.models.dashboard import Principal
    from jobboard_core.service import DashboardService
    from jobboard_core.session import StaticSession
    from jobboard_core.store import MemoryStore, StoreRegistry

    settings = CoreSettings.from_yaml(args.config) if args.config else CoreSettings.from_env()
    if settings.store.strip().lower() == MemoryStore.store_id:
        if args.fixtures is None:
            raise SystemExit("dashboard with the memory store needs a fixtures file")
        if not args.fixtures.exists():
            raise SystemExit(f"File not found: {args.fixtures}")
    try:
        store = StoreRegistry.from_settings(settings, args.fixtures)
    except ValueError as e:
        raise SystemExit(str(e))

    principal = Principal(id=args.principal, email=args.email)
    session = StaticSession(principal, store=store, account_collections=tuple(settings.account_collections))
    service = DashboardService(store, session, settings)

    async def _load():
        try:
            return await service.load_dashboard(hint=args.hint)
        finally:
            await store.aclose()

    bundle = asyncio.run(_load())
    output = json.dumps(bundle.model_dump(mode="json"), indent=2, default=str)
    if args.output:
        args.output.write_text(output, encoding="utf-8")
        print(f"Wrote {bundle.role.value} dashboard for {principal.id} to {args.output}")
    else:
        print(output)


if __name__ == "__main__":
    main()
