"""Inspect or build the DevMatch schema on a configured database.

The app only auto-creates tables for sqlite, so MySQL deployments run
`create` here once. `status` is read-only and is the default.
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path


def _bootstrap_import_path() -> None:
    root = Path(__file__).resolve().parents[1]
    if str(root) not in sys.path:
        sys.path.insert(0, str(root))


_bootstrap_import_path()

from sqlalchemy import create_engine, inspect  # noqa: E402
from sqlalchemy.engine import Engine  # noqa: E402

from devmatch.config import build_sqlalchemy_db_url, settings  # noqa: E402
from devmatch.database import Base, mask_db_url  # noqa: E402
import devmatch.models  # noqa: F401,E402  # registers users, projects, project_members, tasks, messages


WRITE_ACTIONS = {"create", "reset"}


def schema_status(engine: Engine) -> list[tuple[str, bool]]:
    """Each DevMatch table in dependency order, with whether it exists."""
    existing = set(inspect(engine).get_table_names())
    return [(table.name, table.name in existing) for table in Base.metadata.sorted_tables]


def _print_status(engine: Engine) -> None:
    for name, present in schema_status(engine):
        print(f"  {name:<16} {'ok' if present else 'missing'}")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Inspect or build the DevMatch tables.")
    parser.add_argument(
        "action",
        nargs="?",
        default="status",
        choices=["status", "create", "reset"],
        help="status: list tables; create: add missing tables; reset: drop and recreate every table.",
    )
    parser.add_argument(
        "--db-url",
        default=None,
        help="Target DB URL (defaults to build_sqlalchemy_db_url(settings) from .env/env vars).",
    )
    parser.add_argument(
        "--i-understand",
        action="store_true",
        help="Required for create/reset. Prevents accidental DDL against shared DBs.",
    )
    args = parser.parse_args(argv)

    if args.action in WRITE_ACTIONS and not args.i_understand:
        print(f"Refusing to {args.action} without --i-understand (safety).")
        return 2

    url = args.db_url or build_sqlalchemy_db_url(settings)
    print(f"{args.action}:", mask_db_url(url))

    connect_args = {"check_same_thread": False} if str(url).startswith("sqlite") else {}
    engine = create_engine(url, pool_pre_ping=True, future=True, connect_args=connect_args)

    if args.action == "reset":
        # Drops projects with their members, tasks and messages, then users.
        Base.metadata.drop_all(bind=engine)
    if args.action in WRITE_ACTIONS:
        Base.metadata.create_all(bind=engine)

    _print_status(engine)
    missing = [name for name, present in schema_status(engine) if not present]
    return 1 if missing else 0


if __name__ == "__main__":
    raise SystemExit(main())
