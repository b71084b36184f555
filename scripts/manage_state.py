#!/usr/bin/env python3
"""
Inspect or clear the per-session state (saved defaults) in the SQL store.

Usage:
  python scripts/manage_state.py create-tables
  python scripts/manage_state.py show --token TOKEN [--key default_ticket]
  python scripts/manage_state.py clear --token TOKEN [--key default_ticket]
"""
from __future__ import annotations

import argparse
import json
import sys

from sqlalchemy.exc import SQLAlchemyError

from attrdefaults.db.session import create_all
from attrdefaults.repositories.state_repository import StateRepository


def show(repo: StateRepository, token: str, key: str | None) -> None:
    keys = [key] if key else repo.list_keys(token)
    for name in keys:
        value = repo.get_state(token, name)
        shown = "<absent>" if value is None else json.dumps(value, ensure_ascii=False, sort_keys=True)
        print(f"{name}: {shown}")


def clear(repo: StateRepository, token: str, key: str | None) -> None:
    if key:
        repo.delete_state(token, key)
    else:
        repo.clear_states(token)
    print("OK: state cleared")


def main(argv: list[str] | None = None) -> None:
    ap = argparse.ArgumentParser(description="Manage saved defaults in session state")
    sub = ap.add_subparsers(dest="command", required=True)
    sub.add_parser("create-tables", help="Create the session/state tables")
    for name in ("show", "clear"):
        cmd = sub.add_parser(name)
        cmd.add_argument("--token", required=True, help="Session token")
        cmd.add_argument("--key", help="Single state key (default: all keys of the session)")
    args = ap.parse_args(argv)

    if args.command == "create-tables":
        try:
            create_all()
        except SQLAlchemyError as exc:
            raise SystemExit(f"Failed to create tables: {exc}") from exc
        print("Database tables created successfully.")
        return

    token = (args.token or "").strip()
    if not token:
        raise SystemExit("Invalid token")
    repo = StateRepository()
    if args.command == "show":
        show(repo, token, args.key)
    else:
        clear(repo, token, args.key)


if __name__ == "__main__":
    try:
        main()
    except Exception as exc:  # pragma: no cover
        sys.stderr.write(f"Error: {exc}\n")
        raise SystemExit(1)
