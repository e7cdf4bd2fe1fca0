#!/usr/bin/env python3
"""
Export the stored vault to a JSON file without starting the server.

Reads the documents last written by the autosave job, so anything still
pending in a running server is not included.

Usage:
    python scripts/export_vault.py [--output vault-export.json] [--summary]

Options:
    --output     Where to write the export (default: vault-export.json)
    --summary    Print per-session progress instead of writing a file
"""
import argparse
import json
import sys
from pathlib import Path

from sqlmodel import Session

from packwise.checklist.persistence import read_documents
from packwise.checklist.vault import Vault
from packwise.core.database import create_db_and_tables, engine


def print_summary(vault: Vault):
    """Print one line per session with its packing progress."""
    sessions = vault.active_sessions() + vault.archived_sessions()
    if not sessions:
        print("No sessions stored.")
        return

    for session in sessions:
        progress = session.progress
        status = "archived" if session.is_archived else "active"
        print(f"{session.title} ({session.archetype.display_name}, {status})")
        print(
            f"  Packed: {progress.packed_cells}/{progress.total_cells} "
            f"({progress.progress_percent}%)"
        )
        if progress.critical_remaining:
            print(f"  Critical remaining: {progress.critical_remaining}")
        if session.active_condition_ids:
            names = [
                condition.name
                for condition_id in session.active_condition_ids
                if (condition := vault.store.get_condition(condition_id))
            ]
            print(f"  Conditions: {', '.join(sorted(names)) or '(deleted)'}")


def main():
    parser = argparse.ArgumentParser(description="Export the stored packing vault")
    parser.add_argument("--output", default="vault-export.json", help="Output file")
    parser.add_argument(
        "--summary", action="store_true", help="Print progress instead of exporting"
    )
    args = parser.parse_args()

    create_db_and_tables()
    with Session(engine) as session:
        payloads = read_documents(session)

    if not payloads:
        print("Error: No stored vault found. Start the app once to create it.")
        sys.exit(1)

    vault = Vault.from_documents(payloads, seed_builtins=False)

    if args.summary:
        print_summary(vault)
        return

    output = Path(args.output)
    output.write_text(json.dumps(vault.export(), indent=2, ensure_ascii=False))
    print(f"Exported {len(vault.sessions)} sessions to {output}")


if __name__ == "__main__":
    main()
