"""Fill the database with demo accounts, sections and tasks."""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parent.parent))

from productiviflow.db.session import SessionLocal
from productiviflow.services.demo import DEMO_ACCOUNTS, DemoSeeder


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed demo users with sections and tasks")
    parser.add_argument(
        "--reset",
        action="store_true",
        help="Delete existing demo users and their data first",
    )
    args = parser.parse_args()

    db = SessionLocal()
    try:
        seeder = DemoSeeder(db)
        if args.reset:
            removed = seeder.reset()
            print(f"Removed {removed} existing demo user(s)")

        summary = seeder.seed()

        print("✓ Demo seeding complete!")
        print(f"  Users: {', '.join(summary.users)}")
        print(f"  Sections: {summary.sections} ({summary.subsections} subsections)")
        print(f"  Tasks: {summary.tasks} ({summary.completed} completed)")
        for account in DEMO_ACCOUNTS:
            print(f"  Login: {account.email} / {account.password}")

    except Exception as exc:  # pragma: no cover - CLI feedback
        print(f"✗ Error seeding demo data: {exc}")
        raise
    finally:
        db.close()


if __name__ == "__main__":
    main()
