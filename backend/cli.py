"""
Administrative commands.

    python -m backend.cli purge --days 30 [--dry-run]
    python -m backend.cli hard-delete-user 42
    python -m backend.cli seed-exercises
"""
import argparse
import logging
import sys
from typing import Optional, Sequence

from sqlalchemy.orm import Session

from application.exceptions import NotFoundError
from backend.database import get_engine, init_database
from backend.settings import get_settings
from infrastructure.db import hard_delete_user, purge_soft_deleted, seed_default_exercises

logger = logging.getLogger(__name__)


def _purge(session: Session, args: argparse.Namespace) -> int:
    days = args.days if args.days is not None else get_settings().soft_delete_retention_days
    counts = purge_soft_deleted(session, days, dry_run=args.dry_run)
    verb = "would remove" if args.dry_run else "removed"
    for table, count in counts.items():
        print(f"{table}: {verb} {count}")
    print(f"total: {verb} {sum(counts.values())}")
    return 0


def _hard_delete_user(session: Session, args: argparse.Namespace) -> int:
    hard_delete_user(session, args.user_id)
    print(f"User {args.user_id} and all owned workouts permanently deleted")
    return 0


def _seed_exercises(session: Session, args: argparse.Namespace) -> int:
    added = seed_default_exercises(session)
    print(f"Seeded {added} exercises")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Workout tracker administration")
    commands = parser.add_subparsers(dest="command", required=True)

    purge = commands.add_parser(
        "purge", help="Permanently remove rows soft-deleted before the retention window"
    )
    purge.add_argument("--days", type=int, help="Retention in days (default: from settings)")
    purge.add_argument("--dry-run", action="store_true", help="Only count expired rows")
    purge.set_defaults(handler=_purge)

    hard_delete = commands.add_parser(
        "hard-delete-user", help="Irreversibly remove a user and their workouts"
    )
    hard_delete.add_argument("user_id", type=int)
    hard_delete.set_defaults(handler=_hard_delete_user)

    seed = commands.add_parser("seed-exercises", help="Seed the default exercise library if empty")
    seed.set_defaults(handler=_seed_exercises)
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    if getattr(args, "days", None) is not None and args.days < 0:
        print("Error: --days must not be negative", file=sys.stderr)
        return 2

    logging.basicConfig(level=get_settings().log_level)
    engine = get_engine()
    init_database(engine, seed=False)

    try:
        with Session(engine) as session:
            with session.begin():
                return args.handler(session, args)
    except NotFoundError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
