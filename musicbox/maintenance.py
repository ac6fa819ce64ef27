"""
CLI entrypoint for media maintenance. Run from cron, e.g.:

  python -m musicbox.maintenance [--dry-run] [--min-age-seconds N]

Deletes files in the music and covers directories that no track references.
"""

import argparse
import logging
import sys

from musicbox.core.config import get_settings
from musicbox.core.database import SessionLocal
from musicbox.services.maintenance import DEFAULT_MIN_AGE_SECONDS, prune_orphaned_files

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    """Prune orphaned media files; returns a process exit code."""
    parser = argparse.ArgumentParser(description="Delete media files no track references.")
    parser.add_argument("--dry-run", action="store_true", help="Only list what would be removed")
    parser.add_argument(
        "--min-age-seconds",
        type=int,
        default=DEFAULT_MIN_AGE_SECONDS,
        help="Skip files modified more recently than this (uploads in progress)",
    )
    args = parser.parse_args(argv)

    settings = get_settings()
    db = SessionLocal()
    try:
        count = prune_orphaned_files(
            db, settings, dry_run=args.dry_run, min_age_seconds=args.min_age_seconds
        )
        logger.info(
            "Maintenance completed: %s=%s",
            "orphans_found" if args.dry_run else "orphans_removed",
            count,
        )
        return 0
    except Exception as e:
        logger.exception("Maintenance job failed: %s", e)
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
