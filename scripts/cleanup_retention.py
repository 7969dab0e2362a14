"""Apply retention to activities, notifications, refresh tokens and invitations.

Meant to run from cron or a scheduled job::

    python -m scripts.cleanup_retention --activity-days 90 --notification-days 30
"""

from __future__ import annotations

import argparse
import logging

from sqlalchemy.exc import SQLAlchemyError

from app.application.errors import ApplicationError
from app.application.use_cases.activities import cleanup_old_activities
from app.application.use_cases.invitations import cleanup_settled_invitations
from app.application.use_cases.notifications import cleanup_old_notifications
from app.config import get_settings
from app.infrastructure.database import SessionLocal, initialize_database
from app.infrastructure.repositories import RefreshTokenRepository

logger = logging.getLogger("scripts.cleanup_retention")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Apply BandMate retention rules.")
    parser.add_argument(
        "--activity-days",
        type=int,
        default=settings.activity_retention_days,
        help="Delete activities older than this many days (default: %(default)s)",
    )
    parser.add_argument(
        "--notification-days",
        type=int,
        default=settings.notification_retention_days,
        help="Delete read notifications older than this many days (default: %(default)s)",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(level=get_settings().log_level.upper())

    initialize_database()
    session = SessionLocal()
    try:
        activities = cleanup_old_activities(session, args.activity_days)
        notifications = cleanup_old_notifications(session, args.notification_days)
        tokens = RefreshTokenRepository(session).delete_expired()
        invitations = cleanup_settled_invitations(session)
    except (ApplicationError, SQLAlchemyError) as exc:
        session.rollback()
        raise SystemExit(f"Retention cleanup failed: {exc}") from exc
    finally:
        session.close()

    print(
        f"Deleted {activities} activities, {notifications} read notifications, "
        f"{tokens} expired refresh tokens and {invitations} settled invitations"
    )


if __name__ == "__main__":
    main()
