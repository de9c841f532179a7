"""Read-only dashboard aggregates. Nothing here writes to the database."""

import calendar
from collections import Counter
from datetime import datetime

from sqlalchemy.orm import Session

import directory_admin.repositories.analytics as analytics_repo
from directory_admin.core.security import as_utc, utcnow
from directory_admin.services.doctor import APPLICATION_STATUSES, APPROVED, RESIGNED

TREND_WINDOW_MONTHS = 6


def months_before(moment: datetime, months: int) -> datetime:
    """Same day-of-month `months` earlier, clamped to the end of shorter months."""
    month_index = moment.year * 12 + (moment.month - 1) - months
    year, month = divmod(month_index, 12)
    month += 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def bucket_by_month(dates: list[datetime]) -> list[dict[str, object]]:
    """Count dates per calendar month, oldest month first, labelled "Jan", "Feb", ..."""
    counts = Counter((d.year, d.month) for d in (as_utc(value) for value in dates))
    return [
        {"month": calendar.month_abbr[month], "count": counts[(year, month)]}
        for year, month in sorted(counts)
    ]


def get_overview(db: Session) -> dict[str, object]:
    breakdown = dict.fromkeys(APPLICATION_STATUSES, 0)
    breakdown.update(analytics_repo.count_doctors_by_status(db, APPLICATION_STATUSES))
    return {
        "totalUsers": analytics_repo.count_end_users(db),
        "approvedDoctors": breakdown[APPROVED],
        "totalClinics": analytics_repo.count_clinics(db),
        "applicationStatusBreakdown": breakdown,
    }


def get_clinics_growth(db: Session, now: datetime | None = None) -> list[dict[str, object]]:
    since = months_before(now or utcnow(), TREND_WINDOW_MONTHS)
    return bucket_by_month(analytics_repo.clinic_created_dates_since(db, since))


def get_applications_trend(db: Session, now: datetime | None = None) -> list[dict[str, object]]:
    since = months_before(now or utcnow(), TREND_WINDOW_MONTHS)
    return bucket_by_month(analytics_repo.doctor_created_dates_since(db, since))


def get_doctor_status_distribution(db: Session) -> dict[str, int]:
    """Approved doctors count as active; resigned doctors as resigned."""
    counts = analytics_repo.count_doctors_by_status(db, (APPROVED, RESIGNED))
    return {"active": counts.get(APPROVED, 0), "resigned": counts.get(RESIGNED, 0)}
