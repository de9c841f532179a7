import calendar
from datetime import datetime, timezone

from sqlalchemy.orm import Session

from directory_admin.core.security import utcnow
from directory_admin.db.models.clinic import Clinic as ClinicModel
from directory_admin.db.models.doctor import Doctor as DoctorModel
from directory_admin.db.models.end_user import EndUser as EndUserModel
from directory_admin.services.analytics import bucket_by_month, months_before


def _headers(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def _seed_doctors(db: Session, statuses: list[str], created_at: datetime | None = None) -> None:
    for i, status in enumerate(statuses):
        fields = {"created_at": created_at} if created_at else {}
        db.add(
            DoctorModel(
                full_name=f"Dr. Seed {status} {i}",
                email=f"{status}{i}@clinic.example.com",
                status=status,
                **fields,
            )
        )
    db.commit()


# ============================================================================
# MONTH HELPERS
# ============================================================================


def test_months_before_same_day():
    moment = datetime(2024, 8, 15, 12, 0, tzinfo=timezone.utc)
    assert months_before(moment, 6) == datetime(2024, 2, 15, 12, 0, tzinfo=timezone.utc)


def test_months_before_crosses_year():
    moment = datetime(2024, 3, 10, tzinfo=timezone.utc)
    assert months_before(moment, 6) == datetime(2023, 9, 10, tzinfo=timezone.utc)


def test_months_before_clamps_to_month_end():
    moment = datetime(2024, 8, 31, tzinfo=timezone.utc)
    assert months_before(moment, 6) == datetime(2024, 2, 29, tzinfo=timezone.utc)


def test_bucket_by_month_orders_chronologically():
    dates = [
        datetime(2024, 1, 5, tzinfo=timezone.utc),
        datetime(2023, 11, 20, tzinfo=timezone.utc),
        datetime(2024, 1, 28, tzinfo=timezone.utc),
        datetime(2023, 12, 1),
    ]
    assert bucket_by_month(dates) == [
        {"month": "Nov", "count": 1},
        {"month": "Dec", "count": 1},
        {"month": "Jan", "count": 2},
    ]


def test_bucket_by_month_skips_empty_months():
    dates = [datetime(2024, 2, 1, tzinfo=timezone.utc), datetime(2024, 5, 1, tzinfo=timezone.utc)]
    assert [row["month"] for row in bucket_by_month(dates)] == ["Feb", "May"]


def test_bucket_by_month_empty():
    assert bucket_by_month([]) == []


# ============================================================================
# ENDPOINT TESTS
# ============================================================================


def test_overview(client, db: Session, admin_token: str):
    _seed_doctors(db, ["new", "new", "pending", "approved", "approved", "approved", "resigned"])
    db.add_all(
        [
            EndUserModel(name="Pat", email="pat@example.com"),
            EndUserModel(name="Sam", email="sam@example.com"),
            ClinicModel(name="Harbor Clinic"),
        ]
    )
    db.commit()

    response = client.get("/api/analytics/overview", headers=_headers(admin_token))
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["totalUsers"] == 2
    assert data["totalClinics"] == 1
    assert data["approvedDoctors"] == 3
    assert data["applicationStatusBreakdown"] == {
        "new": 2,
        "in-process": 0,
        "pending": 1,
        "approved": 3,
        "rejected": 0,
    }


def test_overview_on_empty_directory(client, super_admin_token: str):
    response = client.get("/api/analytics/overview", headers=_headers(super_admin_token))
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["totalUsers"] == 0
    assert data["approvedDoctors"] == 0
    assert set(data["applicationStatusBreakdown"].values()) == {0}


def test_clinics_growth_window(client, db: Session, admin_token: str):
    now = utcnow()
    two_months_ago = months_before(now, 2)
    db.add_all(
        [
            ClinicModel(name="Recent A", created_at=now),
            ClinicModel(name="Recent B", created_at=now),
            ClinicModel(name="Older", created_at=two_months_ago),
            ClinicModel(name="Ancient", created_at=months_before(now, 9)),
        ]
    )
    db.commit()

    response = client.get("/api/analytics/clinics-growth", headers=_headers(admin_token))
    assert response.status_code == 200
    assert response.json()["data"] == [
        {"month": calendar.month_abbr[two_months_ago.month], "count": 1},
        {"month": calendar.month_abbr[now.month], "count": 2},
    ]


def test_applications_trend(client, db: Session, admin_token: str):
    now = utcnow()
    _seed_doctors(db, ["new", "pending"], created_at=now)
    _seed_doctors(db, ["approved"], created_at=months_before(now, 12))

    response = client.get("/api/analytics/applications-trend", headers=_headers(admin_token))
    assert response.status_code == 200
    assert response.json()["data"] == [{"month": calendar.month_abbr[now.month], "count": 2}]


def test_doctor_status_distribution(client, db: Session, admin_token: str):
    _seed_doctors(db, ["approved", "approved", "resigned", "pending"])
    response = client.get(
        "/api/analytics/doctor-status-distribution", headers=_headers(admin_token)
    )
    assert response.status_code == 200
    assert response.json()["data"] == {"active": 2, "resigned": 1}


def test_analytics_requires_token(client):
    response = client.get("/api/analytics/overview")
    assert response.status_code == 401
