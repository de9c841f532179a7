import pytest
from sqlalchemy.orm import Session

from directory_admin.db.models.clinic import Clinic as ClinicModel
from directory_admin.db.models.doctor import Doctor as DoctorModel
from directory_admin.db.models.end_user import EndUser as EndUserModel


def _headers(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def _add(db: Session, row):
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


@pytest.fixture(scope="function")
def doctor_factory(db: Session):
    def factory(full_name: str = "Dr. Jane Doe", status: str = "new", **fields) -> DoctorModel:
        email = fields.pop("email", f"{full_name.split()[-1].lower()}@clinic.example.com")
        return _add(db, DoctorModel(full_name=full_name, email=email, status=status, **fields))

    return factory


# ============================================================================
# DOCTOR TESTS
# ============================================================================


def test_list_doctors_with_filters(client, doctor_factory, admin_token: str):
    doctor_factory("Dr. Ann Heart", status="approved", specialization="Cardiology")
    doctor_factory("Dr. Ben Bone", status="pending", specialization="Orthopedics")

    response = client.get("/api/doctors", headers=_headers(admin_token))
    assert response.status_code == 200
    assert len(response.json()["data"]) == 2

    response = client.get("/api/doctors", params={"status": "pending"}, headers=_headers(admin_token))
    assert [d["full_name"] for d in response.json()["data"]] == ["Dr. Ben Bone"]

    response = client.get("/api/doctors", params={"search": "cardio"}, headers=_headers(admin_token))
    assert [d["full_name"] for d in response.json()["data"]] == ["Dr. Ann Heart"]


def test_list_approved_and_by_status(client, doctor_factory, admin_token: str):
    doctor_factory("Dr. Ann Heart", status="approved")
    doctor_factory("Dr. Ben Bone", status="rejected")

    response = client.get("/api/doctors/approved/list", headers=_headers(admin_token))
    assert [d["full_name"] for d in response.json()["data"]] == ["Dr. Ann Heart"]

    response = client.get("/api/doctors/status/rejected", headers=_headers(admin_token))
    assert [d["full_name"] for d in response.json()["data"]] == ["Dr. Ben Bone"]


def test_get_doctor_not_found(client, admin_token: str):
    response = client.get("/api/doctors/9999", headers=_headers(admin_token))
    assert response.status_code == 404
    assert response.json()["error"] == "Doctor not found"


def test_admin_can_move_application_forward(client, doctor_factory, admin_token: str):
    doctor = doctor_factory()
    response = client.put(
        f"/api/doctors/{doctor.id}/status",
        json={"status": "in-process"},
        headers=_headers(admin_token),
    )
    assert response.status_code == 200
    assert response.json()["data"]["status"] == "in-process"


def test_admin_cannot_approve(client, db: Session, doctor_factory, admin_token: str):
    doctor = doctor_factory(status="pending")
    response = client.put(
        f"/api/doctors/{doctor.id}/status",
        json={"status": "approved"},
        headers=_headers(admin_token),
    )
    assert response.status_code == 403
    assert (
        response.json()["error"] == "Only super admins can approve or reject doctor applications"
    )
    db.refresh(doctor)
    assert doctor.status == "pending"


def test_super_admin_can_approve(client, doctor_factory, super_admin_token: str):
    doctor = doctor_factory(status="pending")
    response = client.put(
        f"/api/doctors/{doctor.id}/status",
        json={"status": "approved"},
        headers=_headers(super_admin_token),
    )
    assert response.status_code == 200
    assert response.json()["data"]["status"] == "approved"


def test_invalid_status_rejected(client, doctor_factory, super_admin_token: str):
    doctor = doctor_factory()
    response = client.put(
        f"/api/doctors/{doctor.id}/status",
        json={"status": "promoted"},
        headers=_headers(super_admin_token),
    )
    assert response.status_code == 400


def test_resign_approved_doctor(client, doctor_factory, admin_token: str):
    doctor = doctor_factory(status="approved")
    response = client.put(f"/api/doctors/{doctor.id}/resign", headers=_headers(admin_token))
    assert response.status_code == 200
    assert response.json()["data"]["status"] == "resigned"


def test_resign_requires_approved(client, doctor_factory, admin_token: str):
    doctor = doctor_factory(status="pending")
    response = client.put(f"/api/doctors/{doctor.id}/resign", headers=_headers(admin_token))
    assert response.status_code == 400
    assert response.json()["error"] == "Only approved doctors can resign"


# ============================================================================
# CLINIC TESTS
# ============================================================================


def test_list_and_get_clinics(client, db: Session, doctor_factory, admin_token: str):
    doctor = doctor_factory(status="approved")
    clinic = _add(
        db,
        ClinicModel(
            name="Harbor Family Clinic",
            address="1 Pier Road",
            doctor_id=doctor.id,
            business_hours={"mon": "09:00-17:00"},
        ),
    )
    _add(db, ClinicModel(name="Hilltop Dental", address="9 Summit Ave"))

    response = client.get("/api/clinics", params={"search": "harbor"}, headers=_headers(admin_token))
    assert response.status_code == 200
    assert [c["name"] for c in response.json()["data"]] == ["Harbor Family Clinic"]

    response = client.get(f"/api/clinics/{clinic.id}", headers=_headers(admin_token))
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["doctor_id"] == doctor.id
    assert data["business_hours"] == {"mon": "09:00-17:00"}


def test_get_clinic_not_found(client, admin_token: str):
    response = client.get("/api/clinics/9999", headers=_headers(admin_token))
    assert response.status_code == 404
    assert response.json()["error"] == "Clinic not found"


# ============================================================================
# END USER TESTS
# ============================================================================


def test_list_and_get_end_users(client, db: Session, super_admin_token: str):
    user = _add(db, EndUserModel(name="Pat Patient", email="pat@example.com", location="Lisbon"))
    _add(db, EndUserModel(name="Sam Seeker", email="sam@example.com", location="Porto"))

    response = client.get("/api/users", headers=_headers(super_admin_token))
    assert response.status_code == 200
    assert len(response.json()["data"]) == 2

    response = client.get("/api/users", params={"search": "lisbon"}, headers=_headers(super_admin_token))
    assert [u["email"] for u in response.json()["data"]] == ["pat@example.com"]

    response = client.get(f"/api/users/{user.id}", headers=_headers(super_admin_token))
    assert response.status_code == 200
    assert response.json()["data"]["name"] == "Pat Patient"


def test_get_end_user_not_found(client, super_admin_token: str):
    response = client.get("/api/users/9999", headers=_headers(super_admin_token))
    assert response.status_code == 404
    assert response.json()["error"] == "User not found"


def test_directory_requires_token(client):
    for path in ("/api/doctors", "/api/clinics", "/api/users"):
        assert client.get(path).status_code == 401
