from sqlalchemy.orm import Session

from directory_admin.core.security import verify_password
from directory_admin.db.models.super_admin import SuperAdmin as SuperAdminModel
from directory_admin.domain.accounts import AccountKind


def _headers(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


# ============================================================================
# LIST / GET / CREATE TESTS
# ============================================================================


def test_list_super_admins(client, super_admin, super_admin_factory, super_admin_token: str):
    super_admin_factory("second@example.com")
    response = client.get("/api/super-admins", headers=_headers(super_admin_token))
    assert response.status_code == 200
    emails = {s["email"] for s in response.json()["data"]}
    assert emails == {super_admin.email, "second@example.com"}
    assert all("password_hash" not in s for s in response.json()["data"])


def test_list_super_admins_as_admin_forbidden(client, admin_token: str):
    response = client.get("/api/super-admins", headers=_headers(admin_token))
    assert response.status_code == 403


def test_get_super_admin_not_found(client, super_admin_token: str):
    response = client.get("/api/super-admins/9999", headers=_headers(super_admin_token))
    assert response.status_code == 404
    assert response.json()["error"] == "Super admin not found"


def test_create_super_admin(client, db: Session, super_admin_token: str):
    response = client.post(
        "/api/super-admins",
        json={"email": "fresh@example.com", "password": "Password1", "full_name": "Fresh"},
        headers=_headers(super_admin_token),
    )
    assert response.status_code == 201
    data = response.json()["data"]
    assert data["email"] == "fresh@example.com"
    assert data["status"] == "active"
    stored = db.query(SuperAdminModel).filter(SuperAdminModel.id == data["id"]).one()
    assert verify_password("Password1", stored.password_hash)


def test_create_super_admin_duplicate(client, super_admin, super_admin_token: str):
    response = client.post(
        "/api/super-admins",
        json={"email": super_admin.email, "password": "Password1", "full_name": "Dup"},
        headers=_headers(super_admin_token),
    )
    assert response.status_code == 409
    assert response.json()["error"] == "A super admin with this email already exists"


def test_create_super_admin_short_password(client, super_admin_token: str):
    response = client.post(
        "/api/super-admins",
        json={"email": "short@example.com", "password": "Pass123", "full_name": "Short"},
        headers=_headers(super_admin_token),
    )
    assert response.status_code == 400


def test_update_super_admin_partial(client, super_admin_factory, super_admin_token: str):
    other = super_admin_factory("other@example.com", full_name="Other Super")
    response = client.put(
        f"/api/super-admins/{other.id}",
        json={"phone": "+1 555 0100"},
        headers=_headers(super_admin_token),
    )
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["phone"] == "+1 555 0100"
    assert data["full_name"] == "Other Super"
    assert data["email"] == "other@example.com"


# ============================================================================
# DELETE TESTS
# ============================================================================


def test_cannot_delete_last_active_super_admin(client, db: Session, super_admin, super_admin_token: str):
    response = client.delete(f"/api/super-admins/{super_admin.id}", headers=_headers(super_admin_token))
    assert response.status_code == 400
    assert response.json()["error"] == "Cannot delete the last active super admin"
    assert db.query(SuperAdminModel).count() == 1


def test_delete_super_admin_when_another_is_active(
    client, db: Session, super_admin, super_admin_factory, super_admin_token: str
):
    other = super_admin_factory("other@example.com")
    other_id = other.id

    response = client.delete(f"/api/super-admins/{other_id}", headers=_headers(super_admin_token))
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["id"] == other_id
    assert data["email"] == "other@example.com"
    assert db.query(SuperAdminModel).filter(SuperAdminModel.id == other_id).first() is None


def test_delete_inactive_super_admin_with_single_active(
    client, super_admin, super_admin_factory, super_admin_token: str
):
    dormant = super_admin_factory("dormant@example.com", status="inactive")
    response = client.delete(f"/api/super-admins/{dormant.id}", headers=_headers(super_admin_token))
    assert response.status_code == 200


def test_delete_super_admin_not_found(client, super_admin_token: str):
    response = client.delete("/api/super-admins/9999", headers=_headers(super_admin_token))
    assert response.status_code == 404


def test_deleting_admin_creator_keeps_admin(
    client, super_admin, super_admin_factory, token_for
):
    """Admins created by a removed super admin are not removed with them."""
    creator = super_admin_factory("creator@example.com")
    creator_id = creator.id
    token = token_for(creator, AccountKind.SUPER_ADMIN)
    created = client.post(
        "/api/admin-users",
        json={"email": "made@example.com", "password": "12345678", "full_name": "Made"},
        headers=_headers(token),
    ).json()["data"]
    assert created["created_by"] == creator_id

    root_token = token_for(super_admin, AccountKind.SUPER_ADMIN)
    response = client.delete(f"/api/super-admins/{creator_id}", headers=_headers(root_token))
    assert response.status_code == 200

    response = client.get(f"/api/admin-users/{created['id']}", headers=_headers(root_token))
    assert response.status_code == 200


# ============================================================================
# PROFILE TESTS
# ============================================================================


def test_get_own_profile(client, super_admin, super_admin_token: str):
    response = client.get("/api/super-admins/profile/me", headers=_headers(super_admin_token))
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["id"] == super_admin.id
    assert data["email"] == super_admin.email
    assert "password_hash" not in data


def test_update_own_profile(client, super_admin_token: str):
    response = client.put(
        "/api/super-admins/profile/me",
        json={"full_name": "Renamed Root"},
        headers=_headers(super_admin_token),
    )
    assert response.status_code == 200
    assert response.json()["data"]["full_name"] == "Renamed Root"
    assert response.json()["message"] == "Profile updated successfully"


def test_update_own_profile_requires_a_field(client, super_admin_token: str):
    response = client.put(
        "/api/super-admins/profile/me", json={}, headers=_headers(super_admin_token)
    )
    assert response.status_code == 400
    assert response.json()["error"] == "At least one field (email or full_name) is required"


def test_update_own_profile_email_taken(client, super_admin_factory, super_admin_token: str):
    super_admin_factory("taken@example.com")
    response = client.put(
        "/api/super-admins/profile/me",
        json={"email": "taken@example.com"},
        headers=_headers(super_admin_token),
    )
    assert response.status_code == 409


def test_profile_requires_super_admin(client, admin_token: str):
    response = client.get("/api/super-admins/profile/me", headers=_headers(admin_token))
    assert response.status_code == 403


# ============================================================================
# CHANGE PASSWORD TESTS
# ============================================================================


def test_change_own_password(
    client, db: Session, super_admin, super_admin_password: str, super_admin_token: str
):
    response = client.post(
        "/api/super-admins/profile/change-password",
        json={"currentPassword": super_admin_password, "newPassword": "BrandNew123"},
        headers=_headers(super_admin_token),
    )
    assert response.status_code == 200
    assert response.json()["message"] == "Password changed successfully"
    db.refresh(super_admin)
    assert verify_password("BrandNew123", super_admin.password_hash)


def test_change_own_password_wrong_current(client, super_admin_token: str):
    response = client.post(
        "/api/super-admins/profile/change-password",
        json={"currentPassword": "not-it", "newPassword": "BrandNew123"},
        headers=_headers(super_admin_token),
    )
    assert response.status_code == 401
    assert response.json()["error"] == "Current password is incorrect"


def test_change_own_password_too_short(client, super_admin_password: str, super_admin_token: str):
    response = client.post(
        "/api/super-admins/profile/change-password",
        json={"currentPassword": super_admin_password, "newPassword": "short"},
        headers=_headers(super_admin_token),
    )
    assert response.status_code == 400
    assert response.json()["error"] == "New password must be at least 8 characters long"


def test_change_other_super_admin_password(
    client, db: Session, super_admin_factory, super_admin_token: str
):
    other = super_admin_factory("other@example.com", password="OtherPass1")
    response = client.post(
        f"/api/super-admins/{other.id}/change-password",
        json={"currentPassword": "OtherPass1", "newPassword": "OtherPass2"},
        headers=_headers(super_admin_token),
    )
    assert response.status_code == 200
    db.refresh(other)
    assert verify_password("OtherPass2", other.password_hash)
