from directory_admin.db.models.super_admin import SuperAdmin
from directory_admin.db.models.admin_user import AdminUser
from directory_admin.db.models.password_reset_token import PasswordResetToken
from directory_admin.db.models.doctor import Doctor
from directory_admin.db.models.clinic import Clinic
from directory_admin.db.models.end_user import EndUser

__all__ = ["SuperAdmin", "AdminUser", "PasswordResetToken", "Doctor", "Clinic", "EndUser"]
