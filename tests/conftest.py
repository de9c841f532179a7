import os
import tempfile

# Set environment variables BEFORE any imports that might use settings
_test_db_dir = tempfile.mkdtemp()
_test_db_path = os.path.join(_test_db_dir, "test_directory_admin.db")
os.environ["DATABASE_URL"] = f"sqlite:///{_test_db_path}"
os.environ["SECRET_KEY"] = "test-secret-key-min-32-characters-long-for-testing"
os.environ["ALGORITHM"] = "HS256"
os.environ["ACCESS_TOKEN_EXPIRE_MINUTES"] = "30"
os.environ["FIRST_SUPER_ADMIN_EMAIL"] = "root@directory.example.com"
os.environ["FIRST_SUPER_ADMIN_PASSWORD"] = "RootPass123!"
os.environ["FIRST_SUPER_ADMIN_NAME"] = "Root Admin"
for _smtp_var in ("SMTP_HOST", "SMTP_PORT", "SMTP_USER", "SMTP_PASSWORD", "SMTP_FROM_EMAIL"):
    os.environ[_smtp_var] = ""

import pytest
from alembic import command
from alembic.config import Config
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import Session, sessionmaker

from directory_admin.api.deps import get_db
from directory_admin.core.config import load_settings
from directory_admin.core.security import get_password_hash
from directory_admin.db.models.admin_user import AdminUser as AdminUserModel
from directory_admin.db.models.super_admin import SuperAdmin as SuperAdminModel
from directory_admin.domain.accounts import AccountKind, token_claims
from directory_admin.main import app
from directory_admin.services.auth import AccountSecurity


def make_token(account, kind: AccountKind) -> str:
    """Issue an access token the same way a successful login does."""
    return app.state.tokens.issue(token_claims(account, kind))


@pytest.fixture(scope="function")
def db_session():
    """Create a fresh database for each test and run migrations."""
    temp_db_dir = tempfile.mkdtemp()
    test_db_path = os.path.join(temp_db_dir, "test.db")
    test_db_url = f"sqlite:///{test_db_path}"

    test_engine = create_engine(
        test_db_url,
        connect_args={"check_same_thread": False},
    )

    # Enable WAL mode to reduce locking issues
    @event.listens_for(test_engine, "connect")
    def set_sqlite_pragma(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.close()

    TestingSessionLocal = sessionmaker(
        autocommit=False, autoflush=False, bind=test_engine
    )

    # Run Alembic migrations to set up the schema and seed the first super admin
    alembic_cfg = Config("alembic.ini")
    alembic_cfg.set_main_option("sqlalchemy.url", test_db_url)
    command.upgrade(alembic_cfg, "head")

    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        test_engine.dispose()
        for suffix in ("", "-wal", "-shm"):
            path = f"{test_db_path}{suffix}"
            if os.path.exists(path):
                os.remove(path)
        if os.path.exists(temp_db_dir):
            os.rmdir(temp_db_dir)


@pytest.fixture(scope="function")
def client(db_session):
    """Create a test client with database dependency override."""

    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    yield TestClient(app)

    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def db(db_session):
    """Alias for db_session to match test naming conventions."""
    return db_session


@pytest.fixture(scope="function")
def security(db: Session) -> AccountSecurity:
    return AccountSecurity(db, app.state.tokens)


@pytest.fixture(scope="function")
def super_admin(db: Session) -> SuperAdminModel:
    """The super admin seeded by migration 001."""
    settings = load_settings()
    account = (
        db.query(SuperAdminModel)
        .filter(SuperAdminModel.email == settings.first_super_admin_email)
        .first()
    )
    if not account:
        raise RuntimeError("Seeded super admin not found. Check migration 001.")
    return account


@pytest.fixture(scope="function")
def super_admin_password() -> str:
    return load_settings().first_super_admin_password


@pytest.fixture(scope="function")
def super_admin_token(super_admin: SuperAdminModel) -> str:
    return make_token(super_admin, AccountKind.SUPER_ADMIN)


def create_admin(
    db: Session,
    email: str = "admin@directory.example.com",
    password: str = "AdminPass123!",
    full_name: str = "Ada Admin",
    role: str = "admin",
    status: str = "active",
    department: str | None = "Operations",
) -> AdminUserModel:
    admin = AdminUserModel(
        email=email,
        password_hash=get_password_hash(password),
        full_name=full_name,
        role=role,
        status=status,
        department=department,
    )
    db.add(admin)
    db.commit()
    db.refresh(admin)
    return admin


def create_super_admin(
    db: Session,
    email: str,
    password: str = "SuperPass123!",
    full_name: str = "Second Super",
    status: str = "active",
) -> SuperAdminModel:
    account = SuperAdminModel(
        email=email,
        password_hash=get_password_hash(password),
        full_name=full_name,
        status=status,
    )
    db.add(account)
    db.commit()
    db.refresh(account)
    return account


@pytest.fixture(scope="function")
def admin_user(db: Session) -> AdminUserModel:
    return create_admin(db)


@pytest.fixture(scope="function")
def admin_password() -> str:
    return "AdminPass123!"


@pytest.fixture(scope="function")
def admin_token(admin_user: AdminUserModel) -> str:
    return make_token(admin_user, AccountKind.ADMIN)


@pytest.fixture(scope="function")
def admin_factory(db: Session):
    """Create admin users with overridable fields."""

    def factory(**fields) -> AdminUserModel:
        return create_admin(db, **fields)

    return factory


@pytest.fixture(scope="function")
def super_admin_factory(db: Session):
    def factory(email: str, **fields) -> SuperAdminModel:
        return create_super_admin(db, email, **fields)

    return factory


@pytest.fixture(scope="function")
def token_for():
    """Issue a token for an existing account."""
    return make_token
