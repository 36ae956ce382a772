import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

import mentorhub.models  # noqa: F401
from mentorhub.core.identity import Identity, Role
from mentorhub.database import Base
from mentorhub.persistence import MemoryStore, SqlAlchemyStore
from mentorhub.services import projects
from mentorhub.services.members import add_member
from mentorhub.services.users import register_user

TEST_DATABASE_URL = "sqlite://"
engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def fake_hash(password: str) -> str:
    return f"hashed:{password}"


@pytest.fixture
def db_session() -> Session:
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(params=["memory", "sql"])
def store(request):
    """Every workflow test runs once per storage adapter."""
    if request.param == "memory":
        return MemoryStore()
    return SqlAlchemyStore(request.getfixturevalue("db_session"))


@pytest.fixture
def make_user(store):
    def _make_user(name: str, role: Role = Role.STUDENT, email: str = None):
        email = email or f"{name.lower()}@example.com"
        return register_user(
            store,
            {"name": name, "email": email, "password": "secret123", "role": role},
            hash_password=fake_hash,
        )

    return _make_user


@pytest.fixture
def as_identity():
    def _as_identity(user) -> Identity:
        return Identity(user_id=user.id, role=user.role.value)

    return _as_identity


@pytest.fixture
def mentor(make_user):
    return make_user("Mona", Role.MENTOR)


@pytest.fixture
def other_mentor(make_user):
    return make_user("Omar", Role.MENTOR)


@pytest.fixture
def student(make_user):
    return make_user("Sam")


@pytest.fixture
def student2(make_user):
    return make_user("Sara")


@pytest.fixture
def outsider(make_user):
    return make_user("Otto")


@pytest.fixture
def project(store, mentor, as_identity):
    return projects.create_project(store, as_identity(mentor), {"title": "Alpha"})


@pytest.fixture
def team(store, project, mentor, student, student2, as_identity):
    """``project`` with both students enrolled."""
    add_member(store, as_identity(mentor), project.id, student.id)
    add_member(store, as_identity(mentor), project.id, student2.id)
    return project
