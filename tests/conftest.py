import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from storefront.core import security
from storefront.core.config import Settings
from storefront.core.security import hash_password, issue_token
from storefront.database import get_session
from storefront.main import create_app
from storefront.models.product import Product, Service, ServiceOffice
from storefront.models.user import User

PASSWORD = "secret123"
SECRET_KEY = "test-signing-secret"


@pytest.fixture(autouse=True)
def fast_bcrypt(monkeypatch):
    # minimum cost keeps the suite fast; hashes stay valid bcrypt
    monkeypatch.setattr(security, "BCRYPT_ROUNDS", 4)


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def settings(tmp_path):
    return Settings(
        _env_file=None,
        SECRET_KEY=SECRET_KEY,
        UPLOAD_DIR=str(tmp_path / "uploads"),
    )


@pytest.fixture
def app(engine, settings):
    app = create_app(settings)

    def override_get_session():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = override_get_session
    return app


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def make_user(session):
    def _make_user(username: str, role: str = "user", password: str = PASSWORD) -> User:
        user = User(
            username=username,
            email=f"{username}@example.com",
            password_hash=hash_password(password),
            role=role,
        )
        session.add(user)
        session.commit()
        session.refresh(user)
        return user

    return _make_user


@pytest.fixture
def user(make_user):
    return make_user("alice")


@pytest.fixture
def admin(make_user):
    return make_user("adam", role="admin")


@pytest.fixture
def super_admin(make_user):
    return make_user("root", role="super_admin")


def bearer(user: User) -> dict[str, str]:
    token = issue_token(user.id, user.role, settings=Settings(_env_file=None, SECRET_KEY=SECRET_KEY))
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def product(session):
    product = Product(
        name="Vitamin C Complex",
        description="Daily immune support",
        price=1000,
        category="Immune Boosters",
        images=["/images/vitc.png"],
    )
    session.add(product)
    session.commit()
    session.refresh(product)
    return product


@pytest.fixture
def other_product(session):
    product = Product(
        name="Calcium Kids",
        description="Chewable calcium",
        price=500,
        category="Smart Kids",
    )
    session.add(product)
    session.commit()
    session.refresh(product)
    return product


@pytest.fixture
def service(session):
    service = Service(name="Blood Pressure Check", description="Quick checkup", category="Checkups")
    session.add(service)
    session.commit()
    session.refresh(service)
    return service


@pytest.fixture
def office(session):
    office = ServiceOffice(name="Nairobi CBD", address="Moi Avenue", county="Nairobi")
    session.add(office)
    session.commit()
    session.refresh(office)
    return office
