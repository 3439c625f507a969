import os

# Banco em memória e sem envio de emails durante os testes
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET_KEY"] = "test-secret"
os.environ.pop("RESEND_API_KEY", None)

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from src.main import app  # noqa: E402
from src.database import Base, SessionLocal, engine  # noqa: E402
from src.models.carta import Carta  # noqa: E402


@pytest.fixture(autouse=True)
def reset_database():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture
def cartas(db):
    items = [
        Carta(id_sumary_carta=2, title="A oração", body="Segunda carta"),
        Carta(id_sumary_carta=1, title="O chamado", body="Primeira carta"),
    ]
    db.add_all(items)
    db.commit()
    return items


@pytest.fixture
def registered_user(client):
    payload = {"email": "maria@exemplo.com", "password": "segredo123", "name": "Maria"}
    response = client.post("/api/auth/register", json=payload)
    assert response.status_code == 201
    return {**payload, "id": response.json()["userId"]}


@pytest.fixture
def auth_headers(client, registered_user):
    response = client.post(
        "/api/auth/login",
        json={"email": registered_user["email"], "password": registered_user["password"]},
    )
    token = response.json()["session"]["access_token"]
    return {"Authorization": f"Bearer {token}"}
