from src.models.account_user import AccountUser
from src.models.auth_user import AuthUser
from src.services.account_service import register_account


def test_register_creates_identity_and_profile(client, db):
    response = client.post(
        "/api/auth/register",
        json={"email": "Joao@Exemplo.com", "password": "segredo123", "name": "João"},
    )
    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "Usuário criado com sucesso"
    assert body["email"] == "joao@exemplo.com"
    assert body["name"] == "João"
    assert body["accountUser"]["id"] == body["userId"]
    assert body["accountUser"]["user_id"] == body["userId"]
    assert body["accountUser"]["status"] == "active"
    assert "hashed_password" not in body["accountUser"]

    auth_user = db.query(AuthUser).filter(AuthUser.email == "joao@exemplo.com").one()
    assert auth_user.hashed_password != "segredo123"


def test_register_duplicate_email_returns_409(client, registered_user):
    response = client.post(
        "/api/auth/register",
        json={"email": "MARIA@exemplo.com", "password": "outra123", "name": "Outra"},
    )
    assert response.status_code == 409
    assert response.json()["message"] == "Este email já está registrado"


def test_register_missing_fields_returns_400(client):
    response = client.post("/api/auth/register", json={"email": "a@exemplo.com", "password": "segredo123"})
    assert response.status_code == 400
    assert "name" in response.json()["fields"]

    response = client.post("/api/auth/register", json={"email": "a@exemplo.com", "password": "123", "name": "A"})
    assert response.status_code == 400


def test_register_links_existing_profile(db):
    db.add(AccountUser(id="legado-1", email="ana@exemplo.com", name="Antigo", status="inactive"))
    db.commit()

    auth_user, profile = register_account(db, "ana@exemplo.com", "segredo123", "Ana")

    assert profile.id == auth_user.id
    assert profile.user_id == auth_user.id
    assert profile.name == "Ana"
    assert profile.status == "active"
    assert profile.updated_at is not None
    assert db.query(AccountUser).count() == 1


def test_login_returns_profile_and_session(client, registered_user):
    response = client.post(
        "/api/auth/login",
        json={"email": "maria@exemplo.com", "password": "segredo123"},
    )
    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Login realizado com sucesso"
    assert body["user"]["name"] == "Maria"
    assert body["user"]["id"] == registered_user["id"]
    assert body["session"]["access_token"]
    assert body["session"]["refresh_token"]


def test_login_without_profile_falls_back_to_identity(client, db, registered_user):
    db.query(AccountUser).delete()
    db.commit()

    response = client.post(
        "/api/auth/login",
        json={"email": "maria@exemplo.com", "password": "segredo123"},
    )
    assert response.status_code == 200
    user = response.json()["user"]
    assert user["id"] == registered_user["id"]
    assert user["user_metadata"] == {"name": "Maria"}


def test_login_with_wrong_credentials_returns_401(client, registered_user):
    wrong_password = client.post(
        "/api/auth/login",
        json={"email": "maria@exemplo.com", "password": "errada"},
    )
    unknown_email = client.post(
        "/api/auth/login",
        json={"email": "ninguem@exemplo.com", "password": "segredo123"},
    )
    assert wrong_password.status_code == 401
    assert unknown_email.status_code == 401
    assert wrong_password.json()["message"] == "Credenciais inválidas"
    assert unknown_email.json()["message"] == "Credenciais inválidas"


def test_login_missing_email_returns_400(client):
    response = client.post("/api/auth/login", json={"password": "segredo123"})
    assert response.status_code == 400
    assert response.json()["success"] is False


def test_current_user_requires_token(client, auth_headers):
    assert client.get("/api/user").status_code == 401
    assert client.get("/api/user").json()["message"] == "Não autenticado"
    assert client.get("/api/user", headers={"Authorization": "Bearer lixo"}).status_code == 401

    response = client.get("/api/user", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["email"] == "maria@exemplo.com"


def test_refresh_issues_new_session(client, registered_user):
    login = client.post(
        "/api/auth/login",
        json={"email": "maria@exemplo.com", "password": "segredo123"},
    ).json()

    response = client.post("/api/auth/refresh", json={"refresh_token": login["session"]["refresh_token"]})
    assert response.status_code == 200
    assert response.json()["session"]["user"]["id"] == registered_user["id"]

    rejected = client.post("/api/auth/refresh", json={"refresh_token": login["session"]["access_token"]})
    assert rejected.status_code == 401
