from src.models.carta import StatusCarta
from src.services.carta_service import list_leituras, registrar_leitura


def test_list_cartas_ordered_by_display_id(client, cartas):
    response = client.get("/api/cartas")
    assert response.status_code == 200
    assert [c["id_sumary_carta"] for c in response.json()] == [1, 2]


def test_get_carta_by_display_id(client, cartas):
    response = client.get("/api/cartas/1")
    assert response.status_code == 200
    assert response.json()["title"] == "O chamado"

    missing = client.get("/api/cartas/99")
    assert missing.status_code == 404
    assert missing.json()["message"] == "Carta não encontrada"


def test_registrar_leitura_uses_real_id(client, db, cartas):
    segunda = cartas[0]
    response = client.post("/api/cartas/registrar-leitura", json={"cartaId": 2, "userId": "user-1"})
    assert response.status_code == 200
    assert response.json() == {"message": "Leitura registrada com sucesso", "cartaId": segunda.id}

    receipt = db.query(StatusCarta).one()
    assert receipt.carta_id == segunda.id
    assert receipt.status == "lido"


def test_registrar_leitura_twice_is_not_an_error(client, db, cartas):
    client.post("/api/cartas/registrar-leitura", json={"cartaId": 1, "userId": "user-1"})
    response = client.post("/api/cartas/registrar-leitura", json={"cartaId": 1, "userId": "user-1"})

    assert response.status_code == 200
    assert response.json()["message"] == "Leitura já registrada anteriormente"
    assert db.query(StatusCarta).count() == 1


def test_registrar_leitura_validation(client, cartas):
    assert client.post("/api/cartas/registrar-leitura", json={"cartaId": 1}).status_code == 400
    unknown = client.post("/api/cartas/registrar-leitura", json={"cartaId": 42, "userId": "user-1"})
    assert unknown.status_code == 404


def test_registrar_leitura_with_token(client, cartas, registered_user, auth_headers):
    response = client.post("/api/cartas/registrar-leitura", json={"cartaId": 1}, headers=auth_headers)
    assert response.status_code == 200

    lidas = client.get("/api/cartas/lidas", headers=auth_headers).json()
    assert lidas == {"userId": registered_user["id"], "cartas": [1]}


def test_list_leituras(client, db, cartas):
    registrar_leitura(db, 2, "user-1")
    registrar_leitura(db, 1, "user-1")
    registrar_leitura(db, 1, "user-2")

    assert list_leituras(db, "user-1") == [1, 2]
    assert client.get("/api/cartas/lidas", params={"userId": "user-2"}).json()["cartas"] == [1]
    assert client.get("/api/cartas/lidas").status_code == 400


def test_cartas_lidas_with_token_ignores_other_user_id(client, cartas, registered_user, auth_headers):
    own = client.post(
        "/api/cartas/registrar-leitura", json={"cartaId": 2, "userId": "outro-usuario"}, headers=auth_headers
    )
    assert own.status_code == 200
    client.post("/api/cartas/registrar-leitura", json={"cartaId": 1, "userId": "outro-usuario"})

    response = client.get("/api/cartas/lidas", params={"userId": "outro-usuario"}, headers=auth_headers)
    assert response.json() == {"userId": registered_user["id"], "cartas": [2]}
