import json

import pytest

from scripts.import_cartas import import_cartas, load_cartas
from src.models.carta import Carta


def test_import_cartas_creates_and_updates(db, tmp_path):
    path = tmp_path / "cartas.json"
    path.write_text(json.dumps([
        {"id_sumary_carta": 1, "title": "O chamado", "body": "Texto"},
        {"id_sumary_carta": 2, "title": "A oração"},
    ]), encoding="utf-8")

    assert import_cartas(db, load_cartas(path)) == (2, 0)

    changed = [{"id_sumary_carta": 1, "title": "O chamado (revisada)", "body": "Texto"}]
    assert import_cartas(db, changed) == (0, 1)
    assert db.query(Carta).filter(Carta.id_sumary_carta == 1).one().title == "O chamado (revisada)"
    assert db.query(Carta).count() == 2


def test_load_cartas_rejects_invalid_items(tmp_path):
    path = tmp_path / "cartas.json"
    path.write_text(json.dumps([{"id_sumary_carta": 1}]), encoding="utf-8")
    with pytest.raises(ValueError):
        load_cartas(path)


def test_import_cartas_repeated_id_keeps_last_entry(db):
    items = [
        {"id_sumary_carta": 1, "title": "O chamado", "body": "Rascunho"},
        {"id_sumary_carta": 1, "title": "O chamado (revisada)", "body": "Texto final"},
    ]
    assert import_cartas(db, items) == (1, 0)

    carta = db.query(Carta).one()
    assert carta.title == "O chamado (revisada)"
    assert carta.body == "Texto final"


def test_load_cartas_rejects_non_object_items(tmp_path):
    path = tmp_path / "cartas.json"
    path.write_text(json.dumps([1, "O chamado"]), encoding="utf-8")
    with pytest.raises(ValueError):
        load_cartas(path)
