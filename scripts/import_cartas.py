"""
Script para importar/atualizar as cartas a partir de um arquivo JSON.
Executar a partir da raiz do backend: python scripts/import_cartas.py cartas.json

O arquivo deve conter uma lista de objetos:
    [{"id_sumary_carta": 1, "title": "...", "body": "..."}, ...]

As cartas são identificadas pelo id_sumary_carta: se já existir, título e corpo
são atualizados; caso contrário a carta é criada.
"""
import json
import logging
import sys
from pathlib import Path

BACKEND_DIR = Path(__file__).resolve().parent.parent
if str(BACKEND_DIR) not in sys.path:
    sys.path.insert(0, str(BACKEND_DIR))

from src.database import Base, SessionLocal, engine  # noqa: E402
from src.models.carta import Carta  # noqa: E402

logger = logging.getLogger("import_cartas")


def load_cartas(path: Path) -> list:
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, list):
        raise ValueError("O arquivo deve conter uma lista de cartas")

    for item in data:
        if not isinstance(item, dict):
            raise ValueError(f"Carta inválida, esperado um objeto: {item}")
        if "id_sumary_carta" not in item or not item.get("title"):
            raise ValueError(f"Carta sem id_sumary_carta ou title: {item}")
    return data


def import_cartas(db, items: list) -> tuple:
    """Insere ou atualiza as cartas. Retorna (criadas, atualizadas)."""
    created = 0
    updated = 0
    # Cartas novas desta execução ainda não estão no banco (autoflush desligado)
    pending = {}
    for item in items:
        numero = int(item["id_sumary_carta"])
        carta = pending.get(numero)
        if carta is None:
            carta = db.query(Carta).filter(Carta.id_sumary_carta == numero).first()
        if carta is None:
            carta = Carta(id_sumary_carta=numero, title=item["title"], body=item.get("body"))
            db.add(carta)
            pending[numero] = carta
            created += 1
        elif carta.title != item["title"] or carta.body != item.get("body"):
            carta.title = item["title"]
            carta.body = item.get("body")
            if numero not in pending:
                updated += 1
    db.commit()
    return created, updated


def main(argv: list) -> int:
    logging.basicConfig(level=logging.INFO)

    if len(argv) != 2:
        print("Uso: python scripts/import_cartas.py <arquivo.json>")
        return 1

    path = Path(argv[1])
    if not path.exists():
        logger.error(f"Arquivo não encontrado: {path}")
        return 1

    items = load_cartas(path)
    Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        created, updated = import_cartas(db, items)
    except Exception:
        db.rollback()
        logger.error("Erro ao importar cartas", exc_info=True)
        raise
    finally:
        db.close()

    logger.info(f"Importação concluída: {created} criadas, {updated} atualizadas, {len(items)} no arquivo")
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv))
