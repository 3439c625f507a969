from typing import Any


def normalize_email(email: str) -> str:
    """
    Normaliza um email para busca e armazenamento.

    Exemplos:
    - "  Maria@Exemplo.com " -> "maria@exemplo.com"
    - "JOAO@igreja.org.br" -> "joao@igreja.org.br"
    """
    if not email:
        return ""
    return email.strip().lower()


def looks_like_email(value: Any) -> bool:
    """Checagem mínima usada pelos endpoints que aceitam emails antigos já gravados."""
    return isinstance(value, str) and "@" in value.strip()
