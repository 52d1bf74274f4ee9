"""
Funções de data usadas nas listagens e formulários.
"""

from datetime import date, datetime
from typing import Union
import re

_RE_DATA_HORA_ISO = re.compile(
    r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(\.\d{3})?(Z|[+-]\d{2}:\d{2})?$"
)


def eh_data_hora_valida(valor: str) -> bool:
    """
    Verifica se o texto está no formato ISO-8601 retornado pela API.

    Aceita milissegundos e sufixo de timezone opcionais:
    "2024-03-15T10:30:00", "2024-03-15T10:30:00.000Z",
    "2024-03-15T10:30:00-03:00".
    """
    if not isinstance(valor, str) or not _RE_DATA_HORA_ISO.match(valor):
        return False
    try:
        _parse_iso(valor)
    except ValueError:
        # formato certo, data impossível ("2024-02-30T...")
        return False
    return True


def _parse_iso(valor: str) -> datetime:
    if valor.endswith("Z"):
        valor = valor[:-1] + "+00:00"
    return datetime.fromisoformat(valor)


def converter_data_hora(valor: str) -> datetime:
    """
    Converte data/hora ISO da API para datetime.

    Raises:
        ValueError: Se o texto não for uma data/hora ISO
    """
    if not eh_data_hora_valida(valor):
        raise ValueError(f"Data/hora inválida: {valor}")
    return _parse_iso(valor)


def formatar_data(valor: Union[datetime, date, str]) -> str:
    """
    Formata data no padrão brasileiro (dd/MM/yyyy).

    Example:
        >>> formatar_data("2024-03-15T10:30:00.000Z")
        '15/03/2024'
    """
    if isinstance(valor, str):
        if eh_data_hora_valida(valor):
            valor = converter_data_hora(valor)
        else:
            valor = date.fromisoformat(valor[:10])
    return valor.strftime("%d/%m/%Y")
