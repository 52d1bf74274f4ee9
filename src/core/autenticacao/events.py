"""
Domain Events do Domínio de Autenticação.
"""

from dataclasses import dataclass
from typing import Optional

from src.core.shared.events import DomainEvent


@dataclass
class AdminAutenticadoEvent(DomainEvent):
    """
    Evento: Administrador entrou no painel.

    aggregate_id é o ID do administrador.
    """

    email: str = ""

    @property
    def aggregate_type(self) -> str:
        return "Sessao"

    @property
    def user_id(self) -> Optional[str]:
        return self.aggregate_id


@dataclass
class SessaoEncerradaEvent(DomainEvent):
    motivo: str = "logout"

    @property
    def aggregate_type(self) -> str:
        return "Sessao"

    @property
    def user_id(self) -> Optional[str]:
        return self.aggregate_id
