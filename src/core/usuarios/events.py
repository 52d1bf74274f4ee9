"""
Domain Events do Domínio de Usuários.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from src.core.shared.events import DomainEvent


@dataclass
class UsuarioCriadoEvent(DomainEvent):
    """
    Evento: Usuário cadastrado pelo painel.

    Attributes:
        email: E-mail do novo usuário
        papel: Chave do papel
    """

    email: str = ""
    papel: str = ""
    executado_por_id: Optional[str] = None

    @property
    def aggregate_type(self) -> str:
        return "Usuario"


@dataclass
class UsuarioAtualizadoEvent(DomainEvent):
    """
    Evento: Dados do usuário alterados.

    Attributes:
        campos: Nomes dos campos alterados (valores omitidos)
    """

    campos: List[str] = field(default_factory=list)
    executado_por_id: Optional[str] = None

    @property
    def aggregate_type(self) -> str:
        return "Usuario"


@dataclass
class UsuarioExcluidoEvent(DomainEvent):
    executado_por_id: Optional[str] = None

    @property
    def aggregate_type(self) -> str:
        return "Usuario"
