"""
Domain Events do Domínio de Chamados.

Eventos:
- ChamadoCriadoEvent: Chamado aberto pelo painel
- ChamadoAtualizadoEvent: Dados ou status alterados
- ChamadoExcluidoEvent: Chamado removido
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from src.core.shared.events import DomainEvent


@dataclass
class ChamadoCriadoEvent(DomainEvent):
    """
    Evento: Chamado foi aberto.

    Attributes:
        titulo: Título do chamado
        cliente_id: Cliente solicitante
        produto_id: Produto relacionado
        executado_por_id: Administrador que registrou
    """

    titulo: str = ""
    cliente_id: str = ""
    produto_id: str = ""
    executado_por_id: Optional[str] = None

    @property
    def aggregate_type(self) -> str:
        return "Chamado"


@dataclass
class ChamadoAtualizadoEvent(DomainEvent):
    """
    Evento: Chamado foi alterado.

    Attributes:
        alteracoes: campo → [anterior, novo]
    """

    alteracoes: Dict[str, Any] = field(default_factory=dict)
    executado_por_id: Optional[str] = None

    @property
    def aggregate_type(self) -> str:
        return "Chamado"

    @property
    def mudou_status(self) -> bool:
        return "status" in self.alteracoes


@dataclass
class ChamadoExcluidoEvent(DomainEvent):
    executado_por_id: Optional[str] = None

    @property
    def aggregate_type(self) -> str:
        return "Chamado"
