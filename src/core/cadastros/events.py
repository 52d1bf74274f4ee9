"""
Domain Events do Domínio de Cadastros.

O recurso (products, contacts, services, videos) vai nos dados do
evento; o tipo do agregado é derivado dele.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from src.core.shared.events import DomainEvent

from .entities import Recurso


@dataclass
class _RegistroEvent(DomainEvent):
    recurso: str = ""
    executado_por_id: Optional[str] = None

    @property
    def aggregate_type(self) -> str:
        try:
            return Recurso.from_string(self.recurso).entidade
        except ValueError:
            return "Registro"


@dataclass
class RegistroCriadoEvent(_RegistroEvent):
    pass


@dataclass
class RegistroAtualizadoEvent(_RegistroEvent):
    """
    Attributes:
        campos: Campos alterados
    """

    campos: List[str] = field(default_factory=list)


@dataclass
class RegistroExcluidoEvent(_RegistroEvent):
    pass


@dataclass
class ArquivosEnviadosEvent(DomainEvent):
    """
    Evento: Arquivos enviados para um produto ou vídeo.

    aggregate_id é o produto ou vídeo dono dos arquivos.
    """

    arquivo_ids: List[str] = field(default_factory=list)
    caminho: str = ""
    tipo: str = ""
    video_id: Optional[str] = None
    executado_por_id: Optional[str] = None

    @property
    def aggregate_type(self) -> str:
        return "Video" if self.video_id else "Produto"


@dataclass
class ArquivoRemovidoEvent(DomainEvent):
    executado_por_id: Optional[str] = None

    @property
    def aggregate_type(self) -> str:
        return "Arquivo"
