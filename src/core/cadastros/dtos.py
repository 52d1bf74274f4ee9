"""
Data Transfer Objects (DTOs) do Domínio de Cadastros.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from src.core.shared.datas import formatar_data

from .entities import Arquivo, ArquivoUpload


@dataclass(frozen=True)
class SalvarRegistroInputDTO:
    """
    DTO de entrada para criar ou editar um registro de cadastro.

    Attributes:
        recurso: Caminho do recurso na API ("products", "contacts"...)
        dados: Campos do registro (nomes do domínio)
        registro_id: Preenchido apenas na edição
    """

    recurso: str
    dados: Dict[str, Any] = field(default_factory=dict)
    registro_id: Optional[str] = None
    executado_por_id: Optional[str] = None


@dataclass(frozen=True)
class EnviarArquivosInputDTO:
    """
    DTO de entrada para envio de arquivos.

    Attributes:
        arquivos: Conteúdos a enviar
        caminho: Pasta lógica (ex: "produtos/images")
        tipo: Tipo informado à API (IMAGE, DOCUMENT...)
        produto_id: Produto dono (ou video_id)
    """

    arquivos: List[ArquivoUpload]
    caminho: str
    tipo: str
    produto_id: Optional[str] = None
    video_id: Optional[str] = None
    executado_por_id: Optional[str] = None


@dataclass
class RegistroOutputDTO:
    """Registro de cadastro pronto para template/tabela."""

    recurso: str
    id: str
    dados: Dict[str, Any]

    @classmethod
    def from_entity(cls, recurso: str, entity) -> "RegistroOutputDTO":
        return cls(recurso=recurso, id=entity.id, dados=entity.to_dict())

    def to_dict(self) -> dict:
        return {**self.dados, "id": self.id}


@dataclass
class ArquivoOutputDTO:
    id: str
    nome_arquivo: Optional[str]
    tipo: Optional[str]
    uri: Optional[str]
    criado_em: str = ""

    @classmethod
    def from_entity(cls, arquivo: Arquivo) -> "ArquivoOutputDTO":
        return cls(
            id=arquivo.id,
            nome_arquivo=arquivo.nome_arquivo,
            tipo=arquivo.tipo.value if arquivo.tipo else None,
            uri=arquivo.uri,
            criado_em=formatar_data(arquivo.criado_em) if arquivo.criado_em else "",
        )
