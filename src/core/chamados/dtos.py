"""
Data Transfer Objects (DTOs) do Domínio de Chamados.

- Input DTOs: dados vindos dos formulários do painel
- Output DTOs: dados prontos para templates
- DTOs do dashboard: contadores por status e gráfico mensal
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from src.core.shared.datas import formatar_data

from .entities import ChamadoEntity


# =============================================================================
# INPUT DTOs (Entrada)
# =============================================================================

@dataclass(frozen=True)
class CriarChamadoInputDTO:
    """
    DTO de entrada para abrir chamado.

    Attributes:
        titulo: Título do chamado
        descricao: Descrição do problema
        cliente_id: Cliente que solicitou
        produto_id: Produto com problema
        executado_por_id: Administrador que registrou
    """

    titulo: str
    descricao: str
    cliente_id: str
    produto_id: str
    executado_por_id: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "titulo": self.titulo,
            "descricao": self.descricao,
            "cliente_id": self.cliente_id,
            "produto_id": self.produto_id,
            "executado_por_id": self.executado_por_id,
        }


@dataclass(frozen=True)
class AtualizarChamadoInputDTO:
    """
    DTO de entrada para atualizar chamado.

    Campos None não são alterados.
    """

    chamado_id: str
    titulo: Optional[str] = None
    descricao: Optional[str] = None
    status: Optional[str] = None
    observacao: Optional[str] = None
    executado_por_id: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "chamado_id": self.chamado_id,
            "titulo": self.titulo,
            "descricao": self.descricao,
            "status": self.status,
            "observacao": self.observacao,
            "executado_por_id": self.executado_por_id,
        }


# =============================================================================
# OUTPUT DTOs (Saída)
# =============================================================================

@dataclass
class ChamadoOutputDTO:
    """
    DTO de saída com os dados de um chamado.

    Attributes:
        status: Chave do status (PENDING)
        status_rotulo: Rótulo em português (Pendente)
        status_cor: Classe de cor do texto
    """

    id: str
    titulo: str
    descricao: str
    status: str
    status_rotulo: str
    status_cor: str
    cliente_id: str
    produto_id: str
    criado_por: Optional[str]
    criado_em: datetime
    nome_cliente: Optional[str] = None
    nome_produto: Optional[str] = None
    observacao: Optional[str] = None

    @classmethod
    def from_entity(cls, entity: ChamadoEntity) -> "ChamadoOutputDTO":
        return cls(
            id=entity.id,
            titulo=entity.titulo,
            descricao=entity.descricao,
            status=entity.status.name,
            status_rotulo=entity.status.rotulo,
            status_cor=entity.status.cor_texto,
            cliente_id=entity.cliente_id,
            produto_id=entity.produto_id,
            criado_por=entity.criado_por,
            criado_em=entity.criado_em,
            nome_cliente=entity.nome_cliente,
            nome_produto=entity.nome_produto,
            observacao=entity.observacao,
        )

    @property
    def criado_em_formatado(self) -> str:
        return formatar_data(self.criado_em)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "titulo": self.titulo,
            "descricao": self.descricao,
            "status": self.status,
            "status_rotulo": self.status_rotulo,
            "status_cor": self.status_cor,
            "cliente_id": self.cliente_id,
            "produto_id": self.produto_id,
            "criado_por": self.criado_por,
            "criado_em": self.criado_em.isoformat(),
            "nome_cliente": self.nome_cliente,
            "nome_produto": self.nome_produto,
            "observacao": self.observacao,
        }


@dataclass(frozen=True)
class OpcaoStatusDTO:
    """Opção de status para selects (chave e rótulo)."""

    chave: str
    rotulo: str

    def to_dict(self) -> dict:
        return {"value": self.chave, "label": self.rotulo}


# =============================================================================
# DASHBOARD
# =============================================================================

@dataclass(frozen=True)
class ContadorStatusDTO:
    """
    Contagem de chamados de um status (card do dashboard).

    Attributes:
        chave: Chave do status (PENDING)
        rotulo: Rótulo retornado pela API
        quantidade: Número de chamados
        cor: Classe de cor do texto
    """

    chave: str
    rotulo: str
    quantidade: int
    cor: str

    def to_dict(self) -> dict:
        return {
            "chave": self.chave,
            "rotulo": self.rotulo,
            "quantidade": self.quantidade,
            "cor": self.cor,
        }


@dataclass(frozen=True)
class ContagemMensalDTO:
    """Linha da contagem mensal: quantos chamados de um status no mês."""

    status: str
    mes: str
    quantidade: int


@dataclass
class SerieGraficoDTO:
    """Dataset do gráfico de linhas (formato Chart.js)."""

    rotulo: str
    dados: List[int]
    cor_borda: str
    cor_fundo: str

    def to_dict(self) -> dict:
        return {
            "label": self.rotulo,
            "data": self.dados,
            "borderColor": self.cor_borda,
            "backgroundColor": self.cor_fundo,
        }


@dataclass
class GraficoMensalDTO:
    """Dados completos do gráfico "Assistências por Mês"."""

    rotulos: List[str] = field(default_factory=list)
    series: List[SerieGraficoDTO] = field(default_factory=list)

    @property
    def vazio(self) -> bool:
        return not self.rotulos

    def to_dict(self) -> dict:
        return {
            "labels": self.rotulos,
            "datasets": [serie.to_dict() for serie in self.series],
        }
