"""
Entidades do Domínio de Chamados (assistências técnicas).

Entidades:
- StatusChamado: Estados de um chamado, com rótulo e cores do painel
- ChamadoEntity: Chamado aberto por um cliente para um produto

Cores:
    As cores por status são usadas nos cards do dashboard (classes
    de texto) e no gráfico mensal (rgb/rgba). Os mapas de cor são
    indexados pela chave do status (cards) ou pelo rótulo em
    português (gráfico, que recebe rótulos da API).
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional
import re
import uuid

from src.core.shared.exceptions import ValidationError


COR_TEXTO_PADRAO = "rgb(55, 65, 81)"
COR_BORDA_PADRAO = "rgb(201, 203, 207)"

CORES_TEXTO_STATUS = {
    "CREATED": "text-cyan-700",
    "ANALYSING": "text-yellow-500",
    "PENDING": "text-orange-600",
    "PROCESSING": "text-indigo-700",
    "FINISHED": "text-green-700",
    "CLOSED": "text-gray-800",
}

CLASSES_BORDA_STATUS = {
    "CREATED": "border border-cyan-700",
    "ANALYSING": "border border-yellow-400",
    "PENDING": "border border-orange-600",
    "PROCESSING": "border border-indigo-700",
    "FINISHED": "border border-green-600",
    "CLOSED": "border border-gray-800",
}

CORES_STATUS_TRADUZIDO = {
    "Criado": "rgb(14, 116, 144)",
    "Em análise": "rgb(253, 224, 71)",
    "Pendente": "rgb(234, 88, 12)",
    "Em andamento": "rgb(67, 56, 202)",
    "Finalizado": "rgb(22, 163, 74)",
    "Fechado": "rgb(55, 65, 81)",
}

_RE_DIGITOS = re.compile(r"\d+")


class StatusChamado(Enum):
    """
    Estados possíveis de um chamado.

    O nome do membro é a chave usada pela API (PENDING);
    o valor é o rótulo exibido ("Pendente").
    """

    CREATED = "Criado"
    ANALYSING = "Em análise"
    PENDING = "Pendente"
    PROCESSING = "Em andamento"
    FINISHED = "Finalizado"
    CLOSED = "Fechado"

    @property
    def rotulo(self) -> str:
        return self.value

    @property
    def cor_texto(self) -> str:
        """Classe de cor de texto usada nos cards."""
        return CORES_TEXTO_STATUS[self.name]

    @property
    def classe_borda(self) -> str:
        return CLASSES_BORDA_STATUS[self.name]

    @property
    def cor_rgb(self) -> str:
        """Cor da linha no gráfico mensal."""
        return CORES_STATUS_TRADUZIDO[self.value]

    @classmethod
    def from_string(cls, value: str) -> "StatusChamado":
        """
        Converte chave ("PENDING") ou rótulo ("Pendente") para enum.

        Raises:
            ValueError: Se valor inválido
        """
        try:
            return cls[value.strip().upper()]
        except (KeyError, AttributeError):
            pass

        for status in cls:
            if status.value.lower() == str(value).strip().lower():
                return status

        raise ValueError(f"Status inválido: {value}")


def cor_texto_status(chave: str) -> str:
    """Classe de texto do status, ou a cor neutra se desconhecido."""
    return CORES_TEXTO_STATUS.get(chave, COR_TEXTO_PADRAO)


def cor_borda_status(chave: str) -> str:
    return CLASSES_BORDA_STATUS.get(chave, COR_BORDA_PADRAO)


def cor_borda_traduzida(rotulo: str) -> str:
    """Cor rgb do status a partir do rótulo em português."""
    return CORES_STATUS_TRADUZIDO.get(rotulo, COR_BORDA_PADRAO)


def cor_fundo(rotulo: str, opacidade: float = 0.5) -> str:
    """
    Cor de preenchimento do gráfico: a cor do status com transparência.

    Example:
        >>> cor_fundo("Pendente", 0.2)
        'rgba(234, 88, 12, 0.2)'
        >>> cor_fundo("Desconhecido")
        'rgba(201, 203, 207, 0.5)'
    """
    componentes = _RE_DIGITOS.findall(cor_borda_traduzida(rotulo))
    if len(componentes) >= 3:
        r, g, b = componentes[:3]
        return f"rgba({r}, {g}, {b}, {opacidade})"
    return f"rgba(201, 203, 207, {opacidade})"


@dataclass
class ChamadoEntity:
    """
    Entidade de Domínio: Chamado (assistência técnica).

    Invariantes:
    - Título e descrição são obrigatórios
    - Todo chamado pertence a um cliente e a um produto
    - Chamados novos começam em CREATED

    Attributes:
        id: Identificador (atribuído pela API ao criar)
        titulo: Título do chamado
        descricao: Descrição do problema
        status: Estado atual
        cliente_id: ID do cliente que abriu
        produto_id: ID do produto com problema
        criado_por: ID de quem registrou
        criado_em: Data de abertura
        nome_cliente: Nome do cliente (somente leitura)
        nome_produto: Nome do produto (somente leitura)
        observacao: Observação do técnico
    """

    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    titulo: str = ""
    descricao: str = ""
    status: StatusChamado = StatusChamado.CREATED
    cliente_id: str = ""
    produto_id: str = ""
    criado_por: Optional[str] = None
    criado_em: datetime = field(default_factory=datetime.now)
    nome_cliente: Optional[str] = None
    nome_produto: Optional[str] = None
    observacao: Optional[str] = None

    TITULO_MAX_LENGTH: int = 200

    @classmethod
    def criar(
        cls,
        titulo: str,
        descricao: str,
        cliente_id: str,
        produto_id: str,
        criado_por: Optional[str] = None,
    ) -> "ChamadoEntity":
        """
        Factory method com validações.

        Raises:
            ValidationError: Se dados obrigatórios ausentes
        """
        cls._validar_titulo(titulo)
        cls._validar_obrigatorio(descricao, "descricao", "Descrição é obrigatória")
        cls._validar_obrigatorio(cliente_id, "cliente_id", "Cliente é obrigatório")
        cls._validar_obrigatorio(produto_id, "produto_id", "Produto é obrigatório")

        return cls(
            titulo=titulo.strip(),
            descricao=descricao.strip(),
            cliente_id=cliente_id,
            produto_id=produto_id,
            criado_por=criado_por,
            status=StatusChamado.CREATED,
        )

    @classmethod
    def _validar_titulo(cls, titulo: str) -> None:
        if not titulo or not titulo.strip():
            raise ValidationError("Título é obrigatório", field="titulo")
        if len(titulo.strip()) > cls.TITULO_MAX_LENGTH:
            raise ValidationError(
                f"Título deve ter no máximo {cls.TITULO_MAX_LENGTH} caracteres",
                field="titulo"
            )

    @staticmethod
    def _validar_obrigatorio(valor: str, campo: str, mensagem: str) -> None:
        if not valor or not str(valor).strip():
            raise ValidationError(mensagem, field=campo)

    def atualizar(
        self,
        titulo: Optional[str] = None,
        descricao: Optional[str] = None,
        status: Optional[StatusChamado] = None,
        observacao: Optional[str] = None,
    ) -> dict:
        """
        Aplica alterações parciais.

        Returns:
            Dict campo → (anterior, novo) apenas com o que mudou
        """
        alteracoes = {}

        if titulo is not None:
            self._validar_titulo(titulo)
            if titulo.strip() != self.titulo:
                alteracoes["titulo"] = (self.titulo, titulo.strip())
                self.titulo = titulo.strip()

        if descricao is not None:
            self._validar_obrigatorio(descricao, "descricao", "Descrição é obrigatória")
            if descricao.strip() != self.descricao:
                alteracoes["descricao"] = (self.descricao, descricao.strip())
                self.descricao = descricao.strip()

        if status is not None and status != self.status:
            alteracoes["status"] = (self.status.name, status.name)
            self.status = status

        if observacao is not None and observacao != self.observacao:
            alteracoes["observacao"] = (self.observacao, observacao)
            self.observacao = observacao

        return alteracoes

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ChamadoEntity):
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)
