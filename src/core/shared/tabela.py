"""
Tabela Dinâmica - filtro, ordenação, paginação e seleção de linhas.

Abstração usada por todas as listagens do painel (chamados,
usuários, produtos, contatos, serviços, vídeos). Recebe as linhas
já carregadas da API e um EstadoTabela (vindo da querystring) e
devolve a PaginaTabela a ser exibida.

Pipeline:
    linhas → filtros por coluna → busca global (fuzzy)
           → ordenação (natural, multi-coluna) → paginação

Regras:
- Busca global usa ranking aproximado (ver ranking.py); a linha
  passa se qualquer coluna filtrável atingir MATCHES
- Sem ordenação explícita, a busca global ordena por relevância
- Valores vazios ficam sempre no fim, em qualquer direção
- Página fora do intervalo é ajustada para a primeira/última
- Tamanhos de página permitidos: 5, 8, 16, 48, 84 (padrão 8)

Example:
    tabela = TabelaDinamica([
        Coluna("titulo", "Título"),
        Coluna("status", "Status"),
        Coluna("cliente", "Cliente", acessor="cliente.nome"),
    ])
    estado = EstadoTabela(busca_global="pend", ordenacao=[("titulo", False)])
    pagina = tabela.aplicar(chamados, estado)
    pagina.rotulo  # "Página 1 de 3"
"""

from collections import Counter
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from functools import cmp_to_key
from typing import Any, Callable, Dict, List, Optional, Set, Tuple, Union
import math

from .datas import formatar_data
from .exceptions import ValidationError
from .ranking import Ranking, calcular_ranking, comparar_alfanumerico, remover_acentos


TAMANHOS_PAGINA = (5, 8, 16, 48, 84)
TAMANHO_PAGINA_PADRAO = 8

Intervalo = Tuple[Optional[float], Optional[float]]
Filtro = Union[str, Intervalo]


@dataclass
class Coluna:
    """
    Definição de uma coluna da tabela.

    Attributes:
        chave: Identificador da coluna (usado na querystring)
        titulo: Cabeçalho exibido
        ordenavel: Se aceita ordenação
        filtravel: Se participa da busca global e dos filtros
        acessor: Caminho com pontos ("cliente.nome") ou função
            que extrai o valor da linha. Padrão: a própria chave.
    """

    chave: str
    titulo: str
    ordenavel: bool = True
    filtravel: bool = True
    acessor: Optional[Union[str, Callable[[Any], Any]]] = None

    def valor(self, linha: Any) -> Any:
        """Extrai o valor da coluna para uma linha (dict ou objeto)."""
        acessor = self.acessor or self.chave
        if callable(acessor):
            return acessor(linha)

        atual = linha
        for parte in acessor.split("."):
            if atual is None:
                return None
            if isinstance(atual, dict):
                atual = atual.get(parte)
            else:
                atual = getattr(atual, parte, None)
        return atual


@dataclass
class EstadoTabela:
    """
    Estado de interação do usuário com a tabela.

    Attributes:
        busca_global: Texto da busca em todas as colunas
        filtros: Filtro por coluna (texto ou intervalo numérico)
        ordenacao: Lista de (chave, descendente), em ordem de prioridade
        pagina: Índice da página (começa em 0)
        tamanho_pagina: Linhas por página
        selecionados: IDs das linhas marcadas
    """

    busca_global: str = ""
    filtros: Dict[str, Filtro] = field(default_factory=dict)
    ordenacao: List[Tuple[str, bool]] = field(default_factory=list)
    pagina: int = 0
    tamanho_pagina: int = TAMANHO_PAGINA_PADRAO
    selecionados: Set[str] = field(default_factory=set)

    def __post_init__(self):
        if self.tamanho_pagina not in TAMANHOS_PAGINA:
            raise ValidationError(
                f"Tamanho de página inválido: {self.tamanho_pagina}",
                field="tamanho_pagina"
            )
        if self.pagina < 0:
            self.pagina = 0

    def direcao(self, chave: str) -> Optional[str]:
        """Retorna "asc", "desc" ou None para a coluna."""
        for coluna, desc in self.ordenacao:
            if coluna == chave:
                return "desc" if desc else "asc"
        return None

    def alternar_ordenacao(self, chave: str, multipla: bool = False) -> None:
        """
        Alterna a ordenação de uma coluna.

        Sem ordenação ou descendente → ascendente;
        ascendente → descendente.

        Args:
            chave: Coluna clicada
            multipla: Mantém as demais colunas na ordenação
        """
        desc = self.direcao(chave) == "asc"
        restantes = [c for c in self.ordenacao if c[0] != chave] if multipla else []
        self.ordenacao = restantes + [(chave, desc)]

    def definir_tamanho_pagina(self, tamanho: int) -> None:
        """Altera o tamanho da página e volta para a primeira."""
        if tamanho not in TAMANHOS_PAGINA:
            raise ValidationError(
                f"Tamanho de página inválido: {tamanho}",
                field="tamanho_pagina"
            )
        self.tamanho_pagina = tamanho
        self.pagina = 0

    def definir_busca(self, termo: str) -> None:
        """Altera a busca global e volta para a primeira página."""
        self.busca_global = termo or ""
        self.pagina = 0

    def atualizar_selecionados(self, linha_id: str, marcado: bool) -> None:
        """Marca ou desmarca uma linha."""
        if marcado:
            self.selecionados.add(linha_id)
        else:
            self.selecionados.discard(linha_id)

    def limpar_selecao(self) -> None:
        self.selecionados.clear()


@dataclass
class Faceta:
    """Valores únicos (com contagem) e mínimo/máximo de uma coluna."""

    valores: Dict[Any, int]
    minimo: Any = None
    maximo: Any = None


@dataclass
class PaginaTabela:
    """
    Resultado da aplicação do estado sobre as linhas.

    Attributes:
        linhas: Linhas da página atual
        total: Total de linhas após filtros
        total_geral: Total de linhas antes dos filtros
        pagina: Índice da página exibida (já ajustado)
        tamanho_pagina: Linhas por página
    """

    linhas: List[Any]
    total: int
    total_geral: int
    pagina: int
    tamanho_pagina: int

    @property
    def total_paginas(self) -> int:
        return max(1, math.ceil(self.total / self.tamanho_pagina))

    @property
    def pode_anterior(self) -> bool:
        return self.pagina > 0

    @property
    def pode_proxima(self) -> bool:
        return self.pagina < self.total_paginas - 1

    @property
    def ultima(self) -> int:
        return self.total_paginas - 1

    @property
    def rotulo(self) -> str:
        return f"Página {self.pagina + 1} de {self.total_paginas}"

    def to_dict(self) -> dict:
        return {
            "linhas": self.linhas,
            "total": self.total,
            "total_geral": self.total_geral,
            "pagina": self.pagina,
            "tamanho_pagina": self.tamanho_pagina,
            "total_paginas": self.total_paginas,
            "pode_anterior": self.pode_anterior,
            "pode_proxima": self.pode_proxima,
            "rotulo": self.rotulo,
        }


def texto_celula(valor: Any) -> str:
    """Converte o valor de uma célula para o texto usado na busca."""
    if valor is None:
        return ""
    if isinstance(valor, Enum):
        return str(valor.value)
    if isinstance(valor, (datetime, date)):
        return formatar_data(valor)
    if isinstance(valor, (list, tuple, set)):
        return ", ".join(texto_celula(v) for v in valor)
    return str(valor)


def _eh_vazio(valor: Any) -> bool:
    return valor is None or valor == ""


def _eh_numero(valor: Any) -> bool:
    return isinstance(valor, (int, float, Decimal)) and not isinstance(valor, bool)


def _comparar_valores(a: Any, b: Any) -> int:
    if _eh_numero(a) and _eh_numero(b):
        return (a > b) - (a < b)
    if isinstance(a, (datetime, date)) and isinstance(b, (datetime, date)):
        try:
            return (a > b) - (a < b)
        except TypeError:
            # datetime com e sem timezone
            return comparar_alfanumerico(a.isoformat(), b.isoformat())
    return comparar_alfanumerico(texto_celula(a), texto_celula(b))


class TabelaDinamica:
    """
    Aplica busca, filtros, ordenação e paginação sobre uma lista de linhas.

    Attributes:
        colunas: Colunas exibidas
        chave_id: Campo que identifica a linha (para seleção)
    """

    def __init__(self, colunas: List[Coluna], chave_id: str = "id"):
        self.colunas = colunas
        self.chave_id = chave_id
        self._por_chave = {c.chave: c for c in colunas}

    def coluna(self, chave: str) -> Optional[Coluna]:
        return self._por_chave.get(chave)

    def aplicar(self, linhas: List[Any], estado: EstadoTabela) -> PaginaTabela:
        """
        Executa o pipeline completo.

        Args:
            linhas: Todas as linhas carregadas
            estado: Estado atual da tabela

        Returns:
            PaginaTabela com a página ajustada ao intervalo válido
        """
        filtradas = self.filtrar(linhas, estado)

        if estado.ordenacao:
            ordenadas = self.ordenar(filtradas, estado.ordenacao)
        elif estado.busca_global.strip():
            ordenadas = self.ordenar_por_relevancia(filtradas, estado.busca_global)
        else:
            ordenadas = filtradas

        total = len(ordenadas)
        total_paginas = max(1, math.ceil(total / estado.tamanho_pagina))
        pagina = min(max(estado.pagina, 0), total_paginas - 1)
        inicio = pagina * estado.tamanho_pagina

        return PaginaTabela(
            linhas=ordenadas[inicio:inicio + estado.tamanho_pagina],
            total=total,
            total_geral=len(linhas),
            pagina=pagina,
            tamanho_pagina=estado.tamanho_pagina,
        )

    # =========================================================================
    # Filtros
    # =========================================================================

    def filtrar(self, linhas: List[Any], estado: EstadoTabela) -> List[Any]:
        """Aplica filtros por coluna e depois a busca global."""
        resultado = [
            linha for linha in linhas
            if self._passa_filtros_coluna(linha, estado.filtros)
        ]

        termo = estado.busca_global.strip()
        if termo:
            resultado = [
                linha for linha in resultado
                if self.rank_global(linha, termo) >= Ranking.MATCHES
            ]
        return resultado

    def rank_global(self, linha: Any, termo: str) -> float:
        """Maior ranking da linha entre as colunas filtráveis."""
        melhor = float(Ranking.NO_MATCH)
        for coluna in self.colunas:
            if not coluna.filtravel:
                continue
            rank = calcular_ranking(texto_celula(coluna.valor(linha)), termo)
            if rank > melhor:
                melhor = rank
        return melhor

    def _passa_filtros_coluna(self, linha: Any, filtros: Dict[str, Filtro]) -> bool:
        for chave, filtro in filtros.items():
            coluna = self.coluna(chave)
            if coluna is None or not coluna.filtravel:
                continue
            if filtro in ("", None):
                continue

            valor = coluna.valor(linha)
            if isinstance(filtro, tuple):
                if not self._no_intervalo(valor, filtro):
                    return False
            else:
                alvo = remover_acentos(texto_celula(valor)).lower()
                if remover_acentos(str(filtro)).lower() not in alvo:
                    return False
        return True

    @staticmethod
    def _no_intervalo(valor: Any, intervalo: Intervalo) -> bool:
        minimo, maximo = intervalo
        if not _eh_numero(valor):
            return minimo is None and maximo is None
        if minimo is not None and valor < minimo:
            return False
        if maximo is not None and valor > maximo:
            return False
        return True

    # =========================================================================
    # Ordenação
    # =========================================================================

    def ordenar(self, linhas: List[Any], ordenacao: List[Tuple[str, bool]]) -> List[Any]:
        """
        Ordenação estável por múltiplas colunas.

        Colunas desconhecidas ou não ordenáveis são ignoradas.
        """
        criterios = [
            (self._por_chave[chave], desc)
            for chave, desc in ordenacao
            if chave in self._por_chave and self._por_chave[chave].ordenavel
        ]
        if not criterios:
            return list(linhas)

        def comparar(a: Any, b: Any) -> int:
            for coluna, desc in criterios:
                va, vb = coluna.valor(a), coluna.valor(b)
                a_vazio, b_vazio = _eh_vazio(va), _eh_vazio(vb)
                if a_vazio and b_vazio:
                    continue
                if a_vazio:
                    return 1
                if b_vazio:
                    return -1
                resultado = _comparar_valores(va, vb)
                if resultado:
                    return -resultado if desc else resultado
            return 0

        return sorted(linhas, key=cmp_to_key(comparar))

    def ordenar_por_relevancia(self, linhas: List[Any], termo: str) -> List[Any]:
        """Ordena pela força da correspondência com a busca (estável)."""
        termo = termo.strip()
        return sorted(linhas, key=lambda linha: -self.rank_global(linha, termo))

    # =========================================================================
    # Facetas
    # =========================================================================

    def faceta(self, linhas: List[Any], chave: str) -> Faceta:
        """
        Valores únicos e mínimo/máximo de uma coluna.

        Usado para montar selects de filtro (ex: status).
        """
        coluna = self.coluna(chave)
        if coluna is None:
            raise ValidationError(f"Coluna desconhecida: {chave}", field="coluna")

        valores = [coluna.valor(linha) for linha in linhas]
        contagem = Counter(
            texto_celula(v) if isinstance(v, (list, dict, set)) else v
            for v in valores
            if not _eh_vazio(v)
        )
        numericos = [v for v in valores if _eh_numero(v)]

        return Faceta(
            valores=dict(contagem),
            minimo=min(numericos) if numericos else None,
            maximo=max(numericos) if numericos else None,
        )

    # =========================================================================
    # Seleção
    # =========================================================================

    def id_da_linha(self, linha: Any) -> str:
        if isinstance(linha, dict):
            return str(linha.get(self.chave_id))
        return str(getattr(linha, self.chave_id))

    def selecionar_pagina(self, pagina: PaginaTabela, estado: EstadoTabela, marcado: bool = True) -> None:
        """Marca ou desmarca todas as linhas da página."""
        for linha in pagina.linhas:
            estado.atualizar_selecionados(self.id_da_linha(linha), marcado)

    def pagina_toda_selecionada(self, pagina: PaginaTabela, estado: EstadoTabela) -> bool:
        if not pagina.linhas:
            return False
        return all(self.id_da_linha(l) in estado.selecionados for l in pagina.linhas)

    def linhas_selecionadas(self, linhas: List[Any], estado: EstadoTabela) -> List[Any]:
        return [l for l in linhas if self.id_da_linha(l) in estado.selecionados]
