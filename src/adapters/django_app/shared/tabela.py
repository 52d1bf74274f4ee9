"""
Ponte entre a querystring e a TabelaDinamica.

Parâmetros aceitos:
    q               busca global
    f_<coluna>      filtro de texto da coluna
    f_<coluna>_min  limite inferior (colunas numéricas)
    f_<coluna>_max  limite superior
    ordem           colunas separadas por vírgula; "-" indica desc
                    (ex: "status,-titulo")
    pagina          página começando em 1
    tamanho         linhas por página (5, 8, 16, 48, 84)
    sel             ids selecionados (repetível)
"""

from typing import Any, Callable, Dict, List, Optional
import logging

from django.http import QueryDict

from src.core.shared.tabela import (
    TAMANHO_PAGINA_PADRAO,
    TAMANHOS_PAGINA,
    EstadoTabela,
    TabelaDinamica,
    texto_celula,
)

logger = logging.getLogger(__name__)


def _inteiro(valor: Optional[str], padrao: int) -> int:
    try:
        return int(valor)
    except (TypeError, ValueError):
        return padrao


def _numero(valor: Optional[str]) -> Optional[float]:
    if valor in (None, ""):
        return None
    try:
        return float(valor.replace(",", "."))
    except ValueError:
        return None


def estado_da_querystring(params: QueryDict, tabela: TabelaDinamica) -> EstadoTabela:
    """Monta o EstadoTabela; valores inválidos caem no padrão."""
    filtros: Dict[str, Any] = {}
    for coluna in tabela.colunas:
        if not coluna.filtravel:
            continue
        texto = params.get(f"f_{coluna.chave}", "").strip()
        minimo = _numero(params.get(f"f_{coluna.chave}_min"))
        maximo = _numero(params.get(f"f_{coluna.chave}_max"))
        if minimo is not None or maximo is not None:
            filtros[coluna.chave] = (minimo, maximo)
        elif texto:
            filtros[coluna.chave] = texto

    ordenacao = []
    for item in params.get("ordem", "").split(","):
        item = item.strip()
        chave = item.lstrip("-")
        coluna = tabela.coluna(chave) if chave else None
        if coluna is not None and coluna.ordenavel:
            ordenacao.append((chave, item.startswith("-")))

    tamanho = _inteiro(params.get("tamanho"), TAMANHO_PAGINA_PADRAO)
    if tamanho not in TAMANHOS_PAGINA:
        logger.debug(f"Tamanho de página ignorado: {tamanho}")
        tamanho = TAMANHO_PAGINA_PADRAO

    return EstadoTabela(
        busca_global=params.get("q", ""),
        filtros=filtros,
        ordenacao=ordenacao,
        pagina=_inteiro(params.get("pagina"), 1) - 1,
        tamanho_pagina=tamanho,
        selecionados=set(params.getlist("sel")),
    )


def _ordem_para_texto(estado: EstadoTabela) -> str:
    return ",".join(f"-{chave}" if desc else chave for chave, desc in estado.ordenacao)


def querystring(params: QueryDict, **alteracoes) -> str:
    """Copia a querystring atual trocando os parâmetros informados."""
    nova = params.copy()
    for chave, valor in alteracoes.items():
        if valor in (None, ""):
            nova.pop(chave, None)
        else:
            nova[chave] = valor
    return nova.urlencode()


def contexto_tabela(
    params: QueryDict,
    tabela: TabelaDinamica,
    linhas: List[Any],
    facetas: Optional[List[str]] = None,
    url_da_linha: Optional[Callable[[Any], str]] = None,
) -> Dict[str, Any]:
    """
    Aplica a tabela e monta o contexto de template.

    Args:
        params: request.GET
        tabela: Definição das colunas
        linhas: Todas as linhas carregadas da API
        facetas: Colunas cujos valores únicos alimentam selects
        url_da_linha: Link de detalhe de cada linha

    Returns:
        dict com pagina, colunas (com direção e link de ordenação),
        links de navegação e facetas
    """
    estado = estado_da_querystring(params, tabela)
    pagina = tabela.aplicar(linhas, estado)
    filtradas = tabela.filtrar(linhas, estado)

    colunas = []
    for coluna in tabela.colunas:
        link = None
        if coluna.ordenavel:
            proximo = EstadoTabela(ordenacao=list(estado.ordenacao))
            proximo.alternar_ordenacao(coluna.chave)
            link = querystring(params, ordem=_ordem_para_texto(proximo), pagina=None)
        colunas.append({
            "chave": coluna.chave,
            "titulo": coluna.titulo,
            "direcao": estado.direcao(coluna.chave),
            "link_ordenacao": link,
        })

    def pagina_link(indice: int) -> str:
        return querystring(params, pagina=str(indice + 1))

    return {
        "pagina": pagina,
        "estado": estado,
        "colunas": colunas,
        "linhas": [
            {"linha": linha, "celulas": [texto_celula(c.valor(linha)) for c in tabela.colunas],
             "selecionada": tabela.id_da_linha(linha) in estado.selecionados,
             "url": url_da_linha(linha) if url_da_linha else None}
            for linha in pagina.linhas
        ],
        "tamanhos_pagina": TAMANHOS_PAGINA,
        "links": {
            "primeira": pagina_link(0),
            "anterior": pagina_link(pagina.pagina - 1) if pagina.pode_anterior else None,
            "proxima": pagina_link(pagina.pagina + 1) if pagina.pode_proxima else None,
            "ultima": pagina_link(pagina.ultima),
        },
        "pagina_toda_selecionada": tabela.pagina_toda_selecionada(pagina, estado),
        "facetas": {chave: tabela.faceta(filtradas, chave) for chave in (facetas or [])},
    }
