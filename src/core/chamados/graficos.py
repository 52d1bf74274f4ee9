"""
Montagem do gráfico "Assistências por Mês".

A API devolve linhas (status, mês, quantidade). O gráfico precisa
de um eixo de meses e uma série por status:

    rótulos = meses na ordem em que aparecem pela primeira vez
    séries  = uma por status, na ordem em que aparecem
    dados   = quantidade do status em cada mês (0 se ausente)
"""

from typing import Dict, List, Tuple

from .dtos import ContagemMensalDTO, GraficoMensalDTO, SerieGraficoDTO
from .entities import cor_borda_traduzida, cor_fundo

OPACIDADE_FUNDO_GRAFICO = 0.2


def _unicos(valores: List[str]) -> List[str]:
    return list(dict.fromkeys(valores))


def montar_grafico_mensal(contagens: List[ContagemMensalDTO]) -> GraficoMensalDTO:
    """
    Converte a contagem mensal em rótulos e séries do gráfico.

    Example:
        >>> grafico = montar_grafico_mensal([
        ...     ContagemMensalDTO("Pendente", "01/2024", 2),
        ...     ContagemMensalDTO("Fechado", "02/2024", 1),
        ... ])
        >>> grafico.rotulos
        ['01/2024', '02/2024']
        >>> [s.dados for s in grafico.series]
        [[2, 0], [0, 1]]
    """
    meses = _unicos([str(c.mes) for c in contagens])
    status_lista = _unicos([c.status for c in contagens])

    # primeira ocorrência de (status, mês) vence
    por_chave: Dict[Tuple[str, str], int] = {}
    for contagem in contagens:
        por_chave.setdefault((contagem.status, str(contagem.mes)), contagem.quantidade)

    series = [
        SerieGraficoDTO(
            rotulo=status,
            dados=[por_chave.get((status, mes), 0) for mes in meses],
            cor_borda=cor_borda_traduzida(status),
            cor_fundo=cor_fundo(status, OPACIDADE_FUNDO_GRAFICO),
        )
        for status in status_lista
    ]

    return GraficoMensalDTO(rotulos=meses, series=series)
