"""
Ranking de busca aproximada e comparação alfanumérica.

Funções puras usadas pela TabelaDinamica para filtrar e ordenar
linhas. A escala de ranking segue a da biblioteca match-sorter,
usada pelas tabelas do painel:

    CASE_SENSITIVE_EQUAL  7   "Pendente" == "Pendente"
    EQUAL                 6   "pendente" == "PENDENTE"
    STARTS_WITH           5   "Pendente" começa com "pen"
    WORD_STARTS_WITH      4   "Em andamento" tem palavra iniciando em "and"
    CONTAINS              3   "Finalizado" contém "liza"
    ACRONYM               2   "Em análise" tem sigla "ea"
    MATCHES               1-2 letras na ordem ("fnz" em "Finalizado")
    NO_MATCH              0
"""

from dataclasses import dataclass
from enum import IntEnum
import re
import unicodedata


class Ranking(IntEnum):
    """Níveis de correspondência, do mais forte ao mais fraco."""

    CASE_SENSITIVE_EQUAL = 7
    EQUAL = 6
    STARTS_WITH = 5
    WORD_STARTS_WITH = 4
    CONTAINS = 3
    ACRONYM = 2
    MATCHES = 1
    NO_MATCH = 0


@dataclass(frozen=True)
class ResultadoRanking:
    """
    Resultado da comparação de um valor com o termo buscado.

    Attributes:
        rank: Valor numérico (MATCHES pode ter fração entre 1 e 2)
        passou: Se atingiu o limite mínimo
    """

    rank: float
    passou: bool


_RE_NUMEROS = re.compile(r"([0-9]+)")


def remover_acentos(texto: str) -> str:
    """Remove diacríticos ("análise" → "analise")."""
    normalizado = unicodedata.normalize("NFD", texto)
    return "".join(c for c in normalizado if not unicodedata.combining(c))


def _sigla(texto: str) -> str:
    letras = []
    for palavra in texto.split(" "):
        for parte in palavra.split("-"):
            if parte:
                letras.append(parte[0])
    return "".join(letras)


def _ranking_por_proximidade(texto: str, termo: str) -> float:
    """
    Ranking MATCHES: todas as letras do termo aparecem em ordem.

    Quanto mais próximas as letras, maior a fração somada a MATCHES.
    """
    encontrados = 0
    posicao = 0

    def procurar(caractere: str) -> int:
        nonlocal encontrados
        for indice in range(posicao, len(texto)):
            if texto[indice] == caractere:
                encontrados += 1
                return indice + 1
        return -1

    primeiro = procurar(termo[0])
    if primeiro < 0:
        return float(Ranking.NO_MATCH)

    posicao = primeiro
    for caractere in termo[1:]:
        posicao = procurar(caractere)
        if posicao < 0:
            return float(Ranking.NO_MATCH)

    espalhamento = posicao - primeiro
    percentual_em_ordem = encontrados / len(termo)
    return Ranking.MATCHES + percentual_em_ordem * (1 / espalhamento)


def calcular_ranking(valor: str, termo: str) -> float:
    """
    Calcula o ranking de `valor` para o termo buscado.

    Args:
        valor: Texto da célula
        termo: Texto digitado pelo usuário

    Returns:
        Ranking numérico (ver Ranking)
    """
    texto = remover_acentos(valor)
    termo = remover_acentos(termo)

    if len(termo) > len(texto):
        return float(Ranking.NO_MATCH)

    if texto == termo:
        return float(Ranking.CASE_SENSITIVE_EQUAL)

    texto = texto.lower()
    termo = termo.lower()

    if texto == termo:
        return float(Ranking.EQUAL)
    if texto.startswith(termo):
        return float(Ranking.STARTS_WITH)
    if f" {termo}" in texto:
        return float(Ranking.WORD_STARTS_WITH)
    if termo in texto:
        return float(Ranking.CONTAINS)
    if len(termo) == 1:
        return float(Ranking.NO_MATCH)
    if termo in _sigla(texto):
        return float(Ranking.ACRONYM)

    return _ranking_por_proximidade(texto, termo)


def ranquear(valor: str, termo: str, limite: Ranking = Ranking.MATCHES) -> ResultadoRanking:
    """
    Compara valor e termo e informa se passou no limite.

    Example:
        >>> ranquear("Em andamento", "and").passou
        True
        >>> ranquear("Fechado", "xyz").passou
        False
    """
    rank = calcular_ranking(valor, termo)
    return ResultadoRanking(rank=rank, passou=rank >= limite)


def comparar_alfanumerico(a: str, b: str) -> int:
    """
    Comparação natural sem diferenciar maiúsculas.

    Trechos numéricos são comparados como números, então
    "Item 2" vem antes de "item 10". Entre um trecho de texto e
    um numérico, o texto vem primeiro.

    Returns:
        Negativo se a < b, zero se iguais, positivo se a > b
    """
    partes_a = [p for p in _RE_NUMEROS.split(a.lower()) if p]
    partes_b = [p for p in _RE_NUMEROS.split(b.lower()) if p]

    while partes_a and partes_b:
        pa = partes_a.pop(0)
        pb = partes_b.pop(0)
        a_numero = bool(_RE_NUMEROS.fullmatch(pa))
        b_numero = bool(_RE_NUMEROS.fullmatch(pb))

        if not a_numero and not b_numero:
            if pa > pb:
                return 1
            if pb > pa:
                return -1
            continue

        if a_numero != b_numero:
            return 1 if a_numero else -1

        na, nb = int(pa), int(pb)
        if na > nb:
            return 1
        if nb > na:
            return -1

    return len(partes_a) - len(partes_b)
