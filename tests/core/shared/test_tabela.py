"""
Testes da TabelaDinamica e do ranking de busca.

Coverage:
- Ranking (calcular_ranking, ranquear, comparar_alfanumerico)
- Filtros por coluna e busca global
- Ordenação natural e multi-coluna (vazios no fim)
- Paginação com ajuste de página
- Facetas e seleção
"""

from datetime import datetime

import pytest

from src.core.shared.exceptions import ValidationError
from src.core.shared.ranking import (
    Ranking,
    calcular_ranking,
    comparar_alfanumerico,
    ranquear,
    remover_acentos,
)
from src.core.shared.tabela import (
    Coluna,
    EstadoTabela,
    PaginaTabela,
    TabelaDinamica,
    texto_celula,
)


@pytest.fixture
def tabela():
    return TabelaDinamica([
        Coluna("titulo", "Título"),
        Coluna("status", "Status"),
        Coluna("cliente", "Cliente", acessor="cliente.nome"),
        Coluna("pecas", "Peças"),
        Coluna("interno", "Interno", filtravel=False, ordenavel=False),
    ])


@pytest.fixture
def linhas():
    return [
        {"id": "1", "titulo": "Bomba 10", "status": "Pendente", "cliente": {"nome": "Carla"}, "pecas": 3, "interno": "x"},
        {"id": "2", "titulo": "Bomba 2", "status": "Em análise", "cliente": {"nome": "bruno"}, "pecas": 10, "interno": "y"},
        {"id": "3", "titulo": "Aquecedor", "status": "Finalizado", "cliente": {"nome": "Ana"}, "pecas": None, "interno": "z"},
        {"id": "4", "titulo": "Filtro", "status": "Pendente", "cliente": None, "pecas": 1, "interno": "pendente"},
    ]


def ids(linhas):
    return [l["id"] for l in linhas]


class TestRanking:

    @pytest.mark.parametrize("valor, termo, esperado", [
        ("Pendente", "Pendente", Ranking.CASE_SENSITIVE_EQUAL),
        ("Pendente", "PENDENTE", Ranking.EQUAL),
        ("Pendente", "pen", Ranking.STARTS_WITH),
        ("Em andamento", "and", Ranking.WORD_STARTS_WITH),
        ("Finalizado", "liza", Ranking.CONTAINS),
        ("Em análise", "ea", Ranking.ACRONYM),
        ("Fechado", "xyz", Ranking.NO_MATCH),
    ])
    def test_niveis(self, valor, termo, esperado):
        assert calcular_ranking(valor, termo) == esperado

    def test_letras_em_ordem_ficam_entre_matches_e_acronym(self):
        rank = calcular_ranking("Finalizado", "fnz")
        assert Ranking.MATCHES < rank < Ranking.ACRONYM

    def test_ignora_acentos(self):
        """'analise' encontra 'Em análise'."""
        assert calcular_ranking("Em análise", "analise") == Ranking.WORD_STARTS_WITH
        assert remover_acentos("Técnico") == "Tecnico"

    def test_termo_maior_que_valor_nao_passa(self):
        assert not ranquear("ab", "abc").passou

    def test_uma_letra_fora_do_texto_nao_passa(self):
        assert not ranquear("Pendente", "z").passou

    def test_comparacao_natural(self):
        assert comparar_alfanumerico("Item 2", "item 10") < 0
        assert comparar_alfanumerico("item 10", "Item 2") > 0
        assert comparar_alfanumerico("ABC", "abc") == 0

    def test_texto_antes_de_numero(self):
        assert comparar_alfanumerico("a", "1") < 0


class TestEstadoTabela:

    def test_tamanho_invalido(self):
        with pytest.raises(ValidationError):
            EstadoTabela(tamanho_pagina=10)

    def test_pagina_negativa_vira_zero(self):
        assert EstadoTabela(pagina=-3).pagina == 0

    def test_alternar_ordenacao(self):
        """Primeiro clique asc, segundo desc, terceiro asc de novo."""
        estado = EstadoTabela()
        estado.alternar_ordenacao("titulo")
        assert estado.direcao("titulo") == "asc"
        estado.alternar_ordenacao("titulo")
        assert estado.direcao("titulo") == "desc"
        estado.alternar_ordenacao("titulo")
        assert estado.direcao("titulo") == "asc"

    def test_alternar_ordenacao_simples_substitui(self):
        estado = EstadoTabela(ordenacao=[("status", False)])
        estado.alternar_ordenacao("titulo")
        assert estado.ordenacao == [("titulo", False)]

    def test_alternar_ordenacao_multipla_mantem_demais(self):
        estado = EstadoTabela(ordenacao=[("status", False)])
        estado.alternar_ordenacao("titulo", multipla=True)
        assert estado.ordenacao == [("status", False), ("titulo", False)]

    def test_mudar_busca_ou_tamanho_volta_para_primeira_pagina(self):
        estado = EstadoTabela(pagina=4)
        estado.definir_busca("bomba")
        assert estado.pagina == 0

        estado.pagina = 2
        estado.definir_tamanho_pagina(16)
        assert (estado.pagina, estado.tamanho_pagina) == (0, 16)

    def test_selecao(self):
        estado = EstadoTabela()
        estado.atualizar_selecionados("1", True)
        estado.atualizar_selecionados("2", True)
        estado.atualizar_selecionados("1", False)
        assert estado.selecionados == {"2"}
        estado.limpar_selecao()
        assert estado.selecionados == set()


class TestFiltros:

    def test_busca_global(self, tabela, linhas):
        pagina = tabela.aplicar(linhas, EstadoTabela(busca_global="bomba"))
        assert ids(pagina.linhas) == ["1", "2"]
        assert pagina.total == 2
        assert pagina.total_geral == 4

    def test_busca_ignora_colunas_nao_filtraveis(self, tabela, linhas):
        """'pendente' no campo interno da linha 4 não conta."""
        resultado = tabela.filtrar(linhas, EstadoTabela(busca_global="finaliz"))
        assert ids(resultado) == ["3"]

    def test_busca_em_caminho_com_pontos(self, tabela, linhas):
        resultado = tabela.filtrar(linhas, EstadoTabela(busca_global="Carla"))
        assert ids(resultado) == ["1"]

    def test_busca_sem_ordenacao_ordena_por_relevancia(self, tabela, linhas):
        """Igualdade exata vem antes de 'começa com'."""
        linhas = [
            {"id": "a", "titulo": "Pendente revisão", "status": "", "cliente": None, "pecas": None},
            {"id": "b", "titulo": "Pendente", "status": "", "cliente": None, "pecas": None},
        ]
        pagina = tabela.aplicar(linhas, EstadoTabela(busca_global="Pendente"))
        assert ids(pagina.linhas) == ["b", "a"]

    def test_filtro_texto_por_coluna(self, tabela, linhas):
        resultado = tabela.filtrar(linhas, EstadoTabela(filtros={"status": "pend"}))
        assert ids(resultado) == ["1", "4"]

    def test_filtro_intervalo(self, tabela, linhas):
        resultado = tabela.filtrar(linhas, EstadoTabela(filtros={"pecas": (2, 10)}))
        assert ids(resultado) == ["1", "2"]

    def test_filtro_intervalo_exclui_vazios(self, tabela, linhas):
        resultado = tabela.filtrar(linhas, EstadoTabela(filtros={"pecas": (None, 5)}))
        assert ids(resultado) == ["1", "4"]

    def test_filtro_de_coluna_desconhecida_e_ignorado(self, tabela, linhas):
        resultado = tabela.filtrar(linhas, EstadoTabela(filtros={"inexistente": "x"}))
        assert len(resultado) == 4


class TestOrdenacao:

    def test_ordenacao_natural(self, tabela, linhas):
        ordenadas = tabela.ordenar(linhas, [("titulo", False)])
        assert ids(ordenadas) == ["3", "2", "1", "4"]

    def test_vazios_no_fim_em_qualquer_direcao(self, tabela, linhas):
        assert ids(tabela.ordenar(linhas, [("pecas", False)]))[-1] == "3"
        assert ids(tabela.ordenar(linhas, [("pecas", True)]))[-1] == "3"
        assert ids(tabela.ordenar(linhas, [("cliente", True)]))[-1] == "4"

    def test_numeros_comparados_como_numeros(self, tabela, linhas):
        ordenadas = tabela.ordenar(linhas, [("pecas", True)])
        assert ids(ordenadas) == ["2", "1", "4", "3"]

    def test_multiplas_colunas(self, tabela, linhas):
        ordenadas = tabela.ordenar(linhas, [("status", False), ("titulo", True)])
        assert ids(ordenadas) == ["2", "3", "4", "1"]

    def test_coluna_nao_ordenavel_e_ignorada(self, tabela, linhas):
        assert tabela.ordenar(linhas, [("interno", True)]) == linhas

    def test_datas(self):
        tabela = TabelaDinamica([Coluna("criado_em", "Data")])
        linhas = [
            {"id": "1", "criado_em": datetime(2024, 3, 2)},
            {"id": "2", "criado_em": datetime(2023, 12, 25)},
        ]
        assert ids(tabela.ordenar(linhas, [("criado_em", False)])) == ["2", "1"]


class TestPaginacao:

    @pytest.fixture
    def muitas(self):
        return [{"id": str(i), "titulo": f"Chamado {i}"} for i in range(1, 21)]

    def test_primeira_pagina(self, muitas):
        tabela = TabelaDinamica([Coluna("titulo", "Título")])
        pagina = tabela.aplicar(muitas, EstadoTabela(tamanho_pagina=8))
        assert len(pagina.linhas) == 8
        assert pagina.total_paginas == 3
        assert pagina.rotulo == "Página 1 de 3"
        assert not pagina.pode_anterior
        assert pagina.pode_proxima

    def test_pagina_alem_do_fim_e_ajustada(self, muitas):
        tabela = TabelaDinamica([Coluna("titulo", "Título")])
        pagina = tabela.aplicar(muitas, EstadoTabela(pagina=99, tamanho_pagina=8))
        assert pagina.pagina == 2
        assert ids(pagina.linhas) == [str(i) for i in range(17, 21)]
        assert not pagina.pode_proxima

    def test_sem_linhas_tem_uma_pagina(self):
        pagina = TabelaDinamica([Coluna("titulo", "Título")]).aplicar([], EstadoTabela())
        assert pagina.total_paginas == 1
        assert pagina.rotulo == "Página 1 de 1"

    def test_to_dict(self):
        pagina = PaginaTabela(linhas=[], total=17, total_geral=20, pagina=1, tamanho_pagina=8)
        dados = pagina.to_dict()
        assert dados["total_paginas"] == 3
        assert dados["pode_anterior"] is True
        assert dados["rotulo"] == "Página 2 de 3"


class TestFacetasESelecao:

    def test_faceta(self, tabela, linhas):
        faceta = tabela.faceta(linhas, "status")
        assert faceta.valores == {"Pendente": 2, "Em análise": 1, "Finalizado": 1}

    def test_faceta_numerica(self, tabela, linhas):
        faceta = tabela.faceta(linhas, "pecas")
        assert (faceta.minimo, faceta.maximo) == (1, 10)

    def test_faceta_coluna_desconhecida(self, tabela, linhas):
        with pytest.raises(ValidationError):
            tabela.faceta(linhas, "inexistente")

    def test_selecionar_pagina(self, tabela, linhas):
        estado = EstadoTabela(tamanho_pagina=5)
        pagina = tabela.aplicar(linhas, estado)
        tabela.selecionar_pagina(pagina, estado)

        assert tabela.pagina_toda_selecionada(pagina, estado)
        assert ids(tabela.linhas_selecionadas(linhas, estado)) == ["1", "2", "3", "4"]

        tabela.selecionar_pagina(pagina, estado, marcado=False)
        assert not tabela.pagina_toda_selecionada(pagina, estado)


def test_texto_celula():
    assert texto_celula(None) == ""
    assert texto_celula(["a", "b"]) == "a, b"
    assert texto_celula(datetime(2024, 3, 15, 10, 30)) == "15/03/2024"
