"""
Testes do validador de CPF, das funções de data e das exceções de domínio.
"""

from datetime import datetime, timezone

import pytest

from src.core.shared.datas import converter_data_hora, eh_data_hora_valida, formatar_data
from src.core.shared.exceptions import (
    EntityNotFoundError,
    ExternalServiceError,
    SessionExpiredError,
    ValidationError,
)
from src.core.shared.validadores import cpf_eh_valido, cpf_esta_completo, limpar_cpf


class TestCpf:

    def test_limpar(self):
        assert limpar_cpf(" 529.982.247-25 ") == "52998224725"
        assert limpar_cpf(None) == ""

    @pytest.mark.parametrize("cpf, completo", [
        ("529.982.247-25", True),
        ("52998224725", True),
        ("529.982.247", False),
        ("529.982.247-2a", False),
        ("", False),
    ])
    def test_completo(self, cpf, completo):
        assert cpf_esta_completo(cpf) is completo

    def test_valido(self):
        assert cpf_eh_valido("529.982.247-25")

    def test_digito_errado(self):
        assert not cpf_eh_valido("529.982.247-26")

    def test_incompleto_nao_e_valido(self):
        assert not cpf_eh_valido("529.982")

    def test_digitos_repetidos_passam(self):
        """Sequências repetidas não são rejeitadas."""
        assert cpf_eh_valido("111.111.111-11")


class TestDatas:

    @pytest.mark.parametrize("valor", [
        "2024-03-15T10:30:00",
        "2024-03-15T10:30:00.000Z",
        "2024-03-15T10:30:00-03:00",
    ])
    def test_formatos_aceitos(self, valor):
        assert eh_data_hora_valida(valor)

    @pytest.mark.parametrize("valor", [
        "2024-03-15",
        "15/03/2024",
        "2024-02-30T10:00:00",
        None,
    ])
    def test_formatos_rejeitados(self, valor):
        assert not eh_data_hora_valida(valor)

    def test_converter_com_z(self):
        convertido = converter_data_hora("2024-03-15T10:30:00.000Z")
        assert convertido == datetime(2024, 3, 15, 10, 30, tzinfo=timezone.utc)

    def test_converter_invalido(self):
        with pytest.raises(ValueError):
            converter_data_hora("ontem")

    def test_formatar(self):
        assert formatar_data("2024-03-15T10:30:00.000Z") == "15/03/2024"
        assert formatar_data("2024-03-15") == "15/03/2024"
        assert formatar_data(datetime(2024, 1, 2)) == "02/01/2024"


class TestExcecoes:

    def test_codigo_de_validacao_inclui_campo(self):
        erro = ValidationError("CPF inválido", field="cpf")
        assert erro.code == "VALIDATION_ERROR_CPF"
        assert erro.to_dict()["message"] == "CPF inválido"

    def test_entidade_nao_encontrada(self):
        erro = EntityNotFoundError("Chamado não encontrado", entity_type="Chamado", entity_id="42")
        assert erro.entity_id == "42"

    def test_sessao_expirada_tem_mensagem_padrao(self):
        assert SessionExpiredError().message == "Sessão expirada. Faça login novamente."

    def test_servico_externo_guarda_status(self):
        erro = ExternalServiceError("API fora do ar", status_code=503)
        assert erro.status_code == 503
