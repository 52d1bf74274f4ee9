"""
Testes do ApiClient e da tradução de erros.

Usa httpx.MockTransport: nenhuma chamada sai da máquina.

Testa:
- Cabeçalho Bearer e parâmetros
- Renovação antes da chamada (token expirado) e após 401
- Rotas de sessão não disparam renovação
- Conversão de status HTTP para ApiError / exceções de domínio
"""

from datetime import datetime, timedelta

import httpx
import pytest

from src.adapters.http_api.client import ApiClient
from src.adapters.http_api.errors import ApiError, ApiNotFoundError, converter_erro
from src.core.autenticacao.entities import Sessao
from src.core.shared.exceptions import (
    AuthenticationError,
    EntityNotFoundError,
    ExternalServiceError,
    SessionExpiredError,
    ValidationError,
)

BASE_URL = "http://api.teste"


class Gravador:
    """Handler do MockTransport que guarda as requisições recebidas."""

    def __init__(self, *respostas):
        self.respostas = list(respostas)
        self.requisicoes = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requisicoes.append(request)
        resposta = self.respostas.pop(0) if len(self.respostas) > 1 else self.respostas[0]
        return resposta(request) if callable(resposta) else resposta

    @property
    def tokens(self):
        return [r.headers.get("Authorization") for r in self.requisicoes]


def criar_client(handler, sessao=None, renovar=None, ao_expirar=None):
    return ApiClient(
        BASE_URL + "/",
        sessao=sessao,
        renovar_sessao=renovar,
        ao_expirar=ao_expirar,
        client=httpx.Client(transport=httpx.MockTransport(handler)),
    )


@pytest.fixture
def sessao_renovada(sessao_admin):
    return sessao_admin.renovada(token="token-novo", expira_em_segundos=3600)


class TestRequisicoes:

    def test_bearer_e_json(self, sessao_admin):
        gravador = Gravador(httpx.Response(200, json=[{"id": "1"}]))
        api = criar_client(gravador, sessao=sessao_admin)

        assert api.post("/assistances/all", json={"page": 1}) == [{"id": "1"}]

        requisicao = gravador.requisicoes[0]
        assert str(requisicao.url) == "http://api.teste/assistances/all"
        assert requisicao.headers["Authorization"] == "Bearer token-atual"

    def test_sem_sessao_sem_authorization(self):
        gravador = Gravador(httpx.Response(200, json={}))
        criar_client(gravador).get("/assistances/status")
        assert gravador.tokens == [None]

    def test_parametros_none_sao_descartados(self, sessao_admin):
        gravador = Gravador(httpx.Response(200, json=[]))
        criar_client(gravador, sessao=sessao_admin).patch(
            "/files", params={"filePath": "products/image", "videoId": None}
        )
        assert dict(gravador.requisicoes[0].url.params) == {"filePath": "products/image"}

    def test_resposta_vazia_retorna_none(self, sessao_admin):
        gravador = Gravador(httpx.Response(204))
        assert criar_client(gravador, sessao=sessao_admin).delete("/assistances/1") is None


class TestRenovacao:

    def test_token_expirado_renova_antes(self, sessao_admin, sessao_renovada):
        expirada = Sessao(
            usuario=sessao_admin.usuario,
            token="token-velho",
            refresh_token="refresh-atual",
            expira_em=datetime.now() - timedelta(minutes=1),
        )
        gravador = Gravador(httpx.Response(200, json=[]))
        api = criar_client(gravador, sessao=expirada, renovar=lambda: sessao_renovada)

        api.post("/users")

        assert gravador.tokens == ["Bearer token-novo"]
        assert api.sessao == sessao_renovada

    def test_401_renova_e_repete_uma_vez(self, sessao_admin, sessao_renovada):
        gravador = Gravador(httpx.Response(401), httpx.Response(200, json={"ok": True}))
        chamadas = []

        def renovar():
            chamadas.append(1)
            return sessao_renovada

        api = criar_client(gravador, sessao=sessao_admin, renovar=renovar)

        assert api.get("/assistances/1") == {"ok": True}
        assert gravador.tokens == ["Bearer token-atual", "Bearer token-novo"]
        assert len(chamadas) == 1

    def test_401_persistente_vira_sessao_expirada(self, sessao_admin, sessao_renovada):
        gravador = Gravador(httpx.Response(401, json={"message": "Token inválido"}))
        limpezas = []
        api = criar_client(
            gravador,
            sessao=sessao_admin,
            renovar=lambda: sessao_renovada,
            ao_expirar=lambda: limpezas.append(1),
        )

        with pytest.raises(SessionExpiredError):
            api.get("/assistances/1")

        assert len(gravador.requisicoes) == 2
        assert limpezas == [1]

    def test_rotas_de_sessao_nao_renovam(self, sessao_admin):
        gravador = Gravador(httpx.Response(401))

        def renovar():
            raise AssertionError("não deveria renovar")

        api = criar_client(gravador, sessao=sessao_admin, renovar=renovar)
        with pytest.raises(ApiError):
            api.post("/refresh-token", json={"token": "x"})
        assert len(gravador.requisicoes) == 1

    def test_falha_na_renovacao_propaga_sessao_expirada(self, sessao_admin):
        gravador = Gravador(httpx.Response(401))

        def renovar():
            raise SessionExpiredError()

        api = criar_client(gravador, sessao=sessao_admin, renovar=renovar)
        with pytest.raises(SessionExpiredError):
            api.get("/users/1")

    def test_sem_refresh_token_nao_renova(self, admin):
        gravador = Gravador(httpx.Response(401))
        limpezas = []
        api = criar_client(
            gravador,
            sessao=Sessao(usuario=admin, token="t"),
            renovar=lambda: None,
            ao_expirar=lambda: limpezas.append(1),
        )

        with pytest.raises(SessionExpiredError):
            api.get("/users/1")
        assert len(gravador.requisicoes) == 1
        assert limpezas == [1]

    def test_403_continua_api_error(self, sessao_admin):
        gravador = Gravador(httpx.Response(403))
        with pytest.raises(ApiError) as exc:
            criar_client(gravador, sessao=sessao_admin).get("/users/1")
        assert exc.value.status_code == 403


class TestFechamento:

    def test_close_nao_fecha_client_compartilhado(self):
        compartilhado = httpx.Client(transport=httpx.MockTransport(lambda r: httpx.Response(200)))
        ApiClient(BASE_URL, client=compartilhado).close()
        assert not compartilhado.is_closed

    def test_close_fecha_client_interno(self):
        api = ApiClient(BASE_URL)
        api.close()
        assert api._client.is_closed


class TestErros:

    def test_404(self, sessao_admin):
        gravador = Gravador(httpx.Response(404, json={"message": "Not found"}))
        with pytest.raises(ApiNotFoundError) as exc:
            criar_client(gravador, sessao=sessao_admin).get("/users/x")
        assert exc.value.details == {"message": "Not found"}

    def test_falha_de_transporte(self, sessao_admin):
        def handler(request):
            raise httpx.ConnectError("recusada", request=request)

        with pytest.raises(ApiError) as exc:
            criar_client(handler, sessao=sessao_admin).get("/users")
        assert exc.value.status_code is None

    def test_mensagem_api_lista(self):
        erro = ApiError("x", status_code=400, details={"message": ["nome vazio", "email inválido"]})
        assert erro.mensagem_api == "nome vazio; email inválido"
        assert ApiError("x", details="texto").mensagem_api is None

    @pytest.mark.parametrize("status, tipo", [
        (400, ValidationError),
        (422, ValidationError),
        (401, AuthenticationError),
        (403, AuthenticationError),
        (404, EntityNotFoundError),
        (500, ExternalServiceError),
        (None, ExternalServiceError),
    ])
    def test_converter_erro(self, status, tipo):
        assert isinstance(converter_erro(ApiError("x", status_code=status)), tipo)

    def test_converter_erro_usa_mensagem_da_api(self):
        erro = converter_erro(
            ApiError("x", status_code=400, details={"message": "E-mail já cadastrado"})
        )
        assert erro.message == "E-mail já cadastrado"

    def test_converter_404_guarda_entidade(self):
        erro = converter_erro(ApiError("x", status_code=404), "Chamado", "42")
        assert (erro.entity_type, erro.entity_id) == ("Chamado", "42")
        assert erro.message == "Chamado não encontrado"
