"""
Testes de Integração contra a API real.

Executados apenas com --run-integration. Usam PAINEL_API_URL e as
credenciais de um administrador de teste:

    PAINEL_TESTE_EMAIL=admin@empresa.com PAINEL_TESTE_SENHA=... \\
        pytest tests/integration --run-integration

Somente leituras: nenhum registro é criado ou alterado.
"""

import os

import pytest

from src.config.container import get_container
from src.core.autenticacao.ports import InMemorySessaoStore
from src.core.autenticacao.use_cases import LoginInputDTO
from src.core.cadastros.entities import Recurso

pytestmark = [pytest.mark.integration, pytest.mark.django_db]


@pytest.fixture
def store():
    email = os.getenv('PAINEL_TESTE_EMAIL')
    senha = os.getenv('PAINEL_TESTE_SENHA')
    if not email or not senha:
        pytest.skip("Defina PAINEL_TESTE_EMAIL e PAINEL_TESTE_SENHA")

    container = get_container()
    store = InMemorySessaoStore()
    container.autenticar_admin_service(sessao_store=store).execute(LoginInputDTO(email, senha))
    return store


@pytest.fixture
def api(store):
    container = get_container()
    renovar = container.renovar_sessao_service(sessao_store=store)
    return container.api_client(sessao=store.obter(), renovar_sessao=renovar.execute)


def test_login_guarda_sessao(store):
    sessao = store.obter()
    assert sessao.usuario.eh_admin
    assert sessao.token


def test_renovar_sessao(store):
    anterior = store.obter()
    nova = get_container().renovar_sessao_service(sessao_store=store).execute()
    assert nova.usuario == anterior.usuario
    assert store.obter() == nova


def test_dashboard(api):
    container = get_container()
    contadores = container.contar_chamados_por_status_service(chamado_repo__api=api).execute()
    grafico = container.gerar_grafico_mensal_service(chamado_repo__api=api).execute()

    assert all(c.quantidade >= 0 for c in contadores)
    assert all(len(s.dados) == len(grafico.rotulos) for s in grafico.series)


def test_listagens(api):
    container = get_container()
    container.listar_chamados_service(chamado_repo__api=api).execute()
    container.listar_usuarios_service(usuario_repo__api=api).execute()
    for recurso in Recurso:
        container.listar_registros_service(
            cadastro_repo__api=api, cadastro_repo__recurso=recurso,
        ).execute()


def test_status_disponiveis(api):
    opcoes = get_container().listar_status_chamado_service(chamado_repo__api=api).execute()
    assert opcoes
