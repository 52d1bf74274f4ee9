"""
Configurações globais do Pytest para o Painel de Assistências.

Este arquivo é carregado automaticamente pelo pytest e
fornece fixtures compartilhadas entre os testes de core e adapters.
"""

from datetime import datetime, timedelta
from pathlib import Path

import pytest

from src.adapters.django_app.shared.unit_of_work import InMemoryUnitOfWork
from src.core.autenticacao.entities import Sessao, UsuarioSessao
from src.core.autenticacao.ports import InMemorySessaoStore


@pytest.fixture(scope="session")
def project_root():
    """Retorna o caminho raiz do projeto."""
    return Path(__file__).parent.parent


@pytest.fixture
def admin():
    return UsuarioSessao(id="admin-1", nome="Ana Admin", email="ana@empresa.com", papel="ADMIN")


@pytest.fixture
def sessao_admin(admin):
    """Sessão válida por mais uma hora."""
    return Sessao(
        usuario=admin,
        token="token-atual",
        refresh_token="refresh-atual",
        expira_em=datetime.now() + timedelta(hours=1),
    )


@pytest.fixture
def sessao_store(sessao_admin):
    return InMemorySessaoStore(sessao_admin)


@pytest.fixture
def uow():
    return InMemoryUnitOfWork()


@pytest.fixture(autouse=True)
def reset_container():
    """Cada teste começa com um container novo."""
    from src.config.container import reset_container as _reset

    _reset()
    yield
    _reset()


def pytest_collection_modifyitems(config, items):
    skip_integration = pytest.mark.skip(reason="Use --run-integration para falar com a API real")

    for item in items:
        if "integration" in item.keywords and not config.getoption("--run-integration"):
            item.add_marker(skip_integration)


def pytest_addoption(parser):
    parser.addoption(
        "--run-integration",
        action="store_true",
        default=False,
        help="executa testes de integração contra PAINEL_API_URL",
    )
