"""
Fixtures dos testes de views.

O container é substituído por um MagicMock cujos providers
constroem os services reais sobre repositórios em memória, no
mesmo formato de chamada usado pelas views
(`container.listar_chamados_service(chamado_repo__api=...)`).
"""

from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import pytest
from django.test import Client

from src.adapters.django_app.shared.sessao import CHAVE_SESSAO
from src.adapters.django_app.shared.unit_of_work import InMemoryUnitOfWork
from src.core.autenticacao.entities import UsuarioSessao
from src.core.autenticacao.ports import InMemoryAutenticacaoGateway
from src.core.autenticacao.use_cases import (
    AutenticarAdminService,
    EncerrarSessaoService,
    RenovarSessaoService,
)
from src.core.cadastros import use_cases as cadastros
from src.core.cadastros.entities import Recurso
from src.core.cadastros.ports import InMemoryArquivoGateway, InMemoryCadastroRepository
from src.core.chamados import use_cases as chamados
from src.core.chamados.ports import InMemoryChamadoRepository
from src.core.localidades.entities import Estado, Municipio
from src.core.localidades.ports import InMemoryLocalidadesGateway
from src.core.localidades.use_cases import ListarEstadosService, ListarMunicipiosService
from src.core.usuarios import use_cases as usuarios
from src.core.usuarios.ports import InMemoryUsuarioRepository

# provider -> (classe do service, porta, usa UoW)
SERVICOS = {
    'listar_chamados_service': (chamados.ListarChamadosService, 'chamados', False),
    'obter_chamado_service': (chamados.ObterChamadoService, 'chamados', False),
    'criar_chamado_service': (chamados.CriarChamadoService, 'chamados', True),
    'atualizar_chamado_service': (chamados.AtualizarChamadoService, 'chamados', True),
    'excluir_chamado_service': (chamados.ExcluirChamadoService, 'chamados', True),
    'listar_status_chamado_service': (chamados.ListarStatusChamadoService, 'chamados', False),
    'contar_chamados_por_status_service': (chamados.ContarChamadosPorStatusService, 'chamados', False),
    'gerar_grafico_mensal_service': (chamados.GerarGraficoMensalService, 'chamados', False),
    'listar_usuarios_service': (usuarios.ListarUsuariosService, 'usuarios', False),
    'obter_usuario_service': (usuarios.ObterUsuarioService, 'usuarios', False),
    'criar_usuario_service': (usuarios.CriarUsuarioService, 'usuarios', True),
    'atualizar_usuario_service': (usuarios.AtualizarUsuarioService, 'usuarios', True),
    'excluir_usuario_service': (usuarios.ExcluirUsuarioService, 'usuarios', True),
    'listar_registros_service': (cadastros.ListarRegistrosService, 'cadastros', False),
    'obter_registro_service': (cadastros.ObterRegistroService, 'cadastros', False),
    'criar_registro_service': (cadastros.CriarRegistroService, 'cadastros', True),
    'atualizar_registro_service': (cadastros.AtualizarRegistroService, 'cadastros', True),
    'excluir_registro_service': (cadastros.ExcluirRegistroService, 'cadastros', True),
    'remover_opcao_servico_service': (cadastros.RemoverOpcaoServicoService, 'servicos', True),
    'enviar_arquivos_service': (cadastros.EnviarArquivosService, 'arquivos', True),
    'remover_arquivo_service': (cadastros.RemoverArquivoService, 'arquivos', True),
    'listar_estados_service': (ListarEstadosService, 'localidades', False),
    'listar_municipios_service': (ListarMunicipiosService, 'localidades', False),
}


class PainelEmMemoria:
    """Portas em memória e os UoWs criados durante a requisição."""

    def __init__(self):
        self.chamados = InMemoryChamadoRepository()
        self.usuarios = InMemoryUsuarioRepository()
        self.cadastros = {recurso: InMemoryCadastroRepository(recurso) for recurso in Recurso}
        self.arquivos = InMemoryArquivoGateway()
        self.localidades = InMemoryLocalidadesGateway(
            estados=[Estado('SC', 'Santa Catarina'), Estado('SP', 'São Paulo')],
            municipios={
                'SC': [Municipio('Florianópolis', 'SC'), Municipio('Joinville', 'SC')],
                'SP': [Municipio('Campinas', 'SP')],
            },
        )
        self.auth = InMemoryAutenticacaoGateway()
        self.uows = []

    def porta(self, nome: str, kwargs: dict):
        if nome == 'cadastros':
            return self.cadastros[kwargs.get('cadastro_repo__recurso', Recurso.PRODUTOS)]
        if nome == 'servicos':
            return self.cadastros[Recurso.SERVICOS]
        return getattr(self, nome)

    def uow(self) -> InMemoryUnitOfWork:
        uow = InMemoryUnitOfWork()
        self.uows.append(uow)
        return uow

    @property
    def eventos(self):
        return [evento for uow in self.uows for evento in uow.published_events]

    def fabrica(self, classe, porta: str, com_uow: bool):
        def construir(**kwargs):
            dependencia = self.porta(porta, kwargs)
            return classe(dependencia, self.uow()) if com_uow else classe(dependencia)
        return construir


@pytest.fixture
def painel(admin):
    painel = PainelEmMemoria()
    painel.auth.registrar(admin, 'senha-admin')
    painel.auth.registrar(
        UsuarioSessao(id='tec-1', nome='Bruno', email='bruno@empresa.com', papel='TECHNICIAN'),
        'senha-tecnico',
    )
    return painel


@pytest.fixture
def container(painel):
    """Container falso com os services reais sobre `painel`."""
    mock = MagicMock()
    for nome, (classe, porta, com_uow) in SERVICOS.items():
        getattr(mock, nome).side_effect = painel.fabrica(classe, porta, com_uow)

    mock.autenticar_admin_service.side_effect = (
        lambda sessao_store: AutenticarAdminService(painel.auth, sessao_store, painel.uow())
    )
    mock.renovar_sessao_service.side_effect = (
        lambda sessao_store: RenovarSessaoService(painel.auth, sessao_store)
    )
    mock.encerrar_sessao_service.side_effect = (
        lambda sessao_store: EncerrarSessaoService(sessao_store, painel.uow())
    )

    with patch('src.adapters.django_app.shared.mixins.get_container', return_value=mock):
        yield mock


@pytest.fixture
def client(db):
    return Client()


@pytest.fixture
def admin_client(client, container, sessao_admin):
    """Client com sessão de administrador já gravada."""
    session = client.session
    session[CHAVE_SESSAO] = sessao_admin.to_dict()
    session.save()
    return client
