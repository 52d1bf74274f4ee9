"""
Testes das Views do painel.

Testa:
- Login, logout e proteção das páginas (sessão de administrador)
- Dashboard e gráfico mensal
- Chamados: tabela, criação, edição e exclusão
- Usuários: cadastro com localidades, CPF e regra de autoexclusão
- Cadastros genéricos e envio de arquivos
- Sessão expirada com renovação recusada
"""

import json
from dataclasses import replace
from datetime import datetime

import httpx
import pytest
from django.contrib.messages import get_messages
from django.core.files.uploadedfile import SimpleUploadedFile

from src.adapters.django_app.shared.sessao import CHAVE_SESSAO
from src.adapters.http_api.client import ApiClient
from src.adapters.http_api.repositories import HttpChamadoRepository
from src.core.autenticacao.events import AdminAutenticadoEvent, SessaoEncerradaEvent
from src.core.cadastros.entities import ProdutoEntity, Recurso
from src.core.chamados.entities import ChamadoEntity, StatusChamado
from src.core.chamados.events import ChamadoCriadoEvent
from src.core.chamados.use_cases import ListarChamadosService
from src.core.usuarios.entities import PapelUsuario, UsuarioEntity

pytestmark = pytest.mark.django_db

CPF_VALIDO = '529.982.247-25'


def mensagens(response):
    return [str(m) for m in get_messages(response.wsgi_request)]


@pytest.fixture
def cliente(painel):
    return painel.usuarios.add(UsuarioEntity.criar(
        nome='Carla Cliente', email='carla@cliente.com', senha='123456', papel=PapelUsuario.CLIENT,
    ))


@pytest.fixture
def produto(painel):
    return painel.cadastros[Recurso.PRODUTOS].add(
        ProdutoEntity.criar(nome='Bomba BX-200', descricao_curta='Bomba de recalque')
    )


@pytest.fixture
def varios_chamados(painel, cliente, produto):
    criados = []
    for i in range(1, 11):
        chamado = ChamadoEntity.criar(
            titulo=f'Chamado {i:02d}',
            descricao='Bomba sem pressão',
            cliente_id=cliente.id,
            produto_id=produto.id,
        )
        chamado.status = StatusChamado.PENDING if i <= 6 else StatusChamado.FINISHED
        chamado.criado_em = datetime(2024, 3, i)
        criados.append(painel.chamados.add(chamado))
    return criados


# =============================================================================
# Login / Logout
# =============================================================================

class TestLogin:

    def test_get_formulario(self, client, container):
        response = client.get('/login/?next=/chamados/')
        assert response.status_code == 200
        assert response.context['next'] == '/chamados/'

    def test_login_admin(self, client, container, painel):
        response = client.post('/login/', {'email': 'ana@empresa.com', 'senha': 'senha-admin'})

        assert response.status_code == 302
        assert response['Location'] == '/'
        assert client.session[CHAVE_SESSAO]['usuario']['id'] == 'admin-1'
        assert isinstance(painel.eventos[0], AdminAutenticadoEvent)
        assert mensagens(response) == ['Bem-vindo, Ana Admin!']

    def test_respeita_next_local(self, client, container):
        response = client.post('/login/', {
            'email': 'ana@empresa.com', 'senha': 'senha-admin', 'next': '/usuarios/',
        })
        assert response['Location'] == '/usuarios/'

    def test_ignora_next_externo(self, client, container):
        response = client.post('/login/', {
            'email': 'ana@empresa.com', 'senha': 'senha-admin', 'next': 'https://exemplo.com/',
        })
        assert response['Location'] == '/'

    def test_nao_admin_recusado(self, client, container):
        response = client.post('/login/', {'email': 'bruno@empresa.com', 'senha': 'senha-tecnico'})

        assert response.status_code == 401
        assert 'Acesso permitido apenas para administradores' in response.context['form'].non_field_errors()
        assert CHAVE_SESSAO not in client.session

    def test_formulario_invalido(self, client, container):
        response = client.post('/login/', {'email': 'nao-e-email', 'senha': ''})
        assert response.status_code == 200
        assert set(response.context['form'].errors) == {'email', 'senha'}
        container.autenticar_admin_service.assert_not_called()

    def test_logout(self, admin_client, painel):
        response = admin_client.post('/logout/')

        assert response['Location'] == '/login/'
        assert CHAVE_SESSAO not in admin_client.session
        assert isinstance(painel.eventos[0], SessaoEncerradaEvent)


class TestProtecao:

    @pytest.mark.parametrize('url', ['/', '/chamados/', '/usuarios/', '/cadastros/products/'])
    def test_sem_sessao_vai_para_login(self, client, container, url):
        response = client.get(url)
        assert response.status_code == 302
        assert response['Location'] == f'/login/?next={url}'

    def test_sessao_de_nao_admin(self, client, container, sessao_admin):
        dados = sessao_admin.to_dict()
        dados['usuario']['papel'] = 'CLIENT'
        session = client.session
        session[CHAVE_SESSAO] = dados
        session.save()

        assert client.get('/chamados/')['Location'] == '/login/?next=/chamados/'

    def test_next_guarda_querystring(self, client, container):
        response = client.get('/chamados/?ordem=-titulo&pagina=2')
        assert response['Location'] == '/login/?next=/chamados/%3Fordem%3D-titulo%26pagina%3D2'

    def api_sempre_401(self, container):
        container.api_client.side_effect = lambda **kwargs: ApiClient(
            'http://api.teste/',
            client=httpx.Client(transport=httpx.MockTransport(lambda r: httpx.Response(401))),
            **kwargs,
        )
        container.listar_chamados_service.side_effect = (
            lambda chamado_repo__api: ListarChamadosService(HttpChamadoRepository(chamado_repo__api))
        )

    def test_renovacao_recusada_volta_ao_login(self, admin_client, container):
        """A API responde 401 e o refresh token não é aceito."""
        self.api_sempre_401(container)

        response = admin_client.get('/chamados/')

        assert response.status_code == 302
        assert response['Location'] == '/login/?next=/chamados/'
        assert CHAVE_SESSAO not in admin_client.session
        assert 'Sessão expirada. Faça login novamente.' in mensagens(response)

    def test_token_recusado_sem_refresh_volta_ao_login(self, client, container, sessao_admin):
        session = client.session
        session[CHAVE_SESSAO] = replace(sessao_admin, refresh_token=None).to_dict()
        session.save()
        self.api_sempre_401(container)

        response = client.get('/chamados/')

        assert response['Location'] == '/login/?next=/chamados/'
        assert CHAVE_SESSAO not in client.session
        assert 'Sessão expirada. Faça login novamente.' in mensagens(response)

    def test_api_client_fechado_apos_resposta(self, admin_client, container):
        response = admin_client.get('/chamados/')

        assert response.status_code == 200
        container.api_client.return_value.close.assert_called_once_with()

    def test_api_client_fechado_com_sessao_expirada(self, admin_client, container):
        self.api_sempre_401(container)
        fechados = []
        construir = container.api_client.side_effect

        def rastrear(**kwargs):
            api = construir(**kwargs)
            fechar = api.close
            api.close = lambda: (fechados.append(api), fechar())
            return api

        container.api_client.side_effect = rastrear

        admin_client.get('/chamados/')

        assert len(fechados) == 1

    def test_health_sem_login(self, client):
        response = client.get('/health/')
        assert response.json() == {'status': 'ok'}


# =============================================================================
# Dashboard
# =============================================================================

class TestDashboard:

    def test_contadores_e_grafico(self, admin_client, varios_chamados):
        response = admin_client.get('/')

        assert response.status_code == 200
        assert response.context['usuario_nome'] == 'Ana Admin'
        contadores = {c.chave: c.quantidade for c in response.context['contadores']}
        assert 'CREATED' not in contadores
        assert contadores['PENDING'] == 6
        assert contadores['FINISHED'] == 4
        assert response.context['grafico']['labels'] == ['03/2024']

    def test_sem_chamados_sem_grafico(self, admin_client):
        response = admin_client.get('/')
        assert response.context['grafico'] is None

    def test_grafico_json(self, admin_client, varios_chamados):
        dados = admin_client.get('/dashboard/grafico/').json()
        series = {s['label']: s['data'] for s in dados['datasets']}
        assert series == {'Pendente': [6], 'Finalizado': [4]}


# =============================================================================
# Chamados
# =============================================================================

class TestChamados:

    def test_tabela_ordenada_e_paginada(self, admin_client, varios_chamados):
        response = admin_client.get('/chamados/?ordem=-titulo&tamanho=5&pagina=2')

        pagina = response.context['pagina']
        assert (pagina.total, pagina.pagina) == (10, 1)
        titulos = [item['linha'].titulo for item in response.context['linhas']]
        assert titulos == ['Chamado 05', 'Chamado 04', 'Chamado 03', 'Chamado 02', 'Chamado 01']
        assert response.context['facetas']['status_rotulo'].valores == {'Pendente': 6, 'Finalizado': 4}

    def test_busca_global(self, admin_client, varios_chamados):
        response = admin_client.get('/chamados/?q=finalizado')
        assert response.context['pagina'].total == 4

    def test_formulario_de_criacao(self, admin_client, cliente, produto):
        form = admin_client.get('/chamados/criar/').context['form']
        assert (cliente.id, 'Carla Cliente') in form.fields['cliente_id'].choices
        assert (produto.id, 'Bomba BX-200') in form.fields['produto_id'].choices

    def test_criar(self, admin_client, painel, cliente, produto):
        response = admin_client.post('/chamados/criar/', {
            'titulo': 'Bomba não liga',
            'descricao': 'Cliente relata que a bomba não liga desde ontem.',
            'cliente_id': cliente.id,
            'produto_id': produto.id,
        })

        [chamado] = painel.chamados.list_all()
        assert response['Location'] == f'/chamados/{chamado.id}/'
        assert chamado.cliente_id == cliente.id

        evento = painel.eventos[0]
        assert isinstance(evento, ChamadoCriadoEvent)
        assert evento.executado_por_id == 'admin-1'

    def test_criar_cliente_inexistente(self, admin_client, painel, cliente, produto):
        response = admin_client.post('/chamados/criar/', {
            'titulo': 'Bomba não liga',
            'descricao': 'Sem energia',
            'cliente_id': 'outro',
            'produto_id': produto.id,
        })
        assert response.status_code == 200
        assert 'cliente_id' in response.context['form'].errors
        assert painel.chamados.list_all() == []

    def test_atualizar_status(self, admin_client, painel, varios_chamados):
        chamado = varios_chamados[0]
        response = admin_client.post(f'/chamados/{chamado.id}/', {
            'titulo': chamado.titulo,
            'descricao': chamado.descricao,
            'status': 'CLOSED',
            'observacao': 'Peça trocada',
        })

        assert response['Location'] == f'/chamados/{chamado.id}/'
        atualizado = painel.chamados.get_by_id(chamado.id)
        assert atualizado.status == StatusChamado.CLOSED
        assert atualizado.observacao == 'Peça trocada'

    def test_detalhe_inexistente(self, admin_client):
        response = admin_client.get('/chamados/nao-existe/')
        assert response['Location'] == '/chamados/'
        assert mensagens(response) == ['Assistência não encontrada.']

    def test_excluir(self, admin_client, painel, varios_chamados):
        chamado = varios_chamados[0]
        response = admin_client.post(f'/chamados/{chamado.id}/excluir/')

        assert response['Location'] == '/chamados/'
        assert painel.chamados.get_by_id(chamado.id) is None


# =============================================================================
# Usuários
# =============================================================================

class TestUsuarios:

    def _dados(self, **extra):
        dados = {
            'nome': 'Diego Cliente',
            'email': 'diego@cliente.com',
            'senha': '123456',
            'papel': 'CLIENT',
            'cpf': CPF_VALIDO,
            'telefone': '',
            'estado': 'SC',
            'cidade': 'Joinville',
        }
        dados.update(extra)
        return dados

    def test_listar_com_filtro(self, admin_client, painel, cliente):
        painel.usuarios.add(UsuarioEntity.criar(nome='Bruno', email='bruno@empresa.com', senha='123456'))

        response = admin_client.get('/usuarios/?papel=CLIENT')

        assert [item['linha'].nome for item in response.context['linhas']] == ['Carla Cliente']

    def test_formulario_com_localidades(self, admin_client):
        form = admin_client.get('/usuarios/criar/').context['form']
        assert ('SC', 'Santa Catarina') in form.fields['estado'].choices
        assert ('Florianópolis', 'Florianópolis') in form.fields['cidade'].choices

    def test_criar(self, admin_client, painel):
        response = admin_client.post('/usuarios/criar/', self._dados())

        [usuario] = painel.usuarios.list_all()
        assert response['Location'] == f'/usuarios/{usuario.id}/'
        assert usuario.cpf == '52998224725'
        assert usuario.cidade == 'Joinville'

    def test_cpf_invalido(self, admin_client, painel):
        response = admin_client.post('/usuarios/criar/', self._dados(cpf='529.982.247-26'))

        assert response.status_code == 200
        assert response.context['form'].errors['cpf'] == ['CPF inválido']
        assert painel.usuarios.list_all() == []

    def test_nao_exclui_a_si_mesmo(self, admin_client, painel):
        usuario = UsuarioEntity.criar(nome='Ana Admin', email='ana@empresa.com', senha='123456')
        usuario.id = 'admin-1'
        painel.usuarios.add(usuario)

        response = admin_client.post('/usuarios/admin-1/excluir/')

        assert response['Location'] == '/usuarios/admin-1/'
        assert painel.usuarios.get_by_id('admin-1') is not None

    def test_excluir(self, admin_client, painel, cliente):
        response = admin_client.post(f'/usuarios/{cliente.id}/excluir/')
        assert response['Location'] == '/usuarios/'
        assert painel.usuarios.get_by_id(cliente.id) is None

    def test_municipios_json(self, admin_client):
        response = admin_client.get('/usuarios/municipios/?uf=sp')
        assert json.loads(response.content) == {
            'municipios': [{'value': 'Campinas', 'label': 'Campinas'}],
        }


# =============================================================================
# Cadastros
# =============================================================================

class TestCadastros:

    def test_recurso_desconhecido(self, admin_client):
        assert admin_client.get('/cadastros/clientes/').status_code == 404

    def test_listar(self, admin_client, produto):
        response = admin_client.get('/cadastros/products/')

        assert response.context['titulo'] == 'Produtos'
        assert response.context['linhas'][0]['celulas'][0] == 'Bomba BX-200'

    def test_criar_produto(self, admin_client, painel):
        response = admin_client.post('/cadastros/products/criar/', {
            'nome': 'Filtro F1',
            'descricao_curta': 'Filtro de linha',
            'descricao': '',
        })

        [produto] = painel.cadastros[Recurso.PRODUTOS].list_all()
        assert response['Location'] == f'/cadastros/products/{produto.id}/'
        assert mensagens(response) == ['Produto cadastrado com sucesso!']

    def test_detalhe(self, admin_client, produto):
        response = admin_client.get(f'/cadastros/products/{produto.id}/')

        assert response.context['registro'] is produto
        assert response.context['aceita_arquivos']

    def test_enviar_arquivos(self, admin_client, painel, produto):
        response = admin_client.post(f'/cadastros/products/{produto.id}/arquivos/', {
            'tipo': 'PDF',
            'arquivos': [
                SimpleUploadedFile('manual.pdf', b'%PDF-1.4', content_type='application/pdf'),
                SimpleUploadedFile('guia.pdf', b'%PDF-1.4', content_type='application/pdf'),
            ],
        })

        assert response['Location'] == f'/cadastros/products/{produto.id}/'
        assert mensagens(response) == ['2 arquivo(s) enviado(s).']
        caminhos = {a.caminho for a in painel.arquivos.arquivos.values()}
        assert caminhos == {'products/pdf'}
        assert {a.produto_id for a in painel.arquivos.arquivos.values()} == {produto.id}

    def test_contatos_nao_recebem_arquivos(self, admin_client):
        response = admin_client.post('/cadastros/contacts/c-1/arquivos/', {'tipo': 'PDF'})
        assert response.status_code == 404
