"""
Testes Unitários do Domínio de Usuários.

Coverage:
- PapelUsuario e conversão para português
- UsuarioEntity (e-mail, senha, CPF, atualização parcial)
- Use cases de CRUD e filtro de listagem
"""

from datetime import datetime, timedelta

import pytest

from src.core.shared.exceptions import (
    BusinessRuleViolationError,
    EntityNotFoundError,
    ValidationError,
)
from src.core.usuarios.dtos import (
    AtualizarUsuarioInputDTO,
    CriarUsuarioInputDTO,
    FiltroUsuariosDTO,
    UsuarioOutputDTO,
)
from src.core.usuarios.entities import (
    PapelUsuario,
    ProdutoDoCliente,
    UsuarioEntity,
    converter_papel_para_portugues,
)
from src.core.usuarios.events import (
    UsuarioAtualizadoEvent,
    UsuarioCriadoEvent,
    UsuarioExcluidoEvent,
)
from src.core.usuarios.ports import InMemoryUsuarioRepository
from src.core.usuarios.use_cases import (
    AtualizarUsuarioService,
    CriarUsuarioService,
    ExcluirUsuarioService,
    ListarUsuariosService,
    ObterUsuarioService,
)

CPF_VALIDO = "529.982.247-25"


@pytest.fixture
def repo():
    return InMemoryUsuarioRepository()


@pytest.fixture
def usuario(repo):
    return repo.add(UsuarioEntity.criar(
        nome="Bruno Técnico",
        email="bruno@empresa.com",
        senha="segredo",
        papel=PapelUsuario.TECHNICIAN,
    ))


class TestPapelUsuario:

    @pytest.mark.parametrize("chave, rotulo", [
        ("ADMIN", "Admin"),
        ("USER", "Padrão"),
        ("CLIENT", "Cliente"),
        ("ASSISTENT", "Assistente"),
        ("TECHNICIAN", "Técnico"),
    ])
    def test_rotulos(self, chave, rotulo):
        assert converter_papel_para_portugues(chave) == rotulo

    def test_chave_desconhecida(self):
        assert converter_papel_para_portugues("GUEST") == "Não encontrado"
        assert converter_papel_para_portugues(None) == "Não encontrado"

    def test_from_string_aceita_rotulo(self):
        assert PapelUsuario.from_string("técnico") == PapelUsuario.TECHNICIAN


class TestUsuarioEntity:

    def test_criar_normaliza_email_e_cpf(self):
        usuario = UsuarioEntity.criar(
            nome=" Carla ", email=" Carla@Cliente.COM ", senha="123456", cpf=CPF_VALIDO,
        )
        assert usuario.nome == "Carla"
        assert usuario.email == "carla@cliente.com"
        assert usuario.cpf == "52998224725"
        assert usuario.papel == PapelUsuario.USER

    @pytest.mark.parametrize("email", ["", "sem-arroba", "a@b"])
    def test_email_invalido(self, email):
        with pytest.raises(ValidationError) as exc:
            UsuarioEntity.criar(nome="X", email=email, senha="123456")
        assert exc.value.field == "email"

    def test_senha_curta(self):
        with pytest.raises(ValidationError) as exc:
            UsuarioEntity.criar(nome="X", email="x@y.com", senha="123")
        assert exc.value.field == "senha"

    def test_cpf_incompleto(self):
        with pytest.raises(ValidationError, match="CPF incompleto"):
            UsuarioEntity.criar(nome="X", email="x@y.com", senha="123456", cpf="529.982")

    def test_cpf_invalido(self):
        with pytest.raises(ValidationError, match="CPF inválido"):
            UsuarioEntity.criar(nome="X", email="x@y.com", senha="123456", cpf="529.982.247-26")

    def test_cpf_vazio_e_opcional(self):
        assert UsuarioEntity.criar(nome="X", email="x@y.com", senha="123456", cpf="  ").cpf is None

    def test_atualizar_lista_campos(self, usuario):
        campos = usuario.atualizar(nome="Bruno Técnico", cidade="Joinville", senha="nova-senha")
        assert campos == ["cidade", "senha"]

    def test_senha_nao_aparece_no_repr(self, usuario):
        assert "segredo" not in repr(usuario)

    def test_produto_em_garantia(self):
        futuro = ProdutoDoCliente("Bomba", garantia_ate=datetime.now() + timedelta(days=30))
        vencido = ProdutoDoCliente("Bomba", garantia_ate=datetime.now() - timedelta(days=1))
        assert futuro.em_garantia()
        assert not vencido.em_garantia()
        assert not ProdutoDoCliente("Bomba").em_garantia()


class TestCriarUsuarioService:

    def test_cria(self, repo, uow):
        output = CriarUsuarioService(repo, uow).execute(CriarUsuarioInputDTO(
            nome="Carla",
            email="carla@cliente.com",
            senha="123456",
            papel="CLIENT",
            cpf=CPF_VALIDO,
            estado="SC",
            cidade="Florianópolis",
            executado_por_id="admin-1",
        ))

        assert isinstance(output, UsuarioOutputDTO)
        assert output.papel == "CLIENT"
        assert output.papel_rotulo == "Cliente"
        assert "senha" not in output.to_dict()

        evento = uow.published_events[0]
        assert isinstance(evento, UsuarioCriadoEvent)
        assert evento.papel == "CLIENT"

    def test_papel_invalido(self, repo, uow):
        with pytest.raises(ValidationError) as exc:
            CriarUsuarioService(repo, uow).execute(CriarUsuarioInputDTO(
                nome="X", email="x@y.com", senha="123456", papel="GUEST",
            ))
        assert exc.value.field == "papel"
        assert uow.rolled_back


class TestAtualizarUsuarioService:

    def test_atualiza_papel(self, repo, uow, usuario):
        output = AtualizarUsuarioService(repo, uow).execute(
            AtualizarUsuarioInputDTO(usuario_id=usuario.id, papel="ASSISTENT")
        )
        assert output.papel_rotulo == "Assistente"

        evento = uow.published_events[0]
        assert isinstance(evento, UsuarioAtualizadoEvent)
        assert evento.campos == ["papel"]

    def test_sem_mudanca(self, repo, uow, usuario):
        AtualizarUsuarioService(repo, uow).execute(
            AtualizarUsuarioInputDTO(usuario_id=usuario.id, email="BRUNO@empresa.com")
        )
        assert uow.published_events == []

    def test_inexistente(self, repo, uow):
        with pytest.raises(EntityNotFoundError):
            AtualizarUsuarioService(repo, uow).execute(AtualizarUsuarioInputDTO(usuario_id="x"))


class TestExcluirUsuarioService:

    def test_exclui(self, repo, uow, usuario):
        ExcluirUsuarioService(repo, uow).execute(usuario.id, executado_por_id="admin-1")
        assert repo.get_by_id(usuario.id) is None
        assert isinstance(uow.published_events[0], UsuarioExcluidoEvent)

    def test_nao_exclui_a_si_mesmo(self, repo, uow, usuario):
        with pytest.raises(BusinessRuleViolationError):
            ExcluirUsuarioService(repo, uow).execute(usuario.id, executado_por_id=usuario.id)
        assert repo.get_by_id(usuario.id) is not None

    def test_inexistente(self, repo, uow):
        with pytest.raises(EntityNotFoundError):
            ExcluirUsuarioService(repo, uow).execute("x", executado_por_id="admin-1")


class TestListarUsuariosService:

    def test_filtro_por_papel(self, repo, usuario):
        repo.add(UsuarioEntity.criar(nome="Carla", email="carla@c.com", senha="123456", papel=PapelUsuario.CLIENT))

        clientes = ListarUsuariosService(repo).execute(FiltroUsuariosDTO(papel="CLIENT"))
        assert [u.nome for u in clientes] == ["Carla"]

    def test_sem_filtro(self, repo, usuario):
        assert len(ListarUsuariosService(repo).execute()) == 1

    def test_papel_invalido_no_filtro(self, repo):
        with pytest.raises(ValidationError):
            ListarUsuariosService(repo).execute(FiltroUsuariosDTO(papel="GUEST"))

    def test_filtro_para_api(self):
        filtro = FiltroUsuariosDTO(nome="ana", papel="CLIENT")
        assert not filtro.vazio
        assert filtro.to_dict() == {"name": "ana", "email": None, "role": "CLIENT"}
        assert FiltroUsuariosDTO().vazio

    def test_obter(self, repo, usuario):
        assert ObterUsuarioService(repo).execute(usuario.id).email == "bruno@empresa.com"
