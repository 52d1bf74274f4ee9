"""
Testes Unitários do Domínio de Cadastros.

Estratégia de Teste:
- Um InMemoryCadastroRepository por recurso
- InMemoryArquivoGateway para envio e remoção de arquivos

Coverage:
- Recurso e entidades (produto, contato, serviço, vídeo)
- CRUD genérico (criar, atualizar, excluir, listar, obter)
- Remoção de opção de serviço
- Envio e remoção de arquivos
"""

import pytest

from src.core.cadastros.dtos import EnviarArquivosInputDTO, SalvarRegistroInputDTO
from src.core.cadastros.entities import (
    Arquivo,
    ArquivoUpload,
    ContatoEntity,
    OpcaoServico,
    ProdutoEntity,
    Recurso,
    ServicoEntity,
    TipoArquivo,
    VideoEntity,
)
from src.core.cadastros.events import (
    ArquivoRemovidoEvent,
    ArquivosEnviadosEvent,
    RegistroAtualizadoEvent,
    RegistroCriadoEvent,
    RegistroExcluidoEvent,
)
from src.core.cadastros.ports import InMemoryArquivoGateway, InMemoryCadastroRepository
from src.core.cadastros.use_cases import (
    AtualizarRegistroService,
    CriarRegistroService,
    EnviarArquivosService,
    ExcluirRegistroService,
    ListarRegistrosService,
    ObterRegistroService,
    RemoverArquivoService,
    RemoverOpcaoServicoService,
)
from src.core.shared.exceptions import EntityNotFoundError, ValidationError


@pytest.fixture
def produtos():
    return InMemoryCadastroRepository(Recurso.PRODUTOS)


@pytest.fixture
def servicos():
    return InMemoryCadastroRepository(Recurso.SERVICOS)


@pytest.fixture
def produto(produtos):
    return produtos.add(ProdutoEntity.criar(nome="Bomba BX-200", descricao_curta="Bomba de recalque"))


@pytest.fixture
def servico(servicos):
    return servicos.add(ServicoEntity.criar(
        descricao="Instalação",
        ordem=1,
        opcoes=[
            OpcaoServico("Com material", ordem=2, id="op-2"),
            OpcaoServico("Sem material", ordem=1, id="op-1"),
        ],
    ))


class TestRecurso:

    @pytest.mark.parametrize("valor", ["products", "PRODUTOS", "produtos"])
    def test_from_string(self, valor):
        assert Recurso.from_string(valor) == Recurso.PRODUTOS

    def test_desconhecido(self):
        with pytest.raises(ValueError):
            Recurso.from_string("clientes")

    def test_entidade(self):
        assert Recurso.SERVICOS.entidade == "Servico"


class TestEntidades:

    def test_produto_descricao_curta_limite(self):
        with pytest.raises(ValidationError) as exc:
            ProdutoEntity.criar(nome="X", descricao_curta="a" * 101)
        assert exc.value.field == "descricao_curta"

    def test_produto_separa_imagens(self, produto):
        produto.adicionar_arquivos([
            Arquivo(id="a1", tipo=TipoArquivo.PDF),
            Arquivo(id="a2", tipo=TipoArquivo.IMAGE),
        ])
        assert [a.id for a in produto.arquivos] == ["a1"]
        assert [a.id for a in produto.imagens] == ["a2"]

        assert produto.remover_arquivo("a2")
        assert not produto.remover_arquivo("a2")
        assert produto.to_dict()["total_imagens"] == 0

    def test_contato_obrigatorios(self):
        with pytest.raises(ValidationError) as exc:
            ContatoEntity.criar(tipo="Telefone", categoria="", contato="48 3333-0000")
        assert exc.value.field == "categoria"

    def test_servico_opcoes_ordenadas(self, servico):
        assert [o.descricao for o in servico.opcoes] == ["Sem material", "Com material"]
        assert servico.to_dict()["opcoes"] == ["Sem material", "Com material"]

    def test_servico_opcao_sem_descricao(self):
        with pytest.raises(ValidationError):
            ServicoEntity.criar(descricao="Instalação", opcoes=[OpcaoServico("  ")])

    def test_video_endereco_prefere_arquivo(self):
        video = VideoEntity.criar(nome="Como instalar", video_url="https://youtu.be/abc")
        assert video.endereco == "https://youtu.be/abc"

        video.arquivo = Arquivo(id="v1", uri="https://cdn/videos/v1.mp4")
        assert video.endereco == "https://cdn/videos/v1.mp4"

    def test_campos_desconhecidos_sao_ignorados(self):
        contato = ContatoEntity.criar(tipo="E-mail", categoria="Suporte", contato="s@e.com", extra="x")
        assert contato.atualizar(contato="novo@e.com", extra="y") == ["contato"]


class TestCrudGenerico:

    def test_criar(self, produtos, uow):
        output = CriarRegistroService(produtos, uow).execute(SalvarRegistroInputDTO(
            recurso="products",
            dados={"nome": "Filtro F1", "descricao_curta": "Filtro de linha"},
            executado_por_id="admin-1",
        ))

        assert output.recurso == "products"
        assert output.dados["nome"] == "Filtro F1"
        assert output.to_dict()["id"] == output.id

        evento = uow.published_events[0]
        assert isinstance(evento, RegistroCriadoEvent)
        assert evento.aggregate_type == "Produto"

    def test_recurso_diferente_do_repositorio(self, produtos, uow):
        with pytest.raises(ValidationError) as exc:
            CriarRegistroService(produtos, uow).execute(SalvarRegistroInputDTO(
                recurso="contacts",
                dados={"tipo": "x", "categoria": "y", "contato": "z"},
            ))
        assert exc.value.field == "recurso"
        assert produtos.list_all() == []

    def test_atualizar(self, produtos, uow, produto):
        AtualizarRegistroService(produtos, uow).execute(SalvarRegistroInputDTO(
            recurso="products",
            registro_id=produto.id,
            dados={"nome": "Bomba BX-300", "descricao_curta": produto.descricao_curta},
        ))

        assert produtos.get_by_id(produto.id).nome == "Bomba BX-300"
        evento = uow.published_events[0]
        assert isinstance(evento, RegistroAtualizadoEvent)
        assert evento.campos == ["nome"]

    def test_atualizar_sem_id(self, produtos, uow):
        with pytest.raises(ValidationError):
            AtualizarRegistroService(produtos, uow).execute(
                SalvarRegistroInputDTO(recurso="products", dados={})
            )

    def test_atualizar_inexistente(self, produtos, uow):
        with pytest.raises(EntityNotFoundError):
            AtualizarRegistroService(produtos, uow).execute(
                SalvarRegistroInputDTO(recurso="products", registro_id="x", dados={})
            )

    def test_excluir(self, produtos, uow, produto):
        ExcluirRegistroService(produtos, uow).execute(produto.id)
        assert produtos.get_by_id(produto.id) is None
        assert isinstance(uow.published_events[0], RegistroExcluidoEvent)

    def test_excluir_inexistente(self, produtos, uow):
        with pytest.raises(EntityNotFoundError):
            ExcluirRegistroService(produtos, uow).execute("x")

    def test_listar_e_obter(self, produtos, produto):
        listados = ListarRegistrosService(produtos).execute()
        assert [r.id for r in listados] == [produto.id]
        assert ObterRegistroService(produtos).execute(produto.id) is produto

    def test_obter_inexistente(self, produtos):
        with pytest.raises(EntityNotFoundError, match="Produto x não encontrado"):
            ObterRegistroService(produtos).execute("x")


class TestOpcoesEArquivos:

    def test_remover_opcao(self, servicos, uow, servico):
        RemoverOpcaoServicoService(servicos, uow).execute(servico.id, "op-1", executado_por_id="admin-1")

        assert [o.id for o in servico.opcoes] == ["op-2"]
        evento = uow.published_events[0]
        assert evento.aggregate_id == servico.id
        assert evento.campos == ["opcoes"]

    def test_remover_opcao_sem_id(self, servicos, uow, servico):
        with pytest.raises(ValidationError):
            RemoverOpcaoServicoService(servicos, uow).execute(servico.id, "")

    def test_enviar_arquivos(self, uow):
        gateway = InMemoryArquivoGateway()
        enviados = EnviarArquivosService(gateway, uow).execute(EnviarArquivosInputDTO(
            arquivos=[
                ArquivoUpload("manual.pdf", b"%PDF", "application/pdf"),
                ArquivoUpload("guia.pdf", b"%PDF", "application/pdf"),
            ],
            caminho="products/pdf",
            tipo="PDF",
            produto_id="prod-1",
        ))

        assert [a.nome_arquivo for a in enviados] == ["manual.pdf", "guia.pdf"]
        assert enviados[0].tipo == "PDF"
        assert len(gateway.arquivos) == 2

        evento = uow.published_events[0]
        assert isinstance(evento, ArquivosEnviadosEvent)
        assert evento.aggregate_id == "prod-1"
        assert evento.aggregate_type == "Produto"

    def test_enviar_sem_arquivos(self, uow):
        with pytest.raises(ValidationError) as exc:
            EnviarArquivosService(InMemoryArquivoGateway(), uow).execute(
                EnviarArquivosInputDTO(arquivos=[], caminho="products/pdf", tipo="PDF")
            )
        assert exc.value.field == "arquivos"

    def test_enviar_sem_caminho(self, uow):
        with pytest.raises(ValidationError) as exc:
            EnviarArquivosService(InMemoryArquivoGateway(), uow).execute(
                EnviarArquivosInputDTO(arquivos=[ArquivoUpload("a.mp4", b"")], caminho="", tipo="VIDEO")
            )
        assert exc.value.field == "caminho"

    def test_remover_arquivo(self, uow):
        gateway = InMemoryArquivoGateway()
        [arquivo] = gateway.enviar([ArquivoUpload("a.png", b"")], caminho="products/image", tipo="IMAGE")

        RemoverArquivoService(gateway, uow).execute(arquivo.id)

        assert gateway.arquivos == {}
        assert isinstance(uow.published_events[0], ArquivoRemovidoEvent)
