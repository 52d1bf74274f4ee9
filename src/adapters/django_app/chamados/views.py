"""
Views Django para o domínio de Chamados.

DRIVING ADAPTERS: recebem a requisição, invocam os Use Cases via
container e exibem o resultado. Erros de domínio viram mensagens
flash; SessionExpiredError é tratada pelo AdminRequiredMixin.
"""

import logging

from django.http import HttpRequest, HttpResponse
from django.shortcuts import redirect, render
from django.urls import reverse
from django.views import View

from src.core.chamados.dtos import AtualizarChamadoInputDTO, CriarChamadoInputDTO
from src.core.cadastros.entities import Recurso
from src.core.chamados.entities import StatusChamado
from src.core.shared.exceptions import (
    DomainException,
    EntityNotFoundError,
    ValidationError,
)
from src.core.shared.tabela import Coluna, TabelaDinamica
from src.core.usuarios.dtos import FiltroUsuariosDTO

from src.adapters.django_app.shared.mixins import PainelViewMixin
from src.adapters.django_app.shared.tabela import contexto_tabela

from .forms import ChamadoCreateForm, ChamadoUpdateForm

logger = logging.getLogger(__name__)


TABELA_CHAMADOS = TabelaDinamica([
    Coluna('titulo', 'Título'),
    Coluna('nome_cliente', 'Cliente'),
    Coluna('nome_produto', 'Produto'),
    Coluna('status_rotulo', 'Status'),
    Coluna('criado_em', 'Data'),
])


class ChamadoListView(PainelViewMixin, View):
    """
    Lista assistências com busca, filtros, ordenação e paginação.

    GET /chamados/?q=bomba&ordem=-criado_em&pagina=2
    """

    template_name = 'chamados/list.html'

    def get(self, request: HttpRequest) -> HttpResponse:
        listar_service = self.get_service('listar_chamados_service', chamado_repo__api=self.api_client())

        try:
            chamados = listar_service.execute()
        except DomainException as e:
            logger.error(f"Erro ao listar chamados: {e}")
            self.error_message(request, "Erro ao carregar assistências.")
            chamados = []

        context = contexto_tabela(
            request.GET,
            TABELA_CHAMADOS,
            chamados,
            facetas=['status_rotulo'],
            url_da_linha=lambda c: reverse('chamados:detail', args=[c.id]),
        )
        return render(request, self.template_name, context)


class _OpcoesMixin:
    """Opções dos selects, carregadas da API."""

    def opcoes_status(self):
        service = self.get_service('listar_status_chamado_service', chamado_repo__api=self.api_client())
        try:
            opcoes = service.execute()
        except DomainException as e:
            logger.warning(f"Status indisponíveis na API, usando locais: {e}")
            return [(s.name, s.rotulo) for s in StatusChamado]
        return [(o.chave, o.rotulo) for o in opcoes]

    def opcoes_clientes(self):
        service = self.get_service('listar_usuarios_service', usuario_repo__api=self.api_client())
        clientes = service.execute(FiltroUsuariosDTO(papel='CLIENT'))
        return [(u.id, u.nome) for u in clientes]

    def opcoes_produtos(self):
        service = self.get_service(
            'listar_registros_service',
            cadastro_repo__api=self.api_client(),
            cadastro_repo__recurso=Recurso.PRODUTOS,
        )
        return [(p.id, p.dados.get('nome', p.id)) for p in service.execute()]


class ChamadoDetailView(_OpcoesMixin, PainelViewMixin, View):
    """
    Detalhes e edição de um chamado.

    GET /chamados/<id>/
    POST /chamados/<id>/ - Atualiza
    """

    template_name = 'chamados/detail.html'

    def _obter(self, pk: str):
        service = self.get_service('obter_chamado_service', chamado_repo__api=self.api_client())
        return service.execute(pk)

    def get(self, request: HttpRequest, pk: str) -> HttpResponse:
        try:
            chamado = self._obter(pk)
        except EntityNotFoundError:
            self.error_message(request, "Assistência não encontrada.")
            return redirect('chamados:list')
        except DomainException as e:
            logger.error(f"Erro ao obter chamado {pk}: {e}")
            self.error_message(request, "Erro ao carregar assistência.")
            return redirect('chamados:list')

        form = ChamadoUpdateForm(
            initial={
                'titulo': chamado.titulo,
                'descricao': chamado.descricao,
                'status': chamado.status,
                'observacao': chamado.observacao,
            },
            status_opcoes=self.opcoes_status(),
        )
        return render(request, self.template_name, {'chamado': chamado, 'form': form})

    def post(self, request: HttpRequest, pk: str) -> HttpResponse:
        form = ChamadoUpdateForm(request.POST, status_opcoes=self.opcoes_status())
        if not form.is_valid():
            self.error_message(request, "Dados inválidos.")
            return redirect('chamados:detail', pk=pk)

        atualizar_service = self.get_service('atualizar_chamado_service', chamado_repo__api=self.api_client())

        try:
            atualizar_service.execute(AtualizarChamadoInputDTO(
                chamado_id=pk,
                titulo=form.cleaned_data['titulo'],
                descricao=form.cleaned_data['descricao'],
                status=form.cleaned_data['status'],
                observacao=form.cleaned_data['observacao'],
                executado_por_id=self.get_user_id(request),
            ))
            logger.info(f"Chamado {pk} atualizado por {self.get_user_id(request)}")
            self.success_message(request, "Assistência atualizada com sucesso!")

        except EntityNotFoundError:
            self.error_message(request, "Assistência não encontrada.")
            return redirect('chamados:list')

        except DomainException as e:
            logger.warning(f"Falha ao atualizar chamado {pk}: {e}")
            self.error_message(request, e.message)

        return redirect('chamados:detail', pk=pk)


class ChamadoCreateView(_OpcoesMixin, PainelViewMixin, View):
    """
    GET /chamados/criar/ - Formulário
    POST /chamados/criar/ - Abre chamado
    """

    template_name = 'chamados/create.html'

    def _form(self, data=None):
        return ChamadoCreateForm(
            data,
            clientes=self.opcoes_clientes(),
            produtos=self.opcoes_produtos(),
        )

    def _sem_opcoes(self, request: HttpRequest, erro: DomainException) -> HttpResponse:
        logger.error(f"Erro ao carregar opções do formulário: {erro}")
        self.error_message(request, "Erro ao carregar clientes e produtos.")
        return redirect('chamados:list')

    def get(self, request: HttpRequest) -> HttpResponse:
        try:
            form = self._form()
        except DomainException as e:
            return self._sem_opcoes(request, e)
        return render(request, self.template_name, {'form': form})

    def post(self, request: HttpRequest) -> HttpResponse:
        try:
            form = self._form(request.POST)
        except DomainException as e:
            return self._sem_opcoes(request, e)
        if not form.is_valid():
            return render(request, self.template_name, {'form': form})

        criar_service = self.get_service('criar_chamado_service', chamado_repo__api=self.api_client())

        try:
            output = criar_service.execute(CriarChamadoInputDTO(
                titulo=form.cleaned_data['titulo'],
                descricao=form.cleaned_data['descricao'],
                cliente_id=form.cleaned_data['cliente_id'],
                produto_id=form.cleaned_data['produto_id'],
                executado_por_id=self.get_user_id(request),
            ))
        except ValidationError as e:
            logger.warning(f"Validação falhou ao criar chamado: {e}")
            form.add_error(e.field if e.field in form.fields else None, e.message)
            return render(request, self.template_name, {'form': form})
        except DomainException as e:
            logger.error(f"Erro de domínio ao criar chamado: {e}")
            form.add_error(None, e.message)
            return render(request, self.template_name, {'form': form})

        logger.info(f"Chamado criado: {output.id} por {self.get_user_id(request)}")
        self.success_message(request, "Assistência criada com sucesso!")
        return redirect('chamados:detail', pk=output.id)


class ChamadoDeleteView(PainelViewMixin, View):
    """POST /chamados/<id>/excluir/"""

    def post(self, request: HttpRequest, pk: str) -> HttpResponse:
        excluir_service = self.get_service('excluir_chamado_service', chamado_repo__api=self.api_client())

        try:
            excluir_service.execute(pk, executado_por_id=self.get_user_id(request))
        except EntityNotFoundError:
            self.error_message(request, "Assistência não encontrada.")
        except DomainException as e:
            logger.error(f"Erro ao excluir chamado {pk}: {e}")
            self.error_message(request, e.message)
            return redirect('chamados:detail', pk=pk)
        else:
            logger.info(f"Chamado {pk} excluído por {self.get_user_id(request)}")
            self.success_message(request, "Assistência excluída.")

        return redirect('chamados:list')
