"""
Views Django para o domínio de Usuários.

Listagem com filtro enviado à API (nome, e-mail, perfil) e a
tabela dinâmica por cima do resultado; cadastro e edição com
estado/cidade consultados no IBGE.
"""

import logging
from typing import List, Tuple

from django.http import HttpRequest, HttpResponse, JsonResponse
from django.shortcuts import redirect, render
from django.urls import reverse
from django.views import View

from src.core.localidades import UF_PADRAO
from src.core.shared.exceptions import (
    BusinessRuleViolationError,
    DomainException,
    EntityNotFoundError,
    ExternalServiceError,
    ValidationError,
)
from src.core.shared.tabela import Coluna, TabelaDinamica
from src.core.usuarios.dtos import (
    AtualizarUsuarioInputDTO,
    CriarUsuarioInputDTO,
    FiltroUsuariosDTO,
)

from src.adapters.django_app.shared.mixins import PainelViewMixin
from src.adapters.django_app.shared.tabela import contexto_tabela

from .forms import UsuarioFiltroForm, UsuarioForm

logger = logging.getLogger(__name__)


TABELA_USUARIOS = TabelaDinamica([
    Coluna('nome', 'Nome'),
    Coluna('email', 'E-mail'),
    Coluna('papel_rotulo', 'Perfil'),
    Coluna('cidade', 'Cidade'),
    Coluna('estado', 'UF'),
    Coluna('telefone', 'Telefone', ordenavel=False),
])


class UsuarioListView(PainelViewMixin, View):
    """
    GET /usuarios/?nome=ana&papel=CLIENT&ordem=nome
    """

    template_name = 'usuarios/list.html'

    def get(self, request: HttpRequest) -> HttpResponse:
        filtro_form = UsuarioFiltroForm(request.GET)
        filtro = FiltroUsuariosDTO()
        if filtro_form.is_valid():
            filtro = FiltroUsuariosDTO(
                nome=filtro_form.cleaned_data['nome'] or None,
                email=filtro_form.cleaned_data['email'] or None,
                papel=filtro_form.cleaned_data['papel'] or None,
            )

        listar_service = self.get_service('listar_usuarios_service', usuario_repo__api=self.api_client())

        try:
            usuarios = listar_service.execute(None if filtro.vazio else filtro)
        except DomainException as e:
            logger.error(f"Erro ao listar usuários: {e}")
            self.error_message(request, "Erro ao carregar usuários.")
            usuarios = []

        context = contexto_tabela(
            request.GET,
            TABELA_USUARIOS,
            usuarios,
            url_da_linha=lambda u: reverse('usuarios:detail', args=[u.id]),
        )
        context['filtro_form'] = filtro_form
        return render(request, self.template_name, context)


class _LocalidadesMixin:
    """Choices de estado e cidade para o UsuarioForm."""

    def localidades(self, uf: str = None) -> Tuple[List[tuple], List[tuple]]:
        try:
            estados = self.get_service('listar_estados_service').execute()
            municipios = self.get_service('listar_municipios_service').execute(uf or UF_PADRAO)
        except ExternalServiceError as e:
            logger.warning(f"IBGE indisponível: {e}")
            self.warning_message(self.request, "Não foi possível carregar estados e cidades.")
            return [], []
        return [o.as_choice() for o in estados], [o.as_choice() for o in municipios]

    def usuario_form(self, data=None, initial=None, senha_obrigatoria=True) -> UsuarioForm:
        uf = (data or {}).get('estado') or (initial or {}).get('estado')
        estados, municipios = self.localidades(uf)
        return UsuarioForm(
            data,
            initial=initial,
            estados=estados,
            municipios=municipios,
            senha_obrigatoria=senha_obrigatoria,
        )


def _adicionar_erro(form, erro: ValidationError) -> None:
    form.add_error(erro.field if erro.field in form.fields else None, erro.message)


class UsuarioCreateView(_LocalidadesMixin, PainelViewMixin, View):
    """
    GET /usuarios/criar/ - Formulário
    POST /usuarios/criar/ - Cadastra
    """

    template_name = 'usuarios/form.html'

    def get(self, request: HttpRequest) -> HttpResponse:
        return render(request, self.template_name, {'form': self.usuario_form()})

    def post(self, request: HttpRequest) -> HttpResponse:
        form = self.usuario_form(request.POST)
        if not form.is_valid():
            return render(request, self.template_name, {'form': form})

        criar_service = self.get_service('criar_usuario_service', usuario_repo__api=self.api_client())
        dados = form.cleaned_data

        try:
            output = criar_service.execute(CriarUsuarioInputDTO(
                nome=dados['nome'],
                email=dados['email'],
                senha=dados['senha'],
                papel=dados['papel'],
                cpf=dados['cpf'] or None,
                estado=dados['estado'] or None,
                cidade=dados['cidade'] or None,
                telefone=dados['telefone'] or None,
                executado_por_id=self.get_user_id(request),
            ))
        except ValidationError as e:
            logger.warning(f"Validação falhou ao criar usuário: {e}")
            _adicionar_erro(form, e)
            return render(request, self.template_name, {'form': form})
        except DomainException as e:
            logger.error(f"Erro de domínio ao criar usuário: {e}")
            form.add_error(None, e.message)
            return render(request, self.template_name, {'form': form})

        logger.info(f"Usuário criado: {output.id} por {self.get_user_id(request)}")
        self.success_message(request, f"Usuário {output.nome} cadastrado!")
        return redirect('usuarios:detail', pk=output.id)


class UsuarioDetailView(_LocalidadesMixin, PainelViewMixin, View):
    """
    GET /usuarios/<id>/ - Detalhes e formulário de edição
    POST /usuarios/<id>/ - Atualiza
    """

    template_name = 'usuarios/detail.html'

    def _obter(self, pk: str):
        service = self.get_service('obter_usuario_service', usuario_repo__api=self.api_client())
        return service.execute(pk)

    def get(self, request: HttpRequest, pk: str) -> HttpResponse:
        try:
            usuario = self._obter(pk)
        except EntityNotFoundError:
            self.error_message(request, "Usuário não encontrado.")
            return redirect('usuarios:list')
        except DomainException as e:
            logger.error(f"Erro ao obter usuário {pk}: {e}")
            self.error_message(request, "Erro ao carregar usuário.")
            return redirect('usuarios:list')

        form = self.usuario_form(
            initial={
                'nome': usuario.nome,
                'email': usuario.email,
                'papel': usuario.papel,
                'cpf': usuario.cpf,
                'telefone': usuario.telefone,
                'estado': usuario.estado,
                'cidade': usuario.cidade,
            },
            senha_obrigatoria=False,
        )
        return render(request, self.template_name, {'usuario': usuario, 'form': form})

    def post(self, request: HttpRequest, pk: str) -> HttpResponse:
        form = self.usuario_form(request.POST, senha_obrigatoria=False)
        if not form.is_valid():
            self.error_message(request, "Dados inválidos.")
            return redirect('usuarios:detail', pk=pk)

        atualizar_service = self.get_service('atualizar_usuario_service', usuario_repo__api=self.api_client())
        dados = form.cleaned_data

        try:
            atualizar_service.execute(AtualizarUsuarioInputDTO(
                usuario_id=pk,
                nome=dados['nome'],
                email=dados['email'],
                papel=dados['papel'],
                cpf=dados['cpf'] or None,
                estado=dados['estado'] or None,
                cidade=dados['cidade'] or None,
                telefone=dados['telefone'] or None,
                senha=dados['senha'] or None,
                executado_por_id=self.get_user_id(request),
            ))
            logger.info(f"Usuário {pk} atualizado por {self.get_user_id(request)}")
            self.success_message(request, "Usuário atualizado com sucesso!")

        except EntityNotFoundError:
            self.error_message(request, "Usuário não encontrado.")
            return redirect('usuarios:list')

        except DomainException as e:
            logger.warning(f"Falha ao atualizar usuário {pk}: {e}")
            self.error_message(request, e.message)

        return redirect('usuarios:detail', pk=pk)


class UsuarioDeleteView(PainelViewMixin, View):
    """POST /usuarios/<id>/excluir/"""

    def post(self, request: HttpRequest, pk: str) -> HttpResponse:
        excluir_service = self.get_service('excluir_usuario_service', usuario_repo__api=self.api_client())

        try:
            excluir_service.execute(pk, executado_por_id=self.get_user_id(request))
        except EntityNotFoundError:
            self.error_message(request, "Usuário não encontrado.")
        except BusinessRuleViolationError as e:
            self.error_message(request, e.message)
            return redirect('usuarios:detail', pk=pk)
        except DomainException as e:
            logger.error(f"Erro ao excluir usuário {pk}: {e}")
            self.error_message(request, e.message)
            return redirect('usuarios:detail', pk=pk)
        else:
            logger.info(f"Usuário {pk} excluído por {self.get_user_id(request)}")
            self.success_message(request, "Usuário excluído.")

        return redirect('usuarios:list')


class MunicipiosJsonView(PainelViewMixin, View):
    """
    Municípios de uma UF para o select de cidade.

    GET /usuarios/municipios/?uf=SC
    """

    def get(self, request: HttpRequest) -> JsonResponse:
        service = self.get_service('listar_municipios_service')
        try:
            opcoes = service.execute(request.GET.get('uf'))
        except ExternalServiceError as e:
            logger.warning(f"IBGE indisponível: {e}")
            return JsonResponse(e.to_dict(), status=502)
        return JsonResponse({'municipios': [o.to_dict() for o in opcoes]})
