"""
Views do Painel: login, logout e dashboard.

O login é um POST de credenciais para a API (/sessions); apenas
administradores entram. A sessão devolvida fica em request.session.
"""

import logging

from django.http import HttpRequest, HttpResponse, JsonResponse
from django.shortcuts import redirect, render
from django.utils.http import url_has_allowed_host_and_scheme
from django.views import View

from src.core.autenticacao.use_cases import LoginInputDTO
from src.core.shared.exceptions import AuthenticationError, DomainException

from src.adapters.django_app.shared.mixins import (
    ContainerMixin,
    FlashMessageMixin,
    PainelViewMixin,
)

from .forms import LoginForm

logger = logging.getLogger(__name__)


class LoginView(ContainerMixin, FlashMessageMixin, View):
    """
    GET /login/ - Formulário
    POST /login/ - Autentica na API
    """

    template_name = 'painel/login.html'

    def _destino(self, request: HttpRequest) -> str:
        destino = request.POST.get('next') or request.GET.get('next')
        if destino and url_has_allowed_host_and_scheme(
            destino, allowed_hosts={request.get_host()}, require_https=request.is_secure()
        ):
            return destino
        return 'painel:dashboard'

    def get(self, request: HttpRequest) -> HttpResponse:
        return render(request, self.template_name, {
            'form': LoginForm(),
            'next': request.GET.get('next', ''),
        })

    def post(self, request: HttpRequest) -> HttpResponse:
        form = LoginForm(request.POST)
        contexto = {'form': form, 'next': request.POST.get('next', '')}

        if not form.is_valid():
            return render(request, self.template_name, contexto)

        autenticar_service = self.get_service(
            'autenticar_admin_service',
            sessao_store=self.sessao_store(),
        )

        try:
            sessao = autenticar_service.execute(LoginInputDTO(
                email=form.cleaned_data['email'],
                senha=form.cleaned_data['senha'],
            ))
        except AuthenticationError as e:
            logger.warning(f"Login recusado para {form.cleaned_data['email']}: {e}")
            form.add_error(None, e.message)
            return render(request, self.template_name, contexto, status=401)
        except DomainException as e:
            logger.error(f"Erro ao autenticar: {e}")
            form.add_error(None, e.message)
            return render(request, self.template_name, contexto)

        request.session.cycle_key()
        self.success_message(request, f"Bem-vindo, {sessao.usuario.nome}!")
        return redirect(self._destino(request))


class LogoutView(ContainerMixin, FlashMessageMixin, View):
    """POST /logout/"""

    def post(self, request: HttpRequest) -> HttpResponse:
        encerrar_service = self.get_service(
            'encerrar_sessao_service',
            sessao_store=self.sessao_store(),
        )
        try:
            encerrar_service.execute()
        except DomainException as e:
            logger.error(f"Erro ao encerrar sessão: {e}")

        request.session.flush()
        self.info_message(request, "Sessão encerrada.")
        return redirect('painel:login')


class DashboardView(PainelViewMixin, View):
    """
    Dashboard com contadores por status e gráfico mensal.

    GET /
    """

    template_name = 'painel/dashboard.html'

    def get(self, request: HttpRequest) -> HttpResponse:
        api = self.api_client()
        contar_service = self.get_service('contar_chamados_por_status_service', chamado_repo__api=api)
        grafico_service = self.get_service('gerar_grafico_mensal_service', chamado_repo__api=api)

        try:
            contadores = contar_service.execute()
            grafico = grafico_service.execute()
        except DomainException as e:
            logger.error(f"Erro ao carregar dashboard: {e}")
            self.error_message(request, "Erro ao carregar os indicadores.")
            contadores = []
            grafico = None

        context = {
            'contadores': contadores,
            'grafico': grafico.to_dict() if grafico and not grafico.vazio else None,
            'usuario_nome': self.get_user_display_name(request),
        }
        return render(request, self.template_name, context)


class GraficoMensalJsonView(PainelViewMixin, View):
    """
    Dados do gráfico mensal em JSON.

    GET /dashboard/grafico/
    """

    def get(self, request: HttpRequest) -> JsonResponse:
        service = self.get_service('gerar_grafico_mensal_service', chamado_repo__api=self.api_client())
        try:
            grafico = service.execute()
        except DomainException as e:
            logger.error(f"Erro ao gerar gráfico mensal: {e}")
            return JsonResponse(e.to_dict(), status=502)
        return JsonResponse(grafico.to_dict())
