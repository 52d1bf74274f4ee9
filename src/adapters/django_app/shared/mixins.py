"""
Mixins compartilhados pelas views do painel.

- ContainerMixin: acesso ao container de DI e ao cliente da API
  autenticado com a sessão da requisição
- FlashMessageMixin: mensagens de feedback
- UserContextMixin: dados do administrador logado
- AdminRequiredMixin: exige sessão de administrador e trata
  SessionExpiredError em qualquer ponto da view
"""

import logging
from typing import Optional

from django.contrib import messages
from django.contrib.auth.views import redirect_to_login
from django.http import HttpRequest, HttpResponse
from django.shortcuts import resolve_url

from src.config.container import get_container
from src.core.autenticacao.entities import Sessao
from src.core.shared.exceptions import SessionExpiredError

from .sessao import DjangoSessaoStore

logger = logging.getLogger(__name__)


class ContainerMixin:
    """
    Mixin que fornece acesso ao DI Container.

    Example:
        service = self.get_service(
            'listar_chamados_service',
            chamado_repo__api=self.api_client(),
        )
    """

    def get_container(self):
        return get_container()

    def get_service(self, service_name: str, **kwargs):
        """
        Obtém service do container.

        Args:
            service_name: Nome do provider no container
            **kwargs: Argumentos de contexto repassados ao provider
                (aceita a sintaxe aninhada `repo__api=...`)
        """
        return getattr(self.get_container(), service_name)(**kwargs)

    def sessao_store(self) -> DjangoSessaoStore:
        return DjangoSessaoStore(self.request.session)

    def api_client(self):
        """
        Cliente da API com o token da sessão atual.

        Reaproveitado durante a requisição; a renovação de token
        grava a sessão nova de volta em `request.session`, e um token
        recusado sem renovação possível apaga a sessão guardada.
        """
        client = getattr(self, '_api_client', None)
        if client is None:
            container = self.get_container()
            store = self.sessao_store()
            renovar = container.renovar_sessao_service(sessao_store=store)
            client = container.api_client(
                sessao=store.obter(),
                renovar_sessao=renovar.execute,
                ao_expirar=store.limpar,
            )
            self._api_client = client
        return client

    def fechar_api_client(self) -> None:
        client = getattr(self, '_api_client', None)
        if client is not None:
            client.close()
            self._api_client = None


class FlashMessageMixin:
    """Flash messages de forma consistente."""

    def success_message(self, request: HttpRequest, message: str) -> None:
        messages.success(request, message)

    def error_message(self, request: HttpRequest, message: str) -> None:
        messages.error(request, message)

    def warning_message(self, request: HttpRequest, message: str) -> None:
        messages.warning(request, message)

    def info_message(self, request: HttpRequest, message: str) -> None:
        messages.info(request, message)


class UserContextMixin:
    """Extrai o administrador logado da sessão."""

    def get_sessao(self, request: HttpRequest) -> Optional[Sessao]:
        return DjangoSessaoStore(request.session).obter()

    def get_user_id(self, request: HttpRequest) -> Optional[str]:
        sessao = self.get_sessao(request)
        return sessao.usuario.id if sessao else None

    def get_user_display_name(self, request: HttpRequest) -> str:
        sessao = self.get_sessao(request)
        if sessao:
            return sessao.usuario.nome or sessao.usuario.email
        return 'Anônimo'


class AdminRequiredMixin:
    """
    Exige sessão de administrador.

    Sem sessão, redireciona para o login guardando `next`.
    SessionExpiredError levantada pela view limpa a sessão Django
    e também redireciona para o login.
    """

    login_url_name = 'painel:login'

    def _redirecionar_login(self, request: HttpRequest) -> HttpResponse:
        return redirect_to_login(request.get_full_path(), resolve_url(self.login_url_name))

    def dispatch(self, request: HttpRequest, *args, **kwargs) -> HttpResponse:
        sessao = DjangoSessaoStore(request.session).obter()
        if sessao is None or not sessao.usuario.eh_admin:
            return self._redirecionar_login(request)

        try:
            response = super().dispatch(request, *args, **kwargs)
        except SessionExpiredError as e:
            return self._sessao_expirada(request, sessao, e.message)
        finally:
            if hasattr(self, 'fechar_api_client'):
                self.fechar_api_client()

        # renovação recusada durante a view (erro tratado como DomainException)
        if DjangoSessaoStore(request.session).obter() is None:
            return self._sessao_expirada(request, sessao, SessionExpiredError().message)
        return response

    def _sessao_expirada(self, request: HttpRequest, sessao: Sessao, mensagem: str) -> HttpResponse:
        logger.info(f"Sessão expirada para {sessao.usuario.email}")
        request.session.flush()
        messages.warning(request, mensagem)
        return self._redirecionar_login(request)


class PainelViewMixin(AdminRequiredMixin, ContainerMixin, FlashMessageMixin, UserContextMixin):
    """Combinação usada pelas views autenticadas do painel."""
