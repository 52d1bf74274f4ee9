"""
Use Cases (Application Services) do Domínio de Autenticação.

Use Cases implementados:
- AutenticarAdminService: Login (somente administradores)
- RenovarSessaoService: Renova o token de acesso
- EncerrarSessaoService: Logout
"""

from dataclasses import dataclass

from src.core.shared.interfaces import UnitOfWork
from src.core.shared.exceptions import (
    AuthenticationError,
    ExternalServiceError,
    SessionExpiredError,
    ValidationError,
)

from .ports import AutenticacaoGateway, SessaoStore
from .entities import Sessao
from .events import AdminAutenticadoEvent, SessaoEncerradaEvent


@dataclass(frozen=True)
class LoginInputDTO:
    email: str
    senha: str


class AutenticarAdminService:
    """
    Use Case: Login no painel.

    Regras de Negócio:
    - E-mail e senha obrigatórios
    - Apenas usuários com papel ADMIN podem entrar

    Fluxo:
    1. Autenticar na API (/sessions)
    2. Verificar papel
    3. Guardar sessão
    4. Disparar AdminAutenticadoEvent
    """

    def __init__(self, auth_gateway: AutenticacaoGateway, sessao_store: SessaoStore, uow: UnitOfWork):
        self.auth_gateway = auth_gateway
        self.sessao_store = sessao_store
        self.uow = uow

    def execute(self, input_dto: LoginInputDTO) -> Sessao:
        """
        Raises:
            ValidationError: Se e-mail ou senha vazios
            AuthenticationError: Se credenciais inválidas ou usuário não é admin
        """
        if not input_dto.email or not input_dto.email.strip():
            raise ValidationError("E-mail é obrigatório", field="email")
        if not input_dto.senha:
            raise ValidationError("Senha é obrigatória", field="senha")

        with self.uow:
            sessao = self.auth_gateway.autenticar(input_dto.email.strip(), input_dto.senha)

            if not sessao.usuario.eh_admin:
                raise AuthenticationError("Acesso permitido apenas para administradores")

            self.sessao_store.salvar(sessao)

            self.uow.publish_event(
                AdminAutenticadoEvent(
                    aggregate_id=sessao.usuario.id,
                    email=sessao.usuario.email,
                )
            )

        return sessao


class RenovarSessaoService:
    """
    Use Case: Renovar token de acesso.

    Em qualquer falha a sessão guardada é descartada e o
    administrador precisa entrar novamente.
    """

    def __init__(self, auth_gateway: AutenticacaoGateway, sessao_store: SessaoStore):
        self.auth_gateway = auth_gateway
        self.sessao_store = sessao_store

    def execute(self) -> Sessao:
        """
        Raises:
            SessionExpiredError: Se não há sessão ou a renovação falhou
        """
        sessao = self.sessao_store.obter()
        if not sessao or not sessao.refresh_token:
            self.sessao_store.limpar()
            raise SessionExpiredError()

        try:
            renovado = self.auth_gateway.renovar(sessao.refresh_token)
        except (AuthenticationError, ExternalServiceError) as e:
            self.sessao_store.limpar()
            raise SessionExpiredError() from e

        nova = sessao.renovada(
            token=renovado.token,
            expira_em_segundos=renovado.expira_em_segundos,
            refresh_token=renovado.refresh_token,
        )
        self.sessao_store.salvar(nova)
        return nova


class EncerrarSessaoService:
    """
    Use Case: Logout.

    Sem sessão ativa não há o que encerrar nem evento a disparar.
    """

    def __init__(self, sessao_store: SessaoStore, uow: UnitOfWork):
        self.sessao_store = sessao_store
        self.uow = uow

    def execute(self, motivo: str = "logout") -> None:
        sessao = self.sessao_store.obter()
        if not sessao:
            return

        with self.uow:
            self.sessao_store.limpar()
            self.uow.publish_event(
                SessaoEncerradaEvent(aggregate_id=sessao.usuario.id, motivo=motivo)
            )
