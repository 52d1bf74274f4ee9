"""
Ports (Interfaces) do Domínio de Autenticação.
"""

from dataclasses import dataclass
from typing import Dict, Optional, Protocol, runtime_checkable

from src.core.shared.exceptions import AuthenticationError

from .entities import Sessao, UsuarioSessao, calcular_expiracao


@dataclass(frozen=True)
class TokenRenovado:
    """
    Resposta de /refresh-token.

    Attributes:
        expira_em_segundos: Validade do novo token
        refresh_token: Novo refresh token (opcional)
    """

    token: str
    expira_em_segundos: float
    refresh_token: Optional[str] = None


@runtime_checkable
class AutenticacaoGateway(Protocol):
    """
    Interface para os endpoints de sessão da API.

    Implementações:
    - HttpAutenticacaoGateway (API remota)
    - InMemoryAutenticacaoGateway (testes)
    """

    def autenticar(self, email: str, senha: str) -> Sessao:
        """
        Raises:
            AuthenticationError: Se credenciais inválidas
        """
        ...

    def renovar(self, refresh_token: str) -> TokenRenovado:
        """
        Raises:
            AuthenticationError: Se refresh token inválido
        """
        ...


@runtime_checkable
class SessaoStore(Protocol):
    """
    Onde a sessão do administrador fica guardada entre requisições.

    Implementações:
    - DjangoSessaoStore (request.session)
    - InMemorySessaoStore (testes)
    """

    def obter(self) -> Optional[Sessao]:
        ...

    def salvar(self, sessao: Sessao) -> None:
        ...

    def limpar(self) -> None:
        ...


class InMemorySessaoStore:
    def __init__(self, sessao: Optional[Sessao] = None):
        self._sessao = sessao

    def obter(self) -> Optional[Sessao]:
        return self._sessao

    def salvar(self, sessao: Sessao) -> None:
        self._sessao = sessao

    def limpar(self) -> None:
        self._sessao = None


class InMemoryAutenticacaoGateway:
    """
    Gateway em memória.

    Usuários são registrados com `registrar`; cada autenticação gera
    tokens sequenciais para facilitar asserções.
    """

    VALIDADE_SEGUNDOS = 3600

    def __init__(self):
        self._usuarios: Dict[str, tuple] = {}
        self._refresh_tokens: Dict[str, str] = {}
        self._contador = 0

    def registrar(self, usuario: UsuarioSessao, senha: str) -> None:
        self._usuarios[usuario.email] = (usuario, senha)

    def _novo_token(self, prefixo: str) -> str:
        self._contador += 1
        return f"{prefixo}-{self._contador}"

    def autenticar(self, email: str, senha: str) -> Sessao:
        registro = self._usuarios.get(email)
        if not registro or registro[1] != senha:
            raise AuthenticationError("E-mail ou senha inválidos")

        usuario = registro[0]
        refresh_token = self._novo_token("refresh")
        self._refresh_tokens[refresh_token] = email
        return Sessao(
            usuario=usuario,
            token=self._novo_token("token"),
            refresh_token=refresh_token,
            expira_em=calcular_expiracao(self.VALIDADE_SEGUNDOS),
        )

    def renovar(self, refresh_token: str) -> TokenRenovado:
        if refresh_token not in self._refresh_tokens:
            raise AuthenticationError("Refresh token inválido")
        return TokenRenovado(
            token=self._novo_token("token"),
            expira_em_segundos=self.VALIDADE_SEGUNDOS,
        )
