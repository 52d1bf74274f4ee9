"""
Cliente HTTP da API do painel.

Responsabilidades:
- Montar URL e cabeçalhos (Bearer com o token da sessão)
- Renovar o token antes da chamada quando a sessão já expirou
- Em 401, renovar uma única vez e repetir a chamada
  (exceto nas rotas de sessão)
- 401 sem renovação possível: limpar a sessão guardada
  (`ao_expirar`) e levantar SessionExpiredError
- Normalizar respostas: JSON quando houver, ApiError nos demais casos

A renovação em si é delegada a `renovar_sessao` (normalmente
RenovarSessaoService.execute), que lança SessionExpiredError
quando o refresh token é recusado.
"""

import logging
from typing import Any, Callable, Dict, List, Optional, Tuple

import httpx

from src.core.autenticacao.entities import Sessao
from src.core.shared.exceptions import SessionExpiredError

from .errors import ApiError, ApiNotFoundError

# (nome do campo, (nome do arquivo, conteúdo, content type))
ArquivoMultipart = Tuple[str, Tuple[str, bytes, str]]


class ApiClient:
    """
    Cliente síncrono sobre httpx.

    Args:
        base_url: URL base da API (PAINEL_API_URL)
        sessao: Sessão autenticada (None para rotas públicas)
        renovar_sessao: Callable que devolve a sessão renovada
        ao_expirar: Callable chamado quando a API recusa o token e não
            há como renovar (normalmente limpa o SessaoStore)
        timeout: Timeout padrão do cliente interno
        client: httpx.Client compartilhado (pool do processo ou
            MockTransport nos testes); `close` só fecha o cliente interno
    """

    ROTAS_DE_SESSAO = ("/sessions", "/refresh-token")

    def __init__(
        self,
        base_url: str,
        *,
        sessao: Optional[Sessao] = None,
        renovar_sessao: Optional[Callable[[], Sessao]] = None,
        ao_expirar: Optional[Callable[[], None]] = None,
        timeout: float = 10.0,
        client: Optional[httpx.Client] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.sessao = sessao
        self._renovar_sessao = renovar_sessao
        self._ao_expirar = ao_expirar
        self._client_proprio = client is None
        self._client = client or httpx.Client(timeout=timeout, follow_redirects=True)
        self._logger = logging.getLogger(__name__)

    def _headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.sessao and self.sessao.token:
            headers["Authorization"] = f"Bearer {self.sessao.token}"
        return headers

    def _pode_renovar(self, path: str) -> bool:
        return (
            self._renovar_sessao is not None
            and self.sessao is not None
            and bool(self.sessao.refresh_token)
            and path not in self.ROTAS_DE_SESSAO
        )

    def _renovar(self) -> None:
        self.sessao = self._renovar_sessao()

    def _enviar(self, method: str, path: str, **kwargs) -> httpx.Response:
        url = f"{self.base_url}{path}"
        self._logger.debug("API %s %s", method, url)
        try:
            return self._client.request(method, url, headers=self._headers(), **kwargs)
        except httpx.HTTPError as e:
            raise ApiError(f"Falha de comunicação com a API: {e}") from e

    def request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        params: Optional[Dict[str, Any]] = None,
        files: Optional[List[ArquivoMultipart]] = None,
    ) -> httpx.Response:
        """
        Executa a chamada com renovação de token.

        Raises:
            ApiNotFoundError: Resposta 404
            ApiError: Demais respostas não-2xx e falhas de transporte
            SessionExpiredError: 401 fora das rotas de sessão sem
                renovação possível, ou se a renovação do token falhar
        """
        kwargs: Dict[str, Any] = {}
        if json is not None:
            kwargs["json"] = json
        if params:
            kwargs["params"] = {k: v for k, v in params.items() if v is not None}
        if files:
            kwargs["files"] = files

        if self._pode_renovar(path) and self.sessao.esta_expirada():
            self._logger.info("Token expirado; renovando antes de %s %s", method, path)
            self._renovar()

        response = self._enviar(method, path, **kwargs)

        if response.status_code == 401 and self._pode_renovar(path):
            self._logger.info("API recusou o token em %s %s; renovando sessão", method, path)
            self._renovar()
            response = self._enviar(method, path, **kwargs)

        if response.status_code == 401 and path not in self.ROTAS_DE_SESSAO:
            self._sessao_expirada(method, path)

        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            erro = ApiNotFoundError if status == 404 else ApiError
            self._logger.warning("API %s %s respondeu %s", method, path, status)
            raise erro(
                f"API respondeu {status} em {method} {path}",
                status_code=status,
                details=_corpo(e.response),
            ) from e

        return response

    def _json(self, method: str, path: str, **kwargs) -> Any:
        response = self.request(method, path, **kwargs)
        return _corpo(response) if response.content else None

    def get(self, path: str, **kwargs) -> Any:
        return self._json("GET", path, **kwargs)

    def post(self, path: str, **kwargs) -> Any:
        return self._json("POST", path, **kwargs)

    def patch(self, path: str, **kwargs) -> Any:
        return self._json("PATCH", path, **kwargs)

    def delete(self, path: str, **kwargs) -> Any:
        return self._json("DELETE", path, **kwargs)

    def _sessao_expirada(self, method: str, path: str) -> None:
        self._logger.warning("API recusou o token em %s %s sem renovação possível", method, path)
        if self._ao_expirar is not None:
            self._ao_expirar()
        raise SessionExpiredError()

    def close(self) -> None:
        if self._client_proprio:
            self._client.close()


def _corpo(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text
