"""
Repositories HTTP - Implementações dos ports sobre a API do painel.

Cada repositório:
- Traduz entidades <-> JSON via mappers
- Converte ApiError em exceções de domínio
- Consulta o cache de leituras e o invalida após mutações
"""

import json
import logging
from contextlib import contextmanager
from typing import Any, Callable, Dict, List, Optional

from src.core.autenticacao.entities import Sessao
from src.core.autenticacao.ports import TokenRenovado
from src.core.cadastros.entities import Arquivo, ArquivoUpload, Recurso
from src.core.chamados.dtos import ContagemMensalDTO, OpcaoStatusDTO
from src.core.chamados.entities import ChamadoEntity
from src.core.shared.exceptions import AuthenticationError, ExternalServiceError
from src.core.usuarios.dtos import FiltroUsuariosDTO
from src.core.usuarios.entities import UsuarioEntity

from .client import ApiClient
from .errors import ApiError, ApiNotFoundError, converter_erro
from . import mappers

logger = logging.getLogger(__name__)


class SemCache:
    """Cache nulo: sempre busca na API."""

    def obter_ou_buscar(self, recurso: str, chave: str, buscar: Callable[[], Any]) -> Any:
        return buscar()

    def invalidar(self, recurso: str) -> None:
        pass


@contextmanager
def _traduzindo_erros(entidade: str, entidade_id: Optional[str] = None):
    try:
        yield
    except ApiError as e:
        raise converter_erro(e, entidade, entidade_id) from e


class _HttpRepositoryBase:
    def __init__(self, api: ApiClient, cache=None):
        self.api = api
        self.cache = cache or SemCache()


# =============================================================================
# CHAMADOS
# =============================================================================

class HttpChamadoRepository(_HttpRepositoryBase):
    """ChamadoRepository sobre /assistances."""

    RECURSO = "assistances"

    def list_all(self) -> List[ChamadoEntity]:
        def buscar():
            with _traduzindo_erros("Chamado"):
                return [mappers.chamado_from_api(d) for d in self.api.post("/assistances/all") or []]

        return self.cache.obter_ou_buscar(self.RECURSO, "lista", buscar)

    def get_by_id(self, chamado_id: str) -> Optional[ChamadoEntity]:
        def buscar():
            try:
                data = self.api.get(f"/assistances/{chamado_id}")
            except ApiNotFoundError:
                return None
            except ApiError as e:
                raise converter_erro(e, "Chamado", chamado_id) from e
            return mappers.chamado_from_api(data) if data else None

        return self.cache.obter_ou_buscar(self.RECURSO, f"item:{chamado_id}", buscar)

    def add(self, chamado: ChamadoEntity) -> ChamadoEntity:
        dados = mappers.chamado_to_api(chamado)
        dados.pop("id", None)
        with _traduzindo_erros("Chamado"):
            data = self.api.post("/assistances/create", json=dados)
        self.cache.invalidar(self.RECURSO)
        logger.info("Chamado criado na API: %s", chamado.titulo)
        return mappers.chamado_from_api(data) if isinstance(data, dict) and data.get("id") else chamado

    def update(self, chamado: ChamadoEntity) -> ChamadoEntity:
        with _traduzindo_erros("Chamado", chamado.id):
            data = self.api.post(
                f"/assistances/update/{chamado.id}",
                json=mappers.chamado_to_api(chamado),
            )
        self.cache.invalidar(self.RECURSO)
        return mappers.chamado_from_api(data) if isinstance(data, dict) and data.get("id") else chamado

    def delete(self, chamado_id: str) -> None:
        with _traduzindo_erros("Chamado", chamado_id):
            self.api.delete(f"/assistances/{chamado_id}")
        self.cache.invalidar(self.RECURSO)

    def list_status(self) -> List[OpcaoStatusDTO]:
        def buscar():
            with _traduzindo_erros("Status"):
                data = self.api.get("/assistances/status") or []
            if isinstance(data, dict):
                data = [{"value": k, "label": v} for k, v in data.items()]
            return [mappers.status_from_api(item) for item in data]

        return self.cache.obter_ou_buscar(self.RECURSO, "status", buscar)

    def count_by_status(self) -> Dict[str, dict]:
        def buscar():
            with _traduzindo_erros("Contadores"):
                data = self.api.post("/assistances/counters") or {}
            return {
                chave: {"label": v.get("label", chave), "count": int(v.get("count") or 0)}
                for chave, v in data.items()
            }

        return self.cache.obter_ou_buscar(self.RECURSO, "contadores", buscar)

    def count_by_month(self) -> List[ContagemMensalDTO]:
        def buscar():
            with _traduzindo_erros("Contadores"):
                data = self.api.post("/assistances/monthly/counters")
            return mappers.contagens_mensais_from_api(data)

        return self.cache.obter_ou_buscar(self.RECURSO, "mensal", buscar)


# =============================================================================
# USUÁRIOS
# =============================================================================

class HttpUsuarioRepository(_HttpRepositoryBase):
    """UsuarioRepository sobre /users."""

    RECURSO = "users"

    def list_all(self, filtro: Optional[FiltroUsuariosDTO] = None) -> List[UsuarioEntity]:
        corpo = None
        if filtro and not filtro.vazio:
            corpo = {k: v for k, v in filtro.to_dict().items() if v}

        def buscar():
            with _traduzindo_erros("Usuario"):
                data = self.api.post("/users", json=corpo) or []
            return [mappers.usuario_from_api(d) for d in data]

        chave = "lista:" + json.dumps(corpo or {}, sort_keys=True)
        return self.cache.obter_ou_buscar(self.RECURSO, chave, buscar)

    def get_by_id(self, usuario_id: str) -> Optional[UsuarioEntity]:
        def buscar():
            try:
                data = self.api.get(f"/users/{usuario_id}")
            except ApiNotFoundError:
                return None
            except ApiError as e:
                raise converter_erro(e, "Usuario", usuario_id) from e
            return mappers.usuario_from_api(data) if data else None

        return self.cache.obter_ou_buscar(self.RECURSO, f"item:{usuario_id}", buscar)

    def add(self, usuario: UsuarioEntity) -> UsuarioEntity:
        with _traduzindo_erros("Usuario"):
            data = self.api.post("/users/create", json=mappers.usuario_to_api(usuario, incluir_id=False))
        self.cache.invalidar(self.RECURSO)
        logger.info("Usuário criado na API: %s", usuario.email)
        return mappers.usuario_from_api(data) if isinstance(data, dict) and data.get("id") else usuario

    def update(self, usuario: UsuarioEntity) -> UsuarioEntity:
        with _traduzindo_erros("Usuario", usuario.id):
            data = self.api.post(f"/users/update/{usuario.id}", json=mappers.usuario_to_api(usuario))
        self.cache.invalidar(self.RECURSO)
        return mappers.usuario_from_api(data) if isinstance(data, dict) and data.get("id") else usuario

    def delete(self, usuario_id: str) -> None:
        with _traduzindo_erros("Usuario", usuario_id):
            self.api.delete(f"/users/{usuario_id}")
        self.cache.invalidar(self.RECURSO)


# =============================================================================
# CADASTROS
# =============================================================================

class HttpCadastroRepository(_HttpRepositoryBase):
    """
    CRUD genérico sobre /{recurso}.

    Também atende ServicoRepository (remoção de opção).
    """

    def __init__(self, api: ApiClient, recurso: Recurso, cache=None):
        super().__init__(api, cache)
        self.recurso = recurso

    @property
    def _base(self) -> str:
        return f"/{self.recurso.value}"

    def _converter(self, data: Any, fallback: Any) -> Any:
        if isinstance(data, dict) and data.get("id"):
            return mappers.registro_from_api(self.recurso, data)
        return fallback

    def list_all(self) -> List[Any]:
        def buscar():
            with _traduzindo_erros(self.recurso.entidade):
                data = self.api.post(self._base) or []
            return [mappers.registro_from_api(self.recurso, d) for d in data]

        return self.cache.obter_ou_buscar(self.recurso.value, "lista", buscar)

    def get_by_id(self, registro_id: str) -> Optional[Any]:
        def buscar():
            try:
                data = self.api.get(f"{self._base}/{registro_id}")
            except ApiNotFoundError:
                return None
            except ApiError as e:
                raise converter_erro(e, self.recurso.entidade, registro_id) from e
            return self._converter(data, None)

        return self.cache.obter_ou_buscar(self.recurso.value, f"item:{registro_id}", buscar)

    def add(self, registro: Any) -> Any:
        with _traduzindo_erros(self.recurso.entidade):
            data = self.api.post(
                f"{self._base}/create",
                json=mappers.registro_to_api(self.recurso, registro, incluir_id=False),
            )
        self.cache.invalidar(self.recurso.value)
        logger.info("%s criado na API", self.recurso.entidade)
        return self._converter(data, registro)

    def update(self, registro: Any) -> Any:
        with _traduzindo_erros(self.recurso.entidade, registro.id):
            data = self.api.post(
                f"{self._base}/update/{registro.id}",
                json=mappers.registro_to_api(self.recurso, registro),
            )
        self.cache.invalidar(self.recurso.value)
        return self._converter(data, registro)

    def delete(self, registro_id: str) -> None:
        with _traduzindo_erros(self.recurso.entidade, registro_id):
            self.api.delete(f"{self._base}/{registro_id}")
        self.cache.invalidar(self.recurso.value)

    def remover_opcao(self, opcao_id: str) -> None:
        with _traduzindo_erros("OpcaoServico", opcao_id):
            self.api.delete(f"/services/option/delete/{opcao_id}")
        self.cache.invalidar(Recurso.SERVICOS.value)


class HttpArquivoGateway(_HttpRepositoryBase):
    """ArquivoGateway sobre /files."""

    def enviar(
        self,
        arquivos: List[ArquivoUpload],
        caminho: str,
        tipo: str,
        produto_id: Optional[str] = None,
        video_id: Optional[str] = None,
    ) -> List[Arquivo]:
        params = {
            "filePath": caminho,
            "fileType": tipo,
            "productId": produto_id,
            "videoId": video_id,
        }
        multipart = [("files", (a.nome, a.conteudo, a.content_type)) for a in arquivos]

        with _traduzindo_erros("Arquivo"):
            data = self.api.patch("/files", params=params, files=multipart) or []

        self.cache.invalidar(Recurso.PRODUTOS.value)
        self.cache.invalidar(Recurso.VIDEOS.value)
        logger.info("%d arquivo(s) enviados para %s", len(arquivos), caminho)
        return [mappers.arquivo_from_api(d) for d in data]

    def remover(self, arquivo_id: str) -> None:
        with _traduzindo_erros("Arquivo", arquivo_id):
            self.api.delete(f"/files/{arquivo_id}")
        self.cache.invalidar(Recurso.PRODUTOS.value)
        self.cache.invalidar(Recurso.VIDEOS.value)


# =============================================================================
# AUTENTICAÇÃO
# =============================================================================

class HttpAutenticacaoGateway:
    """AutenticacaoGateway sobre /sessions e /refresh-token."""

    def __init__(self, api: ApiClient):
        self.api = api

    @staticmethod
    def _erro(e: ApiError, mensagem: str) -> Exception:
        if e.status_code is not None and 400 <= e.status_code < 500:
            return AuthenticationError(e.mensagem_api or mensagem)
        return ExternalServiceError(
            "Falha ao comunicar com a API",
            status_code=e.status_code,
            details=e.details,
        )

    def autenticar(self, email: str, senha: str) -> Sessao:
        try:
            data = self.api.post("/sessions", json={"email": email, "password": senha})
        except ApiError as e:
            raise self._erro(e, "E-mail ou senha inválidos") from e

        if not isinstance(data, dict) or not data.get("user") or not data.get("token"):
            raise AuthenticationError("E-mail ou senha inválidos")
        return mappers.sessao_from_api(data)

    def renovar(self, refresh_token: str) -> TokenRenovado:
        try:
            data = self.api.post("/refresh-token", json={"token": refresh_token})
        except ApiError as e:
            raise self._erro(e, "Refresh token recusado") from e

        if not isinstance(data, dict) or not data.get("token"):
            raise AuthenticationError("Refresh token recusado")
        return TokenRenovado(
            token=data["token"],
            expira_em_segundos=float(data.get("tokenExpiry") or 0),
            refresh_token=data.get("refreshToken"),
        )
