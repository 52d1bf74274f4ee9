"""
Erros da camada HTTP e tradução para exceções de domínio.

ApiError carrega o contexto HTTP (status e corpo); os repositórios
convertem para as exceções do core com `converter_erro`, de modo que
views e use cases nunca vejam detalhes do httpx.
"""

from typing import Any, Optional

from src.core.shared.exceptions import (
    AuthenticationError,
    DomainException,
    EntityNotFoundError,
    ExternalServiceError,
    ValidationError,
)


class ApiError(Exception):
    """
    Falha em chamada à API do painel.

    Args:
        message: Descrição legível
        status_code: Status HTTP (None para falha de transporte)
        details: Corpo da resposta (JSON quando possível)
    """

    def __init__(self, message: str, *, status_code: Optional[int] = None, details: Optional[Any] = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.details = details

    @property
    def mensagem_api(self) -> Optional[str]:
        """Campo `message` do corpo de erro; listas são unidas."""
        if not isinstance(self.details, dict):
            return None
        mensagem = self.details.get("message")
        if isinstance(mensagem, list):
            return "; ".join(str(m) for m in mensagem)
        return str(mensagem) if mensagem else None


class ApiNotFoundError(ApiError):
    """Recurso inexistente (404)."""


def converter_erro(erro: ApiError, entidade: str = "Registro", entidade_id: Optional[str] = None) -> DomainException:
    """
    Converte ApiError para a exceção de domínio correspondente.

    - 400/422: ValidationError com a mensagem da API
    - 401/403: AuthenticationError (401 só chega aqui pelas rotas de
      sessão; nas demais o ApiClient já levantou SessionExpiredError)
    - 404: EntityNotFoundError
    - demais (e falhas de transporte): ExternalServiceError
    """
    status = erro.status_code
    mensagem = erro.mensagem_api

    if status in (400, 422):
        return ValidationError(mensagem or "Dados inválidos")
    if status in (401, 403):
        return AuthenticationError(mensagem or "Acesso negado pela API")
    if status == 404:
        return EntityNotFoundError(
            mensagem or f"{entidade} não encontrado",
            entity_type=entidade,
            entity_id=entidade_id
        )
    return ExternalServiceError(
        mensagem or "Falha ao comunicar com a API",
        status_code=status,
        details=erro.details,
    )
