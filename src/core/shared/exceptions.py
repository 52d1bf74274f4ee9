"""
Exceções de Domínio do Painel Administrativo.

Exceções tipadas que atravessam as camadas sem expor detalhes
de infraestrutura (HTTP, Django, etc).

Hierarquia:
    DomainException (base)
    ├── ValidationError (dado de entrada inválido)
    ├── EntityNotFoundError (registro inexistente na API)
    ├── BusinessRuleViolationError (regra de negócio violada)
    ├── AuthenticationError (credenciais inválidas / papel não permitido)
    ├── SessionExpiredError (token expirado e renovação falhou)
    └── ExternalServiceError (falha na API remota)
"""

from typing import Any, Optional


class DomainException(Exception):
    """
    Exceção base para todos os erros de domínio.

    Example:
        try:
            service.execute(input_dto)
        except DomainException as e:
            logger.error(f"Erro de domínio: {e}")
    """

    def __init__(self, message: str, code: str = None):
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"

    def to_dict(self) -> dict:
        """Serializa exceção para dicionário."""
        return {
            "error": self.code,
            "message": self.message,
        }


class ValidationError(DomainException):
    """
    Erro de validação de dados de entrada.

    Example:
        if not cpf_eh_valido(cpf):
            raise ValidationError("CPF inválido", field="cpf")
    """

    def __init__(self, message: str, field: str = None):
        self.field = field
        code = f"VALIDATION_ERROR_{field.upper()}" if field else "VALIDATION_ERROR"
        super().__init__(message, code)

    def to_dict(self) -> dict:
        result = super().to_dict()
        if self.field:
            result["field"] = self.field
        return result


class EntityNotFoundError(DomainException):
    """
    Registro não encontrado.

    Example:
        chamado = repo.get_by_id(chamado_id)
        if not chamado:
            raise EntityNotFoundError(f"Chamado {chamado_id} não encontrado")
    """

    def __init__(self, message: str, entity_type: str = None, entity_id: str = None):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(message, "ENTITY_NOT_FOUND")

    def to_dict(self) -> dict:
        result = super().to_dict()
        if self.entity_type:
            result["entity_type"] = self.entity_type
        if self.entity_id:
            result["entity_id"] = self.entity_id
        return result


class BusinessRuleViolationError(DomainException):
    """Violação de regra de negócio."""

    def __init__(self, message: str, rule: str = None):
        self.rule = rule
        super().__init__(message, "BUSINESS_RULE_VIOLATION")

    def to_dict(self) -> dict:
        result = super().to_dict()
        if self.rule:
            result["rule"] = self.rule
        return result


class AuthenticationError(DomainException):
    """
    Falha de autenticação.

    Lançada quando a API recusa as credenciais ou quando o
    usuário autenticado não possui papel de administrador.
    """

    def __init__(self, message: str):
        super().__init__(message, "AUTHENTICATION_ERROR")


class SessionExpiredError(DomainException):
    """
    Sessão expirada sem possibilidade de renovação.

    O adapter HTTP lança esta exceção quando o refresh token
    é recusado; as views encerram a sessão e redirecionam
    para o login.
    """

    def __init__(self, message: str = "Sessão expirada. Faça login novamente."):
        super().__init__(message, "SESSION_EXPIRED")


class ExternalServiceError(DomainException):
    """
    Falha ao comunicar com a API remota.

    Attributes:
        status_code: Status HTTP (None para falhas de transporte)
        details: Corpo da resposta de erro, quando disponível
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        details: Optional[Any] = None,
    ):
        self.status_code = status_code
        self.details = details
        super().__init__(message, "EXTERNAL_SERVICE_ERROR")

    def to_dict(self) -> dict:
        result = super().to_dict()
        if self.status_code is not None:
            result["status_code"] = self.status_code
        return result
