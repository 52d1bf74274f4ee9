"""
Shared Domain Components.

Componentes compartilhados entre todos os domínios do painel:
- Exceções de domínio
- Interfaces (Ports) e base de Domain Events
- Tabela dinâmica (busca, filtros, ordenação, paginação)
- Validação de CPF e funções de data
"""

from .exceptions import (
    DomainException,
    ValidationError,
    EntityNotFoundError,
    BusinessRuleViolationError,
    AuthenticationError,
    SessionExpiredError,
    ExternalServiceError,
)
from .events import DomainEvent
from .interfaces import UnitOfWork, EventPublisher, EventStore
from .tabela import Coluna, EstadoTabela, PaginaTabela, TabelaDinamica

__all__ = [
    "DomainException",
    "ValidationError",
    "EntityNotFoundError",
    "BusinessRuleViolationError",
    "AuthenticationError",
    "SessionExpiredError",
    "ExternalServiceError",
    "DomainEvent",
    "UnitOfWork",
    "EventPublisher",
    "EventStore",
    "Coluna",
    "EstadoTabela",
    "PaginaTabela",
    "TabelaDinamica",
]
