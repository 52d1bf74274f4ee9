"""
Interfaces (Ports) compartilhadas entre Core e Adapters.

Driven Ports:
- UnitOfWork: delimita uma operação e publica eventos após o commit
- EventPublisher: entrega eventos a handlers (log, Celery, memória)
- EventStore: persiste eventos para auditoria

Core define interfaces; Adapters implementam.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List

from .events import DomainEvent


class UnitOfWork(ABC):
    """
    Unit of Work - Coordena uma operação atômica.

    No painel, a persistência de negócio acontece na API remota;
    o UoW garante que os eventos de auditoria só sejam gravados e
    publicados se a operação terminar sem erro.

    Pattern: Context Manager
        with uow:
            repo.add(chamado)
            uow.publish_event(evento)
        # Commit automático ao sair sem erro
        # Rollback automático se exceção
    """

    def __init__(self):
        self._events: List[DomainEvent] = []

    def __enter__(self) -> "UnitOfWork":
        self._begin_transaction()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        if exc_type is not None:
            self.rollback()
        else:
            self.commit()
        return False

    @abstractmethod
    def _begin_transaction(self) -> None:
        raise NotImplementedError

    @abstractmethod
    def commit(self) -> None:
        """
        Finaliza a operação.

        Ordem:
        1. Persistir eventos no Event Store
        2. Publicar eventos enfileirados
        3. Limpar estado interno
        """
        raise NotImplementedError

    @abstractmethod
    def rollback(self) -> None:
        """Descarta eventos enfileirados."""
        raise NotImplementedError

    def publish_event(self, event: DomainEvent) -> None:
        """
        Enfileira evento para publicação após commit.

        Args:
            event: Evento de domínio
        """
        self._events.append(event)

    def collect_events(self) -> List[DomainEvent]:
        """Retorna cópia dos eventos pendentes."""
        return list(self._events)

    def clear_events(self) -> None:
        self._events.clear()


class EventPublisher(ABC):
    """
    Interface para publicação de eventos.

    Example:
        class CeleryEventPublisher(EventPublisher):
            def publish(self, event):
                dispatch_domain_event.delay(event.event_type, event.to_dict())
    """

    @abstractmethod
    def publish(self, event: DomainEvent) -> None:
        raise NotImplementedError

    @abstractmethod
    def publish_batch(self, events: List[DomainEvent]) -> None:
        raise NotImplementedError


class EventStore(ABC):
    """
    Interface para persistência de eventos (trilha de auditoria).
    """

    @abstractmethod
    def append(self, event: DomainEvent, sequence: int = 0) -> None:
        """
        Adiciona evento ao store.

        Args:
            event: Evento a ser persistido
            sequence: Posição do evento dentro da operação
        """
        raise NotImplementedError

    @abstractmethod
    def get_events_for_aggregate(self, aggregate_id: str) -> List[Dict[str, Any]]:
        """
        Recupera eventos de um registro, em ordem cronológica.

        Args:
            aggregate_id: ID do registro
        """
        raise NotImplementedError
