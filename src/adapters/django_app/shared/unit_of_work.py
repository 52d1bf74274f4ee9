"""
Unit of Work - Implementação Django.

Os dados de negócio vivem na API remota; o banco local guarda
apenas a trilha de auditoria (domain_events). O UoW:
- Enfileira eventos durante a operação
- No commit, grava os eventos numa transação atômica
- Só então publica os eventos (log, Celery)
- Em exceção, descarta os eventos sem gravar nem publicar
"""

from typing import Dict, List, Optional
import logging

from django.db import transaction

from src.core.shared.interfaces import EventPublisher, EventStore, UnitOfWork
from src.core.shared.events import DomainEvent

logger = logging.getLogger(__name__)


class DjangoUnitOfWork(UnitOfWork):
    """
    Implementação Django do Unit of Work.

    Example:
        with DjangoUnitOfWork(event_publisher, event_store) as uow:
            repo.add(chamado)
            uow.publish_event(ChamadoCriadoEvent(...))
        # eventos gravados e publicados

    Example com rollback:
        with DjangoUnitOfWork() as uow:
            uow.publish_event(evento)
            raise ValidationError("...")
        # nada gravado, nada publicado
    """

    def __init__(
        self,
        event_publisher: Optional[EventPublisher] = None,
        event_store: Optional[EventStore] = None,
    ):
        super().__init__()
        self._event_publisher = event_publisher
        self._event_store = event_store
        self._committed = False
        self._rolled_back = False

    def _begin_transaction(self) -> None:
        self._committed = False
        self._rolled_back = False
        self.clear_events()

    def commit(self) -> None:
        """
        Raises:
            Exception: Se a gravação dos eventos falhar (após rollback)
        """
        if self._committed or self._rolled_back:
            logger.warning("Unit of Work já finalizado")
            return

        eventos = self.collect_events()

        try:
            if self._event_store and eventos:
                with transaction.atomic():
                    self._persist_events(eventos)
        except Exception as e:
            logger.error(f"Falha ao gravar eventos: {e}")
            self.rollback()
            raise

        self._committed = True
        self.clear_events()
        self._publish_events(eventos)

    def rollback(self) -> None:
        if self._committed or self._rolled_back:
            return
        descartados = len(self._events)
        self._rolled_back = True
        self.clear_events()
        if descartados:
            logger.debug(f"Rollback: {descartados} evento(s) descartado(s)")

    def _persist_events(self, eventos: List[DomainEvent]) -> None:
        sequencias: Dict[str, int] = {}
        for event in eventos:
            sequencias[event.aggregate_id] = sequencias.get(event.aggregate_id, 0) + 1
            self._event_store.append(event=event, sequence=sequencias[event.aggregate_id])

    def _publish_events(self, eventos: List[DomainEvent]) -> None:
        """
        Publica após a gravação. Falha de publicação não desfaz a
        operação: o evento já está no Event Store.
        """
        for event in eventos:
            logger.info(
                f"Publicando evento: {event.event_type} "
                f"para {event.aggregate_type} {event.aggregate_id}"
            )
            if self._event_publisher:
                try:
                    self._event_publisher.publish(event)
                except Exception as e:
                    logger.error(f"Falha ao publicar evento {event.event_type}: {e}")

    @property
    def is_committed(self) -> bool:
        return self._committed

    @property
    def is_rolled_back(self) -> bool:
        return self._rolled_back


class InMemoryUnitOfWork(UnitOfWork):
    """
    Unit of Work em memória para testes.

    Example:
        uow = InMemoryUnitOfWork()
        with uow:
            uow.publish_event(event)

        assert uow.committed
        assert len(uow.published_events) == 1
    """

    def __init__(self):
        super().__init__()
        self._committed = False
        self._rolled_back = False
        self._published_events: List[DomainEvent] = []

    def _begin_transaction(self) -> None:
        pass

    def commit(self) -> None:
        self._committed = True
        self._published_events.extend(self._events)
        self.clear_events()

    def rollback(self) -> None:
        self._rolled_back = True
        self.clear_events()

    @property
    def committed(self) -> bool:
        return self._committed

    @property
    def rolled_back(self) -> bool:
        return self._rolled_back

    @property
    def published_events(self) -> List[DomainEvent]:
        return self._published_events

    def reset(self) -> None:
        """Reset para próximo teste."""
        self._committed = False
        self._rolled_back = False
        self._published_events.clear()
        self.clear_events()
