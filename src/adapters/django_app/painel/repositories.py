"""
Event Store usando Django ORM.
"""

from typing import Any, Dict, List
import logging

from django.utils import timezone

from src.core.shared.events import DomainEvent
from src.core.shared.interfaces import EventStore

logger = logging.getLogger(__name__)


class DomainEventMapper:
    """Conversão entre DomainEvent e DomainEventModel."""

    @staticmethod
    def to_model(event: DomainEvent, sequence: int = 0):
        from .models import DomainEventModel

        occurred_at = event.occurred_at
        if timezone.is_naive(occurred_at):
            occurred_at = timezone.make_aware(occurred_at)

        return DomainEventModel(
            event_id=event.event_id,
            event_type=event.event_type,
            aggregate_type=event.aggregate_type,
            aggregate_id=event.aggregate_id,
            event_data=event._get_event_data(),
            version=event.version,
            sequence=sequence,
            occurred_at=occurred_at,
            user_id=event.user_id,
        )


class DjangoEventStore(EventStore):
    """
    Grava a trilha de auditoria na tabela domain_events.

    Chamado pelo DjangoUnitOfWork dentro de transaction.atomic().
    """

    def append(self, event: DomainEvent, sequence: int = 0) -> None:
        model = DomainEventMapper.to_model(event=event, sequence=sequence)
        model.save()

        logger.debug(f"Event stored: {event.event_type} for {event.aggregate_id}")

    def get_events_for_aggregate(self, aggregate_id: str) -> List[Dict[str, Any]]:
        from .models import DomainEventModel

        events = (
            DomainEventModel.objects
            .filter(aggregate_id=aggregate_id)
            .order_by('occurred_at', 'sequence')
        )

        return [
            {
                'event_id': e.event_id,
                'event_type': e.event_type,
                'aggregate_type': e.aggregate_type,
                'aggregate_id': e.aggregate_id,
                'event_data': e.event_data,
                'sequence': e.sequence,
                'occurred_at': e.occurred_at,
                'user_id': e.user_id,
            }
            for e in events
        ]
