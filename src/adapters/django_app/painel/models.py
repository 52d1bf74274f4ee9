"""
Models Django do Painel.

Os dados de negócio pertencem à API remota; o único model local
é o Event Store, usado como trilha de auditoria das operações
feitas pelos administradores.
"""

from django.db import models


class DomainEventModel(models.Model):
    """
    Event Store genérico para Domain Events.

    Cada linha é uma operação concluída (criação, edição, exclusão,
    upload, login, logout) com o administrador que a executou.
    """

    event_id = models.CharField(
        max_length=36,
        primary_key=True,
        help_text="UUID único do evento"
    )

    event_type = models.CharField(
        max_length=100,
        db_index=True,
        help_text="Tipo do evento (ex: ChamadoCriadoEvent)"
    )

    aggregate_type = models.CharField(
        max_length=100,
        db_index=True,
        help_text="Tipo do registro (ex: Chamado, Produto)"
    )

    aggregate_id = models.CharField(
        max_length=255,
        db_index=True,
        help_text="ID do registro na API"
    )

    event_data = models.JSONField(
        default=dict,
        help_text="Dados serializados do evento"
    )

    version = models.IntegerField(
        default=1,
        help_text="Versão do schema do evento"
    )

    sequence = models.BigIntegerField(
        default=0,
        help_text="Posição do evento dentro da operação"
    )

    occurred_at = models.DateTimeField(
        help_text="Quando o evento ocorreu"
    )

    recorded_at = models.DateTimeField(
        auto_now_add=True,
        help_text="Quando o evento foi persistido"
    )

    user_id = models.CharField(
        max_length=100,
        null=True,
        blank=True,
        db_index=True,
        help_text="Administrador que executou a ação"
    )

    class Meta:
        db_table = 'domain_events'
        verbose_name = 'Evento de Domínio'
        verbose_name_plural = 'Eventos de Domínio'
        ordering = ['-recorded_at']
        indexes = [
            models.Index(fields=['aggregate_id', 'sequence'], name='idx_event_aggregate_seq'),
            models.Index(fields=['aggregate_type', 'recorded_at'], name='idx_event_type_recorded'),
            models.Index(fields=['event_type', 'recorded_at'], name='idx_event_etype_recorded'),
        ]

    def __str__(self):
        return f"{self.event_type} - {self.aggregate_id[:8]} @ {self.occurred_at}"
