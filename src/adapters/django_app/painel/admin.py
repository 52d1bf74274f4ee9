"""
Django Admin para a trilha de auditoria.

Somente leitura: eventos são gravados pelo Unit of Work.
"""

from django.contrib import admin
from django.utils.html import format_html, format_html_join

from .models import DomainEventModel


@admin.register(DomainEventModel)
class DomainEventAdmin(admin.ModelAdmin):
    """Admin para eventos de domínio."""

    list_display = [
        'event_id_curto',
        'event_type',
        'aggregate_type',
        'aggregate_id_curto',
        'occurred_at',
        'user_id',
    ]

    list_filter = [
        'event_type',
        'aggregate_type',
        'occurred_at',
    ]

    search_fields = [
        'event_id',
        'aggregate_id',
        'event_type',
        'user_id',
    ]

    readonly_fields = [
        'event_id',
        'event_type',
        'aggregate_type',
        'aggregate_id',
        'dados_formatados',
        'version',
        'sequence',
        'occurred_at',
        'recorded_at',
        'user_id',
    ]

    exclude = ['event_data']
    date_hierarchy = 'occurred_at'

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def event_id_curto(self, obj):
        return obj.event_id[:8] + '...'
    event_id_curto.short_description = 'Event ID'

    def aggregate_id_curto(self, obj):
        return obj.aggregate_id[:8] + '...'
    aggregate_id_curto.short_description = 'Registro'

    def dados_formatados(self, obj):
        itens = format_html_join(
            '', '<li><strong>{}</strong>: {}</li>', (obj.event_data or {}).items()
        )
        return format_html('<ul>{}</ul>', itens)
    dados_formatados.short_description = 'Dados'
