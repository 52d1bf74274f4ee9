"""
Event Handlers - Processadores de Eventos de Domínio.

Executados pelo worker Celery quando EVENT_PUBLISHER_MODE=celery:
- dispatch_domain_event: roteia cada evento
- registrar_auditoria: linha de auditoria estruturada
- limpar_cache_recurso: invalida o cache de consultas de um recurso
  (cobre workers/processos que não compartilham o cache local)
- cleanup_old_events: limpeza periódica do Event Store (beat)
"""

import logging
from datetime import timedelta
from typing import Any, Dict, List, Optional

from celery import shared_task
from django.conf import settings
from django.utils import timezone

logger = logging.getLogger(__name__)

# tipo do agregado -> recursos cujo cache fica desatualizado
RECURSOS_POR_AGREGADO: Dict[str, List[str]] = {
    'Chamado': ['assistances'],
    'Usuario': ['users'],
    'Produto': ['products'],
    'Contato': ['contacts'],
    'Servico': ['services'],
    'Video': ['videos'],
    'Arquivo': ['products', 'videos'],
}


# =============================================================================
# Event Dispatcher (Router)
# =============================================================================

@shared_task(bind=True, max_retries=5, default_retry_delay=30)
def dispatch_domain_event(self, event_type: str, event_data: Dict[str, Any]) -> None:
    """
    Ponto de entrada de todos os eventos publicados via Celery.

    Args:
        event_type: Tipo do evento (ex: 'ChamadoCriadoEvent')
        event_data: Evento serializado (DomainEvent.to_dict)
    """
    logger.info(f"[DISPATCHER] {event_type} | {event_data.get('aggregate_id')}")

    registrar_auditoria.delay(event_type, event_data)

    if event_type in ('AdminAutenticadoEvent', 'SessaoEncerradaEvent'):
        return

    for recurso in RECURSOS_POR_AGREGADO.get(event_data.get('aggregate_type'), []):
        limpar_cache_recurso.delay(recurso)


@shared_task(bind=True, ignore_result=True)
def registrar_auditoria(self, event_type: str, event_data: Dict[str, Any]) -> None:
    dados = event_data.get('data', {})
    logger.info(
        f"[AUDITORIA] {event_type} | "
        f"{event_data.get('aggregate_type')}={event_data.get('aggregate_id')} | "
        f"por={dados.get('executado_por_id') or event_data.get('aggregate_id')}"
    )


@shared_task(
    bind=True,
    max_retries=3,
    default_retry_delay=10,
    autoretry_for=(ConnectionError,),
    ignore_result=True,
)
def limpar_cache_recurso(self, recurso: str) -> None:
    """
    Args:
        recurso: Caminho do recurso na API (ex: 'products')
    """
    from src.adapters.django_app.shared.cache import CacheConsultas

    CacheConsultas().invalidar(recurso)
    logger.info(f"[CACHE] Recurso {recurso} invalidado")


# =============================================================================
# Scheduled Tasks (Beat)
# =============================================================================

@shared_task(bind=True)
def cleanup_old_events(self, days: Optional[int] = None) -> int:
    """
    Remove eventos antigos do Event Store.

    Args:
        days: Dias de retenção (padrão: AUDITORIA_RETENCAO_DIAS)

    Returns:
        Número de eventos removidos
    """
    if days is None:
        days = getattr(settings, 'AUDITORIA_RETENCAO_DIAS', 90)

    logger.info(f"[SCHEDULED] Limpando eventos com mais de {days} dias...")

    from src.adapters.django_app.painel.models import DomainEventModel

    cutoff_date = timezone.now() - timedelta(days=days)
    deleted, _ = DomainEventModel.objects.filter(occurred_at__lt=cutoff_date).delete()

    logger.info(f"[SCHEDULED] {deleted} eventos removidos")
    return deleted
