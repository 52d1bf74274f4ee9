"""
Configuração do Celery para processamento assíncrono.

O Celery é usado para:
- Processar Domain Events fora do request/response
  (auditoria e invalidação do cache de consultas)
- Limpeza periódica da trilha de auditoria

Uso:
    # Iniciar worker
    celery -A src.config.celery worker -l INFO -Q default,events

    # Iniciar beat (tarefas agendadas)
    celery -A src.config.celery beat -l INFO
"""

import os

from celery import Celery
from celery.schedules import crontab
from kombu import Exchange, Queue

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'src.config.settings')

app = Celery('painel')

# Broker, backend, serialização e retry vêm de CELERY_* no settings
app.config_from_object('django.conf:settings', namespace='CELERY')

app.conf.update(
    worker_send_task_events=True,
    task_send_sent_event=True,
    task_default_queue='default',
)

app.conf.task_queues = (
    Queue('default', Exchange('default'), routing_key='default'),
    Queue('events', Exchange('events'), routing_key='events.#'),
)

app.conf.task_routes = {
    'src.adapters.django_app.events.handlers.*': {'queue': 'events'},
}

app.autodiscover_tasks(['src.adapters.django_app.events'], related_name='handlers')

app.conf.beat_schedule = {
    # Domingo às 3h
    'cleanup-old-events': {
        'task': 'src.adapters.django_app.events.handlers.cleanup_old_events',
        'schedule': crontab(hour=3, minute=0, day_of_week=0),
    },
}
