"""
Configuração do Django App de Chamados (assistências).
"""

from django.apps import AppConfig


class ChamadosConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'src.adapters.django_app.chamados'
    label = 'chamados'
    verbose_name = 'Assistências'
