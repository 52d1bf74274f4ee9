"""
Configuração do Django App do Painel.

Concentra login/logout, o dashboard e a trilha de auditoria
(domain_events) consultada pelo Django admin.
"""

from django.apps import AppConfig


class PainelConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'src.adapters.django_app.painel'
    label = 'painel'
    verbose_name = 'Painel Administrativo'
