"""
Configuração do Django App de Cadastros.

Produtos, contatos, serviços e vídeos compartilham as mesmas
views genéricas, parametrizadas pelo recurso da URL.
"""

from django.apps import AppConfig


class CadastrosConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'src.adapters.django_app.cadastros'
    label = 'cadastros'
    verbose_name = 'Cadastros'
