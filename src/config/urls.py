"""
URL Configuration do Painel Administrativo.

Estrutura:
- /admin/ - Django Admin (trilha de auditoria)
- / - Login, logout e dashboard
- /chamados/ - Assistências
- /usuarios/ - Usuários
- /cadastros/<recurso>/ - Produtos, contatos, serviços e vídeos
- /health/ - Health check
"""

from django.contrib import admin
from django.http import JsonResponse
from django.urls import include, path


def health(request):
    return JsonResponse({'status': 'ok'})


urlpatterns = [
    path('admin/', admin.site.urls),
    path('', include('src.adapters.django_app.painel.urls')),
    path('chamados/', include('src.adapters.django_app.chamados.urls')),
    path('usuarios/', include('src.adapters.django_app.usuarios.urls')),
    path('cadastros/', include('src.adapters.django_app.cadastros.urls')),
    path('health/', health, name='health'),
]
