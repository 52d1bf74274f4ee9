"""
URL patterns para o domínio de Usuários.

- GET /usuarios/ - Listar (filtro por nome, e-mail e perfil)
- GET/POST /usuarios/criar/ - Cadastrar
- GET /usuarios/municipios/?uf=SC - Municípios (JSON)
- GET/POST /usuarios/<id>/ - Detalhes / atualizar
- POST /usuarios/<id>/excluir/ - Excluir
"""

from django.urls import path

from . import views

app_name = 'usuarios'

urlpatterns = [
    path('', views.UsuarioListView.as_view(), name='list'),
    path('criar/', views.UsuarioCreateView.as_view(), name='create'),
    path('municipios/', views.MunicipiosJsonView.as_view(), name='municipios'),
    path('<str:pk>/', views.UsuarioDetailView.as_view(), name='detail'),
    path('<str:pk>/excluir/', views.UsuarioDeleteView.as_view(), name='delete'),
]
