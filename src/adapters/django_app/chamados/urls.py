"""
URL patterns para o domínio de Chamados.

- GET /chamados/ - Listar
- GET/POST /chamados/criar/ - Abrir chamado
- GET/POST /chamados/<id>/ - Detalhes / atualizar
- POST /chamados/<id>/excluir/ - Excluir
"""

from django.urls import path

from . import views

app_name = 'chamados'

urlpatterns = [
    path('', views.ChamadoListView.as_view(), name='list'),
    path('criar/', views.ChamadoCreateView.as_view(), name='create'),
    path('<str:pk>/', views.ChamadoDetailView.as_view(), name='detail'),
    path('<str:pk>/excluir/', views.ChamadoDeleteView.as_view(), name='delete'),
]
