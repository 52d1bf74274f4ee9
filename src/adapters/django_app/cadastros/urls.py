"""
URL patterns dos cadastros. <recurso> é o caminho na API:
products, contacts, services ou videos.

- GET /cadastros/<recurso>/ - Listar
- GET/POST /cadastros/<recurso>/criar/ - Cadastrar
- GET/POST /cadastros/<recurso>/<id>/ - Detalhes / atualizar
- POST /cadastros/<recurso>/<id>/excluir/ - Excluir
- POST /cadastros/<recurso>/<id>/arquivos/ - Enviar arquivos
- POST /cadastros/<recurso>/<id>/arquivos/<arquivo_id>/remover/
- POST /cadastros/services/<id>/opcoes/<opcao_id>/remover/
"""

from django.urls import path

from . import views

app_name = 'cadastros'

urlpatterns = [
    path('<str:recurso>/', views.CadastroListView.as_view(), name='list'),
    path('<str:recurso>/criar/', views.CadastroCreateView.as_view(), name='create'),
    path('<str:recurso>/<str:pk>/', views.CadastroDetailView.as_view(), name='detail'),
    path('<str:recurso>/<str:pk>/excluir/', views.CadastroDeleteView.as_view(), name='delete'),
    path('<str:recurso>/<str:pk>/arquivos/', views.EnviarArquivosView.as_view(), name='enviar_arquivos'),
    path(
        '<str:recurso>/<str:pk>/arquivos/<str:arquivo_id>/remover/',
        views.RemoverArquivoView.as_view(),
        name='remover_arquivo',
    ),
    path(
        '<str:recurso>/<str:pk>/opcoes/<str:opcao_id>/remover/',
        views.RemoverOpcaoView.as_view(),
        name='remover_opcao',
    ),
]
