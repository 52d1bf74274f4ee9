"""
URL patterns do Painel.

- GET/POST /login/
- POST /logout/
- GET / - Dashboard
- GET /dashboard/grafico/ - Gráfico mensal (JSON)
"""

from django.urls import path

from . import views

app_name = 'painel'

urlpatterns = [
    path('login/', views.LoginView.as_view(), name='login'),
    path('logout/', views.LogoutView.as_view(), name='logout'),
    path('', views.DashboardView.as_view(), name='dashboard'),
    path('dashboard/grafico/', views.GraficoMensalJsonView.as_view(), name='grafico_mensal'),
]
