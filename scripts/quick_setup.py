#!/usr/bin/env python
"""
Setup rápido para desenvolvimento local.

Este script:
1. Configura Django settings
2. Verifica o banco local (sessões e auditoria)
3. Executa migrations
4. Verifica se a API do painel e o IBGE respondem (opcional)

Uso:
    python scripts/quick_setup.py
    python scripts/quick_setup.py --check-api
"""

import os
import sys
import argparse

import httpx

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


def setup_django():
    """Configura Django para uso standalone."""
    os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'src.config.settings')

    import django
    django.setup()


def run_migrations():
    from django.core.management import call_command

    print("📦 Executando migrations...")
    call_command('migrate', verbosity=1)
    print("✅ Migrations concluídas!")


def check_connection():
    """Verifica conexão com o banco."""
    from django.db import DatabaseError, connection

    print("🔍 Verificando conexão com o banco...")

    try:
        with connection.cursor() as cursor:
            cursor.execute("SELECT 1")
        print("✅ Conexão OK!")
        return True
    except DatabaseError as e:
        print(f"❌ Erro de conexão: {e}")
        return False


def check_servico(nome, url):
    """Qualquer resposta HTTP conta como serviço no ar (a API exige token)."""
    try:
        resposta = httpx.get(url, timeout=5.0)
    except httpx.HTTPError as e:
        print(f"❌ {nome} inacessível em {url}: {e}")
        return False
    print(f"✅ {nome} respondeu {resposta.status_code} em {url}")
    return True


def check_apis():
    from django.conf import settings

    print("🌐 Verificando serviços externos...")
    api_ok = check_servico("API do painel", settings.PAINEL_API_URL)
    ibge_ok = check_servico("IBGE", f"{settings.IBGE_API_URL.rstrip('/')}/estados")
    return api_ok and ibge_ok


def show_info():
    from django.conf import settings

    print("\n" + "=" * 60)
    print("📊 Informações do Setup")
    print("=" * 60)
    print(f"  Database Engine: {settings.DATABASES['default']['ENGINE']}")
    print(f"  Cache: {settings.CACHES['default']['BACKEND']}")
    print(f"  API do painel: {settings.PAINEL_API_URL}")
    print(f"  Eventos: {settings.EVENT_PUBLISHER_MODE}")
    print(f"  Debug Mode: {settings.DEBUG}")
    print("=" * 60)
    print("\n🚀 Próximos passos:")
    print("   1. python manage.py runserver")
    print("   2. Acesse: http://localhost:8000/login/")
    print("   3. Entre com um usuário ADMIN da API")
    print("\n")


def main():
    parser = argparse.ArgumentParser(description='Setup rápido para desenvolvimento')
    parser.add_argument(
        '--check-api',
        action='store_true',
        help='Verificar também a API do painel e o IBGE'
    )
    parser.add_argument(
        '--check-only',
        action='store_true',
        help='Apenas verificar conexões'
    )

    args = parser.parse_args()

    print("\n" + "=" * 60)
    print("🔧 Painel de Assistências - Quick Setup")
    print("=" * 60 + "\n")

    setup_django()

    banco_ok = check_connection()
    if args.check_api or args.check_only:
        check_apis()

    if args.check_only:
        return

    if not banco_ok:
        print("\n⚠️  Certifique-se de que o banco de dados está rodando.")
        print("   Sem DATABASE_URL o painel usa SQLite (db.sqlite3).")
        return

    run_migrations()
    show_info()


if __name__ == '__main__':
    main()
