"""
Core Domain Layer - O Hexágono.

Lógica do painel administrativo sem dependências de framework:
- Nenhum import de Django ou httpx
- Testável com repositórios em memória
- A API remota é acessada apenas via Ports
"""
