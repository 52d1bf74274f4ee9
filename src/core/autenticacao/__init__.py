"""
Domínio de Autenticação - Sessão do administrador na API remota.
"""

from .entities import PAPEL_ADMIN, Sessao, UsuarioSessao, calcular_expiracao
from .ports import AutenticacaoGateway, SessaoStore, TokenRenovado

__all__ = [
    "PAPEL_ADMIN",
    "Sessao",
    "UsuarioSessao",
    "calcular_expiracao",
    "AutenticacaoGateway",
    "SessaoStore",
    "TokenRenovado",
]
