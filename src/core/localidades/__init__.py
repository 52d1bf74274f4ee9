"""
Domínio de Localidades - Estados e municípios (IBGE) para os
formulários de usuário.
"""

from .entities import UF_PADRAO, Opcao
from .ports import LocalidadesGateway

__all__ = ["UF_PADRAO", "Opcao", "LocalidadesGateway"]
