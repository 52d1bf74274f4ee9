"""
Sessão do painel guardada na sessão Django.

A sessão da API (tokens + usuário) é serializada com Sessao.to_dict
sob uma única chave; o backend de sessão do Django (banco ou cache)
cuida da persistência e do cookie.
"""

import logging
from typing import Optional

from src.core.autenticacao.entities import Sessao

logger = logging.getLogger(__name__)

CHAVE_SESSAO = "painel_sessao"


class DjangoSessaoStore:
    """
    SessaoStore sobre `request.session`.

    Args:
        session: SessionBase da requisição
    """

    def __init__(self, session):
        self._session = session

    def obter(self) -> Optional[Sessao]:
        data = self._session.get(CHAVE_SESSAO)
        if not data:
            return None
        try:
            return Sessao.from_dict(data)
        except (KeyError, TypeError, ValueError) as e:
            logger.warning(f"Sessão armazenada inválida, descartando: {e}")
            self.limpar()
            return None

    def salvar(self, sessao: Sessao) -> None:
        self._session[CHAVE_SESSAO] = sessao.to_dict()

    def limpar(self) -> None:
        self._session.pop(CHAVE_SESSAO, None)
