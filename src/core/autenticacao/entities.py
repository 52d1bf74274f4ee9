"""
Entidades do Domínio de Autenticação.

A autenticação é delegada à API remota: o painel apenas guarda a
sessão devolvida por /sessions (tokens e usuário) e a renova via
/refresh-token quando o token de acesso expira.
"""

from dataclasses import dataclass, replace
from datetime import datetime, timedelta
from typing import Any, Dict, Optional

PAPEL_ADMIN = "ADMIN"


def calcular_expiracao(segundos: float, agora: Optional[datetime] = None) -> datetime:
    """Momento de expiração a partir da validade em segundos."""
    return (agora or datetime.now()) + timedelta(seconds=segundos)


@dataclass(frozen=True)
class UsuarioSessao:
    """Usuário autenticado, como devolvido pela API."""

    id: str
    nome: str
    email: str
    papel: str
    avatar_url: Optional[str] = None

    @property
    def eh_admin(self) -> bool:
        return self.papel == PAPEL_ADMIN


@dataclass(frozen=True)
class Sessao:
    """
    Sessão autenticada na API.

    Attributes:
        usuario: Usuário autenticado
        token: Token de acesso (Bearer)
        refresh_token: Token para renovação
        expira_em: Expiração do token de acesso
    """

    usuario: UsuarioSessao
    token: str
    refresh_token: Optional[str] = None
    expira_em: Optional[datetime] = None

    def esta_expirada(self, agora: Optional[datetime] = None) -> bool:
        """Sessões sem expiração informada nunca expiram localmente."""
        if self.expira_em is None:
            return False
        return (agora or datetime.now()) >= self.expira_em

    def renovada(
        self,
        token: str,
        expira_em_segundos: float,
        refresh_token: Optional[str] = None,
        agora: Optional[datetime] = None,
    ) -> "Sessao":
        """
        Nova sessão com token renovado.

        Sem novo refresh_token, o anterior é mantido.
        """
        return replace(
            self,
            token=token,
            refresh_token=refresh_token or self.refresh_token,
            expira_em=calcular_expiracao(expira_em_segundos, agora),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "usuario": {
                "id": self.usuario.id,
                "nome": self.usuario.nome,
                "email": self.usuario.email,
                "papel": self.usuario.papel,
                "avatar_url": self.usuario.avatar_url,
            },
            "token": self.token,
            "refresh_token": self.refresh_token,
            "expira_em": self.expira_em.isoformat() if self.expira_em else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Sessao":
        expira_em = data.get("expira_em")
        return cls(
            usuario=UsuarioSessao(**data["usuario"]),
            token=data["token"],
            refresh_token=data.get("refresh_token"),
            expira_em=datetime.fromisoformat(expira_em) if expira_em else None,
        )
