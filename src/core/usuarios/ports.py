"""
Ports (Interfaces) do Domínio de Usuários.
"""

from typing import List, Optional, Protocol, runtime_checkable

from .entities import UsuarioEntity
from .dtos import FiltroUsuariosDTO


@runtime_checkable
class UsuarioRepository(Protocol):
    """
    Interface para acesso aos usuários.

    Implementações:
    - HttpUsuarioRepository (API remota)
    - InMemoryUsuarioRepository (testes)
    """

    def list_all(self, filtro: Optional[FiltroUsuariosDTO] = None) -> List[UsuarioEntity]:
        """
        Lista usuários, opcionalmente filtrados por nome, e-mail e papel.
        """
        ...

    def get_by_id(self, usuario_id: str) -> Optional[UsuarioEntity]:
        ...

    def add(self, usuario: UsuarioEntity) -> UsuarioEntity:
        ...

    def update(self, usuario: UsuarioEntity) -> UsuarioEntity:
        ...

    def delete(self, usuario_id: str) -> None:
        ...


class InMemoryUsuarioRepository:
    """
    Implementação em memória do UsuarioRepository.

    Filtro: nome e e-mail por trecho (sem diferenciar maiúsculas),
    papel por chave exata.
    """

    def __init__(self):
        self._usuarios: dict[str, UsuarioEntity] = {}

    def list_all(self, filtro: Optional[FiltroUsuariosDTO] = None) -> List[UsuarioEntity]:
        usuarios = list(self._usuarios.values())
        if not filtro or filtro.vazio:
            return usuarios

        if filtro.nome:
            usuarios = [u for u in usuarios if filtro.nome.lower() in u.nome.lower()]
        if filtro.email:
            usuarios = [u for u in usuarios if filtro.email.lower() in u.email.lower()]
        if filtro.papel:
            usuarios = [u for u in usuarios if u.papel.name == filtro.papel.upper()]
        return usuarios

    def get_by_id(self, usuario_id: str) -> Optional[UsuarioEntity]:
        return self._usuarios.get(usuario_id)

    def add(self, usuario: UsuarioEntity) -> UsuarioEntity:
        self._usuarios[usuario.id] = usuario
        return usuario

    def update(self, usuario: UsuarioEntity) -> UsuarioEntity:
        self._usuarios[usuario.id] = usuario
        return usuario

    def delete(self, usuario_id: str) -> None:
        self._usuarios.pop(usuario_id, None)

    def clear(self) -> None:
        self._usuarios.clear()
