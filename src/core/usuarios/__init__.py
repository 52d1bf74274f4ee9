"""
Domínio de Usuários - Clientes, técnicos, assistentes e administradores.

- Entidades (UsuarioEntity, PapelUsuario, ProdutoDoCliente)
- Use Cases (listar com filtro, obter, criar, atualizar, excluir)
- Domain Events (UsuarioCriado, UsuarioAtualizado, UsuarioExcluido)
"""

from .entities import (
    PapelUsuario,
    ProdutoDoCliente,
    UsuarioEntity,
    converter_papel_para_portugues,
)
from .dtos import (
    AtualizarUsuarioInputDTO,
    CriarUsuarioInputDTO,
    FiltroUsuariosDTO,
    UsuarioOutputDTO,
)
from .ports import UsuarioRepository

__all__ = [
    "PapelUsuario",
    "ProdutoDoCliente",
    "UsuarioEntity",
    "converter_papel_para_portugues",
    "AtualizarUsuarioInputDTO",
    "CriarUsuarioInputDTO",
    "FiltroUsuariosDTO",
    "UsuarioOutputDTO",
    "UsuarioRepository",
]
