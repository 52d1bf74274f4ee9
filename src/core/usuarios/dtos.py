"""
Data Transfer Objects (DTOs) do Domínio de Usuários.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from src.core.shared.datas import formatar_data

from .entities import UsuarioEntity


# =============================================================================
# INPUT DTOs (Entrada)
# =============================================================================

@dataclass(frozen=True)
class CriarUsuarioInputDTO:
    """
    DTO de entrada para cadastrar usuário.

    Attributes:
        papel: Chave do papel (ex: "CLIENT")
    """

    nome: str
    email: str
    senha: str
    papel: str = "USER"
    cpf: Optional[str] = None
    estado: Optional[str] = None
    cidade: Optional[str] = None
    telefone: Optional[str] = None
    executado_por_id: Optional[str] = None

    def to_dict(self) -> dict:
        # senha nunca é serializada
        return {
            "nome": self.nome,
            "email": self.email,
            "papel": self.papel,
            "cpf": self.cpf,
            "estado": self.estado,
            "cidade": self.cidade,
            "telefone": self.telefone,
            "executado_por_id": self.executado_por_id,
        }


@dataclass(frozen=True)
class AtualizarUsuarioInputDTO:
    """
    DTO de entrada para editar usuário.

    Campos None não são alterados; senha vazia mantém a atual.
    """

    usuario_id: str
    nome: Optional[str] = None
    email: Optional[str] = None
    papel: Optional[str] = None
    cpf: Optional[str] = None
    estado: Optional[str] = None
    cidade: Optional[str] = None
    telefone: Optional[str] = None
    senha: Optional[str] = None
    executado_por_id: Optional[str] = None


@dataclass(frozen=True)
class FiltroUsuariosDTO:
    """
    Filtro enviado à API na listagem.

    Attributes:
        nome: Parte do nome
        email: Parte do e-mail
        papel: Chave do papel
    """

    nome: Optional[str] = None
    email: Optional[str] = None
    papel: Optional[str] = None

    @property
    def vazio(self) -> bool:
        return not (self.nome or self.email or self.papel)

    def to_dict(self) -> dict:
        return {"name": self.nome, "email": self.email, "role": self.papel}


# =============================================================================
# OUTPUT DTOs (Saída)
# =============================================================================

@dataclass
class ProdutoDoClienteDTO:
    nome_produto: str
    numero_pedido: Optional[str]
    garantia_ate: Optional[str]
    em_garantia: bool


@dataclass
class UsuarioOutputDTO:
    """
    DTO de saída de usuário (sem senha).

    Attributes:
        papel: Chave do papel
        papel_rotulo: Rótulo em português
    """

    id: str
    nome: str
    email: str
    papel: str
    papel_rotulo: str
    cpf: Optional[str]
    estado: Optional[str]
    cidade: Optional[str]
    telefone: Optional[str]
    avatar_url: Optional[str] = None
    clientes: List[str] = field(default_factory=list)
    produtos: List[ProdutoDoClienteDTO] = field(default_factory=list)

    @classmethod
    def from_entity(cls, entity: UsuarioEntity) -> "UsuarioOutputDTO":
        return cls(
            id=entity.id,
            nome=entity.nome,
            email=entity.email,
            papel=entity.papel.name,
            papel_rotulo=entity.papel_rotulo,
            cpf=entity.cpf,
            estado=entity.estado,
            cidade=entity.cidade,
            telefone=entity.telefone,
            avatar_url=entity.avatar_url,
            clientes=list(entity.clientes),
            produtos=[
                ProdutoDoClienteDTO(
                    nome_produto=p.nome_produto,
                    numero_pedido=p.numero_pedido,
                    garantia_ate=formatar_data(p.garantia_ate) if p.garantia_ate else None,
                    em_garantia=p.em_garantia(),
                )
                for p in entity.produtos
            ],
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "nome": self.nome,
            "email": self.email,
            "papel": self.papel,
            "papel_rotulo": self.papel_rotulo,
            "cpf": self.cpf,
            "estado": self.estado,
            "cidade": self.cidade,
            "telefone": self.telefone,
            "avatar_url": self.avatar_url,
            "clientes": self.clientes,
        }
