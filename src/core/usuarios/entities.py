"""
Entidades do Domínio de Usuários.

Entidades:
- PapelUsuario: Papéis (admin, padrão, cliente, assistente, técnico)
- ProdutoDoCliente: Produto adquirido por um cliente, com garantia
- UsuarioEntity: Usuário gerenciado pelo painel

Regras de Negócio Encapsuladas:
- Nome e e-mail obrigatórios, e-mail em formato válido
- CPF, quando informado, deve estar completo e ser válido
- Senha obrigatória apenas na criação
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional
import re
import uuid

from src.core.shared.exceptions import ValidationError
from src.core.shared.validadores import cpf_eh_valido, cpf_esta_completo, limpar_cpf

PAPEL_NAO_ENCONTRADO = "Não encontrado"

_RE_EMAIL = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class PapelUsuario(Enum):
    """Papéis de usuário. O valor é o rótulo exibido no painel."""

    ADMIN = "Admin"
    USER = "Padrão"
    CLIENT = "Cliente"
    ASSISTENT = "Assistente"
    TECHNICIAN = "Técnico"

    @property
    def rotulo(self) -> str:
        return self.value

    @classmethod
    def from_string(cls, value: str) -> "PapelUsuario":
        """
        Converte chave ("CLIENT") ou rótulo ("Cliente") para enum.

        Raises:
            ValueError: Se valor inválido
        """
        try:
            return cls[value.strip().upper()]
        except (KeyError, AttributeError):
            pass

        for papel in cls:
            if papel.value.lower() == str(value).strip().lower():
                return papel

        raise ValueError(f"Papel inválido: {value}")


def converter_papel_para_portugues(chave: str) -> str:
    """
    Rótulo em português do papel.

    Example:
        >>> converter_papel_para_portugues("CLIENT")
        'Cliente'
        >>> converter_papel_para_portugues("GUEST")
        'Não encontrado'
    """
    try:
        return PapelUsuario[chave].rotulo
    except (KeyError, TypeError):
        return PAPEL_NAO_ENCONTRADO


@dataclass(frozen=True)
class ProdutoDoCliente:
    """
    Produto vinculado a um cliente.

    Attributes:
        nome_produto: Nome do produto
        numero_pedido: Número do pedido de compra
        garantia_ate: Fim da garantia
    """

    nome_produto: str
    numero_pedido: Optional[str] = None
    garantia_ate: Optional[datetime] = None

    def em_garantia(self, referencia: Optional[datetime] = None) -> bool:
        if not self.garantia_ate:
            return False
        referencia = referencia or datetime.now(self.garantia_ate.tzinfo)
        return referencia <= self.garantia_ate


@dataclass
class UsuarioEntity:
    """
    Entidade de Domínio: Usuário.

    Attributes:
        id: Identificador (atribuído pela API ao criar)
        nome: Nome completo
        email: E-mail de acesso
        papel: Papel do usuário
        cpf: CPF somente com dígitos
        estado: UF
        cidade: Município
        telefone: Telefone de contato
        avatar_url: URL da foto
        clientes: IDs de clientes vinculados
        produtos: Produtos do cliente
        senha: Apenas para envio à API; nunca retornada
    """

    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    nome: str = ""
    email: str = ""
    papel: PapelUsuario = PapelUsuario.USER
    cpf: Optional[str] = None
    estado: Optional[str] = None
    cidade: Optional[str] = None
    telefone: Optional[str] = None
    avatar_url: Optional[str] = None
    clientes: List[str] = field(default_factory=list)
    produtos: List[ProdutoDoCliente] = field(default_factory=list)
    senha: Optional[str] = field(default=None, repr=False)

    SENHA_MIN_LENGTH: int = 6

    @classmethod
    def criar(
        cls,
        nome: str,
        email: str,
        senha: str,
        papel: PapelUsuario = PapelUsuario.USER,
        cpf: Optional[str] = None,
        estado: Optional[str] = None,
        cidade: Optional[str] = None,
        telefone: Optional[str] = None,
    ) -> "UsuarioEntity":
        """
        Factory method com validações.

        Raises:
            ValidationError: Se dados inválidos
        """
        cls._validar_nome(nome)
        cls._validar_email(email)
        cls._validar_senha(senha)
        cpf_limpo = cls._validar_cpf(cpf)

        return cls(
            nome=nome.strip(),
            email=email.strip().lower(),
            senha=senha,
            papel=papel,
            cpf=cpf_limpo,
            estado=estado or None,
            cidade=cidade or None,
            telefone=telefone or None,
        )

    @classmethod
    def _validar_nome(cls, nome: str) -> None:
        if not nome or not nome.strip():
            raise ValidationError("Nome é obrigatório", field="nome")

    @classmethod
    def _validar_email(cls, email: str) -> None:
        if not email or not email.strip():
            raise ValidationError("E-mail é obrigatório", field="email")
        if not _RE_EMAIL.match(email.strip()):
            raise ValidationError("E-mail inválido", field="email")

    @classmethod
    def _validar_senha(cls, senha: str) -> None:
        if not senha:
            raise ValidationError("Senha é obrigatória", field="senha")
        if len(senha) < cls.SENHA_MIN_LENGTH:
            raise ValidationError(
                f"Senha deve ter pelo menos {cls.SENHA_MIN_LENGTH} caracteres",
                field="senha"
            )

    @classmethod
    def _validar_cpf(cls, cpf: Optional[str]) -> Optional[str]:
        """Valida CPF opcional e retorna somente os dígitos."""
        if not cpf or not cpf.strip():
            return None
        if not cpf_esta_completo(cpf):
            raise ValidationError("CPF incompleto", field="cpf")
        if not cpf_eh_valido(cpf):
            raise ValidationError("CPF inválido", field="cpf")
        return limpar_cpf(cpf)

    def atualizar(
        self,
        nome: Optional[str] = None,
        email: Optional[str] = None,
        papel: Optional[PapelUsuario] = None,
        cpf: Optional[str] = None,
        estado: Optional[str] = None,
        cidade: Optional[str] = None,
        telefone: Optional[str] = None,
        senha: Optional[str] = None,
    ) -> List[str]:
        """
        Aplica alterações parciais.

        Returns:
            Nomes dos campos alterados (sem valores, pois inclui senha)
        """
        alterados = []

        if nome is not None and nome.strip() != self.nome:
            self._validar_nome(nome)
            self.nome = nome.strip()
            alterados.append("nome")

        if email is not None and email.strip().lower() != self.email:
            self._validar_email(email)
            self.email = email.strip().lower()
            alterados.append("email")

        if papel is not None and papel != self.papel:
            self.papel = papel
            alterados.append("papel")

        if cpf is not None:
            cpf_limpo = self._validar_cpf(cpf)
            if cpf_limpo != self.cpf:
                self.cpf = cpf_limpo
                alterados.append("cpf")

        for campo, valor in (("estado", estado), ("cidade", cidade), ("telefone", telefone)):
            if valor is not None and valor != getattr(self, campo):
                setattr(self, campo, valor)
                alterados.append(campo)

        if senha:
            self._validar_senha(senha)
            self.senha = senha
            alterados.append("senha")

        return alterados

    @property
    def papel_rotulo(self) -> str:
        return self.papel.rotulo

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, UsuarioEntity):
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)
