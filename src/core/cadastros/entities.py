"""
Entidades do Domínio de Cadastros.

Cadastros auxiliares do painel, todos servidos pelo mesmo CRUD
genérico da API (/{recurso}):
- ProdutoEntity: Produto com manuais (PDF) e imagens
- ContatoEntity: Canal de contato exibido aos clientes
- ServicoEntity: Serviço com opções ordenadas
- VideoEntity: Vídeo explicativo
- Arquivo: Arquivo enviado para a API de arquivos
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional
import uuid

from src.core.shared.exceptions import ValidationError


class Recurso(Enum):
    """Recursos de cadastro. O valor é o caminho na API."""

    PRODUTOS = "products"
    CONTATOS = "contacts"
    SERVICOS = "services"
    VIDEOS = "videos"

    @property
    def entidade(self) -> str:
        return _ENTIDADES[self]

    @classmethod
    def from_string(cls, value: str) -> "Recurso":
        """
        Aceita caminho da API ("products") ou nome ("PRODUTOS").

        Raises:
            ValueError: Se recurso desconhecido
        """
        for recurso in cls:
            if value in (recurso.value, recurso.name, recurso.name.lower()):
                return recurso
        raise ValueError(f"Recurso desconhecido: {value}")


_ENTIDADES = {
    Recurso.PRODUTOS: "Produto",
    Recurso.CONTATOS: "Contato",
    Recurso.SERVICOS: "Servico",
    Recurso.VIDEOS: "Video",
}


class TipoArquivo(Enum):
    IMAGE = "IMAGE"
    PDF = "PDF"
    VIDEO = "VIDEO"
    DOCUMENT = "DOCUMENT"


def _obrigatorio(valor: Optional[str], campo: str, rotulo: str) -> str:
    if not valor or not str(valor).strip():
        raise ValidationError(f"{rotulo} é obrigatório", field=campo)
    return str(valor).strip()


def _aplicar(entidade: Any, alteracoes: Dict[str, Any]) -> List[str]:
    """Atribui valores não-None diferentes dos atuais; retorna os campos alterados."""
    alterados = []
    for campo, valor in alteracoes.items():
        if valor is not None and valor != getattr(entidade, campo):
            setattr(entidade, campo, valor)
            alterados.append(campo)
    return alterados


@dataclass(frozen=True)
class ArquivoUpload:
    """Conteúdo de um arquivo a enviar."""

    nome: str
    conteudo: bytes
    content_type: str = "application/octet-stream"


@dataclass
class Arquivo:
    """
    Arquivo armazenado pela API.

    Attributes:
        produto_id: Produto dono do arquivo (se houver)
        video_id: Vídeo dono do arquivo (se houver)
        caminho: Pasta lógica (ex: "produtos/images")
        uri: Endereço público
    """

    id: str
    nome_arquivo: Optional[str] = None
    tipo: Optional[TipoArquivo] = None
    caminho: Optional[str] = None
    uri: Optional[str] = None
    produto_id: Optional[str] = None
    video_id: Optional[str] = None
    criado_em: Optional[datetime] = None

    @property
    def eh_imagem(self) -> bool:
        return self.tipo == TipoArquivo.IMAGE


@dataclass
class ProdutoEntity:
    """
    Entidade de Domínio: Produto.

    Regras:
    - Nome obrigatório
    - Descrição curta obrigatória, até 100 caracteres
    """

    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    nome: str = ""
    descricao_curta: str = ""
    descricao: Optional[str] = None
    arquivos: List[Arquivo] = field(default_factory=list)
    imagens: List[Arquivo] = field(default_factory=list)
    criado_em: Optional[datetime] = None

    DESCRICAO_CURTA_MAX_LENGTH: int = 100

    @classmethod
    def criar(cls, nome: str = "", descricao_curta: str = "",
              descricao: Optional[str] = None, **_) -> "ProdutoEntity":
        """
        Raises:
            ValidationError: Se nome ou descrição curta inválidos
        """
        return cls(
            nome=_obrigatorio(nome, "nome", "Nome"),
            descricao_curta=cls._validar_descricao_curta(descricao_curta),
            descricao=descricao or None,
        )

    @classmethod
    def _validar_descricao_curta(cls, valor: str) -> str:
        valor = _obrigatorio(valor, "descricao_curta", "Descrição curta")
        if len(valor) > cls.DESCRICAO_CURTA_MAX_LENGTH:
            raise ValidationError(
                f"Descrição curta deve ter no máximo {cls.DESCRICAO_CURTA_MAX_LENGTH} caracteres",
                field="descricao_curta"
            )
        return valor

    def atualizar(self, nome: Optional[str] = None, descricao_curta: Optional[str] = None,
                  descricao: Optional[str] = None, **_) -> List[str]:
        if nome is not None:
            nome = _obrigatorio(nome, "nome", "Nome")
        if descricao_curta is not None:
            descricao_curta = self._validar_descricao_curta(descricao_curta)
        return _aplicar(self, {
            "nome": nome,
            "descricao_curta": descricao_curta,
            "descricao": descricao,
        })

    def adicionar_arquivos(self, novos: List[Arquivo]) -> None:
        """Novos arquivos entram após os existentes; imagens vão para `imagens`."""
        for arquivo in novos:
            (self.imagens if arquivo.eh_imagem else self.arquivos).append(arquivo)

    def remover_arquivo(self, arquivo_id: str) -> bool:
        antes = len(self.arquivos) + len(self.imagens)
        self.arquivos = [a for a in self.arquivos if a.id != arquivo_id]
        self.imagens = [a for a in self.imagens if a.id != arquivo_id]
        return len(self.arquivos) + len(self.imagens) < antes

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "nome": self.nome,
            "descricao_curta": self.descricao_curta,
            "descricao": self.descricao,
            "total_arquivos": len(self.arquivos),
            "total_imagens": len(self.imagens),
        }


@dataclass
class ContatoEntity:
    """
    Entidade de Domínio: Contato.

    Attributes:
        tipo: Meio (telefone, e-mail, WhatsApp...)
        categoria: Setor (comercial, suporte...)
        contato: Valor do contato
    """

    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    tipo: str = ""
    categoria: str = ""
    contato: str = ""

    @classmethod
    def criar(cls, tipo: str = "", categoria: str = "", contato: str = "", **_) -> "ContatoEntity":
        return cls(
            tipo=_obrigatorio(tipo, "tipo", "Tipo"),
            categoria=_obrigatorio(categoria, "categoria", "Categoria"),
            contato=_obrigatorio(contato, "contato", "Contato"),
        )

    def atualizar(self, tipo: Optional[str] = None, categoria: Optional[str] = None,
                  contato: Optional[str] = None, **_) -> List[str]:
        return _aplicar(self, {
            "tipo": _obrigatorio(tipo, "tipo", "Tipo") if tipo is not None else None,
            "categoria": _obrigatorio(categoria, "categoria", "Categoria") if categoria is not None else None,
            "contato": _obrigatorio(contato, "contato", "Contato") if contato is not None else None,
        })

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "tipo": self.tipo,
            "categoria": self.categoria,
            "contato": self.contato,
        }


@dataclass
class OpcaoServico:
    descricao: str
    ordem: int = 0
    id: Optional[str] = None


@dataclass
class ServicoEntity:
    """
    Entidade de Domínio: Serviço.

    Opções são mantidas ordenadas por `ordem`.
    """

    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    descricao: str = ""
    ordem: Optional[int] = None
    opcoes: List[OpcaoServico] = field(default_factory=list)

    @classmethod
    def criar(cls, descricao: str = "", ordem: Optional[int] = None,
              opcoes: Optional[List[OpcaoServico]] = None, **_) -> "ServicoEntity":
        servico = cls(
            descricao=_obrigatorio(descricao, "descricao", "Descrição"),
            ordem=ordem,
        )
        servico.definir_opcoes(opcoes or [])
        return servico

    def definir_opcoes(self, opcoes: List[OpcaoServico]) -> None:
        for opcao in opcoes:
            _obrigatorio(opcao.descricao, "opcoes", "Descrição da opção")
        self.opcoes = sorted(opcoes, key=lambda o: o.ordem)

    def atualizar(self, descricao: Optional[str] = None, ordem: Optional[int] = None,
                  opcoes: Optional[List[OpcaoServico]] = None, **_) -> List[str]:
        if descricao is not None:
            descricao = _obrigatorio(descricao, "descricao", "Descrição")
        alterados = _aplicar(self, {"descricao": descricao, "ordem": ordem})
        if opcoes is not None and opcoes != self.opcoes:
            self.definir_opcoes(opcoes)
            alterados.append("opcoes")
        return alterados

    def remover_opcao(self, opcao_id: str) -> bool:
        antes = len(self.opcoes)
        self.opcoes = [o for o in self.opcoes if o.id != opcao_id]
        return len(self.opcoes) < antes

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "descricao": self.descricao,
            "ordem": self.ordem,
            "opcoes": [o.descricao for o in self.opcoes],
        }


@dataclass
class VideoEntity:
    """
    Entidade de Domínio: Vídeo.

    Attributes:
        arquivo: Arquivo de vídeo enviado (opcional)
        video_url: Link externo (opcional)
    """

    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    nome: str = ""
    descricao: Optional[str] = None
    arquivo: Optional[Arquivo] = None
    video_url: Optional[str] = None

    @classmethod
    def criar(cls, nome: str = "", descricao: Optional[str] = None,
              video_url: Optional[str] = None, **_) -> "VideoEntity":
        return cls(
            nome=_obrigatorio(nome, "nome", "Nome"),
            descricao=descricao or None,
            video_url=video_url or None,
        )

    def atualizar(self, nome: Optional[str] = None, descricao: Optional[str] = None,
                  video_url: Optional[str] = None, **_) -> List[str]:
        if nome is not None:
            nome = _obrigatorio(nome, "nome", "Nome")
        return _aplicar(self, {"nome": nome, "descricao": descricao, "video_url": video_url})

    @property
    def endereco(self) -> Optional[str]:
        if self.arquivo and self.arquivo.uri:
            return self.arquivo.uri
        return self.video_url

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "nome": self.nome,
            "descricao": self.descricao,
            "endereco": self.endereco,
        }


ENTIDADES_POR_RECURSO = {
    Recurso.PRODUTOS: ProdutoEntity,
    Recurso.CONTATOS: ContatoEntity,
    Recurso.SERVICOS: ServicoEntity,
    Recurso.VIDEOS: VideoEntity,
}
