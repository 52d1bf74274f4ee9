"""
Domínio de Cadastros - Produtos, contatos, serviços, vídeos e arquivos.
"""

from .entities import (
    Arquivo,
    ArquivoUpload,
    ContatoEntity,
    OpcaoServico,
    ProdutoEntity,
    Recurso,
    ServicoEntity,
    TipoArquivo,
    VideoEntity,
)
from .dtos import (
    ArquivoOutputDTO,
    EnviarArquivosInputDTO,
    RegistroOutputDTO,
    SalvarRegistroInputDTO,
)
from .ports import ArquivoGateway, CadastroRepository, ServicoRepository

__all__ = [
    "Arquivo",
    "ArquivoUpload",
    "ContatoEntity",
    "OpcaoServico",
    "ProdutoEntity",
    "Recurso",
    "ServicoEntity",
    "TipoArquivo",
    "VideoEntity",
    "ArquivoOutputDTO",
    "EnviarArquivosInputDTO",
    "RegistroOutputDTO",
    "SalvarRegistroInputDTO",
    "ArquivoGateway",
    "CadastroRepository",
    "ServicoRepository",
]
