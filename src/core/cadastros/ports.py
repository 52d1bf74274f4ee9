"""
Ports (Interfaces) do Domínio de Cadastros.

Todos os cadastros seguem o mesmo contrato; cada instância de
repositório atende a um único recurso.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional, Protocol, runtime_checkable
import uuid

from .entities import Arquivo, ArquivoUpload, Recurso, ServicoEntity, TipoArquivo


@runtime_checkable
class CadastroRepository(Protocol):
    """
    Interface de CRUD genérico sobre /{recurso}.

    Implementações:
    - HttpCadastroRepository (API remota)
    - InMemoryCadastroRepository (testes)
    """

    recurso: Recurso

    def list_all(self) -> List[Any]:
        ...

    def get_by_id(self, registro_id: str) -> Optional[Any]:
        ...

    def add(self, registro: Any) -> Any:
        ...

    def update(self, registro: Any) -> Any:
        ...

    def delete(self, registro_id: str) -> None:
        ...


@runtime_checkable
class ServicoRepository(CadastroRepository, Protocol):
    """Serviços removem opções individualmente."""

    def remover_opcao(self, opcao_id: str) -> None:
        ...


@runtime_checkable
class ArquivoGateway(Protocol):
    """
    Interface para a API de arquivos.
    """

    def enviar(
        self,
        arquivos: List[ArquivoUpload],
        caminho: str,
        tipo: str,
        produto_id: Optional[str] = None,
        video_id: Optional[str] = None,
    ) -> List[Arquivo]:
        """
        Envia arquivos e retorna os registros criados pela API.
        """
        ...

    def remover(self, arquivo_id: str) -> None:
        ...


class InMemoryCadastroRepository:
    """
    Implementação em memória do CadastroRepository (e do ServicoRepository).
    """

    def __init__(self, recurso: Recurso):
        self.recurso = recurso
        self._registros: Dict[str, Any] = {}

    def list_all(self) -> List[Any]:
        return list(self._registros.values())

    def get_by_id(self, registro_id: str) -> Optional[Any]:
        return self._registros.get(registro_id)

    def add(self, registro: Any) -> Any:
        self._registros[registro.id] = registro
        return registro

    def update(self, registro: Any) -> Any:
        self._registros[registro.id] = registro
        return registro

    def delete(self, registro_id: str) -> None:
        self._registros.pop(registro_id, None)

    def remover_opcao(self, opcao_id: str) -> None:
        for registro in self._registros.values():
            if isinstance(registro, ServicoEntity):
                registro.remover_opcao(opcao_id)

    def clear(self) -> None:
        self._registros.clear()


class InMemoryArquivoGateway:
    """Guarda os envios em memória para inspeção nos testes."""

    def __init__(self):
        self.arquivos: Dict[str, Arquivo] = {}

    def enviar(self, arquivos, caminho, tipo, produto_id=None, video_id=None) -> List[Arquivo]:
        try:
            tipo_arquivo = TipoArquivo(tipo)
        except ValueError:
            tipo_arquivo = None

        enviados = []
        for upload in arquivos:
            arquivo = Arquivo(
                id=str(uuid.uuid4()),
                nome_arquivo=upload.nome,
                tipo=tipo_arquivo,
                caminho=caminho,
                uri=f"memoria://{caminho}/{upload.nome}",
                produto_id=produto_id,
                video_id=video_id,
                criado_em=datetime.now(),
            )
            self.arquivos[arquivo.id] = arquivo
            enviados.append(arquivo)
        return enviados

    def remover(self, arquivo_id: str) -> None:
        self.arquivos.pop(arquivo_id, None)
