"""
Ports (Interfaces) do Domínio de Chamados.

Implementações:
- HttpChamadoRepository (API remota, em src/adapters/http_api)
- InMemoryChamadoRepository (testes)
"""

from typing import Dict, List, Optional, Protocol, runtime_checkable

from .entities import ChamadoEntity, StatusChamado
from .dtos import ContagemMensalDTO, OpcaoStatusDTO


@runtime_checkable
class ChamadoRepository(Protocol):
    """
    Interface para acesso aos chamados.

    Methods:
        list_all: Lista todos os chamados
        get_by_id: Busca por ID (None se não existe)
        add: Cria chamado e retorna a versão persistida
        update: Atualiza chamado e retorna a versão persistida
        delete: Remove chamado
        list_status: Opções de status aceitas pela API
        count_by_status: Contagem por status {CHAVE: {"label", "count"}}
        count_by_month: Contagem por mês e status
    """

    def list_all(self) -> List[ChamadoEntity]:
        ...

    def get_by_id(self, chamado_id: str) -> Optional[ChamadoEntity]:
        ...

    def add(self, chamado: ChamadoEntity) -> ChamadoEntity:
        """
        Cria chamado.

        Returns:
            Chamado como devolvido pela API (com ID definitivo)
        """
        ...

    def update(self, chamado: ChamadoEntity) -> ChamadoEntity:
        ...

    def delete(self, chamado_id: str) -> None:
        ...

    def list_status(self) -> List[OpcaoStatusDTO]:
        ...

    def count_by_status(self) -> Dict[str, dict]:
        """
        Returns:
            Ex: {"PENDING": {"label": "Pendente", "count": 4}, ...}
        """
        ...

    def count_by_month(self) -> List[ContagemMensalDTO]:
        """
        Returns:
            Ex: [ContagemMensalDTO(status="Pendente", mes="03/2024", quantidade=2)]
        """
        ...


class InMemoryChamadoRepository:
    """
    Implementação em memória do ChamadoRepository.

    Example:
        repo = InMemoryChamadoRepository()
        repo.add(chamado)
        assert repo.get_by_id(chamado.id) == chamado
    """

    def __init__(self):
        self._chamados: dict[str, ChamadoEntity] = {}

    def list_all(self) -> List[ChamadoEntity]:
        return list(self._chamados.values())

    def get_by_id(self, chamado_id: str) -> Optional[ChamadoEntity]:
        return self._chamados.get(chamado_id)

    def add(self, chamado: ChamadoEntity) -> ChamadoEntity:
        self._chamados[chamado.id] = chamado
        return chamado

    def update(self, chamado: ChamadoEntity) -> ChamadoEntity:
        self._chamados[chamado.id] = chamado
        return chamado

    def delete(self, chamado_id: str) -> None:
        self._chamados.pop(chamado_id, None)

    def list_status(self) -> List[OpcaoStatusDTO]:
        return [OpcaoStatusDTO(chave=s.name, rotulo=s.rotulo) for s in StatusChamado]

    def count_by_status(self) -> Dict[str, dict]:
        return {
            status.name: {
                "label": status.rotulo,
                "count": len([c for c in self._chamados.values() if c.status == status]),
            }
            for status in StatusChamado
        }

    def count_by_month(self) -> List[ContagemMensalDTO]:
        contagem: Dict[tuple, int] = {}
        for chamado in sorted(self._chamados.values(), key=lambda c: c.criado_em):
            chave = (chamado.status.rotulo, chamado.criado_em.strftime("%m/%Y"))
            contagem[chave] = contagem.get(chave, 0) + 1
        return [
            ContagemMensalDTO(status=status, mes=mes, quantidade=quantidade)
            for (status, mes), quantidade in contagem.items()
        ]

    def clear(self) -> None:
        self._chamados.clear()
