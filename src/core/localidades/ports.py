"""
Ports (Interfaces) do Domínio de Localidades.
"""

from typing import Dict, List, Optional, Protocol, runtime_checkable

from .entities import Estado, Municipio


@runtime_checkable
class LocalidadesGateway(Protocol):
    """
    Interface para a API de localidades do IBGE.

    Implementações:
    - IbgeLocalidadesGateway (servicodados.ibge.gov.br)
    - InMemoryLocalidadesGateway (testes)
    """

    def listar_estados(self) -> List[Estado]:
        ...

    def listar_municipios(self, uf: str) -> List[Municipio]:
        ...


class InMemoryLocalidadesGateway:
    def __init__(self, estados: Optional[List[Estado]] = None,
                 municipios: Optional[Dict[str, List[Municipio]]] = None):
        self._estados = list(estados or [])
        self._municipios = dict(municipios or {})
        self.consultas_municipios: List[str] = []

    def listar_estados(self) -> List[Estado]:
        return list(self._estados)

    def listar_municipios(self, uf: str) -> List[Municipio]:
        self.consultas_municipios.append(uf)
        return list(self._municipios.get(uf, []))
