"""
Use Cases do Domínio de Localidades.

- ListarEstadosService: Opções de UF ordenadas pela sigla
- ListarMunicipiosService: Opções de município de uma UF (padrão SC)
"""

from typing import List, Optional

from .entities import UF_PADRAO, Opcao
from .ports import LocalidadesGateway


class ListarEstadosService:
    def __init__(self, localidades_gateway: LocalidadesGateway):
        self.localidades_gateway = localidades_gateway

    def execute(self) -> List[Opcao]:
        """
        Returns:
            Opções {value: sigla, label: nome}, ordenadas por sigla
        """
        opcoes = [
            Opcao(value=e.sigla, label=e.nome)
            for e in self.localidades_gateway.listar_estados()
        ]
        return sorted(opcoes, key=lambda o: o.value)


class ListarMunicipiosService:
    def __init__(self, localidades_gateway: LocalidadesGateway):
        self.localidades_gateway = localidades_gateway

    def execute(self, uf: Optional[str] = None) -> List[Opcao]:
        """
        Args:
            uf: Sigla do estado; vazio usa SC

        Returns:
            Opções {value: nome, label: nome} na ordem da API
        """
        uf = (uf or UF_PADRAO).strip().upper()
        return [
            Opcao(value=m.nome, label=m.nome)
            for m in self.localidades_gateway.listar_municipios(uf)
        ]
