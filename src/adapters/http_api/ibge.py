"""
Gateway da API de localidades do IBGE.

Dados estáticos: estados e municípios ficam em cache pelo tempo
configurado (sem invalidação).
"""

import logging
from typing import List, Optional

import httpx

from src.core.localidades.entities import Estado, Municipio
from src.core.shared.exceptions import ExternalServiceError

from .repositories import SemCache

IBGE_API_URL = "https://servicodados.ibge.gov.br/api/v1/localidades"


class IbgeLocalidadesGateway:
    """
    Args:
        base_url: URL base de localidades (IBGE_API_URL)
        client: httpx.Client pré-configurado (testes)
        cache: Cache de leituras
    """

    RECURSO = "ibge"

    def __init__(self, base_url: str = IBGE_API_URL, *, timeout: float = 10.0,
                 client: Optional[httpx.Client] = None, cache=None) -> None:
        self.base_url = base_url.rstrip("/")
        self._client = client or httpx.Client(timeout=timeout)
        self.cache = cache or SemCache()
        self._logger = logging.getLogger(__name__)

    def _get(self, path: str):
        url = f"{self.base_url}{path}"
        self._logger.debug("IBGE GET %s", url)
        try:
            r = self._client.get(url)
            r.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise ExternalServiceError(
                f"IBGE respondeu {e.response.status_code}",
                status_code=e.response.status_code,
                details=e.response.text,
            ) from e
        except httpx.HTTPError as e:
            raise ExternalServiceError(f"Falha ao consultar o IBGE: {e}") from e
        try:
            return r.json()
        except ValueError as e:
            raise ExternalServiceError(
                "IBGE respondeu em formato inesperado",
                status_code=r.status_code,
                details=r.text,
            ) from e

    def listar_estados(self) -> List[Estado]:
        def buscar():
            return [Estado(sigla=e["sigla"], nome=e["nome"]) for e in self._get("/estados")]

        return self.cache.obter_ou_buscar(self.RECURSO, "estados", buscar)

    def listar_municipios(self, uf: str) -> List[Municipio]:
        def buscar():
            return [
                Municipio(nome=m["nome"], uf=uf)
                for m in self._get(f"/estados/{uf}/municipios")
            ]

        return self.cache.obter_ou_buscar(self.RECURSO, f"municipios:{uf}", buscar)
