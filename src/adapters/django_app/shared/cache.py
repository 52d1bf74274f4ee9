"""
Cache de consultas à API usando o cache do Django (Redis ou LocMem).

Cada recurso tem um contador de geração; as chaves incluem a
geração, então invalidar um recurso é apenas incrementar o
contador (as chaves antigas expiram sozinhas).
"""

from typing import Any, Callable
import logging

from django.core.cache import cache as django_cache

logger = logging.getLogger(__name__)

PREFIXO = "painel"


class CacheConsultas:
    """
    Args:
        timeout: Validade das entradas em segundos (0 desativa)
        backend: Cache Django (padrão: `default`)
    """

    def __init__(self, timeout: int = 60, backend=None):
        self.timeout = timeout
        self._cache = backend or django_cache

    def _chave_geracao(self, recurso: str) -> str:
        return f"{PREFIXO}:{recurso}:geracao"

    def geracao(self, recurso: str) -> int:
        chave = self._chave_geracao(recurso)
        valor = self._cache.get(chave)
        if valor is None:
            self._cache.add(chave, 1, timeout=None)
            valor = self._cache.get(chave, 1)
        return int(valor)

    def chave(self, recurso: str, chave: str) -> str:
        return f"{PREFIXO}:{recurso}:v{self.geracao(recurso)}:{chave}"

    def obter_ou_buscar(self, recurso: str, chave: str, buscar: Callable[[], Any]) -> Any:
        if not self.timeout:
            return buscar()

        chave_completa = self.chave(recurso, chave)
        valor = self._cache.get(chave_completa)
        if valor is not None:
            logger.debug(f"Cache hit: {chave_completa}")
            return valor

        valor = buscar()
        if valor is not None:
            self._cache.set(chave_completa, valor, timeout=self.timeout)
        return valor

    def invalidar(self, recurso: str) -> None:
        chave = self._chave_geracao(recurso)
        try:
            self._cache.incr(chave)
        except ValueError:
            # contador ainda não existe
            self._cache.set(chave, 2, timeout=None)
        logger.debug(f"Cache invalidado: {recurso}")
