"""
Domínio de Chamados - Assistências Técnicas.

Chamados são abertos por clientes para produtos com problema e
acompanhados pelos administradores no painel:
- Entidades (ChamadoEntity, StatusChamado e cores por status)
- Use Cases (listar, obter, criar, atualizar, excluir, contadores)
- Gráfico mensal por status
- Domain Events (ChamadoCriado, ChamadoAtualizado, ChamadoExcluido)
"""

from .entities import ChamadoEntity, StatusChamado
from .events import ChamadoCriadoEvent, ChamadoAtualizadoEvent, ChamadoExcluidoEvent
from .dtos import (
    CriarChamadoInputDTO,
    AtualizarChamadoInputDTO,
    ChamadoOutputDTO,
    ContadorStatusDTO,
    GraficoMensalDTO,
)
from .ports import ChamadoRepository
from .use_cases import (
    CriarChamadoService,
    AtualizarChamadoService,
    ExcluirChamadoService,
    ListarChamadosService,
    ObterChamadoService,
)

__all__ = [
    "ChamadoEntity",
    "StatusChamado",
    "ChamadoCriadoEvent",
    "ChamadoAtualizadoEvent",
    "ChamadoExcluidoEvent",
    "CriarChamadoInputDTO",
    "AtualizarChamadoInputDTO",
    "ChamadoOutputDTO",
    "ContadorStatusDTO",
    "GraficoMensalDTO",
    "ChamadoRepository",
    "CriarChamadoService",
    "AtualizarChamadoService",
    "ExcluirChamadoService",
    "ListarChamadosService",
    "ObterChamadoService",
]
