"""
Use Cases (Application Services) do Domínio de Chamados.

Use Cases implementados:
- ListarChamadosService: Lista chamados
- ObterChamadoService: Detalhes de um chamado
- CriarChamadoService: Abre chamado
- AtualizarChamadoService: Altera dados, status ou observação
- ExcluirChamadoService: Remove chamado
- ListarStatusChamadoService: Opções de status
- ContarChamadosPorStatusService: Cards do dashboard
- GerarGraficoMensalService: Gráfico "Assistências por Mês"

Operações de escrita usam UnitOfWork para que o evento de
auditoria só seja registrado quando a API confirmar a operação.
"""

from typing import Iterable, List, Optional

from src.core.shared.interfaces import UnitOfWork
from src.core.shared.exceptions import EntityNotFoundError, ValidationError

from .ports import ChamadoRepository
from .entities import ChamadoEntity, StatusChamado, cor_texto_status
from .dtos import (
    AtualizarChamadoInputDTO,
    ChamadoOutputDTO,
    ContadorStatusDTO,
    CriarChamadoInputDTO,
    GraficoMensalDTO,
    OpcaoStatusDTO,
)
from .events import ChamadoAtualizadoEvent, ChamadoCriadoEvent, ChamadoExcluidoEvent
from .graficos import montar_grafico_mensal

# Status que não aparecem nos cards do dashboard
STATUS_OCULTOS_NO_DASHBOARD = ("ANALYSING", "CREATED")


def _nao_encontrado(chamado_id: str) -> EntityNotFoundError:
    return EntityNotFoundError(
        f"Chamado {chamado_id} não encontrado",
        entity_type="Chamado",
        entity_id=chamado_id
    )


class CriarChamadoService:
    """
    Use Case: Abrir um chamado.

    Fluxo:
    1. Criar entidade (validações)
    2. Enviar para a API
    3. Disparar ChamadoCriadoEvent
    4. Retornar DTO de saída

    Example:
        service = CriarChamadoService(chamado_repo, uow)
        output = service.execute(CriarChamadoInputDTO(
            titulo="Máquina não liga",
            descricao="Painel apagado após queda de energia",
            cliente_id="cli-1",
            produto_id="prod-9",
        ))
    """

    def __init__(self, chamado_repo: ChamadoRepository, uow: UnitOfWork):
        self.chamado_repo = chamado_repo
        self.uow = uow

    def execute(self, input_dto: CriarChamadoInputDTO) -> ChamadoOutputDTO:
        """
        Raises:
            ValidationError: Se dados inválidos
        """
        with self.uow:
            chamado = ChamadoEntity.criar(
                titulo=input_dto.titulo,
                descricao=input_dto.descricao,
                cliente_id=input_dto.cliente_id,
                produto_id=input_dto.produto_id,
                criado_por=input_dto.executado_por_id,
            )

            chamado = self.chamado_repo.add(chamado)

            self.uow.publish_event(
                ChamadoCriadoEvent(
                    aggregate_id=chamado.id,
                    titulo=chamado.titulo,
                    cliente_id=chamado.cliente_id,
                    produto_id=chamado.produto_id,
                    executado_por_id=input_dto.executado_por_id,
                )
            )

        return ChamadoOutputDTO.from_entity(chamado)


class AtualizarChamadoService:
    """
    Use Case: Atualizar um chamado.

    Somente os campos informados são alterados. Se nada mudou,
    a API não é chamada e nenhum evento é disparado.
    """

    def __init__(self, chamado_repo: ChamadoRepository, uow: UnitOfWork):
        self.chamado_repo = chamado_repo
        self.uow = uow

    def execute(self, input_dto: AtualizarChamadoInputDTO) -> ChamadoOutputDTO:
        """
        Raises:
            EntityNotFoundError: Se chamado não existe
            ValidationError: Se status ou campos inválidos
        """
        with self.uow:
            chamado = self.chamado_repo.get_by_id(input_dto.chamado_id)
            if not chamado:
                raise _nao_encontrado(input_dto.chamado_id)

            status = None
            if input_dto.status:
                try:
                    status = StatusChamado.from_string(input_dto.status)
                except ValueError:
                    raise ValidationError(
                        f"Status inválido: {input_dto.status}",
                        field="status"
                    )

            alteracoes = chamado.atualizar(
                titulo=input_dto.titulo,
                descricao=input_dto.descricao,
                status=status,
                observacao=input_dto.observacao,
            )

            if alteracoes:
                chamado = self.chamado_repo.update(chamado)
                self.uow.publish_event(
                    ChamadoAtualizadoEvent(
                        aggregate_id=chamado.id,
                        alteracoes={k: list(v) for k, v in alteracoes.items()},
                        executado_por_id=input_dto.executado_por_id,
                    )
                )

        return ChamadoOutputDTO.from_entity(chamado)


class ExcluirChamadoService:
    """
    Use Case: Excluir um chamado.
    """

    def __init__(self, chamado_repo: ChamadoRepository, uow: UnitOfWork):
        self.chamado_repo = chamado_repo
        self.uow = uow

    def execute(self, chamado_id: str, executado_por_id: Optional[str] = None) -> None:
        with self.uow:
            if not self.chamado_repo.get_by_id(chamado_id):
                raise _nao_encontrado(chamado_id)

            self.chamado_repo.delete(chamado_id)

            self.uow.publish_event(
                ChamadoExcluidoEvent(
                    aggregate_id=chamado_id,
                    executado_por_id=executado_por_id,
                )
            )


class ListarChamadosService:
    """
    Use Case: Listar chamados.

    Não usa UoW pois é operação de leitura.
    """

    def __init__(self, chamado_repo: ChamadoRepository):
        self.chamado_repo = chamado_repo

    def execute(self) -> List[ChamadoOutputDTO]:
        return [ChamadoOutputDTO.from_entity(c) for c in self.chamado_repo.list_all()]


class ObterChamadoService:
    """
    Use Case: Obter detalhes de um chamado.
    """

    def __init__(self, chamado_repo: ChamadoRepository):
        self.chamado_repo = chamado_repo

    def execute(self, chamado_id: str) -> ChamadoOutputDTO:
        """
        Raises:
            EntityNotFoundError: Se chamado não existe
        """
        chamado = self.chamado_repo.get_by_id(chamado_id)
        if not chamado:
            raise _nao_encontrado(chamado_id)
        return ChamadoOutputDTO.from_entity(chamado)


class ListarStatusChamadoService:
    """
    Use Case: Opções de status para o formulário de edição.
    """

    def __init__(self, chamado_repo: ChamadoRepository):
        self.chamado_repo = chamado_repo

    def execute(self) -> List[OpcaoStatusDTO]:
        return self.chamado_repo.list_status()


class ContarChamadosPorStatusService:
    """
    Use Case: Contadores por status exibidos no dashboard.

    Por padrão omite CREATED e ANALYSING, que não têm card.
    """

    def __init__(self, chamado_repo: ChamadoRepository):
        self.chamado_repo = chamado_repo

    def execute(
        self,
        ocultar: Iterable[str] = STATUS_OCULTOS_NO_DASHBOARD,
    ) -> List[ContadorStatusDTO]:
        """
        Args:
            ocultar: Chaves de status a omitir

        Returns:
            Um contador por status, na ordem da API
        """
        ocultos = set(ocultar)
        return [
            ContadorStatusDTO(
                chave=chave,
                rotulo=dados.get("label", chave),
                quantidade=int(dados.get("count", 0)),
                cor=cor_texto_status(chave),
            )
            for chave, dados in self.chamado_repo.count_by_status().items()
            if chave not in ocultos
        ]


class GerarGraficoMensalService:
    """
    Use Case: Dados do gráfico de chamados por mês.
    """

    def __init__(self, chamado_repo: ChamadoRepository):
        self.chamado_repo = chamado_repo

    def execute(self) -> GraficoMensalDTO:
        return montar_grafico_mensal(self.chamado_repo.count_by_month())
