"""
Use Cases (Application Services) do Domínio de Cadastros.

CRUD genérico (um repositório por recurso):
- ListarRegistrosService, ObterRegistroService
- CriarRegistroService, AtualizarRegistroService, ExcluirRegistroService

Específicos:
- RemoverOpcaoServicoService: Remove uma opção de serviço
- EnviarArquivosService / RemoverArquivoService: API de arquivos
"""

from typing import List, Optional

from src.core.shared.interfaces import UnitOfWork
from src.core.shared.exceptions import EntityNotFoundError, ValidationError

from .ports import ArquivoGateway, CadastroRepository, ServicoRepository
from .entities import ENTIDADES_POR_RECURSO, Recurso
from .dtos import (
    ArquivoOutputDTO,
    EnviarArquivosInputDTO,
    RegistroOutputDTO,
    SalvarRegistroInputDTO,
)
from .events import (
    ArquivoRemovidoEvent,
    ArquivosEnviadosEvent,
    RegistroAtualizadoEvent,
    RegistroCriadoEvent,
    RegistroExcluidoEvent,
)


def _nao_encontrado(recurso: Recurso, registro_id: str) -> EntityNotFoundError:
    return EntityNotFoundError(
        f"{recurso.entidade} {registro_id} não encontrado",
        entity_type=recurso.entidade,
        entity_id=registro_id
    )


def _conferir_recurso(repo: CadastroRepository, recurso: str) -> Recurso:
    try:
        informado = Recurso.from_string(recurso)
    except ValueError:
        raise ValidationError(f"Recurso desconhecido: {recurso}", field="recurso")
    if informado != repo.recurso:
        raise ValidationError(
            f"Recurso {recurso} não corresponde ao repositório {repo.recurso.value}",
            field="recurso"
        )
    return informado


class CriarRegistroService:
    """
    Use Case: Cadastrar produto, contato, serviço ou vídeo.

    Fluxo:
    1. Criar entidade do recurso (validações da entidade)
    2. Enviar para a API
    3. Disparar RegistroCriadoEvent
    """

    def __init__(self, cadastro_repo: CadastroRepository, uow: UnitOfWork):
        self.cadastro_repo = cadastro_repo
        self.uow = uow

    def execute(self, input_dto: SalvarRegistroInputDTO) -> RegistroOutputDTO:
        recurso = _conferir_recurso(self.cadastro_repo, input_dto.recurso)

        with self.uow:
            registro = ENTIDADES_POR_RECURSO[recurso].criar(**input_dto.dados)
            registro = self.cadastro_repo.add(registro)

            self.uow.publish_event(
                RegistroCriadoEvent(
                    aggregate_id=registro.id,
                    recurso=recurso.value,
                    executado_por_id=input_dto.executado_por_id,
                )
            )

        return RegistroOutputDTO.from_entity(recurso.value, registro)


class AtualizarRegistroService:
    """
    Use Case: Editar registro de cadastro.

    Só chama a API se algum campo mudou.
    """

    def __init__(self, cadastro_repo: CadastroRepository, uow: UnitOfWork):
        self.cadastro_repo = cadastro_repo
        self.uow = uow

    def execute(self, input_dto: SalvarRegistroInputDTO) -> RegistroOutputDTO:
        """
        Raises:
            ValidationError: Se registro_id ausente ou dados inválidos
            EntityNotFoundError: Se registro não existe
        """
        recurso = _conferir_recurso(self.cadastro_repo, input_dto.recurso)
        if not input_dto.registro_id:
            raise ValidationError("Registro não informado", field="registro_id")

        with self.uow:
            registro = self.cadastro_repo.get_by_id(input_dto.registro_id)
            if not registro:
                raise _nao_encontrado(recurso, input_dto.registro_id)

            campos = registro.atualizar(**input_dto.dados)

            if campos:
                registro = self.cadastro_repo.update(registro)
                self.uow.publish_event(
                    RegistroAtualizadoEvent(
                        aggregate_id=registro.id,
                        recurso=recurso.value,
                        campos=campos,
                        executado_por_id=input_dto.executado_por_id,
                    )
                )

        return RegistroOutputDTO.from_entity(recurso.value, registro)


class ExcluirRegistroService:
    def __init__(self, cadastro_repo: CadastroRepository, uow: UnitOfWork):
        self.cadastro_repo = cadastro_repo
        self.uow = uow

    def execute(self, registro_id: str, executado_por_id: Optional[str] = None) -> None:
        """
        Raises:
            EntityNotFoundError: Se registro não existe
        """
        recurso = self.cadastro_repo.recurso

        with self.uow:
            if not self.cadastro_repo.get_by_id(registro_id):
                raise _nao_encontrado(recurso, registro_id)

            self.cadastro_repo.delete(registro_id)

            self.uow.publish_event(
                RegistroExcluidoEvent(
                    aggregate_id=registro_id,
                    recurso=recurso.value,
                    executado_por_id=executado_por_id,
                )
            )


class ListarRegistrosService:
    """
    Use Case: Listar registros de um recurso.

    Não usa UoW pois é operação de leitura.
    """

    def __init__(self, cadastro_repo: CadastroRepository):
        self.cadastro_repo = cadastro_repo

    def execute(self) -> List[RegistroOutputDTO]:
        recurso = self.cadastro_repo.recurso.value
        return [
            RegistroOutputDTO.from_entity(recurso, r)
            for r in self.cadastro_repo.list_all()
        ]


class ObterRegistroService:
    """
    Retorna a entidade completa (formulários de edição precisam de
    arquivos e opções, que o DTO resume).
    """

    def __init__(self, cadastro_repo: CadastroRepository):
        self.cadastro_repo = cadastro_repo

    def execute(self, registro_id: str):
        registro = self.cadastro_repo.get_by_id(registro_id)
        if not registro:
            raise _nao_encontrado(self.cadastro_repo.recurso, registro_id)
        return registro


class RemoverOpcaoServicoService:
    """
    Use Case: Remover opção de um serviço.

    A API remove a opção diretamente (/services/option/delete/{id});
    o evento é registrado no serviço dono da opção.
    """

    def __init__(self, servico_repo: ServicoRepository, uow: UnitOfWork):
        self.servico_repo = servico_repo
        self.uow = uow

    def execute(self, servico_id: str, opcao_id: str,
                executado_por_id: Optional[str] = None) -> None:
        if not opcao_id:
            raise ValidationError("Opção não informada", field="opcao_id")

        with self.uow:
            self.servico_repo.remover_opcao(opcao_id)

            self.uow.publish_event(
                RegistroAtualizadoEvent(
                    aggregate_id=servico_id,
                    recurso=Recurso.SERVICOS.value,
                    campos=["opcoes"],
                    executado_por_id=executado_por_id,
                )
            )


class EnviarArquivosService:
    """
    Use Case: Enviar arquivos de produto ou vídeo.

    Regras:
    - Pelo menos um arquivo
    - Caminho obrigatório
    """

    def __init__(self, arquivo_gateway: ArquivoGateway, uow: UnitOfWork):
        self.arquivo_gateway = arquivo_gateway
        self.uow = uow

    def execute(self, input_dto: EnviarArquivosInputDTO) -> List[ArquivoOutputDTO]:
        if not input_dto.arquivos:
            raise ValidationError("Selecione ao menos um arquivo", field="arquivos")
        if not input_dto.caminho:
            raise ValidationError("Caminho é obrigatório", field="caminho")

        with self.uow:
            enviados = self.arquivo_gateway.enviar(
                input_dto.arquivos,
                caminho=input_dto.caminho,
                tipo=input_dto.tipo,
                produto_id=input_dto.produto_id,
                video_id=input_dto.video_id,
            )

            self.uow.publish_event(
                ArquivosEnviadosEvent(
                    aggregate_id=input_dto.video_id or input_dto.produto_id or input_dto.caminho,
                    arquivo_ids=[a.id for a in enviados],
                    caminho=input_dto.caminho,
                    tipo=input_dto.tipo,
                    video_id=input_dto.video_id,
                    executado_por_id=input_dto.executado_por_id,
                )
            )

        return [ArquivoOutputDTO.from_entity(a) for a in enviados]


class RemoverArquivoService:
    def __init__(self, arquivo_gateway: ArquivoGateway, uow: UnitOfWork):
        self.arquivo_gateway = arquivo_gateway
        self.uow = uow

    def execute(self, arquivo_id: str, executado_por_id: Optional[str] = None) -> None:
        with self.uow:
            self.arquivo_gateway.remover(arquivo_id)
            self.uow.publish_event(
                ArquivoRemovidoEvent(
                    aggregate_id=arquivo_id,
                    executado_por_id=executado_por_id,
                )
            )
