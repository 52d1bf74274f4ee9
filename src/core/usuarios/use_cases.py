"""
Use Cases (Application Services) do Domínio de Usuários.

Use Cases implementados:
- ListarUsuariosService: Lista com filtro opcional (nome, e-mail, papel)
- ObterUsuarioService: Detalhes de um usuário
- CriarUsuarioService: Cadastra usuário
- AtualizarUsuarioService: Edita usuário
- ExcluirUsuarioService: Remove usuário
"""

from typing import List, Optional

from src.core.shared.interfaces import UnitOfWork
from src.core.shared.exceptions import (
    BusinessRuleViolationError,
    EntityNotFoundError,
    ValidationError,
)

from .ports import UsuarioRepository
from .entities import PapelUsuario, UsuarioEntity
from .dtos import (
    AtualizarUsuarioInputDTO,
    CriarUsuarioInputDTO,
    FiltroUsuariosDTO,
    UsuarioOutputDTO,
)
from .events import UsuarioAtualizadoEvent, UsuarioCriadoEvent, UsuarioExcluidoEvent


def _converter_papel(valor: str) -> PapelUsuario:
    try:
        return PapelUsuario.from_string(valor)
    except ValueError:
        raise ValidationError(f"Papel inválido: {valor}", field="papel")


def _nao_encontrado(usuario_id: str) -> EntityNotFoundError:
    return EntityNotFoundError(
        f"Usuário {usuario_id} não encontrado",
        entity_type="Usuario",
        entity_id=usuario_id
    )


class CriarUsuarioService:
    """
    Use Case: Cadastrar usuário.

    Fluxo:
    1. Converter papel e criar entidade (validações de nome,
       e-mail, senha e CPF)
    2. Enviar para a API
    3. Disparar UsuarioCriadoEvent
    """

    def __init__(self, usuario_repo: UsuarioRepository, uow: UnitOfWork):
        self.usuario_repo = usuario_repo
        self.uow = uow

    def execute(self, input_dto: CriarUsuarioInputDTO) -> UsuarioOutputDTO:
        """
        Raises:
            ValidationError: Se dados inválidos
        """
        with self.uow:
            usuario = UsuarioEntity.criar(
                nome=input_dto.nome,
                email=input_dto.email,
                senha=input_dto.senha,
                papel=_converter_papel(input_dto.papel),
                cpf=input_dto.cpf,
                estado=input_dto.estado,
                cidade=input_dto.cidade,
                telefone=input_dto.telefone,
            )

            usuario = self.usuario_repo.add(usuario)

            self.uow.publish_event(
                UsuarioCriadoEvent(
                    aggregate_id=usuario.id,
                    email=usuario.email,
                    papel=usuario.papel.name,
                    executado_por_id=input_dto.executado_por_id,
                )
            )

        return UsuarioOutputDTO.from_entity(usuario)


class AtualizarUsuarioService:
    """
    Use Case: Editar usuário.
    """

    def __init__(self, usuario_repo: UsuarioRepository, uow: UnitOfWork):
        self.usuario_repo = usuario_repo
        self.uow = uow

    def execute(self, input_dto: AtualizarUsuarioInputDTO) -> UsuarioOutputDTO:
        """
        Raises:
            EntityNotFoundError: Se usuário não existe
            ValidationError: Se dados inválidos
        """
        with self.uow:
            usuario = self.usuario_repo.get_by_id(input_dto.usuario_id)
            if not usuario:
                raise _nao_encontrado(input_dto.usuario_id)

            campos = usuario.atualizar(
                nome=input_dto.nome,
                email=input_dto.email,
                papel=_converter_papel(input_dto.papel) if input_dto.papel else None,
                cpf=input_dto.cpf,
                estado=input_dto.estado,
                cidade=input_dto.cidade,
                telefone=input_dto.telefone,
                senha=input_dto.senha,
            )

            if campos:
                usuario = self.usuario_repo.update(usuario)
                self.uow.publish_event(
                    UsuarioAtualizadoEvent(
                        aggregate_id=usuario.id,
                        campos=campos,
                        executado_por_id=input_dto.executado_por_id,
                    )
                )

        return UsuarioOutputDTO.from_entity(usuario)


class ExcluirUsuarioService:
    """
    Use Case: Excluir usuário.

    Regras:
    - Administrador não pode excluir a própria conta
    """

    def __init__(self, usuario_repo: UsuarioRepository, uow: UnitOfWork):
        self.usuario_repo = usuario_repo
        self.uow = uow

    def execute(self, usuario_id: str, executado_por_id: Optional[str] = None) -> None:
        """
        Raises:
            EntityNotFoundError: Se usuário não existe
            BusinessRuleViolationError: Se tentar excluir a si mesmo
        """
        if executado_por_id and usuario_id == executado_por_id:
            raise BusinessRuleViolationError(
                "Não é possível excluir o próprio usuário",
                rule="autoexclusao_proibida"
            )

        with self.uow:
            if not self.usuario_repo.get_by_id(usuario_id):
                raise _nao_encontrado(usuario_id)

            self.usuario_repo.delete(usuario_id)

            self.uow.publish_event(
                UsuarioExcluidoEvent(
                    aggregate_id=usuario_id,
                    executado_por_id=executado_por_id,
                )
            )


class ListarUsuariosService:
    """
    Use Case: Listar usuários.

    Não usa UoW pois é operação de leitura.
    """

    def __init__(self, usuario_repo: UsuarioRepository):
        self.usuario_repo = usuario_repo

    def execute(self, filtro: Optional[FiltroUsuariosDTO] = None) -> List[UsuarioOutputDTO]:
        """
        Args:
            filtro: Filtro por nome, e-mail e papel (opcional)

        Raises:
            ValidationError: Se papel do filtro inválido
        """
        if filtro and filtro.papel:
            _converter_papel(filtro.papel)

        usuarios = self.usuario_repo.list_all(filtro)
        return [UsuarioOutputDTO.from_entity(u) for u in usuarios]


class ObterUsuarioService:
    """
    Use Case: Obter usuário.
    """

    def __init__(self, usuario_repo: UsuarioRepository):
        self.usuario_repo = usuario_repo

    def execute(self, usuario_id: str) -> UsuarioOutputDTO:
        usuario = self.usuario_repo.get_by_id(usuario_id)
        if not usuario:
            raise _nao_encontrado(usuario_id)
        return UsuarioOutputDTO.from_entity(usuario)
