"""
Dependency Injection Container.

Configura as dependências do painel com dependency-injector.

Padrões:
- Singleton: uma instância por processo (pool httpx, event store,
  caches, IBGE)
- Factory: nova instância por chamada (cliente da API, repositórios,
  services, UoW)

Repositórios HTTP dependem do cliente autenticado com a sessão da
requisição, então as views o passam como argumento de contexto:

    container.listar_chamados_service(chamado_repo__api=api_client)
"""

from importlib import import_module
from typing import Optional

import httpx
from dependency_injector import containers, providers

from src.core.cadastros.entities import Recurso


def _lazy(module: str, name: str):
    """Importa `module.name` só na primeira construção (evita imports circulares com Django)."""

    def construir(*args, **kwargs):
        return getattr(import_module(module), name)(*args, **kwargs)

    construir.__name__ = name
    return construir


_HTTP_REPOS = 'src.adapters.http_api.repositories'
_PUBLISHERS = 'src.adapters.django_app.events.publishers'


class Container(containers.DeclarativeContainer):
    """
    Container principal de Dependency Injection.

    Organização:
    - Configuration: valores vindos do Django settings
    - Infrastructure: cliente da API, caches, eventos
    - Repositories / Gateways: portas sobre a API e o IBGE
    - Unit of Work
    - Services: casos de uso

    Example:
        container = get_container()
        service = container.obter_chamado_service(chamado_repo__api=client)
        chamado = service.execute(chamado_id)
    """

    # =========================================================================
    # Configuration
    # =========================================================================

    config = providers.Configuration()

    # =========================================================================
    # Infrastructure
    # =========================================================================

    # Pool de conexões do processo; os ApiClient por requisição não o fecham
    http_client = providers.Singleton(
        httpx.Client,
        timeout=config.api_timeout,
        follow_redirects=True,
    )

    api_client = providers.Factory(
        _lazy('src.adapters.http_api.client', 'ApiClient'),
        base_url=config.api_url,
        client=http_client,
    )

    cache = providers.Singleton(
        _lazy('src.adapters.django_app.shared.cache', 'CacheConsultas'),
        timeout=config.api_cache_segundos,
    )

    ibge_cache = providers.Singleton(
        _lazy('src.adapters.django_app.shared.cache', 'CacheConsultas'),
        timeout=config.ibge_cache_segundos,
    )

    # 'sync' em desenvolvimento, 'celery' em produção
    event_publisher = providers.Selector(
        config.event_publisher_mode,
        sync=providers.Singleton(_lazy(_PUBLISHERS, 'LoggingEventPublisher')),
        celery=providers.Singleton(
            _lazy(_PUBLISHERS, 'CompositeEventPublisher'),
            publishers=providers.List(
                providers.Singleton(_lazy(_PUBLISHERS, 'LoggingEventPublisher')),
                providers.Singleton(_lazy(_PUBLISHERS, 'CeleryEventPublisher'), also_log=False),
            ),
        ),
    )

    event_store = providers.Singleton(
        _lazy('src.adapters.django_app.painel.repositories', 'DjangoEventStore'),
    )

    # =========================================================================
    # Repositories / Gateways (api injetado por requisição)
    # =========================================================================

    chamado_repository = providers.Factory(
        _lazy(_HTTP_REPOS, 'HttpChamadoRepository'),
        api=api_client,
        cache=cache,
    )

    usuario_repository = providers.Factory(
        _lazy(_HTTP_REPOS, 'HttpUsuarioRepository'),
        api=api_client,
        cache=cache,
    )

    cadastro_repository = providers.Factory(
        _lazy(_HTTP_REPOS, 'HttpCadastroRepository'),
        api=api_client,
        recurso=Recurso.PRODUTOS,
        cache=cache,
    )

    servico_repository = providers.Factory(
        _lazy(_HTTP_REPOS, 'HttpCadastroRepository'),
        api=api_client,
        recurso=Recurso.SERVICOS,
        cache=cache,
    )

    arquivo_gateway = providers.Factory(
        _lazy(_HTTP_REPOS, 'HttpArquivoGateway'),
        api=api_client,
        cache=cache,
    )

    # Login e refresh não levam token
    auth_gateway = providers.Factory(
        _lazy(_HTTP_REPOS, 'HttpAutenticacaoGateway'),
        api=api_client,
    )

    localidades_gateway = providers.Singleton(
        _lazy('src.adapters.http_api.ibge', 'IbgeLocalidadesGateway'),
        base_url=config.ibge_url,
        timeout=config.api_timeout,
        cache=ibge_cache,
    )

    # =========================================================================
    # Unit of Work (Factory - nova instância por operação)
    # =========================================================================

    unit_of_work = providers.Factory(
        _lazy('src.adapters.django_app.shared.unit_of_work', 'DjangoUnitOfWork'),
        event_publisher=event_publisher,
        event_store=event_store,
    )

    # =========================================================================
    # Services - Chamados
    # =========================================================================

    listar_chamados_service = providers.Factory(
        _lazy('src.core.chamados.use_cases', 'ListarChamadosService'),
        chamado_repo=chamado_repository,
    )

    obter_chamado_service = providers.Factory(
        _lazy('src.core.chamados.use_cases', 'ObterChamadoService'),
        chamado_repo=chamado_repository,
    )

    criar_chamado_service = providers.Factory(
        _lazy('src.core.chamados.use_cases', 'CriarChamadoService'),
        chamado_repo=chamado_repository,
        uow=unit_of_work,
    )

    atualizar_chamado_service = providers.Factory(
        _lazy('src.core.chamados.use_cases', 'AtualizarChamadoService'),
        chamado_repo=chamado_repository,
        uow=unit_of_work,
    )

    excluir_chamado_service = providers.Factory(
        _lazy('src.core.chamados.use_cases', 'ExcluirChamadoService'),
        chamado_repo=chamado_repository,
        uow=unit_of_work,
    )

    listar_status_chamado_service = providers.Factory(
        _lazy('src.core.chamados.use_cases', 'ListarStatusChamadoService'),
        chamado_repo=chamado_repository,
    )

    contar_chamados_por_status_service = providers.Factory(
        _lazy('src.core.chamados.use_cases', 'ContarChamadosPorStatusService'),
        chamado_repo=chamado_repository,
    )

    gerar_grafico_mensal_service = providers.Factory(
        _lazy('src.core.chamados.use_cases', 'GerarGraficoMensalService'),
        chamado_repo=chamado_repository,
    )

    # =========================================================================
    # Services - Usuários
    # =========================================================================

    listar_usuarios_service = providers.Factory(
        _lazy('src.core.usuarios.use_cases', 'ListarUsuariosService'),
        usuario_repo=usuario_repository,
    )

    obter_usuario_service = providers.Factory(
        _lazy('src.core.usuarios.use_cases', 'ObterUsuarioService'),
        usuario_repo=usuario_repository,
    )

    criar_usuario_service = providers.Factory(
        _lazy('src.core.usuarios.use_cases', 'CriarUsuarioService'),
        usuario_repo=usuario_repository,
        uow=unit_of_work,
    )

    atualizar_usuario_service = providers.Factory(
        _lazy('src.core.usuarios.use_cases', 'AtualizarUsuarioService'),
        usuario_repo=usuario_repository,
        uow=unit_of_work,
    )

    excluir_usuario_service = providers.Factory(
        _lazy('src.core.usuarios.use_cases', 'ExcluirUsuarioService'),
        usuario_repo=usuario_repository,
        uow=unit_of_work,
    )

    # =========================================================================
    # Services - Cadastros (recurso injetado por requisição)
    # =========================================================================

    listar_registros_service = providers.Factory(
        _lazy('src.core.cadastros.use_cases', 'ListarRegistrosService'),
        cadastro_repo=cadastro_repository,
    )

    obter_registro_service = providers.Factory(
        _lazy('src.core.cadastros.use_cases', 'ObterRegistroService'),
        cadastro_repo=cadastro_repository,
    )

    criar_registro_service = providers.Factory(
        _lazy('src.core.cadastros.use_cases', 'CriarRegistroService'),
        cadastro_repo=cadastro_repository,
        uow=unit_of_work,
    )

    atualizar_registro_service = providers.Factory(
        _lazy('src.core.cadastros.use_cases', 'AtualizarRegistroService'),
        cadastro_repo=cadastro_repository,
        uow=unit_of_work,
    )

    excluir_registro_service = providers.Factory(
        _lazy('src.core.cadastros.use_cases', 'ExcluirRegistroService'),
        cadastro_repo=cadastro_repository,
        uow=unit_of_work,
    )

    remover_opcao_servico_service = providers.Factory(
        _lazy('src.core.cadastros.use_cases', 'RemoverOpcaoServicoService'),
        servico_repo=servico_repository,
        uow=unit_of_work,
    )

    enviar_arquivos_service = providers.Factory(
        _lazy('src.core.cadastros.use_cases', 'EnviarArquivosService'),
        arquivo_gateway=arquivo_gateway,
        uow=unit_of_work,
    )

    remover_arquivo_service = providers.Factory(
        _lazy('src.core.cadastros.use_cases', 'RemoverArquivoService'),
        arquivo_gateway=arquivo_gateway,
        uow=unit_of_work,
    )

    # =========================================================================
    # Services - Localidades (IBGE)
    # =========================================================================

    listar_estados_service = providers.Factory(
        _lazy('src.core.localidades.use_cases', 'ListarEstadosService'),
        localidades_gateway=localidades_gateway,
    )

    listar_municipios_service = providers.Factory(
        _lazy('src.core.localidades.use_cases', 'ListarMunicipiosService'),
        localidades_gateway=localidades_gateway,
    )

    # =========================================================================
    # Services - Autenticação (sessao_store injetado por requisição)
    # =========================================================================

    autenticar_admin_service = providers.Factory(
        _lazy('src.core.autenticacao.use_cases', 'AutenticarAdminService'),
        auth_gateway=auth_gateway,
        uow=unit_of_work,
    )

    renovar_sessao_service = providers.Factory(
        _lazy('src.core.autenticacao.use_cases', 'RenovarSessaoService'),
        auth_gateway=auth_gateway,
    )

    encerrar_sessao_service = providers.Factory(
        _lazy('src.core.autenticacao.use_cases', 'EncerrarSessaoService'),
        uow=unit_of_work,
    )


# =============================================================================
# Container Global
# =============================================================================

_container: Optional[Container] = None


def configuracao_do_django() -> dict:
    """Valores do container a partir do Django settings."""
    from django.conf import settings

    return {
        'api_url': settings.PAINEL_API_URL,
        'api_timeout': getattr(settings, 'PAINEL_API_TIMEOUT', 10.0),
        'api_cache_segundos': getattr(settings, 'PAINEL_API_CACHE_SEGUNDOS', 60),
        'ibge_url': settings.IBGE_API_URL,
        'ibge_cache_segundos': getattr(settings, 'IBGE_CACHE_SEGUNDOS', 86400),
        'event_publisher_mode': getattr(settings, 'EVENT_PUBLISHER_MODE', 'sync'),
    }


def get_container() -> Container:
    """
    Retorna instância global do container.

    Cria e configura na primeira chamada (lazy initialization).
    """
    global _container

    if _container is None:
        _container = Container()
        _container.config.from_dict(configuracao_do_django())

    return _container


def reset_container() -> None:
    """Descarta o container global (testes)."""
    global _container
    _container = None
