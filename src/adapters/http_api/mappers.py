"""
Mappers - Conversão entre JSON da API (camelCase) e entidades.

Cada par `x_from_api` / `x_to_api` isola o formato da API do
domínio; campos desconhecidos são ignorados e campos ausentes
viram None.
"""

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from src.core.autenticacao.entities import Sessao, UsuarioSessao, calcular_expiracao
from src.core.cadastros.entities import (
    Arquivo,
    ContatoEntity,
    OpcaoServico,
    ProdutoEntity,
    Recurso,
    ServicoEntity,
    TipoArquivo,
    VideoEntity,
)
from src.core.chamados.dtos import ContagemMensalDTO, OpcaoStatusDTO
from src.core.chamados.entities import ChamadoEntity, StatusChamado
from src.core.shared.datas import converter_data_hora
from src.core.usuarios.entities import PapelUsuario, ProdutoDoCliente, UsuarioEntity

logger = logging.getLogger(__name__)


def _data(valor: Any) -> Optional[datetime]:
    if not valor:
        return None
    if isinstance(valor, datetime):
        return valor
    texto = str(valor)
    try:
        return converter_data_hora(texto)
    except ValueError:
        pass
    # datas de garantia chegam como dd/MM/yyyy ou yyyy-MM-dd
    for formato in ("%d/%m/%Y", "%Y-%m-%d"):
        try:
            return datetime.strptime(texto[:10], formato)
        except ValueError:
            continue
    logger.warning("Data em formato inesperado na API: %r", valor)
    return None


def _sem_nulos(dados: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in dados.items() if v is not None}


# =============================================================================
# SESSÃO
# =============================================================================

def sessao_from_api(data: Dict[str, Any]) -> Sessao:
    """
    Converte resposta de /sessions.

    `tokenExpiry` é a validade do token em segundos.
    """
    usuario = data.get("user") or {}
    expiracao = data.get("tokenExpiry")
    return Sessao(
        usuario=UsuarioSessao(
            id=str(usuario.get("id", "")),
            nome=usuario.get("name", ""),
            email=usuario.get("email", ""),
            papel=usuario.get("role", ""),
            avatar_url=usuario.get("avatarUrl"),
        ),
        token=data.get("token", ""),
        refresh_token=data.get("refreshToken"),
        expira_em=calcular_expiracao(float(expiracao)) if expiracao is not None else None,
    )


# =============================================================================
# CHAMADOS
# =============================================================================

def _status(valor: Any) -> StatusChamado:
    try:
        return StatusChamado.from_string(valor)
    except ValueError:
        logger.warning("Status de chamado desconhecido: %r", valor)
        return StatusChamado.CREATED


def chamado_from_api(data: Dict[str, Any]) -> ChamadoEntity:
    cliente = data.get("client") or {}
    return ChamadoEntity(
        id=str(data["id"]),
        titulo=data.get("title", ""),
        descricao=data.get("description", ""),
        status=_status(data.get("status")),
        cliente_id=str(data.get("clientId") or cliente.get("id") or ""),
        produto_id=str(data.get("productId") or ""),
        criado_por=data.get("createdBy"),
        criado_em=_data(data.get("createdAt")) or datetime.now(),
        nome_cliente=cliente.get("name") or data.get("clientName"),
        nome_produto=data.get("productName"),
        observacao=data.get("observation"),
    )


def chamado_to_api(chamado: ChamadoEntity) -> Dict[str, Any]:
    return _sem_nulos({
        "id": chamado.id,
        "title": chamado.titulo,
        "description": chamado.descricao,
        "status": chamado.status.name,
        "clientId": chamado.cliente_id,
        "productId": chamado.produto_id,
        "createdBy": chamado.criado_por,
        "observation": chamado.observacao,
    })


def status_from_api(item: Any) -> OpcaoStatusDTO:
    """
    Converte um item de /assistances/status.

    Aceita a chave pura ("PENDING") ou objetos com value/key/status
    e label opcional.
    """
    if isinstance(item, dict):
        chave = item.get("value") or item.get("key") or item.get("status") or ""
        rotulo = item.get("label")
    else:
        chave, rotulo = str(item), None

    if not rotulo:
        try:
            rotulo = StatusChamado.from_string(chave).rotulo
        except ValueError:
            rotulo = chave
    return OpcaoStatusDTO(chave=chave, rotulo=rotulo)


def contagens_mensais_from_api(data: List[Dict[str, Any]]) -> List[ContagemMensalDTO]:
    return [
        ContagemMensalDTO(
            status=item.get("status", ""),
            mes=item.get("month", ""),
            quantidade=int(item.get("count") or 0),
        )
        for item in data or []
    ]


# =============================================================================
# USUÁRIOS
# =============================================================================

def _papel(valor: Any) -> PapelUsuario:
    try:
        return PapelUsuario.from_string(valor or "USER")
    except ValueError:
        logger.warning("Papel de usuário desconhecido: %r", valor)
        return PapelUsuario.USER


def usuario_from_api(data: Dict[str, Any]) -> UsuarioEntity:
    clientes = [
        str(c.get("id")) if isinstance(c, dict) else str(c)
        for c in data.get("clients") or []
    ]
    produtos = [
        ProdutoDoCliente(
            nome_produto=p.get("productName") or (p.get("product") or {}).get("name", ""),
            numero_pedido=p.get("orderNumber"),
            garantia_ate=_data(p.get("warrantyFinalDate")),
        )
        for p in data.get("productsOnClient") or []
    ]
    return UsuarioEntity(
        id=str(data["id"]),
        nome=data.get("name", ""),
        email=data.get("email", ""),
        papel=_papel(data.get("role")),
        cpf=data.get("cpf"),
        estado=data.get("state"),
        cidade=data.get("city"),
        telefone=data.get("phone"),
        avatar_url=data.get("avatarUrl"),
        clientes=clientes,
        produtos=produtos,
    )


def usuario_to_api(usuario: UsuarioEntity, incluir_id: bool = True) -> Dict[str, Any]:
    dados = {
        "name": usuario.nome,
        "email": usuario.email,
        "role": usuario.papel.name,
        "cpf": usuario.cpf,
        "state": usuario.estado,
        "city": usuario.cidade,
        "phone": usuario.telefone,
        "password": usuario.senha or None,
    }
    if incluir_id:
        dados["id"] = usuario.id
    return _sem_nulos(dados)


# =============================================================================
# CADASTROS
# =============================================================================

def arquivo_from_api(data: Dict[str, Any]) -> Arquivo:
    try:
        tipo = TipoArquivo(data.get("fileType")) if data.get("fileType") else None
    except ValueError:
        tipo = None
    return Arquivo(
        id=str(data["id"]),
        nome_arquivo=data.get("fileName"),
        tipo=tipo,
        caminho=data.get("filePath"),
        uri=data.get("uri"),
        produto_id=data.get("productId"),
        video_id=data.get("videoId"),
        criado_em=_data(data.get("createdAt")),
    )


def _produto_from_api(data: Dict[str, Any]) -> ProdutoEntity:
    return ProdutoEntity(
        id=str(data["id"]),
        nome=data.get("name", ""),
        descricao_curta=data.get("smallDescription", ""),
        descricao=data.get("description"),
        arquivos=[arquivo_from_api(a) for a in data.get("files") or []],
        imagens=[arquivo_from_api(a) for a in data.get("images") or []],
        criado_em=_data(data.get("createdAt")),
    )


def _produto_to_api(produto: ProdutoEntity) -> Dict[str, Any]:
    return _sem_nulos({
        "name": produto.nome,
        "smallDescription": produto.descricao_curta,
        "description": produto.descricao,
        "files": [{"id": a.id} for a in produto.arquivos],
        "images": [{"id": a.id} for a in produto.imagens],
    })


def _contato_from_api(data: Dict[str, Any]) -> ContatoEntity:
    return ContatoEntity(
        id=str(data["id"]),
        tipo=data.get("type", ""),
        categoria=data.get("category", ""),
        contato=data.get("contact", ""),
    )


def _contato_to_api(contato: ContatoEntity) -> Dict[str, Any]:
    return {"type": contato.tipo, "category": contato.categoria, "contact": contato.contato}


def _servico_from_api(data: Dict[str, Any]) -> ServicoEntity:
    opcoes = [
        OpcaoServico(
            id=str(o["id"]) if o.get("id") else None,
            descricao=o.get("description", ""),
            ordem=int(o.get("order") or 0),
        )
        for o in data.get("serviceOptions") or []
    ]
    return ServicoEntity(
        id=str(data["id"]),
        descricao=data.get("description", ""),
        ordem=data.get("order"),
        opcoes=sorted(opcoes, key=lambda o: o.ordem),
    )


def _servico_to_api(servico: ServicoEntity) -> Dict[str, Any]:
    return _sem_nulos({
        "description": servico.descricao,
        "order": servico.ordem,
        "serviceOptions": [
            _sem_nulos({"id": o.id, "description": o.descricao, "order": o.ordem})
            for o in servico.opcoes
        ],
    })


def _video_from_api(data: Dict[str, Any]) -> VideoEntity:
    arquivo = data.get("file")
    return VideoEntity(
        id=str(data["id"]),
        nome=data.get("name", ""),
        descricao=data.get("description"),
        arquivo=arquivo_from_api(arquivo) if arquivo else None,
        video_url=data.get("videoUrl"),
    )


def _video_to_api(video: VideoEntity) -> Dict[str, Any]:
    return _sem_nulos({
        "name": video.nome,
        "description": video.descricao,
        "videoUrl": video.video_url,
    })


_CADASTROS = {
    Recurso.PRODUTOS: (_produto_from_api, _produto_to_api),
    Recurso.CONTATOS: (_contato_from_api, _contato_to_api),
    Recurso.SERVICOS: (_servico_from_api, _servico_to_api),
    Recurso.VIDEOS: (_video_from_api, _video_to_api),
}


def registro_from_api(recurso: Recurso, data: Dict[str, Any]):
    return _CADASTROS[recurso][0](data)


def registro_to_api(recurso: Recurso, registro, incluir_id: bool = True) -> Dict[str, Any]:
    dados = _CADASTROS[recurso][1](registro)
    if incluir_id:
        dados["id"] = registro.id
    return dados
