"""
Views genéricas de cadastros.

Uma única família de views atende produtos, contatos, serviços e
vídeos; o recurso vem da URL (/cadastros/<recurso>/...) e escolhe
form, colunas da tabela e template de detalhe.
"""

import logging

from django.http import Http404, HttpRequest, HttpResponse
from django.shortcuts import redirect, render
from django.urls import reverse
from django.views import View

from src.core.cadastros.dtos import EnviarArquivosInputDTO, SalvarRegistroInputDTO
from src.core.cadastros.entities import ArquivoUpload, Recurso
from src.core.shared.exceptions import (
    DomainException,
    EntityNotFoundError,
    ValidationError,
)
from src.core.shared.tabela import Coluna, TabelaDinamica

from src.adapters.django_app.shared.mixins import PainelViewMixin
from src.adapters.django_app.shared.tabela import contexto_tabela

from .forms import FORMS_POR_RECURSO, ArquivosForm

logger = logging.getLogger(__name__)


def _colunas(*definicoes):
    return TabelaDinamica([
        Coluna(chave, titulo, acessor=f"dados.{chave}", **extra)
        for chave, titulo, extra in definicoes
    ])


TABELAS = {
    Recurso.PRODUTOS: _colunas(
        ('nome', 'Nome', {}),
        ('descricao_curta', 'Descrição curta', {}),
        ('total_imagens', 'Imagens', {}),
        ('total_arquivos', 'Arquivos', {}),
    ),
    Recurso.CONTATOS: _colunas(
        ('tipo', 'Tipo', {}),
        ('categoria', 'Categoria', {}),
        ('contato', 'Contato', {}),
    ),
    Recurso.SERVICOS: _colunas(
        ('descricao', 'Descrição', {}),
        ('ordem', 'Ordem', {}),
        ('opcoes', 'Opções', {'ordenavel': False}),
    ),
    Recurso.VIDEOS: _colunas(
        ('nome', 'Nome', {}),
        ('descricao', 'Descrição', {}),
        ('endereco', 'Endereço', {'ordenavel': False}),
    ),
}

TITULOS = {
    Recurso.PRODUTOS: ('Produtos', 'Produto'),
    Recurso.CONTATOS: ('Contatos', 'Contato'),
    Recurso.SERVICOS: ('Serviços', 'Serviço'),
    Recurso.VIDEOS: ('Vídeos', 'Vídeo'),
}


class CadastroMixin(PainelViewMixin):
    """Resolve o recurso da URL e monta os services do recurso."""

    def dispatch(self, request: HttpRequest, *args, **kwargs) -> HttpResponse:
        try:
            self.recurso = Recurso.from_string(kwargs.get('recurso', ''))
        except ValueError:
            raise Http404("Cadastro inexistente")
        return super().dispatch(request, *args, **kwargs)

    def service(self, nome: str):
        return self.get_service(
            nome,
            cadastro_repo__api=self.api_client(),
            cadastro_repo__recurso=self.recurso,
        )

    def contexto_base(self) -> dict:
        plural, singular = TITULOS[self.recurso]
        return {'recurso': self.recurso.value, 'titulo': plural, 'titulo_singular': singular}

    def form_class(self):
        return FORMS_POR_RECURSO[self.recurso]

    def dados_do_form(self, form, registro=None) -> dict:
        if self.recurso == Recurso.SERVICOS:
            return form.dados(atuais=registro.opcoes if registro else ())
        return form.dados()


class CadastroListView(CadastroMixin, View):
    """GET /cadastros/<recurso>/"""

    template_name = 'cadastros/list.html'

    def get(self, request: HttpRequest, recurso: str) -> HttpResponse:
        try:
            registros = self.service('listar_registros_service').execute()
        except DomainException as e:
            logger.error(f"Erro ao listar {self.recurso.value}: {e}")
            self.error_message(request, "Erro ao carregar registros.")
            registros = []

        context = contexto_tabela(
            request.GET,
            TABELAS[self.recurso],
            registros,
            url_da_linha=lambda r: reverse('cadastros:detail', args=[self.recurso.value, r.id]),
        )
        context.update(self.contexto_base())
        return render(request, self.template_name, context)


class CadastroCreateView(CadastroMixin, View):
    """GET/POST /cadastros/<recurso>/criar/"""

    template_name = 'cadastros/form.html'

    def get(self, request: HttpRequest, recurso: str) -> HttpResponse:
        return render(request, self.template_name, {**self.contexto_base(), 'form': self.form_class()()})

    def post(self, request: HttpRequest, recurso: str) -> HttpResponse:
        form = self.form_class()(request.POST)
        context = {**self.contexto_base(), 'form': form}
        if not form.is_valid():
            return render(request, self.template_name, context)

        try:
            output = self.service('criar_registro_service').execute(SalvarRegistroInputDTO(
                recurso=self.recurso.value,
                dados=self.dados_do_form(form),
                executado_por_id=self.get_user_id(request),
            ))
        except ValidationError as e:
            logger.warning(f"Validação falhou ao criar {self.recurso.value}: {e}")
            form.add_error(e.field if e.field in form.fields else None, e.message)
            return render(request, self.template_name, context)
        except DomainException as e:
            logger.error(f"Erro de domínio ao criar {self.recurso.value}: {e}")
            form.add_error(None, e.message)
            return render(request, self.template_name, context)

        logger.info(f"{self.recurso.entidade} criado: {output.id} por {self.get_user_id(request)}")
        self.success_message(request, f"{TITULOS[self.recurso][1]} cadastrado com sucesso!")
        return redirect('cadastros:detail', recurso=self.recurso.value, pk=output.id)


class CadastroDetailView(CadastroMixin, View):
    """
    GET /cadastros/<recurso>/<id>/ - Detalhes, edição e arquivos
    POST /cadastros/<recurso>/<id>/ - Atualiza
    """

    template_name = 'cadastros/detail.html'

    def _obter(self, pk: str):
        return self.service('obter_registro_service').execute(pk)

    def _initial(self, registro) -> dict:
        initial = registro.to_dict()
        if self.recurso == Recurso.SERVICOS:
            initial['opcoes'] = '\n'.join(o.descricao for o in registro.opcoes)
        if self.recurso == Recurso.VIDEOS:
            initial['video_url'] = registro.video_url
        return initial

    def get(self, request: HttpRequest, recurso: str, pk: str) -> HttpResponse:
        try:
            registro = self._obter(pk)
        except EntityNotFoundError:
            self.error_message(request, "Registro não encontrado.")
            return redirect('cadastros:list', recurso=self.recurso.value)
        except DomainException as e:
            logger.error(f"Erro ao obter {self.recurso.value} {pk}: {e}")
            self.error_message(request, "Erro ao carregar registro.")
            return redirect('cadastros:list', recurso=self.recurso.value)

        context = {
            **self.contexto_base(),
            'registro': registro,
            'form': self.form_class()(initial=self._initial(registro)),
            'arquivos_form': ArquivosForm(),
            'aceita_arquivos': self.recurso in (Recurso.PRODUTOS, Recurso.VIDEOS),
        }
        return render(request, self.template_name, context)

    def post(self, request: HttpRequest, recurso: str, pk: str) -> HttpResponse:
        form = self.form_class()(request.POST)
        if not form.is_valid():
            self.error_message(request, "Dados inválidos.")
            return redirect('cadastros:detail', recurso=self.recurso.value, pk=pk)

        try:
            registro = self._obter(pk) if self.recurso == Recurso.SERVICOS else None
            self.service('atualizar_registro_service').execute(SalvarRegistroInputDTO(
                recurso=self.recurso.value,
                registro_id=pk,
                dados=self.dados_do_form(form, registro),
                executado_por_id=self.get_user_id(request),
            ))
            logger.info(f"{self.recurso.entidade} {pk} atualizado por {self.get_user_id(request)}")
            self.success_message(request, "Registro atualizado com sucesso!")

        except EntityNotFoundError:
            self.error_message(request, "Registro não encontrado.")
            return redirect('cadastros:list', recurso=self.recurso.value)

        except DomainException as e:
            logger.warning(f"Falha ao atualizar {self.recurso.value} {pk}: {e}")
            self.error_message(request, e.message)

        return redirect('cadastros:detail', recurso=self.recurso.value, pk=pk)


class CadastroDeleteView(CadastroMixin, View):
    """POST /cadastros/<recurso>/<id>/excluir/"""

    def post(self, request: HttpRequest, recurso: str, pk: str) -> HttpResponse:
        try:
            self.service('excluir_registro_service').execute(pk, executado_por_id=self.get_user_id(request))
        except EntityNotFoundError:
            self.error_message(request, "Registro não encontrado.")
        except DomainException as e:
            logger.error(f"Erro ao excluir {self.recurso.value} {pk}: {e}")
            self.error_message(request, e.message)
            return redirect('cadastros:detail', recurso=self.recurso.value, pk=pk)
        else:
            logger.info(f"{self.recurso.entidade} {pk} excluído por {self.get_user_id(request)}")
            self.success_message(request, "Registro excluído.")

        return redirect('cadastros:list', recurso=self.recurso.value)


class RemoverOpcaoView(CadastroMixin, View):
    """POST /cadastros/services/<id>/opcoes/<opcao_id>/remover/"""

    def post(self, request: HttpRequest, recurso: str, pk: str, opcao_id: str) -> HttpResponse:
        if self.recurso != Recurso.SERVICOS:
            raise Http404("Somente serviços têm opções")

        service = self.get_service('remover_opcao_servico_service', servico_repo__api=self.api_client())
        try:
            service.execute(pk, opcao_id, executado_por_id=self.get_user_id(request))
            self.success_message(request, "Opção removida.")
        except DomainException as e:
            logger.warning(f"Falha ao remover opção {opcao_id} do serviço {pk}: {e}")
            self.error_message(request, e.message)

        return redirect('cadastros:detail', recurso=self.recurso.value, pk=pk)


class EnviarArquivosView(CadastroMixin, View):
    """
    POST /cadastros/<recurso>/<id>/arquivos/

    Produtos recebem imagens e manuais; vídeos recebem o arquivo
    de vídeo. Os novos arquivos entram após os existentes.
    """

    def post(self, request: HttpRequest, recurso: str, pk: str) -> HttpResponse:
        if self.recurso not in (Recurso.PRODUTOS, Recurso.VIDEOS):
            raise Http404("Cadastro sem arquivos")

        form = ArquivosForm(request.POST, request.FILES)
        if not form.is_valid():
            self.error_message(request, "Selecione ao menos um arquivo.")
            return redirect('cadastros:detail', recurso=self.recurso.value, pk=pk)

        eh_video = self.recurso == Recurso.VIDEOS
        tipo = form.cleaned_data['tipo']
        service = self.get_service('enviar_arquivos_service', arquivo_gateway__api=self.api_client())

        try:
            enviados = service.execute(EnviarArquivosInputDTO(
                arquivos=[
                    ArquivoUpload(
                        nome=f.name,
                        conteudo=f.read(),
                        content_type=f.content_type or 'application/octet-stream',
                    )
                    for f in form.cleaned_data['arquivos']
                ],
                caminho=f"{self.recurso.value}/{tipo.lower()}",
                tipo=tipo,
                produto_id=None if eh_video else pk,
                video_id=pk if eh_video else None,
                executado_por_id=self.get_user_id(request),
            ))
            self.success_message(request, f"{len(enviados)} arquivo(s) enviado(s).")
        except DomainException as e:
            logger.warning(f"Falha no envio de arquivos para {self.recurso.value} {pk}: {e}")
            self.error_message(request, e.message)

        return redirect('cadastros:detail', recurso=self.recurso.value, pk=pk)


class RemoverArquivoView(CadastroMixin, View):
    """POST /cadastros/<recurso>/<id>/arquivos/<arquivo_id>/remover/"""

    def post(self, request: HttpRequest, recurso: str, pk: str, arquivo_id: str) -> HttpResponse:
        service = self.get_service('remover_arquivo_service', arquivo_gateway__api=self.api_client())
        try:
            service.execute(arquivo_id, executado_por_id=self.get_user_id(request))
            self.success_message(request, "Arquivo removido.")
        except DomainException as e:
            logger.warning(f"Falha ao remover arquivo {arquivo_id}: {e}")
            self.error_message(request, e.message)

        return redirect('cadastros:detail', recurso=self.recurso.value, pk=pk)
