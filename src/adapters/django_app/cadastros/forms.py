"""
Django Forms dos cadastros (produtos, contatos, serviços, vídeos).

Cada form expõe `dados()` com os nomes de campo do domínio,
prontos para SalvarRegistroInputDTO.
"""

from django import forms

from src.core.cadastros.entities import OpcaoServico, ProdutoEntity, Recurso, TipoArquivo


class ProdutoForm(forms.Form):
    nome = forms.CharField(
        label='Nome',
        max_length=200,
        widget=forms.TextInput(attrs={'class': 'form-control'}),
        error_messages={'required': 'Nome é obrigatório'},
    )

    descricao_curta = forms.CharField(
        label='Descrição curta',
        max_length=ProdutoEntity.DESCRICAO_CURTA_MAX_LENGTH,
        widget=forms.TextInput(attrs={'class': 'form-control'}),
        error_messages={
            'required': 'Descrição curta é obrigatória',
            'max_length': 'Descrição curta deve ter no máximo 100 caracteres',
        },
    )

    descricao = forms.CharField(
        label='Descrição',
        required=False,
        widget=forms.Textarea(attrs={'class': 'form-control', 'rows': 6}),
    )

    def dados(self) -> dict:
        return dict(self.cleaned_data)


class ContatoForm(forms.Form):
    tipo = forms.CharField(
        label='Tipo',
        max_length=50,
        widget=forms.TextInput(attrs={'class': 'form-control', 'placeholder': 'Telefone, e-mail, WhatsApp...'}),
        error_messages={'required': 'Tipo é obrigatório'},
    )

    categoria = forms.CharField(
        label='Categoria',
        max_length=100,
        widget=forms.TextInput(attrs={'class': 'form-control', 'placeholder': 'Comercial, suporte...'}),
        error_messages={'required': 'Categoria é obrigatória'},
    )

    contato = forms.CharField(
        label='Contato',
        max_length=200,
        widget=forms.TextInput(attrs={'class': 'form-control'}),
        error_messages={'required': 'Contato é obrigatório'},
    )

    def dados(self) -> dict:
        return dict(self.cleaned_data)


class ServicoForm(forms.Form):
    """Opções informadas uma por linha, na ordem desejada."""

    descricao = forms.CharField(
        label='Descrição',
        max_length=200,
        widget=forms.TextInput(attrs={'class': 'form-control'}),
        error_messages={'required': 'Descrição é obrigatória'},
    )

    ordem = forms.IntegerField(
        label='Ordem',
        required=False,
        min_value=0,
        widget=forms.NumberInput(attrs={'class': 'form-control'}),
    )

    opcoes = forms.CharField(
        label='Opções',
        required=False,
        help_text='Uma opção por linha',
        widget=forms.Textarea(attrs={'class': 'form-control', 'rows': 5}),
    )

    def dados(self, atuais=()) -> dict:
        """
        Args:
            atuais: Opções já cadastradas; descrições iguais mantêm o id
        """
        ids = {o.descricao: o.id for o in atuais}
        linhas = [l.strip() for l in self.cleaned_data['opcoes'].splitlines() if l.strip()]
        return {
            'descricao': self.cleaned_data['descricao'],
            'ordem': self.cleaned_data['ordem'],
            'opcoes': [
                OpcaoServico(descricao=linha, ordem=i, id=ids.get(linha))
                for i, linha in enumerate(linhas)
            ],
        }


class VideoForm(forms.Form):
    nome = forms.CharField(
        label='Nome',
        max_length=200,
        widget=forms.TextInput(attrs={'class': 'form-control'}),
        error_messages={'required': 'Nome é obrigatório'},
    )

    descricao = forms.CharField(
        label='Descrição',
        required=False,
        widget=forms.Textarea(attrs={'class': 'form-control', 'rows': 4}),
    )

    video_url = forms.URLField(
        label='Link do vídeo',
        required=False,
        widget=forms.URLInput(attrs={'class': 'form-control', 'placeholder': 'https://'}),
        error_messages={'invalid': 'Informe uma URL válida'},
    )

    def dados(self) -> dict:
        return dict(self.cleaned_data)


FORMS_POR_RECURSO = {
    Recurso.PRODUTOS: ProdutoForm,
    Recurso.CONTATOS: ContatoForm,
    Recurso.SERVICOS: ServicoForm,
    Recurso.VIDEOS: VideoForm,
}


class MultipleFileInput(forms.ClearableFileInput):
    allow_multiple_selected = True


class MultipleFileField(forms.FileField):
    def __init__(self, *args, **kwargs):
        kwargs.setdefault('widget', MultipleFileInput())
        super().__init__(*args, **kwargs)

    def clean(self, data, initial=None):
        single_file_clean = super().clean
        if isinstance(data, (list, tuple)):
            return [single_file_clean(d, initial) for d in data]
        return [single_file_clean(data, initial)]


class ArquivosForm(forms.Form):
    """Envio de imagens, manuais ou vídeo para um produto ou vídeo."""

    arquivos = MultipleFileField(
        label='Arquivos',
        error_messages={'required': 'Selecione ao menos um arquivo'},
    )

    tipo = forms.ChoiceField(
        label='Tipo',
        choices=[(t.value, t.value) for t in TipoArquivo],
        initial=TipoArquivo.IMAGE.value,
        widget=forms.Select(attrs={'class': 'form-control'}),
    )
