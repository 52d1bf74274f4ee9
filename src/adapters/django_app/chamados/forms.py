"""
Django Forms de Chamados.

Apenas validação estrutural; regras ficam em ChamadoEntity.
"""

from django import forms


class ChamadoCreateForm(forms.Form):
    """
    Form para abrir chamado.

    As opções de cliente e produto vêm da API e são passadas
    pela view.
    """

    titulo = forms.CharField(
        label='Título',
        max_length=200,
        widget=forms.TextInput(attrs={
            'class': 'form-control',
            'placeholder': 'Título da assistência...',
        }),
        error_messages={
            'required': 'Título é obrigatório',
            'max_length': 'Título deve ter no máximo 200 caracteres',
        },
    )

    descricao = forms.CharField(
        label='Descrição',
        max_length=5000,
        widget=forms.Textarea(attrs={
            'class': 'form-control',
            'rows': 5,
            'placeholder': 'Descreva o problema...',
        }),
        error_messages={'required': 'Descrição é obrigatória'},
    )

    cliente_id = forms.ChoiceField(
        label='Cliente',
        widget=forms.Select(attrs={'class': 'form-control'}),
        error_messages={'required': 'Cliente é obrigatório'},
    )

    produto_id = forms.ChoiceField(
        label='Produto',
        widget=forms.Select(attrs={'class': 'form-control'}),
        error_messages={'required': 'Produto é obrigatório'},
    )

    def __init__(self, *args, clientes=(), produtos=(), **kwargs):
        super().__init__(*args, **kwargs)
        self.fields['cliente_id'].choices = [('', 'Selecione...')] + list(clientes)
        self.fields['produto_id'].choices = [('', 'Selecione...')] + list(produtos)


class ChamadoUpdateForm(forms.Form):
    """Form de edição: dados, status e observação do técnico."""

    titulo = forms.CharField(
        label='Título',
        max_length=200,
        widget=forms.TextInput(attrs={'class': 'form-control'}),
        error_messages={'required': 'Título é obrigatório'},
    )

    descricao = forms.CharField(
        label='Descrição',
        widget=forms.Textarea(attrs={'class': 'form-control', 'rows': 5}),
        error_messages={'required': 'Descrição é obrigatória'},
    )

    status = forms.ChoiceField(
        label='Status',
        widget=forms.Select(attrs={'class': 'form-control'}),
    )

    observacao = forms.CharField(
        label='Observação',
        required=False,
        widget=forms.Textarea(attrs={
            'class': 'form-control',
            'rows': 3,
            'placeholder': 'Observações do técnico (opcional)',
        }),
    )

    def __init__(self, *args, status_opcoes=(), **kwargs):
        super().__init__(*args, **kwargs)
        self.fields['status'].choices = list(status_opcoes)
