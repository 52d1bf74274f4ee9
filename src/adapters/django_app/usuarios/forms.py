"""
Django Forms de Usuários.

Estados e municípios vêm do IBGE (ListarEstadosService /
ListarMunicipiosService) e são passados pela view.
"""

from django import forms

from src.core.usuarios.entities import PapelUsuario

PAPEIS = [(papel.name, papel.rotulo) for papel in PapelUsuario]


class UsuarioForm(forms.Form):
    """
    Cadastro e edição de usuário.

    Na edição a senha é opcional (vazia mantém a atual).
    """

    nome = forms.CharField(
        label='Nome',
        max_length=200,
        widget=forms.TextInput(attrs={'class': 'form-control'}),
        error_messages={'required': 'Nome é obrigatório'},
    )

    email = forms.EmailField(
        label='E-mail',
        widget=forms.EmailInput(attrs={'class': 'form-control'}),
        error_messages={
            'required': 'E-mail é obrigatório',
            'invalid': 'Informe um e-mail válido',
        },
    )

    senha = forms.CharField(
        label='Senha',
        required=False,
        strip=False,
        widget=forms.PasswordInput(attrs={'class': 'form-control'}),
    )

    papel = forms.ChoiceField(
        label='Perfil',
        choices=PAPEIS,
        initial=PapelUsuario.USER.name,
        widget=forms.Select(attrs={'class': 'form-control'}),
    )

    cpf = forms.CharField(
        label='CPF',
        max_length=14,
        required=False,
        widget=forms.TextInput(attrs={'class': 'form-control', 'placeholder': '000.000.000-00'}),
    )

    telefone = forms.CharField(
        label='Telefone',
        max_length=20,
        required=False,
        widget=forms.TextInput(attrs={'class': 'form-control', 'placeholder': '(48) 99999-9999'}),
    )

    estado = forms.ChoiceField(
        label='Estado',
        required=False,
        widget=forms.Select(attrs={'class': 'form-control'}),
    )

    cidade = forms.ChoiceField(
        label='Cidade',
        required=False,
        widget=forms.Select(attrs={'class': 'form-control'}),
    )

    def __init__(self, *args, estados=(), municipios=(), senha_obrigatoria=True, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields['estado'].choices = [('', 'Selecione...')] + list(estados)
        self.fields['cidade'].choices = [('', 'Selecione...')] + list(municipios)
        self.fields['senha'].required = senha_obrigatoria
        if senha_obrigatoria:
            self.fields['senha'].error_messages['required'] = 'Senha é obrigatória'
        else:
            self.fields['senha'].help_text = 'Deixe em branco para manter a senha atual'


class UsuarioFiltroForm(forms.Form):
    """Filtro enviado à API na listagem (nome, e-mail, perfil)."""

    nome = forms.CharField(
        label='Nome',
        required=False,
        widget=forms.TextInput(attrs={'class': 'form-control'}),
    )

    email = forms.CharField(
        label='E-mail',
        required=False,
        widget=forms.TextInput(attrs={'class': 'form-control'}),
    )

    papel = forms.ChoiceField(
        label='Perfil',
        required=False,
        choices=[('', 'Todos')] + PAPEIS,
        widget=forms.Select(attrs={'class': 'form-control'}),
    )
