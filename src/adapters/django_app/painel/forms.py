"""
Forms do Painel (login).
"""

from django import forms


class LoginForm(forms.Form):
    email = forms.EmailField(
        label='E-mail',
        widget=forms.EmailInput(attrs={
            'class': 'form-control',
            'placeholder': 'admin@empresa.com.br',
            'autofocus': True,
        }),
        error_messages={
            'required': 'E-mail é obrigatório',
            'invalid': 'Informe um e-mail válido',
        },
    )

    senha = forms.CharField(
        label='Senha',
        strip=False,
        widget=forms.PasswordInput(attrs={'class': 'form-control'}),
        error_messages={'required': 'Senha é obrigatória'},
    )
