"""
Validador de CPF.

Usado no cadastro de usuários. Pontos e hífen são ignorados.
CPFs com todos os dígitos iguais ("111.111.111-11") passam no
cálculo dos dígitos verificadores e não são rejeitados aqui.
"""


def limpar_cpf(cpf: str) -> str:
    """Remove espaços nas pontas, pontos e hífen."""
    return (cpf or "").strip().replace(".", "").replace("-", "")


def cpf_esta_completo(cpf: str) -> bool:
    """
    Verifica se o CPF tem 11 dígitos.

    Example:
        >>> cpf_esta_completo("529.982.247-25")
        True
        >>> cpf_esta_completo("529.982.247")
        False
    """
    numeros = limpar_cpf(cpf)
    return len(numeros) == 11 and numeros.isdigit() and numeros.isascii()


def _digito_verificador(numeros: str, peso_inicial: int) -> int:
    soma = sum(
        int(digito) * peso
        for digito, peso in zip(numeros, range(peso_inicial, 1, -1))
    )
    resto = (soma * 10) % 11
    return 0 if resto in (10, 11) else resto


def cpf_eh_valido(cpf: str) -> bool:
    """
    Verifica os dois dígitos verificadores do CPF.

    Example:
        >>> cpf_eh_valido("529.982.247-25")
        True
        >>> cpf_eh_valido("529.982.247-26")
        False
    """
    if not cpf_esta_completo(cpf):
        return False

    numeros = limpar_cpf(cpf)
    primeiro = _digito_verificador(numeros[:9], 10)
    segundo = _digito_verificador(numeros[:10], 11)
    return numeros[9] == str(primeiro) and numeros[10] == str(segundo)
