"""
Entidades do Domínio de Localidades.
"""

from dataclasses import dataclass

UF_PADRAO = "SC"


@dataclass(frozen=True)
class Estado:
    sigla: str
    nome: str


@dataclass(frozen=True)
class Municipio:
    nome: str
    uf: str = ""


@dataclass(frozen=True)
class Opcao:
    """Opção de select (value/label)."""

    value: str
    label: str

    def to_dict(self) -> dict:
        return {"value": self.value, "label": self.label}

    def as_choice(self) -> tuple:
        """Formato de `choices` dos formulários Django."""
        return (self.value, self.label)
