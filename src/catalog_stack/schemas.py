"""
catalog_stack.schemas

Wire models shared by the API layer and the user store.

Responsibilities:
- Define the JSON shapes for `Product` and `User`.
- Accept both lower-case and capitalised field names on input.
- Keep prices fixed-point (two fractional digits) while emitting JSON numbers.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Annotated

from pydantic import AfterValidator, AliasChoices, BaseModel, ConfigDict, Field, PlainSerializer

_CENTS = Decimal("0.01")


def _quantize(value: Decimal) -> Decimal:
    try:
        return value.quantize(_CENTS, rounding=ROUND_HALF_UP)
    except InvalidOperation as e:
        # More digits than the decimal context holds.
        raise ValueError("price is out of range") from e


Price = Annotated[
    Decimal,
    AfterValidator(_quantize),
    PlainSerializer(float, return_type=float, when_used="json"),
]


class Product(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    # 0 / missing means "let the backend assign one".
    id: int = Field(default=0, validation_alias=AliasChoices("id", "Id"))
    nome: str = Field(default="", validation_alias=AliasChoices("nome", "Nome"))
    preco: Price = Field(default=Decimal("0.00"), validation_alias=AliasChoices("preco", "Preco"))


class User(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(validation_alias=AliasChoices("id", "Id"))
    nome: str = Field(validation_alias=AliasChoices("nome", "Nome"))
    email: str = Field(validation_alias=AliasChoices("email", "Email"))


# --- Module Notes -----------------------------------------------------------
# No input validation beyond type binding: empty names and malformed emails are accepted.
