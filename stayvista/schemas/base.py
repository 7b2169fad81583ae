"""Shared schema base: snake_case in Python, camelCase on the wire."""

from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel

# Emails are stored and compared lowercased
NormalizedEmail = Annotated[EmailStr, AfterValidator(str.lower)]


class CamelModel(BaseModel):
    """Accepts either field style on input and serializes with camelCase aliases."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PartyInfo(CamelModel):
    """Name/email/avatar snapshot of a guest or host."""

    name: str | None = Field(None, max_length=200)
    email: NormalizedEmail
    image: str | None = None
