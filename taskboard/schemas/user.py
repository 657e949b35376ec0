from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from typing import Optional


class RegisterRequest(BaseModel):
    """Body of ``POST /cadastro``.

    Every field is optional here so a missing one can be answered with a 400.
    The Portuguese names used by older clients are accepted too.
    """
    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = Field(default=None, validation_alias=AliasChoices("name", "nome"))
    email: Optional[str] = None
    password: Optional[str] = Field(default=None, validation_alias=AliasChoices("password", "senha"))
    confirm_password: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("confirmPassword", "confirm_password", "confirmar_senha"),
    )


class LoginRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    email: Optional[str] = None
    password: Optional[str] = Field(default=None, validation_alias=AliasChoices("password", "senha"))


class MessageResponse(BaseModel):
    message: str


class LoginResponse(MessageResponse):
    token: str
    token_type: str = "bearer"
