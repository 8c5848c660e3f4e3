"""
Esquemas Pydantic para usuarios y sesión en el cliente de BookReview Hub.
Define la respuesta de login, la sesión guardada en el cliente y los formularios de acceso.
"""

from typing import Annotated

from pydantic import BaseModel, ConfigDict, EmailStr, Field, StringConstraints, model_validator

NonBlankStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]

class UserSchema(BaseModel):
    """
    Usuario tal y como lo devuelve `POST /login`.

    Atributos:
        id (int): ID del usuario.
        name (str): Nombre visible.
        email (str): Correo electrónico.
        is_admin (bool): Si el usuario es administrador.
    """
    id: int
    name: str
    email: str
    is_admin: bool = False

    model_config = ConfigDict(extra="ignore")

class LoginResponse(BaseModel):
    token: str
    user: UserSchema

    model_config = ConfigDict(extra="ignore")

class Session(BaseModel):
    """
    Sesión autenticada guardada en el cliente.

    Atributos:
        token (str): Credencial bearer opaca.
        id (int): ID del usuario.
        name (str): Nombre visible.
        email (str): Correo electrónico.
        is_admin (bool): Si el usuario es administrador.
    """
    token: str
    id: int
    name: str
    email: str
    is_admin: bool = False

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_login(cls, response: LoginResponse) -> "Session":
        return cls(token=response.token, **response.user.model_dump())

class LoginForm(BaseModel):
    email: NonBlankStr
    password: str = Field(..., min_length=1)

class RegisterForm(BaseModel):
    """
    Formulario de registro.

    Atributos:
        name (str): Nombre visible.
        email (EmailStr): Correo electrónico.
        password (str): Contraseña en texto plano (el backend la hashea).
        password_confirm (str): Debe coincidir con `password`.
    """
    name: NonBlankStr
    email: EmailStr
    password: str = Field(..., min_length=1)
    password_confirm: str

    @model_validator(mode="after")
    def passwords_match(self) -> "RegisterForm":
        if self.password != self.password_confirm:
            raise ValueError("Passwords do not match")
        return self
