"""User schemas: the stored record and the views derived from it."""

from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict, Field
from pydantic.networks import validate_email


def check_email(value: str) -> str:
    """Validate the email grammar but keep the address exactly as submitted."""
    validate_email(value)
    return value


SubmittedEmail = Annotated[str, AfterValidator(check_email)]


class NewUser(BaseModel):
    """User payload without an identifier, as handed to the repository."""

    name: str
    lastname: str
    mail: str
    password: str


class User(NewUser):
    """Full user record, password included."""

    model_config = ConfigDict(from_attributes=True)

    id: str

    def to_connected(self) -> "UserConnected":
        """Drop the password."""
        return UserConnected(id=self.id, name=self.name, lastname=self.lastname, mail=self.mail)


class UserConnected(BaseModel):
    """User information safe to return to callers."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    lastname: str
    mail: str


class UserSignIn(BaseModel):
    """Sign-in credentials."""

    mail: str = Field(..., max_length=255)
    password: str = Field(..., max_length=255)


class CreateUserPayload(BaseModel):
    """Registration request as submitted by the form."""

    name: str = Field(..., min_length=4, max_length=255)
    lastname: str = Field(..., min_length=4, max_length=255)
    mail: SubmittedEmail = Field(..., max_length=255)
    password: str = Field(..., min_length=8, max_length=255)

    def to_new_user(self) -> NewUser:
        """Convert to the repository payload."""
        return NewUser(
            name=self.name,
            lastname=self.lastname,
            mail=self.mail,
            password=self.password,
        )


class ErrorResponse(BaseModel):
    """Error body returned by the API."""

    error: str
