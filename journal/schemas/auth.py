"""Pydantic schemas for the login endpoint."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

_camel_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class LoginRequest(BaseModel):
    username: str = Field(min_length=1)
    password: str
    totp_code: str

    model_config = _camel_config


class LoginResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int  # seconds

    model_config = _camel_config
