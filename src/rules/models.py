from typing import Literal

from pydantic import BaseModel, Field


class ProjectRules(BaseModel):
    slug: str
    rules_version: str


class PasswordHashingRules(BaseModel):
    algorithm: Literal["argon2", "sha256"]
    min_length: int = Field(ge=1)


class TokenRules(BaseModel):
    min_secret_length: int = Field(ge=1)


class IdentityRules(BaseModel):
    username_min: int = Field(ge=1)
    username_max: int = Field(ge=1)


class AuthRules(BaseModel):
    password_hashing: PasswordHashingRules
    tokens: TokenRules
    identity: IdentityRules


class OpsRules(BaseModel):
    required_env: list[str]


class Rules(BaseModel):
    project: ProjectRules
    auth: AuthRules
    ops: OpsRules
