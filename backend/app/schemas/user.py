from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, ValidationError, field_validator, model_validator
from pydantic.alias_generators import to_camel

from app.models.user import Role
from app.schemas.profile import ServiceProviderSeed, StartupSeed

SEED_SCHEMAS = {
    Role.STARTUP: StartupSeed,
    Role.SERVICE_PROVIDER: ServiceProviderSeed,
}


class ApiModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class EmailModel(ApiModel):
    email: EmailStr

    @field_validator("email")
    @classmethod
    def lowercase_email(cls, value: str) -> str:
        return value.strip().lower()


class SignupSchema(EmailModel):
    password: str = Field(min_length=6)
    role: Role
    role_profile_seed: Dict[str, Any] = Field(default_factory=dict)

    @model_validator(mode="after")
    def validate_seed(self):
        try:
            seed = SEED_SCHEMAS[self.role].model_validate(self.role_profile_seed)
        except ValidationError as e:
            problems = "; ".join(
                f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()
            )
            raise ValueError(f"Invalid roleProfileSeed for {self.role.value}: {problems}")
        self.role_profile_seed = seed.model_dump(mode="json", exclude_unset=True)
        return self


class SigninSchema(EmailModel):
    password: str
    role: Optional[Role] = None


class RefreshSchema(ApiModel):
    refresh_token: str


class AccountCreatedResponse(ApiModel):
    account_id: str


class TokenResponse(ApiModel):
    access_token: str
    refresh_token: str
    token_type: str = "bearer"


class SigninResponse(TokenResponse):
    requires_completion: bool


class UserOut(ApiModel):
    id: str
    email: EmailStr
    role: Role
    auth_provider: str
    email_verified: bool
