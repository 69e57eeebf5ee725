from enum import Enum
from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, HttpUrl, StringConstraints
from pydantic.alias_generators import to_camel

NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
PhoneNumber = Annotated[str, StringConstraints(strip_whitespace=True, min_length=10)]
PersonName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=2)]


class ServiceProviderType(str, Enum):
    INCUBATOR = "Incubator"
    ACCELERATOR = "Accelerator"
    INSTITUTION = "Institution/University"
    PRIVATE_COWORKING = "Private Coworking Space"
    COMMUNITY_SPACE = "Community Space"
    CAFE = "Cafe"


class ProfileModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )


# ------------------------
# Startup Profile
# ------------------------
class StartupProfileFields(ProfileModel):
    startup_name: Optional[NonEmptyStr] = None
    contact_name: Optional[NonEmptyStr] = None
    contact_number: Optional[NonEmptyStr] = None
    address: Optional[NonEmptyStr] = None
    logo_url: Optional[HttpUrl] = None


class StartupSeed(StartupProfileFields):
    startup_name: PersonName
    contact_name: PersonName
    contact_number: PhoneNumber


# ------------------------
# Service Provider Profile
# ------------------------
class ServiceProviderProfileFields(ProfileModel):
    service_provider_type: Optional[ServiceProviderType] = None
    service_name: Optional[NonEmptyStr] = None
    address: Optional[NonEmptyStr] = None
    city: Optional[NonEmptyStr] = None
    state_province: Optional[NonEmptyStr] = None
    zip_postal_code: Optional[NonEmptyStr] = None
    primary_contact1_name: Optional[NonEmptyStr] = None
    primary_contact1_designation: Optional[NonEmptyStr] = None
    contact2_name: Optional[str] = None
    contact2_designation: Optional[str] = None
    primary_contact_number: Optional[NonEmptyStr] = None
    alternate_contact_number: Optional[str] = None
    primary_email_id: Optional[EmailStr] = None
    alternate_email_id: Optional[EmailStr] = None
    logo_url: Optional[HttpUrl] = None
    website_url: Optional[HttpUrl] = None


class ServiceProviderSeed(ServiceProviderProfileFields):
    service_name: NonEmptyStr
    primary_contact_number: PhoneNumber


# ------------------------
# Responses
# ------------------------
class ProfileResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    role: str
    profile: dict
    requires_completion: bool
