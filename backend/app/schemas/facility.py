from datetime import datetime
from enum import Enum
from typing import Annotated, Any, Dict, List, Literal

from pydantic import BaseModel, ConfigDict, Field, HttpUrl, ValidationError, model_validator
from pydantic.alias_generators import to_camel

from app.schemas.profile import NonEmptyStr


class FacilityType(str, Enum):
    INDIVIDUAL_CABIN = "Individual Cabin"
    COWORKING_SPACE = "Coworking Spaces"
    MEETING_ROOM = "Meeting/Board Rooms"
    BIO_ALLIED = "Bio & Allied Facilities"
    MANUFACTURING = "Manufacturing Facilities"
    PROTOTYPING_LAB = "Prototyping Labs"
    SAAS_LAB = "SAAS Labs and Facilities"
    SOFTWARE = "Specialized Softwares"
    RAW_OFFICE = "Raw Space-Office Setup"
    RAW_LAB = "Raw Space-Lab Setup"


class DetailsModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")


Price = Annotated[float, Field(ge=0)]
Images = List[HttpUrl]


# ------------------------
# Plans
# ------------------------
class RentalPlan(DetailsModel):
    plan: Literal["Annual", "Monthly", "Weekly", "per day"]
    price: Price


class RoomRentalPlan(DetailsModel):
    plan: Literal["per day", "hourly", "weekly"]
    price: Price


class SubscriptionPlan(DetailsModel):
    plan: Literal["Hourly", "Annual", "Monthly", "Weekly", "per day"]
    price: Price


class SpaceSubscriptionPlan(DetailsModel):
    plan: Literal["Monthly", "Annual"]
    price: Price


# ------------------------
# Workspaces
# ------------------------
class IndividualCabinDetails(DetailsModel):
    total_cabins: int = Field(ge=0)
    available_cabins: int = Field(ge=0)
    rental_plans: List[RentalPlan] = Field(min_length=1)
    images: Images = Field(min_length=1)

    @model_validator(mode="after")
    def check_availability(self):
        if self.available_cabins > self.total_cabins:
            raise ValueError("availableCabins cannot exceed totalCabins")
        return self


class CoworkingSpaceDetails(DetailsModel):
    total_seats: int = Field(ge=0)
    available_seats: int = Field(ge=0)
    rental_plans: List[RentalPlan] = Field(min_length=1)
    images: Images = Field(min_length=1)

    @model_validator(mode="after")
    def check_availability(self):
        if self.available_seats > self.total_seats:
            raise ValueError("availableSeats cannot exceed totalSeats")
        return self


class RoomCount(DetailsModel):
    total: int = Field(ge=0)
    seaters: int = Field(ge=0)


class MeetingRoomDetails(DetailsModel):
    conference_rooms: RoomCount
    training_rooms: RoomCount
    rental_plans: List[RoomRentalPlan] = Field(min_length=1)
    images: Images = Field(min_length=1)


# ------------------------
# Labs & equipment
# ------------------------
class Equipment(DetailsModel):
    equipment_name: NonEmptyStr
    capacity: NonEmptyStr
    make: NonEmptyStr


class EquipmentLabDetails(DetailsModel):
    """Shared by bio, manufacturing, prototyping and SaaS labs."""

    equipment: List[Equipment] = Field(min_length=1)
    subscription_plans: List[SubscriptionPlan] = Field(min_length=1)
    images: Images = Field(min_length=1)


class Software(DetailsModel):
    name: NonEmptyStr
    version: NonEmptyStr


class SoftwareDetails(DetailsModel):
    software: List[Software] = Field(min_length=1)
    subscription_plans: List[SubscriptionPlan] = Field(min_length=1)


# ------------------------
# Raw space
# ------------------------
class AreaDetail(DetailsModel):
    area: float = Field(gt=0)
    type: NonEmptyStr
    furnishing: NonEmptyStr
    customisation: NonEmptyStr
    best_fit_for: NonEmptyStr


class RawSpaceDetails(DetailsModel):
    area_details: List[AreaDetail] = Field(min_length=1)
    subscription_plans: List[SpaceSubscriptionPlan] = Field(min_length=1)
    images: Images = Field(min_length=1)


FACILITY_DETAILS_SCHEMAS = {
    FacilityType.INDIVIDUAL_CABIN: IndividualCabinDetails,
    FacilityType.COWORKING_SPACE: CoworkingSpaceDetails,
    FacilityType.MEETING_ROOM: MeetingRoomDetails,
    FacilityType.BIO_ALLIED: EquipmentLabDetails,
    FacilityType.MANUFACTURING: EquipmentLabDetails,
    FacilityType.PROTOTYPING_LAB: EquipmentLabDetails,
    FacilityType.SAAS_LAB: EquipmentLabDetails,
    FacilityType.SOFTWARE: SoftwareDetails,
    FacilityType.RAW_OFFICE: RawSpaceDetails,
    FacilityType.RAW_LAB: RawSpaceDetails,
}


def validate_details(facility_type: FacilityType, details: Dict[str, Any]) -> Dict[str, Any]:
    """Validate a details payload against its facility type; returns the stored (JSON) form."""
    model = FACILITY_DETAILS_SCHEMAS[facility_type].model_validate(details)
    return model.model_dump(mode="json", by_alias=True)


class FacilityCreate(BaseModel):
    # "status" and other extras sent by clients are dropped; new facilities are always pending
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    facility_type: FacilityType
    details: Dict[str, Any]

    @model_validator(mode="after")
    def validate_details_for_type(self):
        try:
            self.details = validate_details(self.facility_type, self.details)
        except ValidationError as e:
            problems = "; ".join(
                f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()
            )
            raise ValueError(f"Invalid details for {self.facility_type.value}: {problems}")
        return self


class FacilityOut(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    service_provider_id: str
    facility_type: FacilityType
    status: str
    details: Dict[str, Any]
    created_at: datetime
    updated_at: datetime
