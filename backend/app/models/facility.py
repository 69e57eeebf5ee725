# app/models/facility.py
from datetime import datetime
from typing import Any, Dict

from bson import ObjectId
from pydantic import BaseModel, ConfigDict, Field

from app.models.user import utcnow

PENDING = "pending"


class Facility(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True, populate_by_name=True)

    id: ObjectId = Field(default_factory=ObjectId, alias="_id")
    service_provider_id: ObjectId
    facility_type: str
    status: str = PENDING  # approval workflow lives elsewhere
    details: Dict[str, Any]
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    def to_document(self) -> dict:
        return self.model_dump(by_alias=True)
