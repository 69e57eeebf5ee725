# app/routes/facilities.py
from typing import List

from fastapi import APIRouter, Depends, status

from app.middleware.rbac import require_session
from app.models.session import Session
from app.schemas.facility import FacilityCreate, FacilityOut
from app.services.facility_service import FacilityService, get_facility_service
from facilitiease.serialize import serialize_doc

facility_router = APIRouter(prefix="/facilities", tags=["Facilities"])


def facility_out(doc: dict) -> FacilityOut:
    return FacilityOut(
        id=str(doc["_id"]),
        service_provider_id=str(doc["service_provider_id"]),
        facility_type=doc["facility_type"],
        status=doc["status"],
        details=serialize_doc(doc["details"]),
        created_at=doc["created_at"],
        updated_at=doc["updated_at"],
    )


@facility_router.post("", response_model=FacilityOut, status_code=status.HTTP_201_CREATED)
async def create_facility(
    data: FacilityCreate,
    session: Session = Depends(require_session),
    facilities: FacilityService = Depends(get_facility_service),
):
    doc = await facilities.create_facility(session, data)
    return facility_out(doc)


@facility_router.get("/mine", response_model=List[FacilityOut])
async def get_my_facilities(
    session: Session = Depends(require_session),
    facilities: FacilityService = Depends(get_facility_service),
):
    return [facility_out(doc) for doc in await facilities.list_facilities(session)]
