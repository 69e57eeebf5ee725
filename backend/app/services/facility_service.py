# app/services/facility_service.py
import logging
from typing import List

from fastapi import Depends

from app.crud.account_crud import AccountRepository
from app.crud.facility_crud import FacilityRepository
from app.models.facility import Facility
from app.models.session import Session
from app.models.user import Role
from app.schemas.facility import FacilityCreate
from facilitiease.core.exceptions import NotFound
from facilitiease.db.database import get_database

logger = logging.getLogger(__name__)


class FacilityService:
    def __init__(self, accounts: AccountRepository, facilities: FacilityRepository):
        self.accounts = accounts
        self.facilities = facilities

    async def _provider_profile(self, session: Session) -> dict:
        # Ownership always comes from the session, never from the request body
        profile = await self.accounts.get_role_profile(session.user_id, Role.SERVICE_PROVIDER)
        if profile is None:
            raise NotFound("Service provider not found")
        return profile

    async def create_facility(self, session: Session, data: FacilityCreate) -> dict:
        provider = await self._provider_profile(session)
        facility = Facility(
            service_provider_id=provider["_id"],
            facility_type=data.facility_type.value,
            details=data.details,
        )
        doc = await self.facilities.create_facility(facility)
        logger.info("Facility %s (%s) submitted by provider %s", doc["_id"], doc["facility_type"], provider["_id"])
        return doc

    async def list_facilities(self, session: Session) -> List[dict]:
        provider = await self._provider_profile(session)
        return await self.facilities.list_for_provider(provider["_id"])


def get_facility_service(database=Depends(get_database)) -> FacilityService:
    return FacilityService(AccountRepository(database), FacilityRepository(database))
