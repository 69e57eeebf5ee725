# app/crud/facility_crud.py
from typing import Any, List

from pymongo import DESCENDING

from app.models.facility import Facility
from facilitiease.db.database import FACILITIES


class FacilityRepository:
    def __init__(self, database):
        self.facilities = database[FACILITIES]

    async def create_facility(self, facility: Facility) -> dict:
        doc = facility.to_document()
        await self.facilities.insert_one(doc)
        return doc

    async def list_for_provider(self, service_provider_id: Any, limit: int = 100) -> List[dict]:
        cursor = self.facilities.find({"service_provider_id": service_provider_id}).sort("created_at", DESCENDING)
        return await cursor.to_list(length=limit)
