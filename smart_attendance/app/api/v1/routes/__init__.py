# smart_attendance/app/api/v1/routes/__init__.py
from fastapi import APIRouter
from .data_entry import router as data_entry_router

router = APIRouter()

router.include_router(data_entry_router, prefix="/data-entry", tags=["Data Entry"])
