from fastapi import APIRouter
from src.api.contracts.endpoints.contract_archive import router as contract_archive_router

api_router = APIRouter()

# Include all domain routers
api_router.include_router(contract_archive_router)
