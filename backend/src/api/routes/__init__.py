from fastapi import APIRouter

from api.routes.catalog import router as catalog_router
from api.routes.estimates import router as estimates_router
from api.routes.templates import router as templates_router

api_router = APIRouter()
api_router.include_router(catalog_router)
api_router.include_router(estimates_router)
api_router.include_router(templates_router)
