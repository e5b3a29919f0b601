"""
Top-level API router.
Combines all sub-routers into a single router.
"""

from fastapi import APIRouter

from receipt_engine.api.health import router as health_router
from receipt_engine.api.receipts import router as receipts_router

api_router = APIRouter()

api_router.include_router(health_router)
api_router.include_router(receipts_router)
