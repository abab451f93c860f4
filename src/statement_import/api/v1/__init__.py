"""API version 1 routes."""

from fastapi import APIRouter

from statement_import.api.v1 import statements

router = APIRouter(prefix="/api/v1")

# Include routers
router.include_router(statements.router)
