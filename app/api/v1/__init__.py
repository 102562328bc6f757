"""API routes."""

from fastapi import APIRouter

from app.api.v1 import job_data, users

api_router = APIRouter()

api_router.include_router(users.router, prefix="/users", tags=["Users"])
api_router.include_router(job_data.router, prefix="/jobdata", tags=["Job Applications"])
