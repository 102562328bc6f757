"""Job application API."""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Path, Request, Response, status

from app.api.deps import get_job_data_repository
from app.schemas.job_data import JobDataCreate, JobDataResponse
from app.services.job_data_repository import JobDataRepository
from app.services.lookup import OBJECT_ID_PATTERN

router = APIRouter()


@router.get("/jobs/all", response_model=List[JobDataResponse])
async def get_all_job_applications(
    job_data: JobDataRepository = Depends(get_job_data_repository),
):
    """List job applications for all users."""
    return [JobDataResponse.from_model(item) for item in await job_data.get_all()]


@router.post("/jobs", response_model=JobDataResponse, status_code=status.HTTP_201_CREATED)
async def create_job_application(
    job_in: JobDataCreate,
    request: Request,
    response: Response,
    job_data: JobDataRepository = Depends(get_job_data_repository),
):
    """
    Create a job application owned by ``userId``.

    The new id is appended to the owner's jobDocumentIds. An unknown owner is
    a 400 and nothing is stored.
    """
    created = await job_data.create(job_in.user_id, job_in.to_model())
    response.headers["Location"] = str(
        request.url_for("get_job_application", job_id=created.id)
    )
    return JobDataResponse.from_model(created)


@router.get("/jobs/{job_id}", response_model=JobDataResponse)
async def get_job_application(
    job_id: str = Path(..., pattern=OBJECT_ID_PATTERN),
    job_data: JobDataRepository = Depends(get_job_data_repository),
):
    item = await job_data.get_by_id(job_id)
    if item is None:
        raise HTTPException(status_code=404, detail="Job application not found")
    return JobDataResponse.from_model(item)


@router.delete("/jobs/{job_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_job_application(
    job_id: str = Path(..., pattern=OBJECT_ID_PATTERN),
    job_data: JobDataRepository = Depends(get_job_data_repository),
):
    """Delete a job application and drop it from its owner's reference list."""
    if not await job_data.delete_by_id(job_id):
        raise HTTPException(status_code=404, detail="Job application not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
