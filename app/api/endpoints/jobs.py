import logging
from fastapi import APIRouter, HTTPException, Depends, Request
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.deps import get_admin_user
from app.crud import job as job_crud
from app.schemas.job import (
    JobCreateRequest,
    JobUpdateRequest,
    JobFilterParams,
    JobEnvelope,
    JobDetailEnvelope,
    JobListEnvelope,
    JobDeletedResponse,
)

router = APIRouter(prefix="/jobs", tags=["Jobs"])
logger = logging.getLogger(__name__)


def get_job_filters(request: Request) -> JobFilterParams:
    """Validate the query string against JobFilterParams, rejecting unknown keys."""
    try:
        return JobFilterParams.model_validate(dict(request.query_params))
    except ValidationError as e:
        raise RequestValidationError(e.errors(include_url=False))


@router.post("/", status_code=201, response_model=JobEnvelope)
def create_job(
    request: JobCreateRequest,
    db: Session = Depends(get_db),
    admin_user: dict = Depends(get_admin_user)
):
    """
    Create a new job posting.

    Admin only. The company must already exist; an unknown companyHandle
    fails on the foreign key and is answered with 400.
    """
    try:
        new_job = job_crud.create(
            db,
            title=request.title,
            salary=request.salary,
            equity=request.equity,
            company_handle=request.company_handle,
        )
    except IntegrityError as e:
        db.rollback()
        logger.warning(f"Rejected job for company {request.company_handle}: {e.orig}")
        raise HTTPException(status_code=400, detail=f"No company: {request.company_handle}")

    logger.info(f"Created job {new_job['id']}: {new_job['title']} at {new_job['companyHandle']}")
    return {"job": new_job}


@router.get("/", response_model=JobListEnvelope)
def list_jobs(
    filters: JobFilterParams = Depends(get_job_filters),
    db: Session = Depends(get_db)
):
    """
    List jobs ordered by title.

    Query parameters (all optional):
        title: case-insensitive substring of the title
        minSalary: minimum salary, inclusive
        hasEquity: true to only list jobs offering equity
    """
    jobs = job_crud.find_all(
        db,
        title=filters.title,
        min_salary=filters.min_salary,
        has_equity=filters.has_equity,
    )

    return {"jobs": jobs}


@router.get("/{job_id}", response_model=JobDetailEnvelope)
def get_job(job_id: int, db: Session = Depends(get_db)):
    """Retrieve a job by ID, with the company that posted it."""
    job = job_crud.get(db, job_id)

    return {"job": job}


@router.patch("/{job_id}", response_model=JobEnvelope)
def update_job(
    job_id: int,
    request: JobUpdateRequest,
    db: Session = Depends(get_db),
    admin_user: dict = Depends(get_admin_user)
):
    """
    Partially update a job. Admin only.

    Accepts any of title, salary and equity; the company cannot change.
    """
    job = job_crud.update(db, job_id, request.model_dump(by_alias=True, exclude_unset=True))

    logger.info(f"Updated job {job_id}")
    return {"job": job}


@router.delete("/{job_id}", response_model=JobDeletedResponse)
def delete_job(
    job_id: int,
    db: Session = Depends(get_db),
    admin_user: dict = Depends(get_admin_user)
):
    """Delete a job by ID. Admin only."""
    job_crud.remove(db, job_id)

    logger.info(f"Deleted job {job_id}")
    return {"deleted": job_id}
