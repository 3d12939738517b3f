import logging
from fastapi import APIRouter, Depends, Request
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.deps import get_admin_user
from app.crud import company as company_crud
from app.schemas.company import (
    CompanyCreateRequest,
    CompanyUpdateRequest,
    CompanyFilterParams,
    CompanyEnvelope,
    CompanyDetailEnvelope,
    CompanyListEnvelope,
    CompanyDeletedResponse,
)

router = APIRouter(prefix="/companies", tags=["Companies"])
logger = logging.getLogger(__name__)


def get_company_filters(request: Request) -> CompanyFilterParams:
    """Validate the query string against CompanyFilterParams, rejecting unknown keys."""
    try:
        return CompanyFilterParams.model_validate(dict(request.query_params))
    except ValidationError as e:
        raise RequestValidationError(e.errors(include_url=False))


@router.post("/", status_code=201, response_model=CompanyEnvelope)
def create_company(
    request: CompanyCreateRequest,
    db: Session = Depends(get_db),
    admin_user: dict = Depends(get_admin_user)
):
    """Create a company. Admin only."""
    company = company_crud.create(
        db,
        handle=request.handle,
        name=request.name,
        description=request.description,
        num_employees=request.num_employees,
        logo_url=request.logo_url,
    )

    logger.info(f"Created company {company['handle']}")
    return {"company": company}


@router.get("/", response_model=CompanyListEnvelope)
def list_companies(
    filters: CompanyFilterParams = Depends(get_company_filters),
    db: Session = Depends(get_db)
):
    """
    List companies ordered by name.

    Query parameters (all optional):
        nameLike: case-insensitive substring of the name
        minEmployees / maxEmployees: inclusive bounds on company size
    """
    companies = company_crud.find_all(
        db,
        name_like=filters.name_like,
        min_employees=filters.min_employees,
        max_employees=filters.max_employees,
    )

    return {"companies": companies}


@router.get("/{handle}", response_model=CompanyDetailEnvelope)
def get_company(handle: str, db: Session = Depends(get_db)):
    """Retrieve a company with its jobs."""
    company = company_crud.get(db, handle)

    return {"company": company}


@router.patch("/{handle}", response_model=CompanyEnvelope)
def update_company(
    handle: str,
    request: CompanyUpdateRequest,
    db: Session = Depends(get_db),
    admin_user: dict = Depends(get_admin_user)
):
    """Partially update a company. Admin only."""
    company = company_crud.update(db, handle, request.model_dump(by_alias=True, exclude_unset=True))

    logger.info(f"Updated company {handle}")
    return {"company": company}


@router.delete("/{handle}", response_model=CompanyDeletedResponse)
def delete_company(
    handle: str,
    db: Session = Depends(get_db),
    admin_user: dict = Depends(get_admin_user)
):
    """Delete a company and its jobs. Admin only."""
    company_crud.remove(db, handle)

    logger.info(f"Deleted company {handle}")
    return {"deleted": handle}
