from pydantic import ConfigDict, Field, field_validator
from typing import List, Optional

from app.schemas.base import CamelModel

# Decimal fraction between 0 and 1 inclusive, e.g. "0", "0.05", "1.0"
EQUITY_PATTERN = r"^(0(\.[0-9]+)?|\.[0-9]+|1(\.0+)?)$"


class JobCreateRequest(CamelModel):
    """Schema for creating a new job"""
    title: str = Field(..., min_length=1)
    salary: Optional[int] = Field(None, ge=0, strict=True)
    equity: Optional[str] = Field(None, pattern=EQUITY_PATTERN)
    company_handle: str = Field(..., min_length=1, max_length=25)


class JobUpdateRequest(CamelModel):
    """
    Schema for a partial job update.

    companyHandle is not a field here, so trying to move a job to another
    company is rejected like any other unknown field.
    """
    model_config = ConfigDict(extra="forbid", populate_by_name=False)

    title: Optional[str] = Field(None, min_length=1)
    salary: Optional[int] = Field(None, ge=0, strict=True)
    equity: Optional[str] = Field(None, pattern=EQUITY_PATTERN)

    @field_validator("title")
    @classmethod
    def title_not_null(cls, v: Optional[str]) -> str:
        if v is None:
            raise ValueError("title cannot be cleared")
        return v


class JobFilterParams(CamelModel):
    """Query parameters accepted by GET /jobs"""
    model_config = ConfigDict(extra="forbid", populate_by_name=False)

    title: Optional[str] = None
    min_salary: Optional[int] = None
    has_equity: Optional[bool] = None


class JobResponse(CamelModel):
    id: int
    title: str
    salary: Optional[int] = None
    equity: Optional[str] = None
    company_handle: str


class CompanyJobResponse(CamelModel):
    """Job as listed under its company"""
    id: int
    title: str
    salary: Optional[int] = None
    equity: Optional[str] = None


class JobCompanyResponse(CamelModel):
    """Company as nested under a job"""
    handle: str
    name: str
    description: str
    num_employees: Optional[int] = None
    logo_url: Optional[str] = None


class JobDetailResponse(CamelModel):
    id: int
    title: str
    salary: Optional[int] = None
    equity: Optional[str] = None
    company: JobCompanyResponse


class JobEnvelope(CamelModel):
    job: JobResponse


class JobDetailEnvelope(CamelModel):
    job: JobDetailResponse


class JobListEnvelope(CamelModel):
    jobs: List[JobResponse]


class JobDeletedResponse(CamelModel):
    deleted: int
