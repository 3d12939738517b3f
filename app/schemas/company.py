from pydantic import ConfigDict, Field, field_validator
from typing import List, Optional

from app.schemas.base import CamelModel
from app.schemas.job import CompanyJobResponse


class CompanyCreateRequest(CamelModel):
    """Schema for creating a new company"""
    handle: str = Field(..., min_length=1, max_length=25, pattern=r"^[a-z0-9-]+$")
    name: str = Field(..., min_length=1)
    description: str
    num_employees: Optional[int] = Field(None, ge=0, strict=True)
    logo_url: Optional[str] = None


class CompanyUpdateRequest(CamelModel):
    """Schema for a partial company update; the handle cannot change"""
    model_config = ConfigDict(extra="forbid", populate_by_name=False)

    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    num_employees: Optional[int] = Field(None, ge=0, strict=True)
    logo_url: Optional[str] = None

    @field_validator("name", "description")
    @classmethod
    def not_null(cls, v: Optional[str]) -> str:
        if v is None:
            raise ValueError("field cannot be cleared")
        return v


class CompanyFilterParams(CamelModel):
    """Query parameters accepted by GET /companies"""
    model_config = ConfigDict(extra="forbid", populate_by_name=False)

    name_like: Optional[str] = None
    min_employees: Optional[int] = Field(None, ge=0)
    max_employees: Optional[int] = Field(None, ge=0)


class CompanyResponse(CamelModel):
    handle: str
    name: str
    description: str
    num_employees: Optional[int] = None
    logo_url: Optional[str] = None


class CompanyDetailResponse(CompanyResponse):
    jobs: List[CompanyJobResponse]


class CompanyEnvelope(CamelModel):
    company: CompanyResponse


class CompanyDetailEnvelope(CamelModel):
    company: CompanyDetailResponse


class CompanyListEnvelope(CamelModel):
    companies: List[CompanyResponse]


class CompanyDeletedResponse(CamelModel):
    deleted: str
