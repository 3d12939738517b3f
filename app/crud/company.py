"""
CRUD operations for companies.
"""

from typing import Any, Dict, List, Mapping, Optional
from sqlalchemy.orm import Session

from app.core.database import placeholder, run_query
from app.core.exceptions import BadRequestError, NotFoundError
from app.core.sql import sql_for_partial_update
from app.crud.job import format_equity

UPDATABLE_FIELDS = frozenset({"name", "description", "numEmployees", "logoUrl"})

JS_TO_SQL = {
    "numEmployees": "num_employees",
    "logoUrl": "logo_url",
}

COMPANY_COLUMNS = 'handle, name, description, num_employees AS "numEmployees", logo_url AS "logoUrl"'


def create(
    db: Session,
    handle: str,
    name: str,
    description: str,
    num_employees: Optional[int] = None,
    logo_url: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Create a company.

    Returns:
        {handle, name, description, numEmployees, logoUrl}

    Raises:
        BadRequestError: If a company with this handle or name already exists
    """
    duplicate = run_query(
        db,
        "SELECT handle FROM companies WHERE handle = :p1 OR name = :p2",
        [handle, name],
    )
    if duplicate:
        raise BadRequestError(f"Duplicate company: {handle}")

    rows = run_query(
        db,
        f"""INSERT INTO companies (handle, name, description, num_employees, logo_url)
            VALUES (:p1, :p2, :p3, :p4, :p5)
            RETURNING {COMPANY_COLUMNS}""",
        [handle, name, description, num_employees, logo_url],
    )
    db.commit()

    return rows[0]


def find_all(
    db: Session,
    name_like: Optional[str] = None,
    min_employees: Optional[int] = None,
    max_employees: Optional[int] = None,
) -> List[Dict[str, Any]]:
    """
    List companies ordered by name, optionally filtered by name and size.

    Raises:
        BadRequestError: If min_employees is greater than max_employees
    """
    if min_employees is not None and max_employees is not None and min_employees > max_employees:
        raise BadRequestError("Min employees cannot be greater than max")

    where_expressions = []
    query_values: List[Any] = []

    if name_like:
        query_values.append(f"%{name_like}%")
        where_expressions.append(f"lower(name) LIKE lower({placeholder(len(query_values))})")

    if min_employees is not None:
        query_values.append(min_employees)
        where_expressions.append(f"num_employees >= {placeholder(len(query_values))}")

    if max_employees is not None:
        query_values.append(max_employees)
        where_expressions.append(f"num_employees <= {placeholder(len(query_values))}")

    query = f"SELECT {COMPANY_COLUMNS} FROM companies"
    if where_expressions:
        query += " WHERE " + " AND ".join(where_expressions)
    query += " ORDER BY name"

    return run_query(db, query, query_values)


def get(db: Session, handle: str) -> Dict[str, Any]:
    """
    Retrieve a company with its jobs.

    Returns:
        {handle, name, description, numEmployees, logoUrl, jobs: [{id, title, salary, equity}, ...]}

    Raises:
        NotFoundError: If the handle is unknown
    """
    rows = run_query(db, f"SELECT {COMPANY_COLUMNS} FROM companies WHERE handle = :p1", [handle])
    if not rows:
        raise NotFoundError(f"No company: {handle}")

    company = rows[0]
    jobs = run_query(
        db,
        """SELECT id, title, salary, equity
           FROM jobs
           WHERE company_handle = :p1
           ORDER BY id""",
        [handle],
    )
    for job in jobs:
        job["equity"] = format_equity(job["equity"])
    company["jobs"] = jobs

    return company


def update(db: Session, handle: str, data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Partially update a company.

    Data can include: {name, description, numEmployees, logoUrl}

    Raises:
        BadRequestError: If data is empty or names a field that cannot change,
            or renames the company to a name already taken
        NotFoundError: If the handle is unknown
    """
    set_cols, values = sql_for_partial_update(data, JS_TO_SQL, UPDATABLE_FIELDS)

    if "name" in data:
        taken = run_query(
            db,
            "SELECT handle FROM companies WHERE name = :p1 AND handle <> :p2",
            [data["name"], handle],
        )
        if taken:
            raise BadRequestError(f"Duplicate company name: {data['name']}")

    handle_var_idx = placeholder(len(values) + 1)

    rows = run_query(
        db,
        f"""UPDATE companies
            SET {set_cols}
            WHERE handle = {handle_var_idx}
            RETURNING {COMPANY_COLUMNS}""",
        [*values, handle],
    )
    if not rows:
        raise NotFoundError(f"No company: {handle}")
    db.commit()

    return rows[0]


def remove(db: Session, handle: str) -> None:
    """
    Delete a company and, through the foreign key, its jobs.

    Raises:
        NotFoundError: If the handle is unknown
    """
    rows = run_query(db, "DELETE FROM companies WHERE handle = :p1 RETURNING handle", [handle])
    if not rows:
        raise NotFoundError(f"No company: {handle}")
    db.commit()
