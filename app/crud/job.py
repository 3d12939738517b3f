"""
CRUD operations for jobs.

Every operation is a single parameterized statement issued through
run_query; rows come back as plain dicts keyed by the API field names
(companyHandle, not company_handle).
"""

from typing import Any, Dict, List, Mapping, Optional, Union
from decimal import Decimal
from sqlalchemy.orm import Session

from app.core.database import placeholder, run_query
from app.core.exceptions import BadRequestError, NotFoundError
from app.core.sql import sql_for_partial_update

# Fields accepted by update(); companyHandle is fixed once a job is created
UPDATABLE_FIELDS = frozenset({"title", "salary", "equity"})

JS_TO_SQL = {"companyHandle": "company_handle"}

JOB_COLUMNS = 'id, title, salary, equity, company_handle AS "companyHandle"'


def format_equity(value: Any) -> Optional[str]:
    """
    Render equity as a plain decimal string ("0.01", "0.0000001") or None.

    str() would give "1e-07" for a float and "1E-7" for a Decimal.
    """
    if value is None:
        return None
    return format(Decimal(str(value)), "f")


def _format_equity(job: Dict[str, Any]) -> Dict[str, Any]:
    job["equity"] = format_equity(job.get("equity"))
    return job


def create(
    db: Session,
    title: str,
    salary: Optional[int],
    equity: Optional[Union[str, Decimal]],
    company_handle: str,
) -> Dict[str, Any]:
    """
    Insert a job and return it with its generated id.

    The company is not looked up first; an unknown company_handle fails on
    the foreign key and the store's IntegrityError propagates unchanged.

    Returns:
        {id, title, salary, equity, companyHandle}
    """
    rows = run_query(
        db,
        f"""INSERT INTO jobs (title, salary, equity, company_handle)
            VALUES (:p1, :p2, :p3, :p4)
            RETURNING {JOB_COLUMNS}""",
        [title, salary, format_equity(equity), company_handle],
    )
    db.commit()

    return _format_equity(rows[0])


def find_all(
    db: Session,
    title: Optional[str] = None,
    min_salary: Optional[int] = None,
    has_equity: Optional[bool] = None,
) -> List[Dict[str, Any]]:
    """
    List jobs ordered by title, optionally filtered.

    Args:
        db: Database session
        title: Case-insensitive substring of the title
        min_salary: Inclusive lower bound on salary
        has_equity: When True only jobs with equity > 0; False means no filter

    Raises:
        BadRequestError: If min_salary is negative
    """
    if min_salary is not None and min_salary < 0:
        raise BadRequestError("Min salary must be a positive number.")

    where_expressions = []
    query_values: List[Any] = []

    if title:
        query_values.append(f"%{title}%")
        where_expressions.append(f"lower(title) LIKE lower({placeholder(len(query_values))})")

    if min_salary is not None:
        query_values.append(min_salary)
        where_expressions.append(f"salary >= {placeholder(len(query_values))}")

    if has_equity is True:
        where_expressions.append("equity > 0")

    query = f"SELECT {JOB_COLUMNS} FROM jobs"
    if where_expressions:
        query += " WHERE " + " AND ".join(where_expressions)
    query += " ORDER BY title"

    return [_format_equity(job) for job in run_query(db, query, query_values)]


def get(db: Session, job_id: int) -> Dict[str, Any]:
    """
    Retrieve a job together with the company that posted it.

    Returns:
        {id, title, salary, equity, company: {handle, name, description, numEmployees, logoUrl}}

    Raises:
        NotFoundError: If no job has this id
    """
    rows = run_query(
        db,
        """SELECT j.id,
                  j.title,
                  j.salary,
                  j.equity,
                  c.handle,
                  c.name,
                  c.description,
                  c.num_employees AS "numEmployees",
                  c.logo_url AS "logoUrl"
           FROM jobs AS j
           JOIN companies AS c ON c.handle = j.company_handle
           WHERE j.id = :p1""",
        [job_id],
    )
    if not rows:
        raise NotFoundError(f"No job with id {job_id} found")

    row = rows[0]
    job = {key: row[key] for key in ("id", "title", "salary", "equity")}
    job["company"] = {
        key: row[key] for key in ("handle", "name", "description", "numEmployees", "logoUrl")
    }
    return _format_equity(job)


def update(db: Session, job_id: int, data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Partially update a job; only the supplied fields change.

    Args:
        db: Database session
        job_id: Job to update
        data: Any subset of {title, salary, equity}; None clears a nullable field

    Returns:
        {id, title, salary, equity, companyHandle}

    Raises:
        BadRequestError: If data is empty or names a field that cannot change
        NotFoundError: If no job has this id
    """
    set_cols, values = sql_for_partial_update(data, JS_TO_SQL, UPDATABLE_FIELDS)
    values = [format_equity(v) if k == "equity" else v for k, v in zip(data, values)]
    id_var_idx = placeholder(len(values) + 1)

    rows = run_query(
        db,
        f"""UPDATE jobs
            SET {set_cols}
            WHERE id = {id_var_idx}
            RETURNING {JOB_COLUMNS}""",
        [*values, job_id],
    )
    if not rows:
        raise NotFoundError(f"No job with id {job_id} found")
    db.commit()

    return _format_equity(rows[0])


def remove(db: Session, job_id: int) -> None:
    """
    Delete a job.

    Raises:
        NotFoundError: If no job has this id
    """
    rows = run_query(db, "DELETE FROM jobs WHERE id = :p1 RETURNING id", [job_id])
    if not rows:
        raise NotFoundError(f"No job with id {job_id} found")
    db.commit()
