"""
SQL helpers shared by the repositories.
"""

from typing import Any, AbstractSet, Dict, List, Mapping, Tuple

from app.core.database import placeholder
from app.core.exceptions import BadRequestError


def sql_for_partial_update(
    data_to_update: Mapping[str, Any],
    js_to_sql: Dict[str, str],
    allowed_fields: AbstractSet[str],
) -> Tuple[str, List[Any]]:
    """
    Build the SET clause and bind values for a partial UPDATE.

    Column names are interpolated into the statement, so only names from the
    closed `allowed_fields` set are accepted; values are always bound.

    Args:
        data_to_update: Field name -> new value, in the order they should appear
        js_to_sql: Field name -> column name, for fields stored under another name
        allowed_fields: Field names the entity accepts for updates

    Returns:
        (set_cols, values), e.g.
        ({"firstName": "Aliya", "age": 32}, {"firstName": "first_name"}) ->
        ('"first_name"=:p1, "age"=:p2', ["Aliya", 32])

    Raises:
        BadRequestError: If there is nothing to update or a field is not allowed
    """
    keys = list(data_to_update)
    if not keys:
        raise BadRequestError("No data")

    for key in keys:
        if key not in allowed_fields:
            raise BadRequestError(f"Invalid field: {key}")

    cols = [
        f'"{js_to_sql.get(key, key)}"={placeholder(idx)}'
        for idx, key in enumerate(keys, start=1)
    ]

    return ", ".join(cols), [data_to_update[key] for key in keys]
