"""
Tests for the partial-update clause builder.
"""

import pytest

from app.core.exceptions import BadRequestError
from app.core.sql import sql_for_partial_update


class TestSqlForPartialUpdate:
    """Tests for sql_for_partial_update"""

    def test_single_field(self):
        set_cols, values = sql_for_partial_update(
            {"field1": "newValue1"},
            {"field1": "field_1"},
            {"field1"},
        )

        assert set_cols == '"field_1"=:p1'
        assert values == ["newValue1"]

    def test_three_fields_keep_input_order(self):
        set_cols, values = sql_for_partial_update(
            {"field3": "v3", "field1": "v1", "field2": "v2"},
            {"field1": "field_1", "field2": "field_2", "field3": "field_3"},
            {"field1", "field2", "field3"},
        )

        assert set_cols == '"field_3"=:p1, "field_1"=:p2, "field_2"=:p3'
        assert values == ["v3", "v1", "v2"]

    def test_unmapped_field_uses_its_own_name(self):
        set_cols, values = sql_for_partial_update(
            {"firstName": "Aliya", "age": 32},
            {"firstName": "first_name"},
            {"firstName", "age"},
        )

        assert set_cols == '"first_name"=:p1, "age"=:p2'
        assert values == ["Aliya", 32]

    def test_none_values_are_kept(self):
        """Explicit None clears the column rather than being skipped"""
        set_cols, values = sql_for_partial_update(
            {"salary": None, "equity": None},
            {},
            {"salary", "equity"},
        )

        assert set_cols == '"salary"=:p1, "equity"=:p2'
        assert values == [None, None]

    @pytest.mark.parametrize("js_to_sql", [{}, {"field1": "field_1"}])
    def test_no_data(self, js_to_sql):
        with pytest.raises(BadRequestError, match="No data"):
            sql_for_partial_update({}, js_to_sql, {"field1"})

    def test_field_outside_allowed_set(self):
        with pytest.raises(BadRequestError, match="Invalid field: handle"):
            sql_for_partial_update(
                {"name": "New", "handle": "x"},
                {},
                {"name"},
            )

    def test_hostile_key_never_reaches_clause(self):
        with pytest.raises(BadRequestError):
            sql_for_partial_update(
                {'title"=1; DROP TABLE jobs; --': "x"},
                {},
                {"title"},
            )
