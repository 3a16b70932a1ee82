"""Unit tests for operation models and the operation registry."""

import pytest
from pydantic import ValidationError

from tablespec.common.exceptions import ArityMismatchError
from tablespec.constants import QueryType
from tablespec.operations import (
    CreateTable,
    Delete,
    DropTable,
    Insert,
    ListTables,
    OperationBuilder,
    Select,
    TableInfo,
)
from tablespec.query_builder import get_query_builder
from tablespec.schema import Schema


class TestOperationModels:
    """Test normalisation and validation of operation fields."""

    def test_operation_type_is_fixed(self):
        assert QueryType(Select(table_name="t").operation_type) is QueryType.SELECT
        assert QueryType(ListTables().operation_type) is QueryType.LIST_TABLES

    def test_single_strings_become_lists(self):
        operation = Select(table_name="t", column_names="c", conditions="x > 1", order_by="c ASC")

        assert operation.column_names == ["c"]
        assert operation.conditions == ["x > 1"]
        assert operation.order_by == ["c ASC"]

    def test_empty_select_columns_mean_all(self):
        assert Select(table_name="t", column_names=[]).column_names == ["*"]

    def test_empty_insert_columns_mean_inferred(self):
        assert Insert(table_name="t", column_names=[]).column_names is None

    @pytest.mark.parametrize("field", ["conditions", "order_by", "column_names"])
    def test_blank_fragments_rejected(self, field):
        with pytest.raises(ValidationError, match="blank"):
            Select(table_name="t", **{field: ["ok", "  "]})

    def test_blank_delete_condition_rejected(self):
        with pytest.raises(ValidationError):
            Delete(table_name="t", conditions=[""])

    def test_empty_table_name_rejected(self):
        with pytest.raises(ValidationError):
            DropTable(table_name="")

    def test_create_table_requires_columns(self):
        with pytest.raises(ValidationError, match="at least one column"):
            CreateTable(table_name="t", table_schema=Schema())

    def test_insert_row_width_must_match_columns(self):
        with pytest.raises(ArityMismatchError):
            Insert(table_name="t", column_names=["a", "b"], rows=[(1, 2), (3,)])

    def test_insert_rows_must_share_width_without_columns(self):
        with pytest.raises(ArityMismatchError):
            Insert(table_name="t", rows=[(1, 2), (3, 4, 5)])

    def test_observability_attributes(self):
        operation = Delete(table_name="t", logging_context={"run": 7, "skip": None})

        assert operation.observability_attributes() == {
            "table": "t",
            "operation_type": "DELETE",
            "context_run": "7",
        }


class TestOperationBuilder:
    """Test the QueryType registry."""

    def test_create_operation(self):
        operation = OperationBuilder.create_operation(QueryType.SELECT, table_name="t", conditions=["a = 1"])

        assert isinstance(operation, Select)
        assert operation.conditions == ["a = 1"]

    def test_create_operation_from_string_type(self):
        assert isinstance(OperationBuilder.create_operation("TABLE_INFO", table_name="t"), TableInfo)

    def test_unknown_type(self):
        with pytest.raises(ValueError, match="Invalid operation_type"):
            OperationBuilder.create_operation("MERGE", table_name="t")

    def test_from_dict_requires_type(self):
        with pytest.raises(ValueError, match="operation_type is required"):
            OperationBuilder.create_operation_from_dict({"table_name": "t"})

    def test_insert_restored_from_dict(self):
        original = Insert(table_name="t", column_names=["a", "b"], rows=[(1, "x")], replace_on_conflict=True)

        data = original.to_dict()
        restored = OperationBuilder.create_operation_from_dict(data)

        assert data["operation_type"] == "INSERT"
        assert data["rows"] == [[1, "x"]]
        assert restored == original

    def test_create_table_restored_from_dict(self, people_schema):
        original = CreateTable(table_name="people", table_schema=people_schema, if_not_exists=True)

        restored = OperationBuilder.create_operation_from_dict(original.to_dict())

        builder = get_query_builder()
        assert builder.build_query(restored) == builder.build_query(original)
