"""Unit tests for condition comparison and query evaluation."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

import pytest

from docquery.documents.models import Document
from docquery.exceptions import ConditionEvaluationError, QueryErrorKind
from docquery.query.evaluator import evaluate_content_query
from docquery.query.parser import parse_content_query

REPORT = {"type": "report", "year": 2024, "approved": True}

DOC = {
    "title": "Quarterly Report",
    "year": 2021,
    "score": 7.5,
    "draft": False,
    "reviewer": None,
    "tags": ["backend", "urgent"],
    "numbers": [10, 20],
    "mixed": [1, "1", True, None, [1], {"a": 1}],
    "meta": {"author": {"name": "Ada"}},
}


NOW = datetime(2024, 1, 1, tzinfo=timezone.utc)


def make_document(content: Any) -> Document:
    return Document(
        id="doc", owner_id="alice", content=content, creation_date=NOW, last_modified_date=NOW
    )


def matches(content: Any, *tokens: str) -> bool:
    document = make_document(content)
    return evaluate_content_query(document, parse_content_query(list(tokens)))


def evaluation_error(content: Any, *tokens: str) -> ConditionEvaluationError:
    with pytest.raises(ConditionEvaluationError) as exc_info:
        matches(content, *tokens)
    return exc_info.value


# ---------------------------------------------------------------------------
# Whole-query behaviour
# ---------------------------------------------------------------------------


class TestEvaluateQuery:
    @pytest.mark.parametrize("content", [REPORT, "text", None, 5, [], {"x": object}])
    def test_empty_query_always_matches(self, content: Any) -> None:
        document = make_document(content)
        assert evaluate_content_query(document, None) is True
        assert evaluate_content_query(document, parse_content_query([])) is True

    def test_report_scenario(self) -> None:
        assert matches(REPORT, 'type equals "report"', "and", "approved equals true")
        assert not matches(REPORT, "year greaterthanorequals 2025")

    def test_json_text_content(self) -> None:
        assert matches('{"type": "invoice", "amount": 120}', "amount greaterthan 100")

    def test_left_fold_without_precedence(self) -> None:
        # (false and false) or true == true; false and (false or true) would be false
        assert matches(REPORT, "year equals 1", "and", "year equals 2", "or", "year equals 2024")

    def test_left_fold_and_after_or(self) -> None:
        # (true or x) and false == false
        assert not matches(
            REPORT, "year equals 2024", "or", "year equals 1", "and", "approved equals false"
        )

    def test_no_short_circuit_after_false_and(self) -> None:
        error = evaluation_error(REPORT, "year equals 1", "and", "missing equals 1")
        assert error.kind is QueryErrorKind.PATH

    def test_no_short_circuit_after_true_or(self) -> None:
        error = evaluation_error(REPORT, "year equals 2024", "or", "type greaterthan 1")
        assert error.kind is QueryErrorKind.TYPE_MISMATCH

    def test_error_names_condition(self) -> None:
        error = evaluation_error({"a": 1}, "b equals 1")
        assert "b equals 1" in str(error)
        assert "does not exist" in str(error)
        assert error.condition_text == "b equals 1"

    def test_deterministic(self) -> None:
        tokens = ['tags contains "urgent"', "and", "year lessthan 2030"]
        assert parse_content_query(tokens) == parse_content_query(tokens)
        assert matches(DOC, *tokens) == matches(DOC, *tokens)


# ---------------------------------------------------------------------------
# Plain text and root scalars
# ---------------------------------------------------------------------------


class TestPlainText:
    def test_contains(self) -> None:
        assert matches("Hello world", 'contains "world"')

    def test_equals_whole_text(self) -> None:
        assert matches("Hello world", 'equals "Hello world"')
        assert not matches("Hello world", 'equals "Hello"')

    def test_insensitive(self) -> None:
        assert matches("Hello world", 'startswith-insensitive "HELLO"')
        assert not matches("Hello world", 'startswith "HELLO"')

    def test_relational_operator_unsupported(self) -> None:
        error = evaluation_error("Hello world", "greaterthan 5")
        assert "plain text" in str(error)
        assert error.kind is QueryErrorKind.UNSUPPORTED

    def test_path_is_ignored(self) -> None:
        assert matches("Hello world", 'anything endswith "world"')

    def test_non_string_literal(self) -> None:
        assert matches("Hello world", "notequals 5")
        error = evaluation_error("Hello world", "equals 5")
        assert error.kind is QueryErrorKind.TYPE_MISMATCH

    def test_root_number(self) -> None:
        assert matches(1, "equals 1")
        assert matches("1", "equals 1")

    def test_root_scalar_rejects_relational(self) -> None:
        error = evaluation_error(1, "greaterthan 0")
        assert "plain text" in str(error)

    def test_root_json_string(self) -> None:
        assert matches('"hello"', 'equals "hello"')


# ---------------------------------------------------------------------------
# Typed targets
# ---------------------------------------------------------------------------


class TestStringTarget:
    def test_equals(self) -> None:
        assert matches(DOC, 'title equals "Quarterly Report"')
        assert not matches(DOC, 'title equals "quarterly report"')

    def test_equals_insensitive(self) -> None:
        assert matches(DOC, 'title equals-insensitive "quarterly report"')

    def test_substring_operators(self) -> None:
        assert matches(DOC, 'title contains "terly"')
        assert matches(DOC, 'title startswith "Quarter"')
        assert matches(DOC, 'title endswith "Report"')
        assert matches(DOC, 'title endswith-insensitive "REPORT"')

    def test_notequals(self) -> None:
        assert matches(DOC, 'title notequals "Other"')
        assert not matches(DOC, 'title notequals "Quarterly Report"')

    def test_relational_operator_is_error(self) -> None:
        error = evaluation_error(DOC, 'title greaterthan "A"')
        assert "cannot apply numeric operator" in str(error)

    def test_number_literal(self) -> None:
        assert matches(DOC, "title notequals 5")
        error = evaluation_error(DOC, "title equals 5")
        assert error.kind is QueryErrorKind.TYPE_MISMATCH

    def test_nested_path(self) -> None:
        assert matches(DOC, 'meta.author.name equals-insensitive "ada"')


class TestNumberTarget:
    def test_relational(self) -> None:
        assert matches(DOC, "year greaterthan 2000")
        assert matches(DOC, "year lessthanorequals 2021")
        assert not matches(DOC, "year lessthan 2021")
        assert matches(DOC, "score greaterthan 7")

    def test_int_and_float_compare_equal(self) -> None:
        assert matches(DOC, "year equals 2021.0")

    def test_string_literal(self) -> None:
        assert matches(DOC, 'year notequals "2021"')
        error = evaluation_error(DOC, 'year equals "2021"')
        assert "not a valid number" in str(error)

    def test_string_operator_is_error(self) -> None:
        error = evaluation_error(DOC, "year contains 2")
        assert "cannot apply string operator" in str(error)

    def test_insensitive_is_error(self) -> None:
        error = evaluation_error(DOC, "year equals-insensitive 2021")
        assert "case-insensitive" in str(error)

    def test_array_length(self) -> None:
        assert matches(DOC, "tags.# equals 2")

    def test_out_of_range_numbers(self) -> None:
        huge = "9" * 400
        assert matches('{"a": 1e400}', "a greaterthan 1")
        assert not matches('{"a": 1e400}', "a equals 1")
        assert matches('{"a": -1e400}', "a lessthan -1")
        assert not matches("1e400", "equals 1")
        assert matches({"a": int(huge)}, "a greaterthan 1")
        assert matches(f'{{"a": {huge}}}', "a greaterthan 1")
        assert matches('{"a": ' + "9" * 5000 + "}", "a greaterthan 1")


class TestBoolTarget:
    def test_equals(self) -> None:
        assert matches(DOC, "draft equals false")
        assert not matches(DOC, "draft equals true")
        assert matches(DOC, "draft notequals true")

    def test_non_bool_literal(self) -> None:
        assert matches(DOC, "draft notequals 0")
        error = evaluation_error(DOC, "draft equals 0")
        assert "not a valid boolean" in str(error)

    def test_bool_literals_are_case_sensitive(self) -> None:
        # "False" is a bare string, not a boolean
        error = evaluation_error(DOC, "draft equals False")
        assert error.kind is QueryErrorKind.TYPE_MISMATCH

    def test_other_operators(self) -> None:
        error = evaluation_error(DOC, "draft greaterthan 0")
        assert "invalid for boolean comparison" in str(error)
        error = evaluation_error(DOC, "draft contains true")
        assert "invalid for boolean comparison" in str(error)

    def test_insensitive_is_error(self) -> None:
        error = evaluation_error(DOC, "draft equals-insensitive true")
        assert "case-insensitive" in str(error)


class TestNullHandling:
    def test_null_target(self) -> None:
        assert matches(DOC, "reviewer equals null")
        assert not matches(DOC, "reviewer notequals null")
        assert not matches(DOC, 'reviewer equals "Ada"')
        assert matches(DOC, 'reviewer notequals "Ada"')
        assert not matches(DOC, 'reviewer contains "Ada"')

    def test_null_literal(self) -> None:
        assert not matches(DOC, "title equals null")
        assert matches(DOC, "title notequals null")
        assert not matches(DOC, "title contains null")

    def test_relational_with_null_is_error(self) -> None:
        error = evaluation_error(DOC, "reviewer greaterthan 1")
        assert "null" in str(error)
        error = evaluation_error(DOC, "year lessthan null")
        assert "null" in str(error)
        error = evaluation_error(DOC, "reviewer greaterthan null")
        assert "invalid for null comparison" in str(error)


class TestArrayTarget:
    def test_contains(self) -> None:
        assert matches(DOC, 'tags contains "urgent"')
        assert not matches(DOC, 'tags contains "URGENT"')
        assert matches(DOC, 'tags contains-insensitive "URGENT"')
        assert not matches(DOC, 'tags contains "urg"')

    def test_contains_never_crosses_types(self) -> None:
        assert not matches({"tags": [10]}, 'tags contains "10"')
        assert matches({"tags": [10]}, "tags contains 10")
        assert not matches({"tags": ["true"]}, "tags contains true")

    def test_contains_mixed_elements(self) -> None:
        assert matches(DOC, "mixed contains 1")
        assert matches(DOC, 'mixed contains "1"')
        assert matches(DOC, "mixed contains true")
        assert matches(DOC, "mixed contains null")
        assert not matches(DOC, "mixed contains false")

    def test_contains_null_without_null_element(self) -> None:
        assert not matches(DOC, "numbers contains null")

    def test_contains_out_of_range_number(self) -> None:
        assert not matches({"a": [int("9" * 400)]}, "a contains 1")
        assert matches('{"a": [1e400, 1]}', "a contains 1")

    def test_contains_insensitive_lowercases_like_strings(self) -> None:
        # lower-casing, not full case folding
        assert matches({"tags": ["Stra\u00dfe"]}, 'tags contains-insensitive "STRA\u00dfE"')
        assert not matches({"tags": ["stra\u00dfe"]}, 'tags contains-insensitive "STRASSE"')
        assert not matches({"tags": "stra\u00dfe"}, 'tags equals-insensitive "STRASSE"')
        assert matches({"tags": ["\u0130stanbul"]}, 'tags contains-insensitive "i\u0307stanbul"')

    def test_empty_array(self) -> None:
        assert not matches({"tags": []}, 'tags contains "x"')

    def test_index_element(self) -> None:
        assert matches(DOC, 'tags.0 equals "backend"')
        assert matches(DOC, "numbers.1 greaterthan 15")

    def test_direct_comparison_is_error(self) -> None:
        error = evaluation_error(DOC, 'tags equals "backend"')
        assert "cannot directly compare arrays/objects" in str(error)

    def test_other_operators_are_errors(self) -> None:
        error = evaluation_error(DOC, 'tags startswith "b"')
        assert "invalid for array comparison" in str(error)


class TestObjectTarget:
    def test_nested_object_comparison_is_error(self) -> None:
        error = evaluation_error(DOC, 'meta equals "x"')
        assert "cannot directly compare JSON objects" in str(error)

    def test_root_object_equality_degrades_to_false(self) -> None:
        assert not matches({}, 'equals "x"')
        assert not matches({}, 'notequals "x"')
        assert not matches(DOC, 'equals "x"')

    def test_root_object_other_operator_is_error(self) -> None:
        error = evaluation_error({}, 'contains "x"')
        assert "cannot directly compare JSON objects" in str(error)

    def test_missing_path(self) -> None:
        error = evaluation_error({"a": 1}, "b equals 1")
        assert error.kind is QueryErrorKind.PATH
