"""QdrantFilter tests: construction, combination, rendering, introspection."""

import json

import pytest

from qdrant_http.domain.builders import Q
from qdrant_http.domain.field_types import FieldNameType, PayloadIndexedFieldType
from qdrant_http.domain.filters import QdrantFilter
from qdrant_http.domain.groups import MustCondition, ShouldCondition
from qdrant_http.errors import (
    QdrantFilterArgumentError,
    QdrantFilterModificationForbiddenError,
)

RAW = '{"must":[{"key":"city","match":{"value":"London"}}]}'


def _leaf(name: str = "city", value="London"):
    return Q.match_value(name, value)


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------


class TestFilterFactories:
    def test_single_leaf_is_wrapped_in_must(self):
        leaf = _leaf()
        f = QdrantFilter.from_condition(leaf)
        assert f.conditions == (MustCondition(leaf),)

    def test_group_is_not_wrapped(self):
        group = Q.should(_leaf())
        f = QdrantFilter.from_condition(group)
        assert f.conditions[0] is group

    def test_from_condition_rejects_none(self):
        with pytest.raises(QdrantFilterArgumentError):
            QdrantFilter.from_condition(None)

    def test_create_without_conditions_returns_empty(self):
        assert QdrantFilter.create() is QdrantFilter.EMPTY

    def test_create_wraps_each_leaf(self):
        a, b = _leaf("a", 1), Q.must_not(_leaf("b", 2))
        f = QdrantFilter.create(a, b)
        assert f.conditions == (MustCondition(a), b)

    def test_create_rejects_none_element(self):
        with pytest.raises(QdrantFilterArgumentError):
            QdrantFilter.create(_leaf(), None)

    def test_from_conditions_folds_in_order(self):
        a, b, c = _leaf("a", 1), _leaf("b", 2), Q.should(_leaf("c", 3))
        f = QdrantFilter.from_conditions([a, b, c])
        assert f.conditions == (MustCondition(a), MustCondition(b), c)

    @pytest.mark.parametrize("conditions", [None, []])
    def test_from_conditions_rejects_none_or_empty(self, conditions):
        with pytest.raises(QdrantFilterArgumentError):
            QdrantFilter.from_conditions(conditions)

    @pytest.mark.parametrize("raw", [None, "", "   ", 123, b"{}"])
    def test_from_raw_string_rejects_blank(self, raw):
        with pytest.raises(QdrantFilterArgumentError):
            QdrantFilter.from_raw_string(raw)

    def test_argument_error_is_value_error(self):
        with pytest.raises(ValueError):
            QdrantFilter.from_raw_string("")

    def test_is_empty(self):
        assert QdrantFilter.EMPTY.is_empty
        assert not QdrantFilter.from_condition(_leaf()).is_empty
        assert not QdrantFilter.from_raw_string(RAW).is_empty


# ---------------------------------------------------------------------------
# Combination
# ---------------------------------------------------------------------------


class TestFilterCombination:
    def test_combine_appends_and_returns_target(self):
        target = QdrantFilter.from_condition(_leaf("a", 1))
        source = QdrantFilter.from_condition(Q.should(_leaf("b", 2)))
        result = QdrantFilter.combine(target, source)
        assert result is target
        assert len(target.conditions) == 2

    def test_plus_operator_combines_filters(self):
        target = QdrantFilter.from_condition(_leaf("a", 1))
        result = target + QdrantFilter.from_condition(_leaf("b", 2))
        assert result is target
        assert len(result.conditions) == 2

    def test_plus_operator_appends_condition(self):
        f = QdrantFilter.from_condition(_leaf("a", 1))
        leaf = _leaf("b", 2)
        f += leaf
        assert f.conditions[-1] == MustCondition(leaf)

    def test_append_to_none_creates_filter(self):
        leaf = _leaf()
        f = QdrantFilter.append(None, leaf)
        assert f.conditions == (MustCondition(leaf),)

    def test_combine_with_none_target_fails(self):
        with pytest.raises(QdrantFilterArgumentError):
            QdrantFilter.combine(None, QdrantFilter.EMPTY)

    def test_combine_with_empty_source_is_noop(self):
        target = QdrantFilter.from_condition(_leaf())
        before = target.render()
        assert QdrantFilter.combine(target, QdrantFilter.EMPTY) is target
        assert QdrantFilter.combine(target, None) is target
        assert target.render() == before

    def test_empty_plus_empty_stays_empty(self):
        result = QdrantFilter.combine(QdrantFilter.EMPTY, QdrantFilter.EMPTY)
        assert result.is_empty

    def test_empty_singleton_is_never_mutated(self):
        source = QdrantFilter.from_condition(_leaf())
        result = QdrantFilter.EMPTY + source
        assert result is not QdrantFilter.EMPTY
        assert len(result.conditions) == 1
        assert QdrantFilter.EMPTY.is_empty

        appended = QdrantFilter.EMPTY + _leaf()
        assert appended is not QdrantFilter.EMPTY
        assert QdrantFilter.EMPTY.is_empty

        f = QdrantFilter.create()
        f += _leaf()
        assert QdrantFilter.EMPTY.is_empty


class TestRawFilterTerminality:
    """Raw filters can't be extended or merged, in either direction."""

    def test_raw_target_with_filter(self):
        raw = QdrantFilter.from_raw_string(RAW)
        with pytest.raises(QdrantFilterModificationForbiddenError) as exc_info:
            raw + QdrantFilter.from_condition(_leaf())
        assert exc_info.value.raw_filter_string == RAW

    def test_raw_target_with_empty_source(self):
        raw = QdrantFilter.from_raw_string(RAW)
        with pytest.raises(QdrantFilterModificationForbiddenError):
            QdrantFilter.combine(raw, QdrantFilter.EMPTY)

    def test_raw_source_into_filter(self):
        target = QdrantFilter.from_condition(_leaf())
        with pytest.raises(QdrantFilterModificationForbiddenError):
            target + QdrantFilter.from_raw_string(RAW)

    def test_raw_source_into_empty(self):
        with pytest.raises(QdrantFilterModificationForbiddenError):
            QdrantFilter.EMPTY + QdrantFilter.from_raw_string(RAW)

    def test_condition_into_raw(self):
        raw = QdrantFilter.from_raw_string(RAW)
        with pytest.raises(QdrantFilterModificationForbiddenError):
            raw + _leaf()


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------


class TestFilterRendering:
    def test_empty_filter_renders_empty_string(self):
        assert QdrantFilter.EMPTY.render() == ""
        assert str(QdrantFilter.EMPTY) == ""

    def test_empty_filter_request_value_is_null(self):
        assert QdrantFilter.EMPTY.to_json() == "null"
        assert QdrantFilter.EMPTY.to_dict() is None

    def test_raw_filter_renders_verbatim(self):
        raw = "  not even json  "
        f = QdrantFilter.from_raw_string(raw)
        assert f.render() == raw
        assert f.render(indent=True) == raw
        assert f.to_json() == raw

    def test_compact_rendering(self):
        f = QdrantFilter.from_condition(_leaf())
        assert f.render() == '{"must":[{"key":"city","match":{"value":"London"}}]}'
        assert f.to_json() == f.render()

    def test_str_is_indented(self):
        f = QdrantFilter.from_condition(_leaf())
        text = str(f)
        assert "\n" in text
        assert text == f.render(indent=True)
        assert json.loads(text) == json.loads(f.render())

    def test_must_and_should_side_by_side(self):
        leaf1, leaf2, leaf3 = _leaf("city", "London"), _leaf("age", 30), _leaf("age", 40)
        f = QdrantFilter.from_condition(MustCondition(leaf1)) + QdrantFilter.from_condition(
            ShouldCondition(leaf2, leaf3)
        )
        assert json.loads(f.render()) == {
            "must": [leaf1.to_json()],
            "should": [leaf2.to_json(), leaf3.to_json()],
        }

    def test_rendering_is_idempotent(self):
        f = QdrantFilter.create(_leaf(), Q.should(_leaf("a", 1), _leaf("b", 2)))
        first = f.render()
        assert f.render() == first
        assert f.render(indent=True) == f.render(indent=True)
        assert len(f.conditions) == 2

    def test_repeated_must_arrays_are_concatenated(self):
        a, b = _leaf("a", 1), _leaf("b", 2)
        f = QdrantFilter.create(a, b)
        assert f.to_dict() == {"must": [a.to_json(), b.to_json()]}

    def test_repeated_should_is_nested_under_must(self):
        a, b, c = _leaf("a", 1), _leaf("b", 2), _leaf("c", 3)
        f = QdrantFilter.create(Q.should(a, b), Q.should(c))
        assert f.to_dict() == {
            "should": [a.to_json(), b.to_json()],
            "must": [{"should": [c.to_json()]}],
        }

    def test_raw_to_dict_parses_json(self):
        assert QdrantFilter.from_raw_string(RAW).to_dict() == json.loads(RAW)


# ---------------------------------------------------------------------------
# Introspection
# ---------------------------------------------------------------------------


class TestPayloadFieldIntrospection:
    def test_empty_and_raw_report_nothing(self):
        assert QdrantFilter.EMPTY.get_payload_fields_with_types() == set()
        raw = QdrantFilter.from_raw_string("some raw string")
        assert raw.get_payload_fields_with_types() == set()

    def test_nested_leaves_collected_and_deduplicated(self):
        f = QdrantFilter.create(
            Q.must(Q.range("age", gte=18), Q.should(Q.match_value("city", "Berlin"))),
            Q.must_not(Q.match_value("age", 65)),
        )
        assert f.get_payload_fields_with_types() == {
            FieldNameType("age", PayloadIndexedFieldType.integer),
            FieldNameType("city", PayloadIndexedFieldType.keyword),
        }

    def test_conflicting_types_are_both_reported(self):
        f = QdrantFilter.create(Q.match_value("code", 7), Q.match_value("code", "7"))
        assert f.get_payload_fields_with_types() == {
            FieldNameType("code", PayloadIndexedFieldType.integer),
            FieldNameType("code", PayloadIndexedFieldType.keyword),
        }

    def test_vector_and_id_conditions_are_skipped(self):
        f = QdrantFilter.create(Q.has_vector("image"), Q.has_id(1, 2), Q.is_null("deleted_at"))
        assert f.get_payload_fields_with_types() == {FieldNameType("deleted_at", None)}

    def test_fields_inside_min_should_and_nested_filter(self):
        f = QdrantFilter.from_condition(
            Q.nested_filter(Q.min_should(1, Q.match_text("body", "x"), Q.geo_radius("loc", 0, 0, 5)))
        )
        assert f.get_payload_fields_with_types() == {
            FieldNameType("body", PayloadIndexedFieldType.text),
            FieldNameType("loc", PayloadIndexedFieldType.geo),
        }
