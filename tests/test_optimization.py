"""ConditionOptimizationVisitor tests: rewrites must not change meaning."""

from qdrant_http.domain.builders import Q
from qdrant_http.domain.filters import QdrantFilter
from qdrant_http.domain.groups import MustCondition, MustNotCondition, ShouldCondition
from qdrant_http.domain.optimization import ConditionOptimizationVisitor


def _leaves(n: int):
    return [Q.match_value(f"f{i}", i) for i in range(n)]


class TestOptimizationRewrites:
    def test_single_nested_must_is_flattened(self):
        a, b = _leaves(2)
        visitor = ConditionOptimizationVisitor()
        result = visitor.visit(Q.must(Q.must(a, b)))
        assert result == MustCondition(a, b)
        assert visitor.rewrites == 1

    def test_nested_should_is_spliced_in_order(self):
        a, b, c = _leaves(3)
        result = ConditionOptimizationVisitor().visit(Q.should(a, Q.should(b, c)))
        assert result == ShouldCondition(a, b, c)

    def test_deep_nesting_collapses(self):
        a, b = _leaves(2)
        result = ConditionOptimizationVisitor().visit(Q.must(Q.must(Q.must(a)), b))
        assert result == MustCondition(a, b)

    def test_min_should_of_one_becomes_should(self):
        a, b = _leaves(2)
        result = ConditionOptimizationVisitor().visit(Q.min_should(1, a, b))
        assert result == ShouldCondition(a, b)

    def test_min_should_above_one_is_kept(self):
        a, b = _leaves(2)
        group = Q.min_should(2, a, b)
        assert ConditionOptimizationVisitor().visit(group) is group

    def test_different_group_kinds_are_not_merged(self):
        a, b = _leaves(2)
        result = ConditionOptimizationVisitor().visit(Q.must(a, Q.should(b)))
        assert result == MustCondition(a, ShouldCondition(b))

    def test_must_not_is_not_spliced(self):
        a, b = _leaves(2)
        result = ConditionOptimizationVisitor().visit(Q.must_not(a, Q.must_not(b)))
        assert result == MustNotCondition(a, MustNotCondition(b))

    def test_leaves_are_returned_unchanged(self):
        (a,) = _leaves(1)
        visitor = ConditionOptimizationVisitor()
        assert visitor.visit(a) is a
        assert visitor.rewrites == 0


class TestFilterOptimize:
    def test_optimize_is_explicit(self):
        a, b = _leaves(2)
        f = QdrantFilter.from_condition(Q.must(Q.must(a, b)))
        unoptimized = f.render()
        assert unoptimized == f.render()
        assert f.optimize() is f
        assert f.to_dict() == {"must": [a.to_json(), b.to_json()]}
        assert f.render() != unoptimized

    def test_optimize_on_raw_and_empty_is_noop(self):
        raw = QdrantFilter.from_raw_string('{"must":[]}')
        assert raw.optimize().render() == '{"must":[]}'
        assert QdrantFilter.EMPTY.optimize().is_empty

    def test_unoptimized_filter_still_renders_valid_object(self):
        a, b = _leaves(2)
        f = QdrantFilter.from_condition(Q.must(Q.must(a), Q.must(b)))
        assert f.to_dict() == {"must": [{"must": [a.to_json()]}, {"must": [b.to_json()]}]}

    def test_optimize_leaves_shared_groups_untouched(self):
        a, b, c = _leaves(3)
        shared = Q.must(Q.must(a), Q.min_should(1, b))
        f1 = QdrantFilter.from_condition(shared)
        f2 = QdrantFilter.from_condition(c) + QdrantFilter.from_condition(shared)
        before = f2.render()

        f1.optimize()

        assert f1.to_dict() == {"must": [a.to_json(), {"should": [b.to_json()]}]}
        assert f2.render() == before
        assert shared == MustCondition(MustCondition(a), Q.min_should(1, b))

    def test_visitor_does_not_modify_input(self):
        a, b = _leaves(2)
        inner = Q.should(b)
        group = Q.should(a, inner)
        result = ConditionOptimizationVisitor().visit(group)
        assert result == ShouldCondition(a, b)
        assert group.conditions == [a, inner]
