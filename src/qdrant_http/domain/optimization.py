"""Rewrites condition trees into equivalent, flatter forms."""

from __future__ import annotations

from .conditions import FilterCondition
from .groups import (
    FilterGroupConditionBase,
    MinimumShouldCondition,
    MustCondition,
    ShouldCondition,
)

# Associative groups: a child of the same kind can be spliced into its parent.
_SPLICEABLE = (MustCondition, ShouldCondition)


class ConditionOptimizationVisitor:
    """Depth-first visitor that simplifies groups into new nodes.

    Rules:
    1. must inside must -> children spliced into the parent
    2. should inside should -> children spliced into the parent
    3. min_should with min_count 1 -> should

    Leaves are visited but never rewritten. Input nodes are never modified.
    """

    def __init__(self) -> None:
        self.rewrites = 0

    def visit(self, condition: FilterCondition) -> FilterCondition:
        """Optimize ``condition`` and return the node that should replace it."""
        if not isinstance(condition, FilterGroupConditionBase):
            return condition

        children: list[FilterCondition] = []
        changed = False
        for original in condition.conditions:
            child = self.visit(original)
            if type(child) is type(condition) and isinstance(condition, _SPLICEABLE):
                children.extend(child.conditions)
                self.rewrites += 1
                changed = True
            else:
                children.append(child)
                changed = changed or child is not original
        if changed:
            condition = condition.model_copy(update={"conditions": children})

        if isinstance(condition, MinimumShouldCondition) and condition.min_count == 1:
            self.rewrites += 1
            return ShouldCondition(*condition.conditions)
        return condition
