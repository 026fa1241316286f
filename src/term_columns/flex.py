"""
Flex length resolution for terminal columns.

This module implements a simplified version of the CSS flexbox "resolve
flexible lengths" algorithm (https://www.w3.org/TR/css-flexbox-1/#layout-algorithm),
geared towards terminal output:

- only horizontal layout, so "width" and "size" mean the same thing
- only integer sizes, one unit per terminal column
- no infinite container size
- no flex-wrap: items never flow onto multiple lines
- items have no padding; gaps between items must be subtracted from the
  container size before resolving

The caller's items are never modified: every call works on private copies.
"""

import logging
from dataclasses import dataclass, replace
from typing import List, Sequence

logger = logging.getLogger(__name__)

# Basis sentinel: use the natural size of the item.
AUTO = -1


class NoSolutionError(RuntimeError):
    """Raised when the resolution loop fails to converge.

    The loop freezes at least one item per iteration, so this is never
    expected to happen; it signals a bug in the algorithm, not bad input.
    """


@dataclass
class Item:
    """Sizing parameters of a single flex item (a column).

    Attributes:
        basis: Initial size before growing or shrinking; AUTO (-1) to use size
        grow: Weight of the item's share of surplus space; 0 never grows
        shrink: Weight of the item's share of missing space; 0 never shrinks
        size: Natural size, e.g. the width of the content
        min: Minimum size; values below 1 are raised to 1
        max: Maximum size; 0 means unbounded
    """
    basis: int = 0
    grow: int = 0
    shrink: int = 0
    size: int = 0
    min: int = 0
    max: int = 0


@dataclass
class _FlexState:
    """Per-call working state of an item."""
    item: Item
    flex_base_size: int = 0
    hypo_main_size: int = 0
    frozen: bool = False
    target_main_size: int = 0

    def size_if_inflexible(self, use_grow: bool):
        if use_grow:
            inflexible = self.item.grow == 0 or self.flex_base_size > self.hypo_main_size
        else:
            inflexible = self.item.shrink == 0 or self.flex_base_size < self.hypo_main_size
        if inflexible:
            self.target_main_size = self.hypo_main_size
            self.frozen = True

    @property
    def current_size(self) -> int:
        return self.target_main_size if self.frozen else self.flex_base_size


def normalize(item: Item) -> Item:
    """Return a copy of ``item`` with every field brought into its legal range.

    Bad values are corrected, never rejected. Normalizing an already
    normalized item returns an equal item.
    """
    it = replace(item)
    if it.min < 1:
        it.min = 1
    if it.grow < 0:
        it.grow = 0
    if it.shrink < 0:
        it.shrink = 0
    if it.size < 1:
        it.size = 1
    if it.max < 0:
        it.max = 0
    if it.size < it.min:
        it.size = it.min
    if it.max != 0:
        if it.max < it.min:
            it.max = it.min
        if it.size > it.max:
            it.size = it.max
    return it


def _clamp(value: int, item: Item) -> int:
    if value < item.min:
        value = item.min
    if item.max != 0 and value > item.max:
        value = item.max
    return value


def _share(free_space: int, weight: int, total_weight: int) -> int:
    """``free_space * weight / total_weight``, truncated toward zero."""
    numerator = free_space * weight
    quotient = abs(numerator) // total_weight
    return quotient if numerator >= 0 else -quotient


def resolve_flex_lengths(items: Sequence[Item], container_size: int) -> List[int]:
    """Compute the width of each item so that they fill ``container_size``.

    Args:
        items: Flex items, in layout order
        container_size: Available width; negative values are treated as 0

    Returns:
        The resolved widths, one per item, in the same order. Each width
        respects its item's (normalized) min and max, so the sum may exceed
        or fall short of the container size when constraints require it.

    Raises:
        NoSolutionError: if the algorithm fails to converge (a bug)
    """
    container_size = max(container_size, 0)

    states = []
    sum_hypo_main_size = 0
    for raw in items:
        it = normalize(raw)
        state = _FlexState(it)
        # base size from the basis, or the content when auto
        state.flex_base_size = it.basis if it.basis >= 0 else it.size
        state.hypo_main_size = _clamp(state.flex_base_size, it)
        sum_hypo_main_size += state.hypo_main_size
        states.append(state)

    # Shortcut, not part of the algorithm: nothing to distribute.
    if sum_hypo_main_size == container_size:
        return [state.hypo_main_size for state in states]

    use_grow = sum_hypo_main_size < container_size
    logger.debug(
        "resolving %d items in %d columns (%s)",
        len(states), container_size, "growing" if use_grow else "shrinking"
    )

    # items that cannot move in this direction keep their hypothetical size
    for state in states:
        state.size_if_inflexible(use_grow)

    iterations = 0
    while True:
        iterations += 1
        if iterations > len(states) + 1:
            raise NoSolutionError(
                f"flex lengths did not converge after {len(states) + 1} iterations "
                f"(container size {container_size})"
            )

        if all(state.frozen for state in states):
            break

        remaining_free_space = container_size - sum(state.current_size for state in states)

        # Each share is taken from what is left of the pool so that the
        # shares add up to the free space exactly, despite truncation.
        if remaining_free_space != 0:
            unfrozen = [state for state in states if not state.frozen]
            if use_grow:
                weights = [state.item.grow for state in unfrozen]
            else:
                weights = [state.item.shrink * state.flex_base_size for state in unfrozen]
            sum_weights = sum(weights)
            for state, weight in zip(unfrozen, weights):
                # negative when shrinking
                space = _share(remaining_free_space, weight, sum_weights)
                state.target_main_size = state.flex_base_size + space
                remaining_free_space -= space
                sum_weights -= weight

        # violation = clamped - unclamped: > 0 for min violations, < 0 for max
        violations = [0] * len(states)
        total_violation = 0
        for i, state in enumerate(states):
            if state.frozen:
                continue
            clamped = _clamp(state.target_main_size, state.item)
            violations[i] = clamped - state.target_main_size
            state.target_main_size = clamped
            total_violation += violations[i]

        # freeze the violators of the dominant kind, or everything if they cancel out
        for state, violation in zip(states, violations):
            if (
                total_violation == 0
                or (total_violation > 0 and violation > 0)
                or (total_violation < 0 and violation < 0)
            ):
                state.frozen = True

    logger.debug("flex lengths resolved in %d iterations", iterations)
    return [state.target_main_size for state in states]
