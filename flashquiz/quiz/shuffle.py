"""Adjacency-avoiding shuffle of the unvisited part of a question order."""

from __future__ import annotations

import logging
import random
from collections.abc import Sequence
from typing import List, NamedTuple, Optional, Tuple

from ..data.schemas import Question

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 50


class ShuffleResult(NamedTuple):
    order: Tuple[int, ...]
    attempts: int
    resolved: bool


def has_adjacent_duplicates(
    order: Sequence[int], questions: Sequence[Question], start: int = 0
) -> bool:
    """True if two content-equal questions sit next to each other at or after ``start``.

    The pair formed by ``order[start - 1]`` and ``order[start]`` is included.
    """
    for i in range(max(1, start), len(order)):
        if questions[order[i - 1]] == questions[order[i]]:
            return True
    return False


def _fill_pass(
    left: Optional[int],
    pool: List[int],
    questions: Sequence[Question],
    rng: random.Random,
) -> List[int]:
    remaining = list(pool)
    placed: List[int] = []
    for _ in range(len(pool)):
        candidates = list(range(len(remaining)))
        pick = None
        while candidates:
            k = candidates.pop(rng.randrange(len(candidates)))
            if left is None or questions[remaining[k]] != questions[left]:
                pick = k
                break
        if pick is None:
            # every remaining index repeats the left neighbour
            pick = rng.randrange(len(remaining))
        left = remaining.pop(pick)
        placed.append(left)
    return placed


def shuffle_suffix(
    order: Sequence[int],
    start: int,
    questions: Sequence[Question],
    rng: Optional[random.Random] = None,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
) -> ShuffleResult:
    """Randomly reorder ``order[start:]``, keeping ``order[:start]`` fixed.

    Each pass fills the suffix slots left to right by rejection sampling:
    a drawn candidate is discarded when its question equals the one already
    in the previous slot. A pass that still leaves two equal questions next
    to each other (including across the fixed boundary) is retried, up to
    ``max_attempts`` passes. When the ceiling is reached the last pass is
    returned as is; the result is then a valid permutation without the
    adjacency guarantee.
    """
    rng = rng or random.Random()
    prefix = list(order[:start])
    pool = list(order[start:])
    if len(pool) < 2:
        return ShuffleResult(tuple(order), 0, not has_adjacent_duplicates(order, questions, start))

    left = prefix[-1] if prefix else None
    candidate = list(order)
    for attempt in range(1, max(1, max_attempts) + 1):
        candidate = prefix + _fill_pass(left, pool, questions, rng)
        if not has_adjacent_duplicates(candidate, questions, start):
            logger.debug("Shuffled %d questions in %d pass(es)", len(pool), attempt)
            return ShuffleResult(tuple(candidate), attempt, True)

    logger.warning(
        "Could not separate duplicate questions after %d passes; keeping best-effort order",
        max_attempts,
    )
    return ShuffleResult(tuple(candidate), max(1, max_attempts), False)
