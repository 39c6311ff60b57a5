"""Liveness heuristics that suppress shadow reports which look deliberate.

These are tuning rules, not dataflow analysis. Each is a standalone predicate
so it can be tested on its own:

    all_inner_mutations_used
        Every write to the inner variable after its declaration is followed by a
        read outside the writing statement. The inner variable is actively used,
        so the shadowing is presumed intentional.

    outer_used_after_inner
        The outer variable is read again after the inner declaration, on a
        different line. If it never is, the outer variable is effectively dead
        and shadowing it is harmless.
"""

import bisect
from collections.abc import Callable, Iterable, Sequence

from shadowcheck.models import MutationEvent


def has_unused_mutation(event: MutationEvent, decl_pos: int, usages: Sequence[int]) -> bool:
    """Report whether a write is never read afterwards.

    A write counts as read if some use of the same symbol comes after both the
    written identifier and the declaration and lies outside the writing
    statement (so `x = x + 1` does not read its own result).

    Args:
        event: The write under test
        decl_pos: Position of the inner declaration
        usages: Ascending use positions of the written symbol

    Returns:
        True if the write happens after the declaration and no later use reads it
    """
    if event.pos <= decl_pos:
        return False

    start = bisect.bisect_right(usages, max(event.pos, decl_pos))
    return all(event.encloses(use) for use in usages[start:])


def all_inner_mutations_used(
    mutations: Iterable[MutationEvent], decl_pos: int, usages: Sequence[int]
) -> bool:
    """Report whether every post-declaration write to the inner variable is read later.

    Holds trivially when the inner variable is never written after its declaration.
    """
    return not any(has_unused_mutation(event, decl_pos, usages) for event in mutations)


def outer_used_after_inner(
    outer_usages: Sequence[int], inner_decl_pos: int, line_of: Callable[[int], int]
) -> bool:
    """Report whether the outer variable is read after the inner declaration.

    Uses on the same line as the inner declaration do not count, which keeps
    `x := f(x)` style code quiet.

    Args:
        outer_usages: Ascending use positions of the outer symbol
        inner_decl_pos: Position of the inner declaration
        line_of: Maps a position to its line number
    """
    decl_line = line_of(inner_decl_pos)
    start = bisect.bisect_right(outer_usages, inner_decl_pos)
    return any(line_of(use) != decl_line for use in outer_usages[start:])
