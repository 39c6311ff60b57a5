"""Index of every use of each resolved symbol, in source order.

The index is built once from TypesInfo.uses before any detection runs and is
read-only afterwards. Positions are kept sorted so "is there a use after p"
questions can be answered with a binary search.
"""

import bisect
from collections import defaultdict
from collections.abc import Mapping
from types import MappingProxyType
from typing import TypeAlias

from shadowcheck.symbols import Symbol
from shadowcheck.syntax.nodes import Ident

UsageIndex: TypeAlias = Mapping[Symbol, tuple[int, ...]]
"""Symbol -> ascending positions of its use occurrences.

Example for:
    x := 0      // line 4, defining occurrence (not indexed)
    _ = x       // line 7
    x = 2       // line 8

    {<Symbol x>: (pos of x on line 7, pos of x on line 8)}
"""


def build_usage_index(uses: Mapping[Ident, Symbol | None]) -> UsageIndex:
    """Group use occurrences by the symbol they resolve to.

    Args:
        uses: Every use identifier mapped to its symbol; None entries are skipped

    Returns:
        An immutable mapping from symbol to sorted use positions
    """
    grouped: defaultdict[Symbol, set[int]] = defaultdict(set)
    for ident, symbol in uses.items():
        if symbol is not None:
            grouped[symbol].add(ident.pos)

    return MappingProxyType({symbol: tuple(sorted(positions)) for symbol, positions in grouped.items()})


def usages_of(index: UsageIndex, symbol: Symbol) -> tuple[int, ...]:
    """Return the use positions of symbol, or an empty tuple."""
    return index.get(symbol, ())


def usages_after(index: UsageIndex, symbol: Symbol, pos: int) -> tuple[int, ...]:
    """Return the use positions of symbol strictly after pos."""
    positions = usages_of(index, symbol)
    return positions[bisect.bisect_right(positions, pos) :]
