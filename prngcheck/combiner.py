"""MacLaren-Marsaglia combination of two generator streams.

The first generator fills a lookup table of ``offset`` values plus a reserve
of ``count`` further draws.  Each value of the second generator selects a slot
in the table; the slot's value is emitted and immediately replaced with the
next unused draw from the reserve.  Routing the primary stream through a
table indexed by an independent stream breaks up the short-range serial
correlation of a single congruential generator.
"""

from __future__ import annotations

from typing import List, Tuple

from .errors import InvalidParameterError
from .generators.base import PseudoRandomGenerator, generate


def combine(
    first: PseudoRandomGenerator,
    second: PseudoRandomGenerator,
    offset: int,
    count: int,
) -> Tuple[float, ...]:
    """Return ``count`` values of ``first`` shuffled by ``second``.

    ``offset`` is the lookup table size.  ``first`` is drawn
    ``count + offset`` times and ``second`` ``count`` times.
    """

    if offset <= 0:
        raise InvalidParameterError(f"Lookup table size must be positive, got {offset}.")
    if count <= 0:
        raise InvalidParameterError(f"Sequence length must be positive, got {count}.")

    first_sequence = generate(first, count + offset)
    second_sequence = generate(second, count)

    lookup_table: List[float] = list(first_sequence[:offset])
    result: List[float] = []
    for idx, selector in enumerate(second_sequence):
        if not 0.0 <= selector < 1.0:
            raise InvalidParameterError(
                f"Second generator produced {selector!r} at position {idx}; "
                "values must lie in [0, 1)."
            )
        # Rounding of selector * offset can reach offset for selectors close to 1.
        index = min(int(selector * offset), offset - 1)
        result.append(lookup_table[index])
        lookup_table[index] = first_sequence[offset + idx]
    return tuple(result)


__all__ = ["combine"]
