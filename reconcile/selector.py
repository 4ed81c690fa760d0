"""
Selector: picks the winner and the alternates from a ranked list.

Fallback chain for the winner:
  1. best region-matched listing with a price
  2. best listing with a price from anywhere
  3. best remaining listing (no price)
An empty ranked list raises NoQualifyingCandidate.
"""
from __future__ import annotations

from dataclasses import dataclass

from errors import NoQualifyingCandidate
from reconcile.scorer import ScoredCandidate


@dataclass
class Selection:
    best: ScoredCandidate
    alternates: list[ScoredCandidate]


def select(
    ranked: list[ScoredCandidate],
    max_alternates: int = 5,
    max_extra: int = 3,
) -> Selection:
    regional_priced = [c for c in ranked if c.region_ok and c.has_price]
    priced          = [c for c in ranked if c.has_price]
    remainder       = [c for c in ranked if not c.has_price]

    for pool in (regional_priced, priced, remainder):
        if pool:
            best = pool[0]
            break
    else:
        raise NoQualifyingCandidate("No listing survived the seller veto.")

    alternates = regional_priced[:max_alternates]
    seen = {id(c) for c in alternates}
    extra = 0
    for candidate in priced:
        if extra >= max_extra:
            break
        if id(candidate) not in seen:
            alternates.append(candidate)
            seen.add(id(candidate))
            extra += 1

    return Selection(best=best, alternates=alternates)
