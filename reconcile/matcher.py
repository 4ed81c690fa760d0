"""
Title matcher: how well does a listing title correspond to the canonical name?

Tokens of 2 characters or fewer are ignored. A canonical token matches when it
is a substring of some title token or vice versa. Fewer than 2 matches scores
0, which keeps look-alike products ("Nirvana 525" for "Nirvana Ion") out.
"""
from __future__ import annotations

_EDGE_PUNCT = ".,:;!?()[]{}\"'“”‘’*|/"

EXACT = 100
BANDS = (
    (1.0, 95),
    (0.75, 85),
    (0.5, 70),
)


def _normalise(text: str) -> str:
    return " ".join(text.lower().split())


def _tokens(text: str) -> list[str]:
    out = []
    for raw in _normalise(text).split(" "):
        token = raw.strip(_EDGE_PUNCT)
        if len(token) > 2:
            out.append(token)
    return out


def match_score(canonical_name: str, title: str) -> int:
    if not canonical_name or not title:
        return 0
    if _normalise(canonical_name) == _normalise(title):
        return EXACT

    wanted = _tokens(canonical_name)
    have = set(_tokens(title))
    matched = sum(1 for w in wanted if any(w in h or h in w for h in have))
    if matched < 2:
        return 0

    ratio = matched / len(wanted)
    for threshold, score in BANDS:
        if ratio >= threshold:
            return score
    return 0
