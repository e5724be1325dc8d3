from __future__ import annotations

from dataclasses import dataclass, field

DEFAULT_RANK_LIMIT = 50


@dataclass(frozen=True)
class RankedItem:
    """One fuzzy match: the candidate, its score, matched positions and input index."""

    item: str
    score: int
    positions: tuple[int, ...] = field(default_factory=tuple)
    index: int = 0


def _is_word_char(ch: str) -> bool:
    return ch == "_" or (ch.isascii() and ch.isalnum())


def _is_word_boundary(text: str, idx: int) -> bool:
    if idx == 0:
        return True
    return not _is_word_char(text[idx - 1]) and _is_word_char(text[idx])


def fuzzy_score(query: str, candidate: str, index: int = 0) -> RankedItem | None:
    """Score ``candidate`` against ``query`` as an ordered subsequence.

    Returns ``None`` when the query characters do not all appear in order.
    An empty query matches everything with score 0.
    """
    if not query:
        return RankedItem(item=candidate, score=0, index=index)

    # Folded per character: str.lower() may lengthen a string ("İ"), and
    # positions must index into ``candidate`` itself.
    query_chars = [ch.lower() for ch in query]

    positions: list[int] = []
    qi = 0
    for ci, ch in enumerate(candidate):
        if qi >= len(query_chars):
            break
        if ch.lower() == query_chars[qi]:
            positions.append(ci)
            qi += 1
    if qi != len(query_chars):
        return None

    score = 0
    for rank, pos in enumerate(positions):
        score += 10
        if rank > 0:
            gap = pos - positions[rank - 1] - 1
            score -= min(5, gap)
        if pos == rank:
            score += 5
        if _is_word_boundary(candidate, pos):
            score += 3

    query_folded = query.lower()
    candidate_folded = candidate.lower()
    if candidate_folded.startswith(query_folded):
        score += 20
    if candidate_folded == query_folded:
        score += 50

    score -= len(candidate) // 200
    return RankedItem(item=candidate, score=score, positions=tuple(positions), index=index)


def rank_fuzzy_matches(
    query: str,
    candidates: list[str],
    limit: int = DEFAULT_RANK_LIMIT,
) -> list[RankedItem]:
    """Return the best ``limit`` matches, highest score first.

    ``sorted`` is stable, so equal scores keep input order.
    """
    results: list[RankedItem] = []
    for idx, candidate in enumerate(candidates):
        ranked = fuzzy_score(query, candidate, idx)
        if ranked is not None:
            results.append(ranked)
    results = sorted(results, key=lambda ranked: -ranked.score)
    return results[: max(0, limit)]
