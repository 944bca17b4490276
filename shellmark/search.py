"""Fuzzy ranking of bookmarks against the browser query."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from .bookmarks import Bookmark
from .storage import friendly_path

WORD_BOUNDARY_CHARS = "/\\_- ."
MATCH_BASE = 40


class FuzzyMatcher:
    """Case-insensitive subsequence scorer.

    Consecutive runs and matches right after a word boundary earn bonuses;
    gaps and long candidates are penalised. Every matched character earns
    ``MATCH_BASE``, so a real match always scores at least 1; ``score``
    returns ``None`` when the query is not a subsequence of the candidate.
    """

    def score(self, candidate: str, query: str) -> int | None:
        if not query:
            return 0
        query_folded = query.casefold()
        candidate_folded = candidate.casefold()

        score = 0
        prev_idx = -1
        run = 0
        for needle in query_folded:
            idx = candidate_folded.find(needle, prev_idx + 1)
            if idx < 0:
                return None
            score += MATCH_BASE
            if idx == prev_idx + 1:
                run += 1
                score += 20 + min(16, run * 4)
            else:
                gap = idx - prev_idx - 1
                run = 0
                score -= min(40, gap * 2)
            if idx == 0 or candidate_folded[idx - 1] in WORD_BOUNDARY_CHARS:
                score += 35
            prev_idx = idx

        score -= len(candidate_folded) // 5
        return max(1, score)


def match_corpus(bookmark: Bookmark, home: Path | None = None) -> str:
    """Text a bookmark is matched against: name plus friendly destination."""
    return f"{bookmark.name} {friendly_path(bookmark.dest, home)}"


def find_matches(
    matcher: FuzzyMatcher,
    bookmarks: Sequence[Bookmark],
    query: str,
    home: Path | None = None,
) -> list[int]:
    """Return indices of bookmarks matching ``query``, best first.

    An empty query keeps storage order. Otherwise only positive scores are
    kept; equal scores stay in storage order.
    """
    if not query:
        return list(range(len(bookmarks)))
    scored: list[tuple[int, int]] = []
    for idx, bookmark in enumerate(bookmarks):
        score = matcher.score(match_corpus(bookmark, home), query)
        if score is None or score <= 0:
            continue
        scored.append((score, idx))
    scored.sort(key=lambda item: (-item[0], item[1]))
    return [idx for _score, idx in scored]


def match_positions(text: str, query: str) -> set[int]:
    """Greedy left-to-right positions in ``text`` matched by ``query`` characters.

    Used for highlighting only; it mirrors how a user reads the match rather
    than the scorer's choice of positions.
    """
    positions: set[int] = set()
    query_folded = [ch.casefold() for ch in query]
    match_idx = 0
    for pos, ch in enumerate(text):
        if match_idx >= len(query_folded):
            break
        if ch.casefold() == query_folded[match_idx]:
            positions.add(pos)
            match_idx += 1
    return positions
