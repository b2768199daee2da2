"""In-memory weighted inverted index over the operation catalog.

Every text field of an operation is tokenized and each token is given a
field weight; a token appearing in several fields accumulates weight.
Queries are scored by summing the weights of matched tokens plus bonuses
for the query appearing verbatim in the operation's name or description.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, FrozenSet, Iterable, List, Mapping, Optional, Set, Tuple

from testrail_mcp.constants import DEFAULT_SEARCH_LIMIT
from testrail_mcp.gateway.catalog import OperationCatalog, OperationDescriptor

logger = logging.getLogger(__name__)

# ── Weights ──────────────────────────────────────────────────────────────

NAME_WEIGHT = 5.0
DESCRIPTION_WEIGHT = 3.0
KEYWORD_WEIGHT = 3.0
CATEGORY_WEIGHT = 2.0
EXAMPLE_WEIGHT = 1.0

NAME_SUBSTRING_BONUS = 10.0
DESCRIPTION_SUBSTRING_BONUS = 5.0

# ── Tokenizer ────────────────────────────────────────────────────────────

_SPLIT_RE = re.compile(r"[^a-z0-9]+")


def _tokenize(text: str) -> List[str]:
    """Lower-case, split on non-alphanumerics, strip empties."""
    return [t for t in _SPLIT_RE.split(text.lower()) if t]


def _unique(tokens: Iterable[str]) -> List[str]:
    seen: Set[str] = set()
    out: List[str] = []
    for t in tokens:
        if t not in seen:
            seen.add(t)
            out.append(t)
    return out


# ── Index entries ────────────────────────────────────────────────────────


@dataclass(frozen=True)
class SearchIndexEntry:
    """Token weights of one operation."""

    name: str
    weights: Mapping[str, float]

    @classmethod
    def build(cls, descriptor: OperationDescriptor) -> "SearchIndexEntry":
        weights: Dict[str, float] = {}

        def add(text: str, weight: float) -> None:
            for token in _tokenize(text):
                weights[token] = weights.get(token, 0.0) + weight

        add(descriptor.name, NAME_WEIGHT)
        add(descriptor.description, DESCRIPTION_WEIGHT)
        for keyword in descriptor.keywords:
            add(keyword, KEYWORD_WEIGHT)
        add(descriptor.category, CATEGORY_WEIGHT)
        for example in descriptor.examples:
            add(example, EXAMPLE_WEIGHT)

        return cls(name=descriptor.name, weights=MappingProxyType(weights))


@dataclass(frozen=True)
class SearchHit:
    descriptor: OperationDescriptor
    score: float

    def to_dict(self) -> Dict[str, Any]:
        return {**self.descriptor.to_full_details(), "score": round(self.score, 4)}


# ── Tool index ───────────────────────────────────────────────────────────


class ToolIndex:
    """Searchable index of the operations in an :class:`OperationCatalog`.

    Built once from the catalog and never mutated afterwards, so concurrent
    searches need no locking.
    """

    def __init__(self, catalog: OperationCatalog) -> None:
        self._catalog = catalog
        self._entries: Dict[str, SearchIndexEntry] = {}
        inverted: Dict[str, Set[str]] = {}

        for descriptor in catalog.all():
            entry = SearchIndexEntry.build(descriptor)
            self._entries[descriptor.name] = entry
            for token in entry.weights:
                inverted.setdefault(token, set()).add(descriptor.name)

        self._inverted: Dict[str, FrozenSet[str]] = {
            token: frozenset(names) for token, names in inverted.items()
        }
        logger.info(
            "ToolIndex: indexed %d tools (%d distinct tokens)",
            len(self._entries),
            len(self._inverted),
        )

    # ── Search ───────────────────────────────────────────────────────

    def search(self, query: str, limit: int = DEFAULT_SEARCH_LIMIT) -> List[SearchHit]:
        """Return up to *limit* hits for *query*, best first.

        An operation is a candidate when it contains at least one query
        token.  Ties keep registration order.
        """
        query_tokens = _unique(_tokenize(query or ""))
        if not query_tokens or limit <= 0:
            return []

        candidates: Set[str] = set()
        for token in query_tokens:
            candidates |= self._inverted.get(token, frozenset())
        if not candidates:
            return []

        needle = query.strip().lower()
        ranked: List[Tuple[Tuple[int, float, int], SearchHit]] = []
        for name in candidates:
            descriptor = self._catalog.get(name)
            if descriptor is None:
                continue
            score = self._score(self._entries[name], descriptor, query_tokens, needle)
            exact = 1 if name.lower() == needle else 0
            key = (-exact, -score, self._catalog.position(name))
            ranked.append((key, SearchHit(descriptor=descriptor, score=score)))

        ranked.sort(key=lambda item: item[0])
        return [hit for _, hit in ranked[:limit]]

    @staticmethod
    def _score(
        entry: SearchIndexEntry,
        descriptor: OperationDescriptor,
        query_tokens: List[str],
        needle: str,
    ) -> float:
        score = sum(entry.weights.get(token, 0.0) for token in query_tokens)
        if needle and needle in descriptor.name.lower():
            score += NAME_SUBSTRING_BONUS
        if needle and needle in descriptor.description.lower():
            score += DESCRIPTION_SUBSTRING_BONUS
        return score

    # ── Lookup ───────────────────────────────────────────────────────

    def entry(self, name: str) -> Optional[SearchIndexEntry]:
        return self._entries.get(name)

    def candidates_for(self, token: str) -> FrozenSet[str]:
        return self._inverted.get(token.lower(), frozenset())

    @property
    def tool_count(self) -> int:
        return len(self._entries)

    @property
    def tool_names(self) -> List[str]:
        return list(self._entries.keys())
