"""Vibe-first candidate search with on-demand supplemental queries."""
from __future__ import annotations

import asyncio
import json
import logging
from typing import Dict, Iterable, Iterator, List, Optional, Protocol

from datemapz.core.schemas import Coordinates, PlaceRecord, SearchSpec
from datemapz.core.search_params import build_search_spec, supplemental_search_specs

logger = logging.getLogger(__name__)

SUFFICIENT_CANDIDATES = 6
MAX_CANDIDATES = 20


class NearbySearcher(Protocol):
    async def search(self, location: Coordinates, radius_meters: int, keyword: str) -> List[PlaceRecord]: ...


class CandidateSet:
    """Insertion-ordered places keyed by address; the first record for an address wins."""

    def __init__(self, records: Iterable[PlaceRecord] = ()) -> None:
        self._by_address: Dict[str, PlaceRecord] = {}
        self.extend(records)

    def add(self, record: PlaceRecord) -> bool:
        """Insert ``record`` unless its address is empty or already taken."""

        address = (record.address or "").strip()
        if not address or address in self._by_address:
            return False
        self._by_address[address] = record
        return True

    def extend(self, records: Iterable[PlaceRecord]) -> int:
        added = 0
        for record in records:
            if self.add(record):
                added += 1
        return added

    def truncated(self, limit: int = MAX_CANDIDATES) -> "CandidateSet":
        return CandidateSet(list(self._by_address.values())[:limit])

    def records(self) -> List[PlaceRecord]:
        return list(self._by_address.values())

    def addresses(self) -> List[str]:
        return list(self._by_address)

    def to_prompt_json(self) -> str:
        """Serialise the places for embedding into a prompt."""

        payload = [record.model_dump(mode="json", exclude_none=True) for record in self._by_address.values()]
        return json.dumps(payload, indent=2, ensure_ascii=False)

    def __len__(self) -> int:
        return len(self._by_address)

    def __iter__(self) -> Iterator[PlaceRecord]:
        return iter(list(self._by_address.values()))

    def __contains__(self, address: object) -> bool:
        return address in self._by_address

    def __repr__(self) -> str:
        return f"CandidateSet(size={len(self)})"


class CandidateLocationFinder:
    """Collect candidate venues around a location for the curated prompt.

    The primary vibe search always runs first and is merged in full before the
    sufficiency check, so its results are never displaced by supplemental ones.
    """

    def __init__(
        self,
        searcher: NearbySearcher,
        *,
        sufficient: int = SUFFICIENT_CANDIDATES,
        limit: int = MAX_CANDIDATES,
    ) -> None:
        self.searcher = searcher
        self.sufficient = sufficient
        self.limit = limit

    async def find(
        self,
        lat: float,
        lng: float,
        vibe: Optional[str],
        transport_mode: Optional[str],
        is_adult: bool,
    ) -> CandidateSet:
        primary = build_search_spec(lat, lng, vibe, transport_mode, is_adult)

        candidates = CandidateSet()
        candidates.extend(await self._run(primary))
        logger.info(f"Primary search yielded {len(candidates)} unique places")

        if len(candidates) >= self.sufficient:
            return candidates.truncated(self.limit)

        supplemental_specs = supplemental_search_specs(primary, vibe, is_adult)
        logger.info(f"Running {len(supplemental_specs)} supplemental searches (is_adult={is_adult})")
        supplemental = await asyncio.gather(*(self._run(spec) for spec in supplemental_specs))
        for records in supplemental:
            candidates.extend(records)

        logger.info(f"Candidate set holds {len(candidates)} places before truncation")
        return candidates.truncated(self.limit)

    async def _run(self, spec: SearchSpec) -> List[PlaceRecord]:
        return await self.searcher.search(spec.location, spec.radius_meters, spec.keyword)
