"""Location resolution strategies: NER first, regex patterns as fallback."""

import logging
import re
from typing import Iterable, Optional

from disaster_intel.core import (
    EntityExtractor,
    ExtractionMethod,
    LocationStrategy,
    NamedEntity,
)

logger = logging.getLogger(__name__)

LOCATION_ENTITY_GROUPS = ("LOC", "ORG")
PLACE_WORDS = re.compile(r"\b(street|avenue|road|park|bridge|center)\b", re.IGNORECASE)
TOKENIZER_ARTIFACTS = ("[CLS]", "[SEP]")

# Order matters: the first surviving candidate wins.
LOCATION_PATTERNS = (
    # City, State
    re.compile(r"\b([A-Z][a-z]+(?:\s+[A-Z][a-z]+)*),\s*([A-Z]{2}|[A-Z][a-z]+)\b"),
    # Street addresses
    re.compile(
        r"\b\d+\s+([A-Z][a-z]+(?:\s+[A-Z][a-z]+)*\s+"
        r"(?:Street|St|Avenue|Ave|Road|Rd|Boulevard|Blvd|Drive|Dr|Lane|Ln|Way|Place|Pl))\b",
        re.IGNORECASE,
    ),
    # Neighborhoods and areas
    re.compile(
        r"\b(?:in|at|near|around)\s+([A-Z][a-z]+(?:\s+[A-Z][a-z]+)*"
        r"(?:\s+(?:Area|District|Neighborhood|Heights|Park|Center|Square|Plaza)))\b",
        re.IGNORECASE,
    ),
    # Landmarks and buildings
    re.compile(
        r"\b(?:at|near)\s+([A-Z][a-z]+(?:\s+[A-Z][a-z]+)*\s+"
        r"(?:Bridge|Building|Hospital|School|University|Mall|Airport|Station))\b",
        re.IGNORECASE,
    ),
    # General location indicators
    re.compile(r"\b(?:in|at|near)\s+([A-Z][a-z]+(?:\s+[A-Z][a-z]+)*)\b"),
)

LEADING_PREPOSITION = re.compile(r"^(?:in|at|near|around)\s+", re.IGNORECASE)
STOP_WORDS = frozenset({
    "the", "and", "but", "for", "are", "was", "were", "been",
    "have", "has", "had", "will", "would", "could", "should",
})


def find_location_candidates(text: str) -> list[str]:
    """Collect location candidates from all patterns, in discovery order."""
    candidates: list[str] = []
    for pattern in LOCATION_PATTERNS:
        for match in pattern.finditer(text):
            candidates.append(LEADING_PREPOSITION.sub("", match.group(0)).strip())

    seen: set[str] = set()
    unique: list[str] = []
    for candidate in candidates:
        if candidate in seen:
            continue
        seen.add(candidate)
        if len(candidate) > 2 and candidate.lower() not in STOP_WORDS:
            unique.append(candidate)
    return unique


def join_location_entities(entities: Iterable[NamedEntity]) -> Optional[str]:
    """Merge location-like entities into one phrase, or None if there are none."""
    words = []
    for entity in entities:
        group = entity.entity_group.upper()
        if group in LOCATION_ENTITY_GROUPS or (group == "MISC" and PLACE_WORDS.search(entity.word)):
            if entity.word and entity.word not in TOKENIZER_ARTIFACTS:
                words.append(entity.word)

    location = " ".join(words).replace("##", "").strip()
    return location or None


class NERLocationStrategy(LocationStrategy):
    """Ask the named-entity service for location mentions."""

    name = "ner"
    method = ExtractionMethod.NER_AND_PATTERNS

    def __init__(self, extractor: EntityExtractor) -> None:
        self.extractor = extractor

    def is_available(self) -> bool:
        return self.extractor.is_configured

    async def resolve(self, text: str) -> Optional[str]:
        try:
            entities = await self.extractor.extract_entities(text)
        except Exception as e:
            logger.warning("NER location extraction failed: %s", e)
            return None

        return join_location_entities(entities)


class PatternLocationStrategy(LocationStrategy):
    """Deterministic regex fallback."""

    name = "patterns"
    method = ExtractionMethod.PATTERNS_ONLY

    async def resolve(self, text: str) -> Optional[str]:
        candidates = find_location_candidates(text)
        return candidates[0] if candidates else None
