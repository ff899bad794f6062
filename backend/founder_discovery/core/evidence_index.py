"""Evidence Index: assumption -> tagging interviews, built once per evaluation pass.

Invariants:
    - Built from the interviews' embedded tag lists; interviews are not mutated
    - interview_ids(a) holds DISTINCT interview ids, in first-seen order
    - tags(a) holds EVERY tag for a (an interview tagging twice contributes twice)
    - Unknown assumption ids return empty results, never raise

Design Decisions:
    - Explicit index replaces repeated linear scans over interviews x tags
"""

from collections import defaultdict
from dataclasses import dataclass
from datetime import date
from typing import Iterable

from founder_discovery.core.domain_types import ValidationEffect
from founder_discovery.core.entities import AssumptionTag, Interview


class EvidenceIndex:
    """Lookup of tags and tagging interviews by assumption id."""

    def __init__(self, interviews: Iterable[Interview]):
        self._tags: dict[str, list[AssumptionTag]] = defaultdict(list)
        self._interviews: dict[str, dict[str, Interview]] = defaultdict(dict)
        for interview in interviews:
            for tag in interview.assumption_tags:
                self._tags[tag.assumption_id].append(tag)
                self._interviews[tag.assumption_id].setdefault(interview.id, interview)

    def tags(self, assumption_id: str) -> list[AssumptionTag]:
        return list(self._tags.get(assumption_id, ()))

    def interview_ids(self, assumption_id: str) -> list[str]:
        return list(self._interviews.get(assumption_id, {}))

    def interviews(self, assumption_id: str) -> list[Interview]:
        return list(self._interviews.get(assumption_id, {}).values())

    def interview_ids_for(self, assumption_ids: Iterable[str]) -> set[str]:
        """Distinct interviews tagging at least one of the given assumptions."""
        result: set[str] = set()
        for assumption_id in assumption_ids:
            result.update(self._interviews.get(assumption_id, {}))
        return result


@dataclass(frozen=True)
class EvidenceSummary:
    """Per-assumption tally of interview verdicts."""
    assumption_id: str
    supports: int
    contradicts: int
    neutral: int
    total_interviews: int
    net_effect: ValidationEffect
    total_confidence_change: int
    last_tested_date: date | None


def summarize_evidence(index: EvidenceIndex, assumption_id: str) -> EvidenceSummary:
    tags = index.tags(assumption_id)
    supports = sum(1 for t in tags if t.validation_effect == ValidationEffect.SUPPORTS)
    contradicts = sum(1 for t in tags if t.validation_effect == ValidationEffect.CONTRADICTS)
    neutral = len(tags) - supports - contradicts

    if supports > contradicts:
        net = ValidationEffect.SUPPORTS
    elif contradicts > supports:
        net = ValidationEffect.CONTRADICTS
    else:
        net = ValidationEffect.NEUTRAL

    interviews = index.interviews(assumption_id)
    return EvidenceSummary(
        assumption_id=assumption_id,
        supports=supports,
        contradicts=contradicts,
        neutral=neutral,
        total_interviews=len(interviews),
        net_effect=net,
        total_confidence_change=sum(t.confidence_change for t in tags),
        last_tested_date=max((i.date for i in interviews), default=None),
    )
