"""Evidence Index: tests for the assumption -> interview lookup."""

from datetime import date

from founder_discovery.core.domain_types import ValidationEffect
from founder_discovery.core.entities import AssumptionTag, Interview
from founder_discovery.core.evidence_index import EvidenceIndex, summarize_evidence


def _interview(iid, day, *tags) -> Interview:
    return Interview(
        id=iid, segment_name="founders", date=date(2026, 1, day), assumption_tags=tags,
    )


INTERVIEWS = [
    _interview(
        "i1", 3,
        AssumptionTag("a", ValidationEffect.SUPPORTS, 1),
        AssumptionTag("a", ValidationEffect.SUPPORTS, 1),
        AssumptionTag("b", ValidationEffect.CONTRADICTS, -2),
    ),
    _interview("i2", 7, AssumptionTag("a", ValidationEffect.CONTRADICTS, -1)),
    _interview("i3", 5),
]


def test_tags_keep_every_tag():
    assert len(EvidenceIndex(INTERVIEWS).tags("a")) == 3


def test_interview_ids_are_distinct_in_first_seen_order():
    assert EvidenceIndex(INTERVIEWS).interview_ids("a") == ["i1", "i2"]


def test_interview_ids_for_union():
    index = EvidenceIndex(INTERVIEWS)
    assert index.interview_ids_for(["a", "b"]) == {"i1", "i2"}
    assert index.interview_ids_for([]) == set()


def test_unknown_assumption_is_empty():
    index = EvidenceIndex(INTERVIEWS)
    assert index.tags("zzz") == []
    assert index.interviews("zzz") == []


def test_summarize_evidence():
    summary = summarize_evidence(EvidenceIndex(INTERVIEWS), "a")
    assert summary.supports == 2
    assert summary.contradicts == 1
    assert summary.neutral == 0
    assert summary.total_interviews == 2
    assert summary.net_effect == ValidationEffect.SUPPORTS
    assert summary.total_confidence_change == 1
    assert summary.last_tested_date == date(2026, 1, 7)


def test_summarize_without_evidence():
    summary = summarize_evidence(EvidenceIndex([]), "a")
    assert summary.net_effect == ValidationEffect.NEUTRAL
    assert summary.last_tested_date is None
