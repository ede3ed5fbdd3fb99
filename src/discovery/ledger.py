"""
Certainty Ledger operations.

The ledger is a pydantic model; these functions return updated copies rather
than mutating in place, so a turn that fails half-way leaves the caller's
state untouched.

Merge rules for one SlotUpdate:
- unset slot: take the update
- same value: confidence rises to the max, explicit wins over inferred
- list slots: union of both lists, confidence rises to the max
- different value: replace only if strictly more confident, or explicit and
  at least as confident
"""

from typing import Iterable, Optional

import structlog

from src.catalog.kits import is_known_kit
from src.catalog.schema import KitKnowledge, SlotName
from src.discovery.constants import GAP_THRESHOLD, MAX_SUGGESTIONS
from src.discovery.models import CertaintyLedger, MatchedBehavior, Slot, SlotSource, SlotUpdate

logger = structlog.get_logger(__name__)

LIST_SLOTS = (SlotName.PRIMARY_ENTITIES, SlotName.INTEGRATIONS)
CRITICAL_SLOTS = (SlotName.INDUSTRY, SlotName.PRIMARY_ENTITIES)
REFINEMENT_SLOTS = (
    SlotName.TEAM_SIZE,
    SlotName.COMPLEXITY,
    SlotName.CUSTOMER_FACING,
    SlotName.INTEGRATIONS,
)

SLOT_LABELS = {
    SlotName.INDUSTRY: "Industry",
    SlotName.SUB_VERTICAL: "Sub-vertical",
    SlotName.PRIMARY_ENTITIES: "Primary entities",
    SlotName.TEAM_SIZE: "Team size",
    SlotName.COMPLEXITY: "Complexity",
    SlotName.CUSTOMER_FACING: "Customer-facing",
    SlotName.INTEGRATIONS: "Integrations",
}


def empty_ledger() -> CertaintyLedger:
    return CertaintyLedger()


def _merged_source(a: SlotSource, b: SlotSource) -> SlotSource:
    if SlotSource.EXPLICIT in (a, b):
        return SlotSource.EXPLICIT
    if SlotSource.INFERRED in (a, b):
        return SlotSource.INFERRED
    return SlotSource.DEFAULT


def merge_update(ledger: CertaintyLedger, update: SlotUpdate) -> CertaintyLedger:
    """Merge one update into a copy of the ledger."""
    name = SlotName(update.slot)
    current: Slot = ledger.slot(name)
    merged: Optional[Slot] = None

    if not current.is_set:
        merged = Slot(
            value=update.value,
            confidence=max(update.confidence, current.confidence),
            source=update.source,
            evidence=update.evidence,
        )
    elif name in LIST_SLOTS:
        combined = list(dict.fromkeys([*current.value, *update.value]))
        merged = Slot(
            value=combined,
            confidence=max(current.confidence, update.confidence),
            source=_merged_source(current.source, update.source),
            evidence=update.evidence or current.evidence,
        )
    elif current.value == update.value:
        merged = Slot(
            value=current.value,
            confidence=max(current.confidence, update.confidence),
            source=_merged_source(current.source, update.source),
            evidence=current.evidence or update.evidence,
        )
    elif update.confidence > current.confidence or (
        update.source == SlotSource.EXPLICIT and update.confidence >= current.confidence
    ):
        logger.debug(
            "ledger_slot_replaced",
            slot=name.value,
            old=current.value,
            new=update.value,
            confidence=round(update.confidence, 3),
        )
        merged = Slot(
            value=update.value,
            confidence=update.confidence,
            source=update.source,
            evidence=update.evidence,
        )

    if merged is None:
        return ledger
    return ledger.model_copy(update={name.value: merged})


def apply_updates(ledger: CertaintyLedger, updates: Iterable[SlotUpdate]) -> CertaintyLedger:
    for update in updates:
        ledger = merge_update(ledger, update)
    return ledger


def compute_gaps(ledger: CertaintyLedger, kit: Optional[KitKnowledge] = None) -> list[str]:
    """Critical slots still missing or below GAP_THRESHOLD."""
    gaps = []
    if not ledger.is_known(SlotName.INDUSTRY, GAP_THRESHOLD) or not is_known_kit(ledger.industry.value):
        gaps.append(SlotName.INDUSTRY.value)
    if not ledger.is_known(SlotName.PRIMARY_ENTITIES, GAP_THRESHOLD):
        gaps.append(SlotName.PRIMARY_ENTITIES.value)
    if kit is not None and kit.has_sub_verticals and not ledger.is_known(SlotName.SUB_VERTICAL, GAP_THRESHOLD):
        gaps.append(SlotName.SUB_VERTICAL.value)
    return gaps


def compute_suggestions(
    kit: KitKnowledge,
    enabled_features: Iterable[str],
    behavior: Optional[MatchedBehavior] = None,
) -> list[str]:
    """Optional kit features, then behavior features, not yet enabled."""
    enabled = set(enabled_features)
    candidates = list(kit.optional_features)
    if behavior is not None:
        candidates += behavior.features

    suggestions: list[str] = []
    for feature_id in candidates:
        if feature_id not in enabled and feature_id not in suggestions:
            suggestions.append(feature_id)
        if len(suggestions) >= MAX_SUGGESTIONS:
            break
    return suggestions


def refresh(
    ledger: CertaintyLedger,
    kit: KitKnowledge,
    enabled_features: Iterable[str],
    behavior: Optional[MatchedBehavior] = None,
) -> CertaintyLedger:
    """Recompute the derived gaps and suggestions."""
    return ledger.model_copy(
        update={
            "gaps": compute_gaps(ledger, kit),
            "suggestions": compute_suggestions(kit, enabled_features, behavior),
        }
    )


def _slot_score(ledger: CertaintyLedger, name: SlotName) -> float:
    slot = ledger.slot(name)
    return slot.confidence if slot.is_set else 0.0


def readiness(ledger: CertaintyLedger) -> float:
    """Overall readiness: 70% critical slots, 30% refinement slots."""
    critical = sum(_slot_score(ledger, n) for n in CRITICAL_SLOTS) / len(CRITICAL_SLOTS)
    refinement = sum(_slot_score(ledger, n) for n in REFINEMENT_SLOTS) / len(REFINEMENT_SLOTS)
    return round(0.7 * critical + 0.3 * refinement, 4)


def _format_slot(label: str, slot: Slot) -> str:
    if isinstance(slot.value, list):
        value = ", ".join(slot.value)
    elif isinstance(slot.value, bool):
        value = "yes" if slot.value else "no"
    else:
        value = str(slot.value)
    return f"- {label}: {value} ({round(slot.confidence * 100)}% certain)"


def format_ledger_as_context(ledger: CertaintyLedger) -> str:
    """What we already know, as prompt context for the AI path."""
    lines = []
    for name, label in SLOT_LABELS.items():
        slot = ledger.slot(name)
        if slot.is_set:
            lines.append(_format_slot(label, slot))

    if not lines:
        return "Nothing known yet."
    return "\n".join(lines)


__all__ = [
    "empty_ledger",
    "merge_update",
    "apply_updates",
    "compute_gaps",
    "compute_suggestions",
    "refresh",
    "readiness",
    "format_ledger_as_context",
]
