"""Unit tests for certainty ledger operations."""

import pytest

from src.catalog.kits import get_kit_knowledge
from src.discovery.ledger import (
    apply_updates,
    compute_gaps,
    compute_suggestions,
    empty_ledger,
    format_ledger_as_context,
    merge_update,
    readiness,
    refresh,
)
from src.discovery.models import (
    IndustryUpdate,
    IntegrationsUpdate,
    PrimaryEntitiesUpdate,
    SlotSource,
    TeamSizeUpdate,
)


class TestMergeUpdate:
    """Test the slot merge rules."""

    def test_fills_empty_slot(self):
        ledger = merge_update(empty_ledger(), IndustryUpdate(value="plumber", confidence=0.6))

        assert ledger.industry.value == "plumber"
        assert ledger.industry.confidence == pytest.approx(0.6)

    def test_does_not_mutate_input(self):
        original = empty_ledger()
        merge_update(original, IndustryUpdate(value="plumber", confidence=0.6))

        assert original.industry.value is None

    def test_same_value_takes_max_confidence_and_explicit_source(self):
        ledger = merge_update(empty_ledger(), TeamSizeUpdate(value="solo", confidence=0.8))
        ledger = merge_update(
            ledger, TeamSizeUpdate(value="solo", confidence=0.5, source=SlotSource.EXPLICIT)
        )

        assert ledger.team_size.confidence == pytest.approx(0.8)
        assert ledger.team_size.source == SlotSource.EXPLICIT

    def test_less_confident_value_is_ignored(self):
        ledger = merge_update(empty_ledger(), IndustryUpdate(value="plumber", confidence=0.65))
        ledger = merge_update(ledger, IndustryUpdate(value="mechanic", confidence=0.55))

        assert ledger.industry.value == "plumber"

    def test_more_confident_value_replaces(self):
        ledger = merge_update(empty_ledger(), IndustryUpdate(value="plumber", confidence=0.45))
        ledger = merge_update(ledger, IndustryUpdate(value="hvac", confidence=0.6))

        assert ledger.industry.value == "hvac"

    def test_explicit_value_replaces_at_equal_confidence(self):
        ledger = merge_update(empty_ledger(), TeamSizeUpdate(value="small", confidence=0.6))
        ledger = merge_update(
            ledger, TeamSizeUpdate(value="solo", confidence=0.6, source=SlotSource.EXPLICIT)
        )

        assert ledger.team_size.value == "solo"

    def test_inferred_value_does_not_replace_at_equal_confidence(self):
        ledger = merge_update(empty_ledger(), TeamSizeUpdate(value="small", confidence=0.6))
        ledger = merge_update(ledger, TeamSizeUpdate(value="solo", confidence=0.6))

        assert ledger.team_size.value == "small"

    def test_list_slots_union(self):
        ledger = apply_updates(
            empty_ledger(),
            [
                PrimaryEntitiesUpdate(value=["job", "invoice"], confidence=0.6),
                PrimaryEntitiesUpdate(value=["invoice", "quote"], confidence=0.7),
            ],
        )

        assert ledger.primary_entities.value == ["job", "invoice", "quote"]
        assert ledger.primary_entities.confidence == pytest.approx(0.7)


class TestGapsAndSuggestions:
    """Test derived ledger fields."""

    def test_empty_ledger_gaps(self):
        assert compute_gaps(empty_ledger()) == ["industry", "primary_entities"]

    def test_general_kit_is_a_gap(self):
        ledger = merge_update(empty_ledger(), IndustryUpdate(value="general", confidence=0.9))

        assert "industry" in compute_gaps(ledger)

    def test_ambiguous_kit_needs_sub_vertical(self):
        ledger = apply_updates(
            empty_ledger(),
            [
                IndustryUpdate(value="cleaning", confidence=0.65),
                PrimaryEntitiesUpdate(value=["client"], confidence=0.65),
            ],
        )

        assert compute_gaps(ledger, get_kit_knowledge("cleaning")) == ["sub_vertical"]

    def test_suggestions_skip_enabled_and_cap_at_five(self):
        kit = get_kit_knowledge("plumber")
        suggestions = compute_suggestions(kit, ["quotes"])

        assert "quotes" not in suggestions
        assert len(suggestions) <= 5

    def test_refresh_sets_gaps_and_suggestions(self):
        ledger = refresh(empty_ledger(), get_kit_knowledge("plumber"), ["job_tracking"])

        assert ledger.gaps == ["industry", "primary_entities"]
        assert ledger.suggestions[0] == "quotes"


class TestReadinessAndContext:
    """Test readiness scoring and prompt context."""

    def test_empty_readiness(self):
        assert readiness(empty_ledger()) == 0.0

    def test_critical_slots_weigh_seventy_percent(self):
        ledger = apply_updates(
            empty_ledger(),
            [
                IndustryUpdate(value="plumber", confidence=1.0),
                PrimaryEntitiesUpdate(value=["job"], confidence=1.0),
            ],
        )

        assert readiness(ledger) == pytest.approx(0.7)

    def test_context_when_empty(self):
        assert format_ledger_as_context(empty_ledger()) == "Nothing known yet."

    def test_context_lists_known_slots(self):
        ledger = apply_updates(
            empty_ledger(),
            [
                TeamSizeUpdate(value="solo", confidence=0.9),
                IntegrationsUpdate(value=["stripe"], confidence=0.85),
            ],
        )
        context = format_ledger_as_context(ledger)

        assert "- Team size: solo (90% certain)" in context
        assert "- Integrations: stripe (85% certain)" in context
