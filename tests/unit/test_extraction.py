"""Unit tests for industry resolution and slot extraction heuristics."""

import pytest

from src.catalog.kits import BILLING, CUSTOMER_BOOKING, INTEGRATIONS, TEAM_SIZE, get_kit_knowledge
from src.discovery.extraction import (
    answer_for_question,
    detect_complexity,
    detect_customer_facing,
    detect_entities,
    detect_integrations,
    detect_intent,
    detect_team_size,
    extract_slots,
    question_enables,
)
from src.discovery.industry import (
    detect_sub_vertical,
    match_kit_label,
    resolve_industry,
    resolved_industry_for,
)
from src.discovery.models import SlotSource


class TestResolveIndustry:
    """Test the keyword-table industry fallback."""

    def test_misspelling_resolves_with_low_confidence(self):
        match = resolve_industry("plumer emergencies")

        assert match is not None
        assert match.kit_id == "plumber"
        assert match.confidence == pytest.approx(0.45)
        assert match.self_identified is False

    def test_self_identification_raises_confidence(self):
        match = resolve_industry("I'm a solo plumber")

        assert match.kit_id == "plumber"
        assert match.self_identified is True
        assert match.confidence == pytest.approx(0.65)

    def test_multi_word_keyword(self):
        match = resolve_industry("we need help with water heater installs")

        assert match.kit_id == "plumber"
        assert match.confidence == pytest.approx(0.55)

    def test_no_keywords(self):
        assert resolve_industry("nothing relevant here") is None


class TestSubVertical:
    """Test sub-vertical detection for ambiguous kits."""

    def test_rentals_point_at_property_management(self):
        option = detect_sub_vertical("we manage rental units for tenants", get_kit_knowledge("real-estate"))

        assert option is not None
        assert option.value == "rentals"
        assert option.kit == "property-management"

    def test_tie_is_undecided(self):
        option = detect_sub_vertical("homes and offices", get_kit_knowledge("cleaning"))

        assert option is None

    def test_kit_without_sub_verticals(self):
        assert detect_sub_vertical("rental", get_kit_knowledge("plumber")) is None


class TestKitLabels:
    """Test mapping free-form labels to kits."""

    @pytest.mark.parametrize(
        "label,expected",
        [
            ("plumber", "plumber"),
            ("Plumbing", "plumber"),
            ("real estate", "real-estate"),
            ("property_management", "property-management"),
            (None, None),
        ],
    )
    def test_match_kit_label(self, label, expected):
        assert match_kit_label(label) == expected

    def test_unknown_kit_resolves_to_general(self):
        industry = resolved_industry_for("does-not-exist")

        assert industry.kit_id == "general"


class TestTeamSize:
    """Test team size detection."""

    def test_solo_is_explicit(self):
        update = detect_team_size("Just me")

        assert update.value == "solo"
        assert update.confidence == pytest.approx(0.9)
        assert update.source == SlotSource.EXPLICIT

    def test_headcount(self):
        assert detect_team_size("we have 12 employees").value == "medium"
        assert detect_team_size("3 techs and me").value == "small"

    def test_option_labels(self):
        assert detect_team_size("Small team (2-5)").value == "small"
        assert detect_team_size("Larger team (6+)").value == "large"

    def test_bare_team_mention_is_weak(self):
        update = detect_team_size("my team handles it")

        assert update.value == "small"
        assert update.confidence == pytest.approx(0.6)

    def test_nothing_said(self):
        assert detect_team_size("emergency calls") is None


class TestComplexity:
    """Test complexity detection."""

    def test_largest_scale_wins(self):
        assert detect_complexity("Restaurant group (4+ locations)").value == "advanced"

    def test_ranges(self):
        assert detect_complexity("6-50 properties (small company)").value == "medium"
        assert detect_complexity("1-5 properties (solo landlord)").value == "simple"

    def test_simple_words(self):
        assert detect_complexity("just a basic setup").value == "simple"


class TestCustomerFacingAndIntegrations:
    """Test customer-facing and integration detection."""

    def test_customer_facing(self):
        assert detect_customer_facing("customers book online").value is True
        assert detect_customer_facing("just internal").value is False
        assert detect_customer_facing("emergency calls") is None

    def test_integrations(self):
        update = detect_integrations("we use Stripe and QuickBooks")

        assert update.value == ["stripe", "quickbooks"]

    def test_entities_prefer_kit_entities(self):
        update = detect_entities("I track jobs and customers", get_kit_knowledge("plumber"))

        assert update.value[0] == "job"
        assert "customer" in update.value

    def test_intent(self):
        assert detect_intent("I want customers to book appointments") == "customer-facing"
        assert detect_intent("hello") is None


class TestQuestionAnswers:
    """Test direct answers to slot questions."""

    def test_yes_to_booking_question(self):
        update = answer_for_question("yes", CUSTOMER_BOOKING)

        assert update.value is True
        assert update.source == SlotSource.EXPLICIT

    def test_maybe_later_to_booking_question(self):
        assert answer_for_question("Maybe later", CUSTOMER_BOOKING).value is False

    def test_none_to_integrations_question(self):
        update = answer_for_question("None for now", INTEGRATIONS)

        assert update.value == []
        assert update.confidence == pytest.approx(0.9)

    def test_feature_question_enables(self):
        assert question_enables("Yes, quotes first", BILLING) == ["quotes", "invoicing"]
        assert question_enables("Neither", BILLING) == []
        assert question_enables("No, just internal", CUSTOMER_BOOKING) == []

    def test_extract_slots_prefers_direct_answer(self):
        updates = extract_slots("Just me", get_kit_knowledge("plumber"), TEAM_SIZE)
        team = [u for u in updates if u.slot == "team_size"]

        assert len(team) == 1
        assert team[0].value == "solo"
        assert any(u.slot == "complexity" and u.value == "simple" for u in updates)
