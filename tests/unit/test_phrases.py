"""Unit tests for trigger phrase classifiers and acknowledgment pools."""

import random

import pytest

from src.discovery.phrases import (
    NEUTRAL,
    ConfirmationKind,
    classify_confirmation,
    clean_business_name,
    format_industry_name,
    is_quick_build,
    is_skip,
    is_vague,
    match_theme_preset,
    pick,
    ready_to_build,
)


class TestQuickBuild:
    """Test quick-build phrase detection."""

    @pytest.mark.parametrize(
        "text",
        ["just build it", "Just build it!", "ok, ship it", "Skip the questions please", "skip", "Done."],
    )
    def test_quick_build_phrases(self, text):
        assert is_quick_build(text) is True

    @pytest.mark.parametrize(
        "text",
        [
            "Please don't build it yet",
            "I skip breakfast",
            "I'm done with paperwork by noon",
            "",
            "later I want you to build it so customers can book",
            "Emergency calls, and later I want you to build it so customers can book",
            "build it with online payments",
        ],
    )
    def test_not_quick_build(self, text):
        assert is_quick_build(text) is False

    def test_bare_skip_can_be_disabled(self):
        assert is_quick_build("skip", allow_bare_skip=False) is False
        assert is_quick_build("skip the questions", allow_bare_skip=False) is True


class TestConfirmation:
    """Test confirmation reply classification."""

    @pytest.mark.parametrize("text", ["yes", "Looks good!", "yep, that's right", "this looks great"])
    def test_affirmative(self, text):
        assert classify_confirmation(text) == ConfirmationKind.AFFIRMATIVE

    @pytest.mark.parametrize("text", ["no", "Nope, that's wrong", "not quite"])
    def test_negative(self, text):
        assert classify_confirmation(text) == ConfirmationKind.NEGATIVE

    @pytest.mark.parametrize(
        "text",
        ["not quite, I also do car repairs", "yes but add online payments", "we also have two vans"],
    )
    def test_elaboration(self, text):
        assert classify_confirmation(text) == ConfirmationKind.ELABORATION


class TestSkipAndVague:
    """Test skip and vague-answer detection."""

    def test_skip(self):
        assert is_skip("Skip") is True
        assert is_skip("no preference") is True
        assert is_skip("Blue Wave Cleaning") is False

    @pytest.mark.parametrize("text", ["yes", "maybe", "idk", "I don't know"])
    def test_vague(self, text):
        assert is_vague(text) is True

    def test_specific_answer_is_not_vague(self):
        assert is_vague("Emergency calls mostly") is False


class TestPersonalization:
    """Test theme and name extraction."""

    def test_theme_preset(self):
        assert match_theme_preset("something sleek and modern") == "modern"
        assert match_theme_preset("Playful") == "playful"
        assert match_theme_preset("purple") is None

    def test_clean_business_name(self):
        assert clean_business_name("It's called Drip Fix Plumbing.") == "Drip Fix Plumbing"
        assert clean_business_name("  Bright Smiles  ") == "Bright Smiles"
        assert clean_business_name("...") is None


class TestAcknowledgments:
    """Test acknowledgment helpers."""

    def test_format_industry_name(self):
        assert format_industry_name("mechanic") == "auto repair"
        assert format_industry_name(None) == "business"
        assert format_industry_name("made-up-kit") == "made up kit"

    def test_pick_is_deterministic_for_a_seed(self):
        assert pick(NEUTRAL, random.Random(42)) == pick(NEUTRAL, random.Random(42))

    def test_ready_to_build_mentions_team(self):
        assert "a solo operation" in ready_to_build("plumbing", "solo")[0]
        assert "a team" in ready_to_build("plumbing", "small")[0]
