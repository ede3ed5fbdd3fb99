"""Unit tests for the feature detector and behavior matcher."""

import pytest

from src.catalog.schema import BehaviorBundle, FeatureDefinition, Priority
from src.discovery.behavior_matcher import BehaviorMatcher
from src.discovery.feature_detector import FeatureDetector, priority_for_score
from src.discovery.industry import resolved_industry_for
from src.discovery.models import FeatureScore
from src.discovery.parser import parse


class TestPriorityForScore:
    """Test score to priority thresholds."""

    @pytest.mark.parametrize(
        "score,expected",
        [
            (0.81, Priority.ESSENTIAL),
            (0.8, Priority.IMPORTANT),
            (0.5, Priority.IMPORTANT),
            (0.49, Priority.NICE_TO_HAVE),
        ],
    )
    def test_thresholds(self, score, expected):
        assert priority_for_score(score) == expected


class TestFeatureDetector:
    """Test feature scoring, dependency gating and top-up."""

    @pytest.fixture
    def gated_detector(self):
        """Two features where beta depends on alpha."""
        return FeatureDetector(
            features=[
                FeatureDefinition(
                    id="alpha", name="Alpha", keywords=["alpha"], default_priority=Priority.IMPORTANT
                ),
                FeatureDefinition(
                    id="beta",
                    name="Beta",
                    keywords=["beta"],
                    dependencies=["alpha"],
                    default_priority=Priority.IMPORTANT,
                ),
            ]
        )

    def test_dependent_feature_dropped_without_dependency(self, gated_detector):
        """A feature whose dependency did not score is gated out."""
        detected = gated_detector.detect(parse("beta please"), resolved_industry_for("general"))

        assert [d.id for d in detected] == []

    def test_dependent_feature_kept_with_dependency(self, gated_detector):
        detected = gated_detector.detect(parse("alpha and beta"), resolved_industry_for("general"))

        assert {d.id for d in detected} == {"alpha", "beta"}

    def test_industry_essentials_always_included(self):
        """Trades always get crud, invoicing and job tracking."""
        detected = FeatureDetector().detect(parse("hello"), resolved_industry_for("plumber"))
        ids = [d.id for d in detected]

        assert "crud" in ids
        assert "invoicing" in ids
        assert "job_tracking" in ids

    def test_detects_features_from_keywords(self):
        detected = FeatureDetector().detect(
            parse("I need a dashboard and reminders before appointments"),
            resolved_industry_for("salon"),
        )
        ids = {d.id for d in detected}

        assert "dashboard" in ids
        assert "reminders" in ids
        assert "appointments" in ids

    def test_results_sorted_by_score_before_top_up(self):
        detected = FeatureDetector().detect(
            parse("send invoices and take payments"), resolved_industry_for("plumber")
        )
        scored = [d for d in detected if not d.reasoning.startswith("standard feature")]
        confidences = [d.confidence for d in scored]

        assert confidences == sorted(confidences, reverse=True)

    def test_reasoning_and_implementation_filled(self):
        detected = FeatureDetector().detect(parse("send invoices"), resolved_industry_for("plumber"))
        invoicing = next(d for d in detected if d.id == "invoicing")

        assert invoicing.reasoning
        assert invoicing.suggested_implementation

    def test_dependents_of(self):
        dependents = {f.id for f in FeatureDetector().dependents_of("invoicing")}

        assert "payments" in dependents

    def test_low_scoring_dependency_gates_dependent(self):
        """A dependency present in the pass but under the gate threshold still drops the dependent."""
        scores = [
            FeatureScore(feature_id="payments", score=0.9),
            FeatureScore(feature_id="invoicing", score=0.15),
        ]
        ids = [d.id for d in FeatureDetector().select(scores, resolved_industry_for("general"))]

        assert "payments" not in ids
        assert "invoicing" in ids

    def test_unknown_feature_ids_ignored(self):
        scores = [FeatureScore(feature_id="teleportation", score=0.9)]
        ids = [d.id for d in FeatureDetector().select(scores, resolved_industry_for("general"))]

        assert "teleportation" not in ids


class TestBehaviorMatcher:
    """Test behavior bundle matching."""

    def test_matches_plumber_bundle(self):
        parsed = parse("I'm a solo plumber")
        industry = resolved_industry_for("plumber")
        features = FeatureDetector().detect(parsed, industry)

        behavior = BehaviorMatcher().match(parsed, industry, features)

        assert behavior is not None
        assert behavior.id == "plumber"
        assert behavior.theme == "professional"
        assert 0.0 <= behavior.confidence <= 1.0

    def test_returns_none_below_threshold(self):
        matcher = BehaviorMatcher(
            bundles=[
                BehaviorBundle(
                    id="widgets",
                    name="Widget Shop",
                    keywords=["widget"],
                    industries=["retail"],
                    features=["inventory"],
                    entities=["widget"],
                    weight=5,
                )
            ]
        )

        assert matcher.match(parse("hello there"), resolved_industry_for("general"), []) is None

    def test_tie_goes_to_first_bundle(self):
        bundle = dict(keywords=["widget"], industries=["retail"], features=[], entities=[], weight=5)
        matcher = BehaviorMatcher(
            bundles=[
                BehaviorBundle(id="first", name="First", **bundle),
                BehaviorBundle(id="second", name="Second", **bundle),
            ]
        )

        behavior = matcher.match(parse("my widget store"), resolved_industry_for("ecommerce"), [])

        assert behavior is not None
        assert behavior.id == "first"
