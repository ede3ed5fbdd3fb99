"""
Response assembly: the confirmation summary and the final AppConfig.
"""

from typing import Optional

from src.catalog.behaviors import BUNDLES_BY_ID
from src.catalog.features import FEATURES_BY_ID
from src.catalog.kits import get_kit_knowledge
from src.discovery.models import AppConfig, ConversationState
from src.discovery.phrases import DEFAULT_THEME, format_industry_name

TEAM_SIZE_LABELS = {
    "solo": "just you",
    "small": "a small team",
    "medium": "a growing team",
    "large": "a larger team",
}

MAX_LISTED_FEATURES = 8


def _feature_line(feature_id: str, kit_id: Optional[str]) -> str:
    kit = get_kit_knowledge(kit_id)
    if feature_id in kit.feature_descriptions:
        return f"- {kit.describe_feature(feature_id).capitalize()}"
    feature = FEATURES_BY_ID.get(feature_id)
    return f"- {feature.name if feature else kit.describe_feature(feature_id).capitalize()}"


def render_summary(state: ConversationState) -> str:
    """The plan as shown to the user before they confirm it."""
    ledger = state.ledger
    industry = format_industry_name(state.kit_id)
    focus = "customer interaction" if ledger.customer_facing.value else "business operations"

    lines = [f"I'll create a {industry} app focused on {focus}."]

    details = []
    if ledger.team_size.value:
        details.append(f"built for {TEAM_SIZE_LABELS[ledger.team_size.value]}")
    if ledger.complexity.value:
        details.append(f"{ledger.complexity.value} setup")
    if state.secondary_industries:
        extras = ", ".join(format_industry_name(k) for k in state.secondary_industries)
        details.append(f"also covering {extras}")
    if details:
        lines.append(f"It'll be {'; '.join(details)}.")

    if state.enabled_features:
        lines.append("")
        lines.append("What's included:")
        shown = [f for f in state.enabled_features if f != "crud"][:MAX_LISTED_FEATURES]
        lines.extend(_feature_line(f, state.kit_id) for f in shown)
        hidden = len([f for f in state.enabled_features if f != "crud"]) - len(shown)
        if hidden > 0:
            lines.append(f"- ...and {hidden} more")

    if ledger.integrations.value:
        lines.append("")
        lines.append(f"Connected to: {', '.join(ledger.integrations.value)}")

    if state.business_name or state.theme_preset:
        lines.append("")
        if state.business_name:
            lines.append(f"Name: {state.business_name}")
        if state.theme_preset:
            lines.append(f"Style: {state.theme_preset}")

    return "\n".join(lines)


def _behavior_theme(behavior_id: Optional[str]) -> str:
    bundle = BUNDLES_BY_ID.get(behavior_id) if behavior_id else None
    return bundle.theme if bundle else DEFAULT_THEME


def build_app_config(state: ConversationState) -> AppConfig:
    """
    Final build configuration.

    Slots nobody filled get conservative defaults: a solo, simple,
    internal app in the general kit, styled like the matched behavior.
    """
    ledger = state.ledger
    kit = get_kit_knowledge(state.kit_id)

    return AppConfig(
        industry=kit.id,
        sub_vertical=ledger.sub_vertical.value,
        team_size=ledger.team_size.value or "solo",
        complexity=ledger.complexity.value or "simple",
        customer_facing=bool(ledger.customer_facing.value),
        features=list(state.enabled_features),
        answers=dict(state.answers),
        business_name=state.business_name,
        theme_preset=state.theme_preset or _behavior_theme(state.behavior_id),
        integrations=list(ledger.integrations.value or []),
        primary_entities=list(ledger.primary_entities.value or kit.entities),
        secondary_industries=list(state.secondary_industries),
        behavior=state.behavior_id,
        original_description=state.original_input,
    )


__all__ = ["render_summary", "build_app_config"]
