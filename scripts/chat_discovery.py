#!/usr/bin/env python3
"""
Interactive Discovery Chat.

Runs a discovery conversation in the terminal against the in-process engine,
or replays a scripted set of replies for one of the sample businesses.

Usage:
    python scripts/chat_discovery.py

    # Replay a sample conversation
    python scripts/chat_discovery.py --business plumbing

    # Fixed acknowledgment wording and verbose state output
    python scripts/chat_discovery.py --seed 7 --verbose
"""

import argparse
import asyncio
import json
import sys

# Add project root to path
sys.path.insert(0, ".")


# =============================================================================
# Sample Conversations
# =============================================================================

SAMPLE_BUSINESSES = {
    "plumbing": {
        "name": "Solo Plumber",
        "description": "I'm a solo plumber and I need to keep track of my jobs and send invoices",
        "replies": ["Emergency calls mostly", "Quotes first, then invoices", "Modern", "Drip Fix Plumbing", "yes"],
    },
    "cleaning": {
        "name": "Cleaning Company",
        "description": "We run a small cleaning company with 4 staff doing homes and offices",
        "replies": ["just build it"],
    },
    "unknown": {
        "name": "Vague Description",
        "description": "I need an app for my business",
        "replies": [
            "I run a dog grooming salon",
            "Just me",
            "Yes, customers will use it",
            "Yes, text reminders",
            "Playful",
            "skip",
            "not quite, I also sell products online",
            "looks good",
        ],
    },
}


# =============================================================================
# Output Helpers
# =============================================================================


def print_header(text: str, char: str = "=") -> None:
    """Print a formatted header."""
    line = char * 70
    print(f"\n{line}")
    print(f" {text}")
    print(f"{line}\n")


def print_turn(turn, verbose: bool = False) -> None:
    """Print what the user would see for one turn."""
    response = turn.response
    if response.message:
        print(f"Assistant: {response.message}")
    if response.question:
        print(f"Assistant: {response.question}")
    for option in response.options:
        print(f"  - {option}")

    if verbose:
        print(
            f"  [step={response.step.value} questions={response.question_count} "
            f"confidence={response.confidence:.2f} features={len(response.enabled_features)}]"
        )


def print_app_config(config) -> None:
    print_header("App Config", "-")
    print(json.dumps(config.model_dump(mode="json"), indent=2))


# =============================================================================
# Conversation Loops
# =============================================================================


async def run_scripted(business_key: str, seed: int | None, verbose: bool) -> int:
    """Replay a sample conversation. Returns an exit code."""
    from src.discovery import DiscoveryEngine

    business = SAMPLE_BUSINESSES[business_key]
    print_header(f"Sample: {business['name']}")

    engine = DiscoveryEngine()
    print(f"User: {business['description']}")
    turn = await engine.start(business["description"], seed=seed)
    print_turn(turn, verbose)

    for reply in business["replies"]:
        if turn.response.complete:
            break
        print(f"User: {reply}")
        turn = await engine.respond(turn.state, reply)
        print_turn(turn, verbose)

    if not turn.response.complete:
        print("\nConversation did not complete with the scripted replies.")
        return 1

    print_app_config(turn.response.app_config)
    return 0


async def run_interactive(seed: int | None, verbose: bool) -> int:
    """Chat on stdin until the engine completes or the user quits."""
    from src.discovery import DiscoveryEngine

    print_header("Discovery Chat")
    print("Describe your business. Type 'quit' to exit.\n")

    engine = DiscoveryEngine()
    turn = None

    while turn is None or not turn.response.complete:
        try:
            text = input("You: ").strip()
        except (EOFError, KeyboardInterrupt):
            print()
            return 1

        if not text:
            continue
        if text.lower() in {"quit", "exit"}:
            return 1

        if turn is None:
            turn = await engine.start(text, seed=seed)
        else:
            turn = await engine.respond(turn.state, text)
        print_turn(turn, verbose)

    print_app_config(turn.response.app_config)
    return 0


async def main():
    parser = argparse.ArgumentParser(
        description="Chat with the Discovery Engine"
    )
    parser.add_argument(
        "--business", "-b",
        choices=[*SAMPLE_BUSINESSES.keys(), "all"],
        help="Replay a sample conversation instead of chatting"
    )
    parser.add_argument(
        "--seed", "-s",
        type=int,
        default=None,
        help="Seed for acknowledgment wording"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Show step, question count and confidence after each turn"
    )
    args = parser.parse_args()

    if args.business is None:
        return await run_interactive(args.seed, args.verbose)

    keys = list(SAMPLE_BUSINESSES) if args.business == "all" else [args.business]
    failures = 0
    for key in keys:
        failures += await run_scripted(key, args.seed, args.verbose)
    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
