#!/usr/bin/env python3
"""Walk a form end-to-end with generated answers, printing every step.

Drives a ``NavigationSession`` directly (no server) and prints each field
presented, the answer chosen, and any rejection.  Handy for eyeballing how
a form's branch rules play out.

By default answers are **randomised** (``--random``, on by default) so each
run explores a different path through the form.  ``--no-random`` always
picks the first option / a valid placeholder.

Usage::

    # Random walk through the customer feedback form
    python scripts/simulate_form.py

    # Deterministic walk through another form
    python scripts/simulate_form.py -f job_application --no-random

    # Occasionally press "back" and submit invalid answers
    python scripts/simulate_form.py --back-rate 0.2 --invalid-rate 0.2

    # List available forms
    python scripts/simulate_form.py --list-forms
"""

from __future__ import annotations

import argparse
import logging
import random
import sys
from pathlib import Path
from typing import Any

_SCRIPT_DIR = Path(__file__).resolve().parent
_REPO_ROOT = _SCRIPT_DIR.parent
sys.path.insert(0, str(_REPO_ROOT / "src"))

from formflow.models.session import CompletionStep, FieldPayload, QuestionStep  # noqa: E402
from formflow.navigation import NavigationSession  # noqa: E402
from formflow.store import FormStore  # noqa: E402

# Hard stop in case a form's rules loop forever (self-references, back jumps)
MAX_STEPS = 200

_RANDOM_TEXT_POOL = [
    "Ann Example",
    "Looking forward to it",
    "n/a",
    "Something longer, with punctuation!",
]

_RANDOM_EMAIL_POOL = ["ann@example.com", "bob.smith@mail.example.org"]
_RANDOM_DATE_POOL = ["2026-01-15", "2026-11-01", "2027-03-30"]

_quiet = False


def _print(*args: Any) -> None:
    if not _quiet:
        print(*args)


# ---------------------------------------------------------------------------
# Answer generation
# ---------------------------------------------------------------------------


def generate_answer(field: FieldPayload, random_mode: bool) -> Any:
    """Produce a valid answer for ``field``.

    Optional fields are sometimes skipped in random mode.
    """
    if random_mode and not field.required and random.random() < 0.25:
        return None

    kind = field.kind
    if kind == "select":
        labels = [o["label"] for o in field.options or []]
        if not labels:
            return None
        if field.multiple:
            if not random_mode:
                return labels[:1]
            return random.sample(labels, random.randint(1, len(labels)))
        return random.choice(labels) if random_mode else labels[0]

    if kind == "rating":
        top = (field.constraints or {}).get("max_rating", 5)
        return random.randint(1, top) if random_mode else top

    if kind == "email":
        return random.choice(_RANDOM_EMAIL_POOL) if random_mode else _RANDOM_EMAIL_POOL[0]

    if kind == "date":
        return random.choice(_RANDOM_DATE_POOL) if random_mode else _RANDOM_DATE_POOL[0]

    if kind == "file":
        allowed = (field.constraints or {}).get("allowed_extensions") or [".pdf"]
        ext = random.choice(allowed) if random_mode else allowed[0]
        if not ext.startswith("."):
            ext = "." + ext
        return f"upload{ext}"

    return random.choice(_RANDOM_TEXT_POOL) if random_mode else _RANDOM_TEXT_POOL[0]


def generate_invalid_answer(field: FieldPayload) -> Any:
    """An answer the validator should refuse, or None when there is none."""
    if field.required:
        return ""
    if field.kind == "email":
        return "not-an-email"
    if field.kind == "file" and (field.constraints or {}).get("allowed_extensions"):
        return "upload.exe"
    return None


# ---------------------------------------------------------------------------
# Simulation loop
# ---------------------------------------------------------------------------


def _describe(field: FieldPayload) -> str:
    extra = ""
    if field.options:
        extra = " [" + " | ".join(o["label"] for o in field.options) + "]"
    if field.constraints:
        extra += f" {field.constraints}"
    req = "*" if field.required else ""
    return f"{field.id}{req} ({field.kind}){extra}"


def run_simulation(
    store: FormStore,
    form_id: str,
    random_mode: bool,
    back_rate: float,
    invalid_rate: float,
) -> bool:
    """Walk one form to completion.  Returns False if MAX_STEPS was hit."""
    form = store.get_form(form_id)
    session = NavigationSession(form)

    _print(f"\n{'=' * 62}")
    _print(f" Form: {form.title or form.id} ({len(form.fields)} fields)")
    _print(f"{'=' * 62}")

    step = session.current_step()
    for n in range(1, MAX_STEPS + 1):
        if isinstance(step, CompletionStep):
            break
        assert isinstance(step, QuestionStep)

        field = step.field
        arrow = "<-" if step.direction == "backward" else "->"
        _print(f"\n [{n:3d}] {arrow} {_describe(field)}  {step.progress}%")
        if step.previous_value is not None:
            _print(f"       previous: {step.previous_value!r}")

        if random_mode and step.history_depth and random.random() < back_rate:
            _print("       action:   back")
            step = session.go_back()
            continue

        if random_mode and random.random() < invalid_rate:
            bad = generate_invalid_answer(field)
            if bad is not None:
                rejected = session.submit_current(bad)
                _print(f"       invalid:  {bad!r} -> {rejected.reason}")

        answer = generate_answer(field, random_mode)
        _print(f"       answer:   {answer!r}")
        step = session.submit_current(answer)
        if step.type == "rejected":
            _print(f"       rejected: {step.reason} ({step.message})")
            step = session.current_step()
    else:
        _print(f"\n [!] Gave up after {MAX_STEPS} steps")
        return False

    _print(f"\n{'=' * 62}")
    _print(f" Completed ({step.reason}), {len(step.answers)} answers")
    _print(f"{'=' * 62}")
    for key, value in step.answers.items():
        _print(f"   {key:<20s} {value!r}")
    return True


def list_forms(store: FormStore) -> None:
    """Print all loaded forms and exit."""
    print("Available forms:")
    print()
    for i, form in enumerate(store.list_forms(), 1):
        print(f"  {i:2d}. {form.id:<25s} ({len(form.fields)} fields)")


def main() -> None:
    global _quiet

    parser = argparse.ArgumentParser(
        description="Simulate a respondent walking through a form.",
    )
    parser.add_argument(
        "-f", "--form",
        default="customer_feedback",
        help="Form id to simulate (default: customer_feedback)",
    )
    parser.add_argument(
        "--forms-dir",
        default=None,
        help="Directory of YAML forms (default: forms/ at the repo root)",
    )
    parser.add_argument(
        "--list-forms",
        action="store_true",
        help="List all available forms and exit",
    )
    parser.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Suppress all print output (exit code still reflects success/failure)",
    )
    parser.add_argument(
        "--random",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Randomise answers (default: on). Use --no-random for deterministic mode.",
    )
    parser.add_argument(
        "--back-rate",
        type=float,
        default=0.0,
        help="Probability of pressing back instead of answering (random mode only)",
    )
    parser.add_argument(
        "--invalid-rate",
        type=float,
        default=0.0,
        help="Probability of trying an invalid answer first (random mode only)",
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    args = parser.parse_args()

    _quiet = args.quiet
    if args.seed is not None:
        random.seed(args.seed)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    store = FormStore(args.forms_dir)
    store.load()

    if args.list_forms:
        list_forms(store)
        sys.exit(0)

    ok = run_simulation(store, args.form, args.random, args.back_rate, args.invalid_rate)
    sys.exit(0 if ok else 1)


if __name__ == "__main__":
    main()
