"""Form lint CLI — ``formflow-check``.

Loads every form under a directory and prints branch rules that the
resolver will ignore, that dangle, or that loop back onto their own field.
Intended for CI on the forms repository or a quick look before deploying.

Examples::

    # Lint the default forms/ directory
    uv run formflow-check

    # Lint another directory and fail the build on any finding
    uv run formflow-check path/to/forms --strict
"""

from __future__ import annotations

import argparse
import logging
import os
import sys

from formflow.lint import lint_form
from formflow.store import FormStore

logger = logging.getLogger(__name__)


def run_check(forms_dir: str | None = None) -> dict[str, list]:
    """Load the forms and return ``{form_id: [FormIssue, ...]}``."""
    store = FormStore(forms_dir=forms_dir)
    store.load()
    report = {form.id: lint_form(form) for form in store.list_forms()}
    logger.info(
        "Checked %d forms, %d issues",
        len(report), sum(len(v) for v in report.values()),
    )
    return report


def cli() -> None:
    """Console-script entry point: ``formflow-check``."""
    parser = argparse.ArgumentParser(
        prog="formflow-check",
        description="Report inert, dangling, or self-referencing branch rules.",
    )
    parser.add_argument(
        "forms_dir",
        nargs="?",
        default=os.getenv("SERVER_FORMS_DIR") or None,
        help="Directory of YAML forms (default: $SERVER_FORMS_DIR or forms/ at the repo root)",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        default=False,
        help="Exit with status 1 when any issue is found",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (default: WARNING)",
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    report = run_check(args.forms_dir)
    total = 0
    for form_id, issues in report.items():
        for issue in issues:
            total += 1
            print(f"{form_id}:{issue.field_id}: [{issue.kind}] {issue.detail}")

    print(f"{total} issue(s) in {len(report)} form(s)")
    sys.exit(1 if args.strict and total else 0)
