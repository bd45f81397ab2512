"""Form-flow constants shared across the SDK.

These values are referenced by the models, validator, resolver, and
navigation session.  They mirror conventions used by the form-authoring
surface that produces the YAML forms under ``forms/``.

The rating default can be overridden via an environment variable so that
deployments can change the star scale without editing every form.
"""

import os
import re

# Destination value of a branch rule that ends the flow immediately.
SUBMIT_SENTINEL = "SUBMIT"

# Rating fields without an explicit max_rating use this many stars.
# Overridable via FORMFLOW_DEFAULT_MAX_RATING env var.
DEFAULT_MAX_RATING = int(os.getenv("FORMFLOW_DEFAULT_MAX_RATING", "5"))

# Kinds whose answers are option labels.
CHOICE_KINDS: set[str] = {"select"}

# local-part@domain with at least one dot in the domain, no whitespace.
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

# Human-readable messages for each validation failure reason.
FAILURE_MESSAGES: dict[str, str] = {
    "missing-required": "This question is required.",
    "invalid-email": "Please enter a valid email address.",
    "invalid-file-extension": "This file type is not allowed.",
    "session-already-complete": "This response has already been submitted.",
}
