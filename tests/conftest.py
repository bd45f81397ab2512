from pathlib import Path

import pytest

from formflow.navigation import NavigationSession
from formflow.store import FormStore

from helpers.builders import linear_form, scenario_form

FORMS_DIR = Path(__file__).resolve().parent.parent / "forms"


@pytest.fixture
def forms_dir():
    return FORMS_DIR


@pytest.fixture(scope="session")
def store():
    """Load the shipped example forms once for the entire test session."""
    s = FormStore(FORMS_DIR)
    s.load()
    return s


@pytest.fixture
def scenario_session():
    """Fresh session over A(text) -> B(Yes/No, No submits) -> C(rating)."""
    return NavigationSession(scenario_form())


@pytest.fixture
def linear_session():
    """Fresh session over A -> B -> C with no rules."""
    return NavigationSession(linear_form(3))
