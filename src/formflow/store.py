"""FormStore — loads authored forms from YAML into typed models.

Each ``*.yaml`` / ``*.yml`` file under the forms directory holds exactly one
form.  The store is loaded once at startup and provides lookup by form id.

Usage::

    store = FormStore()             # defaults to forms/ relative to repo root
    store.load()                    # parse all YAML files

    form = store.get_form("customer_feedback")
    session = NavigationSession(form)
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional

import yaml

from formflow.models.field import Form

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Utility helpers
# ---------------------------------------------------------------------------

def find_repo_root(start: Optional[Path] = None) -> Path:
    """Walk upwards from *start* to find the repo root (dir with pyproject.toml or .git).

    Falls back to cwd if no marker is found.
    """
    p = (start or Path(__file__).resolve()).parent
    for parent in [p, *p.parents]:
        if (parent / "pyproject.toml").exists() or (parent / ".git").exists():
            return parent
    return Path.cwd()


def load_yaml(path: Path | str) -> Any:
    """Load a single YAML file and return the parsed contents."""
    if isinstance(path, str):
        path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Missing YAML file: {path}")
    with path.open("r", encoding="utf-8") as f:
        return yaml.safe_load(f)


# ---------------------------------------------------------------------------
# FormStore
# ---------------------------------------------------------------------------

class FormStore:
    """Loads every form under ``forms_dir`` and provides typed lookup.

    Attributes populated after :meth:`load`:

        forms — dict[form_id, Form], in file-name order
    """

    def __init__(self, forms_dir: str | Path | None = None) -> None:
        if forms_dir is None:
            forms_dir = find_repo_root() / "forms"
        self._base = Path(forms_dir)
        self.forms: dict[str, Form] = {}
        # form_id -> source file, for error messages
        self._sources: dict[str, Path] = {}

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load(self) -> None:
        """Parse all YAML files under the forms directory.

        Raises ``FileNotFoundError`` if the directory does not exist and
        ``ValueError`` for malformed forms or duplicate form ids.
        """
        if not self._base.is_dir():
            raise FileNotFoundError(f"Missing forms directory: {self._base}")

        paths = sorted([*self._base.glob("*.yaml"), *self._base.glob("*.yml")])
        for path in paths:
            self.add_form(self._parse(path), source=path)

        logger.info("FormStore loaded: %d forms from %s", len(self.forms), self._base)

    def add_form(self, form: Form, *, source: Path | None = None) -> None:
        """Register an already-built form.  Raises ValueError on a duplicate id."""
        if form.id in self.forms:
            where = self._sources.get(form.id)
            raise ValueError(f"Form '{form.id}' already exists (first defined in {where})")
        self.forms[form.id] = form
        if source is not None:
            self._sources[form.id] = source

    @staticmethod
    def _parse(path: Path) -> Form:
        raw = load_yaml(path)
        if not isinstance(raw, dict):
            raise ValueError(f"Form file {path} must contain a mapping, got {type(raw).__name__}")
        # The file stem doubles as the form id when none is given
        raw.setdefault("id", path.stem)
        return Form(**raw)

    # ------------------------------------------------------------------
    # Lookup helpers
    # ------------------------------------------------------------------

    def get_form(self, form_id: str) -> Form:
        """Look up a form by id.

        Raises:
            KeyError: if no form with that id was loaded.
        """
        return self.forms[form_id]

    def list_forms(self) -> list[Form]:
        return list(self.forms.values())
