"""FormStore loading and lookup tests.

Shipped forms (from forms/):
    customer_feedback — 3 fields, "No" on recommend submits early
    job_application   — 10 fields, forward jumps on role, backward jump on confirm
"""

import pytest

from formflow.store import FormStore, find_repo_root, load_yaml


# =====================================================================
# Shipped forms
# =====================================================================


class TestShippedForms:
    """The example forms load with the expected shape."""

    def test_loads_both_forms(self, store):
        assert set(store.forms) == {"customer_feedback", "job_application"}

    def test_list_forms_in_file_order(self, store):
        assert [f.id for f in store.list_forms()] == ["customer_feedback", "job_application"]

    def test_customer_feedback(self, store):
        form = store.get_form("customer_feedback")
        assert [f.id for f in form.fields] == ["name", "recommend", "satisfaction"]
        recommend = form.get_field("recommend")
        assert recommend.option_labels == ["Yes", "No"]
        assert recommend.logic_rules[0].is_submit
        assert form.get_field("satisfaction").effective_max_rating == 5

    def test_job_application(self, store):
        form = store.get_form("job_application")
        assert len(form.fields) == 10
        assert form.get_field("skills").is_multi_select
        assert form.get_field("cv").allowed_extensions == [".pdf", ".docx"]
        assert form.fields[-1].id == "confirm"

    def test_unknown_form_raises_key_error(self, store):
        with pytest.raises(KeyError):
            store.get_form("nope")


# =====================================================================
# Loading from arbitrary directories
# =====================================================================


class TestLoading:
    """Error handling and conventions when parsing YAML files."""

    def test_id_defaults_to_file_stem(self, tmp_path):
        (tmp_path / "signup.yml").write_text(
            "fields:\n  - {id: a, kind: text}\n", encoding="utf-8",
        )
        s = FormStore(tmp_path)
        s.load()
        assert s.get_form("signup").fields[0].id == "a"

    def test_duplicate_form_id_rejected(self, tmp_path):
        body = "id: same\nfields:\n  - {id: a, kind: text}\n"
        (tmp_path / "one.yaml").write_text(body, encoding="utf-8")
        (tmp_path / "two.yaml").write_text(body, encoding="utf-8")
        with pytest.raises(ValueError, match="already exists"):
            FormStore(tmp_path).load()

    def test_missing_directory(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            FormStore(tmp_path / "missing").load()

    def test_non_mapping_rejected(self, tmp_path):
        (tmp_path / "bad.yaml").write_text("- just\n- a list\n", encoding="utf-8")
        with pytest.raises(ValueError, match="must contain a mapping"):
            FormStore(tmp_path).load()

    def test_duplicate_field_ids_rejected(self, tmp_path):
        (tmp_path / "dup.yaml").write_text(
            "fields:\n  - {id: a, kind: text}\n  - {id: a, kind: email}\n",
            encoding="utf-8",
        )
        with pytest.raises(ValueError, match="duplicate field id"):
            FormStore(tmp_path).load()

    def test_empty_directory_loads_nothing(self, tmp_path):
        s = FormStore(tmp_path)
        s.load()
        assert s.list_forms() == []


# =====================================================================
# Utility helpers
# =====================================================================


def test_find_repo_root_has_forms(forms_dir):
    assert find_repo_root() == forms_dir.parent


def test_load_yaml_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_yaml(tmp_path / "absent.yaml")
