"""Tests for {{placeholder}} rendering and default template seeding."""

import pytest

from tattoo_workshop.repositories.email_repo import EmailRepository
from tattoo_workshop.services.email_templates import (
    DEFAULT_TEMPLATES,
    MISSING_ERROR,
    TemplateRenderError,
    render_template,
    seed_default_templates,
)


class TestRenderTemplate:
    def test_exact_substitution(self):
        assert render_template("Hi {{name}}", {"name": "Alice"}) == "Hi Alice"

    def test_whitespace_inside_braces(self):
        assert render_template("Hi {{ name }}!", {"name": "Bob"}) == "Hi Bob!"

    def test_repeated_placeholder(self):
        text = "{{a}}-{{a}}-{{b}}"
        assert render_template(text, {"a": 1, "b": "x"}) == "1-1-x"

    def test_missing_key_renders_empty(self):
        assert render_template("Hi {{name}}, see you", {}) == "Hi , see you"

    def test_none_renders_empty(self):
        assert render_template("[{{notes}}]", {"notes": None}) == "[]"

    def test_missing_key_with_error_policy(self):
        with pytest.raises(TemplateRenderError) as exc_info:
            render_template("{{b}} {{a}}", {}, missing_policy=MISSING_ERROR)
        assert exc_info.value.missing == ["a", "b"]

    def test_text_without_placeholders_is_unchanged(self):
        text = "<p>No variables {here}</p>"
        assert render_template(text, {"here": "x"}) == text


class TestSeedDefaultTemplates:
    def test_defaults_are_present(self, session):
        names = {t.name for t in EmailRepository().list_templates(session)}
        assert names == {t["name"] for t in DEFAULT_TEMPLATES}

    def test_seeding_is_insert_if_absent(self, session):
        repo = EmailRepository()
        template = repo.get_template(session, "appointment_confirmation")
        template.subject = "Custom subject"
        repo.save_template(session, template)

        assert seed_default_templates(session) == 0
        assert repo.get_template(session, "appointment_confirmation").subject == (
            "Custom subject"
        )
