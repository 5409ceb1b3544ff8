from __future__ import annotations

import re

import pytest

from textvoice.common.templates import (
    PROMPT_TEMPLATES,
    MissingVariablesError,
    PromptBuilder,
    PromptTemplate,
    TemplateNotFoundError,
    get_prompt_template,
    load_templates,
    register_template,
)


def test_build_substitutes_all_placeholders() -> None:
    out = PromptBuilder("EXPLAIN").set_variables({"concept": "entropy", "audience": "kids"}).build()
    assert out == "Explain entropy in simple terms suitable for kids."
    assert not re.search(r"\{\w+\}", out)


def test_set_variable_is_fluent() -> None:
    builder = PromptBuilder("GREETING")
    assert builder.set_variable("topic", "AI") is builder
    assert builder.set_variables({}) is builder
    assert "fun fact about AI" in builder.build()


def test_every_occurrence_is_replaced() -> None:
    out = PromptBuilder.from_string("{x} and {x} again").set_variable("x", "hi").build()
    assert out == "hi and hi again"


def test_template_without_placeholders_builds_as_is() -> None:
    assert PromptBuilder("HR_ADVICE").build() == PROMPT_TEMPLATES["HR_ADVICE"].template


def test_unknown_template_fails_on_construction() -> None:
    with pytest.raises(TemplateNotFoundError) as exc:
        PromptBuilder("NOPE")
    assert str(exc.value) == "Template NOPE not found"


def test_missing_variable_lists_leftover_tokens() -> None:
    builder = PromptBuilder("EXPLAIN").set_variable("concept", "gravity")
    with pytest.raises(MissingVariablesError) as exc:
        builder.build()
    assert exc.value.missing == ["{audience}"]
    assert "Missing variables: {audience}" in str(exc.value)


def test_unrelated_variables_are_ignored() -> None:
    out = PromptBuilder.from_string("plain text").set_variable("unused", "x").build()
    assert out == "plain text"


def test_from_string_uses_custom_template() -> None:
    builder = PromptBuilder.from_string("Tell me about {thing}")
    assert builder.template.id == "custom"
    assert builder.template.name == "Custom"
    assert builder.template.variables == ()
    with pytest.raises(MissingVariablesError):
        builder.build()


def test_load_templates_registers_yaml_entries(tmp_path) -> None:  # noqa: ANN001
    path = tmp_path / "templates.yaml"
    path.write_text(
        "HAIKU:\n"
        "  id: haiku\n"
        "  name: Haiku\n"
        "  template: Write a haiku about {subject}.\n"
        "  variables: [subject]\n",
        encoding="utf-8",
    )
    try:
        loaded = load_templates(path)
        assert list(loaded) == ["HAIKU"]
        assert get_prompt_template("HAIKU").variables == ("subject",)
        assert PromptBuilder("HAIKU").set_variable("subject", "rain").build() == "Write a haiku about rain."
    finally:
        PROMPT_TEMPLATES.pop("HAIKU", None)


def test_load_templates_rejects_non_mapping(tmp_path) -> None:  # noqa: ANN001
    path = tmp_path / "bad.yaml"
    path.write_text("- just\n- a list\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_templates(path)


def test_load_templates_cannot_replace_builtin(tmp_path) -> None:  # noqa: ANN001
    original = PROMPT_TEMPLATES["GREETING"]
    path = tmp_path / "dup.yaml"
    path.write_text('GREETING:\n  template: "Totally different {x}"\n', encoding="utf-8")
    with pytest.raises(ValueError, match="already registered"):
        load_templates(path)
    assert PROMPT_TEMPLATES["GREETING"] is original


def test_register_template_rejects_existing_key() -> None:
    with pytest.raises(ValueError):
        register_template("EXPLAIN", PromptTemplate(id="x", name="X", template="x"))
    assert PROMPT_TEMPLATES["EXPLAIN"].id == "explain"


def test_bad_entry_registers_nothing(tmp_path) -> None:  # noqa: ANN001
    path = tmp_path / "partial.yaml"
    path.write_text(
        "GOOD:\n"
        "  template: Fine {a}\n"
        "  variables: [a]\n"
        "BAD:\n"
        "  name: No template here\n",
        encoding="utf-8",
    )
    with pytest.raises(ValueError, match="BAD"):
        load_templates(path)
    assert "GOOD" not in PROMPT_TEMPLATES
    assert "BAD" not in PROMPT_TEMPLATES


def test_scalar_variables_are_rejected(tmp_path) -> None:  # noqa: ANN001
    path = tmp_path / "scalar.yaml"
    path.write_text("ODE:\n  template: An ode to {subject}.\n  variables: subject\n", encoding="utf-8")
    with pytest.raises(ValueError, match="must be a list"):
        load_templates(path)
    assert "ODE" not in PROMPT_TEMPLATES
