"""Prompt templating helpers."""
from __future__ import annotations
import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping

import yaml

LOGGER = logging.getLogger("textvoice.templates")

_PLACEHOLDER = re.compile(r"\{(\w+)\}")


@dataclass(frozen=True)
class PromptTemplate:
    id: str
    name: str
    template: str
    variables: tuple[str, ...] = field(default_factory=tuple)
    description: str | None = None


PROMPT_TEMPLATES: dict[str, PromptTemplate] = {
    "GREETING": PromptTemplate(
        id="greeting",
        name="Greeting",
        template="Say hello and tell me a fun fact about {topic} in one sentence.",
        variables=("topic",),
        description="Generates a friendly greeting with a fact",
    ),
    "EXPLAIN": PromptTemplate(
        id="explain",
        name="Explanation",
        template="Explain {concept} in simple terms suitable for {audience}.",
        variables=("concept", "audience"),
    ),
    "HR_ADVICE": PromptTemplate(
        id="hr-advice",
        name="HR Advice",
        template=(
            "You're a senior HR manager who works for a small company.\n"
            "Someone has done something wrong during a casual office conversation.\n"
            "Give diminutive advice as though you're talking to them in person.\n"
            "Make liberal use of sarcasm and witty remarks.\n"
            "IMPORTANT: Be very concise and to the point."
        ),
    ),
}


class TemplateNotFoundError(KeyError):
    """Raised for an unknown template id."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else ""


class MissingVariablesError(ValueError):
    """Raised when placeholders remain after substitution."""

    def __init__(self, missing: list[str]) -> None:
        self.missing = missing
        super().__init__(f"Missing variables: {', '.join(missing)}")


def get_prompt_template(template_id: str) -> PromptTemplate | None:
    return PROMPT_TEMPLATES.get(template_id)


def register_template(key: str, template: PromptTemplate) -> None:
    """Add a template to the registry. Existing keys cannot be replaced."""
    if key in PROMPT_TEMPLATES:
        raise ValueError(f"Template {key} is already registered")
    PROMPT_TEMPLATES[key] = template


def _parse_template(key: str, entry: object, path: str | Path) -> PromptTemplate:
    if not isinstance(entry, dict):
        raise ValueError(f"Template {key} in {path} must be a mapping")
    if "template" not in entry:
        raise ValueError(f"Template {key} in {path} has no 'template'")
    variables = entry.get("variables") or []
    if not isinstance(variables, list):
        raise ValueError(f"Template {key} in {path}: 'variables' must be a list")
    return PromptTemplate(
        id=str(entry.get("id", key.lower())),
        name=str(entry.get("name", key)),
        template=str(entry["template"]),
        variables=tuple(str(v) for v in variables),
        description=entry.get("description"),
    )


def load_templates(path: str | Path) -> dict[str, PromptTemplate]:
    """
    Load extra templates from a YAML file and register them.

    The file is a mapping of registry key to
    ``{id, name, template, variables?, description?}``. Every entry is
    validated before any is registered, so a bad file registers nothing.

    Args:
        path: Path to the YAML file.

    Returns:
        The templates that were registered.
    """
    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}
    if not isinstance(raw, dict):
        raise ValueError(f"Template file {path} must contain a mapping")

    loaded: dict[str, PromptTemplate] = {}
    for key, entry in raw.items():
        key = str(key)
        if key in PROMPT_TEMPLATES:
            raise ValueError(f"Template {key} in {path} is already registered")
        loaded[key] = _parse_template(key, entry, path)

    for key, tpl in loaded.items():
        register_template(key, tpl)
    LOGGER.info("Loaded %d prompt templates from %s", len(loaded), path)
    return loaded


class PromptBuilder:
    """
    Fill ``{name}`` placeholders of a registered template.

    Usage:
        PromptBuilder("GREETING").set_variable("topic", "AI").build()
    """

    def __init__(self, template_id: str) -> None:
        template = get_prompt_template(template_id)
        if template is None:
            raise TemplateNotFoundError(f"Template {template_id} not found")
        self.template = template
        self.variables: dict[str, str] = {}

    def set_variable(self, name: str, value: str) -> PromptBuilder:
        self.variables[name] = value
        return self

    def set_variables(self, variables: Mapping[str, str]) -> PromptBuilder:
        self.variables.update(variables)
        return self

    def build(self) -> str:
        """
        Render the prompt.

        Raises:
            MissingVariablesError: if any ``{name}`` token is left.
        """
        prompt = self.template.template
        for name, value in self.variables.items():
            prompt = prompt.replace(f"{{{name}}}", value)

        missing = [m.group(0) for m in _PLACEHOLDER.finditer(prompt)]
        if missing:
            raise MissingVariablesError(missing)
        return prompt

    @classmethod
    def from_string(cls, text: str) -> PromptBuilder:
        """Create a builder from raw text, skipping the registry lookup."""
        builder = cls.__new__(cls)
        builder.template = PromptTemplate(id="custom", name="Custom", template=text)
        builder.variables = {}
        return builder
