"""Jinja2 template loading for new ADR documents.

The default body ships with the package. An external template configured
by the user is rendered with the placeholders ``{{NUMBER}}``,
``{{TITLE}}``, ``{{DATE}}``, ``{{STATUS}}`` and ``{{SUPERSEDES}}``.
External templates are Markdown, not Jinja: block and comment tags are
disabled, and an unknown ``{{NAME}}`` is written back literally.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from jinja2 import Environment, PackageLoader, TemplateSyntaxError, Undefined

DEFAULT_BODY_TEMPLATE = "body.md.j2"

# Tag delimiters that cannot occur in a Markdown document.
_DISABLED_TAGS: dict[str, str] = {
    "block_start_string": "\x1b{%",
    "block_end_string": "%}\x1b",
    "comment_start_string": "\x1b{#",
    "comment_end_string": "#}\x1b",
}


class TemplateUnreadableError(Exception):
    """A configured template is missing, unreadable, or has a broken placeholder."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Cannot read template at {path}: {reason}")
        self.path = path
        self.reason = reason


class LiteralUndefined(Undefined):
    """Renders an unknown placeholder back as ``{{NAME}}``."""

    __slots__ = ()

    def __str__(self) -> str:
        return "{{" + str(self._undefined_name) + "}}"

    def __getattr__(self, name: str) -> Any:
        if name[:2] == "__":
            raise AttributeError(name)
        return LiteralUndefined(name=f"{self._undefined_name}.{name}")


def build_template_environment() -> Environment:
    """Environment over the packaged ``radr/templates`` directory."""
    return Environment(loader=PackageLoader("radr", "templates"), keep_trailing_newline=True)


def build_placeholder_environment() -> Environment:
    """Environment for user templates: ``{{NAME}}`` substitution only."""
    return Environment(
        keep_trailing_newline=True,
        undefined=LiteralUndefined,
        **_DISABLED_TAGS,
    )


def render_default_body(**context: Any) -> str:
    """Render the packaged Context / Decision / Consequences body."""
    template = build_template_environment().get_template(DEFAULT_BODY_TEMPLATE)
    return template.render(**context)


def render_external_template(path: Path, **context: Any) -> str:
    """Render a user template file with *context* as its placeholders.

    Raises:
        TemplateUnreadableError: If the file cannot be read, or a ``{{ }}``
            placeholder in it is not a valid name.
    """
    try:
        source = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise TemplateUnreadableError(path, exc.strerror or type(exc).__name__) from exc
    try:
        template = build_placeholder_environment().from_string(source)
    except TemplateSyntaxError as exc:
        raise TemplateUnreadableError(path, f"line {exc.lineno}: {exc.message}") from exc
    return template.render(**context)
