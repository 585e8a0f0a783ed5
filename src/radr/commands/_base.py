"""Custom Click base classes with --examples support.

Provides RadrCommand and RadrGroup that accept an ``examples`` parameter.
When ``--examples`` is passed, the command prints usage examples and exits.
RadrCommand also turns filesystem errors into a clean CLI error.
"""

from __future__ import annotations

from typing import Any

import click

from radr.domain.slugs import parse_number


def _add_examples_option(cmd: click.Command | click.Group, examples: str) -> None:
    """Attach an eager ``--examples`` flag to a Click command or group."""

    def show_examples(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(examples)
        ctx.exit(0)

    cmd.params.append(
        click.Option(
            ["--examples"],
            is_flag=True,
            expose_value=False,
            is_eager=True,
            callback=show_examples,
            help="Show usage examples.",
        )
    )


class RadrCommand(click.Command):
    """Click Command subclass that supports an ``--examples`` flag."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            _add_examples_option(self, examples)

    def invoke(self, ctx: click.Context) -> Any:
        try:
            return super().invoke(ctx)
        except OSError as exc:
            target = exc.filename if exc.filename is not None else ""
            reason = exc.strerror or str(exc)
            raise click.ClickException(f"{reason}: {target}" if target else reason) from exc


class RadrGroup(click.Group):
    """Click Group subclass that supports an ``--examples`` flag.

    Sets ``command_class = RadrCommand`` so all subcommands automatically
    accept the ``examples`` parameter without explicit ``cls=`` each time.
    """

    command_class = RadrCommand

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            _add_examples_option(self, examples)


class AdrNumber(click.ParamType):
    """An ADR number, with or without zero padding (``3`` or ``0003``)."""

    name = "number"

    def convert(self, value: Any, param: click.Parameter | None, ctx: click.Context | None) -> int:
        if isinstance(value, int):
            return value
        try:
            return parse_number(str(value).strip())
        except ValueError:
            self.fail(f"{value!r} is not an ADR number", param, ctx)


ADR_NUMBER = AdrNumber()
