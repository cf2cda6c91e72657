"""
Interactive selection menus.

Shows a numbered list of labels and asks for the user's choice with
`click.prompt`. Answers outside the list are rejected by click and asked
again. The menu and prompt go to stderr so that log output on stdout stays
pipeable.
"""

import logging
from typing import Sequence, TypeVar

import click

from .exceptions import ValidationError
from .models import Selectable

T = TypeVar('T', bound=Selectable)

logger = logging.getLogger(__name__)


def select_item(items: Sequence[T], prompt: str) -> T:
    """
    Ask the user to pick one item.

    Args:
        items: Items exposing `label()`
        prompt: Question shown above the menu

    Returns:
        The chosen item

    Raises:
        ValidationError: If there is nothing to choose from
        click.Abort: If the user interrupts the prompt or input ends
    """
    if not items:
        raise ValidationError(f"Nothing to select for: {prompt}")

    click.echo(prompt, err=True)
    for number, item in enumerate(items, start=1):
        click.echo(f"  {number}) {item.label()}", err=True)

    choice = click.prompt(
        "Enter a number",
        type=click.IntRange(1, len(items)),
        err=True
    )

    selected = items[choice - 1]
    logger.debug(f"Selected {selected.label()}")
    return selected
