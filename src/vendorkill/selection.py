"""Interactive choice of which catalog entries to delete."""

import logging
import re
from abc import ABC, abstractmethod
from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.prompt import Prompt

from vendorkill.display import console as default_console
from vendorkill.errors import InvalidSelection
from vendorkill.models import Catalog

log = logging.getLogger(__name__)

SELECTION_HINT = "Enter numbers separated by commas or spaces (e.g. 1,3), or press Enter to skip"


def parse_selection(text: str, size: int) -> list[int]:
    """
    Turn user input like ``"1, 3 4"`` into catalog indices.

    Order of first appearance is kept and duplicates are dropped. Every
    number must lie in ``[1, size]``; there is no shortcut for selecting
    everything.

    Raises:
        InvalidSelection: on non-numeric input or out-of-range numbers
    """
    stripped = text.strip()
    if not stripped:
        return []

    indices: list[int] = []
    for part in re.split(r"[\s,]+", stripped):
        if not part:
            continue
        if not part.isdecimal():
            raise InvalidSelection(f"'{part}' is not a number")
        index = int(part)
        if not 1 <= index <= size:
            raise InvalidSelection(f"{index} is out of range (1-{size})")
        if index not in indices:
            indices.append(index)
    return indices


class Selector(ABC):
    """Turns a displayed catalog into the indices chosen for deletion."""

    @abstractmethod
    def select(self, catalog: Catalog) -> list[int]:
        """Return chosen 1-based indices, possibly none."""


class PromptSelector(Selector):
    """Numbered list plus a text prompt on the terminal."""

    def __init__(self, console: Optional[Console] = None, label: str = "Choose the directories to delete"):
        self.console = console or default_console
        self.label = label

    def select(self, catalog: Catalog) -> list[int]:
        if catalog.is_empty:
            return []

        self.console.print(f"[bold]{self.label}[/bold]")
        for index, label in catalog.options.items():
            self.console.print(f"  [bold cyan]{index:>3}[/bold cyan]  {escape(label)}", highlight=False)
        self.console.print(f"[dim]{SELECTION_HINT}[/dim]")

        while True:
            answer = Prompt.ask("[bold cyan]Delete[/bold cyan]", default="", show_default=False, console=self.console)
            try:
                indices = parse_selection(answer, len(catalog))
            except InvalidSelection as e:
                self.console.print(f"[red]{escape(str(e))}[/red]")
                continue
            log.debug("Selected %s", indices)
            return indices

