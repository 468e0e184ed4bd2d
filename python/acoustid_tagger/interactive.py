"""Interactive user prompts and confirmations."""

import sys
from typing import List

from acoustid_tagger.errors import PromptCancelled
from acoustid_tagger.models import ProcessingStats


class InteractivePrompts:
    """Handles user interaction on the terminal."""

    COLORS = {
        "reset": "\033[0m",
        "bold": "\033[1m",
        "green": "\033[92m",
        "yellow": "\033[93m",
        "red": "\033[91m",
        "cyan": "\033[96m",
        "dim": "\033[2m",
    }

    def __init__(self, no_color: bool = False, quiet: bool = False):
        """
        Initialize interactive prompts.

        Args:
            no_color: Disable colored output
            quiet: Suppress non-essential output
        """
        self.no_color = no_color
        self.quiet = quiet

        if no_color:
            self.COLORS = {k: "" for k in self.COLORS}

    def _c(self, color: str, text: str) -> str:
        """Apply color to text."""
        return f"{self.COLORS.get(color, '')}{text}{self.COLORS['reset']}"

    def print(self, *args, **kwargs):
        """Print unless quiet mode."""
        if not self.quiet:
            print(*args, **kwargs)

    def _read(self, prompt: str) -> str:
        """Read one line, turning EOF and Ctrl-C into a cancellation."""
        try:
            return input(prompt)
        except (EOFError, KeyboardInterrupt):
            print()
            raise PromptCancelled("input closed") from None

    def select_one(self, label: str, items: List[str]) -> int:
        """
        Show a numbered list and return the chosen index.

        Args:
            label: Heading shown above the list
            items: Display text per entry (may span several lines)

        Returns:
            Zero-based index of the selected item

        Raises:
            PromptCancelled: If the user cancels.
        """
        if not items:
            raise PromptCancelled("nothing to select")

        print(f"\n{self._c('cyan', label)}")
        print("-" * 60)

        for i, item in enumerate(items, 1):
            first, *rest = item.split("\n")
            print(f"  [{i}] {first}")
            for line in rest:
                print(f"      {self._c('dim', line)}")

        print(f"  [c] Cancel")
        print(f"  [q] Quit processing")

        while True:
            choice = self._read(
                f"\n{self._c('bold', f'Select [1-{len(items)}/c/q]: ')} "
            ).strip().lower()

            if choice == "c":
                raise PromptCancelled("selection cancelled")
            if choice == "q":
                sys.exit(0)

            try:
                idx = int(choice)
                if 1 <= idx <= len(items):
                    return idx - 1
            except ValueError:
                pass

            print(self._c("red", "Invalid selection. Try again."))

    def edit_value(self, label: str, default: str) -> str:
        """
        Prompt for a replacement value.

        Args:
            label: Field name
            default: Current value, kept when the user just presses Enter

        Returns:
            The entered value, or default

        Raises:
            PromptCancelled: On EOF or Ctrl-C.
        """
        value = self._read(f"  {label} [{default}]: ").strip()
        return value if value else default

    def show_progress(self, current: int, total: int,
                      message: str = "") -> None:
        """Display which file is being processed."""
        self.print(f"\n{self._c('bold', f'[{current}/{total}]')} {message}")

    def show_summary(self, stats: ProcessingStats) -> None:
        """Display final processing summary."""
        print(f"\n{self._c('bold', '=' * 60)}")
        print(f"{self._c('bold', 'Processing Summary')}")
        print("=" * 60)

        print(f"Files processed:     {stats.total_files}")
        print(f"Tags updated:        {self._c('green', str(stats.tags_updated))}")
        print(f"Files renamed:       {stats.files_renamed}")
        print(f"Files skipped:       {stats.files_skipped}")
        print(f"No match:            {stats.no_match}")
        print(f"Filename fallbacks:  {stats.filename_fallbacks}")

        if stats.errors:
            print(f"\n{self._c('red', 'Errors:')}")
            for error in stats.errors[:10]:  # Limit displayed errors
                print(f"  - {error}")
            if len(stats.errors) > 10:
                print(f"  ... and {len(stats.errors) - 10} more errors")
