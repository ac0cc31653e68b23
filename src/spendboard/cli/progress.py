"""Import progress display with tqdm (TTY only)."""

import sys
from typing import Any, Optional

from tqdm import tqdm

__all__ = ["ImportProgress", "is_tty_enabled"]


def is_tty_enabled() -> bool:
    """Return True when stdout is a TTY and a progress bar should be shown."""
    return sys.stdout.isatty()


class ImportProgress:
    """Percentage progress bar for a spreadsheet import.

    ``update`` takes the completed percentage and can be handed directly to
    the importer as its progress callback. Outside a TTY nothing is drawn.
    """

    def __init__(self, description: str = "Importing", enabled: Optional[bool] = None) -> None:
        """Initialize the progress bar.

        Args:
            description: Label shown before the bar
            enabled: Force the bar on or off; defaults to TTY detection
        """
        self.enabled = is_tty_enabled() if enabled is None else enabled
        self.percent = 0.0
        self.pbar: Optional[Any] = None
        if self.enabled:
            self.pbar = tqdm(
                total=100,
                desc=description,
                unit="%",
                leave=True,
                ncols=80,
                ascii=True,
                bar_format="{desc}: {percentage:3.0f}%|{bar}|",
            )

    def update(self, percent: float) -> None:
        """Advance the bar to the given percentage (0-100)."""
        percent = max(0.0, min(100.0, percent))
        if self.pbar is not None and percent > self.percent:
            self.pbar.update(percent - self.percent)
        self.percent = max(self.percent, percent)

    def close(self) -> None:
        """Close the progress bar."""
        if self.pbar is not None:
            self.pbar.close()
            self.pbar = None

    def __enter__(self) -> "ImportProgress":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()
