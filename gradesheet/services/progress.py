from __future__ import annotations

import sys
from typing import Any

from tqdm import tqdm
from tqdm.std import tqdm as TqdmType

"""Download progress display with tqdm (TTY only).

In non-TTY environments (CI, pipes, tests) no bar is created so that ANSI
control sequences never end up in captured output.
"""

__all__ = [
    "DownloadProgress",
    "is_tty_enabled",
]


def is_tty_enabled() -> bool:
    """Return True if stdout is a TTY and progress should be displayed."""
    return sys.stdout.isatty()


class DownloadProgress:
    """Byte counter for a single streamed download.

    The byte count is tracked even when the bar is disabled, so callers can
    report the body size afterwards.
    """

    def __init__(self, total_bytes: int | None, *, description: str = "Fetching sheet", enabled: bool = True) -> None:
        """Initialize progress display.

        Args:
            total_bytes: Content-Length when the server sent one
            description: Label shown in front of the bar
            enabled: Set False to force the bar off even on a TTY
        """
        self.total_bytes = total_bytes
        self.received = 0
        self.enabled = enabled and is_tty_enabled()
        self.pbar: TqdmType[Any] | None
        if self.enabled:
            self.pbar = tqdm(
                total=total_bytes,
                desc=description,
                unit="B",
                unit_scale=True,
                leave=False,
                ncols=80,
                ascii=True,
            )
        else:
            self.pbar = None

    def update(self, chunk_size: int) -> None:
        self.received += chunk_size
        if self.pbar is not None:
            self.pbar.update(chunk_size)

    def close(self) -> None:
        if self.pbar is not None:
            self.pbar.close()
            self.pbar = None

    def __enter__(self) -> DownloadProgress:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()
