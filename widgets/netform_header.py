from __future__ import annotations
from functools import lru_cache
import pyfiglet
from textual.widgets import Static

TITLE = "Network Setting"
FONT = "small"


@lru_cache(maxsize=None)
def banner(text: str = TITLE, font: str = FONT) -> str:
    return pyfiglet.figlet_format(text, font=font).rstrip("\n")


class NetformHeader(Static):
    """ASCII-art title with a one-line caption for the current screen."""

    DEFAULT_CSS = """
    NetformHeader {
        color: #22c55e;
        text-style: bold;
        width: 100%;
        padding: 0 2;
    }
    """

    def __init__(self, caption: str = "") -> None:
        text = banner()
        if caption:
            text += f"\n{caption}"
        super().__init__(text, markup=False)
        self.caption = caption
