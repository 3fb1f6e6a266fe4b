from __future__ import annotations
from pathlib import Path
from typing import Optional
from rich.markup import escape
from rich.syntax import Syntax
from textual.app import ComposeResult
from textual.screen import Screen
from textual.widgets import Footer, Button, Static
from textual.containers import Horizontal, VerticalScroll
from widgets.netform_header import NetformHeader
from network.netplan import NetplanArtifact
from logger import log


class PreviewScreen(Screen):
    """Shows the generated netplan file and saves it on request."""

    BINDINGS = [
        ("escape", "go_back", "Back"),
        ("d", "download", "Download"),
    ]

    def __init__(self, artifact: NetplanArtifact) -> None:
        super().__init__()
        self.artifact = artifact
        self.saved_path: Optional[Path] = None

    def compose(self) -> ComposeResult:
        yield NetformHeader(f"Preview of {self.artifact.filename}")
        with VerticalScroll(id="content"):
            yield Static(
                f"{self.artifact.filename} ({self.artifact.mime_type}, "
                f"{self.artifact.size} bytes)",
                classes="title",
            )
            yield Static(
                Syntax(self.artifact.text, "yaml", theme="ansi_dark"),
                id="yaml_preview",
            )
            yield Static("", id="status_msg")
            yield Static("", id="err_msg")
        with Horizontal(id="nav_buttons"):
            yield Button("← Back", id="btn_back", variant="default")
            yield Button("Download", id="btn_download", variant="success")
        yield Footer()

    def action_go_back(self) -> None:
        self.app.pop_screen()

    def action_download(self) -> None:
        try:
            self.saved_path = self.app.exporter.save(self.artifact)
        except OSError as e:
            log.error("Saving %s failed: %s", self.artifact.filename, e)
            self.query_one("#err_msg", Static).update(
                f"[red]Error saving file: {escape(str(e))}[/red]"
            )
            return
        self.query_one("#status_msg", Static).update(
            f"[green]✓ Saved to {escape(str(self.saved_path))}[/green]"
        )

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "btn_back":
            self.action_go_back()
        elif event.button.id == "btn_download":
            self.action_download()
