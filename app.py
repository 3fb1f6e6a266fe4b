from textual.app import App
from state import FormState
from network.assembler import NetworkDocumentAssembler
from network.netplan import NetplanExporter
from logger import log


class NetworkFormApp(App):
    """Network setting form that produces a netplan file."""

    CSS = """
    Screen {
        background: $surface;
    }
    .title {
        text-style: bold;
        color: $accent;
        margin-bottom: 1;
    }
    .section {
        border: solid $primary;
        padding: 0 1;
        margin-bottom: 1;
        height: auto;
    }
    .field_err {
        color: $error;
    }
    #content {
        margin: 1 2;
    }
    #form {
        margin: 1 2;
    }
    #nav_buttons {
        dock: bottom;
        height: 3;
        align: center middle;
        margin: 1 2;
    }
    Button {
        margin: 0 1;
    }
    #err_msg {
        margin-top: 1;
        color: $error;
    }
    #yaml_preview {
        border: solid $primary;
        padding: 0 1;
    }
    Input {
        margin-bottom: 0;
    }
    """

    def __init__(self, output_dir: str = ".") -> None:
        super().__init__()
        self.state = FormState()
        self.assembler = NetworkDocumentAssembler()
        self.exporter = NetplanExporter(output_dir=output_dir)
        log.info("NetworkFormApp started (output_dir=%s)", output_dir)

    async def on_mount(self) -> None:
        from screens.s01_network_form import NetworkFormScreen
        await self.push_screen(NetworkFormScreen())
