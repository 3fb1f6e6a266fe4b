from __future__ import annotations
from typing import Dict
from rich.markup import escape
from textual.app import ComposeResult
from textual.css.query import NoMatches
from textual.screen import Screen
from textual.widgets import Footer, Button, Static, Select, Input, Checkbox, Label
from textual.containers import Vertical, Horizontal, VerticalScroll
from widgets.netform_header import NetformHeader
from network.model import AddressingMode, AssemblyError, InterfaceKind
from network.netplan import build_artifact
from network.priority import PRIORITY_CHOICES, Conflict
from logger import log

_ADDRESSED = (InterfaceKind.ETHERNET, InterfaceKind.WIFI)

_MANUAL_INPUTS = (
    ("address", "IP Address", "xxx.xxx.xxx.xx/xx"),
    ("gateway", "Default Gateway", "xxx.xxx.xxx.xx"),
    ("dns", "Preferred DNS Server", "x.x.x.x"),
)


class NetworkFormScreen(Screen):
    """Pick interfaces, priorities and addressing; Save renders the netplan file."""

    BINDINGS = [
        ("ctrl+s", "save", "Save"),
        ("escape", "quit", "Quit"),
    ]

    def __init__(self) -> None:
        super().__init__()
        self.field_errors: Dict[str, str] = {}

    def compose(self) -> ComposeResult:
        priority_options = [(str(v), v) for v in PRIORITY_CHOICES]

        yield NetformHeader("Choose interfaces, then Save to preview the netplan file.")
        with VerticalScroll(id="form"):
            yield Static("Network Setting", classes="title")
            for kind in InterfaceKind:
                k = kind.value
                yield Checkbox(kind.label.upper(), id=f"chk_{k}", value=False)
                with Vertical(id=f"fields_{k}", classes="section"):
                    yield Label("1. Priority")
                    yield Select(
                        options=priority_options,
                        id=f"sel_priority_{k}",
                        prompt="Choose priority…",
                    )
                    yield Static("", id=f"err_{k}_priority", classes="field_err")

                    if kind is InterfaceKind.WIFI:
                        yield Label("Access Point")
                        yield Input(placeholder="Access Point Name", id="inp_ssid")
                        yield Static("", id="err_wifi_ssid", classes="field_err")
                        yield Label("Password")
                        yield Input(id="inp_passphrase", password=True)
                        yield Static("", id="err_wifi_passphrase", classes="field_err")

                    if kind in _ADDRESSED:
                        yield Checkbox("Obtain IP automatically", id=f"chk_auto_{k}", value=True)
                        with Vertical(id=f"manual_{k}"):
                            for field, label, placeholder in _MANUAL_INPUTS:
                                yield Label(f"{label}:")
                                yield Input(placeholder=placeholder, id=f"inp_{k}_{field}")
                                yield Static("", id=f"err_{k}_{field}", classes="field_err")
            yield Static("", id="err_msg")
        with Horizontal(id="nav_buttons"):
            yield Button("Quit", id="btn_quit", variant="default")
            yield Button("Save →", id="btn_save", variant="primary")
        yield Footer()

    def on_mount(self) -> None:
        for kind in InterfaceKind:
            self.query_one(f"#fields_{kind.value}").display = False
        for kind in _ADDRESSED:
            self.query_one(f"#manual_{kind.value}").display = False

    # -- Event handlers ------------------------------------------------------

    def on_checkbox_changed(self, event: Checkbox.Changed) -> None:
        cid = event.checkbox.id or ""
        state = self.app.state
        if cid.startswith("chk_auto_"):
            kind = InterfaceKind(cid[len("chk_auto_"):])
            state[kind].mode = AddressingMode.AUTO if event.value else AddressingMode.MANUAL
            self.query_one(f"#manual_{kind.value}").display = not event.value
        elif cid.startswith("chk_"):
            kind = InterfaceKind(cid[len("chk_"):])
            state[kind].enabled = event.value
            self.query_one(f"#fields_{kind.value}").display = event.value

    def on_select_changed(self, event: Select.Changed) -> None:
        sid = event.select.id or ""
        if not sid.startswith("sel_priority_"):
            return
        kind = InterfaceKind(sid[len("sel_priority_"):])
        registry = self.app.state.priorities

        if event.value is Select.NULL:
            registry.release(kind)
            return

        value = int(event.value)
        if value == registry.get(kind):
            # echo of our own revert below
            return
        result = registry.assign(kind, value)
        if isinstance(result, Conflict):
            self._set_field_error(kind, "priority", result.message)
            self.notify(result.message, severity="warning")
            # put the selector back to what the registry still holds
            previous = registry.get(kind)
            if previous is None:
                event.select.clear()
            else:
                event.select.value = previous
            return
        self._set_field_error(kind, "priority", "")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "btn_quit":
            self.action_quit()
        elif event.button.id == "btn_save":
            self.action_save()

    def action_quit(self) -> None:
        log.info("Form closed without saving")
        self.app.exit()

    def action_save(self) -> None:
        self._collect()
        self._clear_errors()
        try:
            doc = self.app.assembler.assemble(self.app.state.to_selections())
        except AssemblyError as e:
            self._show_errors(e)
            return
        from screens.s02_preview import PreviewScreen
        self.app.push_screen(PreviewScreen(build_artifact(doc)))

    # -- Helpers ------------------------------------------------------------

    def _collect(self) -> None:
        """Copy the raw input values into the form state."""
        state = self.app.state
        for kind in _ADDRESSED:
            fields = state[kind]
            for field, _label, _placeholder in _MANUAL_INPUTS:
                value = self.query_one(f"#inp_{kind.value}_{field}", Input).value
                setattr(fields, field, value)
        state.ssid = self.query_one("#inp_ssid", Input).value
        state.passphrase = self.query_one("#inp_passphrase", Input).value

    def _set_field_error(self, kind: InterfaceKind, field: str, msg: str) -> bool:
        key = f"{kind.value}.{field}"
        if msg:
            self.field_errors[key] = msg
        else:
            self.field_errors.pop(key, None)
        try:
            label = self.query_one(f"#err_{kind.value}_{field}", Static)
        except NoMatches:
            return False
        label.update(f"[red]{escape(msg)}[/red]" if msg else "")
        return True

    def _clear_errors(self) -> None:
        for key in list(self.field_errors):
            kind_value, field = key.split(".", 1)
            self._set_field_error(InterfaceKind(kind_value), field, "")
        self.query_one("#err_msg", Static).update("")

    def _show_errors(self, error: AssemblyError) -> None:
        unplaced = []
        for fe in error.errors:
            if not self._set_field_error(fe.kind, fe.field, fe.message):
                unplaced.append(str(fe))
        summary = f"Please fix {len(error.errors)} field(s) before saving."
        if unplaced:
            summary += " " + " ".join(unplaced)
        self.query_one("#err_msg", Static).update(f"[red]Error: {escape(summary)}[/red]")
        log.info("Save blocked: %s", ", ".join(error.fields))
