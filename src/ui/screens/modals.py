"""Informational modal overlays: inbox, transactions, turnover, currency & language."""

from typing import ClassVar

from typing_extensions import override

from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.reactive import reactive
from textual.widgets import Button, Static

import structlog

from src.services.i18n import Language

from .base import BaseModal, ModalPanel

log = structlog.stdlib.get_logger()


def modal_header(title: str) -> Horizontal:
    """Title bar with the close button every modal carries."""
    return Horizontal(
        Static(title, classes="modal-title"),
        Button("✕", classes="modal-close"),
        classes="modal-header",
    )


class InboxModal(BaseModal):
    """Inbox with the sign-up welcome message."""

    SCREEN_TITLE: ClassVar[str] = "Inbox"
    SCREEN_NAME: ClassVar[str] = "inbox"

    MESSAGES: ClassVar[list[tuple[str, str, str]]] = [
        (
            "Sign up success.",
            "Congratulations sign up success.",
            "2025/12/02 21:51:51 GMT+6",
        ),
    ]

    DEFAULT_CSS: ClassVar[str] = """
    InboxModal .inbox-message {
        padding: 1;
        border-bottom: solid $panel-lighten-1;
    }

    InboxModal .inbox-subject {
        text-style: bold;
    }

    InboxModal .inbox-date {
        color: $text-muted;
    }

    InboxModal .end-of-page {
        text-align: center;
        color: $text-muted;
        padding: 1;
    }
    """

    @override
    def compose(self) -> ComposeResult:
        with ModalPanel():
            yield modal_header(self.SCREEN_TITLE)
            for subject, body, sent_at in self.MESSAGES:
                with Vertical(classes="inbox-message"):
                    yield Static(subject, classes="inbox-subject")
                    yield Static(body, classes="inbox-body")
                    yield Static(sent_at, classes="inbox-date")
            yield Static("- end of page -", classes="end-of-page")


class TransactionRecordsModal(BaseModal):
    """Transaction history for today; there are never any records."""

    SCREEN_TITLE: ClassVar[str] = "Transaction Records"
    SCREEN_NAME: ClassVar[str] = "transactions"

    COLUMNS: ClassVar[list[str]] = ["Type", "Amount", "Status", "Txn Date"]

    DEFAULT_CSS: ClassVar[str] = """
    TransactionRecordsModal .filter-chip {
        width: auto;
        margin: 1;
        padding: 0 2;
        background: $error;
    }

    TransactionRecordsModal .records-header {
        height: 1;
        background: $panel;
    }

    TransactionRecordsModal .records-column {
        width: 1fr;
        text-style: bold;
    }
    """

    @override
    def compose(self) -> ComposeResult:
        with ModalPanel():
            yield modal_header(self.SCREEN_TITLE)
            yield Static("Today", classes="filter-chip")
            with Horizontal(classes="records-header"):
                for column in self.COLUMNS:
                    yield Static(column, classes="records-column")
            yield Static("No Data", classes="no-data")


class TurnoverModal(BaseModal):
    """Turnover with an Active/Completed toggle and no data behind either tab."""

    SCREEN_TITLE: ClassVar[str] = "Turnover"
    SCREEN_NAME: ClassVar[str] = "turnover"

    TABS: ClassVar[list[tuple[str, str]]] = [
        ("active", "Active"),
        ("completed", "Completed"),
    ]

    DEFAULT_CSS: ClassVar[str] = """
    TurnoverModal .turnover-tabs {
        height: 3;
    }

    TurnoverModal .turnover-tab {
        width: 1fr;
        border: none;
    }

    TurnoverModal .turnover-tab.-active-tab {
        background: $error;
        text-style: bold;
    }
    """

    active_tab: reactive[str] = reactive("active", init=False)

    @override
    def compose(self) -> ComposeResult:
        with ModalPanel():
            yield modal_header(self.SCREEN_TITLE)
            with Horizontal(classes="turnover-tabs"):
                for tab_id, label in self.TABS:
                    yield Button(label, id=f"turnover-{tab_id}", classes="turnover-tab")
            yield Static("No Data", classes="no-data")

    def on_mount(self) -> None:
        self.watch_active_tab(self.active_tab)

    def watch_active_tab(self, active_tab: str) -> None:
        for tab_id, _ in self.TABS:
            for button in self.query(f"#turnover-{tab_id}").results(Button):
                button.set_class(tab_id == active_tab, "-active-tab")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        button_id = event.button.id or ""
        if button_id.startswith("turnover-"):
            event.stop()
            self.active_tab = button_id.removeprefix("turnover-")
            log.debug("Turnover tab selected", tab=self.active_tab)


class CurrencyLanguageModal(BaseModal):
    """Currency display and the language switch."""

    SCREEN_TITLE: ClassVar[str] = "Currency and Language"
    SCREEN_NAME: ClassVar[str] = "currency_language"

    CURRENCY_LABEL: ClassVar[str] = "৳ BDT"

    LANGUAGE_OPTIONS: ClassVar[list[tuple[Language, str]]] = [
        (Language.BANGLA, "বাংলা"),
        (Language.ENGLISH, "English"),
    ]

    DEFAULT_CSS: ClassVar[str] = """
    CurrencyLanguageModal .currency-label {
        margin: 1;
        text-style: bold;
    }

    CurrencyLanguageModal .language-options {
        height: 3;
        margin: 0 1 1 1;
    }

    CurrencyLanguageModal .language-option {
        width: 1fr;
        border: none;
    }

    CurrencyLanguageModal .language-option.-selected {
        background: $error;
        text-style: bold;
    }
    """

    @override
    def compose(self) -> ComposeResult:
        language = self.portal_app.language
        with ModalPanel():
            yield modal_header(language.t("currencyAndLanguage"))
            yield Static(self.CURRENCY_LABEL, classes="currency-label")
            with Horizontal(classes="language-options"):
                for option, label in self.LANGUAGE_OPTIONS:
                    yield Button(label, id=f"language-{option.value}", classes="language-option")

    def on_mount(self) -> None:
        self.portal_app.language.subscribe(self._on_language_changed)
        self._highlight(self.portal_app.language.language)

    def on_unmount(self) -> None:
        self.portal_app.language.unsubscribe(self._on_language_changed)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        button_id = event.button.id or ""
        if not button_id.startswith("language-"):
            return
        event.stop()
        self.portal_app.language.set_language(Language(button_id.removeprefix("language-")))

    def _on_language_changed(self, language: Language) -> None:
        self.query_one(".modal-title", Static).update(self.portal_app.language.t("currencyAndLanguage"))
        self._highlight(language)

    def _highlight(self, language: Language) -> None:
        for option, _ in self.LANGUAGE_OPTIONS:
            button = self.query_one(f"#language-{option.value}", Button)
            button.set_class(option == language, "-selected")
