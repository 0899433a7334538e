"""Translation lookup and current-language state."""

from collections.abc import Callable
from enum import Enum

import structlog

log = structlog.stdlib.get_logger()


class Language(Enum):
    """Languages the portal UI can be shown in."""
    ENGLISH = "english"
    BANGLA = "bangla"


TRANSLATIONS: dict[Language, dict[str, str]] = {
    Language.ENGLISH: {
        "signUp": "Sign up",
        "login": "Login",
        "home": "Home",
        "hot": "HOT",
        "sports": "Sports",
        "casino": "Casino",
        "slots": "Slots",
        "crash": "Crash",
        "table": "Table",
        "fishing": "Fishing",
        "arcade": "Arcade",
        "lottery": "Lottery",
        "promotions": "Promotions",
        "referralBonus": "Referral Bonus",
        "vip": "VIP",
        "download": "Download",
        "contactUs": "Contact Us",
        "all": "ALL",
        "welcomeOffer": "Welcome Offer",
        "liveCasino": "Live Casino",
        "other": "Other",
        "favourites": "Favourites",
        "popularGames": "Popular Games",
        "promoCode": "Promo Code",
        "add": "Add",
        "detail": "Detail",
        "deposit": "Deposit",
        "share": "Share",
        "claim": "Claim",
        "submit": "Submit",
        "currencyAndLanguage": "Currency and Language",
        "new": "NEW",
    },
    Language.BANGLA: {
        "signUp": "সাইন আপ",
        "login": "লগইন",
        "home": "হোম",
        "hot": "হট",
        "sports": "স্পোর্টস",
        "casino": "ক্যাসিনো",
        "slots": "স্লটস",
        "crash": "ক্র্যাশ",
        "table": "টেবিল",
        "fishing": "ফিশিং",
        "arcade": "আর্কেড",
        "lottery": "লটারি",
        "promotions": "প্রমোশন",
        "referralBonus": "রেফারেল বোনাস",
        "vip": "ভিআইপি",
        "download": "ডাউনলোড",
        "contactUs": "যোগাযোগ করুন",
        "all": "সব",
        "welcomeOffer": "স্বাগত অফার",
        "liveCasino": "লাইভ ক্যাসিনো",
        "other": "অন্যান্য",
        "favourites": "প্রিয়",
        "popularGames": "জনপ্রিয় গেমস",
        "promoCode": "প্রোমো কোড",
        "add": "যোগ করুন",
        "detail": "বিস্তারিত",
        "deposit": "জমা",
        "share": "শেয়ার",
        "claim": "দাবি",
        "submit": "জমা দিন",
        "currencyAndLanguage": "মুদ্রা এবং ভাষা",
        "new": "নতুন",
    },
}


LanguageListener = Callable[[Language], None]


class LanguageService:
    """Holds the current UI language and translates label keys."""

    def __init__(self, language: Language = Language.ENGLISH) -> None:
        self._language: Language = language
        self._listeners: list[LanguageListener] = []

    @property
    def language(self) -> Language:
        """The language labels are currently rendered in."""
        return self._language

    def set_language(self, language: Language) -> None:
        """Switch language and notify subscribers.

        Listeners are notified even when the language does not change, so a
        repeated selection still refreshes labels.
        """
        previous = self._language
        self._language = language
        log.info("Language changed", previous=previous.value, current=language.value)
        for listener in list(self._listeners):
            listener(language)

    def t(self, key: str) -> str:
        """Translate a label key, falling back to the key itself."""
        return TRANSLATIONS[self._language].get(key, key)

    def subscribe(self, listener: LanguageListener) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: LanguageListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)


def parse_language(value: str) -> Language:
    """Map a config string to a Language, raising ValueError when unknown."""
    try:
        return Language(value.lower())
    except ValueError:
        valid = ", ".join(lang.value for lang in Language)
        raise ValueError(f"Unknown language '{value}', expected one of: {valid}") from None
