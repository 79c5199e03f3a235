import json
import locale
import logging

from .utils import get_resource_path

# Fallback English dictionary
_default_en = {
    # Window
    "Playdeck": "Playdeck",
    "Playlist": "Playlist",
    "Filter tracks": "Filter tracks",
    "Search YouTube and press Enter": "Search YouTube and press Enter",
    "Nothing playing": "Nothing playing",
    "Now playing: {}": "Now playing: {}",

    # Status line
    "Loading...": "Loading...",
    "Searching...": "Searching...",
    "{} tracks": "{} tracks",
    "{} of {} tracks": "{} of {} tracks",

    # Errors
    "Playback failed": "Playback failed",
    "Could not start the player: {}": "Could not start the player: {}",
}

_translations = {}


def get_system_language():
    try:
        lang, _ = locale.getlocale()
        if lang:
            return lang.split("_")[0].lower()
    except (ValueError, TypeError):
        pass
    return "en"


def load_language(lang_code):
    global _translations
    lang_file = get_resource_path("locales") / f"{lang_code}.json"
    if not lang_file.exists():
        _translations = {}
        return
    try:
        with open(lang_file, "r", encoding="utf-8") as f:
            data = json.load(f)
        _translations = data if isinstance(data, dict) else {}
    except (OSError, ValueError) as e:
        logging.warning("Failed to load language '%s': %s", lang_code, e)
        _translations = {}


def setup_i18n(lang_code=None):
    if not lang_code:
        # Check settings first, then fall back to system
        from .settings import load_language_setting
        lang_code = load_language_setting("")
        if not lang_code:
            lang_code = get_system_language()
    load_language(lang_code)


def tr(text, *args):
    """Translate function. Takes a format string and optional positional arguments."""
    translated = _translations.get(text, _default_en.get(text, text))
    if args:
        try:
            return translated.format(*args)
        except (IndexError, KeyError, ValueError):
            return translated
    return translated
