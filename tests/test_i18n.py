import json

from playdeck import i18n


def test_english_defaults_and_formatting():
    i18n.load_language("xx-missing")
    assert i18n.tr("{} tracks", 3) == "3 tracks"
    assert i18n.tr("Loading...") == "Loading..."


def test_unknown_keys_pass_through():
    i18n.load_language("xx-missing")
    assert i18n.tr("Something new") == "Something new"


def test_bad_format_arguments_return_template():
    i18n.load_language("xx-missing")
    assert i18n.tr("{} of {} tracks", 1) == "{} of {} tracks"


def test_locale_file_is_used(tmp_path, monkeypatch):
    (tmp_path / "locales").mkdir()
    (tmp_path / "locales" / "de.json").write_text(json.dumps({"{} tracks": "{} Titel"}), encoding="utf-8")
    monkeypatch.setattr(i18n, "get_resource_path", lambda rel: tmp_path / rel)

    i18n.load_language("de")
    try:
        assert i18n.tr("{} tracks", 2) == "2 Titel"
        assert i18n.tr("Loading...") == "Loading..."
    finally:
        i18n.load_language("xx-missing")


def test_broken_locale_file_is_ignored(tmp_path, monkeypatch):
    (tmp_path / "locales").mkdir()
    (tmp_path / "locales" / "fr.json").write_text("{oops", encoding="utf-8")
    monkeypatch.setattr(i18n, "get_resource_path", lambda rel: tmp_path / rel)

    i18n.load_language("fr")

    assert i18n.tr("Loading...") == "Loading..."
