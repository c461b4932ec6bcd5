import json

from gatekeeper.handlers.commands.general import format_uptime
from gatekeeper.services.localization import Localizer


def test_lookup_with_variables():
    localizer = Localizer()
    text = localizer.lookup("ERRORS.COOLDOWN", {"seconds": 4, "prefix": "!", "command": "ping"})
    assert text == "⏳ Please wait 4s before using !ping again."


def test_missing_key_marker():
    assert Localizer().lookup("ERRORS.NOPE") == "{MISSING:ERRORS.NOPE}"
    assert Localizer()("ERRORS") == "{MISSING:ERRORS}"


def test_fallback_to_default_language():
    localizer = Localizer(language="ru")
    assert localizer.language == "RU"
    assert localizer("SECURITY.BLACKLISTED") == "🚫 Вы заблокированы."
    assert localizer("ADMIN.BLOCKED", {"target": "5"}) == "🚫 5 has been blocked."


def test_unknown_language_uses_default():
    localizer = Localizer(language="XX")
    assert localizer.language == "EN"


def test_no_languages_marker():
    assert Localizer(languages={}).lookup("COMMON.PING") == "{LANGUAGE_ERROR:COMMON.PING}"


def test_languages_dir(tmp_path):
    (tmp_path / "de.json").write_text(
        json.dumps({"COMMON": {"PING": "Pong! {{latency}} ms"}}), encoding="utf-8"
    )
    (tmp_path / "broken.json").write_text("{", encoding="utf-8")

    localizer = Localizer(language="DE", languages_dir=str(tmp_path))
    assert "DE" in localizer.available_languages()
    assert "BROKEN" not in localizer.available_languages()
    assert localizer("COMMON.PING", {"latency": 7}) == "Pong! 7 ms"
    assert localizer("ERRORS.OWNER_ONLY").startswith("⛔")


def test_format_uptime():
    assert format_uptime(42) == "42s"
    assert format_uptime(3 * 60 + 5) == "3m"
    assert format_uptime(26 * 3600 + 60) == "1d 2h 1m"
