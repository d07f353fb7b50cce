from core.navigation import Navigator


def test_starts_at_home_with_default_locale():
    state = {}
    nav = Navigator(state)
    assert nav.path == "/"
    assert nav.locale == "ja"
    assert state["route_history"] == ["/"]


def test_push_and_back():
    nav = Navigator({})
    nav.push("/login")
    nav.push("/select-type")
    assert nav.back() == "/login"
    assert nav.back() == "/"
    assert nav.back() == "/"


def test_replace_keeps_history_length_and_switches_locale():
    nav = Navigator({})
    nav.push("/new/step1")
    nav.replace("/new/step1", locale="vi")
    assert nav.history == ["/", "/new/step1"]
    assert nav.locale == "vi"
    assert nav.href() == "/vi/new/step1"


def test_unsupported_locale_falls_back():
    nav = Navigator({"lang": "xx"})
    assert nav.locale == "ja"
    nav.set_locale("de")
    assert nav.locale == "ja"


def test_state_survives_new_navigator():
    state = {}
    Navigator(state).push("/renewal/step2")
    assert Navigator(state).path == "/renewal/step2"


def test_reset():
    nav = Navigator({})
    nav.push("/complete")
    nav.reset()
    assert nav.history == ["/"]
