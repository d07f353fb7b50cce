from streamlit.testing.v1 import AppTest

APP = "../app.py"


def app_at(route, lang="en", history=None):
    at = AppTest.from_file(APP, default_timeout=30)
    at.session_state["route_history"] = history or ["/", route]
    at.session_state["lang"] = lang
    return at


def test_home_start_goes_to_login():
    at = app_at("/", history=["/"])
    at.run()
    assert not at.exception
    assert at.title[0].value == "Student Visa Application Support"
    at.button(key="home_start").click().run()
    assert at.session_state["route_history"][-1] == "/login"


def test_blank_step_shows_errors_and_stays():
    at = app_at("/new/step2")
    at.run()
    assert not at.exception
    next(b for b in at.button if b.label == "Next").click().run()
    assert at.session_state["route_history"][-1] == "/new/step2"
    messages = [e.value for e in at.error]
    assert "Please enter your passport number" in messages
    assert "Please upload a copy of your passport" not in messages


def test_back_button_pops_history():
    at = app_at("/new/step2", history=["/", "/login", "/select-type", "/new/step1", "/new/step2"])
    at.run()
    at.button(key="back_new_step2").click().run()
    assert at.session_state["route_history"][-1] == "/new/step1"


def test_documents_next_disabled_until_uploaded():
    at = app_at("/renewal/step5")
    at.run()
    assert not at.exception
    assert at.button(key="documents_next").disabled


def test_confirm_submit_disabled_without_files():
    at = app_at("/new/confirm")
    at.run()
    assert not at.exception
    assert at.button(key="confirm_submit").disabled
    assert at.warning


def test_complete_returns_home():
    at = app_at("/complete")
    at.run()
    at.button(key="complete_home").click().run()
    assert at.session_state["route_history"] == ["/"]


def test_unknown_route_resets_home():
    at = app_at("/nowhere")
    at.run()
    assert at.session_state["route_history"] == ["/"]
