# tests/test_ui_flash.py

from ui.flash import pop_flash, set_flash


def test_flash_is_shown_once():
    session_state = {}
    set_flash(session_state, "Published successfully")

    assert pop_flash(session_state) == "Published successfully"
    assert pop_flash(session_state) is None


def test_flash_does_not_touch_editor_keys():
    session_state = {"editor_message": "Auto-saved"}
    set_flash(session_state, "Published successfully")
    pop_flash(session_state)
    assert session_state == {"editor_message": "Auto-saved"}
