from chat_core.domain.models import ErrorInfo, SessionState, Turn
from chat_core.session.view import build_view


def test_typing_hides_followups_and_disables_input():
    state = SessionState(
        transcript=(Turn(speaker="user", text="hi"),),
        pending_followups=("stale",),
        is_awaiting_reply=True,
    )
    view = build_view(state)
    assert view.show_typing is True
    assert view.followups == ()
    assert view.input_enabled is False


def test_error_banner_disables_input_until_dismissed():
    state = SessionState(last_error=ErrorInfo(kind="rate_limited", display_text="Slow down"))
    view = build_view(state)
    assert view.error_text == "Slow down"
    assert view.input_enabled is False
    assert build_view(SessionState()).input_enabled is True


def test_intro_flag_preserved():
    state = SessionState(transcript=(Turn(speaker="agent", text="- a\n- b", is_intro=True),))
    view = build_view(state)
    assert view.turns[0].is_intro is True
    assert view.turns[0].html == "<ul><li>a</li><li>b</li></ul>"
