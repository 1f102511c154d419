"""
Tests for smart_leave.session module.

Streamlit is replaced by a mock whose ``session_state`` is a plain dict.
"""

from unittest import mock

import pytest


@pytest.fixture
def fake_st():
    fake = mock.Mock()
    fake.session_state = {}
    with mock.patch("smart_leave.session.st", fake):
        yield fake


@pytest.fixture
def login_result():
    from smart_leave.models import LoginResult

    return LoginResult(token="tok", user_id=10, role="TEAM_MANAGER", email=None)


class TestSessionLifecycle:
    def test_init_session_state(self, fake_st):
        from smart_leave.session import init_session_state

        init_session_state()

        assert fake_st.session_state["_auth"] is None
        assert fake_st.session_state["_session_expired"] is False
        assert fake_st.session_state["_flash"] == []
        assert fake_st.session_state["_session_id"]

    def test_start_session_and_getters(self, fake_st, login_result):
        from smart_leave import session

        session.init_session_state()
        session.start_session(session.USER, login_result, user_name="Asha1@")

        assert session.is_authenticated()
        assert session.is_authenticated(session.USER)
        assert not session.is_authenticated(session.ADMIN)
        assert session.get_actor_id() == 10
        assert session.get_role() == "TEAM_MANAGER"
        assert session.get_token() == "tok"
        assert session.get_email() == ""
        assert session.get_user_name() == "Asha1@"

    def test_logout(self, fake_st, login_result):
        from smart_leave import session
        from smart_leave.logging_config import LogContext

        session.init_session_state()
        session.start_session(session.ADMIN, login_result)
        session.logout()

        assert not session.is_authenticated()
        assert session.get_actor_id() is None
        assert LogContext.get_actor_id() is None

    def test_expire_session_flags_notice_once(self, fake_st, login_result):
        from smart_leave import session

        session.init_session_state()
        session.start_session(session.USER, login_result)
        session.expire_session()

        assert not session.is_authenticated()
        assert session.pop_session_expired() is True
        assert session.pop_session_expired() is False


class TestRequireLogin:
    def test_stops_when_signed_out(self, fake_st):
        from smart_leave.session import require_login

        require_login("admin")

        fake_st.warning.assert_called_once()
        fake_st.stop.assert_called_once_with()

    def test_passes_when_signed_in(self, fake_st, login_result):
        from smart_leave import session

        session.start_session(session.ADMIN, login_result)
        session.require_login(session.ADMIN)

        fake_st.stop.assert_not_called()


class TestApiFactories:
    def test_clients_carry_token_and_expiry_hook(self, fake_st, login_result):
        from smart_leave import session

        session.start_session(session.USER, login_result)
        user_api = session.get_user_api()
        admin_api = session.get_admin_api()

        assert user_api.client.token == "tok"
        assert admin_api.client.token == "tok"
        assert user_api.client._on_unauthorized is session.expire_session


class TestFlashAndNavigation:
    def test_flash_queue(self, fake_st):
        from smart_leave.session import flash, init_session_state, pop_flashes

        init_session_state()
        flash("success", "Saved")
        flash("error", "Oops")

        assert pop_flashes() == [("success", "Saved"), ("error", "Oops")]
        assert pop_flashes() == []

    def test_pending_view(self, fake_st):
        from smart_leave.session import apply_pending_view, go_to

        go_to("Admin Login")
        apply_pending_view()

        assert fake_st.session_state["_view"] == "Admin Login"
        assert "_next_view" not in fake_st.session_state

        apply_pending_view()
        assert fake_st.session_state["_view"] == "Admin Login"
