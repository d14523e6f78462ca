import pytest
from QSitterDebug.debugger import TreeDebugger
from QSitterDebug.errors import (
    LifecycleError,
    NavigationError,
    NavigationFailure,
    SourceUnavailableError,
)
from QSitterDebug.tree_renderer import DisplayLine
from QSitterDebug.view_session import LifecycleState
from conftest import FakeSource, binary_tree

NAV = {"enable_navigation": True}
NAV_HL = {"enable_navigation": True, "highlight_on_navigate": True}


@pytest.fixture
def debugger(host):
    return TreeDebugger(host)


class TestEnableDisable:
    def test_enable_then_disable(self, debugger, host, source):
        session = debugger.enable_debugging(source)
        assert debugger.session_for(source) is session

        debugger.disable_debugging(session)
        assert session.state is LifecycleState.INACTIVE
        assert debugger.session_for(source) is None
        assert host.views == {}

    def test_one_session_per_source(self, debugger, host, source):
        debugger.enable_debugging(source)
        with pytest.raises(LifecycleError, match="already enabled"):
            debugger.enable_debugging(source)
        assert len(host.views) == 1

    def test_sessions_are_independent(self, debugger, host, source):
        other = FakeSource("other", binary_tree())
        first = debugger.enable_debugging(source)
        second = debugger.enable_debugging(other)
        assert first.view != second.view

        debugger.disable_debugging(first)
        assert second.is_active
        assert debugger.active_sessions() == [second]

    def test_second_disable_fails(self, debugger, source):
        session = debugger.enable_debugging(source)
        debugger.disable_debugging(session)
        with pytest.raises(LifecycleError):
            debugger.disable_debugging(session)

    def test_toggle(self, debugger, source):
        session = debugger.toggle_debugging(source, NAV)
        assert session is not None and session.is_active
        assert session.options.enable_navigation

        assert debugger.toggle_debugging(source) is None
        assert not session.is_active

    def test_destroyed_source_drops_session(self, debugger, host, source):
        session = debugger.enable_debugging(source)
        host.destroy(source)
        assert not session.is_active
        assert debugger.session_for(source) is None

    def test_destroyed_sources_are_forgotten(self, debugger, host):
        for i in range(5):
            src = FakeSource(f"closed-{i}", binary_tree())
            debugger.enable_debugging(src)
            host.destroy(src)
        assert debugger._sessions == {}
        assert debugger.active_sessions() == []

    def test_destroyed_source_can_be_replaced(self, debugger, host, source):
        debugger.enable_debugging(source)
        host.destroy(source)
        fresh = FakeSource("sample", binary_tree())
        session = debugger.enable_debugging(fresh)
        assert debugger.active_sessions() == [session]


class TestNavigate:
    def test_jump_to_span(self, debugger, host, source):
        session = debugger.enable_debugging(source, NAV)
        debugger.navigate(session, 3)
        assert host.jumps == [(source, (4, 5), False)]

    def test_jump_with_highlight(self, debugger, host, source):
        session = debugger.enable_debugging(source, NAV_HL)
        debugger.navigate(session, 1)
        assert host.jumps == [(source, (0, 5), True)]

    def test_navigation_disabled(self, debugger, host, source):
        session = debugger.enable_debugging(source)
        with pytest.raises(NavigationError) as excinfo:
            debugger.navigate(session, 2)
        assert excinfo.value.reason is NavigationFailure.NOT_NAVIGABLE
        assert host.jumps == []

    def test_jump_to_line_without_span(self, debugger, host, source):
        session = debugger.enable_debugging(source, NAV)
        with pytest.raises(NavigationError, match="not a navigable line"):
            debugger.navigation.jump_to(session, DisplayLine(0, "Program"))
        assert host.jumps == []

    def test_index_out_of_range(self, debugger, source):
        session = debugger.enable_debugging(source, NAV)
        with pytest.raises(NavigationError) as excinfo:
            debugger.navigate(session, 4)
        assert excinfo.value.reason is NavigationFailure.NOT_NAVIGABLE

    def test_disabled_session(self, debugger, host, source):
        session = debugger.enable_debugging(source, NAV)
        line = session.lines[0]
        debugger.disable_debugging(session)

        with pytest.raises(NavigationError) as excinfo:
            debugger.navigation.jump_to(session, line)
        assert excinfo.value.reason is NavigationFailure.NO_SOURCE
        assert not isinstance(excinfo.value, SourceUnavailableError)
        assert host.jumps == []

    def test_destroyed_source(self, debugger, host, source):
        session = debugger.enable_debugging(source, NAV)
        line = session.lines[2]
        host.destroy(source)

        with pytest.raises(SourceUnavailableError, match="source no longer available"):
            debugger.navigation.jump_to(session, line)
        assert host.jumps == []

    def test_source_invalid_without_notification(self, debugger, host, source):
        session = debugger.enable_debugging(source, NAV)
        source.alive = False
        with pytest.raises(SourceUnavailableError):
            debugger.navigate(session, 0)
        # The failed jump leaves the session alone
        assert session.is_active


class TestReveal:
    # fmt: off
    @pytest.mark.parametrize(
        "offset, expected",
        [
            pytest.param(0, 2,    id="first_num"),
            pytest.param(4, 3,    id="second_num"),
            pytest.param(3, 1,    id="inside_binary_expr"),
            pytest.param(9, None, id="outside"),
        ],
    )
    def test_reveal(self, debugger, source, offset, expected):
        session = debugger.enable_debugging(source, NAV)
        assert debugger.reveal(session, offset) == expected
    # fmt: on

    def test_reveal_inactive(self, debugger, source):
        session = debugger.enable_debugging(source, NAV)
        debugger.disable_debugging(session)
        assert debugger.reveal(session, 0) is None
