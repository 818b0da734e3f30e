"""Tests for switchyard.router — router nodes and the claiming state machine."""

import pytest

from switchyard.config import RouterConfig
from switchyard.context import RouterContext, RouterFlags, default_context, top_parent
from switchyard.errors import ClaimError, NavigationError
from switchyard.history import BrowserHistory, MemoryHistory, SimulatedBrowser
from switchyard.redirect import Redirect
from switchyard.router import Matched, Redirecting, Router
from switchyard.routing.location import RouterLocation


def _describe(ctx: RouterContext) -> str:
    return str(ctx.location)


class TestEvaluate:
    def test_empty_path_always_matches(self) -> None:
        router = Router(_describe, history=MemoryHistory("/anything/here"))
        state = router.evaluate()
        assert isinstance(state, Matched)
        assert str(state.context.location) == "anything/here"

    def test_matched_claims_path(self) -> None:
        router = Router(_describe, path="app", history=MemoryHistory("/app/home"))
        state = router.evaluate()
        assert isinstance(state, Matched)
        assert str(state.context.location) == "[app]/home"
        assert state.context.history is router.history

    def test_dynamic_path(self) -> None:
        router = Router(_describe, path="orgs/:org", history=MemoryHistory("/orgs/acme/users"))
        state = router.evaluate()
        assert isinstance(state, Matched)
        assert state.context.location.params["org"] == "acme"

    def test_mismatch_redirects_canonically(self) -> None:
        router = Router(_describe, path="app", history=MemoryHistory("/oldapp/foo"))
        state = router.evaluate()
        assert isinstance(state, Redirecting)
        assert state.to == "/app/foo"
        assert state.context.location.claim_index == 0

    def test_root_mismatch(self) -> None:
        router = Router(_describe, path="app", history=MemoryHistory("/"))
        state = router.evaluate()
        assert isinstance(state, Redirecting)
        assert state.to == "/app"

    def test_default_history(self) -> None:
        router = Router(_describe)
        assert router.history.kind == "memory"
        assert router.render() == "/"


class TestRender:
    def test_renders_children_with_claimed_location(self) -> None:
        router = Router(_describe, path="app", history=MemoryHistory("/app/home"))
        assert router.render() == "[app]/home"

    def test_redirect_renders_no_content(self) -> None:
        rendered: list[str] = []

        def app(ctx: RouterContext) -> str:
            rendered.append(str(ctx.location))
            return "content"

        history = MemoryHistory("/oldapp/foo")
        router = Router(app, path="app", history=history)

        assert router.render() is None
        assert rendered == []
        assert history.top().href() == "/app/foo"

    def test_redirect_replaces_entry(self) -> None:
        browser = SimulatedBrowser("/oldapp/foo")
        router = Router(_describe, path="app", history=BrowserHistory(browser))
        router.render()
        assert browser.entries == ["/app/foo"]

    def test_mounted_redirect_settles_in_one_pass(self) -> None:
        history = MemoryHistory("/oldapp/foo")
        router = Router(_describe, path="app", history=history)
        with router.mounted():
            assert router.render() == "[app]/foo"

    def test_redirect_loop_raises(self) -> None:
        history = MemoryHistory("/a")

        def ping_pong(ctx: RouterContext) -> None:
            target = "/b" if ctx.location.href() == "/a" else "/a"
            Redirect(target).render(ctx)

        router = Router(ping_pong, history=history)
        with router.mounted(), pytest.raises(NavigationError, match="Too many redirects"):
            router.render()


class TestLifecycle:
    def test_mount_subscribes_and_unmount_releases(self) -> None:
        history = MemoryHistory("/a")
        router = Router(_describe, history=history)
        assert not router.is_mounted

        router.mount()
        assert router.is_mounted
        history.navigate("/b")
        assert router.location.href() == "/b"

        router.unmount()
        assert not router.is_mounted
        history.navigate("/c")
        assert router.location.href() == "/b"

    def test_on_change_after_navigation(self) -> None:
        history = MemoryHistory("/a")
        changes: list[str] = []
        router = Router(_describe, history=history, on_change=lambda: changes.append("changed"))
        with router.mounted():
            history.navigate("/b")
        assert changes == ["changed"]
        assert router.render() == "b"

    def test_mount_resyncs_after_early_navigation(self) -> None:
        """A redirect during the first render, before subscribing, is not lost."""
        history = MemoryHistory("/oldapp/foo")
        changes: list[str] = []
        router = Router(_describe, path="app", history=history, on_change=lambda: changes.append("x"))

        assert router.render() is None

        router.mount()
        assert changes == ["x"]
        assert router.location.href() == "/app/foo"
        assert router.render() == "[app]/foo"
        router.unmount()

    def test_mount_without_drift_does_not_notify(self) -> None:
        changes: list[str] = []
        router = Router(_describe, history=MemoryHistory("/a"), on_change=lambda: changes.append("x"))
        router.mount()
        router.mount()
        assert changes == []
        router.unmount()

    def test_browser_back_rerenders(self) -> None:
        browser = SimulatedBrowser("/app/one")
        history = BrowserHistory(browser)
        changes: list[str] = []
        router = Router(_describe, path="app", history=history, on_change=lambda: changes.append("x"))
        with router.mounted():
            history.navigate("/app/two")
            assert router.render() == "[app]/two"
            browser.back()
            assert router.render() == "[app]/one"
        assert changes == ["x", "x"]

    def test_claim_error_escapes_mounted(self) -> None:
        router = Router(lambda ctx: ctx.location.claim("orders"), history=MemoryHistory("/customers"))
        with pytest.raises(ClaimError, match="orders"), router.mounted():
            router.render()
        assert not router.is_mounted

    def test_follows_navigation_made_by_earlier_listener(self) -> None:
        history = MemoryHistory("/a")

        def forward_x(location: RouterLocation) -> None:
            if location.href() == "/x":
                history.navigate("/y")

        history.listen(forward_x)
        router = Router(_describe, history=history)
        with router.mounted():
            history.navigate("/x")
            assert history.top().href() == "/y"
            assert router.location.href() == "/y"
            assert router.render() == "y"


class TestNesting:
    def test_nested_claims_from_parent(self) -> None:
        history = MemoryHistory("/app/settings/profile")
        inner_outputs: list[str] = []

        def inner(ctx: RouterContext) -> str:
            inner_outputs.append(str(ctx.location))
            return str(ctx.location)

        def outer(ctx: RouterContext) -> str:
            return Router(inner, path="settings", parent=ctx).render()

        root = Router(outer, path="app", history=history)
        assert root.render() == "[app/settings]/profile"

    def test_nested_shares_history(self) -> None:
        history = MemoryHistory("/app")
        root = Router(_describe, path="app", history=history)
        state = root.evaluate()
        assert isinstance(state, Matched)
        child = Router(_describe, parent=state.context)
        assert child.history is history
        assert child.shares_parent_history

    def test_nested_mismatch_redirects_under_parent_claim(self) -> None:
        history = MemoryHistory("/app/wrong/deep")

        def outer(ctx: RouterContext) -> object:
            return Router(_describe, path="settings", parent=ctx).render()

        root = Router(outer, path="app", history=history)
        with root.mounted():
            assert root.render() == "[app/settings]/deep"
        assert history.top().href() == "/app/settings/deep"

    def test_embedded_router_has_own_universe(self) -> None:
        outer_history = MemoryHistory("/host/page")
        embedded_history = MemoryHistory("/inner")
        captured: list[RouterContext] = []

        def embedded(ctx: RouterContext) -> str:
            captured.append(ctx)
            return str(ctx.location)

        def host(ctx: RouterContext) -> str:
            return Router(embedded, history=embedded_history, parent=ctx).render()

        root = Router(host, path="host", history=outer_history)
        assert root.render() == "inner"
        assert captured[0].history is embedded_history
        assert top_parent(captured[0]).history is outer_history

    def test_default_parent_is_ignored(self) -> None:
        router = Router(_describe, parent=default_context())
        assert router.parent is None


class TestFlags:
    def test_is_mobile_app_inherited(self) -> None:
        root = Router(_describe, history=MemoryHistory("/"), is_mobile_app=True)
        state = root.evaluate()
        assert isinstance(state, Matched)
        child = Router(_describe, parent=state.context)
        assert child.flags.is_mobile_app is True

    def test_is_mobile_app_override(self) -> None:
        root = Router(_describe, history=MemoryHistory("/"), is_mobile_app=True)
        state = root.evaluate()
        assert isinstance(state, Matched)
        child = Router(_describe, parent=state.context, is_mobile_app=False)
        assert child.flags.is_mobile_app is False

    def test_is_mock_inherited(self) -> None:
        parent = RouterContext(
            location=MemoryHistory("/").top(),
            history=MemoryHistory("/"),
            flags=RouterFlags(is_mock=True),
        )
        assert Router(_describe, parent=parent).flags.is_mock is True


class TestFromConfig:
    def test_memory(self) -> None:
        router = Router.from_config(_describe, RouterConfig(initial_path="/app/x"), path="app")
        assert router.render() == "[app]/x"

    def test_browser(self) -> None:
        browser = SimulatedBrowser("/embed/app/x")
        config = RouterConfig(history="browser", base_path="/embed", is_mobile_app=True)
        router = Router.from_config(_describe, config, path="app", platform=browser)
        assert router.history.kind == "browser"
        assert router.flags.is_mobile_app is True
        assert router.render() == "[app]/x"
