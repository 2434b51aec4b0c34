# -*- coding: utf-8 -*-
"""Location: ./tests/unit/chatgate/plugins/framework/test_manager.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Unit tests for the plugin manager, driving the post limiter through the host contract.
"""

# Standard
from pathlib import Path

# Third-Party
import pytest

# First-Party
from chatgate.common.models import Channel, Post
from chatgate.config import settings as chatgate_settings
from chatgate.plugins.framework import (
    GlobalContext,
    HostAPI,
    InMemoryHostAPI,
    MessageHookType,
    MessageWillBePostedPayload,
    MessageWillBePostedResult,
    Plugin,
    PluginConfig,
    PluginContext,
    PluginError,
    PluginManager,
    PluginViolation,
)
import chatgate.plugins.framework as framework_module
from chatgate.services.logging_service import LoggingService
from plugins.post_limiter import post_limiter as post_limiter_module
from plugins.post_limiter.post_limiter import INTERNAL_ERROR_MESSAGE

REPO_CONFIG = Path(__file__).resolve().parents[5] / "plugins" / "config.yaml"

CONFIG_TEMPLATE = """
plugins:
  - name: "PostLimiter"
    kind: "plugins.post_limiter.post_limiter.PostLimiterPlugin"
    hooks: ["message_will_be_posted", "channel_has_been_updated"]
    mode: "{mode}"
    priority: 50
    config:
      default_post_limit: "30s"
      scope: "channel"
plugin_settings:
  fail_on_plugin_error: {fail}
"""


def _write_config(tmp_path, mode: str = "enforce", fail: str = "false") -> str:
    path = tmp_path / "config.yaml"
    path.write_text(CONFIG_TEMPLATE.format(mode=mode, fail=fail), encoding="utf-8")
    return str(path)


@pytest.fixture
def frozen_time(monkeypatch):
    now = {"t": 1_000.0}
    monkeypatch.setattr(post_limiter_module, "_now", lambda: now["t"])
    return now


@pytest.fixture
def gctx():
    return GlobalContext(request_id="req-1")


def _post(user: str = "u1", channel: str = "c1") -> Post:
    return Post(user_id=user, channel_id=channel, message="hi")


@pytest.mark.asyncio
async def test_manager_loads_plugin_from_config(tmp_path):
    manager = PluginManager(_write_config(tmp_path), api=InMemoryHostAPI())
    await manager.initialize()
    assert manager.initialized
    assert manager.plugin_count == 1
    assert manager.config.plugins[0].config["default_post_limit"] == "30s"
    await manager.shutdown()
    assert not manager.initialized
    assert manager.plugin_count == 0


@pytest.mark.asyncio
async def test_filter_post_accepts_then_rejects(tmp_path, frozen_time, gctx):
    api = InMemoryHostAPI([Channel(id="c1", header="---\npost_limit: 30s\n---")])
    manager = PluginManager(_write_config(tmp_path), api=api)
    await manager.initialize()

    post = _post()
    accepted, reason = await manager.filter_post(post, gctx)
    assert accepted is post
    assert reason == ""

    frozen_time["t"] += 10
    rejected, reason = await manager.filter_post(_post(), gctx)
    assert rejected is None
    assert reason == "Please wait 20s before posting again in this channel."


@pytest.mark.asyncio
async def test_violation_carries_plugin_name(tmp_path, frozen_time, gctx):
    manager = PluginManager(_write_config(tmp_path), api=InMemoryHostAPI([Channel(id="c1")]))
    await manager.initialize()

    await manager.message_will_be_posted(MessageWillBePostedPayload(post=_post()), gctx)
    result, _ = await manager.message_will_be_posted(MessageWillBePostedPayload(post=_post()), gctx)
    assert not result.continue_processing
    assert result.violation.plugin_name == "PostLimiter"


@pytest.mark.asyncio
async def test_notify_channel_updated_reloads_config(tmp_path, frozen_time, gctx):
    old = Channel(id="c1", header="---\npost_limit: 5s\n---")
    api = InMemoryHostAPI([old])
    manager = PluginManager(_write_config(tmp_path), api=api)
    await manager.initialize()

    await manager.filter_post(_post(), gctx)
    new = Channel(id="c1", header="---\npost_limit: 1m\n---")
    api.add_channel(new)
    await manager.notify_channel_updated(new, old, gctx)

    frozen_time["t"] += 6
    rejected, reason = await manager.filter_post(_post(), gctx)
    assert rejected is None
    assert reason == "Please wait 54s before posting again in this channel."


@pytest.mark.asyncio
async def test_permissive_mode_never_blocks(tmp_path, frozen_time, gctx):
    manager = PluginManager(_write_config(tmp_path, mode="permissive"), api=InMemoryHostAPI([Channel(id="c1")]))
    await manager.initialize()

    for _ in range(3):
        post, reason = await manager.filter_post(_post(), gctx)
        assert post is not None
        assert reason == ""


@pytest.mark.asyncio
async def test_disabled_plugin_is_not_loaded(tmp_path, gctx):
    manager = PluginManager(_write_config(tmp_path, mode="disabled"), api=InMemoryHostAPI())
    await manager.initialize()
    assert manager.plugin_count == 0
    post = _post(channel="unknown")
    assert await manager.filter_post(post, gctx) == (post, "")


@pytest.mark.asyncio
async def test_manager_without_config_passes_everything(gctx):
    manager = PluginManager(api=InMemoryHostAPI())
    await manager.initialize()
    result, contexts = await manager.message_will_be_posted(MessageWillBePostedPayload(post=_post()), gctx)
    assert result.continue_processing
    assert contexts is None


class _ExplodingPlugin(Plugin):
    async def message_will_be_posted(self, payload: MessageWillBePostedPayload, context: PluginContext) -> MessageWillBePostedResult:
        raise RuntimeError("boom")


class _BlockAllPlugin(Plugin):
    async def message_will_be_posted(self, payload: MessageWillBePostedPayload, context: PluginContext) -> MessageWillBePostedResult:
        return MessageWillBePostedResult(
            continue_processing=False,
            violation=PluginViolation(reason="blocked", description="No posting today.", code="BLOCKED"),
        )


def _cfg(name: str, priority: int = 100) -> PluginConfig:
    return PluginConfig(name=name, kind=f"tests.{name}", hooks=[MessageHookType.MESSAGE_WILL_BE_POSTED], priority=priority)


@pytest.mark.asyncio
async def test_crashing_plugin_is_logged_and_skipped(gctx):
    manager = PluginManager(api=InMemoryHostAPI())
    manager.register(_ExplodingPlugin(_cfg("exploding")))
    post = _post()
    assert await manager.filter_post(post, gctx) == (post, "")


@pytest.mark.asyncio
async def test_crashing_plugin_raises_when_configured(tmp_path, gctx):
    manager = PluginManager(_write_config(tmp_path, mode="disabled", fail="true"), api=InMemoryHostAPI())
    manager.register(_ExplodingPlugin(_cfg("exploding")))
    with pytest.raises(PluginError):
        await manager.filter_post(_post(), gctx)


@pytest.mark.asyncio
async def test_plugins_run_in_priority_order(gctx):
    manager = PluginManager(api=InMemoryHostAPI())
    manager.register(_BlockAllPlugin(_cfg("block_all", priority=10)))
    manager.register(_ExplodingPlugin(_cfg("exploding", priority=20)))
    post, reason = await manager.filter_post(_post(), gctx)
    assert post is None
    assert reason == "No posting today."


def test_duplicate_registration_is_rejected():
    manager = PluginManager(api=InMemoryHostAPI())
    manager.register(_BlockAllPlugin(_cfg("block_all")))
    with pytest.raises(ValueError):
        manager.register(_BlockAllPlugin(_cfg("block_all")))


def test_register_binds_host_api():
    api = InMemoryHostAPI()
    manager = PluginManager(api=api)
    plugin = _BlockAllPlugin(_cfg("block_all"))
    manager.register(plugin)
    assert plugin.api is api


def test_manager_requires_host_api(tmp_path):
    with pytest.raises(ValueError, match="HostAPI"):
        PluginManager(_write_config(tmp_path))


class _FlakyHost(HostAPI):
    def get_channel(self, channel_id):
        raise ConnectionError("host unreachable")


@pytest.mark.asyncio
async def test_unreachable_host_rejects_every_post(tmp_path, frozen_time, gctx):
    manager = PluginManager(_write_config(tmp_path), api=_FlakyHost())
    await manager.initialize()

    for _ in range(3):
        post, reason = await manager.filter_post(_post(), gctx)
        assert post is None
        assert reason == INTERNAL_ERROR_MESSAGE


@pytest.fixture
def fresh_plugin_manager(monkeypatch):
    monkeypatch.setattr(chatgate_settings, "plugins_enabled", True)
    monkeypatch.setattr(framework_module, "_plugin_manager", None)
    monkeypatch.setattr(LoggingService, "configure", lambda self, level=None, force=False: None)
    monkeypatch.setenv("PLUGIN_CONFIG_FILE", str(REPO_CONFIG))


def test_get_plugin_manager_binds_host_api(fresh_plugin_manager):
    api = InMemoryHostAPI()
    manager = framework_module.get_plugin_manager(api)
    assert isinstance(manager, PluginManager)
    assert framework_module.get_plugin_manager(api) is manager
    assert manager.config.plugins[0].name == "PostLimiter"


def test_get_plugin_manager_without_host_api(fresh_plugin_manager):
    with pytest.raises(ValueError):
        framework_module.get_plugin_manager(None)
