"""
🧪 反應式嵌入訊息測試配置文件
- 提供測試所需的 fixtures
- 隔離全域設定與環境變數
- 模擬 Discord 客戶端、頻道與使用者
"""

import os
from collections.abc import Generator

import pytest

from reaction_embeds.core import config as config_module
from reaction_embeds.core.config import InteractionConfig
from reaction_embeds.core.logging import shutdown_logging
from test_utils.discord_mocks import MockClient, MockTextChannel, MockUser

# ═══════════════════════════════════════════════════════════════════════════════════════════
# 🎯 測試環境配置
# ═══════════════════════════════════════════════════════════════════════════════════════════


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path) -> Generator[None, None, None]:
    """🌍 每個測試使用乾淨的全域設定，並移除 REACTION_EMBEDS_ 環境變數"""
    for key in list(os.environ):
        if key.startswith("REACTION_EMBEDS_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)

    config_module.reset_config()
    yield
    shutdown_logging()
    config_module.reset_config()


# ═══════════════════════════════════════════════════════════════════════════════════════════
# 🎮 Discord 物件模擬 Fixtures
# ═══════════════════════════════════════════════════════════════════════════════════════════


@pytest.fixture
def client() -> MockClient:
    """🤖 派送 reaction_add 事件的模擬客戶端"""
    return MockClient()


@pytest.fixture
def channel() -> MockTextChannel:
    """💬 模擬文字頻道"""
    return MockTextChannel()


@pytest.fixture
def user() -> MockUser:
    """👤 授權互動的使用者"""
    return MockUser(12345, "author")


@pytest.fixture
def other_user() -> MockUser:
    """👥 未授權的其他使用者"""
    return MockUser(67890, "stranger")


@pytest.fixture
def fast_config() -> InteractionConfig:
    """⚡ 縮短逾時的互動設定，避免測試等待太久"""
    return InteractionConfig(idle_timeout=5.0, time_limit=10.0)
