"""
ReactionPanel 基礎類別測試
Task ID: R3 - 反應式嵌入訊息測試

測試覆蓋：
- 基礎類別為抽象類別，子類別必須實作必要成員
- 表情名稱與結束補丁輔助函數
"""
from unittest.mock import MagicMock

import discord
import pytest

from reaction_embeds.panels.base import ReactionPanel, apply_kill_patch, emoji_name


class TestReactionPanelAbstract:
    """ReactionPanel 抽象介面測試"""

    def test_cannot_instantiate_base(self, client, fast_config):
        """測試基礎類別無法直接建立"""
        with pytest.raises(TypeError):
            ReactionPanel(client, config=fast_config)

    def test_subclass_missing_members_rejected(self, client, fast_config):
        """測試未實作 _on_reaction 的子類別無法建立"""

        class HalfPanel(ReactionPanel):
            @property
            def current_embed(self):
                return discord.Embed(title="半成品")

            @property
            def reaction_emojis(self):
                return ("👍",)

        with pytest.raises(TypeError):
            HalfPanel(client, config=fast_config)

    def test_complete_subclass(self, client, fast_config):
        """測試實作所有成員的子類別可建立，且結束嵌入預設為空"""

        class FullPanel(ReactionPanel):
            @property
            def current_embed(self):
                return discord.Embed(title="完整")

            @property
            def reaction_emojis(self):
                return ("👍",)

            async def _on_reaction(self, name, reaction, user):
                return None

        panel = FullPanel(client, config=fast_config)

        assert panel.final_embed is None
        panel._set_final_embed(panel.current_embed)
        assert panel.final_embed.title == "完整"


class TestPanelHelpers:
    """輔助函數測試"""

    def test_emoji_name_unicode(self):
        """測試 Unicode 表情名稱為本身"""
        assert emoji_name("👍") == "👍"

    def test_emoji_name_custom(self):
        """測試自訂表情以名稱表示"""
        emoji = MagicMock(spec=discord.PartialEmoji)
        emoji.name = "approve"

        assert emoji_name(emoji) == "approve"

    def test_kill_patch_overrides_fields(self):
        """測試補丁覆蓋同名欄位並保留其他欄位"""
        embed = discord.Embed(title="投票", description="進行中")

        patched = apply_kill_patch(embed, {"description": "已結束"})

        assert patched.title == "投票"
        assert patched.description == "已結束"
        assert embed.description == "進行中"
