"""
反應面板基礎類別
Task ID: R2 - 反應式嵌入訊息

提供 InteractiveEmbed 與 PaginatedEmbed 共用的流程:
- 依序附加表情反應
- 建立限定使用者的反應收集器
- 收到反應時移除使用者的反應
- 收集結束時清除反應並套用結束補丁
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping
from typing import Any, Optional, Union

import discord

from ..core.collector import CollectorEndReason, ReactionCollector
from ..core.config import InteractionConfig, load_config, validate_interaction_config
from ..core.events import EventEmitter

logger = logging.getLogger(__name__)

EmojiLike = Union[str, discord.Emoji, discord.PartialEmoji]
KillPatch = Union[discord.Embed, Mapping[str, Any]]


def emoji_name(emoji: EmojiLike) -> str:
    """取得表情符號的事件名稱:Unicode 表情為本身,自訂表情為其名稱"""
    if isinstance(emoji, str):
        return emoji
    return emoji.name or str(emoji)


def apply_kill_patch(embed: discord.Embed, killed: KillPatch) -> discord.Embed:
    """
    將結束補丁淺層合併到嵌入訊息上

    補丁中的欄位覆蓋原嵌入的同名欄位,其他欄位保留。

    Args:
        embed: 目前顯示的嵌入訊息
        killed: 補丁,可為嵌入訊息或嵌入 JSON 字典

    Returns:
        合併後的新嵌入訊息(不修改原物件)
    """
    patch = killed.to_dict() if isinstance(killed, discord.Embed) else dict(killed)
    return discord.Embed.from_dict({**embed.to_dict(), **patch})


class ReactionPanel(EventEmitter, ABC):
    """
    反應式面板基礎類別

    子類別需實作 ``current_embed``、``reaction_emojis`` 與 ``_on_reaction``。
    """

    def __init__(
        self,
        client: discord.Client,
        killed: Optional[KillPatch] = None,
        *,
        config: Optional[InteractionConfig] = None,
    ) -> None:
        super().__init__()
        if config is None:
            config = load_config().interaction
        else:
            validate_interaction_config(config)

        self.client = client
        self.killed = killed
        self.config = config
        self.message: Optional[discord.Message] = None
        self.collector: Optional[ReactionCollector] = None
        self.final_embed: Optional[discord.Embed] = None

    @property
    @abstractmethod
    def current_embed(self) -> discord.Embed:
        """目前顯示的嵌入訊息"""
        pass

    @property
    @abstractmethod
    def reaction_emojis(self) -> tuple[EmojiLike, ...]:
        """附加到訊息上的表情反應"""
        pass

    @abstractmethod
    async def _on_reaction(
        self, name: str, reaction: discord.Reaction, user: discord.abc.User
    ) -> None:
        """處理已移除的有效反應"""
        pass

    async def _post(
        self, channel: discord.abc.Messageable, user: discord.abc.User
    ) -> None:
        if self.collector is not None:
            raise RuntimeError(f"{self.__class__.__name__} has already been sent")

        self.message = await channel.send(embed=self.current_embed)
        await self._attach_reactions(self.reaction_emojis)
        self._arm_collector(user)

    async def _attach_reactions(self, emojis: Iterable[EmojiLike]) -> None:
        for emoji in emojis:
            try:
                await self.message.add_reaction(emoji)
            except discord.HTTPException as e:
                logger.warning(f"【反應面板】訊息 {self.message.id} 無法附加反應 {emoji}: {e}")

    def _arm_collector(self, user: discord.abc.User) -> None:
        allowed = {emoji_name(emoji) for emoji in self.reaction_emojis}
        strict = self.config.strict_emoji_filter

        def check(reaction: discord.Reaction, reactor: discord.abc.User) -> bool:
            if reactor.id != user.id:
                return False
            return not strict or emoji_name(reaction.emoji) in allowed

        self.collector = ReactionCollector(
            self.client,
            self.message,
            check=check,
            idle_timeout=self.config.idle_timeout,
            time_limit=self.config.time_limit,
        )
        self.collector.on("collect", self._handle_collect)
        self.collector.on("end", self._handle_end)
        self.collector.start()

    async def _handle_collect(
        self, reaction: discord.Reaction, user: discord.abc.User
    ) -> None:
        try:
            await self.message.remove_reaction(reaction.emoji, user)
        except discord.HTTPException as e:
            logger.warning(f"【反應面板】訊息 {self.message.id} 無法移除 {user.id} 的反應: {e}")

        await self._on_reaction(emoji_name(reaction.emoji), reaction, user)

    async def _handle_end(self, reason: CollectorEndReason) -> None:
        try:
            await self.message.clear_reactions()
        except discord.HTTPException as e:
            logger.warning(f"【反應面板】訊息 {self.message.id} 無法清除反應: {e}")

        if self.killed is None:
            return

        final = apply_kill_patch(self.current_embed, self.killed)
        self._set_final_embed(final)
        await self._edit(final)

    def _set_final_embed(self, embed: discord.Embed) -> None:
        """記錄套用結束補丁後的嵌入訊息,子類別可覆寫以同步自身狀態"""
        self.final_embed = embed

    async def _edit(self, embed: discord.Embed) -> None:
        try:
            await self.message.edit(embed=embed)
        except discord.HTTPException as e:
            logger.warning(f"【反應面板】訊息 {self.message.id} 編輯失敗: {e}")
