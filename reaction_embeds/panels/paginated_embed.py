"""
分頁嵌入訊息
Task ID: R2 - 反應式嵌入訊息

將多則嵌入訊息合併為一則,以左右箭頭反應切換頁面,
到達首尾時循環。
"""

import logging
from collections.abc import Sequence
from typing import Optional

import discord

from ..core.config import InteractionConfig
from ..core.errors import ValidationError
from .base import EmojiLike, KillPatch, ReactionPanel

logger = logging.getLogger(__name__)


def previous_index(index: int, count: int) -> int:
    """上一頁索引,第一頁往前回到最後一頁"""
    return count - 1 if index - 1 < 0 else index - 1


def next_index(index: int, count: int) -> int:
    """下一頁索引,最後一頁往後回到第一頁"""
    return 0 if index + 1 > count - 1 else index + 1


class PaginatedEmbed(ReactionPanel):
    """
    以反應翻頁的嵌入訊息

    建立時會在每則嵌入訊息的頁腳加上「Page i/n」,直接修改傳入的物件。
    """

    def __init__(
        self,
        client: discord.Client,
        embeds: Sequence[discord.Embed],
        killed: Optional[KillPatch] = None,
        *,
        config: Optional[InteractionConfig] = None,
    ) -> None:
        """
        Args:
            client: 負責派送 reaction_add 事件的客戶端
            embeds: 依頁序排列的嵌入訊息,至少一則
            killed: 互動結束時覆蓋到目前頁面上的補丁
            config: 逾時、翻頁表情與過濾設定,預設取全域設定
        """
        if len(embeds) == 0:
            raise ValidationError(
                "embeds",
                embeds,
                "non-empty sequence required",
                message="At least 1 Embed must be provided in a PaginatedEmbed.",
            )

        super().__init__(client, killed, config=config)

        total = len(embeds)
        for number, embed in enumerate(embeds, start=1):
            self._annotate(embed, number, total)

        self.embeds: tuple[discord.Embed, ...] = tuple(embeds)
        self._index = 0

    def _annotate(self, embed: discord.Embed, number: int, total: int) -> None:
        page = f"Page {number}/{total}"
        footer = embed.footer
        if footer.text:
            text = f"{footer.text}{self.config.page_separator}{page}"
        else:
            text = page
        embed.set_footer(text=text, icon_url=footer.icon_url)

    @property
    def index(self) -> int:
        """目前顯示的頁面索引(從 0 起算)"""
        return self._index

    @property
    def current_embed(self) -> discord.Embed:
        return self.embeds[self._index]

    @property
    def reaction_emojis(self) -> tuple[EmojiLike, ...]:
        return (self.config.previous_emoji, self.config.next_emoji)

    async def send(
        self, channel: discord.abc.Messageable, user: discord.abc.User
    ) -> "PaginatedEmbed":
        """
        發送第一頁並啟用翻頁

        Args:
            channel: 發送訊息的頻道
            user: 唯一可以翻頁的使用者

        Returns:
            自身
        """
        await self._post(channel, user)
        logger.info(
            f"【分頁嵌入】訊息 {self.message.id} 已啟用,共 {len(self.embeds)} 頁,限定使用者 {user.id}"
        )
        return self

    async def _on_reaction(
        self, name: str, reaction: discord.Reaction, user: discord.abc.User
    ) -> None:
        count = len(self.embeds)
        if name == self.config.previous_emoji:
            self._index = previous_index(self._index, count)
        elif name == self.config.next_emoji:
            self._index = next_index(self._index, count)
        else:
            return

        logger.debug(f"【分頁嵌入】訊息 {self.message.id} 切換到第 {self._index + 1}/{count} 頁")
        await self._edit(self.current_embed)
