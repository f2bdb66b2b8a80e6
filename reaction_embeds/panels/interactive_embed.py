"""
互動式嵌入訊息
Task ID: R2 - 反應式嵌入訊息

發送一則嵌入訊息並附加指定的表情反應,
授權使用者點選反應時,以該表情符號為名觸發事件。

用法:

    embed = InteractiveEmbed(bot, ["✅", "❌"], discord.Embed(title="確認?"))

    @embed.on("✅")
    async def confirmed(reaction, user):
        ...

    await embed.send(ctx.channel, ctx.author)
"""

import logging
from collections.abc import Mapping, Sequence
from typing import Any, Optional, Union

import discord

from ..core.config import InteractionConfig
from ..core.errors import ValidationError
from .base import EmojiLike, KillPatch, ReactionPanel, emoji_name

logger = logging.getLogger(__name__)


class InteractiveEmbed(ReactionPanel):
    """
    以表情反應互動的嵌入訊息

    屬性:
        embed: 目前的嵌入訊息,結束補丁套用後會被取代
        emojis: 可互動的表情符號(建立後不可變)
        collector: send() 之後綁定在訊息上的收集器
    """

    def __init__(
        self,
        client: discord.Client,
        emojis: Sequence[EmojiLike],
        embed: Union[discord.Embed, Mapping[str, Any]],
        killed: Optional[KillPatch] = None,
        *,
        config: Optional[InteractionConfig] = None,
    ) -> None:
        """
        Args:
            client: 負責派送 reaction_add 事件的客戶端
            emojis: 可互動的表情符號,依序附加到訊息上
            embed: 嵌入訊息或嵌入 JSON 字典(會複製一份)
            killed: 互動結束時覆蓋到嵌入訊息上的補丁
            config: 逾時與過濾設定,預設取全域設定
        """
        if not emojis:
            raise ValidationError(
                "emojis", emojis, "at least one emoji is required"
            )

        super().__init__(client, killed, config=config)
        self.emojis: tuple[EmojiLike, ...] = tuple(emojis)
        self._names = frozenset(emoji_name(emoji) for emoji in self.emojis)

        if isinstance(embed, discord.Embed):
            self.embed = embed.copy()
        else:
            self.embed = discord.Embed.from_dict(dict(embed))

    @property
    def current_embed(self) -> discord.Embed:
        return self.embed

    @property
    def reaction_emojis(self) -> tuple[EmojiLike, ...]:
        return self.emojis

    async def send(
        self, channel: discord.abc.Messageable, user: discord.abc.User
    ) -> "InteractiveEmbed":
        """
        發送互動式嵌入訊息

        回傳時訊息已發送、反應已附加、收集器已啟動。

        Args:
            channel: 發送訊息的頻道
            user: 唯一可以互動的使用者

        Returns:
            自身
        """
        await self._post(channel, user)
        logger.info(f"【互動嵌入】訊息 {self.message.id} 已啟用,限定使用者 {user.id}")
        return self

    async def _on_reaction(
        self, name: str, reaction: discord.Reaction, user: discord.abc.User
    ) -> None:
        if name in self._names:
            await self.emit(name, reaction, user)

    def _set_final_embed(self, embed: discord.Embed) -> None:
        super()._set_final_embed(embed)
        self.embed = embed
