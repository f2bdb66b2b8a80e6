"""
Discord API模擬類別
Task ID: R3 - 反應式嵌入訊息測試

提供測試環境所需的Discord API模擬對象，支援：
- Client.wait_for / dispatch（與 discord.py 相同的等待語意）
- TextChannel（文字頻道）模擬
- Message（訊息）模擬，記錄反應與編輯
- Reaction / User 模擬
"""
from __future__ import annotations

import asyncio
from typing import Any, Callable, Dict, List, Optional, Tuple
from unittest.mock import MagicMock

import discord


def make_http_exception(status: int = 403, reason: str = "Forbidden") -> discord.HTTPException:
    """建立 discord.HTTPException（模擬 API 拒絕）"""
    response = MagicMock()
    response.status = status
    response.reason = reason
    return discord.HTTPException(response, reason)


class MockUser:
    """模擬Discord使用者對象"""

    def __init__(self, user_id: int, name: str = "user", bot: bool = False):
        self.id = user_id
        self.name = name
        self.bot = bot

    @property
    def mention(self) -> str:
        return f"<@{self.id}>"

    def __repr__(self) -> str:
        return f"<MockUser id={self.id} name={self.name!r}>"


class MockReaction:
    """模擬Discord反應對象"""

    def __init__(self, emoji: Any, message: MockMessage, count: int = 1):
        self.emoji = emoji
        self.message = message
        self.count = count

    def __repr__(self) -> str:
        return f"<MockReaction emoji={self.emoji!r} message={self.message.id}>"


class MockMessage:
    """模擬Discord訊息對象，記錄所有反應與編輯操作"""

    def __init__(self, message_id: int, channel: MockTextChannel, embed: Optional[discord.Embed] = None):
        self.id = message_id
        self.channel = channel
        self.embeds: List[discord.Embed] = [embed] if embed is not None else []

        # 操作紀錄
        self.added_reactions: List[Any] = []
        self.removed_reactions: List[Tuple[Any, Any]] = []
        self.edits: List[discord.Embed] = []
        self.clear_count = 0

        # 失敗注入
        self.failing_reactions: set = set()
        self.fail_remove = False
        self.fail_clear = False
        self.fail_edit = False
        self.remove_delay = 0.0

    @property
    def embed(self) -> Optional[discord.Embed]:
        return self.embeds[0] if self.embeds else None

    async def add_reaction(self, emoji: Any) -> None:
        """模擬附加反應"""
        await asyncio.sleep(0)
        if emoji in self.failing_reactions:
            raise make_http_exception(400, "Unknown Emoji")
        self.added_reactions.append(emoji)

    async def remove_reaction(self, emoji: Any, member: Any) -> None:
        """模擬移除使用者的反應"""
        if self.remove_delay:
            await asyncio.sleep(self.remove_delay)
        if self.fail_remove:
            raise make_http_exception()
        self.removed_reactions.append((emoji, member))

    async def clear_reactions(self) -> None:
        """模擬清除所有反應"""
        if self.fail_clear:
            raise make_http_exception()
        self.clear_count += 1

    async def edit(self, **kwargs) -> MockMessage:
        """模擬編輯訊息"""
        if self.fail_edit:
            raise make_http_exception(404, "Not Found")
        if 'embed' in kwargs:
            self.embeds = [kwargs['embed']]
            self.edits.append(kwargs['embed'])
        return self


class MockTextChannel:
    """模擬Discord文字頻道對象"""

    def __init__(self, channel_id: int = 555666777, name: str = "測試頻道"):
        self.id = channel_id
        self.name = name
        self._messages: List[MockMessage] = []

    @property
    def mention(self) -> str:
        return f"<#{self.id}>"

    @property
    def last_message(self) -> Optional[MockMessage]:
        return self._messages[-1] if self._messages else None

    async def send(self, content=None, **kwargs) -> MockMessage:
        """模擬發送訊息"""
        message = MockMessage(
            message_id=len(self._messages) + 1000,
            channel=self,
            embed=kwargs.get('embed'),
        )
        self._messages.append(message)
        return message


class MockClient:
    """
    模擬Discord客戶端

    wait_for / dispatch 的行為與 discord.py 相同：
    事件只會送到派送當下正在等待、且 check 通過的等待者。
    """

    def __init__(self, **kwargs):
        self.user = MockUser(kwargs.get('bot_id', 123456789), "TestBot", bot=True)
        self._listeners: Dict[str, List[Tuple[asyncio.Future, Optional[Callable[..., bool]]]]] = {}

    def wait_for(self, event: str, *, check: Optional[Callable[..., bool]] = None, timeout: Optional[float] = None):
        """模擬 Client.wait_for"""
        future = asyncio.get_running_loop().create_future()
        self._listeners.setdefault(event, []).append((future, check))
        return asyncio.wait_for(future, timeout)

    def waiting(self, event: str = "reaction_add") -> int:
        """目前等待中的數量"""
        return sum(1 for future, _ in self._listeners.get(event, []) if not future.done())

    def dispatch(self, event: str, *args: Any) -> int:
        """模擬派送事件，回傳收到事件的等待者數量"""
        listeners = self._listeners.get(event)
        if not listeners:
            return 0

        delivered = 0
        remaining = []
        for future, check in listeners:
            if future.done():
                continue
            if check is not None and not check(*args):
                remaining.append((future, check))
                continue
            future.set_result(args[0] if len(args) == 1 else args)
            delivered += 1

        self._listeners[event] = remaining
        return delivered

    async def settle(self, cycles: int = 200) -> None:
        """讓出事件迴圈，讓監聽者就緒並處理完已派送的事件"""
        for _ in range(cycles):
            await asyncio.sleep(0)

    async def react(self, message: MockMessage, emoji: Any, user: MockUser) -> MockReaction:
        """模擬使用者對訊息按下反應，並等待處理完成"""
        await self.settle()
        reaction = MockReaction(emoji, message)
        self.dispatch("reaction_add", reaction, user)
        await self.settle()
        return reaction


# === 便利工具函數 ===

def make_embeds(count: int, footer: Optional[str] = None) -> List[discord.Embed]:
    """建立多則測試用嵌入訊息"""
    embeds = []
    for i in range(count):
        embed = discord.Embed(title=f"第 {i + 1} 頁", description=f"內容 {i + 1}")
        if footer is not None:
            embed.set_footer(text=footer)
        embeds.append(embed)
    return embeds
