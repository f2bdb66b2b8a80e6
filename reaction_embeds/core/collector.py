"""
⏱️ 表情反應收集器
Reaction Embeds - 以 Client.wait_for 實作的反應收集器

收集器綁定單一訊息:
- 監聽工作持續等待 reaction_add,通過過濾的反應依到達順序放入佇列
- 收集迴圈逐一取出並觸發 collect 事件,處理器執行期間的反應不會遺失
- 閒置逾時(距上次有效反應)與絕對逾時(距啟動)任一觸發即結束
- 結束原因統一以一次 end 事件回報
"""

import asyncio
import logging
from collections.abc import Callable
from enum import Enum
from typing import Any

import discord

from .events import EventEmitter

logger = logging.getLogger(__name__)

ReactionCheck = Callable[[discord.Reaction, discord.abc.User], bool]


class CollectorEndReason(Enum):
    """收集器結束原因"""

    IDLE = "idle"  # 閒置逾時
    TIME = "time"  # 絕對逾時
    STOPPED = "stopped"  # 主動停止


class ReactionCollector(EventEmitter):
    """
    單一訊息的反應收集器

    事件:
        collect(reaction, user): 收到通過過濾的反應,依到達順序逐一觸發
        end(reason): 收集器結束,只觸發一次
    """

    def __init__(
        self,
        client: discord.Client,
        message: discord.Message,
        *,
        check: ReactionCheck | None = None,
        idle_timeout: float,
        time_limit: float,
    ) -> None:
        super().__init__()
        self.client = client
        self.message = message
        self.check = check
        self.idle_timeout = idle_timeout
        self.time_limit = time_limit

        self.collected = 0
        self._task: asyncio.Task | None = None
        self._listener: asyncio.Task | None = None
        self._queue: asyncio.Queue[tuple[Any, Any]] = asyncio.Queue()
        self._last_activity = 0.0
        self._waiter: asyncio.Future | None = None
        self._stopping = False
        self._end_reason: CollectorEndReason | None = None
        self._ended = False

    @property
    def started(self) -> bool:
        return self._task is not None

    @property
    def ended(self) -> bool:
        return self._ended

    @property
    def end_reason(self) -> CollectorEndReason | None:
        return self._end_reason

    def start(self) -> asyncio.Task:
        """啟動監聽與收集迴圈,每個收集器只能啟動一次"""
        if self._task is not None:
            raise RuntimeError("Collector has already been started")

        self._last_activity = asyncio.get_running_loop().time()
        self._listener = asyncio.create_task(
            self._listen(), name=f"reaction-listener-{self.message.id}"
        )
        self._task = asyncio.create_task(
            self._run(), name=f"reaction-collector-{self.message.id}"
        )
        return self._task

    def stop(self) -> None:
        """以 STOPPED 結束收集器"""
        if self._ended or self._stopping:
            return

        self._stopping = True
        if self._waiter is not None and not self._waiter.done():
            self._waiter.cancel()

    async def wait(self) -> CollectorEndReason | None:
        """等待收集器結束且 end 處理器執行完畢"""
        if self._task is None:
            raise RuntimeError("Collector has not been started")

        await asyncio.shield(self._task)
        return self._end_reason

    def _filter(self, reaction: discord.Reaction, user: discord.abc.User) -> bool:
        if reaction.message.id != self.message.id:
            return False
        return self.check is None or self.check(reaction, user)

    async def _listen(self) -> None:
        loop = asyncio.get_running_loop()
        while True:
            try:
                reaction, user = await self.client.wait_for(
                    "reaction_add", check=self._filter
                )
            except Exception:
                logger.exception(f"【反應收集】訊息 {self.message.id} 過濾反應時發生錯誤")
                continue

            self._last_activity = loop.time()
            self._queue.put_nowait((reaction, user))

    async def _next_reaction(self, timeout: float) -> Any:
        if not self._queue.empty():
            return self._queue.get_nowait()

        self._waiter = asyncio.ensure_future(
            asyncio.wait_for(self._queue.get(), timeout=timeout)
        )
        try:
            return await self._waiter
        finally:
            self._waiter = None

    async def _collect(self) -> CollectorEndReason:
        loop = asyncio.get_running_loop()
        deadline = loop.time() + self.time_limit

        while not self._stopping:
            now = loop.time()
            remaining = deadline - now
            if remaining <= 0:
                return CollectorEndReason.TIME

            idle_remaining = self._last_activity + self.idle_timeout - now
            if idle_remaining <= 0 and self._queue.empty():
                return CollectorEndReason.IDLE

            # 絕對期限先到時,逾時即代表絕對逾時
            bounded_by_deadline = remaining <= idle_remaining
            try:
                reaction, user = await self._next_reaction(
                    max(0.0, min(idle_remaining, remaining))
                )
            except asyncio.TimeoutError:
                if bounded_by_deadline:
                    return CollectorEndReason.TIME
                if self._queue.empty() and self._last_activity + self.idle_timeout <= loop.time():
                    return CollectorEndReason.IDLE
                continue
            except asyncio.CancelledError:
                if self._stopping:
                    break
                raise

            self.collected += 1
            logger.debug(
                f"【反應收集】訊息 {self.message.id} 收到 {reaction.emoji} (使用者 {user.id})"
            )
            await self.emit("collect", reaction, user)

        return CollectorEndReason.STOPPED

    async def _run(self) -> None:
        try:
            reason = await self._collect()
        finally:
            self._listener.cancel()
            await asyncio.gather(self._listener, return_exceptions=True)

        self._end_reason = reason
        self._ended = True
        logger.debug(
            f"【反應收集】訊息 {self.message.id} 收集結束: {reason.value}, 共 {self.collected} 次"
        )
        await self.emit("end", reason)
