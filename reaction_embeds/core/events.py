"""
🔔 具名事件分派器
Reaction Embeds - 事件註冊與觸發

提供:
- 以事件名稱(表情符號、collect、end)註冊處理器
- 同步與異步處理器混用
- 單一處理器失敗不影響其他處理器
"""

import inspect
import logging
from collections import defaultdict
from collections.abc import Callable
from typing import Any

logger = logging.getLogger(__name__)

EventListener = Callable[..., Any]


class EventEmitter:
    """具名事件分派器"""

    def __init__(self) -> None:
        self._listeners: dict[str, list[EventListener]] = defaultdict(list)
        self._once: set[int] = set()

    def on(self, event: str, listener: EventListener | None = None):
        """
        註冊事件處理器

        可直接呼叫 ``emitter.on("✅", handler)``,
        或作為裝飾器使用 ``@emitter.on("✅")``。

        Args:
            event: 事件名稱
            listener: 處理器,可為一般函數或協程函數

        Returns:
            處理器本身(裝飾器模式下回傳裝飾器)
        """
        if listener is None:
            def decorator(func: EventListener) -> EventListener:
                self._listeners[event].append(func)
                return func

            return decorator

        self._listeners[event].append(listener)
        return listener

    def once(self, event: str, listener: EventListener) -> EventListener:
        """註冊只觸發一次的處理器"""
        self._listeners[event].append(listener)
        self._once.add(id(listener))
        return listener

    def off(self, event: str, listener: EventListener) -> bool:
        """移除處理器,回傳是否確實移除"""
        listeners = self._listeners.get(event)
        if not listeners or listener not in listeners:
            return False

        listeners.remove(listener)
        self._once.discard(id(listener))
        return True

    def listeners(self, event: str) -> list[EventListener]:
        """取得事件目前的處理器(副本)"""
        return list(self._listeners.get(event, ()))

    async def emit(self, event: str, *args: Any) -> int:
        """
        依註冊順序觸發事件

        Args:
            event: 事件名稱
            *args: 傳給處理器的參數

        Returns:
            被呼叫的處理器數量
        """
        listeners = self.listeners(event)

        for listener in listeners:
            if id(listener) in self._once:
                self.off(event, listener)

            try:
                result = listener(*args)
                if inspect.isawaitable(result):
                    await result
            except Exception:
                logger.exception(f"【事件分派】處理器 {listener!r} 處理事件 {event!r} 失敗")

        return len(listeners)
