"""
并发任务组

把 "全部发出、全部等待" 的并发模式封装成一个有序的任务组：
- 结果按提交顺序返回，与完成顺序无关
- 任一任务失败即重新抛出该异常，其余任务由 TaskGroup 取消
"""
import asyncio
from typing import Any, Awaitable, Callable, Iterable, List, TypeVar

T = TypeVar("T")


async def gather_ordered(aws: Iterable[Awaitable[T]]) -> List[T]:
    """
    并发执行所有 awaitable，按提交顺序返回结果

    Args:
        aws: 协程或 Future 序列

    Returns:
        与输入顺序一致的结果列表

    Raises:
        第一个失败任务的原始异常（不包装成 ExceptionGroup）
    """
    try:
        async with asyncio.TaskGroup() as group:
            tasks = [group.create_task(_as_coroutine(aw)) for aw in aws]
    except BaseExceptionGroup as eg:
        raise _first_leaf(eg) from None

    return [task.result() for task in tasks]


async def run_blocking(func: Callable[..., T], *args: Any) -> T:
    """在线程中执行阻塞的文件系统调用"""
    return await asyncio.to_thread(func, *args)


async def _as_coroutine(aw: Awaitable[T]) -> T:
    return await aw


def _first_leaf(eg: BaseExceptionGroup) -> BaseException:
    exc: BaseException = eg
    while isinstance(exc, BaseExceptionGroup):
        exc = exc.exceptions[0]
    return exc
