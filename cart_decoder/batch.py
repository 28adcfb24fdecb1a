import asyncio
import logging
from collections import Counter
from functools import reduce
from typing import Dict, Iterable, Optional, Tuple

from .decoder import decode
from .domain import Shop
from .errors import DecodeError
from .ftypes import Either

logger = logging.getLogger(__name__)


# ============ Параллельное декодирование ============


async def decode_many_async(
    sources: Iterable, max_workers: Optional[int] = None
) -> Tuple[Either[DecodeError, Shop], ...]:
    """
    Декодирует все источники параллельно, каждый в отдельном потоке.
    Порядок результатов совпадает с порядком источников.
    max_workers ограничивает число одновременных декодирований.
    """
    if max_workers is not None and max_workers < 1:
        raise ValueError("max_workers must be positive")

    limit = asyncio.Semaphore(max_workers) if max_workers else None

    async def decode_one(source) -> Either[DecodeError, Shop]:
        if limit is None:
            return await asyncio.to_thread(decode, source)
        async with limit:
            return await asyncio.to_thread(decode, source)

    tasks = [decode_one(source) for source in sources]
    results = await asyncio.gather(*tasks)

    logger.debug("batch decoded %d document(s)", len(results))
    return tuple(results)


def decode_many(
    sources: Iterable, max_workers: Optional[int] = None
) -> Tuple[Either[DecodeError, Shop], ...]:
    """Синхронная обёртка над decode_many_async"""
    return asyncio.run(decode_many_async(sources, max_workers))


# ============ Сводка ============


def summarize(results: Iterable[Either[DecodeError, Shop]]) -> Dict:
    """Сводка по пакету: сколько декодировано, сколько ошибок и каких"""

    def accumulate(acc: Tuple[int, Counter], result: Either) -> Tuple[int, Counter]:
        decoded, failures = acc
        if result.is_left:
            return decoded, failures + Counter({result.value.kind: 1})
        return decoded + 1, failures

    decoded, failures = reduce(accumulate, results, (0, Counter()))

    return {
        "total": decoded + sum(failures.values()),
        "decoded": decoded,
        "failed": sum(failures.values()),
        "failures_by_kind": dict(failures),
    }
