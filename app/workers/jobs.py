"""Scheduled job functions for live market data ticks.

These run outside the FastAPI request context, so they use the
process-wide store and selection directly. All exceptions are caught to
prevent scheduler crashes.
"""

from loguru import logger

from app.services.market_data_store import MarketDataStore
from app.store import PairSelection, market_store, pair_selection


async def tick_selected_pairs(
    store: MarketDataStore | None = None,
    selection: PairSelection | None = None,
) -> int:
    """Append one live candle to every selected pair.

    Registered as an APScheduler interval job. A failure on one pair is
    logged and does not stop the remaining pairs from ticking.

    Args:
        store: Store to tick; defaults to the process-wide store.
        selection: Pairs to tick; defaults to the process-wide selection.

    Returns:
        Number of candles appended.
    """
    store = store if store is not None else market_store
    selection = selection if selection is not None else pair_selection

    appended = 0
    for pair_key in selection.snapshot():
        try:
            candle = store.tick(pair_key)
        except Exception:
            logger.exception("tick failed | pair={pair}", pair=pair_key.value)
            continue
        if candle is not None:
            appended += 1

    logger.debug("tick_selected_pairs complete | appended={count}", count=appended)
    return appended
