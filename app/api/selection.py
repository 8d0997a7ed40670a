"""Tick selection endpoints: which pairs the scheduler advances."""

from fastapi import APIRouter, Depends
from loguru import logger

from app.models.catalog import PairKey
from app.schemas.market import SelectionResponse
from app.store import PairSelection, get_selection

router = APIRouter(prefix="/selection", tags=["selection"])


def _response(selection: PairSelection) -> SelectionResponse:
    return SelectionResponse(pairs=[key.value for key in selection.snapshot()])


@router.get("", response_model=SelectionResponse)
async def get_selected(
    selection: PairSelection = Depends(get_selection),
) -> SelectionResponse:
    return _response(selection)


@router.put("/{pair_key}", response_model=SelectionResponse)
async def select_pair(
    pair_key: PairKey,
    exclusive: bool = False,
    selection: PairSelection = Depends(get_selection),
) -> SelectionResponse:
    """Start ticking a pair. With ``exclusive``, it becomes the only one."""
    if exclusive:
        selection.replace([pair_key])
    else:
        selection.select(pair_key)
    logger.info("Pair selected for ticks | pair={pair} exclusive={exclusive}",
                pair=pair_key.value, exclusive=exclusive)
    return _response(selection)


@router.delete("/{pair_key}", response_model=SelectionResponse)
async def deselect_pair(
    pair_key: PairKey,
    selection: PairSelection = Depends(get_selection),
) -> SelectionResponse:
    """Stop ticking a pair."""
    selection.deselect(pair_key)
    logger.info("Pair deselected | pair={pair}", pair=pair_key.value)
    return _response(selection)
