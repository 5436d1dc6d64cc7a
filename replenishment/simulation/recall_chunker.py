"""Financial-event chunker for delayed revenue.

A batch produces one recall posting per selling day; they are collapsed into
a handful of recall events for display.
"""

import math
from typing import List, Sequence

from ..models.simulation_result import FinancialEvent, FinancialEventType
from .config import SimulationConfig
from .ledger import RecallPosting


def format_recall_label(batch_index: int, amount: float) -> str:
    """Label like "#1 recall $6.0k" (amount rounded to 0.1k)."""
    thousands = math.floor(amount / 100.0 + 0.5) / 10.0
    return f"#{batch_index + 1} recall ${thousands:.1f}k"


def chunk_recalls(
    postings: Sequence[RecallPosting],
    batch_index: int,
    config: SimulationConfig,
) -> List[FinancialEvent]:
    """
    Collapse one batch's recall postings into recall events.

    Postings are sorted by day. A chunk starts at its first posting and
    absorbs later postings while they are at most ``recall_chunk_days`` past
    the chunk start. Each chunk whose total exceeds ``recall_min_amount``
    becomes one event dated ``recall_event_offset_days`` after the chunk
    start.

    Args:
        postings: Recall postings of the batch
        batch_index: Batch the postings belong to
        config: Simulation configuration

    Returns:
        Recall events in day order
    """
    if not postings:
        return []

    events: List[FinancialEvent] = []

    def emit(chunk_start: int, amount: float) -> None:
        if amount > config.recall_min_amount:
            events.append(FinancialEvent(
                day=chunk_start + config.recall_event_offset_days,
                type=FinancialEventType.RECALL,
                batch_index=batch_index,
                amount=amount,
                label=format_recall_label(batch_index, amount),
            ))

    ordered = sorted(postings, key=lambda posting: posting.day)
    chunk_start = ordered[0].day
    chunk_amount = 0.0
    for posting in ordered:
        if posting.day - chunk_start > config.recall_chunk_days:
            emit(chunk_start, chunk_amount)
            chunk_start = posting.day
            chunk_amount = 0.0
        chunk_amount += posting.amount
    emit(chunk_start, chunk_amount)

    return events
