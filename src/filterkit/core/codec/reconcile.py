"""Identity reconciliation across reparses.

When the user edits raw text and switches back to the structured view, the
document is rebuilt from text and every block gets a fresh identity. This
module hands old identities back to new blocks whose content is unchanged so
the editor keeps which block is expanded, focused, or scrolled to.

Matching is a multiset problem: several blocks can share one signature. Old
identities for each signature are queued in their original order and popped
front-first, so the first new duplicate receives the first old identity.
"""
from __future__ import annotations

import logging
from collections import defaultdict, deque
from typing import Deque, Dict

from .models import Document

logger = logging.getLogger(__name__)


def reconcile_identities(previous: Document, next_document: Document) -> Document:
    """Reassign identities from ``previous`` onto ``next_document`` in place.

    Only ``id`` is touched; block content is never merged or dropped. Blocks
    without a content-equivalent predecessor keep their fresh identity.

    Returns:
        ``next_document`` (the same list object), for chaining.
    """
    queues: Dict[str, Deque[str]] = defaultdict(deque)
    for block in previous:
        queues[block.signature()].append(block.id)

    reused = 0
    for block in next_document:
        queue = queues.get(block.signature())
        if queue:
            block.id = queue.popleft()
            reused += 1

    logger.debug(
        "Reconciled identities: %d reused, %d fresh",
        reused,
        len(next_document) - reused,
    )
    return next_document


__all__ = ["reconcile_identities"]
