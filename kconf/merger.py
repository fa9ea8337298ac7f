"""Apply a classification to a destination kubeconfig."""

from __future__ import annotations

import logging
from typing import NamedTuple

from .classifier import Classification
from .classifier import classify
from .models import KubeConfig

logger = logging.getLogger(__name__)


class MergeCounts(NamedTuple):
    """Entries added, updated and skipped by one merge."""

    added: int
    updated: int
    skipped: int


class MergeResult(NamedTuple):
    classification: Classification
    counts: MergeCounts


def merge(
    destination: KubeConfig,
    classification: Classification,
    incoming_current_context: str | None = None,
) -> MergeCounts:
    """Merge classified entries into ``destination`` in place.

    Added entries are appended; updated entries replace the payload of the
    same-named destination entry without moving it. The destination's
    current-context is only adopted from the incoming document when it is unset,
    so across a batch of inputs the first one to provide it wins.
    """
    for kind, partition in classification.partitions():
        entries = kind.collection(destination)

        for entry in partition.add:
            entries.append(entry)
            logger.info(f"Added {kind.value} '{entry.name}'")

        if partition.update:
            by_name = {existing.name: existing for existing in entries}
            for entry in partition.update:
                by_name[entry.name].replace_payload(entry)
                logger.info(f"Updated {kind.value} '{entry.name}'")

    if destination.current_context is None and incoming_current_context is not None:
        destination.current_context = incoming_current_context
        logger.info(f"Set current-context to '{incoming_current_context}'")

    return MergeCounts(
        added=classification.added,
        updated=classification.updated,
        skipped=classification.skipped,
    )


def merge_kubeconfig(destination: KubeConfig, incoming: KubeConfig, *, update: bool = False) -> MergeResult:
    """Classify ``incoming`` against the current ``destination`` and merge it.

    Call once per input, in order: each call sees everything merged before it.
    """
    classification = classify(destination, incoming, update=update)
    counts = merge(destination, classification, incoming.current_context)
    return MergeResult(classification, counts)
