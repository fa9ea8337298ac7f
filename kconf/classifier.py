"""Classify incoming kubeconfig entries against a destination.

Each incoming cluster, context and user lands in exactly one bucket:

- add: no destination entry has that name
- update: the name collides and update mode is on
- skip: the name collides and update mode is off (only the name is kept)

The destination is never modified here; see ``kconf.merger`` for that.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from dataclasses import field
from typing import Generic
from typing import TypeVar

from .models import EntityKind
from .models import KubeConfig
from .models import NamedCluster
from .models import NamedContext
from .models import NamedEntity
from .models import NamedUser

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=NamedEntity)


@dataclass
class EntityPartition(Generic[E]):
    """Add/update/skip buckets for one entity kind."""

    add: list[E] = field(default_factory=list)
    update: list[E] = field(default_factory=list)
    skip: list[str] = field(default_factory=list)


@dataclass
class Classification:
    """Result of classifying one incoming document."""

    clusters: EntityPartition[NamedCluster] = field(default_factory=EntityPartition)
    contexts: EntityPartition[NamedContext] = field(default_factory=EntityPartition)
    users: EntityPartition[NamedUser] = field(default_factory=EntityPartition)

    def partition(self, kind: EntityKind) -> EntityPartition:
        return getattr(self, kind.attribute)

    def partitions(self) -> Iterator[tuple[EntityKind, EntityPartition]]:
        """Yield (kind, partition) in cluster, context, user order."""
        for kind in EntityKind:
            yield kind, self.partition(kind)

    @property
    def added(self) -> int:
        return sum(len(p.add) for _, p in self.partitions())

    @property
    def updated(self) -> int:
        return sum(len(p.update) for _, p in self.partitions())

    @property
    def skipped(self) -> int:
        return sum(len(p.skip) for _, p in self.partitions())


def _partition(existing: list[E], incoming: list[E], update: bool) -> EntityPartition[E]:
    result: EntityPartition[E] = EntityPartition()
    # Names added earlier in the same batch count as existing
    taken = {entry.name for entry in existing}

    for entry in incoming:
        if entry.name not in taken:
            result.add.append(entry)
            taken.add(entry.name)
        elif update:
            result.update.append(entry)
        else:
            result.skip.append(entry.name)

    return result


def classify(destination: KubeConfig, incoming: KubeConfig, update: bool = False) -> Classification:
    """Partition every entry of ``incoming`` against ``destination``.

    Args:
        destination: Current destination state (read only)
        incoming: Document being merged in
        update: Replace colliding entries instead of skipping them

    Returns:
        Classification with one partition per entity kind
    """
    classification = Classification()
    for kind in EntityKind:
        partition = _partition(kind.collection(destination), kind.collection(incoming), update)
        setattr(classification, kind.attribute, partition)

        for name in partition.skip:
            logger.debug(f"{kind.value} '{name}' already exists, skipping")

    return classification
