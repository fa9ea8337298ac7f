"""Remove a context and whatever only it was using.

Clusters and users are shared by reference, so they are deleted only when no
remaining context points at them. The check runs after the context itself is
gone; otherwise its own reference would keep them alive.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from dataclasses import field

from .models import EntityKind
from .models import KubeConfig

logger = logging.getLogger(__name__)


@dataclass
class RemovalResult:
    """What a context removal deleted."""

    removed: list[tuple[EntityKind, str]] = field(default_factory=list)
    cleared_current_context: bool = False

    @property
    def count(self) -> int:
        return len(self.removed)


def _delete_named(entries: list, name: str) -> bool:
    for index, entry in enumerate(entries):
        if entry.name == name:
            del entries[index]
            return True
    return False


def remove_context_entries(destination: KubeConfig, context_name: str) -> RemovalResult:
    """Remove ``context_name`` and cascade to its unreferenced cluster and user.

    A missing context is a no-op. Dangling cluster/user references are tolerated.
    """
    result = RemovalResult()

    context = destination.find_context(context_name)
    if context is None:
        logger.info(f"Context '{context_name}' not found, nothing to remove")
        return result

    cluster_name = context.context.cluster
    user_name = context.context.user

    _delete_named(destination.contexts, context_name)
    result.removed.append((EntityKind.CONTEXT, context_name))

    # References are counted against the surviving contexts only
    if not any(c.context.cluster == cluster_name for c in destination.contexts):
        if _delete_named(destination.clusters, cluster_name):
            result.removed.append((EntityKind.CLUSTER, cluster_name))
    else:
        logger.debug(f"Cluster '{cluster_name}' still referenced, keeping it")

    if not any(c.context.user == user_name for c in destination.contexts):
        if _delete_named(destination.users, user_name):
            result.removed.append((EntityKind.USER, user_name))
    else:
        logger.debug(f"User '{user_name}' still referenced, keeping it")

    if destination.current_context == context_name:
        destination.current_context = None
        result.cleared_current_context = True

    for kind, name in result.removed:
        logger.info(f"Removed {kind.value} '{name}'")

    return result


def remove_context(destination: KubeConfig, context_name: str) -> int:
    """Remove a context (see ``remove_context_entries``) and return how many entries went."""
    return remove_context_entries(destination, context_name).count
