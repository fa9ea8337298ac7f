"""kconf - merge kubeconfig files into a single destination kubeconfig."""

from .classifier import Classification
from .classifier import EntityPartition
from .classifier import classify
from .merger import MergeCounts
from .merger import merge
from .merger import merge_kubeconfig
from .models import EntityKind
from .models import KubeConfig
from .remover import RemovalResult
from .remover import remove_context
from .remover import remove_context_entries

__version__ = "0.2.0"

__all__ = [
    "Classification",
    "EntityKind",
    "EntityPartition",
    "KubeConfig",
    "MergeCounts",
    "RemovalResult",
    "classify",
    "merge",
    "merge_kubeconfig",
    "remove_context",
    "remove_context_entries",
]
