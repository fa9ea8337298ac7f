"""Tests for context removal with reference-aware cascade."""

from kconf.merger import merge_kubeconfig
from kconf.models import ContextInfo
from kconf.models import EntityKind
from kconf.models import NamedContext
from kconf.models import empty_kubeconfig
from kconf.remover import remove_context
from kconf.remover import remove_context_entries


class TestRemoveContext:
    def test_removes_context_with_unshared_cluster_and_user(self, kubeconfig_factory):
        destination = kubeconfig_factory("solo")

        count = remove_context(destination, "solo-context")

        assert count == 3
        assert destination.clusters == []
        assert destination.contexts == []
        assert destination.users == []
        assert destination.current_context is None

    def test_shared_cluster_survives(self, kubeconfig_factory):
        destination = kubeconfig_factory("prod")
        merge_kubeconfig(destination, kubeconfig_factory("ops"))
        # Second context on the same cluster with a different user
        destination.contexts.append(
            NamedContext(name="prod-readonly", context=ContextInfo(cluster="prod-cluster", user="ops-user"))
        )

        result = remove_context_entries(destination, "prod-context")

        assert result.count == 2
        assert result.removed == [(EntityKind.CONTEXT, "prod-context"), (EntityKind.USER, "prod-user")]
        assert [c.name for c in destination.clusters] == ["prod-cluster", "ops-cluster"]
        assert [u.name for u in destination.users] == ["ops-user"]

    def test_shared_cluster_and_user_remove_only_context(self, kubeconfig_factory):
        destination = kubeconfig_factory("prod")
        destination.contexts.append(
            NamedContext(
                name="prod-kube-system",
                context=ContextInfo(cluster="prod-cluster", user="prod-user", namespace="kube-system"),
            )
        )

        count = remove_context(destination, "prod-kube-system")

        assert count == 1
        assert len(destination.clusters) == 1
        assert len(destination.users) == 1
        assert destination.current_context == "prod-context"

    def test_cluster_released_after_last_reference(self, kubeconfig_factory):
        destination = kubeconfig_factory("prod")
        destination.contexts.append(
            NamedContext(name="prod-2", context=ContextInfo(cluster="prod-cluster", user="prod-user"))
        )

        assert remove_context(destination, "prod-context") == 1
        assert remove_context(destination, "prod-2") == 3
        assert destination.clusters == []
        assert destination.users == []

    def test_missing_context_is_a_no_op(self, kubeconfig_factory):
        destination = kubeconfig_factory("keep")
        destination.current_context = "does-not-exist"
        before = destination.to_dict()

        count = remove_context(destination, "does-not-exist")

        assert count == 0
        assert destination.to_dict() == before

    def test_dangling_references_are_tolerated(self):
        destination = empty_kubeconfig()
        destination.contexts.append(
            NamedContext(name="dangling", context=ContextInfo(cluster="gone", user="gone-too"))
        )

        result = remove_context_entries(destination, "dangling")

        assert result.removed == [(EntityKind.CONTEXT, "dangling")]
        assert destination.contexts == []

    def test_current_context_cleared_only_when_removed(self, kubeconfig_factory):
        destination = kubeconfig_factory("a")
        merge_kubeconfig(destination, kubeconfig_factory("b"))

        other = remove_context_entries(destination, "b-context")
        active = remove_context_entries(destination, "a-context")

        assert other.cleared_current_context is False
        assert active.cleared_current_context is True
        assert destination.current_context is None


class TestMergeThenRemove:
    def test_end_to_end(self, kubeconfig_factory):
        destination = empty_kubeconfig()

        merge_kubeconfig(destination, kubeconfig_factory("x"))

        assert len(destination.clusters) == 1
        assert len(destination.contexts) == 1
        assert len(destination.users) == 1
        assert destination.current_context == "x-context"

        assert remove_context(destination, "x-context") == 3
        assert destination.clusters == []
        assert destination.contexts == []
        assert destination.users == []
        assert destination.current_context is None
