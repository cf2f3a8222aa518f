import pytest

from compactl.modules import StackCatalog, UnknownComponentError
from compactl.modules.dependencies import get_dependent_components, resolve_components_to_add
from compactl.modules.models import ComponentAction, ComponentActionSpec, ResolvedComponentAction


def hsi(host="h2"):
    return ResolvedComponentAction("HIVE_SERVER_INTERACTIVE", host, is_client=False)


def test_only_host_scoped_missing_dependencies_are_added(catalog, cluster_state):
    deps = get_dependent_components([hsi("h2")], catalog, cluster_state)
    assert deps == [
        ResolvedComponentAction("YARN_CLIENT", "h2", is_client=True),
        ResolvedComponentAction("HDFS_CLIENT", "h2", is_client=True),
        ResolvedComponentAction("TEZ_CLIENT", "h2", is_client=True),
    ]


def test_installed_dependencies_are_skipped(catalog, cluster_state):
    # YARN_CLIENT and HDFS_CLIENT are already on h1
    deps = get_dependent_components([hsi("h1")], catalog, cluster_state)
    assert [d.component_name for d in deps] == ["TEZ_CLIENT"]


def test_dependency_of_dependency_is_not_followed(catalog, cluster_state):
    deps = get_dependent_components([hsi("h2")], catalog, cluster_state)
    assert "MAPREDUCE2_CLIENT" not in [d.component_name for d in deps]


def test_requested_components_are_never_emitted_again(catalog, cluster_state):
    requested = [hsi("h2"), ResolvedComponentAction("TEZ_CLIENT", "h2", is_client=True)]
    deps = get_dependent_components(requested, catalog, cluster_state)
    assert ("TEZ_CLIENT", "h2") not in [(d.component_name, d.host_name) for d in deps]
    # TEZ_CLIENT was requested, so its own dependency is picked up
    assert ("MAPREDUCE2_CLIENT", "h2") in [(d.component_name, d.host_name) for d in deps]


def test_shared_dependency_is_added_once_per_host(catalog, cluster_state):
    requested = [hsi("h2"), hsi("h3")]
    deps = get_dependent_components(requested + [hsi("h2")], catalog, cluster_state)
    keys = [(d.component_name, d.host_name) for d in deps]
    assert len(keys) == len(set(keys))
    assert keys.count(("YARN_CLIENT", "h2")) == 1
    assert keys.count(("YARN_CLIENT", "h3")) == 1


def test_resolution_is_stable(catalog, cluster_state):
    first = resolve_components_to_add([hsi("h2")], catalog, cluster_state)
    second = resolve_components_to_add([hsi("h2")], catalog, cluster_state)
    assert first == second
    assert first[0] == hsi("h2")


def test_user_deletes_are_not_overridden(catalog, cluster_state):
    excluded = [ComponentActionSpec("HDFS_CLIENT", "h2", ComponentAction.DELETE)]
    deps = get_dependent_components([hsi("h2")], catalog, cluster_state, excluded=excluded)
    assert "HDFS_CLIENT" not in [d.component_name for d in deps]


def test_missing_catalog_entry_fails_fast(catalog_data, cluster_state):
    catalog_data["components"]["HIVE_SERVER_INTERACTIVE"]["dependencies"].append(
        {"component_name": "LLAP_DAEMON", "scope": "host"}
    )
    catalog = StackCatalog.from_dict(catalog_data)
    with pytest.raises(UnknownComponentError):
        get_dependent_components([hsi("h2")], catalog, cluster_state)
