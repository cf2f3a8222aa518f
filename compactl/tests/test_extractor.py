from compactl.modules.extractor import (
    extract_config_actions, get_components_to_add, get_components_to_delete, is_component_actions_present,
)
from compactl.modules.models import ComponentAction, ResolvedComponentAction

from conftest import action, scheduler_change


def test_extract_keeps_only_entries_with_actions():
    configs = [scheduler_change(), action("APP_TIMELINE_SERVER", "h1")]
    extracted = extract_config_actions(configs)
    assert [c.config_action.component_name for c in extracted] == ["APP_TIMELINE_SERVER"]


def test_delete_of_absent_component_is_dropped(cluster_state):
    configs = [action("APP_TIMELINE_SERVER", "h1", "delete")]
    assert get_components_to_delete(configs, cluster_state) == []


def test_delete_of_installed_component_is_kept(cluster_state):
    configs = [action("NODEMANAGER", "h2", "delete"), action("NODEMANAGER", "h9", "delete")]
    to_delete = get_components_to_delete(configs, cluster_state)
    assert [(s.component_name, s.host_name) for s in to_delete] == [("NODEMANAGER", "h2")]
    assert to_delete[0].action == ComponentAction.DELETE


def test_add_of_present_component_is_excluded(catalog, cluster_state):
    configs = [action("NODEMANAGER", "h1"), action("NODEMANAGER", "h3")]
    assert get_components_to_add(configs, catalog, cluster_state) == [
        ResolvedComponentAction("NODEMANAGER", "h3", is_client=False)
    ]


def test_add_checks_presence_for_owning_service_only(catalog, state_data):
    from compactl.modules import StaticClusterState

    # A host component recorded under another service does not count as present
    state_data["services"]["HDFS"]["host_components"].append(
        {"component_name": "APP_TIMELINE_SERVER", "host_name": "h1"}
    )
    state = StaticClusterState.from_dict(state_data)
    to_add = get_components_to_add([action("APP_TIMELINE_SERVER", "h1")], catalog, state)
    assert [c.component_name for c in to_add] == ["APP_TIMELINE_SERVER"]


def test_add_tags_clients(catalog, cluster_state):
    to_add = get_components_to_add([action("MAPREDUCE2_CLIENT", "h2")], catalog, cluster_state)
    assert to_add[0].is_client is True


def test_is_component_actions_present(catalog, cluster_state):
    assert is_component_actions_present([action("APP_TIMELINE_SERVER", "h1")], catalog, cluster_state)
    assert not is_component_actions_present([action("NODEMANAGER", "h1")], catalog, cluster_state)
    assert not is_component_actions_present([scheduler_change()], catalog, cluster_state)


def test_repeated_deletes_collapse_to_first(cluster_state):
    configs = [
        action("NODEMANAGER", "h2", "delete"),
        action("NODEMANAGER", "h1", "delete", filename="hdfs-site.xml"),
        action("NODEMANAGER", "h2", "delete", filename="mapred-site.xml"),
    ]
    to_delete = get_components_to_delete(configs, cluster_state)
    assert [(s.component_name, s.host_name) for s in to_delete] == [("NODEMANAGER", "h2"), ("NODEMANAGER", "h1")]
