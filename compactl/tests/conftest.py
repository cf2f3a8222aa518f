import copy

import pytest

from compactl.modules import (
    ComponentAction, ComponentActionSpec, ConfigEntry, StackCatalog, StaticClusterState,
)
from compactl.modules.requests_builder import RequestBuilder

CATALOG = {
    "components": {
        "RESOURCEMANAGER": {"service": "YARN", "display_name": "ResourceManager"},
        "NODEMANAGER": {"service": "YARN", "display_name": "NodeManager"},
        "APP_TIMELINE_SERVER": {"service": "YARN", "display_name": "App Timeline Server"},
        "YARN_CLIENT": {"service": "YARN", "display_name": "YARN Client", "is_client": True},
        "DATANODE": {"service": "HDFS", "display_name": "DataNode"},
        "HDFS_CLIENT": {"service": "HDFS", "display_name": "HDFS Client", "is_client": True},
        "ZOOKEEPER_SERVER": {"service": "ZOOKEEPER", "display_name": "ZooKeeper Server"},
        "TEZ_CLIENT": {
            "service": "TEZ", "display_name": "Tez Client", "is_client": True,
            "dependencies": [{"component_name": "MAPREDUCE2_CLIENT", "scope": "host"}],
        },
        "MAPREDUCE2_CLIENT": {"service": "MAPREDUCE2", "display_name": "MapReduce2 Client", "is_client": True},
        "HIVE_SERVER_INTERACTIVE": {
            "service": "HIVE",
            "display_name": "HiveServer2 Interactive",
            "dependencies": [
                {"component_name": "YARN_CLIENT", "scope": "host"},
                {"component_name": "HDFS_CLIENT", "scope": "host"},
                {"component_name": "TEZ_CLIENT", "scope": "host"},
                {"component_name": "ZOOKEEPER_SERVER", "scope": "cluster"},
            ],
        },
    },
    "confirm_rules": [
        {
            "file_name": "capacity-scheduler.xml",
            "service_name": "YARN",
            "component_name": "RESOURCEMANAGER",
            "config_name": "capacity-scheduler",
            "body": "Queue changes need a refresh to take effect.",
            "button_label": "Refresh YARN Queues",
            "request_name": "service.item.refreshQueueYarnRequest",
            "command": "REFRESHQUEUES",
            "context": "Refresh YARN Capacity Scheduler",
            "error_message": "Error while refreshing YARN queues: ",
        }
    ],
}

STATE = {
    "services": {
        "YARN": {
            "components": ["RESOURCEMANAGER", "NODEMANAGER", "YARN_CLIENT", "APP_TIMELINE_SERVER"],
            "host_components": [
                {"component_name": "RESOURCEMANAGER", "host_name": "h0"},
                {"component_name": "RESOURCEMANAGER", "host_name": "h3"},
                {"component_name": "NODEMANAGER", "host_name": "h1"},
                {"component_name": "NODEMANAGER", "host_name": "h2"},
                {"component_name": "YARN_CLIENT", "host_name": "h1"},
            ],
        },
        "HDFS": {
            "components": ["DATANODE", "HDFS_CLIENT"],
            "host_components": [
                {"component_name": "DATANODE", "host_name": "h1"},
                {"component_name": "HDFS_CLIENT", "host_name": "h1"},
            ],
        },
        "HIVE": {"components": [], "host_components": []},
        "TEZ": {"components": ["TEZ_CLIENT"], "host_components": []},
        "MAPREDUCE2": {"components": ["MAPREDUCE2_CLIENT"], "host_components": []},
        "ZOOKEEPER": {
            "components": ["ZOOKEEPER_SERVER"],
            "host_components": [{"component_name": "ZOOKEEPER_SERVER", "host_name": "h0"}],
        },
    }
}


@pytest.fixture
def catalog_data():
    return copy.deepcopy(CATALOG)


@pytest.fixture
def state_data():
    return copy.deepcopy(STATE)


@pytest.fixture
def catalog(catalog_data):
    return StackCatalog.from_dict(catalog_data)


@pytest.fixture
def cluster_state(state_data):
    return StaticClusterState.from_dict(state_data)


@pytest.fixture
def builder():
    return RequestBuilder(cluster_name="c1")


def action(component, host, kind="add", filename="yarn-site.xml"):
    """Config entry carrying a component action."""
    return ConfigEntry(
        filename=filename,
        name=f"{component.lower()}.enabled",
        value="true",
        initial_value="false",
        config_action=ComponentActionSpec(component, host, ComponentAction(kind)),
    )


def scheduler_change(value="v2", initial_value="v1"):
    return ConfigEntry(
        filename="capacity-scheduler.xml",
        name="yarn.scheduler.capacity.root.queues",
        value=value,
        initial_value=initial_value,
    )
