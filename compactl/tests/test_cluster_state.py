from unittest.mock import MagicMock

import pytest

from compactl.modules import AmbariClusterState, UnknownServiceError


def make_response(status_code=200, payload=None):
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = payload or {}
    return response


HOST_COMPONENTS = {
    "items": [
        {"HostRoles": {"host_name": "h0", "service_name": "YARN", "component_name": "RESOURCEMANAGER"}},
        {"HostRoles": {"host_name": "h3", "service_name": "YARN", "component_name": "RESOURCEMANAGER"}},
    ]
}


@pytest.fixture
def session():
    return MagicMock()


@pytest.fixture
def state(session):
    return AmbariClusterState(api_url="http://ambari:8080/api/v1", cluster_name="c1", session=session, timeout=5)


def test_hosts_running_queries_host_components(state, session):
    session.get.return_value = make_response(payload=HOST_COMPONENTS)
    assert state.hosts_running("YARN", "RESOURCEMANAGER") == ["h0", "h3"]
    args, kwargs = session.get.call_args
    assert args == ("http://ambari:8080/api/v1/clusters/c1/host_components",)
    assert kwargs["params"]["HostRoles/component_name"] == "RESOURCEMANAGER"
    assert kwargs["timeout"] == 5


def test_hosts_running_filters_by_service(state, session):
    session.get.return_value = make_response(payload=HOST_COMPONENTS)
    assert state.hosts_running("HDFS", "RESOURCEMANAGER") == []


def test_is_installed(state, session):
    session.get.return_value = make_response(payload=HOST_COMPONENTS)
    assert state.is_installed("RESOURCEMANAGER", "h3")
    assert not state.is_installed("RESOURCEMANAGER", "h1")


def test_registered_component_types(state, session):
    session.get.return_value = make_response(payload={
        "components": [
            {"ServiceComponentInfo": {"component_name": "RESOURCEMANAGER"}},
            {"ServiceComponentInfo": {"component_name": "NODEMANAGER"}},
        ]
    })
    assert state.registered_component_types("YARN") == {"RESOURCEMANAGER", "NODEMANAGER"}
    assert session.get.call_args[0][0] == "http://ambari:8080/api/v1/clusters/c1/services/YARN"


def test_unknown_service_raises(state, session):
    session.get.return_value = make_response(status_code=404)
    with pytest.raises(UnknownServiceError):
        state.registered_component_types("SPARK")
