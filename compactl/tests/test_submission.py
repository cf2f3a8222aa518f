import asyncio
import json
from unittest.mock import MagicMock

import requests

from compactl.modules.models import ApiRequest
from compactl.modules.submission import DryRunSubmitter, HttpSubmitter


def make_response(status_code=202, text=""):
    response = MagicMock()
    response.status_code = status_code
    response.text = text
    return response


def make_submitter(session, **kwargs):
    return HttpSubmitter(
        api_url="http://ambari:8080/api/v1/", user="admin", password="secret",
        retry_delay=0, session=session, **kwargs
    )


def test_http_submitter_sends_json_body_with_headers():
    session = MagicMock()
    session.headers = {}
    session.request.return_value = make_response(202, '{"Requests": {"id": 7}}')
    submitter = make_submitter(session)

    request = ApiRequest(method="POST", path="/clusters/c1/request_schedules", body=[{"a": 1}])
    result = asyncio.run(submitter.submit(request))

    assert result.ok
    args, kwargs = session.request.call_args
    assert args == ("POST", "http://ambari:8080/api/v1/clusters/c1/request_schedules")
    assert json.loads(kwargs["data"]) == [{"a": 1}]
    assert session.headers["X-Requested-By"] == "ambari"
    assert session.auth == ("admin", "secret")


def test_http_submitter_reports_http_errors_without_raising():
    session = MagicMock()
    session.headers = {}
    session.request.return_value = make_response(400, '{"status": 400, "message": "Invalid query"}')
    result = asyncio.run(make_submitter(session).submit(ApiRequest("DELETE", "/clusters/c1/hosts/h1")))
    assert not result.ok
    assert result.status_code == 400
    assert result.message() == "Invalid query"
    assert session.request.call_args[1]["data"] is None


def test_http_submitter_retries_connection_errors():
    session = MagicMock()
    session.headers = {}
    session.request.side_effect = [requests.ConnectionError("refused"), make_response(201)]
    result = asyncio.run(make_submitter(session, max_retries=2).submit(ApiRequest("POST", "/x")))
    assert result.ok
    assert session.request.call_count == 2


def test_http_submitter_gives_up_after_retries():
    session = MagicMock()
    session.headers = {}
    session.request.side_effect = requests.Timeout("slow")
    result = asyncio.run(make_submitter(session, max_retries=1).submit(ApiRequest("POST", "/x")))
    assert not result.ok
    assert result.status_code is None
    assert "slow" in result.error
    assert session.request.call_count == 2


def test_dry_run_submitter_records_requests():
    submitter = DryRunSubmitter()
    request = ApiRequest("POST", "/clusters/c1/requests")
    result = asyncio.run(submitter.submit(request))
    assert result.ok
    assert submitter.requests == [request]
