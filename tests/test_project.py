"""Tests for the Project resource proxy.

These tests run offline against a stub session; see ``conftest.py``.
"""

import threading

import pytest

from pdum.compute import ApiError, ApiResponse, Compute, Method, Project

from .stubs import PROJECT_URL, StubSession, make_response

FORBIDDEN = {
    "error": {
        "code": 403,
        "message": "Required 'compute.projects.get' permission",
        "errors": [{"reason": "forbidden", "domain": "global"}],
    }
}


def _wait_for_callback(call):
    """Invoke ``call(callback)`` and return the arguments the callback saw."""
    seen = []
    done = threading.Event()

    def callback(*args):
        seen.append(args)
        done.set()

    returned = call(callback)
    assert done.wait(timeout=5), "callback was never invoked"
    assert returned is None
    assert len(seen) == 1
    return seen[0]


def test_project_identity_is_root(compute):
    project = compute.project()

    assert isinstance(project, Project)
    assert project.id == ""
    assert project.base_url == ""
    assert project.parent is compute
    assert project.project_id == "proj-1"
    assert project.url == PROJECT_URL
    assert project.full_resource_name() == "projects/proj-1"


def test_project_identity_does_not_depend_on_project_id(config):
    a = Compute("alpha-project", config=config, session=StubSession(make_response(200, {})))
    b = Compute("beta-project", config=config, session=StubSession(make_response(200, {})))

    pa, pb = Project(a), Project(b)

    assert (pa.id, pa.base_url) == (pb.id, pb.base_url) == ("", "")
    assert pa.url != pb.url
    assert pa.url.endswith("/projects/alpha-project")
    assert pb.url.endswith("/projects/beta-project")


def test_project_declares_get_and_get_metadata(compute):
    project = compute.project()

    assert Project.methods == frozenset({Method.GET, Method.GET_METADATA})
    assert callable(project.get)
    assert callable(project.get_metadata)
    for name in ("exists", "set_metadata", "delete"):
        assert not hasattr(project, name)


def test_removing_a_method_removes_the_operation(compute):
    class MetadataOnlyProject(Project):
        methods = frozenset({Method.GET_METADATA})

    project = MetadataOnlyProject(compute)

    assert not hasattr(project, "get")
    assert callable(project.get_metadata)
    with pytest.raises(AttributeError, match="get"):
        project.get()


def test_get_resolves_with_self_and_response(compute, session):
    project = compute.project()

    result, api_response = project.get().result(timeout=5)

    assert result is project
    assert isinstance(api_response, ApiResponse)
    assert api_response.status_code == 200
    assert api_response.body == {"id": "proj-1"}
    assert session.calls[0][0] == "GET"
    assert session.calls[0][1] == PROJECT_URL


def test_get_metadata_returns_body_unmodified(compute):
    metadata, api_response = compute.project().get_metadata().result(timeout=5)

    assert metadata == {"id": "proj-1"}
    assert api_response.body is metadata


def test_get_with_callback(compute):
    project = compute.project()

    err, result, api_response = _wait_for_callback(lambda cb: project.get(callback=cb))

    assert err is None
    assert result is project
    assert api_response.body == {"id": "proj-1"}


def test_callback_and_future_are_equivalent(compute):
    project = compute.project()

    future_result = project.get_metadata().result(timeout=5)
    err, *callback_result = _wait_for_callback(lambda cb: project.get_metadata(callback=cb))

    assert err is None
    assert tuple(callback_result) == future_result


def test_forbidden_rejects_future(config):
    compute = Compute("proj-1", config=config, session=StubSession(make_response(403, FORBIDDEN)))
    with compute:
        future = compute.project().get()

        with pytest.raises(ApiError) as excinfo:
            future.result(timeout=5)

    assert excinfo.value.code == 403
    assert "compute.projects.get" in excinfo.value.message


def test_forbidden_reaches_callback_without_results(config):
    session = StubSession(make_response(403, FORBIDDEN))
    with Compute("proj-1", config=config, session=session) as compute:
        project = compute.project()
        err, result, api_response = _wait_for_callback(lambda cb: project.get(callback=cb))

    assert isinstance(err, ApiError)
    assert err.code == 403
    assert result is None
    assert api_response is None
    # 403 is final: the proxy and the transport make a single attempt.
    assert len(session.calls) == 1


def test_project_is_not_mutated_by_calls(compute):
    project = compute.project()
    before = dict(vars(project))

    project.get_metadata().result(timeout=5)
    project.get().result(timeout=5)

    assert vars(project) == before


def test_get_with_positional_callback(compute):
    project = compute.project()

    err, result, api_response = _wait_for_callback(lambda cb: project.get(cb))

    assert err is None
    assert result is project
    assert api_response.body == {"id": "proj-1"}


def test_get_metadata_with_positional_callback(compute):
    project = compute.project()

    err, metadata, _ = _wait_for_callback(lambda cb: project.get_metadata(cb))

    assert err is None
    assert metadata == {"id": "proj-1"}


def test_bad_arguments_fail_before_any_request(compute, session):
    project = compute.project()

    with pytest.raises(TypeError, match="get"):
        project.get("unexpected")
    with pytest.raises(TypeError, match="get_metadata"):
        project.get_metadata(verbose=True)

    assert session.calls == []
