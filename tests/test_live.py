"""Live tests against the Compute Engine API.

These tests use Application Default Credentials and the project they
report. They are skipped in CI by default but can be run locally:

    PDUM_COMPUTE_MANUAL_TESTS=1 uv run pytest tests/test_live.py -v
"""

import os
import threading

import pytest

from pdum.compute import Compute, Project

# Skip these tests in CI unless PDUM_COMPUTE_MANUAL_TESTS environment variable is set
manual_test = pytest.mark.skipif(
    not os.getenv("PDUM_COMPUTE_MANUAL_TESTS"),
    reason="Manual test - requires GCP credentials. Set PDUM_COMPUTE_MANUAL_TESTS=1 to run.",
)


@manual_test
def test_get_project():
    """Fetch the ADC project and check the response describes it."""
    with Compute() as compute:
        project, api_response = compute.project().get().result(timeout=60)

        assert isinstance(project, Project)
        assert api_response.status_code == 200
        assert api_response.body["name"] == compute.project_id
        print(f"\n✓ Fetched project {compute.project_id} ({api_response.body.get('id')})")


@manual_test
def test_get_metadata_callback():
    """The callback form sees the same metadata as the future form."""
    with Compute() as compute:
        project = compute.project()
        expected, _ = project.get_metadata().result(timeout=60)

        seen = []
        done = threading.Event()

        def callback(err, metadata, api_response):
            seen.append((err, metadata))
            done.set()

        project.get_metadata(callback=callback)
        assert done.wait(timeout=60)

        err, metadata = seen[0]
        assert err is None
        assert metadata["name"] == expected["name"]
