#!/usr/bin/env python3
"""Example script demonstrating project lookups.

This script fetches the project bound to Application Default Credentials
both ways: waiting on the returned future, and through a callback.

Usage:
    python example_project.py [PROJECT_ID]

Note: This requires the Compute Engine API to be enabled on the project.
"""

import sys
import threading

from pdum.compute import Compute


def main():
    """Print the project's name and common instance metadata keys."""
    project_id = sys.argv[1] if len(sys.argv) > 1 else None

    with Compute(project_id) as compute:
        project = compute.project()
        print(f"Fetching {project.full_resource_name()}...\n")

        metadata, _ = project.get_metadata().result()
        print(f"  Name: {metadata.get('name')}")
        print(f"  ID: {metadata.get('id')}")

        items = metadata.get("commonInstanceMetadata", {}).get("items", [])
        for item in items:
            print(f"  Metadata key: {item.get('key')}")

        done = threading.Event()

        def on_done(err, project, api_response):
            if err is not None:
                print(f"  Callback error: {err}")
            else:
                print(f"  Callback got HTTP {api_response.status_code} for {project.url}")
            done.set()

        project.get(callback=on_done)
        done.wait()


if __name__ == "__main__":
    main()
