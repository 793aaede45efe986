"""Project resource implementation."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .methods import Method
from .resource import Resource

if TYPE_CHECKING:
    from pdum.compute.compute import Compute


class Project(Resource):
    """The Compute Engine project a :class:`~pdum.compute.compute.Compute` is bound to.

    The project is the root resource of its context: it has no id or path
    segment of its own, so requests go to the parent's URL
    (``{api_endpoint}/projects/{project_id}``). Which project is addressed is
    decided entirely by the parent.

    See https://cloud.google.com/compute/docs/reference/rest/v1/projects

    Example
    -------
    >>> project = compute.project()
    >>> project, api_response = project.get().result()
    >>> metadata, api_response = project.get_metadata().result()
    >>> project.get_metadata(callback=lambda err, metadata, api_response: ...)
    """

    methods = frozenset({Method.GET, Method.GET_METADATA})

    def __init__(self, compute: "Compute") -> None:
        super().__init__(compute, base_url="", id="")

    @property
    def project_id(self) -> str:
        return self.parent.id

    def full_resource_name(self) -> str:
        return f"projects/{self.project_id}"


__all__ = ["Project"]
