"""The generic operations a resource proxy can declare."""

from __future__ import annotations

from enum import Enum


class Method(Enum):
    """Generic operations provided by :class:`~pdum.compute.types.resource.Resource`.

    A resource type lists the members it supports in its ``methods`` table;
    operations missing from the table are not available on its instances.
    """

    GET = "get"
    GET_METADATA = "get_metadata"
    EXISTS = "exists"
    SET_METADATA = "set_metadata"
    DELETE = "delete"


__all__ = ["Method"]
