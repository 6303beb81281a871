"""Flat metadata objects: info, contact, license, servers, tags, external docs.

These are plain field containers with no indirection. URL-valued fields are
kept as strings; URL parsing is left to consumers.
"""

from __future__ import annotations

from typing import Optional

from pydantic import Field

from oasmodel.document.base import OpenAPIObject


class Contact(OpenAPIObject):
    name: str = ""
    url: Optional[str] = None
    email: str = ""


class License(OpenAPIObject):
    name: str
    url: Optional[str] = None


class Info(OpenAPIObject):
    """API metadata: title and version are required."""

    title: str
    description: str = ""
    terms_of_service: Optional[str] = None
    version: str
    contact: Optional[Contact] = None
    license: Optional[License] = None


class ServerVariable(OpenAPIObject):
    """A substitution variable in a server URL template."""

    default: str
    enum_values: list[str] = Field(default_factory=list, alias="enum")
    description: str = ""


class Server(OpenAPIObject):
    url: str
    description: str = ""
    variables: dict[str, ServerVariable] = Field(default_factory=dict)


class ExternalDoc(OpenAPIObject):
    url: str
    description: str = ""


class Tag(OpenAPIObject):
    name: str
    description: str = ""
    external_docs: Optional[ExternalDoc] = None
