"""Security Scheme Objects, dispatched on their explicit ``type`` tag.

Unlike the key-presence unions in :mod:`oasmodel.document.variants`, a
security scheme names its own variant: the ``type`` field is read first and
selects the payload shape directly. There is no probing and no fallback; an
unknown tag is an error (``UnknownDiscriminant``) and a missing tag is a
missing required field.

Tags: ``apiKey``, ``http``, ``oauth2``, ``openIdConnect``.
"""

from __future__ import annotations

from typing import Annotated, Literal, Optional, Union

from pydantic import Discriminator, Field

from oasmodel.document.base import OpenAPIObject


class ImplicitFlow(OpenAPIObject):
    """OAuth2 implicit flow."""

    authorization_url: str
    refresh_url: Optional[str] = None
    scopes: dict[str, str]


class PasswordFlow(OpenAPIObject):
    """OAuth2 resource owner password flow."""

    token_url: str
    refresh_url: Optional[str] = None
    scopes: dict[str, str]


class ClientCredentialsFlow(OpenAPIObject):
    """OAuth2 client credentials flow."""

    token_url: str
    refresh_url: Optional[str] = None
    scopes: dict[str, str]


class AuthorizationCodeFlow(OpenAPIObject):
    """OAuth2 authorization code flow."""

    authorization_url: str
    token_url: str
    refresh_url: Optional[str] = None
    scopes: dict[str, str]


class OAuthFlows(OpenAPIObject):
    """The flows an OAuth2 scheme supports; unset slots are omitted."""

    implicit: Optional[ImplicitFlow] = None
    password: Optional[PasswordFlow] = None
    client_credentials: Optional[ClientCredentialsFlow] = None
    authorization_code: Optional[AuthorizationCodeFlow] = None


class ApiKeySecurityScheme(OpenAPIObject):
    type: Literal["apiKey"]
    description: str = ""
    name: str
    location: str = Field(alias="in")


class HttpSecurityScheme(OpenAPIObject):
    type: Literal["http"]
    description: str = ""
    scheme: str
    bearer_format: str = ""


class OAuth2SecurityScheme(OpenAPIObject):
    type: Literal["oauth2"]
    description: str = ""
    flows: OAuthFlows


class OpenIdConnectSecurityScheme(OpenAPIObject):
    type: Literal["openIdConnect"]
    description: str = ""
    open_id_connect_url: str


SecurityScheme = Annotated[
    Union[
        ApiKeySecurityScheme,
        HttpSecurityScheme,
        OAuth2SecurityScheme,
        OpenIdConnectSecurityScheme,
    ],
    Discriminator("type"),
]
"""A security scheme, selected by the value of its ``type`` field."""

SECURITY_SCHEME_TYPES = ("apiKey", "http", "oauth2", "openIdConnect")
"""The closed set of ``type`` tags, in declaration order."""
