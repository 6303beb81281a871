"""Tests for oasmodel.document.security."""

from __future__ import annotations

import json
from typing import Any

import pytest

from oasmodel.document import (
    ApiKeySecurityScheme,
    HttpSecurityScheme,
    ImplicitFlow,
    OAuth2SecurityScheme,
    OpenIdConnectSecurityScheme,
    SecurityScheme,
)
from oasmodel.document.security import SECURITY_SCHEME_TYPES
from oasmodel.exceptions import MissingRequiredField, UnknownDiscriminant
from oasmodel.parser import decode, decode_value, encode_value


# ---------------------------------------------------------------------------
# Tag dispatch
# ---------------------------------------------------------------------------


class TestSecuritySchemeDispatch:
    """The ``type`` tag selects the payload shape directly."""

    def test_api_key(self) -> None:
        scheme = decode_value(SecurityScheme, {"type": "apiKey", "name": "X-Key", "in": "header"})
        assert isinstance(scheme, ApiKeySecurityScheme)
        assert scheme.location == "header"

    def test_http_bearer(self) -> None:
        raw = {"type": "http", "scheme": "bearer", "bearerFormat": "JWT"}
        scheme = decode_value(SecurityScheme, raw)
        assert isinstance(scheme, HttpSecurityScheme)
        assert encode_value(scheme) == raw

    def test_http_without_bearer_format(self) -> None:
        scheme = decode_value(SecurityScheme, {"type": "http", "scheme": "basic"})
        assert scheme.bearer_format == ""
        assert encode_value(scheme) == {"type": "http", "scheme": "basic"}

    def test_open_id_connect(self) -> None:
        raw = {
            "type": "openIdConnect",
            "openIdConnectUrl": "https://example.com/.well-known/openid-configuration",
        }
        scheme = decode_value(SecurityScheme, raw)
        assert isinstance(scheme, OpenIdConnectSecurityScheme)
        assert encode_value(scheme) == raw

    def test_oauth2_implicit_only(self) -> None:
        raw = {
            "type": "oauth2",
            "flows": {
                "implicit": {
                    "authorizationUrl": "https://example.com/auth",
                    "scopes": {"read": "read things", "write": "write things"},
                }
            },
        }
        scheme = decode_value(SecurityScheme, raw)
        assert isinstance(scheme, OAuth2SecurityScheme)
        assert scheme.flows.implicit == ImplicitFlow(
            authorization_url="https://example.com/auth",
            scopes={"read": "read things", "write": "write things"},
        )
        assert scheme.flows.password is None
        assert scheme.flows.client_credentials is None
        assert scheme.flows.authorization_code is None
        assert encode_value(scheme) == raw

    def test_scopes_order_preserved(self) -> None:
        raw = {
            "type": "oauth2",
            "flows": {
                "clientCredentials": {
                    "tokenUrl": "https://example.com/token",
                    "scopes": {"z": "last", "a": "first"},
                }
            },
        }
        encoded = encode_value(decode_value(SecurityScheme, raw))
        assert list(encoded["flows"]["clientCredentials"]["scopes"]) == ["z", "a"]

    def test_unknown_tag(self) -> None:
        with pytest.raises(UnknownDiscriminant) as exc_info:
            decode_value(SecurityScheme, {"type": "mutualTLS"})
        error = exc_info.value
        assert error.tag == "mutualTLS"
        assert error.expected == SECURITY_SCHEME_TYPES

    def test_missing_tag(self) -> None:
        with pytest.raises(MissingRequiredField) as exc_info:
            decode_value(SecurityScheme, {"scheme": "basic"})
        assert exc_info.value.field == "type"

    def test_missing_payload_field(self) -> None:
        with pytest.raises(MissingRequiredField) as exc_info:
            decode_value(SecurityScheme, {"type": "apiKey", "name": "X-Key"})
        assert exc_info.value.field == "in"


class TestSecuritySchemesInDocument:
    """Errors inside ``components.securitySchemes`` carry the document path."""

    def test_unknown_tag_path(self, minimal_raw: dict[str, Any]) -> None:
        raw = dict(minimal_raw)
        raw["components"] = {"securitySchemes": {"tls": {"type": "mutualTLS"}}}
        with pytest.raises(UnknownDiscriminant) as exc_info:
            decode(json.dumps(raw))
        assert exc_info.value.path == ("components", "securitySchemes", "tls")

    def test_reference_in_registry(self, minimal_raw: dict[str, Any]) -> None:
        raw = dict(minimal_raw)
        raw["components"] = {"securitySchemes": {"alias": {"$ref": "#/components/securitySchemes/key"}}}
        doc = decode(json.dumps(raw))
        assert doc.components.security_schemes["alias"].ref_path == (
            "#/components/securitySchemes/key"
        )
