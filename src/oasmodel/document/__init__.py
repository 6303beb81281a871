"""Typed, immutable model of an OpenAPI 3.0 document."""

from oasmodel.document.base import OpenAPIObject
from oasmodel.document.info import (
    Contact,
    ExternalDoc,
    Info,
    License,
    Server,
    ServerVariable,
    Tag,
)
from oasmodel.document.objects import (
    Callback,
    Components,
    ContentRepresentation,
    EmbeddedExample,
    Encoding,
    Example,
    ExampleValue,
    ExternalExample,
    Header,
    Link,
    LinkOperation,
    MediaType,
    MediaTypeExample,
    MultipleExamples,
    OpenAPI,
    Operation,
    OperationId,
    OperationRef,
    Parameter,
    ParameterExamples,
    ParameterLocation,
    ParameterRepresentation,
    ParameterStyle,
    PathItem,
    RequestBody,
    Response,
    SchemaRepresentation,
    SecurityRequirement,
    SingleExample,
)
from oasmodel.document.reference import (
    SCHEMA_COMPONENT_PREFIX,
    ComponentReference,
    ObjectOrReference,
    Reference,
)
from oasmodel.document.schema import (
    ComponentOrInlineSchema,
    Schema,
    SchemaType,
    inline_schema,
    schema_depth,
)
from oasmodel.document.security import (
    ApiKeySecurityScheme,
    AuthorizationCodeFlow,
    ClientCredentialsFlow,
    HttpSecurityScheme,
    ImplicitFlow,
    OAuth2SecurityScheme,
    OAuthFlows,
    OpenIdConnectSecurityScheme,
    PasswordFlow,
    SecurityScheme,
)
from oasmodel.document.variants import VariantSelector
from oasmodel.document.walk import count_component_references, iter_component_references

__all__ = [
    "ApiKeySecurityScheme",
    "AuthorizationCodeFlow",
    "Callback",
    "ClientCredentialsFlow",
    "ComponentOrInlineSchema",
    "ComponentReference",
    "Components",
    "Contact",
    "ContentRepresentation",
    "EmbeddedExample",
    "Encoding",
    "Example",
    "ExampleValue",
    "ExternalDoc",
    "ExternalExample",
    "Header",
    "HttpSecurityScheme",
    "ImplicitFlow",
    "Info",
    "License",
    "Link",
    "LinkOperation",
    "MediaType",
    "MediaTypeExample",
    "MultipleExamples",
    "OAuth2SecurityScheme",
    "OAuthFlows",
    "ObjectOrReference",
    "OpenAPI",
    "OpenAPIObject",
    "OpenIdConnectSecurityScheme",
    "Operation",
    "OperationId",
    "OperationRef",
    "Parameter",
    "ParameterExamples",
    "ParameterLocation",
    "ParameterRepresentation",
    "ParameterStyle",
    "PasswordFlow",
    "PathItem",
    "Reference",
    "RequestBody",
    "Response",
    "SCHEMA_COMPONENT_PREFIX",
    "Schema",
    "SchemaRepresentation",
    "SchemaType",
    "SecurityRequirement",
    "SecurityScheme",
    "Server",
    "ServerVariable",
    "SingleExample",
    "Tag",
    "VariantSelector",
    "count_component_references",
    "inline_schema",
    "iter_component_references",
    "schema_depth",
]
