"""oasmodel -- a typed, immutable model of OpenAPI 3.0 documents.

Documents are decoded from JSON or YAML into a tree of frozen pydantic
models and encoded back in a canonical form. Every position that may hold a
``$ref`` is modelled explicitly, so a decoded tree can be inspected without
ever following a reference.

Typical use::

    from oasmodel import decode, encode

    doc = decode(Path("openapi.yaml").read_text())
    print(doc.info.title)
    Path("openapi.json").write_bytes(encode(doc))

Modules:
    document: The document model (objects, schemas, references, unions).
    parser: JSON/YAML codec and source loading.
    app: Typer application and CLI entry point.
    models: Pydantic configuration models.
    config: XDG-aware configuration resolution.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric exit codes following clig.dev conventions.
    output: stdout/stderr formatting system with Rich support.
"""

__version__ = "0.1.0"

from oasmodel.document import OpenAPI  # noqa: E402
from oasmodel.exceptions import DecodeError, OasModelError  # noqa: E402
from oasmodel.parser import decode, decode_value, encode, encode_value  # noqa: E402

__all__ = [
    "DecodeError",
    "OasModelError",
    "OpenAPI",
    "__version__",
    "decode",
    "decode_value",
    "encode",
    "encode_value",
]
