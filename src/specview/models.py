"""Canonical Pydantic models shared across all specview modules.

This is the single source of truth for data shapes in the project. The models
fall into two groups:

**Input models** -- what a caller hands to the generator:
    :class:`TargetType` and :class:`GenerationOptions`.

**View models** -- the version-independent representation produced by the
view builders and consumed by templates:
    :class:`ParameterLocation`, :class:`ViewParameter`, :class:`Header`,
    :class:`ResponseDescriptor`, :class:`Method`, :class:`SecurityKind`,
    :class:`SecurityScheme`, :class:`SecurityFlags`, :class:`Definition`,
    and :class:`ViewModel`.

View models keep snake_case attribute names in Python and serialise with the
camelCase names templates expect (``isSecureToken``, ``camelCaseName``,
``isGET`` ...). Use :meth:`ViewModel.to_template_dict` to obtain that form.
They are frozen: a view model is never mutated after a builder returns it.
"""

from __future__ import annotations

import enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


# --- Input models ---


class TargetType(str, enum.Enum):
    """Output styles a view model can be rendered into."""

    ANGULAR = "angular"
    NODE = "node"
    REACT = "react"
    TYPESCRIPT = "typescript"
    CUSTOM = "custom"

    @property
    def is_node(self) -> bool:
        """Whether the target runs server-side and may send proxy-injected headers."""
        return self in (TargetType.NODE, TargetType.REACT)


class SpecVersion(str, enum.Enum):
    """The three document grammars the builders understand."""

    SWAGGER_1 = "1.x"
    SWAGGER_2 = "2.0"
    OPENAPI_3 = "3.x"


class GenerationOptions(BaseModel):
    """Options bag for a single generation call.

    Field names accept both their snake_case form and the camelCase keys used
    by project files (``className``, ``moduleName``, ...).

    Example::

        GenerationOptions(class_name="PetApi", multiple=True, path="./out")
    """

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="forbid"
    )

    class_name: Optional[str] = Field(
        default=None, description="Identifier of the generated class"
    )
    module_name: Optional[str] = Field(
        default=None, description="Optional module identifier"
    )
    multiple: bool = Field(
        default=False, description="Group methods per tag and fill Method.destination"
    )
    request_body_parameter_name: Optional[str] = Field(
        default=None,
        description="Override for the synthesized OpenAPI 3 body parameter name",
    )
    is_es6: bool = Field(default=False, alias="isES6")
    esnext: bool = False
    imports: list[str] = Field(default_factory=list)
    path: Optional[str] = Field(
        default=None, description="Destination directory for multi-file output"
    )
    controllers_dir_name: Optional[str] = None
    definitions_dir_name: Optional[str] = None
    strict_content_type: bool = Field(
        default=False,
        description="Fail instead of picking the first of several request content types",
    )


# --- View models ---


class _ViewBase(BaseModel):
    """Frozen base for every view-level model."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True
    )


class ParameterLocation(str, enum.Enum):
    """Transport channel of a classified parameter."""

    PATH = "path"
    QUERY = "query"
    HEADER = "header"
    BODY = "body"
    FORM = "form"


class ViewParameter(_ViewBase):
    """A classified parameter, ready for a template.

    Exactly one of the ``is_*_parameter`` flags is true; it mirrors
    :attr:`location`.
    """

    name: str
    camel_case_name: str
    location: ParameterLocation
    description: Optional[str] = None
    required: bool = False
    is_path_parameter: bool = False
    is_query_parameter: bool = False
    is_header_parameter: bool = False
    is_body_parameter: bool = False
    is_form_parameter: bool = False
    is_singleton: bool = False
    singleton: Any = None
    is_pattern_type: bool = False
    pattern: Optional[str] = None
    default: Any = None
    default_json: Optional[str] = None
    ts_type: str = "any"
    cardinality: str = "?"


class Header(_ViewBase):
    """A static request header synthesized from content-type negotiation."""

    name: str
    value: str


class ResponseDescriptor(_ViewBase):
    """One successful response shape: status code, content type and mapped type."""

    status_code: str
    content_type: str
    ts_type: str
    description: Optional[str] = None
    is_last: bool = False


class Method(_ViewBase):
    """The view of one retained, uniquely-named operation."""

    method_name: str
    method: str
    path: str
    class_name: Optional[str] = None
    summary: Optional[str] = None
    external_docs: Optional[dict[str, Any]] = None
    tags: list[str] = Field(default_factory=list)
    is_get: bool = Field(default=False, alias="isGET")
    is_post: bool = Field(default=False, alias="isPOST")
    is_secure: bool = False
    is_secure_token: bool = False
    is_secure_api_key: bool = False
    is_secure_basic: bool = False
    parameters: list[ViewParameter] = Field(default_factory=list)
    headers: list[Header] = Field(default_factory=list)
    responses: list[ResponseDescriptor] = Field(default_factory=list)
    destination: Optional[str] = None
    has_body: bool = False
    is_form_method: bool = False
    has_extra_header: bool = False
    all_optional: bool = True


class SecurityKind(str, enum.Enum):
    """Credential families templates know how to emit."""

    OAUTH2 = "oauth2"
    API_KEY = "apiKey"
    BASIC = "basic"


class SecurityScheme(_ViewBase):
    """A named security scheme declared by the document.

    ``param_name`` and ``location`` are only set for API-key schemes.
    """

    name: str
    kind: SecurityKind
    description: Optional[str] = None
    param_name: Optional[str] = None
    location: Optional[str] = None


class SecurityFlags(_ViewBase):
    """Which credential families apply, per method or document-wide."""

    token: bool = False
    api_key: bool = False
    basic: bool = False

    def __or__(self, other: SecurityFlags) -> SecurityFlags:
        return SecurityFlags(
            token=self.token or other.token,
            api_key=self.api_key or other.api_key,
            basic=self.basic or other.basic,
        )

    @property
    def any(self) -> bool:
        return self.token or self.api_key or self.basic


class Definition(_ViewBase):
    """A shared schema exposed to templates as a named type."""

    name: str
    description: Optional[str] = None
    ts_type: str


class ViewModel(_ViewBase):
    """Top-level, version-independent view of one document.

    Built once per generation call by a
    :class:`~specview.generator.base.ViewBuilder` and handed to renderers.

    See Also:
        :func:`~specview.generator.view.build_view`: The entry point that
        produces it.
    """

    version: SpecVersion
    description: Optional[str] = None
    domain: str = ""
    module_name: Optional[str] = None
    class_name: Optional[str] = None
    imports: list[str] = Field(default_factory=list)
    is_node: bool = False
    is_es6: bool = Field(default=False, alias="isES6")
    is_secure: bool = False
    is_secure_token: bool = False
    is_secure_api_key: bool = False
    is_secure_basic: bool = False
    security_schemes: list[SecurityScheme] = Field(default_factory=list)
    methods: list[Method] = Field(default_factory=list)
    definitions: list[Definition] = Field(default_factory=list)

    def to_template_dict(self) -> dict[str, Any]:
        """Return the camelCase, JSON-compatible form consumed by templates."""
        return self.model_dump(mode="json", by_alias=True)
