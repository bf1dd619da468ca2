"""Pydantic models for the documentable-element model.

The page-generation tool describes every documented package and type in a JSON or
YAML file. These models validate that description; anything malformed fails before
rendering starts.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr


class TypeKind(StrEnum):
    """Kind of a class-like element."""

    CLASS = "class"
    INTERFACE = "interface"
    ENUM = "enum"
    ANNOTATION = "annotation"


class Visibility(StrEnum):
    """Member visibility with its UML prefix."""

    PUBLIC = "public"
    PROTECTED = "protected"
    PACKAGE = "package"
    PRIVATE = "private"

    @property
    def uml(self) -> str:
        """UML visibility character."""
        return _VISIBILITY_PREFIX[self]


_VISIBILITY_PREFIX = {
    Visibility.PUBLIC: "+",
    Visibility.PROTECTED: "#",
    Visibility.PACKAGE: "~",
    Visibility.PRIVATE: "-",
}


class _Element(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class TagDoc(_Element):
    """A documentation tag such as ``@note`` or ``@since``."""

    name: str = Field(min_length=1)
    text: str = ""


class FieldDoc(_Element):
    """A field or enum constant."""

    name: str = Field(min_length=1)
    type: str = ""
    visibility: Visibility = Visibility.PACKAGE
    static: bool = False
    deprecated: bool = False


class ParameterDoc(_Element):
    """A method or constructor parameter."""

    name: str = Field(min_length=1)
    type: str = Field(min_length=1)


class MethodDoc(_Element):
    """A method or constructor. Constructors have no return type."""

    name: str = Field(min_length=1)
    parameters: list[ParameterDoc] = Field(default_factory=list)
    return_type: str | None = None
    visibility: Visibility = Visibility.PACKAGE
    static: bool = False
    abstract: bool = False
    deprecated: bool = False


class ClassDoc(_Element):
    """A class, interface, enum or annotation type."""

    qualified_name: str = Field(min_length=1)
    name: str | None = None
    package: str = ""
    kind: TypeKind = TypeKind.CLASS
    abstract: bool = False
    deprecated: bool = False
    type_parameters: list[str] = Field(default_factory=list)
    enum_constants: list[FieldDoc] = Field(default_factory=list)
    fields: list[FieldDoc] = Field(default_factory=list)
    constructors: list[MethodDoc] = Field(default_factory=list)
    methods: list[MethodDoc] = Field(default_factory=list)
    tags: list[TagDoc] = Field(default_factory=list)
    superclass: str | None = None
    interfaces: list[str] = Field(default_factory=list)

    @property
    def simple_name(self) -> str:
        """Name without the package prefix (nested types keep their outer type)."""
        if self.name:
            return self.name
        prefix = f"{self.package}." if self.package else ""
        if prefix and self.qualified_name.startswith(prefix):
            return self.qualified_name[len(prefix) :]
        return self.qualified_name.rpartition(".")[2]

    def tags_named(self, tag_name: str) -> list[TagDoc]:
        """Return the tags with the given name in declaration order."""
        return [tag for tag in self.tags if tag.name == tag_name]


class PackageDoc(_Element):
    """A documented package and its types."""

    name: str = ""
    classes: list[ClassDoc] = Field(default_factory=list)


class DocModel(BaseModel):
    """The complete documentable-element model of one documentation run."""

    model_config = ConfigDict(extra="forbid")

    packages: list[PackageDoc] = Field(default_factory=list)

    _index: dict[str, ClassDoc] | None = PrivateAttr(default=None)

    def find_class(self, qualified_name: str) -> ClassDoc | None:
        """Look up a documented type by its fully qualified name."""
        if self._index is None:
            self._index = {cls.qualified_name: cls for pkg in self.packages for cls in pkg.classes}
        return self._index.get(qualified_name)
