"""Data models for the reflected type/member graph of an assembly."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(eq=False)
class TypeInfo:
    """A type definition, or a reference to one from a signature.

    ``generic_parameters`` holds the type's own open parameters (a definition),
    ``generic_arguments`` the arguments of a constructed type (a reference).
    """

    name: str
    namespace: str = ""
    kind: str = "class"  # class/struct/interface/enum/delegate
    declaring_type: TypeInfo | None = field(default=None, repr=False)
    generic_parameters: tuple[str, ...] = ()
    generic_arguments: tuple[TypeRef, ...] = ()
    visibility: str = "public"
    compiler_generated: bool = False
    fields: list[FieldInfo] = field(default_factory=list, repr=False)
    properties: list[PropertyInfo] = field(default_factory=list, repr=False)
    methods: list[MethodInfo] = field(default_factory=list, repr=False)
    constructors: list[MethodInfo] = field(default_factory=list, repr=False)
    events: list[EventInfo] = field(default_factory=list, repr=False)
    nested_types: list[TypeInfo] = field(default_factory=list, repr=False)

    @property
    def full_name(self) -> str:
        """Display name, e.g. ``NS.Outer.Inner``."""
        if self.declaring_type is not None:
            return f"{self.declaring_type.full_name}.{self.name}"
        return f"{self.namespace}.{self.name}" if self.namespace else self.name


@dataclass(frozen=True)
class GenericParameterRef:
    """A reference to an open generic parameter inside a signature."""

    name: str
    position: int
    is_method_parameter: bool = False


@dataclass(frozen=True)
class ModifiedTypeRef:
    """An array, pointer or by-ref wrapper around another type reference."""

    element: TypeRef
    modifier: str  # array/pointer/byref
    rank: int = 1


TypeRef = TypeInfo | GenericParameterRef | ModifiedTypeRef


@dataclass(frozen=True)
class ParameterInfo:
    """A method or indexer parameter."""

    name: str
    type: TypeRef


@dataclass(eq=False)
class MemberInfo:
    """Common data for members declared on a type."""

    name: str
    declaring_type: TypeInfo = field(repr=False)
    visibility: str = "public"
    is_static: bool = False

    @property
    def is_public(self) -> bool:
        return self.visibility == "public"


@dataclass(eq=False)
class FieldInfo(MemberInfo):
    type: TypeRef | None = None


@dataclass(eq=False)
class MethodInfo(MemberInfo):
    parameters: tuple[ParameterInfo, ...] = ()
    return_type: TypeRef | None = None
    generic_parameters: tuple[str, ...] = ()
    is_constructor: bool = False


@dataclass(eq=False)
class PropertyInfo(MemberInfo):
    type: TypeRef | None = None
    getter: MethodInfo | None = None
    setter: MethodInfo | None = None

    @property
    def index_parameters(self) -> tuple[ParameterInfo, ...]:
        """Indexer parameters, taken from the getter."""
        if self.getter is not None:
            return self.getter.parameters
        if self.setter is not None:
            # The trailing setter parameter is the assigned value.
            return self.setter.parameters[:-1]
        return ()


@dataclass(eq=False)
class EventInfo(MemberInfo):
    type: TypeRef | None = None


@dataclass(eq=False)
class AssemblyInfo:
    """An assembly: a name and its top-level types in declaration order."""

    name: str
    types: list[TypeInfo] = field(default_factory=list)
    source: str = ""

    def iter_types(self) -> list[TypeInfo]:
        """Return every type including nested ones, parents first."""
        out: list[TypeInfo] = []
        stack = list(reversed(self.types))
        while stack:
            t = stack.pop()
            out.append(t)
            stack.extend(reversed(t.nested_types))
        return out
