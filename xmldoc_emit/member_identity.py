"""Compute documentation-comment identifiers for types and members.

The identifier is the ``name`` attribute a compiler writes on each ``<member>``
element of an XML documentation file, e.g.
``M:NS.Foo.M(System.Int32,System.String)``. Lookups into the document index
are keyed by it, so the format here is the wire contract with doc producers.
"""

from xmldoc_emit.errors import UnsupportedMemberKind
from xmldoc_emit.metadata_model import (
    EventInfo,
    FieldInfo,
    GenericParameterRef,
    MethodInfo,
    ModifiedTypeRef,
    ParameterInfo,
    PropertyInfo,
    TypeInfo,
    TypeRef,
)

CONVERSION_OPERATORS = {"op_Implicit", "op_Explicit"}


def escape_segment(name: str) -> str:
    """Escape literal dots inside a single name segment."""
    return name.replace(".", "#")


def type_name(t: TypeInfo) -> str:
    """Resolve the qualified name of a type definition or constructed type."""
    if t.declaring_type is not None:
        prefix = type_name(t.declaring_type)
    else:
        prefix = t.namespace

    name = escape_segment(t.name)
    if t.generic_arguments:
        args = ",".join(type_ref_name(a) for a in t.generic_arguments)
        name += "{" + args + "}"
    elif t.generic_parameters:
        name += f"`{len(t.generic_parameters)}"

    return f"{prefix}.{name}" if prefix else name


def type_ref_name(ref: TypeRef) -> str:
    """Resolve a type as it appears inside a parameter list."""
    if isinstance(ref, TypeInfo):
        return type_name(ref)
    if isinstance(ref, GenericParameterRef):
        marker = "``" if ref.is_method_parameter else "`"
        return f"{marker}{ref.position}"
    if isinstance(ref, ModifiedTypeRef):
        inner = type_ref_name(ref.element)
        if ref.modifier == "array":
            if ref.rank <= 1:
                return inner + "[]"
            return inner + "[" + ",".join(["0:"] * ref.rank) + "]"
        if ref.modifier == "pointer":
            return inner + "*"
        if ref.modifier == "byref":
            return inner + "@"
    raise UnsupportedMemberKind(ref)


def _parameter_list(parameters: tuple[ParameterInfo, ...]) -> str:
    if not parameters:
        return ""
    return "(" + ",".join(type_ref_name(p.type) for p in parameters) + ")"


def _member_prefix(member: FieldInfo | PropertyInfo | MethodInfo | EventInfo) -> str:
    return f"{type_name(member.declaring_type)}.{escape_segment(member.name)}"


def _method_suffix(method: MethodInfo) -> str:
    suffix = ""
    if method.generic_parameters:
        suffix += f"``{len(method.generic_parameters)}"
    suffix += _parameter_list(method.parameters)
    if method.name in CONVERSION_OPERATORS and method.return_type is not None:
        suffix += "~" + type_ref_name(method.return_type)
    return suffix


def member_identity(member: object) -> str:
    """Return the canonical identifier of a type or member.

    Raises ``UnsupportedMemberKind`` for anything that is not a type, field,
    property, method/constructor or event.
    """
    if isinstance(member, TypeInfo):
        return "T:" + type_name(member)
    if isinstance(member, FieldInfo):
        return "F:" + _member_prefix(member)
    if isinstance(member, PropertyInfo):
        return "P:" + _member_prefix(member) + _parameter_list(
            member.index_parameters
        )
    if isinstance(member, MethodInfo):
        return "M:" + _member_prefix(member) + _method_suffix(member)
    if isinstance(member, EventInfo):
        return "E:" + _member_prefix(member)
    raise UnsupportedMemberKind(member)
