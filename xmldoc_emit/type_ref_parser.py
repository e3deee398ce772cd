"""Parser for the compact type-reference strings used in assembly manifests.

Grammar::

    ref     := path suffix*
    path    := segment ('+' segment)*       # '+' separates nested types
    segment := dotted-name ['`' N] ['{' ref (',' ref)* '}']
    suffix  := '[]' | '[' ','+ ']' | '*' | '&'

Bare names matching an in-scope generic parameter resolve to that parameter;
method parameters shadow type parameters.
"""

from dataclasses import dataclass

from xmldoc_emit.metadata_model import (
    GenericParameterRef,
    ModifiedTypeRef,
    TypeInfo,
    TypeRef,
)

_NAME_STOP = set("+{},[]*&`")


@dataclass(frozen=True)
class GenericScope:
    """Generic parameter names visible where a reference is written."""

    type_parameters: tuple[str, ...] = ()
    method_parameters: tuple[str, ...] = ()


class TypeRefSyntaxError(ValueError):
    """Raised when a type-reference string cannot be parsed."""


class _Parser:
    def __init__(self, text: str, scope: GenericScope) -> None:
        self.text = text.replace(" ", "")
        self.pos = 0
        self.scope = scope

    def error(self, msg: str) -> TypeRefSyntaxError:
        return TypeRefSyntaxError(f"{msg} at offset {self.pos} in {self.text!r}")

    def peek(self) -> str:
        return self.text[self.pos] if self.pos < len(self.text) else ""

    def expect(self, ch: str) -> None:
        if self.peek() != ch:
            raise self.error(f"Expected {ch!r}")
        self.pos += 1

    def parse(self) -> TypeRef:
        ref = self.parse_ref()
        if self.pos != len(self.text):
            raise self.error("Unexpected trailing text")
        return ref

    def parse_ref(self) -> TypeRef:
        ref = self.parse_path()
        while True:
            ch = self.peek()
            if ch == "[":
                self.pos += 1
                rank = 1
                while self.peek() == ",":
                    rank += 1
                    self.pos += 1
                self.expect("]")
                ref = ModifiedTypeRef(ref, "array", rank)
            elif ch == "*":
                self.pos += 1
                ref = ModifiedTypeRef(ref, "pointer")
            elif ch == "&":
                self.pos += 1
                ref = ModifiedTypeRef(ref, "byref")
            else:
                return ref

    def parse_name(self) -> str:
        start = self.pos
        while self.pos < len(self.text) and self.text[self.pos] not in _NAME_STOP:
            self.pos += 1
        if start == self.pos:
            raise self.error("Expected a type name")
        return self.text[start : self.pos]

    def parse_path(self) -> TypeRef:
        dotted = self.parse_name()
        namespace, _, name = dotted.rpartition(".")

        if not namespace and self.peek() not in ("`", "{", "+"):
            param = self._generic_parameter(name)
            if param is not None:
                return param

        current = self.parse_segment_tail(TypeInfo(name=name, namespace=namespace))
        while self.peek() == "+":
            self.pos += 1
            inner = TypeInfo(name=self.parse_name(), declaring_type=current)
            current = self.parse_segment_tail(inner)
        return current

    def parse_segment_tail(self, t: TypeInfo) -> TypeInfo:
        if self.peek() == "`":
            self.pos += 1
            start = self.pos
            while self.peek().isdigit():
                self.pos += 1
            if start == self.pos:
                raise self.error("Expected generic arity")
            arity = int(self.text[start : self.pos])
            t.generic_parameters = tuple(f"T{i}" for i in range(arity))
        if self.peek() == "{":
            self.pos += 1
            args = [self.parse_ref()]
            while self.peek() == ",":
                self.pos += 1
                args.append(self.parse_ref())
            self.expect("}")
            t.generic_arguments = tuple(args)
            t.generic_parameters = ()
        return t

    def _generic_parameter(self, name: str) -> GenericParameterRef | None:
        methods = self.scope.method_parameters
        if name in methods:
            position = len(methods) - 1 - methods[::-1].index(name)
            return GenericParameterRef(name, position, True)
        types = self.scope.type_parameters
        if name in types:
            return GenericParameterRef(name, len(types) - 1 - types[::-1].index(name))
        return None


def parse_type_ref(text: str, scope: GenericScope | None = None) -> TypeRef:
    """Parse a type-reference string into a type reference object."""
    return _Parser(text, scope or GenericScope()).parse()
