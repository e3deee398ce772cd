"""Logic for loading assembly manifests (YAML) into a type/member graph."""

import logging
from pathlib import Path
from typing import Any

import yaml

from xmldoc_emit.errors import LoadFailure
from xmldoc_emit.metadata_model import (
    AssemblyInfo,
    EventInfo,
    FieldInfo,
    MethodInfo,
    ParameterInfo,
    PropertyInfo,
    TypeInfo,
    TypeRef,
)
from xmldoc_emit.type_ref_parser import GenericScope, TypeRefSyntaxError, parse_type_ref

logger = logging.getLogger(__name__)


def load_assembly_metadata(path: Path) -> AssemblyInfo:
    """Load and parse an assembly manifest file."""
    try:
        doc = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as exc:
        raise LoadFailure(path, str(exc)) from exc
    if not isinstance(doc, dict):
        raise LoadFailure(path, "manifest must be a mapping")
    try:
        assembly = assembly_from_manifest(doc, source=str(path))
    except (KeyError, TypeError, TypeRefSyntaxError) as exc:
        raise LoadFailure(path, f"malformed manifest: {exc}") from exc
    logger.info("Loaded %s types from %s", len(assembly.iter_types()), path)
    return assembly


def assembly_from_manifest(doc: dict[str, Any], source: str = "") -> AssemblyInfo:
    """Build an assembly graph from an already parsed manifest mapping."""
    name = str(doc.get("assembly") or Path(source).stem or "")
    if not name:
        raise KeyError("assembly")
    assembly = AssemblyInfo(name=name, source=source)
    for raw in doc.get("types") or []:
        assembly.types.append(_build_type(raw, declaring=None, outer_params=()))
    return assembly


def _build_type(
    raw: dict[str, Any],
    declaring: TypeInfo | None,
    outer_params: tuple[str, ...],
) -> TypeInfo:
    t = TypeInfo(
        name=str(raw["name"]),
        namespace="" if declaring else str(raw.get("namespace") or ""),
        kind=str(raw.get("kind") or "class").lower(),
        declaring_type=declaring,
        generic_parameters=tuple(str(p) for p in raw.get("generic_parameters") or []),
        visibility=str(raw.get("visibility") or "public"),
        compiler_generated=bool(raw.get("compiler_generated", False)),
    )
    type_params = outer_params + t.generic_parameters

    for f in raw.get("fields") or []:
        t.fields.append(
            FieldInfo(
                name=str(f["name"]),
                declaring_type=t,
                visibility=str(f.get("visibility") or "public"),
                is_static=bool(f.get("static", False)),
                type=_ref(f.get("type"), GenericScope(type_params)),
            )
        )
    for p in raw.get("properties") or []:
        t.properties.append(_build_property(p, t, type_params))
    for m in raw.get("methods") or []:
        t.methods.append(_build_method(m, t, type_params))
    for c in raw.get("constructors") or []:
        ctor = dict(c)
        ctor["name"] = ".cctor" if c.get("static") else ".ctor"
        t.constructors.append(_build_method(ctor, t, type_params, is_constructor=True))
    for e in raw.get("events") or []:
        t.events.append(
            EventInfo(
                name=str(e["name"]),
                declaring_type=t,
                visibility=str(e.get("visibility") or "public"),
                is_static=bool(e.get("static", False)),
                type=_ref(e.get("type"), GenericScope(type_params)),
            )
        )
    for n in raw.get("nested_types") or []:
        t.nested_types.append(_build_type(n, declaring=t, outer_params=type_params))
    return t


def _build_method(
    raw: dict[str, Any],
    declaring: TypeInfo,
    type_params: tuple[str, ...],
    *,
    is_constructor: bool = False,
) -> MethodInfo:
    method_params = tuple(str(p) for p in raw.get("generic_parameters") or [])
    scope = GenericScope(type_params, method_params)
    return MethodInfo(
        name=str(raw["name"]),
        declaring_type=declaring,
        visibility=str(raw.get("visibility") or "public"),
        is_static=bool(raw.get("static", False)),
        parameters=_parameters(raw.get("parameters"), scope),
        return_type=_ref(raw.get("returns"), scope),
        generic_parameters=method_params,
        is_constructor=is_constructor,
    )


def _build_property(
    raw: dict[str, Any], declaring: TypeInfo, type_params: tuple[str, ...]
) -> PropertyInfo:
    scope = GenericScope(type_params)
    name = str(raw["name"])
    visibility = str(raw.get("visibility") or "public")
    is_static = bool(raw.get("static", False))
    prop_type = _ref(raw.get("type"), scope)
    params = _parameters(raw.get("parameters"), scope)

    getter = None
    if raw.get("getter", True):
        getter = MethodInfo(
            name=f"get_{name}",
            declaring_type=declaring,
            visibility=visibility,
            is_static=is_static,
            parameters=params,
            return_type=prop_type,
        )
    setter = None
    if raw.get("setter", False):
        value = ParameterInfo("value", prop_type) if prop_type else None
        setter = MethodInfo(
            name=f"set_{name}",
            declaring_type=declaring,
            visibility=visibility,
            is_static=is_static,
            parameters=params + ((value,) if value else ()),
        )
    return PropertyInfo(
        name=name,
        declaring_type=declaring,
        visibility=visibility,
        is_static=is_static,
        type=prop_type,
        getter=getter,
        setter=setter,
    )


def _parameters(raw: Any, scope: GenericScope) -> tuple[ParameterInfo, ...]:
    params = []
    for i, p in enumerate(raw or []):
        if isinstance(p, str):
            params.append(ParameterInfo(f"arg{i}", parse_type_ref(p, scope)))
        else:
            name = str(p.get("name") or f"arg{i}")
            params.append(ParameterInfo(name, parse_type_ref(p["type"], scope)))
    return tuple(params)


def _ref(raw: Any, scope: GenericScope) -> TypeRef | None:
    if not raw:
        return None
    return parse_type_ref(str(raw), scope)
