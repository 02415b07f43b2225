"""TypeScript Generator - emits declarations for package members"""

import json

from .config import GeneratorConfig
from .errors import fail, require
from .flattener import for_each_field
from .imports import ImportSet
from .log import get_logger
from .type_mapper import TypeMapper
from .types import (
    Alias, Const, Enum, Field, FieldType, Member, Package, PropertyOptions,
    Resource, Struct, TypeMember,
)

logger = get_logger(__name__)


class TypeScriptGenerator:
    """Generates the declaration body of one TypeScript file.

    Imports discovered while mapping field types are collected in ``imports``;
    the header can only be built once the whole body has been generated.
    """

    def __init__(self, pkg: Package, current_file: str, config: GeneratorConfig = None,
                 imports: ImportSet = None):
        self.pkg = pkg
        self.current_file = current_file
        self.config = config or GeneratorConfig()
        self.imports = imports if imports is not None else ImportSet()
        self.mapper = TypeMapper(pkg, current_file)

    def generate_body(self, members: list[Member]) -> str:
        """Emit all members in order, followed by one trailing blank line"""
        lines = []
        for i, m in enumerate(members):
            if i > 0 and self._needs_break(members[i - 1], m):
                lines.append("")
            lines.extend(self.generate_member(m))
        lines.append("")
        return "\n".join(lines) + "\n"

    def generate_member(self, m: Member) -> list[str]:
        logger.debug("Emitting %s %s", type(m).__name__.lower(), getattr(m, "name", "?"))
        if isinstance(m, Alias):
            return self.generate_alias(m)
        elif isinstance(m, Const):
            return self.generate_const(m)
        elif isinstance(m, Enum):
            return self.generate_enum(m)
        elif isinstance(m, Resource):
            return self.generate_resource(m)
        elif isinstance(m, Struct):
            return self.generate_struct(m)
        fail(f"Unrecognized package member type: {type(m).__name__}")

    @staticmethod
    def _needs_break(prev: Member, m: Member) -> bool:
        # Aliases and consts pile up without blank lines
        return not isinstance(m, (Alias, Const)) or type(m) is not type(prev)

    def type_name(self, t: FieldType) -> str:
        return self.imports.add(self.mapper.map(t))

    # ── Member kinds ────────────────────────────────────────────────

    def generate_alias(self, alias: Alias) -> list[str]:
        return [f"export type {alias.name} = {self.type_name(alias.target)};"]

    def generate_const(self, konst: Const) -> list[str]:
        return [f"export let {konst.name}: {self.type_name(konst.type)} = {konst.value};"]

    def generate_enum(self, enum: Enum) -> list[str]:
        require(len(enum.values) > 0, f"Enum {enum.name} has no values")
        ind = self.config.indent
        values = [f"{ind}{json.dumps(v, ensure_ascii=False)}" for v in enum.values]
        return [f"export type {enum.name} =", *[v + " |" for v in values[:-1]], values[-1] + ";"]

    def generate_struct(self, s: Struct) -> list[str]:
        return self._struct_type(s, s.name)

    def generate_resource(self, res: Resource) -> list[str]:
        lines = self._resource_class(res)
        lines.append("")
        lines.extend(self._struct_type(res, f"{res.name}Args"))
        self.imports.had_resource = True
        return lines

    # ── Helpers ─────────────────────────────────────────────────────

    def _struct_type(self, t: TypeMember, name: str) -> list[str]:
        lines = [f"export interface {name} {{"]

        def emit(fld: Field, opt: PropertyOptions):
            # Output properties exist solely on the resource class
            if not opt.out:
                lines.append(self._field(fld, opt, self.config.indent))

        for_each_field(t, emit)
        lines.append("}")
        return lines

    def _resource_class(self, res: Resource) -> list[str]:
        name = res.name
        ind = self.config.indent
        lines = [f"export class {name} extends {self.config.base_alias}.Resource implements {name}Args {{"]

        props = []

        def emit_prop(fld: Field, opt: PropertyOptions):
            if not opt.out:
                props.append(self._field(fld, opt, f"{ind}public "))

        for_each_field(res, emit_prop)
        if props:
            lines.extend(props)
            lines.append("")

        lines.append(f"{ind}constructor(args: {name}Args) {{")
        lines.append(f"{ind * 2}super();")

        def emit_assign(fld: Field, opt: PropertyOptions):
            # Output properties won't exist on the arguments
            if opt.out:
                return
            if not opt.optional:
                lines.extend([
                    f"{ind * 2}if (args.{opt.name} === undefined) {{",
                    f"{ind * 3}throw new Error(\"Missing required argument '{opt.name}'\");",
                    f"{ind * 2}}}",
                ])
            lines.append(f"{ind * 2}this.{opt.name} = args.{opt.name};")

        for_each_field(res, emit_assign)
        lines.append(f"{ind}}}")
        lines.append("}")
        return lines

    def _field(self, fld: Field, opt: PropertyOptions, prefix: str) -> str:
        readonly = "readonly " if opt.replaces else ""
        optional = "?" if opt.optional else ""
        return f"{prefix}{readonly}{opt.name}{optional}: {self.type_name(fld.type)};"
