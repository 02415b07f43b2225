"""Pack Generator - writes one TypeScript module per package file"""

import os
from pathlib import Path
from typing import Optional

from .config import GeneratorConfig
from .errors import EmitError, fail
from .imports import ImportResolver, ImportSet
from .log import get_logger
from .ts_generator import TypeScriptGenerator
from .types import File, Member, Package

logger = get_logger(__name__)

BANNER = [
    "// *** WARNING: this file was generated by the packgen IDL compiler.  ***",
    "// *** Do not edit by hand unless you are taking matters into your own hands! ***",
]


class PackGenerator:
    """Generates a TypeScript package from a resolved IDL package.

    Files are emitted one at a time; import state lives only for the
    duration of a single ``emit_file`` call.
    """

    def __init__(self, config: Optional[GeneratorConfig] = None):
        self.config = config or GeneratorConfig()
        self.resolver = ImportResolver(self.config.out)

    def generate(self, pkg: Package, keep_going: bool = False) -> tuple[list[Path], list[EmitError]]:
        """Emit every file of ``pkg``; returns the written paths and any write failures.

        Without ``keep_going`` the first write failure is raised.
        """
        written = []
        errors = []
        for relpath, file in pkg.files.items():
            path = self.config.out / relpath
            try:
                written.append(self.emit_file(pkg, file, path))
            except EmitError as exc:
                if not keep_going:
                    raise
                logger.error("Failed to write %s: %s", exc.path, exc.reason)
                errors.append(exc)
        return written, errors

    def emit_file(self, pkg: Package, file: File, path: Path) -> Path:
        target = self.output_path(path)
        content = self.render_file(pkg, file, target)
        self.ensure_dir(target)
        try:
            target.write_text(content, encoding="utf-8")
        except OSError as exc:
            raise EmitError(target, exc.strerror or str(exc)) from exc
        logger.info("Generated: %s", target)
        return target

    def render_file(self, pkg: Package, file: File, target: Path) -> str:
        """Build the full contents of the module for ``file``.

        The body is generated first; the header depends on the imports it used.
        """
        imports = ImportSet()
        gen = TypeScriptGenerator(pkg, file.path, self.config, imports)
        body = gen.generate_body(file.ordered_members())
        return self._header(pkg, imports, target) + body

    def _header(self, pkg: Package, imports: ImportSet, target: Path) -> str:
        lines = BANNER + [""]

        if imports.had_resource:
            lines.append(f'import * as {self.config.base_alias} from "{self.config.base_module}";')
            lines.append("")

        if imports.local:
            for local in sorted(imports.local):
                module = self.resolver.module_for(target, pkg.member_files[local].path)
                lines.append(f'import {{{local}}} from "{module}";')
            lines.append("")

        for path, alias in imports.foreign.items():
            fail(f"Foreign imports not yet supported: import={alias} pkg={path}")

        return "\n".join(lines) + "\n"

    def output_path(self, path) -> Path:
        """Swap the source extension for the target one"""
        return Path(path).with_suffix(self.config.extension)

    def filename(self, m: Member) -> Path:
        """Output path of the file declaring ``m``, taken from its source position"""
        source = Path(m.pos.filename)
        try:
            rel = Path(os.path.relpath(source, self.config.root))
        except ValueError as exc:
            fail(f"Member {m.name} lies outside {self.config.root}: {exc}")
        return self.output_path(self.config.out / rel)

    def ensure_dir(self, path: Path):
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise EmitError(path.parent, exc.strerror or str(exc)) from exc
