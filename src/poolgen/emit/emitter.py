"""
Pool file emitter.

Rendering is pure substitution: an EntityDescriptor is turned into an
ordered list of sections, each rendered from its own template, and the
sections are joined into the file content. No extraction happens here.
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path

from jinja2 import Environment, PackageLoader, StrictUndefined, TemplateError

from poolgen.config import PoolConfig
from poolgen.errors import EmitError, ErrorContext, InvariantError
from poolgen.extract.descriptors import EntityDescriptor, ReturnDescriptor

logger = logging.getLogger(__name__)

GENERATED_MARKER = "// This file is autogenerated by poolgen"
FILE_EXTENSION = ".go"


class SectionKind(StrEnum):
    """Sections of a pool file, in output order."""

    HEADER = "header"
    MODEL = "model"
    CONDITION = "condition"
    CONDITION_START = "condition_start"
    CONDITION_FIELDS = "condition_fields"
    DATA = "data"
    RECORD_SET = "record_set"


@dataclass(frozen=True)
class Section:
    """A rendered section of a pool file."""

    kind: SectionKind
    text: str


def go_comment(text: str) -> str:
    """Format doc text as line comments, keeping lines that already are comments."""
    lines = text.strip().splitlines() or [""]
    return "\n".join(
        line if line.lstrip().startswith("//") else f"// {line}".rstrip() for line in lines
    )


def go_results(returns: list[ReturnDescriptor]) -> str:
    """Format the result list of a function signature, with its leading space."""
    if not returns:
        return ""
    if len(returns) == 1:
        return f" {returns[0].type}"
    return " (" + ", ".join(r.type for r in returns) + ")"


class PoolEmitter:
    """
    Render entity descriptors into pool source files.
    """

    def __init__(self, pool: PoolConfig | None = None):
        """
        Initialize emitter.

        Args:
            pool: Namespaces of the generated package and of the core
        """
        self.pool = pool or PoolConfig()
        self.jinja_env = Environment(
            loader=PackageLoader("poolgen", "templates"),
            undefined=StrictUndefined,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            autoescape=False,
        )
        self.jinja_env.filters["go_comment"] = go_comment
        self.jinja_env.filters["go_results"] = go_results

    @staticmethod
    def file_name(entity_name: str) -> str:
        """Name of the pool file of an entity."""
        return f"{entity_name.lower()}{FILE_EXTENSION}"

    def check(self, descriptor: EntityDescriptor) -> None:
        """
        Verify that the descriptor is complete.

        Raises:
            InvariantError: If a field type is missing from the type catalog,
                listed twice, or disagrees with it on being a record set, or if
                two catalog types would get the same condition field name
        """
        counts = Counter(t.type for t in descriptor.types)
        for f in descriptor.fields:
            context = ErrorContext(entity=descriptor.name, field=f.name)
            if counts[f.type] != 1:
                raise InvariantError(
                    f"Type '{f.type}' appears {counts[f.type]} time(s) in the type catalog",
                    context,
                )
            typ = descriptor.get_type(f.type)
            if typ is not None and typ.type_is_rs != f.type_is_rs:
                raise InvariantError(
                    f"Type catalog entry '{f.type}' disagrees with the field on being a record set",
                    context,
                )
        tokens = Counter(t.san_type for t in descriptor.types)
        for token, count in sorted(tokens.items()):
            if count > 1:
                clashing = ", ".join(t.type for t in descriptor.types if t.san_type == token)
                raise InvariantError(
                    f"Types {clashing} share the identifier token '{token}'",
                    ErrorContext(entity=descriptor.name),
                )
        if not descriptor.deps or descriptor.deps[0] != self.pool.models_path:
            raise InvariantError(
                "Dependencies do not start with the models namespace",
                ErrorContext(entity=descriptor.name),
            )

    def sections(self, descriptor: EntityDescriptor) -> list[Section]:
        """
        Render each section of the descriptor's pool file.

        Args:
            descriptor: Complete entity descriptor

        Returns:
            Rendered sections, in file order

        Raises:
            InvariantError: If the descriptor is incomplete
            EmitError: If a template fails to render
        """
        self.check(descriptor)
        context = {
            "e": descriptor,
            "pool": self.pool,
            "models": self.pool.models_package,
        }
        result = []
        for kind in SectionKind:
            try:
                template = self.jinja_env.get_template(f"{kind.value}{FILE_EXTENSION}.j2")
                text = template.render(**context)
            except TemplateError as e:
                raise EmitError(
                    f"Rendering of section '{kind.value}' failed: {e}",
                    ErrorContext(entity=descriptor.name),
                ) from e
            result.append(Section(kind=kind, text=text))
        return result

    def render(self, descriptor: EntityDescriptor) -> str:
        """Render the full pool file content of an entity."""
        return "\n".join(section.text for section in self.sections(descriptor))

    def write(self, descriptor: EntityDescriptor, output_dir: Path) -> Path:
        """
        Render a descriptor and write it into output_dir.

        Returns:
            Path of the written file
        """
        content = self.render(descriptor)
        path = output_dir / self.file_name(descriptor.name)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
        logger.info(
            "Generated pool source file for model %s: %s", descriptor.name, path
        )
        return path


def is_generated_file(path: Path) -> bool:
    """Whether a file was written by the emitter."""
    if path.suffix != FILE_EXTENSION or not path.is_file():
        return False
    with open(path) as f:
        return f.readline().rstrip("\n") == GENERATED_MARKER
