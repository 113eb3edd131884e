"""Source/output path mapping."""

from dataclasses import dataclass
from pathlib import Path, PurePosixPath

from sanity.types import FileKind

from .classifier import TEMPLATE_SUFFIX, classify_name


@dataclass(frozen=True)
class ProjectPaths:
    """Canonical project locations.

    Every destination is ``output + (source path relative to source)``;
    stylesheet outputs get a ``.css`` suffix and template outputs lose
    their ``.j2`` suffix.
    """

    root: Path
    source: Path
    output: Path

    @classmethod
    def from_root(cls, root: Path, source: str = "www", output: str = "dist") -> "ProjectPaths":
        root = root.resolve()
        return cls(root=root, source=(root / source).resolve(), output=(root / output).resolve())

    def relative(self, source_path: Path) -> Path:
        """Path of a source file relative to the source root."""
        return source_path.relative_to(self.source)

    def dest_for(self, source_path: Path) -> Path:
        """Mirrored destination for a source path."""
        dest = self.output / self.relative(source_path)
        kind = classify_name(source_path.name)
        if kind is FileKind.STYLESHEET:
            return dest.with_suffix(".css")
        if kind is FileKind.TEMPLATE:
            return dest.with_suffix("")
        return dest

    def template_name(self, source_path: Path) -> str:
        """Logical template name: '/'-joined relative path without '.j2'."""
        rel = self.relative(source_path)
        name = PurePosixPath(*rel.parts).as_posix()
        if name.endswith(TEMPLATE_SUFFIX):
            name = name[: -len(TEMPLATE_SUFFIX)]
        return name

    def source_file(self, relative: str) -> Path:
        """Resolve a script-supplied path inside the source root.

        Raises:
            ValueError: If the path escapes the source root
        """
        return _contained(self.source, relative)

    def output_file(self, relative: str) -> Path:
        """Resolve a script-supplied destination inside the output root.

        Raises:
            ValueError: If the path escapes the output root
        """
        return _contained(self.output, relative)


def _contained(base: Path, relative: str) -> Path:
    candidate = (base / relative.lstrip("/")).resolve()
    if candidate != base and not candidate.is_relative_to(base):
        raise ValueError(f"Path {relative!r} escapes {base}")
    return candidate
