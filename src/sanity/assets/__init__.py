"""Asset transforms and output file I/O."""

from .io import (
    atomic_write_bytes,
    atomic_write_text,
    clear_directory,
    copy_file,
    ensure_dir,
    ensure_parent,
)
from .minify import minify, minify_or_original
from .poison import inject as poison
from .stylesheet import compile_stylesheet

__all__ = [
    "atomic_write_bytes",
    "atomic_write_text",
    "clear_directory",
    "compile_stylesheet",
    "copy_file",
    "ensure_dir",
    "ensure_parent",
    "minify",
    "minify_or_original",
    "poison",
]
