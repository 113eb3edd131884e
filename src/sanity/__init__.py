"""Sanity - static site build orchestrator.

Walks a source tree of templates, stylesheets, build scripts and assets
into an output tree, and keeps it consistent while it is being served.
"""

import logging as _logging

from sanity.application import SanityApplication

_logging.getLogger(__name__).addHandler(_logging.NullHandler())

__version__ = "0.1.0"
__all__ = ["__version__", "SanityApplication"]
