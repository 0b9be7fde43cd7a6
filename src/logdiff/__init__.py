"""git-log-diff: Compare the commit logs of two git ranges, ignoring rebase noise."""

__version__ = "0.1.0"

from .cli import cli
from .color import should_use_color, style_diff_line
from .compare import compare, diff_logs, normalize_ranges
from .errors import (
    GitCommandError,
    LogDiffError,
    MissingRequiredReference,
    UnexpectedArgument,
    UnresolvableReference,
    UsageError,
)
from .normalize import LogNormalizer, normalize, normalize_lines
from .options import OutputOptions
from .pager import Pager
from .refs import ResolvedRefs, resolve_refs

__all__ = [
    "cli",
    "should_use_color",
    "style_diff_line",
    "compare",
    "diff_logs",
    "normalize_ranges",
    "GitCommandError",
    "LogDiffError",
    "MissingRequiredReference",
    "UnexpectedArgument",
    "UnresolvableReference",
    "UsageError",
    "LogNormalizer",
    "normalize",
    "normalize_lines",
    "OutputOptions",
    "Pager",
    "ResolvedRefs",
    "resolve_refs",
]
