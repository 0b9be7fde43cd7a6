import difflib
from concurrent.futures import ThreadPoolExecutor
from typing import Iterator

from .normalize import normalize
from .options import OutputOptions
from .refs import ResolvedRefs


def range_label(base: str, head: str) -> str:
    return f'{base}..{head}'


def normalize_ranges(
    refs: ResolvedRefs,
    options: OutputOptions,
) -> tuple[list[str], list[str]]:
    """Normalize the OLD and NEW ranges' logs.

    The two passes only read from the repo, so they run concurrently.
    """
    with ThreadPoolExecutor(max_workers=2) as executor:
        old = executor.submit(normalize, *refs.old_range, options)
        new = executor.submit(normalize, *refs.new_range, options)
        return old.result(), new.result()


def diff_logs(
    old_lines: list[str],
    new_lines: list[str],
    old_label: str = 'old',
    new_label: str = 'new',
    unified: int = 3,
) -> Iterator[str]:
    """Unified diff of two normalized logs; empty if they match."""
    return difflib.unified_diff(
        old_lines,
        new_lines,
        fromfile=old_label,
        tofile=new_label,
        n=unified,
        lineterm='',
    )


def compare(
    refs: ResolvedRefs,
    options: OutputOptions,
    unified: int = 3,
) -> list[str]:
    """Normalize both ranges and diff them."""
    old_lines, new_lines = normalize_ranges(refs, options)
    return list(diff_logs(
        old_lines,
        new_lines,
        old_label=range_label(*refs.old_range),
        new_label=range_label(*refs.new_range),
        unified=unified,
    ))
