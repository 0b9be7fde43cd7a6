"""Normalize ``git log`` output into a stable, diff-friendly form.

Each commit is wrapped in ``BeginCommit``/``EndCommit`` markers, and its hash
is dropped (unless requested), so that rebased commits with new hashes but the
same content normalize to the same text.
"""

import re
from enum import Enum
from functools import partial
from typing import Callable, Iterable, Iterator, Optional

from . import git
from .options import OutputOptions

COMMIT_HEADER_RE = re.compile(r'^commit (?P<hash>[0-9a-fA-F]+)$')

BEGIN_COMMIT = 'BeginCommit'
END_COMMIT = 'EndCommit'
STABLE_PATCH_ID = 'ComputedStablePatchId'


class State(Enum):
    IDLE = 'idle'
    IN_COMMIT = 'in_commit'


def parse_commit_header(line: str) -> Optional[str]:
    """Return the hash from a ``commit <hash>`` line, or None for other lines."""
    m = COMMIT_HEADER_RE.match(line)
    return m['hash'] if m else None


class LogNormalizer:
    """Line-by-line scanner over a raw log.

    Feed it raw lines with :meth:`feed`, then call :meth:`finish` at the end of
    the stream; both return the normalized lines to emit.
    """

    def __init__(
        self,
        options: OutputOptions,
        patch_id: Callable[[str], str] = None,
    ):
        self.options = options
        self.patch_id = patch_id or partial(git.patch_id, paths=options.paths)
        self.state = State.IDLE
        self.commit: Optional[str] = None

    def begin(self, commit: str) -> list[str]:
        lines = []
        if self.state is State.IN_COMMIT:
            lines += [END_COMMIT, '']
        self.state = State.IN_COMMIT
        self.commit = commit

        if self.options.include_commit_hash:
            lines.append(f'{BEGIN_COMMIT} {commit}')
        else:
            lines.append(BEGIN_COMMIT)
        if self.options.include_stable_patch_id:
            pid = self.patch_id(commit)[:40]
            lines.append(f'{STABLE_PATCH_ID}: {pid}')
        return lines

    def feed(self, line: str) -> list[str]:
        commit = parse_commit_header(line)
        if commit is None:
            return [line]
        return self.begin(commit)

    def finish(self) -> list[str]:
        if self.state is State.IDLE:
            return []
        self.state = State.IDLE
        self.commit = None
        return [END_COMMIT]


def normalize_lines(
    lines: Iterable[str],
    options: OutputOptions,
    patch_id: Callable[[str], str] = None,
) -> Iterator[str]:
    """Normalize raw ``git log`` lines (see :func:`logdiff.git.log`)."""
    normalizer = LogNormalizer(options, patch_id=patch_id)
    for line in lines:
        yield from normalizer.feed(line)
    yield from normalizer.finish()


def normalize(base: str, head: str, options: OutputOptions) -> list[str]:
    """Normalized log of the commits in ``base..head``, oldest first."""
    raw = git.log(base, head, include_patch=options.include_patch, paths=options.paths)
    return list(normalize_lines(raw, options))
