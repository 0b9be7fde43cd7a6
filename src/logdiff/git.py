from subprocess import run
from typing import Optional, Sequence

from .errors import GitCommandError, UnresolvableReference

LOG_FORMAT = '%n'.join([
    'commit %H',
    'Author: %an <%ae>',
    'AuthorDate: %ad',
    'Summary: %s',
    '',
    '%w(0,4,4)%b',
])


def with_paths(cmd: list[str], paths: Sequence[str] = ()) -> list[str]:
    """Append a ``-- <paths>`` filter to a git command, if there are paths."""
    if paths:
        cmd.extend(['--', *paths])
    return cmd


def rev_parse(ref: str) -> str:
    """Resolve a ref to its full commit hash."""
    cmd = ['git', 'rev-parse', '--verify', '--quiet', f'{ref}^{{commit}}']
    result = run(cmd, capture_output=True, text=True)
    if result.returncode != 0:
        raise UnresolvableReference((ref,), cmd, result.stderr)
    return result.stdout.strip()


def merge_base(ref1: str, ref2: str) -> str:
    """Find the best common ancestor of two refs."""
    cmd = ['git', 'merge-base', ref1, ref2]
    result = run(cmd, capture_output=True, text=True)
    # `merge-base` exits 1 with no output for unrelated histories
    if result.returncode != 0 or not result.stdout.strip():
        raise UnresolvableReference((ref1, ref2), cmd, result.stderr)
    return result.stdout.strip()


def build_log_cmd(
    base: str,
    head: str,
    include_patch: bool = False,
    paths: Sequence[str] = (),
) -> list[str]:
    """Build the oldest-first ``git log`` command for ``base..head``."""
    cmd = [
        'git', 'log',
        '--reverse',
        '--no-color',
        '--date=iso',
        f'--format={LOG_FORMAT}',
    ]
    if include_patch:
        cmd.append('-p')
    cmd.append(f'{base}..{head}')
    return with_paths(cmd, paths)


def log(
    base: str,
    head: str,
    include_patch: bool = False,
    paths: Sequence[str] = (),
) -> list[str]:
    """Get the raw log lines for ``base..head``."""
    cmd = build_log_cmd(base, head, include_patch, paths)
    # Patches may hold text in any encoding
    result = run(cmd, capture_output=True, encoding='utf-8', errors='replace')
    if result.returncode != 0:
        raise GitCommandError(cmd, result.stderr)
    return result.stdout.splitlines()


def trees_differ(ref1: str, ref2: str, paths: Sequence[str] = ()) -> bool:
    """Check whether two commits' trees differ (within ``paths``, if given)."""
    cmd = with_paths(['git', 'diff', '--quiet', ref1, ref2], paths)
    result = run(cmd, capture_output=True, text=True)
    if result.returncode > 1:
        raise GitCommandError(cmd, result.stderr)
    return result.returncode == 1


def diff(ref1: str, ref2: str, paths: Sequence[str] = ()) -> str:
    """Get the tree-level diff between two commits."""
    cmd = with_paths(['git', 'diff', '--no-color', ref1, ref2], paths)
    result = run(cmd, capture_output=True, encoding='utf-8', errors='replace')
    if result.returncode != 0:
        raise GitCommandError(cmd, result.stderr)
    return result.stdout


def describe(ref: str) -> Optional[str]:
    """Describe a ref relative to the nearest tag or branch.

    Returns None if git can't describe it.
    """
    result = run(['git', 'describe', '--all', '--always', ref], capture_output=True, text=True)
    if result.returncode != 0:
        return None
    return result.stdout.strip() or None


def patch_id(commit: str, paths: Sequence[str] = ()) -> str:
    """Compute the stable patch ID of a commit's changes (within ``paths``, if given).

    The patch is passed to ``git patch-id`` as raw bytes, since it may contain
    text in any encoding.

    Commits that change nothing (e.g. empty commits, or no changes within
    ``paths``) have no patch ID, and get an empty string.
    """
    cmd = with_paths(['git', 'show', '--no-color', '--format=', '--patch', commit], paths)
    shown = run(cmd, capture_output=True)
    if shown.returncode != 0:
        raise GitCommandError(cmd, shown.stderr.decode(errors='replace'))

    cmd = ['git', 'patch-id', '--stable']
    result = run(cmd, capture_output=True, input=shown.stdout)
    if result.returncode != 0:
        raise GitCommandError(cmd, result.stderr.decode(errors='replace'))
    # Output is "<patch-id> <commit-id>"
    return result.stdout[:40].decode('ascii').strip()
