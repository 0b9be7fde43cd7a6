"""Compare the commit logs of two git ranges, ignoring rebase noise.

This is useful for checking what a rebase (or other history rewrite) actually
changed. The commit logs of an OLD range and a NEW range are normalized (hashes
are dropped by default) and diffed, so commits that were only moved onto a new
base produce no output.

After rebasing a branch onto main:
    git fetch
    git rebase origin/main

Compare the branch before and after:
    git-log-diff branch@{1} branch

Bases default to the merge-base of the two heads. With only one base given, the
other is the merge-base of that base and the opposite head:
    git-log-diff --old-base main@{1} --new-base origin/main branch@{1} branch

Pass -p to compare per-commit patches too, and paths (after `--` or with
--path) to restrict the logs to those paths.
"""

import sys
from typing import Optional, Sequence

from click import Choice, Command, command, echo, get_current_context
from utz import err
from utz.cli import arg, opt

from . import git
from .color import should_use_color, style_diff_line
from .compare import compare
from .errors import LogDiffError, UnexpectedArgument, UsageError
from .options import OutputOptions
from .pager import Pager
from .refs import ResolvedRefs, resolve_refs

SEPARATOR_PATHS = 'logdiff.separator_paths'


class SeparatorCommand(Command):
    """Command that collects arguments after a literal ``--`` as paths."""

    def parse_args(self, ctx, args):
        if '--' in args:
            idx = args.index('--')
            ctx.meta[SEPARATOR_PATHS] = tuple(args[idx + 1:])
            args = args[:idx]
        return super().parse_args(ctx, args)


def assign_positionals(
    args: Sequence[str],
    old_head: Optional[str],
    new_head: Optional[str],
) -> tuple[Optional[str], Optional[str]]:
    """Fill OLD_HEAD, then NEW_HEAD, from positional args (skipping ones given by flag)."""
    args = list(args)
    if not old_head and args:
        old_head = args.pop(0)
    if not new_head and args:
        new_head = args.pop(0)
    if args:
        raise UnexpectedArgument(args[0])
    return old_head, new_head


def echo_diff(lines, use_color: bool) -> None:
    for line in lines:
        if use_color:
            echo(style_diff_line(line), color=True)
        else:
            echo(line)


def describe_refs(refs: ResolvedRefs) -> None:
    """Print each resolved ref, its commit, and its nearest tag/branch."""
    for label, ref in refs.items():
        commit = git.rev_parse(ref)
        desc = git.describe(commit)
        line = f"{label}: {ref} = {commit[:12]}"
        if desc:
            line += f" ({desc})"
        err(line)


def report_trees(
    label: str,
    ref1: str,
    ref2: str,
    show: bool,
    flag: str,
    options: OutputOptions,
    use_color: bool,
) -> None:
    """Report whether two commits' trees differ, optionally printing the diff."""
    if not git.trees_differ(ref1, ref2, options.paths):
        err(f"{label}: trees are identical")
        return
    if not show:
        err(f"{label}: trees differ (pass {flag} to show)")
        return
    err(f"{label}: trees differ")
    echo_diff(git.diff(ref1, ref2, options.paths).splitlines(), use_color)


def git_log_diff(
    refs: ResolvedRefs,
    options: OutputOptions,
    use_color: bool = False,
    unified: int = 3,
) -> bool:
    """Print descriptions, tree reports and the log diff; return whether the logs differ."""
    describe_refs(refs)
    report_trees('Heads', refs.old_head, refs.new_head, options.diff_heads, '--diff-heads', options, use_color)
    report_trees('Bases', refs.old_base, refs.new_base, options.diff_bases, '--diff-bases', options, use_color)

    lines = compare(refs, options, unified=unified)
    if not lines:
        err("No differences in commit logs")
        return False
    echo_diff(lines, use_color)
    return True


@command(
    'git-log-diff',
    cls=SeparatorCommand,
    context_settings=dict(help_option_names=['-h', '--help']),
)
@arg('refs', nargs=-1, metavar='[OLD_HEAD] [NEW_HEAD]')
@opt('--old', '--old-head', 'old_head', help='Head of the OLD range')
@opt('--new', '--new-head', 'new_head', help='Head of the NEW range (default: HEAD)')
@opt('--old-base', help='Base of the OLD range (default: derived via merge-base)')
@opt('--new-base', help='Base of the NEW range (default: derived via merge-base)')
@opt('--base', help='Base of both ranges')
@opt('--path', 'paths', multiple=True, help='Restrict logs and tree diffs to this path (repeatable; paths after `--` are also added)')
@opt('-p', '--patch/--no-patch', 'include_patch', default=False, help='Include each commit\'s patch')
@opt('--diff-bases/--no-diff-bases', default=None, help='Show the diff between OLD_BASE and NEW_BASE (default: same as --patch)')
@opt('--diff-heads/--no-diff-heads', default=None, help='Show the diff between OLD_HEAD and NEW_HEAD (default: same as --patch)')
@opt('--include-stable-patch-id/--exclude-stable-patch-id', default=False, help='Include each commit\'s `git patch-id --stable`')
@opt('--include-commit-hash/--exclude-commit-hash', default=False, help='Include commit hashes (excluded by default, so rebased commits compare equal)')
@opt('-c', '--color', type=Choice(['auto', 'always', 'never']), default='auto', help='When to use colored output (default: auto)')
@opt('--pager', type=Choice(['auto', 'always', 'never']), default='auto', help='When to use pager (default: auto)')
@opt('-U', '--unified', type=int, default=3, help='Number of context lines to show (default: 3)')
def cli(
    refs: tuple[str, ...],
    old_head: Optional[str],
    new_head: Optional[str],
    old_base: Optional[str],
    new_base: Optional[str],
    base: Optional[str],
    paths: tuple[str, ...],
    include_patch: bool,
    diff_bases: Optional[bool],
    diff_heads: Optional[bool],
    include_stable_patch_id: bool,
    include_commit_hash: bool,
    color: str,
    pager: str,
    unified: int,
) -> None:
    """Diff the commit logs of OLD_BASE..OLD_HEAD and NEW_BASE..NEW_HEAD."""
    ctx = get_current_context()
    # Determine color BEFORE pager redirects stdout
    use_color = should_use_color(color)
    options = OutputOptions.resolve(
        include_patch=include_patch,
        diff_bases=diff_bases,
        diff_heads=diff_heads,
        include_stable_patch_id=include_stable_patch_id,
        include_commit_hash=include_commit_hash,
        paths=(*paths, *ctx.meta.get(SEPARATOR_PATHS, ())),
    )
    try:
        old_head, new_head = assign_positionals(refs, old_head, new_head)
        resolved = resolve_refs(
            old_head,
            new_head,
            old_base=old_base or base,
            new_base=new_base or base,
        )
        with Pager(pager):
            git_log_diff(resolved, options, use_color=use_color, unified=unified)
    except UsageError as e:
        err(ctx.get_usage())
        err(f"Error: {e}")
        sys.exit(2)
    except LogDiffError as e:
        err(f"Error: {e}")
        sys.exit(1)


if __name__ == '__main__':
    cli()
