from dataclasses import dataclass
from typing import Optional, Sequence


@dataclass(frozen=True)
class OutputOptions:
    """What to include when normalizing and comparing two commit logs."""
    include_patch: bool = False
    diff_bases: bool = False
    diff_heads: bool = False
    include_stable_patch_id: bool = False
    include_commit_hash: bool = False
    paths: tuple[str, ...] = ()

    @classmethod
    def resolve(
        cls,
        include_patch: bool = False,
        diff_bases: Optional[bool] = None,
        diff_heads: Optional[bool] = None,
        include_stable_patch_id: bool = False,
        include_commit_hash: bool = False,
        paths: Sequence[str] = (),
    ) -> 'OutputOptions':
        """Build options from possibly-unset flags.

        ``diff_bases`` and ``diff_heads`` default to ``include_patch``: when
        per-commit patches are shown, the base/head tree diffs are shown too.
        """
        if diff_bases is None:
            diff_bases = include_patch
        if diff_heads is None:
            diff_heads = include_patch
        return cls(
            include_patch=bool(include_patch),
            diff_bases=bool(diff_bases),
            diff_heads=bool(diff_heads),
            include_stable_patch_id=bool(include_stable_patch_id),
            include_commit_hash=bool(include_commit_hash),
            paths=tuple(paths),
        )
