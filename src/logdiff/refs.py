from dataclasses import dataclass
from typing import Callable, Optional

from . import git
from .errors import MissingRequiredReference


@dataclass(frozen=True)
class ResolvedRefs:
    """The heads and bases of the two ranges being compared."""
    old_head: str
    new_head: str
    old_base: str
    new_base: str

    @property
    def old_range(self) -> tuple[str, str]:
        return self.old_base, self.old_head

    @property
    def new_range(self) -> tuple[str, str]:
        return self.new_base, self.new_head

    def items(self) -> list[tuple[str, str]]:
        """(label, ref) pairs, in display order."""
        return [
            ('OLD_HEAD', self.old_head),
            ('NEW_HEAD', self.new_head),
            ('OLD_BASE', self.old_base),
            ('NEW_BASE', self.new_base),
        ]


def resolve_refs(
    old_head: Optional[str],
    new_head: Optional[str] = None,
    old_base: Optional[str] = None,
    new_base: Optional[str] = None,
    merge_base: Callable[[str, str], str] = None,
) -> ResolvedRefs:
    """Fill in missing heads/bases of the OLD and NEW ranges.

    - ``new_head`` defaults to ``HEAD``.
    - With no bases given, both are ``merge-base(old_head, new_head)``.
    - With one base given, the other is the merge-base of the given base and
      the opposite head, i.e. ``old_base = merge-base(old_head, new_base)`` or
      ``new_base = merge-base(old_base, new_head)``.

    Merge-base failures propagate as :class:`UnresolvableReference`.
    """
    if merge_base is None:
        merge_base = git.merge_base
    if not old_head:
        raise MissingRequiredReference('OLD_HEAD')
    if not new_head:
        new_head = 'HEAD'
    if not old_base and not new_base:
        old_base = new_base = merge_base(old_head, new_head)
    if not old_base:
        old_base = merge_base(old_head, new_base)
    if not new_base:
        new_base = merge_base(old_base, new_head)
    return ResolvedRefs(
        old_head=old_head,
        new_head=new_head,
        old_base=old_base,
        new_base=new_base,
    )
