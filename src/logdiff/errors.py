"""Errors raised while resolving refs and reading commit logs."""


class LogDiffError(Exception):
    """Base class for git-log-diff errors."""


class UsageError(LogDiffError):
    """The command line doesn't describe a comparison we can run."""


class MissingRequiredReference(UsageError):
    """OLD_HEAD was not given."""

    def __init__(self, name: str = 'OLD_HEAD'):
        self.name = name
        super().__init__(f"{name} is required")


class UnexpectedArgument(UsageError):
    """A positional argument beyond OLD_HEAD and NEW_HEAD."""

    def __init__(self, arg: str):
        self.arg = arg
        super().__init__(f"Unexpected argument: {arg}")


class GitCommandError(LogDiffError):
    """A git invocation exited unsuccessfully."""

    def __init__(self, cmd: list[str], stderr: str = '', msg: str = None):
        self.cmd = cmd
        self.stderr = stderr.strip()
        if msg is None:
            msg = f"`{' '.join(cmd)}` failed"
        if self.stderr:
            msg = f"{msg}: {self.stderr}"
        super().__init__(msg)


class UnresolvableReference(GitCommandError):
    """git couldn't resolve a ref, or find a merge-base for a pair of refs."""

    def __init__(self, refs: tuple[str, ...], cmd: list[str], stderr: str = ''):
        self.refs = refs
        if len(refs) == 1:
            msg = f"Can't resolve {refs[0]}"
        else:
            msg = f"Can't find merge-base of {' and '.join(refs)}"
        super().__init__(cmd, stderr, msg=msg)
