import os
import sys
from io import StringIO
from subprocess import PIPE, Popen, run

DEFAULT_PAGER = 'less -FRSX'


def pager_cmd() -> str:
    """Pager command, as git would pick it (``GIT_PAGER``, ``core.pager``, ``PAGER``)."""
    result = run(['git', 'var', 'GIT_PAGER'], capture_output=True, text=True)
    cmd = result.stdout.strip() if result.returncode == 0 else ''
    return cmd or DEFAULT_PAGER


class Pager:
    """Buffer stdout, then send it through a pager if it won't fit on screen."""

    def __init__(self, use_pager: str = 'auto'):
        """
        Args:
            use_pager: 'always', 'never', or 'auto' (page when stdout is a TTY)
        """
        self.use_pager = use_pager
        self.stdout = None
        self.buffer = None

    def should_page(self) -> bool:
        if self.use_pager == 'always':
            return True
        elif self.use_pager == 'never':
            return False
        else:  # auto
            return sys.stdout.isatty()

    def __enter__(self):
        if self.should_page():
            self.stdout = sys.stdout
            self.buffer = StringIO()
            sys.stdout = self.buffer
        return self

    def fits(self, output: str) -> bool:
        """Whether ``output`` fits in the terminal, leaving room for a prompt."""
        height = int(os.environ.get('LINES', 24))
        return output.count('\n') <= height - 2

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.stdout is None:
            return
        sys.stdout = self.stdout
        output = self.buffer.getvalue()
        self.stdout = self.buffer = None
        if not output:
            return

        # `core.pager=cat` disables paging
        cmd = pager_cmd()
        if self.fits(output) or cmd == 'cat':
            print(output, end='')
            return
        try:
            pager = Popen(cmd, shell=True, stdin=PIPE, text=True)
            pager.communicate(output)
        except OSError:
            print(output, end='')
