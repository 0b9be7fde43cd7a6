import sys

from click import style


def should_use_color(color_option: str) -> bool:
    """Determine if color should be used based on option and TTY status."""
    if color_option == 'always':
        return True
    elif color_option == 'never':
        return False
    else:  # auto
        return sys.stdout.isatty()


def style_diff_line(line: str) -> str:
    """Color a unified-diff line the way ``git diff`` does."""
    if line.startswith('+++') or line.startswith('---'):
        return style(line, bold=True)
    elif line.startswith('@@'):
        return style(line, fg='cyan')
    elif line.startswith('+'):
        return style(line, fg='green')
    elif line.startswith('-'):
        return style(line, fg='red')
    return line
