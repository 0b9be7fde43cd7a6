from pathlib import Path
from subprocess import check_output

import pytest


def git(*args: str) -> str:
    return check_output(['git', *args], text=True).strip()


def commit(name: str, msg: str = None, content: str = None) -> str:
    """Write ``name``, commit it, and return the new commit's hash."""
    Path(name).write_text(content or f'{name}\n')
    git('add', name)
    git('commit', '-q', '-m', msg or f'Add {name}')
    return git('rev-parse', 'HEAD')


@pytest.fixture()
def repo(tmp_path: Path, monkeypatch) -> Path:
    """Empty git repo (branch ``main``) as the cwd, with fixed identity and dates."""
    home = tmp_path / 'home'
    home.mkdir()
    monkeypatch.setenv('HOME', str(home))
    monkeypatch.setenv('GIT_CONFIG_NOSYSTEM', '1')
    monkeypatch.setenv('GIT_AUTHOR_NAME', 'Test Author')
    monkeypatch.setenv('GIT_AUTHOR_EMAIL', 'author@example.com')
    monkeypatch.setenv('GIT_COMMITTER_NAME', 'Test Committer')
    monkeypatch.setenv('GIT_COMMITTER_EMAIL', 'committer@example.com')
    monkeypatch.setenv('GIT_AUTHOR_DATE', '2024-01-01T00:00:00+0000')
    monkeypatch.setenv('GIT_COMMITTER_DATE', '2024-01-01T00:00:00+0000')

    path = tmp_path / 'repo'
    path.mkdir()
    monkeypatch.chdir(path)
    git('init', '-q', '-b', 'main')
    return path


@pytest.fixture()
def picked(repo: Path, monkeypatch) -> dict[str, str]:
    """``old``: A→B→C; ``new``: A→B'→C', where B' and C' are cherry-picks of B and C.

    ``main`` stays at A.
    """
    a = commit('a.txt')
    git('checkout', '-q', '-b', 'old')
    b = commit('b.txt', 'Add b\n\nB body.')
    c = commit('c.txt')

    # New committer date, so the cherry-picks get new hashes
    monkeypatch.setenv('GIT_COMMITTER_DATE', '2024-02-01T00:00:00+0000')
    git('checkout', '-q', '-b', 'new', a)
    git('cherry-pick', b, c)
    git('checkout', '-q', 'main')
    return dict(a=a, b=b, c=c)


@pytest.fixture()
def diverged(picked: dict[str, str]) -> dict[str, str]:
    """Like ``picked``, but C' has a longer summary than C."""
    git('checkout', '-q', 'new')
    git('commit', '-q', '--amend', '-m', 'Add c.txt, and more')
    git('checkout', '-q', 'main')
    return picked


@pytest.fixture()
def forked(repo: Path) -> dict[str, str]:
    """``main``: A→B→C; ``old``: C→O; ``new``: C→N."""
    a = commit('a.txt')
    b = commit('b.txt')
    c = commit('c.txt')
    git('checkout', '-q', '-b', 'old')
    o = commit('o.txt')
    git('checkout', '-q', '-b', 'new', c)
    n = commit('n.txt')
    git('checkout', '-q', 'main')
    return dict(a=a, b=b, c=c, o=o, n=n)
