"""Nox sessions for docsmith."""

import nox


PYPROJECT = nox.project.load_toml("pyproject.toml")
# Drive the matrix from pyproject metadata so versions stay in sync.
PYTHON_VERSIONS = nox.project.python_versions(PYPROJECT, max_version="3.13")
nox.options.default_venv_backend = "uv|virtualenv"


def _install_test_deps(session: nox.Session) -> None:
    session.install("-e", ".[test]")


@nox.session(python=PYTHON_VERSIONS)
def tests(session: nox.Session) -> None:
    """Run pytest across all supported Python versions."""
    _install_test_deps(session)
    session.run("pytest", *session.posargs)


@nox.session(python=PYTHON_VERSIONS[-1])
def coverage(session: nox.Session) -> None:
    """Run tests with coverage reporting once."""
    _install_test_deps(session)
    session.run(
        "pytest",
        "--cov=docsmith",
        "--cov-report=term-missing",
        *session.posargs,
    )
