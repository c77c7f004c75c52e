"""File scanner — discover Solidity sources to compile."""

from pathlib import Path

# Dependency, build and tooling directories to always skip
SKIP_DIRS = {
    ".git", "node_modules", "lib", "out", "cache", "artifacts",
    "broadcast", "typechain", "typechain-types", "coverage", ".deps",
}

SOLIDITY_SUFFIX = ".sol"


def find_solidity_files(path: Path) -> list[Path]:
    """Return the Solidity files at ``path``.

    A file is returned as-is; a directory is scanned recursively, skipping
    dependency and build directories. Results are sorted.
    """
    if path.is_file():
        return [path]

    files = []
    for item in path.rglob(f"*{SOLIDITY_SUFFIX}"):
        if item.is_file() and _should_include(item.relative_to(path)):
            files.append(item)
    return sorted(files)


def _should_include(relative_path: Path) -> bool:
    """Check if a file lies outside every skipped directory."""
    for part in relative_path.parts[:-1]:
        if part in SKIP_DIRS:
            return False
    return True
