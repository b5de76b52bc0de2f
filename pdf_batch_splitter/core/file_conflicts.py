"""
Output collision handling for split pages.
File: pdf_batch_splitter/core/file_conflicts.py

Two resolved pages can produce the same composite identifier and so
the same filename. The default keeps the historical behavior (the
later page overwrites the earlier one); 'rename' and 'fail' are
available when that is not wanted.
"""

from pathlib import Path
from rich.console import Console
from rich.markup import escape

from pdf_batch_splitter.core.exceptions import FileConflictError

console = Console()


class ConflictResolutionStrategy:
    """Enumeration of collision strategies."""
    OVERWRITE   = "overwrite"   # Replace the existing file
    RENAME      = "rename"      # Auto-rename with numeric suffix
    FAIL        = "fail"        # Stop the run on first collision

    ALL = (OVERWRITE, RENAME, FAIL)


def is_taken(path: Path, taken: set[Path]) -> bool:
    """A name is taken if it exists on disk or was assigned earlier in this run."""
    return path in taken or path.exists()


def resolve_collision(path: Path, strategy: str = ConflictResolutionStrategy.OVERWRITE,
                        taken: set[Path] = None) -> Path:
    """
    Apply a collision strategy to a planned output path.

    Args:
        path: Planned output path
        strategy: One of ConflictResolutionStrategy.ALL
        taken: Paths already assigned earlier in this run

    Returns:
        Path to write to

    Raises:
        FileConflictError: If strategy is 'fail' and the path is taken
    """
    taken = taken if taken is not None else set()

    if not is_taken(path, taken):
        return path

    if strategy == ConflictResolutionStrategy.FAIL:
        raise FileConflictError(path, strategy)

    if strategy == ConflictResolutionStrategy.RENAME:
        new_path = generate_unique_filename(path, taken)
        console.print(f"[cyan]Renaming to avoid conflict: {escape(path.name)} → {escape(new_path.name)}[/cyan]")
        return new_path

    console.print(f"[yellow]Overwriting existing file: {escape(path.name)}[/yellow]")
    return path


def generate_unique_filename(path: Path, taken: set[Path] = None, max_attempts: int = 1000) -> Path:
    """
    Generate a free filename by appending _1, _2, ... to the stem.

    The stem is never reinterpreted: identifiers often end in digits,
    so "Prefix_123456" becomes "Prefix_123456_1", not "Prefix_123457".

    Raises:
        FileConflictError: If no free name is found within max_attempts
    """
    taken = taken if taken is not None else set()

    if not is_taken(path, taken):
        return path

    for i in range(1, max_attempts + 1):
        candidate = path.parent / f"{path.stem}_{i}{path.suffix}"
        if not is_taken(candidate, taken):
            return candidate

    raise FileConflictError(path, ConflictResolutionStrategy.RENAME,
                            f"Unable to generate unique filename for {path.name} after {max_attempts} attempts")


# End of file #
