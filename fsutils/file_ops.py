"""
File operations for fsutils.

Bash-like filesystem operations as plain function calls. Each operation
checks its preconditions, delegates to the OS, and reports failures as a
typed FsError plus one INFO diagnostic line.
"""

import os
import shutil
from pathlib import Path
from typing import Iterator, List, Optional, Sequence

from .config import get_logger
from .errors import FsError, NotFoundError, translate
from .logger import DiagnosticLogger


class FileOperator:
    """Filesystem operations reporting to a diagnostic logger."""

    def __init__(self, logger: Optional[DiagnosticLogger] = None):
        """
        Initialize FileOperator.

        Args:
            logger: Diagnostic logger; the process-wide one is used if omitted
        """
        self._logger = logger

    @property
    def logger(self) -> DiagnosticLogger:
        return self._logger if self._logger is not None else get_logger()

    def _fail(self, operation: str, paths: Sequence, exc: BaseException) -> FsError:
        """
        Translate an exception and log it.

        Args:
            operation: Name of the failing operation
            paths: Paths involved
            exc: The exception raised by the OS call

        Returns:
            The FsError to raise
        """
        error = translate(operation, paths, exc)
        self.logger.info(
            operation,
            f"Failed on {', '.join(error.paths)}",
            paths=error.paths,
            error=error.reason,
            metadata={"kind": error.kind.value}
        )
        return error

    def _require_exists(self, operation: str, path) -> None:
        # lexists so that dangling symlinks can still be removed or moved
        if not os.path.lexists(path):
            raise self._fail(operation, [path], NotFoundError(operation, [path]))

    def exists(self, path) -> bool:
        """
        Check if a path exists.

        Never fails; inaccessible paths report False.
        """
        found = os.path.exists(path)
        self.logger.debug(
            "exists",
            f"{os.fspath(path)} {'exists' if found else 'does not exist'}",
            paths=[os.fspath(path)]
        )
        return found

    def is_file(self, path) -> bool:
        """Check if a path is a regular file (following symlinks)."""
        result = os.path.isfile(path)
        self.logger.debug("is_file", f"{os.fspath(path)}: {result}", paths=[os.fspath(path)])
        return result

    def is_dir(self, path) -> bool:
        """Check if a path is a directory (following symlinks)."""
        result = os.path.isdir(path)
        self.logger.debug("is_dir", f"{os.fspath(path)}: {result}", paths=[os.fspath(path)])
        return result

    def copy(self, src, dst) -> None:
        """
        Copy a file from source to destination.

        Overwrites an existing destination file. If the destination is a
        directory, the file is copied into it under its own name.

        Args:
            src: Source file path
            dst: Destination path

        Raises:
            NotFoundError: If the source does not exist
            FsError: If the source is a directory or the destination is unwritable
        """
        self._require_exists("copy", src)
        try:
            shutil.copy2(src, dst)  # copy2 preserves metadata
        except OSError as e:
            raise self._fail("copy", [src, dst], e) from e

        self.logger.debug("copy", f"Copied {os.fspath(src)} to {os.fspath(dst)}",
                          paths=[os.fspath(src), os.fspath(dst)])

    def move(self, src, dst) -> None:
        """
        Move (rename) a path.

        There is no copy-and-delete fallback: moving across filesystems fails.

        Args:
            src: Source path
            dst: Destination path

        Raises:
            NotFoundError: If the source does not exist
            FsError: On cross-device or permission errors
        """
        self._require_exists("move", src)
        try:
            os.rename(src, dst)
        except OSError as e:
            raise self._fail("move", [src, dst], e) from e

        self.logger.debug("move", f"Moved {os.fspath(src)} to {os.fspath(dst)}",
                          paths=[os.fspath(src), os.fspath(dst)])

    def remove(self, path) -> None:
        """
        Remove a file.

        Args:
            path: Path to the file

        Raises:
            NotFoundError: If the path does not exist
            FsError: If the path cannot be deleted, directories included
        """
        self._require_exists("remove", path)
        try:
            os.remove(path)
        except OSError as e:
            raise self._fail("remove", [path], e) from e

        self.logger.debug("remove", f"Removed file {os.fspath(path)}", paths=[os.fspath(path)])

    def remove_all(self, path) -> None:
        """
        Remove a directory and everything below it.

        Entries are removed depth-first in sorted name order. Symlinks are
        unlinked, not followed. The first failure stops the walk and is
        raised; whatever was removed before it stays removed. A plain file
        is simply removed.

        You should use this carefully.

        Args:
            path: Directory (or file) to remove

        Raises:
            NotFoundError: If the path does not exist
            FsError: For the first entry that could not be removed
        """
        self._require_exists("remove_all", path)
        try:
            self._remove_tree(os.fspath(path))
        except OSError as e:
            failed = e.filename if isinstance(e.filename, str) else os.fspath(path)
            paths = [path] if failed == os.fspath(path) else [path, failed]
            raise self._fail("remove_all", paths, e) from e

        self.logger.debug("remove_all", f"Removed directory at {os.fspath(path)}",
                          paths=[os.fspath(path)])

    def _remove_tree(self, path: str) -> None:
        if os.path.islink(path) or not os.path.isdir(path):
            os.remove(path)
            return
        for name in sorted(os.listdir(path)):
            self._remove_tree(os.path.join(path, name))
        os.rmdir(path)

    def rmdir(self, path) -> None:
        """
        Remove an empty directory.

        This does not remove a directory recursively; use remove_all for that.

        Raises:
            NotFoundError: If the path does not exist
            FsError: If the directory is not empty or is not a directory
        """
        self._require_exists("rmdir", path)
        try:
            os.rmdir(path)
        except OSError as e:
            raise self._fail("rmdir", [path], e) from e

        self.logger.debug("rmdir", f"Removed directory at {os.fspath(path)}", paths=[os.fspath(path)])

    def mkdir(self, path, parents: bool = False) -> None:
        """
        Create a directory.

        Args:
            path: Directory to create
            parents: Also create missing parent directories

        Raises:
            NotFoundError: If the parent is missing and parents is False
            AlreadyExistsError: If the path already exists, as a file or directory
        """
        try:
            if parents:
                os.makedirs(path)
            else:
                os.mkdir(path)
        except OSError as e:
            raise self._fail("mkdir", [path], e) from e

        self.logger.debug("mkdir", f"Created {os.fspath(path)}", paths=[os.fspath(path)])

    def list_dir(self, path) -> List[str]:
        """
        List the entry names of a directory.

        Names come back in directory order, which is not sorted.

        Raises:
            NotFoundError: If the path does not exist
            FsError: If the path is not a directory
        """
        try:
            return os.listdir(path)
        except OSError as e:
            raise self._fail("list_dir", [path], e) from e

    def is_empty_dir(self, path) -> bool:
        """
        Check if a directory has no entries.

        Raises:
            NotFoundError: If the path does not exist
            FsError: If the path is not a directory
        """
        try:
            with os.scandir(path) as entries:
                return next(entries, None) is None
        except OSError as e:
            raise self._fail("is_empty_dir", [path], e) from e

    def read_lines(self, path, encoding: str = "utf-8") -> Iterator[str]:
        """
        Lazily read a text file line by line.

        Existence is checked immediately; the file itself is opened on the
        first iteration and closed when the iterator is exhausted, fails, or
        is closed. Trailing newlines are stripped.

        Args:
            path: Path to the file
            encoding: Text encoding (default: utf-8)

        Returns:
            Iterator over the lines of the file

        Raises:
            NotFoundError: If the file does not exist
            FsError: During iteration, if the file cannot be read or decoded
        """
        self._require_exists("read_lines", path)
        return self._iter_lines(path, encoding)

    def _iter_lines(self, path, encoding: str) -> Iterator[str]:
        try:
            with open(path, "r", encoding=encoding) as f:
                for line in f:
                    yield line[:-1] if line.endswith("\n") else line
        except (OSError, UnicodeDecodeError) as e:
            raise self._fail("read_lines", [path], e) from e

    def read_text(self, path, encoding: str = "utf-8") -> str:
        """Read the whole file as text."""
        try:
            return Path(path).read_text(encoding=encoding)
        except (OSError, UnicodeDecodeError) as e:
            raise self._fail("read_text", [path], e) from e

    def read_bytes(self, path) -> bytes:
        """Read the whole file as bytes."""
        try:
            return Path(path).read_bytes()
        except OSError as e:
            raise self._fail("read_bytes", [path], e) from e

    def write_text(self, path, content: str, encoding: str = "utf-8") -> None:
        """
        Write text to a file, creating or truncating it.

        Args:
            path: Path to the file
            content: Text to write
            encoding: Text encoding (default: utf-8)
        """
        try:
            Path(path).write_text(content, encoding=encoding)
        except OSError as e:
            raise self._fail("write_text", [path], e) from e

        self.logger.debug("write_text", f"Wrote {len(content)} characters to {os.fspath(path)}",
                          paths=[os.fspath(path)])

    def write_bytes(self, path, data: bytes) -> None:
        """Write bytes to a file, creating or truncating it."""
        try:
            Path(path).write_bytes(data)
        except OSError as e:
            raise self._fail("write_bytes", [path], e) from e

        self.logger.debug("write_bytes", f"Wrote buffer to {os.fspath(path)}",
                          paths=[os.fspath(path)], metadata={"size": len(data)})

    def append_text(self, path, content: str, encoding: str = "utf-8") -> None:
        """Append text to a file, creating it if missing."""
        try:
            with open(path, "a", encoding=encoding) as f:
                f.write(content)
        except OSError as e:
            raise self._fail("append_text", [path], e) from e

        self.logger.debug("append_text", f"Appended to {os.fspath(path)}", paths=[os.fspath(path)])

    def create_file(self, path) -> None:
        """Create an empty file, truncating it if it already exists."""
        try:
            with open(path, "wb"):
                pass
        except OSError as e:
            raise self._fail("create_file", [path], e) from e

        self.logger.debug("create_file", f"Created file {os.fspath(path)}", paths=[os.fspath(path)])

    def size(self, path) -> int:
        """
        Get the size of a path in bytes.

        Raises:
            NotFoundError: If the path does not exist
        """
        try:
            return os.stat(path).st_size
        except OSError as e:
            raise self._fail("size", [path], e) from e


_operator = FileOperator()


def exists(path) -> bool:
    return _operator.exists(path)


def is_file(path) -> bool:
    return _operator.is_file(path)


def is_dir(path) -> bool:
    return _operator.is_dir(path)


def copy(src, dst) -> None:
    """Copy a file, like `cp src dst`."""
    _operator.copy(src, dst)


def move(src, dst) -> None:
    """Move a path, like `mv src dst`."""
    _operator.move(src, dst)


def remove(path) -> None:
    """Remove a file, like `rm path`."""
    _operator.remove(path)


def remove_all(path) -> None:
    """Remove a tree, like `rm -r path`."""
    _operator.remove_all(path)


def rmdir(path) -> None:
    _operator.rmdir(path)


def mkdir(path, parents: bool = False) -> None:
    """Create a directory, like `mkdir [-p] path`."""
    _operator.mkdir(path, parents=parents)


def list_dir(path) -> List[str]:
    """List directory entries, like `ls path`."""
    return _operator.list_dir(path)


def is_empty_dir(path) -> bool:
    return _operator.is_empty_dir(path)


def read_lines(path, encoding: str = "utf-8") -> Iterator[str]:
    return _operator.read_lines(path, encoding=encoding)


def read_text(path, encoding: str = "utf-8") -> str:
    return _operator.read_text(path, encoding=encoding)


def read_bytes(path) -> bytes:
    return _operator.read_bytes(path)


def write_text(path, content: str, encoding: str = "utf-8") -> None:
    _operator.write_text(path, content, encoding=encoding)


def write_bytes(path, data: bytes) -> None:
    _operator.write_bytes(path, data)


def append_text(path, content: str, encoding: str = "utf-8") -> None:
    _operator.append_text(path, content, encoding=encoding)


def create_file(path) -> None:
    _operator.create_file(path)


def size(path) -> int:
    return _operator.size(path)


# Bash-style names
path_exists = exists
cp = copy
mv = move
rm = remove
rm_r = remove_all
ls = list_dir
