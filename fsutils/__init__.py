"""
fsutils - Bash-like filesystem operations as simple function calls.

    >>> import fsutils
    >>> fsutils.mkdir("build")
    >>> fsutils.write_text("build/a.txt", "hello\\nworld\\n")
    >>> list(fsutils.read_lines("build/a.txt"))
    ['hello', 'world']
    >>> fsutils.rm_r("build")
"""

from .config import init_logging, get_logger, load_settings, build_logger, Settings
from .errors import (
    ErrorKind,
    FsError,
    NotFoundError,
    PermissionDeniedError,
    AlreadyExistsError,
)
from .file_ops import (
    FileOperator,
    exists,
    is_file,
    is_dir,
    copy,
    move,
    remove,
    remove_all,
    rmdir,
    mkdir,
    list_dir,
    is_empty_dir,
    read_lines,
    read_text,
    read_bytes,
    write_text,
    write_bytes,
    append_text,
    create_file,
    size,
    path_exists,
    cp,
    mv,
    rm,
    rm_r,
    ls,
)
from .logger import DiagnosticLogger, DiagnosticEntry, Level, NullSink, ConsoleSink, JsonlSink
from .result import OpResult, attempt

__all__ = [
    "init_logging",
    "get_logger",
    "load_settings",
    "build_logger",
    "Settings",
    "ErrorKind",
    "FsError",
    "NotFoundError",
    "PermissionDeniedError",
    "AlreadyExistsError",
    "FileOperator",
    "exists",
    "is_file",
    "is_dir",
    "copy",
    "move",
    "remove",
    "remove_all",
    "rmdir",
    "mkdir",
    "list_dir",
    "is_empty_dir",
    "read_lines",
    "read_text",
    "read_bytes",
    "write_text",
    "write_bytes",
    "append_text",
    "create_file",
    "size",
    "path_exists",
    "cp",
    "mv",
    "rm",
    "rm_r",
    "ls",
    "DiagnosticLogger",
    "DiagnosticEntry",
    "Level",
    "NullSink",
    "ConsoleSink",
    "JsonlSink",
    "OpResult",
    "attempt",
]

__version__ = "0.1.0"
