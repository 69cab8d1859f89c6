"""Typed interfaces for environment-layer responsibilities."""

from enum import Enum
from pathlib import Path
from typing import Protocol


class RuntimePlatform(str, Enum):
    """Operating system families with distinct per-user directory conventions."""

    WINDOWS = "windows"
    MACOS = "macos"
    LINUX = "linux"
    OTHER = "other"


class RuntimeProbePort(Protocol):
    """Port definition for reading process and filesystem facts during resolution."""

    def probe_environment_variable(self, name: str) -> str | None:
        """Return one environment variable value.

        Args:
            name: Variable name.

        Returns:
            str | None: Variable value, or None when unset.

        Raises:
            RuntimeError: Raised when the environment cannot be read.
        """

    def probe_command_line(self) -> str:
        """Return the full process command line as one string.

        Returns:
            str: Space-joined process arguments including the interpreter.

        Raises:
            RuntimeError: Raised when process arguments are unavailable.
        """

    def probe_base_directory(self) -> Path:
        """Return the process base (installation) directory.

        Returns:
            Path: Absolute directory containing the running application.

        Raises:
            RuntimeError: Raised when the base directory cannot be determined.
        """

    def probe_executable_path(self) -> Path | None:
        """Return the path of the running executable.

        Returns:
            Path | None: Executable path, or None when unknown.

        Raises:
            RuntimeError: Raised when process metadata is unavailable.
        """

    def probe_current_directory(self) -> Path:
        """Return the process current working directory.

        Returns:
            Path: Absolute working directory.

        Raises:
            OSError: Raised when the working directory no longer exists.
        """

    def probe_platform(self) -> RuntimePlatform:
        """Return the operating system family.

        Returns:
            RuntimePlatform: Platform family of the running process.

        Raises:
            RuntimeError: Raised when platform metadata is unavailable.
        """

    def probe_home_directory(self) -> Path:
        """Return the current user's home directory.

        Returns:
            Path: Absolute home directory.

        Raises:
            RuntimeError: Raised when the home directory cannot be determined.
        """

    def probe_path_exists(self, path: Path) -> bool:
        """Return whether a file or directory exists at `path`.

        Args:
            path: Candidate path.

        Returns:
            bool: True when any filesystem entry exists at the path.

        Raises:
            RuntimeError: This probe does not raise for missing or inaccessible paths.
        """

    def probe_read_text(self, path: Path) -> str:
        """Read one small text file.

        Args:
            path: File path.

        Returns:
            str: File content.

        Raises:
            OSError: Raised when the file cannot be read.
        """

    def probe_list_directory_names(self, path: Path) -> list[str]:
        """List names of immediate child directories.

        Args:
            path: Directory to list.

        Returns:
            list[str]: Child directory names.

        Raises:
            OSError: Raised when the directory cannot be listed.
        """
