"""Runtime probe backed by the real process, environment and filesystem."""

from __future__ import annotations

import os
import sys
from pathlib import Path

from .interfaces import RuntimePlatform, RuntimeProbePort


class OsRuntimeProbe(RuntimeProbePort):
    """Runtime probe reading facts from `os`, `sys` and the local filesystem."""

    def probe_environment_variable(self, name: str) -> str | None:
        """Return one variable from `os.environ`.

        Args:
            name: Variable name.

        Returns:
            str | None: Variable value, or None when unset.

        Raises:
            RuntimeError: This probe does not raise runtime errors.
        """

        return os.environ.get(name)

    def probe_command_line(self) -> str:
        """Return the original interpreter command line.

        Returns:
            str: Space-joined `sys.orig_argv`, falling back to `sys.argv`.

        Raises:
            RuntimeError: This probe does not raise runtime errors.
        """

        arguments = getattr(sys, "orig_argv", None) or sys.argv
        return " ".join(str(argument) for argument in arguments)

    def probe_base_directory(self) -> Path:
        """Return the directory the application runs from.

        Bundled apps report their unpack directory, frozen apps the executable
        directory and scripts the directory of the entry script. Entry script
        symlinks are followed so launcher shims report their install location.

        Returns:
            Path: Absolute base directory.

        Raises:
            OSError: Raised when the working directory fallback no longer exists.
        """

        bundle_directory = getattr(sys, "_MEIPASS", None)
        if bundle_directory:
            return Path(bundle_directory)
        if getattr(sys, "frozen", False) and sys.executable:
            return Path(sys.executable).resolve().parent

        entry_point = sys.argv[0] if sys.argv else ""
        if entry_point and entry_point != "-c":
            return Path(entry_point).resolve().parent
        return Path.cwd()

    def probe_executable_path(self) -> Path | None:
        """Return the interpreter or frozen executable path without resolving symlinks.

        Returns:
            Path | None: Executable path, or None when the interpreter does not report one.

        Raises:
            RuntimeError: This probe does not raise runtime errors.
        """

        if not sys.executable:
            return None
        return Path(sys.executable)

    def probe_current_directory(self) -> Path:
        """Return the current working directory.

        Returns:
            Path: Absolute working directory.

        Raises:
            OSError: Raised when the working directory no longer exists.
        """

        return Path.cwd()

    def probe_platform(self) -> RuntimePlatform:
        """Map `sys.platform` onto a platform family.

        Returns:
            RuntimePlatform: Platform family.

        Raises:
            RuntimeError: This probe does not raise runtime errors.
        """

        if sys.platform.startswith("win"):
            return RuntimePlatform.WINDOWS
        if sys.platform == "darwin":
            return RuntimePlatform.MACOS
        if sys.platform.startswith("linux"):
            return RuntimePlatform.LINUX
        return RuntimePlatform.OTHER

    def probe_home_directory(self) -> Path:
        """Return the current user's home directory.

        Returns:
            Path: Absolute home directory.

        Raises:
            RuntimeError: Raised when the home directory cannot be determined.
        """

        return Path.home()

    def probe_path_exists(self, path: Path) -> bool:
        """Return whether any filesystem entry exists at `path`.

        Args:
            path: Candidate path.

        Returns:
            bool: True for existing files and directories.

        Raises:
            RuntimeError: This probe does not raise runtime errors.
        """

        return os.path.lexists(path)

    def probe_read_text(self, path: Path) -> str:
        """Read one text file as UTF-8, replacing undecodable bytes.

        Args:
            path: File path.

        Returns:
            str: File content.

        Raises:
            OSError: Raised when the file cannot be read.
        """

        return Path(path).read_text(encoding="utf-8", errors="replace")

    def probe_list_directory_names(self, path: Path) -> list[str]:
        """List immediate child directory names.

        Args:
            path: Directory to list.

        Returns:
            list[str]: Child directory names, symlinked directories included.

        Raises:
            OSError: Raised when the directory cannot be listed.
        """

        with os.scandir(path) as entries:
            return [entry.name for entry in entries if _probe_entry_is_directory(entry)]


def _probe_entry_is_directory(entry: os.DirEntry) -> bool:
    try:
        return entry.is_dir()
    except OSError:
        return False
