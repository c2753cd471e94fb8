"""Privileged filesystem operations (directories, ownership, config files, symlinks)."""

from __future__ import annotations

from pathlib import Path

from vhostup.services.runner import CommandRunner


class FileSystem:
    """Filesystem/permission manager. Every operation is idempotent."""

    def __init__(self, runner: CommandRunner, *, owner: str, group: str):
        self.runner = runner
        self.owner = owner
        self.group = group

    def ensure_dir(self, path: Path, mode: int) -> None:
        """Create ``path`` (and parents), then apply owner:group and ``mode``."""
        self.runner.run(["mkdir", "-p", str(path)], privileged=True)
        self.runner.run(["chown", f"{self.owner}:{self.group}", str(path)], privileged=True)
        self.runner.run(["chmod", format(mode, "o"), str(path)], privileged=True)

    def read_text(self, path: Path) -> str | None:
        """Return the file content, or None when it does not exist."""
        if not path.is_file():
            return None
        return path.read_text()

    def write_text(self, path: Path, content: str) -> None:
        """Overwrite ``path`` with ``content`` (root-owned locations via sudo tee)."""
        self.runner.run(["mkdir", "-p", str(path.parent)], privileged=True)
        self.runner.run(["tee", str(path)], privileged=True, input=content)

    def symlink(self, target: Path, link: Path) -> None:
        """Create or refresh ``link`` pointing at ``target``."""
        self.runner.run(["ln", "-sfn", str(target), str(link)], privileged=True)

    def remove(self, path: Path) -> None:
        self.runner.run(["rm", "-f", str(path)], privileged=True)
