"""
Acorn runner.

Runs the Acorn command-line parser on a JavaScript file, decodes its ESTree
JSON output and hands it to one of the assemblers. This is the only part of
jstree that starts a process; the assemblers only ever see a TreeView.
"""

import asyncio
from pathlib import Path
from typing import List, Optional, Union

from jstree.config import settings
from jstree.models.error import AcornError
from jstree.models.node import Program
from jstree.services.assembler import parse_program
from jstree.services.concurrent_assembler import parse_program_concurrently
from jstree.services.tree_view import TreeView, TreeViewError
from jstree.utils.logging import get_logger, log_assembly_phase, log_error_with_context

logger = get_logger(__name__, phase="acorn")

PROJECT_ROOT = Path(__file__).resolve().parents[2]


def default_acorn_path() -> Path:
    """Location of the Acorn binary vendored under ``deps/``."""
    return PROJECT_ROOT / "deps" / "acorn-2.4.0" / "bin" / "acorn"


class AcornRunner:
    """Invokes Acorn and decodes its output."""

    def __init__(
        self,
        acorn_path: Optional[Union[str, Path]] = None,
        flags: Optional[List[str]] = None,
    ):
        """
        Initialize the runner.

        Args:
            acorn_path: Acorn executable (defaults to settings.acorn_path,
                then the vendored copy)
            flags: Command-line flags (defaults to settings.acorn_flags)
        """
        if acorn_path is None:
            acorn_path = settings.acorn_path or default_acorn_path()
        self.acorn_path = Path(acorn_path)
        self.flags = list(flags) if flags is not None else list(settings.acorn_flags)

    async def run(self, file: Union[str, Path]) -> TreeView:
        """
        Parse ``file`` with Acorn.

        Args:
            file: JavaScript source file

        Returns:
            TreeView over Acorn's JSON output

        Raises:
            AcornError: If Acorn cannot be started, exits non-zero, or
                prints something that is not JSON
        """
        command = [str(self.acorn_path), *self.flags, str(file)]
        file_logger = logger.with_context(source_file=str(file))
        log_assembly_phase(file_logger, "acorn", "acorn", "started")

        try:
            process = await asyncio.create_subprocess_exec(
                *command,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            log_error_with_context(file_logger, "Failed to start acorn", e, acorn_path=str(self.acorn_path))
            raise AcornError(f"Failed to start acorn at {self.acorn_path}: {e}") from e

        stdout, stderr = await process.communicate()
        stderr_text = stderr.decode("utf-8", errors="replace")

        if process.returncode != 0:
            file_logger.error(
                f"acorn exited with code {process.returncode}",
                extra={
                    "exit_code": process.returncode,
                    "stdout": stdout.decode("utf-8", errors="replace"),
                    "stderr": stderr_text,
                }
            )
            raise AcornError(
                f"Exited with code: {process.returncode}; {stderr_text}",
                exit_code=process.returncode,
                stderr=stderr_text,
            )

        try:
            view = TreeView.from_json(stdout.decode("utf-8"))
        except (TreeViewError, UnicodeDecodeError) as e:
            raise AcornError(f"acorn produced invalid JSON for {file}: {e}") from e

        log_assembly_phase(file_logger, "acorn", "acorn", "completed")
        return view

    async def parse_file(self, file: Union[str, Path], concurrent: bool = False) -> Program:
        """
        Parse ``file`` with Acorn and assemble the typed Program.

        Args:
            file: JavaScript source file
            concurrent: Use the concurrent assembler

        Returns:
            The typed Program

        Raises:
            AcornError: If Acorn fails
            ParseError: If the output cannot be assembled
        """
        view = await self.run(file)
        if concurrent:
            return await parse_program_concurrently(view, source=str(file))
        return parse_program(view, source=str(file))


async def parse_file(file: Union[str, Path], concurrent: bool = False) -> Program:
    """Parse ``file`` with a default AcornRunner."""
    return await AcornRunner().parse_file(file, concurrent=concurrent)
