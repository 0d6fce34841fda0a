"""
Concurrent AST assembler.

Fans out one asyncio task per top-level Program statement and fans the
results back in through a completion queue. Each task runs ``parse_node`` in
a worker thread, so a statement's own subtree is still built depth first and
synchronously. The body is rebuilt by original index, so the result equals
what ``parse_program`` returns for the same input.
"""

import asyncio
from typing import List, Optional, Tuple

from jstree.config import settings
from jstree.models.error import AssemblyTimeout, MalformedNode, NestingTooDeep
from jstree.models.node import AnyNode, Program
from jstree.services.assembler import (
    check_program_kind,
    count_nodes,
    parse_node,
    read_position,
)
from jstree.services.tree_view import TreeView, TreeViewError
from jstree.utils.logging import get_logger, log_assembly_phase, log_error_with_context
from jstree.utils.metrics import track_assembly

logger = get_logger(__name__, mode="concurrent")

# (index, node, error); exactly one of node/error is set
Completion = Tuple[int, Optional[AnyNode], Optional[BaseException]]


class ConcurrentAssembler:
    """Order-preserving fan-out/fan-in assembler for wide programs."""

    def __init__(self, max_workers: Optional[int] = None, timeout: Optional[float] = None):
        """
        Initialize the assembler.

        Args:
            max_workers: Maximum statements assembled at once
                (defaults to settings.max_workers)
            timeout: Deadline in seconds for the whole body
                (defaults to settings.assembly_timeout_seconds; None waits forever)
        """
        self.max_workers = max_workers or settings.max_workers
        self.timeout = timeout if timeout is not None else settings.assembly_timeout_seconds

    async def assemble(self, view: TreeView, source: Optional[str] = None) -> Program:
        """
        Assemble a Program, building its top-level statements concurrently.

        Args:
            view: View over the Acorn output root
            source: Source file name, used only for logging and metrics

        Returns:
            The typed Program

        Raises:
            UnexpectedKind: If the root is not a Program
            AssemblyTimeout: If the deadline passes before every statement is built
            ParseError: The first error reported by any statement
        """
        check_program_kind(view)
        position = read_position(view, "Program")

        body_view = view.get("body")
        if body_view is None:
            raise MalformedNode("Program", "body", "missing")
        try:
            elements = body_view.as_array()
        except TreeViewError as e:
            raise MalformedNode("Program", "body", str(e)) from e

        log_assembly_phase(
            logger, "concurrent", "assemble", "started",
            source_file=source, statements=len(elements),
        )

        with track_assembly("concurrent", source) as metrics:
            try:
                body = await self._collect(elements) if elements else ()
            except Exception as e:
                log_error_with_context(
                    logger, "Concurrent assembly aborted", e, source_file=source
                )
                raise

            program = Program(position=position, body=body)
            metrics.record_statements(len(body))
            count_nodes(program, metrics)

        log_assembly_phase(logger, "concurrent", "assemble", "completed", source_file=source)
        return program

    async def _collect(self, elements: List[TreeView]) -> Tuple[AnyNode, ...]:
        queue: asyncio.Queue = asyncio.Queue()
        semaphore = asyncio.Semaphore(self.max_workers)

        tasks = [
            asyncio.create_task(self._assemble_statement(index, element, queue, semaphore))
            for index, element in enumerate(elements)
        ]

        try:
            if self.timeout is None:
                return await self._drain(queue, len(tasks))
            try:
                return await asyncio.wait_for(
                    self._drain(queue, len(tasks)),
                    timeout=self.timeout
                )
            except asyncio.TimeoutError:
                raise AssemblyTimeout(self.timeout) from None
        finally:
            # On error or timeout the remaining statements are abandoned
            for task in tasks:
                if not task.done():
                    task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)

    async def _drain(self, queue: asyncio.Queue, total: int) -> Tuple[AnyNode, ...]:
        """Receive exactly ``total`` completions and order them by index."""
        results: List[Optional[AnyNode]] = [None] * total
        received = 0

        while received < total:
            index, node, error = await queue.get()
            if error is not None:
                # First error wins
                raise error
            results[index] = node
            received += 1

        return tuple(results)

    async def _assemble_statement(
        self,
        index: int,
        element: TreeView,
        queue: asyncio.Queue,
        semaphore: asyncio.Semaphore,
    ) -> None:
        async with semaphore:
            try:
                node = await asyncio.to_thread(_parse_statement, element)
            except Exception as e:
                completion: Completion = (index, None, e)
            else:
                completion = (index, node, None)
        await queue.put(completion)


def _parse_statement(element: TreeView) -> AnyNode:
    try:
        return parse_node(element)
    except RecursionError:
        raise NestingTooDeep(element.kind) from None


async def parse_program_concurrently(
    view: TreeView,
    timeout: Optional[float] = None,
    max_workers: Optional[int] = None,
    source: Optional[str] = None,
) -> Program:
    """
    Assemble a Program with its top-level statements built concurrently.

    See ConcurrentAssembler.assemble.
    """
    assembler = ConcurrentAssembler(max_workers=max_workers, timeout=timeout)
    return await assembler.assemble(view, source=source)
