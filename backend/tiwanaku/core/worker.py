"""Run board generation in a separate process that the caller can abandon.

The generator never checks for cancellation; cancelling a handle terminates
its process. Each dispatch owns its process, so callers can keep several
generations in flight (e.g. to pre-warm boards) without shared state.
"""
import logging
import multiprocessing
import random
from typing import Optional, Union

from ..models.board import SerializedBoard
from ..models.cell import BoardSize
from .exceptions import GenerationCancelled, GenerationError
from .generator import generate_board

logger = logging.getLogger(__name__)

_context = multiprocessing.get_context("spawn")


def _run_generation(connection, size: str, seed: Optional[int]) -> None:
    """Child process entry point: generate one board and send it back."""
    try:
        rng = random.Random(seed) if seed is not None else None
        connection.send(("ok", generate_board(size, rng)))
    except Exception as e:
        connection.send(("error", f"{type(e).__name__}: {e}"))
    finally:
        connection.close()


class GenerationHandle:
    """Caller-owned handle on a board generation running in another process."""

    def __init__(self, size: BoardSize, process, connection):
        self.size = size
        self._process = process
        self._connection = connection
        self._board: Optional[SerializedBoard] = None
        self._error: Optional[str] = None
        self._cancelled = False

    def __enter__(self) -> "GenerationHandle":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if not self.done():
            self.cancel()

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def done(self) -> bool:
        """True once a board or an error is available, or the handle was cancelled."""
        if self._cancelled or self._board is not None or self._error is not None:
            return True
        return self._connection.poll()

    def result(self, timeout: Optional[float] = None) -> SerializedBoard:
        """
        Wait for the generated board.

        Args:
            timeout: Seconds to wait, or None to wait indefinitely.

        Returns:
            The serialized board.

        Raises:
            TimeoutError: If the board is not ready within the timeout.
            GenerationCancelled: If the handle was cancelled.
            GenerationError: If generation failed in the worker process.
        """
        if self._cancelled:
            raise GenerationCancelled(f"Generation of a {self.size.value} board was cancelled")
        if self._board is None and self._error is None:
            if not self._connection.poll(timeout):
                raise TimeoutError(f"Board not ready after {timeout} seconds")
            try:
                status, payload = self._connection.recv()
            except EOFError:
                status, payload = "error", "worker process exited without a result"
            self._connection.close()
            self._process.join()
            if status == "ok":
                self._board = payload
            else:
                self._error = payload
        if self._error is not None:
            raise GenerationError(f"Board generation failed: {self._error}")
        return self._board

    def cancel(self) -> bool:
        """
        Abandon the generation by terminating its process.

        Returns:
            False if a result was already collected, True otherwise.
        """
        if self._board is not None or self._error is not None:
            return False
        if not self._cancelled:
            self._process.terminate()
            self._process.join()
            self._connection.close()
            self._cancelled = True
            logger.info("Board generation (%s) cancelled", self.size.value)
        return True


def dispatch_generation(size: Union[BoardSize, str], seed: Optional[int] = None) -> GenerationHandle:
    """
    Start generating a board in a new process.

    Raises:
        ValueError: If the size is unknown.
    """
    board_size = BoardSize(size)
    parent_connection, child_connection = _context.Pipe(duplex=False)
    process = _context.Process(
        target=_run_generation,
        args=(child_connection, board_size.value, seed),
        daemon=True,
    )
    process.start()
    child_connection.close()
    return GenerationHandle(board_size, process, parent_connection)
