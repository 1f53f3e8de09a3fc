"""
Line Reader Module

Reads one line of raw input from the interactive stream.

Author: YSNRFD
Version: 1.0.0
"""

import sys
from typing import Optional, TextIO, List

from ush.exceptions import OutOfMemoryError
from ush.logger import get_logger


LINE_BUFSIZE = 1024
LINE_TERMINATOR = '\n'


class LineReader:
    """
    Reads input one character at a time.

    The character buffer starts with ``bufsize`` slots and grows by
    ``bufsize`` more each time it fills up.

    Example:
        >>> reader = LineReader(io.StringIO("ls -la\\n"))
        >>> reader.read_line()
        'ls -la'
        >>> reader.read_line() is None
        True
    """

    def __init__(self, stream: Optional[TextIO] = None, bufsize: int = LINE_BUFSIZE):
        if bufsize <= 0:
            raise ValueError(f"bufsize must be positive, got {bufsize}")
        self._stream = stream if stream is not None else sys.stdin
        self._keep_undecodable_bytes(self._stream)
        self._bufsize = bufsize
        self._eof = False
        self._logger = get_logger('reader')

    @property
    def at_eof(self) -> bool:
        return self._eof

    def read_line(self) -> Optional[str]:
        """
        Read the next line.

        Returns:
            The line without its terminator, or None at end of input when
            no characters were read. A partial line before end of input
            is returned as is; the following call returns None.

        Raises:
            OutOfMemoryError: If the line cannot be held in memory
        """
        if self._eof:
            return None

        bufsize = self._bufsize
        buffer = self._allocate(bufsize)
        position = 0

        try:
            while True:
                c = self._stream.read(1)

                if not c:
                    self._eof = True
                    if position == 0:
                        self._logger.debug("End of input")
                        return None
                    return ''.join(buffer[:position])

                if c == LINE_TERMINATOR:
                    return ''.join(buffer[:position])

                buffer[position] = c
                position += 1

                if position >= bufsize:
                    bufsize += self._bufsize
                    buffer = self._grow(buffer, bufsize)
        except MemoryError:
            raise OutOfMemoryError(requested=bufsize, buffer='line') from None

    @staticmethod
    def _keep_undecodable_bytes(stream: TextIO) -> None:
        # Invalid bytes become lone surrogates; os.execvp encodes them back
        reconfigure = getattr(stream, 'reconfigure', None)
        if reconfigure is not None and getattr(stream, 'errors', None) == 'strict':
            reconfigure(errors='surrogateescape')

    def _allocate(self, size: int) -> List[str]:
        try:
            return [''] * size
        except MemoryError:
            raise OutOfMemoryError(requested=size, buffer='line') from None

    def _grow(self, buffer: List[str], size: int) -> List[str]:
        try:
            buffer.extend([''] * (size - len(buffer)))
        except MemoryError:
            raise OutOfMemoryError(requested=size, buffer='line') from None
        self._logger.debug("Line buffer grown", context={'size': size})
        return buffer
