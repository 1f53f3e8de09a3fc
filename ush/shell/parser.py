"""
Command Parser Module

Splits an input line into word tokens.

A token is a maximal run of non-delimiter characters. There is no
quoting, no escaping and no variable expansion.

Author: YSNRFD
Version: 1.0.0
"""

from typing import List, Optional

from ush.exceptions import OutOfMemoryError
from ush.logger import get_logger


TOKEN_BUFSIZE = 64
TOKEN_DELIMITERS = " \t\r\n\a"


class CommandParser:
    """
    Splits command lines into tokens.

    Token storage starts with ``bufsize`` slots and grows by ``bufsize``
    more each time it fills up.

    Example:
        >>> parser = CommandParser()
        >>> parser.split("  ls\\t-la  ")
        ['ls', '-la']
    """

    def __init__(self, delimiters: str = TOKEN_DELIMITERS, bufsize: int = TOKEN_BUFSIZE):
        if bufsize <= 0:
            raise ValueError(f"bufsize must be positive, got {bufsize}")
        self._delimiters = frozenset(delimiters)
        self._bufsize = bufsize
        self._logger = get_logger('parser')

    @property
    def delimiters(self) -> frozenset:
        return self._delimiters

    def split(self, line: str) -> List[str]:
        """
        Split a line into tokens.

        Args:
            line: Input line

        Returns:
            Tokens in order; empty when the line holds only delimiters

        Raises:
            OutOfMemoryError: If the tokens cannot be held in memory
        """
        bufsize = self._bufsize
        tokens = self._allocate(bufsize)
        position = 0
        current = []

        try:
            for char in line:
                if char not in self._delimiters:
                    current.append(char)
                    continue

                if not current:
                    continue

                tokens[position] = ''.join(current)
                current = []
                position += 1

                if position >= bufsize:
                    bufsize += self._bufsize
                    self._grow(tokens, bufsize)

            # Don't forget last token
            if current:
                tokens[position] = ''.join(current)
                position += 1
        except OutOfMemoryError:
            tokens.clear()
            raise
        except MemoryError:
            tokens.clear()
            raise OutOfMemoryError(requested=bufsize, buffer='token') from None

        return tokens[:position]

    def _allocate(self, size: int) -> List[Optional[str]]:
        try:
            return [None] * size
        except MemoryError:
            raise OutOfMemoryError(requested=size, buffer='token') from None

    def _grow(self, tokens: List[Optional[str]], size: int) -> None:
        try:
            tokens.extend([None] * (size - len(tokens)))
        except MemoryError:
            raise OutOfMemoryError(requested=size, buffer='token') from None
        self._logger.debug("Token buffer grown", context={'size': size})


def split_line(line: str) -> List[str]:
    """Split a line with the default delimiter set."""
    return CommandParser().split(line)
