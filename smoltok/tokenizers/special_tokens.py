"""Splitting of raw text around verbatim occurrences of special tokens."""

from typing import Iterable

import regex


_MATCH_NOTHING = r"(?!)"


class SpecialTokenSplitter:
    """Splits text so that special tokens appear as whole, separate segments.

    Special tokens are matched as literal substrings. Longer tokens are tried first so that a token
    which is a prefix of another never shadows it.
    """

    def __init__(self, special_tokens: Iterable[str]) -> None:
        """Initialize the splitter."""
        self.special_tokens = frozenset(special_tokens)
        if self.special_tokens:
            ordered = sorted(self.special_tokens, key=lambda token: (-len(token), token))
            alternation = "|".join(regex.escape(token) for token in ordered)
            self.pattern = regex.compile(f"({alternation})")
        else:
            self.pattern = regex.compile(_MATCH_NOTHING)

    def __contains__(self, token: object) -> bool:
        return token in self.special_tokens

    def split(self, text: str) -> list[str]:
        """Split text into segments, dropping empty ones.

        Each segment is either exactly one special token or text containing none.
        """
        return [segment for segment in self.pattern.split(text) if segment]
