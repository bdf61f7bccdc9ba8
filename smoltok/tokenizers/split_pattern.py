"""Registry of pre-tokenization split patterns, and the splitter that applies them."""

import regex


class SplitPattern:
    """Registry of available split patterns for the GPT2Tokenizer.

    Every pattern is an alternation tried left to right at each position, so the first matching
    alternative wins and the matches tile the input with no gaps.
    """

    _PATTERNS = {
        "byte-level": r"""(?i:'s|'t|'re|'ve|'m|'ll|'d)|[^\r\n\p{L}\p{N}]?\p{L}+|\p{N}+| ?[^\s\p{L}\p{N}]+[\r\n]*|\s*[\r\n]+|\s+(?!\S)|\s+""",  # noqa: E501
        "byte-level-single-digit": r"""(?i:'s|'t|'re|'ve|'m|'ll|'d)|[^\r\n\p{L}\p{N}]?\p{L}+|\p{N}| ?[^\s\p{L}\p{N}]+[\r\n]*|\s*[\r\n]+|\s+(?!\S)|\s+""",  # noqa: E501
        "gpt-2": r"""'(?:[sdmt]|ll|ve|re)| ?\p{L}+| ?\p{N}+| ?[^\s\p{L}\p{N}]+|\s+(?!\S)|\s+""",
        "gpt-4": r"""'(?i:[sdmt]|ll|ve|re)|[^\r\n\p{L}\p{N}]?+\p{L}+|\p{N}{1,3}| ?[^\s\p{L}\p{N}]++[\r\n]*|\s*[\r\n]|\s+(?!\S)|\s+""",  # noqa: E501
    }

    @classmethod
    def default_pattern_name(cls) -> str:
        """Get the default split pattern name."""
        return "byte-level"

    @classmethod
    def all_pattern_names(cls) -> list[str]:
        """Get all valid split pattern names."""
        return list(cls._PATTERNS.keys())

    @classmethod
    def get_pattern(cls, pattern_name: str) -> str:
        """Get the split pattern of the given name."""
        if pattern_name not in cls._PATTERNS:
            raise ValueError(f"Unrecognized pattern: '{pattern_name}'")
        return cls._PATTERNS[pattern_name]


class Pretokenizer:
    """Splits text into the chunks that BPE is applied to independently."""

    def __init__(self, split_pattern: str) -> None:
        """Initialize the pretokenizer."""
        self.split_pattern = split_pattern
        self.pattern = regex.compile(split_pattern)

    def split(self, text: str) -> list[str]:
        """Split text into an ordered, gap-free list of chunks."""
        return [match.group() for match in self.pattern.finditer(text, concurrent=False)]
