"""Errors raised while constructing a tokenizer."""


class TokenizerError(Exception):
    """Base class for all tokenizer errors."""


class InitError(TokenizerError):
    """The tokenizer could not be initialized from its data files.

    A tokenizer is never returned to the caller when this is raised.
    """


class MissingFileError(InitError, FileNotFoundError):
    """A required vocabulary, merges or configuration file does not exist."""


class MalformedConfigError(InitError, ValueError):
    """A data file exists but its contents could not be parsed."""


class UnresolvedSpecialTokenError(InitError, LookupError):
    """A configured eos/pad/unk token string is absent from the vocabulary."""

    def __init__(self, field: str, token: str) -> None:
        """Initialize the error."""
        super().__init__(f"`{field}`={token!r} is not in the vocabulary")
        self.field = field
        self.token = token
