"""Token vocabulary and tokenizer configuration."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Optional

from smoltok.tokenizers.errors import MalformedConfigError


Encoder = dict[str, int]
Decoder = dict[int, str]


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass(frozen=True)
class AddedToken:
    """A token declared in `added_tokens_decoder`, outside of the base vocabulary."""

    id: int
    content: str
    special: bool = False

    @classmethod
    def from_dict(cls, token_id: str, definition: Any) -> AddedToken:
        """Parse one `added_tokens_decoder` entry, keyed by its string-encoded id."""
        try:
            parsed_id = int(token_id)
        except ValueError:
            raise MalformedConfigError(f"Added token id {token_id!r} is not an integer") from None
        if not isinstance(definition, Mapping):
            raise MalformedConfigError(f"Added token {token_id} must be an object")
        content = definition.get("content")
        if not isinstance(content, str) or not content:
            raise MalformedConfigError(f"Added token {token_id} has no `content`")
        return cls(id=parsed_id, content=content, special=bool(definition.get("special", False)))

    def to_dict(self) -> dict[str, Any]:
        """Serialize as an `added_tokens_decoder` value."""
        return {"content": self.content, "special": self.special}


def _parse_token_field(config: Mapping[str, Any], name: str) -> str:
    value = config.get(name)
    if isinstance(value, Mapping):  # serialized AddedToken
        value = value.get("content")
    if not isinstance(value, str) or not value:
        raise MalformedConfigError(f"Tokenizer config is missing `{name}`")
    return value


@dataclass(frozen=True)
class TokenizerConfig:
    """The fields of `tokenizer_config.json` this tokenizer understands."""

    eos_token: str
    pad_token: str
    unk_token: str
    added_tokens: tuple[AddedToken, ...] = field(default_factory=tuple)

    @classmethod
    def from_dict(cls, config: Any) -> TokenizerConfig:
        """Parse a decoded `tokenizer_config.json` object."""
        if not isinstance(config, Mapping):
            raise MalformedConfigError("Tokenizer config must be a JSON object")

        added_tokens_decoder = config.get("added_tokens_decoder")
        if added_tokens_decoder is None:
            added_tokens_decoder = {}
        if not isinstance(added_tokens_decoder, Mapping):
            raise MalformedConfigError("`added_tokens_decoder` must be a JSON object")
        added_tokens = tuple(
            AddedToken.from_dict(token_id, definition) for token_id, definition in added_tokens_decoder.items()
        )

        return cls(
            eos_token=_parse_token_field(config, "eos_token"),
            pad_token=_parse_token_field(config, "pad_token"),
            unk_token=_parse_token_field(config, "unk_token"),
            added_tokens=added_tokens,
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize in the `tokenizer_config.json` layout."""
        return {
            "added_tokens_decoder": {str(token.id): token.to_dict() for token in self.added_tokens},
            "eos_token": self.eos_token,
            "pad_token": self.pad_token,
            "unk_token": self.unk_token,
        }

    @property
    def special_tokens(self) -> frozenset[str]:
        """The content strings of all added tokens flagged as special."""
        return frozenset(token.content for token in self.added_tokens if token.special)


class Vocabulary:
    """Bidirectional mapping between token strings and token ids.

    The base table comes from `vocab.json`. Added tokens are merged in afterwards by content string,
    replacing any base entry with the same string or the same id, so both directions stay one-to-one.
    """

    def __init__(
        self,
        encoder: Mapping[str, int],
        added_tokens: Iterable[AddedToken] = (),
    ) -> None:
        """Initialize the vocabulary."""
        if not isinstance(encoder, Mapping):
            raise MalformedConfigError("Vocabulary must be a JSON object of token -> id")

        self.encoder: Encoder = {}
        self.decoder: Decoder = {}

        for token, token_id in encoder.items():
            if not isinstance(token, str) or not _is_int(token_id):
                raise MalformedConfigError(f"Invalid vocabulary entry: {token!r} -> {token_id!r}")
            if token_id in self.decoder:
                raise MalformedConfigError(
                    f"Duplicate vocabulary id {token_id}: {self.decoder[token_id]!r} and {token!r}"
                )
            self.encoder[token] = token_id
            self.decoder[token_id] = token

        for added_token in added_tokens:
            self._add(added_token.content, added_token.id)

    def __len__(self) -> int:
        return len(self.encoder)

    def __contains__(self, token: object) -> bool:
        return token in self.encoder

    def token_to_id(self, token: str) -> Optional[int]:
        """Look up the id of a token string."""
        return self.encoder.get(token)

    def id_to_token(self, token_id: int) -> Optional[str]:
        """Look up the token string of an id."""
        return self.decoder.get(token_id)

    def _add(self, token: str, token_id: int) -> None:
        old_id = self.encoder.get(token)
        if old_id is not None and old_id != token_id:
            del self.decoder[old_id]

        old_token = self.decoder.get(token_id)
        if old_token is not None and old_token != token:
            del self.encoder[old_token]

        self.encoder[token] = token_id
        self.decoder[token_id] = token
