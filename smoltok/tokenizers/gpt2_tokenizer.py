"""Implementation of a byte-level BPE tokenizer for GPT-2-style vocabularies."""

from __future__ import annotations

import json
import logging
from os import PathLike
from pathlib import Path
import threading
from typing import Any, Iterable, Mapping, Optional, Sequence, Union
import unicodedata

from smoltok.data.loaders import load_json_file, load_text_file, write_json_file, write_text_file
from smoltok.tokenizers import bpe
from smoltok.tokenizers.byte_map import ByteUnicodeMap
from smoltok.tokenizers.chat_template import Message, format_chat_prompt
from smoltok.tokenizers.errors import MalformedConfigError, MissingFileError, UnresolvedSpecialTokenError
from smoltok.tokenizers.merges import MergeRanks, convert_merge_list_to_merge_ranks, parse_merges, render_merges
from smoltok.tokenizers.special_tokens import SpecialTokenSplitter
from smoltok.tokenizers.split_pattern import Pretokenizer, SplitPattern
from smoltok.tokenizers.vocabulary import TokenizerConfig, Vocabulary


logger = logging.getLogger(__name__)

VOCAB_FILE = "vocab.json"
MERGES_FILE = "merges.txt"
CONFIG_FILE = "tokenizer_config.json"


class GPT2Tokenizer:
    """Byte-level BPE tokenizer driven by a fixed vocabulary and a ranked merge table.

    Encoding runs: NFC normalization -> split around special tokens -> regex pre-tokenization ->
    byte mapping -> BPE merges -> vocabulary lookup. Special tokens skip everything after the split
    and map straight to their id. Decoding reverses the byte mapping and passes special tokens through.

    All tables are built once in the constructor and never change afterwards. A constructed instance
    is always ready to use; construction raises an `InitError` instead of returning a broken instance.
    """

    def __init__(
        self,
        vocab: Mapping[str, int],
        merge_ranks: MergeRanks,
        config: Union[TokenizerConfig, Mapping[str, Any]],
        split_pattern: Optional[str] = None,
    ) -> None:
        """Initialize the tokenizer."""
        if not isinstance(config, TokenizerConfig):
            config = TokenizerConfig.from_dict(config)
        if split_pattern is None:
            split_pattern = SplitPattern.get_pattern(SplitPattern.default_pattern_name())

        self.config = config
        self.split_pattern = split_pattern
        self.vocab = Vocabulary(vocab, added_tokens=config.added_tokens)
        self.special_token_splitter = SpecialTokenSplitter(
            token for token in config.special_tokens if token in self.vocab
        )
        self.pretokenizer = Pretokenizer(split_pattern)
        self.merge_ranks = merge_ranks
        self.bpe = bpe.BpeEngine(merge_ranks)
        self.byte_map = ByteUnicodeMap()

        self.eos_token_id = self._resolve_token("eos_token", config.eos_token)
        self.pad_token_id = self._resolve_token("pad_token", config.pad_token)
        self.unk_token_id = self._resolve_token("unk_token", config.unk_token)

        self.unknown_token_count = 0
        self._stats_lock = threading.Lock()

    @classmethod
    def initialize(
        cls,
        vocab: Any,
        merges: str,
        config: Any,
        split_pattern: Optional[str] = None,
    ) -> GPT2Tokenizer:
        """Build a tokenizer from decoded `vocab.json`, raw `merges.txt` text and decoded config."""
        merge_ranks = convert_merge_list_to_merge_ranks(parse_merges(merges))
        return cls(
            vocab=vocab,
            merge_ranks=merge_ranks,
            config=TokenizerConfig.from_dict(config),
            split_pattern=split_pattern,
        )

    @property
    def vocab_size(self) -> int:
        """The size of the tokenizer vocabulary, including added tokens."""
        return len(self.vocab)

    @property
    def special_tokens(self) -> frozenset[str]:
        """The strings that are matched verbatim and never split."""
        return self.special_token_splitter.special_tokens

    @property
    def eos_token(self) -> str:
        """The end-of-sequence token string."""
        return self.config.eos_token

    @property
    def pad_token(self) -> str:
        """The padding token string."""
        return self.config.pad_token

    @property
    def unk_token(self) -> str:
        """The unknown token string."""
        return self.config.unk_token

    def token_to_id(self, token: str) -> Optional[int]:
        """Look up the id of a token string."""
        return self.vocab.token_to_id(token)

    def id_to_token(self, token: int) -> Optional[str]:
        """Look up the token string of an id."""
        return self.vocab.id_to_token(token)

    ######################################
    # Encoding
    ######################################

    def encode(self, text: str, use_cache: bool = True) -> list[int]:
        """Encode a string into tokens."""
        text = unicodedata.normalize("NFC", text)
        tokens: list[int] = []

        for segment in self.special_token_splitter.split(text):
            # Special tokens bypass pre-tokenization and BPE entirely
            if segment in self.special_token_splitter:
                tokens.append(self.vocab.encoder[segment])
                continue

            for piece_str in self.pretokenizer.split(segment):
                word = self.byte_map.encode_text(piece_str)
                for symbol in self.bpe(word, use_cache=use_cache):
                    token = self.vocab.token_to_id(symbol)
                    if token is None:
                        token = self._on_unknown_symbol(symbol)
                    tokens.append(token)

        return tokens

    def encode_batch(self, texts: Iterable[str], use_cache: bool = True) -> list[list[int]]:
        """Encode several independent strings."""
        return [self.encode(text, use_cache=use_cache) for text in texts]

    def encode_chat(self, messages: Sequence[Message], add_generation_prompt: bool = True) -> list[int]:
        """Encode chat turns rendered with ChatML turn markers."""
        return self.encode(format_chat_prompt(messages, add_generation_prompt=add_generation_prompt))

    ######################################
    # Decoding
    ######################################

    def decode_bytes(self, tokens: Sequence[int]) -> bytes:
        """Decode a list of tokens into bytes.

        Unknown ids are skipped. Special tokens contribute their UTF-8 encoding.
        """
        parts: list[bytes] = []
        for token in tokens:
            token_str = self.vocab.id_to_token(token)
            if token_str is None:
                logger.debug("Skipping unknown token id %r", token)
                continue
            if token_str in self.special_token_splitter:
                parts.append(token_str.encode("utf-8"))
            else:
                parts.append(self.byte_map.decode_text(token_str))
        return b"".join(parts)

    def decode(self, tokens: Sequence[int], errors: str = "replace") -> str:
        """Decode a list of tokens into a string.

        Bytes of consecutive byte-level tokens are joined before UTF-8 decoding, so a character split
        across tokens comes back whole. Unknown ids are skipped.
        """
        parts: list[str] = []
        buffer = bytearray()

        for token in tokens:
            token_str = self.vocab.id_to_token(token)
            if token_str is None:
                logger.debug("Skipping unknown token id %r", token)
                continue
            if token_str in self.special_token_splitter:
                if buffer:
                    parts.append(buffer.decode("utf-8", errors=errors))
                    buffer.clear()
                parts.append(token_str)
            else:
                buffer.extend(self.byte_map.decode_text(token_str))

        if buffer:
            parts.append(buffer.decode("utf-8", errors=errors))

        return "".join(parts)

    def render_token(self, token: int) -> str:
        """Render a single token for display, escaping control characters."""
        token_str = self.vocab.id_to_token(token)
        if token_str is None:
            raise ValueError(f"Unknown token id: {token}")
        if token_str in self.special_token_splitter:
            return token_str
        return bpe.render_bytes(self.byte_map.decode_text(token_str))

    ######################################
    # Persistence to disk
    ######################################

    def save(self, directory: PathLike) -> None:
        """Store all tokenizer artifacts to disk."""
        base_dir = Path(directory)
        base_dir.mkdir(parents=False, exist_ok=True)

        write_json_file(Path(base_dir, VOCAB_FILE), self.vocab.encoder)
        write_text_file(Path(base_dir, MERGES_FILE), render_merges(self.merge_ranks))
        write_json_file(Path(base_dir, CONFIG_FILE), self.config.to_dict())

    @classmethod
    def load(
        cls,
        directory: PathLike,
        split_pattern: Optional[str] = None,
        verbose: bool = False,
    ) -> GPT2Tokenizer:
        """Instantiate a tokenizer from `vocab.json`, `merges.txt` and `tokenizer_config.json`."""
        base_dir = Path(directory)
        if not base_dir.exists() or not base_dir.is_dir():
            raise MissingFileError(f"Tokenizer directory not found: {base_dir}")

        return cls.from_files(
            vocab_file=Path(base_dir, VOCAB_FILE),
            merges_file=Path(base_dir, MERGES_FILE),
            config_file=Path(base_dir, CONFIG_FILE),
            split_pattern=split_pattern,
            verbose=verbose,
        )

    @classmethod
    def from_files(
        cls,
        vocab_file: PathLike,
        merges_file: PathLike,
        config_file: PathLike,
        split_pattern: Optional[str] = None,
        verbose: bool = False,
    ) -> GPT2Tokenizer:
        """Instantiate a tokenizer from the three data files."""
        vocab = cls._load_json(vocab_file)
        merges = cls._load_text(merges_file)
        config = cls._load_json(config_file)

        tokenizer = cls.initialize(vocab=vocab, merges=merges, config=config, split_pattern=split_pattern)

        logger.info(
            "Loaded tokenizer with vocab_size=%d, merges=%d, special_tokens=%d",
            tokenizer.vocab_size,
            len(tokenizer.merge_ranks),
            len(tokenizer.special_tokens),
        )
        if verbose:
            print(
                f"Loaded tokenizer from '{Path(vocab_file).parent}' with "
                f"vocab_size={tokenizer.vocab_size:,} and merges={len(tokenizer.merge_ranks):,}"
            )
        return tokenizer

    ######################################
    # Private Methods
    ######################################

    def _resolve_token(self, field: str, token_str: str) -> int:
        token = self.vocab.token_to_id(token_str)
        if token is None:
            raise UnresolvedSpecialTokenError(field, token_str)
        return token

    def _on_unknown_symbol(self, symbol: str) -> int:
        with self._stats_lock:
            self.unknown_token_count += 1
        logger.warning("%r not found in vocab, using unk token %d", symbol, self.unk_token_id)
        return self.unk_token_id

    @staticmethod
    def _check_file(file: PathLike) -> Path:
        path = Path(file)
        if not path.is_file():
            raise MissingFileError(f"Tokenizer file not found: {path}")
        return path

    @classmethod
    def _load_text(cls, file: PathLike) -> str:
        path = cls._check_file(file)
        try:
            return load_text_file(path)
        except UnicodeDecodeError as e:
            raise MalformedConfigError(f"{path} is not valid UTF-8") from e

    @classmethod
    def _load_json(cls, file: PathLike) -> Any:
        path = cls._check_file(file)
        try:
            return load_json_file(path)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise MalformedConfigError(f"{path} is not valid JSON: {e}") from e
