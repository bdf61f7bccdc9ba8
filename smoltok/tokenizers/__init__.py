"""Byte-level BPE tokenization for GPT-2-style vocabularies."""

from .byte_map import ByteUnicodeMap
from .chat_template import format_chat_prompt
from .errors import InitError, MalformedConfigError, MissingFileError, TokenizerError, UnresolvedSpecialTokenError
from .gpt2_tokenizer import GPT2Tokenizer
from .special_tokens import SpecialTokenSplitter
from .split_pattern import Pretokenizer, SplitPattern
from .vocabulary import AddedToken, TokenizerConfig, Vocabulary
