"""smoltok: a byte-level BPE tokenizer for GPT-2-style vocabularies."""

__version__ = "0.1.0"
