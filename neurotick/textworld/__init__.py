"""textworld — Token embeddings built from text."""

from .embedding import EmbeddingType, TokenEmbedding, TokenEmbeddingBuilder
from .text import tokenize, unique_tokens, cooccurrence_counts, ppmi
