"""Token embeddings: string tokens associated with vectors.

Lookup from token to vector is a dictionary access. The reverse mapping,
from an arbitrary vector back to the nearest token, uses a k-d tree over
the embedding rows.
"""

from dataclasses import dataclass
from enum import Enum

import numpy as np
import pandas as pd
from scipy.spatial import cKDTree

from neurotick.errors import ShapeMismatchError
from neurotick.params import Parameter
from neurotick.textworld.text import (
    cooccurrence_counts,
    normalize_rows,
    ppmi,
    tokenize,
    unique_tokens,
)
from neurotick.utils import get_logger

LOG = get_logger("textworld.embedding")


class EmbeddingType(Enum):
    ONE_HOT = "one_hot"
    COC = "coc"
    CUSTOM = "custom"


class TokenEmbedding:
    """Associates string tokens with vector representations.

    Parameters
    ----------
    tokens : list of str
        Token i labels row i of the matrix. Matching is case-insensitive.
    token_vector_matrix : array-like
        Matrix whose rows are the vectors of the corresponding tokens.
    embedding_type : EmbeddingType
        How the matrix was produced.

    Raises
    ------
    ShapeMismatchError
        If the number of tokens differs from the number of matrix rows.
    """

    def __init__(self, tokens, token_vector_matrix,
                 embedding_type=EmbeddingType.CUSTOM):
        matrix = np.array(token_vector_matrix, dtype=np.float64)
        if matrix.ndim != 2 or len(tokens) != matrix.shape[0]:
            raise ShapeMismatchError(
                "token list must be same length as token vector matrix has "
                f"rows: {len(tokens)} tokens, matrix shape {matrix.shape}")

        self.tokens = list(tokens)
        self.token_vector_matrix = matrix
        self.embedding_type = embedding_type
        self.tokens_map = {t.lower(): i for i, t in enumerate(self.tokens)}

        # Rows of the tree, in tokens_map order. An empty embedding has no tree.
        self._labels = list(self.tokens_map.keys())
        rows = [self.tokens_map[t] for t in self._labels]
        self._tree = cKDTree(np.nan_to_num(matrix[rows])) if rows else None

    @property
    def size(self):
        """Number of distinct tokens."""
        return len(self.tokens_map)

    @property
    def dimension(self):
        """Number of components of each token vector."""
        return self.token_vector_matrix.shape[1]

    def get(self, token):
        """Vector of the token, or a zero vector if it is unknown."""
        index = self.tokens_map.get(token.lower())
        if index is None:
            return np.zeros(self.dimension)
        return self.token_vector_matrix[index].copy()

    def __contains__(self, token):
        return token.lower() in self.tokens_map

    def closest_word(self, vector):
        """Token whose vector is nearest (Euclidean) to the given one.

        Returns None if the embedding holds no tokens.
        """
        vector = np.asarray(vector, dtype=np.float64)
        if vector.shape != (self.dimension,):
            raise ShapeMismatchError(
                f"vector must have shape ({self.dimension},), got {vector.shape}")
        if self._tree is None:
            return None
        _, index = self._tree.query(vector)
        return self._labels[index]

    def to_frame(self):
        """Embedding as a DataFrame with one row per token.

        NaN entries are shown as 0. For one-hot and co-occurrence
        embeddings the columns are labelled by token as well.
        """
        index = [t.lower() for t in self.tokens]
        frame = pd.DataFrame(np.nan_to_num(self.token_vector_matrix), index=index)
        if self.embedding_type in (EmbeddingType.COC, EmbeddingType.ONE_HOT):
            frame.columns = index
        return frame

    def __repr__(self):
        return (f"TokenEmbedding({self.embedding_type.name}, "
                f"size={self.size}, dimension={self.dimension})")


@dataclass
class TokenEmbeddingBuilder:
    """Build a TokenEmbedding from a document.

    Parameters
    ----------
    embedding_type : EmbeddingType
        ONE_HOT gives each distinct token its own unit vector. COC uses
        word co-occurrence counts. CUSTOM embeddings cannot be built.
    window_size : int
        Co-occurrence window, in tokens.
    bidirectional : bool
        Count words before as well as after each token.
    use_ppmi : bool
        Replace raw counts with positive pointwise mutual information.
    use_cosine : bool
        Scale vectors to unit length, so nearest-token lookup ranks by
        cosine similarity.
    remove_stop_words : bool
        Drop common function words before counting.
    """
    embedding_type: EmbeddingType = EmbeddingType.COC
    window_size: int = 5
    bidirectional: bool = True
    use_ppmi: bool = True
    use_cosine: bool = True
    remove_stop_words: bool = False

    PARAMETERS = (
        Parameter("window_size", "Window size", minimum=1, increment=1,
                  order=20),
    )

    def build(self, text):
        """Extract a token embedding from the provided string."""
        if self.embedding_type is EmbeddingType.ONE_HOT:
            tokens = unique_tokens(tokenize(text, self.remove_stop_words))
            embedding = TokenEmbedding(tokens, np.eye(len(tokens)),
                                       EmbeddingType.ONE_HOT)
        elif self.embedding_type is EmbeddingType.COC:
            embedding = self._cooccurrence_embedding(text)
        else:
            raise ValueError("Custom embeddings must be manually loaded")
        LOG.info("Built %s embedding: %d tokens, dimension %d",
                 self.embedding_type.name, embedding.size, embedding.dimension)
        return embedding

    def _cooccurrence_embedding(self, text):
        tokens = tokenize(text, self.remove_stop_words)
        vocabulary = unique_tokens(tokens)
        matrix = cooccurrence_counts(tokens, vocabulary, self.window_size,
                                     self.bidirectional)
        if self.use_ppmi:
            matrix = ppmi(matrix)
        if self.use_cosine:
            matrix = normalize_rows(matrix)
        return TokenEmbedding(vocabulary, matrix, EmbeddingType.COC)
