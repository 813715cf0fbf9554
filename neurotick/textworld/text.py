"""Tokenizing text and counting word co-occurrences."""

import re

import numpy as np

STOP_WORDS = frozenset("""
a about above after again against all am an and any are as at be because
been before being below between both but by can could did do does doing
down during each few for from further had has have having he her here hers
him his how i if in into is it its itself just me more most my no nor not
now of off on once only or other our ours out over own same she should so
some such than that the their them then there these they this those through
to too under until up very was we were what when where which while who whom
why will with you your yours
""".split())

_WORD = re.compile(r"[\w']+")


def tokenize(text, remove_stop_words=False):
    """Lowercase word tokens of text, punctuation removed."""
    tokens = _WORD.findall(text.lower())
    if remove_stop_words:
        tokens = [t for t in tokens if t not in STOP_WORDS]
    return tokens


def unique_tokens(tokens):
    """Distinct tokens in order of first appearance."""
    return list(dict.fromkeys(tokens))


def cooccurrence_counts(tokens, vocabulary, window_size=5, bidirectional=True):
    """Count how often each vocabulary word appears near each other one.

    Row i counts the words found within ``window_size`` tokens after each
    occurrence of vocabulary[i] (and before it, if bidirectional).

    Returns
    -------
    np.ndarray
        Shape (len(vocabulary), len(vocabulary)).
    """
    index = {token: i for i, token in enumerate(vocabulary)}
    counts = np.zeros((len(vocabulary), len(vocabulary)), dtype=np.float64)
    n = len(tokens)
    for i, token in enumerate(tokens):
        row = index[token]
        for j in range(i + 1, min(i + window_size, n - 1) + 1):
            counts[row, index[tokens[j]]] += 1
        if bidirectional:
            for j in range(max(0, i - window_size), i):
                counts[row, index[tokens[j]]] += 1
    return counts


def ppmi(counts):
    """Positive pointwise mutual information of a co-occurrence matrix.

        PPMI(w, c) = max(0, log(P(w, c) / (P(w) P(c))))
    """
    total = counts.sum()
    if total == 0:
        return np.zeros_like(counts)
    rows = counts.sum(axis=1, keepdims=True)
    cols = counts.sum(axis=0, keepdims=True)
    with np.errstate(divide="ignore", invalid="ignore"):
        pmi = np.log(counts * total / (rows * cols))
    return np.where(np.isfinite(pmi) & (pmi > 0), pmi, 0.0)


def normalize_rows(matrix):
    """Scale each row to unit length; zero rows stay zero."""
    norms = np.linalg.norm(matrix, axis=1, keepdims=True)
    return np.divide(matrix, norms, out=np.zeros_like(matrix), where=norms > 0)
