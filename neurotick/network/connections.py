"""Sparse connection strategy.

A ``Sparse`` connector draws, for every source unit, a random ordering of
its allowed targets. The first ``counts[i]`` targets in source i's
ordering are connected. Changing the density later only moves these
cut-off points, so existing connections survive an increase and the
most recently added ones are the first to go on a decrease.

Two counting schemes:

    equalize_efferents=True   every source gets int(density * n_allowed)
    equalize_efferents=False  each source draws Binomial(n_allowed, density)

where n_allowed is the number of targets excluding the source itself when
the connection is recurrent and self connections are not allowed.

The strategy connects lists of neurons with loose synapses
(``connect_neurons``) or two layers with a masked weight matrix
(``connect_layers``).
"""

from dataclasses import dataclass
from typing import Optional

import numpy as np

from neurotick.network.models import Synapse, WeightMatrix
from neurotick.params import Parameter
from neurotick.stats import random_state
from neurotick.utils import get_logger

LOG = get_logger("network.connections")


@dataclass
class Sparse:
    """Connect a random fraction of the possible source/target pairs.

    Parameters
    ----------
    connection_density : float
        Fraction of the allowed connections that are made, on [0, 1].
    allow_self_connection : bool
        Whether a unit may connect to itself when source and target are the
        same population.
    equalize_efferents : bool
        Give every source exactly the same number of efferents.
    seed : int, optional
        Seed of this connector's generator. Any 64-bit integer.
    """
    connection_density: float = 0.1
    allow_self_connection: bool = False
    equalize_efferents: bool = False
    seed: Optional[int] = None

    PARAMETERS = (
        Parameter("connection_density", "Density",
                  "Fraction of possible connections that are made.",
                  minimum=0.0, maximum=1.0, increment=0.05, order=1),
    )
    name = "Sparse"

    def __post_init__(self):
        self._rng = random_state(self.seed)
        self._ordering = None
        self._counts = None
        self._shape = None
        self._recurrent = False
        self._sources = None
        self._targets = None
        self._synapses = None
        self._network = None
        self._weight_matrix = None
        self._randomizer = None

    # ------------------------------------------------------------------
    # Connection pattern
    # ------------------------------------------------------------------

    def generate(self, n_source, n_target, recurrent=False):
        """Draw target orderings and efferent counts for every source.

        Parameters
        ----------
        n_source, n_target : int
            Population sizes.
        recurrent : bool
            True if source and target are the same population. Requires
            n_source == n_target.

        Returns
        -------
        np.ndarray
            Boolean mask of shape (n_target, n_source); see ``mask``.
        """
        if recurrent and n_source != n_target:
            raise ValueError(
                f"recurrent populations must have equal sizes, "
                f"got {n_source} sources and {n_target} targets")
        self._shape = (n_source, n_target)
        self._recurrent = recurrent
        self._ordering = [self._rng.permutation(self._allowed_targets(i))
                          for i in range(n_source)]
        if self.equalize_efferents:
            self._counts = np.full(n_source,
                                   int(self.connection_density * self.n_allowed),
                                   dtype=int)
        else:
            self._counts = self._rng.binomial(self.n_allowed,
                                              self.connection_density,
                                              size=n_source)
        return self.mask()

    def _allowed_targets(self, source_index):
        targets = np.arange(self._shape[1])
        if self._recurrent and not self.allow_self_connection:
            targets = targets[targets != source_index]
        return targets

    @property
    def n_allowed(self):
        """Number of targets each source may connect to."""
        if self._recurrent and not self.allow_self_connection:
            return self._shape[1] - 1
        return self._shape[1]

    @property
    def max_possible_connections(self):
        return self._shape[0] * self.n_allowed

    @property
    def n_connections(self):
        return int(self._counts.sum())

    @property
    def efferent_counts(self):
        """Number of targets connected from each source."""
        return self._counts.copy()

    def pairs(self):
        """Connected (source index, target index) pairs, in source order."""
        return [(i, int(j))
                for i, order in enumerate(self._ordering)
                for j in order[:self._counts[i]]]

    def mask(self):
        """Boolean (target x source) matrix of the current connections."""
        mask = np.zeros((self._shape[1], self._shape[0]), dtype=bool)
        for i, j in self.pairs():
            mask[j, i] = True
        return mask

    # ------------------------------------------------------------------
    # Changing the density
    # ------------------------------------------------------------------

    def set_connection_density(self, density):
        """Change the density, adding or removing connections if generated.

        Returns
        -------
        tuple of list
            (added, removed) pairs of (source index, target index).
        """
        if self._ordering is None or density == self.connection_density:
            self.connection_density = density
            return [], []
        if density > self.connection_density:
            return self.add_to_density(density), []
        return [], self.remove_to_density(density)

    def add_to_density(self, density):
        """Raise the density, keeping every existing connection.

        Equalized sources all move to int(density * n_allowed). Otherwise
        each source draws the number of new targets from its unconnected
        ones with probability (new - old) / (1 - old).

        Returns
        -------
        list
            Added (source index, target index) pairs.
        """
        if density <= self.connection_density:
            raise ValueError(
                f"Cannot add to a lower or equal density: "
                f"{density} <= {self.connection_density}")
        if self.equalize_efferents:
            new_counts = np.full_like(self._counts,
                                      int(density * self.n_allowed))
        else:
            p = (density - self.connection_density) / (1.0 - self.connection_density)
            new_counts = self._counts + self._rng.binomial(
                self.n_allowed - self._counts, p)
        new_counts = np.minimum(new_counts, self.n_allowed)
        added = [(i, int(j))
                 for i, order in enumerate(self._ordering)
                 for j in order[self._counts[i]:new_counts[i]]]
        self._counts = new_counts
        self.connection_density = density
        self._connect(added)
        return added

    def remove_to_density(self, density):
        """Lower the density, removing the most recently added connections.

        Returns
        -------
        list
            Removed (source index, target index) pairs.
        """
        if density >= self.connection_density:
            raise ValueError(
                f"Cannot remove to a higher or equal density: "
                f"{density} >= {self.connection_density}")
        if self.equalize_efferents:
            new_counts = np.full_like(self._counts,
                                      int(density * self.n_allowed))
        else:
            new_counts = self._counts - self._rng.binomial(
                self._counts, 1.0 - density / self.connection_density)
        new_counts = np.minimum(new_counts, self._counts)
        removed = [(i, int(j))
                   for i, order in enumerate(self._ordering)
                   for j in order[new_counts[i]:self._counts[i]]]
        self._counts = new_counts
        self.connection_density = density
        self._disconnect(removed)
        return removed

    # ------------------------------------------------------------------
    # Building models
    # ------------------------------------------------------------------

    def connect_neurons(self, sources, targets, network=None):
        """Connect two lists of neurons with loose synapses.

        If ``sources`` and ``targets`` are the same neurons in the same
        order, the connection is recurrent.

        Parameters
        ----------
        sources, targets : list of Neuron
        network : Network, optional
            Receives the new synapses, and loses the removed ones when the
            density is later lowered.

        Returns
        -------
        list of Synapse
        """
        sources, targets = list(sources), list(targets)
        recurrent = (len(sources) == len(targets)
                     and all(s is t for s, t in zip(sources, targets)))
        self._sources, self._targets = sources, targets
        self._network = network
        self._synapses = {}
        self._weight_matrix = None
        self.generate(len(sources), len(targets), recurrent)
        synapses = self._connect(self.pairs())
        LOG.info("Sparse: %d synapses from %d to %d neurons (density %.3f)",
                 len(synapses), len(sources), len(targets),
                 self.connection_density)
        return synapses

    def connect_layers(self, source, target, randomizer=None):
        """Connect two layers with a weight matrix zero outside the mask.

        Parameters
        ----------
        source, target : NeuronArray
        randomizer : ProbabilityDistribution, optional
            Draws the weight of each connection. Defaults to 1.0.

        Returns
        -------
        WeightMatrix
        """
        self._synapses = None
        self._network = None
        self._randomizer = randomizer
        self.generate(source.size, target.size, recurrent=source is target)
        self._weight_matrix = WeightMatrix(
            source, target, weights=np.zeros((target.size, source.size)))
        self._connect(self.pairs())
        LOG.info("Sparse: %d of %d weights set (density %.3f)",
                 self.n_connections, self.max_possible_connections,
                 self.connection_density)
        return self._weight_matrix

    def _connect(self, pairs):
        if self._weight_matrix is not None:
            for i, j in pairs:
                self._weight_matrix.weight_matrix[j, i] = (
                    self._randomizer.sample_double()
                    if self._randomizer is not None else 1.0)
            return []
        if self._synapses is None:
            return []
        synapses = []
        for i, j in pairs:
            synapse = Synapse(self._sources[i], self._targets[j])
            self._synapses[(i, j)] = synapse
            synapses.append(synapse)
        if self._network is not None and synapses:
            self._network.add(*synapses)
        return synapses

    def _disconnect(self, pairs):
        if self._weight_matrix is not None:
            for i, j in pairs:
                self._weight_matrix.weight_matrix[j, i] = 0.0
            return
        if self._synapses is None:
            return
        removed = [self._synapses.pop(pair) for pair in pairs]
        if self._network is not None and removed:
            self._network.remove(*removed)

    @property
    def synapses(self):
        """Synapses currently made by ``connect_neurons``, in source order."""
        if self._synapses is None:
            return []
        return [self._synapses[pair] for pair in self.pairs()]


def connect_sparse(sources, targets, connection_density,
                   allow_self_connection=False, equalize_efferents=False,
                   network=None, seed=None):
    """Connect two lists of neurons sparsely.

    Returns the new synapses; see ``Sparse.connect_neurons``.
    """
    sparse = Sparse(connection_density, allow_self_connection,
                    equalize_efferents, seed)
    return sparse.connect_neurons(sources, targets, network)
