"""Tests for the sparse connection strategy."""

import numpy as np
import pytest

from neurotick.network import (
    Network, Neuron, NeuronArray, Sparse, WeightMatrix, connect_sparse,
)
from neurotick.stats import NormalDistribution


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def neurons():
    return [Neuron(label=f"n{i}") for i in range(20)]


# ---------------------------------------------------------------------------
# Connection pattern
# ---------------------------------------------------------------------------

class TestPattern:

    def test_random_density(self):
        sparse = Sparse(connection_density=0.3, seed=1)
        mask = sparse.generate(200, 150)
        assert mask.shape == (150, 200)
        assert mask.mean() == pytest.approx(0.3, abs=0.02)
        assert sparse.n_connections == mask.sum()

    def test_equalized_efferents(self):
        sparse = Sparse(connection_density=0.25, equalize_efferents=True,
                        seed=2)
        mask = sparse.generate(10, 40)
        np.testing.assert_array_equal(mask.sum(axis=0), 10)
        np.testing.assert_array_equal(sparse.efferent_counts, 10)

    @pytest.mark.parametrize("equalize", [True, False])
    def test_no_self_connections(self, equalize):
        sparse = Sparse(connection_density=1.0, equalize_efferents=equalize,
                        seed=3)
        mask = sparse.generate(8, 8, recurrent=True)
        assert not mask.diagonal().any()
        assert mask.sum() == 8 * 7
        assert sparse.max_possible_connections == 8 * 7

    def test_self_connections_allowed(self):
        sparse = Sparse(connection_density=1.0, allow_self_connection=True,
                        equalize_efferents=True)
        mask = sparse.generate(5, 5, recurrent=True)
        assert mask.all()

    def test_recurrent_requires_equal_sizes(self):
        with pytest.raises(ValueError):
            Sparse().generate(3, 4, recurrent=True)

    def test_seeded_pattern_is_reproducible(self):
        masks = [Sparse(0.4, seed=-5).generate(30, 30) for _ in range(2)]
        np.testing.assert_array_equal(masks[0], masks[1])


# ---------------------------------------------------------------------------
# Changing the density
# ---------------------------------------------------------------------------

class TestDensityChange:

    def test_adding_keeps_existing_connections(self):
        sparse = Sparse(0.2, seed=4)
        before = sparse.generate(50, 50)
        added, removed = sparse.set_connection_density(0.5)
        after = sparse.mask()
        assert removed == []
        assert np.all(after[before])
        assert after.sum() == before.sum() + len(added)
        assert after.mean() == pytest.approx(0.5, abs=0.05)

    def test_removing_drops_latest_first(self):
        sparse = Sparse(0.6, equalize_efferents=True, seed=5)
        before = sparse.generate(10, 20)
        removed = sparse.remove_to_density(0.3)
        after = sparse.mask()
        assert not np.any(after & ~before)
        np.testing.assert_array_equal(sparse.efferent_counts, 6)
        assert len(removed) == 10 * (12 - 6)
        # down then up again restores the same targets
        sparse.add_to_density(0.6)
        np.testing.assert_array_equal(sparse.mask(), before)

    def test_wrong_direction_raises(self):
        sparse = Sparse(0.5)
        sparse.generate(4, 4)
        with pytest.raises(ValueError):
            sparse.add_to_density(0.4)
        with pytest.raises(ValueError):
            sparse.remove_to_density(0.6)

    def test_density_change_before_generation(self):
        sparse = Sparse(0.5)
        assert sparse.set_connection_density(0.2) == ([], [])
        assert sparse.connection_density == 0.2


# ---------------------------------------------------------------------------
# Building models
# ---------------------------------------------------------------------------

class TestModels:

    def test_connect_neurons_recurrent(self, neurons):
        net = Network()
        net.add(*neurons)
        synapses = connect_sparse(neurons, neurons, 0.5,
                                  equalize_efferents=True, network=net, seed=6)
        assert len(synapses) == 20 * int(0.5 * 19)
        assert all(s.source is not s.target for s in synapses)
        assert net.synapses == synapses

    def test_lowering_density_removes_synapses_from_network(self, neurons):
        net = Network()
        sparse = Sparse(0.5, equalize_efferents=True, seed=7)
        sparse.connect_neurons(neurons[:10], neurons[10:], network=net)
        assert len(net.synapses) == 10 * 5
        sparse.set_connection_density(0.2)
        assert len(net.synapses) == 10 * 2
        assert sorted(map(id, net.synapses)) == sorted(map(id, sparse.synapses))
        sparse.set_connection_density(0.4)
        assert len(net.synapses) == 10 * 4

    def test_connect_layers_masks_weights(self):
        source, target = NeuronArray(30), NeuronArray(20)
        sparse = Sparse(0.3, seed=8)
        wm = sparse.connect_layers(source, target)
        assert isinstance(wm, WeightMatrix)
        np.testing.assert_array_equal(wm.weight_matrix != 0, sparse.mask())
        np.testing.assert_array_equal(wm.weight_matrix[sparse.mask()], 1.0)

    def test_connect_layers_with_randomizer(self):
        dist = NormalDistribution(mean=5.0, standard_deviation=0.1)
        dist.set_seed(9)
        sparse = Sparse(1.0, equalize_efferents=True)
        wm = sparse.connect_layers(NeuronArray(4), NeuronArray(3),
                                   randomizer=dist)
        assert np.all(np.abs(wm.weight_matrix - 5.0) < 1.0)
        sparse.set_connection_density(0.5)
        assert (wm.weight_matrix == 0).sum() == 4 * (3 - 1)

    def test_remove_unknown_model_raises(self):
        with pytest.raises(ValueError):
            Network().remove(Neuron())
