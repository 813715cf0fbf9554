"""Tests for declared parameters and YAML configurations."""

import numpy as np
import pytest
import yaml

from neurotick.config import load_config, object_from_dict, save_config
from neurotick.errors import ParameterError
from neurotick.learningrules import ShortTermPlasticityRule
from neurotick.params import (
    from_dict, get_parameter, parameters_of, set_parameter, to_dict, validate,
)
from neurotick.responders import RiseAndDecay
from neurotick.stats import GammaDistribution
from neurotick.textworld import EmbeddingType, TokenEmbeddingBuilder
from neurotick.updaterules import LinearRule, SoftmaxRule


# ---------------------------------------------------------------------------
# Parameter schema
# ---------------------------------------------------------------------------

class TestSchema:

    def test_responder_parameters(self):
        names = [p.name for p in parameters_of(RiseAndDecay())]
        assert names == ["maximum_response", "time_constant"]

    def test_schema_carries_bounds_and_increment(self):
        param = get_parameter(SoftmaxRule(), "temperature")
        assert param.label == "Temperature"
        assert param.minimum == 0.0
        assert param.exclusive_minimum
        assert param.increment == 0.1
        assert "label" in param.to_dict()

    def test_unknown_parameter(self):
        with pytest.raises(ParameterError):
            get_parameter(RiseAndDecay(), "gain")


class TestSetParameter:

    def test_commit_valid_value(self):
        rule = RiseAndDecay()
        set_parameter(rule, "time_constant", 5)
        assert rule.time_constant == 5.0
        assert isinstance(rule.time_constant, float)

    def test_string_values_are_coerced(self):
        rule = SoftmaxRule()
        set_parameter(rule, "temperature", "0.25")
        assert rule.temperature == 0.25

    @pytest.mark.parametrize("name", ["time_constant", "maximum_response"])
    def test_zero_is_rejected(self, name):
        rule = RiseAndDecay()
        with pytest.raises(ParameterError):
            set_parameter(rule, name, 0.0)
        assert getattr(rule, name) > 0

    def test_maximum_is_enforced(self):
        with pytest.raises(ParameterError):
            set_parameter(ShortTermPlasticityRule(), "bump_rate", 1.5)

    def test_numpy_scalars_become_builtins(self):
        rule = SoftmaxRule()
        set_parameter(rule, "temperature", np.float64(0.5))
        assert type(rule.temperature) is float
        stp = ShortTermPlasticityRule()
        set_parameter(stp, "plasticity_type", np.int64(1))
        assert type(stp.plasticity_type) is int

    def test_int_default_does_not_truncate(self):
        rule = RiseAndDecay(time_constant=5)
        set_parameter(rule, "time_constant", 2.5)
        assert rule.time_constant == 2.5

    def test_unparseable_value(self):
        with pytest.raises(ParameterError):
            set_parameter(SoftmaxRule(), "temperature", "hot")

    def test_validate(self):
        assert validate(RiseAndDecay()) is not None
        rule = SoftmaxRule()
        rule.temperature = -1.0
        with pytest.raises(ParameterError):
            validate(rule)


# ---------------------------------------------------------------------------
# Attribute/value round trip
# ---------------------------------------------------------------------------

class TestDictRoundTrip:

    def test_rule_round_trip(self):
        rule = LinearRule(slope=2.0, bias=-0.5, clipping=False)
        d = to_dict(rule)
        assert d["type"] == "LinearRule"
        assert from_dict(LinearRule, d) == rule

    def test_booleans_from_strings(self):
        rule = from_dict(LinearRule, {"clipping": "false", "slope": "3"})
        assert rule.clipping is False
        assert rule.slope == 3.0

    def test_enum_by_name(self):
        builder = TokenEmbeddingBuilder(embedding_type=EmbeddingType.ONE_HOT)
        d = to_dict(builder)
        assert d["embedding_type"] == "ONE_HOT"
        assert from_dict(TokenEmbeddingBuilder, d) == builder


# ---------------------------------------------------------------------------
# YAML configurations
# ---------------------------------------------------------------------------

class TestConfig:

    def test_save_and_load(self, tmp_path):
        objects = {
            "response": RiseAndDecay(maximum_response=2.0, time_constant=4.0),
            "output": SoftmaxRule(temperature=0.5),
            "plasticity": ShortTermPlasticityRule(plasticity_type=1),
            "weights": GammaDistribution(shape=3.0, scale=0.5),
        }
        path = save_config(objects, tmp_path / "rules.yaml")
        loaded = load_config(path)
        assert loaded == objects

    def test_save_after_numpy_commit(self, tmp_path):
        rule = set_parameter(SoftmaxRule(), "temperature", np.float64(0.5))
        path = save_config({"out": rule}, tmp_path / "rules.yaml")
        assert load_config(path) == {"out": SoftmaxRule(temperature=0.5)}

    def test_load_rejects_out_of_bounds(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text(yaml.safe_dump({
            "response": {"type": "RiseAndDecay", "time_constant": 0.0},
        }))
        with pytest.raises(ParameterError):
            load_config(path)

    def test_unknown_type(self):
        with pytest.raises(KeyError):
            object_from_dict({"type": "HebbianRule"})
        with pytest.raises(KeyError):
            object_from_dict({"temperature": 1.0})

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_config(path) == {}
