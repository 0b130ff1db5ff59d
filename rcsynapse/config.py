"""Synapse configuration: validated records loaded from YAML.

Tokens (weight rule, delay method, scopes) are parsed and numeric ranges
checked when the record is built, so a bad configuration fails at load
time and never during simulation.

Example YAML:

    weight_rule: range_mapping
    delay_method: distance
    max_input_delay: 2
    max_internal_delay: 4
    spiking_target_scope: excitatory
    analog_target_scope: all
    internal:
      resting_efficacy: 0.5
      tau_depression: 1100
      tau_facilitation: 50
    dynamic:
      resting_efficacy: 0.4
      tau_facilitation: 50
      tau_recovery: 800
      tau_decay: 20
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml

from rcsynapse.errors import InvalidConfiguration, check_count
from rcsynapse.synapse.construction import (
    SynapticDelayMethod,
    SynapticTargetScope,
    parse_delay_method,
    parse_target_scope,
)
from rcsynapse.synapse.conversion import WeightRule, parse_weight_rule
from rcsynapse.synapse.params import (
    DynamicParams,
    PlasticityParams,
    PostSynapticCurrentParams,
)
from rcsynapse.utils import get_logger

LOG = get_logger("config")


@dataclass(frozen=True)
class SynapseConfig:
    """Everything the synapse layer needs from the reservoir configuration.

    Parameters
    ----------
    weight_rule : WeightRule
        Signal conversion strategy.
    delay_method : SynapticDelayMethod
        How delays are assigned.
    max_input_delay : int
        Largest delay of input synapses (cycles).
    max_internal_delay : int
        Largest delay of delay-capable reservoir synapses (cycles).
    spiking_target_scope : SynapticTargetScope
        Spiking neurons receiving input synapses.
    analog_target_scope : SynapticTargetScope
        Analog neurons receiving input synapses.
    internal : PlasticityParams or None
        Plasticity of internal synapses. None uses the role/type defaults.
    dynamic : DynamicParams
        Dynamics of dynamic synapses.
    post_synaptic_current : PostSynapticCurrentParams
        Optional current injection of internal synapses.
    jitter_plasticity : bool
        Draw per-synapse plasticity constants around the configured ones.
    check_cycles : bool
        Let the driver guard against two reads of a synapse in one cycle.
    """
    weight_rule: WeightRule = WeightRule.RANGE_MAPPING
    delay_method: SynapticDelayMethod = SynapticDelayMethod.RANDOM
    max_input_delay: int = 0
    max_internal_delay: int = 0
    spiking_target_scope: SynapticTargetScope = SynapticTargetScope.EXCITATORY
    analog_target_scope: SynapticTargetScope = SynapticTargetScope.ALL
    internal: Optional[PlasticityParams] = None
    dynamic: DynamicParams = field(default_factory=DynamicParams)
    post_synaptic_current: PostSynapticCurrentParams = field(
        default_factory=PostSynapticCurrentParams)
    jitter_plasticity: bool = False
    check_cycles: bool = False

    def __post_init__(self):
        # Frozen: normalize tokens through object.__setattr__
        object.__setattr__(self, "weight_rule", parse_weight_rule(self.weight_rule))
        object.__setattr__(self, "delay_method", parse_delay_method(self.delay_method))
        object.__setattr__(self, "spiking_target_scope",
                           parse_target_scope(self.spiking_target_scope))
        object.__setattr__(self, "analog_target_scope",
                           parse_target_scope(self.analog_target_scope))
        for name in ("max_input_delay", "max_internal_delay"):
            object.__setattr__(self, name, check_count(name, getattr(self, name)))
        for name, record in _SECTIONS.items():
            value = getattr(self, name)
            if value is None and name == "internal":
                continue
            if not isinstance(value, record):
                raise InvalidConfiguration(
                    f"Invalid '{name}' section {value!r}. "
                    f"A {record.__name__} is required."
                )

    def to_dict(self):
        """Serialize to a YAML-friendly dict (accepted by config_from_dict)."""
        return {
            "weight_rule": self.weight_rule.value,
            "delay_method": self.delay_method.value,
            "max_input_delay": self.max_input_delay,
            "max_internal_delay": self.max_internal_delay,
            "spiking_target_scope": self.spiking_target_scope.value,
            "analog_target_scope": self.analog_target_scope.value,
            "internal": None if self.internal is None else self.internal.to_dict(),
            "dynamic": self.dynamic.to_dict(),
            "post_synaptic_current": self.post_synaptic_current.to_dict(),
            "jitter_plasticity": self.jitter_plasticity,
            "check_cycles": self.check_cycles,
        }


_SECTIONS = {
    "internal": PlasticityParams,
    "dynamic": DynamicParams,
    "post_synaptic_current": PostSynapticCurrentParams,
}


def config_from_dict(data):
    """Build a SynapseConfig from a plain mapping.

    Raises
    ------
    InvalidConfiguration
        Unknown keys or out-of-range values.
    UnsupportedConfigurationValue
        Unknown tokens.
    """
    data = dict(data or {})
    known = set(SynapseConfig.__dataclass_fields__)
    unknown = set(data) - known
    if unknown:
        raise InvalidConfiguration(
            f"Unknown configuration keys {sorted(unknown)}. "
            f"Available: {sorted(known)}"
        )
    for section, record in _SECTIONS.items():
        value = data.get(section)
        if isinstance(value, dict):
            try:
                data[section] = record(**value)
            except TypeError as e:
                raise InvalidConfiguration(f"Invalid '{section}' section: {e}") from e
        elif value is None:
            if section != "internal":
                data.pop(section, None)
        elif not isinstance(value, record):
            raise InvalidConfiguration(
                f"Invalid '{section}' section: a mapping is required."
            )
    return SynapseConfig(**data)


def load_config(path):
    """Load a SynapseConfig from a YAML file."""
    path = Path(path)
    with open(path, "r") as f:
        data = yaml.safe_load(f)
    config = config_from_dict(data)
    LOG.info("Loaded synapse configuration from %s (%s rule, %s delays)",
             path.name, config.weight_rule.value, config.delay_method.value)
    return config


def save_config(config, path):
    """Write a SynapseConfig to a YAML file."""
    with open(path, "w") as f:
        yaml.safe_dump(config.to_dict(), f, sort_keys=False)
