"""Signal conversion between heterogeneous neurons.

When a synapse is built it fixes, once and for all, how the source
neuron's raw output is mapped before weighting:

    transformed = ((raw + offset) / divisor) * weight

and which sign the weight carries. Two rules are available:

RANGE_MAPPING
    Maps source output ranges onto what the target expects: inputs and
    analog sources feeding spiking targets are squashed to [0, 1], spiking
    sources feeding analog targets are moved into the target's range.
    Reservoir sources feeding spiking targets are signed by role.

SIGN_ONLY
    No range mapping (offset 0, divisor 1). Input -> analog keeps the
    weight as given, input -> spiking takes its magnitude, every reservoir
    source is signed by role.
"""

from dataclasses import dataclass
from enum import Enum

from rcsynapse.errors import InvalidConfiguration, UnsupportedConfigurationValue
from rcsynapse.neuron import NeuronRole


class WeightRule(Enum):
    """Strategy deciding weight sign and signal range mapping."""
    RANGE_MAPPING = "range_mapping"
    SIGN_ONLY = "sign_only"


def parse_weight_rule(token):
    """Parse a case-insensitive weight rule token."""
    if isinstance(token, WeightRule):
        return token
    code = str(token).strip().lower()
    for rule in WeightRule:
        if rule.value == code:
            return rule
    raise UnsupportedConfigurationValue("weight rule", token,
                                        [r.value for r in WeightRule])


@dataclass(frozen=True)
class SignalConversion:
    """Weight and range-mapping coefficients of one synapse."""
    weight: float
    offset: float = 0.0
    divisor: float = 1.0

    def apply(self, raw_signal, weight=None):
        """Transform a raw source signal (optionally with another weight)."""
        w = self.weight if weight is None else weight
        return ((raw_signal + self.offset) / self.divisor) * w


def _role_signed(weight, role):
    return abs(weight) * (1.0 if role == NeuronRole.EXCITATORY else -1.0)


def _unit_mapping(source):
    if source.output_range.span == 0:
        raise InvalidConfiguration(
            "Cannot map a source signal to [0, 1]: source output range is empty."
        )
    return -source.output_range.min, source.output_range.span


def range_mapping_conversion(source, target, weight):
    """Conversion coefficients under the RANGE_MAPPING rule."""
    target_spiking = target.is_spiking
    if source.is_input:
        if target_spiking:
            offset, divisor = _unit_mapping(source)
            return SignalConversion(abs(weight), offset, divisor)
        return SignalConversion(weight)

    if source.is_spiking:
        if target_spiking:
            return SignalConversion(_role_signed(weight, source.role))
        src, tgt = source.output_range, target.output_range
        if tgt.span == 0:
            raise InvalidConfiguration(
                "Cannot map a spiking signal onto an analog target with an "
                "empty output range."
            )
        return SignalConversion(weight,
                                tgt.min - src.min,
                                src.span / tgt.span)

    if target_spiking:
        offset, divisor = _unit_mapping(source)
        return SignalConversion(_role_signed(weight, source.role), offset, divisor)
    return SignalConversion(weight)


def sign_only_conversion(source, target, weight):
    """Conversion coefficients under the SIGN_ONLY rule."""
    if source.is_input:
        if target.is_spiking:
            return SignalConversion(abs(weight))
        return SignalConversion(weight)
    return SignalConversion(_role_signed(weight, source.role))


_RULES = {
    WeightRule.RANGE_MAPPING: range_mapping_conversion,
    WeightRule.SIGN_ONLY: sign_only_conversion,
}


def signal_conversion(source, target, weight, rule=WeightRule.RANGE_MAPPING):
    """Compute the SignalConversion of a synapse from source to target.

    Parameters
    ----------
    source, target : NeuronRef
        Connected neurons (only role, output_type and output_range are read).
    weight : float
        Nominal weight; its sign may be overridden by the rule.
    rule : WeightRule or str
        Conversion strategy.

    Returns
    -------
    SignalConversion
    """
    return _RULES[parse_weight_rule(rule)](source, target, weight)
