"""Input synapse: external input to a reservoir neuron."""

from rcsynapse.errors import InvalidConfiguration
from rcsynapse.synapse.conversion import WeightRule
from rcsynapse.synapse.static import StaticSynapse


class InputSynapse(StaticSynapse):
    """Connects an input neuron to a reservoir neuron.

    No plasticity. The weight follows the input rows of the conversion
    rule: unsigned toward spiking targets, as given toward analog targets.
    Delay semantics are those of StaticSynapse.
    """

    kind = "input"

    def __init__(self, source, target, weight, weight_rule=WeightRule.RANGE_MAPPING):
        if not source.is_input:
            raise InvalidConfiguration(
                f"InputSynapse source must be an input neuron, got "
                f"{source.role.value}."
            )
        if target.is_input:
            raise InvalidConfiguration("InputSynapse target must be a reservoir neuron.")
        super().__init__(source, target, weight, weight_rule)
