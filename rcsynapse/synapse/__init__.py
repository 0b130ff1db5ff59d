"""synapse — Signal propagation between reservoir neurons.

Conversion rule, delay queue, the four synapse kinds and the construction
policy (delay method, target scope, factory).

Kinds:
    StaticSynapse     constant efficacy, optional delay
    InputSynapse      external input, constant efficacy, optional delay
    InternalSynapse   short-term plasticity between reservoir neurons
    DynamicSynapse    pre-synaptic STP and post-synaptic decay, optional delay
"""

from .conversion import (
    WeightRule,
    SignalConversion,
    parse_weight_rule,
    signal_conversion,
)
from .queue import DelayQueue, Signal
from .base import Synapse, DelayState
from .static import StaticSynapse
from .input import InputSynapse
from .internal import InternalSynapse
from .dynamic import DynamicSynapse
from .params import (
    PlasticityParams,
    DynamicParams,
    PostSynapticCurrentParams,
    default_internal_params,
    jitter_params,
)
from .construction import (
    SynapticDelayMethod,
    SynapticTargetScope,
    parse_delay_method,
    parse_target_scope,
    assign_delays,
    build_synapse,
    input_synapse_admitted,
)
