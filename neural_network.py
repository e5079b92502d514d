"""
Feed-forward Neural Network for EvoForage.

Topology: inputs → [hidden layers] → outputs, fully connected, ReLU
activation on every layer.

The network can be flattened into a single list of floats and rebuilt
from one.  Both directions walk the layers in order, each layer's
neurons in order, and each neuron as (bias, weight_0, weight_1, …).
That ordering is the genome format used by Brain, so it must not change.
"""

from collections import namedtuple

import numpy as np

from errors import ExcessWeights, InsufficientWeights


LayerTopology = namedtuple("LayerTopology", ["neurons"])


def _widths(topology) -> list:
    """Accept LayerTopology entries or plain ints."""
    widths = []
    for layer in topology:
        n = layer.neurons if isinstance(layer, LayerTopology) else layer
        widths.append(int(n))
    if len(widths) < 2:
        raise ValueError(
            f"topology needs an input width and at least one layer, got {widths}")
    return widths


def expected_weight_count(topology) -> int:
    """Length of the flat weight list for a given topology."""
    widths = _widths(topology)
    return sum((n_in + 1) * n_out for n_in, n_out in zip(widths, widths[1:]))


# ──────────────────────────────────────────────────────────────────────────────
# Neuron
# ──────────────────────────────────────────────────────────────────────────────

class Neuron:
    __slots__ = ("bias", "weights")

    def __init__(self, bias: float, weights):
        self.bias    = float(bias)
        self.weights = np.asarray(weights, dtype=np.float64)

    @classmethod
    def random(cls, rng, input_size: int) -> "Neuron":
        bias    = rng.uniform(-1.0, 1.0)
        weights = rng.uniform(-1.0, 1.0, size=input_size)
        return cls(bias, weights)

    @classmethod
    def from_weights(cls, input_size: int, weights) -> "Neuron":
        """Consume one bias and `input_size` weights from an iterator."""
        bias = next(weights)
        return cls(bias, [next(weights) for _ in range(input_size)])

    def propagate(self, inputs: np.ndarray) -> float:
        if len(inputs) != len(self.weights):
            raise ValueError(
                f"expected {len(self.weights)} inputs, got {len(inputs)}")
        output = float(np.dot(inputs, self.weights)) + self.bias
        return max(0.0, output)


# ──────────────────────────────────────────────────────────────────────────────
# Layer
# ──────────────────────────────────────────────────────────────────────────────

class Layer:
    __slots__ = ("neurons",)

    def __init__(self, neurons: list):
        self.neurons = list(neurons)

    @classmethod
    def random(cls, rng, input_size: int, output_size: int) -> "Layer":
        return cls([Neuron.random(rng, input_size) for _ in range(output_size)])

    @classmethod
    def from_weights(cls, input_size: int, output_size: int, weights) -> "Layer":
        return cls([Neuron.from_weights(input_size, weights)
                    for _ in range(output_size)])

    @property
    def input_size(self) -> int:
        return len(self.neurons[0].weights) if self.neurons else 0

    def propagate(self, inputs: np.ndarray) -> np.ndarray:
        return np.array([n.propagate(inputs) for n in self.neurons],
                        dtype=np.float64)


# ──────────────────────────────────────────────────────────────────────────────
# Network
# ──────────────────────────────────────────────────────────────────────────────

class Network:
    """
    Stack of fully connected ReLU layers.

    Build one with Network.random (fresh weights drawn uniformly from
    [-1, 1]) or Network.from_weights (decoded from a flat genome).
    """

    def __init__(self, layers: list):
        self.layers = list(layers)

    @classmethod
    def random(cls, rng, topology) -> "Network":
        widths = _widths(topology)
        return cls([Layer.random(rng, n_in, n_out)
                    for n_in, n_out in zip(widths, widths[1:])])

    @classmethod
    def from_weights(cls, topology, weights) -> "Network":
        """
        Rebuild a network from a flat weight sequence.

        Raises InsufficientWeights / ExcessWeights when the sequence
        length does not match the topology exactly.
        """
        widths   = _widths(topology)
        flat     = [float(w) for w in weights]
        expected = expected_weight_count(widths)
        if len(flat) < expected:
            raise InsufficientWeights(expected, len(flat))
        if len(flat) > expected:
            raise ExcessWeights(expected, len(flat))

        it = iter(flat)
        return cls([Layer.from_weights(n_in, n_out, it)
                    for n_in, n_out in zip(widths, widths[1:])])

    # ──────────────────────────────────────────────────────────────────────────

    def propagate(self, inputs) -> list:
        """
        Run one forward pass.

        Args:
            inputs: sequence of floats, one per input of the first layer

        Returns:
            list of floats, one per neuron of the last layer
        """
        values = np.asarray(inputs, dtype=np.float64)
        if self.layers and len(values) != self.layers[0].input_size:
            raise ValueError(
                f"network expects {self.layers[0].input_size} inputs, "
                f"got {len(values)}")
        for layer in self.layers:
            values = layer.propagate(values)
        return [float(v) for v in values]

    def weights(self) -> list:
        """Flatten into [bias, w0, w1, …] per neuron, per layer."""
        flat = []
        for layer in self.layers:
            for neuron in layer.neurons:
                flat.append(neuron.bias)
                flat.extend(float(w) for w in neuron.weights)
        return flat

    def topology(self) -> list:
        """Layer widths, input width first."""
        if not self.layers:
            return []
        return [self.layers[0].input_size] + [len(l.neurons) for l in self.layers]

    def summary(self) -> str:
        widths = " → ".join(str(w) for w in self.topology())
        return f"Network ({widths}, {len(self.weights())} weights)"
