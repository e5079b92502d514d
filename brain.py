"""
Brain – binds an Eye to a neural network.

Topology is fixed by the eye:  cells → 2·cells → 2
The two outputs are read by the simulation as (speed delta, rotation delta).
"""

from chromosome import Chromosome
from neural_network import LayerTopology, Network


class Brain:
    __slots__ = ("nn",)

    def __init__(self, nn: Network):
        self.nn = nn

    @classmethod
    def random(cls, rng, eye) -> "Brain":
        return cls(Network.random(rng, cls.topology(eye)))

    @classmethod
    def from_chromosome(cls, chromosome: Chromosome, eye) -> "Brain":
        """Decode a genome; length errors from the network propagate."""
        return cls(Network.from_weights(cls.topology(eye), chromosome))

    def as_chromosome(self) -> Chromosome:
        return Chromosome(self.nn.weights())

    def propagate(self, vision) -> list:
        return self.nn.propagate(vision)

    @staticmethod
    def topology(eye) -> list:
        return [
            LayerTopology(neurons=eye.cells),
            LayerTopology(neurons=2 * eye.cells),
            LayerTopology(neurons=2),
        ]
