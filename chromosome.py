"""
Chromosome – the flat genome shared by the genetic algorithm and the brains.

A chromosome is an ordered, fixed-length sequence of real-valued genes.
Brains write their network weights into one (see Network.weights) and are
rebuilt from one after evolution (see Network.from_weights).
"""

import numpy as np


class Chromosome:
    """
    Fixed-length sequence of float genes.

    Supports len(), indexing, item assignment, iteration and exact
    equality.  The length cannot change after construction.
    """
    __slots__ = ("_genes",)

    def __init__(self, genes=()):
        self._genes = np.array(list(genes), dtype=np.float64)

    # ──────────────────────────────────────────────────────────────────────────

    def __len__(self) -> int:
        return len(self._genes)

    def __getitem__(self, index):
        if isinstance(index, slice):
            return Chromosome(self._genes[index])
        return float(self._genes[index])

    def __setitem__(self, index: int, value: float):
        if isinstance(index, slice):
            raise TypeError("chromosome length is fixed; assign genes one by one")
        self._genes[index] = value

    def __iter__(self):
        for gene in self._genes:
            yield float(gene)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Chromosome):
            return NotImplemented
        return np.array_equal(self._genes, other._genes)

    __hash__ = None

    def __repr__(self) -> str:
        return f"Chromosome({self.to_list()!r})"

    # ──────────────────────────────────────────────────────────────────────────

    def to_list(self) -> list:
        """Genes as plain Python floats, in order."""
        return [float(g) for g in self._genes]

    def as_array(self) -> np.ndarray:
        """Read-only float64 view of the genes."""
        view = self._genes.view()
        view.flags.writeable = False
        return view

    def copy(self) -> "Chromosome":
        return Chromosome(self._genes)
