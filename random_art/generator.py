"""
random_art/generator.py - Seeded random construction of expression trees
"""
import hashlib
from typing import Dict, Union

import numpy as np

from .ast_nodes import ASTNode, Variable, Constant, UnaryOp, BinaryOp, MixOp, VARIABLES

# Chance of stopping early at every level, whatever depth remains
TERMINAL_PROBABILITY = 0.1

OPERATOR_KINDS = ['add', 'mult', 'mod', 'div', 'sqrt', 'sin', 'cos', 'avg', 'mix']
CHANNELS = ['r', 'g', 'b']

def seed_from_string(seed: str) -> int:
    """Hash seed text to an unsigned 64-bit integer, stable across runs and platforms"""
    digest = hashlib.blake2b(seed.encode('utf-8'), digest_size=8).digest()
    return int.from_bytes(digest, 'little')

class ExpressionGenerator:
    """Builds random expression trees from one seeded random stream.

    Every draw advances the same stream, so trees must be generated in a
    fixed order for a seed to reproduce them.
    """

    def __init__(self, seed: Union[str, int]):
        if isinstance(seed, str):
            seed = seed_from_string(seed)
        self.seed = seed
        self.rng = np.random.default_rng(seed)

    def generate(self, remaining_depth: int) -> ASTNode:
        """Generate a tree no deeper than remaining_depth operator levels"""
        if remaining_depth <= 0 or self.rng.random() < TERMINAL_PROBABILITY:
            return self._terminal()

        kind = OPERATOR_KINDS[self.rng.integers(len(OPERATOR_KINDS))]
        depth = remaining_depth - 1

        if kind in ('sqrt', 'sin', 'cos'):
            return UnaryOp(kind, self.generate(depth))
        elif kind == 'mix':
            a = self.generate(depth)
            b = self.generate(depth)
            c = self.generate(depth)
            d = self.generate(depth)
            return MixOp(a, b, c, d)
        left = self.generate(depth)
        right = self.generate(depth)
        return BinaryOp(kind, left, right)

    def generate_channels(self, depth: int) -> Dict[str, ASTNode]:
        """Generate the R, G, B trees in sequence from the shared stream"""
        return {channel: self.generate(depth) for channel in CHANNELS}

    def _terminal(self) -> ASTNode:
        choice = self.rng.integers(len(VARIABLES) + 1)
        if choice < len(VARIABLES):
            return Variable(VARIABLES[choice])
        return Constant(self.rng.uniform(-1.0, 1.0))
