"""
random_art/artwork.py - Channel trees of one piece and JSON serialization
"""
import json
from typing import Dict, Any, Optional, Union

import numpy as np

from .ast_nodes import ASTNode, node_from_dict
from .generator import ExpressionGenerator, CHANNELS

class Artwork:
    """Three expression trees, one per RGB channel"""

    def __init__(self, trees: Dict[str, ASTNode], seed: Optional[Union[str, int]] = None,
                 depth: Optional[int] = None):
        missing = [channel for channel in CHANNELS if channel not in trees]
        if missing:
            raise ValueError(f"Missing channel trees: {', '.join(missing)}")
        self.trees = {channel: trees[channel] for channel in CHANNELS}
        self.seed = seed
        self.depth = depth

    @classmethod
    def from_seed(cls, seed: Union[str, int], depth: int) -> 'Artwork':
        """Draw R, G, B trees from a fresh generator seeded with seed"""
        generator = ExpressionGenerator(seed)
        return cls(generator.generate_channels(depth), seed, depth)

    def describe(self) -> str:
        """Three lines, one per channel: 'R: <tree>'"""
        return '\n'.join(f"{channel.upper()}: {tree}" for channel, tree in self.trees.items())

    def evaluate(self, x, y, t) -> Dict[str, Any]:
        """Evaluate all trees for given inputs"""
        with np.errstate(all='ignore'):
            return {channel: tree.evaluate(x, y, t) for channel, tree in self.trees.items()}

    def get_complexity(self) -> int:
        """Get total complexity (number of nodes) across all trees"""
        return sum(len(tree.get_all_nodes()) for tree in self.trees.values())

    def get_depth(self) -> int:
        """Get maximum depth across all trees"""
        return max(tree.get_depth() for tree in self.trees.values())

    def copy(self) -> 'Artwork':
        new_trees = {name: tree.copy() for name, tree in self.trees.items()}
        return Artwork(new_trees, self.seed, self.depth)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize artwork to dictionary"""
        return {
            'seed': self.seed,
            'depth': self.depth,
            'trees': {name: tree.to_dict() for name, tree in self.trees.items()},
            'complexity': self.get_complexity(),
            'description': self.describe()
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Artwork':
        """Deserialize artwork from dictionary"""
        trees = {name: node_from_dict(tree_data)
                 for name, tree_data in data['trees'].items()}
        return cls(trees, data.get('seed'), data.get('depth'))

    def to_json(self, filename: str = None) -> str:
        """Serialize to JSON string or file"""
        json_str = json.dumps(self.to_dict(), indent=2)
        if filename:
            with open(filename, 'w') as f:
                f.write(json_str)
        return json_str

    @classmethod
    def from_json(cls, json_data: str = None, filename: str = None) -> 'Artwork':
        """Deserialize from JSON string or file"""
        if filename:
            with open(filename, 'r') as f:
                json_data = f.read()

        data = json.loads(json_data)
        return cls.from_dict(data)

    def __str__(self) -> str:
        lines = [f"Artwork (seed: {self.seed!r}, depth: {self.depth}):"]
        lines.append(f"  Complexity: {self.get_complexity()}, Depth: {self.get_depth()}")
        for line in self.describe().split('\n'):
            lines.append(f"  {line[:100]}{'...' if len(line) > 100 else ''}")
        return '\n'.join(lines)
