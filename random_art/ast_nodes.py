"""
random_art/ast_nodes.py - Expression tree nodes and guarded primitives
"""
import numpy as np
from abc import ABC, abstractmethod
from typing import Dict, Any, List

# Denominators below this magnitude make div() return 0
DIV_EPSILON = 1e-6
# Added to the mix() denominator
MIX_EPSILON = 1e-6

class ASTNode(ABC):
    """Base class for all AST nodes"""

    def __init__(self):
        self.arity = 0  # Number of children
        self.children = []

    @abstractmethod
    def evaluate(self, x, y, t):
        """Evaluate the node for scalar or array inputs"""
        pass

    @abstractmethod
    def to_dict(self) -> Dict[str, Any]:
        """Serialize to dictionary"""
        pass

    @classmethod
    @abstractmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ASTNode':
        """Deserialize from dictionary"""
        pass

    @abstractmethod
    def copy(self) -> 'ASTNode':
        """Create a deep copy of this node"""
        pass

    @property
    def is_terminal(self) -> bool:
        return self.arity == 0

    def get_all_nodes(self) -> List['ASTNode']:
        """Get all nodes in this subtree"""
        nodes = [self]
        for child in self.children:
            nodes.extend(child.get_all_nodes())
        return nodes

    def get_depth(self) -> int:
        """Get maximum depth of this subtree"""
        if not self.children:
            return 1
        return 1 + max(child.get_depth() for child in self.children)

    def __eq__(self, other):
        if not isinstance(other, ASTNode):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __hash__(self):
        return hash(str(self))

class Variable(ASTNode):
    """Input variables: x, y, t"""

    def __init__(self, name: str):
        super().__init__()
        if name not in VARIABLES:
            raise ValueError(f"Unknown variable: {name}")
        self.name = name

    def evaluate(self, x, y, t):
        if self.name == 'x':
            return x
        elif self.name == 'y':
            return y
        return t

    def to_dict(self) -> Dict[str, Any]:
        return {'type': 'Variable', 'name': self.name}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Variable':
        return cls(data['name'])

    def copy(self) -> 'Variable':
        return Variable(self.name)

    def __str__(self):
        return self.name

class Constant(ASTNode):
    """Numeric constant"""

    def __init__(self, value: float):
        super().__init__()
        self.value = float(value)

    def evaluate(self, x, y, t):
        return self.value

    def to_dict(self) -> Dict[str, Any]:
        return {'type': 'Constant', 'value': self.value}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Constant':
        return cls(data['value'])

    def copy(self) -> 'Constant':
        return Constant(self.value)

    def __str__(self):
        return repr(self.value)

class UnaryOp(ASTNode):
    """Unary operations: sqrt, sin, cos"""

    def __init__(self, op: str, child: ASTNode):
        super().__init__()
        if op not in UNARY_OPS:
            raise ValueError(f"Unknown unary operator: {op}")
        self.op = op
        self.child = child
        self.children = [child]
        self.arity = 1

    def evaluate(self, x, y, t):
        child_val = self.child.evaluate(x, y, t)

        if self.op == 'sqrt':
            # Negative inputs map to 0
            return np.sqrt(np.where(child_val < 0, 0.0, child_val))
        elif self.op == 'sin':
            return np.sin(child_val)
        return np.cos(child_val)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'type': 'UnaryOp',
            'op': self.op,
            'child': self.child.to_dict()
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'UnaryOp':
        child = node_from_dict(data['child'])
        return cls(data['op'], child)

    def copy(self) -> 'UnaryOp':
        return UnaryOp(self.op, self.child.copy())

    def __str__(self):
        return f"{self.op}({self.child})"

class BinaryOp(ASTNode):
    """Binary operations: add, mult, mod, div, avg with guards"""

    def __init__(self, op: str, left: ASTNode, right: ASTNode):
        super().__init__()
        if op not in BINARY_OPS:
            raise ValueError(f"Unknown binary operator: {op}")
        self.op = op
        self.left = left
        self.right = right
        self.children = [left, right]
        self.arity = 2

    def evaluate(self, x, y, t):
        left_val = np.asarray(self.left.evaluate(x, y, t), dtype=np.float64)
        right_val = np.asarray(self.right.evaluate(x, y, t), dtype=np.float64)

        # add and avg share the same averaging formula
        if self.op == 'add' or self.op == 'avg':
            return (left_val + right_val) / 2.0
        elif self.op == 'mult':
            return left_val * right_val
        elif self.op == 'mod':
            # Remainder takes the sign of the dividend; zero modulus gives 0
            valid = right_val != 0.0
            divisor = np.where(valid, right_val, 1.0)
            return np.where(valid, np.fmod(left_val, divisor), 0.0)
        # div: near-zero denominators give 0
        valid = np.abs(right_val) >= DIV_EPSILON
        divisor = np.where(valid, right_val, 1.0)
        return np.where(valid, left_val / divisor, 0.0)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'type': 'BinaryOp',
            'op': self.op,
            'left': self.left.to_dict(),
            'right': self.right.to_dict()
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'BinaryOp':
        left = node_from_dict(data['left'])
        right = node_from_dict(data['right'])
        return cls(data['op'], left, right)

    def copy(self) -> 'BinaryOp':
        return BinaryOp(self.op, self.left.copy(), self.right.copy())

    def __str__(self):
        return f"{self.op}({self.left}, {self.right})"

class MixOp(ASTNode):
    """Weighted blend of c and d by weights a and b"""

    def __init__(self, a: ASTNode, b: ASTNode, c: ASTNode, d: ASTNode):
        super().__init__()
        self.children = [a, b, c, d]
        self.arity = 4

    def evaluate(self, x, y, t):
        a_val, b_val, c_val, d_val = (
            np.asarray(child.evaluate(x, y, t), dtype=np.float64)
            for child in self.children
        )
        # Not clamped: the result can leave [-1, 1]
        return (a_val * c_val + b_val * d_val) / (a_val + b_val + MIX_EPSILON)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'type': 'MixOp',
            'children': [child.to_dict() for child in self.children]
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'MixOp':
        children = [node_from_dict(child) for child in data['children']]
        if len(children) != 4:
            raise ValueError(f"mix expects 4 children, got {len(children)}")
        return cls(*children)

    def copy(self) -> 'MixOp':
        return MixOp(*(child.copy() for child in self.children))

    def __str__(self):
        return f"mix({', '.join(str(child) for child in self.children)})"

# Node creation helpers
def node_from_dict(data: Dict[str, Any]) -> ASTNode:
    """Create node from dictionary representation"""
    node_type = data['type']

    if node_type == 'Variable':
        return Variable.from_dict(data)
    elif node_type == 'Constant':
        return Constant.from_dict(data)
    elif node_type == 'UnaryOp':
        return UnaryOp.from_dict(data)
    elif node_type == 'BinaryOp':
        return BinaryOp.from_dict(data)
    elif node_type == 'MixOp':
        return MixOp.from_dict(data)
    else:
        raise ValueError(f"Unknown node type: {node_type}")

def evaluate(node: ASTNode, x: float, y: float, t: float) -> float:
    """Evaluate a tree at a single point"""
    with np.errstate(all='ignore'):
        return float(node.evaluate(x, y, t))

def render(node: ASTNode) -> str:
    """Canonical text form of a tree"""
    return str(node)

# Primitive sets
VARIABLES = ['x', 'y', 't']
UNARY_OPS = ['sqrt', 'sin', 'cos']
BINARY_OPS = ['add', 'mult', 'mod', 'div', 'avg']
