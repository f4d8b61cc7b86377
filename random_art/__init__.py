"""
random_art - Seed-reproducible images from random expression trees

Three random expression trees over (x, y, t), one per RGB channel, are
evaluated at every pixel to give the channel intensities.
"""

__version__ = "0.1.0"
__author__ = "Random Art Project"

from .ast_nodes import (
    ASTNode, Variable, Constant, UnaryOp, BinaryOp, MixOp,
    node_from_dict, evaluate, render,
    VARIABLES, UNARY_OPS, BINARY_OPS
)
from .generator import ExpressionGenerator, seed_from_string, OPERATOR_KINDS
from .artwork import Artwork
from .evaluator import Evaluator, generate_image, quantize, save_image

__all__ = [
    'ASTNode', 'Variable', 'Constant', 'UnaryOp', 'BinaryOp', 'MixOp',
    'node_from_dict', 'evaluate', 'render',
    'VARIABLES', 'UNARY_OPS', 'BINARY_OPS',
    'ExpressionGenerator', 'seed_from_string', 'OPERATOR_KINDS',
    'Artwork',
    'Evaluator', 'generate_image', 'quantize', 'save_image'
]
