"""Tests for expression tree nodes."""

import math

import numpy as np
import pytest

from random_art.ast_nodes import (
    BinaryOp,
    Constant,
    MixOp,
    UnaryOp,
    Variable,
    evaluate,
    node_from_dict,
    render,
)


def num(value):
    return Constant(value)


class TestTerminals:
    """Test terminal evaluation."""

    def test_variables_read_inputs(self):
        assert evaluate(Variable('x'), 0.25, -0.5, 3.0) == 0.25
        assert evaluate(Variable('y'), 0.25, -0.5, 3.0) == -0.5
        assert evaluate(Variable('t'), 0.25, -0.5, 3.0) == 3.0

    def test_constant(self):
        assert evaluate(num(0.75), 0.0, 0.0, 0.0) == 0.75

    def test_unknown_variable_rejected(self):
        with pytest.raises(ValueError):
            Variable('z')


class TestOperators:
    """Test operator semantics and guards."""

    def test_add_averages(self):
        assert evaluate(BinaryOp('add', num(0.5), num(0.25)), 0, 0, 0) == pytest.approx(0.375)

    def test_avg_matches_add(self):
        add = BinaryOp('add', Variable('x'), Variable('y'))
        avg = BinaryOp('avg', Variable('x'), Variable('y'))
        for x, y in [(0.1, 0.9), (-1.0, 0.3), (0.0, 0.0)]:
            assert evaluate(add, x, y, 0) == evaluate(avg, x, y, 0)

    def test_mult(self):
        assert evaluate(BinaryOp('mult', num(0.5), num(-0.4)), 0, 0, 0) == pytest.approx(-0.2)

    def test_div_by_zero_is_zero(self):
        assert evaluate(BinaryOp('div', num(1), num(0)), 0, 0, 0) == 0

    def test_div_by_tiny_is_zero(self):
        assert evaluate(BinaryOp('div', num(1), num(1e-7)), 0, 0, 0) == 0
        assert evaluate(BinaryOp('div', num(1), num(-1e-7)), 0, 0, 0) == 0

    def test_div(self):
        assert evaluate(BinaryOp('div', num(1), num(4)), 0, 0, 0) == pytest.approx(0.25)

    def test_mod_by_zero_is_zero(self):
        assert evaluate(BinaryOp('mod', num(5), num(0)), 0, 0, 0) == 0

    def test_mod_sign_follows_dividend(self):
        assert evaluate(BinaryOp('mod', num(-5), num(3)), 0, 0, 0) == pytest.approx(-2.0)
        assert evaluate(BinaryOp('mod', num(5), num(-3)), 0, 0, 0) == pytest.approx(2.0)

    def test_sqrt_of_negative_is_zero(self):
        assert evaluate(UnaryOp('sqrt', num(-4)), 0, 0, 0) == 0

    def test_sqrt(self):
        assert evaluate(UnaryOp('sqrt', num(0.25)), 0, 0, 0) == pytest.approx(0.5)

    def test_trig(self):
        assert evaluate(UnaryOp('sin', num(0.5)), 0, 0, 0) == pytest.approx(math.sin(0.5))
        assert evaluate(UnaryOp('cos', num(0.5)), 0, 0, 0) == pytest.approx(math.cos(0.5))

    def test_mix(self):
        node = MixOp(num(0.5), num(0.25), num(1.0), num(-1.0))
        expected = (0.5 * 1.0 + 0.25 * -1.0) / (0.5 + 0.25 + 1e-6)
        assert evaluate(node, 0, 0, 0) == pytest.approx(expected)

    def test_mix_is_not_clamped(self):
        node = MixOp(num(0.5), num(-0.5), num(1.0), num(0.0))
        assert evaluate(node, 0, 0, 0) > 1.0

    def test_unknown_operator_rejected(self):
        with pytest.raises(ValueError):
            BinaryOp('pow', num(1), num(2))
        with pytest.raises(ValueError):
            UnaryOp('tanh', num(1))

    def test_array_evaluation_matches_scalar(self):
        tree = BinaryOp('div', UnaryOp('sin', Variable('x')),
                        BinaryOp('mod', Variable('y'), num(0.3)))
        xs = np.array([-0.9, -0.1, 0.0, 0.4])
        ys = np.array([0.2, 0.0, -0.7, 0.3])
        with np.errstate(all='ignore'):
            values = tree.evaluate(xs, ys, 0.0)
        for i in range(len(xs)):
            assert values[i] == pytest.approx(evaluate(tree, xs[i], ys[i], 0.0))


class TestRender:
    """Test canonical text form."""

    def test_terminals(self):
        assert render(Variable('x')) == 'x'
        assert render(Variable('y')) == 'y'
        assert render(Variable('t')) == 't'
        assert render(num(0.5)) == '0.5'

    def test_nested(self):
        tree = BinaryOp('add', Variable('x'), UnaryOp('sin', Variable('y')))
        assert render(tree) == 'add(x, sin(y))'

    def test_binary_names(self):
        for op in ['mult', 'mod', 'div', 'avg']:
            assert render(BinaryOp(op, Variable('x'), Variable('t'))) == f'{op}(x, t)'

    def test_mix(self):
        tree = MixOp(Variable('x'), Variable('y'), Variable('t'), num(-0.25))
        assert render(tree) == 'mix(x, y, t, -0.25)'


class TestTreeUtilities:
    """Test structure helpers and serialization."""

    def test_depth_and_nodes(self):
        tree = MixOp(Variable('x'), UnaryOp('cos', Variable('y')), num(0.1), Variable('t'))
        assert tree.get_depth() == 3
        assert len(tree.get_all_nodes()) == 6
        assert not tree.is_terminal
        assert Variable('x').is_terminal

    def test_dict_round_trip(self):
        tree = BinaryOp('mod', MixOp(Variable('x'), Variable('y'), num(0.3), Variable('t')),
                        UnaryOp('sqrt', num(-0.2)))
        restored = node_from_dict(tree.to_dict())
        assert restored == tree
        assert render(restored) == render(tree)

    def test_unknown_node_type(self):
        with pytest.raises(ValueError):
            node_from_dict({'type': 'NoiseOp'})

    def test_copy_is_independent(self):
        tree = UnaryOp('sin', Variable('x'))
        clone = tree.copy()
        assert clone == tree
        assert clone.child is not tree.child
