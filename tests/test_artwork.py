"""Tests for artwork persistence."""

import pytest

from random_art.artwork import Artwork
from random_art.ast_nodes import Variable
from random_art.evaluator import Evaluator


class TestArtwork:
    """Test the channel tree container."""

    def test_missing_channel(self):
        with pytest.raises(ValueError):
            Artwork({'r': Variable('x'), 'g': Variable('y')})

    def test_describe(self):
        artwork = Artwork({'b': Variable('t'), 'r': Variable('x'), 'g': Variable('y')})
        assert artwork.describe() == "R: x\nG: y\nB: t"

    def test_complexity_and_depth(self):
        artwork = Artwork({'r': Variable('x'), 'g': Variable('y'), 'b': Variable('t')})
        assert artwork.get_complexity() == 3
        assert artwork.get_depth() == 1

    def test_json_round_trip(self, tmp_path):
        artwork = Artwork.from_seed("persist", 7)
        filename = tmp_path / "artwork.json"
        artwork.to_json(str(filename))

        restored = Artwork.from_json(filename=str(filename))
        assert restored.describe() == artwork.describe()
        assert restored.seed == "persist"
        assert restored.depth == 7

        evaluator = Evaluator()
        original = evaluator.render_pixels(artwork, 12, 9)
        reloaded = evaluator.render_pixels(restored, 12, 9)
        assert original.tobytes() == reloaded.tobytes()

    def test_copy(self):
        artwork = Artwork.from_seed("copy", 5)
        clone = artwork.copy()
        assert clone.describe() == artwork.describe()
        assert clone.trees['r'] is not artwork.trees['r']

    def test_str(self):
        text = str(Artwork.from_seed("summary", 3))
        assert text.startswith("Artwork (seed: 'summary', depth: 3):")
