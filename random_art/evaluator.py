# ==========================================
# random_art/evaluator.py
# ==========================================
import numpy as np
from typing import List, Tuple, Union
from PIL import Image
from numba import jit

from .artwork import Artwork

class Evaluator:
    """Rasterizes artworks into RGB pixel buffers"""

    def create_coordinate_grids(self, width: int, height: int) -> Tuple[np.ndarray, np.ndarray]:
        """Map pixel indices to [-1, 1): n = (p / size) * 2 - 1"""
        if width < 1 or height < 1:
            raise ValueError(f"Image dimensions must be at least 1x1, got {width}x{height}")
        x = (np.arange(width, dtype=np.float64) / width) * 2.0 - 1.0
        y = (np.arange(height, dtype=np.float64) / height) * 2.0 - 1.0
        X, Y = np.meshgrid(x, y)
        return X, Y

    def render_pixels(self, artwork: Artwork, width: int, height: int,
                      t: float = 0.0) -> np.ndarray:
        """Evaluate every channel over the grid; returns a (height, width, 3) uint8 array"""
        X, Y = self.create_coordinate_grids(width, height)
        values = artwork.evaluate(X, Y, t)
        channels = [quantize(np.broadcast_to(values[channel], X.shape))
                    for channel in artwork.trees]
        return np.stack(channels, axis=-1)

    def render_image(self, artwork: Artwork, width: int = 512, height: int = 512,
                     t: float = 0.0, filename: str = None) -> Image.Image:
        """Render artwork as an image"""
        img = Image.fromarray(self.render_pixels(artwork, width, height, t), 'RGB')
        if filename:
            img.save(filename)
        return img

    def create_animation_frames(self, artwork: Artwork, width: int = 256, height: int = 256,
                                num_frames: int = 30,
                                t_range: Tuple[float, float] = (0, 2*np.pi)) -> List[Image.Image]:
        """Create animation frames by varying t parameter"""
        frames = []
        t_values = np.linspace(t_range[0], t_range[1], num_frames)
        for t in t_values:
            frames.append(self.render_image(artwork, width, height, float(t)))
        return frames

def quantize(values) -> np.ndarray:
    """Map values in about [-1, 1] to bytes: round((v + 1) / 2 * 255), clamped"""
    values = np.asarray(values, dtype=np.float64)
    flat = np.ascontiguousarray(values).ravel()
    out = np.empty(flat.shape[0], dtype=np.uint8)
    _quantize_kernel(flat, out)
    return out.reshape(values.shape)

@jit(nopython=True)
def _quantize_kernel(values, out):
    for i in range(values.shape[0]):
        v = values[i]
        if np.isnan(v):
            v = 0.0
        # Round half away from zero; negatives clamp to 0 anyway
        scaled = np.floor((v + 1.0) / 2.0 * 255.0 + 0.5)
        if scaled < 0.0:
            scaled = 0.0
        elif scaled > 255.0:
            scaled = 255.0
        out[i] = int(scaled)

def generate_image(seed: Union[str, int], width: int, height: int, depth: int,
                   t: float = 0.0) -> Tuple[np.ndarray, str]:
    """Generate the pixel buffer and channel description for a seed.

    Three trees (R, G, B) are drawn in order from one generator seeded with
    ``seed``, each limited to ``depth`` operator levels, then evaluated at
    every pixel. Nothing is written to disk.

    Returns a (height, width, 3) uint8 array, row-major with the origin at
    the top-left, and the text ``"R: ...\\nG: ...\\nB: ..."``.
    """
    artwork = Artwork.from_seed(seed, depth)
    pixels = Evaluator().render_pixels(artwork, width, height, t)
    return pixels, artwork.describe()

def save_image(pixels: np.ndarray, filename: str) -> Image.Image:
    """Write a pixel buffer from generate_image to an image file"""
    img = Image.fromarray(np.asarray(pixels, dtype=np.uint8), 'RGB')
    img.save(filename)
    return img
