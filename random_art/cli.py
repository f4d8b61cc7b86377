"""
random_art/cli.py - Command-line interface
"""
import click
import os
import time
import numpy as np

from .artwork import Artwork
from .evaluator import Evaluator, generate_image, save_image

DEFAULT_SEED = 'SecretKey'
DEFAULT_SIZE = 600
DEFAULT_DEPTH = 18

@click.group()
def cli():
    """Random Art - Images from random expression trees"""
    pass

@cli.command()
@click.option('--seed', '-s', default=DEFAULT_SEED, help='Seed text')
@click.option('--width', '-w', default=DEFAULT_SIZE, type=click.IntRange(min=1), help='Image width')
@click.option('--height', '-h', default=DEFAULT_SIZE, type=click.IntRange(min=1), help='Image height')
@click.option('--depth', '-d', default=DEFAULT_DEPTH, help='Maximum tree depth per channel')
@click.option('--t', default=0.0, help='Time parameter value')
@click.option('--out', '-o', default='output.png', help='Output image filename')
@click.option('--save-json', help='Also save the channel trees to this JSON file')
@click.option('--print-expr', is_flag=True, help='Print the channel expressions')
@click.option('--verbose', '-v', is_flag=True, help='Verbose output')
def generate(seed, width, height, depth, t, out, save_json, print_expr, verbose):
    """Generate an image from a seed"""
    start_time = time.time()

    pixels, description = generate_image(seed, width, height, depth, t=t)
    try:
        save_image(pixels, out)
    except (OSError, ValueError) as e:
        raise click.ClickException(f"Could not save image {out}: {e}")

    if print_expr:
        click.echo(f"Generated expressions:\n{description}")

    if save_json:
        artwork = Artwork.from_seed(seed, depth)
        try:
            artwork.to_json(save_json)
        except OSError as e:
            raise click.ClickException(f"Could not save artwork {save_json}: {e}")
        click.echo(f"Artwork saved: {save_json}")

    click.echo(f"Image saved: {out}")
    if verbose:
        click.echo(f"Size: {width}x{height}, Depth: {depth}, "
                   f"Render time: {time.time() - start_time:.2f}s")

@cli.command()
@click.option('--artwork', '-a', 'artwork_file', required=True, help='Path to artwork JSON file')
@click.option('--t', default=0.0, help='Time parameter value')
@click.option('--size', default=512, type=click.IntRange(min=1), help='Output size')
@click.option('--out', '-o', help='Output filename (optional)')
@click.option('--frames', default=0, help='Create animation with N frames')
@click.option('--verbose', '-v', is_flag=True, help='Verbose output')
def render(artwork_file, t, size, out, frames, verbose):
    """Render an artwork from JSON file"""
    try:
        artwork = Artwork.from_json(filename=artwork_file)
    except (OSError, ValueError, KeyError) as e:
        raise click.ClickException(f"Error loading artwork: {e}")

    click.echo(f"Loaded artwork: {artwork_file}")
    if verbose:
        click.echo(f"Complexity: {artwork.get_complexity()}, Depth: {artwork.get_depth()}")

    evaluator = Evaluator()

    # Generate output filename if not provided
    if not out:
        base_name = os.path.splitext(os.path.basename(artwork_file))[0]
        if frames > 0:
            out = f"{base_name}_anim"
        else:
            out = f"{base_name}_t{t:.2f}.png"

    start_time = time.time()

    if frames > 0:
        click.echo(f"Creating {frames} frame animation...")
        animation_frames = evaluator.create_animation_frames(
            artwork, size, size, num_frames=frames,
            t_range=(t, t + 2*np.pi)
        )

        os.makedirs(out, exist_ok=True)
        for i, frame in enumerate(animation_frames):
            frame_file = os.path.join(out, f"frame_{i:04d}.png")
            frame.save(frame_file)

        click.echo(f"Animation frames saved to: {out}/")
    else:
        try:
            evaluator.render_image(artwork, size, size, t=t, filename=out)
        except (OSError, ValueError) as e:
            raise click.ClickException(f"Could not save image {out}: {e}")
        click.echo(f"Image saved: {out}")

    if verbose:
        click.echo(f"Render time: {time.time() - start_time:.2f}s")

@cli.command()
@click.option('--seed', '-s', default=DEFAULT_SEED, help='Seed text')
@click.option('--depth', '-d', default=DEFAULT_DEPTH, help='Maximum tree depth per channel')
def describe(seed, depth):
    """Print the channel expressions for a seed"""
    click.echo(Artwork.from_seed(seed, depth).describe())

if __name__ == '__main__':
    cli()
