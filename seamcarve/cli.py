"""
Command-line front end.

    seamcarve path/to/img.png NEW_WIDTH NEW_HEIGHT

Writes ``path/to/img_carved.png`` unless --output is given.
"""

import argparse
import logging
import sys

from .carving import resize
from .energy import compute_energy
from .errors import SeamCarvingError
from .image_io import carved_path, energy_image, load_image, save_image

logger = logging.getLogger(__name__)


def _configure_logging(level: str):
    logging.basicConfig(
        level=getattr(logging, level),
        format="%(message)s",
        stream=sys.stderr,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='seamcarve',
        description="Content-aware image resizing with seam carving"
    )
    parser.add_argument(
        'image',
        type=str,
        help='Path to the source image'
    )
    parser.add_argument(
        'width',
        type=int,
        help='Target width in pixels'
    )
    parser.add_argument(
        'height',
        type=int,
        help='Target height in pixels'
    )
    parser.add_argument(
        '--output',
        type=str,
        help='Output path (default: <image>_carved.<ext> next to the input)'
    )
    parser.add_argument(
        '--strict',
        action='store_true',
        help='Reject targets larger than the source instead of inserting seams'
    )
    parser.add_argument(
        '--energy-map',
        type=str,
        help='Also save the energy map of the source image to this path'
    )
    parser.add_argument(
        '--log-level',
        type=str.upper,
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        default='WARNING',
        help='Logging level (default: WARNING)'
    )
    return parser


def run(args: argparse.Namespace):
    """Load, carve and save according to parsed arguments."""
    image = load_image(args.image)
    logger.info(f"Loaded {args.image} ({image.width}x{image.height})")

    if args.energy_map:
        energy_image(compute_energy(image)).save(args.energy_map)
        print(f"Saved energy map: {args.energy_map}")

    carved = resize(image, args.width, args.height,
                    allow_growth=not args.strict)

    output = args.output or carved_path(args.image)
    save_image(carved, output)
    print(f"Saved: {output} ({carved.width}x{carved.height})")


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.log_level)

    try:
        run(args)
    except (SeamCarvingError, OSError) as e:
        print(f"Application error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
