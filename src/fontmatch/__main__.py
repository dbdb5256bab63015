import argparse
import json
import logging
import sys
from dataclasses import replace

from fontmatch import FontResolver, ResolverConfig, StyleDescriptor
from fontmatch.config import BACKENDS
from fontmatch.core.constants import FONT_STYLES, FONT_WEIGHTS


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Resolve a font family, weight and style to an installed font"
    )
    parser.add_argument(
        "family",
        metavar="FAMILY",
        type=str,
        nargs="?",
        default=None,
        help="Font family or face name. Default: the system font.",
    )
    parser.add_argument(
        "--weight",
        metavar="WEIGHT",
        type=str,
        choices=list(FONT_WEIGHTS),
        default=None,
        help="Font weight (normal, bold, 100-900). Default: normal",
    )
    parser.add_argument(
        "--style",
        metavar="STYLE",
        type=str,
        choices=list(FONT_STYLES),
        default=None,
        help="Font style (normal, italic, oblique). Default: normal",
    )
    parser.add_argument(
        "--size",
        metavar="SIZE",
        type=float,
        default=None,
        help="Font size in points. Default: 14",
    )
    parser.add_argument(
        "--backend",
        metavar="BACKEND",
        type=str,
        choices=BACKENDS,
        default=None,
        help=(
            "Font registry backend (fontconfig, files). "
            "Default: fontconfig if available"
        ),
    )
    parser.add_argument(
        "--font-dir",
        metavar="PATH",
        dest="font_dirs",
        action="append",
        default=[],
        help="Additional font directory for the files backend. Can be repeated.",
    )
    parser.add_argument(
        "--loglevel",
        metavar="LEVEL",
        default="WARNING",
        help="Logging level, default WARNING",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Resolve one style and print the font as JSON."""
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.loglevel.upper(), "WARNING"))

    config = ResolverConfig.default()
    config = replace(
        config,
        backend=args.backend or config.backend,
        font_dirs=config.font_dirs + args.font_dirs,
    )
    resolver = FontResolver(config=config)
    style = StyleDescriptor(
        font_family=args.family,
        font_weight=args.weight,
        font_style=args.style,
        font_size=args.size,
    )

    font = resolver.resolve(style)
    if font is None:
        print(f"No font found for {style.to_dict()}", file=sys.stderr)
        return 1
    print(json.dumps(font.to_dict(), indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
