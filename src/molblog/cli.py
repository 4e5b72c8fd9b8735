"""
molblog command line.

Usage:
    molblog parse "C1CC"
    molblog depict "CC(=O)Oc1ccccc1C(=O)O" -o aspirin.png
    molblog convert data/molecules.csv molecules.sdf
    molblog table data/molecules.csv --image-dir out/img --markdown out/table.md
    molblog build data/molecules.csv --post molecule-tables
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .config import DEFAULT_DEPICT_CONFIG, DepictConfig, SiteConfig
from .convert import convert_file
from .core import build_mol
from .depict import render_identifier
from .logging_config import setup_logging
from .site import build_post_assets
from .table import attach_images, load_catalog, to_html, to_markdown, to_sqlite
from .utils import MolBlogError, to_json_safe


def _depict_config(args: argparse.Namespace) -> DepictConfig:
    width, height = args.size
    return DepictConfig(
        width=width,
        height=height,
        image_format="svg" if args.svg else "png",
        legend_from_name=getattr(args, "legend", False),
    )


def _add_depict_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--size", nargs=2, type=int, metavar=("W", "H"),
        default=(DEFAULT_DEPICT_CONFIG.width, DEFAULT_DEPICT_CONFIG.height),
        help="image size in pixels (default: %(default)s)",
    )
    parser.add_argument("--svg", action="store_true", help="write SVG instead of PNG")


def cmd_depict(args: argparse.Namespace) -> int:
    path = render_identifier(args.identifier, args.output, config=_depict_config(args))
    print(f"Wrote {path}")
    return 0


def cmd_parse(args: argparse.Namespace) -> int:
    _, report = build_mol(args.identifier)
    print(to_json_safe(report))
    return 0 if report["decision"] == "accepted" else 1


def cmd_convert(args: argparse.Namespace) -> int:
    n = convert_file(args.src, args.dst)
    print(f"Converted {n} molecules: {args.src} -> {args.dst}")
    return 0


def cmd_table(args: argparse.Namespace) -> int:
    df = load_catalog(args.catalog)
    table = attach_images(df, args.image_dir, config=_depict_config(args), progress=args.progress)

    if args.markdown:
        Path(args.markdown).parent.mkdir(parents=True, exist_ok=True)
        Path(args.markdown).write_text(to_markdown(table), encoding="utf-8")
        print(f"Markdown table: {args.markdown}")
    if args.html:
        Path(args.html).parent.mkdir(parents=True, exist_ok=True)
        Path(args.html).write_text(to_html(table), encoding="utf-8")
        print(f"HTML table: {args.html}")
    if args.db:
        count = to_sqlite(table, args.db, args.table_name)
        print(f"SQLite table {args.table_name}: {count} rows in {args.db}")
    to_stdout = not (args.markdown or args.html or args.db)
    if to_stdout:
        print(to_markdown(table), end="")

    failed = int(table["image_path"].isna().sum())
    # keep stdout clean when it carries the table
    print(
        f"Rendered {len(table) - failed}/{len(table)} molecules",
        file=sys.stderr if to_stdout else sys.stdout,
    )
    return 0


def cmd_build(args: argparse.Namespace) -> int:
    summary = build_post_assets(
        args.catalog,
        args.post,
        site_config=SiteConfig(root=Path(args.root)),
        depict_config=_depict_config(args),
        sdf=not args.no_sdf,
        progress=args.progress,
    )
    print(f"Post: {args.post}")
    print(f"  rows:     {summary['rows']}")
    print(f"  rendered: {summary['rendered']}")
    print(f"  failed:   {summary['failed']}")
    print(f"  table:    {summary['table_md']}")
    if summary["sdf"] is not None:
        print(f"  sdf:      {summary['sdf']}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="molblog",
        description="Molecule depiction, format conversion and image tables for blog posts.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging (includes RDKit)")
    parser.add_argument("--log-file", help="also write the log to this file")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("parse", help="parse one identifier and print its report as JSON")
    p.add_argument("identifier", help="SMILES, InChI or molblock")
    p.set_defaults(func=cmd_parse)

    p = sub.add_parser("depict", help="render one molecule to an image")
    p.add_argument("identifier", help="SMILES or InChI")
    p.add_argument("-o", "--output", required=True, help="output image path")
    _add_depict_options(p)
    p.set_defaults(func=cmd_depict)

    p = sub.add_parser("convert", help="convert between .smi, .csv and .sdf")
    p.add_argument("src")
    p.add_argument("dst")
    p.set_defaults(func=cmd_convert)

    p = sub.add_parser("table", help="build a molecule table with images from a catalog CSV")
    p.add_argument("catalog", help="CSV with name, smiles, category columns")
    p.add_argument("--image-dir", required=True)
    p.add_argument("--markdown", help="write the Markdown table here")
    p.add_argument("--html", help="write the HTML table here")
    p.add_argument("--db", help="write the table to this SQLite file")
    p.add_argument("--table-name", default="molecules")
    p.add_argument("--legend", action="store_true", help="draw the name under each molecule")
    p.add_argument("--progress", action="store_true")
    _add_depict_options(p)
    p.set_defaults(func=cmd_table)

    p = sub.add_parser("build", help="regenerate the images and tables of one post")
    p.add_argument("catalog")
    p.add_argument("--post", required=True, help="post slug, e.g. molecule-tables")
    p.add_argument("--root", default=".", help="site root (default: current directory)")
    p.add_argument("--no-sdf", action="store_true", help="do not write molecules.sdf")
    p.add_argument("--legend", action="store_true")
    p.add_argument("--progress", action="store_true")
    _add_depict_options(p)
    p.set_defaults(func=cmd_build)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.WARNING, args.log_file)

    try:
        return args.func(args)
    except (MolBlogError, FileNotFoundError, ValueError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
