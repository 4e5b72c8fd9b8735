# src/molblog/__init__.py

"""
molblog

The small toolkit behind the blog's cheminformatics tutorials:
- SMILES / InChI / molblock → RDKit Mol, with a per-molecule report
- 2D depiction to PNG / SVG
- SMILES ⇄ SDF / InChI interconversion
- tables that embed generated molecule images (Markdown, HTML, SQLite)
"""

from .core import build_mol, parse_identifier
from .config import (
    ParseConfig,
    DepictConfig,
    SiteConfig,
    DEFAULT_PARSE_CONFIG,
    STRICT_PARSE_CONFIG,
    SALT_STRIPPING_PARSE_CONFIG,
    LENIENT_PARSE_CONFIG,
    DEFAULT_DEPICT_CONFIG,
    THUMBNAIL_DEPICT_CONFIG,
    SVG_DEPICT_CONFIG,
    DEFAULT_SITE_CONFIG,
)
from .depict import draw_mol, render_mol, render_identifier, grid_image
from .convert import (
    smiles_to_molblock,
    molblock_to_smiles,
    smiles_to_inchi,
    smiles_to_inchikey,
    inchi_to_smiles,
    write_sdf,
    read_sdf,
    convert_file,
)
from .batch import PLACEHOLDER, safe_map, render_batch, convert_batch
from .table import (
    MoleculeRow,
    load_catalog,
    build_table,
    attach_images,
    to_markdown,
    to_html,
    to_sqlite,
)
from .site import build_post_assets, list_pages
from .utils import (
    MolBlogError,
    InvalidIdentifierError,
    SanitizeMolError,
    DepictionError,
    ConversionError,
)

__all__ = [
    "build_mol",
    "parse_identifier",
    "ParseConfig",
    "DepictConfig",
    "SiteConfig",
    "DEFAULT_PARSE_CONFIG",
    "STRICT_PARSE_CONFIG",
    "SALT_STRIPPING_PARSE_CONFIG",
    "LENIENT_PARSE_CONFIG",
    "DEFAULT_DEPICT_CONFIG",
    "THUMBNAIL_DEPICT_CONFIG",
    "SVG_DEPICT_CONFIG",
    "DEFAULT_SITE_CONFIG",
    "draw_mol",
    "render_mol",
    "render_identifier",
    "grid_image",
    "smiles_to_molblock",
    "molblock_to_smiles",
    "smiles_to_inchi",
    "smiles_to_inchikey",
    "inchi_to_smiles",
    "write_sdf",
    "read_sdf",
    "convert_file",
    "PLACEHOLDER",
    "safe_map",
    "render_batch",
    "convert_batch",
    "MoleculeRow",
    "load_catalog",
    "build_table",
    "attach_images",
    "to_markdown",
    "to_html",
    "to_sqlite",
    "build_post_assets",
    "list_pages",
    "MolBlogError",
    "InvalidIdentifierError",
    "SanitizeMolError",
    "DepictionError",
    "ConversionError",
]

__version__ = "0.1.0"
