# src/molblog/config.py
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class ParseConfig:
    """
    Controls how a textual identifier (SMILES / InChI / molblock) becomes an RDKit Mol.

    Every field has an explicit meaning, no implicit rules.
    """

    # ========== parsing ==========
    sanitize: bool = True
    remove_hs: bool = True
    allow_empty: bool = False

    # ========== fragments (salts, solvents) ==========
    allow_multiple_fragments: bool = True
    keep_largest_fragment: bool = False

    # ========== output ==========
    canonicalize: bool = True


@dataclass(frozen=True)
class DepictConfig:
    """
    Controls 2D depiction of a molecule.
    """

    width: int = 300
    height: int = 300
    image_format: str = "png"  # "png" | "svg"

    kekulize: bool = True
    add_stereo_annotation: bool = False
    add_atom_indices: bool = False
    legend_from_name: bool = False

    bond_line_width: float = 2.0
    transparent_background: bool = False

    @property
    def suffix(self) -> str:
        return "." + self.image_format


@dataclass(frozen=True)
class SiteConfig:
    """
    Path bookkeeping for one document build, relative to the site root.
    """

    root: Path = Path(".")
    content_dir: str = "content"
    static_dir: str = "static"
    image_subdir: str = "images"
    image_url_prefix: str = "/images"

    def post_dir(self, post_slug: str) -> Path:
        return self.root / self.content_dir / "post" / post_slug

    def image_dir(self, post_slug: str) -> Path:
        return self.root / self.static_dir / self.image_subdir / post_slug

    def image_url(self, post_slug: str) -> str:
        return f"{self.image_url_prefix.rstrip('/')}/{post_slug}"


# ---------- common presets ----------

DEFAULT_PARSE_CONFIG = ParseConfig()
# default: sanitized, hydrogens removed, salts kept as-is

STRICT_PARSE_CONFIG = ParseConfig(
    allow_multiple_fragments=False,  # one connected molecule only
)

SALT_STRIPPING_PARSE_CONFIG = ParseConfig(
    keep_largest_fragment=True,
)

LENIENT_PARSE_CONFIG = ParseConfig(
    sanitize=False,  # fall back to the unsanitized Mol if sanitization fails
    allow_empty=True,
)

DEFAULT_DEPICT_CONFIG = DepictConfig()

THUMBNAIL_DEPICT_CONFIG = DepictConfig(
    width=150,
    height=150,
    bond_line_width=1.0,
)

SVG_DEPICT_CONFIG = DepictConfig(
    image_format="svg",
)

DEFAULT_SITE_CONFIG = SiteConfig()
