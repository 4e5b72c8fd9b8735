"""
Document build: regenerate the molecule images and tables a post embeds.

Nothing persists between builds except the files written here; every run
renders everything again from the catalog.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Union

from .config import (
    DEFAULT_DEPICT_CONFIG,
    DEFAULT_PARSE_CONFIG,
    DEFAULT_SITE_CONFIG,
    DepictConfig,
    ParseConfig,
    SiteConfig,
)
from .convert import write_sdf
from .table import attach_images, load_catalog, to_html, to_markdown

logger = logging.getLogger(__name__)

TABLE_STEM = "molecules"


def build_post_assets(
    catalog_csv: Union[str, Path],
    post_slug: str,
    site_config: SiteConfig = DEFAULT_SITE_CONFIG,
    depict_config: DepictConfig = DEFAULT_DEPICT_CONFIG,
    parse_config: ParseConfig = DEFAULT_PARSE_CONFIG,
    sdf: bool = True,
    progress: bool = False,
) -> Dict[str, Any]:
    """
    Render the images of one post and write its table fragments.

    Layout (relative to site_config.root):
        static/<image_subdir>/<post_slug>/<name>.png
        content/post/<post_slug>/molecules.md
        content/post/<post_slug>/molecules.html
        content/post/<post_slug>/molecules.sdf   (if sdf=True)
    """
    df = load_catalog(catalog_csv)

    image_dir = site_config.image_dir(post_slug)
    post_dir = site_config.post_dir(post_slug)
    post_dir.mkdir(parents=True, exist_ok=True)

    table = attach_images(
        df,
        image_dir,
        config=depict_config,
        parse_config=parse_config,
        progress=progress,
    )
    url_prefix = site_config.image_url(post_slug)

    table_md = post_dir / f"{TABLE_STEM}.md"
    table_md.write_text(to_markdown(table, url_prefix=url_prefix), encoding="utf-8")

    table_html = post_dir / f"{TABLE_STEM}.html"
    table_html.write_text(
        to_html(table, url_prefix=url_prefix, width=depict_config.width // 2),
        encoding="utf-8",
    )

    sdf_path = None
    if sdf:
        sdf_path = post_dir / f"{TABLE_STEM}.sdf"
        write_sdf(df.to_dict(orient="records"), sdf_path)

    rendered = int(table["image_path"].notna().sum())
    summary = {
        "rows": len(table),
        "rendered": rendered,
        "failed": len(table) - rendered,
        "table_md": table_md,
        "table_html": table_html,
        "sdf": sdf_path,
    }
    logger.info(
        "post %s: %d rows, %d rendered, %d failed",
        post_slug, summary["rows"], summary["rendered"], summary["failed"],
    )
    return summary


def list_pages(content_dir: Union[str, Path]) -> List[Path]:
    """All Markdown pages under content_dir, sorted, generated table fragments excluded."""
    content_dir = Path(content_dir)
    if not content_dir.is_dir():
        raise FileNotFoundError(f"content directory not found: {content_dir}")
    return sorted(p for p in content_dir.rglob("*.md") if p.stem != TABLE_STEM)
