"""
Display tables that pair molecules with their generated images.

A catalog (name, smiles, category) is loaded from CSV, images are attached by
path into one column, and the result is formatted as a Markdown pipe table,
an HTML table or an SQLite table.
"""

import html
import logging
import sqlite3
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

import pandas as pd

from .batch import PLACEHOLDER, render_batch
from .config import DEFAULT_DEPICT_CONFIG, DEFAULT_PARSE_CONFIG, DepictConfig, ParseConfig

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ("name", "smiles", "category")
TABLE_COLUMNS = REQUIRED_COLUMNS + ("image_path",)


@dataclass
class MoleculeRow:
    name: str
    smiles: str
    category: str = ""
    image_path: Optional[str] = None


# ==========================================================
# building the table
# ==========================================================

def load_catalog(
    csv_file: Union[str, Path],
    column_map: Optional[Mapping[str, str]] = None,
) -> pd.DataFrame:
    """
    Read a molecule catalog CSV.

    Parameters
    ----------
    csv_file : str or Path
        Input CSV.
    column_map : mapping, optional
        Renames source columns, e.g. {"Compound": "name", "SMILES": "smiles"}.
    """
    csv_file = Path(csv_file)
    if not csv_file.exists():
        raise FileNotFoundError(f"CSV file not found: {csv_file}")

    df = pd.read_csv(csv_file, dtype=str, keep_default_na=False)
    df.columns = [c.strip() for c in df.columns]
    if column_map:
        df = df.rename(columns=dict(column_map))
    # same header convention as convert._read_records
    df.columns = [c.lower() for c in df.columns]

    missing_columns = [col for col in REQUIRED_COLUMNS if col not in df.columns]
    if missing_columns:
        raise ValueError(f"Missing required columns: {missing_columns}")

    for col in df.columns:
        df[col] = df[col].str.strip()

    logger.info("loaded %d catalog rows from %s", len(df), csv_file)
    return df.reset_index(drop=True)


def build_table(rows: Iterable[Union[MoleculeRow, Mapping[str, Any]]]) -> pd.DataFrame:
    records: List[Dict[str, Any]] = []
    for row in rows:
        if isinstance(row, MoleculeRow):
            records.append(asdict(row))
        else:
            records.append({col: row.get(col) for col in TABLE_COLUMNS})
    return pd.DataFrame(records, columns=list(TABLE_COLUMNS))


def attach_images(
    df: pd.DataFrame,
    image_dir: Union[str, Path],
    config: DepictConfig = DEFAULT_DEPICT_CONFIG,
    parse_config: ParseConfig = DEFAULT_PARSE_CONFIG,
    placeholder: Any = PLACEHOLDER,
    relative_to: Optional[Union[str, Path]] = None,
    progress: bool = False,
) -> pd.DataFrame:
    """
    Render one image per row and store its path in the ``image_path`` column.

    Returns a new DataFrame; df is left untouched. Rows that fail keep the
    placeholder. With ``relative_to`` the stored paths are relative to it
    (POSIX separators), which is what a page links to.
    """
    out = df.copy()
    paths = render_batch(
        out["smiles"].tolist(),
        image_dir,
        names=out["name"].tolist(),
        config=config,
        parse_config=parse_config,
        placeholder=placeholder,
        progress=progress,
    )
    if relative_to is not None:
        base = Path(relative_to).resolve()
        paths = [
            p if p == placeholder else Path(p).resolve().relative_to(base).as_posix()
            for p in paths
        ]
    out["image_path"] = pd.Series(paths, index=out.index, dtype=object)
    return out


# ==========================================================
# output formats
# ==========================================================

def _has_image(value: Any) -> bool:
    return isinstance(value, (str, Path)) and str(value) != ""


def _image_url(path: Any, url_prefix: str) -> str:
    path = Path(path).as_posix()
    if not url_prefix:
        return path
    return f"{url_prefix.rstrip('/')}/{Path(path).name}"


def _is_missing(value: Any) -> bool:
    """None, NaN and pd.NA; newer pandas stores missing strings as NaN."""
    return value is None or (pd.api.types.is_scalar(value) and pd.isna(value))


# backslash first, so the escapes added for the others are not escaped again
_MD_SPECIAL = ("\\", "|", "[", "]", "*", "_", "`")


def _md_cell(value: Any) -> str:
    if _is_missing(value):
        return ""
    text = str(value).replace("\n", " ")
    for ch in _MD_SPECIAL:
        text = text.replace(ch, "\\" + ch)
    return text


def to_markdown(
    df: pd.DataFrame,
    image_column: str = "image_path",
    url_prefix: str = "",
    placeholder_text: str = "n/a",
) -> str:
    """
    Pipe table with the image column rendered as ``![name](url)``.

    With url_prefix the image cell links to ``url_prefix/<file name>``,
    otherwise to the stored path as-is.
    """
    columns = [c for c in df.columns if c != image_column]
    header = ["image"] + columns if image_column in df.columns else columns

    lines = [
        "| " + " | ".join(header) + " |",
        "|" + "|".join(["---"] * len(header)) + "|",
    ]
    for _, row in df.iterrows():
        cells = []
        if image_column in df.columns:
            value = row[image_column]
            if _has_image(value):
                alt = _md_cell(row.get("name", ""))
                cells.append(f"![{alt}]({_image_url(value, url_prefix)})")
            else:
                cells.append(placeholder_text)
        cells.extend(_md_cell(row[c]) for c in columns)
        lines.append("| " + " | ".join(cells) + " |")

    return "\n".join(lines) + "\n"


def to_html(
    df: pd.DataFrame,
    image_column: str = "image_path",
    url_prefix: str = "",
    width: int = 150,
    placeholder_text: str = "n/a",
) -> str:
    out = df.copy()
    for col in out.columns:
        if col == image_column:
            continue
        out[col] = out[col].map(lambda v: "" if _is_missing(v) else html.escape(str(v)))

    if image_column in out.columns:
        def _img(row):
            value = row[image_column]
            if not _has_image(value):
                return html.escape(placeholder_text)
            src = html.escape(_image_url(value, url_prefix), quote=True)
            alt = row["name"] if "name" in out.columns else ""
            return f'<img src="{src}" alt="{alt}" width="{int(width)}">'

        out[image_column] = out.apply(_img, axis=1)
        out = out[[image_column] + [c for c in out.columns if c != image_column]]
        out = out.rename(columns={image_column: "image"})

    return out.to_html(index=False, escape=False, border=0, classes="molecule-table")


def to_sqlite(
    df: pd.DataFrame,
    db_file: Union[str, Path],
    table_name: str = "molecules",
) -> int:
    """
    Write the table to SQLite (replacing any existing table) and index it by name.

    Returns
    -------
    int
        number of rows in the table afterwards
    """
    db_file = Path(db_file)
    db_file.parent.mkdir(parents=True, exist_ok=True)

    out = df.copy()
    for col in out.columns:
        values = [None if _is_missing(v) else str(v) for v in out[col]]
        out[col] = pd.Series(values, index=out.index, dtype=object)

    with sqlite3.connect(db_file) as conn:
        cursor = conn.cursor()
        out.to_sql(table_name, conn, if_exists="replace", index=False)
        if "name" in out.columns:
            cursor.execute(
                f'CREATE INDEX IF NOT EXISTS "idx_{table_name}_name" ON "{table_name}"(name);'
            )
        cursor.execute(f'SELECT COUNT(*) FROM "{table_name}"')
        count = cursor.fetchone()[0]

    logger.info("wrote %d rows to %s (table: %s)", count, db_file, table_name)
    return count
