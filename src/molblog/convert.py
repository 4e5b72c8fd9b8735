"""
Format interconversion between line notations (SMILES, InChI) and
structure-data files (molblock / SDF).

Single conversions raise ConversionError. File-level readers and writers skip
records that fail and log them, so one bad row does not abort the file.
"""

import csv
import logging
import math
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Union

import pandas as pd
from rdkit import Chem
from rdkit.Chem import AllChem

from .config import DEFAULT_PARSE_CONFIG, ParseConfig
from .core import build_mol
from .utils import ConversionError, MolBlogError, canonical_smiles

logger = logging.getLogger(__name__)

FILE_FORMATS = (".smi", ".csv", ".sdf")


def _mol_or_raise(identifier: str, config: ParseConfig = DEFAULT_PARSE_CONFIG) -> Chem.Mol:
    mol, report = build_mol(identifier, config)
    if mol is None:
        reasons = "; ".join(report["reasons"]) or report["decision"]
        raise ConversionError(f"cannot convert {identifier!r}: {reasons}")
    return mol


def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    return isinstance(value, str) and not value.strip()


# ==========================================================
# single-molecule conversions
# ==========================================================

def smiles_to_molblock(smiles: str, name: str = "") -> str:
    """SMILES -> V2000 molblock with 2D coordinates."""
    mol = Chem.Mol(_mol_or_raise(smiles))
    AllChem.Compute2DCoords(mol)
    if name:
        mol.SetProp("_Name", name)
    return Chem.MolToMolBlock(mol)


def molblock_to_smiles(molblock: str) -> str:
    return canonical_smiles(_mol_or_raise(molblock))


def smiles_to_inchi(smiles: str) -> str:
    inchi = Chem.MolToInchi(_mol_or_raise(smiles))
    if not inchi:
        raise ConversionError(f"InChI generation failed for {smiles!r}")
    return inchi


def smiles_to_inchikey(smiles: str) -> str:
    key = Chem.MolToInchiKey(_mol_or_raise(smiles))
    if not key:
        raise ConversionError(f"InChIKey generation failed for {smiles!r}")
    return key


def inchi_to_smiles(inchi: str) -> str:
    if not isinstance(inchi, str) or not inchi.strip().startswith("InChI="):
        raise ConversionError(f"not an InChI string: {inchi!r}")
    return canonical_smiles(_mol_or_raise(inchi))


# ==========================================================
# SDF
# ==========================================================

def write_sdf(
    records: Iterable[Mapping[str, Any]],
    path: Union[str, Path],
    smiles_key: str = "smiles",
    name_key: str = "name",
) -> int:
    """
    Write records to an SD file.

    Each record needs a SMILES under ``smiles_key``; ``name_key`` becomes the
    molecule title, every other non-empty value becomes an SD tag.

    Returns:
        number of molecules written
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    written = 0
    writer = Chem.SDWriter(str(path))
    try:
        for i, record in enumerate(records):
            smiles = record.get(smiles_key)
            try:
                mol = Chem.Mol(_mol_or_raise(smiles))
            except (ConversionError, TypeError) as e:
                logger.warning("skipping record %d (%s): %s", i, record.get(name_key), e)
                continue

            AllChem.Compute2DCoords(mol)
            mol.SetProp("_Name", str(record.get(name_key) or ""))
            for key, value in record.items():
                if key in (smiles_key, name_key) or _is_missing(value):
                    continue
                mol.SetProp(str(key), str(value))
            mol.SetProp(smiles_key, str(smiles))

            writer.write(mol)
            written += 1
    finally:
        writer.close()

    logger.info("wrote %d molecules to %s", written, path)
    return written


def read_sdf(path: Union[str, Path]) -> pd.DataFrame:
    """
    Read an SD file into a DataFrame with columns name, smiles and every SD tag seen.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"SDF file not found: {path}")

    rows: List[Dict[str, Any]] = []
    supplier = Chem.SDMolSupplier(str(path), sanitize=True, removeHs=True)
    for i, mol in enumerate(supplier):
        if mol is None:
            logger.warning("skipping unreadable record %d in %s", i, path)
            continue
        # GetProp keeps tags as written ("007" stays "007")
        row: Dict[str, Any] = {key: mol.GetProp(key) for key in mol.GetPropNames()}
        row["name"] = mol.GetProp("_Name") if mol.HasProp("_Name") else ""
        # a stored smiles tag is only a copy; the structure itself is authoritative
        row["smiles"] = canonical_smiles(mol)
        rows.append(row)

    df = pd.DataFrame(rows)
    if df.empty:
        return pd.DataFrame(columns=["name", "smiles"])
    leading = ["name", "smiles"]
    return df[leading + [c for c in df.columns if c not in leading]]


# ==========================================================
# file-level conversion
# ==========================================================

def _read_records(src: Path) -> List[Dict[str, Any]]:
    suffix = src.suffix.lower()
    if suffix == ".sdf":
        return read_sdf(src).to_dict(orient="records")
    if suffix == ".csv":
        df = pd.read_csv(src, dtype=str, keep_default_na=False)
        df.columns = [c.strip().lower() for c in df.columns]
        if "smiles" not in df.columns:
            raise ConversionError(f"{src} has no 'smiles' column: {list(df.columns)}")
        return df.to_dict(orient="records")
    if suffix == ".smi":
        records = []
        with open(src, encoding="utf-8") as fh:
            for i, line in enumerate(fh):
                parts = line.strip().split(None, 1)
                if not parts or parts[0].startswith("#"):
                    continue
                name = parts[1] if len(parts) > 1 else f"mol{i + 1}"
                records.append({"smiles": parts[0], "name": name})
        return records
    raise ConversionError(f"unsupported input format {suffix!r}, expected one of {FILE_FORMATS}")


def _write_records(records: List[Dict[str, Any]], dst: Path) -> int:
    suffix = dst.suffix.lower()
    if suffix == ".sdf":
        return write_sdf(records, dst)

    if suffix not in (".csv", ".smi"):
        raise ConversionError(f"unsupported output format {suffix!r}, expected one of {FILE_FORMATS}")

    rows = []
    for i, record in enumerate(records):
        try:
            smiles = canonical_smiles(_mol_or_raise(record.get("smiles")))
        except (MolBlogError, TypeError) as e:
            logger.warning("skipping record %d (%s): %s", i, record.get("name"), e)
            continue
        rows.append({**record, "smiles": smiles})

    dst.parent.mkdir(parents=True, exist_ok=True)
    if suffix == ".csv":
        df = pd.DataFrame(rows)
        if df.empty:
            df = pd.DataFrame(columns=["name", "smiles"])
        df.to_csv(dst, index=False, quoting=csv.QUOTE_MINIMAL)
    else:
        with open(dst, "w", encoding="utf-8") as fh:
            for row in rows:
                fh.write(f"{row['smiles']}\t{row.get('name', '')}\n")
    return len(rows)


def convert_file(src: Union[str, Path], dst: Union[str, Path]) -> int:
    """
    Convert between .smi, .csv and .sdf by file extension.

    Returns:
        number of molecules written to dst
    """
    src, dst = Path(src), Path(dst)
    if not src.exists():
        raise FileNotFoundError(f"input file not found: {src}")

    records = _read_records(src)
    n = _write_records(records, dst)
    logger.info("converted %s -> %s (%d of %d records)", src, dst, n, len(records))
    return n
