"""
molblog.utils

Notation handling shared by the other modules:
- detect which line notation / file format a piece of text is written in
- parse it with the matching RDKit reader (one parse, explicit sanitize)
- fragment helpers, canonical SMILES, file-name slugs
- the exception hierarchy raised by the library

Usage:
    from molblog.utils import mol_from_identifier, canonical_smiles
    mol = mol_from_identifier("CC(=O)Oc1ccccc1C(=O)O")
"""

import json
import re
import unicodedata
from typing import List, Optional

from rdkit import Chem


# -------------------------
# exception types
# -------------------------
class MolBlogError(Exception):
    """Base error"""
    pass

class InvalidIdentifierError(MolBlogError):
    """Text could not be parsed into a Mol"""
    pass

class SanitizeMolError(MolBlogError):
    """RDKit SanitizeMol failed"""
    pass

class DepictionError(MolBlogError):
    """Rendering a Mol to an image failed"""
    pass

class ConversionError(MolBlogError):
    """Format interconversion failed"""
    pass


# -------------------------
# notation detection
# -------------------------
NOTATION_SMILES = "smiles"
NOTATION_INCHI = "inchi"
NOTATION_MOLBLOCK = "molblock"

_COUNTS_LINE_RX = re.compile(r"^.{33,}V[23]000\s*$", re.MULTILINE)


def detect_notation(text: str) -> str:
    if not isinstance(text, str) or not text.strip():
        raise InvalidIdentifierError("identifier is empty or not a string")

    if text.lstrip().startswith("InChI="):
        return NOTATION_INCHI
    if "M  END" in text or _COUNTS_LINE_RX.search(text):
        return NOTATION_MOLBLOCK
    return NOTATION_SMILES


def _read_unsanitized(text: str, notation: str, remove_hs: bool) -> Optional[Chem.Mol]:
    if notation == NOTATION_MOLBLOCK:
        return Chem.MolFromMolBlock(text, sanitize=False, removeHs=False)
    if notation == NOTATION_INCHI:
        # the InChI reader has no unsanitized mode
        return Chem.MolFromInchi(text.strip(), sanitize=True, removeHs=remove_hs)
    return Chem.MolFromSmiles(text.strip(), sanitize=False)


def mol_from_identifier(
    text: str,
    sanitize: bool = True,
    remove_hs: bool = True,
) -> Chem.Mol:
    """
    Parse SMILES, InChI or a molblock into an RDKit Mol.

    Parsing happens without sanitization first so that a sanitize failure can be
    told apart from a syntax error.

    Raises:
        InvalidIdentifierError: empty input, or RDKit could not read the text
        SanitizeMolError: the text was read but SanitizeMol failed (only if sanitize=True)
    """
    notation = detect_notation(text)

    try:
        mol = _read_unsanitized(text, notation, remove_hs)
    except Exception as e:
        raise InvalidIdentifierError(f"RDKit raised while reading {notation}: {e}") from e

    if mol is None:
        raise InvalidIdentifierError(f"RDKit could not parse {notation}: {text.strip()[:80]!r}")

    if sanitize and notation != NOTATION_INCHI:
        try:
            Chem.SanitizeMol(mol)
        except Exception as e:
            raise SanitizeMolError(f"SanitizeMol failed: {e}") from e
        if remove_hs:
            mol = Chem.RemoveHs(mol)

    return mol


# -------------------------
# Mol helpers
# -------------------------
def canonical_smiles(mol: Chem.Mol) -> str:
    return Chem.MolToSmiles(mol, canonical=True, isomericSmiles=True)

def fragment_mols(mol: Chem.Mol) -> List[Chem.Mol]:
    return list(Chem.GetMolFrags(mol, asMols=True, sanitizeFrags=False))

def largest_fragment(mol: Chem.Mol) -> Chem.Mol:
    """Largest fragment by heavy atom count; ties keep the first fragment."""
    frags = fragment_mols(mol)
    if len(frags) <= 1:
        return mol
    return max(frags, key=lambda f: f.GetNumHeavyAtoms())


# -------------------------
# string helpers
# -------------------------
def slugify(name: str) -> str:
    """Filesystem-safe lowercase stem, e.g. "Caffeine (anhydrous)" -> "caffeine-anhydrous"."""
    text = unicodedata.normalize("NFKD", str(name)).encode("ascii", "ignore").decode("ascii")
    text = re.sub(r"[^a-zA-Z0-9]+", "-", text).strip("-").lower()
    return text or "molecule"

def to_json_safe(obj) -> str:
    """
    Convert any Python object to a JSON string.
    Falls back to string conversion if serialization fails.
    """
    try:
        return json.dumps(obj, ensure_ascii=False)
    except (TypeError, ValueError):
        return json.dumps(str(obj), ensure_ascii=False)
