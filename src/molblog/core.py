import logging
import traceback
from typing import Any, Dict, List, Optional, Tuple

from rdkit import Chem

from .config import DEFAULT_PARSE_CONFIG, ParseConfig
from .utils import (
    InvalidIdentifierError,
    SanitizeMolError,
    canonical_smiles,
    detect_notation,
    fragment_mols,
    largest_fragment,
    mol_from_identifier,
)

logger = logging.getLogger(__name__)


def _new_report(identifier: Any) -> Dict[str, Any]:
    return {
        "identifier": identifier,
        "notation": None,
        "decision": None,
        "reasons": [],
        "canonical_smiles": None,
        "num_atoms": None,
        "num_fragments": None,
        "exception": None,
    }


def _parse(
    identifier: str,
    config: ParseConfig,
    reasons: List[str],
) -> Optional[Chem.Mol]:
    """
    Parse according to config; returns None and appends to reasons on rejection.
    """
    try:
        return mol_from_identifier(identifier, sanitize=True, remove_hs=config.remove_hs)
    except InvalidIdentifierError as e:
        reasons.append(f"parse failed: {e}")
        return None
    except SanitizeMolError as e:
        if config.sanitize:
            reasons.append(f"sanitize failed: {e}")
            return None
        # lenient: keep the unsanitized Mol so it can still be drawn / written
        reasons.append(f"sanitize failed, using unsanitized molecule: {e}")
        mol = mol_from_identifier(identifier, sanitize=False)
        mol.UpdatePropertyCache(strict=False)
        Chem.FastFindRings(mol)
        return mol


def build_mol(
    identifier: str,
    config: ParseConfig = DEFAULT_PARSE_CONFIG,
) -> Tuple[Optional[Chem.Mol], Dict[str, Any]]:
    """
    Main entry point:
      - returns (mol or None, report), never raises

    report contains:
      - identifier, notation
      - decision: "accepted" | "rejected" | "error"
      - reasons
      - canonical_smiles, num_atoms, num_fragments (when a Mol was built)
      - exception (if any)
    """
    report = _new_report(identifier)

    try:
        # ---------- 1. empty input ----------
        if identifier is None or (isinstance(identifier, str) and not identifier.strip()):
            if config.allow_empty:
                mol = Chem.Mol()
                report["decision"] = "accepted"
                report["reasons"].append("empty identifier, returning empty molecule")
                report["canonical_smiles"] = ""
                report["num_atoms"] = 0
                report["num_fragments"] = 0
                return mol, report
            report["decision"] = "rejected"
            report["reasons"].append("identifier is empty")
            return None, report

        if not isinstance(identifier, str):
            report["decision"] = "rejected"
            report["reasons"].append(f"identifier must be str, got {type(identifier).__name__}")
            return None, report

        report["notation"] = detect_notation(identifier)

        # ---------- 2. parse ----------
        mol = _parse(identifier, config, report["reasons"])
        if mol is None:
            report["decision"] = "rejected"
            return None, report

        # ---------- 3. fragments ----------
        n_frags = len(fragment_mols(mol))
        report["num_fragments"] = n_frags
        if n_frags > 1:
            if config.keep_largest_fragment:
                mol = largest_fragment(mol)
                report["reasons"].append(f"kept largest of {n_frags} fragments")
            elif not config.allow_multiple_fragments:
                report["decision"] = "rejected"
                report["reasons"].append(f"{n_frags} fragments not allowed")
                return None, report

        # ---------- 4. summary ----------
        report["num_atoms"] = mol.GetNumAtoms()
        if config.canonicalize:
            report["canonical_smiles"] = canonical_smiles(mol)

        report["decision"] = "accepted"
        return mol, report

    except Exception as e:
        logger.debug("build_mol failed for %r", identifier, exc_info=True)
        report["decision"] = "error"
        report["exception"] = {
            "type": type(e).__name__,
            "message": str(e),
            "traceback": traceback.format_exc(),
        }
        return None, report


def parse_identifier(
    identifier: str,
    config: ParseConfig = DEFAULT_PARSE_CONFIG,
) -> Chem.Mol:
    """
    Raising variant of build_mol for call sites that want one value back.
    """
    mol, report = build_mol(identifier, config)
    if mol is None:
        if report["exception"] is not None:
            detail = f"{report['exception']['type']}: {report['exception']['message']}"
        else:
            detail = "; ".join(report["reasons"]) or report["decision"]
        raise InvalidIdentifierError(f"{identifier!r} rejected ({detail})")
    return mol
