"""Tests for identifier parsing and the build_mol report."""

import pytest
from rdkit import Chem

from molblog import (
    DEFAULT_PARSE_CONFIG,
    LENIENT_PARSE_CONFIG,
    SALT_STRIPPING_PARSE_CONFIG,
    STRICT_PARSE_CONFIG,
    InvalidIdentifierError,
    build_mol,
    parse_identifier,
)
from molblog.utils import SanitizeMolError, detect_notation, mol_from_identifier, slugify

from conftest import ASPIRIN


def _canon(smiles: str) -> str:
    return Chem.MolToSmiles(Chem.MolFromSmiles(smiles))


def test_basic_organic_molecule() -> None:
    mol, report = build_mol(ASPIRIN, DEFAULT_PARSE_CONFIG)

    assert isinstance(mol, Chem.Mol)
    assert report["decision"] == "accepted"
    assert report["notation"] == "smiles"
    assert report["num_atoms"] == 13
    assert report["num_fragments"] == 1
    assert report["canonical_smiles"] == _canon(ASPIRIN)
    assert report["exception"] is None


def test_invalid_smiles_is_rejected() -> None:
    mol, report = build_mol("invalid_smiles_string")

    assert mol is None
    assert report["decision"] == "rejected"
    assert any("parse failed" in r for r in report["reasons"])


def test_empty_identifier() -> None:
    mol, report = build_mol("   ")
    assert mol is None
    assert report["decision"] == "rejected"

    mol, report = build_mol("", LENIENT_PARSE_CONFIG)
    assert mol is not None
    assert mol.GetNumAtoms() == 0
    assert report["decision"] == "accepted"


def test_non_string_identifier_is_rejected() -> None:
    mol, report = build_mol(42)
    assert mol is None
    assert report["decision"] == "rejected"


def test_valence_error_rejected_unless_lenient() -> None:
    pentavalent = "CC(C)(C)(C)(C)C"

    mol, report = build_mol(pentavalent)
    assert mol is None
    assert report["decision"] == "rejected"
    assert any("sanitize failed" in r for r in report["reasons"])

    mol, report = build_mol(pentavalent, LENIENT_PARSE_CONFIG)
    assert mol is not None
    assert report["decision"] == "accepted"
    assert any("unsanitized" in r for r in report["reasons"])


def test_fragment_policies() -> None:
    salt = "CC(=O)[O-].[Na+]"

    mol, report = build_mol(salt, DEFAULT_PARSE_CONFIG)
    assert report["decision"] == "accepted"
    assert report["num_fragments"] == 2

    mol, report = build_mol(salt, STRICT_PARSE_CONFIG)
    assert mol is None
    assert report["decision"] == "rejected"

    mol, report = build_mol(salt, SALT_STRIPPING_PARSE_CONFIG)
    assert report["decision"] == "accepted"
    assert report["canonical_smiles"] == _canon("CC(=O)[O-]")


def test_inchi_identifier() -> None:
    mol, report = build_mol("InChI=1S/C2H6O/c1-2-3/h3H,2H2,1H3")
    assert report["notation"] == "inchi"
    assert report["canonical_smiles"] == "CCO"


def test_parse_identifier_raises_with_reasons() -> None:
    assert parse_identifier("c1ccccc1").GetNumAtoms() == 6
    with pytest.raises(InvalidIdentifierError, match="rejected"):
        parse_identifier("C1CC")


@pytest.mark.parametrize(
    "text, expected",
    [
        ("CCO", "smiles"),
        ("InChI=1S/CH4/h1H4", "inchi"),
        ("\n  RDKit\n\n  1  0  0  0  0  0  0  0  0  0999 V2000\nM  END\n", "molblock"),
    ],
)
def test_detect_notation(text: str, expected: str) -> None:
    assert detect_notation(text) == expected


def test_mol_from_identifier_errors() -> None:
    with pytest.raises(InvalidIdentifierError):
        mol_from_identifier("")
    with pytest.raises(SanitizeMolError):
        mol_from_identifier("c1cccc1")


def test_slugify() -> None:
    assert slugify("Caffeine (anhydrous)") == "caffeine-anhydrous"
    assert slugify("  ") == "molecule"
    assert slugify("β-Carotene") == "carotene"


def test_molblock_identifier() -> None:
    block = Chem.MolToMolBlock(Chem.MolFromSmiles("OCC"))

    mol, report = build_mol(block)
    assert report["decision"] == "accepted"
    assert report["notation"] == "molblock"
    assert report["canonical_smiles"] == "CCO"
    assert mol.GetNumAtoms() == 3
