"""Shared fixtures for molblog tests."""

import logging
from pathlib import Path

import pytest

ASPIRIN = "CC(=O)Oc1ccccc1C(=O)O"
CAFFEINE = "Cn1c(=O)c2c(ncn2C)n(C)c1=O"
ETHANOL = "CCO"


@pytest.fixture()
def sample_smiles() -> list:
    return [ASPIRIN, "invalid_smiles_string", CAFFEINE]


@pytest.fixture()
def catalog_csv(tmp_path: Path) -> Path:
    """Catalog with one unparsable row in the middle."""
    path = tmp_path / "molecules.csv"
    path.write_text(
        "name,smiles,category\n"
        f"Aspirin,{ASPIRIN},drug\n"
        "Broken, C1CC ,test\n"
        f"Caffeine,{CAFFEINE},natural product\n",
        encoding="utf-8",
    )
    return path


@pytest.fixture(autouse=True)
def _reset_molblog_logger():
    """The CLI configures the package logger; do not leak its handlers into other tests."""
    yield
    logger = logging.getLogger("molblog")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
