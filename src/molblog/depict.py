"""
2D depiction of molecules.

PNG goes through MolDraw2DCairo, SVG through MolDraw2DSVG. Coordinates are
computed on a copy, so the caller's Mol is never modified.
"""

import logging
from pathlib import Path
from typing import List, Optional, Sequence, Union

from rdkit import Chem
from rdkit.Chem import AllChem, Draw
from rdkit.Chem.Draw import rdMolDraw2D

from .config import DEFAULT_DEPICT_CONFIG, DEFAULT_PARSE_CONFIG, DepictConfig, ParseConfig
from .core import parse_identifier
from .utils import DepictionError

logger = logging.getLogger(__name__)

IMAGE_FORMATS = ("png", "svg")


def _make_drawer(config: DepictConfig):
    if config.image_format == "png":
        drawer = rdMolDraw2D.MolDraw2DCairo(config.width, config.height)
    elif config.image_format == "svg":
        drawer = rdMolDraw2D.MolDraw2DSVG(config.width, config.height)
    else:
        raise DepictionError(
            f"unsupported image format {config.image_format!r}, expected one of {IMAGE_FORMATS}"
        )

    opts = drawer.drawOptions()
    opts.addStereoAnnotation = config.add_stereo_annotation
    opts.addAtomIndices = config.add_atom_indices
    opts.bondLineWidth = config.bond_line_width
    if config.transparent_background:
        opts.clearBackground = False
    return drawer


def prepare_for_drawing(mol: Chem.Mol, config: DepictConfig = DEFAULT_DEPICT_CONFIG) -> Chem.Mol:
    """Copy of mol with 2D coordinates, kekulized when requested."""
    mol = Chem.Mol(mol)
    if mol.GetNumConformers() == 0:
        AllChem.Compute2DCoords(mol)
    return rdMolDraw2D.PrepareMolForDrawing(mol, kekulize=config.kekulize)


def draw_mol(
    mol: Chem.Mol,
    config: DepictConfig = DEFAULT_DEPICT_CONFIG,
    legend: str = "",
) -> Union[bytes, str]:
    """
    Draw one molecule.

    Returns:
        PNG bytes for image_format="png", SVG text for image_format="svg".
    """
    if mol is None:
        raise DepictionError("cannot draw None")

    drawer = _make_drawer(config)
    try:
        prepared = prepare_for_drawing(mol, config)
        drawer.DrawMolecule(prepared, legend=legend)
        drawer.FinishDrawing()
    except (RuntimeError, ValueError) as e:
        raise DepictionError(f"RDKit drawing failed: {e}") from e
    return drawer.GetDrawingText()


def render_mol(
    mol: Chem.Mol,
    path: Union[str, Path],
    config: DepictConfig = DEFAULT_DEPICT_CONFIG,
    legend: str = "",
) -> Path:
    """
    Render a Mol to an image file and return the path actually written.

    The suffix of ``path`` is replaced so it matches config.image_format.
    """
    path = Path(path).with_suffix(config.suffix)
    data = draw_mol(mol, config, legend=legend)

    path.parent.mkdir(parents=True, exist_ok=True)
    if isinstance(data, bytes):
        path.write_bytes(data)
    else:
        path.write_text(data, encoding="utf-8")

    logger.debug("wrote %s (%dx%d)", path, config.width, config.height)
    return path


def render_identifier(
    identifier: str,
    path: Union[str, Path],
    config: DepictConfig = DEFAULT_DEPICT_CONFIG,
    parse_config: ParseConfig = DEFAULT_PARSE_CONFIG,
    legend: str = "",
) -> Path:
    mol = parse_identifier(identifier, parse_config)
    return render_mol(mol, path, config, legend=legend)


def grid_image(
    mols: Sequence[Chem.Mol],
    path: Union[str, Path],
    legends: Optional[List[str]] = None,
    mols_per_row: int = 4,
    sub_img_size: tuple = (200, 200),
    use_svg: bool = False,
) -> Path:
    """
    Write an overview grid of several molecules (None entries are drawn as empty cells).
    """
    if not mols:
        raise DepictionError("grid_image needs at least one molecule")
    if legends is not None and len(legends) != len(mols):
        raise DepictionError(f"{len(legends)} legends for {len(mols)} molecules")

    path = Path(path).with_suffix(".svg" if use_svg else ".png")
    try:
        img = Draw.MolsToGridImage(
            list(mols),
            molsPerRow=mols_per_row,
            subImgSize=sub_img_size,
            legends=list(legends) if legends is not None else None,
            useSVG=use_svg,
            returnPNG=False,
        )
    except (RuntimeError, ValueError) as e:
        raise DepictionError(f"RDKit grid drawing failed: {e}") from e

    path.parent.mkdir(parents=True, exist_ok=True)
    if use_svg:
        path.write_text(img, encoding="utf-8")
    else:
        img.save(path)
    return path
