"""
Batch helpers: map a list of identifiers to outputs, one at a time.

A failing item never aborts the batch; its slot gets the placeholder value
instead and a warning is logged. Output length and order always match the input.
"""

import logging
from pathlib import Path
from typing import Any, Callable, Iterable, List, Optional, Sequence, Union

from tqdm import tqdm

from .config import DEFAULT_DEPICT_CONFIG, DEFAULT_PARSE_CONFIG, DepictConfig, ParseConfig
from .depict import render_identifier
from .utils import MolBlogError, slugify

logger = logging.getLogger(__name__)

PLACEHOLDER = None

# RDKit surfaces its C++ failures as ValueError / RuntimeError
TOLERATED_ERRORS = (MolBlogError, ValueError, RuntimeError)


def safe_map(
    func: Callable[[Any], Any],
    items: Iterable[Any],
    placeholder: Any = PLACEHOLDER,
    progress: bool = False,
    desc: Optional[str] = None,
) -> List[Any]:
    items = list(items)
    results: List[Any] = []
    for i, item in enumerate(tqdm(items, desc=desc, disable=not progress)):
        try:
            results.append(func(item))
        except TOLERATED_ERRORS as e:
            logger.warning("item %d (%r) failed: %s: %s", i, item, type(e).__name__, e)
            results.append(placeholder)
    return results


def unique_stems(names: Sequence[str]) -> List[str]:
    """
    slugify every name and disambiguate repeats with a numeric suffix:
    ["Water", "water", "Ethanol"] -> ["water", "water-2", "ethanol"]
    """
    seen = {}
    stems = []
    for name in names:
        stem = slugify(name)
        if stem in seen:
            seen[stem] += 1
            candidate = f"{stem}-{seen[stem]}"
            while candidate in seen:
                seen[stem] += 1
                candidate = f"{stem}-{seen[stem]}"
            stem = candidate
        seen[stem] = 1
        stems.append(stem)
    return stems


def render_batch(
    identifiers: Sequence[str],
    out_dir: Union[str, Path],
    names: Optional[Sequence[str]] = None,
    config: DepictConfig = DEFAULT_DEPICT_CONFIG,
    parse_config: ParseConfig = DEFAULT_PARSE_CONFIG,
    placeholder: Any = PLACEHOLDER,
    progress: bool = False,
) -> List[Any]:
    """
    Render every identifier to ``out_dir/<stem>.<format>``.

    Parameters
    ----------
    identifiers : sequence of str
        SMILES / InChI / molblocks.
    out_dir : str or Path
        Output directory, created if needed.
    names : sequence of str, optional
        Used for file stems (and legends if config.legend_from_name).
        Defaults to "mol-1", "mol-2", ...
    placeholder : any
        Value stored for identifiers that could not be rendered.

    Returns
    -------
    list
        One entry per identifier: the written path as str, or the placeholder.
    """
    identifiers = list(identifiers)
    if names is None:
        names = [f"mol-{i + 1}" for i in range(len(identifiers))]
    names = [str(n) for n in names]
    if len(names) != len(identifiers):
        raise ValueError(f"{len(names)} names for {len(identifiers)} identifiers")

    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    jobs = list(zip(identifiers, names, unique_stems(names)))

    def _render(job):
        identifier, name, stem = job
        legend = name if config.legend_from_name else ""
        path = render_identifier(
            identifier,
            out_dir / (stem + config.suffix),
            config=config,
            parse_config=parse_config,
            legend=legend,
        )
        return str(path)

    paths = safe_map(_render, jobs, placeholder=placeholder, progress=progress, desc="depict")
    failed = paths.count(placeholder)
    logger.info("rendered %d/%d molecules into %s", len(paths) - failed, len(paths), out_dir)
    return paths


def convert_batch(
    identifiers: Iterable[str],
    func: Callable[[str], Any],
    placeholder: Any = PLACEHOLDER,
) -> List[Any]:
    """safe_map for conversions, e.g. convert_batch(smiles, smiles_to_inchikey)."""
    return safe_map(func, identifiers, placeholder=placeholder)
