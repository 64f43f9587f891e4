"""
Accession Fetcher
=================

Queries SRA for a BioProject and writes the run accessions to
``raw_data/<project>/run_accessions.txt``, one per line, in query order.
Zero results are fatal and leave no accession file behind.
"""

import logging
from pathlib import Path
from typing import List, Optional

from ..data.accessions import RUN_PATTERN, parse_runinfo, write_accessions
from ..data.layout import ProjectLayout
from ..entrez import make_client
from ..errors import NoAccessionsError
from ..tools.environment import ToolEnvironment

logger = logging.getLogger(__name__)


def fetch_accessions(
    bioproject_id: str,
    layout: ProjectLayout,
    client,
    pattern: str = RUN_PATTERN
) -> List[str]:
    """
    Fetch run accessions for a BioProject and persist them.

    Args:
        bioproject_id: Query term, e.g. PRJNA123456
        layout: Project paths; both directories are created
        client: Object with fetch_runinfo(term) -> str
        pattern: Regex a run accession must match

    Returns:
        Accessions in query order

    Raises:
        NoAccessionsError: If nothing matched
    """
    layout.ensure_dirs()

    logger.info(f"Fetching SRA accessions for {bioproject_id}")
    runinfo = client.fetch_runinfo(bioproject_id)
    accessions = parse_runinfo(runinfo, pattern)

    if not accessions:
        # A stale list from an earlier run must not feed the builder
        layout.accession_file.unlink(missing_ok=True)
        raise NoAccessionsError(f"No SRR accessions found for {bioproject_id}.")

    write_accessions(layout.accession_file, accessions)
    logger.info(f"Found {len(accessions)} accessions.")
    logger.info(f"Accession list written to {layout.accession_file}")
    return accessions


def run_fetch(
    bioproject_id: str,
    project_name: str,
    config,
    base_dir: Optional[Path] = None,
    backend: Optional[str] = None,
    env: Optional[ToolEnvironment] = None
) -> List[str]:
    """Set up the environment for the configured backend and fetch accessions."""
    backend = backend or config.get("entrez.backend", "edirect")
    layout = ProjectLayout.from_config(project_name, config, base_dir=base_dir)
    pattern = config.get("entrez.run_pattern", RUN_PATTERN)

    if backend == "eutils":
        client = make_client(backend, None, config)
        return fetch_accessions(bioproject_id, layout, client, pattern)

    env = env or ToolEnvironment.from_config(config)
    with env:
        client = make_client(backend, env, config)
        env.require(*client.tools)
        return fetch_accessions(bioproject_id, layout, client, pattern)
