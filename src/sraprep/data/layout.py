"""Project directory layout shared by the fetch and build stages."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)


@dataclass
class ProjectLayout:
    """
    Paths for one project, all absolute:

        <base>/<raw_data_dir>/<project>/run_accessions.txt
        <base>/<raw_data_dir>/<project>/*_1.fastq, *_2.fastq
        <base>/<artifact_dir>/<project>_manifest.tsv
        <base>/<artifact_dir>/<project>_build_config.yaml
    """
    project_name: str
    base_dir: Path
    raw_data_dir: str = "raw_data"
    artifact_dir_name: str = "qiime2_artifacts"
    accession_filename: str = "run_accessions.txt"
    manifest_suffix: str = "_manifest.tsv"

    def __post_init__(self):
        name = (self.project_name or "").strip()
        if not name or "/" in name or name in (".", ".."):
            raise ValueError(f"Invalid project name: {self.project_name!r}")
        self.project_name = name
        self.base_dir = Path(self.base_dir).expanduser().resolve()

    @classmethod
    def from_config(cls, project_name: str, config,
                    base_dir: Optional[Path] = None) -> 'ProjectLayout':
        return cls(
            project_name=project_name,
            base_dir=Path(base_dir if base_dir is not None else config.get("paths.base_dir", ".")),
            raw_data_dir=config.get("paths.raw_data_dir", "raw_data"),
            artifact_dir_name=config.get("paths.artifact_dir", "qiime2_artifacts"),
            accession_filename=config.get("paths.accession_file", "run_accessions.txt"),
            manifest_suffix=config.get("paths.manifest_suffix", "_manifest.tsv"),
        )

    @property
    def raw_dir(self) -> Path:
        return self.base_dir / self.raw_data_dir / self.project_name

    @property
    def artifact_dir(self) -> Path:
        return self.base_dir / self.artifact_dir_name

    @property
    def accession_file(self) -> Path:
        return self.raw_dir / self.accession_filename

    @property
    def manifest_path(self) -> Path:
        return self.artifact_dir / f"{self.project_name}{self.manifest_suffix}"

    @property
    def config_snapshot_path(self) -> Path:
        """Effective configuration of the last successful build."""
        return self.artifact_dir / f"{self.project_name}_build_config.yaml"

    def ensure_dirs(self):
        """Create the raw data and artifact directories."""
        self.raw_dir.mkdir(parents=True, exist_ok=True)
        self.artifact_dir.mkdir(parents=True, exist_ok=True)
        logger.info(f"Data will be downloaded to: {self.raw_dir}")
