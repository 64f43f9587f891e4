"""
Default Configuration for sraprep
=================================

This configuration can be loaded and overridden by user-provided YAML files.
Values written as ${VAR_NAME} are read from the environment at load time.
"""

DEFAULT_CONFIG = {
    # Directory layout (relative to the base directory, usually the cwd)
    "paths": {
        "base_dir": ".",
        "raw_data_dir": "raw_data",
        "artifact_dir": "qiime2_artifacts",
        "accession_file": "run_accessions.txt",
        "manifest_suffix": "_manifest.tsv",
    },

    # Conda environment providing edirect + sra-tools
    "environment": {
        "conda_env": "sra-env",
        "conda_base": None,  # Resolved with `conda info --base` if None
    },

    # Run x86_64 tool binaries on Apple Silicon
    "emulation": {
        "mode": "auto",  # auto | true | false
        "trigger_arch": "arm64",
        "target_arch": "x86_64",
        "conda_base": "~/miniconda3-x86_64",
    },

    # Metadata query
    "entrez": {
        "backend": "edirect",  # edirect | eutils
        "database": "sra",
        "run_pattern": "^SRR",
        "eutils_url": "https://eutils.ncbi.nlm.nih.gov/entrez/eutils/",
        "api_key": "${NCBI_API_KEY}",
        "email": "${NCBI_EMAIL}",
        "tool": "sraprep",
        "timeout": 120,
    },

    # prefetch / fasterq-dump
    "download": {
        "max_size": "100G",
        "split_files": True,
        "progress": True,
    },

    # Manifest pairing
    "manifest": {
        "extension": "fastq",
        "forward_suffix": "_1",
        "reverse_suffix": "_2",
    },

    # Logging
    "logging": {
        "level": "INFO",
        "log_dir": "logs",
        "log_to_file": True,
        "log_to_console": True,
    },

    # SLURM settings
    "slurm": {
        "account": "${SRAPREP_ACCOUNT}",
        "partition": "${SRAPREP_PARTITION}",
        "mail_user": "${SRAPREP_EMAIL}",
        "mail_type": "END,FAIL",
        "job_name": "sraprep",
        "mem": "16G",
        "cpus_per_task": 4,
        "time": "24:00:00",
    },
}
