from setuptools import setup, find_packages

setup(
    name="sraprep",
    version="0.1.0",
    description="Fetch SRA runs for a BioProject and build a paired-end FASTQ manifest",
    author="Camila Duitama",
    author_email="camiladuitama@gmail.com",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    python_requires=">=3.10",
    install_requires=[
        "polars>=0.20.0",
        "pyyaml>=6.0",
        "requests>=2.28",
    ],
    extras_require={
        "dev": ["pytest", "black", "isort"],
    },
    entry_points={
        "console_scripts": [
            "sraprep-fetch=sraprep.cli.fetch:main",
            "sraprep-build=sraprep.cli.build:main",
            "sraprep-submit=sraprep.cli.submit:main",
        ],
    },
)
