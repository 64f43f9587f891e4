"""
Entrez Clients
==============

Both clients answer one question: the SRA runinfo CSV for a query term
(normally a BioProject accession such as PRJNA123456).

EDirectClient runs the Entrez Direct pipeline

    esearch -db sra -query <term> | efetch -format runinfo

inside the tool environment. EutilsClient performs the same esearch/efetch
pair over HTTPS and needs no local tools. Neither retries: the first failure
propagates.
"""

import logging
import subprocess
import xml.etree.ElementTree as ET
from typing import Optional

import requests

logger = logging.getLogger(__name__)


class EDirectClient:
    """Query NCBI with the esearch/efetch command-line tools."""

    tools = ("esearch", "efetch")

    def __init__(self, env, database: str = "sra"):
        self.env = env
        self.database = database

    def fetch_runinfo(self, term: str) -> str:
        """
        Run esearch | efetch and return the runinfo text.

        Raises:
            subprocess.CalledProcessError: If either process exits non-zero
        """
        self.env.require(*self.tools)

        search_cmd = ["esearch", "-db", self.database, "-query", term]
        fetch_cmd = ["efetch", "-format", "runinfo"]
        logger.info(f"Running: {' '.join(search_cmd)} | {' '.join(fetch_cmd)}")

        search = self.env.popen(search_cmd, stdout=subprocess.PIPE)
        try:
            fetch = self.env.popen(fetch_cmd, stdin=search.stdout,
                                   stdout=subprocess.PIPE, text=True)
            # Let esearch receive SIGPIPE if efetch exits early
            search.stdout.close()
            output, _ = fetch.communicate()
        finally:
            search.wait()

        if search.returncode != 0:
            raise subprocess.CalledProcessError(search.returncode, search_cmd)
        if fetch.returncode != 0:
            raise subprocess.CalledProcessError(fetch.returncode, fetch_cmd, output=output)
        return output


class EutilsClient:
    """Query NCBI E-utilities over HTTPS with requests."""

    tools = ()

    def __init__(
        self,
        base_url: str = "https://eutils.ncbi.nlm.nih.gov/entrez/eutils/",
        database: str = "sra",
        api_key: Optional[str] = None,
        email: Optional[str] = None,
        tool: Optional[str] = "sraprep",
        timeout: float = 120,
        session: Optional[requests.Session] = None
    ):
        self.base_url = base_url if base_url.endswith("/") else base_url + "/"
        self.database = database
        self.api_key = api_key
        self.email = email
        self.tool = tool
        self.timeout = timeout
        self.session = session or requests.Session()

    def _params(self, **extra) -> dict:
        params = dict(extra)
        if self.api_key:
            params["api_key"] = self.api_key
        if self.tool:
            params["tool"] = self.tool
        if self.email:
            params["email"] = self.email
        return params

    def _get(self, endpoint: str, params: dict) -> requests.Response:
        url = self.base_url + endpoint
        logger.debug(f"GET {url} {params}")
        response = self.session.get(url, params=params, timeout=self.timeout)
        response.raise_for_status()
        return response

    def search(self, term: str):
        """
        esearch with usehistory=y.

        Returns:
            Tuple of (count, webenv, query_key)
        """
        response = self._get("esearch.fcgi", self._params(
            db=self.database, term=term, usehistory="y", retmode="xml"
        ))
        root = ET.fromstring(response.content)
        error = root.findtext(".//ERROR")
        if error:
            raise RuntimeError(f"esearch error for {term!r}: {error}")
        count = int((root.findtext("Count") or "0").strip() or "0")
        return count, root.findtext("WebEnv"), root.findtext("QueryKey")

    def fetch_runinfo(self, term: str) -> str:
        count, webenv, query_key = self.search(term)
        logger.info(f"esearch matched {count} SRA records for {term}")
        if count == 0 or not webenv:
            return ""

        response = self._get("efetch.fcgi", self._params(
            db=self.database, WebEnv=webenv, query_key=query_key,
            rettype="runinfo", retmode="text"
        ))
        return response.text


def make_client(backend: str, env, config):
    """
    Build the client selected by entrez.backend.

    Args:
        backend: "edirect" or "eutils"
        env: Active ToolEnvironment (used by edirect)
        config: ConfigManager
    """
    database = config.get("entrez.database", "sra")
    if backend == "edirect":
        return EDirectClient(env, database=database)
    if backend == "eutils":
        return EutilsClient(
            base_url=config.get("entrez.eutils_url"),
            database=database,
            api_key=config.get("entrez.api_key"),
            email=config.get("entrez.email"),
            tool=config.get("entrez.tool"),
            timeout=config.get("entrez.timeout", 120),
        )
    raise ValueError(f"Unknown Entrez backend: {backend}")
