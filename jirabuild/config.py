from __future__ import annotations

import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Pattern

import yaml
from dotenv import load_dotenv

from .exceptions import ConfigError
from .extractor import compile_issue_pattern

load_dotenv()


def _load_file(path: str | Path) -> dict:
    try:
        with open(path, "r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh) or {}
    except OSError as e:
        raise ConfigError(f"Cannot read configuration file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"Configuration file {path} must contain a mapping")
    return data


def _entries(data: dict, key: str) -> List[dict]:
    """Return the list under ``key``, each entry checked to be a mapping."""
    entries = data.get(key) or []
    if not isinstance(entries, list):
        raise ConfigError(f"'{key}' must be a list")
    for entry in entries:
        if not isinstance(entry, dict):
            raise ConfigError(f"Entry {entry!r} under '{key}' must be a mapping")
    return entries


def _token_for(site_name: str) -> str:
    """Site specific token first, then the shared one."""
    suffix = re.sub(r"[^A-Za-z0-9]", "_", site_name).upper()
    return os.getenv(f"JIRA_API_TOKEN_{suffix}") or os.getenv("JIRA_API_TOKEN", "")


@dataclass
class JiraSite:
    """A Jira instance builds can update."""

    name: str
    url: str
    user_id: str = ""
    token: str = ""
    issue_pattern: Optional[str] = None
    # Comments are public unless one of these is set
    comment_visibility_role: Optional[str] = None
    comment_visibility_group: Optional[str] = None

    @property
    def pattern(self) -> Pattern[str]:
        return compile_issue_pattern(self.issue_pattern)


@dataclass
class JobBinding:
    """Binds a build job to the site its issues live on."""

    name: str
    site: str


@dataclass
class AppConfig:
    """Top level application configuration."""

    sites: List[JiraSite] = field(default_factory=list)
    jobs: List[JobBinding] = field(default_factory=list)

    @staticmethod
    def load(path: str | Path) -> "AppConfig":
        """Load configuration from a YAML file."""

        data = _load_file(path)

        sites = []
        for s in _entries(data, "sites"):
            site_data = dict(s)
            visibility = site_data.pop("comment_visibility", None) or {}
            if not isinstance(visibility, dict):
                raise ConfigError(f"comment_visibility of site {s!r} must be a mapping")
            # Secrets are never read from the config file
            site_data.pop("token", None)
            try:
                site = JiraSite(
                    **site_data,
                    token=_token_for(str(site_data.get("name", ""))),
                    comment_visibility_role=visibility.get("role"),
                    comment_visibility_group=visibility.get("group"),
                )
            except TypeError as e:
                raise ConfigError(f"Invalid site entry {s!r}: {e}") from e
            compile_issue_pattern(site.issue_pattern)
            sites.append(site)

        site_names = {site.name for site in sites}
        jobs = []
        for j in _entries(data, "jobs"):
            try:
                job = JobBinding(name=j["name"], site=j["site"])
            except KeyError as e:
                raise ConfigError(f"Job entry {j!r} is missing {e}") from e
            if job.site not in site_names:
                raise ConfigError(f"Job '{job.name}' refers to unknown site '{job.site}'")
            jobs.append(job)

        return AppConfig(sites=sites, jobs=jobs)

    def get_site(self, name: str) -> Optional[JiraSite]:
        """Return the site with the given name."""

        for site in self.sites:
            if site.name == name:
                return site
        return None

    def site_for_job(self, job_name: str) -> Optional[JiraSite]:
        """Return the site bound to ``job_name``, or None when the job has none."""

        for job in self.jobs:
            if job.name == job_name:
                return self.get_site(job.site)
        return None
