"""Configuration loader for the static site."""

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

import yaml
from constructs import Construct

# CDK context keys recognized by SiteConfig.from_context
CONTEXT_KEYS = {
  "domain_name": "domainName",
  "site_sub_domain": "siteSubDomain",
  "repo_owner": "repoOwner",
  "repo_name": "repoName",
  "access_token": "accessToken",
}


@dataclass(frozen=True)
class SiteConfig:
  """Configuration for the static site.

  Every field is optional. Missing domain or repository details do not
  raise; they select the bare topology instead.
  """

  domain_name: str | None = None
  site_sub_domain: str | None = None
  repo_owner: str | None = None
  repo_name: str | None = None
  access_token: str | None = None  # Secrets Manager secret name
  hosted_zone_id: str | None = None
  owner: str | None = None
  email: str | None = None
  region: str = "us-east-1"
  content_path: str = "public"
  branch: str = "main"
  pipeline_name: str = "StaticSitePipeline"
  install_command: str = "npm install"
  build_command: str = "npm run build"
  test_command: str = "npm run test"
  build_output_dir: str = "dist"
  nodejs_version: str = "20"

  def __post_init__(self) -> None:
    # Empty strings from YAML or context count as absent
    for name in CONTEXT_KEYS:
      if getattr(self, name) == "":
        object.__setattr__(self, name, None)

  @property
  def site_domain(self) -> str | None:
    """Effective domain: subdomain.domain, the bare domain, or None."""
    if not self.domain_name:
      return None
    if self.site_sub_domain:
      return f"{self.site_sub_domain}.{self.domain_name}"
    return self.domain_name

  @property
  def has_pipeline_source(self) -> bool:
    return bool(self.repo_owner and self.repo_name and self.access_token)

  @classmethod
  def from_dict(cls, data: dict[str, Any]) -> "SiteConfig":
    known = {f.name for f in fields(cls)}
    unknown = sorted(set(data) - known)
    if unknown:
      raise ValueError(f"Unknown site configuration keys: {', '.join(unknown)}")
    defaults = {f.name: f.default for f in fields(cls)}
    values: dict[str, str | None] = {}
    for key, value in data.items():
      if value is None:
        if defaults[key] is not None:
          raise ValueError(f"Site configuration key '{key}' must not be null")
        values[key] = None
      elif isinstance(value, str):
        values[key] = value
      elif isinstance(value, int) and not isinstance(value, bool):
        # Unquoted YAML numbers such as nodejs_version: 20
        values[key] = str(value)
      else:
        raise ValueError(
          f"Site configuration key '{key}' must be a string, got {type(value).__name__}"
        )
    return cls(**values)

  @classmethod
  def from_yaml(cls, path: Path | str = "sites.yaml") -> "SiteConfig":
    """Load configuration from YAML file.

    The file holds an optional ``defaults`` mapping and a ``site`` mapping;
    site values override defaults.
    """
    with open(path) as f:
      data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
      raise ValueError(f"{path}: top level must be a mapping")

    defaults = data.get("defaults") or {}
    site_data = data.get("site") or {}
    if not isinstance(defaults, dict) or not isinstance(site_data, dict):
      raise ValueError(f"{path}: 'defaults' and 'site' must be mappings")

    return cls.from_dict({**defaults, **site_data})

  @classmethod
  def from_context(cls, scope: Construct) -> "SiteConfig":
    """Build configuration from CDK context (``cdk deploy -c domainName=...``)."""
    values = {
      name: scope.node.try_get_context(key) for name, key in CONTEXT_KEYS.items()
    }
    return cls.from_dict({k: v for k, v in values.items() if v is not None})
