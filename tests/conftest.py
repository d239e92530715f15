"""Pytest fixtures for CDK construct tests."""

from pathlib import Path

import pytest

from infrastructure.config import SiteConfig


@pytest.fixture
def content_dir(tmp_path: Path) -> Path:
  """Directory with minimal site content for the initial sync."""
  site = tmp_path / "public"
  site.mkdir()
  (site / "index.html").write_text("<h1>hello</h1>")
  (site / "error.html").write_text("<h1>not found</h1>")
  return site


@pytest.fixture
def full_config(content_dir: Path) -> SiteConfig:
  """Configuration that selects the full topology."""
  return SiteConfig(
    domain_name="example.com",
    site_sub_domain="www",
    repo_owner="example-org",
    repo_name="example-site",
    access_token="github-token",
    hosted_zone_id="Z0123456789ABC",
    email="alerts@example.com",
    content_path=str(content_dir),
  )


@pytest.fixture
def bare_config(content_dir: Path) -> SiteConfig:
  """Configuration without any domain or repository details."""
  return SiteConfig(content_path=str(content_dir))
