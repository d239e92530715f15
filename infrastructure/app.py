#!/usr/bin/env python3
"""CDK application entry point for static website infrastructure."""

import sys
from pathlib import Path

# Add the project root to the Python path
sys.path.insert(0, str(Path(__file__).parent.parent))

import aws_cdk as cdk
import boto3

from infrastructure.config import SiteConfig
from infrastructure.stacks.site_stack import StaticSiteStack
from infrastructure.topology import TopologyMode, plan


def get_account_id() -> str:
  """Get AWS account ID from current credentials."""
  sts = boto3.client("sts")
  return str(sts.get_caller_identity()["Account"])


def load_site_config(app: cdk.App) -> SiteConfig:
  """Load the YAML config named by the ``config`` context key, else context values."""
  config_path = Path(app.node.try_get_context("config") or "sites.yaml")
  if config_path.exists():
    return SiteConfig.from_yaml(config_path)
  print(f"No {config_path} found, using CDK context values")
  return SiteConfig.from_context(app)


def stack_name_for(site_config: SiteConfig) -> str:
  if site_config.site_domain:
    return f"StaticSite-{site_config.site_domain.replace('.', '-')}"
  return "StaticSite"


def main() -> None:
  """Create the CDK app with the static site stack."""
  app = cdk.App()

  site_config = load_site_config(app)
  site_plan = plan(site_config)

  print(f"Topology: {site_plan.mode.value} ({', '.join(s.value for s in site_plan.steps)})")
  if site_plan.ignored_domain:
    print(f"Skipping custom domain {site_plan.ignored_domain}: pipeline configuration is incomplete")

  if site_plan.region != site_config.region:
    print(f"Deploying to {site_plan.region} instead of {site_config.region}: full topology is pinned there")

  # Hosted zone lookups need an explicit account
  env = cdk.Environment(region=site_plan.region)
  if site_plan.mode is TopologyMode.FULL and not site_config.hosted_zone_id:
    env = cdk.Environment(account=get_account_id(), region=site_plan.region)

  StaticSiteStack(
    app,
    stack_name_for(site_config),
    site_config=site_config,
    env=env,
    description=f"Static website infrastructure for {site_config.site_domain or 'CloudFront default domain'}",
  )

  app.synth()


if __name__ == "__main__":
  main()
