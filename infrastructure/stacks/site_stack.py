"""CDK stack for the static website."""

from typing import Any

import aws_cdk as cdk
from constructs import Construct

from infrastructure.cdk_constructs import StaticSiteConstruct
from infrastructure.config import SiteConfig


class StaticSiteStack(cdk.Stack):
  """Stack for the static website."""

  def __init__(
    self,
    scope: Construct,
    id: str,
    *,
    site_config: SiteConfig,
    **kwargs: Any,
  ) -> None:
    super().__init__(scope, id, **kwargs)

    self.site = StaticSiteConstruct(
      self,
      "Site",
      site_config=site_config,
      resource_prefix=self.stack_name,
    )

    # Tag resources with owner info
    cdk.Tags.of(self).add("Project", "static-site")
    cdk.Tags.of(self).add("Topology", self.site.plan.mode.value)
    if site_config.owner:
      cdk.Tags.of(self).add("Owner", site_config.owner)
    if site_config.email:
      cdk.Tags.of(self).add("OwnerEmail", site_config.email)
    if site_config.site_domain:
      cdk.Tags.of(self).add("Domain", site_config.site_domain)
