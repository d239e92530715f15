"""Topology selection for the static site.

The plan is computed without touching any cloud resource, so the same
configuration can be inspected (dry run) before the construct tree applies it.
"""

from dataclasses import dataclass
from enum import Enum

from infrastructure.config import SiteConfig

# CloudFront certificates and metrics only exist in us-east-1
CLOUDFRONT_REGION = "us-east-1"


class TopologyMode(Enum):
  """Bare: storage and distribution only. Full: adds domain, pipeline, alarms."""

  BARE = "bare"
  FULL = "full"


class Step(Enum):
  """Resources built by the apply pass, in dependency order."""

  STORAGE = "storage"
  CERTIFICATE = "certificate"
  DISTRIBUTION = "distribution"
  DNS_RECORD = "dns-record"
  PIPELINE = "pipeline"
  MONITORING = "monitoring"
  CONTENT_SYNC = "content-sync"


FULL_STEPS = (
  Step.STORAGE,
  Step.CERTIFICATE,
  Step.DISTRIBUTION,
  Step.DNS_RECORD,
  Step.PIPELINE,
  Step.MONITORING,
  Step.CONTENT_SYNC,
)

BARE_STEPS = (
  Step.STORAGE,
  Step.DISTRIBUTION,
  Step.CONTENT_SYNC,
)


@dataclass(frozen=True)
class TopologyPlan:
  """Resolved topology for one site configuration."""

  mode: TopologyMode
  site_domain: str | None
  steps: tuple[Step, ...]
  region: str

  def includes(self, step: Step) -> bool:
    return step in self.steps

  @property
  def ignored_domain(self) -> str | None:
    """Domain that was configured but dropped because the mode is bare."""
    if self.mode is TopologyMode.BARE:
      return self.site_domain
    return None

  @property
  def bucket_name(self) -> str | None:
    return f"{self.site_domain}-static-site" if self.site_domain else None


def select_mode(config: SiteConfig) -> TopologyMode:
  """Full only when the domain and every pipeline input are present."""
  if config.site_domain and config.has_pipeline_source:
    return TopologyMode.FULL
  return TopologyMode.BARE


def plan(config: SiteConfig) -> TopologyPlan:
  mode = select_mode(config)
  return TopologyPlan(
    mode=mode,
    site_domain=config.site_domain,
    steps=FULL_STEPS if mode is TopologyMode.FULL else BARE_STEPS,
    # The full topology lives where CloudFront certificates and metrics do
    region=CLOUDFRONT_REGION if mode is TopologyMode.FULL else config.region,
  )
