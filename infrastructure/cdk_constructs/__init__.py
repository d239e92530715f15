"""CDK constructs for static website infrastructure."""

from .certificate import DnsValidatedCertificate
from .distribution import CloudFrontDistribution
from .dns import DnsRecords
from .initial_content import InitialContent
from .monitoring import ALARM_RULES, AlarmRule, AlarmState, SiteMonitoring
from .pipeline import DeploymentPipeline
from .static_site import StaticSiteConstruct
from .storage import StorageBucket

__all__ = [
  "ALARM_RULES",
  "AlarmRule",
  "AlarmState",
  "CloudFrontDistribution",
  "DeploymentPipeline",
  "DnsRecords",
  "DnsValidatedCertificate",
  "InitialContent",
  "SiteMonitoring",
  "StaticSiteConstruct",
  "StorageBucket",
]
