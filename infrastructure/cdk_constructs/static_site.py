"""Main composite construct for complete static website infrastructure."""

from aws_cdk import Annotations, CfnOutput, Stack
from constructs import Construct

from ..config import SiteConfig
from ..topology import CLOUDFRONT_REGION, Step, TopologyMode, TopologyPlan, plan
from .certificate import DnsValidatedCertificate
from .distribution import CloudFrontDistribution
from .dns import DnsRecords
from .initial_content import InitialContent
from .monitoring import SiteMonitoring
from .pipeline import DeploymentPipeline
from .storage import StorageBucket


class StaticSiteConstruct(Construct):
  """Complete static website infrastructure.

  Always creates:
  - S3 bucket for static content
  - CloudFront distribution
  - Initial content deployment with a /* invalidation

  When the domain and all pipeline inputs are configured (full topology),
  additionally creates:
  - ACM certificate (DNS validated; the stack must be in us-east-1)
  - Route 53 alias record for the site domain
  - CodePipeline building from GitHub and deploying to the bucket
  - CloudWatch alarms with an SNS topic
  """

  def __init__(
    self,
    scope: Construct,
    id: str,
    *,
    site_config: SiteConfig,
    resource_prefix: str = "",
  ) -> None:
    super().__init__(scope, id)

    self.plan: TopologyPlan = plan(site_config)
    self.certificate: DnsValidatedCertificate | None = None
    self.dns: DnsRecords | None = None
    self.pipeline: DeploymentPipeline | None = None
    self.monitoring: SiteMonitoring | None = None

    Annotations.of(self).add_info(f"Static site topology: {self.plan.mode.value}")
    if self.plan.ignored_domain:
      Annotations.of(self).add_warning(
        f"Domain {self.plan.ignored_domain} ignored: repo_owner, repo_name and "
        "access_token are all required for a custom domain"
      )

    if self.plan.mode is TopologyMode.FULL and Stack.of(self).region != CLOUDFRONT_REGION:
      raise ValueError(
        f"The full topology must be deployed to {CLOUDFRONT_REGION}, where CloudFront "
        f"certificates and metrics live; stack region is {Stack.of(self).region}"
      )

    self.bucket = StorageBucket(self, "Storage", bucket_name=self.plan.bucket_name)

    if self.plan.mode is TopologyMode.FULL:
      site_domain = self.plan.site_domain
      if site_domain is None or site_config.domain_name is None:
        raise ValueError("Full topology requires a site domain")

      # Zone resolution happens first so a missing zone fails before anything
      # that depends on the domain is declared
      self.dns = DnsRecords(
        self,
        "Dns",
        zone_name=site_config.domain_name,
        record_name=site_domain,
        existing_hosted_zone_id=site_config.hosted_zone_id,
      )
      self.certificate = DnsValidatedCertificate(
        self,
        "Certificate",
        domain_name=site_domain,
        hosted_zone=self.dns.hosted_zone,
      )
      self.distribution = CloudFrontDistribution(
        self,
        "Distribution",
        bucket=self.bucket.bucket,
        certificate=self.certificate.certificate,
        domain_name=site_domain,
        publish_additional_metrics=self.plan.includes(Step.MONITORING),
      )
      self.dns.create_cloudfront_record(self.distribution.distribution)
      self.pipeline = DeploymentPipeline(
        self,
        "Pipeline",
        site_config=site_config,
        bucket=self.bucket.bucket,
        distribution=self.distribution.distribution,
      )
      self.monitoring = SiteMonitoring(
        self,
        "Monitoring",
        distribution=self.distribution.distribution,
        bucket=self.bucket.bucket,
        email=site_config.email,
        resource_prefix=resource_prefix,
      )
    else:
      self.distribution = CloudFrontDistribution(
        self,
        "Distribution",
        bucket=self.bucket.bucket,
      )

    self.initial_content = InitialContent(
      self,
      "InitialContent",
      bucket=self.bucket.bucket,
      distribution=self.distribution.distribution,
      content_path=site_config.content_path,
    )

    # Outputs keep fixed logical ids so scripts can find them by key
    self._output("Bucket", self.bucket.bucket.bucket_name, "S3 bucket name")
    self._output(
      "DistributionId",
      self.distribution.distribution.distribution_id,
      "CloudFront distribution ID",
    )
    self._output(
      "DistributionDomainName",
      self.distribution.distribution.distribution_domain_name,
      "CloudFront distribution domain name",
    )
    if self.pipeline is not None:
      self._output(
        "PipelineName", self.pipeline.pipeline.pipeline_name, "CodePipeline name"
      )
    if self.monitoring is not None:
      self._output(
        "AlarmTopicArn",
        self.monitoring.topic.topic_arn,
        "SNS topic receiving alarm notifications",
      )

  def _output(self, key: str, value: str, description: str) -> CfnOutput:
    output = CfnOutput(self, key, value=value, description=description)
    output.override_logical_id(key)
    return output
