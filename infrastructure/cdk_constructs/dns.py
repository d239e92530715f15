"""Route 53 DNS constructs."""

from aws_cdk import Stack, Token
from aws_cdk import aws_cloudfront as cloudfront
from aws_cdk import aws_route53 as route53
from aws_cdk import aws_route53_targets as targets
from constructs import Construct


class DnsRecords(Construct):
  """Existing Route 53 hosted zone and the site's alias record.

  The zone is never created here. It is imported by id when one is given,
  otherwise looked up by the base domain name, which needs a stack with a
  concrete account and region.
  """

  def __init__(
    self,
    scope: Construct,
    id: str,
    *,
    zone_name: str,
    record_name: str,
    existing_hosted_zone_id: str | None = None,
  ) -> None:
    super().__init__(scope, id)

    self.zone_name = zone_name
    self.record_name = record_name

    if existing_hosted_zone_id:
      self.hosted_zone = route53.HostedZone.from_hosted_zone_attributes(
        self,
        "HostedZone",
        hosted_zone_id=existing_hosted_zone_id,
        zone_name=zone_name,
      )
    else:
      stack = Stack.of(self)
      if Token.is_unresolved(stack.account) or Token.is_unresolved(stack.region):
        raise ValueError(
          f"Cannot resolve hosted zone for {zone_name}: the stack has no concrete "
          "account/region. Deploy with an explicit environment or set hosted_zone_id."
        )
      self.hosted_zone = route53.HostedZone.from_lookup(
        self,
        "HostedZone",
        domain_name=zone_name,
      )

  def create_cloudfront_record(
    self,
    distribution: cloudfront.IDistribution,
  ) -> route53.ARecord:
    """Create the A alias record pointing to the CloudFront distribution."""
    self.record = route53.ARecord(
      self,
      "SiteAliasRecord",
      zone=self.hosted_zone,
      record_name=self.record_name,
      target=route53.RecordTarget.from_alias(targets.CloudFrontTarget(distribution)),
    )
    return self.record
