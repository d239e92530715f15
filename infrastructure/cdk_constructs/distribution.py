"""CloudFront distribution for static website."""

from aws_cdk import aws_certificatemanager as acm
from aws_cdk import aws_cloudfront as cloudfront
from aws_cdk import aws_cloudfront_origins as origins
from aws_cdk import aws_s3 as s3
from constructs import Construct


class CloudFrontDistribution(Construct):
  """CloudFront distribution with S3 static website origin.

  Without a certificate the distribution is served from its default
  ``*.cloudfront.net`` name only.
  """

  def __init__(
    self,
    scope: Construct,
    id: str,
    *,
    bucket: s3.IBucket,
    certificate: acm.ICertificate | None = None,
    domain_name: str | None = None,
    publish_additional_metrics: bool = False,
  ) -> None:
    super().__init__(scope, id)

    if (certificate is None) != (domain_name is None):
      raise ValueError("certificate and domain_name must be given together")

    self.distribution = cloudfront.Distribution(
      self,
      "Distribution",
      default_behavior=cloudfront.BehaviorOptions(
        origin=origins.S3StaticWebsiteOrigin(bucket),
        viewer_protocol_policy=cloudfront.ViewerProtocolPolicy.REDIRECT_TO_HTTPS,
        allowed_methods=cloudfront.AllowedMethods.ALLOW_GET_HEAD_OPTIONS,
        compress=True,
      ),
      domain_names=[domain_name] if domain_name else None,
      certificate=certificate,
      default_root_object="index.html",
      minimum_protocol_version=(
        cloudfront.SecurityPolicyProtocol.TLS_V1_2_2021 if certificate else None
      ),
      # Origin latency is only reported with additional metrics enabled
      publish_additional_metrics=publish_additional_metrics or None,
    )
