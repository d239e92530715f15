"""Initial content deployment for the static website."""

from pathlib import Path

from aws_cdk import aws_cloudfront as cloudfront
from aws_cdk import aws_s3 as s3
from aws_cdk import aws_s3_deployment as s3_deploy
from constructs import Construct


class InitialContent(Construct):
  """Syncs a local directory into the bucket and invalidates ``/*``.

  Runs on every deploy regardless of topology, so a bare site still
  serves content.
  """

  def __init__(
    self,
    scope: Construct,
    id: str,
    *,
    bucket: s3.IBucket,
    distribution: cloudfront.IDistribution,
    content_path: str | Path,
  ) -> None:
    super().__init__(scope, id)

    content_dir = Path(content_path)
    if not content_dir.is_dir():
      raise ValueError(f"Site content directory not found: {content_dir}")

    self.deployment = s3_deploy.BucketDeployment(
      self,
      "DeployWithInvalidation",
      sources=[s3_deploy.Source.asset(str(content_dir))],
      destination_bucket=bucket,
      distribution=distribution,
      distribution_paths=["/*"],
      prune=False,  # Keep objects the pipeline deployed
    )
