#!/usr/bin/env python3
"""Re-run the site pipeline or invalidate the CloudFront cache for a deployed stack."""

import argparse
import sys
import time

import boto3
from botocore.exceptions import ClientError


def get_stack_outputs(stack_name: str, region: str = "us-east-1") -> dict[str, str]:
  """Return the stack's CloudFormation outputs keyed by output key."""
  cloudformation = boto3.client("cloudformation", region_name=region)
  response = cloudformation.describe_stacks(StackName=stack_name)
  outputs = response["Stacks"][0].get("Outputs", [])
  return {o["OutputKey"]: o["OutputValue"] for o in outputs}


def start_pipeline(pipeline_name: str, region: str = "us-east-1") -> str:
  """Start a new pipeline execution from the Source stage.

  Returns:
    The pipeline execution ID
  """
  codepipeline = boto3.client("codepipeline", region_name=region)
  response = codepipeline.start_pipeline_execution(name=pipeline_name)
  return str(response["pipelineExecutionId"])


def invalidate(distribution_id: str, paths: list[str] | None = None) -> str:
  """Invalidate cached paths on a distribution (all paths by default).

  Returns:
    The invalidation ID
  """
  items = paths or ["/*"]
  cloudfront = boto3.client("cloudfront")
  response = cloudfront.create_invalidation(
    DistributionId=distribution_id,
    InvalidationBatch={
      "Paths": {"Quantity": len(items), "Items": items},
      "CallerReference": str(time.time()),
    },
  )
  return str(response["Invalidation"]["Id"])


def redeploy(stack_name: str, region: str, invalidate_only: bool = False) -> None:
  outputs = get_stack_outputs(stack_name, region)

  pipeline_name = outputs.get("PipelineName")
  if pipeline_name and not invalidate_only:
    execution_id = start_pipeline(pipeline_name, region)
    print(f"✓ Started {pipeline_name}")
    print(f"  Execution: {execution_id}")
    return

  if not invalidate_only:
    print(f"{stack_name} has no pipeline, invalidating cache only")

  distribution_id = outputs.get("DistributionId")
  if not distribution_id:
    raise ValueError(f"Stack {stack_name} has no DistributionId output")
  invalidation_id = invalidate(distribution_id)
  print(f"✓ Invalidated /* on {distribution_id}")
  print(f"  Invalidation: {invalidation_id}")


def main() -> None:
  """Main entry point."""
  parser = argparse.ArgumentParser(
    description="Re-run the deployment pipeline for a static site stack"
  )
  parser.add_argument(
    "stack_name",
    help="CDK stack name (e.g., StaticSite-www-example-com)",
  )
  parser.add_argument(
    "--region",
    default="us-east-1",
    help="AWS region (default: us-east-1)",
  )
  parser.add_argument(
    "--invalidate-only",
    action="store_true",
    help="Skip the pipeline and only invalidate the CloudFront cache",
  )
  args = parser.parse_args()

  try:
    redeploy(args.stack_name, args.region, args.invalidate_only)
  except (ClientError, ValueError) as e:
    print(f"Error: {e}", file=sys.stderr)
    sys.exit(1)


if __name__ == "__main__":
  main()
