"""CodePipeline that builds the site and deploys it to S3."""

from aws_cdk import SecretValue
from aws_cdk import aws_cloudfront as cloudfront
from aws_cdk import aws_codebuild as codebuild
from aws_cdk import aws_codepipeline as codepipeline
from aws_cdk import aws_codepipeline_actions as actions
from aws_cdk import aws_iam as iam
from aws_cdk import aws_s3 as s3
from constructs import Construct

from ..config import SiteConfig


class DeploymentPipeline(Construct):
  """Source -> Build -> Deploy pipeline for the site repository.

  Stages:
  - Source: GitHub branch, authenticated with the token stored in
    Secrets Manager, triggered by webhook
  - Build: CodeBuild runs install, build and test commands; any non-zero
    exit fails the stage and Deploy never runs
  - Deploy: ``DeployArtifact`` (runOrder 1) extracts the build output into
    the bucket, then ``InvalidateCache`` (runOrder 2) clears ``/*`` on the
    distribution
  """

  def __init__(
    self,
    scope: Construct,
    id: str,
    *,
    site_config: SiteConfig,
    bucket: s3.IBucket,
    distribution: cloudfront.IDistribution,
  ) -> None:
    super().__init__(scope, id)

    if not site_config.has_pipeline_source:
      raise ValueError("repo_owner, repo_name and access_token are required")

    source_output = codepipeline.Artifact("SourceOutput")
    build_output = codepipeline.Artifact("BuildOutput")

    self.build_project = codebuild.PipelineProject(
      self,
      "BuildProject",
      build_spec=codebuild.BuildSpec.from_object(self._build_spec(site_config)),
      environment=codebuild.BuildEnvironment(
        build_image=codebuild.LinuxBuildImage.STANDARD_7_0,
      ),
    )

    # The invalidation role may only invalidate this one distribution
    self.invalidate_role = iam.Role(
      self,
      "InvalidateRole",
      assumed_by=iam.ServicePrincipal("codebuild.amazonaws.com"),
    )
    distribution.grant(self.invalidate_role, "cloudfront:CreateInvalidation")

    self.invalidate_project = codebuild.PipelineProject(
      self,
      "InvalidateProject",
      build_spec=codebuild.BuildSpec.from_object(
        {
          "version": "0.2",
          "phases": {
            "build": {
              "commands": [
                'aws cloudfront create-invalidation --distribution-id "${CLOUDFRONT_ID}" --paths "/*"',
              ],
            },
          },
        }
      ),
      environment=codebuild.BuildEnvironment(
        build_image=codebuild.LinuxBuildImage.STANDARD_7_0,
      ),
      environment_variables={
        "CLOUDFRONT_ID": codebuild.BuildEnvironmentVariable(
          value=distribution.distribution_id,
        ),
      },
      role=self.invalidate_role,
    )

    self.pipeline = codepipeline.Pipeline(
      self,
      "Pipeline",
      pipeline_name=site_config.pipeline_name,
      stages=[
        codepipeline.StageProps(
          stage_name="Source",
          actions=[
            actions.GitHubSourceAction(
              action_name="GitHub_Source",
              owner=site_config.repo_owner,
              repo=site_config.repo_name,
              branch=site_config.branch,
              oauth_token=SecretValue.secrets_manager(site_config.access_token),
              output=source_output,
              trigger=actions.GitHubTrigger.WEBHOOK,
            )
          ],
        ),
        codepipeline.StageProps(
          stage_name="Build",
          actions=[
            actions.CodeBuildAction(
              action_name="Build",
              project=self.build_project,
              input=source_output,
              outputs=[build_output],
            )
          ],
        ),
        codepipeline.StageProps(
          stage_name="Deploy",
          actions=[
            actions.S3DeployAction(
              action_name="DeployArtifact",
              bucket=bucket,
              input=build_output,
              extract=True,
              run_order=1,
            ),
            actions.CodeBuildAction(
              action_name="InvalidateCache",
              project=self.invalidate_project,
              input=source_output,
              run_order=2,
            ),
          ],
        ),
      ],
    )

  @staticmethod
  def _build_spec(site_config: SiteConfig) -> dict:
    return {
      "version": "0.2",
      "phases": {
        "install": {
          "runtime-versions": {"nodejs": site_config.nodejs_version},
          "commands": [site_config.install_command],
        },
        "build": {
          "commands": [site_config.build_command, site_config.test_command],
        },
      },
      "artifacts": {
        "base-directory": site_config.build_output_dir,
        "files": ["**/*"],
      },
    }
