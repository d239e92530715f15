"""Tests for the redeploy script."""

import sys
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from botocore.exceptions import ClientError

# Add scripts to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent / "scripts"))

import redeploy


def _clients(outputs: list[dict[str, str]]) -> dict[str, MagicMock]:
  cloudformation = MagicMock()
  cloudformation.describe_stacks.return_value = {"Stacks": [{"Outputs": outputs}]}
  codepipeline = MagicMock()
  codepipeline.start_pipeline_execution.return_value = {"pipelineExecutionId": "exec-1"}
  cloudfront = MagicMock()
  cloudfront.create_invalidation.return_value = {"Invalidation": {"Id": "inv-1"}}
  return {
    "cloudformation": cloudformation,
    "codepipeline": codepipeline,
    "cloudfront": cloudfront,
  }


FULL_OUTPUTS = [
  {"OutputKey": "Bucket", "OutputValue": "www.example.com-static-site"},
  {"OutputKey": "DistributionId", "OutputValue": "E123"},
  {"OutputKey": "PipelineName", "OutputValue": "StaticSitePipeline"},
]

BARE_OUTPUTS = FULL_OUTPUTS[:2]


class TestRedeploy:
  """Tests for redeploy()."""

  def test_starts_pipeline_when_present(self) -> None:
    clients = _clients(FULL_OUTPUTS)
    with patch("redeploy.boto3.client", side_effect=lambda name, **_: clients[name]):
      redeploy.redeploy("StaticSite-www-example-com", "us-east-1")

    clients["codepipeline"].start_pipeline_execution.assert_called_once_with(
      name="StaticSitePipeline"
    )
    clients["cloudfront"].create_invalidation.assert_not_called()

  def test_invalidates_when_no_pipeline(self) -> None:
    clients = _clients(BARE_OUTPUTS)
    with patch("redeploy.boto3.client", side_effect=lambda name, **_: clients[name]):
      redeploy.redeploy("StaticSite", "us-east-1")

    clients["codepipeline"].start_pipeline_execution.assert_not_called()
    batch = clients["cloudfront"].create_invalidation.call_args.kwargs
    assert batch["DistributionId"] == "E123"
    assert batch["InvalidationBatch"]["Paths"] == {"Quantity": 1, "Items": ["/*"]}

  def test_invalidate_only_skips_pipeline(self) -> None:
    clients = _clients(FULL_OUTPUTS)
    with patch("redeploy.boto3.client", side_effect=lambda name, **_: clients[name]):
      redeploy.redeploy("StaticSite-www-example-com", "us-east-1", invalidate_only=True)

    clients["codepipeline"].start_pipeline_execution.assert_not_called()
    clients["cloudfront"].create_invalidation.assert_called_once()

  def test_missing_distribution_output(self) -> None:
    clients = _clients([])
    with patch("redeploy.boto3.client", side_effect=lambda name, **_: clients[name]):
      with pytest.raises(ValueError, match="no DistributionId"):
        redeploy.redeploy("StaticSite", "us-east-1")


class TestMain:
  """Tests for the CLI entry point."""

  def test_client_error_exits(self, capsys: pytest.CaptureFixture[str]) -> None:
    error = ClientError(
      {"Error": {"Code": "ValidationError", "Message": "Stack does not exist"}},
      "DescribeStacks",
    )
    with (
      patch.object(sys, "argv", ["redeploy.py", "StaticSite"]),
      patch("redeploy.redeploy", side_effect=error),
      pytest.raises(SystemExit) as exc_info,
    ):
      redeploy.main()

    assert exc_info.value.code == 1
    assert "Stack does not exist" in capsys.readouterr().err
