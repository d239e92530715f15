"""CloudWatch alarms for the distribution and bucket, routed to SNS."""

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from aws_cdk import Duration
from aws_cdk import aws_cloudfront as cloudfront
from aws_cdk import aws_cloudwatch as cloudwatch
from aws_cdk import aws_cloudwatch_actions as cw_actions
from aws_cdk import aws_s3 as s3
from aws_cdk import aws_sns as sns
from aws_cdk import aws_sns_subscriptions as subscriptions
from constructs import Construct


class MetricSource(Enum):
  DISTRIBUTION = "distribution"
  BUCKET = "bucket"


class AlarmState(Enum):
  INSUFFICIENT_DATA = "INSUFFICIENT_DATA"
  OK = "OK"
  ALARM = "ALARM"


@dataclass(frozen=True)
class AlarmRule:
  """One threshold alarm over a single metric."""

  id: str
  alarm_name: str
  source: MetricSource
  namespace: str
  metric_name: str
  statistic: str
  period: Duration
  threshold: float
  comparison_operator: cloudwatch.ComparisonOperator
  evaluation_periods: int
  description: str

  def breaches(self, value: float) -> bool:
    if self.comparison_operator == cloudwatch.ComparisonOperator.GREATER_THAN_THRESHOLD:
      return value > self.threshold
    if self.comparison_operator == cloudwatch.ComparisonOperator.LESS_THAN_THRESHOLD:
      return value < self.threshold
    raise ValueError(f"Unsupported comparison operator: {self.comparison_operator}")

  def evaluate(self, datapoints: Sequence[float | None]) -> list[AlarmState]:
    """State after each evaluation window, given one datapoint per window.

    ``None`` marks a window without data. The rule only looks at its own
    most recent ``evaluation_periods`` windows.
    """
    states = []
    for end in range(1, len(datapoints) + 1):
      window = datapoints[max(0, end - self.evaluation_periods) : end]
      if len(window) < self.evaluation_periods or any(v is None for v in window):
        states.append(AlarmState.INSUFFICIENT_DATA)
      elif all(self.breaches(v) for v in window):  # type: ignore[arg-type]
        states.append(AlarmState.ALARM)
      else:
        states.append(AlarmState.OK)
    return states


ALARM_RULES: tuple[AlarmRule, ...] = (
  AlarmRule(
    id="High4XXErrorRateAlarm",
    alarm_name="CloudFrontHigh4XXErrorRate",
    source=MetricSource.DISTRIBUTION,
    namespace="AWS/CloudFront",
    metric_name="4xxErrorRate",
    statistic="Average",
    period=Duration.minutes(5),
    threshold=50,
    comparison_operator=cloudwatch.ComparisonOperator.GREATER_THAN_THRESHOLD,
    evaluation_periods=2,
    description="Alarm when CloudFront 4XX error rate exceeds 50%",
  ),
  AlarmRule(
    id="HighLatencyAlarm",
    alarm_name="CloudFrontHighLatency",
    source=MetricSource.DISTRIBUTION,
    namespace="AWS/CloudFront",
    metric_name="OriginLatency",
    statistic="Average",
    period=Duration.minutes(5),
    threshold=2000,  # ms
    comparison_operator=cloudwatch.ComparisonOperator.GREATER_THAN_THRESHOLD,
    evaluation_periods=2,
    description="Alarm when CloudFront origin latency exceeds 2 seconds",
  ),
  AlarmRule(
    id="LowBytesDownloadedAlarm",
    alarm_name="CloudFrontLowBytesDownloaded",
    source=MetricSource.DISTRIBUTION,
    namespace="AWS/CloudFront",
    metric_name="BytesDownloaded",
    statistic="Sum",
    period=Duration.minutes(5),
    threshold=1_000_000,
    comparison_operator=cloudwatch.ComparisonOperator.LESS_THAN_THRESHOLD,
    evaluation_periods=2,
    description="Alarm when bytes downloaded are less than 1MB",
  ),
  AlarmRule(
    id="BucketSizeAlarm",
    alarm_name="S3BucketSizeExceeded",
    source=MetricSource.BUCKET,
    namespace="AWS/S3",
    metric_name="BucketSizeBytes",
    statistic="Average",
    period=Duration.days(1),
    threshold=1_000_000_000,
    comparison_operator=cloudwatch.ComparisonOperator.GREATER_THAN_THRESHOLD,
    evaluation_periods=1,
    description="Alarm when S3 bucket size exceeds 1GB",
  ),
)


class SiteMonitoring(Construct):
  """SNS alarm topic plus one CloudWatch alarm per rule."""

  def __init__(
    self,
    scope: Construct,
    id: str,
    *,
    distribution: cloudfront.IDistribution,
    bucket: s3.IBucket,
    email: str | None = None,
    resource_prefix: str = "",
    rules: Sequence[AlarmRule] = ALARM_RULES,
  ) -> None:
    super().__init__(scope, id)

    self._dimensions = {
      MetricSource.DISTRIBUTION: {
        "DistributionId": distribution.distribution_id,
        "Region": "Global",
      },
      MetricSource.BUCKET: {
        "BucketName": bucket.bucket_name,
        "StorageType": "StandardStorage",
      },
    }

    self.topic = sns.Topic(
      self,
      "AlarmTopic",
      display_name="Static Site Monitoring Alerts",
      topic_name=f"{resource_prefix}-static-site-alarms"
      if resource_prefix
      else "static-site-alarms",
    )
    if email:
      self.topic.add_subscription(subscriptions.EmailSubscription(email))

    action = cw_actions.SnsAction(self.topic)
    self.alarms: dict[str, cloudwatch.Alarm] = {}
    for rule in rules:
      alarm = cloudwatch.Alarm(
        self,
        rule.id,
        metric=self._metric(rule),
        threshold=rule.threshold,
        evaluation_periods=rule.evaluation_periods,
        comparison_operator=rule.comparison_operator,
        alarm_description=rule.description,
        alarm_name=f"{resource_prefix}-{rule.alarm_name}"
        if resource_prefix
        else rule.alarm_name,
      )
      alarm.add_alarm_action(action)
      self.alarms[rule.id] = alarm

  def _metric(self, rule: AlarmRule) -> cloudwatch.Metric:
    return cloudwatch.Metric(
      namespace=rule.namespace,
      metric_name=rule.metric_name,
      dimensions_map=self._dimensions[rule.source],
      statistic=rule.statistic,
      period=rule.period,
    )
