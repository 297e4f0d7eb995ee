"""Best-effort CloudWatch metrics emission

Metrics are published with `PutMetricData` under the `URLShortener`
namespace (override with `METRICS_NAMESPACE`). Emission is disabled unless
`METRICS_ENABLED=true`, and any CloudWatch failure is logged and swallowed:
metrics must never change the outcome of a request.

Published metrics:
    URLCreated          (Operation=CreateURL)
    URLRedirected       (Operation=RedirectURL)
    URLNotFound         (Operation=LookupURL)
    URLStatsRetrieved   (Operation=GetURLStats)
    StoreError          (Operation=<DAO operation>)
    APILatency          (Endpoint=<route>, milliseconds)

Example:
    >>> from urlshortener.utils.metrics import get_metrics_client
    >>> metrics = get_metrics_client()
    >>> metrics.record_url_created()
    >>> metrics.record_latency('/shorten', 12.5)
"""

import os
import logging
import threading
from datetime import datetime, UTC

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from urlshortener.constants import ENV, Metric, DEFAULT_METRICS_NAMESPACE


logger = logging.getLogger(__name__)


class MetricsClient:
    """Thin wrapper around the CloudWatch client

    Attributes:
        namespace (str):
            CloudWatch namespace metrics are published under.
        enabled (bool):
            If False, every record_* call is a no-op.
    """

    def __init__(self, namespace: str = DEFAULT_METRICS_NAMESPACE, enabled: bool = True, cloudwatch_client=None):
        self.namespace = namespace
        self.enabled = enabled
        self._client = cloudwatch_client
        self._client_lock = threading.Lock()

    @property
    def client(self):
        with self._client_lock:
            if self._client is None:
                self._client = boto3.client('cloudwatch')
            return self._client

    def put_metric(self, name: str, value: float, unit: str = 'Count', **dimensions: str) -> bool:
        """Publish a single data point

        Returns:
            bool: True if the data point was published, False otherwise.
        """
        if not self.enabled:
            return False

        datum = {
            'MetricName': name,
            'Value': float(value),
            'Unit': unit,
            'Timestamp': datetime.now(UTC),
            'Dimensions': [{'Name': k, 'Value': v} for k, v in dimensions.items()],
        }
        try:
            self.client.put_metric_data(Namespace=self.namespace, MetricData=[datum])
        except (BotoCoreError, ClientError) as e:
            logger.warning('Failed to put metric data.', extra={'metricName': name, 'error': str(e)})
            return False

        logger.debug('Put metric data.', extra={'metricName': name, 'value': value})
        return True

    def record_url_created(self) -> bool:
        return self.put_metric(Metric.URL_CREATED, 1, Operation='CreateURL')

    def record_url_redirected(self) -> bool:
        return self.put_metric(Metric.URL_REDIRECTED, 1, Operation='RedirectURL')

    def record_url_not_found(self) -> bool:
        return self.put_metric(Metric.URL_NOT_FOUND, 1, Operation='LookupURL')

    def record_stats_retrieved(self) -> bool:
        return self.put_metric(Metric.URL_STATS_RETRIEVED, 1, Operation='GetURLStats')

    def record_store_error(self, operation: str) -> bool:
        return self.put_metric(Metric.STORE_ERROR, 1, Operation=operation)

    def record_latency(self, endpoint: str, latency_ms: float) -> bool:
        return self.put_metric(Metric.API_LATENCY, latency_ms, unit='Milliseconds', Endpoint=endpoint)


_lock = threading.Lock()
_metrics_client: MetricsClient | None = None


def get_metrics_client() -> MetricsClient:
    """Return the process-wide MetricsClient, creating it on first use"""
    global _metrics_client
    with _lock:
        if _metrics_client is None:
            enabled = os.environ.get(ENV.Metrics.ENABLED, 'false').lower() == 'true'
            namespace = os.environ.get(ENV.Metrics.NAMESPACE) or DEFAULT_METRICS_NAMESPACE
            _metrics_client = MetricsClient(namespace=namespace, enabled=enabled)
        return _metrics_client


def reset_metrics_client() -> None:
    """Forget the process-wide MetricsClient (next call re-reads the environment)"""
    global _metrics_client
    with _lock:
        _metrics_client = None
