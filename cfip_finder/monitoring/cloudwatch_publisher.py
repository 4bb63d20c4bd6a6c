"""Publishes ranked probe results to CloudWatch."""

import statistics
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from ..constants import CLOUDWATCH_MAX_BATCH, DEFAULT_CLOUDWATCH_NAMESPACE
from ..models import BatchResult


class CloudWatchPublisher:
    """Sends probe delay metrics for a ranking run to CloudWatch."""
    
    def __init__(self, region: str, namespace: str = DEFAULT_CLOUDWATCH_NAMESPACE,
                 client: Optional[Any] = None):
        """Initialize CloudWatch publisher.
        
        Args:
            region: AWS region
            namespace: CloudWatch namespace for all metrics
            client: Optional pre-built CloudWatch client
        """
        self.namespace = namespace
        self.cloudwatch = client or boto3.client('cloudwatch', region_name=region)
    
    def prepare_metrics(self, batch: BatchResult,
                        timestamp: Optional[datetime] = None) -> List[Dict[str, Any]]:
        """Build metric datums for a ranking run.
        
        Args:
            batch: Ranked probe results
            timestamp: Metric timestamp (defaults to now, UTC)
            
        Returns:
            List of CloudWatch metric datums
        """
        timestamp = timestamp or datetime.now(timezone.utc)
        metric_data = []
        
        for outcome in batch.top:
            metric_data.append({
                'MetricName': 'ProbeDelay',
                'Dimensions': [
                    {'Name': 'IP', 'Value': outcome.address}
                ],
                'Value': float(outcome.delay_ms),
                'Unit': 'Milliseconds',
                'Timestamp': timestamp
            })
        
        metric_data.append({
            'MetricName': 'SuccessfulProbes',
            'Value': float(batch.success_count),
            'Unit': 'Count',
            'Timestamp': timestamp
        })
        
        if batch.top:
            metric_data.append({
                'MetricName': 'TopDelayAverage',
                'Value': statistics.mean(o.delay_ms for o in batch.top),
                'Unit': 'Milliseconds',
                'Timestamp': timestamp
            })
        
        return metric_data
    
    def publish(self, batch: BatchResult, timestamp: Optional[datetime] = None) -> int:
        """Send all metrics for a run in batches.
        
        CloudWatch errors are reported and skipped, never raised.
        
        Args:
            batch: Ranked probe results
            timestamp: Metric timestamp (defaults to now, UTC)
            
        Returns:
            Number of metric datums accepted
        """
        metrics = self.prepare_metrics(batch, timestamp)
        total_sent = 0
        
        for i in range(0, len(metrics), CLOUDWATCH_MAX_BATCH):
            chunk = metrics[i:i+CLOUDWATCH_MAX_BATCH]
            
            try:
                self.cloudwatch.put_metric_data(
                    Namespace=self.namespace,
                    MetricData=chunk
                )
                total_sent += len(chunk)
                print(f"[OK] Sent batch of {len(chunk)} metrics to CloudWatch (total: {total_sent}/{len(metrics)})")
                
            except ClientError as e:
                print(f"[ERROR] CloudWatch error: {e.response.get('Error', {}).get('Message', 'Unknown')}")
            except BotoCoreError as e:
                print(f"[ERROR] Failed to send metrics batch: {e}")
        
        return total_sent
