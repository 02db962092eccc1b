import json
import boto3
import os
import logging
from datetime import datetime, timedelta, timezone

logger = logging.getLogger()
logger.setLevel(logging.INFO)

codedeploy = boto3.client('codedeploy')
cloudwatch = boto3.client('cloudwatch')


def count_recent_errors(function_name, minutes=5):
    """Sum the function's Errors metric over the last few minutes."""
    end_time = datetime.now(timezone.utc)
    start_time = end_time - timedelta(minutes=minutes)

    response = cloudwatch.get_metric_statistics(
        Namespace='AWS/Lambda',
        MetricName='Errors',
        Dimensions=[
            {
                'Name': 'FunctionName',
                'Value': function_name
            }
        ],
        StartTime=start_time,
        EndTime=end_time,
        Period=minutes * 60,
        Statistics=['Sum']
    )
    logger.info(f"CloudWatch metrics: {json.dumps(response, default=str)}")

    return sum(point.get('Sum', 0) for point in response.get('Datapoints', []))


def lambda_handler(event, context):
    """
    Post-traffic hook for CodeDeploy.
    Fails the deployment (triggering rollback) if the contact function
    reported more Lambda errors than MAX_ERRORS after the traffic shift.
    """
    logger.info(f"Post-traffic hook triggered: {json.dumps(event)}")

    deployment_id = event['DeploymentId']
    lifecycle_event_hook_execution_id = event['LifecycleEventHookExecutionId']

    try:
        target_function = os.environ.get('TARGET_FUNCTION')
        max_errors = int(os.environ.get('MAX_ERRORS', '0'))

        logger.info(f"Validating post-deployment metrics for {target_function}")

        errors = count_recent_errors(target_function)
        if errors > max_errors:
            raise Exception(f"Error count too high: {errors} > {max_errors}")

        logger.info("Post-traffic validation passed")

        # Report success
        codedeploy.put_lifecycle_event_hook_execution_status(
            deploymentId=deployment_id,
            lifecycleEventHookExecutionId=lifecycle_event_hook_execution_id,
            status='Succeeded'
        )

        return {
            'statusCode': 200,
            'body': json.dumps('Post-traffic validation succeeded')
        }

    except Exception as e:
        logger.error(f"Post-traffic validation failed: {str(e)}", exc_info=True)

        # Report failure - this will trigger rollback
        codedeploy.put_lifecycle_event_hook_execution_status(
            deploymentId=deployment_id,
            lifecycleEventHookExecutionId=lifecycle_event_hook_execution_id,
            status='Failed'
        )

        return {
            'statusCode': 500,
            'body': json.dumps(f'Post-traffic validation failed: {str(e)}')
        }
