import json
import boto3
import os
import logging

logger = logging.getLogger()
logger.setLevel(logging.INFO)

codedeploy = boto3.client('codedeploy')
lambda_client = boto3.client('lambda')


def _invoke(function_name, payload):
    response = lambda_client.invoke(
        FunctionName=function_name,
        InvocationType='RequestResponse',
        Payload=json.dumps(payload)
    )

    if response.get('FunctionError'):
        raise Exception(f"Function returned error: {response['Payload'].read()}")

    if response.get('StatusCode') != 200:
        raise Exception(f"Unexpected status code: {response.get('StatusCode')}")

    return json.loads(response['Payload'].read())


def lambda_handler(event, context):
    """
    Pre-traffic hook for CodeDeploy.
    Runs smoke tests against the new version before shifting traffic.
    The tests never send email: a GET must be rejected before any delivery.
    """
    logger.info(f"Pre-traffic hook triggered: {json.dumps(event)}")

    deployment_id = event['DeploymentId']
    lifecycle_event_hook_execution_id = event['LifecycleEventHookExecutionId']

    try:
        target_function = os.environ.get('TARGET_FUNCTION')
        if not target_function:
            raise Exception("TARGET_FUNCTION environment variable is not set")

        logger.info(f"Running smoke tests on {target_function}")

        # Test 1: non-POST requests are rejected with 405
        response_payload = _invoke(target_function, {
            'httpMethod': 'GET',
            'path': '/contact',
            'body': None,
            'requestContext': {'identity': {'userAgent': 'codedeploy-pre-traffic'}}
        })
        logger.info(f"Method check response: {json.dumps(response_payload)}")

        if response_payload.get('statusCode') != 405:
            raise Exception(f"Expected 405 for GET, got: {response_payload.get('statusCode')}")

        body = json.loads(response_payload.get('body', '{}'))
        if not body.get('requestId'):
            raise Exception(f"Response body missing requestId: {body}")

        # Test 2: health check reports the email addresses as configured
        health_function = os.environ.get('HEALTH_CHECK_FUNCTION')
        if health_function:
            health_payload = _invoke(health_function, {})
            health = json.loads(health_payload.get('body', '{}'))
            if not health.get('emailConfigured'):
                raise Exception(f"Email addresses not configured: {health}")

        logger.info("Pre-traffic validation passed")

        # Report success
        codedeploy.put_lifecycle_event_hook_execution_status(
            deploymentId=deployment_id,
            lifecycleEventHookExecutionId=lifecycle_event_hook_execution_id,
            status='Succeeded'
        )

        return {
            'statusCode': 200,
            'body': json.dumps('Pre-traffic validation succeeded')
        }

    except Exception as e:
        logger.error(f"Pre-traffic validation failed: {str(e)}", exc_info=True)

        # Report failure - this will prevent deployment
        codedeploy.put_lifecycle_event_hook_execution_status(
            deploymentId=deployment_id,
            lifecycleEventHookExecutionId=lifecycle_event_hook_execution_id,
            status='Failed'
        )

        return {
            'statusCode': 500,
            'body': json.dumps(f'Pre-traffic validation failed: {str(e)}')
        }
