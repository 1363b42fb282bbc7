from awsprovider.services.cloudwatchlogs.log_group import (
    resource_aws_cloudwatch_log_group,
    resource_aws_cloudwatch_log_stream,
)
