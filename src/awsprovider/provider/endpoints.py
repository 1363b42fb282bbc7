"""Service keys accepted in the provider ``endpoints`` block."""

ENDPOINT_SERVICE_NAMES = (
    "accessanalyzer acm acmpca amplify apigateway appconfig applicationautoscaling applicationinsights "
    "appmesh apprunner appstream appsync athena auditmanager autoscaling autoscalingplans backup batch "
    "budgets chime cloud9 cloudformation cloudfront cloudhsm cloudsearch cloudtrail cloudwatch "
    "cloudwatchevents cloudwatchlogs codeartifact codebuild codecommit codedeploy codepipeline "
    "codestarconnections cognitoidentity cognitoidp configservice connect cur dataexchange datapipeline "
    "datasync dax detective devicefarm directconnect dlm dms docdb ds dynamodb ec2 ecr ecrpublic ecs efs "
    "eks elasticache elasticbeanstalk elastictranscoder elb emr emrcontainers es firehose fms forecast fsx "
    "gamelift glacier globalaccelerator glue greengrass guardduty iam identitystore imagebuilder inspector "
    "iot iotanalytics iotevents kafka kinesis kinesisanalytics kinesisanalyticsv2 kinesisvideo kms "
    "lakeformation lambda lexmodels licensemanager lightsail location macie macie2 managedblockchain "
    "marketplacecatalog mediaconnect mediaconvert medialive mediapackage mediastore mediastoredata mq mwaa "
    "neptune networkfirewall networkmanager opsworks organizations outposts personalize pinpoint pricing "
    "qldb quicksight ram rds redshift resourcegroups resourcegroupstaggingapi route53 route53domains "
    "route53resolver s3 s3control s3outposts sagemaker schemas sdb secretsmanager securityhub "
    "serverlessrepo servicecatalog servicediscovery servicequotas ses shield signer sns sqs ssm ssoadmin "
    "stepfunctions storagegateway sts swf synthetics timestreamwrite transfer waf wafregional wafv2 "
    "worklink workmail workspaces xray"
).split()

# Endpoint keys whose boto3 service name differs from the key.
BOTO3_SERVICE_NAMES = {
    "applicationautoscaling": "application-autoscaling",
    "applicationinsights": "application-insights",
    "autoscalingplans": "autoscaling-plans",
    "cloudhsm": "cloudhsmv2",
    "cloudwatchevents": "events",
    "cloudwatchlogs": "logs",
    "cognitoidentity": "cognito-identity",
    "cognitoidp": "cognito-idp",
    "configservice": "config",
    "ecrpublic": "ecr-public",
    "emrcontainers": "emr-containers",
    "lexmodels": "lex-models",
    "licensemanager": "license-manager",
    "marketplacecatalog": "marketplace-catalog",
    "mediastoredata": "mediastore-data",
    "networkfirewall": "network-firewall",
    "servicequotas": "service-quotas",
    "ssoadmin": "sso-admin",
    "timestreamwrite": "timestream-write",
}


def boto3_service_name(endpoint_key: str) -> str:
    return BOTO3_SERVICE_NAMES.get(endpoint_key, endpoint_key)


def endpoint_key_for_service(service_name: str) -> str:
    """Inverse of boto3_service_name."""
    for key, name in BOTO3_SERVICE_NAMES.items():
        if name == service_name:
            return key
    return service_name
