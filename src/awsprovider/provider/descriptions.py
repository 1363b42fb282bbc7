DESCRIPTIONS = {
    "region": "The region where AWS operations will take place. Examples\nare us-east-1, us-west-2, etc.",
    "access_key": "The access key for API operations. You can retrieve this\n"
    "from the 'Security & Credentials' section of the AWS console.",
    "secret_key": "The secret key for API operations. You can retrieve this\n"
    "from the 'Security & Credentials' section of the AWS console.",
    "profile": "The profile for API operations. If not set, the default profile\n"
    "created with `aws configure` will be used.",
    "shared_credentials_file": "The path to the shared credentials file. If not set\n"
    "this defaults to ~/.aws/credentials.",
    "token": "session token. A session token is only required if you are\n"
    "using temporary security credentials.",
    "max_retries": "The maximum number of times an AWS API request is\n"
    "being executed. If the API request still fails, an error is\nthrown.",
    "endpoint": "Use this to override the default service endpoint URL",
    "insecure": 'Explicitly allow the provider to perform "insecure" SSL requests. If omitted, '
    "default value is `false`",
    "skip_credentials_validation": "Skip the credentials validation via STS API. "
    "Used for AWS API implementations that do not have STS available/implemented.",
    "skip_get_ec2_platforms": "Skip getting the supported EC2 platforms. "
    "Used by users that don't have ec2:DescribeAccountAttributes permissions.",
    "skip_region_validation": "Skip static validation of region name. "
    "Used by users of alternative AWS-like APIs or users w/ access to regions that are not public (yet).",
    "skip_requesting_account_id": "Skip requesting the account ID. "
    "Used for AWS API implementations that do not have IAM/STS API and/or metadata API.",
    "skip_metadata_api_check": "Skip the AWS Metadata API check. "
    "Used for AWS API implementations that do not have a metadata api endpoint.",
    "s3_force_path_style": "Set this to true to force the request to use path-style addressing,\n"
    "i.e., http://s3.amazonaws.com/BUCKET/KEY. By default, the S3 client will\n"
    "use virtual hosted bucket addressing when possible\n"
    "(http://BUCKET.s3.amazonaws.com/KEY). Specific to the Amazon S3 service.",
}
