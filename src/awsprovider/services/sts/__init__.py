from awsprovider.services.sts.caller_identity import data_source_aws_caller_identity
