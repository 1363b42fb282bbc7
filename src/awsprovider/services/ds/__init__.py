from awsprovider.services.ds.directory import resource_aws_directory_service_directory
