from awsprovider.services.acm.certificate import resource_aws_acm_certificate
