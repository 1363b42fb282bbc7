from awsprovider.services.elbv2.target_group_attachment import resource_aws_lb_target_group_attachment
