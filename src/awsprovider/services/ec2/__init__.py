from awsprovider.services.ec2.availability_zones import data_source_aws_availability_zones
from awsprovider.services.ec2.client_vpn import (
    resource_aws_ec2_client_vpn_authorization_rule,
    resource_aws_ec2_client_vpn_endpoint,
    resource_aws_ec2_client_vpn_network_association,
    resource_aws_ec2_client_vpn_route,
)
from awsprovider.services.ec2.vpc import resource_aws_subnet, resource_aws_vpc
