"""Acceptance tests for aws_ec2_client_vpn_endpoint, planned offline."""

from unittest.mock import Mock

import pytest

from awsprovider.acctest import (
    TestCase,
    TestStep,
    check_resource_attr,
    check_resource_attr_set,
    compose_test_check_func,
    parallel_test,
    rand_string,
    run,
)
from awsprovider.exceptions import AcceptanceTestError
from awsprovider.sdk.schema import UNKNOWN_VALUE, hash_resource
from awsprovider.services.ec2 import resource_aws_ec2_client_vpn_endpoint
from tests.fixtures.tls_provider import new_tls_provider

RESOURCE_NAME = "aws_ec2_client_vpn_endpoint.test"

pytestmark = pytest.mark.acceptance


def authorization_rule_hash(**values) -> str:
    block = resource_aws_ec2_client_vpn_endpoint().schema["authorization_rule"].elem
    rule = {"target_network_cidr": "", "access_group_id": "", "authorize_all_groups": False, "description": ""}
    rule.update(values)
    return str(hash_resource(block)(rule))


def check_client_vpn_endpoint_exists(name):
    def check(state):
        if name not in state.resources:
            raise AssertionError(f"Not found: {name}")

    return check


def check_client_vpn_endpoint_destroy(conn):
    def check(state):
        for rs in state.of_type("aws_ec2_client_vpn_endpoint"):
            response = conn.describe_client_vpn_endpoints(ClientVpnEndpointIds=[rs.id])
            for endpoint in response.get("ClientVpnEndpoints", []):
                if endpoint["ClientVpnEndpointId"] == rs.id and endpoint["Status"]["Code"] != "deleted":
                    raise AssertionError(f"[DESTROY ERROR] Client VPN endpoint ({rs.id}) not deleted")

    return check


@pytest.fixture
def ec2_conn():
    conn = Mock()
    conn.describe_client_vpn_endpoints.return_value = {"ClientVpnEndpoints": []}
    return conn


@pytest.fixture
def providers(provider, offline_provider_config):
    def pre_check():
        diags = provider.configure(offline_provider_config)
        assert not diags.has_error(), str(diags)

    return {"aws": provider, "tls": new_tls_provider()}, pre_check


@pytest.fixture
def make_case(providers, ec2_conn):
    provider_map, pre_check = providers

    def _make(steps):
        return TestCase(
            providers=provider_map,
            pre_check=pre_check,
            check_destroy=check_client_vpn_endpoint_destroy(ec2_conn),
            steps=steps,
        )

    return _make


BASE_CONFIG = """
data "aws_availability_zones" "available" {}

resource "tls_private_key" "example" {
  algorithm = "RSA"
}

resource "tls_self_signed_cert" "example" {
  key_algorithm   = "RSA"
  private_key_pem = "${tls_private_key.example.private_key_pem}"

  subject {
    common_name  = "example.com"
    organization = "ACME Examples, Inc"
  }

  validity_period_hours = 12

  allowed_uses = [
    "key_encipherment",
    "digital_signature",
    "server_auth",
  ]
}

resource "aws_acm_certificate" "cert" {
  private_key      = "${tls_private_key.example.private_key_pem}"
  certificate_body = "${tls_self_signed_cert.example.cert_pem}"
}
"""

VPC_AND_SUBNET = """
resource "aws_vpc" "test" {
  cidr_block = "10.1.0.0/16"
  tags = {
    Name = "terraform-testacc-subnet-%(name)s"
  }
}

resource "aws_subnet" "test" {
  cidr_block        = "10.1.1.0/24"
  vpc_id            = "${aws_vpc.test.id}"
  availability_zone = "${data.aws_availability_zones.available.names[0]}"
  tags = {
    Name = "tf-acc-subnet-%(name)s"
  }
}
"""

ENDPOINT_HEAD = """
resource "aws_ec2_client_vpn_endpoint" "test" {
  description            = "terraform-testacc-clientvpn-%(name)s"
  server_certificate_arn = "${aws_acm_certificate.cert.arn}"
  client_cidr_block      = "10.0.0.0/16"
"""

CERTIFICATE_AUTHENTICATION = """
  authentication_options {
    type                       = "certificate-authentication"
    root_certificate_chain_arn = "${aws_acm_certificate.cert.arn}"
  }
"""

LOGGING_DISABLED = """
  connection_log_options {
    enabled = false
  }
"""

NETWORK_ASSOCIATION_AND_RULE = """
  network_association {
    subnet_id = "${aws_subnet.test.id}"
  }

  authorization_rule {
    description         = "example auth rule"
    target_network_cidr = "10.1.1.0/24"
  }
"""

ROUTE_1 = """
  route {
    description              = "example route 1"
    subnet_id                = "${aws_subnet.test.id}"
    destination_network_cidr = "192.168.1.0/24"
  }
"""

ROUTE_2 = """
  route {
    description              = "example route 2"
    subnet_id                = "${aws_subnet.test.id}"
    destination_network_cidr = "192.168.2.0/24"
  }
"""


def endpoint_config(name, *parts, prelude=""):
    body = ENDPOINT_HEAD + CERTIFICATE_AUTHENTICATION + "".join(parts) + "}\n"
    return BASE_CONFIG + (prelude + body) % {"name": name}


def config_basic(name):
    return endpoint_config(name, LOGGING_DISABLED)


def config_with_log_group(name):
    prelude = """
resource "aws_cloudwatch_log_group" "lg" {
  name = "terraform-testacc-clientvpn-loggroup-%(name)s"
}

resource "aws_cloudwatch_log_stream" "ls" {
  name           = "${aws_cloudwatch_log_group.lg.name}-stream"
  log_group_name = "${aws_cloudwatch_log_group.lg.name}"
}
"""
    logging = """
  connection_log_options {
    enabled               = true
    cloudwatch_log_group  = "${aws_cloudwatch_log_group.lg.name}"
    cloudwatch_log_stream = "${aws_cloudwatch_log_stream.ls.name}"
  }
"""
    return endpoint_config(name, logging, prelude=prelude)


def config_with_dns_servers(name):
    return endpoint_config(name, '\n  dns_servers = ["8.8.8.8", "8.8.4.4"]\n', LOGGING_DISABLED)


def config_with_microsoft_ad(name):
    prelude = """
resource "aws_vpc" "test" {
  cidr_block = "10.0.0.0/16"
}

resource "aws_subnet" "test1" {
  vpc_id            = "${aws_vpc.test.id}"
  cidr_block        = "10.0.1.0/24"
  availability_zone = "${data.aws_availability_zones.available.names[0]}"
}

resource "aws_subnet" "test2" {
  vpc_id            = "${aws_vpc.test.id}"
  cidr_block        = "10.0.2.0/24"
  availability_zone = "${data.aws_availability_zones.available.names[1]}"
}

resource "aws_directory_service_directory" "test" {
  name     = "corp.notexample.com"
  password = "SuperSecretPassw0rd"
  type     = "MicrosoftAD"
  vpc_settings {
    vpc_id     = "${aws_vpc.test.id}"
    subnet_ids = ["${aws_subnet.test1.id}", "${aws_subnet.test2.id}"]
  }
}
"""
    body = """
resource "aws_ec2_client_vpn_endpoint" "test" {
  description            = "terraform-testacc-clientvpn-%(name)s"
  server_certificate_arn = "${aws_acm_certificate.cert.arn}"
  client_cidr_block      = "10.0.0.0/16"

  authentication_options {
    type                = "directory-service-authentication"
    active_directory_id = "${aws_directory_service_directory.test.id}"
  }

  connection_log_options {
    enabled = false
  }
}
"""
    return BASE_CONFIG + (prelude + body) % {"name": name}


def config_with_network_association(name):
    network_association = """
  network_association {
    subnet_id = "${aws_subnet.test.id}"
  }
"""
    return endpoint_config(name, LOGGING_DISABLED, network_association, prelude=VPC_AND_SUBNET)


def config_with_authorization_rules(name):
    return endpoint_config(name, LOGGING_DISABLED, NETWORK_ASSOCIATION_AND_RULE, prelude=VPC_AND_SUBNET)


def config_with_route(name):
    return endpoint_config(name, LOGGING_DISABLED, NETWORK_ASSOCIATION_AND_RULE, ROUTE_1, prelude=VPC_AND_SUBNET)


def config_with_routes(name):
    return endpoint_config(
        name, LOGGING_DISABLED, NETWORK_ASSOCIATION_AND_RULE, ROUTE_1, ROUTE_2, prelude=VPC_AND_SUBNET
    )


def config_tags(name, tags):
    return endpoint_config(name, LOGGING_DISABLED, tags).replace(
        'data "aws_availability_zones" "available" {}\n', ""
    )


TAGS_ORIGINAL = """
  tags = {
    Environment = "production"
    Usage       = "original"
  }
"""

TAGS_CHANGED = """
  tags = {
    Usage = "changed"
  }
"""


def import_step():
    return TestStep(resource_name=RESOURCE_NAME, import_state=True, import_state_verify=True)


class TestEc2ClientVpnEndpoint:
    def test_basic(self, make_case):
        name = rand_string(5)
        parallel_test(
            make_case(
                [
                    TestStep(
                        config=config_basic(name),
                        check=compose_test_check_func(
                            check_client_vpn_endpoint_exists(RESOURCE_NAME),
                            check_resource_attr_set(RESOURCE_NAME, "description"),
                            check_resource_attr_set(RESOURCE_NAME, "server_certificate_arn"),
                            check_resource_attr(RESOURCE_NAME, "client_cidr_block", "10.0.0.0/16"),
                            check_resource_attr(RESOURCE_NAME, "transport_protocol", "udp"),
                            check_resource_attr(RESOURCE_NAME, "authentication_options.#", "1"),
                            check_resource_attr(
                                RESOURCE_NAME, "authentication_options.0.type", "certificate-authentication"
                            ),
                            check_resource_attr(RESOURCE_NAME, "connection_log_options.#", "1"),
                            check_resource_attr(RESOURCE_NAME, "connection_log_options.0.enabled", "false"),
                            check_resource_attr_set(RESOURCE_NAME, "dns_name"),
                        ),
                    ),
                    import_step(),
                ]
            )
        )

    def test_microsoft_ad(self, make_case):
        name = rand_string(5)
        parallel_test(
            make_case(
                [
                    TestStep(
                        config=config_with_microsoft_ad(name),
                        check=compose_test_check_func(
                            check_client_vpn_endpoint_exists(RESOURCE_NAME),
                            check_resource_attr(RESOURCE_NAME, "authentication_options.#", "1"),
                            check_resource_attr(
                                RESOURCE_NAME, "authentication_options.0.type", "directory-service-authentication"
                            ),
                        ),
                    ),
                    import_step(),
                ]
            )
        )

    def test_with_log_group(self, make_case):
        name = rand_string(5)
        parallel_test(
            make_case(
                [
                    TestStep(config=config_basic(name), check=check_client_vpn_endpoint_exists(RESOURCE_NAME)),
                    TestStep(
                        config=config_with_log_group(name),
                        check=compose_test_check_func(
                            check_client_vpn_endpoint_exists(RESOURCE_NAME),
                            check_resource_attr(RESOURCE_NAME, "connection_log_options.#", "1"),
                            check_resource_attr(RESOURCE_NAME, "connection_log_options.0.enabled", "true"),
                            check_resource_attr_set(RESOURCE_NAME, "connection_log_options.0.cloudwatch_log_group"),
                            check_resource_attr_set(RESOURCE_NAME, "connection_log_options.0.cloudwatch_log_stream"),
                        ),
                    ),
                    import_step(),
                ]
            )
        )

    def test_with_dns_servers(self, make_case):
        name = rand_string(5)
        parallel_test(
            make_case(
                [
                    TestStep(config=config_basic(name), check=check_client_vpn_endpoint_exists(RESOURCE_NAME)),
                    TestStep(
                        config=config_with_dns_servers(name),
                        check=compose_test_check_func(
                            check_client_vpn_endpoint_exists(RESOURCE_NAME),
                            check_resource_attr(RESOURCE_NAME, "dns_servers.#", "2"),
                            check_resource_attr(RESOURCE_NAME, "dns_servers.0", "8.8.8.8"),
                        ),
                    ),
                ]
            )
        )

    def test_with_network_association(self, make_case):
        name = rand_string(5)
        run(
            make_case(
                [
                    TestStep(config=config_basic(name), check=check_client_vpn_endpoint_exists(RESOURCE_NAME)),
                    TestStep(
                        config=config_with_network_association(name),
                        check=compose_test_check_func(
                            check_client_vpn_endpoint_exists(RESOURCE_NAME),
                            check_resource_attr(RESOURCE_NAME, "network_association.#", "1"),
                        ),
                    ),
                ]
            )
        )

    def test_with_authorization_rules(self, make_case):
        name = rand_string(5)
        rule = authorization_rule_hash(description="example auth rule", target_network_cidr="10.1.1.0/24")
        run(
            make_case(
                [
                    TestStep(config=config_basic(name), check=check_client_vpn_endpoint_exists(RESOURCE_NAME)),
                    TestStep(
                        config=config_with_authorization_rules(name),
                        check=compose_test_check_func(
                            check_client_vpn_endpoint_exists(RESOURCE_NAME),
                            check_resource_attr(RESOURCE_NAME, "authorization_rule.#", "1"),
                            check_resource_attr(
                                RESOURCE_NAME, f"authorization_rule.{rule}.description", "example auth rule"
                            ),
                            check_resource_attr_set(RESOURCE_NAME, f"authorization_rule.{rule}.target_network_cidr"),
                        ),
                    ),
                ]
            )
        )

    def test_with_routes(self, make_case):
        name = rand_string(5)
        run(
            make_case(
                [
                    TestStep(config=config_basic(name), check=check_client_vpn_endpoint_exists(RESOURCE_NAME)),
                    TestStep(
                        config=config_with_route(name),
                        check=compose_test_check_func(
                            check_client_vpn_endpoint_exists(RESOURCE_NAME),
                            check_resource_attr(RESOURCE_NAME, "route.#", "1"),
                        ),
                    ),
                    TestStep(
                        config=config_with_routes(name),
                        check=compose_test_check_func(
                            check_client_vpn_endpoint_exists(RESOURCE_NAME),
                            check_resource_attr(RESOURCE_NAME, "route.#", "2"),
                        ),
                    ),
                    TestStep(
                        config=config_with_route(name),
                        check=compose_test_check_func(
                            check_client_vpn_endpoint_exists(RESOURCE_NAME),
                            check_resource_attr(RESOURCE_NAME, "route.#", "1"),
                        ),
                    ),
                ]
            )
        )

    def test_tags(self, make_case):
        name = rand_string(5)
        parallel_test(
            make_case(
                [
                    TestStep(
                        config=config_tags(name, TAGS_ORIGINAL),
                        check=compose_test_check_func(
                            check_client_vpn_endpoint_exists(RESOURCE_NAME),
                            check_resource_attr(RESOURCE_NAME, "tags.%", "2"),
                            check_resource_attr(RESOURCE_NAME, "tags.Usage", "original"),
                        ),
                    ),
                    TestStep(
                        config=config_tags(name, TAGS_CHANGED),
                        check=compose_test_check_func(
                            check_client_vpn_endpoint_exists(RESOURCE_NAME),
                            check_resource_attr(RESOURCE_NAME, "tags.%", "1"),
                            check_resource_attr(RESOURCE_NAME, "tags.Usage", "changed"),
                        ),
                    ),
                    TestStep(
                        config=config_basic(name),
                        check=compose_test_check_func(
                            check_client_vpn_endpoint_exists(RESOURCE_NAME),
                            check_resource_attr(RESOURCE_NAME, "tags.%", "0"),
                        ),
                    ),
                ]
            )
        )

    def test_destroy_check_sees_every_endpoint(self, make_case, ec2_conn):
        state = run(make_case([TestStep(config=config_basic(rand_string(5)))]))

        assert state.resources[RESOURCE_NAME].id == UNKNOWN_VALUE
        ec2_conn.describe_client_vpn_endpoints.assert_called_once_with(ClientVpnEndpointIds=[UNKNOWN_VALUE])

    def test_destroy_check_fails_for_live_endpoint(self, make_case, ec2_conn):
        ec2_conn.describe_client_vpn_endpoints.return_value = {
            "ClientVpnEndpoints": [{"ClientVpnEndpointId": UNKNOWN_VALUE, "Status": {"Code": "available"}}]
        }

        with pytest.raises(AssertionError, match="not deleted"):
            run(make_case([TestStep(config=config_basic(rand_string(5)))]))

    def test_invalid_client_cidr_is_rejected(self, make_case):
        config = config_basic(rand_string(5)).replace('"10.0.0.0/16"', '"10.0.0.0/8"')

        run(make_case([TestStep(config=config, expect_error=r"significant bits")]))

    def test_missing_connection_log_options_fails_the_step(self, make_case):
        config = endpoint_config(rand_string(5))

        with pytest.raises(AcceptanceTestError, match="connection_log_options"):
            run(make_case([TestStep(config=config)]))


def endpoints_with_status(code):
    def describe(ClientVpnEndpointIds):
        return {
            "ClientVpnEndpoints": [
                {"ClientVpnEndpointId": endpoint_id, "Status": {"Code": code}} for endpoint_id in ClientVpnEndpointIds
            ]
        }

    return describe


class TestEc2ClientVpnEndpointDestroyCheck:
    def test_live_endpoint_fails_destroy_check(self, make_case, ec2_conn):
        ec2_conn.describe_client_vpn_endpoints.side_effect = endpoints_with_status("available")

        with pytest.raises(AssertionError, match=r"\[DESTROY ERROR\] Client VPN endpoint"):
            run(make_case([TestStep(config=config_basic(rand_string(5)))]))

        ec2_conn.describe_client_vpn_endpoints.assert_called_once_with(ClientVpnEndpointIds=[UNKNOWN_VALUE])

    def test_deleted_endpoint_passes_destroy_check(self, make_case, ec2_conn):
        ec2_conn.describe_client_vpn_endpoints.side_effect = endpoints_with_status("deleted")

        state = run(make_case([TestStep(config=config_basic(rand_string(5)))]))

        assert RESOURCE_NAME in state.resources
        ec2_conn.describe_client_vpn_endpoints.assert_called_once()
