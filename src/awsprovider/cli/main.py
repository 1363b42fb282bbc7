import argparse
import sys

from awsprovider._package import DESCRIPTION, __version__
from awsprovider.acctest.harness import META_ARGUMENTS
from awsprovider.acctest.hcl import DATA_MODE, parse_config
from awsprovider.cli.console import (
    get_console,
    print_diagnostics,
    print_error,
    print_json,
    print_section,
    print_success,
    print_table,
    print_warning,
)
from awsprovider.exceptions import HCLParseError, ProviderError, RegistrationError, UnknownTypeError
from awsprovider.helpers.logger import setup_logging
from awsprovider.helpers.utils import load_json_data
from awsprovider.provider.provider import Provider, new_provider
from awsprovider.sdk.schema import Diagnostics


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="awsprovider", description=DESCRIPTION)
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--log-level", help="Override AWSPROVIDER_LOG_LEVEL.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("list", help="List registered resources and data sources.")

    schema = subparsers.add_parser("schema", help="Print the provider schema as JSON.")
    schema.add_argument("--type", dest="type_name", help="Only print the schema of this resource or data source.")

    validate = subparsers.add_parser("validate", help="Validate HCL configuration files against the schemas.")
    validate.add_argument("files", nargs="+", metavar="FILE")

    configure = subparsers.add_parser("configure", help="Configure the provider from a JSON provider block.")
    configure.add_argument("--data", help="JSON string input.")
    configure.add_argument("-f", "--file", help="Path to JSON file input.")
    configure.add_argument("--terraform-version", default="", help="Host version reported in the user agent.")

    return parser


def cmd_list(provider: Provider, args) -> int:
    rows = [[name, "resource", provider.resources.source(name) or ""] for name in provider.resources.names()]
    rows += [[name, "data source", provider.data_sources.source(name) or ""] for name in provider.data_sources.names()]
    print_table("Registered types", ["Name", "Kind", "Service package"], rows)
    print_section(f"{len(provider.endpoint_service_names)} custom endpoint keys")
    get_console().print(", ".join(provider.endpoint_service_names))
    return 0


def cmd_schema(provider: Provider, args) -> int:
    if not args.type_name:
        print_json(provider.get_schema())
        return 0

    if provider.resources.is_registered(args.type_name):
        print_json(provider.resource(args.type_name).to_dict())
    else:
        print_json(provider.data_source(args.type_name).to_dict())
    return 0


def validate_file(provider: Provider, path: str) -> Diagnostics:
    with open(path, encoding="utf-8") as f:
        config = parse_config(f.read())

    diags = Diagnostics()
    if "aws" in config.providers:
        diags.extend(provider.validate(config.providers["aws"]))

    for block in config.blocks():
        if block.provider_name != "aws":
            print_warning(f"{path}: skipping {block.address}, not an aws type")
            continue
        raw = {k: v for k, v in block.body.items() if k not in META_ARGUMENTS}
        try:
            descriptor = provider.data_source(block.type) if block.mode == DATA_MODE else provider.resource(block.type)
        except UnknownTypeError as e:
            diags.add_error(f"{block.address}: {e}")
            continue
        for diag in descriptor.validate(raw):
            path_prefix = (block.address,) + diag.attribute_path
            if diag.is_error:
                diags.add_error(diag.summary, diag.detail, path_prefix)
            else:
                diags.add_warning(diag.summary, diag.detail, path_prefix)
    return diags


def cmd_validate(provider: Provider, args) -> int:
    failed = False
    for path in args.files:
        try:
            diags = validate_file(provider, path)
        except (OSError, HCLParseError) as e:
            print_error(f"{path}: {e}")
            failed = True
            continue

        print_diagnostics(diags)
        if diags.has_error():
            failed = True
        else:
            print_success(f"{path}: configuration is valid")
    return 1 if failed else 0


def cmd_configure(provider: Provider, args) -> int:
    if not (args.data or args.file):
        print_error("Input data is required for 'configure': use --data or --file.")
        return 2

    try:
        raw = load_json_data(json_str=args.data, json_file=args.file)
    except OSError as e:
        print_error(f"Cannot read provider configuration: {e}")
        return 1

    provider.terraform_version = args.terraform_version
    diags = provider.configure(raw)
    print_diagnostics(diags)
    if diags.has_error():
        return 1

    meta = provider.meta
    print_json(
        {
            "region": meta.region,
            "partition": meta.partition,
            "account_id": meta.account_id,
            "dns_suffix": meta.dns_suffix,
        }
    )
    return 0


COMMANDS = {
    "list": cmd_list,
    "schema": cmd_schema,
    "validate": cmd_validate,
    "configure": cmd_configure,
}


def main(argv=None):
    """Entry point for the awsprovider command."""
    args = build_parser().parse_args(argv)
    logger = setup_logging(log_level=args.log_level, force=True)

    try:
        provider = new_provider()
        sys.exit(COMMANDS[args.command](provider, args))
    except RegistrationError as e:
        logger.error("Provider registration failed: %s", e)
        print_error(f"Provider registration failed: {e}")
        sys.exit(1)
    except (ProviderError, ValueError) as e:
        logger.error("An error occurred: %s", e, exc_info=True)
        print_error(str(e))
        sys.exit(1)


if __name__ == "__main__":
    main()
