from awsprovider.sdk.schema import Resource, Schema, ValueType, import_state_passthrough
from awsprovider.sdk.schema.validation import int_between


def resource_aws_lb_target_group_attachment() -> Resource:
    """Registered under both aws_lb_ and aws_alb_target_group_attachment."""
    return Resource(
        importer=import_state_passthrough,
        schema={
            "target_group_arn": Schema(type=ValueType.STRING, required=True, force_new=True),
            "target_id": Schema(type=ValueType.STRING, required=True, force_new=True),
            "port": Schema(type=ValueType.INT, optional=True, force_new=True, validate_func=int_between(1, 65535)),
            "availability_zone": Schema(type=ValueType.STRING, optional=True, force_new=True),
        },
    )
